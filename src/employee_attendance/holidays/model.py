from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import HolidayType


@dataclass(frozen=True)
class Holiday:
    """Domain entity: a designated non-working calendar day.

    ``holiday_date`` is a plain calendar day with no time or timezone.
    """

    holiday_id: int
    name: str
    holiday_date: date
    type: HolidayType
    is_recurring: bool = False
    description: Optional[str] = None
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.holiday_id,
            "name": self.name,
            "date": self.holiday_date.isoformat(),
            "type": self.type.value,
            "is_recurring": self.is_recurring,
            "description": self.description or "",
            "created_by": self.created_by,
        }


@dataclass(frozen=True)
class FeedHoliday:
    """One entry of the external public-holiday feed, as received."""

    name: str
    date: str
    observed: Optional[str] = None
    public: bool = True
