from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import HolidayType
from .model import Holiday


class HolidayRepository(Protocol):
    """Holiday store.

    ``create`` must raise ``DuplicateRecordError`` when (date, name) already
    exists; the check is the storage's unique index, not a prior read.
    """

    def get_by_id(self, holiday_id: int) -> Optional[Holiday]:
        raise NotImplementedError

    def find_by_date(self, holiday_date: date) -> Sequence[Holiday]:
        raise NotImplementedError

    def find_by_date_and_name(self, holiday_date: date, name: str) -> Optional[Holiday]:
        raise NotImplementedError

    def list_range(self, start: date, end: date) -> Sequence[Holiday]:
        """Holidays with start <= date <= end, ascending by date."""

        raise NotImplementedError

    def list_upcoming(self, today: date, limit: int) -> Sequence[Holiday]:
        raise NotImplementedError

    def count_range(self, start: date, end: date) -> int:
        raise NotImplementedError

    def list_page(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        type: Optional[HolidayType] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[Sequence[Holiday], int]:
        """Filtered page ascending by date plus the total match count."""

        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        holiday_date: date,
        type: HolidayType,
        is_recurring: bool,
        description: Optional[str],
        created_by: Optional[int],
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        holiday_id: int,
        name: str,
        holiday_date: date,
        type: HolidayType,
        is_recurring: bool,
        description: Optional[str],
    ) -> bool:
        raise NotImplementedError

    def delete(self, holiday_id: int) -> bool:
        raise NotImplementedError
