from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..clock.base import Clock
from ..common.datetime_utils import local_date, month_bounds, year_bounds
from ..common.pagination import Page, page_offset
from ..common.validators import (
    require_date,
    require_enum,
    require_length_between,
    require_max_length,
    require_month,
    require_year,
)
from ..core.constants import DEFAULT_PAGE_SIZE, DEFAULT_UPCOMING_HOLIDAYS
from ..core.enums import HolidayType
from ..core.exceptions import DuplicateHolidayError, DuplicateRecordError, NotFoundError, ValidationError
from .model import Holiday
from .repository import HolidayRepository

logger = logging.getLogger(__name__)


class HolidayService:
    """Holiday resolver plus the admin use cases on holidays.

    Dates are compared as plain calendar days. A datetime argument is first
    converted to the business timezone, so 23:30 UTC on the 16th resolves
    against the 17th in WITA.
    """

    def __init__(self, holidays: HolidayRepository, clock: Clock):
        self._holidays = holidays
        self._clock = clock

    # ---- resolver -------------------------------------------------------

    def holiday_on(self, day: date | datetime) -> Optional[Holiday]:
        target = local_date(day, self._clock.tz)
        matches = self._holidays.find_by_date(target)
        if not matches:
            logger.debug("No holiday on %s", target.isoformat())
            return None
        holiday = matches[0]
        logger.info("Holiday on %s: %s", target.isoformat(), holiday.name)
        return holiday

    def is_holiday(self, day: date | datetime) -> bool:
        return self.holiday_on(day) is not None

    def holidays_in_range(self, start: date, end: date) -> Sequence[Holiday]:
        if end < start:
            raise ValidationError("End date must not be before start date")
        return self._holidays.list_range(start, end)

    def count_in_range(self, start: date, end: date) -> int:
        if end < start:
            return 0
        return self._holidays.count_range(start, end)

    def upcoming(self, limit: int = DEFAULT_UPCOMING_HOLIDAYS, *, today: Optional[date] = None) -> Sequence[Holiday]:
        if today is None:
            today = self._clock.today()
        return self._holidays.list_upcoming(today, int(limit))

    def by_year(self, year: int) -> Sequence[Holiday]:
        start, end = year_bounds(require_year(year))
        return self._holidays.list_range(start, end)

    def by_month(self, year: int, month: int) -> Sequence[Holiday]:
        start, end = month_bounds(require_year(year), require_month(month))
        return self._holidays.list_range(start, end)

    # ---- admin use cases ------------------------------------------------

    def list_holidays(
        self,
        *,
        year: Optional[int] = None,
        month: Optional[int] = None,
        type: Optional[str] = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> Page[Holiday]:
        start = end = None
        if year is not None:
            year = require_year(year)
            start, end = year_bounds(year)
            if month is not None:
                start, end = month_bounds(year, require_month(month))

        type_filter = require_enum(type, HolidayType, "Type") if type else None
        items, total = self._holidays.list_page(
            start=start,
            end=end,
            type=type_filter,
            offset=page_offset(page, limit),
            limit=limit,
        )
        return Page(items=items, total=total, page=page, limit=limit)

    def get(self, holiday_id: int) -> Holiday:
        holiday = self._holidays.get_by_id(holiday_id)
        if not holiday:
            raise NotFoundError("Holiday not found")
        return holiday

    def create(
        self,
        *,
        name: str,
        holiday_date,
        type,
        is_recurring: bool = False,
        description: Optional[str] = None,
        created_by: Optional[int] = None,
    ) -> Holiday:
        name = require_length_between(name, "Name", 3, 200)
        day = require_date(holiday_date, "Date")
        kind = require_enum(type, HolidayType, "Type")
        description = self._clean_description(description)

        try:
            holiday_id = self._holidays.create(
                name=name,
                holiday_date=day,
                type=kind,
                is_recurring=bool(is_recurring),
                description=description,
                created_by=created_by,
            )
        except DuplicateRecordError:
            raise DuplicateHolidayError(f"Holiday '{name}' already exists on {day.isoformat()}") from None

        logger.info("Holiday created: %s on %s (%s)", name, day.isoformat(), kind.value)
        return self.get(holiday_id)

    def update(self, holiday_id: int, **changes) -> Holiday:
        current = self.get(holiday_id)

        name = current.name
        if changes.get("name") is not None:
            name = require_length_between(changes["name"], "Name", 3, 200)
        day = current.holiday_date
        if changes.get("date") is not None:
            day = require_date(changes["date"], "Date")
        kind = current.type
        if changes.get("type") is not None:
            kind = require_enum(changes["type"], HolidayType, "Type")
        is_recurring = current.is_recurring
        if changes.get("is_recurring") is not None:
            is_recurring = bool(changes["is_recurring"])
        description = current.description
        if "description" in changes:
            description = self._clean_description(changes["description"])

        try:
            self._holidays.update(
                holiday_id=current.holiday_id,
                name=name,
                holiday_date=day,
                type=kind,
                is_recurring=is_recurring,
                description=description,
            )
        except DuplicateRecordError:
            raise DuplicateHolidayError(f"Holiday '{name}' already exists on {day.isoformat()}") from None

        return self.get(current.holiday_id)

    def delete(self, holiday_id: int) -> None:
        holiday = self.get(holiday_id)
        self._holidays.delete(holiday.holiday_id)
        logger.info("Holiday deleted: %s on %s", holiday.name, holiday.holiday_date.isoformat())

    @staticmethod
    def _clean_description(value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip()
        require_max_length(value, "Description", 500)
        return value or None
