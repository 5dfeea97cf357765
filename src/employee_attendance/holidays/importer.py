from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.constants import RELIGIOUS_HOLIDAY_KEYWORDS
from ..core.enums import HolidayType
from ..core.exceptions import DuplicateRecordError
from .model import FeedHoliday
from .repository import HolidayRepository

logger = logging.getLogger(__name__)


class HolidayFeed(Protocol):
    def fetch_holidays(self, country: str, year: int) -> Sequence[FeedHoliday]:
        raise NotImplementedError


@dataclass(frozen=True)
class ImportSummary:
    imported: int
    skipped: int
    total: int
    failed: int = 0
    success: bool = True

    def to_dict(self) -> dict:
        return asdict(self)


def classify_holiday(name: str) -> HolidayType:
    """Religious when the name contains a known keyword, national otherwise."""

    lowered = (name or "").lower()
    if any(keyword in lowered for keyword in RELIGIOUS_HOLIDAY_KEYWORDS):
        return HolidayType.RELIGIOUS
    return HolidayType.NATIONAL


def parse_feed_date(value: str) -> date:
    """Strict YYYY-MM-DD; raises ValueError otherwise."""

    return datetime.strptime(value, "%Y-%m-%d").date()


class HolidayImportService:
    """Pull public holidays from the feed and merge them into the store.

    Entries are processed one by one; an entry that fails to parse or save is
    counted in ``failed`` and the batch carries on. Only a failing feed call
    aborts the import (``HolidayFeedError`` propagates).
    """

    def __init__(self, holidays: HolidayRepository, feed: HolidayFeed):
        self._holidays = holidays
        self._feed = feed

    def import_holidays(self, country: str, year: int, actor_id: Optional[int]) -> ImportSummary:
        entries = self._feed.fetch_holidays(country, year)
        if not entries:
            logger.warning("No holidays returned from feed for %s %s", country, year)
            return ImportSummary(imported=0, skipped=0, total=0, success=False)

        imported = skipped = failed = 0
        for entry in entries:
            try:
                outcome = self._import_one(entry, actor_id)
            except Exception:
                logger.warning("Error processing holiday %r (%s)", entry.name, entry.date, exc_info=True)
                failed += 1
                continue

            if outcome:
                imported += 1
            else:
                skipped += 1

        summary = ImportSummary(
            imported=imported,
            skipped=skipped,
            failed=failed,
            total=len(entries),
        )
        logger.info("Holiday import %s %s finished: %s", country, year, summary)
        return summary

    def _import_one(self, entry: FeedHoliday, actor_id: Optional[int]) -> bool:
        """Returns True when saved, False when skipped as already present."""

        if not entry.name:
            raise ValueError("Holiday entry without a name")
        holiday_date = parse_feed_date(entry.date)

        if self._holidays.find_by_date_and_name(holiday_date, entry.name):
            logger.debug("Skipped (already exists): %s on %s", entry.name, holiday_date.isoformat())
            return False

        kind = classify_holiday(entry.name)
        try:
            self._holidays.create(
                name=entry.name,
                holiday_date=holiday_date,
                type=kind,
                is_recurring=True,
                description=f"Observed on {entry.observed}" if entry.observed else "",
                created_by=actor_id,
            )
        except DuplicateRecordError:
            # Inserted concurrently between the lookup and the insert
            return False

        logger.debug("Saved holiday: %s on %s (%s)", entry.name, holiday_date.isoformat(), kind.value)
        return True
