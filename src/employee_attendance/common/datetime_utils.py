from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def business_timezone(offset_minutes: int) -> timezone:
    """Fixed-offset business timezone (WITA is +480)."""
    return timezone(timedelta(minutes=int(offset_minutes)))


def to_timezone(value: datetime, tz: tzinfo) -> datetime:
    """Convert to ``tz``; naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(tz)


def local_date(value: datetime | date, tz: tzinfo) -> date:
    """Calendar day of ``value`` in ``tz`` (plain dates pass through)."""
    if isinstance(value, datetime):
        return to_timezone(value, tz).date()
    return value


def start_of_day(value: datetime, tz: tzinfo) -> datetime:
    return datetime.combine(to_timezone(value, tz).date(), time.min, tzinfo=tz)


def end_of_day(value: datetime, tz: tzinfo) -> datetime:
    # 23:59:59.999, millisecond precision like the stored timestamps
    return datetime.combine(to_timezone(value, tz).date(), time(23, 59, 59, 999000), tzinfo=tz)


def minutes_since_midnight(value: datetime, tz: tzinfo) -> int:
    local = to_timezone(value, tz)
    return local.hour * 60 + local.minute


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of a month (month is 1-12)."""
    first = date(int(year), int(month), 1)
    if first.month == 12:
        return first, date(first.year, 12, 31)
    return first, date(first.year, first.month + 1, 1) - timedelta(days=1)


def year_bounds(year: int) -> tuple[date, date]:
    return date(int(year), 1, 1), date(int(year), 12, 31)
