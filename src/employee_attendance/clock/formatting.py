"""Human-readable business-time formatting (Indonesian month names)."""

from __future__ import annotations

from datetime import date, datetime, tzinfo

from ..common.datetime_utils import to_timezone

MONTHS_ID = (
    "Januari",
    "Februari",
    "Maret",
    "April",
    "Mei",
    "Juni",
    "Juli",
    "Agustus",
    "September",
    "Oktober",
    "November",
    "Desember",
)


def format_date(value: date | datetime, tz: tzinfo) -> str:
    if isinstance(value, datetime):
        value = to_timezone(value, tz).date()
    return f"{value.day} {MONTHS_ID[value.month - 1]} {value.year}"


def format_time(value: datetime, tz: tzinfo) -> str:
    return to_timezone(value, tz).strftime("%H.%M.%S")


def format_datetime(value: datetime, tz: tzinfo) -> str:
    return f"{format_date(value, tz)} pukul {format_time(value, tz)}"


def format_duration(minutes: int | None) -> str:
    minutes = int(minutes or 0)
    return f"{minutes // 60} jam {minutes % 60} menit"
