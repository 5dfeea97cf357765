"""Pure attendance rules: status/lateness from check-in, duration from check-out."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Optional

from ..common.datetime_utils import minutes_since_midnight
from ..core.constants import DEFAULT_LATE_CUTOFF_MINUTES, NOTES_SEPARATOR
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    late_minutes: int = 0


def derive_status(
    check_in: datetime,
    *,
    tz: tzinfo,
    cutoff_minutes: int = DEFAULT_LATE_CUTOFF_MINUTES,
) -> StatusDecision:
    """Late only when the business-local hour:minute is strictly past the cutoff.

    Seconds are ignored, so 09:00:59 is still on time with a 09:00 cutoff.
    """

    minutes = minutes_since_midnight(check_in, tz)
    if minutes > cutoff_minutes:
        return StatusDecision(status=AttendanceStatus.LATE, late_minutes=minutes - cutoff_minutes)
    return StatusDecision(status=AttendanceStatus.PRESENT, late_minutes=0)


def derive_work_duration(check_in: datetime, check_out: datetime) -> int:
    """Whole minutes between check-in and check-out, rounded down."""

    if check_out <= check_in:
        raise ValueError("check-out must be after check-in")
    return (check_out - check_in) // timedelta(minutes=1)


def append_notes(existing: Optional[str], extra: Optional[str]) -> str:
    """Append ``extra`` to ``existing`` with ' | '; never overwrite."""

    existing = existing or ""
    if not extra:
        return existing
    if not existing:
        return extra
    return f"{existing}{NOTES_SEPARATOR}{extra}"
