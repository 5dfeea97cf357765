from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Optional

from ..clock.formatting import format_duration
from ..common.datetime_utils import to_timezone
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day.

    Timestamps are timezone-aware; ``work_date`` is the business-local day
    the record is filed under. ``status``/``late_minutes`` follow from the
    check-in and ``work_minutes`` from the check-out (see ``rules``).
    """

    attendance_id: int
    employee_id: int
    work_date: date
    check_in_time: datetime
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    late_minutes: int = 0
    work_minutes: Optional[int] = None
    notes: str = ""

    @property
    def checked_out(self) -> bool:
        return self.check_out_time is not None

    def to_dict(self, tz: tzinfo) -> dict:
        return {
            "id": self.attendance_id,
            "employee_id": self.employee_id,
            "date": self.work_date.isoformat(),
            "check_in": to_timezone(self.check_in_time, tz).isoformat(),
            "check_out": to_timezone(self.check_out_time, tz).isoformat() if self.check_out_time else None,
            "status": self.status.value,
            "late_duration": self.late_minutes,
            "work_duration": self.work_minutes,
            "work_duration_display": format_duration(self.work_minutes) if self.work_minutes is not None else None,
            "notes": self.notes,
        }
