from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in_time: datetime,
        status: AttendanceStatus,
        late_minutes: int,
        notes: str = "",
    ) -> int:
        """Insert the day's record.

        Must be atomic with respect to (employee_id, work_date): a second insert
        for the same pair raises ``DuplicateRecordError``.
        """

        raise NotImplementedError

    def complete_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        work_minutes: int,
        notes: str,
    ) -> bool:
        """Set the check-out only if none is set yet; False when nothing changed."""

        raise NotImplementedError

    def list_page(
        self,
        *,
        employee_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        status: Optional[AttendanceStatus] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[Sequence[AttendanceRecord], int]:
        """Filtered page, newest work date first, plus the total match count."""

        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_recent(self, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_employee(self, employee_id: int, *, since: date, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
