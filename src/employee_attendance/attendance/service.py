from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Optional

from ..clock.base import Clock
from ..clock.formatting import format_datetime
from ..common.datetime_utils import local_date
from ..common.pagination import Page, page_offset
from ..common.validators import clean_notes, require_date, require_enum
from ..core.constants import (
    DEFAULT_DASHBOARD_RECENT,
    DEFAULT_LATE_CUTOFF_MINUTES,
    DEFAULT_PAGE_SIZE,
    DEFAULT_RECENT_DAYS,
    DEFAULT_UPCOMING_HOLIDAYS,
)
from ..core.enums import AttendanceStatus
from ..core.exceptions import (
    AlreadyCheckedInError,
    AlreadyCheckedOutError,
    AuthorizationError,
    DuplicateRecordError,
    EmployeeNotFoundError,
    IsHolidayError,
    NoCheckInTodayError,
    NotFoundError,
    ValidationError,
)
from ..employees.repository import EmployeeRepository
from ..holidays.service import HolidayService
from .model import AttendanceRecord
from .repository import AttendanceRepository
from .rules import append_notes, derive_status, derive_work_duration

logger = logging.getLogger(__name__)


class AttendanceService:
    """Daily check-in / check-out workflow and attendance queries.

    A record moves NoRecord -> CheckedIn -> CheckedOut, one per employee and
    business-local day. Rejected transitions raise and leave storage untouched.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        holidays: HolidayService,
        clock: Clock,
        *,
        late_cutoff_minutes: int = DEFAULT_LATE_CUTOFF_MINUTES,
    ):
        self._attendance = attendance
        self._employees = employees
        self._holidays = holidays
        self._clock = clock
        self._late_cutoff = int(late_cutoff_minutes)

    @property
    def tz(self):
        return self._clock.tz

    def check_in(self, employee_id: int, notes: Optional[str] = None) -> AttendanceRecord:
        notes = clean_notes(notes)
        self._require_employee(employee_id)

        now = self._clock.now()
        today = local_date(now, self._clock.tz)

        if self._attendance.get_for_employee_and_date(employee_id, today):
            raise AlreadyCheckedInError("You have already checked in today")

        holiday = self._holidays.holiday_on(today)
        if holiday:
            logger.info("Check-in blocked for employee %s: %s is %s", employee_id, today.isoformat(), holiday.name)
            raise IsHolidayError(f"Today is a holiday: {holiday.name}. No check-in required.", holiday=holiday)

        decision = derive_status(now, tz=self._clock.tz, cutoff_minutes=self._late_cutoff)
        try:
            attendance_id = self._attendance.create_checkin(
                employee_id=employee_id,
                work_date=today,
                check_in_time=now,
                status=decision.status,
                late_minutes=decision.late_minutes,
                notes=notes,
            )
        except DuplicateRecordError:
            raise AlreadyCheckedInError("You have already checked in today") from None

        logger.info(
            "Employee %s checked in at %s (%s, late %d min)",
            employee_id,
            now.isoformat(),
            decision.status.value,
            decision.late_minutes,
        )
        return self._require_record(attendance_id)

    def check_out(self, employee_id: int, notes: Optional[str] = None) -> AttendanceRecord:
        notes = clean_notes(notes)
        self._require_employee(employee_id)

        now = self._clock.now()
        today = local_date(now, self._clock.tz)

        record = self._attendance.get_for_employee_and_date(employee_id, today)
        if not record:
            raise NoCheckInTodayError("You have not checked in today")
        if record.checked_out:
            raise AlreadyCheckedOutError("You have already checked out today")

        try:
            work_minutes = derive_work_duration(record.check_in_time, now)
        except ValueError:
            raise ValidationError("Check-out time must be after check-in time") from None

        updated = self._attendance.complete_checkout(
            attendance_id=record.attendance_id,
            check_out_time=now,
            work_minutes=work_minutes,
            notes=append_notes(record.notes, notes),
        )
        if not updated:
            # Another request completed the check-out first
            raise AlreadyCheckedOutError("You have already checked out today")

        logger.info("Employee %s checked out at %s (%d min worked)", employee_id, now.isoformat(), work_minutes)
        return self._require_record(record.attendance_id)

    def today_overview(self, employee_id: int, *, recent_days: int = DEFAULT_RECENT_DAYS) -> dict:
        """Today's record, the holiday if any, and the last ``recent_days`` days."""

        self._require_employee(employee_id)
        now = self._clock.now()
        today = local_date(now, self._clock.tz)
        record = self._attendance.get_for_employee_and_date(employee_id, today)
        holiday = self._holidays.holiday_on(today)
        recent = self._attendance.get_recent_for_employee(
            employee_id,
            since=today - timedelta(days=recent_days),
            limit=recent_days,
        )
        return {
            "date": today.isoformat(),
            "now": format_datetime(now, self.tz),
            "today": record.to_dict(self.tz) if record else None,
            "is_holiday": holiday is not None,
            "holiday": holiday.to_dict() if holiday else None,
            "can_check_in": record is None and holiday is None,
            "can_check_out": record is not None and not record.checked_out,
            "recent": [r.to_dict(self.tz) for r in recent],
        }

    def get_record(self, attendance_id: int, *, viewer_employee_id: Optional[int] = None) -> AttendanceRecord:
        record = self._attendance.get_by_id(attendance_id)
        if not record:
            raise NotFoundError("Attendance record not found")
        if viewer_employee_id is not None and record.employee_id != viewer_employee_id:
            raise AuthorizationError("You do not have access to this attendance record")
        return record

    def history(
        self,
        *,
        employee_id: Optional[int] = None,
        start_date=None,
        end_date=None,
        status: Optional[str] = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> Page[dict]:
        start = require_date(start_date, "Start date") if start_date else None
        end = require_date(end_date, "End date") if end_date else None
        if start and end and end < start:
            raise ValidationError("End date must not be before start date")
        status_filter = require_enum(status, AttendanceStatus, "Status") if status else None

        records, total = self._attendance.list_page(
            employee_id=employee_id,
            start=start,
            end=end,
            status=status_filter,
            offset=page_offset(page, limit),
            limit=limit,
        )
        return Page(items=self._annotate(records), total=total, page=page, limit=limit)

    def dashboard(self) -> dict:
        today = local_date(self._clock.now(), self._clock.tz)
        todays = self._attendance.list_for_date(today)
        total_employees = self._employees.count()
        present = sum(1 for r in todays if r.status == AttendanceStatus.PRESENT)
        late = sum(1 for r in todays if r.status == AttendanceStatus.LATE)
        upcoming = self._holidays.upcoming(DEFAULT_UPCOMING_HOLIDAYS, today=today)

        return {
            "date": today.isoformat(),
            "total_employees": total_employees,
            "present_today": present,
            "late_today": late,
            "absent_today": max(total_employees - len(todays), 0),
            "today_records": self._annotate(todays),
            "recent_records": self._annotate(self._attendance.list_recent(DEFAULT_DASHBOARD_RECENT)),
            "upcoming_holidays": [h.to_dict() for h in upcoming],
        }

    def _annotate(self, records) -> list[dict]:
        """Serialize records with employee name and the holiday on their date."""

        if not records:
            return []

        dates = [r.work_date for r in records]
        holidays_by_date: dict[date, dict] = {}
        for h in self._holidays.holidays_in_range(min(dates), max(dates)):
            holidays_by_date.setdefault(h.holiday_date, h.to_dict())

        names: dict[int, Optional[str]] = {}
        out = []
        for r in records:
            if r.employee_id not in names:
                employee = self._employees.get_by_id(r.employee_id)
                names[r.employee_id] = employee.name if employee else None
            row = r.to_dict(self.tz)
            row["employee_name"] = names[r.employee_id]
            row["holiday"] = holidays_by_date.get(r.work_date)
            out.append(row)
        return out

    def _require_employee(self, employee_id: int) -> None:
        if not self._employees.get_by_id(employee_id):
            raise EmployeeNotFoundError("Employee not found")

    def _require_record(self, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(attendance_id)
        if not record:
            raise NotFoundError("Attendance record not found")
        return record
