from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role used for authorization."""

    ADMIN = "admin"
    USER = "user"


class AttendanceStatus(str, Enum):
    """Attendance status as stored in the database."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    HALF_DAY = "half-day"


class HolidayType(str, Enum):
    NATIONAL = "national"
    RELIGIOUS = "religious"
    COMPANY = "company"
    OTHER = "other"
