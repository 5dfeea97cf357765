from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import requests

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .clock.base import Clock
from .clock.world_time import WorldTimeClock
from .common.datetime_utils import business_timezone
from .core import constants
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .holidays.api_client import HolidayApiClient
from .holidays.importer import HolidayImportService
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.repository import HolidayRepository
from .holidays.service import HolidayService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class AppSettings:
    """Runtime settings the services need, read once at start-up."""

    business_utc_offset_minutes: int = constants.DEFAULT_BUSINESS_UTC_OFFSET_MINUTES
    late_cutoff_minutes: int = constants.DEFAULT_LATE_CUTOFF_MINUTES
    world_time_api_url: str = constants.DEFAULT_WORLD_TIME_API_URL
    world_time_timeout_seconds: float = constants.DEFAULT_WORLD_TIME_TIMEOUT_SECONDS
    holiday_api_url: str = constants.DEFAULT_HOLIDAY_API_URL
    holiday_api_key: str = ""
    holiday_country: str = constants.DEFAULT_HOLIDAY_COUNTRY
    holiday_language: str = constants.DEFAULT_HOLIDAY_LANGUAGE
    holiday_api_timeout_seconds: float = constants.DEFAULT_HOLIDAY_API_TIMEOUT_SECONDS
    holiday_import_year: int = constants.DEFAULT_HOLIDAY_IMPORT_YEAR

    @classmethod
    def from_module(cls, settings) -> "AppSettings":
        defaults = cls()
        return cls(
            business_utc_offset_minutes=int(
                getattr(settings, "BUSINESS_UTC_OFFSET_MINUTES", defaults.business_utc_offset_minutes)
            ),
            late_cutoff_minutes=int(getattr(settings, "LATE_CUTOFF_MINUTES", defaults.late_cutoff_minutes)),
            world_time_api_url=str(getattr(settings, "WORLD_TIME_API_URL", defaults.world_time_api_url)),
            world_time_timeout_seconds=float(
                getattr(settings, "WORLD_TIME_TIMEOUT_SECONDS", defaults.world_time_timeout_seconds)
            ),
            holiday_api_url=str(getattr(settings, "HOLIDAY_API_URL", defaults.holiday_api_url)),
            holiday_api_key=str(getattr(settings, "HOLIDAY_API_KEY", defaults.holiday_api_key) or ""),
            holiday_country=str(getattr(settings, "HOLIDAY_API_COUNTRY", defaults.holiday_country)),
            holiday_language=str(getattr(settings, "HOLIDAY_API_LANGUAGE", defaults.holiday_language)),
            holiday_api_timeout_seconds=float(
                getattr(settings, "HOLIDAY_API_TIMEOUT_SECONDS", defaults.holiday_api_timeout_seconds)
            ),
            holiday_import_year=int(getattr(settings, "HOLIDAY_IMPORT_YEAR", defaults.holiday_import_year)),
        )


@dataclass(frozen=True)
class Container:
    settings: AppSettings
    clock: Clock

    users_repo: UserRepository
    employees_repo: EmployeeRepository
    holidays_repo: HolidayRepository
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    user_service: UserService
    employee_service: EmployeeService
    holiday_service: HolidayService
    holiday_import_service: HolidayImportService
    attendance_service: AttendanceService


def wire(
    *,
    settings: AppSettings,
    clock,
    users_repo,
    employees_repo,
    holidays_repo,
    attendance_repo,
    holiday_feed=None,
) -> Container:
    """Assemble services on top of already-built repositories and clock."""

    if holiday_feed is None:
        holiday_feed = HolidayApiClient(
            settings.holiday_api_key,
            base_url=settings.holiday_api_url,
            language=settings.holiday_language,
            timeout=settings.holiday_api_timeout_seconds,
        )

    auth_service = AuthService(users_repo)
    user_service = UserService(users_repo)
    employee_service = EmployeeService(employees_repo, user_service, clock)
    holiday_service = HolidayService(holidays_repo, clock)
    holiday_import_service = HolidayImportService(holidays_repo, holiday_feed)
    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        holiday_service,
        clock,
        late_cutoff_minutes=settings.late_cutoff_minutes,
    )

    return Container(
        settings=settings,
        clock=clock,
        users_repo=users_repo,
        employees_repo=employees_repo,
        holidays_repo=holidays_repo,
        attendance_repo=attendance_repo,
        auth_service=auth_service,
        user_service=user_service,
        employee_service=employee_service,
        holiday_service=holiday_service,
        holiday_import_service=holiday_import_service,
        attendance_service=attendance_service,
    )


def build_container(
    *,
    db_config: dict,
    settings: Optional[AppSettings] = None,
    http: Optional[requests.Session] = None,
) -> Container:
    settings = settings or AppSettings()
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    http = http or requests.Session()

    clock = WorldTimeClock(
        business_timezone(settings.business_utc_offset_minutes),
        url=settings.world_time_api_url,
        timeout=settings.world_time_timeout_seconds,
        session=http,
    )
    holiday_feed = HolidayApiClient(
        settings.holiday_api_key,
        base_url=settings.holiday_api_url,
        language=settings.holiday_language,
        timeout=settings.holiday_api_timeout_seconds,
        session=http,
    )

    return wire(
        settings=settings,
        clock=clock,
        users_repo=MySQLUserRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        holidays_repo=MySQLHolidayRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        holiday_feed=holiday_feed,
    )
