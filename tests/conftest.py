from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime, timedelta, timezone
from typing import Optional

import pytest
import requests
from werkzeug.security import generate_password_hash

from employee_attendance.attendance.model import AttendanceRecord
from employee_attendance.attendance.service import AttendanceService
from employee_attendance.container import AppSettings, wire
from employee_attendance.core.enums import HolidayType, Role
from employee_attendance.core.exceptions import DuplicateRecordError
from employee_attendance.employees.model import Employee
from employee_attendance.holidays.model import Holiday
from employee_attendance.holidays.service import HolidayService
from employee_attendance.users.model import User

WITA = timezone(timedelta(hours=8))


class FixedClock:
    def __init__(self, now: datetime, tz=WITA):
        self._tz = tz
        self.current = now

    @property
    def tz(self):
        return self._tz

    def set(self, now: datetime) -> None:
        self.current = now

    def now(self) -> datetime:
        return self.current.astimezone(self._tz)

    def today(self) -> date:
        return self.now().date()


class InMemoryUsers:
    def __init__(self):
        self._by_id: dict[int, User] = {}
        self._id = 0

    def add(self, *, name: str, email: str, password: str, role: Role = Role.USER) -> User:
        user_id = self.create_user(name=name, email=email, password_hash=generate_password_hash(password), role=role)
        return self._by_id[user_id]

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.email == email), None)

    def create_user(self, *, name: str, email: str, password_hash: str, role: Role) -> int:
        if self.get_by_email(email):
            raise DuplicateRecordError(email)
        self._id += 1
        self._by_id[self._id] = User(user_id=self._id, name=name, email=email, password_hash=password_hash, role=role)
        return self._id

    def delete_by_id(self, user_id: int) -> bool:
        return self._by_id.pop(user_id, None) is not None


class InMemoryEmployees:
    def __init__(self):
        self._by_id: dict[int, Employee] = {}
        self._id = 0

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def get_by_user_id(self, user_id: int) -> Optional[Employee]:
        return next((e for e in self._by_id.values() if e.user_id == user_id), None)

    def count(self) -> int:
        return len(self._by_id)

    def list_page(self, *, offset: int, limit: int):
        items = sorted(self._by_id.values(), key=lambda e: e.name)
        return items[offset : offset + limit], len(items)

    def create(self, *, name, position, department, salary, join_date, user_id=None, created_by=None) -> int:
        if user_id is not None and self.get_by_user_id(user_id):
            raise DuplicateRecordError(str(user_id))
        self._id += 1
        self._by_id[self._id] = Employee(
            employee_id=self._id,
            name=name,
            position=position,
            department=department,
            salary=salary,
            join_date=join_date,
            user_id=user_id,
            created_by=created_by,
        )
        return self._id

    def update(self, *, employee_id, name, position, department, salary, join_date) -> bool:
        current = self._by_id.get(employee_id)
        if not current:
            return False
        self._by_id[employee_id] = replace(
            current, name=name, position=position, department=department, salary=salary, join_date=join_date
        )
        return True

    def delete(self, employee_id: int) -> bool:
        return self._by_id.pop(employee_id, None) is not None


class InMemoryHolidays:
    def __init__(self):
        self._by_id: dict[int, Holiday] = {}
        self._id = 0
        self.create_calls = 0

    def add(self, name: str, day: date, type: HolidayType = HolidayType.NATIONAL) -> Holiday:
        holiday_id = self.create(
            name=name, holiday_date=day, type=type, is_recurring=False, description=None, created_by=None
        )
        return self._by_id[holiday_id]

    def _sorted(self, items):
        return sorted(items, key=lambda h: (h.holiday_date, h.holiday_id))

    def get_by_id(self, holiday_id: int) -> Optional[Holiday]:
        return self._by_id.get(holiday_id)

    def find_by_date(self, holiday_date: date):
        return sorted((h for h in self._by_id.values() if h.holiday_date == holiday_date), key=lambda h: h.holiday_id)

    def find_by_date_and_name(self, holiday_date: date, name: str) -> Optional[Holiday]:
        return next((h for h in self.find_by_date(holiday_date) if h.name == name), None)

    def list_range(self, start: date, end: date):
        return self._sorted(h for h in self._by_id.values() if start <= h.holiday_date <= end)

    def list_upcoming(self, today: date, limit: int):
        return self._sorted(h for h in self._by_id.values() if h.holiday_date >= today)[:limit]

    def count_range(self, start: date, end: date) -> int:
        return len(self.list_range(start, end))

    def list_page(self, *, start=None, end=None, type=None, offset=0, limit=20):
        items = [
            h
            for h in self._sorted(self._by_id.values())
            if (start is None or h.holiday_date >= start)
            and (end is None or h.holiday_date <= end)
            and (type is None or h.type == type)
        ]
        return items[offset : offset + limit], len(items)

    def create(self, *, name, holiday_date, type, is_recurring, description, created_by) -> int:
        self.create_calls += 1
        if self.find_by_date_and_name(holiday_date, name):
            raise DuplicateRecordError(f"{holiday_date} {name}")
        self._id += 1
        self._by_id[self._id] = Holiday(
            holiday_id=self._id,
            name=name,
            holiday_date=holiday_date,
            type=type,
            is_recurring=is_recurring,
            description=description,
            created_by=created_by,
        )
        return self._id

    def update(self, *, holiday_id, name, holiday_date, type, is_recurring, description) -> bool:
        current = self._by_id.get(holiday_id)
        if not current:
            return False
        clash = self.find_by_date_and_name(holiday_date, name)
        if clash and clash.holiday_id != holiday_id:
            raise DuplicateRecordError(f"{holiday_date} {name}")
        self._by_id[holiday_id] = replace(
            current,
            name=name,
            holiday_date=holiday_date,
            type=type,
            is_recurring=is_recurring,
            description=description,
        )
        return True

    def delete(self, holiday_id: int) -> bool:
        return self._by_id.pop(holiday_id, None) is not None


class InMemoryAttendance:
    """Thread-safe store with the same uniqueness guarantees as the MySQL table."""

    def __init__(self):
        self._lock = threading.Lock()
        self._by_id: dict[int, AttendanceRecord] = {}
        self._id = 0

    def all(self):
        return list(self._by_id.values())

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        return self._by_id.get(attendance_id)

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with self._lock:
            return next(
                (r for r in self._by_id.values() if r.employee_id == employee_id and r.work_date == work_date),
                None,
            )

    def create_checkin(self, *, employee_id, work_date, check_in_time, status, late_minutes, notes="") -> int:
        with self._lock:
            if any(r.employee_id == employee_id and r.work_date == work_date for r in self._by_id.values()):
                raise DuplicateRecordError(f"{employee_id} {work_date}")
            self._id += 1
            self._by_id[self._id] = AttendanceRecord(
                attendance_id=self._id,
                employee_id=employee_id,
                work_date=work_date,
                check_in_time=check_in_time,
                check_out_time=None,
                status=status,
                late_minutes=late_minutes,
                notes=notes,
            )
            return self._id

    def complete_checkout(self, *, attendance_id, check_out_time, work_minutes, notes) -> bool:
        with self._lock:
            current = self._by_id.get(attendance_id)
            if not current or current.check_out_time is not None:
                return False
            self._by_id[attendance_id] = replace(
                current, check_out_time=check_out_time, work_minutes=work_minutes, notes=notes
            )
            return True

    def _newest_first(self, items):
        return sorted(items, key=lambda r: (r.work_date, r.check_in_time), reverse=True)

    def list_page(self, *, employee_id=None, start=None, end=None, status=None, offset=0, limit=20):
        items = [
            r
            for r in self._newest_first(self._by_id.values())
            if (employee_id is None or r.employee_id == employee_id)
            and (start is None or r.work_date >= start)
            and (end is None or r.work_date <= end)
            and (status is None or r.status == status)
        ]
        return items[offset : offset + limit], len(items)

    def list_for_date(self, work_date: date):
        return sorted((r for r in self._by_id.values() if r.work_date == work_date), key=lambda r: r.check_in_time)

    def list_recent(self, limit: int):
        return self._newest_first(self._by_id.values())[:limit]

    def get_recent_for_employee(self, employee_id: int, *, since: date, limit: int):
        items = [r for r in self._by_id.values() if r.employee_id == employee_id and r.work_date >= since]
        return self._newest_first(items)[:limit]


class FakeFeed:
    def __init__(self, entries=None, error: Optional[Exception] = None):
        self.entries = list(entries or [])
        self.error = error
        self.calls = []

    def fetch_holidays(self, country: str, year: int):
        self.calls.append((country, year))
        if self.error:
            raise self.error
        return list(self.entries)


class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None, invalid_json: bool = False):
        self.status_code = status_code
        self._payload = payload
        self._invalid_json = invalid_json

    def json(self):
        if self._invalid_json:
            raise ValueError("not json")
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")


class FakeSession:
    """Stands in for requests.Session: replays a response or raises."""

    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if self.error:
            raise self.error
        return self.response


def wita(y, m, d, hh=0, mm=0, ss=0) -> datetime:
    return datetime(y, m, d, hh, mm, ss, tzinfo=WITA)


@pytest.fixture
def clock():
    return FixedClock(wita(2024, 8, 19, 8, 30))


@pytest.fixture
def users():
    return InMemoryUsers()


@pytest.fixture
def employees_repo():
    return InMemoryEmployees()


@pytest.fixture
def holidays_repo():
    return InMemoryHolidays()


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def holiday_service(holidays_repo, clock):
    return HolidayService(holidays_repo, clock)


@pytest.fixture
def attendance_service(attendance_repo, employees_repo, holiday_service, clock):
    return AttendanceService(attendance_repo, employees_repo, holiday_service, clock)


@pytest.fixture
def employee(employees_repo, users):
    account = users.add(name="Budi Santoso", email="budi@example.com", password="password123")
    employee_id = employees_repo.create(
        name="Budi Santoso",
        position="Engineer",
        department="IT",
        salary=8_000_000,
        join_date=date(2023, 1, 2),
        user_id=account.user_id,
    )
    return employees_repo.get_by_id(employee_id)


@pytest.fixture
def feed():
    return FakeFeed()


@pytest.fixture
def container(clock, users, employees_repo, holidays_repo, attendance_repo, feed):
    return wire(
        settings=AppSettings(),
        clock=clock,
        users_repo=users,
        employees_repo=employees_repo,
        holidays_repo=holidays_repo,
        attendance_repo=attendance_repo,
        holiday_feed=feed,
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from employee_attendance.main import create_app

    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin(users):
    return users.add(name="Administrator", email="admin@example.com", password="admin123", role=Role.ADMIN)


def login_as(client, user: User) -> None:
    with client.session_transaction() as sess:
        sess["user_id"] = user.user_id
        sess["name"] = user.name
        sess["email"] = user.email
        sess["role"] = user.role.value

