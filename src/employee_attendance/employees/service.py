from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..clock.base import Clock
from ..common.pagination import Page, page_offset
from ..common.validators import require_date, require_length_between, require_non_negative
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.enums import Role
from ..core.exceptions import EmployeeNotFoundError, EmployeeNotLinkedError, ValidationError
from ..users.service import UserService
from .accounts import email_from_name, generate_password
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

MAX_SALARY = 999_999_999


@dataclass(frozen=True)
class CreatedEmployee:
    employee: Employee
    email: str
    password: str


class EmployeeService:
    """Employee directory: lookups for the attendance flow plus admin CRUD."""

    def __init__(self, employees: EmployeeRepository, users: UserService, clock: Clock):
        self._employees = employees
        self._users = users
        self._clock = clock

    def get(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise EmployeeNotFoundError("Employee not found")
        return employee

    def get_for_user(self, user_id: int) -> Employee:
        employee = self._employees.get_by_user_id(user_id)
        if not employee:
            raise EmployeeNotLinkedError(
                "Your account is not linked to an employee profile. Please contact the administrator."
            )
        return employee

    def count(self) -> int:
        return self._employees.count()

    def list_employees(self, *, page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> Page[Employee]:
        items, total = self._employees.list_page(offset=page_offset(page, limit), limit=limit)
        return Page(items=items, total=total, page=page, limit=limit)

    def create_with_account(
        self,
        *,
        name: str,
        position: str,
        department: str,
        salary,
        join_date=None,
        email: Optional[str] = None,
        created_by: Optional[int] = None,
    ) -> CreatedEmployee:
        """Create the employee together with a linked login account."""

        fields = self._validate(
            name=name,
            position=position,
            department=department,
            salary=salary,
            join_date=join_date if join_date is not None else self._clock.today(),
        )

        email = (email or "").strip() or email_from_name(fields["name"])
        password = generate_password()
        user_id = self._users.create_account(name=fields["name"], email=email, password=password, role=Role.USER)

        try:
            employee_id = self._employees.create(user_id=user_id, created_by=created_by, **fields)
        except Exception:
            # Do not leave an orphan account behind
            self._users.delete_account(user_id)
            raise

        logger.info("Employee created: %s (account %s)", fields["name"], email)
        return CreatedEmployee(employee=self.get(employee_id), email=email.lower(), password=password)

    def update(self, employee_id: int, **changes) -> Employee:
        current = self.get(employee_id)
        fields = self._validate(
            name=changes.get("name") if changes.get("name") is not None else current.name,
            position=changes.get("position") if changes.get("position") is not None else current.position,
            department=changes.get("department") if changes.get("department") is not None else current.department,
            salary=changes.get("salary") if changes.get("salary") is not None else current.salary,
            join_date=changes.get("join_date") if changes.get("join_date") is not None else current.join_date,
        )
        self._employees.update(employee_id=current.employee_id, **fields)
        return self.get(current.employee_id)

    def delete(self, employee_id: int) -> None:
        employee = self.get(employee_id)
        self._employees.delete(employee.employee_id)
        if employee.user_id is not None:
            self._users.delete_account(employee.user_id)
        logger.info("Employee deleted: %s", employee.name)

    @staticmethod
    def _validate(*, name, position, department, salary, join_date) -> dict:
        salary = require_non_negative(salary, "Salary")
        if salary > MAX_SALARY:
            raise ValidationError(f"Salary must not exceed {MAX_SALARY}")
        return {
            "name": require_length_between(name, "Name", 3, 100),
            "position": require_length_between(position, "Position", 2, 100),
            "department": require_length_between(department, "Department", 2, 100),
            "salary": salary,
            "join_date": require_date(join_date, "Join date"),
        }
