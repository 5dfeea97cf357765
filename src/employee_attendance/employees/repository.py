from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_user_id(self, user_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

    def list_page(self, *, offset: int, limit: int) -> tuple[Sequence[Employee], int]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        position: str,
        department: str,
        salary: float,
        join_date: date,
        user_id: Optional[int],
        created_by: Optional[int],
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        employee_id: int,
        name: str,
        position: str,
        department: str,
        salary: float,
        join_date: date,
    ) -> bool:
        raise NotImplementedError

    def delete(self, employee_id: int) -> bool:
        raise NotImplementedError
