from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: employee profile, optionally linked to one login account."""

    employee_id: int
    name: str
    position: str
    department: str
    salary: float
    join_date: date
    user_id: Optional[int] = None
    created_by: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "name": self.name,
            "position": self.position,
            "department": self.department,
            "salary": self.salary,
            "join_date": self.join_date.isoformat(),
            "user_id": self.user_id,
        }
