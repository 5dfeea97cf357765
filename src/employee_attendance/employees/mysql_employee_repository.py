from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_date
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "employee_id, name, position, department, salary, join_date, user_id, created_by"


def _to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        name=r["name"],
        position=r["position"],
        department=r["department"],
        salary=float(r.get("salary") or 0),
        join_date=from_db_date(r["join_date"]),
        user_id=r.get("user_id"),
        created_by=r.get("created_by"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def get_by_user_id(self, user_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE user_id=%s", (int(user_id),))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM employees")
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def list_page(self, *, offset: int, limit: int) -> tuple[Sequence[Employee], int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM employees")
            total = int((fetchone(cur) or {"n": 0})["n"])
            cur.execute(
                f"SELECT {_COLUMNS} FROM employees ORDER BY name ASC, employee_id ASC LIMIT %s OFFSET %s",
                (int(limit), int(offset)),
            )
            return [_to_employee(r) for r in fetchall(cur)], total

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(name, position, department, salary, join_date, user_id, created_by)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (name, position, department, salary, join_date, user_id, created_by),
            )
            return int(cur.lastrowid)

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET name=%s, position=%s, department=%s, salary=%s, join_date=%s
                WHERE employee_id=%s
                """,
                (name, position, department, salary, join_date, int(employee_id)),
            )
            return cur.rowcount > 0

    def delete(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (int(employee_id),))
            return cur.rowcount > 0
