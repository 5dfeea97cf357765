from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import HolidayType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_date, from_db_datetime
from .model import Holiday
from .repository import HolidayRepository

_COLUMNS = "holiday_id, name, holiday_date, type, is_recurring, description, created_by, created_at"


def _to_holiday(r: Dict[str, Any]) -> Holiday:
    return Holiday(
        holiday_id=int(r["holiday_id"]),
        name=r["name"],
        holiday_date=from_db_date(r["holiday_date"]),
        type=HolidayType(r["type"]),
        is_recurring=bool(r.get("is_recurring")),
        description=r.get("description"),
        created_by=r.get("created_by"),
        created_at=from_db_datetime(r.get("created_at")),
    )


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, holiday_id: int) -> Optional[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM holidays WHERE holiday_id=%s", (int(holiday_id),))
            r = fetchone(cur)
            return _to_holiday(r) if r else None

    def find_by_date(self, holiday_date: date) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM holidays WHERE holiday_date=%s ORDER BY holiday_id ASC",
                (holiday_date,),
            )
            return [_to_holiday(r) for r in fetchall(cur)]

    def find_by_date_and_name(self, holiday_date: date, name: str) -> Optional[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM holidays WHERE holiday_date=%s AND name=%s",
                (holiday_date, name),
            )
            r = fetchone(cur)
            return _to_holiday(r) if r else None

    def list_range(self, start: date, end: date) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM holidays
                WHERE holiday_date BETWEEN %s AND %s
                ORDER BY holiday_date ASC, holiday_id ASC
                """,
                (start, end),
            )
            return [_to_holiday(r) for r in fetchall(cur)]

    def list_upcoming(self, today: date, limit: int) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM holidays
                WHERE holiday_date >= %s
                ORDER BY holiday_date ASC, holiday_id ASC
                LIMIT %s
                """,
                (today, int(limit)),
            )
            return [_to_holiday(r) for r in fetchall(cur)]

    def count_range(self, start: date, end: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS n FROM holidays WHERE holiday_date BETWEEN %s AND %s",
                (start, end),
            )
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def list_page(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        type: Optional[HolidayType] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[Sequence[Holiday], int]:
        clauses = ["1=1"]
        params: list[object] = []

        if start is not None:
            clauses.append("holiday_date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("holiday_date <= %s")
            params.append(end)
        if type is not None:
            clauses.append("type = %s")
            params.append(type.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS n FROM holidays WHERE {where}", tuple(params))
            total = int((fetchone(cur) or {"n": 0})["n"])

            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM holidays
                WHERE {where}
                ORDER BY holiday_date ASC, holiday_id ASC
                LIMIT %s OFFSET %s
                """,
                tuple(params) + (int(limit), int(offset)),
            )
            return [_to_holiday(r) for r in fetchall(cur)], total

    def create(
        self,
        *,
        name: str,
        holiday_date: date,
        type: HolidayType,
        is_recurring: bool,
        description: Optional[str],
        created_by: Optional[int],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO holidays(name, holiday_date, type, is_recurring, description, created_by)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (name, holiday_date, type.value, int(bool(is_recurring)), description, created_by),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        holiday_id: int,
        name: str,
        holiday_date: date,
        type: HolidayType,
        is_recurring: bool,
        description: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE holidays
                SET name=%s, holiday_date=%s, type=%s, is_recurring=%s, description=%s
                WHERE holiday_id=%s
                """,
                (name, holiday_date, type.value, int(bool(is_recurring)), description, int(holiday_id)),
            )
            return cur.rowcount > 0

    def delete(self, holiday_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM holidays WHERE holiday_id=%s", (int(holiday_id),))
            return cur.rowcount > 0
