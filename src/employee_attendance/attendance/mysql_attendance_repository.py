from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_date, from_db_datetime, to_db_datetime
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = (
    "attendance_id, employee_id, work_date, check_in_time, check_out_time, "
    "status, late_minutes, work_minutes, notes"
)


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=from_db_date(r["work_date"]),
        check_in_time=from_db_datetime(r["check_in_time"]),
        check_out_time=from_db_datetime(r.get("check_out_time")),
        status=AttendanceStatus(r["status"]),
        late_minutes=int(r.get("late_minutes") or 0),
        work_minutes=int(r["work_minutes"]) if r.get("work_minutes") is not None else None,
        notes=r.get("notes") or "",
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND work_date=%s
                """,
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

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
        # uq_attendance_employee_date turns a concurrent second insert into DuplicateRecordError
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(employee_id, work_date, check_in_time, status, late_minutes, notes)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(employee_id), work_date, to_db_datetime(check_in_time), status.value, int(late_minutes), notes or ""),
            )
            return int(cur.lastrowid)

    def complete_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        work_minutes: int,
        notes: str,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s, work_minutes=%s, notes=%s
                WHERE attendance_id=%s AND check_out_time IS NULL
                """,
                (to_db_datetime(check_out_time), int(work_minutes), notes or "", int(attendance_id)),
            )
            return cur.rowcount > 0

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
        clauses = ["1=1"]
        params: list[object] = []

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))
        if start is not None:
            clauses.append("work_date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("work_date <= %s")
            params.append(end)
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS n FROM attendance_records WHERE {where}", tuple(params))
            total = int((fetchone(cur) or {"n": 0})["n"])

            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY work_date DESC, check_in_time DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params) + (int(limit), int(offset)),
            )
            return [_to_record(r) for r in fetchall(cur)], total

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE work_date=%s
                ORDER BY check_in_time ASC
                """,
                (work_date,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_recent(self, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                ORDER BY work_date DESC, check_in_time DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_recent_for_employee(self, employee_id: int, *, since: date, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND work_date >= %s
                ORDER BY work_date DESC
                LIMIT %s
                """,
                (int(employee_id), since, int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]
