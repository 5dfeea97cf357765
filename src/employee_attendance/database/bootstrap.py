from __future__ import annotations

import logging
import re
from datetime import date
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a SQL script on ';' outside quotes, dropping '-- ' line comments."""

    buf: list[str] = []
    quote = ""  # the open quote character, '' when outside a literal
    i = 0
    n = len(sql)

    while i < n:
        ch = sql[i]

        if quote:
            buf.append(ch)
            if ch == "\\" and i + 1 < n:
                buf.append(sql[i + 1])
                i += 2
                continue
            if ch == quote:
                quote = ""
            i += 1
            continue

        if ch == "-" and sql.startswith("--", i):
            newline = sql.find("\n", i)
            i = n if newline < 0 else newline
            continue

        if ch in ("'", '"', "`"):
            quote = ch
        elif ch == ";":
            statement = "".join(buf).strip()
            buf = []
            if statement:
                yield statement
            i += 1
            continue

        buf.append(ch)
        i += 1

    statement = "".join(buf).strip()
    if statement:
        yield statement


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        conn.cursor().execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def _run_script(db_config: dict, path: str | Path) -> None:
    target = DBConfig.from_dict(db_config)
    script = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        for statement in iter_sql_statements(script):
            cur.execute(statement)
        conn.commit()
    finally:
        conn.close()
    logger.info("Applied %s to %s", Path(path).name, target.database)


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _run_script(db_config, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _run_script(db_config, seed_path)


DEMO_EMPLOYEES = (
    # name, email, position, department, salary, join_date
    ("John Doe", "john.doe@company.com", "Software Engineer", "Engineering", 75000, date(2023, 1, 15)),
    ("Jane Smith", "jane.smith@company.com", "Product Manager", "Product", 85000, date(2023, 2, 1)),
    ("Mike Johnson", "mike.johnson@company.com", "UX Designer", "Design", 70000, date(2023, 3, 10)),
)


def ensure_demo_users(db_config: dict) -> None:
    """Upsert an admin account plus a few employees with linked accounts."""

    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor(dictionary=True)

        def upsert_user(name: str, email: str, password: str, role: str) -> int:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT user_id FROM users WHERE email=%s", (email,))
            existing = cur.fetchone()
            if existing:
                cur.execute(
                    "UPDATE users SET name=%s, password_hash=%s, role=%s, is_active=1 WHERE email=%s",
                    (name, password_hash, role, email),
                )
                return int(existing["user_id"])
            cur.execute(
                "INSERT INTO users (name, email, password_hash, role) VALUES (%s, %s, %s, %s)",
                (name, email, password_hash, role),
            )
            return int(cur.lastrowid)

        admin_id = upsert_user("Admin System", "admin@example.com", "admin123", "admin")

        for name, email, position, department, salary, join_date in DEMO_EMPLOYEES:
            user_id = upsert_user(name, email, "password123", "user")
            cur.execute("SELECT employee_id FROM employees WHERE user_id=%s", (user_id,))
            if cur.fetchone():
                continue
            cur.execute(
                """
                INSERT INTO employees (name, position, department, salary, join_date, user_id, created_by)
                VALUES (%s, %s, %s, %s, %s, %s, %s)
                """,
                (name, position, department, salary, join_date, user_id, admin_id),
            )

        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
