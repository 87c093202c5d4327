from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Mapping, Optional

import mysql.connector

from ..core.enums import Role
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


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes).
    buf: list[str] = []
    quote: Optional[str] = None
    escape = False

    for ch in sql:
        buf.append(ch)
        if escape:
            escape = False
        elif ch == "\\":
            escape = True
        elif ch in ("'", '"'):
            if quote is None:
                quote = ch
            elif quote == ch:
                quote = None
        elif ch == ";" and quote is None:
            stmt = "".join(buf[:-1]).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_sql_file(db_config: Mapping, path: str | Path) -> int:
    target = DBConfig.from_mapping(db_config)
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))

    conn = _connect(target)
    count = 0
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    finally:
        conn.close()
    return count


def ensure_database_exists(db_config: Mapping) -> None:
    target = DBConfig.from_mapping(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: Mapping, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    count = _run_sql_file(db_config, schema_path)
    logger.info("Applied %d schema statements from %s", count, schema_path)


def apply_seed_sql(db_config: Mapping, *, seed_path: str | Path) -> None:
    count = _run_sql_file(db_config, seed_path)
    logger.info("Applied %d seed statements from %s", count, seed_path)


def ensure_bootstrap_super_admin(db_config: Mapping, *, email: str, full_name: str) -> Optional[int]:
    """Make sure the configured bootstrap account exists and holds SUPER_ADMIN.

    Only acts while the system has no SUPER_ADMIN at all; once a holder exists,
    role changes must go through the role engine.
    Returns the employee id that was promoted/created, or None when nothing changed.
    """
    email = (email or "").strip().lower()
    if not email:
        logger.info("No bootstrap super admin configured; skipping")
        return None

    target = DBConfig.from_mapping(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor(dictionary=True)
        cur.execute("SELECT COUNT(*) AS n FROM employees WHERE role=%s", (Role.SUPER_ADMIN.value,))
        row = cur.fetchone()
        if row and int(row["n"]) > 0:
            return None

        cur.execute("SELECT employee_id FROM employees WHERE email=%s", (email,))
        existing = cur.fetchone()
        if existing:
            employee_id = int(existing["employee_id"])
            cur.execute(
                "UPDATE employees SET role=%s, is_active=1 WHERE employee_id=%s",
                (Role.SUPER_ADMIN.value, employee_id),
            )
        else:
            cur.execute(
                """
                INSERT INTO employees (full_name, email, role, dept_id, is_active)
                VALUES (%s, %s, %s, NULL, 1)
                """,
                (full_name or email, email, Role.SUPER_ADMIN.value),
            )
            employee_id = int(cur.lastrowid)

        conn.commit()
        logger.info("Bootstrapped super admin %s (employee_id=%s)", email, employee_id)
        return employee_id
    finally:
        conn.close()


def list_tables(db_config: Mapping) -> list[str]:
    target = DBConfig.from_mapping(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
