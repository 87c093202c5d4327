from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Optional

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True, isolation_level: Optional[str] = None):
    """Yield (conn, cursor) inside a single transaction.

    Commits when the block exits normally, rolls back on any exception.
    """
    conn = conn_factory.connect()
    try:
        if isolation_level:
            conn.start_transaction(isolation_level=isolation_level)
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def placeholders(values: Iterable[Any]) -> str:
    """Build a `%s, %s, ...` list for an IN clause."""
    return ", ".join(["%s"] * len(list(values)))
