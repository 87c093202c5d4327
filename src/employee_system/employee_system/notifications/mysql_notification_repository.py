from __future__ import annotations

import json
from typing import Sequence

from ..core.enums import NotificationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Notification, NotificationEvent
from .repository import NotificationRepository


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_many(self, events: Sequence[NotificationEvent]) -> int:
        if not events:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO notifications(employee_id, message, type, metadata, is_read)
                VALUES(%s,%s,%s,%s,0)
                """,
                [(e.recipient_id, e.message, e.type.value, json.dumps(e.metadata or {})) for e in events],
            )
            return len(events)

    def list_for_employee(self, employee_id: int, *, unread_only: bool = False, limit: int = 50) -> Sequence[Notification]:
        sql = """
            SELECT notification_id, employee_id, message, type, metadata, is_read, created_at
            FROM notifications
            WHERE employee_id=%s
        """
        params: list = [employee_id]
        if unread_only:
            sql += " AND is_read=0"
        sql += " ORDER BY created_at DESC, notification_id DESC LIMIT %s"
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            out: list[Notification] = []
            for r in fetchall(cur):
                raw = r.get("metadata")
                out.append(
                    Notification(
                        notification_id=int(r["notification_id"]),
                        employee_id=int(r["employee_id"]),
                        message=r["message"],
                        type=NotificationType(r["type"]),
                        metadata=json.loads(raw) if raw else {},
                        is_read=bool(r["is_read"]),
                        created_at=r.get("created_at"),
                    )
                )
            return out

    def mark_read(self, notification_id: int, *, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT notification_id FROM notifications WHERE notification_id=%s AND employee_id=%s",
                (notification_id, employee_id),
            )
            if not fetchone(cur):
                return False
            # Already-read rows report rowcount 0, so existence is checked above.
            cur.execute("UPDATE notifications SET is_read=1 WHERE notification_id=%s", (notification_id,))
            return True
