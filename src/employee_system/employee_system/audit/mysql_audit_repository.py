from __future__ import annotations

import json

from ..core.constants import AUDIT_RESOURCE_EMPLOYEE
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .model import AuditEvent
from .repository import AuditLog


class MySQLAuditLog(AuditLog):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(self, event: AuditEvent) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO audit_logs(actor_id, actor_role, action, resource, target_id,
                                       previous_role, new_role, reason, details, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    event.actor_id,
                    event.actor_role.value,
                    event.action,
                    AUDIT_RESOURCE_EMPLOYEE,
                    event.target_id,
                    event.previous_role.value if event.previous_role else None,
                    event.new_role.value if event.new_role else None,
                    event.reason,
                    json.dumps(event.details) if event.details else None,
                    event.timestamp.replace(tzinfo=None),
                ),
            )
