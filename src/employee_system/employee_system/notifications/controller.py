from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import to_iso
from ..core.constants import DEFAULT_NOTIFICATION_LIMIT
from ..core.exceptions import DomainError
from ..container import Container
from ..roles.controller import api_login_required, error_response, internal_error

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    notifications = container.notification_service

    @app.route("/api/notifications", methods=["GET"], endpoint="list_notifications")
    @api_login_required
    def list_notifications():
        unread_only = request.args.get("unread", "").lower() in {"1", "true", "yes"}
        try:
            limit = int(request.args.get("limit", DEFAULT_NOTIFICATION_LIMIT))
        except ValueError:
            limit = DEFAULT_NOTIFICATION_LIMIT

        try:
            items = notifications.list_for_employee(int(session["user_id"]), unread_only=unread_only, limit=limit)
        except Exception:
            logger.exception("Loading notifications failed")
            return internal_error()

        return jsonify(
            {
                "notifications": [
                    {
                        "id": n.notification_id,
                        "message": n.message,
                        "type": n.type.value,
                        "metadata": n.metadata,
                        "read": n.is_read,
                        "createdAt": to_iso(n.created_at),
                    }
                    for n in items
                ]
            }
        )

    @app.route("/api/notifications/<int:notification_id>/read", methods=["POST"], endpoint="mark_notification_read")
    @api_login_required
    def mark_notification_read(notification_id: int):
        try:
            notifications.mark_read(employee_id=int(session["user_id"]), notification_id=notification_id)
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Marking notification %s read failed", notification_id)
            return internal_error()
        return jsonify({"ok": True})
