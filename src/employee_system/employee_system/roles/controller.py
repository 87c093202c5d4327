from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..core.enums import ErrorKind, RoleAction
from ..core.exceptions import DomainError
from ..container import Container
from .actions import ActionResult

logger = logging.getLogger(__name__)

HTTP_STATUS = {
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.ACTOR_NOT_FOUND: 404,
    ErrorKind.TARGET_NOT_FOUND: 404,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INSUFFICIENT_PERMISSIONS: 403,
    ErrorKind.SCOPE_VIOLATION: 403,
    ErrorKind.INVALID_TRANSITION: 400,
    ErrorKind.CANNOT_PROMOTE_FURTHER: 400,
    ErrorKind.CANNOT_DEMOTE_FURTHER: 400,
    ErrorKind.CANNOT_DEMOTE_LAST_SUPER_ADMIN: 400,
    ErrorKind.VALIDATION: 400,
    ErrorKind.EXTERNAL_COLLABORATOR_FAILURE: 409,
}


def status_for(kind: ErrorKind) -> int:
    return HTTP_STATUS.get(kind, 400)


def result_response(result: ActionResult):
    if result.ok:
        return jsonify(result.to_dict()), 200
    return jsonify(result.to_dict()), status_for(result.error_kind)


def error_response(e: DomainError):
    return jsonify({"ok": False, "errorKind": e.kind.value, "message": str(e)}), status_for(e.kind)


def api_login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"ok": False, "errorKind": ErrorKind.UNAUTHENTICATED.value, "message": "Unauthorized"}), 401
        return view(*args, **kwargs)

    return wrapper


def internal_error():
    return jsonify({"ok": False, "message": "Internal server error"}), 500


def register(app: Flask, container: Container) -> None:
    actions = container.role_action_service

    def run_action(*, action, target_id, new_role=None, reason=None, data=None):
        try:
            result = actions.handle(
                actor_id=session.get("user_id"),
                action=action,
                target_id=target_id,
                new_role=new_role,
                reason=reason,
                data=data,
            )
        except Exception:
            logger.exception("Role action %r failed unexpectedly", action)
            return internal_error()
        return result_response(result)

    @app.route("/api/role-management", methods=["POST"], endpoint="role_management")
    @api_login_required
    def role_management():
        body = request.get_json(silent=True) or {}
        return run_action(
            action=body.get("action"),
            target_id=body.get("targetUserId"),
            new_role=body.get("newRole"),
            reason=body.get("reason"),
        )

    @app.route("/api/role-management", methods=["GET"], endpoint="role_management_users")
    @api_login_required
    def role_management_users():
        try:
            actions.resolve_actor(session.get("user_id"))
            users = container.employees_repo.list_all()
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Listing employees failed")
            return internal_error()
        return jsonify(
            {
                "users": [
                    {
                        "id": u.employee_id,
                        "name": u.full_name,
                        "email": u.email,
                        "role": u.role.value,
                        "departmentId": u.dept_id,
                        "isActive": u.is_active,
                    }
                    for u in users
                ]
            }
        )

    @app.route("/api/employees/<int:employee_id>/promote", methods=["POST"], endpoint="promote_employee")
    @api_login_required
    def promote_employee(employee_id: int):
        body = request.get_json(silent=True) or {}
        return run_action(
            action=RoleAction.PROMOTE,
            target_id=employee_id,
            new_role=body.get("newRole"),
            reason=body.get("reason"),
        )

    @app.route("/api/employees/change-role", methods=["POST"], endpoint="change_role")
    @api_login_required
    def change_role():
        body = request.get_json(silent=True) or {}
        return run_action(
            action=RoleAction.CHANGE_ROLE,
            target_id=body.get("targetUserId"),
            new_role=body.get("newRole"),
            reason=body.get("reason"),
        )

    @app.route("/api/role-based-actions", methods=["POST"], endpoint="role_based_actions")
    @api_login_required
    def role_based_actions():
        body = request.get_json(silent=True) or {}
        data = body.get("data") or {}
        if not isinstance(data, dict):
            data = {}
        return run_action(
            action=body.get("action"),
            target_id=body.get("targetUserId"),
            new_role=data.get("newRole"),
            reason=data.get("reason"),
            data=data,
        )

    @app.route("/api/role-based-actions", methods=["GET"], endpoint="role_based_permissions")
    @api_login_required
    def role_based_permissions():
        try:
            summary = actions.permission_summary(session.get("user_id"))
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Loading permissions failed")
            return internal_error()
        return jsonify({"permissions": summary})
