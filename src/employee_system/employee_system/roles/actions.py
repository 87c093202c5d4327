"""Single entry point for role-changing and delegated actions.

Callers hand in ids and raw request values; they get back an `ActionResult`
instead of an exception for every expected failure kind.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import mysql.connector

from ..assignments.service import AssignmentService
from ..common.validators import optional_text, require_positive_id
from ..core.enums import ErrorKind, Role, RoleAction
from ..core.exceptions import (
    ActorNotFound,
    AuthenticationError,
    DomainError,
    ExternalCollaboratorFailure,
    TargetNotFound,
    ValidationError,
)
from ..users.model import Employee
from ..users.repository import EmployeeRepository
from .hierarchy import parse_role
from .service import RoleService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionResult:
    ok: bool
    resulting_role: Optional[Role] = None
    error_kind: Optional[ErrorKind] = None
    message: str = ""

    @classmethod
    def success(cls, message: str, resulting_role: Optional[Role] = None) -> "ActionResult":
        return cls(ok=True, resulting_role=resulting_role, message=message)

    @classmethod
    def failure(cls, error_kind: ErrorKind, message: str) -> "ActionResult":
        return cls(ok=False, error_kind=error_kind, message=message)

    def to_dict(self) -> dict:
        if self.ok:
            return {
                "ok": True,
                "resultingRole": self.resulting_role.value if self.resulting_role else None,
                "message": self.message,
            }
        return {"ok": False, "errorKind": self.error_kind.value, "message": self.message}


def parse_action(value: Any) -> RoleAction:
    if isinstance(value, RoleAction):
        return value
    raw = str(value or "").strip().lower()
    # The dashboard posts "promote_user" for the promote action.
    if raw == "promote_user":
        raw = RoleAction.PROMOTE.value
    try:
        return RoleAction(raw)
    except ValueError:
        raise ValidationError("Invalid action")


class RoleActionService:
    def __init__(self, employees: EmployeeRepository, roles: RoleService, assignments: AssignmentService):
        self._employees = employees
        self._roles = roles
        self._assignments = assignments

    def resolve_actor(self, actor_id: Any) -> Employee:
        if actor_id is None:
            raise AuthenticationError("Unauthorized")
        actor = self._employees.get_by_id(require_positive_id(actor_id, "actorId"))
        if not actor or not actor.is_active:
            raise ActorNotFound("User not found")
        return actor

    def resolve_target(self, target_id: Any) -> Employee:
        target = self._employees.get_by_id(require_positive_id(target_id, "targetUserId"))
        if not target or not target.is_active:
            raise TargetNotFound("Target user not found")
        return target

    def handle(
        self,
        *,
        actor_id: Any,
        action: Any,
        target_id: Any,
        new_role: Any = None,
        reason: Optional[str] = None,
        data: Optional[Mapping[str, Any]] = None,
    ) -> ActionResult:
        try:
            actor = self.resolve_actor(actor_id)
            act = parse_action(action)
            target = self.resolve_target(target_id)
            requested = parse_role(new_role, "newRole") if new_role not in (None, "") else None
            result = self._dispatch(actor, target, act, requested, optional_text(reason), data or {})
        except DomainError as e:
            logger.info("Role action %r denied: %s (%s)", action, e.kind.value, e)
            return ActionResult.failure(e.kind, str(e))
        return result

    def permission_summary(self, actor_id: Any) -> dict:
        return self._roles.permission_summary(self.resolve_actor(actor_id))

    def _dispatch(
        self,
        actor: Employee,
        target: Employee,
        action: RoleAction,
        new_role: Optional[Role],
        reason: Optional[str],
        data: Mapping[str, Any],
    ) -> ActionResult:
        try:
            return self._run(actor, target, action, new_role, reason, data)
        except mysql.connector.Error as e:
            logger.error("Persistence failure during %s: %s", action.value, e)
            raise ExternalCollaboratorFailure("Role change failed: storage unavailable")

    def _run(
        self,
        actor: Employee,
        target: Employee,
        action: RoleAction,
        new_role: Optional[Role],
        reason: Optional[str],
        data: Mapping[str, Any],
    ) -> ActionResult:
        if action == RoleAction.PROMOTE:
            updated = self._roles.promote(actor=actor, target=target, new_role=new_role, reason=reason)
            return ActionResult.success(
                f"User promoted from {target.role.value} to {updated.role.value}", updated.role
            )

        if action == RoleAction.DEMOTE:
            updated = self._roles.demote(actor=actor, target=target, new_role=new_role, reason=reason)
            return ActionResult.success(f"User demoted from {target.role.value} to {updated.role.value}", updated.role)

        if action == RoleAction.CHANGE_ROLE:
            if new_role is None:
                raise ValidationError("newRole is required")
            updated = self._roles.change_role(actor=actor, target=target, new_role=new_role, reason=reason)
            return ActionResult.success(
                f"User role successfully changed from {target.role.value} to {updated.role.value}", updated.role
            )

        if action == RoleAction.TRANSFER_SUPER_ADMIN:
            _, new_target = self._roles.transfer_super_admin(actor=actor, target=target, reason=reason)
            return ActionResult.success("Super Admin role transferred successfully", new_target.role)

        if action == RoleAction.ASSIGN_PROJECT:
            message = self._assignments.assign_project(actor=actor, target=target, project_id=data.get("projectId"))
        elif action == RoleAction.ASSIGN_TASK:
            message = self._assignments.assign_task(actor=actor, target=target, task_id=data.get("taskId"))
        else:
            message = self._assignments.manage_team(
                actor=actor, target=target, team_id=data.get("teamId"), operation=data.get("operation")
            )
        return ActionResult.success(message, target.role)
