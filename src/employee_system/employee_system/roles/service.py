from __future__ import annotations

import logging
from typing import Optional

from ..audit.model import AuditEvent
from ..audit.repository import AuditLog
from ..common.datetime_utils import utc_now
from ..common.validators import optional_text
from ..core.constants import AUDIT_ACTION_ROLE_CHANGE, DEFAULT_ROLE_CHANGE_REASON, MIN_SUPER_ADMINS_FOR_DEMOTION
from ..core.enums import Role, RoleAction
from ..core.exceptions import (
    CannotDemoteLastSuperAdmin,
    ExternalCollaboratorFailure,
    error_for_kind,
)
from ..notifications.service import ADMIN_FANOUT_ROLES, NotificationService
from ..users.model import Employee
from ..users.repository import EmployeeRepository
from .permissions import TransitionResult, evaluate_role_change, evaluate_transition, permission_summary

logger = logging.getLogger(__name__)


class RoleService:
    """Use case: promote, demote, transfer super admin, change role directly.

    Every path decides through the pure validator first, then writes through the
    repository, then hands audit/notification events off best-effort.
    """

    def __init__(self, employees: EmployeeRepository, audit_log: AuditLog, notifications: NotificationService):
        self._employees = employees
        self._audit_log = audit_log
        self._notifications = notifications

    @staticmethod
    def _require_allowed(decision: TransitionResult) -> Role:
        if not decision.allowed:
            raise error_for_kind(decision.error_kind, decision.reason or "Action not allowed")
        return decision.resulting_role

    def promote(
        self, *, actor: Employee, target: Employee, new_role: Optional[Role] = None, reason: Optional[str] = None
    ) -> Employee:
        resulting = self._require_allowed(evaluate_transition(actor.role, target.role, RoleAction.PROMOTE, new_role))
        return self._apply(actor, target, resulting, RoleAction.PROMOTE, reason)

    def demote(
        self, *, actor: Employee, target: Employee, new_role: Optional[Role] = None, reason: Optional[str] = None
    ) -> Employee:
        resulting = self._require_allowed(evaluate_transition(actor.role, target.role, RoleAction.DEMOTE, new_role))
        return self._apply(actor, target, resulting, RoleAction.DEMOTE, reason)

    def change_role(
        self, *, actor: Employee, target: Employee, new_role: Role, reason: Optional[str] = None
    ) -> Employee:
        resulting = self._require_allowed(evaluate_role_change(actor.role, target.role, new_role))
        return self._apply(actor, target, resulting, RoleAction.CHANGE_ROLE, reason)

    def transfer_super_admin(
        self, *, actor: Employee, target: Employee, reason: Optional[str] = None
    ) -> tuple[Employee, Employee]:
        self._require_allowed(evaluate_transition(actor.role, target.role, RoleAction.TRANSFER_SUPER_ADMIN))

        if not self._employees.transfer_super_admin(
            from_employee_id=actor.employee_id, to_employee_id=target.employee_id
        ):
            raise ExternalCollaboratorFailure("Super admin transfer failed; no roles were changed")

        new_actor = actor.with_role(Role.ADMIN)
        new_target = target.with_role(Role.SUPER_ADMIN)
        logger.info(
            "Super admin transferred from employee %s to employee %s", actor.employee_id, target.employee_id
        )

        self._emit(
            actor=actor,
            target=target,
            previous_role=Role.ADMIN,
            new_role=Role.SUPER_ADMIN,
            action=RoleAction.TRANSFER_SUPER_ADMIN,
            reason=reason,
            details={"actorPreviousRole": Role.SUPER_ADMIN.value, "actorNewRole": Role.ADMIN.value},
        )
        return new_actor, new_target

    def permission_summary(self, actor: Employee) -> dict:
        return permission_summary(actor.role)

    def _guard_last_super_admin(self, target: Employee, new_role: Role) -> None:
        if target.role != Role.SUPER_ADMIN or new_role == Role.SUPER_ADMIN:
            return
        if self._employees.count_by_role(Role.SUPER_ADMIN) < MIN_SUPER_ADMINS_FOR_DEMOTION:
            raise CannotDemoteLastSuperAdmin(
                "Cannot demote the last Super Administrator. Promote another user to Super Admin first."
            )

    def _apply(
        self, actor: Employee, target: Employee, new_role: Role, action: RoleAction, reason: Optional[str]
    ) -> Employee:
        self._guard_last_super_admin(target, new_role)

        if not self._employees.update_role(target.employee_id, expected_role=target.role, new_role=new_role):
            raise ExternalCollaboratorFailure(
                f"Could not update role of employee {target.employee_id}; it changed concurrently"
            )

        updated = target.with_role(new_role)
        logger.info(
            "Role changed: %s -> %s for employee %s by employee %s (%s)",
            target.role.value,
            new_role.value,
            target.employee_id,
            actor.employee_id,
            action.value,
        )
        self._emit(
            actor=actor,
            target=target,
            previous_role=target.role,
            new_role=new_role,
            action=action,
            reason=reason,
        )
        return updated

    def _emit(
        self,
        *,
        actor: Employee,
        target: Employee,
        previous_role: Role,
        new_role: Role,
        action: RoleAction,
        reason: Optional[str],
        details: Optional[dict] = None,
    ) -> None:
        reason = optional_text(reason)
        event = AuditEvent(
            actor_id=actor.employee_id,
            actor_role=actor.role,
            action=AUDIT_ACTION_ROLE_CHANGE,
            target_id=target.employee_id,
            previous_role=previous_role,
            new_role=new_role,
            reason=reason or DEFAULT_ROLE_CHANGE_REASON,
            timestamp=utc_now(),
            details={"operation": action.value, **(details or {})},
        )
        try:
            self._audit_log.append(event)
        except Exception:
            # Audit is best-effort: the role change already happened and stays.
            logger.warning("Failed to create audit log for employee %s", target.employee_id, exc_info=True)

        admins: list[Employee] = []
        if new_role in ADMIN_FANOUT_ROLES:
            try:
                admins = list(self._employees.list_by_roles(ADMIN_FANOUT_ROLES))
            except Exception:
                logger.warning("Could not load admins for notification fan-out", exc_info=True)

        events = self._notifications.build_role_change_events(
            actor=actor,
            target=target,
            previous_role=previous_role,
            new_role=new_role,
            reason=reason,
            admins=admins,
            transfer=action == RoleAction.TRANSFER_SUPER_ADMIN,
        )
        self._notifications.dispatch(events)

