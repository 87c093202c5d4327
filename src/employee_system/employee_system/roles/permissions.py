"""Permission validator and delegated-action authorizer.

All checks in this module are pure predicates over roles; they never touch
persistence and never mutate anything.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..core.enums import ErrorKind, Role, RoleAction
from ..core.exceptions import AuthorizationError, ScopeViolation
from ..users.model import Employee
from .hierarchy import next_role, normalize_role, previous_role, rank

DELEGATING_ROLES = frozenset({Role.SUPER_ADMIN, Role.ADMIN, Role.MANAGER})
DELEGATED_ACTIONS = frozenset({RoleAction.ASSIGN_PROJECT, RoleAction.ASSIGN_TASK, RoleAction.MANAGE_TEAM})
ROLE_CHANGING_ROLES = frozenset({Role.SUPER_ADMIN, Role.ADMIN})


@dataclass(frozen=True)
class TransitionResult:
    allowed: bool
    resulting_role: Optional[Role] = None
    reason: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    @classmethod
    def allow(cls, resulting_role: Role) -> "TransitionResult":
        return cls(allowed=True, resulting_role=resulting_role)

    @classmethod
    def deny(cls, error_kind: ErrorKind, reason: str) -> "TransitionResult":
        return cls(allowed=False, reason=reason, error_kind=error_kind)


def _normalize_action(action: Any) -> Optional[RoleAction]:
    if isinstance(action, RoleAction):
        return action
    try:
        return RoleAction(str(action).strip().lower())
    except ValueError:
        return None


def can_perform_action(actor_role: Any, target_role: Any, action: Any, new_role: Any = None) -> bool:
    """Coarse permission table keyed by the actor's role.

    `new_role` is accepted for call-site symmetry; destination checks live in
    `can_promote`.
    """
    actor = normalize_role(actor_role)
    target = normalize_role(target_role)
    act = _normalize_action(action)
    if actor is None or target is None or act is None:
        return False

    if actor == Role.SUPER_ADMIN:
        if act == RoleAction.TRANSFER_SUPER_ADMIN:
            return target == Role.ADMIN
        return True

    if actor == Role.ADMIN:
        if act == RoleAction.PROMOTE:
            return target in (Role.INTERN, Role.EMPLOYEE)
        if act == RoleAction.DEMOTE:
            return target in (Role.EMPLOYEE, Role.MANAGER)
        if act == RoleAction.TRANSFER_SUPER_ADMIN:
            return False
        return target != Role.SUPER_ADMIN

    if actor == Role.MANAGER:
        if act == RoleAction.PROMOTE:
            return target == Role.INTERN
        if act == RoleAction.DEMOTE:
            return target == Role.EMPLOYEE
        return False

    return False


def can_promote(actor_role: Any, target_role: Any, new_role: Any) -> bool:
    """Strict variant: validates the exact destination role."""
    actor = normalize_role(actor_role)
    target = normalize_role(target_role)
    destination = normalize_role(new_role)
    if actor is None or target is None or destination is None:
        return False

    if actor == Role.SUPER_ADMIN:
        return True
    if actor == Role.ADMIN:
        return (target, destination) in {
            (Role.INTERN, Role.EMPLOYEE),
            (Role.EMPLOYEE, Role.MANAGER),
        }
    if actor == Role.MANAGER:
        return (target, destination) == (Role.INTERN, Role.EMPLOYEE)
    return False


def evaluate_transition(actor_role: Any, target_role: Any, action: Any, new_role: Any = None) -> TransitionResult:
    """Decide a promote/demote/transfer request and compute the resulting role."""
    act = _normalize_action(action)
    target = normalize_role(target_role)
    requested = normalize_role(new_role) if new_role is not None else None
    if new_role is not None and requested is None:
        return TransitionResult.deny(ErrorKind.INVALID_TRANSITION, f"Unknown role: {new_role!r}")

    if act == RoleAction.PROMOTE:
        nxt = next_role(target)
        if nxt is None:
            return TransitionResult.deny(ErrorKind.CANNOT_PROMOTE_FURTHER, "Cannot promote further")
        if not can_perform_action(actor_role, target, act):
            return TransitionResult.deny(
                ErrorKind.INSUFFICIENT_PERMISSIONS, "Insufficient permissions for this action"
            )
        if requested is not None and requested != nxt:
            return TransitionResult.deny(
                ErrorKind.INVALID_TRANSITION,
                f"Invalid promotion. {target.value} can only be promoted to {nxt.value}",
            )
        if requested is not None and not can_promote(actor_role, target, requested):
            return TransitionResult.deny(
                ErrorKind.INSUFFICIENT_PERMISSIONS,
                f"{_label(actor_role)} cannot promote {target.value} to {requested.value}",
            )
        return TransitionResult.allow(nxt)

    if act == RoleAction.DEMOTE:
        prev = previous_role(target)
        if prev is None:
            return TransitionResult.deny(ErrorKind.CANNOT_DEMOTE_FURTHER, "Cannot demote further")
        if not can_perform_action(actor_role, target, act):
            return TransitionResult.deny(
                ErrorKind.INSUFFICIENT_PERMISSIONS, "Insufficient permissions for this action"
            )
        if requested is not None and requested != prev:
            return TransitionResult.deny(
                ErrorKind.INVALID_TRANSITION,
                f"Invalid demotion. {target.value} can only be demoted to {prev.value}",
            )
        return TransitionResult.allow(prev)

    if act == RoleAction.TRANSFER_SUPER_ADMIN:
        if not can_perform_action(actor_role, target, act):
            return TransitionResult.deny(
                ErrorKind.INSUFFICIENT_PERMISSIONS, "Super Admin can only transfer role to an Admin"
            )
        return TransitionResult.allow(Role.SUPER_ADMIN)

    return TransitionResult.deny(ErrorKind.VALIDATION, f"Not a role transition: {action!r}")


def evaluate_role_change(actor_role: Any, target_role: Any, new_role: Any) -> TransitionResult:
    """Decide a direct role change (set `target_role` to `new_role`).

    SUPER_ADMIN may set any role. ADMIN is limited to the single-step moves its
    strict promote/demote rows allow and can never hand out ADMIN or SUPER_ADMIN.
    """
    actor = normalize_role(actor_role)
    target = normalize_role(target_role)
    destination = normalize_role(new_role)
    if destination is None or target is None:
        return TransitionResult.deny(ErrorKind.INVALID_TRANSITION, f"Unknown role: {new_role!r}")
    if actor not in ROLE_CHANGING_ROLES:
        return TransitionResult.deny(
            ErrorKind.INSUFFICIENT_PERMISSIONS,
            "Insufficient permissions. Only administrators can change user roles.",
        )
    if destination == target:
        return TransitionResult.deny(ErrorKind.INVALID_TRANSITION, f"User already has role {target.value}")
    if actor == Role.SUPER_ADMIN:
        return TransitionResult.allow(destination)

    if destination in (Role.ADMIN, Role.SUPER_ADMIN):
        return TransitionResult.deny(
            ErrorKind.INSUFFICIENT_PERMISSIONS,
            f"Only Super Administrators can assign the {destination.value} role.",
        )
    if target == Role.SUPER_ADMIN:
        return TransitionResult.deny(
            ErrorKind.INSUFFICIENT_PERMISSIONS, "Only Super Administrators can change a Super Administrator"
        )
    action = RoleAction.PROMOTE if rank(destination) > rank(target) else RoleAction.DEMOTE
    return evaluate_transition(actor, target, action, destination)


def can_delegate(actor_role: Any, action: Any) -> bool:
    act = _normalize_action(action)
    return act in DELEGATED_ACTIONS and normalize_role(actor_role) in DELEGATING_ROLES


def authorize_delegated_action(actor: Employee, target: Employee, action: RoleAction) -> None:
    """Raise unless `actor` may perform the delegated `action` on `target`.

    Managers are limited to their own department; admins are unscoped.
    """
    if not can_delegate(actor.role, action):
        verb = action.value.replace("_", " ")
        raise AuthorizationError(f"{actor.role.value} cannot {verb}")

    if actor.role == Role.MANAGER and not actor.same_department(target):
        raise ScopeViolation("Managers can only act on team members in their own department")


def permission_summary(actor_role: Any) -> dict:
    """What the given role may do, in the shape the dashboard expects."""
    role = normalize_role(actor_role)
    return {
        "currentRole": role.value if role else None,
        "canPromoteInternToEmployee": can_promote(role, Role.INTERN, Role.EMPLOYEE),
        "canPromoteEmployeeToManager": can_promote(role, Role.EMPLOYEE, Role.MANAGER),
        "canPromoteManagerToAdmin": can_promote(role, Role.MANAGER, Role.ADMIN),
        "canPromoteAdminToSuperAdmin": can_promote(role, Role.ADMIN, Role.SUPER_ADMIN),
        "canTransferSuperAdmin": can_perform_action(role, Role.ADMIN, RoleAction.TRANSFER_SUPER_ADMIN),
        "canChangeRoles": role in ROLE_CHANGING_ROLES,
        "canAssignProjects": can_delegate(role, RoleAction.ASSIGN_PROJECT),
        "canAssignTasks": can_delegate(role, RoleAction.ASSIGN_TASK),
        "canManageTeams": can_delegate(role, RoleAction.MANAGE_TEAM),
    }


def _label(role: Any) -> str:
    normalized = normalize_role(role)
    return normalized.value if normalized else str(role)
