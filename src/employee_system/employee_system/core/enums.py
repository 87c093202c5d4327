from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Canonical role ladder, declared from least to most privileged."""

    INTERN = "INTERN"
    EMPLOYEE = "EMPLOYEE"
    MANAGER = "MANAGER"
    ADMIN = "ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"


class RoleAction(str, Enum):
    """Actions an actor can request against a target employee."""

    PROMOTE = "promote"
    DEMOTE = "demote"
    TRANSFER_SUPER_ADMIN = "transfer_super_admin"
    CHANGE_ROLE = "change_role"
    ASSIGN_PROJECT = "assign_project"
    ASSIGN_TASK = "assign_task"
    MANAGE_TEAM = "manage_team"


class TeamOperation(str, Enum):
    ADD_TO_TEAM = "add_to_team"
    REMOVE_FROM_TEAM = "remove_from_team"


class NotificationType(str, Enum):
    PROMOTION = "PROMOTION"
    DEMOTION = "DEMOTION"
    ROLE_CHANGE = "ROLE_CHANGE"
    SYSTEM = "SYSTEM"
    PROJECT_ASSIGNMENT = "PROJECT_ASSIGNMENT"
    TASK_ASSIGNED = "TASK_ASSIGNED"
    TEAM_UPDATE = "TEAM_UPDATE"


class ErrorKind(str, Enum):
    """Typed failure reasons returned to callers of the role engine."""

    UNAUTHENTICATED = "Unauthenticated"
    ACTOR_NOT_FOUND = "ActorNotFound"
    TARGET_NOT_FOUND = "TargetNotFound"
    NOT_FOUND = "NotFound"
    INSUFFICIENT_PERMISSIONS = "InsufficientPermissions"
    INVALID_TRANSITION = "InvalidTransition"
    CANNOT_PROMOTE_FURTHER = "CannotPromoteFurther"
    CANNOT_DEMOTE_FURTHER = "CannotDemoteFurther"
    CANNOT_DEMOTE_LAST_SUPER_ADMIN = "CannotDemoteLastSuperAdmin"
    SCOPE_VIOLATION = "ScopeViolation"
    VALIDATION = "ValidationError"
    EXTERNAL_COLLABORATOR_FAILURE = "ExternalCollaboratorFailure"
