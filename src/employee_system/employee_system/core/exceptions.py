from __future__ import annotations

from .enums import ErrorKind


class DomainError(Exception):
    """Base exception for business rule violations."""

    kind: ErrorKind = ErrorKind.VALIDATION


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = ErrorKind.VALIDATION


class AuthenticationError(DomainError):
    """Raised when no authenticated actor could be resolved."""

    kind = ErrorKind.UNAUTHENTICATED


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    kind = ErrorKind.INSUFFICIENT_PERMISSIONS


class ScopeViolation(AuthorizationError):
    """Raised when a manager acts on someone outside their department."""

    kind = ErrorKind.SCOPE_VIOLATION


class NotFoundError(DomainError):
    kind = ErrorKind.NOT_FOUND


class ActorNotFound(NotFoundError):
    kind = ErrorKind.ACTOR_NOT_FOUND


class TargetNotFound(NotFoundError):
    kind = ErrorKind.TARGET_NOT_FOUND


class InvalidTransition(DomainError):
    """Raised when the requested role is not the single legal next/previous role."""

    kind = ErrorKind.INVALID_TRANSITION


class CannotPromoteFurther(DomainError):
    kind = ErrorKind.CANNOT_PROMOTE_FURTHER


class CannotDemoteFurther(DomainError):
    kind = ErrorKind.CANNOT_DEMOTE_FURTHER


class CannotDemoteLastSuperAdmin(DomainError):
    kind = ErrorKind.CANNOT_DEMOTE_LAST_SUPER_ADMIN


class ExternalCollaboratorFailure(DomainError):
    """Raised when a core-state write to persistence failed."""

    kind = ErrorKind.EXTERNAL_COLLABORATOR_FAILURE


_BY_KIND = {
    ErrorKind.INSUFFICIENT_PERMISSIONS: AuthorizationError,
    ErrorKind.SCOPE_VIOLATION: ScopeViolation,
    ErrorKind.INVALID_TRANSITION: InvalidTransition,
    ErrorKind.CANNOT_PROMOTE_FURTHER: CannotPromoteFurther,
    ErrorKind.CANNOT_DEMOTE_FURTHER: CannotDemoteFurther,
    ErrorKind.CANNOT_DEMOTE_LAST_SUPER_ADMIN: CannotDemoteLastSuperAdmin,
}


def error_for_kind(kind: ErrorKind, message: str) -> DomainError:
    exc_type = _BY_KIND.get(kind, ValidationError)
    return exc_type(message)
