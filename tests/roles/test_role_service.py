from __future__ import annotations

import pytest

from src.employee_system.employee_system.core.constants import AUDIT_ACTION_ROLE_CHANGE, DEFAULT_ROLE_CHANGE_REASON
from src.employee_system.employee_system.core.enums import ErrorKind, NotificationType, Role
from src.employee_system.employee_system.core.exceptions import (
    AuthorizationError,
    CannotDemoteFurther,
    CannotDemoteLastSuperAdmin,
    CannotPromoteFurther,
    ExternalCollaboratorFailure,
    InvalidTransition,
)
from src.employee_system.employee_system.users.model import Employee


def test_admin_promotes_intern(role_service, employees, audit_log, notifications_repo, staff):
    updated = role_service.promote(actor=staff["admin"], target=staff["intern"])

    assert updated.role == Role.EMPLOYEE
    assert employees.get_by_id(5).role == Role.EMPLOYEE

    assert len(audit_log.events) == 1
    event = audit_log.events[0]
    assert event.action == AUDIT_ACTION_ROLE_CHANGE
    assert (event.actor_id, event.target_id) == (2, 5)
    assert (event.previous_role, event.new_role) == (Role.INTERN, Role.EMPLOYEE)
    assert event.reason == DEFAULT_ROLE_CHANGE_REASON
    assert event.details["operation"] == "promote"

    to_target = notifications_repo.for_recipient(5)
    assert len(to_target) == 1
    assert to_target[0].type == NotificationType.PROMOTION
    assert [e.type for e in notifications_repo.for_recipient(2)] == [NotificationType.SYSTEM]


def test_promote_then_demote_round_trip(role_service, employees, staff):
    promoted = role_service.promote(actor=staff["admin"], target=staff["intern"], reason="Great quarter")
    demoted = role_service.demote(actor=staff["admin"], target=promoted)

    assert demoted.role == Role.INTERN
    assert employees.get_by_id(5).role == Role.INTERN


def test_requested_role_must_be_next_rung(role_service, employees, audit_log, staff):
    with pytest.raises(InvalidTransition):
        role_service.promote(actor=staff["admin"], target=staff["intern"], new_role=Role.MANAGER)
    assert employees.get_by_id(5).role == Role.INTERN
    assert audit_log.events == []


def test_manager_limits(role_service, staff):
    assert role_service.promote(actor=staff["manager"], target=staff["intern"]).role == Role.EMPLOYEE
    with pytest.raises(AuthorizationError):
        role_service.promote(actor=staff["manager"], target=staff["employee"])


def test_ladder_ends(role_service, staff):
    with pytest.raises(CannotPromoteFurther):
        role_service.promote(actor=staff["super"], target=staff["super"])
    with pytest.raises(CannotDemoteFurther):
        role_service.demote(actor=staff["super"], target=staff["intern"])
    with pytest.raises(CannotDemoteFurther):
        role_service.demote(actor=staff["super"], target=staff["super"])


def test_last_super_admin_cannot_step_down(role_service, employees, audit_log, notifications_repo, staff):
    with pytest.raises(CannotDemoteLastSuperAdmin) as exc:
        role_service.change_role(actor=staff["super"], target=staff["super"], new_role=Role.ADMIN)

    assert exc.value.kind == ErrorKind.CANNOT_DEMOTE_LAST_SUPER_ADMIN
    assert employees.get_by_id(1).role == Role.SUPER_ADMIN
    assert audit_log.events == []
    assert notifications_repo.created == []


def test_super_admin_can_step_down_when_another_exists(role_service, employees, staff):
    second = employees.add(Employee(7, "Sam Second", "sam@corp.test", Role.SUPER_ADMIN, dept_id=1))

    updated = role_service.change_role(actor=staff["super"], target=second, new_role=Role.ADMIN)

    assert updated.role == Role.ADMIN
    assert employees.count_by_role(Role.SUPER_ADMIN) == 1


def test_transfer_super_admin(role_service, employees, audit_log, notifications_repo, staff):
    new_actor, new_target = role_service.transfer_super_admin(actor=staff["super"], target=staff["admin"])

    assert new_actor.role == Role.ADMIN
    assert new_target.role == Role.SUPER_ADMIN
    assert employees.get_by_id(1).role == Role.ADMIN
    assert employees.get_by_id(2).role == Role.SUPER_ADMIN
    assert employees.count_by_role(Role.SUPER_ADMIN) == 1

    assert len(audit_log.events) == 1
    details = audit_log.events[0].details
    assert details["operation"] == "transfer_super_admin"
    assert details["actorNewRole"] == "ADMIN"

    to_target = notifications_repo.for_recipient(2)
    assert [e.type for e in to_target] == [NotificationType.ROLE_CHANGE]


def test_failed_transfer_changes_nothing(role_service, employees, audit_log, notifications_repo, staff):
    employees.fail_transfer = True

    with pytest.raises(ExternalCollaboratorFailure):
        role_service.transfer_super_admin(actor=staff["super"], target=staff["admin"])

    assert employees.get_by_id(1).role == Role.SUPER_ADMIN
    assert employees.get_by_id(2).role == Role.ADMIN
    assert audit_log.events == []
    assert notifications_repo.created == []


def test_transfer_requires_admin_target(role_service, staff):
    with pytest.raises(AuthorizationError):
        role_service.transfer_super_admin(actor=staff["super"], target=staff["manager"])


def test_audit_failure_does_not_undo_role_change(role_service, employees, audit_log, notifications_repo, staff):
    audit_log.fail = True

    updated = role_service.promote(actor=staff["admin"], target=staff["intern"])

    assert updated.role == Role.EMPLOYEE
    assert employees.get_by_id(5).role == Role.EMPLOYEE
    assert len(notifications_repo.for_recipient(5)) == 1


def test_notification_failure_does_not_undo_role_change(role_service, employees, audit_log, notifications_repo, staff):
    notifications_repo.fail = True

    role_service.promote(actor=staff["admin"], target=staff["intern"])

    assert employees.get_by_id(5).role == Role.EMPLOYEE
    assert len(audit_log.events) == 1


def test_promotion_to_admin_notifies_other_admins(role_service, notifications_repo, staff):
    role_service.promote(actor=staff["super"], target=staff["manager"])

    assert [e.type for e in notifications_repo.for_recipient(3)] == [NotificationType.PROMOTION]
    assert [e.type for e in notifications_repo.for_recipient(1)] == [NotificationType.SYSTEM]
    fanout = notifications_repo.for_recipient(2)
    assert len(fanout) == 1
    assert "New Admin Promotion" in fanout[0].message
    assert len(notifications_repo.created) == 3


def test_stale_target_is_reported_as_collaborator_failure(role_service, employees, staff):
    employees.add(staff["intern"].with_role(Role.EMPLOYEE))

    with pytest.raises(ExternalCollaboratorFailure):
        role_service.promote(actor=staff["admin"], target=staff["intern"])
    assert employees.get_by_id(5).role == Role.EMPLOYEE
