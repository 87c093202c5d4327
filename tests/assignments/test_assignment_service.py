from __future__ import annotations

import pytest

from src.employee_system.employee_system.core.enums import ErrorKind, NotificationType
from src.employee_system.employee_system.core.exceptions import (
    AuthorizationError,
    NotFoundError,
    ScopeViolation,
    ValidationError,
)


def test_manager_assigns_task_in_own_department(assignment_service, assignments_repo, notifications_repo, staff):
    message = assignment_service.assign_task(actor=staff["manager"], target=staff["employee"], task_id="1")

    assert message == "Task assigned successfully"
    assert assignments_repo.tasks[1].assignee_id == 4
    sent = notifications_repo.for_recipient(4)
    assert len(sent) == 1
    assert sent[0].type == NotificationType.TASK_ASSIGNED
    assert sent[0].metadata["taskId"] == 1


def test_manager_cannot_reach_other_departments(assignment_service, assignments_repo, staff):
    with pytest.raises(ScopeViolation):
        assignment_service.assign_task(actor=staff["manager"], target=staff["outsider"], task_id=1)
    assert assignments_repo.tasks[1].assignee_id is None


def test_admin_is_not_department_scoped(assignment_service, assignments_repo, staff):
    assignment_service.assign_project(actor=staff["admin"], target=staff["outsider"], project_id=1)
    assert (1, 6) in assignments_repo.project_members


def test_employee_cannot_assign(assignment_service, staff):
    with pytest.raises(AuthorizationError) as exc:
        assignment_service.assign_project(actor=staff["employee"], target=staff["intern"], project_id=1)
    assert exc.value.kind == ErrorKind.INSUFFICIENT_PERMISSIONS


def test_existing_member_is_not_notified_twice(assignment_service, notifications_repo, staff):
    assignment_service.assign_project(actor=staff["admin"], target=staff["intern"], project_id=1)
    message = assignment_service.assign_project(actor=staff["admin"], target=staff["intern"], project_id=1)

    assert "already a member" in message
    assert len(notifications_repo.for_recipient(5)) == 1


@pytest.mark.parametrize("project_id", [None, "abc", 0, -3, True, 1.5])
def test_project_id_must_be_positive(assignment_service, staff, project_id):
    with pytest.raises(ValidationError):
        assignment_service.assign_project(actor=staff["admin"], target=staff["intern"], project_id=project_id)


def test_missing_records(assignment_service, staff):
    with pytest.raises(NotFoundError):
        assignment_service.assign_project(actor=staff["admin"], target=staff["intern"], project_id=42)
    with pytest.raises(NotFoundError):
        assignment_service.assign_task(actor=staff["admin"], target=staff["intern"], task_id=42)
    with pytest.raises(NotFoundError):
        assignment_service.manage_team(actor=staff["admin"], target=staff["intern"], team_id=42, operation="add_to_team")


def test_manage_team_add_then_remove(assignment_service, assignments_repo, notifications_repo, staff):
    added = assignment_service.manage_team(
        actor=staff["manager"], target=staff["intern"], team_id=1, operation="add_to_team"
    )
    removed = assignment_service.manage_team(
        actor=staff["manager"], target=staff["intern"], team_id=1, operation="REMOVE_FROM_TEAM"
    )

    assert added == "User added to team successfully"
    assert removed == "User removed from team successfully"
    assert assignments_repo.team_members == set()
    ops = [e.metadata["operation"] for e in notifications_repo.for_recipient(5)]
    assert ops == ["add_to_team", "remove_from_team"]


def test_removing_non_member_fails(assignment_service, staff):
    with pytest.raises(NotFoundError, match="not a member"):
        assignment_service.manage_team(
            actor=staff["admin"], target=staff["intern"], team_id=1, operation="remove_from_team"
        )


def test_unknown_team_operation(assignment_service, staff):
    with pytest.raises(ValidationError):
        assignment_service.manage_team(actor=staff["admin"], target=staff["intern"], team_id=1, operation="promote")
