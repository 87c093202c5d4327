from __future__ import annotations

import logging

from ..common.validators import require_positive_id
from ..core.enums import NotificationType, RoleAction, TeamOperation
from ..core.exceptions import NotFoundError, ValidationError
from ..notifications.model import NotificationEvent
from ..notifications.service import NotificationService
from ..roles.permissions import authorize_delegated_action
from ..users.model import Employee
from .repository import AssignmentRepository

logger = logging.getLogger(__name__)


class AssignmentService:
    """Use case: delegated actions (assign project/task, manage team).

    Only SUPER_ADMIN, ADMIN and MANAGER may delegate; managers stay inside their
    own department.
    """

    def __init__(self, assignments: AssignmentRepository, notifications: NotificationService):
        self._assignments = assignments
        self._notifications = notifications

    def assign_project(self, *, actor: Employee, target: Employee, project_id) -> str:
        authorize_delegated_action(actor, target, RoleAction.ASSIGN_PROJECT)
        project_id = require_positive_id(project_id, "projectId")

        project = self._assignments.get_project(project_id)
        if not project:
            raise NotFoundError("Project not found")

        added = self._assignments.add_project_member(project_id=project.project_id, employee_id=target.employee_id)
        if not added:
            return f"{target.full_name} is already a member of {project.name}"

        logger.info("Employee %s assigned to project %s by %s", target.employee_id, project_id, actor.employee_id)
        self._notify(
            target,
            f'You have been assigned to the project "{project.name}".',
            NotificationType.PROJECT_ASSIGNMENT,
            {"projectId": project.project_id, "assignedBy": actor.full_name},
        )
        return "Project assigned successfully"

    def assign_task(self, *, actor: Employee, target: Employee, task_id) -> str:
        authorize_delegated_action(actor, target, RoleAction.ASSIGN_TASK)
        task_id = require_positive_id(task_id, "taskId")

        task = self._assignments.get_task(task_id)
        if not task:
            raise NotFoundError("Task not found")

        self._assignments.assign_task(task_id=task.task_id, employee_id=target.employee_id)
        logger.info("Task %s assigned to employee %s by %s", task_id, target.employee_id, actor.employee_id)
        self._notify(
            target,
            f'You have been assigned a new task: "{task.title}".',
            NotificationType.TASK_ASSIGNED,
            {"taskId": task.task_id, "assignedBy": actor.full_name},
        )
        return "Task assigned successfully"

    def manage_team(self, *, actor: Employee, target: Employee, team_id, operation) -> str:
        authorize_delegated_action(actor, target, RoleAction.MANAGE_TEAM)
        team_id = require_positive_id(team_id, "teamId")
        raw = operation.value if isinstance(operation, TeamOperation) else str(operation or "")
        try:
            op = TeamOperation(raw.strip().lower())
        except ValueError:
            raise ValidationError("Invalid team operation")

        team = self._assignments.get_team(team_id)
        if not team:
            raise NotFoundError("Team not found")

        if op == TeamOperation.ADD_TO_TEAM:
            self._assignments.add_team_member(team_id=team.team_id, employee_id=target.employee_id)
            message = f'You have been added to the team "{team.name}".'
            result = "User added to team successfully"
        else:
            if not self._assignments.remove_team_member(team_id=team.team_id, employee_id=target.employee_id):
                raise NotFoundError(f"{target.full_name} is not a member of {team.name}")
            message = f'You have been removed from the team "{team.name}".'
            result = "User removed from team successfully"

        logger.info("Team %s: %s employee %s by %s", team_id, op.value, target.employee_id, actor.employee_id)
        self._notify(
            target, message, NotificationType.TEAM_UPDATE, {"teamId": team.team_id, "operation": op.value}
        )
        return result

    def _notify(self, target: Employee, message: str, kind: NotificationType, metadata: dict) -> None:
        self._notifications.dispatch(
            [NotificationEvent(recipient_id=target.employee_id, message=message, type=kind, metadata=metadata)]
        )
