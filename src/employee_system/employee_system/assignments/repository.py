from __future__ import annotations

from typing import Optional, Protocol

from .model import Project, Task, Team


class AssignmentRepository(Protocol):
    """Projects, tasks and teams that delegated actions write to."""

    def get_project(self, project_id: int) -> Optional[Project]:
        raise NotImplementedError

    def add_project_member(self, *, project_id: int, employee_id: int) -> bool:
        """Returns False when the employee already was a member."""
        raise NotImplementedError

    def get_task(self, task_id: int) -> Optional[Task]:
        raise NotImplementedError

    def assign_task(self, *, task_id: int, employee_id: int) -> bool:
        raise NotImplementedError

    def get_team(self, team_id: int) -> Optional[Team]:
        raise NotImplementedError

    def add_team_member(self, *, team_id: int, employee_id: int) -> bool:
        raise NotImplementedError

    def remove_team_member(self, *, team_id: int, employee_id: int) -> bool:
        raise NotImplementedError
