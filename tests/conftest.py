from __future__ import annotations

from datetime import datetime
from typing import Optional

import mysql.connector
import pytest

from src.employee_system.employee_system.assignments.model import Project, Task, Team
from src.employee_system.employee_system.assignments.service import AssignmentService
from src.employee_system.employee_system.core.enums import Role
from src.employee_system.employee_system.core.exceptions import CannotDemoteLastSuperAdmin
from src.employee_system.employee_system.notifications.model import Notification
from src.employee_system.employee_system.notifications.service import NotificationService
from src.employee_system.employee_system.roles.actions import RoleActionService
from src.employee_system.employee_system.roles.service import RoleService
from src.employee_system.employee_system.users.model import Employee


class InMemoryEmployees:
    def __init__(self, employees=()):
        self._rows: dict[int, Employee] = {e.employee_id: e for e in employees}
        self.fail_transfer = False
        self.fail_updates_with: Optional[Exception] = None

    def add(self, employee: Employee) -> Employee:
        self._rows[employee.employee_id] = employee
        return employee

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._rows.get(int(employee_id))

    def list_all(self):
        return [self._rows[k] for k in sorted(self._rows)]

    def list_by_roles(self, roles):
        wanted = set(roles)
        return [e for e in self.list_all() if e.role in wanted and e.is_active]

    def count_by_role(self, role: Role) -> int:
        return sum(1 for e in self._rows.values() if e.role == role and e.is_active)

    def update_role(self, employee_id: int, *, expected_role: Role, new_role: Role) -> bool:
        if self.fail_updates_with is not None:
            raise self.fail_updates_with
        current = self._rows.get(int(employee_id))
        if not current or current.role != expected_role:
            return False
        if expected_role == Role.SUPER_ADMIN and new_role != Role.SUPER_ADMIN:
            if self.count_by_role(Role.SUPER_ADMIN) < 2:
                raise CannotDemoteLastSuperAdmin("last super admin")
        self._rows[current.employee_id] = current.with_role(new_role)
        return True

    def transfer_super_admin(self, *, from_employee_id: int, to_employee_id: int) -> bool:
        if self.fail_transfer:
            return False
        source = self._rows.get(from_employee_id)
        dest = self._rows.get(to_employee_id)
        if not source or not dest or source.role != Role.SUPER_ADMIN or dest.role != Role.ADMIN:
            return False
        self._rows[source.employee_id] = source.with_role(Role.ADMIN)
        self._rows[dest.employee_id] = dest.with_role(Role.SUPER_ADMIN)
        return True


class InMemoryAuditLog:
    def __init__(self):
        self.events = []
        self.fail = False

    def append(self, event) -> None:
        if self.fail:
            raise RuntimeError("audit store unavailable")
        self.events.append(event)


class InMemoryNotifications:
    def __init__(self):
        self.created = []
        self.read: set[int] = set()
        self.fail = False

    def create_many(self, events) -> int:
        if self.fail:
            raise RuntimeError("messaging unavailable")
        self.created.extend(events)
        return len(events)

    def for_recipient(self, employee_id: int):
        return [e for e in self.created if e.recipient_id == employee_id]

    def list_for_employee(self, employee_id: int, *, unread_only: bool = False, limit: int = 50):
        items = [
            Notification(
                notification_id=i,
                employee_id=e.recipient_id,
                message=e.message,
                type=e.type,
                metadata=dict(e.metadata),
                is_read=i in self.read,
                created_at=datetime(2026, 3, 2, 9, 0, 0),
            )
            for i, e in enumerate(self.created, start=1)
            if e.recipient_id == employee_id
        ]
        if unread_only:
            items = [n for n in items if not n.is_read]
        return list(reversed(items))[:limit]

    def mark_read(self, notification_id: int, *, employee_id: int) -> bool:
        if not 1 <= notification_id <= len(self.created):
            return False
        if self.created[notification_id - 1].recipient_id != employee_id:
            return False
        self.read.add(notification_id)
        return True


class InMemoryAssignments:
    def __init__(self):
        self.projects = {1: Project(project_id=1, name="Payroll Revamp", dept_id=1)}
        self.tasks = {1: Task(task_id=1, title="Draft API contract", project_id=1)}
        self.teams = {1: Team(team_id=1, name="Platform", dept_id=1)}
        self.project_members: set[tuple[int, int]] = set()
        self.team_members: set[tuple[int, int]] = set()

    def get_project(self, project_id: int):
        return self.projects.get(project_id)

    def add_project_member(self, *, project_id: int, employee_id: int) -> bool:
        if (project_id, employee_id) in self.project_members:
            return False
        self.project_members.add((project_id, employee_id))
        return True

    def get_task(self, task_id: int):
        return self.tasks.get(task_id)

    def assign_task(self, *, task_id: int, employee_id: int) -> bool:
        task = self.tasks[task_id]
        self.tasks[task_id] = Task(
            task_id=task.task_id, title=task.title, project_id=task.project_id, assignee_id=employee_id
        )
        return True

    def get_team(self, team_id: int):
        return self.teams.get(team_id)

    def add_team_member(self, *, team_id: int, employee_id: int) -> bool:
        self.team_members.add((team_id, employee_id))
        return True

    def remove_team_member(self, *, team_id: int, employee_id: int) -> bool:
        if (team_id, employee_id) not in self.team_members:
            return False
        self.team_members.discard((team_id, employee_id))
        return True


@pytest.fixture
def staff() -> dict[str, Employee]:
    return {
        "super": Employee(1, "Sara Super", "sara@corp.test", Role.SUPER_ADMIN, dept_id=1),
        "admin": Employee(2, "Adam Admin", "adam@corp.test", Role.ADMIN, dept_id=1),
        "manager": Employee(3, "Mina Manager", "mina@corp.test", Role.MANAGER, dept_id=1),
        "employee": Employee(4, "Eli Employee", "eli@corp.test", Role.EMPLOYEE, dept_id=1),
        "intern": Employee(5, "Ivy Intern", "ivy@corp.test", Role.INTERN, dept_id=1),
        "outsider": Employee(6, "Omar Outsider", "omar@corp.test", Role.INTERN, dept_id=2),
    }


@pytest.fixture
def employees(staff) -> InMemoryEmployees:
    return InMemoryEmployees(staff.values())


@pytest.fixture
def audit_log() -> InMemoryAuditLog:
    return InMemoryAuditLog()


@pytest.fixture
def notifications_repo() -> InMemoryNotifications:
    return InMemoryNotifications()


@pytest.fixture
def assignments_repo() -> InMemoryAssignments:
    return InMemoryAssignments()


@pytest.fixture
def notification_service(notifications_repo) -> NotificationService:
    return NotificationService(notifications_repo)


@pytest.fixture
def role_service(employees, audit_log, notification_service) -> RoleService:
    return RoleService(employees, audit_log, notification_service)


@pytest.fixture
def assignment_service(assignments_repo, notification_service) -> AssignmentService:
    return AssignmentService(assignments_repo, notification_service)


@pytest.fixture
def action_service(employees, role_service, assignment_service) -> RoleActionService:
    return RoleActionService(employees, role_service, assignment_service)


@pytest.fixture
def storage_error() -> mysql.connector.Error:
    return mysql.connector.Error("Lost connection to MySQL server during query")
