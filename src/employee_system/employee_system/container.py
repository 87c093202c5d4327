from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .assignments.mysql_assignment_repository import MySQLAssignmentRepository
from .assignments.service import AssignmentService
from .audit.mysql_audit_repository import MySQLAuditLog
from .database.connection import DBConfig, DatabaseConnection
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.service import NotificationService
from .roles.actions import RoleActionService
from .roles.service import RoleService
from .users.mysql_employee_repository import MySQLEmployeeRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    audit_log: MySQLAuditLog
    notifications_repo: MySQLNotificationRepository
    assignments_repo: MySQLAssignmentRepository

    notification_service: NotificationService
    role_service: RoleService
    assignment_service: AssignmentService
    role_action_service: RoleActionService


def build_container(*, db_config: Mapping) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    employees_repo = MySQLEmployeeRepository(conn)
    audit_log = MySQLAuditLog(conn)
    notifications_repo = MySQLNotificationRepository(conn)
    assignments_repo = MySQLAssignmentRepository(conn)

    notification_service = NotificationService(notifications_repo)
    role_service = RoleService(employees_repo, audit_log, notification_service)
    assignment_service = AssignmentService(assignments_repo, notification_service)
    role_action_service = RoleActionService(employees_repo, role_service, assignment_service)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        audit_log=audit_log,
        notifications_repo=notifications_repo,
        assignments_repo=assignments_repo,
        notification_service=notification_service,
        role_service=role_service,
        assignment_service=assignment_service,
        role_action_service=role_action_service,
    )
