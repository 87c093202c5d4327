from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Project, Task, Team
from .repository import AssignmentRepository


class MySQLAssignmentRepository(AssignmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_project(self, project_id: int) -> Optional[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT project_id, name, dept_id FROM projects WHERE project_id=%s", (project_id,))
            row = fetchone(cur)
            if not row:
                return None
            return Project(project_id=int(row["project_id"]), name=row["name"], dept_id=row.get("dept_id"))

    def add_project_member(self, *, project_id: int, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT IGNORE INTO project_members(project_id, employee_id, member_role) VALUES(%s,%s,'MEMBER')",
                (project_id, employee_id),
            )
            return cur.rowcount > 0

    def get_task(self, task_id: int) -> Optional[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT task_id, title, project_id, assignee_id FROM tasks WHERE task_id=%s", (task_id,))
            row = fetchone(cur)
            if not row:
                return None
            return Task(
                task_id=int(row["task_id"]),
                title=row["title"],
                project_id=row.get("project_id"),
                assignee_id=row.get("assignee_id"),
            )

    def assign_task(self, *, task_id: int, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE tasks SET assignee_id=%s WHERE task_id=%s", (employee_id, task_id))
            return cur.rowcount > 0

    def get_team(self, team_id: int) -> Optional[Team]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT team_id, name, dept_id FROM teams WHERE team_id=%s", (team_id,))
            row = fetchone(cur)
            if not row:
                return None
            return Team(team_id=int(row["team_id"]), name=row["name"], dept_id=row.get("dept_id"))

    def add_team_member(self, *, team_id: int, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT IGNORE INTO team_members(team_id, employee_id, member_role) VALUES(%s,%s,'MEMBER')",
                (team_id, employee_id),
            )
            return cur.rowcount > 0

    def remove_team_member(self, *, team_id: int, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM team_members WHERE team_id=%s AND employee_id=%s", (team_id, employee_id))
            return cur.rowcount > 0
