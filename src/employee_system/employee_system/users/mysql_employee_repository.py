from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ..core.constants import MIN_SUPER_ADMINS_FOR_DEMOTION
from ..core.enums import Role
from ..core.exceptions import CannotDemoteLastSuperAdmin
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, placeholders
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

_COLUMNS = "employee_id, full_name, email, role, dept_id, is_active"


def _to_employee(row: dict) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        full_name=row["full_name"],
        email=row["email"],
        role=Role(row["role"]),
        dept_id=row.get("dept_id"),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (employee_id,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY created_at ASC, employee_id ASC")
            return [_to_employee(r) for r in fetchall(cur)]

    def list_by_roles(self, roles: Iterable[Role]) -> Sequence[Employee]:
        values = [r.value for r in roles]
        if not values:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM employees WHERE is_active=1 AND role IN ({placeholders(values)})",
                tuple(values),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def count_by_role(self, role: Role) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM employees WHERE role=%s AND is_active=1", (role.value,))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def update_role(self, employee_id: int, *, expected_role: Role, new_role: Role) -> bool:
        with db_cursor(self._conn_factory, isolation_level="SERIALIZABLE") as (_, cur):
            if expected_role == Role.SUPER_ADMIN and new_role != Role.SUPER_ADMIN:
                # Lock every holder row so concurrent demotions serialize on this check.
                cur.execute(
                    "SELECT employee_id FROM employees WHERE role=%s AND is_active=1 FOR UPDATE",
                    (Role.SUPER_ADMIN.value,),
                )
                holders = fetchall(cur)
                if len(holders) < MIN_SUPER_ADMINS_FOR_DEMOTION:
                    raise CannotDemoteLastSuperAdmin(
                        "Cannot demote the last Super Administrator. Promote another user to Super Admin first."
                    )

            cur.execute(
                "UPDATE employees SET role=%s WHERE employee_id=%s AND role=%s",
                (new_role.value, employee_id, expected_role.value),
            )
            return cur.rowcount > 0

    def transfer_super_admin(self, *, from_employee_id: int, to_employee_id: int) -> bool:
        try:
            with db_cursor(self._conn_factory, isolation_level="SERIALIZABLE") as (_, cur):
                cur.execute(
                    "UPDATE employees SET role=%s WHERE employee_id=%s AND role=%s",
                    (Role.ADMIN.value, from_employee_id, Role.SUPER_ADMIN.value),
                )
                if cur.rowcount != 1:
                    raise _TransferAborted()
                cur.execute(
                    "UPDATE employees SET role=%s WHERE employee_id=%s AND role=%s",
                    (Role.SUPER_ADMIN.value, to_employee_id, Role.ADMIN.value),
                )
                if cur.rowcount != 1:
                    raise _TransferAborted()
        except _TransferAborted:
            logger.warning(
                "Super admin transfer %s -> %s rolled back: roles changed concurrently",
                from_employee_id,
                to_employee_id,
            )
            return False
        return True


class _TransferAborted(Exception):
    """Internal signal used to roll back the transfer transaction."""
