from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee acting as actor or target of a role action.

    Note: Plain data object, no DB access here.
    """

    employee_id: int
    full_name: str
    email: str
    role: Role
    dept_id: Optional[int]
    is_active: bool = True

    def with_role(self, role: Role) -> "Employee":
        return replace(self, role=role)

    def same_department(self, other: "Employee") -> bool:
        return self.dept_id is not None and self.dept_id == other.dept_id
