from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for employees and their roles.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def list_by_roles(self, roles: Iterable[Role]) -> Sequence[Employee]:
        raise NotImplementedError

    def count_by_role(self, role: Role) -> int:
        raise NotImplementedError

    def update_role(self, employee_id: int, *, expected_role: Role, new_role: Role) -> bool:
        """Set the role if it still equals `expected_role`.

        Implementations must refuse to move the last SUPER_ADMIN away from the role
        (raise CannotDemoteLastSuperAdmin) and do the check in the same transaction.
        Returns False when the row no longer matches.
        """
        raise NotImplementedError

    def transfer_super_admin(self, *, from_employee_id: int, to_employee_id: int) -> bool:
        """Swap SUPER_ADMIN -> ADMIN and ADMIN -> SUPER_ADMIN as one unit.

        Returns False (and applies nothing) if either row no longer matches.
        """
        raise NotImplementedError
