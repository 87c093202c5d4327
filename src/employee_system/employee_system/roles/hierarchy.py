"""Role ladder and transition resolver.

The ladder is the single source of ordering for roles. Every lookup here is a
pure function of its input; unrecognized roles fail closed (resolve to None).
"""
from __future__ import annotations

import re
from typing import Any, Optional

from ..core.enums import Role
from ..core.exceptions import ValidationError

ROLE_LADDER: tuple[Role, ...] = (
    Role.INTERN,
    Role.EMPLOYEE,
    Role.MANAGER,
    Role.ADMIN,
    Role.SUPER_ADMIN,
)

_RANKS = {role: index for index, role in enumerate(ROLE_LADDER)}

# Legacy spellings still found in identity-provider metadata and old records.
_ALIASES = {
    "ADMINISTRATOR": Role.ADMIN,
    "SUPER_ADMINISTRATOR": Role.SUPER_ADMIN,
    "SUPERADMIN": Role.SUPER_ADMIN,
    "STAFF": Role.EMPLOYEE,
}


def normalize_role(value: Any) -> Optional[Role]:
    """Map any accepted spelling of a role onto the canonical `Role`.

    'Admin', 'admin', 'Administrator' -> ADMIN; 'super_admin', 'Super Administrator',
    'super-admin' -> SUPER_ADMIN. Returns None for anything unrecognized.
    """
    if isinstance(value, Role):
        return value
    if not isinstance(value, str):
        return None

    key = re.sub(r"[\s\-]+", "_", value.strip()).upper()
    if not key:
        return None
    try:
        return Role(key)
    except ValueError:
        return _ALIASES.get(key)


def parse_role(value: Any, field_name: str = "role") -> Role:
    role = normalize_role(value)
    if role is None:
        raise ValidationError(f"Unknown {field_name}: {value!r}")
    return role


def rank(role: Any) -> int:
    """Position of the role on the ladder (INTERN=0 ... SUPER_ADMIN=4), -1 if unknown."""
    normalized = normalize_role(role)
    if normalized is None:
        return -1
    return _RANKS[normalized]


def next_role(role: Any) -> Optional[Role]:
    """Role one rank above, or None when already at the top or unrecognized."""
    current = rank(role)
    if current < 0 or current == len(ROLE_LADDER) - 1:
        return None
    return ROLE_LADDER[current + 1]


def previous_role(role: Any) -> Optional[Role]:
    """Role one rank below, or None.

    SUPER_ADMIN also resolves to None: it leaves the role only through a transfer
    or a direct role change, never by an ordinary demotion.
    """
    current = rank(role)
    if current <= 0 or ROLE_LADDER[current] == Role.SUPER_ADMIN:
        return None
    return ROLE_LADDER[current - 1]
