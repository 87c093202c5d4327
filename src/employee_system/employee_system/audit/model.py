from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..core.enums import Role


@dataclass(frozen=True)
class AuditEvent:
    """One record per successful role change. Created, never mutated."""

    actor_id: int
    actor_role: Role
    action: str
    target_id: int
    previous_role: Optional[Role]
    new_role: Optional[Role]
    reason: Optional[str]
    timestamp: datetime
    details: dict[str, Any] = field(default_factory=dict)
