from __future__ import annotations

from typing import Protocol

from .model import AuditEvent


class AuditLog(Protocol):
    """Append-only audit log collaborator."""

    def append(self, event: AuditEvent) -> None:
        raise NotImplementedError
