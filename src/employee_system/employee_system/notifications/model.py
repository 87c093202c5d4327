from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..core.enums import NotificationType


@dataclass(frozen=True)
class NotificationEvent:
    """A message handed to the messaging collaborator for one recipient."""

    recipient_id: int
    message: str
    type: NotificationType
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Notification:
    """A stored notification as read back by the polling endpoint."""

    notification_id: int
    employee_id: int
    message: str
    type: NotificationType
    metadata: dict[str, Any]
    is_read: bool
    created_at: Optional[datetime] = None
