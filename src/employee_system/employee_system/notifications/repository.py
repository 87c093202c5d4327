from __future__ import annotations

from typing import Protocol, Sequence

from .model import Notification, NotificationEvent


class NotificationRepository(Protocol):
    def create_many(self, events: Sequence[NotificationEvent]) -> int:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int, *, unread_only: bool = False, limit: int = 50) -> Sequence[Notification]:
        raise NotImplementedError

    def mark_read(self, notification_id: int, *, employee_id: int) -> bool:
        raise NotImplementedError
