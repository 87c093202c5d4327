from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ..core.constants import DEFAULT_NOTIFICATION_LIMIT, MAX_NOTIFICATION_LIMIT
from ..core.enums import NotificationType, Role
from ..core.exceptions import NotFoundError
from ..roles.hierarchy import rank
from ..users.model import Employee
from .model import Notification, NotificationEvent
from .repository import NotificationRepository

logger = logging.getLogger(__name__)

ADMIN_FANOUT_ROLES = (Role.ADMIN, Role.SUPER_ADMIN)


def _target_notification(
    actor: Employee, target: Employee, previous_role: Role, new_role: Role, reason: Optional[str], transfer: bool
) -> NotificationEvent:
    metadata = {
        "fromRole": previous_role.value,
        "toRole": new_role.value,
        "changedBy": actor.full_name,
        "reason": reason,
    }
    if transfer:
        message = f"You are now the Super Administrator. {actor.full_name} transferred the role to you."
        kind = NotificationType.ROLE_CHANGE
    elif rank(new_role) > rank(previous_role):
        message = (
            f"Congratulations! You've been promoted from {previous_role.value} to {new_role.value} "
            f"by {actor.full_name}. {reason or 'Keep up the excellent work!'}"
        )
        kind = NotificationType.PROMOTION
    else:
        message = f"Your role was changed from {previous_role.value} to {new_role.value} by {actor.full_name}."
        if reason:
            message += f" Reason: {reason}"
        kind = NotificationType.DEMOTION
    return NotificationEvent(recipient_id=target.employee_id, message=message, type=kind, metadata=metadata)


class NotificationService:
    """Builds notification fan-out and hands it to the messaging collaborator."""

    def __init__(self, notifications: NotificationRepository):
        self._notifications = notifications

    @staticmethod
    def build_role_change_events(
        *,
        actor: Employee,
        target: Employee,
        previous_role: Role,
        new_role: Role,
        reason: Optional[str] = None,
        admins: Iterable[Employee] = (),
        transfer: bool = False,
    ) -> list[NotificationEvent]:
        # The target always gets exactly one event; the actor confirmation and the
        # admin fan-out below are addressed to other recipients.
        events = [_target_notification(actor, target, previous_role, new_role, reason, transfer)]

        if actor.employee_id != target.employee_id:
            events.append(
                NotificationEvent(
                    recipient_id=actor.employee_id,
                    message=(
                        f"Role change completed: {target.full_name} moved from "
                        f"{previous_role.value} to {new_role.value}."
                    ),
                    type=NotificationType.SYSTEM,
                    metadata={
                        "employee": target.full_name,
                        "fromRole": previous_role.value,
                        "toRole": new_role.value,
                    },
                )
            )

        if new_role in ADMIN_FANOUT_ROLES:
            skip = {actor.employee_id, target.employee_id}
            for admin in admins:
                if admin.employee_id in skip or admin.role not in ADMIN_FANOUT_ROLES:
                    continue
                skip.add(admin.employee_id)
                events.append(
                    NotificationEvent(
                        recipient_id=admin.employee_id,
                        message=(
                            f"New Admin Promotion: {target.full_name} is now {new_role.value} "
                            f"(changed by {actor.full_name})."
                        ),
                        type=NotificationType.SYSTEM,
                        metadata={
                            "employee": target.full_name,
                            "changedBy": actor.full_name,
                            "newRole": new_role.value,
                        },
                    )
                )
        return events

    def dispatch(self, events: Sequence[NotificationEvent]) -> bool:
        """Best-effort hand-off. Never raises; returns False if delivery failed."""
        if not events:
            return True
        try:
            self._notifications.create_many(list(events))
        except Exception:
            logger.warning("Failed to store %d notification(s)", len(events), exc_info=True)
            return False
        return True

    def list_for_employee(
        self, employee_id: int, *, unread_only: bool = False, limit: int = DEFAULT_NOTIFICATION_LIMIT
    ) -> Sequence[Notification]:
        limit = max(1, min(int(limit), MAX_NOTIFICATION_LIMIT))
        return self._notifications.list_for_employee(int(employee_id), unread_only=unread_only, limit=limit)

    def mark_read(self, *, employee_id: int, notification_id: int) -> None:
        if not self._notifications.mark_read(int(notification_id), employee_id=int(employee_id)):
            raise NotFoundError("Notification not found")
