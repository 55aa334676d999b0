"""Service for a worker's notification inbox."""

import logging
from typing import Any

from notifier.queries import (
    COUNT_UNREAD_NOTIFICATIONS,
    GET_NOTIFICATIONS_FOR_WORKER,
    MARK_NOTIFICATION_READ,
)
from shared.database import Database, rows_as_dicts
from shared.errors import NotFoundError, ValidationError

from .queries import GET_WORKER_ID_BY_USER_ID

logger = logging.getLogger(__name__)

_JOB_FIELDS = ("title", "description", "status", "deadline", "address")


def format_notification(row: dict[str, Any]) -> dict[str, Any]:
    """Shape a notification row, nesting the linked job summary if any."""
    job = None
    if row.get("job_id") is not None:
        job = {"job_id": row["job_id"], **{f: row.get(f"job_{f}") for f in _JOB_FIELDS}}

    return {
        "notification_id": row["notification_id"],
        "type": row["type"],
        "message": row["message"],
        "is_read": row["is_read"],
        "created_at": row["created_at"],
        "job": job,
    }


class WorkerNotificationService:
    """Service for listing notifications and tracking read state."""

    def __init__(self, database: Database):
        """Initialize the notification service.

        Args:
            database: Database connection interface
        """
        if not database:
            raise ValueError("Database is required")
        self.db = database

    def _worker_id(self, cur, user_id: int) -> int | None:
        cur.execute(GET_WORKER_ID_BY_USER_ID, (user_id,))
        row = cur.fetchone()
        return row[0] if row else None

    def list_notifications(self, user_id: int) -> dict[str, Any]:
        """Get a worker's notifications, newest first, with the unread count.

        Raises:
            NotFoundError: If the user has no worker profile
        """
        with self.db.get_cursor() as cur:
            worker_id = self._worker_id(cur, user_id)
            if worker_id is None:
                raise NotFoundError("Worker not found")

            cur.execute(GET_NOTIFICATIONS_FOR_WORKER, (worker_id,))
            rows = rows_as_dicts(cur)

        notifications = [format_notification(row) for row in rows]
        # Stored order is insertion order; consumers always get newest first
        notifications.sort(key=lambda n: n["created_at"], reverse=True)

        return {
            "notifications": notifications,
            "unread_count": sum(1 for n in notifications if not n["is_read"]),
        }

    def unread_count(self, user_id: int) -> int:
        """Unread notifications for a worker; 0 when there is no profile."""
        with self.db.get_cursor() as cur:
            worker_id = self._worker_id(cur, user_id)
            if worker_id is None:
                return 0
            cur.execute(COUNT_UNREAD_NOTIFICATIONS, (worker_id,))
            row = cur.fetchone()
        return int(row[0]) if row else 0

    def mark_as_read(self, user_id: int, notification_id: Any) -> None:
        """Mark one of the worker's notifications as read.

        Raises:
            ValidationError: If the notification ID is not an integer
            NotFoundError: If the worker or the notification does not exist
        """
        try:
            notification_id = int(notification_id)
        except (TypeError, ValueError):
            raise ValidationError("Invalid notification ID", field="notification_id") from None

        with self.db.get_cursor() as cur:
            worker_id = self._worker_id(cur, user_id)
            if worker_id is None:
                raise NotFoundError("Worker or notification not found")

            cur.execute(MARK_NOTIFICATION_READ, (notification_id, worker_id))
            updated = cur.fetchone()

        if not updated:
            raise NotFoundError("Worker or notification not found")
        logger.debug(f"Notification {notification_id} marked read for worker {worker_id}")
