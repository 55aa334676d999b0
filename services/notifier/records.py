"""Notification records appended to a worker's inbox."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class NotificationType(str, Enum):
    NEW_JOB = "new_job"
    JOB_UPDATE = "job_update"
    PAYMENT = "payment"
    MESSAGE = "message"


@dataclass
class NotificationRecord:
    """One inbox entry, owned by exactly one worker profile."""

    worker_id: int
    type: NotificationType
    message: str
    job_id: int | None = None
    is_read: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    notification_id: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "notification_id": self.notification_id,
            "worker_id": self.worker_id,
            "type": self.type.value,
            "message": self.message,
            "job_id": self.job_id,
            "is_read": self.is_read,
            "created_at": self.created_at,
        }


def new_job_record(
    worker_id: int, job: dict[str, Any], now: datetime | None = None
) -> NotificationRecord:
    """Build the unread new_job entry for a freshly posted job."""
    return NotificationRecord(
        worker_id=worker_id,
        type=NotificationType.NEW_JOB,
        message=f"New job available: {job.get('title')}",
        job_id=job.get("job_id"),
        is_read=False,
        created_at=now or datetime.now(UTC),
    )
