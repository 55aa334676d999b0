"""Worker profile and notification inbox services."""

from .notification_service import WorkerNotificationService
from .worker_service import DEFAULT_LOCATION, WorkerService

__all__ = ["WorkerService", "WorkerNotificationService", "DEFAULT_LOCATION"]
