"""
Notification Service

New-job fan-out to matching workers, with inbox records stored in the
database and best-effort push delivery through an injected transport.
"""

from .base_notifier import BaseNotifier
from .notification_dispatcher import DispatchResult, NotificationDispatcher, WorkerDispatchOutcome
from .push_notifier import WebPushNotifier
from .records import NotificationRecord, NotificationType, new_job_record

__all__ = [
    "BaseNotifier",
    "WebPushNotifier",
    "NotificationDispatcher",
    "DispatchResult",
    "WorkerDispatchOutcome",
    "NotificationRecord",
    "NotificationType",
    "new_job_record",
]
