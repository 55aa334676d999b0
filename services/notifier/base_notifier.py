"""
Base Notification Service

Abstract base class for push transports used by the notification dispatcher.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

logger = logging.getLogger(__name__)


class BaseNotifier(ABC):
    """
    Abstract base class for push notification transports.

    Subclasses implement send_notification() to handle the actual delivery
    (Web Push, a test double, ...). Delivery is at-most-once; nothing here
    retries.
    """

    @property
    def enabled(self) -> bool:
        """Whether the transport is configured to deliver anything."""
        return True

    @abstractmethod
    def send_notification(self, subscription: dict[str, Any], payload: dict[str, Any]) -> bool:
        """
        Send a push notification to one subscription.

        Args:
            subscription: Opaque subscription info registered by the worker's client
            payload: JSON-serializable notification payload

        Returns:
            True if the transport accepted the notification, False otherwise
        """

    def build_new_job_payload(self, job: dict[str, Any]) -> dict[str, Any]:
        """
        Format the push payload announcing a new job.

        Args:
            job: Job dictionary (title, address, job_id)

        Returns:
            Payload dictionary with title, body, icon and data
        """
        return {
            "title": "New Job Available!",
            "body": f"{job.get('title', 'New job')} in {job.get('address', 'your area')}",
            "icon": "/logo.png",
            "data": {"jobId": str(job.get("job_id"))},
        }

    def send_new_job_notification(self, worker: dict[str, Any], job: dict[str, Any]) -> bool:
        """
        Push a new-job alert to a worker.

        Args:
            worker: Worker profile dictionary with push_subscription
            job: Newly created job

        Returns:
            True if delivered, False if the worker has no subscription or delivery failed
        """
        subscription = worker.get("push_subscription")
        if not subscription:
            logger.debug(f"No push subscription for worker {worker.get('worker_id')}")
            return False

        return self.send_notification(subscription, self.build_new_job_payload(job))
