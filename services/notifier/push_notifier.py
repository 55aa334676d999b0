"""
Web Push Notification Service

Delivers push notifications to browser subscriptions using VAPID.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pywebpush import WebPushException, webpush

from .base_notifier import BaseNotifier

logger = logging.getLogger(__name__)


class WebPushNotifier(BaseNotifier):
    """
    Web Push notifier.

    VAPID credentials are passed in at construction; there is no process-wide
    configuration. Without both keys the notifier stays disabled and every
    send returns False.
    """

    def __init__(
        self,
        vapid_private_key: str | None,
        vapid_public_key: str | None,
        claim_email: str = "mailto:admin@example.com",
        ttl: int = 60 * 60,
    ):
        """
        Initialize the Web Push notifier.

        Args:
            vapid_private_key: VAPID private key (base64url or PEM path)
            vapid_public_key: VAPID public key, handed to clients when subscribing
            claim_email: "mailto:" contact for the VAPID `sub` claim
            ttl: Seconds the push service should keep an undelivered message
        """
        self.vapid_private_key = vapid_private_key
        self.vapid_public_key = vapid_public_key
        self.claim_email = claim_email if claim_email.startswith("mailto:") else f"mailto:{claim_email}"
        self.ttl = ttl

        if not self.enabled:
            logger.warning("VAPID keys not configured - push notifications will be disabled")

    @property
    def enabled(self) -> bool:
        return bool(self.vapid_private_key and self.vapid_public_key)

    def send_notification(self, subscription: dict[str, Any], payload: dict[str, Any]) -> bool:
        """
        Send one push message.

        Args:
            subscription: Browser PushSubscription JSON (endpoint + keys)
            payload: Notification payload, serialized to JSON

        Returns:
            True if the push service accepted the message, False otherwise
        """
        if not self.enabled:
            logger.warning("Cannot send push notification - VAPID not configured")
            return False

        if not subscription or not subscription.get("endpoint"):
            logger.warning("Push subscription has no endpoint")
            return False

        try:
            webpush(
                subscription_info=subscription,
                data=json.dumps(payload),
                vapid_private_key=self.vapid_private_key,
                vapid_claims={"sub": self.claim_email},
                ttl=self.ttl,
            )
            logger.info(f"Push notification sent to {subscription['endpoint'][:60]}")
            return True

        except WebPushException as e:
            status = e.response.status_code if e.response is not None else None
            logger.error(f"Push service rejected notification (status={status}): {e}")
            return False
        except Exception as e:
            logger.error(f"Failed to send push notification: {e}", exc_info=True)
            return False
