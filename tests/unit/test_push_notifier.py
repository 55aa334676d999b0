"""Unit tests for the Web Push notifier."""

import json
from unittest.mock import Mock, patch

import pytest
from pywebpush import WebPushException

from notifier import WebPushNotifier

SUBSCRIPTION = {
    "endpoint": "https://push.example.com/sub/abc",
    "keys": {"p256dh": "key", "auth": "secret"},
}


@pytest.fixture
def notifier():
    return WebPushNotifier(
        vapid_private_key="private-key", vapid_public_key="public-key", claim_email="ops@example.com"
    )


class TestWebPushNotifier:
    """Test cases for WebPushNotifier."""

    def test_disabled_without_keys(self):
        notifier = WebPushNotifier(vapid_private_key=None, vapid_public_key=None)

        assert notifier.enabled is False
        assert notifier.send_notification(SUBSCRIPTION, {"title": "x"}) is False

    def test_claim_email_gets_mailto_prefix(self, notifier):
        assert notifier.claim_email == "mailto:ops@example.com"

    @patch("notifier.push_notifier.webpush")
    def test_send_notification(self, mock_webpush, notifier):
        payload = {"title": "New Job Available!"}

        assert notifier.send_notification(SUBSCRIPTION, payload) is True

        kwargs = mock_webpush.call_args.kwargs
        assert kwargs["subscription_info"] == SUBSCRIPTION
        assert json.loads(kwargs["data"]) == payload
        assert kwargs["vapid_private_key"] == "private-key"
        assert kwargs["vapid_claims"] == {"sub": "mailto:ops@example.com"}

    @patch("notifier.push_notifier.webpush")
    def test_rejected_push_returns_false(self, mock_webpush, notifier):
        mock_webpush.side_effect = WebPushException("Gone", response=Mock(status_code=410))

        assert notifier.send_notification(SUBSCRIPTION, {"title": "x"}) is False

    @patch("notifier.push_notifier.webpush")
    def test_missing_endpoint(self, mock_webpush, notifier):
        assert notifier.send_notification({"keys": {}}, {"title": "x"}) is False
        mock_webpush.assert_not_called()

    @patch("notifier.push_notifier.webpush")
    def test_worker_without_subscription(self, mock_webpush, notifier):
        assert notifier.send_new_job_notification({"worker_id": 7}, {"job_id": 1}) is False
        mock_webpush.assert_not_called()
