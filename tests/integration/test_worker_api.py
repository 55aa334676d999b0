"""Integration tests for the worker API endpoints."""

from unittest.mock import patch

import pytest

from jobs import DisclosureResult
from shared.errors import NotFoundError, ValidationError

pytestmark = pytest.mark.integration


@pytest.fixture
def worker_service():
    with patch("blueprints.worker.get_worker_service") as factory:
        yield factory.return_value


@pytest.fixture
def notification_service():
    with patch("blueprints.worker.get_worker_notification_service") as factory:
        factory.return_value.unread_count.return_value = 3
        yield factory.return_value


@pytest.fixture
def disclosure_service():
    with patch("blueprints.worker.get_location_disclosure_service") as factory:
        yield factory.return_value


def test_clients_are_rejected(test_client, client_headers, worker_service):
    response = test_client.get("/api/worker/nearby-jobs", headers=client_headers)

    assert response.status_code == 403
    worker_service.list_nearby_jobs.assert_not_called()


def test_nearby_jobs_with_unread_header(
    test_client, worker_headers, worker_service, notification_service
):
    worker_service.list_nearby_jobs.return_value = [
        {"job_id": 101, "distance": 2.1, "approximate_location": "Connaught Place, New Delhi"}
    ]

    response = test_client.get("/api/worker/nearby-jobs", headers=worker_headers)

    assert response.status_code == 200
    assert response.get_json()["jobs"][0]["distance"] == 2.1
    assert response.headers["X-Unread-Notifications"] == "3"
    worker_service.list_nearby_jobs.assert_called_once_with(2)


def test_nearby_jobs_invalid_location(
    test_client, worker_headers, worker_service, notification_service
):
    worker_service.list_nearby_jobs.side_effect = ValidationError(
        "Valid worker location not found. Please update your registered location.",
        field="location",
    )

    response = test_client.get("/api/worker/nearby-jobs", headers=worker_headers)

    assert response.status_code == 400
    assert response.get_json()["field"] == "location"
    assert "X-Unread-Notifications" not in response.headers


def test_job_location_hidden(test_client, worker_headers, disclosure_service, notification_service):
    disclosure_service.check_disclosure.return_value = DisclosureResult(
        available=False, message="Exact location will be available 3 hours before the job starts"
    )

    response = test_client.get("/api/worker/job-location/101", headers=worker_headers)

    assert response.status_code == 200
    assert response.get_json()["available"] is False
    disclosure_service.check_disclosure.assert_called_once_with(101, 2)


def test_job_location_not_assigned(
    test_client, worker_headers, disclosure_service, notification_service
):
    disclosure_service.check_disclosure.side_effect = NotFoundError(
        "Job not found or not assigned to you"
    )

    response = test_client.get("/api/worker/job-location/101", headers=worker_headers)

    assert response.status_code == 404
    assert response.get_json() == {"error": "Job not found or not assigned to you"}


def test_update_location(test_client, worker_headers, worker_service, notification_service):
    worker_service.update_location.return_value = {"worker_id": 7}

    response = test_client.put(
        "/api/worker/update-location",
        json={"latitude": 28.6139, "longitude": 77.2090},
        headers=worker_headers,
    )

    assert response.status_code == 200
    worker_service.update_location.assert_called_once_with(2, 28.6139, 77.2090)


def test_notifications(test_client, worker_headers, notification_service):
    notification_service.list_notifications.return_value = {
        "notifications": [],
        "unread_count": 0,
    }

    response = test_client.get("/api/worker/notifications", headers=worker_headers)

    assert response.status_code == 200
    assert response.get_json() == {"notifications": [], "unread_count": 0}


def test_mark_notification_read(test_client, worker_headers, notification_service):
    response = test_client.patch("/api/worker/notifications/12", headers=worker_headers)

    assert response.status_code == 200
    notification_service.mark_as_read.assert_called_once_with(2, "12")


def test_save_push_subscription(test_client, worker_headers, worker_service, notification_service):
    subscription = {"endpoint": "https://push.example.com/sub/abc", "keys": {}}

    response = test_client.post(
        "/api/worker/push-subscription",
        json={"subscription": subscription},
        headers=worker_headers,
    )

    assert response.status_code == 200
    worker_service.save_push_subscription.assert_called_once_with(2, subscription)


def test_ensure_profile(test_client, worker_headers, worker_service, notification_service):
    worker_service.ensure_profile.return_value = {"worker_id": 7, "skills": ["plumbing"]}

    response = test_client.post(
        "/api/worker/ensure-profile", json={"skills": ["plumbing"]}, headers=worker_headers
    )

    assert response.status_code == 200
    assert response.get_json()["worker"]["worker_id"] == 7
    worker_service.ensure_profile.assert_called_once_with(
        2, latitude=None, longitude=None, skills=["plumbing"], city=None
    )
