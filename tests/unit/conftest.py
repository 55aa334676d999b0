"""
Pytest configuration and fixtures for unit tests.

Unit tests are fast, isolated tests that don't require external dependencies.
Services get a Mock database whose cursor returns rows shaped like the
marketplace queries (column names in cursor.description, values as tuples).
"""

from datetime import UTC, datetime
from unittest.mock import Mock

import pytest

JOB_FIELDS = [
    "job_id",
    "title",
    "description",
    "category",
    "address",
    "longitude",
    "latitude",
    "budget",
    "deadline",
    "time_start",
    "time_end",
    "status",
    "user_id",
    "worker_id",
    "rating",
    "review",
    "created_at",
    "completed_at",
]

WORKER_FIELDS = [
    "worker_id",
    "user_id",
    "skills",
    "categories",
    "service_radius",
    "city",
    "longitude",
    "latitude",
    "push_subscription",
    "rating",
    "completed_jobs",
]


def to_row(fields, data):
    """Tuple of values in column order, as a DB-API cursor would return."""
    return tuple(data.get(f) for f in fields)


def describe(fields):
    return [(f,) for f in fields]


@pytest.fixture
def mock_database():
    """Create a mock database."""
    db = Mock()
    db.get_cursor.return_value.__enter__ = Mock(return_value=Mock())
    db.get_cursor.return_value.__exit__ = Mock(return_value=False)
    return db


@pytest.fixture
def mock_cursor(mock_database):
    """Cursor handed out by every mock_database.get_cursor() call, job-shaped by default."""
    cursor = Mock()
    cursor.description = describe(JOB_FIELDS)
    mock_database.get_cursor.return_value.__enter__.return_value = cursor
    return cursor


@pytest.fixture
def sample_job():
    """A pending, unassigned plumbing job in central Delhi."""
    return {
        "job_id": 101,
        "title": "Fix leaking sink",
        "description": "Kitchen sink leaks under the basin",
        "category": "plumbing",
        "address": "12 Janpath, Connaught Place, New Delhi",
        "longitude": 77.2167,
        "latitude": 28.6315,
        "budget": 800,
        "deadline": datetime(2026, 5, 10, tzinfo=UTC),
        "time_start": "10:00",
        "time_end": "12:00",
        "status": "pending",
        "user_id": 1,
        "worker_id": None,
        "rating": None,
        "review": None,
        "created_at": datetime(2026, 5, 1, 9, 0, tzinfo=UTC),
        "completed_at": None,
    }


@pytest.fixture
def sample_worker():
    """A plumber registered near India Gate with a 10 km radius."""
    return {
        "worker_id": 7,
        "user_id": 2,
        "skills": ["plumbing", "pipe fitting"],
        "categories": ["plumbing"],
        "service_radius": 10.0,
        "city": "New Delhi",
        "longitude": 77.2090,
        "latitude": 28.6139,
        "push_subscription": {
            "endpoint": "https://push.example.com/sub/abc",
            "keys": {"p256dh": "key", "auth": "secret"},
        },
        "rating": 0.0,
        "completed_jobs": 0,
    }


@pytest.fixture
def job_row():
    """Convert a job dictionary into a cursor row tuple."""
    return lambda job: to_row(JOB_FIELDS, job)


@pytest.fixture
def worker_row():
    """Convert a worker dictionary into a cursor row tuple."""
    return lambda worker: to_row(WORKER_FIELDS, worker)


@pytest.fixture
def worker_description():
    return describe(WORKER_FIELDS)
