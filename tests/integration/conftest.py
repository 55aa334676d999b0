"""
Pytest configuration and fixtures for integration tests.

These tests drive the Flask API end to end (routing, JWT verification, role
checks, error translation) with the service factories patched out, so no
database or push service is needed.
All tests in this directory should be marked with @pytest.mark.integration
"""

import pytest
from flask_jwt_extended import create_access_token


@pytest.fixture
def test_app():
    """Create a Flask test app."""
    from app import create_app

    flask_app = create_app()
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def test_client(test_app):
    """Create a Flask test client."""
    return test_app.test_client()


@pytest.fixture
def auth_headers(test_app):
    """Build Authorization headers for a user ID and role."""

    def make(user_id, role):
        with test_app.app_context():
            token = create_access_token(identity=str(user_id), additional_claims={"role": role})
        return {"Authorization": f"Bearer {token}"}

    return make


@pytest.fixture
def client_headers(auth_headers):
    return auth_headers(1, "client")


@pytest.fixture
def worker_headers(auth_headers):
    return auth_headers(2, "worker")
