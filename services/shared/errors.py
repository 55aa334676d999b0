"""Error taxonomy shared by the matching and dispatch services.

Each error carries the HTTP status the routing layer should answer with, so
blueprints can translate any ServiceError without knowing where it came from.
"""

from __future__ import annotations


class ServiceError(Exception):
    """Base class for errors surfaced to callers of the services."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"error": self.message}


class ValidationError(ServiceError):
    """Malformed input: coordinates, required job fields, status values."""

    status_code = 400

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict[str, str]:
        payload = super().to_dict()
        if self.field:
            payload["field"] = self.field
        return payload


class AuthorizationError(ServiceError):
    """Wrong role or not the owner of the resource."""

    status_code = 403

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message)


class NotFoundError(ServiceError):
    """Job or worker profile absent (or hidden from the caller)."""

    status_code = 404


class ConflictError(ServiceError):
    """The resource changed state underneath the caller, e.g. a job already taken."""

    status_code = 409


class ExternalDeliveryError(ServiceError):
    """Push transport failure. Logged by the dispatcher, never surfaced."""

    status_code = 502


class ConsistencyError(ServiceError):
    """Internal invariant violation. Logged; the operation degrades instead of failing."""

    status_code = 500
