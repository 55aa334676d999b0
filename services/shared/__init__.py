"""
Shared infrastructure for services.

Database abstraction, the service error taxonomy, and structured logging
used across the geo, matching, notifier, jobs, workers and ratings packages.
"""

from .database import Database, PostgreSQLDatabase, row_as_dict, rows_as_dicts
from .errors import (
    AuthorizationError,
    ConflictError,
    ConsistencyError,
    ExternalDeliveryError,
    NotFoundError,
    ServiceError,
    ValidationError,
)
from .roles import Role
from .structured_logging import get_structured_logger

__all__ = [
    "Database",
    "PostgreSQLDatabase",
    "row_as_dict",
    "rows_as_dicts",
    "ServiceError",
    "ValidationError",
    "AuthorizationError",
    "NotFoundError",
    "ConflictError",
    "ExternalDeliveryError",
    "ConsistencyError",
    "Role",
    "get_structured_logger",
]
