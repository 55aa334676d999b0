import logging

from flask import jsonify
from shared.errors import ServiceError

logger = logging.getLogger(__name__)


def _sanitize_error_message(error: Exception) -> str:
    """Sanitize error messages to avoid leaking sensitive information.

    Args:
        error: Exception object

    Returns:
        Sanitized error message safe for client display
    """
    error_str = str(error).lower()

    # Remove database connection strings
    if "password" in error_str or "connection" in error_str or "database" in error_str:
        return "Database operation failed. Please try again."

    # Remove push credentials
    if "vapid" in error_str or ("push" in error_str and "key" in error_str):
        return "Push configuration error. Please check configuration."

    return "An unexpected error occurred. Please try again later."


def error_response(error: Exception, context: str):
    """Translate a service exception into a JSON error response.

    ServiceErrors carry their own status code and client-safe message;
    anything else is logged and answered with a sanitized 500.

    Args:
        error: The exception raised by a service
        context: Short description of the operation, for the log line
    """
    if isinstance(error, ServiceError):
        return jsonify(error.to_dict()), error.status_code

    logger.error(f"Error {context}: {error}", exc_info=True)
    return jsonify({"error": _sanitize_error_message(error)}), 500
