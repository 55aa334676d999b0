"""
Structured Logging Utilities

Attaches key=value context (job_id, worker_id, ...) to log records so the
concurrent notification fan-out can be followed per worker.
"""

from __future__ import annotations

import logging
from typing import Any


def format_context(context: dict[str, Any]) -> str:
    """Render context fields as "key=value | key=value", skipping None values."""
    parts = [f"{key}={value}" for key, value in context.items() if value is not None]
    return " | ".join(parts) if parts else "none"


class StructuredLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that prefixes messages with structured context.

    Usage:
        logger = get_structured_logger(__name__, job_id=42, worker_id=7)
        logger.info("Notification stored")
    """

    def __init__(self, logger: logging.Logger, **context: Any):
        super().__init__(logger, context)

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        context_str = format_context(self.extra)
        kwargs.setdefault("extra", {})["context"] = context_str
        return f"[{context_str}] {msg}", kwargs

    def bind(self, **context: Any) -> StructuredLoggerAdapter:
        """Return a new adapter with additional context fields."""
        return StructuredLoggerAdapter(self.logger, **{**self.extra, **context})


def get_structured_logger(name: str, **context: Any) -> StructuredLoggerAdapter:
    """
    Get a structured logger with context.

    Args:
        name: Logger name (typically __name__)
        **context: Context fields (e.g., job_id=42, worker_id=7)

    Returns:
        StructuredLoggerAdapter instance
    """
    return StructuredLoggerAdapter(logging.getLogger(name), **context)
