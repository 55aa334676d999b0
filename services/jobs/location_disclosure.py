"""
Location Disclosure Gate

A job's exact coordinates and street address stay hidden from the assigned
worker until three hours before the job starts. The gate is driven purely by
the clock: revealed iff now >= (deadline date at time_start) - 3h.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Any

from shared.database import Database, row_as_dict
from shared.errors import NotFoundError, ValidationError

from .queries import GET_ACTIVE_JOB_FOR_WORKER

logger = logging.getLogger(__name__)

REVEAL_LEAD_TIME = timedelta(hours=3)

_CLOCK_TIME_PATTERN = re.compile(r"^\s*([01]?\d|2[0-3]):([0-5]\d)\s*$")


def parse_clock_time(value: Any, field: str = "time_start") -> time:
    """Parse an "HH:MM" local clock time.

    Raises:
        ValidationError: If the value is not a valid 24-hour HH:MM string
    """
    match = _CLOCK_TIME_PATTERN.match(value) if isinstance(value, str) else None
    if not match:
        raise ValidationError(f"Invalid time '{value}'. Expected HH:MM", field=field)
    return time(hour=int(match.group(1)), minute=int(match.group(2)))


def job_start(deadline: datetime, time_start: str) -> datetime:
    """The deadline's date combined with the job's start clock time."""
    start = parse_clock_time(time_start)
    return deadline.replace(hour=start.hour, minute=start.minute, second=0, microsecond=0)


def reveal_time(deadline: datetime, time_start: str) -> datetime:
    return job_start(deadline, time_start) - REVEAL_LEAD_TIME


def _align(now: datetime, reference: datetime) -> datetime:
    """Make `now` comparable with `reference` (naive vs aware)."""
    if reference.tzinfo is None and now.tzinfo is not None:
        return now.astimezone().replace(tzinfo=None)
    if reference.tzinfo is not None and now.tzinfo is None:
        return now.replace(tzinfo=reference.tzinfo)
    return now


def is_revealed(job: dict[str, Any], now: datetime) -> bool:
    threshold = reveal_time(job["deadline"], job["time_start"])
    return _align(now, threshold) >= threshold


@dataclass
class DisclosureResult:
    """Answer to a worker asking for a job's exact location."""

    available: bool
    exact_location: dict[str, float] | None = None
    exact_address: str | None = None
    reveal_time: datetime | None = None
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.available:
            return {
                "available": True,
                "exact_location": self.exact_location,
                "exact_address": self.exact_address,
            }
        return {
            "available": False,
            "message": self.message,
            "reveal_time": self.reveal_time.isoformat() if self.reveal_time else None,
        }


def disclose(job: dict[str, Any], now: datetime | None = None) -> DisclosureResult:
    """Evaluate the gate for a job the caller is already authorized to see."""
    threshold = reveal_time(job["deadline"], job["time_start"])
    now = now or datetime.now(threshold.tzinfo)

    if _align(now, threshold) >= threshold:
        return DisclosureResult(
            available=True,
            exact_location={"latitude": job["latitude"], "longitude": job["longitude"]},
            exact_address=job.get("address"),
        )

    return DisclosureResult(
        available=False,
        reveal_time=threshold,
        message="Exact location will be available 3 hours before the job starts",
    )


class LocationDisclosureService:
    """Service for the assigned worker's exact-location lookups."""

    def __init__(self, database: Database):
        """Initialize the disclosure service.

        Args:
            database: Database connection interface
        """
        if not database:
            raise ValueError("Database is required")
        self.db = database

    def check_disclosure(
        self, job_id: int, worker_user_id: int, now: datetime | None = None
    ) -> DisclosureResult:
        """Check whether the worker may see the job's exact location yet.

        Args:
            job_id: Job ID
            worker_user_id: User ID of the requesting worker
            now: Evaluation time (defaults to the current time)

        Returns:
            DisclosureResult; coordinates and address only when revealed

        Raises:
            NotFoundError: If the job does not exist, is not assigned to this
                worker, or is no longer active. These cases are not told apart.
        """
        with self.db.get_cursor() as cur:
            cur.execute(GET_ACTIVE_JOB_FOR_WORKER, (job_id, worker_user_id))
            job = row_as_dict(cur)

        if not job:
            logger.info(f"Location request for job {job_id} denied to worker {worker_user_id}")
            raise NotFoundError("Job not found or not assigned to you")

        result = disclose(job, now)
        logger.debug(
            f"Location for job {job_id} {'revealed' if result.available else 'hidden'} "
            f"for worker {worker_user_id}"
        )
        return result
