"""
Rating Aggregator

Records a client's review of a completed job and recomputes the assigned
worker's rating as the mean over all of that worker's rated jobs. The mean
is recomputed from scratch on every review rather than updated
incrementally, so a missed or duplicated event cannot make it drift.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from numbers import Real
from typing import Any

from jobs.queries import GET_JOB_BY_ID
from jobs.statuses import JobStatus
from shared.database import Database, row_as_dict
from shared.errors import (
    AuthorizationError,
    ConflictError,
    ConsistencyError,
    NotFoundError,
    ValidationError,
)

from .queries import GET_WORKER_JOB_RATINGS, SET_JOB_REVIEW, UPDATE_WORKER_RATING

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def mean_rating(ratings: Iterable[float]) -> float:
    """Arithmetic mean of the given ratings.

    Raises:
        ConsistencyError: If there are no ratings to average
    """
    values = [float(r) for r in ratings]
    if not values:
        raise ConsistencyError("No rated jobs found for worker")
    return sum(values) / len(values)


def validate_rating(rating: Any) -> float:
    if isinstance(rating, bool) or not isinstance(rating, (Real, str)):
        raise ValidationError("Rating must be a number", field="rating")
    try:
        value = float(rating)
    except ValueError:
        raise ValidationError("Rating must be a number", field="rating") from None
    if not MIN_RATING <= value <= MAX_RATING:
        raise ValidationError(
            f"Rating must be between {MIN_RATING} and {MAX_RATING}", field="rating"
        )
    return value


class RatingAggregator:
    """Service for job reviews and worker rating aggregation."""

    def __init__(self, database: Database):
        """Initialize the rating aggregator.

        Args:
            database: Database connection interface
        """
        if not database:
            raise ValueError("Database is required")
        self.db = database

    def record_review(
        self, job_id: int, poster_id: int, rating: Any, review: str | None = None
    ) -> dict[str, Any]:
        """Review a completed job and refresh the worker's aggregate rating.

        Args:
            job_id: Job ID
            poster_id: User ID of the caller; must be the job's poster
            rating: Rating from 1 to 5
            review: Optional review text

        Returns:
            The reviewed job

        Raises:
            NotFoundError: If the job does not exist
            AuthorizationError: If the caller did not post the job
            ValidationError: If the job is not completed or the rating is invalid
            ConflictError: If the job has already been reviewed
        """
        with self.db.get_cursor() as cur:
            cur.execute(GET_JOB_BY_ID, (job_id,))
            job = row_as_dict(cur)

        if not job:
            raise NotFoundError("Job not found")
        if job["user_id"] != poster_id:
            raise AuthorizationError()
        if job["status"] != JobStatus.COMPLETED.value:
            raise ValidationError("Can only review completed jobs", field="status")
        if job.get("rating") is not None:
            raise ConflictError("Job has already been reviewed")

        value = validate_rating(rating)

        with self.db.get_cursor() as cur:
            cur.execute(SET_JOB_REVIEW, (value, review, job_id))
            reviewed = row_as_dict(cur)

        if not reviewed:
            raise ConflictError("Job has already been reviewed")

        logger.info(f"Recorded rating {value} for job {job_id}")

        worker_id = reviewed.get("worker_id")
        if worker_id is None:
            logger.warning(f"Job {job_id} has no assigned worker; skipping rating aggregation")
            return reviewed

        try:
            self.refresh_worker_rating(worker_id)
        except ConsistencyError as e:
            logger.error(f"Rating aggregation for worker {worker_id} failed: {e.message}")

        return reviewed

    def refresh_worker_rating(self, worker_user_id: int) -> float:
        """Recompute and store a worker's mean rating.

        Returns:
            The new aggregate rating

        Raises:
            ConsistencyError: If the worker has no rated jobs
        """
        with self.db.get_cursor() as cur:
            cur.execute(GET_WORKER_JOB_RATINGS, (worker_user_id,))
            ratings = [row[0] for row in cur.fetchall()]

            average = mean_rating(ratings)
            cur.execute(UPDATE_WORKER_RATING, (average, worker_user_id))

        logger.info(
            f"Worker {worker_user_id} rating updated to {average:.2f} over {len(ratings)} job(s)"
        )
        return average
