"""Service for managing job status."""

import logging
from typing import Any

from matching import without_precise_location
from shared.database import Database, row_as_dict
from shared.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError

from .queries import GET_JOB_BY_ID, INCREMENT_WORKER_COMPLETED_JOBS, UPDATE_JOB_STATUS
from .statuses import VALID_STATUSES, JobStatus

logger = logging.getLogger(__name__)


def _visible_to(job: dict[str, Any], actor_id: int) -> dict[str, Any]:
    """Only the poster sees exact coordinates; the assigned worker uses the disclosure lookup."""
    return job if actor_id == job["user_id"] else without_precise_location(job)


class JobStatusService:
    """Service for managing job status."""

    def __init__(self, database: Database):
        """Initialize the job status service.

        Args:
            database: Database connection interface
        """
        if not database:
            raise ValueError("Database is required")
        self.db = database

    def update_status(self, job_id: int, actor_id: int, new_status: str) -> dict[str, Any]:
        """Change a job's status.

        Only the poster or the assigned worker may change it. Completing a job
        stamps completed_at and increments the worker's completed_jobs.

        Args:
            job_id: Job ID
            actor_id: User ID of the caller
            new_status: One of pending, in progress, completed, cancelled

        Returns:
            The updated job (exact coordinates only for the poster)

        Raises:
            ValidationError: If the status value is unknown
            NotFoundError: If the job does not exist
            AuthorizationError: If the caller is neither poster nor assigned worker
            ConflictError: If the job is cancelled, or completed and reviewed
        """
        if new_status not in VALID_STATUSES:
            raise ValidationError(
                f"Invalid status. Must be one of: {', '.join(VALID_STATUSES)}", field="status"
            )

        with self.db.get_cursor() as cur:
            cur.execute(GET_JOB_BY_ID, (job_id,))
            job = row_as_dict(cur)

            if not job:
                raise NotFoundError("Job not found")

            if actor_id not in (job["user_id"], job["worker_id"]):
                raise AuthorizationError()

            if job["status"] == JobStatus.CANCELLED.value or (
                job["status"] == JobStatus.COMPLETED.value and job.get("rating") is not None
            ):
                raise ConflictError(f"Job is already {job['status']} and can no longer change")

            if job["status"] == new_status:
                return _visible_to(job, actor_id)

            cur.execute(UPDATE_JOB_STATUS, (new_status, new_status, job_id))
            updated = row_as_dict(cur)
            if not updated:
                raise NotFoundError("Job not found")

            if new_status == JobStatus.COMPLETED.value and updated["worker_id"] is not None:
                cur.execute(INCREMENT_WORKER_COMPLETED_JOBS, (updated["worker_id"],))

        logger.info(f"Job {job_id} status {job['status']} -> {new_status} by user {actor_id}")
        return _visible_to(updated, actor_id)
