"""Service for posting, listing and accepting jobs."""

import logging
from datetime import datetime
from typing import Any

from geo import log_location_info, validate_coordinates
from matching import JOB_CATEGORIES, normalize_skill, without_precise_location
from notifier import NotificationDispatcher
from shared.database import Database, row_as_dict, rows_as_dicts
from shared.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from shared.roles import Role

from .location_disclosure import parse_clock_time
from .queries import (
    ACCEPT_JOB,
    GET_AVAILABLE_JOBS,
    GET_JOB_BY_ID,
    GET_JOBS_ASSIGNED_TO_WORKER,
    GET_JOBS_POSTED_BY_USER,
    INSERT_JOB,
)

logger = logging.getLogger(__name__)

REQUIRED_JOB_FIELDS = (
    "title",
    "description",
    "category",
    "address",
    "latitude",
    "longitude",
    "budget",
    "deadline",
    "time_start",
    "time_end",
)


def _parse_deadline(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).strip())
    except ValueError:
        raise ValidationError(f"Invalid deadline '{value}'. Expected ISO date", field="deadline") from None


def _parse_budget(value: Any) -> float:
    try:
        budget = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Budget must be a number", field="budget") from None
    if budget < 0:
        raise ValidationError("Budget must be non-negative", field="budget")
    return budget


def validate_job_data(job_data: dict[str, Any]) -> dict[str, Any]:
    """Check and normalize client-supplied job fields.

    Args:
        job_data: Raw job fields (title, description, category, address,
            latitude, longitude, budget, deadline, time_start, time_end)

    Returns:
        Normalized fields with `location` as a GeoPoint

    Raises:
        ValidationError: On the first missing or malformed field
    """
    for field in REQUIRED_JOB_FIELDS:
        value = job_data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f"{field} is required", field=field)

    category = normalize_skill(str(job_data["category"]))
    if category not in JOB_CATEGORIES:
        raise ValidationError(
            f"Invalid category. Must be one of: {', '.join(JOB_CATEGORIES)}", field="category"
        )

    location = validate_coordinates(job_data["latitude"], job_data["longitude"])
    if location is None:
        raise ValidationError(
            "Invalid coordinates. Please provide valid latitude and longitude.", field="location"
        )

    parse_clock_time(job_data["time_start"], field="time_start")
    parse_clock_time(job_data["time_end"], field="time_end")

    return {
        "title": str(job_data["title"]).strip(),
        "description": str(job_data["description"]).strip(),
        "category": category,
        "address": str(job_data["address"]).strip(),
        "location": location,
        "budget": _parse_budget(job_data["budget"]),
        "deadline": _parse_deadline(job_data["deadline"]),
        "time_start": job_data["time_start"].strip(),
        "time_end": job_data["time_end"].strip(),
    }


class JobService:
    """Service for job posting and assignment."""

    def __init__(self, database: Database, dispatcher: NotificationDispatcher | None = None):
        """Initialize the job service.

        Args:
            database: Database connection interface
            dispatcher: New-job notification dispatcher (optional; no fan-out without it)
        """
        if not database:
            raise ValueError("Database is required")
        self.db = database
        self.dispatcher = dispatcher

    def create_job(self, poster_id: int, role: str, job_data: dict[str, Any]) -> dict[str, Any]:
        """Post a new job and notify matching workers.

        Args:
            poster_id: User ID of the posting client
            role: Role of the caller; only clients may post
            job_data: Raw job fields, see validate_job_data

        Returns:
            The created job

        Raises:
            AuthorizationError: If the caller is not a client
            ValidationError: If a field is missing or malformed
        """
        if role != Role.CLIENT.value:
            raise AuthorizationError("Only clients can create jobs")

        fields = validate_job_data(job_data)
        location = fields["location"]
        log_location_info("Creating job with location", location)

        with self.db.get_cursor() as cur:
            cur.execute(
                INSERT_JOB,
                (
                    fields["title"],
                    fields["description"],
                    fields["category"],
                    fields["address"],
                    location.longitude,
                    location.latitude,
                    fields["budget"],
                    fields["deadline"],
                    fields["time_start"],
                    fields["time_end"],
                    poster_id,
                ),
            )
            job = row_as_dict(cur)

        if not job:
            raise ValueError("Failed to create job")

        logger.info(f"Created job {job['job_id']} ({job['category']}) for user {poster_id}")

        if self.dispatcher:
            try:
                self.dispatcher.dispatch(job)
            except Exception as e:
                # The job exists; a dispatch problem must not fail the post
                logger.error(f"Notification dispatch failed for job {job['job_id']}: {e}", exc_info=True)

        return job

    def get_job(self, job_id: int, viewer_id: int | None = None) -> dict[str, Any]:
        """Get a job by ID.

        Exact coordinates are included only for the job's poster; everyone
        else, the assigned worker included, gets them through the location
        disclosure lookup.

        Args:
            job_id: Job ID
            viewer_id: User ID of the caller (None for internal use, full row)

        Raises:
            NotFoundError: If the job does not exist
        """
        with self.db.get_cursor() as cur:
            cur.execute(GET_JOB_BY_ID, (job_id,))
            job = row_as_dict(cur)

        if not job:
            raise NotFoundError("Job not found")
        if viewer_id is not None and viewer_id != job["user_id"]:
            return without_precise_location(job)
        return job

    def list_available_jobs(self, role: str) -> list[dict[str, Any]]:
        """All pending, unassigned jobs, newest first, without a distance filter.

        Raises:
            AuthorizationError: If the caller is not a worker
        """
        if role != Role.WORKER.value:
            raise AuthorizationError("Access denied")

        with self.db.get_cursor() as cur:
            cur.execute(GET_AVAILABLE_JOBS)
            jobs = rows_as_dicts(cur)

        logger.debug(f"Retrieved {len(jobs)} available job(s)")
        return [without_precise_location(job) for job in jobs]

    def list_my_posts(self, poster_id: int) -> list[dict[str, Any]]:
        """Jobs posted by a client, newest first."""
        with self.db.get_cursor() as cur:
            cur.execute(GET_JOBS_POSTED_BY_USER, (poster_id,))
            return rows_as_dicts(cur)

    def list_my_assignments(self, worker_user_id: int, role: str) -> list[dict[str, Any]]:
        """Jobs assigned to a worker, newest first."""
        if role != Role.WORKER.value:
            raise AuthorizationError("Access denied")

        with self.db.get_cursor() as cur:
            cur.execute(GET_JOBS_ASSIGNED_TO_WORKER, (worker_user_id,))
            jobs = rows_as_dicts(cur)
        return [without_precise_location(job) for job in jobs]

    def accept_job(self, job_id: int, worker_user_id: int, role: str) -> dict[str, Any]:
        """Assign a pending job to a worker (pending -> in progress).

        The assignment is a single conditional UPDATE, so two workers racing
        for the same job cannot both win.

        Args:
            job_id: Job ID
            worker_user_id: User ID of the accepting worker
            role: Role of the caller; only workers may accept

        Returns:
            The updated job, without exact coordinates

        Raises:
            AuthorizationError: If the caller is not a worker
            NotFoundError: If the job does not exist
            ConflictError: If the job is already assigned or no longer pending
        """
        if role != Role.WORKER.value:
            raise AuthorizationError("Only workers can accept jobs")

        with self.db.get_cursor() as cur:
            cur.execute(ACCEPT_JOB, (worker_user_id, job_id))
            job = row_as_dict(cur)

            if job:
                logger.info(f"Job {job_id} accepted by worker {worker_user_id}")
                return without_precise_location(job)

            cur.execute(GET_JOB_BY_ID, (job_id,))
            existing = row_as_dict(cur)

        if not existing:
            raise NotFoundError("Job not found")

        logger.info(
            f"Worker {worker_user_id} could not accept job {job_id}: "
            f"status={existing['status']}, worker={existing['worker_id']}"
        )
        raise ConflictError("Job is no longer available")
