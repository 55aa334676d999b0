"""
Nearby Matcher

Matches jobs and workers in both directions:

- jobs-for-worker: radius-bounded (worker's service radius) with the strict
  category filter, used for the worker's "nearby jobs" listing
- workers-for-job: fuzzy category match with no radius, used by the new-job
  notification fan-out
"""

from __future__ import annotations

import logging
from typing import Any

from geo import INVALID_DISTANCE, GeoPoint, approximate_address, distance_km, is_valid_coordinates
from shared.database import Database, rows_as_dicts
from shared.errors import ValidationError

from .categories import category_filter, fuzzy_match, strict_match
from .queries import FIND_NEARBY_JOBS, FIND_WORKERS_FOR_CATEGORY

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_RADIUS_KM = 100.0
NEARBY_JOBS_LIMIT = 20

# Spheroid and sphere distances differ by under 0.5%; pad the index prefilter
# so it never drops a job the rounded haversine check would keep
SEARCH_RADIUS_PADDING = 1.01

# Fields that would leak the exact job location before acceptance
PRECISE_LOCATION_FIELDS = ("longitude", "latitude", "location")


def row_point(row: dict[str, Any]) -> GeoPoint | None:
    """GeoPoint from a row's longitude/latitude columns, or None if missing."""
    lng = row.get("longitude")
    lat = row.get("latitude")
    if lng is None or lat is None:
        return None
    return GeoPoint.from_coordinates([lng, lat])


def worker_location(worker: dict[str, Any]) -> GeoPoint:
    """Return the worker's registered location.

    Raises:
        ValidationError: If the location is missing, malformed, or the (0, 0)
            placeholder. The worker is never matched against a default point.
    """
    point = row_point(worker)
    if point is None or not is_valid_coordinates(point.coordinates):
        raise ValidationError(
            "Valid worker location not found. Please update your registered location.",
            field="location",
        )
    return point


def service_radius(worker: dict[str, Any]) -> float:
    radius = worker.get("service_radius")
    return float(radius) if radius else DEFAULT_SERVICE_RADIUS_KM


def search_radius_m(radius_km: float) -> float:
    """Index prefilter radius in metres, covering the 0.1 km rounding of reported distances."""
    return (radius_km + 0.05) * 1000 * SEARCH_RADIUS_PADDING


def job_matches_worker(job: dict[str, Any], worker: dict[str, Any]) -> bool:
    """Whether a job is a nearby-listing candidate for a worker.

    The job must be pending and unassigned, lie within the worker's service
    radius, and pass the strict category filter.
    """
    if job.get("status") != "pending" or job.get("worker_id") is not None:
        return False

    job_point = row_point(job)
    worker_point = row_point(worker)
    if job_point is None or worker_point is None:
        return False

    distance = distance_km(worker_point, job_point)
    if distance == INVALID_DISTANCE or distance > service_radius(worker):
        return False

    return strict_match(job.get("category", ""), worker.get("categories"))


def without_precise_location(job: dict[str, Any]) -> dict[str, Any]:
    """Copy of a job without its exact coordinates."""
    return {k: v for k, v in job.items() if k not in PRECISE_LOCATION_FIELDS}


def annotate_job(job: dict[str, Any], origin: GeoPoint) -> dict[str, Any]:
    """Copy of a job with distance and approximate location, minus exact coordinates."""
    annotated = without_precise_location(job)
    annotated["approximate_location"] = approximate_address(job.get("address"))

    job_point = row_point(job)
    if job_point is not None:
        annotated["distance"] = distance_km(origin, job_point)
    return annotated


class NearbyMatcher:
    """Finds nearby jobs for workers and candidate workers for jobs."""

    def __init__(self, database: Database, limit: int = NEARBY_JOBS_LIMIT):
        """Initialize the matcher.

        Args:
            database: Database connection interface (PostGIS-enabled store)
            limit: Maximum number of nearby jobs returned per query
        """
        if not database:
            raise ValueError("Database is required")
        self.db = database
        self.limit = limit

    def find_jobs_for_worker(self, worker: dict[str, Any]) -> list[dict[str, Any]]:
        """Pending, unassigned jobs within the worker's service radius.

        Args:
            worker: Worker profile row (location, service_radius, categories)

        Returns:
            Up to `limit` jobs, newest first, each annotated with `distance`
            and `approximate_location`; exact coordinates are removed

        Raises:
            ValidationError: If the worker has no usable location
        """
        origin = worker_location(worker)
        radius = service_radius(worker)
        categories = category_filter(worker.get("categories"))

        logger.debug(
            f"Searching jobs within {radius} km of [{origin.longitude}, {origin.latitude}] "
            f"for worker {worker.get('worker_id')} (categories={categories or 'any'})"
        )

        with self.db.get_cursor() as cur:
            cur.execute(
                FIND_NEARBY_JOBS,
                {
                    "longitude": origin.longitude,
                    "latitude": origin.latitude,
                    "radius_km": radius,
                    "search_radius_m": search_radius_m(radius),
                    "categories": categories,
                    "limit": self.limit,
                },
            )
            jobs = rows_as_dicts(cur)

        # Same rule the query applies; a row that fails it here is dropped, never replaced
        matched = [job for job in jobs if job_matches_worker(job, worker)][: self.limit]
        logger.info(f"Found {len(matched)} nearby job(s) for worker {worker.get('worker_id')}")
        return [annotate_job(job, origin) for job in matched]

    def find_workers_for_job(self, job: dict[str, Any]) -> list[dict[str, Any]]:
        """Workers whose skills or categories fuzzily match the job category.

        Distance is intentionally ignored so new jobs reach as many workers
        as possible.
        """
        category = job.get("category")
        if not category:
            return []

        with self.db.get_cursor() as cur:
            cur.execute(FIND_WORKERS_FOR_CATEGORY, {"category": category})
            workers = rows_as_dicts(cur)

        matched: dict[Any, dict[str, Any]] = {}
        for worker in workers:
            if worker["worker_id"] in matched:
                continue
            if fuzzy_match(category, worker.get("skills"), worker.get("categories")):
                matched[worker["worker_id"]] = worker

        logger.info(f"Found {len(matched)} worker(s) matching category '{category}'")
        return list(matched.values())
