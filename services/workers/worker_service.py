"""Service for worker profiles, locations and nearby-job listings."""

import logging
from numbers import Real
from typing import Any

from geo import GeoPoint, log_location_info, validate_coordinates
from matching import (
    DEFAULT_SERVICE_RADIUS_KM,
    JOB_CATEGORIES,
    NearbyMatcher,
    derive_categories,
    normalize_skill,
    row_point,
)
from psycopg2.extras import Json
from shared.database import Database, row_as_dict
from shared.errors import NotFoundError, ValidationError

from .queries import (
    GET_ALL_WORKER_SKILLS_AND_CATEGORIES,
    GET_WORKER_BY_USER_ID,
    INSERT_WORKER_PROFILE,
    UPDATE_PUSH_SUBSCRIPTION,
    UPDATE_WORKER_LOCATION,
    UPDATE_WORKER_PROFILE,
)

logger = logging.getLogger(__name__)

# Used when a profile is created lazily without coordinates
DEFAULT_LOCATION = GeoPoint(longitude=77.2090, latitude=28.6139)


def normalize_skills(skills: Any) -> list[str]:
    """Lower-case and trim skills, dropping blanks and duplicates (order kept)."""
    if skills is None:
        return []
    if isinstance(skills, str) or not isinstance(skills, (list, tuple)):
        raise ValidationError("Skills must be a list of strings", field="skills")

    normalized: list[str] = []
    for skill in skills:
        if not isinstance(skill, str):
            raise ValidationError("Skills must be a list of strings", field="skills")
        value = normalize_skill(skill)
        if value and value not in normalized:
            normalized.append(value)
    return normalized


def validate_service_radius(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (Real, str)):
        raise ValidationError("Service radius must be a positive number", field="service_radius")
    try:
        radius = float(value)
    except ValueError:
        raise ValidationError(
            "Service radius must be a positive number", field="service_radius"
        ) from None
    if radius <= 0:
        raise ValidationError("Service radius must be a positive number", field="service_radius")
    return radius


def with_location(worker: dict[str, Any]) -> dict[str, Any]:
    """Add a nested GeoJSON-style `location` built from the row's columns."""
    point = row_point(worker)
    return {**worker, "location": point.to_dict() if point else None}


class WorkerService:
    """Service for worker profile management."""

    def __init__(
        self,
        database: Database,
        matcher: NearbyMatcher | None = None,
        default_location: GeoPoint = DEFAULT_LOCATION,
        default_service_radius: float = DEFAULT_SERVICE_RADIUS_KM,
    ):
        """Initialize the worker service.

        Args:
            database: Database connection interface
            matcher: Matcher for nearby-job queries (default: NearbyMatcher(database))
            default_location: Location given to lazily created profiles
            default_service_radius: Service radius (km) for new profiles
        """
        if not database:
            raise ValueError("Database is required")
        self.db = database
        self.matcher = matcher or NearbyMatcher(database)
        self.default_location = default_location
        self.default_service_radius = default_service_radius

    def find_profile(self, user_id: int) -> dict[str, Any] | None:
        with self.db.get_cursor() as cur:
            cur.execute(GET_WORKER_BY_USER_ID, (user_id,))
            return row_as_dict(cur)

    def get_profile(self, user_id: int) -> dict[str, Any]:
        """Get the worker profile of a user.

        Raises:
            NotFoundError: If the user has no worker profile
        """
        worker = self.find_profile(user_id)
        if not worker:
            raise NotFoundError("Worker profile not found")
        return with_location(worker)

    def ensure_profile(
        self,
        user_id: int,
        latitude: Any = None,
        longitude: Any = None,
        skills: Any = None,
        city: str | None = None,
    ) -> dict[str, Any]:
        """Return the worker's profile, creating it on first use.

        New profiles get the supplied location when it validates, otherwise the
        default location. Categories are derived from the skills once, here.

        Args:
            user_id: User ID of the worker
            latitude: Optional latitude for a new profile
            longitude: Optional longitude for a new profile
            skills: Optional list of skills for a new profile
            city: Optional city name

        Returns:
            The existing or newly created profile
        """
        existing = self.find_profile(user_id)
        if existing:
            return with_location(existing)

        location = None
        if latitude is not None and longitude is not None:
            location = validate_coordinates(latitude, longitude)
        if location is None:
            logger.info(f"No valid coordinates for worker {user_id}, using default location")
            location = self.default_location

        normalized_skills = normalize_skills(skills) or ["general"]
        categories = sorted(c.value for c in derive_categories(None, normalized_skills))

        with self.db.get_cursor() as cur:
            cur.execute(
                INSERT_WORKER_PROFILE,
                (
                    user_id,
                    normalized_skills,
                    categories,
                    self.default_service_radius,
                    city or "",
                    location.longitude,
                    location.latitude,
                ),
            )
            worker = row_as_dict(cur)

        if not worker:
            raise ValueError("Failed to create worker profile")

        log_location_info(f"Created worker profile {worker['worker_id']} with location", location)
        return with_location(worker)

    def update_profile(
        self,
        user_id: int,
        skills: Any = None,
        service_radius: Any = None,
        city: str | None = None,
        latitude: Any = None,
        longitude: Any = None,
    ) -> dict[str, Any]:
        """Update skills, service radius, city and optionally location.

        When skills are given, categories are re-derived from them. Fields
        left as None keep their stored value.

        Raises:
            ValidationError: If skills, radius or coordinates are malformed
            NotFoundError: If the user has no worker profile
        """
        new_skills = normalize_skills(skills) if skills is not None else None
        new_radius = validate_service_radius(service_radius) if service_radius is not None else None

        location = None
        if latitude is not None or longitude is not None:
            location = validate_coordinates(latitude, longitude)
            if location is None:
                raise ValidationError("Invalid coordinates provided", field="location")

        current = self.find_profile(user_id)
        if not current:
            raise NotFoundError("Worker profile not found")

        if new_skills is not None:
            skills_value = new_skills
            categories = sorted(c.value for c in derive_categories(None, new_skills))
        else:
            skills_value = current.get("skills") or []
            categories = current.get("categories") or []

        with self.db.get_cursor() as cur:
            cur.execute(
                UPDATE_WORKER_PROFILE,
                (
                    skills_value,
                    categories,
                    new_radius if new_radius is not None else current.get("service_radius"),
                    city if city is not None else current.get("city"),
                    user_id,
                ),
            )
            worker = row_as_dict(cur)

        if not worker:
            raise NotFoundError("Worker profile not found")

        logger.info(f"Updated worker profile for user {user_id}")

        if location is not None:
            return self.update_location(user_id, location.latitude, location.longitude)
        return with_location(worker)

    def update_location(self, user_id: int, latitude: Any, longitude: Any) -> dict[str, Any]:
        """Replace the worker's registered location.

        Raises:
            ValidationError: If the coordinates are invalid
            NotFoundError: If the user has no worker profile
        """
        location = validate_coordinates(latitude, longitude)
        if location is None:
            raise ValidationError(
                "Invalid coordinates. Latitude must be between -90 and 90, "
                "longitude between -180 and 180.",
                field="location",
            )

        logger.info(f"Updating worker {user_id} location to lat={latitude}, lng={longitude}")

        with self.db.get_cursor() as cur:
            cur.execute(UPDATE_WORKER_LOCATION, (location.longitude, location.latitude, user_id))
            worker = row_as_dict(cur)

        if not worker:
            raise NotFoundError("Worker profile not found")

        log_location_info("Worker location updated", row_point(worker))
        return with_location(worker)

    def save_push_subscription(self, user_id: int, subscription: Any) -> None:
        """Store the worker's push subscription.

        Raises:
            ValidationError: If no subscription data is given
            NotFoundError: If the user has no worker profile
        """
        if not subscription or not isinstance(subscription, dict):
            raise ValidationError("Subscription data is required", field="subscription")

        with self.db.get_cursor() as cur:
            cur.execute(UPDATE_PUSH_SUBSCRIPTION, (Json(subscription), user_id))
            result = cur.fetchone()

        if not result:
            raise NotFoundError("Worker profile not found")
        logger.info(f"Saved push subscription for worker {result[0]}")

    def list_nearby_jobs(self, user_id: int) -> list[dict[str, Any]]:
        """Jobs near the worker's registered location, see NearbyMatcher.

        Raises:
            NotFoundError: If the user has no worker profile
            ValidationError: If the registered location is unusable
        """
        worker = self.find_profile(user_id)
        if not worker:
            raise NotFoundError("Worker profile not found")
        return self.matcher.find_jobs_for_worker(worker)

    def list_categories(self) -> list[str]:
        """Every worker skill and category plus the default job categories, sorted."""
        categories = set(JOB_CATEGORIES)

        with self.db.get_cursor() as cur:
            cur.execute(GET_ALL_WORKER_SKILLS_AND_CATEGORIES)
            for skills, worker_categories in cur.fetchall():
                for value in [*(skills or []), *(worker_categories or [])]:
                    if value and value.strip():
                        categories.add(normalize_skill(value))

        return sorted(categories)
