"""Category normalization and job/worker matching."""

from .categories import (
    JOB_CATEGORIES,
    Category,
    category_filter,
    derive_categories,
    fuzzy_match,
    is_match,
    normalize,
    normalize_skill,
    strict_match,
)
from .nearby_matcher import (
    DEFAULT_SERVICE_RADIUS_KM,
    NEARBY_JOBS_LIMIT,
    NearbyMatcher,
    job_matches_worker,
    row_point,
    without_precise_location,
    worker_location,
)

__all__ = [
    "Category",
    "JOB_CATEGORIES",
    "normalize",
    "normalize_skill",
    "derive_categories",
    "fuzzy_match",
    "strict_match",
    "is_match",
    "category_filter",
    "NearbyMatcher",
    "job_matches_worker",
    "row_point",
    "worker_location",
    "without_precise_location",
    "DEFAULT_SERVICE_RADIUS_KM",
    "NEARBY_JOBS_LIMIT",
]
