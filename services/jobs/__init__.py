"""Job posting, status and location disclosure services."""

from .job_service import JobService, validate_job_data
from .job_status_service import JobStatusService
from .location_disclosure import DisclosureResult, LocationDisclosureService, disclose, reveal_time
from .statuses import JobStatus

__all__ = [
    "JobService",
    "JobStatusService",
    "LocationDisclosureService",
    "DisclosureResult",
    "JobStatus",
    "disclose",
    "reveal_time",
    "validate_job_data",
]
