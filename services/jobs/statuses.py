"""Job status values."""

from enum import Enum


class JobStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


VALID_STATUSES = tuple(s.value for s in JobStatus)

# Only an assigned worker on one of these may see the job's exact location
ACTIVE_STATUSES = (JobStatus.PENDING.value, JobStatus.IN_PROGRESS.value)
