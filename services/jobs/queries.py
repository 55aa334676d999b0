"""SQL queries for job posting, assignment and status changes."""

from matching.queries import JOB_COLUMNS, LISTED_JOB_COLUMNS

# Create a job; the location is stored as geography(Point, 4326), lng first
INSERT_JOB = f"""
    INSERT INTO marketplace.jobs AS j (
        title, description, category, address, location, budget,
        deadline, time_start, time_end, status, user_id, created_at
    )
    VALUES (
        %s, %s, %s, %s,
        ST_SetSRID(ST_MakePoint(%s, %s), 4326)::geography,
        %s, %s, %s, %s, 'pending', %s, CURRENT_TIMESTAMP
    )
    RETURNING
{JOB_COLUMNS}
"""

GET_JOB_BY_ID = f"""
    SELECT
{JOB_COLUMNS}
    FROM marketplace.jobs j
    WHERE j.job_id = %s
"""

# Pending, unassigned jobs regardless of distance
GET_AVAILABLE_JOBS = f"""
    SELECT
{LISTED_JOB_COLUMNS}
    FROM marketplace.jobs j
    WHERE j.status = 'pending'
        AND j.worker_id IS NULL
    ORDER BY j.created_at DESC
"""

GET_JOBS_POSTED_BY_USER = f"""
    SELECT
{JOB_COLUMNS}
    FROM marketplace.jobs j
    WHERE j.user_id = %s
    ORDER BY j.created_at DESC
"""

# Exact coordinates come only from the location disclosure lookup
GET_JOBS_ASSIGNED_TO_WORKER = f"""
    SELECT
{LISTED_JOB_COLUMNS}
    FROM marketplace.jobs j
    WHERE j.worker_id = %s
    ORDER BY j.created_at DESC
"""

# Assign a worker only if the job is still open; no row means someone else got it
ACCEPT_JOB = f"""
    UPDATE marketplace.jobs AS j
    SET worker_id = %s,
        status = 'in progress'
    WHERE j.job_id = %s
        AND j.status = 'pending'
        AND j.worker_id IS NULL
    RETURNING
{JOB_COLUMNS}
"""

UPDATE_JOB_STATUS = f"""
    UPDATE marketplace.jobs AS j
    SET status = %s,
        completed_at = CASE WHEN %s = 'completed' THEN CURRENT_TIMESTAMP ELSE j.completed_at END
    WHERE j.job_id = %s
    RETURNING
{JOB_COLUMNS}
"""

INCREMENT_WORKER_COMPLETED_JOBS = """
    UPDATE marketplace.worker_profiles
    SET completed_jobs = completed_jobs + 1,
        updated_at = CURRENT_TIMESTAMP
    WHERE user_id = %s
"""

# Active job assigned to the requesting worker (location disclosure)
GET_ACTIVE_JOB_FOR_WORKER = f"""
    SELECT
{JOB_COLUMNS}
    FROM marketplace.jobs j
    WHERE j.job_id = %s
        AND j.worker_id = %s
        AND j.status IN ('pending', 'in progress')
"""
