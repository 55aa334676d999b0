"""SQL queries for job reviews and worker rating aggregation."""

from matching.queries import JOB_COLUMNS

# Set once; no row means a concurrent review got there first
SET_JOB_REVIEW = f"""
    UPDATE marketplace.jobs AS j
    SET rating = %s,
        review = %s
    WHERE j.job_id = %s
        AND j.rating IS NULL
    RETURNING
{JOB_COLUMNS}
"""

# Every rating the worker has received, including the one just set
GET_WORKER_JOB_RATINGS = """
    SELECT rating
    FROM marketplace.jobs
    WHERE worker_id = %s
        AND rating IS NOT NULL
"""

UPDATE_WORKER_RATING = """
    UPDATE marketplace.worker_profiles
    SET rating = %s,
        updated_at = CURRENT_TIMESTAMP
    WHERE user_id = %s
"""
