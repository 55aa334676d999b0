"""SQL queries for worker profiles."""

from matching.queries import WORKER_COLUMNS

GET_WORKER_BY_USER_ID = f"""
    SELECT
{WORKER_COLUMNS}
    FROM marketplace.worker_profiles w
    WHERE w.user_id = %s
"""

GET_WORKER_ID_BY_USER_ID = """
    SELECT worker_id
    FROM marketplace.worker_profiles
    WHERE user_id = %s
"""

INSERT_WORKER_PROFILE = f"""
    INSERT INTO marketplace.worker_profiles AS w (
        user_id, skills, categories, service_radius, city, location,
        rating, completed_jobs, created_at, updated_at
    )
    VALUES (
        %s, %s, %s, %s, %s,
        ST_SetSRID(ST_MakePoint(%s, %s), 4326)::geography,
        0, 0, CURRENT_TIMESTAMP, CURRENT_TIMESTAMP
    )
    RETURNING
{WORKER_COLUMNS}
"""

UPDATE_WORKER_PROFILE = f"""
    UPDATE marketplace.worker_profiles AS w
    SET skills = %s,
        categories = %s,
        service_radius = %s,
        city = %s,
        updated_at = CURRENT_TIMESTAMP
    WHERE w.user_id = %s
    RETURNING
{WORKER_COLUMNS}
"""

# The point is replaced wholesale, never patched
UPDATE_WORKER_LOCATION = f"""
    UPDATE marketplace.worker_profiles AS w
    SET location = ST_SetSRID(ST_MakePoint(%s, %s), 4326)::geography,
        updated_at = CURRENT_TIMESTAMP
    WHERE w.user_id = %s
    RETURNING
{WORKER_COLUMNS}
"""

UPDATE_PUSH_SUBSCRIPTION = """
    UPDATE marketplace.worker_profiles
    SET push_subscription = %s,
        updated_at = CURRENT_TIMESTAMP
    WHERE user_id = %s
    RETURNING worker_id
"""

GET_ALL_WORKER_SKILLS_AND_CATEGORIES = """
    SELECT skills, categories
    FROM marketplace.worker_profiles
"""
