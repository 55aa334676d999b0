"""SQL queries for job/worker matching.

Locations are stored as geography(Point, 4326) and read back as separate
longitude/latitude columns. The column lists are shared with the jobs and
workers packages so every service sees the same row shape.
"""

# Column list for job rows
JOB_COLUMNS = """
        j.job_id,
        j.title,
        j.description,
        j.category,
        j.address,
        ST_X(j.location::geometry) AS longitude,
        ST_Y(j.location::geometry) AS latitude,
        j.budget,
        j.deadline,
        j.time_start,
        j.time_end,
        j.status,
        j.user_id,
        j.worker_id,
        j.rating,
        j.review,
        j.created_at,
        j.completed_at
"""

# Job columns safe to show workers before the location is disclosed (no coordinates)
LISTED_JOB_COLUMNS = """
        j.job_id,
        j.title,
        j.description,
        j.category,
        j.address,
        j.budget,
        j.deadline,
        j.time_start,
        j.time_end,
        j.status,
        j.user_id,
        j.worker_id,
        j.rating,
        j.review,
        j.created_at,
        j.completed_at
"""

# Column list for worker profile rows
WORKER_COLUMNS = """
        w.worker_id,
        w.user_id,
        w.skills,
        w.categories,
        w.service_radius,
        w.city,
        ST_X(w.location::geometry) AS longitude,
        ST_Y(w.location::geometry) AS latitude,
        w.push_subscription,
        w.rating,
        w.completed_jobs
"""

# Pending, unassigned jobs within the worker's service radius.
# ST_DWithin over the padded %(search_radius_m)s only narrows candidates through
# the spatial index; the haversine distance rounded to 0.1 km decides, so LIMIT
# applies to jobs that really are in range.
# %(categories)s is NULL when the category filter is skipped.
FIND_NEARBY_JOBS = f"""
    SELECT
{JOB_COLUMNS}
    FROM marketplace.jobs j
    WHERE j.status = 'pending'
        AND j.worker_id IS NULL
        AND ST_DWithin(
            j.location,
            ST_SetSRID(ST_MakePoint(%(longitude)s, %(latitude)s), 4326)::geography,
            %(search_radius_m)s
        )
        AND round((6371.0 * 2 * asin(LEAST(1.0, sqrt(
                power(sin(radians(ST_Y(j.location::geometry) - %(latitude)s) / 2), 2)
                + cos(radians(%(latitude)s)) * cos(radians(ST_Y(j.location::geometry)))
                * power(sin(radians(ST_X(j.location::geometry) - %(longitude)s) / 2), 2)
            ))))::numeric, 1) <= %(radius_km)s
        AND (%(categories)s::text[] IS NULL OR j.category = ANY(%(categories)s::text[]))
    ORDER BY j.created_at DESC
    LIMIT %(limit)s
"""

# Workers whose skills or categories contain the job category
# (case-insensitive substring), plus general-only workers. No radius bound.
FIND_WORKERS_FOR_CATEGORY = f"""
    SELECT
{WORKER_COLUMNS}
    FROM marketplace.worker_profiles w
    WHERE EXISTS (
            SELECT 1
            FROM unnest(COALESCE(w.skills, '{{}}') || COALESCE(w.categories, '{{}}')) AS s(value)
            WHERE strpos(lower(s.value), lower(%(category)s)) > 0
        )
        OR w.categories = ARRAY['general']::text[]
    ORDER BY w.worker_id
"""
