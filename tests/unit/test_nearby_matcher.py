"""Unit tests for NearbyMatcher."""

import pytest

from matching import NEARBY_JOBS_LIMIT, NearbyMatcher, job_matches_worker, worker_location
from matching.nearby_matcher import SEARCH_RADIUS_PADDING, search_radius_m
from matching.queries import FIND_NEARBY_JOBS, FIND_WORKERS_FOR_CATEGORY
from shared.errors import ValidationError


@pytest.fixture
def matcher(mock_database):
    """Create a NearbyMatcher instance with mocked database."""
    return NearbyMatcher(database=mock_database)


@pytest.fixture
def far_job(sample_job):
    """Same job posted in Mumbai, well outside a 10 km Delhi radius."""
    return {**sample_job, "job_id": 102, "longitude": 72.8777, "latitude": 19.0760}


class TestWorkerLocation:
    def test_returns_registered_point(self, sample_worker):
        point = worker_location(sample_worker)

        assert point.coordinates == [77.2090, 28.6139]

    @pytest.mark.parametrize(
        "longitude,latitude", [(0, 0), (None, 28.6), (77.2, None), (500, 28.6)]
    )
    def test_rejects_unusable_location(self, sample_worker, longitude, latitude):
        worker = {**sample_worker, "longitude": longitude, "latitude": latitude}

        with pytest.raises(ValidationError) as exc_info:
            worker_location(worker)

        assert exc_info.value.field == "location"
        assert "update your registered location" in exc_info.value.message


class TestJobMatchesWorker:
    def test_nearby_pending_job_matches(self, sample_job, sample_worker):
        assert job_matches_worker(sample_job, sample_worker) is True

    def test_assigned_job_does_not_match(self, sample_job, sample_worker):
        assert job_matches_worker({**sample_job, "worker_id": 9}, sample_worker) is False

    def test_non_pending_job_does_not_match(self, sample_job, sample_worker):
        assert job_matches_worker({**sample_job, "status": "completed"}, sample_worker) is False

    def test_outside_radius(self, far_job, sample_worker):
        assert job_matches_worker(far_job, sample_worker) is False

    def test_category_mismatch(self, sample_job, sample_worker):
        worker = {**sample_worker, "categories": ["electrical"]}

        assert job_matches_worker(sample_job, worker) is False

    def test_general_worker_skips_category_filter(self, sample_job, sample_worker):
        worker = {**sample_worker, "categories": ["general"]}

        assert job_matches_worker({**sample_job, "category": "roofing"}, worker) is True


class TestFindJobsForWorker:
    """Test cases for the radius-bounded jobs-for-worker query."""

    def test_init_requires_database(self):
        with pytest.raises(ValueError, match="Database is required"):
            NearbyMatcher(database=None)

    def test_query_parameters(self, matcher, mock_cursor, sample_worker):
        mock_cursor.fetchall.return_value = []

        matcher.find_jobs_for_worker(sample_worker)

        query, params = mock_cursor.execute.call_args[0]
        assert query == FIND_NEARBY_JOBS
        assert params == {
            "longitude": 77.2090,
            "latitude": 28.6139,
            "radius_km": 10.0,
            "search_radius_m": pytest.approx(10150.5),
            "categories": ["plumbing"],
            "limit": NEARBY_JOBS_LIMIT,
        }

    def test_radius_cut_happens_before_limit(self):
        """The exact distance check is in the WHERE clause, so LIMIT counts only in-range jobs."""
        radius_check = FIND_NEARBY_JOBS.index("<= %(radius_km)s")

        assert radius_check < FIND_NEARBY_JOBS.index("LIMIT %(limit)s")
        assert "6371.0" in FIND_NEARBY_JOBS

    def test_search_radius_covers_reported_rounding(self):
        # 10.04 km rounds to 10.0 and must survive the index prefilter
        assert search_radius_m(10.0) > 10040
        assert search_radius_m(10.0) > 10000 * SEARCH_RADIUS_PADDING

    def test_general_worker_passes_no_category_filter(self, matcher, mock_cursor, sample_worker):
        mock_cursor.fetchall.return_value = []

        matcher.find_jobs_for_worker({**sample_worker, "categories": ["general"]})

        assert mock_cursor.execute.call_args[0][1]["categories"] is None

    def test_annotates_and_strips_exact_location(
        self, matcher, mock_cursor, sample_worker, sample_job, job_row
    ):
        mock_cursor.fetchall.return_value = [job_row(sample_job)]

        jobs = matcher.find_jobs_for_worker(sample_worker)

        assert len(jobs) == 1
        job = jobs[0]
        assert job["job_id"] == 101
        assert job["approximate_location"] == "Connaught Place, New Delhi"
        assert job["distance"] == pytest.approx(2.1, abs=0.1)
        assert "longitude" not in job
        assert "latitude" not in job
        assert "location" not in job

    def test_drops_jobs_beyond_haversine_radius(
        self, matcher, mock_cursor, sample_worker, sample_job, far_job, job_row
    ):
        mock_cursor.fetchall.return_value = [job_row(sample_job), job_row(far_job)]

        jobs = matcher.find_jobs_for_worker(sample_worker)

        assert [j["job_id"] for j in jobs] == [101]

    def test_invalid_location_fails_before_query(self, matcher, mock_database, sample_worker):
        worker = {**sample_worker, "longitude": 0, "latitude": 0}

        with pytest.raises(ValidationError):
            matcher.find_jobs_for_worker(worker)

        mock_database.get_cursor.assert_not_called()

    def test_result_is_capped(self, mock_database, mock_cursor, sample_worker, sample_job, job_row):
        matcher = NearbyMatcher(database=mock_database, limit=2)
        mock_cursor.fetchall.return_value = [
            job_row({**sample_job, "job_id": job_id}) for job_id in (1, 2, 3)
        ]

        jobs = matcher.find_jobs_for_worker(sample_worker)

        assert [j["job_id"] for j in jobs] == [1, 2]


class TestFindWorkersForJob:
    """Test cases for the fan-out candidate query."""

    def test_missing_category_returns_empty(self, matcher, mock_database, sample_job):
        assert matcher.find_workers_for_job({**sample_job, "category": None}) == []
        mock_database.get_cursor.assert_not_called()

    def test_fuzzy_matches_and_dedupes(
        self, matcher, mock_cursor, sample_job, sample_worker, worker_row, worker_description
    ):
        general = {**sample_worker, "worker_id": 8, "skills": ["odd jobs"], "categories": ["general"]}
        electrician = {
            **sample_worker,
            "worker_id": 9,
            "skills": ["wiring"],
            "categories": ["electrical"],
        }
        mock_cursor.description = worker_description
        mock_cursor.fetchall.return_value = [
            worker_row(sample_worker),
            worker_row(general),
            worker_row(sample_worker),
            worker_row(electrician),
        ]

        workers = matcher.find_workers_for_job(sample_job)

        assert [w["worker_id"] for w in workers] == [7, 8]
        query, params = mock_cursor.execute.call_args[0]
        assert query == FIND_WORKERS_FOR_CATEGORY
        assert params == {"category": "plumbing"}

    def test_ignores_distance(
        self, matcher, mock_cursor, sample_job, sample_worker, worker_row, worker_description
    ):
        """A matching worker on the other side of the country is still notified."""
        distant = {**sample_worker, "longitude": 72.8777, "latitude": 19.0760}
        mock_cursor.description = worker_description
        mock_cursor.fetchall.return_value = [worker_row(distant)]

        workers = matcher.find_workers_for_job(sample_job)

        assert len(workers) == 1
