"""Unit tests for category normalization and the two match rules."""

import pytest

from matching import (
    JOB_CATEGORIES,
    Category,
    category_filter,
    derive_categories,
    fuzzy_match,
    normalize,
    strict_match,
)


class TestNormalize:
    """Test cases for skill normalization."""

    def test_maps_known_skills_case_insensitively(self):
        assert normalize(["Plumbing", " ELECTRICAL "]) == {Category.PLUMBING, Category.ELECTRICAL}

    def test_unknown_skills_map_to_general(self):
        assert normalize(["tiling"]) == {Category.GENERAL}

    def test_ignores_blank_entries(self):
        assert normalize(["", "   ", "hvac"]) == {Category.HVAC}

    def test_is_idempotent(self):
        once = normalize(["Plumbing", "carpentry", "knitting"])
        twice = normalize(c.value for c in once)

        assert twice == once

    def test_general_is_not_a_job_category(self):
        assert "general" not in JOB_CATEGORIES
        assert "plumbing" in JOB_CATEGORIES


class TestDeriveCategories:
    def test_given_categories_win(self):
        assert derive_categories(["painting"], ["plumbing"]) == {Category.PAINTING}

    def test_derived_from_skills_when_missing(self):
        assert derive_categories(None, ["Plumbing", "roofing"]) == {
            Category.PLUMBING,
            Category.ROOFING,
        }

    def test_empty_everywhere(self):
        assert derive_categories([], []) == set()


class TestStrictMatch:
    """Test cases for the nearby-jobs category filter."""

    def test_general_worker_matches_everything(self):
        for category in JOB_CATEGORIES:
            assert strict_match(category, ["general"]) is True

    def test_no_categories_matches_everything(self):
        assert strict_match("roofing", []) is True

    def test_membership(self):
        assert strict_match("plumbing", ["plumbing"]) is True
        assert strict_match("plumbing", ["electrical"]) is False

    def test_general_alongside_other_categories_is_not_a_wildcard(self):
        assert strict_match("roofing", ["general", "plumbing"]) is False


class TestFuzzyMatch:
    """Test cases for the notification fan-out rule."""

    def test_substring_of_skill(self):
        assert fuzzy_match("plumbing", ["Emergency Plumbing Repairs"], ["other"]) is True

    def test_substring_of_category(self):
        assert fuzzy_match("hvac", [], ["hvac"]) is True

    def test_no_overlap(self):
        assert fuzzy_match("plumbing", ["electrical"], ["electrical"]) is False

    def test_general_only_worker_matches(self):
        assert fuzzy_match("roofing", ["odd jobs"], ["general"]) is True

    def test_missing_job_category(self):
        assert fuzzy_match("", ["plumbing"], ["plumbing"]) is False


class TestCategoryFilter:
    @pytest.mark.parametrize("categories", [None, [], ["general"], ["General"]])
    def test_filter_skipped(self, categories):
        assert category_filter(categories) is None

    def test_sorted_unique_values(self):
        assert category_filter(["Plumbing", "electrical", "plumbing"]) == ["electrical", "plumbing"]
