"""
Category/Skill Matcher

Maps free-text worker skills onto the closed category enumeration and
decides whether a job's category matches a worker.

There are deliberately two match rules:

- fuzzy_match: used by the new-job notification fan-out. Case-insensitive
  substring match of the job category against any skill or category.
- strict_match: used by the nearby-jobs query. Set membership, with the
  filter skipped entirely when the worker's only category is "general".
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum


class Category(str, Enum):
    """Closed set of service categories."""

    PLUMBING = "plumbing"
    ELECTRICAL = "electrical"
    CARPENTRY = "carpentry"
    PAINTING = "painting"
    CLEANING = "cleaning"
    GARDENING = "gardening"
    MOVING = "moving"
    APPLIANCE_REPAIR = "appliance_repair"
    HVAC = "hvac"
    ROOFING = "roofing"
    OTHER = "other"
    GENERAL = "general"


# "general" is a worker-side fallback only; jobs must name a real category
JOB_CATEGORIES: tuple[str, ...] = tuple(c.value for c in Category if c is not Category.GENERAL)

_BY_VALUE = {c.value: c for c in Category}


def normalize_skill(skill: str) -> str:
    return skill.strip().lower()


def to_category(value: str) -> Category:
    """Match one raw skill or category string; unmatched values map to general."""
    return _BY_VALUE.get(normalize_skill(value), Category.GENERAL)


def normalize(skills: Iterable[str]) -> set[Category]:
    """Normalize raw skill strings into a set of categories.

    Blank entries are ignored. Normalizing an already-normalized set
    returns the same set.
    """
    return {to_category(skill) for skill in skills if skill and skill.strip()}


def derive_categories(
    categories: Iterable[str] | None, skills: Iterable[str] | None
) -> set[Category]:
    """Resolve a worker's categories when a profile is created or its skills change.

    Categories are derived from skills only when none were given. This runs
    once per write; stored categories are never re-derived on read.
    """
    given = normalize(categories or [])
    if given:
        return given
    return normalize(skills or [])


def is_general_only(categories: Iterable[str]) -> bool:
    return {normalize_skill(c) for c in categories} == {Category.GENERAL.value}


def fuzzy_match(
    job_category: str, skills: Iterable[str] | None, categories: Iterable[str] | None
) -> bool:
    """Fan-out rule: the job category appears inside any skill or category.

    A worker whose only category is general is considered for every job.
    """
    if not job_category:
        return False

    needle = normalize_skill(job_category)
    categories = list(categories or [])
    if categories and is_general_only(categories):
        return True

    return any(needle in normalize_skill(value) for value in [*(skills or []), *categories])


def strict_match(job_category: str, categories: Iterable[str] | None) -> bool:
    """Nearby-query rule: category membership, skipped for general-only workers."""
    values = {normalize_skill(c) for c in categories or []}
    if not values or values == {Category.GENERAL.value}:
        return True
    return normalize_skill(job_category) in values


is_match = strict_match


def category_filter(categories: Iterable[str] | None) -> list[str] | None:
    """Category list for the store query, or None when the filter is skipped."""
    values = sorted({normalize_skill(c) for c in categories or []})
    if not values or values == [Category.GENERAL.value]:
        return None
    return values
