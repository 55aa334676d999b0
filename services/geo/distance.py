"""
Distance Engine

Great-circle distance between two points using the haversine formula, plus
the coarse address obfuscation shown to workers before they accept a job.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Union

from .geo_point import GeoPoint

# Earth's mean radius in kilometres
EARTH_RADIUS_KM = 6371.0

# Returned when either input is malformed; callers must check for it
INVALID_DISTANCE = -1.0

PointLike = Union[GeoPoint, Sequence[float]]


def _as_coordinates(point: PointLike | None) -> Sequence[float] | None:
    if point is None:
        return None
    if isinstance(point, GeoPoint):
        return point.coordinates
    if isinstance(point, (str, bytes)) or len(point) < 2:
        return None
    return point


def haversine_km(lng1: float, lat1: float, lng2: float, lat2: float) -> float:
    """Unrounded haversine distance in kilometres."""
    delta_lat = math.radians(lat2 - lat1)
    delta_lng = math.radians(lng2 - lng1)

    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(delta_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_km(a: PointLike | None, b: PointLike | None) -> float:
    """Distance between two points, rounded to one decimal place.

    Args:
        a: GeoPoint or [longitude, latitude] sequence
        b: GeoPoint or [longitude, latitude] sequence

    Returns:
        Distance in kilometres, or INVALID_DISTANCE (-1) if either point has
        fewer than two components or a non-numeric one
    """
    coords_a = _as_coordinates(a)
    coords_b = _as_coordinates(b)
    if coords_a is None or coords_b is None:
        return INVALID_DISTANCE

    try:
        lng1, lat1 = float(coords_a[0]), float(coords_a[1])
        lng2, lat2 = float(coords_b[0]), float(coords_b[1])
    except (TypeError, ValueError):
        return INVALID_DISTANCE
    return round(haversine_km(lng1, lat1, lng2, lat2), 1)


def approximate_address(address: str | None) -> str:
    """Drop the first comma-delimited segment (street level) of an address.

    "12 Baker St, Marylebone, London" -> "Marylebone, London"
    """
    if not address:
        return "Unknown"

    parts = address.split(",")
    if len(parts) > 1:
        return ",".join(parts[1:]).strip()
    return address
