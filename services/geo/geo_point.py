"""Coordinate validation and the canonical GeoPoint type.

Points are always stored and queried longitude-first ([lng, lat]), matching
the PostGIS ST_MakePoint(x, y) convention. Callers must not transpose.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0


@dataclass(frozen=True)
class GeoPoint:
    """An immutable (longitude, latitude) pair.

    Replace a worker's or job's point wholesale on update; never mutate it.
    """

    longitude: float
    latitude: float

    @property
    def coordinates(self) -> list[float]:
        """Coordinates in storage order: [longitude, latitude]."""
        return [self.longitude, self.latitude]

    @property
    def is_unset(self) -> bool:
        """(0, 0) is the placeholder for "no location registered"."""
        return self.longitude == 0 and self.latitude == 0

    @classmethod
    def from_coordinates(cls, coordinates: Sequence[float]) -> GeoPoint:
        """Build a point from a stored [lng, lat] sequence."""
        return cls(longitude=float(coordinates[0]), latitude=float(coordinates[1]))

    def to_dict(self) -> dict[str, Any]:
        return {"type": "Point", "coordinates": self.coordinates}


def _parse_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        parsed = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(parsed):
        return None
    return parsed


def validate_coordinates(latitude: Any, longitude: Any) -> GeoPoint | None:
    """Validate a latitude/longitude pair and build a GeoPoint.

    Both numeric and textual input are accepted. Returns None instead of
    raising when either value is not a finite number or is out of range.

    Args:
        latitude: Latitude in decimal degrees (number or numeric string)
        longitude: Longitude in decimal degrees (number or numeric string)

    Returns:
        GeoPoint with coordinates [longitude, latitude], or None if invalid
    """
    lat = _parse_float(latitude)
    lng = _parse_float(longitude)

    if lat is None or lng is None:
        logger.warning(f"Invalid coordinates: lat={latitude!r}, lng={longitude!r}")
        return None

    if not (MIN_LATITUDE <= lat <= MAX_LATITUDE) or not (MIN_LONGITUDE <= lng <= MAX_LONGITUDE):
        logger.warning(f"Coordinates out of range: lat={lat}, lng={lng}")
        return None

    return GeoPoint(longitude=lng, latitude=lat)


def is_valid_coordinates(coordinates: Sequence[Any] | None) -> bool:
    """Check a stored [lng, lat] pair, rejecting the (0, 0) placeholder."""
    if coordinates is None or isinstance(coordinates, (str, bytes)):
        return False
    if len(coordinates) != 2:
        return False

    point = validate_coordinates(coordinates[1], coordinates[0])
    if point is None:
        return False
    return not point.is_unset


def log_location_info(message: str, point: GeoPoint | None) -> None:
    """Debug-log a point in a readable lng/lat form."""
    if point is None:
        logger.debug(f"{message}: invalid location")
        return
    logger.debug(f"{message}: [lng={point.longitude}, lat={point.latitude}]")
