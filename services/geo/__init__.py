"""Coordinate validation and distance calculation."""

from .distance import EARTH_RADIUS_KM, INVALID_DISTANCE, approximate_address, distance_km
from .geo_point import GeoPoint, is_valid_coordinates, log_location_info, validate_coordinates

__all__ = [
    "GeoPoint",
    "validate_coordinates",
    "is_valid_coordinates",
    "log_location_info",
    "distance_km",
    "approximate_address",
    "EARTH_RADIUS_KM",
    "INVALID_DISTANCE",
]
