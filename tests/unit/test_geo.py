"""Unit tests for coordinate validation and the distance engine."""

import pytest

from geo import (
    INVALID_DISTANCE,
    GeoPoint,
    approximate_address,
    distance_km,
    is_valid_coordinates,
    validate_coordinates,
)


class TestValidateCoordinates:
    """Test cases for validate_coordinates."""

    def test_builds_longitude_first_point(self):
        """Latitude/longitude input is stored as [lng, lat]."""
        point = validate_coordinates(28.6139, 77.2090)

        assert point == GeoPoint(longitude=77.2090, latitude=28.6139)
        assert point.coordinates == [77.2090, 28.6139]
        assert point.to_dict() == {"type": "Point", "coordinates": [77.2090, 28.6139]}

    def test_accepts_numeric_strings(self):
        point = validate_coordinates(" 28.6139 ", "77.2090")

        assert point.latitude == 28.6139
        assert point.longitude == 77.2090

    @pytest.mark.parametrize(
        "latitude,longitude",
        [
            (91, 0),
            (-90.5, 10),
            (45, 180.1),
            (45, -181),
            ("north", 10),
            (None, 10),
            (10, float("nan")),
            (True, 10),
        ],
    )
    def test_rejects_invalid_values(self, latitude, longitude):
        assert validate_coordinates(latitude, longitude) is None

    def test_accepts_range_boundaries(self):
        assert validate_coordinates(90, 180) is not None
        assert validate_coordinates(-90, -180) is not None


class TestIsValidCoordinates:
    """Test cases for checks on stored [lng, lat] pairs."""

    def test_valid_pair(self):
        assert is_valid_coordinates([77.2090, 28.6139]) is True

    def test_rejects_unset_placeholder(self):
        """(0, 0) means no location was ever registered."""
        assert is_valid_coordinates([0, 0]) is False

    @pytest.mark.parametrize("coordinates", [None, [], [77.2], [1, 2, 3], "77,28", [200, 10]])
    def test_rejects_malformed(self, coordinates):
        assert is_valid_coordinates(coordinates) is False


class TestDistanceKm:
    """Test cases for the haversine distance engine."""

    def test_same_point_is_zero(self):
        assert distance_km([77.2090, 28.6139], [77.2090, 28.6139]) == 0.0

    def test_is_symmetric(self):
        a = [77.2090, 28.6139]
        b = [72.8777, 19.0760]

        assert distance_km(a, b) == distance_km(b, a)

    def test_delhi_points(self):
        """Two Delhi-area points are roughly four and a half kilometres apart."""
        result = distance_km([77.2090, 28.6139], [77.2300, 28.6500])

        assert 4.4 <= result <= 4.8

    def test_rounds_to_one_decimal(self):
        result = distance_km([77.2090, 28.6139], [77.2300, 28.6500])

        assert result == round(result, 1)

    def test_accepts_geo_points(self):
        a = GeoPoint(longitude=77.2090, latitude=28.6139)
        b = GeoPoint(longitude=77.2300, latitude=28.6500)

        assert distance_km(a, b) == distance_km(a.coordinates, b.coordinates)

    @pytest.mark.parametrize(
        "a,b",
        [
            (None, [77.2, 28.6]),
            ([77.2, 28.6], None),
            ([77.2], [77.2, 28.6]),
            ([77.2, 28.6], []),
            (["a", "b"], [77.2, 28.6]),
            ([77.2, 28.6], [77.2, "north"]),
        ],
    )
    def test_malformed_input_returns_sentinel(self, a, b):
        assert distance_km(a, b) == INVALID_DISTANCE == -1


class TestApproximateAddress:
    """Test cases for address obfuscation."""

    def test_drops_street_segment(self):
        assert approximate_address("12 Baker St, Marylebone, London") == "Marylebone, London"

    def test_single_segment_is_kept(self):
        assert approximate_address("Connaught Place") == "Connaught Place"

    @pytest.mark.parametrize("address", [None, ""])
    def test_missing_address(self, address):
        assert approximate_address(address) == "Unknown"
