"""
Tests for shared geographic functions.

Tests the haversine distance and route length calculations.
"""

import pytest

from snowtrack.shared.geo import (
    haversine_m,
    distance,
    path_length,
    EARTH_RADIUS_M,
)
from snowtrack.features.tracking.schemas import LocationSample


def _point(lat: float, lon: float) -> LocationSample:
    return LocationSample(latitude=lat, longitude=lon, timestamp_ms=0)


# =============================================================================
# Test Haversine Distance
# =============================================================================

class TestHaversine:
    """Tests for haversine_m function."""

    def test_same_point(self):
        """Distance between same point should be 0."""
        dist = haversine_m(46.0, 7.0, 46.0, 7.0)
        assert dist == 0.0

    def test_known_distance_almaty_astana(self):
        """Test with known distance (Almaty to Astana ~974km)."""
        dist = haversine_m(43.238949, 76.945465, 51.169392, 71.449074)
        assert 950_000 < dist < 1_000_000

    def test_small_distance(self):
        """0.001 degree latitude ≈ 111 meters."""
        dist = haversine_m(43.0, 76.0, 43.001, 76.0)
        assert 110 < dist < 112

    def test_symmetry(self):
        """Distance A->B should equal B->A."""
        dist_ab = haversine_m(43.0, 76.0, 44.0, 77.0)
        dist_ba = haversine_m(44.0, 77.0, 43.0, 76.0)
        assert dist_ab == pytest.approx(dist_ba, rel=1e-12)

    def test_equator_step(self):
        """0.0001 degree longitude at the equator ≈ 11.12 m."""
        dist = haversine_m(0.0, 0.0, 0.0, 0.0001)
        assert dist == pytest.approx(11.1195, abs=0.001)

    def test_earth_radius_constant(self):
        """Verify Earth radius constant is correct."""
        assert EARTH_RADIUS_M == 6_371_000.0

    def test_cross_hemisphere(self):
        """90 degrees of latitude is a quarter meridian (~10,000 km)."""
        dist = haversine_m(45.0, 0.0, -45.0, 0.0)
        assert 9_900_000 < dist < 10_100_000


# =============================================================================
# Test Sample Distance
# =============================================================================

class TestDistance:
    """Tests for distance between samples."""

    def test_coincident_samples(self):
        a = _point(46.5, 7.9)
        assert distance(a, a) == 0.0

    def test_matches_haversine(self):
        a = _point(46.5, 7.9)
        b = _point(46.501, 7.902)
        assert distance(a, b) == haversine_m(46.5, 7.9, 46.501, 7.902)

    @pytest.mark.parametrize("a,b", [
        ((0.0, 0.0), (0.0, 0.0002)),
        ((46.5, 7.9), (46.49, 7.95)),
        ((-33.8688, 151.2093), (-37.8136, 144.9631)),
    ])
    def test_symmetric(self, a, b):
        pa, pb = _point(*a), _point(*b)
        assert distance(pa, pb) == pytest.approx(distance(pb, pa), rel=1e-12)


# =============================================================================
# Test Path Length
# =============================================================================

class TestPathLength:
    """Tests for path_length function."""

    def test_empty(self):
        assert path_length([]) == 0.0

    def test_single_point(self):
        assert path_length([_point(46.0, 7.0)]) == 0.0

    def test_sum_of_steps(self):
        points = [_point(0.0, 0.0), _point(0.0, 0.0001), _point(0.0, 0.0002)]
        expected = distance(points[0], points[1]) + distance(points[1], points[2])
        assert path_length(points) == pytest.approx(expected)

    def test_out_and_back(self):
        """Going back doubles the distance, it does not cancel."""
        points = [_point(0.0, 0.0), _point(0.0, 0.001), _point(0.0, 0.0)]
        one_way = haversine_m(0.0, 0.0, 0.0, 0.001)
        assert path_length(points) == pytest.approx(2 * one_way)
