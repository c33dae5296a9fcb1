"""Tests for posList coordinate parsing"""
import pytest

# Add parent directory to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from uvar_zones.config import NL_BOUNDS
from uvar_zones.transformers.coordinate_parser import in_bounds, orient_pair, parse_coordinates


class TestParseCoordinates:
    """Tests for parse_coordinates"""

    def test_lat_lon_pairs(self):
        """Test pairs already in lat/lon order are kept"""
        points = parse_coordinates("51.92 4.46 51.93 4.49 52.37 4.90")

        assert points == [(51.92, 4.46), (51.93, 4.49), (52.37, 4.90)]

    def test_swapped_pair_is_corrected(self):
        """Test lon/lat input is returned latitude first"""
        assert parse_coordinates("4.4 51.9") == [(51.9, 4.4)]

    def test_mixed_order(self):
        """Test each pair is oriented independently"""
        points = parse_coordinates("51.9 4.4 4.5 52.0")

        assert points == [(51.9, 4.4), (52.0, 4.5)]

    def test_out_of_envelope_pair_is_skipped(self):
        """Test a pair outside the envelope in both orders does not affect later pairs"""
        assert parse_coordinates("999 999 51.9 4.4") == [(51.9, 4.4)]

    def test_non_numeric_pair_is_skipped(self):
        """Test pairs with unparseable tokens are skipped"""
        points = parse_coordinates("51.9 abc 52.0 4.5")

        assert points == [(52.0, 4.5)]

    def test_nan_is_skipped(self):
        """Test NaN parses but never falls inside the envelope"""
        assert parse_coordinates("nan 4.4 51.9 4.4") == [(51.9, 4.4)]

    def test_odd_token_count(self):
        """Test a trailing unpaired token is ignored"""
        points = parse_coordinates("51.9 4.4 52.0 4.5 53.0")

        assert points == [(51.9, 4.4), (52.0, 4.5)]

    def test_empty_input(self):
        """Test empty and missing input give no points"""
        assert parse_coordinates("") == []
        assert parse_coordinates(None) == []
        assert parse_coordinates("   \n\t ") == []

    def test_whitespace_variants(self):
        """Test tokens separated by newlines, tabs and repeated spaces"""
        points = parse_coordinates("  51.9\t4.4\n\n52.0    4.5  ")

        assert points == [(51.9, 4.4), (52.0, 4.5)]

    def test_all_points_within_envelope(self):
        """Test every returned point lies inside the envelope and count matches pairs"""
        raw = "51.0 4.0 6.5 53.5 50.6 3.3 7.2 52.2"
        points = parse_coordinates(raw)

        assert len(points) == len(raw.split()) // 2
        for lat, lon in points:
            assert in_bounds(lat, lon)

    def test_custom_bounds(self):
        """Test a different envelope can be supplied"""
        sf_bounds = {"min_lat": 37.6, "max_lat": 37.9, "min_lon": -123.2, "max_lon": -122.2}

        assert parse_coordinates("-122.4 37.7", sf_bounds) == [(37.7, -122.4)]
        assert parse_coordinates("51.9 4.4", sf_bounds) == []


class TestOrientPair:
    """Tests for the envelope test"""

    def test_as_is_preferred(self):
        """Test the as-is reading wins"""
        assert orient_pair(52.0, 5.0) == (52.0, 5.0)

    def test_swapped(self):
        assert orient_pair(5.0, 52.0) == (52.0, 5.0)

    def test_neither(self):
        assert orient_pair(40.7, -74.0) is None

    def test_envelope_edges_are_inclusive(self):
        """Test boundary values count as inside"""
        assert orient_pair(NL_BOUNDS["min_lat"], NL_BOUNDS["min_lon"]) == (50.5, 3.2)
        assert orient_pair(NL_BOUNDS["max_lat"], NL_BOUNDS["max_lon"]) == (53.7, 7.3)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
