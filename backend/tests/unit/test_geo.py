"""Unit tests for coordinate grid snapping."""

import pytest

from ambiant_scan.utils.geo import (
    coords_key,
    format_coord,
    round_coords,
    round_half_away_from_zero,
)


class TestRounding:
    """Tests for round_half_away_from_zero and round_coords."""

    def test_rounds_to_two_decimals(self) -> None:
        assert round_coords(45.50884, -73.58781) == (45.51, -73.59)

    def test_ties_away_from_zero(self) -> None:
        assert round_half_away_from_zero(0.125) == 0.13
        assert round_half_away_from_zero(-0.125) == -0.13

    def test_negative_zero_is_normalized(self) -> None:
        value = round_half_away_from_zero(-0.001)
        assert value == 0.0
        assert format_coord(value) == "0"

    def test_already_on_grid(self) -> None:
        assert round_coords(45.5, -73.57) == (45.5, -73.57)


class TestCoordsKey:
    """Tests for cache key serialization."""

    def test_shortest_number_form(self) -> None:
        assert coords_key(45.5, -73.6) == "45.5,-73.6"
        assert coords_key(45.0, 10.0) == "45,10"
        assert coords_key(-33.8688, 151.2093) == "-33.87,151.21"

    @pytest.mark.parametrize(
        "lat,lon",
        [
            (45.501, -73.566),
            (45.5049, -73.5651),
            (45.4951, -73.5749),
        ],
    )
    def test_nearby_points_share_a_key(self, lat: float, lon: float) -> None:
        assert coords_key(lat, lon) == "45.5,-73.57"

    def test_distinct_cells_get_distinct_keys(self) -> None:
        assert coords_key(45.5, -73.57) != coords_key(45.51, -73.57)
        assert coords_key(1.2, 3.4) != coords_key(12.3, 4.0)

    def test_format_coord(self) -> None:
        assert format_coord(-73.57) == "-73.57"
        assert format_coord(180.0) == "180"
