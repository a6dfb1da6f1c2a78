"""
Unit tests for the lon/lat <-> cell projector.
"""

import pytest

from pentacell import (
    MAX_RESOLUTION,
    InvalidCell,
    InvalidResolution,
    OutOfRangeCoordinate,
    cell_to_lonlat,
    cell_to_parent,
    decode,
    get_res0_cells,
    lonlat_to_cell,
    resolution_of,
)
from pentacell.projection import cell_square

SAMPLE_POINTS = [
    (0.0, 0.0),
    (4.3, 52.0),        # Delft
    (-122.4194, 37.7749),
    (151.2, -33.9),
    (179.999, 12.5),
    (-179.999, -12.5),
    (180.0, 0.0),
    (-180.0, 0.0),
    (36.0, -26.56505),  # lower-ring face centre
    (0.0, 90.0),
    (0.0, -90.0),
    (123.4, 89.9999),
    (-45.0, -89.9999),
]


class TestLonLatToCell:
    """Test forward projection."""

    @pytest.mark.parametrize("lon,lat", SAMPLE_POINTS)
    def test_resolution_encoded(self, lon, lat):
        for res in (0, 1, 2, 7, 15, MAX_RESOLUTION):
            assert resolution_of(lonlat_to_cell(lon, lat, res)) == res

    def test_north_pole_base_cell(self):
        assert lonlat_to_cell(0.0, 90.0, 0) == get_res0_cells()[0]
        assert decode(lonlat_to_cell(10.0, 89.0, 3)).base_cell == 0

    def test_south_pole_base_cell(self):
        assert decode(lonlat_to_cell(0.0, -90.0, 0)).base_cell == 11

    def test_equator_origin_is_upper_ring(self):
        assert decode(lonlat_to_cell(0.0, 0.0, 0)).base_cell == 1

    def test_antimeridian_is_continuous(self):
        assert lonlat_to_cell(180.0, -20.0, 9) == lonlat_to_cell(-180.0, -20.0, 9)

    def test_nearby_points_share_cell(self):
        assert lonlat_to_cell(4.3, 52.0, 5) == lonlat_to_cell(4.3001, 52.0001, 5)

    def test_distant_points_differ(self):
        assert lonlat_to_cell(4.3, 52.0, 5) != lonlat_to_cell(-4.3, -52.0, 5)

    @pytest.mark.parametrize("lon,lat,res", [
        (181.0, 0.0, 5),
        (-180.5, 0.0, 5),
        (0.0, 90.5, 5),
        (0.0, -91.0, 5),
        (float("nan"), 0.0, 5),
        (0.0, float("inf"), 5),
    ])
    def test_out_of_range(self, lon, lat, res):
        with pytest.raises(OutOfRangeCoordinate):
            lonlat_to_cell(lon, lat, res)

    @pytest.mark.parametrize("res", [-1, MAX_RESOLUTION + 1, 30, 1.5])
    def test_bad_resolution(self, res):
        with pytest.raises(InvalidResolution):
            lonlat_to_cell(0.0, 0.0, res)


class TestHierarchyConsistency:
    """The cell at a coarse resolution is the ancestor of the fine cell."""

    def test_origin(self):
        assert lonlat_to_cell(0, 0, 10) == cell_to_parent(lonlat_to_cell(0, 0, 15), 10)

    @pytest.mark.parametrize("lon,lat", SAMPLE_POINTS)
    def test_every_level(self, lon, lat):
        fine = lonlat_to_cell(lon, lat, 20)
        for res in range(0, 20):
            assert lonlat_to_cell(lon, lat, res) == cell_to_parent(fine, res)


class TestCellToLonLat:
    """Test inverse projection."""

    @pytest.mark.parametrize("lon,lat", SAMPLE_POINTS)
    def test_center_round_trip(self, lon, lat):
        for res in (0, 1, 2, 3, 6, 12, 20):
            cell = lonlat_to_cell(lon, lat, res)
            center_lon, center_lat = cell_to_lonlat(cell)
            assert lonlat_to_cell(center_lon, center_lat, res) == cell

    @pytest.mark.parametrize("lon,lat", [(4.3, 52.0), (-70.25, -33.5), (100.1, 10.2)])
    def test_finest_round_trip(self, lon, lat):
        cell = lonlat_to_cell(lon, lat, MAX_RESOLUTION)
        assert lonlat_to_cell(*cell_to_lonlat(cell), MAX_RESOLUTION) == cell

    def test_center_is_near_point(self):
        lon, lat = cell_to_lonlat(lonlat_to_cell(4.3, 52.0, 20))
        assert lon == pytest.approx(4.3, abs=1e-3)
        assert lat == pytest.approx(52.0, abs=1e-3)

    def test_base_cell_center(self):
        lon, lat = cell_to_lonlat(get_res0_cells()[0])
        assert lat == pytest.approx(90.0)

    def test_ranges(self):
        for cell in get_res0_cells():
            lon, lat = cell_to_lonlat(cell)
            assert -180.0 <= lon <= 180.0
            assert -90.0 <= lat <= 90.0

    def test_invalid(self):
        with pytest.raises(InvalidCell):
            cell_to_lonlat(0)


class TestCellSquare:
    """Test the parameter-square footprint."""

    def test_quintant_fills_square(self):
        square = cell_square(lonlat_to_cell(4.3, 52.0, 1))
        assert (square.u0, square.v0, square.size) == (0.0, 0.0, 1.0)

    def test_children_tile_parent(self):
        parent = cell_square(lonlat_to_cell(4.3, 52.0, 6))
        child = cell_square(lonlat_to_cell(4.3, 52.0, 7))
        assert child.size == parent.size / 2
        assert parent.u0 <= child.u0 < parent.u0 + parent.size
        assert parent.v0 <= child.v0 < parent.v0 + parent.size
