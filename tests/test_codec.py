"""
Unit tests for the 64-bit cell identifier codec.
"""

import pytest

from pentacell import (
    MAX_RESOLUTION,
    CellParts,
    EncodingError,
    InvalidCell,
    cell_to_hex,
    decode,
    encode,
    hex_to_cell,
    is_valid_cell,
    resolution_of,
)
from pentacell.codec import from_parts, hilbert_index_of, marker_bit, quintant_of


class TestBitLayout:
    """Test the documented bit positions."""

    def test_base_cell_zero(self):
        assert encode(0, 0) == 1 << 57
        assert encode(0, 0) == 0x0200000000000000

    def test_base_cell_one(self):
        assert encode(1, 0) == 0x1600000000000000

    def test_quintant_level(self):
        assert encode(0, 1, (2,)) == 0x0900000000000000

    def test_first_hilbert_level(self):
        assert encode(0, 2, (0, 3)) == 0x0380000000000000

    def test_marker_positions(self):
        assert marker_bit(0) == 57
        assert marker_bit(1) == 56
        assert marker_bit(2) == 55
        assert marker_bit(MAX_RESOLUTION) == 1

    def test_finest_cell(self):
        path = (4,) + (3,) * (MAX_RESOLUTION - 1)
        cell = encode(11, MAX_RESOLUTION, path)
        expected = (59 << 58) | (((1 << 56) - 1) << 2) | (1 << 1)
        assert cell == expected
        assert resolution_of(cell) == MAX_RESOLUTION

    def test_bits_below_marker_are_zero(self):
        for res in range(MAX_RESOLUTION + 1):
            path = (() if res == 0 else (1,)) + (2,) * max(0, res - 1)
            cell = encode(5, res, path)
            assert cell & ((1 << marker_bit(res)) - 1) == 0

    def test_field_accessors(self):
        cell = encode(3, 4, (2, 1, 0, 3))
        assert quintant_of(cell) == 17
        assert hilbert_index_of(cell, 4) == 0b010011
        assert from_parts(17, 4, 0b010011) == cell


class TestRoundTrip:
    """Test decode(encode(x)) == x on representative triples."""

    @pytest.mark.parametrize("base_cell,resolution,path", [
        (0, 0, ()),
        (11, 0, ()),
        (7, 1, (4,)),
        (2, 2, (3, 0)),
        (9, 5, (1, 3, 2, 0, 1)),
        (6, 17, (0,) + (1, 2, 3, 0) * 4),
        (11, MAX_RESOLUTION, (4,) + (3,) * (MAX_RESOLUTION - 1)),
    ])
    def test_round_trip(self, base_cell, resolution, path):
        cell = encode(base_cell, resolution, path)
        assert decode(cell) == CellParts(base_cell, resolution, tuple(path))
        assert resolution_of(cell) == resolution

    def test_distinct_paths_give_distinct_ids(self):
        cells = {encode(4, 3, (d1, d2, d3))
                 for d1 in range(5) for d2 in range(4) for d3 in range(4)}
        assert len(cells) == 80

    def test_all_base_cells(self):
        for base in range(12):
            assert decode(encode(base, 0)).base_cell == base


class TestEncodingErrors:
    """Test rejection of inconsistent triples."""

    @pytest.mark.parametrize("base_cell,resolution,path", [
        (12, 0, ()),
        (-1, 0, ()),
        (0, -1, ()),
        (0, MAX_RESOLUTION + 1, (0,) * (MAX_RESOLUTION + 1)),
        (0, 2, (1,)),
        (0, 1, (1, 2)),
        (0, 1, (5,)),
        (0, 2, (0, 4)),
        (0, 3, (0, 1, -1)),
    ])
    def test_rejects(self, base_cell, resolution, path):
        with pytest.raises(EncodingError):
            encode(base_cell, resolution, path)


class TestInvalidCells:
    """Test that malformed identifiers never decode."""

    @pytest.mark.parametrize("cell", [
        0,
        -1,
        1 << 64,
        1 << 58,                    # marker above every valid position
        (60 << 58) | (1 << 57),     # base cell field out of range
        (1 << 58) | (1 << 57),      # quintant digit at resolution 0
        (1 << 57) | (1 << 56),      # resolution 1 with bit 57 set
        1 << 54,                    # marker on an even bit
        1 << 0,                     # marker below resolution 29
    ])
    def test_invalid(self, cell):
        assert not is_valid_cell(cell)
        with pytest.raises(InvalidCell):
            resolution_of(cell)
        with pytest.raises(InvalidCell):
            decode(cell)

    @pytest.mark.parametrize("cell", [1.5, float(1 << 57), True, "abc", None])
    def test_non_integers(self, cell):
        with pytest.raises(InvalidCell):
            resolution_of(cell)

    def test_invalid_cell_is_value_error(self):
        with pytest.raises(ValueError):
            decode(0)


class TestHexForm:
    """Test the 16-digit hex text form."""

    def test_round_trip(self):
        cell = encode(1, 0)
        assert cell_to_hex(cell) == "1600000000000000"
        assert hex_to_cell("1600000000000000") == cell

    def test_leading_zeros_kept(self):
        assert cell_to_hex(encode(0, 0)) == "0200000000000000"

    def test_bad_text(self):
        with pytest.raises(InvalidCell):
            hex_to_cell("not-hex")
        with pytest.raises(InvalidCell):
            hex_to_cell("0000000000000000")

    def test_hex_of_invalid_cell(self):
        with pytest.raises(InvalidCell):
            cell_to_hex(0)
