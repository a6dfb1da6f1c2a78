"""
Cell Identifier Codec
=====================

Packs (base_cell, resolution, path) into a single 64-bit unsigned integer.

Bit layout (bit 63 is the most significant)::

    resolution 0 : [63..58] base_cell * 5          marker at bit 57
    resolution 1 : [63..58] base_cell * 5 + d1     bit 57 = 0, marker at bit 56
    resolution r : [63..58] base_cell * 5 + d1     [57..60-2r] Hilbert index,
                                                   marker at bit 59 - 2r

``d1`` selects one of the five quintants of the base pentagon. Digits ``d2..dr``
(each 0-3) are the base-4 digits of the Hilbert index of the cell inside that
quintant. Every bit below the marker is zero, so the resolution is recovered
from the position of the lowest set bit alone.

The identifier 0 means "no cell" and never decodes.
"""

from typing import NamedTuple, Sequence, Tuple

from .errors import EncodingError, InvalidCell
from .resolution import (
    CHILDREN_PER_CELL,
    MAX_RESOLUTION,
    NUM_BASE_CELLS,
    QUINTANTS_PER_FACE,
)

HEAD_SHIFT = 58
HEAD_MASK = 0x3F << HEAD_SHIFT
UINT64_MAX = (1 << 64) - 1
NUM_QUINTANTS = NUM_BASE_CELLS * QUINTANTS_PER_FACE

_RES0_MARKER_BIT = 57
_RES1_MARKER_BIT = 56


class CellParts(NamedTuple):
    """Decoded logical fields of a cell identifier."""

    base_cell: int
    resolution: int
    path: Tuple[int, ...]


def marker_bit(resolution: int) -> int:
    """Bit position of the resolution marker."""
    if resolution == 0:
        return _RES0_MARKER_BIT
    if resolution == 1:
        return _RES1_MARKER_BIT
    return 59 - 2 * resolution


def _lowest_set_bit(value: int) -> int:
    return (value & -value).bit_length() - 1


def _check_word(cell) -> int:
    if isinstance(cell, (bool, float)):
        raise InvalidCell(f"Cell identifier must be an integer, got {cell!r}")
    try:
        value = int(cell)
    except (TypeError, ValueError):
        raise InvalidCell(f"Cell identifier must be an integer, got {cell!r}")
    if value != cell:
        raise InvalidCell(f"Cell identifier must be an integer, got {cell!r}")
    if value == 0:
        raise InvalidCell("Cell identifier 0 does not denote a cell")
    if not 0 < value <= UINT64_MAX:
        raise InvalidCell(f"Cell identifier {value} is not a 64-bit unsigned integer")
    return value


def resolution_of(cell: int) -> int:
    """
    Resolution of a cell, read from its marker bit in O(1).

    Raises:
        InvalidCell: If ``cell`` is zero or does not follow the bit layout.
    """
    value = _check_word(cell)
    head = value >> HEAD_SHIFT
    if head >= NUM_QUINTANTS:
        raise InvalidCell(f"Cell {value:#018x} has an invalid base cell field")

    low = _lowest_set_bit(value)
    if low == _RES0_MARKER_BIT:
        if head % QUINTANTS_PER_FACE:
            raise InvalidCell(f"Cell {value:#018x} has a quintant digit at resolution 0")
        return 0
    if low == _RES1_MARKER_BIT:
        if (value >> _RES0_MARKER_BIT) & 1:
            raise InvalidCell(f"Cell {value:#018x} has no valid resolution marker")
        return 1
    if low % 2 == 1 and low <= marker_bit(2):
        return (59 - low) // 2
    raise InvalidCell(f"Cell {value:#018x} has no valid resolution marker")


def is_valid_cell(cell) -> bool:
    """True when ``cell`` decodes to a cell."""
    try:
        resolution_of(cell)
    except InvalidCell:
        return False
    return True


def quintant_of(cell: int) -> int:
    """Quintant index (base_cell * 5 + d1) in [0, 60); no validation."""
    return int(cell) >> HEAD_SHIFT


def hilbert_index_of(cell: int, resolution: int) -> int:
    """Hilbert index of a cell at ``resolution >= 1``; no validation."""
    if resolution <= 1:
        return 0
    width = 2 * (resolution - 1)
    return (int(cell) >> (HEAD_SHIFT - width)) & ((1 << width) - 1)


def from_parts(quintant: int, resolution: int, hilbert_index: int = 0) -> int:
    """
    Assemble an identifier from its packed fields.

    For resolution 0 ``quintant`` must be a multiple of 5 (the base cell's
    first quintant). No range checking; see :func:`encode` for that.
    """
    cell = quintant << HEAD_SHIFT
    if resolution >= 2:
        cell |= hilbert_index << (HEAD_SHIFT - 2 * (resolution - 1))
    return cell | (1 << marker_bit(resolution))


def encode(base_cell: int, resolution: int, path: Sequence[int] = ()) -> int:
    """
    Encode a (base_cell, resolution, path) triple.

    Args:
        base_cell: Base pentagon in [0, 12).
        resolution: Resolution in [0, MAX_RESOLUTION].
        path: One digit per level above 0: a quintant digit in [0, 5) then
            Hilbert digits in [0, 4).

    Returns:
        The 64-bit cell identifier.

    Raises:
        EncodingError: If any field is out of range or the path length does
            not match the resolution.
    """
    if not 0 <= resolution <= MAX_RESOLUTION:
        raise EncodingError(
            f"Resolution must be between 0 and {MAX_RESOLUTION}, got {resolution}"
        )
    if not 0 <= base_cell < NUM_BASE_CELLS:
        raise EncodingError(f"Base cell must be in [0, {NUM_BASE_CELLS}), got {base_cell}")
    path = tuple(path)
    if len(path) != resolution:
        raise EncodingError(
            f"Path of length {len(path)} is inconsistent with resolution {resolution}"
        )

    quintant = base_cell * QUINTANTS_PER_FACE
    hilbert_index = 0
    for level, digit in enumerate(path, start=1):
        radix = QUINTANTS_PER_FACE if level == 1 else CHILDREN_PER_CELL
        if not 0 <= digit < radix:
            raise EncodingError(f"Digit {digit} at level {level} must be in [0, {radix})")
        if level == 1:
            quintant += digit
        else:
            hilbert_index = (hilbert_index << 2) | digit
    return from_parts(quintant, resolution, hilbert_index)


def decode(cell: int) -> CellParts:
    """
    Decode an identifier into (base_cell, resolution, path).

    Raises:
        InvalidCell: If ``cell`` is zero or malformed.
    """
    resolution = resolution_of(cell)
    cell = int(cell)
    quintant = quintant_of(cell)
    base_cell, first_digit = divmod(quintant, QUINTANTS_PER_FACE)
    if resolution == 0:
        return CellParts(base_cell, 0, ())

    hilbert_index = hilbert_index_of(cell, resolution)
    digits = [(hilbert_index >> (2 * i)) & 3 for i in range(resolution - 2, -1, -1)]
    return CellParts(base_cell, resolution, (first_digit, *digits))


def cell_to_hex(cell: int) -> str:
    """16-digit lowercase hex form of a valid cell."""
    resolution_of(cell)
    return f"{int(cell):016x}"


def hex_to_cell(text: str) -> int:
    """
    Parse the hex form produced by :func:`cell_to_hex`.

    Raises:
        InvalidCell: If the text is not hex or does not decode to a cell.
    """
    try:
        cell = int(text.strip(), 16)
    except (AttributeError, ValueError):
        raise InvalidCell(f"Not a hexadecimal cell identifier: {text!r}")
    resolution_of(cell)
    return cell
