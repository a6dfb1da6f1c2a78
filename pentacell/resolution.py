"""
Resolution Table
================

Static per-resolution constants of the pentagonal hierarchy.

Key Geometric Constants:
- Resolution 0: the 12 faces of a dodecahedron inscribed in the sphere
- Resolution 1: each face split into 5 quintants (60 cells)
- Resolution r >= 2: each cell split into 4 children (60 * 4^(r-1) cells)

The projection is exactly equal-area, so ``cell_area(r)`` is the true area of
every cell at resolution ``r``, not an average.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import InvalidResolution

logger = logging.getLogger(__name__)

#: Finest addressable resolution. The 64-bit layout holds 6 head bits, two
#: bits per level from resolution 2 and one marker bit.
MAX_RESOLUTION = 29

#: Authalic radius of the Earth in metres.
AUTHALIC_RADIUS_EARTH = 6371007.2

#: Surface area of the authalic sphere in square metres.
AUTHALIC_AREA_EARTH = 4.0 * math.pi * AUTHALIC_RADIUS_EARTH ** 2

NUM_BASE_CELLS = 12
QUINTANTS_PER_FACE = 5
CHILDREN_PER_CELL = 4


@dataclass(frozen=True)
class ResolutionInfo:
    """One row of the resolution table."""

    resolution: int
    num_cells: int
    cell_area_m2: float
    # Branching factor from resolution - 1 into this resolution.
    radix: int
    # Identifier bits consumed by this level (head bits at 0 and 1).
    bits: int


def validate_resolution(resolution, max_resolution: int = MAX_RESOLUTION) -> int:
    """
    Check that ``resolution`` is an integer in [0, max_resolution].

    Args:
        resolution: Value to check. Booleans are rejected.
        max_resolution: Inclusive upper bound.

    Returns:
        The resolution as a plain ``int``.

    Raises:
        InvalidResolution: If the value is not an integer or out of range.
    """
    if isinstance(resolution, bool) or not isinstance(resolution, int):
        try:
            as_int = int(resolution)
        except (TypeError, ValueError):
            raise InvalidResolution(f"Resolution must be an integer, got {resolution!r}")
        if as_int != resolution:
            raise InvalidResolution(f"Resolution must be an integer, got {resolution!r}")
        resolution = as_int
    if not 0 <= resolution <= max_resolution:
        raise InvalidResolution(
            f"Resolution must be between 0 and {max_resolution}, got {resolution}"
        )
    return resolution


def digit_radix(resolution: int) -> int:
    """Number of children a cell at ``resolution - 1`` has (12 roots at 0)."""
    if resolution == 0:
        return NUM_BASE_CELLS
    if resolution == 1:
        return QUINTANTS_PER_FACE
    return CHILDREN_PER_CELL


def _num_cells(resolution: int) -> int:
    if resolution == 0:
        return NUM_BASE_CELLS
    return NUM_BASE_CELLS * QUINTANTS_PER_FACE * CHILDREN_PER_CELL ** (resolution - 1)


def _build_table() -> Tuple[ResolutionInfo, ...]:
    rows = []
    for res in range(MAX_RESOLUTION + 1):
        count = _num_cells(res)
        rows.append(ResolutionInfo(
            resolution=res,
            num_cells=count,
            cell_area_m2=AUTHALIC_AREA_EARTH / count,
            radix=digit_radix(res),
            bits=6 if res <= 1 else 2,
        ))
    return tuple(rows)


RESOLUTION_TABLE: Tuple[ResolutionInfo, ...] = _build_table()


def get_num_cells(resolution: int) -> int:
    """
    Total number of cells covering the globe at ``resolution``.

    Formula: 12 at resolution 0, 60 * 4^(r-1) above.

    Raises:
        InvalidResolution: If the resolution is out of range.
    """
    return RESOLUTION_TABLE[validate_resolution(resolution)].num_cells


def cell_area(resolution: int) -> float:
    """
    Area of a single cell at ``resolution`` in square metres.

    Raises:
        InvalidResolution: If the resolution is out of range.
    """
    return RESOLUTION_TABLE[validate_resolution(resolution)].cell_area_m2


def descendants_count(parent_res: int, child_res: int) -> int:
    """
    Number of descendants a single cell at ``parent_res`` has at ``child_res``.

    Examples:
        - Res0 -> Res1: 5 quintants
        - Res1 -> Res3: 4^2 = 16
        - Res0 -> Res3: 5 * 4^2 = 80
    """
    parent_res = validate_resolution(parent_res)
    child_res = validate_resolution(child_res)
    if child_res < parent_res:
        raise InvalidResolution(
            f"Child resolution {child_res} must be >= parent {parent_res}"
        )
    return RESOLUTION_TABLE[child_res].num_cells // RESOLUTION_TABLE[parent_res].num_cells


def log_resolution_summary(logger_instance: Optional[logging.Logger] = None) -> None:
    """Log the resolution table, one line per level."""
    log = logger_instance or logger

    log.info("=" * 60)
    log.info("Pentacell Resolution Table")
    log.info("=" * 60)
    for row in RESOLUTION_TABLE:
        edge_m = math.sqrt(row.cell_area_m2)
        log.info(
            f"  Res{row.resolution:>2}: {row.num_cells:>24,} cells, "
            f"{row.cell_area_m2:>18,.3f} m^2 (~{edge_m:,.3f} m)"
        )
    log.info("=" * 60)
