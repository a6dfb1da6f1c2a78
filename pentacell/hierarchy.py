"""
Hierarchy Navigator
===================

Parent and child derivation by bit manipulation of the identifier alone; no
trigonometry is involved.

Hierarchy shape:
- Resolution 0 -> 1: each base pentagon has 5 quintant children
- Resolution r -> r+1 (r >= 1): each cell has exactly 4 children, the
  Hilbert indices ``4h .. 4h + 3``
"""

import logging
from typing import List, Optional

from .codec import from_parts, hilbert_index_of, quintant_of, resolution_of
from .errors import InvalidCell, InvalidResolution
from .resolution import (
    MAX_RESOLUTION,
    NUM_BASE_CELLS,
    QUINTANTS_PER_FACE,
    descendants_count,
    validate_resolution,
)

logger = logging.getLogger(__name__)


def get_res0_cells() -> List[int]:
    """The twelve base cells in ascending order."""
    return [from_parts(base * QUINTANTS_PER_FACE, 0) for base in range(NUM_BASE_CELLS)]


def _parent_unchecked(cell: int, resolution: int, target: int) -> int:
    quintant = quintant_of(cell)
    if target == 0:
        return from_parts(quintant - quintant % QUINTANTS_PER_FACE, 0)
    if target == 1:
        return from_parts(quintant, 1)
    shift = 2 * (resolution - target)
    return from_parts(quintant, target, hilbert_index_of(cell, resolution) >> shift)


def cell_to_parent(cell: int, target_resolution: Optional[int] = None) -> int:
    """
    Ancestor of ``cell`` at ``target_resolution``.

    Args:
        cell: Cell identifier.
        target_resolution: Resolution of the ancestor. Defaults to the
            immediate parent. Equal to the cell's own resolution returns the
            cell itself.

    Raises:
        InvalidCell: If the cell is malformed, or is a base cell and no
            target is given.
        InvalidResolution: If the target is finer than the cell or out of range.
    """
    resolution = resolution_of(cell)
    if target_resolution is None:
        if resolution == 0:
            raise InvalidCell(f"Base cell {int(cell):#018x} has no parent")
        target_resolution = resolution - 1
    target_resolution = validate_resolution(target_resolution)
    if target_resolution > resolution:
        raise InvalidResolution(
            f"Parent resolution {target_resolution} is finer than cell resolution {resolution}"
        )
    if target_resolution == resolution:
        return int(cell)
    return _parent_unchecked(int(cell), resolution, target_resolution)


def _children_unchecked(cell: int, resolution: int, target: int) -> List[int]:
    quintant = quintant_of(cell)
    if target == resolution:
        return [cell]

    if resolution == 0:
        quintants = range(quintant, quintant + QUINTANTS_PER_FACE)
        if target == 1:
            return [from_parts(q, 1) for q in quintants]
        count = 4 ** (target - 1)
        return [from_parts(q, target, h) for q in quintants for h in range(count)]

    first = hilbert_index_of(cell, resolution) << (2 * (target - resolution))
    count = 4 ** (target - resolution)
    return [from_parts(quintant, target, h) for h in range(first, first + count)]


def cell_to_children(cell: int, target_resolution: Optional[int] = None) -> List[int]:
    """
    Descendants of ``cell`` at ``target_resolution``, in ascending order.

    Args:
        cell: Cell identifier.
        target_resolution: Resolution of the descendants. Defaults to the
            next finer resolution.

    Returns:
        A new list owned by the caller.

    Raises:
        InvalidCell: If the cell is malformed.
        InvalidResolution: If the target is coarser than the cell, or beyond
            the finest resolution.
    """
    resolution = resolution_of(cell)
    if target_resolution is None:
        if resolution == MAX_RESOLUTION:
            raise InvalidResolution(
                f"Cell at resolution {MAX_RESOLUTION} has no children"
            )
        target_resolution = resolution + 1
    target_resolution = validate_resolution(target_resolution)
    if target_resolution < resolution:
        raise InvalidResolution(
            f"Child resolution {target_resolution} is coarser than cell resolution {resolution}"
        )
    return _children_unchecked(int(cell), resolution, target_resolution)


def cell_to_children_count(cell: int, target_resolution: int) -> int:
    """Number of descendants at ``target_resolution`` without building them."""
    return descendants_count(resolution_of(cell), target_resolution)
