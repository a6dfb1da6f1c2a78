"""
Set Reducer
===========

Compaction and uncompaction of cell sets.

``compact`` replaces every complete sibling group (all 5 quintants of a base
cell, or all 4 children of a finer cell) with its parent, finest resolution
first, so merges cascade up the hierarchy. ``uncompact`` expands cells to a
uniform target resolution. For any valid set S whose cells are all at or
above resolution r:

    compact(compact(S)) == compact(S)
    uncompact(compact(S), r) == uncompact(S, r)

Both return sorted lists, so identical input sets give identical output.
"""

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Set

from .codec import resolution_of
from .errors import InvalidResolution
from .hierarchy import _children_unchecked, _parent_unchecked
from .resolution import digit_radix, validate_resolution

logger = logging.getLogger(__name__)


def _bucket_by_resolution(cells: Iterable[int]) -> Dict[int, Set[int]]:
    buckets: Dict[int, Set[int]] = defaultdict(set)
    for cell in cells:
        buckets[resolution_of(cell)].add(int(cell))
    return buckets


def _drop_covered(buckets: Dict[int, Set[int]]) -> None:
    """Remove cells that already have an ancestor in the set."""
    resolutions = sorted(buckets)
    for i, res in enumerate(resolutions):
        coarser = [r for r in resolutions[:i] if buckets[r]]
        if not coarser:
            continue
        buckets[res] = {
            cell for cell in buckets[res]
            if not any(_parent_unchecked(cell, res, r) in buckets[r] for r in coarser)
        }


def compact(cells: Iterable[int]) -> List[int]:
    """
    Replace complete sibling groups with their parents, recursively.

    Args:
        cells: Cell identifiers at any mix of resolutions. Duplicates are
            ignored.

    Returns:
        Sorted list of compacted cells.

    Raises:
        InvalidCell: If any identifier is zero or malformed.
    """
    buckets = _bucket_by_resolution(cells)
    n_input = sum(len(bucket) for bucket in buckets.values())
    if not buckets:
        return []
    _drop_covered(buckets)

    for res in range(max(buckets), 0, -1):
        bucket = buckets.get(res)
        if not bucket:
            continue
        groups: Dict[int, List[int]] = defaultdict(list)
        for cell in bucket:
            groups[_parent_unchecked(cell, res, res - 1)].append(cell)

        radix = digit_radix(res)
        merged = [parent for parent, members in groups.items() if len(members) == radix]
        if not merged:
            continue
        for parent in merged:
            bucket.difference_update(groups[parent])
        buckets[res - 1].update(merged)

    result = sorted(cell for bucket in buckets.values() for cell in bucket)
    logger.debug(f"Compacted {n_input:,} cells to {len(result):,}")
    return result


def uncompact(cells: Iterable[int], target_resolution: int) -> List[int]:
    """
    Expand cells to all their descendants at ``target_resolution``.

    Cells already at the target pass through. A cell finer than the target
    is an error: uncompaction never ascends.

    Returns:
        Sorted, deduplicated list of cells at ``target_resolution``.

    Raises:
        InvalidCell: If any identifier is zero or malformed.
        InvalidResolution: If the target is out of range or coarser than a
            cell in the input.
    """
    target_resolution = validate_resolution(target_resolution)
    expanded: Set[int] = set()
    for cell in cells:
        res = resolution_of(cell)
        if res > target_resolution:
            raise InvalidResolution(
                f"Cell {int(cell):#018x} at resolution {res} is finer than "
                f"target resolution {target_resolution}"
            )
        expanded.update(_children_unchecked(int(cell), res, target_resolution))

    result = sorted(expanded)
    logger.debug(f"Uncompacted to {len(result):,} cells at resolution {target_resolution}")
    return result
