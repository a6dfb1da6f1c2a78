"""
Hilbert curve ordering of the dyadic squares inside a quintant.

A cell at resolution r >= 1 is one square of a 2^(r-1) x 2^(r-1) grid over the
quintant's unit square. Squares are numbered along a Hilbert curve, which
keeps nearby cells close in identifier order and visits the four children of
every square consecutively, so the parent's index is ``index >> 2``.
"""

from typing import Tuple


def _rotate(n: int, x: int, y: int, rx: int, ry: int) -> Tuple[int, int]:
    if ry == 0:
        if rx == 1:
            x = n - 1 - x
            y = n - 1 - y
        x, y = y, x
    return x, y


def xy_to_index(order: int, x: int, y: int) -> int:
    """
    Hilbert index of square (x, y) on a 2^order grid.

    Args:
        order: Grid order; the grid has 2^order squares per side.
        x: Column in [0, 2^order).
        y: Row in [0, 2^order).

    Returns:
        Index in [0, 4^order).
    """
    n = 1 << order
    index = 0
    s = n >> 1
    while s > 0:
        rx = 1 if x & s else 0
        ry = 1 if y & s else 0
        index += s * s * ((3 * rx) ^ ry)
        x, y = _rotate(n, x, y, rx, ry)
        s >>= 1
    return index


def index_to_xy(order: int, index: int) -> Tuple[int, int]:
    """Inverse of :func:`xy_to_index`."""
    n = 1 << order
    x = y = 0
    t = index
    s = 1
    while s < n:
        rx = 1 & (t >> 1)
        ry = 1 & (t ^ rx)
        x, y = _rotate(s, x, y, rx, ry)
        x += s * rx
        y += s * ry
        t >>= 2
        s <<= 1
    return x, y
