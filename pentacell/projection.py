"""
Geodesic Projector
==================

Converts between longitude/latitude and cell identifiers.

Forward (``lonlat_to_cell``):
    1. lon/lat -> unit vector
    2. nearest dodecahedron face centre -> base cell
    3. azimuth around the face centre -> quintant (resolution 1)
    4. equal-area map of the quintant onto the unit square -> (u, v)
    5. dyadic square of side 2^-(r-1) holding (u, v), numbered along a
       Hilbert curve -> resolution r

Inverse (``cell_to_lonlat``) returns the image of the centre of the cell's
parameter square, which halves the cell's area along both square axes. At
resolution 0 it is the face centre.
"""

import math
from typing import NamedTuple, Tuple

import numpy as np

from .codec import from_parts, hilbert_index_of, quintant_of, resolution_of
from .errors import OutOfRangeCoordinate
from .geometry import (
    FACE_CENTERS,
    lonlat_to_xyz,
    nearest_face,
    quintant_in_face,
    sphere_to_square,
    square_to_sphere,
    xyz_to_lonlat,
)
from .hilbert import index_to_xy, xy_to_index
from .resolution import QUINTANTS_PER_FACE, validate_resolution


class CellSquare(NamedTuple):
    """A cell's footprint in its quintant's unit square."""

    quintant: int
    resolution: int
    u0: float
    v0: float
    size: float


def validate_lonlat(lon: float, lat: float) -> Tuple[float, float]:
    """
    Check that a coordinate pair is finite and inside the valid ranges.

    Raises:
        OutOfRangeCoordinate: If either value is not a finite number in range.
    """
    try:
        lon = float(lon)
        lat = float(lat)
    except (TypeError, ValueError):
        raise OutOfRangeCoordinate(f"Coordinates must be numbers, got ({lon!r}, {lat!r})")
    if not (math.isfinite(lon) and math.isfinite(lat)):
        raise OutOfRangeCoordinate(f"Coordinates must be finite, got ({lon}, {lat})")
    if not -180.0 <= lon <= 180.0:
        raise OutOfRangeCoordinate(f"Longitude must be in [-180, 180], got {lon}")
    if not -90.0 <= lat <= 90.0:
        raise OutOfRangeCoordinate(f"Latitude must be in [-90, 90], got {lat}")
    return lon, lat


def point_to_cell(p: np.ndarray, resolution: int) -> int:
    """Cell containing unit vector ``p``; ``resolution`` must already be valid."""
    face = nearest_face(p)
    if resolution == 0:
        return from_parts(face * QUINTANTS_PER_FACE, 0)

    quintant = face * QUINTANTS_PER_FACE + quintant_in_face(face, p)
    if resolution == 1:
        return from_parts(quintant, 1)

    u, v = sphere_to_square(quintant, p)
    order = resolution - 1
    n = 1 << order
    x = min(int(u * n), n - 1)
    y = min(int(v * n), n - 1)
    return from_parts(quintant, resolution, xy_to_index(order, x, y))


def lonlat_to_cell(lon: float, lat: float, resolution: int) -> int:
    """
    Cell containing a point at the given resolution.

    Args:
        lon: Longitude in degrees, [-180, 180].
        lat: Latitude in degrees, [-90, 90].
        resolution: Target resolution.

    Returns:
        64-bit cell identifier with ``resolution_of(cell) == resolution``.

    Raises:
        OutOfRangeCoordinate: If the coordinate is outside the valid ranges.
        InvalidResolution: If the resolution is out of range.
    """
    lon, lat = validate_lonlat(lon, lat)
    resolution = validate_resolution(resolution)
    return point_to_cell(lonlat_to_xyz(lon, lat), resolution)


def cell_square(cell: int) -> CellSquare:
    """
    Parameter-square footprint of a cell at resolution >= 1.

    Raises:
        InvalidCell: If the cell is malformed.
    """
    resolution = resolution_of(cell)
    quintant = quintant_of(cell)
    if resolution <= 1:
        return CellSquare(quintant, resolution, 0.0, 0.0, 1.0)
    order = resolution - 1
    x, y = index_to_xy(order, hilbert_index_of(cell, resolution))
    size = 1.0 / (1 << order)
    return CellSquare(quintant, resolution, x * size, y * size, size)


def cell_center_xyz(cell: int) -> np.ndarray:
    """Unit vector of a cell's representative point."""
    resolution = resolution_of(cell)
    if resolution == 0:
        return FACE_CENTERS[quintant_of(cell) // QUINTANTS_PER_FACE].copy()
    square = cell_square(cell)
    half = 0.5 * square.size
    return square_to_sphere(square.quintant, square.u0 + half, square.v0 + half)


def cell_to_lonlat(cell: int) -> Tuple[float, float]:
    """
    Representative point of a cell as (lon, lat) in degrees.

    The point is the centre of the cell in equal-area parameter space, so
    ``lonlat_to_cell(*cell_to_lonlat(c), resolution_of(c)) == c``.

    Raises:
        InvalidCell: If ``cell`` is zero or malformed.
    """
    return xyz_to_lonlat(cell_center_xyz(cell))
