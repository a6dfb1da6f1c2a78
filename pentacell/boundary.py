"""
Boundary Generator
==================

Outlines of cells as five-vertex (lon, lat) rings.

- Resolution 0: the five corners of the dodecahedron face, a true pentagon.
- Resolution r >= 1: the cell is a quadrilateral, the image of a square of
  the quintant's (u, v) parameter grid. The ring holds its four corners plus
  the midpoint of its outward edge (the edge facing the pentagon face
  boundary: u = u1 below the quintant diagonal, v = v1 above it), where the
  two finer cells along that edge meet. That fifth vertex lies on an edge, so
  these cells have five vertices but only four sides.

Rings run counter-clockwise seen from outside the sphere (GeoJSON exterior
ring order). Edges are subdivided along great circles, so the extra vertices
keep straight lon/lat chords close to the true edges near the poles and the
antimeridian.
"""

from typing import List, Optional, Tuple

import numpy as np

from .codec import quintant_of, resolution_of
from .geometry import FACE_VERTICES, slerp, square_to_sphere, xyz_to_lonlat
from .projection import cell_center_xyz, cell_square
from .resolution import QUINTANTS_PER_FACE

LonLat = Tuple[float, float]

#: Resolution at and beyond which edges are no longer subdivided by default.
AUTO_SEGMENTS_RESOLUTION = 6


def default_segments(resolution: int) -> int:
    """
    Subdivisions per edge when none are requested.

    Formula: max(1, 2^(6 - resolution)). A resolution-0 face edge (~41.8 deg)
    gets 64 pieces of ~0.65 deg; from resolution 6 on an edge spans well
    under a degree and is left whole.

    Resolution-0 and resolution-1 edges lie on great circles. Below the
    quintant the equal-area map bends some cell edges slightly, while the
    ring still joins corners with great-circle arcs, and in lon/lat space the
    straight chords between ring vertices add their own small error. A point
    very close to an edge can therefore fall just outside the drawn ring of
    the cell that holds it. Rings are for display; ``lonlat_to_cell`` is the
    membership test.
    """
    return max(1, 2 ** (AUTO_SEGMENTS_RESOLUTION - resolution))


def cell_corners(cell: int) -> List[np.ndarray]:
    """The five ring vertices of a cell as unit vectors, counter-clockwise."""
    resolution = resolution_of(cell)
    if resolution == 0:
        face = quintant_of(cell) // QUINTANTS_PER_FACE
        return [corner.copy() for corner in FACE_VERTICES[face]]

    q, _, u0, v0, size = cell_square(cell)
    u1, v1 = u0 + size, v0 + size
    mid = 0.5 * size
    if v0 <= u0:
        square = [(u0, v0), (u1, v0), (u1, v0 + mid), (u1, v1), (u0, v1)]
    else:
        square = [(u0, v0), (u1, v0), (u1, v1), (u0 + mid, v1), (u0, v1)]
    return [square_to_sphere(q, u, v) for u, v in square]


def _unwrap(lon: float, center_lon: float) -> float:
    while lon - center_lon > 180.0:
        lon -= 360.0
    while lon - center_lon < -180.0:
        lon += 360.0
    return lon


def cell_to_boundary(cell: int, closed_ring: bool = True,
                     segments: Optional[int] = None) -> List[LonLat]:
    """
    Boundary ring of a cell.

    Args:
        cell: Cell identifier. ``0`` yields an empty ring instead of an error
            so one missing cell does not fail a whole batch.
        closed_ring: Repeat the first vertex at the end.
        segments: Pieces per edge. ``None`` or <= 0 picks
            :func:`default_segments` for the cell's resolution.

    Returns:
        ``5 * segments`` (lon, lat) pairs in degrees, plus one when
        ``closed_ring``. Longitudes stay within 180 deg of the cell centre's
        longitude.

    Raises:
        InvalidCell: If ``cell`` is non-zero and malformed.
    """
    if cell == 0:
        return []
    resolution = resolution_of(cell)
    if segments is None or segments <= 0:
        segments = default_segments(resolution)
    segments = int(segments)

    corners = cell_corners(cell)
    center_lon, _ = xyz_to_lonlat(cell_center_xyz(cell))

    ring: List[LonLat] = []
    for i, start in enumerate(corners):
        end = corners[(i + 1) % len(corners)]
        for j in range(segments):
            point = start if j == 0 else slerp(start, end, j / segments)
            lon, lat = xyz_to_lonlat(point)
            ring.append((_unwrap(lon, center_lon), lat))

    if closed_ring:
        ring.append(ring[0])
    return ring
