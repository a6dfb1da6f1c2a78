"""
Pentacell Geometry
==================

Sphere math and the fixed dodecahedral frame the cell hierarchy lives on.

- ``sphere``: unit-vector helpers (lon/lat conversion, slerp, triangle area)
- ``dodecahedron``: base pentagons, their corners and quintant kites
- ``equal_area``: area-preserving map between a quintant and the unit square
"""

from .dodecahedron import (
    FACE_CENTERS,
    FACE_VERTICES,
    QUINTANT_CORNERS,
    nearest_face,
    quintant_in_face,
)
from .equal_area import sphere_to_square, square_to_sphere
from .sphere import (
    angle_between,
    lonlat_to_xyz,
    slerp,
    triangle_area,
    xyz_to_lonlat,
)

__all__ = [
    'FACE_CENTERS',
    'FACE_VERTICES',
    'QUINTANT_CORNERS',
    'nearest_face',
    'quintant_in_face',
    'sphere_to_square',
    'square_to_sphere',
    'angle_between',
    'lonlat_to_xyz',
    'slerp',
    'triangle_area',
    'xyz_to_lonlat',
]
