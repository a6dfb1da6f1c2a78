"""
Equal-Area Quintant Mapping
===========================

Maps each spherical kite (quintant) onto the unit square so that equal areas
in the square are equal areas on the sphere.

The kite (O, M_a, V, M_b) and the square (0,0), (1,0), (1,1), (0,1) are both
split along their diagonal O-V / (0,0)-(1,1):

    lower triangle  v <= u :  O, M_a, V   <->  (0,0), (1,0), (1,1)
    upper triangle  v >  u :  O, V, M_b   <->  (0,0), (1,1), (0,1)

Each triangle pair is joined through "slice" coordinates (s, t) in [0,1]^2,
both measured from the apex O:

- ``s`` is the fraction of the triangle's area lying between the first base
  corner and the ray from the apex through the point;
- ``t`` is the fraction of that ray's sliver lying between the apex and the
  point. On the sphere a sliver's area grows with 1 - cos(theta), i.e. with
  the squared chord; in the plane with the squared distance.

Both maps are area-preserving up to a constant, and the two spherical
triangles of a kite are congruent, so the composite is exactly equal-area.
Along the square's lower triangle s = v / u and t = u^2; along the upper one
s = 1 - u / v and t = v^2.

Radial distances use chords rather than 1 - cos(theta), which keeps
resolution-29 cells near a face centre resolvable in double precision.
"""

import math
from typing import Tuple

import numpy as np

from .dodecahedron import QUINTANT_CORNERS
from .sphere import chord, normalize, point_toward, triangle_area

_APEX_EPSILON = 1e-14


def _base_point(apex: np.ndarray, a: np.ndarray, c: np.ndarray, s: float) -> np.ndarray:
    """Point D on arc a->c such that area(apex, a, D) = s * area(apex, a, c)."""
    if s <= 0.0:
        return a
    if s >= 1.0:
        return c
    total = triangle_area(apex, a, c)
    w = normalize(c - float(np.dot(a, c)) * a)
    ab = float(np.dot(a, apex))
    bw = float(np.dot(apex, w))
    k1 = abs(float(np.dot(a, np.cross(apex, w))))
    tau = math.tan(0.5 * s * total)
    half = math.atan2(tau * (1.0 + ab), k1 - tau * bw)
    return math.cos(2.0 * half) * a + math.sin(2.0 * half) * w


def slice_to_sphere(apex: np.ndarray, a: np.ndarray, c: np.ndarray,
                    s: float, t: float) -> np.ndarray:
    """Point of triangle (apex, a, c) with slice coordinates (s, t)."""
    if t <= 0.0:
        return apex.copy()
    base = _base_point(apex, a, c, s)
    target_chord = math.sqrt(t) * chord(apex, base)
    theta = 2.0 * math.asin(min(1.0, 0.5 * target_chord))
    return point_toward(apex, base, theta)


def sphere_to_slice(apex: np.ndarray, a: np.ndarray, c: np.ndarray,
                    p: np.ndarray) -> Tuple[float, float]:
    """Slice coordinates (s, t) of point ``p`` in triangle (apex, a, c)."""
    radial = np.cross(apex, p)
    if np.linalg.norm(radial) < _APEX_EPSILON:
        return 0.0, 0.0

    base = np.cross(radial, np.cross(a, c))
    base = base / np.linalg.norm(base)
    if float(np.dot(base, a + c)) < 0.0:
        base = -base

    t = (chord(apex, p) / chord(apex, base)) ** 2
    s = triangle_area(apex, a, base) / triangle_area(apex, a, c)
    return min(max(s, 0.0), 1.0), min(max(t, 0.0), 1.0)


def square_to_sphere(quintant: int, u: float, v: float) -> np.ndarray:
    """
    Unit vector for square coordinates (u, v) of a quintant.

    Args:
        quintant: Quintant index in [0, 60).
        u: Coordinate along O -> M_a, in [0, 1].
        v: Coordinate along O -> M_b, in [0, 1].
    """
    origin, mid_a, vertex, mid_b = QUINTANT_CORNERS[quintant]
    if v <= u:
        if u <= 0.0:
            return origin.copy()
        return slice_to_sphere(origin, mid_a, vertex, v / u, u * u)
    return slice_to_sphere(origin, vertex, mid_b, 1.0 - u / v, v * v)


def sphere_to_square(quintant: int, p: np.ndarray) -> Tuple[float, float]:
    """Square coordinates (u, v) of unit vector ``p`` inside a quintant."""
    origin, mid_a, vertex, mid_b = QUINTANT_CORNERS[quintant]
    diagonal = np.cross(origin, vertex)
    side = float(np.dot(diagonal, p)) * float(np.dot(diagonal, mid_a))
    if side >= 0.0:
        s, t = sphere_to_slice(origin, mid_a, vertex, p)
        u = math.sqrt(t)
        v = s * u
    else:
        s, t = sphere_to_slice(origin, vertex, mid_b, p)
        v = math.sqrt(t)
        u = (1.0 - s) * v
    return min(max(u, 0.0), 1.0), min(max(v, 0.0), 1.0)
