"""
Unit-sphere vector helpers.

Points are numpy float64 arrays of shape (3,). Angles in and out of this
module are degrees for longitude/latitude and radians everywhere else.
"""

import math
from typing import Tuple

import numpy as np


def lonlat_to_xyz(lon: float, lat: float) -> np.ndarray:
    """Unit vector for a longitude/latitude pair in degrees."""
    lam = math.radians(lon)
    phi = math.radians(lat)
    cos_phi = math.cos(phi)
    return np.array([cos_phi * math.cos(lam), cos_phi * math.sin(lam), math.sin(phi)])


def xyz_to_lonlat(p: np.ndarray) -> Tuple[float, float]:
    """Longitude/latitude in degrees of a (not necessarily unit) vector."""
    x, y, z = float(p[0]), float(p[1]), float(p[2])
    lon = math.degrees(math.atan2(y, x))
    lat = math.degrees(math.atan2(z, math.hypot(x, y)))
    return lon, lat


def normalize(v: np.ndarray) -> np.ndarray:
    return v / np.linalg.norm(v)


def chord(a: np.ndarray, b: np.ndarray) -> float:
    """Straight-line distance between two unit vectors."""
    return float(np.linalg.norm(a - b))


def angle_between(a: np.ndarray, b: np.ndarray) -> float:
    """Great-circle angle in radians, accurate for tiny and near-antipodal pairs."""
    return 2.0 * math.atan2(np.linalg.norm(a - b), np.linalg.norm(a + b))


def triangle_area(a: np.ndarray, b: np.ndarray, c: np.ndarray) -> float:
    """
    Area (spherical excess) of the unit-sphere triangle abc.

    Van Oosterom & Strackee: tan(E/2) = |a.(b x c)| / (1 + a.b + b.c + c.a).
    Valid for triangles smaller than a hemisphere.
    """
    triple = abs(float(np.dot(a, np.cross(b, c))))
    denom = 1.0 + float(np.dot(a, b)) + float(np.dot(b, c)) + float(np.dot(c, a))
    return 2.0 * math.atan2(triple, denom)


def point_toward(origin: np.ndarray, target: np.ndarray, theta: float) -> np.ndarray:
    """Point at angle ``theta`` from ``origin`` along the great circle to ``target``."""
    tangent = target - float(np.dot(origin, target)) * origin
    tangent = tangent / np.linalg.norm(tangent)
    return math.cos(theta) * origin + math.sin(theta) * tangent


def slerp(a: np.ndarray, b: np.ndarray, t: float) -> np.ndarray:
    """Spherical linear interpolation between unit vectors ``a`` and ``b``."""
    omega = angle_between(a, b)
    if omega < 1e-15:
        return a.copy()
    sin_omega = math.sin(omega)
    p = (math.sin((1.0 - t) * omega) * a + math.sin(t * omega) * b) / sin_omega
    return normalize(p)


def tangent_frame(origin: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Right-handed (east, north) tangent basis at ``origin``.

    Azimuths measured as atan2(north, east) increase counter-clockwise when
    seen from outside the sphere.
    """
    reference = np.array([0.0, 0.0, 1.0])
    if abs(origin[2]) > 0.9:
        reference = np.array([1.0, 0.0, 0.0])
    east = normalize(np.cross(reference, origin))
    north = np.cross(origin, east)
    return east, north


def azimuth(origin_frame: Tuple[np.ndarray, np.ndarray], p: np.ndarray) -> float:
    """Azimuth of ``p`` in [0, 2*pi) in a frame from :func:`tangent_frame`."""
    east, north = origin_frame
    angle = math.atan2(float(np.dot(p, north)), float(np.dot(p, east)))
    return angle % (2.0 * math.pi)
