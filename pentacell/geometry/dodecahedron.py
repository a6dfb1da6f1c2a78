"""
Dodecahedron Tables
===================

Fixed geometry of the twelve base pentagons and their sixty quintants.

Orientation: face 0 is centred on the north pole, faces 1-5 on the upper
ring (latitude +26.565 deg, longitudes 0, 72, ..., 288), faces 6-10 on the
lower ring (latitude -26.565 deg, longitudes 36, 108, ..., 324) and face 11
on the south pole. Face centres are the vertices of an icosahedron; face
corners are the centroids of its triangles, projected onto the sphere.

Each face is split into five kites ("quintants"). Quintant ``k`` of a face
with centre O holds the face corner V_k and is bounded by O, the midpoint
M_a of edge V_(k-1)V_k, V_k and the midpoint M_b of edge V_kV_(k+1). Corners
are ordered counter-clockwise seen from outside the sphere.

All arrays are built once at import time and are read-only.
"""

import math
from typing import List, Tuple

import numpy as np

from ..resolution import NUM_BASE_CELLS, QUINTANTS_PER_FACE
from .sphere import azimuth, lonlat_to_xyz, normalize, tangent_frame

_RING_LATITUDE = math.degrees(math.atan(0.5))


def _icosahedron() -> Tuple[np.ndarray, List[Tuple[int, int, int]]]:
    vertices = [lonlat_to_xyz(0.0, 90.0)]
    vertices += [lonlat_to_xyz(72.0 * k, _RING_LATITUDE) for k in range(5)]
    vertices += [lonlat_to_xyz(36.0 + 72.0 * k, -_RING_LATITUDE) for k in range(5)]
    vertices.append(lonlat_to_xyz(0.0, -90.0))

    north, south = 0, 11
    triangles = []
    for k in range(5):
        upper, upper_next = 1 + k, 1 + (k + 1) % 5
        lower, lower_next = 6 + k, 6 + (k + 1) % 5
        triangles.append((north, upper, upper_next))
        triangles.append((upper, lower, upper_next))
        triangles.append((upper_next, lower, lower_next))
        triangles.append((south, lower, lower_next))
    return np.array(vertices), triangles


def _build_tables():
    centers, triangles = _icosahedron()
    corners = np.array([normalize(centers[list(tri)].sum(axis=0)) for tri in triangles])

    face_vertices = np.empty((NUM_BASE_CELLS, 5, 3))
    vertex_azimuths = np.empty((NUM_BASE_CELLS, 5))
    frames = []
    for face in range(NUM_BASE_CELLS):
        origin = centers[face]
        frame = tangent_frame(origin)
        nearest = np.argsort(-corners @ origin)[:5]
        ring = sorted(nearest, key=lambda idx: azimuth(frame, corners[idx]))
        face_vertices[face] = corners[ring]
        vertex_azimuths[face] = [azimuth(frame, corners[idx]) for idx in ring]
        frames.append(np.array(frame))

    quintant_corners = np.empty((NUM_BASE_CELLS * QUINTANTS_PER_FACE, 4, 3))
    for face in range(NUM_BASE_CELLS):
        ring = face_vertices[face]
        for k in range(QUINTANTS_PER_FACE):
            prev_v, vertex, next_v = ring[(k - 1) % 5], ring[k], ring[(k + 1) % 5]
            quintant_corners[face * QUINTANTS_PER_FACE + k] = [
                centers[face],
                normalize(prev_v + vertex),
                vertex,
                normalize(vertex + next_v),
            ]

    frames = np.array(frames)
    for array in (centers, face_vertices, vertex_azimuths, frames, quintant_corners):
        array.setflags(write=False)
    return centers, face_vertices, vertex_azimuths, frames, quintant_corners


FACE_CENTERS, FACE_VERTICES, VERTEX_AZIMUTHS, FACE_FRAMES, QUINTANT_CORNERS = _build_tables()


def nearest_face(p: np.ndarray) -> int:
    """Index of the face whose centre is closest to unit vector ``p``."""
    return int(np.argmax(FACE_CENTERS @ p))


def quintant_in_face(face: int, p: np.ndarray) -> int:
    """Which of the face's five kites contains ``p`` (0-4)."""
    east, north = FACE_FRAMES[face]
    az = azimuth((east, north), p)
    diff = np.abs((VERTEX_AZIMUTHS[face] - az + math.pi) % (2.0 * math.pi) - math.pi)
    return int(np.argmin(diff))
