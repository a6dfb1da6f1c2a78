"""
GeoPandas export of cell outlines.

Cells become shapely polygons in EPSG:4326, indexed by ``region_id`` (the
16-digit hex form of the identifier) like any other regions GeoDataFrame.

A cell that encloses a pole has a ring that wraps all the way around in
longitude. Its polygon is cut at the antimeridian and closed along the pole
edge (lat = +-90) so it stays valid in lon/lat space.
"""

import logging
from typing import Iterable, List, Optional, Tuple

import geopandas as gpd
import pandas as pd
from shapely.geometry import Polygon

from .boundary import cell_to_boundary
from .codec import cell_to_hex, resolution_of

logger = logging.getLogger(__name__)

LonLat = Tuple[float, float]

# Rings with a vertex this close to a pole pass through it rather than around it.
_POLE_VERTEX_LAT = 90.0 - 1e-9


def _wrap(lon: float) -> float:
    return (lon + 180.0) % 360.0 - 180.0


def _winding(ring: List[LonLat]) -> float:
    """Net longitude swept by a closed ring: +-360 around a pole, ~0 otherwise."""
    total = 0.0
    for (lon0, _), (lon1, _) in zip(ring, ring[1:] + ring[:1]):
        total += _wrap(lon1 - lon0)
    return total


def _close_around_pole(ring: List[LonLat], north: bool) -> List[LonLat]:
    # Keep a vertex lying on the antimeridian on the side where the ring starts.
    lons = [_wrap(lon) if north else -_wrap(-lon) for lon, _ in ring]
    lats = [lat for _, lat in ring]
    n = len(lons)
    start = next(i for i in range(n) if abs(lons[i] - lons[i - 1]) > 180.0)
    lons = lons[start:] + lons[:start]
    lats = lats[start:] + lats[:start]

    # North rings run eastward and start just east of -180; south rings run
    # westward and start just west of +180.
    side = -180.0 if north else 180.0
    gap_end = abs(-side - lons[-1])
    gap_start = abs(lons[0] - side)
    span = gap_end + gap_start
    frac = gap_end / span if span > 0.0 else 0.0
    crossing_lat = lats[-1] + frac * (lats[0] - lats[-1])
    pole_lat = 90.0 if north else -90.0

    return ([(side, crossing_lat)] + list(zip(lons, lats))
            + [(-side, crossing_lat), (-side, pole_lat), (side, pole_lat)])


def cell_to_polygon(cell: int, segments: Optional[int] = None) -> Polygon:
    """
    Shapely polygon of a cell's boundary ring.

    Rings enclosing a pole are closed along the pole edge, so the polygon is
    valid and contains the pole's neighbourhood.
    """
    ring = cell_to_boundary(cell, closed_ring=False, segments=segments)
    winding = _winding(ring)
    touches_pole = any(abs(lat) >= _POLE_VERTEX_LAT for _, lat in ring)
    if abs(winding) > 180.0 and not touches_pole:
        ring = _close_around_pole(ring, north=winding > 0.0)
    return Polygon(ring)


def cells_to_geodataframe(cells: Iterable[int],
                          segments: Optional[int] = None) -> gpd.GeoDataFrame:
    """
    GeoDataFrame with one polygon row per cell.

    Args:
        cells: Cell identifiers. Duplicates are kept; order is preserved.
        segments: Edge subdivisions passed to ``cell_to_boundary``.

    Returns:
        GeoDataFrame indexed by ``region_id`` with ``cell``, ``resolution``
        and ``geometry`` columns, CRS EPSG:4326.
    """
    cells = [int(cell) for cell in cells]
    region_ids = [cell_to_hex(cell) for cell in cells]
    gdf = gpd.GeoDataFrame(
        {
            'cell': pd.array(cells, dtype='UInt64'),
            'resolution': [resolution_of(cell) for cell in cells],
        },
        geometry=[cell_to_polygon(cell, segments) for cell in cells],
        index=pd.Index(region_ids, name='region_id'),
        crs="EPSG:4326",
    )
    logger.debug(f"Built GeoDataFrame with {len(gdf):,} cell polygons")
    return gdf
