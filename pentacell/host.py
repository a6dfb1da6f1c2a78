"""
Host Boundary
=============

The surface a query engine binds to. Two layers:

1. Row-level functions that never raise: each returns a ``Result`` carrying
   either a value or an error message, mirroring the SQL function set
   (``lonlat_to_cell``, ``cell_to_parent``, ``cell_to_boundary`` with one,
   two or three arguments, ...).
2. Vectorized helpers over numpy arrays / pandas columns, with a
   ``strict=False`` mode that turns failing rows into ``0`` / ``NaN`` and
   logs how many rows failed.

Null handling stays with the caller; every function here is defined over
non-null values only.
"""

import functools
import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd

from . import boundary, compaction, hierarchy, projection
from .codec import resolution_of
from .errors import InvalidCell, PentacellError
from .resolution import cell_area as _cell_area, get_num_cells as _get_num_cells

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Result:
    """Value-or-error union returned across the host boundary."""

    value: Any = None
    error: Optional[str] = None
    error_type: Optional[type] = None

    @classmethod
    def ok(cls, value: Any) -> "Result":
        return cls(value=value)

    @classmethod
    def fail(cls, exc: PentacellError) -> "Result":
        return cls(error=str(exc), error_type=type(exc))

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the value, or raise the original error type."""
        if self.error is not None:
            raise (self.error_type or PentacellError)(self.error)
        return self.value


def guarded(func: Callable[..., Any]) -> Callable[..., Result]:
    """Wrap a core operation so pentacell errors come back as ``Result.fail``."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Result:
        try:
            return Result.ok(func(*args, **kwargs))
        except PentacellError as exc:
            return Result.fail(exc)

    return wrapper


# ============================================================================
# ROW-LEVEL FUNCTIONS
# ============================================================================

lonlat_to_cell = guarded(projection.lonlat_to_cell)
cell_to_lonlat = guarded(projection.cell_to_lonlat)
cell_to_parent = guarded(hierarchy.cell_to_parent)
cell_to_children = guarded(hierarchy.cell_to_children)
get_res0_cells = guarded(hierarchy.get_res0_cells)
cell_area = guarded(_cell_area)
get_num_cells = guarded(_get_num_cells)
get_resolution = guarded(resolution_of)
compact = guarded(compaction.compact)
uncompact = guarded(compaction.uncompact)


@guarded
def cell_to_boundary(cell: int, closed_ring: bool = True,
                     segments: Optional[int] = None) -> List[Tuple[float, float]]:
    """Boundary ring; the one-, two- and three-argument forms share this body."""
    return boundary.cell_to_boundary(cell, closed_ring=closed_ring, segments=segments)


# ============================================================================
# VECTORIZED HELPERS
# ============================================================================

def _apply(func: Callable[..., Any], rows: Iterable[tuple], fill: Any,
           strict: bool, label: str) -> List[Any]:
    values = []
    failures = 0
    for row in rows:
        try:
            values.append(func(*row))
        except PentacellError:
            if strict:
                raise
            failures += 1
            values.append(fill)
    if failures:
        logger.warning(f"{label}: {failures:,} of {len(values):,} rows failed")
    return values


def lonlat_to_cells(lons, lats, resolution: int, strict: bool = True) -> np.ndarray:
    """
    Index a column of coordinates.

    Args:
        lons: Longitudes in degrees (array-like).
        lats: Latitudes in degrees (array-like, same length).
        resolution: Target resolution for every row.
        strict: Raise on the first failing row; otherwise emit 0 for it.

    Returns:
        uint64 array of cell identifiers.
    """
    lons = np.asarray(lons, dtype=np.float64)
    lats = np.asarray(lats, dtype=np.float64)
    if lons.shape != lats.shape:
        raise ValueError(f"Shape mismatch: {lons.shape} longitudes vs {lats.shape} latitudes")
    cells = _apply(
        projection.lonlat_to_cell,
        ((lon, lat, resolution) for lon, lat in zip(lons.tolist(), lats.tolist())),
        0, strict, "lonlat_to_cells",
    )
    return np.array(cells, dtype=np.uint64)


def cells_to_lonlat(cells, strict: bool = True) -> Tuple[np.ndarray, np.ndarray]:
    """Representative points of a column of cells as (lon, lat) float arrays."""
    points = _apply(
        projection.cell_to_lonlat,
        ((int(cell),) for cell in np.asarray(cells, dtype=np.uint64).tolist()),
        (np.nan, np.nan), strict, "cells_to_lonlat",
    )
    if not points:
        return np.empty(0), np.empty(0)
    lon, lat = zip(*points)
    return np.array(lon, dtype=np.float64), np.array(lat, dtype=np.float64)


def cells_to_parent(cells, target_resolution: int, strict: bool = True) -> np.ndarray:
    """Ancestors of a column of cells at ``target_resolution``."""
    parents = _apply(
        hierarchy.cell_to_parent,
        ((int(cell), target_resolution) for cell in np.asarray(cells, dtype=np.uint64).tolist()),
        0, strict, "cells_to_parent",
    )
    return np.array(parents, dtype=np.uint64)


def index_dataframe(df: pd.DataFrame, resolution: int,
                    lon_col: str = 'longitude', lat_col: str = 'latitude',
                    strict: bool = True) -> pd.DataFrame:
    """
    Add ``cell`` and ``cell_resolution`` columns to a point DataFrame.

    Returns a copy; the input frame is left untouched.
    """
    if lon_col not in df.columns or lat_col not in df.columns:
        raise ValueError(f"DataFrame must contain '{lon_col}' and '{lat_col}' columns")

    logger.debug(f"Indexing {len(df):,} rows at resolution {resolution}")
    indexed = df.copy()
    indexed['cell'] = lonlat_to_cells(
        indexed[lon_col].to_numpy(), indexed[lat_col].to_numpy(), resolution, strict=strict
    )
    indexed['cell_resolution'] = [
        resolution_of(int(cell)) if cell else -1 for cell in indexed['cell'].tolist()
    ]
    return indexed


def validate_cells(cells) -> np.ndarray:
    """Boolean mask of which entries are valid cell identifiers."""
    mask = []
    for cell in np.asarray(cells, dtype=np.uint64).tolist():
        try:
            resolution_of(int(cell))
            mask.append(True)
        except InvalidCell:
            mask.append(False)
    return np.array(mask, dtype=bool)
