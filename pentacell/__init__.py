"""
Pentacell
=========

Hierarchical, equal-area global spatial index on a pentagonal tiling.

Every point on the sphere belongs to one cell per resolution. Resolution 0
has the 12 faces of a dodecahedron, resolution 1 splits each face into 5
quintants, and every later resolution splits each cell into 4. Cell
identifiers are 64-bit unsigned integers that carry their own resolution.

Key Functions:
- lonlat_to_cell / cell_to_lonlat: coordinates <-> cells
- cell_to_parent / cell_to_children: hierarchy navigation
- cell_to_boundary: pentagon outlines with geodesic edge subdivision
- compact / uncompact: minimise and restore cell sets
- get_num_cells / cell_area: the resolution table
"""

from .boundary import cell_to_boundary
from .codec import (
    CellParts,
    cell_to_hex,
    decode,
    encode,
    hex_to_cell,
    is_valid_cell,
    resolution_of,
)
from .compaction import compact, uncompact
from .errors import (
    EncodingError,
    InvalidCell,
    InvalidResolution,
    OutOfRangeCoordinate,
    PentacellError,
)
from .hierarchy import (
    cell_to_children,
    cell_to_children_count,
    cell_to_parent,
    get_res0_cells,
)
from .projection import cell_to_lonlat, lonlat_to_cell
from .resolution import (
    AUTHALIC_AREA_EARTH,
    AUTHALIC_RADIUS_EARTH,
    MAX_RESOLUTION,
    RESOLUTION_TABLE,
    cell_area,
    get_num_cells,
)

# Alias matching the name used by the SQL function set.
get_resolution = resolution_of

__version__ = "0.1.0"

__all__ = [
    # Codec
    'CellParts',
    'encode',
    'decode',
    'resolution_of',
    'get_resolution',
    'is_valid_cell',
    'cell_to_hex',
    'hex_to_cell',

    # Projection
    'lonlat_to_cell',
    'cell_to_lonlat',

    # Hierarchy
    'cell_to_parent',
    'cell_to_children',
    'cell_to_children_count',
    'get_res0_cells',

    # Geometry
    'cell_to_boundary',

    # Sets
    'compact',
    'uncompact',

    # Resolution table
    'MAX_RESOLUTION',
    'RESOLUTION_TABLE',
    'AUTHALIC_RADIUS_EARTH',
    'AUTHALIC_AREA_EARTH',
    'get_num_cells',
    'cell_area',

    # Errors
    'PentacellError',
    'OutOfRangeCoordinate',
    'InvalidResolution',
    'InvalidCell',
    'EncodingError',
]
