"""
Command line interface.

Usage:
    pentacell point 4.3 52.0 --resolution 12
    pentacell info 1600000000000000
    pentacell boundary 1600000000000000 --segments 4
    pentacell children 1600000000000000 --resolution 3
    pentacell compact cells.txt
    pentacell uncompact cells.txt --resolution 8
    pentacell index points.csv indexed.csv --config pentacell.yaml
    pentacell table
"""

import argparse
import json
import logging
import sys
from typing import Iterable, List, Optional, TextIO

import pandas as pd
from shapely.geometry import mapping
from tqdm import tqdm

from .codec import cell_to_hex, decode, hex_to_cell
from .compaction import compact, uncompact
from .config import PentacellConfig
from .errors import PentacellError
from .export import cell_to_polygon
from .hierarchy import cell_to_children
from .host import index_dataframe
from .projection import cell_to_lonlat, lonlat_to_cell
from .resolution import cell_area, log_resolution_summary

logger = logging.getLogger(__name__)

CHUNK_ROWS = 10_000


def _parse_cell(text: str) -> int:
    text = text.strip().lower()
    if text.startswith("0x"):
        text = text[2:]
    return hex_to_cell(text)


def _read_cells(stream: TextIO) -> List[int]:
    return [_parse_cell(line) for line in stream if line.strip()]


def _print_cells(cells: Iterable[int]) -> None:
    for cell in cells:
        print(cell_to_hex(cell))


def _cmd_point(args, config: PentacellConfig) -> None:
    resolution = args.resolution if args.resolution is not None else config.resolution
    print(cell_to_hex(lonlat_to_cell(args.lon, args.lat, resolution)))


def _cmd_info(args, config: PentacellConfig) -> None:
    cell = _parse_cell(args.cell)
    parts = decode(cell)
    lon, lat = cell_to_lonlat(cell)
    print(json.dumps({
        "cell": cell_to_hex(cell),
        "base_cell": parts.base_cell,
        "resolution": parts.resolution,
        "path": list(parts.path),
        "center": [lon, lat],
        "area_m2": cell_area(parts.resolution),
    }, indent=2))


def _cmd_boundary(args, config: PentacellConfig) -> None:
    cell = _parse_cell(args.cell)
    segments = args.segments if args.segments is not None else config.boundary_segments
    polygon = cell_to_polygon(cell, segments)
    print(json.dumps({
        "type": "Feature",
        "id": cell_to_hex(cell),
        "properties": {"resolution": decode(cell).resolution},
        "geometry": mapping(polygon),
    }))


def _cmd_children(args, config: PentacellConfig) -> None:
    _print_cells(cell_to_children(_parse_cell(args.cell), args.resolution))


def _cmd_compact(args, config: PentacellConfig) -> None:
    cells = _read_cells(args.input)
    result = compact(cells)
    logger.info(f"Compacted {len(cells):,} cells to {len(result):,}")
    _print_cells(result)


def _cmd_uncompact(args, config: PentacellConfig) -> None:
    cells = _read_cells(args.input)
    result = uncompact(cells, args.resolution)
    logger.info(f"Uncompacted {len(cells):,} cells to {len(result):,}")
    _print_cells(result)


def _cmd_index(args, config: PentacellConfig) -> None:
    resolution = args.resolution if args.resolution is not None else config.resolution
    df = pd.read_csv(args.input)
    logger.info(f"Indexing {len(df):,} points from {args.input} at resolution {resolution}")

    chunks = []
    for start in tqdm(range(0, len(df), CHUNK_ROWS), desc="Indexing", unit="chunk"):
        chunk = df.iloc[start:start + CHUNK_ROWS]
        chunks.append(index_dataframe(
            chunk, resolution,
            lon_col=config.lon_col, lat_col=config.lat_col, strict=config.strict,
        ))
    indexed = pd.concat(chunks) if chunks else df.assign(cell=[], cell_resolution=[])
    indexed['cell'] = [f"{int(cell):016x}" for cell in indexed['cell']]
    indexed.to_csv(args.output, index=False)
    logger.info(f"Wrote {len(indexed):,} rows to {args.output}")


def _cmd_table(args, config: PentacellConfig) -> None:
    log_resolution_summary()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pentacell",
        description="Hierarchical equal-area pentagonal cells on the sphere",
    )
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("--log-level", help="Override the configured log level")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("point", help="Cell containing a lon/lat point")
    p.add_argument("lon", type=float)
    p.add_argument("lat", type=float)
    p.add_argument("--resolution", type=int)
    p.set_defaults(func=_cmd_point)

    p = sub.add_parser("info", help="Decode a cell")
    p.add_argument("cell")
    p.set_defaults(func=_cmd_info)

    p = sub.add_parser("boundary", help="GeoJSON outline of a cell")
    p.add_argument("cell")
    p.add_argument("--segments", type=int)
    p.set_defaults(func=_cmd_boundary)

    p = sub.add_parser("children", help="Children of a cell")
    p.add_argument("cell")
    p.add_argument("--resolution", type=int)
    p.set_defaults(func=_cmd_children)

    p = sub.add_parser("compact", help="Compact hex cell ids, one per line")
    p.add_argument("input", nargs="?", type=argparse.FileType("r"), default=sys.stdin)
    p.set_defaults(func=_cmd_compact)

    p = sub.add_parser("uncompact", help="Uncompact hex cell ids, one per line")
    p.add_argument("input", nargs="?", type=argparse.FileType("r"), default=sys.stdin)
    p.add_argument("--resolution", type=int, required=True)
    p.set_defaults(func=_cmd_uncompact)

    p = sub.add_parser("index", help="Add a cell column to a CSV of points")
    p.add_argument("input")
    p.add_argument("output")
    p.add_argument("--resolution", type=int)
    p.set_defaults(func=_cmd_index)

    p = sub.add_parser("table", help="Print the resolution table")
    p.set_defaults(func=_cmd_table)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = PentacellConfig.from_yaml(args.config) if args.config else PentacellConfig()
    logging.basicConfig(
        level=(args.log_level or config.log_level).upper(),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    try:
        args.func(args, config)
    except PentacellError as exc:
        logger.error(str(exc))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
