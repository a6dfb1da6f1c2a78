"""
Tests for the command line interface.
"""

import json

import pandas as pd
import pytest
from shapely.geometry import Point, shape

from pentacell import (
    cell_to_children,
    cell_to_hex,
    encode,
    get_res0_cells,
    lonlat_to_cell,
)
from pentacell.cli import build_parser, main


def test_point(capsys):
    assert main(["point", "4.3", "52.0", "--resolution", "6"]) == 0
    out = capsys.readouterr().out.strip()
    assert out == cell_to_hex(lonlat_to_cell(4.3, 52.0, 6))


def test_point_uses_config_resolution(tmp_path, capsys):
    config = tmp_path / "pentacell.yaml"
    config.write_text("resolution: 3\n")
    assert main(["--config", str(config), "point", "4.3", "52.0"]) == 0
    assert capsys.readouterr().out.strip() == cell_to_hex(lonlat_to_cell(4.3, 52.0, 3))


def test_point_out_of_range_returns_error(capsys):
    assert main(["point", "200", "0", "--resolution", "3"]) == 1
    assert capsys.readouterr().out == ""


def test_info(capsys):
    cell = encode(1, 2, (3, 2))
    assert main(["info", cell_to_hex(cell)]) == 0
    info = json.loads(capsys.readouterr().out)
    assert info["base_cell"] == 1
    assert info["resolution"] == 2
    assert info["path"] == [3, 2]
    assert info["cell"] == cell_to_hex(cell)
    assert len(info["center"]) == 2


def test_info_accepts_0x_prefix(capsys):
    assert main(["info", "0x1600000000000000"]) == 0
    assert json.loads(capsys.readouterr().out)["resolution"] == 0


def test_info_invalid_cell():
    assert main(["info", "0000000000000000"]) == 1


def test_boundary(capsys):
    cell = lonlat_to_cell(4.3, 52.0, 8)
    assert main(["boundary", cell_to_hex(cell), "--segments", "2"]) == 0
    feature = json.loads(capsys.readouterr().out)
    assert feature["type"] == "Feature"
    ring = feature["geometry"]["coordinates"][0]
    assert len(ring) == 11
    assert ring[0] == ring[-1]


def test_children(capsys):
    base = get_res0_cells()[0]
    assert main(["children", cell_to_hex(base)]) == 0
    lines = capsys.readouterr().out.split()
    assert lines == [cell_to_hex(child) for child in cell_to_children(base)]


def test_compact_and_uncompact(tmp_path, capsys):
    parent = encode(4, 3, (1, 1, 1))
    cells_file = tmp_path / "cells.txt"
    cells_file.write_text("\n".join(cell_to_hex(c) for c in cell_to_children(parent)) + "\n")

    assert main(["compact", str(cells_file)]) == 0
    assert capsys.readouterr().out.split() == [cell_to_hex(parent)]

    parent_file = tmp_path / "parent.txt"
    parent_file.write_text(cell_to_hex(parent) + "\n")
    assert main(["uncompact", str(parent_file), "--resolution", "5"]) == 0
    lines = capsys.readouterr().out.split()
    assert lines == [cell_to_hex(c) for c in cell_to_children(parent, 5)]


def test_uncompact_requires_resolution(tmp_path):
    with pytest.raises(SystemExit):
        main(["uncompact", str(tmp_path / "missing.txt")])


def test_index(tmp_path):
    points = tmp_path / "points.csv"
    pd.DataFrame({"longitude": [4.3, -70.25], "latitude": [52.0, -33.5]}).to_csv(points, index=False)
    output = tmp_path / "indexed.csv"

    assert main(["index", str(points), str(output), "--resolution", "7"]) == 0
    indexed = pd.read_csv(output, dtype={"cell": str})
    assert indexed["cell"].tolist() == [
        cell_to_hex(lonlat_to_cell(4.3, 52.0, 7)),
        cell_to_hex(lonlat_to_cell(-70.25, -33.5, 7)),
    ]
    assert indexed["cell_resolution"].tolist() == [7, 7]


def test_table(caplog):
    with caplog.at_level("INFO"):
        assert main(["table"]) == 0
    assert "Resolution Table" in caplog.text


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_boundary_of_polar_face(capsys):
    north = get_res0_cells()[0]
    assert main(["boundary", cell_to_hex(north), "--segments", "4"]) == 0
    feature = json.loads(capsys.readouterr().out)
    polygon = shape(feature["geometry"])
    assert polygon.is_valid
    assert polygon.contains(Point(0, 89))
