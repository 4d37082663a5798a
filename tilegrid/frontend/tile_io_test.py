"""Tests for grid file save/load helpers."""

import json

import pytest
from PIL import Image

from tilegrid.engine.types import ERROR_PLACEMENT, Grid, Placement, Region

from .tile_io import (
    FORMAT_VERSION,
    GridFile,
    deserialize_grid_file,
    load_grid_file,
    load_grid_json,
    load_grid_png,
    save_grid_file,
    save_grid_png,
    serialize_grid_file,
)


def _sample():
    grid = Grid(
        rows=1,
        columns=3,
        cell_size=40,
        gap=2,
        cells=[Placement(0, 1), Placement(1, 0, True), ERROR_PLACEMENT],
    )
    return GridFile(
        name="crossroads",
        grid=grid,
        source_names=["north_10000000.svg", "cross_10101010.svg"],
        locked_regions=[Region(0, 0, 1, 2)],
    )


def test_save_and_load_png_roundtrip(tmp_path):
    """Save a grid in a PNG, load it back, and verify equality."""
    img = Image.new("RGB", (100, 40), "green")
    path = str(tmp_path / "grid.png")

    save_grid_png(img, _sample(), path)
    loaded = load_grid_png(path)

    assert loaded == _sample()


def test_load_png_missing_chunk(tmp_path):
    """A plain PNG without metadata raises ValueError."""
    img = Image.new("RGB", (100, 100), "red")
    path = str(tmp_path / "plain.png")
    img.save(path)

    with pytest.raises(ValueError, match="tilegrid_grid"):
        load_grid_png(path)


def test_load_json_roundtrip(tmp_path):
    """Write a JSON file and load it back."""
    path = tmp_path / "grid.json"
    path.write_text(json.dumps(_sample().to_dict()))

    assert load_grid_json(str(path)) == _sample()


def test_locked_regions_omitted_when_empty():
    grid_file = _sample()
    grid_file.locked_regions = []
    assert "locked_regions" not in json.loads(serialize_grid_file(grid_file))


def test_catalog_from_source_names():
    catalog = _sample().catalog()
    assert [e.name for e in catalog] == _sample().source_names
    assert catalog[0].signature[0] is True


def test_legacy_degree_rotation():
    payload = {
        "v": FORMAT_VERSION,
        "grid": {
            "rows": 1,
            "columns": 1,
            "cells": [{"source_index": 0, "rotation": 180}],
        },
    }
    loaded = deserialize_grid_file(json.dumps(payload))
    assert loaded.grid.cells == [Placement(0, 2)]


def test_unsupported_version():
    with pytest.raises(ValueError):
        deserialize_grid_file(json.dumps({"v": 99, "grid": {}}))


def test_missing_grid():
    with pytest.raises(ValueError):
        deserialize_grid_file(json.dumps({"v": FORMAT_VERSION}))


def test_invalid_json():
    with pytest.raises(ValueError):
        deserialize_grid_file("{not json")
    with pytest.raises(ValueError):
        deserialize_grid_file("[1, 2]")


def test_load_grid_file_dispatch(tmp_path):
    """load_grid_file dispatches to PNG or JSON loader by extension."""
    png_path = str(tmp_path / "g.png")
    save_grid_file(_sample(), png_path, Image.new("RGB", (10, 10)))
    assert load_grid_file(png_path) == _sample()

    json_path = str(tmp_path / "g.json")
    save_grid_file(_sample(), json_path)
    assert load_grid_file(json_path) == _sample()


def test_unsupported_extension(tmp_path):
    with pytest.raises(ValueError):
        load_grid_file(str(tmp_path / "grid.txt"))
    with pytest.raises(ValueError):
        save_grid_file(_sample(), str(tmp_path / "grid.txt"))


def test_png_save_needs_image(tmp_path):
    with pytest.raises(ValueError):
        save_grid_file(_sample(), str(tmp_path / "grid.png"))
