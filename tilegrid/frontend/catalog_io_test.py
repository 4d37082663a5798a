import json

import pytest

from .catalog_io import (
    catalog_names_from_dict,
    load_catalog,
    load_catalog_names,
    save_catalog_names,
)


def test_txt_skips_comments_and_blanks(tmp_path):
    path = tmp_path / "tiles.txt"
    path.write_text("# roads\nroad_10001000.svg\n\n  end_10000000.svg  \n")
    assert load_catalog_names(path) == [
        "road_10001000.svg",
        "end_10000000.svg",
    ]


def test_json_catalog_forms(tmp_path):
    path = tmp_path / "tiles.json"
    path.write_text(
        json.dumps({"name": "roads", "entries": [{"name": "a_10000000.svg"}]})
    )
    assert load_catalog_names(path) == ["a_10000000.svg"]

    path.write_text(json.dumps(["b_00100000.svg"]))
    assert load_catalog_names(path) == ["b_00100000.svg"]


def test_invalid_json_entry():
    with pytest.raises(ValueError):
        catalog_names_from_dict({"entries": [42]})


def test_directory_lists_images_sorted(tmp_path):
    for name in ("b_00100000.svg", "a_10000000.svg", "README.md"):
        (tmp_path / name).write_text("")
    (tmp_path / "nested.svg").mkdir()
    assert load_catalog_names(tmp_path) == [
        "a_10000000.svg",
        "b_00100000.svg",
    ]


def test_unsupported_file(tmp_path):
    path = tmp_path / "tiles.csv"
    path.write_text("")
    with pytest.raises(ValueError):
        load_catalog_names(path)


def test_save_and_load_catalog(tmp_path):
    path = tmp_path / "sets" / "tiles.txt"
    save_catalog_names(["a_10000000.svg", "logo.svg"], path)
    catalog = load_catalog(path)
    assert [e.name for e in catalog] == ["a_10000000.svg", "logo.svg"]
    assert catalog[1].signature is None
