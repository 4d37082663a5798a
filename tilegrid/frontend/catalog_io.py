"""Load tile catalogs from disk.

A catalog is an ordered list of tile asset names; the engine only needs the
names (connectivity is parsed from them) and their order (placements address
entries by index). Accepted sources:

  * ``.txt``: one name per line; blank lines and ``#`` comments ignored.
  * ``.json``: ``{"name": ..., "entries": [{"name": ...}, ...]}`` or a bare
    list of names.
  * a directory: its image files in sorted order, the way a tile manifest
    is generated from an asset folder.

Used by ``cli.py``.
"""

from __future__ import annotations

import json
from pathlib import Path

from tilegrid.engine.signature import build_catalog
from tilegrid.engine.types import CatalogEntry

IMAGE_SUFFIXES = {".svg", ".png", ".jpg", ".jpeg", ".webp"}


def catalog_names_from_dict(data: dict | list) -> list[str]:
    entries = data if isinstance(data, list) else data.get("entries", [])
    names = []
    for entry in entries:
        if isinstance(entry, str):
            names.append(entry)
        elif isinstance(entry, dict) and "name" in entry:
            names.append(entry["name"])
        else:
            raise ValueError(f"Invalid catalog entry: {entry!r}")
    return names


def load_catalog_names(path: Path) -> list[str]:
    """Ordered tile names from a catalog file or asset directory.

    Raises ValueError for unsupported file types.
    """
    if path.is_dir():
        return sorted(
            p.name
            for p in path.iterdir()
            if p.is_file() and p.suffix.lower() in IMAGE_SUFFIXES
        )
    suffix = path.suffix.lower()
    if suffix == ".txt":
        with open(path) as f:
            lines = [line.strip() for line in f]
        return [line for line in lines if line and not line.startswith("#")]
    if suffix == ".json":
        with open(path) as f:
            return catalog_names_from_dict(json.load(f))
    raise ValueError(f"Unsupported catalog file: {path}")


def load_catalog(path: Path) -> list[CatalogEntry]:
    return build_catalog(load_catalog_names(path))


def save_catalog_names(names: list[str], path: Path) -> None:
    """Write names as a ``.txt`` catalog, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        for name in names:
            f.write(name + "\n")
