"""Save and load grid files as PNG (with embedded metadata) or JSON.

A grid file records a grid's placements together with the names of the
catalog it was authored against (``source_names``), so it can be remapped
onto whatever catalog is active when it is opened again. Locked regions
travel with it.

The payload is versioned JSON. PNG files carry the same payload in a tEXt
chunk (key: ``tilegrid_grid``) next to a rendered preview, so a saved file is
both a shareable picture and a complete, reloadable grid.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from PIL import Image
from PIL.PngImagePlugin import PngInfo

from tilegrid.engine.signature import build_catalog
from tilegrid.engine.types import CatalogEntry, Grid, Region

METADATA_KEY = "tilegrid_grid"
FORMAT_VERSION = 1


@dataclass
class GridFile:
    name: str
    grid: Grid
    source_names: list[str] = field(default_factory=list)
    locked_regions: list[Region] = field(default_factory=list)

    def catalog(self) -> list[CatalogEntry]:
        return build_catalog(self.source_names)

    @staticmethod
    def from_dict(d: dict) -> GridFile:
        if d.get("v") != FORMAT_VERSION:
            raise ValueError(f"Unsupported grid file version: {d.get('v')!r}")
        try:
            grid = Grid.from_dict(d["grid"])
        except KeyError as e:
            raise ValueError(f"Grid file missing field {e}") from e
        return GridFile(
            name=d.get("name", ""),
            grid=grid,
            source_names=list(d.get("source_names", [])),
            locked_regions=[
                Region.from_dict(r) for r in d.get("locked_regions", [])
            ],
        )

    def to_dict(self) -> dict:
        d: dict = {
            "v": FORMAT_VERSION,
            "name": self.name,
            "grid": self.grid.to_dict(),
            "source_names": self.source_names,
        }
        if self.locked_regions:
            d["locked_regions"] = [r.to_dict() for r in self.locked_regions]
        return d


def serialize_grid_file(grid_file: GridFile) -> str:
    return json.dumps(grid_file.to_dict())


def deserialize_grid_file(text: str) -> GridFile:
    """Parse a grid file payload.

    Raises ValueError for malformed JSON, unknown versions or missing
    fields.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid grid file JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValueError("Invalid grid file: expected a JSON object")
    return GridFile.from_dict(data)


def save_grid_png(img: Image.Image, grid_file: GridFile, path: str) -> None:
    """Save a rendered grid image with the grid file embedded as a tEXt
    chunk."""
    info = PngInfo()
    info.add_text(METADATA_KEY, serialize_grid_file(grid_file))
    img.save(path, pnginfo=info)


def load_grid_png(path: str) -> GridFile:
    """Load a grid file from a PNG's tEXt metadata.

    Raises ValueError if the PNG does not contain grid metadata.
    """
    with Image.open(path) as img:
        text_data = getattr(img, "text", None)
        if not text_data or METADATA_KEY not in text_data:
            raise ValueError(
                f"PNG file does not contain grid metadata "
                f"(missing '{METADATA_KEY}' chunk)"
            )
        payload = text_data[METADATA_KEY]
    return deserialize_grid_file(payload)


def save_grid_json(grid_file: GridFile, path: str) -> None:
    with open(path, "w") as f:
        f.write(serialize_grid_file(grid_file))
        f.write("\n")


def load_grid_json(path: str) -> GridFile:
    with open(path) as f:
        return deserialize_grid_file(f.read())


def load_grid_file(path: str) -> GridFile:
    """Load a grid file, dispatching by extension.

    Supports .png (reads embedded metadata) and .json (reads raw JSON).
    Raises ValueError for unsupported extensions.
    """
    lower = path.lower()
    if lower.endswith(".png"):
        return load_grid_png(path)
    elif lower.endswith(".json"):
        return load_grid_json(path)
    else:
        raise ValueError(f"Unsupported file extension: {path}")


def save_grid_file(
    grid_file: GridFile, path: str, img: Image.Image | None = None
) -> None:
    """Save by extension; PNG output requires a rendered image."""
    lower = path.lower()
    if lower.endswith(".png"):
        if img is None:
            raise ValueError("Saving a PNG grid file needs a rendered image")
        save_grid_png(img, grid_file, path)
    elif lower.endswith(".json"):
        save_grid_json(grid_file, path)
    else:
        raise ValueError(f"Unsupported file extension: {path}")
