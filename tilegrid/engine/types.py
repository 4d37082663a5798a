"""Data types shared by the tile grid engine, with JSON dict round trips."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

SIGNATURE_LENGTH = 8

# Compass order of signature slots, clockwise from north.
DIRECTIONS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")
NORTH, NORTH_EAST, EAST, SOUTH_EAST, SOUTH, SOUTH_WEST, WEST, NORTH_WEST = (
    range(SIGNATURE_LENGTH)
)

# Placement.source_index sentinels.
EMPTY = -1
ERROR = -2

Signature = tuple[bool, ...]


@dataclass(frozen=True)
class Placement:
    source_index: int = EMPTY
    rotation_steps: int = 0
    mirror_x: bool = False
    mirror_y: bool = False

    def __post_init__(self) -> None:
        if not 0 <= self.rotation_steps <= 3:
            raise ValueError(
                f"rotation_steps must be in 0..3, got {self.rotation_steps}"
            )
        if self.source_index < ERROR:
            raise ValueError(f"Invalid source_index {self.source_index}")

    @property
    def is_empty(self) -> bool:
        return self.source_index == EMPTY

    @property
    def is_error(self) -> bool:
        return self.source_index == ERROR

    @property
    def is_sentinel(self) -> bool:
        return self.source_index < 0

    @staticmethod
    def from_dict(d: dict) -> Placement:
        """Accepts ``rotation_steps`` or, for older files, ``rotation`` in
        degrees."""
        if "rotation_steps" in d:
            steps = d["rotation_steps"]
        else:
            steps = d.get("rotation", 0) // 90
        return Placement(
            source_index=d.get("source_index", EMPTY),
            rotation_steps=steps % 4,
            mirror_x=bool(d.get("mirror_x", False)),
            mirror_y=bool(d.get("mirror_y", False)),
        )

    def to_dict(self) -> dict:
        return {
            "source_index": self.source_index,
            "rotation_steps": self.rotation_steps,
            "mirror_x": self.mirror_x,
            "mirror_y": self.mirror_y,
        }


EMPTY_PLACEMENT = Placement(EMPTY)
ERROR_PLACEMENT = Placement(ERROR)


@dataclass(frozen=True)
class CatalogEntry:
    """One named tile artwork. ``signature`` is None for names that do not
    follow the ``<base>_<8 digits>.<ext>`` grammar."""

    name: str
    signature: Signature | None = None

    def to_dict(self) -> dict:
        return {"name": self.name}


@dataclass(frozen=True)
class Region:
    """Inclusive rectangle of grid cells."""

    min_row: int
    max_row: int
    min_col: int
    max_col: int

    @property
    def height(self) -> int:
        return self.max_row - self.min_row + 1

    @property
    def width(self) -> int:
        return self.max_col - self.min_col + 1

    @property
    def is_empty(self) -> bool:
        return self.height <= 0 or self.width <= 0

    def contains(self, row: int, col: int) -> bool:
        return (
            self.min_row <= row <= self.max_row
            and self.min_col <= col <= self.max_col
        )

    def contains_index(self, cell_index: int, columns: int) -> bool:
        return self.contains(cell_index // columns, cell_index % columns)

    def overlaps(self, other: Region) -> bool:
        return not (
            self.max_row < other.min_row
            or other.max_row < self.min_row
            or self.max_col < other.min_col
            or other.max_col < self.min_col
        )

    def clamp(self, rows: int, columns: int) -> Region:
        """Clip to ``[0, rows) x [0, columns)``. May produce an empty region
        when the grid itself is empty."""
        return Region(
            min_row=max(0, self.min_row),
            max_row=min(rows - 1, self.max_row),
            min_col=max(0, self.min_col),
            max_col=min(columns - 1, self.max_col),
        )

    def cells(self, columns: int) -> list[int]:
        """Row-major cell indices inside the region."""
        return [
            r * columns + c
            for r in range(self.min_row, self.max_row + 1)
            for c in range(self.min_col, self.max_col + 1)
        ]

    @staticmethod
    def from_dict(d: dict) -> Region:
        return Region(
            min_row=d["min_row"],
            max_row=d["max_row"],
            min_col=d["min_col"],
            max_col=d["max_col"],
        )

    def to_dict(self) -> dict:
        return {
            "min_row": self.min_row,
            "max_row": self.max_row,
            "min_col": self.min_col,
            "max_col": self.max_col,
        }


# A locked region is an ordinary Region held in the caller's lock list.
LockedRegion = Region


@dataclass
class Grid:
    rows: int
    columns: int
    cell_size: int = 0
    gap: int = 0
    cells: list[Placement] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.rows < 0 or self.columns < 0:
            raise ValueError(
                f"Grid dimensions must be non-negative, got "
                f"{self.rows}x{self.columns}"
            )
        if len(self.cells) != self.rows * self.columns:
            raise ValueError(
                f"Grid of {self.rows}x{self.columns} needs "
                f"{self.rows * self.columns} cells, got {len(self.cells)}"
            )

    @property
    def cell_count(self) -> int:
        return self.rows * self.columns

    def index(self, row: int, col: int) -> int:
        return row * self.columns + col

    def position(self, cell_index: int) -> tuple[int, int]:
        return divmod(cell_index, self.columns)

    def full_region(self) -> Region:
        return Region(0, self.rows - 1, 0, self.columns - 1)

    @staticmethod
    def from_dict(d: dict) -> Grid:
        return Grid(
            rows=d["rows"],
            columns=d["columns"],
            cell_size=d.get("cell_size", 0),
            gap=d.get("gap", 0),
            cells=[Placement.from_dict(c) for c in d.get("cells", [])],
        )

    def to_dict(self) -> dict:
        return {
            "rows": self.rows,
            "columns": self.columns,
            "cell_size": self.cell_size,
            "gap": self.gap,
            "cells": [c.to_dict() for c in self.cells],
        }


# -- Brushes ---------------------------------------------------------


@dataclass(frozen=True)
class RandomBrush:
    def to_dict(self) -> dict:
        return {"kind": "random"}


@dataclass(frozen=True)
class EraseBrush:
    def to_dict(self) -> dict:
        return {"kind": "erase"}


@dataclass(frozen=True)
class FixedBrush:
    source_index: int
    rotation_steps: int = 0
    mirror_x: bool = False
    mirror_y: bool = False

    @property
    def placement(self) -> Placement:
        return Placement(
            self.source_index,
            self.rotation_steps,
            self.mirror_x,
            self.mirror_y,
        )

    def to_dict(self) -> dict:
        return {"kind": "fixed", **self.placement.to_dict()}


Brush = RandomBrush | EraseBrush | FixedBrush


def brush_from_dict(d: dict) -> Brush:
    kind = d.get("kind")
    if kind == "random":
        return RandomBrush()
    if kind == "erase":
        return EraseBrush()
    if kind == "fixed":
        p = Placement.from_dict(d)
        return FixedBrush(
            p.source_index, p.rotation_steps, p.mirror_x, p.mirror_y
        )
    raise ValueError(f"Unknown brush kind: {kind!r}")


class FillMode(Enum):
    FILL_EMPTY = "fill_empty"
    FILL_ALL = "fill_all"


# -- Layout / configuration ------------------------------------------


@dataclass(frozen=True)
class GridLayout:
    columns: int
    rows: int
    tile_size: int

    def to_dict(self) -> dict:
        return {
            "columns": self.columns,
            "rows": self.rows,
            "tile_size": self.tile_size,
        }


@dataclass
class EditorParams:
    gap: int = 2
    preferred_tile_size: int = 45
    max_cells: int = 512
    seed: int = 0
    fixed_rows: int | None = None
    fixed_columns: int | None = None

    @staticmethod
    def from_dict(d: dict) -> EditorParams:
        return EditorParams(
            gap=d.get("gap", 2),
            preferred_tile_size=d.get("preferred_tile_size", 45),
            max_cells=d.get("max_cells", 512),
            seed=d.get("seed", 0),
            fixed_rows=d.get("fixed_rows"),
            fixed_columns=d.get("fixed_columns"),
        )

    def to_dict(self) -> dict:
        d: dict = {
            "gap": self.gap,
            "preferred_tile_size": self.preferred_tile_size,
            "max_cells": self.max_cells,
            "seed": self.seed,
        }
        if self.fixed_rows is not None:
            d["fixed_rows"] = self.fixed_rows
        if self.fixed_columns is not None:
            d["fixed_columns"] = self.fixed_columns
        return d
