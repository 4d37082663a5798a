"""Outward connectivity of composite tiles, and export file naming.

A composite tile is a small grid of placed cells exported as a single new
tile. Its file name must carry its own 8-direction signature so it can be
used as a catalog entry elsewhere. The signature is read off the sub-grid's
border:

  * Diagonals (NE, SE, SW, NW) come straight from the matching diagonal
    slot of the corresponding corner cell.
  * Straight directions come from the middle of the edge. With an odd
    dimension there is one middle cell and its own slot is used (N for the
    top edge, and so on). With an even dimension two cells straddle the
    midpoint and the bit is the OR of their slots facing the seam: for the
    north edge, the left-middle cell's NE and the right-middle cell's NW.

Empty, Error and connectivity-less cells contribute nothing.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from .remap import rendered_signature
from .signature import encode_signature
from .types import (
    EAST,
    NORTH,
    NORTH_EAST,
    NORTH_WEST,
    SOUTH,
    SOUTH_EAST,
    SOUTH_WEST,
    WEST,
    CatalogEntry,
    Placement,
)

NO_CONNECTIONS = "00000000"


def derive_composite_signature(
    rows: int,
    columns: int,
    cells: Sequence[Placement],
    catalog: Sequence[CatalogEntry],
) -> str:
    """8-character signature of an ``rows x columns`` composite tile."""
    if rows <= 0 or columns <= 0:
        return NO_CONNECTIONS
    if len(cells) != rows * columns:
        raise ValueError(
            f"Composite of {rows}x{columns} needs {rows * columns} cells, "
            f"got {len(cells)}"
        )
    rendered = [rendered_signature(p, catalog) for p in cells]

    def pick(row: int, col: int, direction: int) -> bool:
        sig = rendered[row * columns + col]
        return sig is not None and sig[direction]

    top, bottom = 0, rows - 1
    left, right = 0, columns - 1

    if columns % 2 == 0:
        left_mid, right_mid = columns // 2 - 1, columns // 2
        north = pick(top, left_mid, NORTH_EAST) or pick(
            top, right_mid, NORTH_WEST
        )
        south = pick(bottom, left_mid, SOUTH_EAST) or pick(
            bottom, right_mid, SOUTH_WEST
        )
    else:
        north = pick(top, columns // 2, NORTH)
        south = pick(bottom, columns // 2, SOUTH)

    if rows % 2 == 0:
        top_mid, bottom_mid = rows // 2 - 1, rows // 2
        east = pick(top_mid, right, SOUTH_EAST) or pick(
            bottom_mid, right, NORTH_EAST
        )
        west = pick(top_mid, left, SOUTH_WEST) or pick(
            bottom_mid, left, NORTH_WEST
        )
    else:
        east = pick(rows // 2, right, EAST)
        west = pick(rows // 2, left, WEST)

    return encode_signature(
        (
            north,
            pick(top, right, NORTH_EAST),
            east,
            pick(bottom, right, SOUTH_EAST),
            south,
            pick(bottom, left, SOUTH_WEST),
            west,
            pick(top, left, NORTH_WEST),
        )
    )


def sanitize_set_name(name: str) -> str:
    """File-safe form of a tile set name ("My Set!" -> "My_Set")."""
    cleaned = re.sub(r"\s+", "_", name.strip())
    cleaned = re.sub(r"[^\w\-]+", "_", cleaned, flags=re.ASCII)
    cleaned = cleaned.strip("_")
    return cleaned or "tile-set"


def export_file_names(set_name: str, signatures: Sequence[str]) -> list[str]:
    """Export file names for composite tiles, in order.

    Unique signatures give ``<set>_<bits>.svg``. Signatures shared by
    several tiles get a two-digit ordinal, counted per signature:
    ``<set>_01_<bits>.svg``, ``<set>_02_<bits>.svg``.

    Numbering looks at signatures only. Tiles whose artwork is identical
    still get separate numbered files; callers that want one file per
    distinct artwork drop duplicates before calling.
    """
    base = sanitize_set_name(set_name)
    totals: dict[str, int] = {}
    for bits in signatures:
        totals[bits] = totals.get(bits, 0) + 1
    seen: dict[str, int] = {}
    names = []
    for bits in signatures:
        if totals[bits] > 1:
            seen[bits] = seen.get(bits, 0) + 1
            names.append(f"{base}_{seen[bits]:02d}_{bits}.svg")
        else:
            names.append(f"{base}_{bits}.svg")
    return names
