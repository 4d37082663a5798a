"""Rectangular regions over the row-major cell array.

Regions are addressed the way the editor's selection tool reports them: two
arbitrary corner cell indices. ``region_from_corners`` turns those into a
canonical ``Region`` clamped to the grid, so a drag that leaves the canvas
still selects the cells it covered.

``spiral_order`` gives the fixed visiting order used by bulk fills: clockwise
from the region's top-left corner, inward ring by ring. Fills with a Random
brush draw from the random source in this order, so the same seed always
produces the same result regardless of the grid's prior contents.
"""

from __future__ import annotations

from collections.abc import Iterable

from .types import LockedRegion, Region

_EMPTY_REGION = Region(0, -1, 0, -1)


def _corner_position(cell_index: int, columns: int) -> tuple[int, int]:
    # Indices before the first cell clamp to the top-left corner.
    if cell_index < 0:
        return -1, -1
    return divmod(cell_index, columns)


def region_from_corners(
    start: int, end: int, rows: int, columns: int
) -> Region:
    """Canonical region spanned by two cell indices, clamped to the grid."""
    if rows <= 0 or columns <= 0:
        return _EMPTY_REGION
    start_row, start_col = _corner_position(start, columns)
    end_row, end_col = _corner_position(end, columns)
    return Region(
        min_row=min(start_row, end_row),
        max_row=max(start_row, end_row),
        min_col=min(start_col, end_col),
        max_col=max(start_col, end_col),
    ).clamp(rows, columns)


def spiral_order(region: Region, columns: int) -> list[int]:
    """Cell indices of ``region`` in clockwise spiral order.

    Starts at the top-left cell, runs right along the top edge, down the
    right edge, left along the bottom, up the left edge, then repeats one
    ring further in.
    """
    order: list[int] = []
    min_r, max_r = region.min_row, region.max_row
    min_c, max_c = region.min_col, region.max_col
    while min_r <= max_r and min_c <= max_c:
        for c in range(min_c, max_c + 1):
            order.append(min_r * columns + c)
        min_r += 1
        if min_r > max_r:
            break
        for r in range(min_r, max_r + 1):
            order.append(r * columns + max_c)
        max_c -= 1
        if min_c > max_c:
            break
        for c in range(max_c, min_c - 1, -1):
            order.append(max_r * columns + c)
        max_r -= 1
        if min_r > max_r:
            break
        for r in range(max_r, min_r - 1, -1):
            order.append(r * columns + min_c)
        min_c += 1
    return order


def find_locked_region(
    cell_index: int, locked_regions: Iterable[LockedRegion], columns: int
) -> LockedRegion | None:
    """First locked region containing the cell, or None."""
    for region in locked_regions:
        if region.contains_index(cell_index, columns):
            return region
    return None


def locked_cell_indices(
    locked_regions: Iterable[LockedRegion], rows: int, columns: int
) -> set[int]:
    """Union of all cells covered by the locked regions, within the grid."""
    cells: set[int] = set()
    for region in locked_regions:
        clamped = region.clamp(rows, columns)
        if not clamped.is_empty:
            cells.update(clamped.cells(columns))
    return cells


def is_locked(
    cell_index: int, locked_regions: Iterable[LockedRegion], columns: int
) -> bool:
    return find_locked_region(cell_index, locked_regions, columns) is not None
