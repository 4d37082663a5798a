"""Brush application: single-cell painting and region-bounded fills.

Three brushes exist (see ``types.py``):

  * **Random**: a catalog index different from the cell's current one,
    with a random rotation. Does nothing when the catalog has fewer than two
    entries.
  * **Erase**: the Empty sentinel.
  * **Fixed**: one exact placement.

``fill_region`` applies a brush to every cell of a rectangle, visiting
cells in ``regions.spiral_order``. It reads and writes only cells inside the
rectangle and skips cells covered by any locked region, even when a lock
only partly overlaps the rectangle. In ``FILL_EMPTY`` mode only Empty and
Error cells are written, which makes a second pass a no-op once every cell
holds a tile.

Also here: symmetric painting (``paint_cell`` with mirror flags) and
``rotate_region``, which turns a rectangle's contents a quarter turn
clockwise.

Every operation mutates ``grid.cells`` in place and returns the set of cell
indices whose placement actually changed.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from .prng import RandomSource, pick_new_index, pick_rotation
from .regions import is_locked, spiral_order
from .transform import apply_group_rotation, mirror_placement, rotate_cell
from .types import (
    EMPTY_PLACEMENT,
    Brush,
    EraseBrush,
    FillMode,
    FixedBrush,
    Grid,
    LockedRegion,
    Placement,
    RandomBrush,
    Region,
)

logger = logging.getLogger(__name__)


def apply_brush(
    brush: Brush,
    previous: Placement,
    catalog_size: int = 0,
    rng: RandomSource | None = None,
) -> Placement:
    if isinstance(brush, EraseBrush):
        return EMPTY_PLACEMENT
    if isinstance(brush, FixedBrush):
        return brush.placement
    if isinstance(brush, RandomBrush):
        if catalog_size <= 1:
            return previous
        if rng is None:
            raise ValueError("Random brush needs a random source")
        index = pick_new_index(rng, previous.source_index, catalog_size)
        return Placement(index, pick_rotation(rng))
    raise ValueError(f"Unknown brush: {brush!r}")


def _check_index(grid: Grid, cell_index: int) -> None:
    if not 0 <= cell_index < grid.cell_count:
        raise ValueError(
            f"Cell {cell_index} outside {grid.rows}x{grid.columns} grid"
        )


def mirrored_placements(
    cell_index: int,
    placement: Placement,
    rows: int,
    columns: int,
    horizontal: bool,
    vertical: bool,
) -> dict[int, Placement]:
    """Cell -> placement for a stroke at ``cell_index`` and its mirror
    images across the grid's vertical and/or horizontal centre line.

    Later entries win when images coincide (centre row or column).
    """
    row, col = divmod(cell_index, columns)
    mirror_row = rows - 1 - row
    mirror_col = columns - 1 - col
    result = {cell_index: placement}
    if horizontal:
        result[row * columns + mirror_col] = mirror_placement(
            placement, True, False
        )
    if vertical:
        result[mirror_row * columns + col] = mirror_placement(
            placement, False, True
        )
    if horizontal and vertical:
        result[mirror_row * columns + mirror_col] = mirror_placement(
            placement, True, True
        )
    return result


def paint_cell(
    grid: Grid,
    cell_index: int,
    brush: Brush,
    catalog_size: int = 0,
    rng: RandomSource | None = None,
    locked_regions: Sequence[LockedRegion] = (),
    mirror_horizontal: bool = False,
    mirror_vertical: bool = False,
) -> set[int]:
    """Apply ``brush`` to one cell (plus its mirror images, if enabled).

    Locked targets are left alone; a locked source cell paints nothing.
    """
    _check_index(grid, cell_index)
    if is_locked(cell_index, locked_regions, grid.columns):
        return set()
    placement = apply_brush(brush, grid.cells[cell_index], catalog_size, rng)
    targets = mirrored_placements(
        cell_index,
        placement,
        grid.rows,
        grid.columns,
        mirror_horizontal,
        mirror_vertical,
    )
    changed: set[int] = set()
    for index, new in targets.items():
        if index != cell_index and is_locked(
            index, locked_regions, grid.columns
        ):
            continue
        if grid.cells[index] != new:
            grid.cells[index] = new
            changed.add(index)
    return changed


def fill_region(
    grid: Grid,
    region: Region,
    brush: Brush,
    mode: FillMode,
    locked_regions: Sequence[LockedRegion] = (),
    catalog_size: int = 0,
    rng: RandomSource | None = None,
) -> set[int]:
    """Apply ``brush`` across ``region`` in spiral order."""
    region = region.clamp(grid.rows, grid.columns)
    if region.is_empty:
        return set()
    changed: set[int] = set()
    for index in spiral_order(region, grid.columns):
        if is_locked(index, locked_regions, grid.columns):
            continue
        previous = grid.cells[index]
        if mode is FillMode.FILL_EMPTY and not previous.is_sentinel:
            continue
        new = apply_brush(brush, previous, catalog_size, rng)
        if new != previous:
            grid.cells[index] = new
            changed.add(index)
    logger.debug(
        "Filled %d of %d cells (%s, %s)",
        len(changed),
        region.height * region.width,
        type(brush).__name__,
        mode.value,
    )
    return changed


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def rotate_region(
    grid: Grid,
    region: Region,
    locked_regions: Sequence[LockedRegion] = (),
) -> set[int]:
    """Turn the contents of ``region`` a quarter turn clockwise about its
    centre.

    The rotated footprint has the region's width as height and vice versa,
    centred on the same point. Unlocked source cells are cleared first, then
    each tile lands at its rotated position with its own rotation advanced
    by one step. Targets outside the grid or inside a locked region are
    dropped.
    """
    region = region.clamp(grid.rows, grid.columns)
    if region.is_empty:
        return set()
    height, width = region.height, region.width
    centre_row = (region.min_row + region.max_row) / 2
    centre_col = (region.min_col + region.max_col) / 2
    new_min_row = _round_half_up(centre_row - (width - 1) / 2)
    new_min_col = _round_half_up(centre_col - (height - 1) / 2)

    columns = grid.columns
    before: dict[int, Placement] = {}
    moves: list[tuple[int, Placement]] = []
    for r in range(height):
        for c in range(width):
            index = (region.min_row + r) * columns + region.min_col + c
            tile = grid.cells[index]
            before[index] = tile
            new_r, new_c = rotate_cell(r, c, height, width, 1)
            target_row = new_min_row + new_r
            target_col = new_min_col + new_c
            if 0 <= target_row < grid.rows and 0 <= target_col < columns:
                moves.append((target_row * columns + target_col, tile))

    for index in before:
        if not is_locked(index, locked_regions, columns):
            grid.cells[index] = EMPTY_PLACEMENT
    for index, tile in moves:
        if is_locked(index, locked_regions, columns):
            continue
        before.setdefault(index, grid.cells[index])
        grid.cells[index] = apply_group_rotation(tile, 1)

    return {i for i, old in before.items() if grid.cells[i] != old}
