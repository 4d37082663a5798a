"""Placement store: creating and resizing the grid's flat cell array.

The grid owns a row-major ``list[Placement]`` whose length must always equal
``rows * columns``. Any change of dimensions goes through ``normalize``,
which reuses existing authoring work where it can:

  * growing repeats the existing cells cyclically,
  * shrinking truncates,
  * an empty store is seeded with every catalog entry once (in catalog
    order, so a fresh canvas previews the whole catalog) followed by random
    picks, each with a random rotation.

All random draws come from the caller's ``RandomSource``, in cell order.
"""

from __future__ import annotations

import logging

from .prng import RandomSource, pick_rotation
from .types import EMPTY_PLACEMENT, Grid, GridLayout, Placement

logger = logging.getLogger(__name__)


def build_empty_cells(count: int) -> list[Placement]:
    return [EMPTY_PLACEMENT] * max(0, count)


def _seed_cells(
    count: int, catalog_size: int, rng: RandomSource
) -> list[Placement]:
    cells: list[Placement] = []
    for i in range(count):
        if i < catalog_size:
            cells.append(Placement(i, pick_rotation(rng)))
        elif catalog_size > 0:
            index = rng.next_int(0, catalog_size - 1)
            cells.append(Placement(index, pick_rotation(rng)))
        else:
            cells.append(EMPTY_PLACEMENT)
    return cells


def normalize(
    current_cells: list[Placement],
    target_cell_count: int,
    catalog_size: int,
    rng: RandomSource,
) -> list[Placement]:
    """Cell array of exactly ``max(0, target_cell_count)`` placements."""
    if target_cell_count <= 0:
        return []
    if not current_cells:
        return _seed_cells(target_cell_count, catalog_size, rng)
    n = len(current_cells)
    if n == target_cell_count:
        return current_cells
    if n < target_cell_count:
        return current_cells + [
            current_cells[i % n] for i in range(n, target_cell_count)
        ]
    return current_cells[:target_cell_count]


def create_grid(layout: GridLayout, gap: int = 0) -> Grid:
    """New grid sized from a layout solve, every cell empty."""
    return Grid(
        rows=layout.rows,
        columns=layout.columns,
        cell_size=layout.tile_size,
        gap=gap,
        cells=build_empty_cells(layout.rows * layout.columns),
    )


def resize_grid(
    grid: Grid,
    layout: GridLayout,
    catalog_size: int,
    rng: RandomSource,
) -> None:
    """Re-dimension ``grid`` in place, re-deriving its cells."""
    cells = normalize(
        grid.cells, layout.rows * layout.columns, catalog_size, rng
    )
    logger.debug(
        "Resized grid %dx%d -> %dx%d",
        grid.rows,
        grid.columns,
        layout.rows,
        layout.columns,
    )
    grid.rows = layout.rows
    grid.columns = layout.columns
    grid.cell_size = layout.tile_size
    grid.cells = cells
