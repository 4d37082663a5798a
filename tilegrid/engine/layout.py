"""Grid geometry for a viewport.

``solve_layout`` picks the column count that gives the largest square tiles
for a given number of cells, by trying every column count. The search is
exhaustive over ``1..cell_count`` because renderers need the exact pixel
size; an analytic estimate can be off by one pixel and overflow the
viewport.

``solve_fixed_layout`` is used when the user has pinned the row and column
count; it only computes the tile size, capping the grid at ``MAX_CELLS``.
"""

from __future__ import annotations

import math

from .types import GridLayout

MAX_CELLS = 512


def _fit(
    columns: int,
    rows: int,
    available_width: float,
    available_height: float,
    gap: float,
) -> int:
    width_per_tile = (available_width - gap * (columns - 1)) // columns
    height_per_tile = (available_height - gap * (rows - 1)) // rows
    return int(min(width_per_tile, height_per_tile))


def solve_layout(
    cell_count: int,
    available_width: float,
    available_height: float,
    gap: float,
) -> GridLayout:
    """Largest-tile layout for ``cell_count`` cells.

    Ties keep the smallest column count.
    """
    if cell_count <= 0:
        return GridLayout(columns=1, rows=0, tile_size=0)
    best: GridLayout | None = None
    for columns in range(1, cell_count + 1):
        rows = math.ceil(cell_count / columns)
        tile_size = _fit(
            columns, rows, available_width, available_height, gap
        )
        if best is None or tile_size > best.tile_size:
            best = GridLayout(columns=columns, rows=rows, tile_size=tile_size)
    assert best is not None
    return best


def squarest_dimensions(max_cells: int) -> tuple[int, int]:
    """(rows, columns) of the squarest grid with at most ``max_cells``."""
    if max_cells <= 0:
        return 0, 0
    columns = math.isqrt(max_cells)
    rows = max_cells // columns
    return rows, columns


def solve_fixed_layout(
    available_width: float,
    available_height: float,
    gap: float,
    rows: int,
    columns: int,
    max_cells: int = MAX_CELLS,
) -> GridLayout:
    """Tile size for a pinned row/column count.

    Grids over ``max_cells`` fall back to the squarest grid that fits the
    cap.
    """
    if rows <= 0 or columns <= 0:
        return GridLayout(columns=columns, rows=rows, tile_size=0)
    if rows * columns > max_cells:
        rows, columns = squarest_dimensions(max_cells)
    if (
        rows <= 0
        or columns <= 0
        or available_width <= 0
        or available_height <= 0
    ):
        return GridLayout(columns=columns, rows=rows, tile_size=0)
    tile_size = _fit(columns, rows, available_width, available_height, gap)
    return GridLayout(columns=columns, rows=rows, tile_size=max(0, tile_size))
