"""Validation of draw-tool strokes.

The draw tool lays a path of tiles cell by cell. A finished stroke is valid
when it reads as one continuous line: the first tile connects only toward
the path (exactly one connection), every interior tile connects exactly to
its previous and next cells, and the last tile has exactly two connections
including the one back along the path.
"""

from __future__ import annotations

from collections.abc import Sequence

from .remap import rendered_signature
from .types import SIGNATURE_LENGTH, CatalogEntry, Placement

# (row delta, col delta) -> compass slot
_DIRECTION_BY_DELTA = {
    (-1, 0): 0,
    (-1, 1): 1,
    (0, 1): 2,
    (1, 1): 3,
    (1, 0): 4,
    (1, -1): 5,
    (0, -1): 6,
    (-1, -1): 7,
}


def direction_from_to(from_cell: int, to_cell: int, columns: int) -> int:
    """Compass slot pointing from one cell to an adjacent one, or -1."""
    from_row, from_col = divmod(from_cell, columns)
    to_row, to_col = divmod(to_cell, columns)
    return _DIRECTION_BY_DELTA.get((to_row - from_row, to_col - from_col), -1)


def stroke_neighbor_directions(
    order: Sequence[int], position: int, columns: int
) -> set[int]:
    """Directions from ``order[position]`` toward its stroke neighbours."""
    cell = order[position]
    directions = set()
    for neighbour in (position - 1, position + 1):
        if 0 <= neighbour < len(order):
            d = direction_from_to(cell, order[neighbour], columns)
            if d >= 0:
                directions.add(d)
    return directions


def validate_draw_stroke(
    order: Sequence[int],
    cells: Sequence[Placement],
    columns: int,
    catalog: Sequence[CatalogEntry],
) -> bool:
    for position, cell in enumerate(order):
        if not 0 <= cell < len(cells):
            return False
        sig = rendered_signature(cells[cell], catalog)
        if sig is None:
            return False
        if position == 0:
            if sum(sig) != 1:
                return False
            continue
        allowed = stroke_neighbor_directions(order, position, columns)
        if position == len(order) - 1:
            if sum(sig) != 2 or not all(sig[d] for d in allowed):
                return False
            continue
        for d in range(SIGNATURE_LENGTH):
            if sig[d] != (d in allowed):
                return False
    return True
