"""Connectivity preview images for grids.

Draws what the engine believes each cell connects to: a stroke from the
cell centre toward every connected compass direction of its rendered
signature (edges to the edge midpoint, corners to the corner). Empty cells
stay blank; Error cells and cells whose tile has no connectivity get a
cross. Comparing this against the real artwork is the quickest way to spot
a tile whose file name disagrees with its drawing.

Artwork itself is never rasterized here.
"""

from __future__ import annotations

from collections.abc import Sequence

from PIL import Image, ImageDraw

from tilegrid.engine.remap import rendered_signature
from tilegrid.engine.types import CatalogEntry, Grid

BACKGROUND = "#1e1e1e"
CELL_BG = "#2d2d2d"
LINE_COLOR = "#e8e8e8"
ERROR_COLOR = "#d9534f"

# Unit offsets per compass slot (x right, y down).
_DX = (0, 1, 1, 1, 0, -1, -1, -1)
_DY = (-1, -1, 0, 1, 1, 1, 0, -1)

DEFAULT_TILE_SIZE = 48


def _line_width(tile_size: int) -> int:
    return max(1, tile_size // 12)


def render_connectivity(
    grid: Grid,
    catalog: Sequence[CatalogEntry],
    tile_size: int | None = None,
) -> Image.Image:
    """RGB image of the grid's rendered connectivity.

    ``tile_size`` defaults to the grid's cell size, or 48 px when the grid
    has none.
    """
    size = tile_size or grid.cell_size or DEFAULT_TILE_SIZE
    gap = grid.gap
    w = max(1, grid.columns * size + gap * max(0, grid.columns - 1))
    h = max(1, grid.rows * size + gap * max(0, grid.rows - 1))
    img = Image.new("RGB", (w, h), BACKGROUND)
    draw = ImageDraw.Draw(img)
    lw = _line_width(size)
    half = size / 2

    for index, placement in enumerate(grid.cells):
        row, col = divmod(index, grid.columns)
        x0 = col * (size + gap)
        y0 = row * (size + gap)
        draw.rectangle([x0, y0, x0 + size - 1, y0 + size - 1], fill=CELL_BG)
        if placement.is_empty:
            continue
        sig = rendered_signature(placement, catalog)
        if sig is None:
            draw.line(
                [(x0, y0), (x0 + size - 1, y0 + size - 1)],
                fill=ERROR_COLOR,
                width=lw,
            )
            draw.line(
                [(x0 + size - 1, y0), (x0, y0 + size - 1)],
                fill=ERROR_COLOR,
                width=lw,
            )
            continue
        cx, cy = x0 + half, y0 + half
        for direction, connected in enumerate(sig):
            if connected:
                ex = cx + _DX[direction] * half
                ey = cy + _DY[direction] * half
                draw.line(
                    [(cx, cy), (ex, ey)],
                    fill=LINE_COLOR,
                    width=lw,
                )
        if any(sig):
            r = lw
            draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=LINE_COLOR)
    return img
