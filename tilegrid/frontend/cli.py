"""Command-line access to the tile grid engine.

Usage:
    tilegrid layout --cells 24 --width 800 --height 600 --gap 2
    tilegrid new board.json --catalog tiles/ --cells 24 --seed 7
    tilegrid fill board.json --brush fixed --index 3 --from 0 --to 14
    tilegrid remap board.json --catalog other_tiles.txt -o remapped.json
    tilegrid border part1.json part2.json --set-name "My Set"
    tilegrid preview board.json -o board.png

Grid files are JSON or PNG (see ``tile_io.py``). Catalogs are ``.txt``
name lists, ``.json`` catalogs or asset directories (see
``catalog_io.py``). Commands that modify a grid write back to the input
file unless ``-o`` is given.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from tilegrid.engine.border import (
    derive_composite_signature,
    export_file_names,
)
from tilegrid.engine.fill import fill_region
from tilegrid.engine.layout import solve_fixed_layout, solve_layout
from tilegrid.engine.prng import PCG32
from tilegrid.engine.regions import region_from_corners
from tilegrid.engine.remap import remap_grid
from tilegrid.engine.store import create_grid, resize_grid
from tilegrid.engine.types import (
    Brush,
    EditorParams,
    EraseBrush,
    FillMode,
    FixedBrush,
    RandomBrush,
)

from .catalog_io import load_catalog, load_catalog_names
from .preview import render_connectivity
from .tile_io import GridFile, load_grid_file, save_grid_file


def _load_params(path: str | None) -> EditorParams:
    if not path:
        return EditorParams()
    with open(path) as f:
        return EditorParams.from_dict(json.load(f))


def _save(grid_file: GridFile, path: str) -> None:
    img = None
    if path.lower().endswith(".png"):
        img = render_connectivity(grid_file.grid, grid_file.catalog())
    save_grid_file(grid_file, path, img)
    print(f"Wrote {path}")


def cmd_layout(args):
    params = _load_params(args.params)
    gap = args.gap if args.gap is not None else params.gap
    rows = args.rows or params.fixed_rows
    columns = args.columns or params.fixed_columns
    if rows and columns:
        layout = solve_fixed_layout(
            args.width, args.height, gap, rows, columns, params.max_cells
        )
    else:
        layout = solve_layout(args.cells, args.width, args.height, gap)
    print(json.dumps(layout.to_dict()))


def cmd_new(args):
    params = _load_params(args.params)
    gap = args.gap if args.gap is not None else params.gap
    seed = args.seed if args.seed is not None else params.seed
    names = load_catalog_names(Path(args.catalog))
    layout = solve_layout(
        min(args.cells, params.max_cells), args.width, args.height, gap
    )
    grid = create_grid(layout, gap)
    if not args.empty:
        # Seed from an empty store: every catalog entry once, then randoms.
        grid.cells = []
        resize_grid(grid, layout, len(names), PCG32(seed))
    grid_file = GridFile(name=args.name or Path(args.output).stem, grid=grid)
    grid_file.source_names = names
    _save(grid_file, args.output)


def _brush_from_args(args) -> Brush:
    if args.brush == "random":
        return RandomBrush()
    if args.brush == "erase":
        return EraseBrush()
    if args.index is None:
        raise ValueError("--index is required for the fixed brush")
    return FixedBrush(
        args.index, args.rotation % 4, args.mirror_x, args.mirror_y
    )


def cmd_fill(args):
    grid_file = load_grid_file(args.file)
    grid = grid_file.grid
    start = args.from_cell if args.from_cell is not None else 0
    end = args.to_cell if args.to_cell is not None else grid.cell_count - 1
    region = region_from_corners(start, end, grid.rows, grid.columns)
    mode = FillMode.FILL_ALL if args.mode == "all" else FillMode.FILL_EMPTY
    changed = fill_region(
        grid,
        region,
        _brush_from_args(args),
        mode,
        grid_file.locked_regions,
        catalog_size=len(grid_file.source_names),
        rng=PCG32(args.seed),
    )
    print(f"Changed {len(changed)} cells")
    _save(grid_file, args.output or args.file)


def cmd_remap(args):
    grid_file = load_grid_file(args.file)
    catalog_b = load_catalog(Path(args.catalog))
    changed = remap_grid(grid_file.grid, grid_file.catalog(), catalog_b)
    grid_file.source_names = [entry.name for entry in catalog_b]
    errors = sum(1 for c in grid_file.grid.cells if c.is_error)
    print(f"Remapped {len(changed)} cells ({errors} unresolved)")
    _save(grid_file, args.output or args.file)


def cmd_border(args):
    override = load_catalog(Path(args.catalog)) if args.catalog else None
    signatures = []
    for path in args.files:
        grid_file = load_grid_file(path)
        grid = grid_file.grid
        catalog = override if override is not None else grid_file.catalog()
        signatures.append(
            derive_composite_signature(
                grid.rows, grid.columns, grid.cells, catalog
            )
        )
    if args.set_name:
        for path, name in zip(
            args.files, export_file_names(args.set_name, signatures)
        ):
            print(f"{path}\t{name}")
    else:
        for path, bits in zip(args.files, signatures):
            print(f"{path}\t{bits}")


def cmd_preview(args):
    grid_file = load_grid_file(args.file)
    catalog = (
        load_catalog(Path(args.catalog))
        if args.catalog
        else grid_file.catalog()
    )
    img = render_connectivity(grid_file.grid, catalog, args.tile_size)
    save_grid_file(grid_file, args.output, img)
    print(f"Wrote {args.output} ({img.width}x{img.height})")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tilegrid",
        description="Compose and inspect edge-matching tile grids",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Debug logging"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("layout", help="Solve grid geometry for a viewport")
    p.add_argument("--cells", type=int, default=0)
    p.add_argument("--width", type=float, required=True)
    p.add_argument("--height", type=float, required=True)
    p.add_argument("--gap", type=float, default=None)
    p.add_argument("--rows", type=int, default=None)
    p.add_argument("--columns", type=int, default=None)
    p.add_argument("--params", help="EditorParams JSON file")
    p.set_defaults(func=cmd_layout)

    p = sub.add_parser("new", help="Create a grid file")
    p.add_argument("output")
    p.add_argument("--catalog", required=True)
    p.add_argument("--cells", type=int, required=True)
    p.add_argument("--width", type=float, default=800)
    p.add_argument("--height", type=float, default=600)
    p.add_argument("--gap", type=int, default=None)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--name", default=None)
    p.add_argument(
        "--empty", action="store_true", help="Leave every cell empty"
    )
    p.add_argument("--params", help="EditorParams JSON file")
    p.set_defaults(func=cmd_new)

    p = sub.add_parser("fill", help="Fill a rectangular region")
    p.add_argument("file")
    p.add_argument(
        "--brush", choices=["random", "erase", "fixed"], default="random"
    )
    p.add_argument("--index", type=int, default=None)
    p.add_argument("--rotation", type=int, default=0, help="Quarter turns")
    p.add_argument("--mirror-x", action="store_true")
    p.add_argument("--mirror-y", action="store_true")
    p.add_argument("--from", dest="from_cell", type=int, default=None)
    p.add_argument("--to", dest="to_cell", type=int, default=None)
    p.add_argument("--mode", choices=["empty", "all"], default="empty")
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("-o", "--output", default=None)
    p.set_defaults(func=cmd_fill)

    p = sub.add_parser("remap", help="Remap a grid onto another catalog")
    p.add_argument("file")
    p.add_argument("--catalog", required=True)
    p.add_argument("-o", "--output", default=None)
    p.set_defaults(func=cmd_remap)

    p = sub.add_parser("border", help="Composite tile signatures")
    p.add_argument("files", nargs="+")
    p.add_argument("--catalog", default=None)
    p.add_argument("--set-name", default=None)
    p.set_defaults(func=cmd_border)

    p = sub.add_parser("preview", help="Render a connectivity preview")
    p.add_argument("file")
    p.add_argument("-o", "--output", required=True)
    p.add_argument("--catalog", default=None)
    p.add_argument("--tile-size", type=int, default=None)
    p.set_defaults(func=cmd_preview)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        args.func(args)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
