"""Neighbour compatibility: which placements fit a cell given its neighbours.

Two cells that touch in direction ``d`` match when the slot ``d`` of one
equals the opposite slot of the other: a tile that connects east needs an
east neighbour that connects west, and a tile that does not connect east
needs a neighbour that does not connect west. All eight directions are
checked, diagonals included.

A direction constrains nothing when the neighbour has no rendered
signature (Empty, Error, or an entry without connectivity) or lies off the
grid. Two switches make such directions closed instead, so a candidate must
not connect that way:

  * ``allow_edge_connections=False`` closes the grid border, and the border
    of ``selection`` when one is given.
  * ``empty_as_closed=True`` closes Empty and Error neighbours.

``compatible_candidates`` enumerates every ``(entry, rotation, mirrors)``
variant that satisfies all constraints; ``is_placement_valid`` checks one
placement. Entries without connectivity are always candidates and always
valid.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence

from .prng import RandomSource
from .remap import rendered_signature
from .transform import all_transforms, opposite_direction, transform
from .types import CatalogEntry, Grid, Placement, Signature

# (row delta, col delta) per compass slot.
NEIGHBOR_OFFSETS = (
    (-1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, -1),
)

Variants = list[list[tuple[Placement, Signature]]]


def build_variants(catalog: Sequence[CatalogEntry]) -> Variants:
    """Per catalog index, every placement of that entry with its rendered
    signature. Entries without a signature get an empty list."""
    variants: Variants = []
    for index, entry in enumerate(catalog):
        if entry.signature is None:
            variants.append([])
            continue
        variants.append(
            [
                (
                    Placement(index, r, mx, my),
                    transform(entry.signature, r, mx, my),
                )
                for r, mx, my in all_transforms()
            ]
        )
    return variants


def neighbor_constraints(
    grid: Grid,
    cell_index: int,
    catalog: Sequence[CatalogEntry],
    allow_edge_connections: bool = True,
    empty_as_closed: bool = False,
    selection: Collection[int] | None = None,
) -> dict[int, bool]:
    """Direction -> the value a placement at ``cell_index`` must have in
    that slot. Unconstrained directions are absent."""
    row, col = divmod(cell_index, grid.columns)
    constraints: dict[int, bool] = {}
    for direction, (dr, dc) in enumerate(NEIGHBOR_OFFSETS):
        r, c = row + dr, col + dc
        if not (0 <= r < grid.rows and 0 <= c < grid.columns):
            if not allow_edge_connections:
                constraints[direction] = False
            continue
        neighbor = r * grid.columns + c
        if (
            selection is not None
            and not allow_edge_connections
            and neighbor not in selection
        ):
            constraints[direction] = False
            continue
        placement = grid.cells[neighbor]
        if placement.is_sentinel:
            if empty_as_closed:
                constraints[direction] = False
            continue
        sig = rendered_signature(placement, catalog)
        if sig is not None:
            constraints[direction] = sig[opposite_direction(direction)]
    return constraints


def _satisfies(sig: Signature, constraints: dict[int, bool]) -> bool:
    return all(sig[d] == value for d, value in constraints.items())


def compatible_candidates(
    grid: Grid,
    cell_index: int,
    catalog: Sequence[CatalogEntry],
    allowed: Collection[int] | None = None,
    allow_edge_connections: bool = True,
    empty_as_closed: bool = False,
    selection: Collection[int] | None = None,
    variants: Variants | None = None,
) -> list[Placement]:
    """Placements that fit ``cell_index``, in catalog then transform order.

    ``allowed`` restricts the catalog indices considered. Pass ``variants``
    from ``build_variants`` to reuse them across cells.
    """
    if not 0 <= cell_index < grid.cell_count:
        raise ValueError(
            f"Cell {cell_index} outside {grid.rows}x{grid.columns} grid"
        )
    if variants is None:
        variants = build_variants(catalog)
    constraints = neighbor_constraints(
        grid,
        cell_index,
        catalog,
        allow_edge_connections,
        empty_as_closed,
        selection,
    )
    candidates: list[Placement] = []
    for index, entry in enumerate(catalog):
        if allowed is not None and index not in allowed:
            continue
        if entry.signature is None:
            candidates.append(Placement(index))
            continue
        candidates.extend(
            placement
            for placement, sig in variants[index]
            if _satisfies(sig, constraints)
        )
    return candidates


def select_compatible(
    grid: Grid,
    cell_index: int,
    catalog: Sequence[CatalogEntry],
    rng: RandomSource,
    allowed: Collection[int] | None = None,
    allow_edge_connections: bool = True,
    empty_as_closed: bool = False,
    selection: Collection[int] | None = None,
) -> Placement | None:
    """A uniformly drawn compatible placement, or None if nothing fits."""
    candidates = compatible_candidates(
        grid,
        cell_index,
        catalog,
        allowed,
        allow_edge_connections,
        empty_as_closed,
        selection,
    )
    if not candidates:
        return None
    return candidates[rng.next_int(0, len(candidates) - 1)]


def is_placement_valid(
    grid: Grid,
    cell_index: int,
    placement: Placement,
    catalog: Sequence[CatalogEntry],
    allow_edge_connections: bool = True,
    empty_as_closed: bool = False,
    selection: Collection[int] | None = None,
) -> bool:
    sig = rendered_signature(placement, catalog)
    if sig is None:
        return True
    constraints = neighbor_constraints(
        grid,
        cell_index,
        catalog,
        allow_edge_connections,
        empty_as_closed,
        selection,
    )
    return _satisfies(sig, constraints)


def invalid_cells(
    grid: Grid,
    catalog: Sequence[CatalogEntry],
    allow_edge_connections: bool = True,
) -> list[int]:
    """Indices of placed cells that do not match their neighbours."""
    return [
        index
        for index, placement in enumerate(grid.cells)
        if not placement.is_sentinel
        and not is_placement_valid(
            grid, index, placement, catalog, allow_edge_connections
        )
    ]
