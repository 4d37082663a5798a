"""Re-targeting placed grids onto a different tile catalog.

Placements address the catalog by index, so switching the active catalog
(loading another tile set, reordering, adding user tiles) invalidates every
placed cell. ``remap_cells`` rebuilds the cell array against the new catalog
so each cell keeps drawing the same connectivity:

  1. If an entry with the same name exists in the new catalog, the cell
     simply moves to its new index and keeps its rotation and mirrors.
  2. Otherwise the cell's rendered signature (base signature under its
     rotation and mirrors) is looked up in a reverse index of the new
     catalog, which lists every (entry, rotation, mirror) combination that
     renders each signature. The first candidate wins, so an east-only tile
     rotated a quarter turn back can stand in for a north-only one.
  3. Otherwise the cell becomes the Error sentinel.

Cells are remapped independently; a miss never affects its neighbours.
Empty and Error cells pass through unchanged. Matching is by name, never by
object identity, so catalogs rebuilt from disk still match.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .signature import encode_signature
from .transform import all_transforms, transform, transform_placement
from .types import (
    ERROR_PLACEMENT,
    CatalogEntry,
    Grid,
    Placement,
    Signature,
)

logger = logging.getLogger(__name__)

ReverseIndex = dict[str, list[Placement]]


def build_reverse_index(catalog: Sequence[CatalogEntry]) -> ReverseIndex:
    """Rendered signature key -> placements producing it.

    Candidates appear in catalog order, then rotation, then mirror order
    (none, x, y, both). Entries without a signature are not indexed.
    """
    index: ReverseIndex = {}
    for source_index, entry in enumerate(catalog):
        if entry.signature is None:
            continue
        for r, mx, my in all_transforms():
            key = encode_signature(transform(entry.signature, r, mx, my))
            index.setdefault(key, []).append(
                Placement(source_index, r, mx, my)
            )
    return index


def build_name_index(catalog: Sequence[CatalogEntry]) -> dict[str, int]:
    """Entry name -> first index carrying it."""
    names: dict[str, int] = {}
    for i, entry in enumerate(catalog):
        names.setdefault(entry.name, i)
    return names


def rendered_signature(
    placement: Placement, catalog: Sequence[CatalogEntry]
) -> Signature | None:
    """Signature the placement draws, or None for sentinels, stale indices
    and entries without connectivity."""
    if placement.is_sentinel or placement.source_index >= len(catalog):
        return None
    base = catalog[placement.source_index].signature
    if base is None:
        return None
    return transform_placement(base, placement)


def remap_placement(
    placement: Placement,
    catalog_a: Sequence[CatalogEntry],
    catalog_b: Sequence[CatalogEntry],
    reverse_index_b: ReverseIndex,
    name_index_b: dict[str, int] | None = None,
) -> Placement:
    """Equivalent placement in ``catalog_b`` for one addressed in
    ``catalog_a``."""
    if placement.is_sentinel:
        return placement
    if placement.source_index >= len(catalog_a):
        logger.debug(
            "Index %d outside previous catalog of %d entries",
            placement.source_index,
            len(catalog_a),
        )
        return ERROR_PLACEMENT
    entry = catalog_a[placement.source_index]
    if name_index_b is None:
        name_index_b = build_name_index(catalog_b)
    same = name_index_b.get(entry.name)
    if same is not None:
        return Placement(
            same,
            placement.rotation_steps,
            placement.mirror_x,
            placement.mirror_y,
        )
    rendered = rendered_signature(placement, catalog_a)
    if rendered is None:
        logger.debug("No connectivity for %r; marking as error", entry.name)
        return ERROR_PLACEMENT
    candidates = reverse_index_b.get(encode_signature(rendered))
    if not candidates:
        logger.debug(
            "No tile renders %s for %r; marking as error",
            encode_signature(rendered),
            entry.name,
        )
        return ERROR_PLACEMENT
    return candidates[0]


def remap_cells(
    cells: Sequence[Placement],
    catalog_a: Sequence[CatalogEntry],
    catalog_b: Sequence[CatalogEntry],
) -> list[Placement]:
    reverse_index = build_reverse_index(catalog_b)
    names = build_name_index(catalog_b)
    result = [
        remap_placement(p, catalog_a, catalog_b, reverse_index, names)
        for p in cells
    ]
    lost = sum(
        1
        for old, new in zip(cells, result)
        if new.is_error and not old.is_error
    )
    logger.info(
        "Remapped %d cells onto %d-entry catalog (%d unresolved)",
        len(result),
        len(catalog_b),
        lost,
    )
    return result


def remap_grid(
    grid: Grid,
    catalog_a: Sequence[CatalogEntry],
    catalog_b: Sequence[CatalogEntry],
) -> set[int]:
    """Remap ``grid`` in place; returns indices whose placement changed."""
    new_cells = remap_cells(grid.cells, catalog_a, catalog_b)
    changed = {
        i
        for i, (old, new) in enumerate(zip(grid.cells, new_cells))
        if old != new
    }
    grid.cells = new_cells
    return changed
