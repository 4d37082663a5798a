"""Signature algebra under rotation and mirroring.

A placed tile is drawn with an optional horizontal flip (``mirror_x``,
reflection across the vertical axis), an optional vertical flip
(``mirror_y``, reflection across the horizontal axis) and a clockwise
rotation in quarter turns, always applied in that order. Each step permutes
the eight signature slots:

  * mirror_x:  slot i -> (8 - i) % 8   (E <-> W, NE <-> NW, ...)
  * mirror_y:  slot i -> (4 - i) % 8   (N <-> S, NE <-> SE, ...)
  * rotate k:  slot i -> (i + 2k) % 8  (a quarter turn moves two slots)

The rendered signature of a placement is ``transform`` of its catalog
entry's base signature. Together the rotations and mirrors generate the
dihedral group of order 8; the 16 ``(rotation, mirror_x, mirror_y)``
triples therefore name every symmetry twice.

This module also carries the cell mapping used when a whole rectangle of
placements is rotated as a group.
"""

from __future__ import annotations

from .types import SIGNATURE_LENGTH, Placement, Signature

_N = SIGNATURE_LENGTH


def mirror(sig: Signature, mirror_x: bool, mirror_y: bool) -> Signature:
    result = tuple(sig)
    if mirror_x:
        result = tuple(result[(_N - j) % _N] for j in range(_N))
    if mirror_y:
        result = tuple(result[(4 - j) % _N] for j in range(_N))
    return result


def rotate(sig: Signature, rotation_steps: int) -> Signature:
    shift = 2 * (rotation_steps % 4)
    return tuple(sig[(j - shift) % _N] for j in range(_N))


def transform(
    sig: Signature,
    rotation_steps: int,
    mirror_x: bool,
    mirror_y: bool,
) -> Signature:
    """Signature as rendered: mirror_x, then mirror_y, then rotation."""
    if len(sig) != _N:
        raise ValueError(f"Signature must have {_N} slots, got {len(sig)}")
    return rotate(mirror(sig, mirror_x, mirror_y), rotation_steps)


def transform_placement(sig: Signature, placement: Placement) -> Signature:
    return transform(
        sig,
        placement.rotation_steps,
        placement.mirror_x,
        placement.mirror_y,
    )


def all_transforms() -> list[tuple[int, bool, bool]]:
    """The 16 (rotation_steps, mirror_x, mirror_y) triples, rotation-major."""
    mirrors = [(False, False), (True, False), (False, True), (True, True)]
    return [(r, mx, my) for r in range(4) for mx, my in mirrors]


def opposite_direction(index: int) -> int:
    return (index + 4) % _N


# -- Group rotation --------------------------------------------------


def rotate_cell(
    row: int, col: int, height: int, width: int, rotation_steps: int
) -> tuple[int, int]:
    """Position of (row, col) after rotating its height x width rectangle
    clockwise. The rectangle's dimensions swap for odd ``rotation_steps``."""
    steps = rotation_steps % 4
    if steps == 0:
        return row, col
    if steps == 1:
        return col, height - 1 - row
    if steps == 2:
        return height - 1 - row, width - 1 - col
    return width - 1 - col, row


def unrotate_cell(
    new_row: int, new_col: int, height: int, width: int, rotation_steps: int
) -> tuple[int, int]:
    """Inverse of ``rotate_cell``; height and width are the original's."""
    steps = rotation_steps % 4
    if steps == 0:
        return new_row, new_col
    if steps == 1:
        return height - 1 - new_col, new_row
    if steps == 2:
        return height - 1 - new_row, width - 1 - new_col
    return new_col, width - 1 - new_row


def mirror_placement(
    placement: Placement, horizontal: bool, vertical: bool
) -> Placement:
    """Placement whose rendered signature is the original's reflected
    across the vertical axis (``horizontal``), the horizontal axis
    (``vertical``) or both.

    A reflection F satisfies F . R(r) = R(-r) . F, so a single reflection
    negates the rotation and toggles the matching mirror flag. Both
    reflections together are a half turn.
    """
    if placement.is_sentinel or not (horizontal or vertical):
        return placement
    if horizontal and vertical:
        return Placement(
            placement.source_index,
            (placement.rotation_steps + 2) % 4,
            placement.mirror_x,
            placement.mirror_y,
        )
    return Placement(
        placement.source_index,
        (-placement.rotation_steps) % 4,
        placement.mirror_x != horizontal,
        placement.mirror_y != vertical,
    )


def apply_group_rotation(
    placement: Placement, rotation_steps: int
) -> Placement:
    """Placement whose rendered signature is the original's turned clockwise
    by ``rotation_steps``.

    Rotation is applied after mirroring, so turning the whole group only
    adds to the placement's own rotation; the mirror flags stay put.
    """
    if placement.is_sentinel:
        return placement
    return Placement(
        placement.source_index,
        (placement.rotation_steps + rotation_steps) % 4,
        placement.mirror_x,
        placement.mirror_y,
    )
