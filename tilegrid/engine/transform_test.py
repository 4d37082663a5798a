import itertools

import pytest

from tilegrid.engine.signature import signature_from_key
from tilegrid.engine.transform import (
    all_transforms,
    apply_group_rotation,
    mirror,
    mirror_placement,
    opposite_direction,
    rotate,
    rotate_cell,
    transform,
    transform_placement,
    unrotate_cell,
)
from tilegrid.engine.types import EMPTY_PLACEMENT, ERROR_PLACEMENT, Placement

NORTH_ONLY = signature_from_key("10000000")
EAST_ONLY = signature_from_key("00100000")
WEST_ONLY = signature_from_key("00000010")
SOUTH_ONLY = signature_from_key("00001000")
# N + NE has no rotational or mirror symmetry.
ASYMMETRIC = signature_from_key("11000000")

ALL_SIGNATURES = list(itertools.product((False, True), repeat=8))


class TestEverySignature:
    @pytest.mark.parametrize("sig", ALL_SIGNATURES)
    def test_identity_transform(self, sig):
        assert transform(sig, 0, False, False) == sig

    @pytest.mark.parametrize("sig", ALL_SIGNATURES)
    def test_single_mirror_is_involution(self, sig):
        assert mirror(mirror(sig, True, False), True, False) == sig
        assert mirror(mirror(sig, False, True), False, True) == sig

    @pytest.mark.parametrize("sig", ALL_SIGNATURES)
    def test_four_quarter_turns(self, sig):
        assert rotate(rotate(sig, 1), 3) == sig


class TestTransform:
    def test_quarter_turn_moves_north_to_east(self):
        assert rotate(NORTH_ONLY, 1) == EAST_ONLY

    def test_full_turn_is_identity(self):
        assert rotate(ASYMMETRIC, 4) == ASYMMETRIC

    def test_mirror_x_swaps_east_west(self):
        assert mirror(EAST_ONLY, True, False) == WEST_ONLY
        assert mirror(NORTH_ONLY, True, False) == NORTH_ONLY

    def test_mirror_y_swaps_north_south(self):
        assert mirror(NORTH_ONLY, False, True) == SOUTH_ONLY
        assert mirror(EAST_ONLY, False, True) == EAST_ONLY

    def test_mirrors_apply_before_rotation(self):
        # Flip E to W, then a quarter turn takes W to N.
        assert transform(EAST_ONLY, 1, True, False) == NORTH_ONLY

    def test_bad_length_raises(self):
        with pytest.raises(ValueError):
            transform((True,) * 7, 0, False, False)

    def test_group_has_order_eight(self):
        images = {transform(ASYMMETRIC, r, mx, my)
                  for r, mx, my in all_transforms()}
        assert len(images) == 8

    def test_symmetric_signature_orbit(self):
        straight = signature_from_key("10001000")
        images = {transform(straight, r, mx, my)
                  for r, mx, my in all_transforms()}
        assert images == {straight, signature_from_key("00100010")}

    def test_all_transforms_enumeration(self):
        triples = all_transforms()
        assert len(triples) == 16
        assert len(set(triples)) == 16
        assert triples[0] == (0, False, False)
        assert triples[1] == (0, True, False)
        assert triples[4] == (1, False, False)


def test_opposite_direction():
    assert opposite_direction(0) == 4
    assert opposite_direction(7) == 3


class TestCellRotation:
    def test_rotate_then_unrotate(self):
        height, width = 2, 3
        for steps in range(4):
            for row in range(height):
                for col in range(width):
                    new = rotate_cell(row, col, height, width, steps)
                    assert unrotate_cell(*new, height, width, steps) == (
                        row,
                        col,
                    )

    def test_quarter_turn_top_left_goes_top_right(self):
        # A 2x3 rectangle becomes 3x2; its top-left lands top-right.
        assert rotate_cell(0, 0, 2, 3, 1) == (0, 1)


class TestPlacementSymmetry:
    def _rendered(self, placement):
        return transform_placement(ASYMMETRIC, placement)

    def test_mirror_placement_reflects_rendering(self):
        for r, mx, my in all_transforms():
            p = Placement(0, r, mx, my)
            for horizontal, vertical in (
                (True, False),
                (False, True),
                (True, True),
            ):
                got = self._rendered(mirror_placement(p, horizontal, vertical))
                assert got == mirror(self._rendered(p), horizontal, vertical)

    def test_mirror_placement_noop(self):
        p = Placement(0, 3, True, False)
        assert mirror_placement(p, False, False) == p

    def test_group_rotation_rotates_rendering(self):
        for r, mx, my in all_transforms():
            p = Placement(0, r, mx, my)
            for steps in range(4):
                got = self._rendered(apply_group_rotation(p, steps))
                assert got == rotate(self._rendered(p), steps)

    def test_group_rotation_keeps_mirror_flags(self):
        p = Placement(0, 0, True, False)
        turned = apply_group_rotation(p, 1)
        assert turned == Placement(0, 1, True, False)
        # Swapping the flags instead would draw a different tile.
        swapped = Placement(0, 1, False, True)
        assert self._rendered(turned) == rotate(self._rendered(p), 1)
        assert self._rendered(swapped) != self._rendered(turned)

    def test_sentinels_unchanged(self):
        for p in (EMPTY_PLACEMENT, ERROR_PLACEMENT):
            assert apply_group_rotation(p, 1) == p
            assert mirror_placement(p, True, True) == p
