from tilegrid.engine.prng import PCG32
from tilegrid.engine.store import (
    build_empty_cells,
    create_grid,
    normalize,
    resize_grid,
)
from tilegrid.engine.types import EMPTY_PLACEMENT, GridLayout, Placement


class TestNormalize:
    def test_seeds_catalog_in_order_then_random(self):
        cells = normalize([], 7, 3, PCG32(1))
        assert len(cells) == 7
        assert [c.source_index for c in cells[:3]] == [0, 1, 2]
        for c in cells:
            assert 0 <= c.source_index < 3
            assert 0 <= c.rotation_steps <= 3
            assert not c.mirror_x and not c.mirror_y

    def test_seed_is_deterministic(self):
        assert normalize([], 20, 5, PCG32(9)) == normalize(
            [], 20, 5, PCG32(9)
        )

    def test_seeding_larger_catalog_than_grid(self):
        cells = normalize([], 2, 10, PCG32(1))
        assert [c.source_index for c in cells] == [0, 1]

    def test_empty_catalog_seeds_empty_cells(self):
        assert normalize([], 3, 0, PCG32(1)) == [EMPTY_PLACEMENT] * 3

    def test_grow_repeats_cyclically(self):
        a, b = Placement(0, 1), Placement(1, 2)
        assert normalize([a, b], 5, 2, PCG32(1)) == [a, b, a, b, a]

    def test_shrink_truncates(self):
        cells = [Placement(i) for i in range(4)]
        assert normalize(cells, 2, 4, PCG32(1)) == cells[:2]

    def test_same_length_unchanged(self):
        cells = [Placement(0), Placement(1)]
        assert normalize(cells, 2, 2, PCG32(1)) is cells

    def test_non_positive_target(self):
        assert normalize([Placement(0)], 0, 1, PCG32(1)) == []
        assert normalize([], -3, 1, PCG32(1)) == []


class TestGrid:
    def test_create_grid_is_empty(self):
        grid = create_grid(GridLayout(3, 2, 40), gap=2)
        assert (grid.rows, grid.columns, grid.cell_size) == (2, 3, 40)
        assert grid.cells == build_empty_cells(6)

    def test_resize_keeps_work(self):
        grid = create_grid(GridLayout(2, 1, 40))
        grid.cells = [Placement(0, 1), Placement(1)]
        resize_grid(grid, GridLayout(2, 2, 30), 2, PCG32(1))
        assert (grid.rows, grid.columns, grid.cell_size) == (2, 2, 30)
        assert grid.cells == [
            Placement(0, 1),
            Placement(1),
            Placement(0, 1),
            Placement(1),
        ]
