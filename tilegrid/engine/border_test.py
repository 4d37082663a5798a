import pytest

from tilegrid.engine.border import (
    NO_CONNECTIONS,
    derive_composite_signature,
    export_file_names,
    sanitize_set_name,
)
from tilegrid.engine.signature import build_catalog, encode_signature
from tilegrid.engine.transform import mirror, mirror_placement
from tilegrid.engine.types import EMPTY_PLACEMENT, ERROR_PLACEMENT, Placement

CATALOG = build_catalog(
    [
        "ne_01000000.svg",
        "nw_00000001.svg",
        "corner_11000000.svg",
        "cross_11111111.svg",
        "tee_10100010.svg",
    ]
)
NE, NW, CORNER, CROSS, TEE = range(5)


def _derive(rows, columns, cells):
    return derive_composite_signature(rows, columns, cells, CATALOG)


class TestCompositeSignature:
    def test_single_cell_is_its_own_signature(self):
        assert _derive(1, 1, [Placement(TEE, 1)]) == "10101000"

    def test_all_crosses(self):
        assert _derive(2, 2, [Placement(CROSS)] * 4) == "11111111"

    def test_even_width_north_from_seam_diagonals(self):
        # Left-middle cell's NE meets the seam.
        cells = [Placement(NE), EMPTY_PLACEMENT] + [EMPTY_PLACEMENT] * 2
        assert _derive(2, 2, cells) == "10000000"
        # Right-middle cell's NW meets the seam.
        cells = [EMPTY_PLACEMENT, Placement(NW)] + [EMPTY_PLACEMENT] * 2
        assert _derive(2, 2, cells) == "10000000"

    def test_even_width_outer_diagonals(self):
        # NE on the right-middle cell is the composite's NE corner.
        cells = [EMPTY_PLACEMENT, Placement(NE)] + [EMPTY_PLACEMENT] * 2
        assert _derive(2, 2, cells) == "01000000"

    def test_odd_width_uses_middle_cell(self):
        cells = [EMPTY_PLACEMENT, Placement(TEE), EMPTY_PLACEMENT]
        assert _derive(1, 3, cells) == "10000000"

    def test_sentinels_contribute_nothing(self):
        cells = [ERROR_PLACEMENT, EMPTY_PLACEMENT, Placement(99)]
        cells.append(EMPTY_PLACEMENT)
        assert _derive(2, 2, cells) == NO_CONNECTIONS

    def test_empty_composite(self):
        assert _derive(0, 0, []) == NO_CONNECTIONS

    def test_cell_count_mismatch(self):
        with pytest.raises(ValueError):
            _derive(2, 2, [Placement(CROSS)])

    @pytest.mark.parametrize("rows,columns", [(2, 2), (3, 2), (2, 3), (3, 3)])
    def test_horizontal_mirror_symmetry(self, rows, columns):
        """Mirroring the sub-grid left-right mirrors its signature."""
        cells = [
            Placement(i % 5, i % 4, i % 3 == 0, False)
            for i in range(rows * columns)
        ]
        mirrored = list(cells)
        for r in range(rows):
            for c in range(columns):
                mirrored[r * columns + columns - 1 - c] = mirror_placement(
                    cells[r * columns + c], True, False
                )
        original = _derive(rows, columns, cells)
        expected = encode_signature(
            mirror(tuple(ch == "1" for ch in original), True, False)
        )
        assert _derive(rows, columns, mirrored) == expected


class TestExportNames:
    def test_sanitize(self):
        assert sanitize_set_name("My Set!") == "My_Set"
        assert sanitize_set_name("  roads-v2 ") == "roads-v2"
        assert sanitize_set_name("!!!") == "tile-set"

    def test_unique_signatures(self):
        assert export_file_names("Roads", ["10000000", "01000000"]) == [
            "Roads_10000000.svg",
            "Roads_01000000.svg",
        ]

    def test_shared_signatures_numbered(self):
        assert export_file_names(
            "My Set", ["10000000", "01000000", "10000000"]
        ) == [
            "My_Set_01_10000000.svg",
            "My_Set_01000000.svg",
            "My_Set_02_10000000.svg",
        ]

    def test_identical_tiles_each_get_a_file(self):
        # Names depend on signatures alone, so repeats are never merged.
        assert export_file_names("Set", ["11000000"] * 3) == [
            "Set_01_11000000.svg",
            "Set_02_11000000.svg",
            "Set_03_11000000.svg",
        ]
