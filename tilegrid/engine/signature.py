"""Connectivity signatures encoded in tile asset names.

A tile artwork declares which of its eight compass edges/corners connect to
a neighbour through its file name: ``<base>_<8 binary digits>.<ext>``, the
digits in N, NE, E, SE, S, SW, W, NW order. ``road_10001000.svg`` is a
straight north-south road.

Names that do not follow the grammar carry no connectivity; parsing them
returns ``None`` rather than raising, and the grid shows such cells as
errors.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from .types import SIGNATURE_LENGTH, CatalogEntry, Signature

_SIGNATURE_NAME = re.compile(r"^.+_([01]{8})\.[A-Za-z0-9]+$")
_BAKED_NAME_WITH_TIMESTAMP = re.compile(r"^(.*)_\d+_([01]{8})\.svg$")
_BAKED_NAME = re.compile(r"^(.*)_([01]{8})\.svg$")


def parse_signature(name: str) -> Signature | None:
    """Signature encoded in ``name``, or None when it has none."""
    match = _SIGNATURE_NAME.match(name)
    if match is None:
        return None
    return signature_from_key(match.group(1))


def signature_from_key(key: str) -> Signature | None:
    """Inverse of ``encode_signature``. None unless ``key`` is exactly eight
    ``0``/``1`` characters."""
    if len(key) != SIGNATURE_LENGTH or any(ch not in "01" for ch in key):
        return None
    return tuple(ch == "1" for ch in key)


def encode_signature(sig: Iterable[bool]) -> str:
    bits = "".join("1" if v else "0" for v in sig)
    if len(bits) != SIGNATURE_LENGTH:
        raise ValueError(
            f"Signature must have {SIGNATURE_LENGTH} slots, got {len(bits)}"
        )
    return bits


def connection_count(name: str) -> int:
    """Number of connected directions declared by ``name`` (0 if none).

    Used to order palettes from sparse to dense tiles.
    """
    sig = parse_signature(name)
    return sum(sig) if sig is not None else 0


def parse_baked_name(name: str) -> tuple[str, str] | None:
    """Split a baked composite tile name into ``(tile_id, bits)``.

    Accepts an optional ``setId:`` qualifier and an optional timestamp
    before the bits: ``set-1:tile-7_1700000000_01000100.svg`` gives
    ``("tile-7", "01000100")``.
    """
    legacy = name.split(":", 1)[1] if ":" in name else name
    match = _BAKED_NAME_WITH_TIMESTAMP.match(legacy)
    if match is None:
        match = _BAKED_NAME.match(legacy)
    if match is None:
        return None
    return match.group(1), match.group(2)


def build_catalog(names: Iterable[str]) -> list[CatalogEntry]:
    """Catalog entries for ``names``, in order, with parsed signatures."""
    return [CatalogEntry(name, parse_signature(name)) for name in names]
