"""Seedable random source for tile and rotation picks.

Every random decision in the engine (the Random brush, the initial fill of
a fresh grid) goes through a ``RandomSource`` passed in by the caller, never
through the ``random`` module. ``PCG32`` is the default implementation: the
PCG-XSH-RR variant (32-bit output, 64-bit state), so a seed replays the exact
same sequence of picks on any platform.

Reference: https://www.pcg-random.org/
"""

from __future__ import annotations

from typing import Protocol

ROTATION_STEPS = (0, 1, 2, 3)


class RandomSource(Protocol):
    def next_int(self, lo: int, hi: int) -> int:
        """Uniform integer in [lo, hi] inclusive."""
        ...

    def next_float(self) -> float:
        """Uniform float in [0, 1)."""
        ...


class PCG32:
    _MASK32 = 0xFFFFFFFF
    _MASK64 = 0xFFFFFFFFFFFFFFFF
    _MUL = 6364136223846793005

    def __init__(self, seed: int, seq: int = 0) -> None:
        self._state: int = 0
        self._inc: int = ((seq << 1) | 1) & self._MASK64
        self._advance()
        self._state = (self._state + seed) & self._MASK64
        self._advance()

    def _advance(self) -> None:
        self._state = (self._state * self._MUL + self._inc) & self._MASK64

    def next_u32(self) -> int:
        old = self._state
        self._advance()
        xorshifted = (((old >> 18) ^ old) >> 27) & self._MASK32
        rot = (old >> 59) & 31
        return (
            (xorshifted >> rot) | (xorshifted << ((-rot) & 31))
        ) & self._MASK32

    def next_float(self) -> float:
        """Uniform float in [0, 1)."""
        return self.next_u32() / (self._MASK32 + 1)

    def next_int(self, lo: int, hi: int) -> int:
        """Uniform integer in [lo, hi] inclusive."""
        return lo + self.next_u32() % (hi - lo + 1)


def pick_rotation(rng: RandomSource) -> int:
    """Draw a rotation in quarter turns (0..3)."""
    return ROTATION_STEPS[rng.next_int(0, len(ROTATION_STEPS) - 1)]


def pick_new_index(rng: RandomSource, current: int, count: int) -> int:
    """Draw a catalog index in [0, count) that differs from ``current``.

    Returns ``current`` unchanged when there is nothing else to pick
    (``count <= 1``). Sentinel values of ``current`` never collide with a
    real index, so a single draw suffices for empty cells.
    """
    if count <= 1:
        return current
    index = current
    while index == current:
        index = rng.next_int(0, count - 1)
    return index
