"""Tile connectivity and grid composition engine.

Pure, synchronous logic with no I/O: signature parsing, the rotation and
mirror algebra, layout solving, brush fills, catalog remapping and composite
border derivation, and neighbour compatibility queries. Randomness is always
injected (see ``prng.py``).
"""
