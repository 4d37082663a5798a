"""Edge-matching tile grid editor engine and its I/O helpers."""

__version__ = "0.1.0"
