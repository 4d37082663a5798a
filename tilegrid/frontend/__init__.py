"""File, preview and command-line layers around the tile grid engine."""
