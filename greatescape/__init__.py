"""Tile worlds, textures, sprites, a software raycaster and UI widgets for a first-person game."""

__version__ = "0.1.0"