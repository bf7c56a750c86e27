"""Raycasting first-person explorer for .cub scene files with XPM wall textures."""

__version__ = "0.1.0"