"""Raycasting maze explorer: .cub scene parsing, map checks, rendering and a pygame game loop."""

__version__ = "1.0.0"