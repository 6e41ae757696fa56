"""Turning the map section of a scene file into a grid of cells."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .config import NUM_SPRITES, CubError, Variant
from .player import Player

_PLAYER_CELLS = frozenset("NSEW")
_DIGITS = "0123456789"
_HIGHEST_SPRITE = str(NUM_SPRITES + 1)


@dataclass
class MapGrid:
    """Map rows of equal width, with spaces as 'V', and the player's spawn."""

    rows: Tuple[str, ...]
    player: Player

    @property
    def width(self) -> int:
        return max((len(row) for row in self.rows), default=0)

    @property
    def height(self) -> int:
        return len(self.rows)

    def cell(self, x: int, y: int) -> str:
        """The cell at column ``x`` of row ``y``; outside the map is void."""
        if 0 <= y < len(self.rows) and 0 <= x < len(self.rows[y]):
            return self.rows[y][x]
        return "V"


def is_map_start(line: str) -> bool:
    """Classify a line met while looking for the map.

    False for an empty line, True for the first map line (it starts with a
    wall); anything else is an error.
    """
    text = line.strip(" \n")
    if not text:
        return False
    if text[0] == "1":
        return True
    raise CubError("invalid character while reading the map")


def _is_blank(line: str) -> bool:
    return not line.strip(" \t\n")


def _map_cell(char: str, variant: Variant) -> str:
    if variant.allows_sprites():
        if char in _DIGITS:
            if char >= "2" and char > _HIGHEST_SPRITE:
                raise CubError("invalid sprite ID in map")
            return char
    elif char in ("0", "1"):
        return char
    if char == " ":
        return "V"
    raise CubError("invalid character in map")


def build_grid(lines: Iterable[str], variant: Variant) -> MapGrid:
    """Build the grid from the map lines, the first map line included."""
    raw = [line[:-1] if line.endswith("\n") else line for line in lines]
    if not raw:
        raise CubError("map not found")
    if any(_is_blank(line) for line in raw):
        raise CubError("the map must not contain empty lines or lines with only spaces")
    width = max(len(line) for line in raw)
    player: Optional[Player] = None
    rows = []
    for y, line in enumerate(raw):
        cells = []
        for x, char in enumerate(line):
            if char in _PLAYER_CELLS:
                if player is not None:
                    raise CubError(
                        "only one player position indicator (N,S,W,E) is allowed in the map"
                    )
                player = Player.spawn(char, x, y)
                cells.append(char)
            else:
                cells.append(_map_cell(char, variant))
        rows.append("".join(cells).ljust(width, "V"))
    if player is None:
        raise CubError("player position and direction not found in the map")
    return MapGrid(tuple(rows), player)