"""Reading a .cub scene file: texture paths, colours and the map."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .color import parse_color
from .config import CubError, Variant
from .mapgrid import MapGrid, build_grid, is_map_start
from .player import Player
from .validate import has_extension, is_readable, validate_grid

_TEXTURE_KEYS = (
    ("SO ", "south"),
    ("WE ", "west"),
    ("EA ", "east"),
    ("NO ", "north"),
)
_COLOR_KEYS = (
    ("C ", "ceiling"),
    ("F ", "floor"),
)
_COLOR_CHARS = frozenset("0123456789,")


def is_only_spaces(line: str) -> bool:
    """True if ``line`` holds nothing but spaces, tabs and newlines."""
    return all(char in " \t\n" for char in line)


def _texture_path(line: str) -> str:
    rest = line[2:]
    if rest[1:2] in (" ", "\t"):
        raise CubError("space or tab after the identifier")
    path = rest.strip(" ")
    if path.endswith("\n"):
        path = path[:-1]
    if not has_extension(path, ".xpm"):
        raise CubError("use a texture with the .xpm extension")
    if not is_readable(path):
        raise CubError(f"could not access the texture file {path!r}")
    return path


def _color_value(line: str) -> int:
    rest = line[1:]
    if rest[1:2] in (" ", "\t"):
        raise CubError("space or tab after the identifier")
    text = rest.strip(" ")
    if any(char not in _COLOR_CHARS for char in text) or text.count(",") > 2:
        raise CubError(
            "a colour line must hold 3 numbers separated by 2 commas without spaces"
        )
    return parse_color(text)


@dataclass
class Params:
    """The identifier lines that come before the map."""

    north: Optional[str] = None
    south: Optional[str] = None
    east: Optional[str] = None
    west: Optional[str] = None
    floor: Optional[int] = None
    ceiling: Optional[int] = None

    def feed(self, line: str) -> bool:
        """Take one line of the header; return whether the header is complete."""
        text = line.strip(" \n")
        if not text:
            return self.complete()
        for prefix, name in _TEXTURE_KEYS:
            if text.startswith(prefix):
                setattr(self, name, _texture_path(text))
                return self.complete()
        for prefix, name in _COLOR_KEYS:
            if text.startswith(prefix):
                setattr(self, name, _color_value(text))
                return self.complete()
        raise CubError("unknown identifier or missing identifier")

    def complete(self) -> bool:
        """True once all four textures and both colours are known."""
        return (
            self.north is not None
            and self.south is not None
            and self.east is not None
            and self.west is not None
            and self.floor is not None
            and self.ceiling is not None
        )


@dataclass
class Scene:
    """Everything a scene file describes, checked and ready to play."""

    north: str
    south: str
    east: str
    west: str
    floor: int
    ceiling: int
    grid: MapGrid

    @property
    def rows(self) -> Tuple[str, ...]:
        return self.grid.rows

    @property
    def player(self) -> Player:
        return self.grid.player

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height


def parse_scene(lines: Iterable[str], variant: Variant) -> Scene:
    """Build a Scene from the lines of a .cub file and check the map is closed."""
    lines = list(lines)
    params = Params()
    consumed = 0
    for index, line in enumerate(lines):
        if index == 0 and is_only_spaces(line):
            raise CubError(
                "the .cub file must not start with empty lines or lines with only spaces"
            )
        consumed = index + 1
        if params.feed(line):
            break
    else:
        raise CubError("map not found")

    # The map search stops one line short of the end of the file.
    map_start = None
    for index, line in enumerate(lines[consumed:-1], start=consumed):
        if is_map_start(line):
            map_start = index
            break
    if map_start is None:
        raise CubError("map not found")

    grid = build_grid(lines[map_start:], variant)
    validate_grid(grid.rows, variant)
    return Scene(
        north=params.north,
        south=params.south,
        east=params.east,
        west=params.west,
        floor=params.floor,
        ceiling=params.ceiling,
        grid=grid,
    )


def _split_lines(text: str) -> List[str]:
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def load_scene(path: Union[str, "os.PathLike[str]"], variant: Variant) -> Scene:
    """Read and check the scene file at ``path``."""
    path_text = os.fspath(path)
    if not has_extension(path_text, ".cub"):
        raise CubError("use a file with the .cub extension")
    if not is_readable(path_text):
        raise CubError("could not access the map file")
    try:
        with open(path_text, encoding="utf-8", errors="surrogateescape", newline="") as handle:
            text = handle.read()
    except OSError as exc:
        raise CubError("error opening the map file") from exc
    return parse_scene(_split_lines(text), variant)


def _unused(_: Sequence[str]) -> None:  # pragma: no cover
    return None