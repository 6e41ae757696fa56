"""Checks on scene file names and on the closedness of a map grid."""

from __future__ import annotations

import os
from typing import Callable, Iterator, Sequence, Tuple, Union

from .config import CubError, Variant

_PLAYER_CELLS = frozenset("NSEW")
_SPRITE_CELLS = frozenset("23456789")


def has_extension(path: str, extension: str) -> bool:
    """True if ``path`` ends in ``extension`` and has a name before it."""
    return len(path) > len(extension) and path.endswith(extension)


def is_readable(path: Union[str, "os.PathLike[str]"]) -> bool:
    """True if ``path`` can be opened for reading."""
    try:
        fd = os.open(path, os.O_RDONLY)
    except OSError:
        return False
    try:
        os.close(fd)
    except OSError:
        return False
    return True


def first_wall(row: str) -> int:
    """Index of the first wall cell in ``row``, or -1 if it has none."""
    return row.find("1")


def last_wall(row: str) -> int:
    """Index of the last wall cell in ``row``, or -1 if it has none."""
    return row.rfind("1")


def _check_edge_row(rows: Sequence[str], y: int, side: str) -> None:
    row = rows[y]
    start = first_wall(row)
    if start < 0:
        raise CubError(f"invalid {side} border")
    end = last_wall(row)
    if "0" in row[start:end]:
        raise CubError(f"invalid {side} border")


def _neighbours(rows: Sequence[str], x: int, y: int) -> Iterator[Tuple[str, str]]:
    """Yield (side, cell) for each neighbour of (x, y) that lies on the map.

    A row that is shorter than the column asked for is void there.
    """
    row = rows[y]
    if y > 0:
        above = rows[y - 1]
        yield "top", above[x] if x < len(above) else "V"
    if y < len(rows) - 1:
        below = rows[y + 1]
        yield "bottom", below[x] if x < len(below) else "V"
    if x > 0:
        yield "left", row[x - 1]
    if x + 1 < len(row):
        yield "right", row[x + 1]


def _rule_for(cell: str, variant: Variant) -> Union[Callable[[str], bool], None]:
    """Return a predicate that flags a bad neighbour of ``cell``, if it is checked."""
    if cell in ("V", "0") or (variant.allows_sprites() and cell in _SPRITE_CELLS):
        forbidden = "0" if cell == "V" else "V"
        return lambda neighbour: neighbour == forbidden
    if cell in _PLAYER_CELLS:
        if variant.allows_sprites():
            return lambda neighbour: neighbour == "V"
        return lambda neighbour: neighbour not in ("1", "0")
    return None


def validate_grid(rows: Sequence[str], variant: Variant) -> Tuple[str, ...]:
    """Check that the map is closed by walls; return the rows unchanged.

    Raises CubError naming the first border that lets the player out.
    """
    rows = tuple(rows)
    if not rows:
        raise CubError("map not found")
    _check_edge_row(rows, 0, "top")
    _check_edge_row(rows, len(rows) - 1, "bottom")
    for y, row in enumerate(rows):
        for x, cell in enumerate(row):
            is_bad = _rule_for(cell, variant)
            if is_bad is None:
                continue
            for side, neighbour in _neighbours(rows, x, y):
                if is_bad(neighbour):
                    raise CubError(
                        f"invalid {side} border at column {x} of line {y}"
                    )
    return rows