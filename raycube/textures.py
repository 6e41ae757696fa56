"""Loading XPM images for the wall faces and the sprites."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Dict, List, Union

import numpy as np

from .config import NUM_SPRITES, CubError, Variant

TRANSPARENT = 0xFF000000
DEFAULT_SPRITE_DIR = os.path.join(".", "assets", "sprite")

_WALL_FACES = ("east", "north", "west", "south")
_CONTEXTS = frozenset(("c", "m", "s", "g", "g4"))
_STRING = re.compile(r'"((?:[^"\\]|\\.)*)"')
_NAMED_COLORS = {
    "black": 0x000000,
    "white": 0xFFFFFF,
    "red": 0xFF0000,
    "green": 0x00FF00,
    "blue": 0x0000FF,
    "yellow": 0xFFFF00,
    "cyan": 0x00FFFF,
    "magenta": 0xFF00FF,
    "gray": 0xBEBEBE,
    "grey": 0xBEBEBE,
}


@dataclass(frozen=True, eq=False)
class Texture:
    """An image as a (height, width) array of packed 0xAARRGGBB values."""

    pixels: np.ndarray

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def pixel(self, x: int, y: int) -> int:
        """The colour at column ``x`` of row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) lies outside the texture")
        return int(self.pixels[y, x])


def _color_value(spec: str) -> int:
    text = spec.strip().lower()
    if text == "none":
        return TRANSPARENT
    if text.startswith("#"):
        digits = text[1:]
        try:
            if len(digits) == 6:
                return int(digits, 16)
            if len(digits) == 3:
                red, green, blue = (int(char, 16) * 17 for char in digits)
                return (red << 16) | (green << 8) | blue
            if len(digits) == 12:
                red, green, blue = (int(digits[i : i + 2], 16) for i in (0, 4, 8))
                return (red << 16) | (green << 8) | blue
        except ValueError:
            pass
        raise CubError(f"invalid XPM colour {spec!r}")
    try:
        return _NAMED_COLORS[text]
    except KeyError:
        raise CubError(f"unknown XPM colour {spec!r}") from None


def _parse_color_entry(entry: str) -> int:
    contexts: Dict[str, List[str]] = {}
    current = None
    for token in entry.split():
        if token in _CONTEXTS and (current is None or contexts[current]):
            current = token
            contexts[current] = []
        elif current is None:
            raise CubError(f"invalid XPM colour entry {entry!r}")
        else:
            contexts[current].append(token)
    words = contexts.get("c") or next((w for w in contexts.values() if w), None)
    if not words:
        raise CubError(f"invalid XPM colour entry {entry!r}")
    return _color_value(" ".join(words))


def parse_xpm(text: str) -> Texture:
    """Decode the text of an XPM3 image."""
    strings = _STRING.findall(text)
    if not strings:
        raise CubError("not an XPM image")
    header = strings[0].split()
    if len(header) < 4:
        raise CubError("invalid XPM header")
    try:
        width, height, ncolors, cpp = (int(value) for value in header[:4])
    except ValueError:
        raise CubError("invalid XPM header") from None
    if width <= 0 or height <= 0 or ncolors <= 0 or cpp <= 0:
        raise CubError("invalid XPM header")
    if len(strings) < 1 + ncolors + height:
        raise CubError("truncated XPM image")

    palette = {
        entry[:cpp]: _parse_color_entry(entry[cpp:])
        for entry in strings[1 : 1 + ncolors]
    }
    pixels = np.empty((height, width), dtype=np.uint32)
    for y, row in enumerate(strings[1 + ncolors : 1 + ncolors + height]):
        if len(row) < width * cpp:
            raise CubError(f"XPM row {y} is too short")
        try:
            pixels[y] = [palette[row[i : i + cpp]] for i in range(0, width * cpp, cpp)]
        except KeyError as exc:
            raise CubError(f"unknown XPM colour key {exc.args[0]!r}") from None
    return Texture(pixels)


def load_xpm(path: Union[str, "os.PathLike[str]"]) -> Texture:
    """Read and decode the XPM file at ``path``."""
    try:
        with open(path, encoding="latin-1") as handle:
            text = handle.read()
    except OSError as exc:
        raise CubError(f"could not read image {os.fspath(path)!r}") from exc
    return parse_xpm(text)


def sprite_paths(directory: Union[str, "os.PathLike[str]"] = DEFAULT_SPRITE_DIR) -> List[str]:
    """Paths of the sprite images, sprite0.xpm onwards."""
    base = os.fspath(directory)
    return [os.path.join(base, f"sprite{index}.xpm") for index in range(NUM_SPRITES)]


def load_textures(
    scene,
    variant: Variant,
    sprite_dir: Union[str, "os.PathLike[str]"] = DEFAULT_SPRITE_DIR,
) -> Dict[Union[str, int], Texture]:
    """Load the wall textures, keyed by face, and in bonus mode the sprites.

    Sprite textures are keyed by the map digit that places them (2 upwards).
    """
    textures: Dict[Union[str, int], Texture] = {}
    try:
        for face in _WALL_FACES:
            textures[face] = load_xpm(getattr(scene, face))
    except CubError as exc:
        raise CubError("error loading the textures") from exc
    if not variant.allows_sprites():
        return textures
    for kind, path in enumerate(sprite_paths(sprite_dir), start=2):
        if not os.path.isfile(path):
            raise CubError("could not locate a sprite")
        try:
            textures[kind] = load_xpm(path)
        except CubError as exc:
            raise CubError("failed to load a sprite") from exc
    return textures