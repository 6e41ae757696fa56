"""Window, texture and control settings shared by the whole game."""

from __future__ import annotations

from enum import Enum

WIDTH = 1280
HEIGHT = 720
TITLE = "cub3D"

TEXWIDTH = 64
TEXHEIGHT = 64
NUM_SPRITES = 3
MAX_SPRITES = 64
SPEED_MOVE = 0.015
SPEED_CAMERA = 0.01

KEY_ESC = 65307
KEY_W = 119
KEY_S = 115
KEY_A = 97
KEY_D = 100
KEY_LEFT = 65361
KEY_RIGHT = 65363


class CubError(Exception):
    """A scene file, asset or argument the game cannot use."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class Variant(Enum):
    """Which rule set the game runs under."""

    MANDATORY = "mandatory"
    BONUS = "bonus"

    def allows_sprites(self) -> bool:
        """Whether sprite cells (digits 2 and up) and mouse look are enabled."""
        return self is Variant.BONUS