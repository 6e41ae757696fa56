"""The game loop: keyboard and mouse controls, window, and the entry points."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Optional, Sequence

from .config import (
    HEIGHT,
    KEY_A,
    KEY_D,
    KEY_ESC,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_S,
    KEY_W,
    TITLE,
    WIDTH,
    CubError,
    Variant,
)
from .player import Player
from .render import Frame, render_frame
from .scene import load_scene
from .textures import load_textures

_PROGRAM = "raycube"


@dataclass
class Controls:
    """Which movement keys are held down, and whether quitting was asked for.

    ``move_v`` is 'w' or 's', ``move_h`` is 'a' or 'd', ``camera`` is 'l'
    or 'r'; None means no key of that kind is held.
    """

    move_v: Optional[str] = None
    move_h: Optional[str] = None
    camera: Optional[str] = None
    quit: bool = False

    def press(self, key: int) -> None:
        """Record a key going down."""
        if key == KEY_ESC:
            self.quit = True
        elif key == KEY_W:
            self.move_v = "w"
        elif key == KEY_S:
            self.move_v = "s"
        elif key == KEY_A:
            self.move_h = "a"
        elif key == KEY_D:
            self.move_h = "d"
        elif key == KEY_LEFT:
            self.camera = "l"
        elif key == KEY_RIGHT:
            self.camera = "r"

    def release(self, key: int) -> None:
        """Record a key coming up; either key of a pair stops that motion."""
        if key == KEY_ESC:
            self.quit = True
        elif key in (KEY_W, KEY_S):
            self.move_v = None
        elif key in (KEY_A, KEY_D):
            self.move_h = None
        elif key in (KEY_LEFT, KEY_RIGHT):
            self.camera = None


def apply_controls(controls: Controls, player: Player, scene) -> None:
    """Move and turn the player one frame's worth, as the held keys ask."""
    rows, width, height = scene.rows, scene.width, scene.height
    if controls.move_v == "w":
        player.move(rows, width, height, player.dir_x, player.dir_y)
    elif controls.move_v == "s":
        player.move(rows, width, height, -player.dir_x, -player.dir_y)
    if controls.move_h == "a":
        player.move(rows, width, height, -player.plane_x, -player.plane_y)
    elif controls.move_h == "d":
        player.move(rows, width, height, player.plane_x, player.plane_y)
    if controls.camera == "l":
        player.turn(1)
    elif controls.camera == "r":
        player.turn(-1)


def mouse_turn(player: Player, x: int) -> int:
    """Turn one step toward the side the mouse moved to from the centre.

    Returns the horizontal offset from the centre of the window.
    """
    delta = x - WIDTH // 2
    if delta > 0:
        player.turn(-1)
    elif delta < 0:
        player.turn(1)
    return delta


def _key_table(pygame) -> dict:
    return {
        pygame.K_ESCAPE: KEY_ESC,
        pygame.K_w: KEY_W,
        pygame.K_s: KEY_S,
        pygame.K_a: KEY_A,
        pygame.K_d: KEY_D,
        pygame.K_LEFT: KEY_LEFT,
        pygame.K_RIGHT: KEY_RIGHT,
    }


def _to_rgb(pixels):
    import numpy as np

    channels = np.stack(
        ((pixels >> 16) & 0xFF, (pixels >> 8) & 0xFF, pixels & 0xFF), axis=-1
    )
    return channels.astype(np.uint8).transpose(1, 0, 2)


def run(path, variant: Variant) -> int:
    """Load the scene at ``path`` and play it in a window until it is closed."""
    scene = load_scene(path, variant)
    textures = load_textures(scene, variant)

    os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
    import pygame

    try:
        pygame.init()
        screen = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption(TITLE)
    except pygame.error as exc:
        pygame.quit()
        raise CubError(f"error initialising the window: {exc}") from exc

    keys = _key_table(pygame)
    controls = Controls()
    player = scene.player
    frame = Frame(WIDTH, HEIGHT)
    try:
        while not controls.quit:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    controls.quit = True
                elif event.type == pygame.KEYDOWN and event.key in keys:
                    controls.press(keys[event.key])
                elif event.type == pygame.KEYUP and event.key in keys:
                    controls.release(keys[event.key])
                elif event.type == pygame.MOUSEMOTION and variant.allows_sprites():
                    if mouse_turn(player, event.pos[0]):
                        pygame.mouse.set_pos(WIDTH // 2, HEIGHT // 2)
            if controls.quit:
                break
            apply_controls(controls, player, scene)
            render_frame(frame, player, scene, textures, variant)
            surface = pygame.surfarray.make_surface(_to_rgb(frame.pixels))
            screen.blit(surface, (0, 0))
            pygame.display.flip()
    finally:
        pygame.quit()
    return 0


def _start(argv: Optional[Sequence[str]], variant: Variant) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        if len(args) != 1:
            raise CubError(f"Use: {_PROGRAM} mapa.cub")
        return run(args[0], variant)
    except CubError as exc:
        print(f"Error\n{exc.message}")
        return 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Play a scene under the mandatory rules; returns the exit status."""
    return _start(argv, Variant.MANDATORY)


def main_bonus(argv: Optional[Sequence[str]] = None) -> int:
    """Play a scene with sprites and mouse look; returns the exit status."""
    return _start(argv, Variant.BONUS)


if __name__ == "__main__":
    sys.exit(main())