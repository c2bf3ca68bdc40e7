"""Window, sprites and the command that plays a map."""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Sequence

import pygame

from .game import Direction, Game, Key
from .mapfile import MapError, PLAYER, load_map
from .xpm import XpmError, XpmImage, read_xpm_file

__all__ = ["TEXTURE_DIR", "Sprites", "Viewer", "sprite_for_tile", "load_sprites", "main"]

TEXTURE_DIR = Path("textures")
"""Directory the sprites are read from when the game is started."""

_TITLE = "crystalmaze"
_TEXT_COLOR = (0x00, 0xFF, 0x00)
_FONT_SIZE = 16

_TILE_SPRITES = {
    "0": "floor",
    "1": "wall",
    "P": "p_right",
    "E": "exit",
    "C": "crystal",
}

_FACING_SPRITES = {
    Direction.UP: "p_up",
    Direction.DOWN: "p_down",
    Direction.LEFT: "p_left",
    Direction.RIGHT: "p_right",
}

_PYGAME_KEYS = {
    pygame.K_ESCAPE: Key.ESC,
    pygame.K_w: Key.W,
    pygame.K_a: Key.A,
    pygame.K_s: Key.S,
    pygame.K_d: Key.D,
    pygame.K_UP: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
}


@dataclass(frozen=True)
class Sprites:
    """The images drawn for each kind of tile."""

    floor: pygame.Surface
    wall: pygame.Surface
    exit: pygame.Surface
    crystal: pygame.Surface
    p_up: pygame.Surface
    p_down: pygame.Surface
    p_left: pygame.Surface
    p_right: pygame.Surface

    @property
    def size(self) -> int:
        """Side of one grid cell in pixels."""
        return self.floor.get_width()


def sprite_for_tile(tile: str) -> str | None:
    """Return the name of the sprite drawn for a map tile, or None."""
    return _TILE_SPRITES.get(tile)


def _to_surface(image: XpmImage) -> pygame.Surface:
    data = bytearray()
    for row in image.pixels:
        for value in row:
            alpha = 0 if (value >> 24) & 0xFF == 0xFF else 0xFF
            data += bytes(((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF, alpha))
    surface = pygame.image.frombuffer(bytes(data), (image.width, image.height), "RGBA")
    return surface.copy()


def load_sprites(directory: str | Path) -> Sprites:
    """Read one ``<name>.xpm`` file per sprite from ``directory``."""
    directory = Path(directory)
    surfaces = {}
    for field in fields(Sprites):
        try:
            image = read_xpm_file(directory / f"{field.name}.xpm")
        except XpmError as exc:
            raise XpmError("Image doesn't work") from exc
        surfaces[field.name] = _to_surface(image)
    return Sprites(**surfaces)


class Viewer:
    """Draws a game onto a surface and runs its event loop."""

    def __init__(self, game: Game, sprites: Sprites, screen: pygame.Surface) -> None:
        self.game = game
        self.sprites = sprites
        self.screen = screen
        self._font: pygame.font.Font | None = None

    def _blit(self, name: str, x: int, y: int) -> None:
        size = self.sprites.size
        self.screen.blit(getattr(self.sprites, name), (x * size, y * size))

    def _draw_cell(self, x: int, y: int) -> None:
        tile = self.game.tile(x, y)
        if tile == PLAYER:
            name = _FACING_SPRITES[self.game.facing]
        else:
            name = sprite_for_tile(tile)
        if name is not None:
            self._blit(name, x, y)

    def draw_map(self) -> None:
        """Draw every cell of the map."""
        for y in range(self.game.height):
            for x in range(self.game.width):
                self._draw_cell(x, y)

    def _text(self, text: str, x: int, baseline: int) -> None:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.Font(None, _FONT_SIZE)
        rendered = self._font.render(text, False, _TEXT_COLOR)
        self.screen.blit(rendered, (x, baseline - self._font.get_ascent()))

    def draw_status(self) -> None:
        """Cover the top-left cells with walls and write the counters on them."""
        for x in range(3):
            self._blit("wall", x, 0)
        for (label, value), baseline in zip(self.game.status_lines(), (12, 26)):
            self._text(label, 10, baseline)
            self._text(value, 67, baseline)

    def run(self) -> None:
        """Show the game and play it until it is won, quit or closed."""
        self.draw_map()
        pygame.display.flip()
        while not self.game.finished:
            event = pygame.event.wait()
            if event.type == pygame.QUIT:
                return
            if event.type != pygame.KEYDOWN:
                continue
            old = self.game.player
            self.draw_status()
            if self.game.handle_key(_PYGAME_KEYS.get(event.key, event.key)):
                print(f"Moves: {self.game.moves}")
            self._draw_cell(*old)
            self._draw_cell(*self.game.player)
            pygame.display.flip()


def _report(message: str) -> int:
    sys.stderr.write(f"Error\n{message}\n")
    return 1


def main(argv: Sequence[str] | None = None) -> int:
    """Validate the map named on the command line and play it."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        return _report("Use ./prog file.ber")
    try:
        rows = load_map(args[0])
    except MapError as exc:
        return _report(str(exc))
    game = Game(rows)
    pygame.init()
    try:
        sprites = load_sprites(TEXTURE_DIR)
        size = sprites.size
        screen = pygame.display.set_mode((game.width * size, game.height * size))
        pygame.display.set_caption(_TITLE)
        Viewer(game, sprites, screen).run()
    except XpmError as exc:
        return _report(str(exc))
    except pygame.error as exc:
        return _report(str(exc))
    finally:
        pygame.quit()
    return 0