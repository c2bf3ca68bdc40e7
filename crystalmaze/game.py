"""Game state and rules: moving the player, collecting crystals, winning."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Sequence

from .mapfile import COLLECTIBLE, EXIT, FLOOR, PLAYER, WALL, count_fields, find_player

__all__ = ["Direction", "Key", "Game", "direction_for_key"]


class Direction(Enum):
    """A step on the grid as ``(dx, dy)``; y grows downwards."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


class Key(IntEnum):
    """Key symbols the game reacts to."""

    ESC = 0xFF1B
    W = 0x77
    A = 0x61
    S = 0x73
    D = 0x64
    LEFT = 0xFF51
    UP = 0xFF52
    RIGHT = 0xFF53
    DOWN = 0xFF54


_KEY_DIRECTIONS = {
    Key.W: Direction.UP,
    Key.UP: Direction.UP,
    Key.S: Direction.DOWN,
    Key.DOWN: Direction.DOWN,
    Key.D: Direction.RIGHT,
    Key.RIGHT: Direction.RIGHT,
    Key.A: Direction.LEFT,
    Key.LEFT: Direction.LEFT,
}


def direction_for_key(keycode: int) -> Direction | None:
    """Return the direction bound to ``keycode``, or None."""
    try:
        return _KEY_DIRECTIONS.get(Key(keycode))
    except ValueError:
        return None


class Game:
    """The state of one game on a map given as rows of tiles."""

    def __init__(self, rows: Sequence[str]) -> None:
        rows = list(rows)
        self.remaining = count_fields(rows).collectibles
        self.player = find_player(rows)
        self._grid = [list(row) for row in rows]
        px, py = self.player
        self._grid[py][px] = FLOOR
        self.facing = Direction.RIGHT
        self.moves = 0
        self.diamonds = 0
        self.won = False
        self.quit = False

    @property
    def width(self) -> int:
        return len(self._grid[0]) if self._grid else 0

    @property
    def height(self) -> int:
        return len(self._grid)

    @property
    def finished(self) -> bool:
        """True once the game has been won or abandoned."""
        return self.won or self.quit

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= y < len(self._grid) and 0 <= x < len(self._grid[y])

    def tile(self, x: int, y: int) -> str:
        """Return the tile at ``(x, y)``, showing the player where it stands."""
        if not self._inside(x, y):
            raise IndexError(f"tile ({x}, {y}) is outside the map")
        if (x, y) == self.player:
            return PLAYER
        return self._grid[y][x]

    def move(self, direction: Direction) -> bool:
        """Try one step; return True when it counts as a move.

        Walls block. A crystal on the target is collected. The exit blocks
        until every crystal is collected, and then reaching it wins.
        """
        if self.finished:
            return False
        x, y = self.player
        tx, ty = x + direction.dx, y + direction.dy
        if not self._inside(tx, ty) or self._grid[ty][tx] == WALL:
            return False
        if self._grid[ty][tx] == COLLECTIBLE:
            self._grid[ty][tx] = FLOOR
            self.remaining -= 1
            self.diamonds += 1
        if self._grid[ty][tx] == EXIT:
            if self.remaining != 0:
                return False
            self.facing = direction
            self.moves += 1
            self.won = True
            return True
        self.player = (tx, ty)
        self.facing = direction
        self.moves += 1
        return True

    def handle_key(self, keycode: int) -> bool:
        """React to a key press; return True when a move was counted."""
        if keycode == Key.ESC:
            self.quit = True
            return False
        direction = direction_for_key(keycode)
        if direction is None:
            return False
        return self.move(direction)

    def status_lines(self) -> tuple[tuple[str, str], ...]:
        """Label and value pairs for the status overlay.

        The move shown is the number of the move about to be made.
        """
        return (
            ("Moves: ", str(self.moves + 1)),
            ("Diamonds:  ", str(self.diamonds)),
        )