"""Loading and validation of ``.ber`` map files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

__all__ = [
    "MAX_ROWS",
    "MAX_WIDTH",
    "MAP_SUFFIX",
    "WALL",
    "FLOOR",
    "PLAYER",
    "EXIT",
    "COLLECTIBLE",
    "MapError",
    "FieldCounts",
    "check_extension",
    "read_map",
    "check_walls",
    "count_fields",
    "find_player",
    "flood_fill",
    "validate_rows",
    "load_map",
]

MAX_ROWS = 32
"""Largest number of rows that fits on the screen."""

MAX_WIDTH = 59
"""Largest number of columns that fits on the screen."""

MAP_SUFFIX = ".ber"

WALL = "1"
FLOOR = "0"
PLAYER = "P"
EXIT = "E"
COLLECTIBLE = "C"

_TILES = frozenset((WALL, FLOOR, PLAYER, EXIT, COLLECTIBLE))
_VISITED = "_"

_BAD_FORMAT = "The map must be a valid format: file.ber"
_TOO_BIG = "The map is not the ideal size for the screen"
_NOT_VALID_MAP = "The map is not a valid map"


class MapError(ValueError):
    """Raised when a map file cannot be read or is not a playable map."""


@dataclass(frozen=True)
class FieldCounts:
    """How many exits, players and collectibles a map holds."""

    exits: int
    players: int
    collectibles: int


def check_extension(path: str | Path) -> Path:
    """Check that the text from the first '.' of ``path`` is exactly '.ber'."""
    text = str(path)
    if len(text) <= len(MAP_SUFFIX):
        raise MapError(_BAD_FORMAT)
    dot = text.find(".")
    if dot == -1 or text[dot:] != MAP_SUFFIX:
        raise MapError(_BAD_FORMAT)
    return Path(path)


def read_map(path: str | Path) -> list[str]:
    """Return the lines of a map file without their line terminators."""
    try:
        raw = Path(path).read_bytes()
    except FileNotFoundError as exc:
        raise MapError("File Descriptor (File not exist)") from exc
    except OSError as exc:
        raise MapError("Not read (Empty file)") from exc
    lines = raw.decode("latin-1").split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def _all_walls(row: str, width: int) -> bool:
    return len(row) >= width and all(tile == WALL for tile in row[:width])


def check_walls(rows: Sequence[str]) -> tuple[int, int]:
    """Check size, enclosing walls and shape; return ``(width, height)``."""
    height = len(rows)
    if height > MAX_ROWS:
        raise MapError(_TOO_BIG)
    if not rows:
        raise MapError(_NOT_VALID_MAP)
    width = 0
    for index, row in enumerate(rows):
        if len(row) > MAX_WIDTH:
            raise MapError(_TOO_BIG)
        if index == 0:
            width = len(row)
        if not (row.startswith(WALL) and row.endswith(WALL)):
            raise MapError("The map should have a wall around it")
        if not (_all_walls(rows[0], width) and _all_walls(rows[-1], width)):
            raise MapError("The map should have a valid wall around it")
        if 0 < index < height - 1 and _all_walls(row, width):
            raise MapError("Inside the map should not have a wall closed")
        if height < 3:
            raise MapError(_NOT_VALID_MAP)
        if len(row) != width:
            raise MapError("The map is not a type of rectangle")
    return width, height


def count_fields(rows: Sequence[str]) -> FieldCounts:
    """Count exits, players and collectibles, rejecting unknown tiles."""
    if any(tile not in _TILES for row in rows for tile in row):
        raise MapError("The map contains one or more invalid fields")
    return FieldCounts(
        exits=sum(row.count(EXIT) for row in rows),
        players=sum(row.count(PLAYER) for row in rows),
        collectibles=sum(row.count(COLLECTIBLE) for row in rows),
    )


def find_player(rows: Sequence[str]) -> tuple[int, int]:
    """Return the ``(x, y)`` of the first player tile, row by row."""
    for y, row in enumerate(rows):
        x = row.find(PLAYER)
        if x != -1:
            return x, y
    raise MapError("There must be a player in this game")


def flood_fill(rows: Sequence[str], start: tuple[int, int]) -> tuple[int, int]:
    """Explore from ``start``; return ``(collectibles, exits)`` reached.

    Walls stop the walk and so does each exit, which is counted when first
    reached. ``rows`` is left unchanged.
    """
    grid = [list(row) for row in rows]
    collected = 0
    exits = 0

    def enter(x: int, y: int) -> bool:
        nonlocal collected, exits
        if not (0 <= y < len(grid) and 0 <= x < len(grid[y])):
            return False
        if grid[y][x] == EXIT:
            exits += 1
            grid[y][x] = WALL
        if grid[y][x] in (WALL, _VISITED):
            return False
        if grid[y][x] == COLLECTIBLE:
            collected += 1
        grid[y][x] = _VISITED
        return True

    stack = [start]
    while stack:
        x, y = stack.pop()
        for nx, ny in ((x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1)):
            if enter(nx, ny):
                stack.append((nx, ny))
    return collected, exits


def validate_rows(rows: Sequence[str]) -> FieldCounts:
    """Check that ``rows`` form a playable map and return its field counts."""
    check_walls(rows)
    counts = count_fields(rows)
    if counts.exits != 1:
        raise MapError("There must be a way out of this game")
    if counts.players != 1:
        raise MapError("There must be a player in this game")
    if counts.collectibles < 1:
        raise MapError("There must be at least one collectible in this game")
    collected, exits = flood_fill(rows, find_player(rows))
    if collected != counts.collectibles or exits != 1:
        raise MapError("The map is not valid")
    return counts


def load_map(path: str | Path) -> list[str]:
    """Read a ``.ber`` file, validate it and return its rows."""
    rows = read_map(check_extension(path))
    validate_rows(rows)
    return rows