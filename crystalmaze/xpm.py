"""Reading of XPM images into plain pixel grids."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from .colornames import lookup_color

__all__ = [
    "TRANSPARENT",
    "XpmError",
    "XpmImage",
    "split_words",
    "find",
    "find_unquoted",
    "strip_comments",
    "extract_strings",
    "text_to_rgb",
    "parse_xpm",
    "read_xpm_file",
    "encode_pixel",
]

TRANSPARENT = 0xFF000000
"""Pixel value stored for the ``None`` colour."""

_NAME_LIMIT = 63
_HEX = re.compile(r"[ \t\n\v\f\r]*([+-]?)(?:0[xX])?([0-9a-fA-F]+)")
_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")


class XpmError(ValueError):
    """Raised when XPM data cannot be read or parsed."""


def encode_pixel(color: int, bytes_per_pixel: int, big_endian: bool) -> bytes:
    """Return the low ``bytes_per_pixel`` bytes of ``color`` in the given order."""
    if bytes_per_pixel < 1:
        raise ValueError("bytes_per_pixel must be at least 1")
    value = color & ((1 << (8 * bytes_per_pixel)) - 1)
    return value.to_bytes(bytes_per_pixel, "big" if big_endian else "little")


@dataclass(frozen=True)
class XpmImage:
    """A decoded image: rows of 32-bit pixel values, top row first."""

    width: int
    height: int
    pixels: tuple[tuple[int, ...], ...]

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel value at column ``x`` of row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside the image")
        return self.pixels[y][x]

    def to_bytes(self, bytes_per_pixel: int = 4, big_endian: bool = False) -> bytes:
        """Pack every pixel, row after row, into a byte string."""
        return b"".join(
            encode_pixel(value, bytes_per_pixel, big_endian)
            for row in self.pixels
            for value in row
        )


def split_words(text: str) -> list[str]:
    """Split ``text`` on runs of spaces and tabs."""
    return [word for word in re.split(r"[ \t]+", text) if word]


def _check_pattern(pattern: str) -> None:
    if not pattern:
        raise ValueError("pattern must not be empty")


def find(text: str, pattern: str) -> int:
    """Return the first position of ``pattern`` in ``text``, or -1."""
    _check_pattern(pattern)
    return text.find(pattern)


def find_unquoted(text: str, pattern: str) -> int:
    """Return the first position of ``pattern`` outside double quotes, or -1."""
    _check_pattern(pattern)
    quoted = False
    for pos in range(len(text) - len(pattern) + 1):
        if text[pos] == '"':
            quoted = not quoted
        if not quoted and text.startswith(pattern, pos):
            return pos
    return -1


def _blank(text: str, start: int, stop: int) -> str:
    return text[:start] + " " * (stop - start) + text[stop:]


def strip_comments(text: str) -> str:
    """Replace C comments outside strings by spaces, keeping the length."""
    while (start := find_unquoted(text, "/*")) != -1:
        end = text.find("*/", start + 2)
        text = _blank(text, start, len(text) if end == -1 else end + 2)
    while (start := find_unquoted(text, "//")) != -1:
        end = text.find("\n", start + 2)
        text = _blank(text, start, len(text) if end == -1 else end + 1)
    return text


def _quoted(text: str) -> Iterator[str]:
    pos = 0
    while (opening := text.find('"', pos)) != -1:
        closing = text.find('"', opening + 1)
        if closing == -1:
            return
        yield text[opening + 1:closing]
        pos = closing + 1


def extract_strings(text: str) -> list[str]:
    """Return the contents of each complete double-quoted string in order."""
    return list(_quoted(text))


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value >= 0x80000000 else value


def text_to_rgb(name: str, end: str | None) -> int:
    """Turn an XPM colour spec into 0xRRGGBB.

    ``#hex`` is read as hexadecimal; otherwise ``name`` (joined with ``end``
    by a space when given) is looked up among the colour names. ``None``
    gives -1 and anything unknown gives 0.
    """
    if name.startswith("#"):
        match = _HEX.match(name[1:])
        if not match:
            return 0
        value = int(match.group(2), 16)
        return _to_int32(-value if match.group(1) == "-" else value)
    if end is not None:
        name = f"{name} {end}"[:_NAME_LIMIT]
    found = lookup_color(name)
    return 0 if found is None else found


def _atoi(word: str) -> int:
    match = _INT.match(word)
    return int(match.group(1)) if match else 0


def _stored(color: int) -> int:
    return TRANSPARENT if color == -1 else color & 0xFFFFFFFF


def parse_xpm(lines: Iterable[str]) -> XpmImage:
    """Decode an XPM image from its sequence of strings."""
    rows = iter(lines)

    def next_line(what: str) -> str:
        try:
            return next(rows)
        except StopIteration:
            raise XpmError(f"missing {what}") from None

    header = split_words(next_line("header"))
    if len(header) < 4:
        raise XpmError("header needs width, height, colours and chars per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in header[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError("header values must be positive integers")

    # Short keys are stored directly, so a later definition replaces an
    # earlier one; longer keys are searched and the first definition wins.
    first_wins = cpp > 2
    palette: dict[str, int] = {}
    for _ in range(ncolors):
        line = next_line("colour definition")
        words = split_words(line[cpp:])
        try:
            index = words.index("c")
        except ValueError:
            raise XpmError(f"colour definition without 'c': {line!r}") from None
        if index + 1 >= len(words):
            raise XpmError(f"colour definition without a colour: {line!r}")
        follow = words[index + 2] if index + 2 < len(words) else None
        rgb = text_to_rgb(words[index + 1], follow)
        key = line[:cpp]
        if first_wins:
            palette.setdefault(key, rgb)
        else:
            palette[key] = rgb

    pixel_rows = []
    for _ in range(height):
        line = next_line("pixel row")
        if len(line) < width * cpp:
            raise XpmError(f"pixel row too short: {line!r}")
        pixel_rows.append(
            tuple(
                _stored(palette.get(line[start:start + cpp], 0))
                for start in range(0, width * cpp, cpp)
            )
        )
    return XpmImage(width, height, tuple(pixel_rows))


def read_xpm_file(path: str | Path) -> XpmImage:
    """Read and decode an XPM file."""
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise XpmError(f"cannot read {path}") from exc
    text = strip_comments(raw.decode("latin-1"))
    return parse_xpm(extract_strings(text))