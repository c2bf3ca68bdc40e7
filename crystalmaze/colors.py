"""Conversion of 0xRRGGBB colours to pixel values for a given visual."""

from __future__ import annotations

from typing import NamedTuple, Sequence

__all__ = ["RgbShifts", "rgb_shifts", "good_color"]


class RgbShifts(NamedTuple):
    """Position and width of each colour channel inside a pixel value."""

    red_shift: int
    red_bits: int
    green_shift: int
    green_bits: int
    blue_shift: int
    blue_bits: int


def _shift_and_width(mask: int, channel: str) -> tuple[int, int]:
    if mask <= 0:
        raise ValueError(f"{channel} mask must be a positive bit mask")
    shift = (mask & -mask).bit_length() - 1
    remaining = mask >> shift
    width = 0
    while remaining & 1:
        remaining >>= 1
        width += 1
    return shift, width


def rgb_shifts(red_mask: int, green_mask: int, blue_mask: int) -> RgbShifts:
    """Derive channel shifts and widths from the visual's colour masks."""
    red = _shift_and_width(red_mask, "red")
    green = _shift_and_width(green_mask, "green")
    blue = _shift_and_width(blue_mask, "blue")
    return RgbShifts(*red, *green, *blue)


def good_color(color: int, depth: int, shifts: Sequence[int]) -> int:
    """Return the pixel value for ``color`` on a visual of ``depth`` bits.

    Depths of 24 and above take the colour as it is; shallower visuals get
    each 8-bit channel scaled down into its place.
    """
    if depth >= 24:
        return color
    red_shift, red_bits, green_shift, green_bits, blue_shift, blue_bits = shifts
    red = (color >> 8) & 0xFF00
    green = color & 0xFF00
    blue = (color << 8) & 0xFF00
    return (
        ((red >> (16 - red_bits)) << red_shift)
        + ((green >> (16 - green_bits)) << green_shift)
        + ((blue >> (16 - blue_bits)) << blue_shift)
    )