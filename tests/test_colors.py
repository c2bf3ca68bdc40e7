import pytest

from crystalmaze.colors import good_color, rgb_shifts

WIN_SIZE = 242


def _color_map(x, y, w, h):
    return (x * 255) // w + ((((w - x) * 255) // w) << 16) + (((y * 255) // h) << 8)


def test_shifts_for_24_bit_visual():
    assert rgb_shifts(0xFF0000, 0x00FF00, 0x0000FF) == (16, 8, 8, 8, 0, 8)


def test_shifts_for_565_visual():
    shifts = rgb_shifts(0xF800, 0x07E0, 0x001F)
    assert shifts == (11, 5, 5, 6, 0, 5)
    assert shifts.green_bits == 6


def test_shifts_for_555_visual():
    assert rgb_shifts(0x7C00, 0x03E0, 0x001F) == (10, 5, 5, 5, 0, 5)


@pytest.mark.parametrize(
    "masks", [(0, 0xFF00, 0xFF), (0xFF0000, 0, 0xFF), (0xFF0000, 0xFF00, 0)]
)
def test_zero_mask_is_rejected(masks):
    with pytest.raises(ValueError):
        rgb_shifts(*masks)


@pytest.mark.parametrize("depth", [24, 32])
def test_deep_visual_keeps_colour(depth):
    shifts = rgb_shifts(0xFF0000, 0x00FF00, 0x0000FF)
    for x in range(0, WIN_SIZE, 17):
        for y in range(0, WIN_SIZE, 23):
            color = _color_map(x, y, WIN_SIZE, WIN_SIZE)
            assert good_color(color, depth, shifts) == color


def test_color_map_corner_on_deep_visual():
    shifts = rgb_shifts(0xFF0000, 0x00FF00, 0x0000FF)
    assert good_color(_color_map(0, 0, WIN_SIZE, WIN_SIZE), 24, shifts) == 0xFF0000


@pytest.mark.parametrize(
    "color, expected",
    [
        (0xFFFFFF, 0xFFFF),
        (0x000000, 0x0000),
        (0xFF0000, 0xF800),
        (0x00FF00, 0x07E0),
        (0x0000FF, 0x001F),
    ],
)
def test_565_conversion(color, expected):
    shifts = rgb_shifts(0xF800, 0x07E0, 0x001F)
    assert good_color(color, 16, shifts) == expected


def test_555_white():
    shifts = rgb_shifts(0x7C00, 0x03E0, 0x001F)
    assert good_color(0xFFFFFF, 15, shifts) == 0x7FFF


def test_565_values_fit_in_sixteen_bits():
    shifts = rgb_shifts(0xF800, 0x07E0, 0x001F)
    for x in range(0, WIN_SIZE, 11):
        for y in range(0, WIN_SIZE, 13):
            value = good_color(_color_map(x, y, WIN_SIZE, WIN_SIZE), 16, shifts)
            assert 0 <= value < (1 << 16)