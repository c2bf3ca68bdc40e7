import pygame
import pytest

from crystalmaze.app import Sprites, Viewer, load_sprites, main, sprite_for_tile
from crystalmaze.game import Direction, Game
from crystalmaze.xpm import XpmError

COLORS = {
    "floor": (0x10, 0x20, 0x30),
    "wall": (0x40, 0x50, 0x60),
    "exit": (0x70, 0x80, 0x90),
    "crystal": (0xA0, 0xB0, 0xC0),
    "p_up": (0xD0, 0x11, 0x22),
    "p_down": (0x33, 0xD0, 0x44),
    "p_left": (0x55, 0x66, 0xD0),
    "p_right": (0x77, 0x88, 0x99),
}


def _xpm_text(spec, size):
    lines = [f'"{size} {size} 1 1"', f'"a c {spec}"'] + [f'"{"a" * size}"'] * size
    return "static char *sprite[] = {\n" + ",\n".join(lines) + "\n};\n"


def _write_sprites(directory, size, overrides=None):
    overrides = overrides or {}
    for name, (r, g, b) in COLORS.items():
        spec = overrides.get(name, f"#{r:02X}{g:02X}{b:02X}")
        (directory / f"{name}.xpm").write_text(_xpm_text(spec, size))
    return directory


def _sprites(tmp_path, size):
    return load_sprites(_write_sprites(tmp_path, size))


def _rgba(name):
    return (*COLORS[name], 255)


@pytest.mark.parametrize(
    "tile, name",
    [("0", "floor"), ("1", "wall"), ("P", "p_right"), ("E", "exit"), ("C", "crystal")],
)
def test_sprite_for_tile(tile, name):
    assert sprite_for_tile(tile) == name


def test_sprite_for_unknown_tile():
    assert sprite_for_tile("X") is None


def test_load_sprites_colors(tmp_path):
    sprites = _sprites(tmp_path, 2)
    assert sprites.size == 2
    for name in COLORS:
        surface = getattr(sprites, name)
        assert surface.get_size() == (2, 2)
        assert tuple(surface.get_at((1, 1))) == _rgba(name)


def test_transparent_colour_has_no_alpha(tmp_path):
    sprites = load_sprites(_write_sprites(tmp_path, 2, {"crystal": "None"}))
    assert sprites.crystal.get_at((0, 0)).a == 0
    assert sprites.floor.get_at((0, 0)).a == 255


def test_load_sprites_missing_directory(tmp_path):
    with pytest.raises(XpmError):
        load_sprites(tmp_path / "nowhere")


def test_draw_map(tmp_path):
    sprites = _sprites(tmp_path, 2)
    game = Game(["11111", "1PCE1", "11111"])
    screen = pygame.Surface((game.width * 2, game.height * 2))
    Viewer(game, sprites, screen).draw_map()
    expected = {(0, 0): "wall", (1, 1): "p_right", (2, 1): "crystal", (3, 1): "exit"}
    for (x, y), name in expected.items():
        assert tuple(screen.get_at((x * 2, y * 2))) == _rgba(name)


def test_draw_map_follows_player(tmp_path):
    sprites = _sprites(tmp_path, 2)
    game = Game(["11111", "10C01", "1P0E1", "11111"])
    screen = pygame.Surface((game.width * 2, game.height * 2))
    viewer = Viewer(game, sprites, screen)
    assert game.move(Direction.UP) is True
    viewer.draw_map()
    assert tuple(screen.get_at((2, 2))) == _rgba("p_up")
    assert tuple(screen.get_at((2, 4))) == _rgba("floor")


def test_draw_status(tmp_path):
    size = 40
    sprites = _sprites(tmp_path, size)
    game = Game(["11111", "1PCE1", "11111"])
    screen = pygame.Surface((game.width * size, game.height * size))
    viewer = Viewer(game, sprites, screen)
    viewer.draw_map()
    viewer.draw_status()
    assert tuple(screen.get_at((3 * size - 1, size - 1))) == _rgba("wall")
    green = [
        (x, y)
        for x in range(3 * size)
        for y in range(size)
        if tuple(screen.get_at((x, y)))[:3] == (0x00, 0xFF, 0x00)
    ]
    assert green
    assert all(x >= 10 for x, _ in green)


def test_sprites_size_is_floor_width(tmp_path):
    sprites = _sprites(tmp_path, 3)
    assert isinstance(sprites, Sprites)
    assert sprites.size == sprites.floor.get_width()


def test_main_without_argument(capsys):
    assert main([]) == 1
    assert capsys.readouterr().err == "Error\nUse ./prog file.ber\n"


def test_main_with_two_arguments(capsys):
    assert main(["a.ber", "b.ber"]) == 1
    assert "Use ./prog file.ber" in capsys.readouterr().err


def test_main_wrong_extension(capsys):
    assert main(["map.txt"]) == 1
    assert capsys.readouterr().err == "Error\nThe map must be a valid format: file.ber\n"


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.ber").replace(".", "_", 0)]) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error\n")


def test_main_invalid_map(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "bad.ber").write_text("111\n1P1\n111\n")
    assert main(["bad.ber"]) == 1
    assert capsys.readouterr().err.startswith("Error\n")