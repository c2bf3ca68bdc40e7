from pathlib import Path

import pytest

from crystalmaze.mapfile import (
    FieldCounts,
    MapError,
    check_extension,
    check_walls,
    count_fields,
    find_player,
    flood_fill,
    load_map,
    read_map,
    validate_rows,
)

VALID = ["11111", "1PCE1", "11111"]


def write(tmp_path: Path, name: str, text: str) -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="latin-1")
    return path


def test_check_extension_accepts_ber():
    assert check_extension("maps/level.ber") == Path("maps/level.ber")


@pytest.mark.parametrize(
    "name", [".ber", "map.txt", "map", "a.b.ber", "level.bert", "level.be"]
)
def test_check_extension_rejects(name):
    with pytest.raises(MapError, match="valid format"):
        check_extension(name)


def test_read_map_strips_terminators(tmp_path):
    path = write(tmp_path, "m.ber", "111\n1P1\n")
    assert read_map(path) == ["111", "1P1"]


def test_read_map_without_final_newline(tmp_path):
    with_nl = write(tmp_path, "a.ber", "111\n1P1\n")
    without = write(tmp_path, "b.ber", "111\n1P1")
    assert read_map(with_nl) == read_map(without)


def test_read_map_keeps_blank_lines(tmp_path):
    path = write(tmp_path, "m.ber", "111\n\n111\n")
    assert read_map(path) == ["111", "", "111"]


def test_read_map_empty_file(tmp_path):
    assert read_map(write(tmp_path, "m.ber", "")) == []


def test_read_map_missing_file(tmp_path):
    with pytest.raises(MapError, match="File not exist"):
        read_map(tmp_path / "nothing.ber")


def test_check_walls_returns_size():
    assert check_walls(VALID) == (len(VALID[0]), len(VALID))


def test_check_walls_empty():
    with pytest.raises(MapError, match="not a valid map"):
        check_walls([])


def test_check_walls_too_many_rows():
    rows = ["111"] * 33
    with pytest.raises(MapError, match="ideal size"):
        check_walls(rows)


def test_check_walls_too_wide():
    rows = ["1" * 60, "1" + "0" * 58 + "1", "1" * 60]
    with pytest.raises(MapError, match="ideal size"):
        check_walls(rows)


def test_check_walls_two_rows():
    with pytest.raises(MapError, match="not a valid map"):
        check_walls(["111", "111"])


def test_check_walls_side_wall_missing():
    with pytest.raises(MapError, match="should have a wall around it"):
        check_walls(["11111", "0PCE1", "11111"])


def test_check_walls_top_wall_broken():
    with pytest.raises(MapError, match="valid wall around it"):
        check_walls(["10101", "1PCE1", "11111"])


def test_check_walls_interior_wall_row():
    rows = ["11111", "1PCE1", "11111", "10001", "11111"]
    with pytest.raises(MapError, match="Inside the map"):
        check_walls(rows)


def test_check_walls_not_rectangle():
    rows = ["11111", "1PC1", "1E001", "11111"]
    with pytest.raises(MapError, match="rectangle"):
        check_walls(rows)


def test_count_fields():
    rows = ["1111111", "1PCC0E1", "1111111"]
    assert count_fields(rows) == FieldCounts(exits=1, players=1, collectibles=2)


def test_count_fields_invalid_tile():
    with pytest.raises(MapError, match="invalid fields"):
        count_fields(["11111", "1PXE1", "11111"])


def test_find_player_first_occurrence():
    rows = ["11111", "100P1", "1P001", "11111"]
    assert find_player(rows) == (3, 1)


def test_find_player_missing():
    with pytest.raises(MapError, match="player"):
        find_player(["111", "101", "111"])


def test_flood_fill_reaches_everything():
    assert flood_fill(VALID, (1, 1)) == (1, 1)


def test_flood_fill_leaves_rows_unchanged():
    rows = list(VALID)
    flood_fill(rows, (1, 1))
    assert rows == VALID


def test_flood_fill_walled_collectible():
    rows = ["1111111", "1P0E1C1", "1111111"]
    assert flood_fill(rows, (1, 1)) == (0, 1)


def test_flood_fill_exit_blocks_path():
    rows = ["111111", "1PEC01", "111111"]
    assert flood_fill(rows, (1, 1)) == (0, 1)


def test_validate_rows_valid():
    assert validate_rows(VALID) == FieldCounts(exits=1, players=1, collectibles=1)


@pytest.mark.parametrize(
    "rows, message",
    [
        (["11111", "1PC01", "11111"], "way out"),
        (["111111", "1PCE01", "1P0001", "111111"], "player"),
        (["11111", "1P0E1", "11111"], "collectible"),
        (["111111", "1PEC01", "111111"], "The map is not valid"),
        (["1111111", "1P0E1C1", "1111111"], "The map is not valid"),
    ],
)
def test_validate_rows_errors(rows, message):
    with pytest.raises(MapError, match=message):
        validate_rows(rows)


def test_load_map_round_trip(tmp_path):
    path = write(tmp_path, "level.ber", "\n".join(VALID) + "\n")
    assert load_map(path) == VALID


def test_load_map_rejects_extension(tmp_path):
    path = write(tmp_path, "level.txt", "\n".join(VALID) + "\n")
    with pytest.raises(MapError, match="valid format"):
        load_map(path)


def test_load_map_empty_file(tmp_path):
    path = write(tmp_path, "level.ber", "")
    with pytest.raises(MapError, match="not a valid map"):
        load_map(path)


def test_load_map_crlf_is_invalid(tmp_path):
    path = write(tmp_path, "level.ber", "\r\n".join(VALID) + "\r\n")
    with pytest.raises(MapError):
        load_map(path)