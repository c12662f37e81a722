import pytest

from solong.mapcheck import (
    MapError,
    MapErrorKind,
    check_lines,
    check_parameters,
    check_reachable,
    check_valid,
    check_walls,
    find_player,
    load_map,
    read_map,
    strip_newlines,
    validate_map,
)

VALID = ["11111", "1PCE1", "11111"]
BONUS = ["111111", "1PNCE1", "111111"]


def _kind(excinfo):
    return excinfo.value.kind


def test_strip_newlines_removes_one_trailing_newline():
    assert strip_newlines(["11\n", "1P\n", "11"]) == ["11", "1P", "11"]
    assert strip_newlines(["ab\n\n"]) == ["ab\n"]


def test_error_message_comes_from_kind():
    err = MapError(MapErrorKind.WALLS)
    assert str(err) == "Map Not Covered With Walls"
    assert err.kind is MapErrorKind.WALLS
    assert MapErrorKind.MAP_SIZE.message == "Invalid Map Size"


def test_validate_map_accepts_valid_map():
    assert validate_map(VALID) == VALID


def test_read_map_strips_newlines():
    assert read_map([row + "\n" for row in VALID]) == VALID


def test_validate_map_empty():
    with pytest.raises(MapError) as excinfo:
        validate_map([])
    assert _kind(excinfo) is MapErrorKind.EMPTY


def test_check_valid_rejects_unknown_character():
    with pytest.raises(MapError) as excinfo:
        check_valid(["11111", "1PXE1", "11111"])
    assert _kind(excinfo) is MapErrorKind.MAP_ELEMENT


def test_enemy_only_allowed_in_bonus():
    with pytest.raises(MapError) as excinfo:
        validate_map(["1111111", "1PCNNE1", "1000001", "1111111"])
    assert _kind(excinfo) is MapErrorKind.MAP_ELEMENT
    rows = ["1111111", "1PCNNE1", "1000001", "1111111"]
    assert validate_map(rows, bonus=True) == rows


def test_check_lines_rejects_ragged_rows():
    with pytest.raises(MapError) as excinfo:
        check_lines(["11111", "1PCE1", "1111"])
    assert _kind(excinfo) is MapErrorKind.MAP_SIZE


def test_lines_checked_before_elements():
    with pytest.raises(MapError) as excinfo:
        validate_map(["11111", "1PXE1", "111"])
    assert _kind(excinfo) is MapErrorKind.MAP_SIZE


@pytest.mark.parametrize(
    "rows",
    [
        ["111111", "1PPCE1", "111111"],
        ["111111", "1PCEE1", "111111"],
        ["11111", "1P0E1", "11111"],
        ["11111", "100C1", "11111"],
    ],
)
def test_check_parameters_rejects_wrong_counts(rows):
    with pytest.raises(MapError) as excinfo:
        check_parameters(rows)
    assert _kind(excinfo) is MapErrorKind.ELEMENT_COUNT


@pytest.mark.parametrize(
    "rows",
    [
        ["11101", "1PCE1", "11111"],
        ["11111", "0PCE1", "11111"],
        ["11111", "1PCE0", "11111"],
        ["11111", "1PCE1", "11011"],
    ],
)
def test_check_walls_rejects_gaps(rows):
    with pytest.raises(MapError) as excinfo:
        check_walls(rows)
    assert _kind(excinfo) is MapErrorKind.WALLS


def test_find_player_points_at_player():
    rows = ["111111111", "1000001E1", "1001P0111", "100000001", "111111111"]
    x, y = find_player(rows)
    assert rows[y][x] == "P"


def test_find_player_without_player():
    with pytest.raises(MapError):
        find_player(["111", "101", "111"])


def test_check_reachable_open_map():
    rows = ["111111111", "1P00001E1", "100100111", "100000001", "111111111"]
    reached = check_reachable(rows)
    assert find_player(rows) in reached
    assert all(rows[y][x] != "1" for x, y in reached)
    assert (rows[1].index("E"), 1) in reached


def test_check_reachable_blocked_collectible():
    rows = ["1111111", "1P0E1C1", "1111111"]
    with pytest.raises(MapError) as excinfo:
        check_reachable(rows)
    assert _kind(excinfo) is MapErrorKind.UNREACHABLE


def test_enemy_blocks_only_in_bonus():
    reached = check_reachable(BONUS)
    assert (BONUS[1].index("C"), 1) in reached
    with pytest.raises(MapError) as excinfo:
        check_reachable(BONUS, bonus=True)
    assert _kind(excinfo) is MapErrorKind.UNREACHABLE


def test_load_map_reads_file(tmp_path):
    path = tmp_path / "level.ber"
    path.write_text("\n".join(VALID) + "\n")
    assert load_map(path) == VALID


def test_load_map_without_final_newline(tmp_path):
    path = tmp_path / "level.ber"
    path.write_text("\n".join(VALID))
    assert load_map(str(path)) == VALID


def test_load_map_rejects_suffix(tmp_path):
    path = tmp_path / "level.txt"
    path.write_text("\n".join(VALID))
    with pytest.raises(MapError) as excinfo:
        load_map(path)
    assert _kind(excinfo) is MapErrorKind.INVALID_MAP


def test_load_map_missing_file(tmp_path):
    with pytest.raises(MapError) as excinfo:
        load_map(tmp_path / "missing.ber")
    assert _kind(excinfo) is MapErrorKind.EMPTY


def test_load_map_empty_line_breaks_rectangle(tmp_path):
    path = tmp_path / "level.ber"
    path.write_text("11111\n\n1PCE1\n11111\n")
    with pytest.raises(MapError) as excinfo:
        load_map(path)
    assert _kind(excinfo) is MapErrorKind.MAP_SIZE