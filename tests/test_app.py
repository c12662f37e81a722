from pathlib import Path
from unittest import mock

import pygame
import pytest

from solong.app import Options, main, parse_args, run
from solong.game import Outcome
from solong.mapcheck import MapError, MapErrorKind

PIXEL_XPM = '/* XPM */\nstatic char *x[] = {\n"1 1 1 1",\n"a c #FF0000",\n"a"\n};\n'

SIMPLE_MAP = "11111\n1PCE1\n11111\n"


def _textures(root: Path) -> Path:
    base = root / "textures"
    (base / "charac").mkdir(parents=True)
    for name in ("ground_1.xpm", "wall.xpm", "food.xpm", "exit.xpm"):
        (base / name).write_text(PIXEL_XPM)
    (base / "charac" / "s_frame_1.xpm").write_text(PIXEL_XPM)
    return root


def _map(root: Path, text: str = SIMPLE_MAP, name: str = "level.ber") -> Path:
    path = root / name
    path.write_text(text)
    return path


def _key(key):
    return pygame.event.Event(pygame.KEYUP, key=key)


def test_parse_args_single_path():
    options = parse_args(["maps/level.ber"])
    assert options == Options(Path("maps/level.ber"), False, Path("."))


def test_parse_args_bonus_and_textures():
    options = parse_args(["--bonus", "--textures", "assets", "level.ber"])
    assert options.bonus is True
    assert options.texture_root == Path("assets")
    assert options.path == Path("level.ber")


def test_parse_args_textures_with_equals():
    assert parse_args(["--textures=assets", "a.ber"]).texture_root == Path("assets")


@pytest.mark.parametrize(
    "argv",
    [[], ["a.ber", "b.ber"], ["--textures"], ["--unknown", "a.ber"], ["--textures=", "a.ber"]],
)
def test_parse_args_rejects_bad_command_lines(argv):
    with pytest.raises(MapError) as info:
        parse_args(argv)
    assert info.value.kind is MapErrorKind.INVALID_PARAMETERS


def test_main_reports_wrong_argument_count(capsys):
    assert main([]) == 1
    assert capsys.readouterr().err == "Error: Invalid Parameters Entered\n"


def test_main_reports_wrong_suffix(capsys):
    assert main(["level.txt"]) == 1
    assert capsys.readouterr().err == "Error: Invalid Map Defined\n"


def test_main_reports_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.ber")]) == 1
    assert capsys.readouterr().err == "Error: Empty Map / Map Does Not Exist\n"


def test_main_reports_invalid_map(tmp_path, capsys):
    path = _map(tmp_path, "11111\n1P0E1\n11111\n")
    assert main([str(path)]) == 1
    assert capsys.readouterr().err == "Error: Invalid Number of Elements\n"


def test_run_rejects_unreachable_map(tmp_path):
    path = _map(tmp_path, "1111111\n1PC1E01\n1111111\n")
    with pytest.raises(MapError) as info:
        run(path, False, _textures(tmp_path))
    assert info.value.kind is MapErrorKind.UNREACHABLE


def test_run_wins_after_collecting(tmp_path, monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    root = _textures(tmp_path)
    path = _map(tmp_path)
    events = [[], [_key(pygame.K_d)], [_key(pygame.K_d)]]
    with mock.patch("pygame.event.get", side_effect=events):
        assert run(path, False, root) is Outcome.WON


def test_run_quits_on_escape(tmp_path, monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    root = _textures(tmp_path)
    path = _map(tmp_path)
    with mock.patch("pygame.event.get", side_effect=[[_key(pygame.K_ESCAPE)]]):
        assert run(path, False, root) is Outcome.QUIT


def test_run_quits_when_window_closed(tmp_path, monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    root = _textures(tmp_path)
    path = _map(tmp_path)
    closing = [[], [pygame.event.Event(pygame.QUIT)]]
    with mock.patch("pygame.event.get", side_effect=closing):
        assert run(path, False, root) is Outcome.QUIT


def test_main_returns_zero_after_a_game(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    root = _textures(tmp_path)
    path = _map(tmp_path)
    events = [[_key(pygame.K_d)], [_key(pygame.K_d)]]
    with mock.patch("pygame.event.get", side_effect=events):
        assert main(["--textures", str(root), str(path)]) == 0
    assert "Moves: 1" in capsys.readouterr().out


def test_main_reports_missing_textures(tmp_path, capsys):
    path = _map(tmp_path)
    assert main(["--textures", str(tmp_path / "nowhere"), str(path)]) == 1
    assert capsys.readouterr().err.startswith("Error: ")