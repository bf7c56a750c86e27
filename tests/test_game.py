import pytest

from cubscape.game import Game, main
from cubscape.player import Control, Player
from cubscape.render import Textures
from cubscape.scene import parse_scene_lines
from cubscape.xpm import XpmImage

SCENE_TEXT = (
    "NO ./n.xpm\n"
    "SO ./s.xpm\n"
    "WE ./w.xpm\n"
    "EA ./e.xpm\n"
    "F 10,20,30\n"
    "C 40,50,60\n"
    "\n"
    "11111\n"
    "10001\n"
    "10N01\n"
    "10001\n"
    "11111\n"
)


def _solid(color):
    return XpmImage(4, 4, (color,) * 16)


@pytest.fixture
def game():
    lines = [line + "\n" for line in SCENE_TEXT.split("\n")[:-1]]
    scene = parse_scene_lines(lines)
    textures = Textures(_solid(1), _solid(2), _solid(3), _solid(4))
    return Game(scene, textures, width=32, height=24)


def test_menu_blocks_updates_and_keys(game):
    game.key_press(Control.FORWARD)
    assert game.player.held == set()
    assert game.update(now=1000.0) is False


def test_start_only_once(game, capsys):
    assert game.start() is True
    assert game.start() is False
    assert capsys.readouterr().out == "Start game\n"


def test_keys_after_start(game):
    game.start()
    game.key_press(Control.TURN_LEFT)
    assert Control.TURN_LEFT in game.player.held
    game.key_release(Control.TURN_LEFT)
    assert Control.TURN_LEFT not in game.player.held


@pytest.mark.parametrize(
    "button,x,y",
    [(3, 10, 10), (1, 0, 10), (1, 10, 0), (1, 32, 10), (1, 10, 24)],
)
def test_mouse_click_rejected(game, button, x, y):
    assert game.mouse_click(button, x, y) is False
    assert game.started is False


def test_mouse_click_starts(game):
    assert game.mouse_click(1, 5, 5) is True
    assert game.started is True
    assert game.mouse_click(1, 5, 5) is False


def test_mouse_move_centre_does_nothing(game):
    before = (game.player.dir_x, game.player.dir_y)
    assert game.mouse_move(game.mid_x, 3) is False
    assert (game.player.dir_x, game.player.dir_y) == before


def test_mouse_move_rotates(game):
    start = game.scene.player
    reference = Player.from_start(start.x, start.y, start.angle)
    reference.rotate(100 * reference.sensitivity)
    assert game.mouse_move(game.mid_x + 100, 0) is True
    assert game.player.dir_x == pytest.approx(reference.dir_x)
    assert game.player.dir_y == pytest.approx(reference.dir_y)
    assert game.player.plane_x == pytest.approx(reference.plane_x)


def test_update_renders_and_moves(game):
    game.start()
    game.key_press(Control.FORWARD)
    start_y = game.player.pos_y
    assert game.update(now=game.player.time + 16.0) is True
    assert game.player.pos_y < start_y
    assert game.framebuffer.get_pixel(0, 0) == game.scene.ceiling_color
    assert game.framebuffer.get_pixel(0, game.height - 1) == game.scene.floor_color


def test_main_argument_count(capsys):
    assert main([]) == 1
    assert capsys.readouterr().out == "Error: Invalid number of arguments\n"
    assert main(["a.cub", "b.cub"]) == 1


def test_main_bad_extension(capsys):
    assert main(["map.txt"]) == 1
    assert capsys.readouterr().out == "Error: Invalid file extension\n"


def test_main_missing_texture(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "level.cub").write_text(SCENE_TEXT)
    assert main(["level.cub"]) == 1
    assert capsys.readouterr().out == "Error: Failed to load texture: line 0\n"