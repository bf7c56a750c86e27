import pytest

from cubscape.errors import SceneError
from cubscape.scene import (
    Scene,
    load_scene,
    only_spaces,
    only_walls,
    parse_rgb,
    parse_scene_lines,
    rgb_to_hex,
)

VALID = [
    "NO ./textures/north.xpm\n",
    "SO ./textures/south.xpm\n",
    "WE ./textures/west.xpm\n",
    "EA ./textures/east.xpm\n",
    "\n",
    "F 220,100,0\n",
    "C 225,30,0\n",
    "\n",
    "111111\n",
    "100001\n",
    "10N001\n",
    "111111",
]

RGB_ERROR = "Invalid RGB, absolute path or RGB color code"


def _replace(index, line):
    lines = list(VALID)
    lines[index] = line
    return lines


def test_parse_valid_scene():
    scene = parse_scene_lines(VALID)
    assert scene.north == "./textures/north.xpm"
    assert scene.east == "./textures/east.xpm"
    assert scene.floor_color == rgb_to_hex(220, 100, 0)
    assert scene.ceiling_color == rgb_to_hex(225, 30, 0)
    assert scene.grid == tuple(VALID[8:])
    assert scene.first_line == 9
    assert scene.player.angle == 270.0


def test_rgb_to_hex_masks_channels():
    assert rgb_to_hex(255, 255, 255) == 0xFFFFFF
    assert rgb_to_hex(256, 0, 0) == rgb_to_hex(0, 0, 0)


def test_parse_rgb_round_trip():
    assert parse_rgb("220,100,0") == rgb_to_hex(220, 100, 0)
    assert parse_rgb("0,0,0") == rgb_to_hex(0, 0, 0)


def test_parse_rgb_empty_first_channel_reads_as_zero():
    assert parse_rgb(",1,2") == rgb_to_hex(0, 1, 2)


@pytest.mark.parametrize(
    "text", ["256,0,0", "1,2", "1,2,3,4", "1,,2", "1,2,3 ", "", "a,b,c", "1,2,"]
)
def test_parse_rgb_rejects(text):
    with pytest.raises(SceneError) as caught:
        parse_rgb(text)
    assert caught.value.message == RGB_ERROR


@pytest.mark.parametrize(
    "line, expected",
    [("\n", True), ("   ", True), ("", True), ("  1", False), ("   \n", False)],
)
def test_only_spaces(line, expected):
    assert only_spaces(line) is expected


@pytest.mark.parametrize(
    "line, expected",
    [("111\n", True), ("1 1 1", True), ("1", False), ("101", False), ("", False)],
)
def test_only_walls(line, expected):
    assert only_walls(line) is expected


def test_duplicate_element():
    lines = _replace(1, "NO ./textures/other.xpm\n")
    with pytest.raises(SceneError) as caught:
        parse_scene_lines(lines)
    assert caught.value.message == "Duplicate direction"
    assert caught.value.line == 2


def test_invalid_direction_line():
    with pytest.raises(SceneError) as caught:
        parse_scene_lines(_replace(4, "XX\n"))
    assert caught.value.message == "Invalid direction"
    assert caught.value.line == 5


def test_invalid_character_after_identifier():
    with pytest.raises(SceneError) as caught:
        parse_scene_lines(_replace(0, "NO x./textures/north.xpm\n"))
    assert caught.value.message == 'Invalid character after direction: "x"'
    assert caught.value.line is None


def test_invalid_color_in_scene():
    with pytest.raises(SceneError) as caught:
        parse_scene_lines(_replace(5, "F 300,100,0\n"))
    assert caught.value.message == RGB_ERROR


def test_missing_element():
    lines = VALID[:6] + VALID[8:]
    with pytest.raises(SceneError) as caught:
        parse_scene_lines(lines)
    assert caught.value.message == "Missing direction"


def test_map_before_last_element_is_missing_direction():
    lines = VALID[:6] + VALID[8:] + [VALID[6]]
    with pytest.raises(SceneError) as caught:
        parse_scene_lines(lines)
    assert caught.value.message == "Missing direction"


def test_no_map():
    with pytest.raises(SceneError) as caught:
        parse_scene_lines(VALID[:8])
    assert caught.value.message == "No map"


def test_map_errors_use_file_line_numbers():
    lines = _replace(10, "100001\n")
    with pytest.raises(SceneError) as caught:
        parse_scene_lines(lines)
    assert caught.value.message == "No direction in the map"
    assert caught.value.line == len(VALID)


def test_load_scene_matches_parsed_lines(tmp_path):
    path = tmp_path / "level.cub"
    path.write_text("".join(VALID), encoding="latin-1")
    scene = load_scene(path)
    assert isinstance(scene, Scene)
    assert scene == parse_scene_lines(VALID)


def test_load_scene_rejects_extension(tmp_path):
    path = tmp_path / "level.txt"
    path.write_text("".join(VALID), encoding="latin-1")
    with pytest.raises(SceneError) as caught:
        load_scene(path)
    assert caught.value.message == "Invalid file extension"


def test_load_scene_missing_file(tmp_path):
    with pytest.raises(SceneError) as caught:
        load_scene(tmp_path / "absent.cub")
    assert caught.value.message == "Invalid file"