import pytest

from drawguess.gui import color_hex, main, parse_args
from drawguess.protocol import Color


def test_color_hex_red():
    assert color_hex(Color.RED) == "#ff0000"


def test_color_hex_white():
    assert color_hex(Color.WHITE) == "#ffffff"


@pytest.mark.parametrize(
    "color",
    [Color.RED, Color.GREEN, Color.YELLOW, Color.BLUE, Color.WHITE, Color(18, 52, 86), Color(0, 0, 0)],
)
def test_color_hex_round_trips_channels(color):
    text = color_hex(color)
    assert len(text) == 7
    assert text.startswith("#")
    assert text == text.lower()
    assert int(text[1:3], 16) == color.red
    assert int(text[3:5], 16) == color.green
    assert int(text[5:7], 16) == color.blue


def test_color_hex_ignores_alpha():
    assert color_hex(Color(1, 2, 3, 0)) == color_hex(Color(1, 2, 3))


def test_parse_args_defaults_to_lobby_size():
    args = parse_args([])
    assert (args.width, args.height) == (800, 500)


def test_parse_args_reads_size():
    args = parse_args(["--width", "1024", "--height", "768"])
    assert args.width == 1024
    assert args.height == 768


@pytest.mark.parametrize(
    "argv",
    [["--width", "0"], ["--height", "-5"], ["--height", "abc"], ["--unknown"]],
)
def test_parse_args_rejects_bad_options(argv):
    with pytest.raises(SystemExit) as info:
        parse_args(argv)
    assert info.value.code == 2


def test_main_rejects_bad_options_before_opening_windows():
    with pytest.raises(SystemExit) as info:
        main(["--width", "nope"])
    assert info.value.code == 2