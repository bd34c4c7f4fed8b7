import pytest
from coloraide import Color

from rampa.color import HslColor, OklchColor, hsl_of, parse_color, rgb255, to_hex
from rampa.errors import InvalidColorInput, InvalidConfiguration, RampaError
from rampa.formats import _FORMATTERS, COLOR_FORMATS, color_info, format_color


def test_parse_accepts_css_and_bare_hex():
    assert to_hex("3b82f6") == "#3b82f6"
    assert to_hex("#3B82F6") == "#3b82f6"
    assert to_hex("#fff") == "#ffffff"
    assert to_hex("rgb(255 0 0)") == "#ff0000"
    assert to_hex("hsl(0 100% 50%)") == "#ff0000"


def test_parse_returns_a_copy():
    original = Color("#3b82f6")
    parsed = parse_color(original)
    parsed["red"] = 0.0
    assert original.to_string(hex=True) == "#3b82f6"


@pytest.mark.parametrize("bad", ["", "   ", "not-a-color", "#12", 42, None])
def test_parse_rejects_garbage(bad):
    with pytest.raises(InvalidColorInput):
        parse_color(bad)


def test_errors_are_value_errors():
    assert issubclass(InvalidColorInput, RampaError)
    assert issubclass(RampaError, ValueError)


def test_value_objects():
    assert HslColor(0.0, 1.0, 0.5).to_hex() == "#ff0000"
    assert OklchColor(1.0, 0.0, 0.0).to_hex() == "#ffffff"


def test_hsl_of_gray_has_zero_hue():
    hsl = hsl_of("#808080")
    assert hsl.h == 0.0
    assert hsl.s == pytest.approx(0.0, abs=1e-9)
    assert hsl.l == pytest.approx(128 / 255)


def test_rgb255():
    assert rgb255("#3b82f6") == (59, 130, 246)


def test_format_color():
    assert format_color("#ff0000") == "#ff0000"
    assert format_color("#ff0000", "rgb") == "rgb(255, 0, 0)"
    assert format_color("#ff0000", "hsl") == "hsl(0, 100%, 50%)"
    assert format_color("#ff0000", "oklch") == "oklch(62.8% 0.258 29)"


def test_format_unknown():
    with pytest.raises(InvalidConfiguration):
        format_color("#ff0000", "cmyk")


def test_color_info():
    info = color_info("#ffffff")
    assert info.hex == "#ffffff"
    assert info.rgb == (255, 255, 255)
    assert info.oklch[0] == pytest.approx(1.0, abs=1e-4)
    assert set(info.formatted()) == set(COLOR_FORMATS)


def test_every_format_has_a_formatter():
    assert set(_FORMATTERS) == set(COLOR_FORMATS)
