import logging
import math
import re

import pytest

from rampa import ramp as ramp_mod
from rampa.errors import InvalidColorInput, InvalidConfiguration
from rampa.ramp import (
    ChannelRange,
    RampConfig,
    Tint,
    generate_color_ramp,
    generate_color_ramps,
    grayscale_ramp,
)

HEX = re.compile(r"^#[0-9a-f]{6}$")


def test_regression_fixture():
    config = RampConfig("#3b82f6", total_steps=5)
    assert generate_color_ramp(config) == [
        "#000000",
        "#303f50",
        "#4070bf",
        "#8facef",
        "#ffffff",
    ]


@pytest.mark.parametrize("steps", [2, 3, 10, 37, 100])
@pytest.mark.parametrize("scale", ["linear", "fibonacci", "ease-in-out", "musical-ratio"])
def test_length_and_format(steps, scale):
    config = RampConfig(
        "#e11d48",
        total_steps=steps,
        lightness=ChannelRange(10, 90, scale),
        saturation=ChannelRange(80, 20, scale),
        hue=ChannelRange(-40, 400, scale),
    )
    colors = generate_color_ramp(config)
    assert len(colors) == steps
    assert all(HEX.match(c) for c in colors)


def test_other_output_formats():
    for fmt, prefix in (("hsl", "hsl("), ("rgb", "rgb("), ("oklch", "oklch(")):
        colors = generate_color_ramp(RampConfig("#3b82f6", total_steps=6, color_format=fmt))
        assert len(colors) == 6
        assert all(c.startswith(prefix) for c in colors)


def test_oklch_path_spans_black_to_white():
    colors = generate_color_ramp(RampConfig("#3b82f6", total_steps=5, color_format="oklch"))
    assert colors[0].startswith("oklch(0.0% 0.000 ")
    assert colors[-1].startswith("oklch(100.0%")


def test_locked_swatches_are_verbatim():
    config = RampConfig("#3b82f6", total_steps=5).lock(2, "#FF00FF")
    colors = generate_color_ramp(config)
    assert colors[2] == "#FF00FF"
    assert colors[0] == "#000000"
    assert generate_color_ramp(config.unlock(2))[2] == "#4070bf"


def test_lock_all_freezes_a_ramp():
    config = RampConfig("#3b82f6", total_steps=5)
    frozen = config.lock_all(generate_color_ramp(config))
    assert generate_color_ramp(frozen.replace(base_color="#22c55e")) == generate_color_ramp(config)
    with pytest.raises(InvalidConfiguration):
        config.lock_all(["#000000"])


def test_config_is_immutable():
    config = RampConfig("#3b82f6")
    locked = config.lock(0, "#111111")
    assert dict(config.locked) == {}
    assert dict(locked.locked) == {0: "#111111"}
    with pytest.raises(TypeError):
        locked.locked[1] = "#222222"


def test_caller_mapping_is_copied():
    mine = {1: "#123456"}
    config = RampConfig("#3b82f6", total_steps=4, locked=mine)
    mine[2] = "#654321"
    assert 2 not in config.locked


@pytest.mark.parametrize("steps", [0, 1, 101, 2.5, True])
def test_bad_step_counts(steps):
    with pytest.raises(InvalidConfiguration):
        RampConfig("#3b82f6", total_steps=steps)


def test_bad_inputs():
    with pytest.raises(InvalidColorInput):
        RampConfig("nope")
    with pytest.raises(InvalidConfiguration):
        RampConfig("#3b82f6", total_steps=4, locked={4: "#000000"})
    with pytest.raises(InvalidConfiguration):
        RampConfig("#3b82f6", total_steps=4, locked={"1": "#000000"})
    with pytest.raises(InvalidConfiguration):
        RampConfig("#3b82f6", total_steps=4, locked={True: "#000000"})
    with pytest.raises(InvalidColorInput):
        RampConfig("#3b82f6", locked={0: "nope"})
    with pytest.raises(InvalidConfiguration):
        RampConfig("#3b82f6", color_format="cmyk")
    with pytest.raises(InvalidConfiguration):
        ChannelRange(0, 100, "cubic")
    with pytest.raises(InvalidConfiguration):
        Tint("#ff0000", 150)
    with pytest.raises(InvalidConfiguration):
        Tint("#ff0000", 50, "burn")


def test_full_tint_covers_every_step():
    config = RampConfig("#3b82f6", total_steps=4, tint=Tint("#ff0000", 100)).lock(1, "#00ff00")
    assert generate_color_ramp(config) == ["#ff0000", "#00ff00", "#ff0000", "#ff0000"]


def test_zero_opacity_tint_is_ignored():
    plain = RampConfig("#3b82f6", total_steps=5)
    tinted = plain.replace(tint=Tint("#ff0000", 0, "multiply"))
    assert generate_color_ramp(tinted) == generate_color_ramp(plain)


def test_degenerate_steps_fall_back_to_gray(caplog):
    config = RampConfig("#3b82f6", total_steps=5, lightness=ChannelRange(math.nan, 100))
    with caplog.at_level(logging.WARNING, logger="rampa.ramp"):
        colors = generate_color_ramp(config)
    assert colors == grayscale_ramp(5)
    assert "degraded to gray" in caplog.text


def test_whole_ramp_failure_falls_back_to_grayscale(monkeypatch, caplog):
    config = RampConfig("#3b82f6", total_steps=6)

    def boom(value):
        raise RuntimeError("broken")

    monkeypatch.setattr(ramp_mod, "parse_color", boom)
    with caplog.at_level(logging.ERROR, logger="rampa.ramp"):
        colors = generate_color_ramp(config)
    assert colors == grayscale_ramp(6)
    assert "grayscale fallback" in caplog.text


def test_grayscale_ramp_is_neutral_and_ascending():
    grays = grayscale_ramp(5)
    assert grays[0] != grays[-1]
    for c in grays:
        assert c[1:3] == c[3:5] == c[5:7]
    assert grays == sorted(grays)


def test_generate_many():
    configs = [RampConfig("#3b82f6", total_steps=3), RampConfig("#22c55e", total_steps=4)]
    assert [len(r) for r in generate_color_ramps(configs)] == [3, 4]
