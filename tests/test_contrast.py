import pytest

from rampa.contrast import (
    apca,
    apca_contrast,
    apca_passing_levels,
    delta_e,
    evaluate_contrast,
    relative_luminance,
    wcag_passing_levels,
    wcag_ratio,
)
from rampa.errors import InvalidColorInput, InvalidConfiguration


def test_relative_luminance():
    assert relative_luminance(255, 255, 255) == pytest.approx(1.0)
    assert relative_luminance(0, 0, 0) == 0.0


def test_wcag_ratio():
    assert wcag_ratio("#000000", "#ffffff") == pytest.approx(21.0, abs=0.05)
    assert wcag_ratio("#3b82f6", "#3b82f6") == 1.0
    assert wcag_ratio("#3b82f6", "#fef3c7") == wcag_ratio("#fef3c7", "#3b82f6")


def test_wcag_levels():
    assert [lv.id for lv in wcag_passing_levels(4.5)] == ["aaa-large", "aa-normal", "aa-large"]
    assert [lv.id for lv in wcag_passing_levels(21.0)] == [
        "aaa-normal",
        "aaa-large",
        "aa-normal",
        "aa-large",
    ]
    assert wcag_passing_levels(2.9) == []


def test_apca_is_signed_and_asymmetric():
    assert apca("#000000", "#ffffff") == pytest.approx(106.04, abs=0.02)
    assert apca("#ffffff", "#000000") == pytest.approx(-107.88, abs=0.02)
    assert apca("#777777", "#777777") == 0.0


def test_apca_out_of_range_luminance():
    assert apca_contrast(float("nan"), 1.0) == 0.0
    assert apca_contrast(0.5, 1.2) == 0.0


def test_apca_levels_use_magnitude():
    assert [lv.id for lv in apca_passing_levels(-80.0)] == [
        "body",
        "large",
        "large-bold",
        "min-text",
        "non-text",
    ]
    assert apca_passing_levels(14.9) == []


def test_delta_e():
    assert delta_e("#3b82f6", "#3b82f6") == pytest.approx(0.0, abs=1e-6)
    assert delta_e("#000000", "#ffffff") == pytest.approx(100.0, abs=0.5)
    assert delta_e("#000000", "#010101") < 3.0


def test_evaluate_wcag():
    result = evaluate_contrast("#000", "#ffffff")
    assert result.foreground == "#000000"
    assert result.score == 21.0
    assert result.passed
    assert all(level.passed for level in result.levels)
    assert result.warnings == (
        "Pure #000000 detected, consider #111111 for screens",
        "Pure #ffffff detected, consider #eeeeee for screens",
    )


def test_evaluate_apca():
    result = evaluate_contrast("#ffffff", "#000000", mode="apca")
    assert result.score < 0
    assert result.passed
    assert len(result.levels) == 6


def test_evaluate_warns_on_near_identical_colors():
    result = evaluate_contrast("#777777", "#787878")
    assert not result.passed
    assert result.warnings[0].startswith("Colors are nearly identical (deltaE: ")
    assert "Contrast is below minimum usable threshold" in result.warnings


def test_evaluate_deduplicates_warnings():
    result = evaluate_contrast("#000000", "#000000", mode="apca")
    assert result.score == 0.0
    assert result.warnings.count("Pure #000000 detected, consider #111111 for screens") == 1


def test_evaluate_rejects_bad_input():
    with pytest.raises(InvalidColorInput):
        evaluate_contrast("nope", "#ffffff")
    with pytest.raises(InvalidConfiguration):
        evaluate_contrast("#000000", "#ffffff", mode="bpca")
