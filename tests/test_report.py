import pytest

from rampa.harmony import Ramp
from rampa.ramp import RampConfig, generate_color_ramp
from rampa.report import ColorRef, collect_colors, dedupe, generate_accessibility_report


def _refs(colors, ramp="base"):
    return [ColorRef(ramp, i, c) for i, c in enumerate(colors)]


def _level(report, level_id):
    return next(level for level in report.levels if level.id == level_id)


def test_black_gray_white():
    report = generate_accessibility_report(_refs(["#000000", "#808080", "#ffffff"]))
    assert report.total_pairs == 3
    assert report.passing_pairs == 3
    assert sum(len(level.pairs) for level in report.levels) == report.passing_pairs
    assert len(_level(report, "preferred-body").pairs) == 1
    assert len(_level(report, "large").pairs) == 1
    assert len(_level(report, "min-text").pairs) == 1


def test_pairs_carry_both_directions():
    report = generate_accessibility_report(_refs(["#000000", "#ffffff"]))
    (pair,) = _level(report, "preferred-body").pairs
    assert pair.a.color == "#000000"
    assert pair.lc_ab == pytest.approx(106.04, abs=0.02)
    assert pair.lc_ba == pytest.approx(-107.88, abs=0.02)


def test_levels_are_ordered_highest_first():
    report = generate_accessibility_report([])
    assert [level.min_lc for level in report.levels] == [90, 75, 60, 45, 30, 15]
    assert report.total_pairs == 0
    assert report.passing_pairs == 0


def test_near_duplicates_are_dropped():
    refs = _refs(["#000000", "#010101", "#020202", "#ffffff"])
    assert [r.color for r in dedupe(refs)] == ["#000000", "#ffffff"]
    assert generate_accessibility_report(refs).total_pairs == 1


def test_ramp_boundaries_are_kept():
    refs = _refs(["#000000"] * 3, "a") + _refs(["#000000"] * 3, "b")
    kept = dedupe(refs)
    assert [(r.ramp, r.index) for r in kept] == [("a", 0), ("a", 2), ("b", 0), ("b", 2)]
    report = generate_accessibility_report(refs)
    assert report.total_pairs == 6
    assert report.passing_pairs == 0


def test_generated_ramps_never_double_count():
    config = RampConfig("#3b82f6", total_steps=10)
    ramps = [
        Ramp("blue", "#3b82f6", generate_color_ramp(config)),
        Ramp("rose", "#e11d48", generate_color_ramp(config.replace(base_color="#e11d48"))),
    ]
    refs = collect_colors(ramps)
    assert len(refs) == 20
    assert refs[10] == ColorRef("rose", 0, ramps[1].colors[0])
    report = generate_accessibility_report(refs)
    n = len(dedupe(refs))
    assert report.total_pairs == n * (n - 1) // 2
    assert sum(len(level.pairs) for level in report.levels) == report.passing_pairs
    assert report.passing_pairs <= report.total_pairs
