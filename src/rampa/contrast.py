# contrast.py – WCAG 2.x ratio, APCA Lc and perceptual difference
#   - WCAG: symmetric luminance ratio in [1, 21]
#   - APCA: signed Lc (APCA-W3 0.0.98G constants); positive for dark text on
#     a light background, negative for light text on a dark one
#   - delta_e: CIEDE2000 on D65 Lab, computed with colour-science

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Literal, Tuple, get_args

import colour
import numpy as np
from colour.models import RGB_COLOURSPACE_sRGB

from .color import ColorLike, rgb255, to_hex
from .errors import InvalidConfiguration

log = logging.getLogger(__name__)

ContrastMode = Literal["wcag", "apca"]
CONTRAST_MODES: Tuple[str, ...] = get_args(ContrastMode)


@dataclass(frozen=True)
class ContrastLevel:
    id: str
    name: str
    threshold: float


WCAG_LEVELS: Tuple[ContrastLevel, ...] = (
    ContrastLevel("aaa-normal", "AAA Normal text", 7.0),
    ContrastLevel("aaa-large", "AAA Large text", 4.5),
    ContrastLevel("aa-normal", "AA Normal text", 4.5),
    ContrastLevel("aa-large", "AA Large text", 3.0),
)

# highest first
APCA_LEVELS: Tuple[ContrastLevel, ...] = (
    ContrastLevel("preferred-body", "Preferred body text", 90.0),
    ContrastLevel("body", "Body text", 75.0),
    ContrastLevel("large", "Large text", 60.0),
    ContrastLevel("large-bold", "Large/bold text", 45.0),
    ContrastLevel("min-text", "Minimum text", 30.0),
    ContrastLevel("non-text", "Non-text", 15.0),
)

NEARLY_IDENTICAL_DE = 3.0
MIN_USABLE_LC = 15.0
MIN_USABLE_RATIO = 1.5


def round2(x: float) -> float:
    return round(x * 100.0) / 100.0


# --- WCAG 2.x ----------------------------------------------------------------
def _wcag_linear(v: np.ndarray) -> np.ndarray:
    v = np.asarray(v, np.float64) / 255.0
    return np.where(v <= 0.03928, v / 12.92, ((v + 0.055) / 1.055) ** 2.4)


def relative_luminance(r: float, g: float, b: float) -> float:
    """WCAG relative luminance of 8-bit sRGB channels, in [0, 1]."""
    lr, lg, lb = _wcag_linear(np.array([r, g, b]))
    return float(0.2126 * lr + 0.7152 * lg + 0.0722 * lb)


def wcag_ratio(a: ColorLike, b: ColorLike) -> float:
    la = relative_luminance(*rgb255(a))
    lb = relative_luminance(*rgb255(b))
    hi, lo = max(la, lb), min(la, lb)
    return (hi + 0.05) / (lo + 0.05)


def wcag_passing_levels(ratio: float) -> List[ContrastLevel]:
    return [level for level in WCAG_LEVELS if ratio >= level.threshold]


# --- APCA --------------------------------------------------------------------
_APCA_COEFFS = np.array([0.2126729, 0.7151522, 0.0721750])
_MAIN_TRC = 2.4

_NORM_BG, _NORM_TXT = 0.56, 0.57
_REV_TXT, _REV_BG = 0.62, 0.65
_BLK_THRS, _BLK_CLMP = 0.022, 1.414
_SCALE = 1.14
_LO_OFFSET = 0.027
_LO_CLIP = 0.1
_DELTA_Y_MIN = 0.0005


def apca_luminance(color: ColorLike) -> float:
    """Screen luminance Y used by APCA (simple 2.4 exponent, no linear toe)."""
    rgb = np.asarray(rgb255(color), np.float64) / 255.0
    return float(_APCA_COEFFS @ rgb**_MAIN_TRC)


def apca_contrast(text_y: float, bg_y: float) -> float:
    """Lc of text luminance ``text_y`` on background luminance ``bg_y``."""
    for y in (text_y, bg_y):
        if math.isnan(y) or not 0.0 <= y <= 1.1:
            return 0.0

    # soft clamp near black
    if text_y <= _BLK_THRS:
        text_y += (_BLK_THRS - text_y) ** _BLK_CLMP
    if bg_y <= _BLK_THRS:
        bg_y += (_BLK_THRS - bg_y) ** _BLK_CLMP

    if abs(bg_y - text_y) < _DELTA_Y_MIN:
        return 0.0

    if bg_y > text_y:
        sapc = (bg_y**_NORM_BG - text_y**_NORM_TXT) * _SCALE
        out = 0.0 if sapc < _LO_CLIP else sapc - _LO_OFFSET
    else:
        sapc = (bg_y**_REV_BG - text_y**_REV_TXT) * _SCALE
        out = 0.0 if sapc > -_LO_CLIP else sapc + _LO_OFFSET
    return out * 100.0


def apca(fg: ColorLike, bg: ColorLike) -> float:
    return apca_contrast(apca_luminance(fg), apca_luminance(bg))


def apca_passing_levels(lc: float) -> List[ContrastLevel]:
    """Levels passed by ``|lc|``, highest first."""
    magnitude = abs(lc)
    return [level for level in APCA_LEVELS if magnitude >= level.threshold]


# --- perceptual difference ---------------------------------------------------
_RGB_XYZ = RGB_COLOURSPACE_sRGB.matrix_RGB_to_XYZ
_D65 = RGB_COLOURSPACE_sRGB.whitepoint


def _uncompand(v: np.ndarray) -> np.ndarray:
    v = np.asarray(v, np.float64)
    m = v > 0.04045
    out = np.empty_like(v)
    out[m] = ((v[m] + 0.055) / 1.055) ** 2.4
    out[~m] = v[~m] / 12.92
    return out


def _lab(color: ColorLike) -> np.ndarray:
    rgb = np.asarray(rgb255(color), np.float64) / 255.0
    xyz = _RGB_XYZ @ _uncompand(rgb)
    return colour.XYZ_to_Lab(xyz, _D65)


def delta_e(a: ColorLike, b: ColorLike) -> float:
    """CIEDE2000 difference between two colors; < 3 reads as "the same"."""
    return float(colour.delta_E(_lab(a), _lab(b), method="CIE 2000"))


# --- evaluation --------------------------------------------------------------
@dataclass(frozen=True)
class LevelResult:
    name: str
    threshold: float
    passed: bool


@dataclass(frozen=True)
class ContrastResult:
    foreground: str
    background: str
    mode: ContrastMode
    score: float
    passed: bool
    levels: Tuple[LevelResult, ...]
    warnings: Tuple[str, ...]


def _warnings(fg: str, bg: str, mode: str, score: float) -> List[str]:
    out: List[str] = []
    de = delta_e(fg, bg)
    if de < NEARLY_IDENTICAL_DE:
        out.append(f"Colors are nearly identical (deltaE: {round2(de)})")
    if (mode == "apca" and abs(score) < MIN_USABLE_LC) or (
        mode == "wcag" and score < MIN_USABLE_RATIO
    ):
        out.append("Contrast is below minimum usable threshold")
    for hex_, hint in (("#000000", "#111111"), ("#ffffff", "#eeeeee")):
        msg = f"Pure {hex_} detected, consider {hint} for screens"
        if hex_ in (fg, bg) and msg not in out:
            out.append(msg)
    return out


def evaluate_contrast(
    fg: ColorLike, bg: ColorLike, mode: ContrastMode = "wcag"
) -> ContrastResult:
    """Score ``fg`` on ``bg``, list the levels it passes and any lint warnings.

    Raises InvalidColorInput for unparsable colors and InvalidConfiguration
    for an unknown mode.
    """
    if mode not in CONTRAST_MODES:
        raise InvalidConfiguration(
            f"unknown contrast mode {mode!r}; expected one of {', '.join(CONTRAST_MODES)}"
        )
    fg_hex, bg_hex = to_hex(fg), to_hex(bg)
    if mode == "wcag":
        raw = wcag_ratio(fg_hex, bg_hex)
        levels = tuple(
            LevelResult(level.name, level.threshold, raw >= level.threshold)
            for level in WCAG_LEVELS
        )
    else:
        raw = apca(fg_hex, bg_hex)
        levels = tuple(
            LevelResult(level.name, level.threshold, abs(raw) >= level.threshold)
            for level in APCA_LEVELS
        )
    warnings = _warnings(fg_hex, bg_hex, mode, raw)
    if warnings:
        log.debug("Contrast %s on %s: %s", fg_hex, bg_hex, "; ".join(warnings))
    return ContrastResult(
        foreground=fg_hex,
        background=bg_hex,
        mode=mode,
        score=round2(raw),
        passed=any(level.passed for level in levels),
        levels=levels,
        warnings=tuple(warnings),
    )


__all__ = [
    "APCA_LEVELS",
    "CONTRAST_MODES",
    "ContrastLevel",
    "ContrastMode",
    "ContrastResult",
    "LevelResult",
    "WCAG_LEVELS",
    "apca",
    "apca_contrast",
    "apca_luminance",
    "apca_passing_levels",
    "delta_e",
    "evaluate_contrast",
    "relative_luminance",
    "round2",
    "wcag_passing_levels",
    "wcag_ratio",
]
