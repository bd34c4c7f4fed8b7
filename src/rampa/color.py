"""Color value objects and parsing.

Every engine in rampa accepts a *color-like* value: CSS color text, an
:class:`OklchColor`, an :class:`HslColor` or a ColorAide ``Color``. All of
them funnel through :func:`parse_color`, which returns a fresh ColorAide
object so that callers' inputs are never touched.
"""

from __future__ import annotations

import math
import string
from dataclasses import dataclass
from typing import Optional, Tuple, Union

import numpy as np
from coloraide import Color

from .defaults import FIT_HEX
from .errors import InvalidColorInput

Hex = str
Hue = float


@dataclass(frozen=True)
class OklchColor:
    """Perceptual lightness [0, 1], chroma >= 0, hue [0, 360), alpha [0, 1]."""

    l: float
    c: float
    h: Hue
    alpha: Optional[float] = None

    def to_color(self) -> Color:
        a = 1.0 if self.alpha is None else self.alpha
        return Color("oklch", [self.l, self.c, self.h], a)

    def to_hex(self) -> Hex:
        return to_hex(self.to_color())


@dataclass(frozen=True)
class HslColor:
    """CSS HSL with saturation and lightness as fractions in [0, 1]."""

    h: Hue
    s: float
    l: float

    def to_color(self) -> Color:
        return Color("hsl", [self.h, self.s, self.l])

    def to_hex(self) -> Hex:
        return to_hex(self.to_color())


ColorLike = Union[str, OklchColor, HslColor, Color]


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _canon_text(s: str) -> str:
    """Accept bare hex digits ("3b82f6") as well as any CSS color form."""
    raw = s.strip()
    if len(raw) in (3, 4, 6, 8) and all(ch in string.hexdigits for ch in raw):
        return "#" + raw.lower()
    return raw


def parse_color(value: ColorLike) -> Color:
    """Return a new ColorAide color for ``value`` or raise InvalidColorInput."""
    if isinstance(value, (OklchColor, HslColor)):
        return value.to_color()
    if isinstance(value, Color):
        return value.clone()
    if not isinstance(value, str):
        raise InvalidColorInput(f"unsupported color value: {value!r}")
    text = _canon_text(value)
    if not text:
        raise InvalidColorInput("empty color")
    try:
        return Color(text)
    except ValueError as exc:
        raise InvalidColorInput(f"invalid color: {value!r}") from exc


def _srgb(value: ColorLike) -> Color:
    return parse_color(value).convert("srgb").clip()


def to_hex(value: ColorLike) -> Hex:
    return parse_color(value).convert("srgb").to_string(hex=True, fit=FIT_HEX)


def srgb255(value: ColorLike) -> np.ndarray:
    """Unrounded sRGB channels in [0, 255] as a float64 vector."""
    coords = [0.0 if math.isnan(v) else v for v in _srgb(value).coords()]
    return np.asarray(coords, dtype=np.float64) * 255.0


def rgb255(value: ColorLike) -> Tuple[int, int, int]:
    r, g, b = (round_half_up(v) for v in srgb255(value))
    return r, g, b


def hsl_of(value: ColorLike) -> HslColor:
    """HSL of a color; achromatic hue (NaN in ColorAide) is reported as 0."""
    h, s, l = _srgb(value).convert("hsl").coords()
    h = 0.0 if math.isnan(h) else h % 360.0
    s = 0.0 if math.isnan(s) else s
    l = 0.0 if math.isnan(l) else l
    return HslColor(h, s, l)


def from_srgb255(rgb: np.ndarray) -> Color:
    channels = np.clip(np.asarray(rgb, dtype=np.float64), 0.0, 255.0) / 255.0
    return Color("srgb", channels.tolist())


__all__ = [
    "ColorLike",
    "Hex",
    "HslColor",
    "OklchColor",
    "from_srgb255",
    "hsl_of",
    "parse_color",
    "rgb255",
    "round_half_up",
    "srgb255",
    "to_hex",
]
