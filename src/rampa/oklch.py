"""OKLCH conversions, sRGB gamut checks and chroma constraint.

``max_chroma`` is the hot path of the whole package: ramps in OKLCH mode and
every perceptual mix call it through :func:`constrain`, so results are
memoised at module level.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from functools import lru_cache

from coloraide import Color

from .color import ColorLike, Hex, OklchColor, parse_color
from .defaults import FALLBACK_HEX, FIT_HEX
from .errors import InvalidColorInput

log = logging.getLogger(__name__)

GAMUT = "srgb"
MID_GRAY = OklchColor(0.5, 0.0, 0.0, 1.0)

CHROMA_SEED = 0.5  # first upper bound tried by max_chroma
CHROMA_PRECISION = 0.001
SEARCH_ITERS = 20


def _finite(x: float) -> float:
    return 0.0 if math.isnan(x) else x


def to_oklch(value: ColorLike) -> OklchColor:
    """Convert any color form to OKLCH; unparsable input yields mid-gray."""
    try:
        color = parse_color(value).convert("oklch")
    except InvalidColorInput:
        log.warning("Cannot convert %r to OKLCH, using mid-gray", value)
        return MID_GRAY
    l, c, h = (_finite(v) for v in color.coords())
    alpha = color["alpha"]
    return OklchColor(l, c, h % 360.0, 1.0 if math.isnan(alpha) else alpha)


def from_oklch(oklch: OklchColor) -> Hex:
    """Serialize an OKLCH value as hex; non-finite input yields mid-gray."""
    values = (oklch.l, oklch.c, oklch.h)
    if not all(math.isfinite(v) for v in values):
        log.warning("Cannot convert %r to hex, using %s", oklch, FALLBACK_HEX)
        return FALLBACK_HEX
    return oklch.to_color().convert("srgb").to_string(hex=True, fit=FIT_HEX)


def in_gamut(oklch: OklchColor) -> bool:
    values = (oklch.l, oklch.c, oklch.h)
    if not all(math.isfinite(v) for v in values):
        return False
    return Color("oklch", list(values)).in_gamut(GAMUT)


@lru_cache(maxsize=16384)
def _max_chroma_cached(l: float, h: float) -> float:
    lo = 0.0
    hi = CHROMA_SEED
    # grow the bound until it leaves the gamut
    for _ in range(SEARCH_ITERS):
        if not in_gamut(OklchColor(l, hi, h)):
            break
        lo = hi
        hi *= 2.0
    for _ in range(SEARCH_ITERS):
        if hi - lo <= CHROMA_PRECISION:
            break
        mid = 0.5 * (lo + hi)
        if in_gamut(OklchColor(l, mid, h)):
            lo = mid
        else:
            hi = mid
    return max(0.0, lo)


def max_chroma(l: float, h: float) -> float:
    """Largest chroma that keeps ``(l, c, h)`` inside sRGB (to 0.001)."""
    if not (math.isfinite(l) and math.isfinite(h)):
        return 0.0
    return _max_chroma_cached(float(l), float(h) % 360.0)


def constrain(oklch: OklchColor) -> OklchColor:
    """Clamp L and alpha, wrap H and reduce C until the color fits sRGB.

    Lightness and hue are kept exactly; only chroma is lowered. Colors that
    are already displayable are returned with their chroma untouched.
    """
    l = min(1.0, max(0.0, oklch.l))
    h = oklch.h % 360.0
    c = max(0.0, oklch.c)
    alpha = oklch.alpha
    if alpha is not None:
        alpha = min(1.0, max(0.0, alpha))
    out = OklchColor(l, c, h, alpha)
    if in_gamut(out):
        return out
    cmax = max_chroma(l, h)
    if c > cmax:
        out = replace(out, c=cmax)
    return out


def is_chroma_at_max(l: float, c: float, h: float) -> bool:
    return c >= max_chroma(l, h) * 0.95


def is_valid_oklch(oklch: OklchColor) -> bool:
    alpha_ok = oklch.alpha is None or 0.0 <= oklch.alpha <= 1.0
    return (
        0.0 <= oklch.l <= 1.0
        and 0.0 <= oklch.c <= 1.0
        and 0.0 <= oklch.h <= 360.0
        and alpha_ok
    )


def round_oklch(oklch: OklchColor) -> OklchColor:
    """Display precision: L and C to 2 places, whole-degree hue."""
    alpha = None if oklch.alpha is None else round(oklch.alpha, 2)
    return OklchColor(round(oklch.l, 2), round(oklch.c, 2), float(round(oklch.h)), alpha)


def round_oklch_precise(oklch: OklchColor) -> OklchColor:
    alpha = None if oklch.alpha is None else round(oklch.alpha, 3)
    return OklchColor(round(oklch.l, 3), round(oklch.c, 3), float(round(oklch.h)), alpha)


def format_oklch_string(oklch: OklchColor) -> str:
    r = round_oklch(oklch)
    body = f"{r.l:g} {r.c:g} {r.h:g}"
    if r.alpha is not None and r.alpha < 1:
        return f"oklch({body} / {r.alpha:g})"
    return f"oklch({body})"


__all__ = [
    "MID_GRAY",
    "constrain",
    "format_oklch_string",
    "from_oklch",
    "in_gamut",
    "is_chroma_at_max",
    "is_valid_oklch",
    "max_chroma",
    "round_oklch",
    "round_oklch_precise",
    "to_oklch",
]
