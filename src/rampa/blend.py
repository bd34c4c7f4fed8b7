# blend.py – compositing a tint over a base color
#   - separable modes work on sRGB channels in [0, 255] with NumPy
#   - hue/saturation/color/luminosity swap one HSL channel from the tint
#   - every mode except "normal" is computed at full strength first and then
#     mixed back toward the base by opacity (straight sRGB lerp)

from __future__ import annotations

from typing import Callable, Dict, Literal, Tuple, get_args

import numpy as np

from .color import ColorLike, Hex, HslColor, from_srgb255, hsl_of, srgb255, to_hex
from .errors import InvalidConfiguration

BlendMode = Literal[
    "normal",
    "darken",
    "multiply",
    "plus-darker",
    "color-burn",
    "lighten",
    "screen",
    "plus-lighter",
    "color-dodge",
    "overlay",
    "soft-light",
    "hard-light",
    "difference",
    "exclusion",
    "hue",
    "saturation",
    "color",
    "luminosity",
]
BLEND_MODES: Tuple[str, ...] = get_args(BlendMode)

Channels = np.ndarray  # float64, shape (3,), 0..255
ModeFn = Callable[[Channels, Channels], Channels]


def _clamp(v: Channels) -> Channels:
    return np.clip(v, 0.0, 255.0)


# --- separable modes ---------------------------------------------------------
def _darken(b: Channels, t: Channels) -> Channels:
    return np.minimum(b, t)


def _lighten(b: Channels, t: Channels) -> Channels:
    return np.maximum(b, t)


def _multiply(b: Channels, t: Channels) -> Channels:
    return b * t / 255.0


def _screen(b: Channels, t: Channels) -> Channels:
    return 255.0 - (255.0 - b) * (255.0 - t) / 255.0


def _plus_darker(b: Channels, t: Channels) -> Channels:
    return _clamp(b + t - 255.0)


def _plus_lighter(b: Channels, t: Channels) -> Channels:
    return _clamp(b + t)


def _color_burn(b: Channels, t: Channels) -> Channels:
    safe = np.where(t == 0.0, 1.0, t)
    return np.where(t == 0.0, 0.0, _clamp(255.0 - (255.0 - b) * 255.0 / safe))


def _color_dodge(b: Channels, t: Channels) -> Channels:
    safe = np.where(t == 255.0, 1.0, 255.0 - t)
    return np.where(t == 255.0, 255.0, _clamp(b * 255.0 / safe))


def _pivot(pivot: Channels, bn: Channels, tn: Channels) -> Channels:
    low = 2.0 * bn * tn
    high = 1.0 - 2.0 * (1.0 - bn) * (1.0 - tn)
    return np.where(pivot < 0.5, low, high) * 255.0


def _overlay(b: Channels, t: Channels) -> Channels:
    bn, tn = b / 255.0, t / 255.0
    return _pivot(bn, bn, tn)


def _hard_light(b: Channels, t: Channels) -> Channels:
    bn, tn = b / 255.0, t / 255.0
    return _pivot(tn, bn, tn)


def _soft_light(b: Channels, t: Channels) -> Channels:
    bn, tn = b / 255.0, t / 255.0
    low = 2.0 * bn * tn + bn * bn * (1.0 - 2.0 * tn)
    high = 2.0 * bn * (1.0 - tn) + np.sqrt(bn) * (2.0 * tn - 1.0)
    return np.where(tn < 0.5, low, high) * 255.0


def _difference(b: Channels, t: Channels) -> Channels:
    return np.abs(b - t)


def _exclusion(b: Channels, t: Channels) -> Channels:
    return b + t - 2.0 * b * t / 255.0


# --- non-separable (HSL) modes -------------------------------------------------
def _hsl_swap(pick: Callable[[HslColor, HslColor], HslColor]) -> ModeFn:
    def fn(b: Channels, t: Channels) -> Channels:
        base = hsl_of(from_srgb255(b))
        tint = hsl_of(from_srgb255(t))
        return srgb255(pick(base, tint))

    return fn


_MODES: Dict[str, ModeFn] = {
    "darken": _darken,
    "multiply": _multiply,
    "plus-darker": _plus_darker,
    "color-burn": _color_burn,
    "lighten": _lighten,
    "screen": _screen,
    "plus-lighter": _plus_lighter,
    "color-dodge": _color_dodge,
    "overlay": _overlay,
    "soft-light": _soft_light,
    "hard-light": _hard_light,
    "difference": _difference,
    "exclusion": _exclusion,
    "hue": _hsl_swap(lambda b, t: HslColor(t.h, b.s, b.l)),
    "saturation": _hsl_swap(lambda b, t: HslColor(b.h, t.s, b.l)),
    "color": _hsl_swap(lambda b, t: HslColor(t.h, t.s, b.l)),
    "luminosity": _hsl_swap(lambda b, t: HslColor(b.h, b.s, t.l)),
}


def check_blend_mode(mode: str) -> BlendMode:
    if mode != "normal" and mode not in _MODES:
        raise InvalidConfiguration(
            f"unknown blend mode {mode!r}; expected one of {', '.join(BLEND_MODES)}"
        )
    return mode  # type: ignore[return-value]


def _lerp(a: Channels, b: Channels, t: float) -> Channels:
    return a + (b - a) * t


def blend_channels(
    base: Channels, tint: Channels, opacity: float, mode: BlendMode = "normal"
) -> Channels:
    """Composite ``tint`` over ``base`` (sRGB, 0..255) at ``opacity`` in [0, 1]."""
    b = np.asarray(base, dtype=np.float64)
    t = np.asarray(tint, dtype=np.float64)
    if mode == "normal":
        return _lerp(b, t, opacity)
    full = _MODES[check_blend_mode(mode)](b, t)
    return _lerp(b, np.asarray(full, dtype=np.float64), opacity)


def blend(
    base: ColorLike, tint: ColorLike, opacity: float, mode: BlendMode = "normal"
) -> Hex:
    check_blend_mode(mode)
    rgb = blend_channels(srgb255(base), srgb255(tint), opacity, mode)
    return to_hex(from_srgb255(rgb))


__all__ = [
    "BLEND_MODES",
    "BlendMode",
    "blend",
    "blend_channels",
    "check_blend_mode",
]
