from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, Literal, Tuple, get_args

from .color import ColorLike, Hex, hsl_of, parse_color, rgb255, round_half_up, to_hex
from .errors import InvalidConfiguration

ColorFormat = Literal["hex", "hsl", "rgb", "oklch"]
COLOR_FORMATS: Tuple[str, ...] = get_args(ColorFormat)


def _hsl(color: ColorLike) -> str:
    hsl = hsl_of(color)
    return (
        f"hsl({round_half_up(hsl.h)}, "
        f"{round_half_up(hsl.s * 100)}%, {round_half_up(hsl.l * 100)}%)"
    )


def _rgb(color: ColorLike) -> str:
    r, g, b = rgb255(color)
    return f"rgb({r}, {g}, {b})"


def _oklch_coords(color: ColorLike) -> Tuple[float, float, float]:
    l, c, h = parse_color(color).convert("oklch").coords()
    return (
        0.0 if math.isnan(l) else l,
        0.0 if math.isnan(c) else c,
        0.0 if math.isnan(h) else h % 360.0,
    )


def _oklch(color: ColorLike) -> str:
    l, c, h = _oklch_coords(color)
    return f"oklch({l * 100:.1f}% {c:.3f} {round_half_up(h)})"


_FORMATTERS: Dict[str, Callable[[ColorLike], str]] = {
    "hex": to_hex,
    "hsl": _hsl,
    "rgb": _rgb,
    "oklch": _oklch,
}


def check_format(fmt: str) -> ColorFormat:
    if fmt not in _FORMATTERS:
        raise InvalidConfiguration(
            f"unknown color format {fmt!r}; expected one of {', '.join(COLOR_FORMATS)}"
        )
    return fmt  # type: ignore[return-value]


def format_color(color: ColorLike, fmt: ColorFormat = "hex") -> str:
    return _FORMATTERS[check_format(fmt)](color)


@dataclass(frozen=True)
class ColorInfo:
    hex: Hex
    rgb: Tuple[int, int, int]
    hsl: Tuple[float, float, float]
    oklch: Tuple[float, float, float]

    def formatted(self) -> Dict[str, str]:
        return {fmt: format_color(self.hex, fmt) for fmt in COLOR_FORMATS}


def color_info(color: ColorLike) -> ColorInfo:
    """Every supported representation of one color, for inspection."""
    hsl = hsl_of(color)
    return ColorInfo(
        hex=to_hex(color),
        rgb=rgb255(color),
        hsl=(hsl.h, hsl.s, hsl.l),
        oklch=_oklch_coords(color),
    )


__all__ = [
    "COLOR_FORMATS",
    "ColorFormat",
    "ColorInfo",
    "check_format",
    "color_info",
    "format_color",
]
