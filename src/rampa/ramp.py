"""Color ramp generation.

A :class:`RampConfig` is built once per request and passed to
:func:`generate_color_ramp`, which returns ``total_steps`` formatted colors
ordered by index. The config is never mutated; ``lock``/``replace`` return
new configs.

Per step ``i``:

1. a locked swatch is emitted verbatim;
2. each channel gets its own position from its scale type;
3. lightness is lerped between the configured percents;
4. hue is ``base hue + start + (end - start) * pos`` wrapped into [0, 360);
5. saturation is lerped with the *inverted* position, so position 0 takes
   the end value;
6. the color is built in HSL (or OKLCH for ``color_format="oklch"``) and
   optionally tinted;
7. the result is formatted.

A numeric failure in one step degrades that step to a gray; a failure of the
whole ramp degrades to an evenly spaced grayscale ramp. Nothing raises out
of :func:`generate_color_ramp`.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Sequence

from coloraide import Color

from .blend import BlendMode, blend_channels, check_blend_mode
from .color import ColorLike, OklchColor, from_srgb255, hsl_of, parse_color, srgb255
from .defaults import (
    DEFAULT_HUE,
    DEFAULT_LIGHTNESS,
    DEFAULT_SATURATION,
    DEFAULT_TOTAL_STEPS,
    MAX_STEPS,
    MIN_STEPS,
)
from .errors import InvalidColorInput, InvalidConfiguration, NumericDegenerate
from .formats import ColorFormat, check_format, format_color
from .oklch import constrain, max_chroma, to_oklch
from .scales import ScaleType, check_scale, scale_position

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChannelRange:
    """Start/end values of one channel and the scale that spaces them."""

    start: float
    end: float
    scale: ScaleType = "linear"

    def __post_init__(self) -> None:
        check_scale(self.scale)


@dataclass(frozen=True)
class Tint:
    color: str
    opacity: float = 0.0  # percent
    blend_mode: BlendMode = "normal"

    def __post_init__(self) -> None:
        parse_color(self.color)
        check_blend_mode(self.blend_mode)
        if not 0.0 <= self.opacity <= 100.0:
            raise InvalidConfiguration(
                f"tint opacity must be within 0..100, got {self.opacity!r}"
            )


@dataclass(frozen=True)
class RampConfig:
    base_color: str
    total_steps: int = DEFAULT_TOTAL_STEPS
    lightness: ChannelRange = field(default_factory=lambda: ChannelRange(*DEFAULT_LIGHTNESS))
    saturation: ChannelRange = field(default_factory=lambda: ChannelRange(*DEFAULT_SATURATION))
    hue: ChannelRange = field(default_factory=lambda: ChannelRange(*DEFAULT_HUE))
    tint: Optional[Tint] = None
    locked: Mapping[int, str] = field(default_factory=dict)
    color_format: ColorFormat = "hex"

    def __post_init__(self) -> None:
        parse_color(self.base_color)
        steps = self.total_steps
        if isinstance(steps, bool) or not isinstance(steps, int):
            raise InvalidConfiguration(f"total_steps must be an integer, got {steps!r}")
        if not MIN_STEPS <= steps <= MAX_STEPS:
            raise InvalidConfiguration(
                f"total_steps must be within {MIN_STEPS}..{MAX_STEPS}, got {steps}"
            )
        check_format(self.color_format)
        for index, color in self.locked.items():
            if isinstance(index, bool) or not isinstance(index, int):
                raise InvalidConfiguration(
                    f"locked swatch index must be an integer, got {index!r}"
                )
            if not 0 <= index < steps:
                raise InvalidConfiguration(
                    f"locked swatch index {index} outside 0..{steps - 1}"
                )
            parse_color(color)
        # freeze the caller's mapping
        object.__setattr__(self, "locked", MappingProxyType(dict(self.locked)))

    def replace(self, **changes) -> "RampConfig":
        return replace(self, **changes)

    def lock(self, index: int, color: str) -> "RampConfig":
        return self.replace(locked={**self.locked, index: color})

    def unlock(self, index: int) -> "RampConfig":
        return self.replace(locked={k: v for k, v in self.locked.items() if k != index})

    def lock_all(self, colors: Sequence[str]) -> "RampConfig":
        """Lock every swatch to ``colors`` (typically a previous ramp)."""
        if len(colors) != self.total_steps:
            raise InvalidConfiguration(
                f"expected {self.total_steps} colors to lock, got {len(colors)}"
            )
        return self.replace(locked=dict(enumerate(colors)))


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def _unit(x: float, what: str) -> float:
    if not math.isfinite(x):
        raise NumericDegenerate(f"{what} is {x!r}")
    return min(1.0, max(0.0, x))


def _tinted(color: Color, tint: Optional[Tint]) -> Color:
    if tint is None or tint.opacity <= 0:
        return color
    rgb = blend_channels(srgb255(color), srgb255(tint.color), tint.opacity / 100.0, tint.blend_mode)
    return from_srgb255(rgb)


def _hsl_step(config: RampConfig, base: ColorLike, i: int) -> Color:
    n = config.total_steps
    pos_l = scale_position(i, n, config.lightness.scale)
    pos_h = scale_position(i, n, config.hue.scale)
    pos_s = scale_position(i, n, config.saturation.scale)

    hsl = hsl_of(base)
    lightness = _unit(
        _lerp(config.lightness.start / 100.0, config.lightness.end / 100.0, pos_l),
        "lightness",
    )
    hue = hsl.h + config.hue.start + (config.hue.end - config.hue.start) * pos_h
    if not math.isfinite(hue):
        raise NumericDegenerate(f"hue is {hue!r}")
    saturation = _unit(
        _lerp(config.saturation.start / 100.0, config.saturation.end / 100.0, 1.0 - pos_s),
        "saturation",
    )
    return Color("hsl", [hue % 360.0, saturation, lightness])


def _oklch_step(config: RampConfig, base: ColorLike, i: int) -> Color:
    n = config.total_steps
    pos_l = scale_position(i, n, config.lightness.scale)
    pos_h = scale_position(i, n, config.hue.scale)
    pos_s = scale_position(i, n, config.saturation.scale)

    oklch = to_oklch(base)
    lightness = _unit(
        _lerp(config.lightness.start / 100.0, config.lightness.end / 100.0, pos_l),
        "lightness",
    )
    hue = oklch.h + config.hue.start + (config.hue.end - config.hue.start) * pos_h
    if not math.isfinite(hue):
        raise NumericDegenerate(f"hue is {hue!r}")
    hue %= 360.0
    saturation = _unit(
        _lerp(config.saturation.start / 100.0, config.saturation.end / 100.0, 1.0 - pos_s),
        "saturation",
    )
    chroma = saturation * max_chroma(lightness, hue)
    return constrain(OklchColor(lightness, chroma, hue)).to_color()


def gray_step(i: int, n: int) -> Color:
    """Neutral gray whose lightness runs 0.1..0.9 with the step index."""
    lightness = 0.1 + 0.8 * (i / (n - 1)) if n > 1 else 0.5
    return Color("hsl", [0.0, 0.0, lightness])


def grayscale_ramp(n: int, fmt: ColorFormat = "hex") -> List[str]:
    return [format_color(gray_step(i, n), fmt) for i in range(n)]


def _generate_step(config: RampConfig, base: Color, i: int) -> str:
    if config.color_format == "oklch":
        color = _oklch_step(config, base, i)
    else:
        color = _hsl_step(config, base, i)
    color = _tinted(color, config.tint)
    coords = color.convert("srgb").coords()
    if not all(math.isfinite(v) for v in coords):
        raise NumericDegenerate(f"step {i} produced {coords!r}")
    return format_color(color, config.color_format)


def generate_color_ramp(config: RampConfig) -> List[str]:
    n = config.total_steps
    try:
        base = parse_color(config.base_color)
        colors: List[str] = []
        for i in range(n):
            if i in config.locked:
                colors.append(config.locked[i])
                continue
            try:
                colors.append(_generate_step(config, base, i))
            except (NumericDegenerate, ArithmeticError, InvalidColorInput) as exc:
                log.warning("Ramp step %d degraded to gray: %s", i, exc)
                colors.append(format_color(gray_step(i, n), config.color_format))
        return colors
    except Exception:
        log.exception("Ramp generation failed, using grayscale fallback")
        return grayscale_ramp(n, config.color_format)


def generate_color_ramps(configs: Iterable[RampConfig]) -> List[List[str]]:
    return [generate_color_ramp(c) for c in configs]


__all__ = [
    "ChannelRange",
    "RampConfig",
    "Tint",
    "generate_color_ramp",
    "generate_color_ramps",
    "grayscale_ramp",
]
