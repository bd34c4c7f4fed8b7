"""Hue-rotation harmonies and the ramps derived from them.

Rotation happens in HSL: saturation and lightness are carried over exactly
and every rotated color stays inside sRGB.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Literal, NamedTuple, Sequence, Tuple, get_args

from .color import ColorLike, HslColor, hsl_of
from .errors import InvalidConfiguration
from .formats import format_color
from .ramp import RampConfig, generate_color_ramp

HarmonyType = Literal[
    "complementary",
    "triadic",
    "analogous",
    "split-complementary",
    "square",
    "compound",
]
HARMONY_TYPES: Tuple[str, ...] = get_args(HarmonyType)

HARMONY_OFFSETS: Dict[str, Tuple[float, ...]] = {
    "complementary": (180.0,),
    "triadic": (120.0, 240.0),
    "analogous": (30.0, 60.0),
    "split-complementary": (150.0, 210.0),
    "square": (90.0, 180.0, 270.0),
    "compound": (180.0, 150.0, 210.0),
}


class Ramp(NamedTuple):
    name: str
    base_color: str
    colors: List[str]


def check_harmony(kind: str) -> HarmonyType:
    if kind not in HARMONY_OFFSETS:
        raise InvalidConfiguration(
            f"unknown harmony {kind!r}; expected one of {', '.join(HARMONY_TYPES)}"
        )
    return kind  # type: ignore[return-value]


def shift_hue(base: ColorLike, degrees: float) -> HslColor:
    hsl = hsl_of(base)
    return HslColor((hsl.h + degrees) % 360.0, hsl.s, hsl.l)


def harmony(base: ColorLike, kind: HarmonyType) -> List[HslColor]:
    """``base`` followed by one rotated color per offset of ``kind``."""
    offsets = HARMONY_OFFSETS[check_harmony(kind)]
    return [hsl_of(base)] + [shift_hue(base, d) for d in offsets]


def harmony_ramps(
    config: RampConfig,
    harmonies: Sequence[HarmonyType] = (),
    shifts: Iterable[float] = (),
) -> List[Ramp]:
    """The base ramp plus one ramp per derived base color.

    Names follow the harmony type, suffixed ``-1``, ``-2``... when a harmony
    yields several colors; hue shifts are named ``shift-<degrees>``.
    Derived ramps do not inherit locked swatches.
    """
    fmt = config.color_format
    ramps = [Ramp("base", format_color(config.base_color, fmt), generate_color_ramp(config))]

    def derived(name: str, base: HslColor) -> Ramp:
        cfg = config.replace(base_color=base.to_hex(), locked={})
        return Ramp(name, format_color(base, fmt), generate_color_ramp(cfg))

    for kind in harmonies:
        bases = harmony(config.base_color, kind)[1:]
        for k, base in enumerate(bases, start=1):
            name = f"{kind}-{k}" if len(bases) > 1 else kind
            ramps.append(derived(name, base))
    for degrees in shifts:
        ramps.append(derived(f"shift-{round(degrees)}", shift_hue(config.base_color, degrees)))
    return ramps


__all__ = [
    "HARMONY_OFFSETS",
    "HARMONY_TYPES",
    "HarmonyType",
    "Ramp",
    "harmony",
    "harmony_ramps",
    "shift_hue",
]
