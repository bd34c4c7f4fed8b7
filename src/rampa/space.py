"""Interpolated color spaces built from a few anchor colors.

Three topologies share one primitive, :func:`mix`:

* linear  - ``steps`` colors from ``a`` to ``b``;
* cube    - trilinear interpolation between 8 corners, ``n**3`` colors,
  ``index = x*n*n + y*n + z``;
* plane   - saturation (x) by lightness (y) between a dark, a light and a
  hue anchor, ``n**2`` colors, ``index = x*n + y``. The bottom row (y = 0)
  is the dark anchor for every x.

Palettes are lists of ``#rrggbb`` strings. The frozen space classes add
lookups by coordinate or corner alias and format their answers.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Dict, List, Literal, Mapping, Optional, Sequence, Tuple, get_args

from .color import ColorLike, Hex, OklchColor, parse_color, round_half_up, to_hex
from .defaults import DEFAULT_LINEAR_STEPS, DEFAULT_STEPS_PER_AXIS
from .errors import InvalidConfiguration
from .formats import ColorFormat, check_format, format_color
from .oklch import constrain, from_oklch, to_oklch

InterpolationMode = Literal["oklch", "lab", "rgb"]
INTERPOLATION_MODES: Tuple[str, ...] = get_args(InterpolationMode)

ACHROMATIC_CHROMA = 0.002

# corner alias position -> (x, y, z) mask
CUBE_CORNERS: Tuple[Tuple[str, Tuple[int, int, int]], ...] = (
    ("origin", (0, 0, 0)),
    ("x", (1, 0, 0)),
    ("y", (0, 1, 0)),
    ("z", (0, 0, 1)),
    ("xy", (1, 1, 0)),
    ("xz", (1, 0, 1)),
    ("yz", (0, 1, 1)),
    ("xyz", (1, 1, 1)),
)


def check_interpolation(mode: Optional[str], *, allow_none: bool = False) -> Optional[str]:
    if mode is None and allow_none:
        return None
    if mode not in INTERPOLATION_MODES:
        raise InvalidConfiguration(
            f"unknown interpolation {mode!r}; expected one of {', '.join(INTERPOLATION_MODES)}"
        )
    return mode


def _short_arc_lerp(h1: float, h2: float, t: float) -> float:
    d = ((h2 - h1 + 180.0) % 360.0) - 180.0
    return (h1 + t * d) % 360.0


def _lerp_alpha(a: Optional[float], b: Optional[float], t: float) -> Optional[float]:
    a = 1.0 if a is None else a
    b = 1.0 if b is None else b
    return a + t * (b - a)


def _mix_oklch(a: ColorLike, b: ColorLike, t: float) -> Hex:
    ka, kb = to_oklch(a), to_oklch(b)
    a_grey = ka.c < ACHROMATIC_CHROMA
    b_grey = kb.c < ACHROMATIC_CHROMA
    if a_grey and b_grey:
        h = 0.0
    elif a_grey:
        h = kb.h
    elif b_grey:
        h = ka.h
    else:
        h = _short_arc_lerp(ka.h, kb.h, t)
    alpha = _lerp_alpha(ka.alpha, kb.alpha, t)
    mixed = OklchColor(ka.l + t * (kb.l - ka.l), ka.c + t * (kb.c - ka.c), h, alpha)
    return from_oklch(constrain(mixed))


_SPACES = {"lab": "lab", "rgb": "srgb"}


def mix(a: ColorLike, b: ColorLike, t: float, mode: InterpolationMode = "oklch") -> Hex:
    """Color at ``t`` in [0, 1] between ``a`` and ``b``.

    ``oklch`` lerps L and C, takes the shorter hue arc, lets an achromatic
    endpoint borrow the other's hue and reduces chroma to fit sRGB. ``lab``
    and ``rgb`` lerp the channels directly. The endpoints come back
    unchanged at t = 0 and t = 1.
    """
    check_interpolation(mode)
    if t <= 0.0:
        return to_hex(a)
    if t >= 1.0:
        return to_hex(b)
    if mode == "oklch":
        return _mix_oklch(a, b, t)
    mixed = parse_color(a).mix(parse_color(b), t, space=_SPACES[mode])
    return to_hex(mixed)


def _axis(i: int, n: int) -> float:
    return 0.0 if n <= 1 else i / (n - 1)


def generate_linear_space(
    a: ColorLike, b: ColorLike, steps: int, mode: InterpolationMode = "oklch"
) -> List[Hex]:
    if steps == 1:
        return [mix(a, b, 0.5, mode)]
    return [mix(a, b, _axis(i, steps), mode) for i in range(steps)]


def generate_cube_space(
    corners: Sequence[ColorLike], steps_per_axis: int, mode: InterpolationMode = "oklch"
) -> List[Hex]:
    """``steps_per_axis**3`` colors; corners ordered as :data:`CUBE_CORNERS`."""
    if len(corners) != len(CUBE_CORNERS):
        raise InvalidConfiguration(f"a cube needs 8 corners, got {len(corners)}")
    origin, x, y, z, xy, xz, yz, xyz = (to_hex(c) for c in corners)
    n = steps_per_axis
    out: List[Hex] = []
    for xi in range(n):
        tx = _axis(xi, n)
        # 4 edges along x
        e0 = mix(origin, x, tx, mode)
        ey = mix(y, xy, tx, mode)
        ez = mix(z, xz, tx, mode)
        eyz = mix(yz, xyz, tx, mode)
        for yi in range(n):
            ty = _axis(yi, n)
            z0 = mix(e0, ey, ty, mode)
            z1 = mix(ez, eyz, ty, mode)
            for zi in range(n):
                out.append(mix(z0, z1, _axis(zi, n), mode))
    return out


def generate_plane_space(
    dark: ColorLike,
    light: ColorLike,
    hue: ColorLike,
    steps_per_axis: int,
    mode: InterpolationMode = "oklch",
) -> List[Hex]:
    """``steps_per_axis**2`` colors, saturation on x and lightness on y."""
    n = steps_per_axis
    bottom = to_hex(dark)
    out: List[Hex] = []
    for xi in range(n):
        top = mix(light, hue, _axis(xi, n), mode)
        for yi in range(n):
            out.append(mix(bottom, top, _axis(yi, n), mode))
    return out


# ----------------------------- space objects ---------------------------------


def _check_steps(steps: int, what: str) -> None:
    if isinstance(steps, bool) or not isinstance(steps, int) or steps < 1:
        raise InvalidConfiguration(f"{what} must be a positive integer, got {steps!r}")


def _clamp_index(v: float, hi: int) -> int:
    return max(0, min(hi, round_half_up(v)))


@dataclass(frozen=True)
class LinearColorSpace:
    """Two anchors interpolated over ``steps``.

    With ``interpolation=None`` the anchors (two or more) are used as a
    plain lookup table instead.
    """

    colors: Tuple[str, ...]
    steps: int = DEFAULT_LINEAR_STEPS
    interpolation: Optional[InterpolationMode] = "oklch"
    output_format: ColorFormat = "hex"

    def __post_init__(self) -> None:
        object.__setattr__(self, "colors", tuple(self.colors))
        check_interpolation(self.interpolation, allow_none=True)
        check_format(self.output_format)
        _check_steps(self.steps, "steps")
        if self.interpolation is None:
            if len(self.colors) < 2:
                raise InvalidConfiguration("a lookup table needs at least 2 colors")
        elif len(self.colors) != 2:
            raise InvalidConfiguration(
                f"a linear space needs exactly 2 anchors, got {len(self.colors)}"
            )
        for c in self.colors:
            parse_color(c)

    @cached_property
    def palette(self) -> List[Hex]:
        if self.interpolation is None:
            return [to_hex(c) for c in self.colors]
        a, b = self.colors
        return generate_linear_space(a, b, self.steps, self.interpolation)

    @property
    def size(self) -> int:
        return len(self.palette)

    def at(self, index: int) -> str:
        """1-based lookup, clamped to the palette."""
        i = max(1, min(len(self.palette), int(index))) - 1
        return format_color(self.palette[i], self.output_format)


@dataclass(frozen=True)
class CubeColorSpace:
    """Eight ``(alias, color)`` corners, in :data:`CUBE_CORNERS` order.

    ``tint({"r": 4, "b": 2})`` takes, per axis, the largest mask*intensity
    of the named corners; ``cube(x, y, z)`` addresses the grid directly.
    """

    corners: Tuple[Tuple[str, str], ...]
    steps_per_axis: int = DEFAULT_STEPS_PER_AXIS
    interpolation: Optional[InterpolationMode] = "oklch"
    output_format: ColorFormat = "hex"

    def __post_init__(self) -> None:
        corners = tuple((str(alias), color) for alias, color in self.corners)
        if len(corners) != len(CUBE_CORNERS):
            raise InvalidConfiguration(f"a cube needs 8 corners, got {len(corners)}")
        aliases = [alias for alias, _ in corners]
        if len(set(aliases)) != len(aliases):
            raise InvalidConfiguration(f"duplicate corner aliases: {aliases}")
        check_interpolation(self.interpolation, allow_none=True)
        check_format(self.output_format)
        _check_steps(self.steps_per_axis, "steps_per_axis")
        for _, color in corners:
            parse_color(color)
        object.__setattr__(self, "corners", corners)

    @cached_property
    def masks(self) -> Dict[str, Tuple[int, int, int]]:
        return {alias: mask for (alias, _), (_, mask) in zip(self.corners, CUBE_CORNERS)}

    @cached_property
    def palette(self) -> List[Hex]:
        colors = [color for _, color in self.corners]
        if self.interpolation is None:
            return [to_hex(c) for c in colors]
        return generate_cube_space(colors, self.steps_per_axis, self.interpolation)

    @property
    def size(self) -> int:
        return self.steps_per_axis

    def _lookup(self, x: float, y: float, z: float) -> str:
        if self.interpolation is None:
            raise InvalidConfiguration("a lookup-table cube has no grid to address")
        n = self.steps_per_axis
        hi = n - 1
        cx, cy, cz = (_clamp_index(v, hi) for v in (x, y, z))
        return format_color(self.palette[cx * n * n + cy * n + cz], self.output_format)

    def cube(self, x: float, y: float, z: float) -> str:
        return self._lookup(x, y, z)

    def tint(self, query: Mapping[str, float]) -> str:
        cx = cy = cz = 0.0
        for alias, intensity in query.items():
            mask = self.masks.get(alias)
            if mask is None:
                raise InvalidConfiguration(
                    f"unknown corner alias {alias!r}; available: {', '.join(self.masks)}"
                )
            cx = max(cx, mask[0] * intensity)
            cy = max(cy, mask[1] * intensity)
            cz = max(cz, mask[2] * intensity)
        return self._lookup(cx, cy, cz)

    def corner(self, alias: str, intensity: float) -> str:
        return self.tint({alias: intensity})


@dataclass(frozen=True)
class PlaneColorSpace:
    dark: str
    light: str
    hue: str
    steps_per_axis: int = DEFAULT_STEPS_PER_AXIS
    interpolation: InterpolationMode = "oklch"
    output_format: ColorFormat = "hex"

    def __post_init__(self) -> None:
        for c in (self.dark, self.light, self.hue):
            parse_color(c)
        check_interpolation(self.interpolation)
        check_format(self.output_format)
        _check_steps(self.steps_per_axis, "steps_per_axis")

    @cached_property
    def palette(self) -> List[Hex]:
        return generate_plane_space(
            self.dark, self.light, self.hue, self.steps_per_axis, self.interpolation
        )

    @property
    def size(self) -> int:
        return self.steps_per_axis

    def xy(self, saturation: int, lightness: int) -> str:
        n = self.steps_per_axis
        sx = max(0, min(n - 1, int(saturation)))
        ly = max(0, min(n - 1, int(lightness)))
        return format_color(self.palette[sx * n + ly], self.output_format)


__all__ = [
    "CUBE_CORNERS",
    "CubeColorSpace",
    "INTERPOLATION_MODES",
    "InterpolationMode",
    "LinearColorSpace",
    "PlaneColorSpace",
    "generate_cube_space",
    "generate_linear_space",
    "generate_plane_space",
    "mix",
]
