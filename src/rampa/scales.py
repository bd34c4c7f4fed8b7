"""Step distributions along a ramp.

``scale_position(i, n, scale)`` maps step ``i`` of ``n`` to ``t`` in [0, 1].
Every scale pins the endpoints: step 0 is 0.0 and step n-1 is 1.0.

  linear          i / (n-1)
  geometric       3**i, min-max normalised
  fibonacci       0, 1, 1, 2, 3, ... min-max normalised
  golden-ratio    phi**i, min-max normalised
  logarithmic     log(i + 1) over [log 1, log n]
  powers-of-2     2**i, min-max normalised
  musical-ratio   just-intonation table for n <= 12, else 2**(i/(n-1))
  cielab-uniform  same as linear for now
  ease-in         t**2
  ease-out        1 - (1-t)**2
  ease-in-out     2t**2 below 0.5, mirrored above
"""

from __future__ import annotations

import math
from typing import Callable, Dict, List, Literal, Tuple, get_args

import numpy as np

from .errors import InvalidConfiguration

ScaleType = Literal[
    "linear",
    "geometric",
    "fibonacci",
    "golden-ratio",
    "logarithmic",
    "powers-of-2",
    "musical-ratio",
    "cielab-uniform",
    "ease-in",
    "ease-out",
    "ease-in-out",
]
SCALE_TYPES: Tuple[str, ...] = get_args(ScaleType)

PHI = 1.61803398875
GEOMETRIC_RATIO = 3.0
MUSICAL_RATIOS = (
    1.0, 16 / 15, 9 / 8, 6 / 5, 5 / 4, 4 / 3,
    45 / 32, 3 / 2, 8 / 5, 5 / 3, 15 / 8, 2.0,
)


def _normalise(seq: np.ndarray, i: int) -> float:
    lo, hi = seq[0], seq[-1]
    return float((seq[i] - lo) / (hi - lo))


def _linear(i: int, n: int) -> float:
    return i / (n - 1)


def _geometric(i: int, n: int) -> float:
    return _normalise(GEOMETRIC_RATIO ** np.arange(n, dtype=np.float64), i)


def _fibonacci(i: int, n: int) -> float:
    fibs: List[int] = [0, 1]
    while len(fibs) < n:
        fibs.append(fibs[-1] + fibs[-2])
    return _normalise(np.asarray(fibs[:n], dtype=np.float64), i)


def _golden_ratio(i: int, n: int) -> float:
    return _normalise(PHI ** np.arange(n, dtype=np.float64), i)


def _logarithmic(i: int, n: int) -> float:
    return math.log(i + 1) / math.log(n)


def _powers_of_2(i: int, n: int) -> float:
    return _normalise(2.0 ** np.arange(n, dtype=np.float64), i)


def _musical_ratio(i: int, n: int) -> float:
    if n <= len(MUSICAL_RATIOS):
        seq = np.asarray(MUSICAL_RATIOS[:n])
    else:
        seq = 2.0 ** (np.arange(n, dtype=np.float64) / (n - 1))
    return _normalise(seq, i)


def _ease_in(i: int, n: int) -> float:
    t = i / (n - 1)
    return t * t


def _ease_out(i: int, n: int) -> float:
    t = i / (n - 1)
    return 1.0 - (1.0 - t) * (1.0 - t)


def _ease_in_out(i: int, n: int) -> float:
    t = i / (n - 1)
    if t < 0.5:
        return 2.0 * t * t
    return 1.0 - (-2.0 * t + 2.0) ** 2 / 2.0


_POSITIONS: Dict[str, Callable[[int, int], float]] = {
    "linear": _linear,
    "geometric": _geometric,
    "fibonacci": _fibonacci,
    "golden-ratio": _golden_ratio,
    "logarithmic": _logarithmic,
    "powers-of-2": _powers_of_2,
    "musical-ratio": _musical_ratio,
    # TODO: space steps by CIELAB distance instead of index once ramps expose
    # their colors to the scale function.
    "cielab-uniform": _linear,
    "ease-in": _ease_in,
    "ease-out": _ease_out,
    "ease-in-out": _ease_in_out,
}


def check_scale(scale: str) -> ScaleType:
    if scale not in _POSITIONS:
        raise InvalidConfiguration(
            f"unknown scale {scale!r}; expected one of {', '.join(SCALE_TYPES)}"
        )
    return scale  # type: ignore[return-value]


def scale_position(i: float, n: float, scale: ScaleType = "linear") -> float:
    """Position of step ``i`` of ``n`` along ``scale``.

    Degenerate input (n <= 1, NaN, i outside [0, n)) gives 0.0 rather than
    raising. Unknown scale names are a configuration error.
    """
    fn = _POSITIONS[check_scale(scale)]
    try:
        if math.isnan(i) or math.isnan(n) or n <= 1:
            return 0.0
        i, n = int(i), int(n)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if i < 0 or i >= n or n <= 1:
        return 0.0
    t = fn(i, n)
    if not math.isfinite(t):
        return 0.0
    return min(1.0, max(0.0, t))


def scale_positions(n: int, scale: ScaleType = "linear") -> List[float]:
    return [scale_position(i, n, scale) for i in range(n)]


__all__ = [
    "SCALE_TYPES",
    "ScaleType",
    "check_scale",
    "scale_position",
    "scale_positions",
]
