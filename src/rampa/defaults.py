# Default values shared by ramps and color spaces.

from __future__ import annotations

DEFAULT_BASE_COLOR = "#3b82f6"
DEFAULT_TOTAL_STEPS = 10

MIN_STEPS = 2
MAX_STEPS = 100

# percent, percent, degrees (offset from the base hue)
DEFAULT_LIGHTNESS = (0.0, 100.0)
DEFAULT_SATURATION = (100.0, 0.0)
DEFAULT_HUE = (-10.0, 10.0)

DEFAULT_LINEAR_STEPS = 24
DEFAULT_STEPS_PER_AXIS = 6

# consistent gamut-fit for hex output
FIT_HEX = {"method": "clip"}

# middle gray returned by lenient conversions
FALLBACK_HEX = "#808080"
