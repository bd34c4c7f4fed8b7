"""Pairwise APCA audit of one or more ramps.

The report walks every unordered pair of (deduplicated) colors once, scores
it in both directions and files it under the single highest APCA level that
the stronger direction reaches.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, NamedTuple, Sequence, Tuple

from .contrast import APCA_LEVELS, NEARLY_IDENTICAL_DE, apca, apca_passing_levels, delta_e, round2
from .harmony import Ramp

log = logging.getLogger(__name__)


class ColorRef(NamedTuple):
    ramp: str
    index: int
    color: str


@dataclass(frozen=True)
class ContrastPair:
    a: ColorRef
    b: ColorRef
    lc_ab: float  # a as text on b
    lc_ba: float  # b as text on a


@dataclass(frozen=True)
class AccessibilityLevel:
    id: str
    name: str
    min_lc: float
    pairs: Tuple[ContrastPair, ...]


@dataclass(frozen=True)
class AccessibilityReport:
    total_pairs: int
    passing_pairs: int
    levels: Tuple[AccessibilityLevel, ...]


def collect_colors(ramps: Iterable[Ramp]) -> List[ColorRef]:
    return [
        ColorRef(ramp.name, i, color)
        for ramp in ramps
        for i, color in enumerate(ramp.colors)
    ]


def dedupe(refs: Sequence[ColorRef]) -> List[ColorRef]:
    """Drop colors indistinguishable from their predecessor in the same ramp.

    The first and last color overall, and the first and last color of every
    ramp, are always kept.
    """
    n = len(refs)
    kept: List[ColorRef] = []
    for k, ref in enumerate(refs):
        prev = refs[k - 1] if k > 0 else None
        nxt = refs[k + 1] if k + 1 < n else None
        boundary = prev is None or nxt is None or prev.ramp != ref.ramp or nxt.ramp != ref.ramp
        if boundary or delta_e(prev.color, ref.color) >= NEARLY_IDENTICAL_DE:
            kept.append(ref)
    if len(kept) < n:
        log.debug("Dropped %d near-duplicate colors from the report", n - len(kept))
    return kept


def generate_accessibility_report(colors: Sequence[ColorRef]) -> AccessibilityReport:
    refs = dedupe(colors)
    n = len(refs)
    buckets: Dict[str, List[ContrastPair]] = {level.id: [] for level in APCA_LEVELS}
    passing = 0
    for i in range(n):
        for j in range(i + 1, n):
            a, b = refs[i], refs[j]
            lc_ab = apca(a.color, b.color)
            lc_ba = apca(b.color, a.color)
            strongest = lc_ab if abs(lc_ab) >= abs(lc_ba) else lc_ba
            levels = apca_passing_levels(strongest)
            if not levels:
                continue
            passing += 1
            buckets[levels[0].id].append(ContrastPair(a, b, round2(lc_ab), round2(lc_ba)))

    return AccessibilityReport(
        total_pairs=n * (n - 1) // 2,
        passing_pairs=passing,
        levels=tuple(
            AccessibilityLevel(level.id, level.name, level.threshold, tuple(buckets[level.id]))
            for level in APCA_LEVELS
        ),
    )


__all__ = [
    "AccessibilityLevel",
    "AccessibilityReport",
    "ColorRef",
    "ContrastPair",
    "collect_colors",
    "dedupe",
    "generate_accessibility_report",
]
