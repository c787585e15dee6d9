"""Handicap stroke allocation by hole difficulty."""

import math
from typing import Sequence

from .schemas import HoleDef


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def allocate_strokes(differential: float, holes: Sequence[HoleDef]) -> list[int]:
    """
    Distribute handicap strokes across holes, hardest first.

    The differential is rounded to a whole number of strokes. Holes are visited
    in stroke-index order (1 = hardest), one stroke each, wrapping around so that
    a differential above 9 gives every hole a stroke before any hole gets two.

    Args:
        differential: Handicap difference to give (negative values give nothing)
        holes: Scorecard holes for the nine being played

    Returns:
        Stroke counts index-aligned with ``holes``; sums to the rounded differential
    """
    strokes = [0] * len(holes)
    if not holes:
        return strokes

    remaining = max(0, round_half_up(differential))
    order = sorted(range(len(holes)), key=lambda i: holes[i].stroke_index)

    for s in range(remaining):
        strokes[order[s % len(order)]] += 1

    return strokes
