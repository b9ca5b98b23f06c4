"""
Coordinate Normalizer

Rescales a trace so the longer side of its bounding box spans 0-100.
"""

import math

from graphomotor_eval.domain.constants import NORMALIZED_SPAN
from graphomotor_eval.domain.value_objects import Point, Trace


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def normalize(points: Trace) -> Trace:
    """
    Translate the bounding box to the origin and scale its dominant side to 100

    Empty traces and traces whose points all coincide are returned unchanged,
    since they cannot be scaled.

    Args:
        points: Trace in an arbitrary frame (e.g. pixels)

    Returns:
        Trace with integer coordinates, same length and order as the input
    """
    if not points:
        return points

    xs = [p.x for p in points]
    ys = [p.y for p in points]
    min_x, min_y = min(xs), min(ys)
    span = max(max(xs) - min_x, max(ys) - min_y)
    if span == 0:
        return points

    scale = span / NORMALIZED_SPAN
    return [
        Point(
            x=_round_half_up((p.x - min_x) / scale),
            y=_round_half_up((p.y - min_y) / scale),
        )
        for p in points
    ]
