"""
Reference Shapes

Built-in reference traces for each expected shape, in a pixel frame
centred at (490, 400).
"""

import math

from graphomotor_eval.domain.value_objects import ExpectedShape, Point, Trace

CENTER_X = 490
CENTER_Y = 400


def _line(x1: float, y1: float, x2: float, y2: float, steps: int = 40) -> Trace:
    """Evenly sampled segment, both endpoints included"""
    return [
        Point(x=round(x1 + (x2 - x1) * i / steps, 2), y=round(y1 + (y2 - y1) * i / steps, 2))
        for i in range(steps + 1)
    ]


def _polyline(vertices: list[tuple[float, float]], steps: int = 40) -> Trace:
    """Closed outline through the vertices"""
    points: Trace = []
    for i, (x1, y1) in enumerate(vertices):
        x2, y2 = vertices[(i + 1) % len(vertices)]
        points.extend(_line(x1, y1, x2, y2, steps))
    return points


def circle(cx: float = CENTER_X, cy: float = CENTER_Y, r: float = 140, steps: int = 160) -> Trace:
    return [
        Point(
            x=round(cx + r * math.cos(2 * math.pi * i / steps), 2),
            y=round(cy + r * math.sin(2 * math.pi * i / steps), 2),
        )
        for i in range(steps + 1)
    ]


def regular_polygon(
    sides: int,
    cx: float = CENTER_X,
    cy: float = CENTER_Y,
    r: float = 170,
    rotation: float = -math.pi / 2,
) -> Trace:
    vertices = [
        (cx + r * math.cos(rotation + 2 * math.pi * i / sides), cy + r * math.sin(rotation + 2 * math.pi * i / sides))
        for i in range(sides)
    ]
    return _polyline(vertices)


def square(cx: float = CENTER_X, cy: float = CENTER_Y, side: float = 280) -> Trace:
    half = side / 2
    return _polyline([
        (cx - half, cy - half),
        (cx + half, cy - half),
        (cx + half, cy + half),
        (cx - half, cy + half),
    ])


def star(
    cx: float = CENTER_X,
    cy: float = CENTER_Y,
    outer: float = 180,
    inner: float = 72,
    tips: int = 5,
) -> Trace:
    vertices = []
    for i in range(tips * 2):
        radius = outer if i % 2 == 0 else inner
        angle = -math.pi / 2 + math.pi * i / tips
        vertices.append((cx + radius * math.cos(angle), cy + radius * math.sin(angle)))
    return _polyline(vertices, steps=20)


def reference_trace(shape: ExpectedShape | str) -> Trace:
    """
    Reference trace for an expected shape

    Args:
        shape: ExpectedShape or its English value / Spanish label

    Returns:
        Trace
    """
    shape = ExpectedShape.parse(shape)
    if shape is ExpectedShape.CIRCLE:
        return circle()
    if shape is ExpectedShape.SQUARE:
        return square()
    if shape is ExpectedShape.TRIANGLE:
        return regular_polygon(3)
    if shape is ExpectedShape.STAR:
        return star()
    return _line(CENTER_X - 140, CENTER_Y, CENTER_X + 140, CENTER_Y)
