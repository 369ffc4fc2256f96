"""Arc and circle tessellation.

Arcs arrive as three points (start, mid, end). The circle through them is
found from the perpendicular-bisector determinant and the arc is sampled at
equal angular steps. The first and last emitted points are the input start
and end objects themselves, so chained outlines still meet exactly.
"""

from __future__ import annotations

import math

from ..constants import COLLINEAR_EPSILON, DEFAULT_ARC_SEGMENTS, DEFAULT_CIRCLE_SEGMENTS
from ..schema.common import Point

_TWO_PI = 2 * math.pi


def circumcircle(a: Point, b: Point, c: Point) -> tuple[Point, float] | None:
    """Center and radius of the circle through three points.

    Returns None when the points are collinear (|det| < 1e-10).
    """
    det = 2 * (a.x * (b.y - c.y) + b.x * (c.y - a.y) + c.x * (a.y - b.y))
    if abs(det) < COLLINEAR_EPSILON:
        return None

    a_sq = a.x * a.x + a.y * a.y
    b_sq = b.x * b.x + b.y * b.y
    c_sq = c.x * c.x + c.y * c.y
    ux = (a_sq * (b.y - c.y) + b_sq * (c.y - a.y) + c_sq * (a.y - b.y)) / det
    uy = (a_sq * (c.x - b.x) + b_sq * (a.x - c.x) + c_sq * (b.x - a.x)) / det
    center = Point(ux, uy)
    return center, math.hypot(a.x - ux, a.y - uy)


def _wrap(angle: float) -> float:
    """Wrap an angle in radians to (-pi, pi]."""
    while angle <= -math.pi:
        angle += _TWO_PI
    while angle > math.pi:
        angle -= _TWO_PI
    return angle


def arc_sweep(start_angle: float, mid_angle: float, end_angle: float) -> float:
    """Signed sweep (radians) from start to end passing through mid."""
    sweep = _wrap(end_angle - start_angle)
    rel_mid = _wrap(mid_angle - start_angle)
    inside = 0 <= rel_mid <= sweep if sweep >= 0 else sweep <= rel_mid <= 0
    if not inside:
        sweep = sweep - _TWO_PI if sweep > 0 else sweep + _TWO_PI
    return sweep


def tessellate_arc(
    start: Point,
    mid: Point,
    end: Point,
    segments: int = DEFAULT_ARC_SEGMENTS,
) -> list[Point]:
    """Approximate a three-point arc by ``segments`` straight pieces.

    Collinear input degrades to the chord ``[start, end]``.
    """
    circle = circumcircle(start, mid, end)
    if circle is None or segments <= 1:
        return [start, end]

    center, radius = circle
    a0 = math.atan2(start.y - center.y, start.x - center.x)
    am = math.atan2(mid.y - center.y, mid.x - center.x)
    a1 = math.atan2(end.y - center.y, end.x - center.x)
    sweep = arc_sweep(a0, am, a1)

    points = [start]
    for i in range(1, segments):
        theta = a0 + sweep * i / segments
        points.append(
            Point(center.x + radius * math.cos(theta), center.y + radius * math.sin(theta))
        )
    points.append(end)
    return points


def tessellate_circle(
    center: Point,
    radius: float,
    segments: int = DEFAULT_CIRCLE_SEGMENTS,
) -> list[Point]:
    """Closed ring approximating a full circle (first point repeated last)."""
    segments = max(segments, 3)
    points = [
        Point(
            center.x + radius * math.cos(_TWO_PI * i / segments),
            center.y + radius * math.sin(_TWO_PI * i / segments),
        )
        for i in range(segments)
    ]
    points.append(points[0])
    return points


def arc_from_center(center: Point, start: Point, angle: float) -> tuple[Point, Point]:
    """Convert a legacy (center, start, angle°) arc to its (mid, end) points."""

    def _rotated(degrees: float) -> Point:
        rad = math.radians(degrees)
        dx = start.x - center.x
        dy = start.y - center.y
        return Point(
            center.x + dx * math.cos(rad) - dy * math.sin(rad),
            center.y + dx * math.sin(rad) + dy * math.cos(rad),
        )

    return _rotated(angle / 2), _rotated(angle)
