"""Outline reconstruction from an unordered bag of line segments.

Board edges (and other drawn outlines) are stored as independent segments in
arbitrary order and winding. The chaining here is greedy and single-pass:
it follows forward matches, then reversed matches, and when neither exists
it breaks the chain and continues from the next segment in input order.
This heuristic is order-sensitive and does not search for an optimal
chaining.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..constants import POINT_TOLERANCE
from ..schema.common import BoundingBox, Point, Size
from .transform import Affine


@dataclass(frozen=True)
class Segment:
    """A directed line segment in source space."""

    start: Point
    end: Point

    def reversed(self) -> Segment:
        return Segment(start=self.end, end=self.start)


def points_equal(p1: Point, p2: Point, tolerance: float = POINT_TOLERANCE) -> bool:
    return abs(p1.x - p2.x) < tolerance and abs(p1.y - p2.y) < tolerance


def chain_segments(
    segments: Iterable[Segment],
    tolerance: float = POINT_TOLERANCE,
) -> list[list[Segment]]:
    """Greedily chain segments end-to-start.

    Returns the chains in discovery order. Segments inside a chain are
    oriented so each one starts where the previous ended.
    """
    remaining = list(segments)
    chains: list[list[Segment]] = []
    while remaining:
        chain = [remaining.pop(0)]
        while remaining:
            last_end = chain[-1].end
            index = next(
                (i for i, seg in enumerate(remaining) if points_equal(seg.start, last_end, tolerance)),
                None,
            )
            if index is not None:
                chain.append(remaining.pop(index))
                continue
            index = next(
                (i for i, seg in enumerate(remaining) if points_equal(seg.end, last_end, tolerance)),
                None,
            )
            if index is None:
                break
            chain.append(remaining.pop(index).reversed())
        chains.append(chain)
    return chains


def order_segments(
    segments: Iterable[Segment],
    tolerance: float = POINT_TOLERANCE,
) -> list[Segment]:
    """All chains concatenated: the best-effort single ordering."""
    return [seg for chain in chain_segments(segments, tolerance) for seg in chain]


def polyline_from_segments(
    ordered: list[Segment],
    transform: Affine,
    tolerance: float = POINT_TOLERANCE,
) -> list[Point]:
    """Map ordered segments to an output-space polyline.

    Start points are emitted in order, skipping repeats of the previous
    point. The final end point is appended only when it does not coincide
    with the first point, so a closed loop is reported implicitly closed.
    """
    points: list[Point] = []
    for seg in ordered:
        start = transform.apply(seg.start)
        if not points or not points_equal(points[-1], start, tolerance):
            points.append(start)

    if ordered:
        end = transform.apply(ordered[-1].end)
        if points and not points_equal(points[0], end, tolerance):
            points.append(end)
    return points


def reconstruct_outline(
    segments: Iterable[Segment],
    transform: Affine,
    tolerance: float = POINT_TOLERANCE,
) -> list[Point]:
    """Chain segments and return one output-space polyline."""
    return polyline_from_segments(order_segments(segments, tolerance), transform, tolerance)


def reconstruct_polylines(
    segments: Iterable[Segment],
    transform: Affine,
    tolerance: float = POINT_TOLERANCE,
) -> list[list[Point]]:
    """One output-space polyline per connected chain."""
    return [
        polyline_from_segments(chain, transform, tolerance)
        for chain in chain_segments(segments, tolerance)
    ]


def is_closed(points: list[Point], tolerance: float = POINT_TOLERANCE) -> bool:
    return len(points) > 2 and points_equal(points[0], points[-1], tolerance)


def outline_size(points: Iterable[Point]) -> Size:
    """Width/height of the polyline's bounding box (0×0 when empty)."""
    bbox = BoundingBox.from_points(points)
    if bbox is None:
        return Size(0.0, 0.0)
    return Size(bbox.width, bbox.height)
