"""Tests for transforms, arc tessellation and outline reconstruction."""

from __future__ import annotations

import math

import pytest

from kicad_circuit_json.geometry import (
    Affine,
    Segment,
    chain_segments,
    circumcircle,
    compose_rotation,
    is_closed,
    kicad_to_output,
    normalize_angle,
    outline_size,
    reconstruct_outline,
    reconstruct_polylines,
    tessellate_arc,
    tessellate_circle,
)
from kicad_circuit_json.geometry.arcs import arc_sweep
from kicad_circuit_json.schema import Point


def _square(size: float = 10.0) -> list[Segment]:
    a, b, c, d = Point(0, 0), Point(size, 0), Point(size, size), Point(0, size)
    return [Segment(a, b), Segment(b, c), Segment(c, d), Segment(d, a)]


class TestAffine:
    def test_identity(self) -> None:
        assert Affine.identity().apply(Point(3, 4)) == Point(3, 4)

    def test_compose_applies_other_first(self) -> None:
        m = Affine.scale(2).compose(Affine.translate(1, 0))
        assert m.apply(Point(1, 1)) == Point(4, 2)

    def test_kicad_flip(self) -> None:
        assert kicad_to_output().apply(Point(5, 7)) == Point(5, -7)

    def test_kicad_origin_lands_at_zero(self) -> None:
        m = kicad_to_output(origin=Point(120, 100))
        p = m.apply(Point(120, 100))
        assert p.x == pytest.approx(0.0)
        assert p.y == pytest.approx(0.0)
        q = m.apply(Point(130, 105))
        assert (q.x, q.y) == pytest.approx((10.0, -5.0))

    def test_scale_factor(self) -> None:
        assert kicad_to_output(1 / 15).scale_factor == pytest.approx(1 / 15)
        assert Affine(a=0, b=0).scale_factor == 1.0


class TestAngles:
    @pytest.mark.parametrize(
        ("degrees", "expected"),
        [(0, 0), (360, 0), (-90, 270), (450, 90), (-720, 0), (359.5, 359.5)],
    )
    def test_normalize(self, degrees: float, expected: float) -> None:
        assert normalize_angle(degrees) == pytest.approx(expected)

    def test_tiny_negative_stays_in_range(self) -> None:
        result = normalize_angle(-1e-20)
        assert 0 <= result < 360

    def test_compose(self) -> None:
        assert compose_rotation(270, 180) == 90


class TestCircumcircle:
    def test_unit_circle(self) -> None:
        circle = circumcircle(Point(1, 0), Point(0, 1), Point(-1, 0))
        assert circle is not None
        center, radius = circle
        assert (center.x, center.y) == pytest.approx((0.0, 0.0))
        assert radius == pytest.approx(1.0)

    def test_collinear(self) -> None:
        assert circumcircle(Point(0, 0), Point(1, 1), Point(2, 2)) is None


class TestArcSweep:
    def test_counter_clockwise_half(self) -> None:
        assert arc_sweep(0, math.pi / 2, math.pi) == pytest.approx(math.pi)

    def test_clockwise_half(self) -> None:
        assert arc_sweep(0, -math.pi / 2, math.pi) == pytest.approx(-math.pi)

    def test_major_arc(self) -> None:
        # start at 0, end at 90 degrees, passing through 225 degrees
        sweep = arc_sweep(0, math.radians(225), math.pi / 2)
        assert sweep == pytest.approx(-1.5 * math.pi)


class TestTessellateArc:
    def test_collinear_gives_chord(self) -> None:
        start, mid, end = Point(0, 0), Point(1, 0), Point(2, 0)
        assert tessellate_arc(start, mid, end) == [start, end]

    def test_endpoints_are_input_objects(self) -> None:
        start, end = Point(1, 0), Point(-1, 0)
        points = tessellate_arc(start, Point(0, 1), end, segments=8)
        assert len(points) == 9
        assert points[0] is start
        assert points[-1] is end

    def test_points_on_circle_through_mid(self) -> None:
        points = tessellate_arc(Point(1, 0), Point(0, 1), Point(-1, 0), segments=4)
        for p in points:
            assert math.hypot(p.x, p.y) == pytest.approx(1.0)
        assert (points[2].x, points[2].y) == pytest.approx((0.0, 1.0), abs=1e-9)

    def test_clockwise_arc_passes_below(self) -> None:
        points = tessellate_arc(Point(1, 0), Point(0, -1), Point(-1, 0), segments=4)
        assert points[2].y == pytest.approx(-1.0)

    def test_single_segment(self) -> None:
        start, end = Point(1, 0), Point(-1, 0)
        assert tessellate_arc(start, Point(0, 1), end, segments=1) == [start, end]


class TestTessellateCircle:
    def test_closed_ring(self) -> None:
        ring = tessellate_circle(Point(2, 3), 1.5, segments=16)
        assert len(ring) == 17
        assert ring[0] == ring[-1]
        for p in ring:
            assert math.hypot(p.x - 2, p.y - 3) == pytest.approx(1.5)


class TestOutline:
    def test_shuffled_reversed_rectangle(self) -> None:
        a, b, c, d = Point(0, 0), Point(10, 0), Point(10, 5), Point(0, 5)
        segments = [Segment(c, b), Segment(a, b), Segment(d, a), Segment(c, d)]
        points = reconstruct_outline(segments, Affine.identity())
        assert 4 <= len(points) <= 5
        size = outline_size(points)
        assert (size.width, size.height) == (10, 5)

    def test_closed_loop_omits_repeat(self) -> None:
        points = reconstruct_outline(_square(), Affine.identity())
        assert len(points) == 4
        assert not is_closed(points)

    def test_open_chain_keeps_end(self) -> None:
        segments = [Segment(Point(0, 0), Point(1, 0)), Segment(Point(1, 0), Point(2, 1))]
        points = reconstruct_outline(segments, Affine.identity())
        assert points == [Point(0, 0), Point(1, 0), Point(2, 1)]

    def test_tolerance_joins_near_points(self) -> None:
        segments = [
            Segment(Point(0, 0), Point(1, 0)),
            Segment(Point(1.0005, 0), Point(1, 1)),
        ]
        assert len(chain_segments(segments)) == 1

    def test_disjoint_loops(self) -> None:
        far = [
            Segment(Point(s.start.x + 100, s.start.y), Point(s.end.x + 100, s.end.y))
            for s in _square()
        ]
        chains = chain_segments(_square() + far)
        assert [len(chain) for chain in chains] == [4, 4]
        polylines = reconstruct_polylines(_square() + far, Affine.identity())
        assert len(polylines) == 2

    def test_transform_applied(self) -> None:
        points = reconstruct_outline(_square(), kicad_to_output())
        assert Point(10, -10) in points

    def test_empty(self) -> None:
        assert reconstruct_outline([], Affine.identity()) == []
        size = outline_size([])
        assert (size.width, size.height) == (0, 0)
