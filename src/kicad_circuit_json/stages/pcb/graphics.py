"""Board-level drawings: the Edge.Cuts outline, silkscreen and free copper."""

from __future__ import annotations

from ...circuit import PcbBoard, PcbSilkscreenPath, PcbSilkscreenText, SmtPadRect
from ...geometry import (
    Segment,
    normalize_angle,
    reconstruct_outline,
    tessellate_arc,
    tessellate_circle,
)
from ...logging_config import create_logger
from ...schema import BoundingBox, GraphicRect, KicadBoard, Point
from ..base import ConverterStage
from ..layers import is_copper, is_edge_cuts, is_fab, is_silkscreen, map_layer

logger = create_logger(__name__)


def _rect_corners(rect: GraphicRect) -> list[Point]:
    return [
        rect.start,
        Point(rect.end.x, rect.start.y),
        rect.end,
        Point(rect.start.x, rect.end.y),
    ]


def edge_cut_segments(board: KicadBoard, arc_segments: int) -> list[Segment]:
    """Every Edge.Cuts line, arc and rectangle as source-space segments."""
    segments: list[Segment] = []
    for line in board.lines:
        if is_edge_cuts(line.layer):
            segments.append(Segment(line.start, line.end))
    for arc in board.arcs:
        if is_edge_cuts(arc.layer):
            points = tessellate_arc(arc.start, arc.mid, arc.end, arc_segments)
            segments.extend(Segment(a, b) for a, b in zip(points, points[1:]))
    for rect in board.rects:
        if is_edge_cuts(rect.layer):
            corners = _rect_corners(rect)
            segments.extend(
                Segment(corners[i], corners[(i + 1) % 4]) for i in range(4)
            )
    return segments


def edge_cuts_bounds(board: KicadBoard, arc_segments: int) -> BoundingBox | None:
    """Source-space box around the board edge, or None when nothing is drawn."""
    points: list[Point] = []
    for seg in edge_cut_segments(board, arc_segments):
        points.extend((seg.start, seg.end))
    for circle in board.circles:
        if is_edge_cuts(circle.layer):
            r = circle.radius
            points.append(Point(circle.center.x - r, circle.center.y - r))
            points.append(Point(circle.center.x + r, circle.center.y + r))
    return BoundingBox.from_points(points)


class CollectGraphicsStage(ConverterStage):
    """Board outline, board-level silkscreen, texts and filled copper rects."""

    name = "collect_graphics"

    def execute(self) -> None:
        board = self.ctx.board
        if board is None or self.ctx.pcb_transform is None:
            return
        self.process_board_outline(board)
        self.process_silkscreen(board)
        self.process_copper_rects(board)
        self.process_texts(board)

    def process_board_outline(self, board: KicadBoard) -> None:
        ctx = self.ctx
        transform = ctx.pcb_transform
        assert transform is not None
        config = ctx.config

        segments = edge_cut_segments(board, config.arc_segments)
        if segments:
            outline = reconstruct_outline(segments, transform, config.point_tolerance)
        else:
            circles = [c for c in board.circles if is_edge_cuts(c.layer)]
            if not circles:
                logger.debug("No Edge.Cuts geometry, no board outline")
                return
            ring = tessellate_circle(circles[0].center, circles[0].radius, config.circle_segments)
            outline = [transform.apply(p) for p in ring[:-1]]

        bbox = BoundingBox.from_points(outline)
        assert bbox is not None
        existing = ctx.db.pcb_board.list()
        if existing:
            board_record = existing[0]
            board_record.outline = outline
            board_record.width = bbox.width
            board_record.height = bbox.height
            board_record.center = bbox.center
            return
        ctx.db.pcb_board.insert(
            PcbBoard(
                outline=outline,
                width=bbox.width,
                height=bbox.height,
                center=bbox.center,
                thickness=board.thickness,
            )
        )
        logger.debug(f"Board outline: {len(outline)} points, {bbox.width:.2f}x{bbox.height:.2f} mm")

    def process_silkscreen(self, board: KicadBoard) -> None:
        ctx = self.ctx
        transform = ctx.pcb_transform
        assert transform is not None

        routes: list[tuple[str, list[Point], float]] = []
        for line in board.lines:
            if is_silkscreen(line.layer):
                routes.append((line.layer, [line.start, line.end], line.width))
        for arc in board.arcs:
            if is_silkscreen(arc.layer):
                points = tessellate_arc(arc.start, arc.mid, arc.end, ctx.config.arc_segments)
                routes.append((arc.layer, points, arc.width))
        for circle in board.circles:
            if is_silkscreen(circle.layer):
                points = tessellate_circle(circle.center, circle.radius, ctx.config.circle_segments)
                routes.append((circle.layer, points, circle.width))
        for rect in board.rects:
            if is_silkscreen(rect.layer):
                corners = _rect_corners(rect)
                routes.append((rect.layer, corners + corners[:1], rect.width))

        for layer, points, width in routes:
            ctx.db.pcb_silkscreen_path.insert(
                PcbSilkscreenPath(
                    pcb_component_id="",
                    layer=map_layer(layer),
                    route=[transform.apply(p) for p in points],
                    stroke_width=width or ctx.config.default_stroke_width,
                )
            )

    def process_copper_rects(self, board: KicadBoard) -> None:
        """Filled copper rectangles become free-standing rect pads."""
        ctx = self.ctx
        transform = ctx.pcb_transform
        assert transform is not None
        for rect in board.rects:
            if not (rect.filled and is_copper(rect.layer)):
                continue
            bbox = BoundingBox.from_points(
                [transform.apply(rect.start), transform.apply(rect.end)]
            )
            assert bbox is not None
            ctx.db.pcb_smtpad.insert(
                SmtPadRect(
                    pcb_component_id="",
                    x=bbox.center.x,
                    y=bbox.center.y,
                    width=bbox.width,
                    height=bbox.height,
                    layer=map_layer(rect.layer),
                )
            )
            ctx.stats.pads += 1

    def process_texts(self, board: KicadBoard) -> None:
        ctx = self.ctx
        transform = ctx.pcb_transform
        assert transform is not None
        for text in board.texts:
            if text.hidden or not text.text:
                continue
            if not (is_silkscreen(text.layer) or is_copper(text.layer) or is_fab(text.layer)):
                continue
            ctx.db.pcb_silkscreen_text.insert(
                PcbSilkscreenText(
                    pcb_component_id="",
                    text=text.text,
                    anchor_position=transform.apply(text.position.point),
                    layer=map_layer(text.layer),
                    font_size=text.font_size * ctx.config.silkscreen_font_scale,
                    ccw_rotation=normalize_angle(text.position.angle),
                )
            )
