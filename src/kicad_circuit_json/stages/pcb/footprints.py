"""Footprints -> source components, pcb components, pads, ports and silkscreen."""

from __future__ import annotations

from ...circuit import PcbComponent, PcbSilkscreenPath, PcbSilkscreenText, SourceComponent
from ...geometry import (
    normalize_angle,
    resolve_pad_position,
    tessellate_arc,
    tessellate_circle,
)
from ...geometry.placement import is_quarter_turned
from ...logging_config import create_logger
from ...schema import BoundingBox, Footprint, Point
from ..base import ConverterStage
from ..classify import (
    VALUE_ATTRIBUTES,
    infer_component_type,
    infer_transistor_type,
    sanitize_value,
)
from ..layers import component_layer, is_silkscreen, map_layer
from .pads import pad_rotation, process_pad

logger = create_logger(__name__)


def build_source_component(footprint: Footprint) -> SourceComponent:
    """Logical component for a footprint, typed from its reference prefix."""
    ftype = infer_component_type(footprint.reference)
    component = SourceComponent(ftype=ftype, name=footprint.reference or "U")

    value = sanitize_value(footprint.value) if footprint.value else ""
    attribute = VALUE_ATTRIBUTES.get(ftype)
    if attribute and value:
        setattr(component, attribute, value)
    elif value:
        component.manufacturer_part_number = value
    if ftype == "simple_transistor":
        component.transistor_type = infer_transistor_type(footprint.value, footprint.library)
    return component


class CollectFootprintsStage(ConverterStage):
    """One source_component and pcb_component per footprint, plus its pads.

    Footprints are keyed by UUID; a UUID seen twice is processed once.
    """

    name = "collect_footprints"

    def execute(self) -> None:
        board = self.ctx.board
        if board is None or self.ctx.pcb_transform is None:
            return
        for footprint in board.footprints:
            self.process_footprint(footprint)

    def process_footprint(self, footprint: Footprint) -> None:
        ctx = self.ctx
        transform = ctx.pcb_transform
        assert transform is not None
        if not footprint.uuid:
            logger.debug(f"Skipping footprint {footprint.reference!r} without uuid")
            return
        if footprint.uuid in ctx.footprint_uuid_to_component_id:
            logger.debug(f"Footprint {footprint.uuid} already processed")
            return

        source = ctx.db.source_component.get_or_create(
            footprint.uuid, lambda: build_source_component(footprint)
        )
        width, height = self._pad_extents(footprint)
        component = ctx.db.pcb_component.get_or_create(
            footprint.uuid,
            lambda: PcbComponent(
                source_component_id=source.id,
                center=transform.apply(footprint.position.point),
                layer=component_layer(footprint.layer),
                rotation=normalize_angle(-footprint.position.angle),
                width=width,
                height=height,
            ),
        )
        ctx.footprint_uuid_to_component_id.set(footprint.uuid, component.id)
        ctx.footprint_uuid_to_source_component_id.set(footprint.uuid, source.id)
        ctx.stats.components += 1

        for pad in footprint.pads:
            process_pad(ctx, pad, footprint, component.id)
        self._process_silkscreen(footprint, component.id)

    def _pad_extents(self, footprint: Footprint) -> tuple[float, float]:
        """Width/height of the box around every pad, in output space."""
        assert self.ctx.pcb_transform is not None
        corners: list[Point] = []
        for pad in footprint.pads:
            center = resolve_pad_position(
                footprint.position.point,
                footprint.position.angle,
                pad.position.point,
                self.ctx.pcb_transform,
            )
            half_w, half_h = pad.size.width / 2, pad.size.height / 2
            if is_quarter_turned(pad_rotation(pad, footprint)):
                half_w, half_h = half_h, half_w
            corners.append(Point(center.x - half_w, center.y - half_h))
            corners.append(Point(center.x + half_w, center.y + half_h))
        bbox = BoundingBox.from_points(corners)
        if bbox is None:
            return 0.0, 0.0
        return bbox.width, bbox.height

    def _process_silkscreen(self, footprint: Footprint, pcb_component_id: str) -> None:
        ctx = self.ctx
        transform = ctx.pcb_transform
        assert transform is not None
        origin = footprint.position.point
        rotation = footprint.position.angle

        def place(local: Point) -> Point:
            return resolve_pad_position(origin, rotation, local, transform)

        routes: list[tuple[str, list[Point], float]] = []
        for line in footprint.lines:
            if is_silkscreen(line.layer):
                routes.append((line.layer, [place(line.start), place(line.end)], line.width))
        for arc in footprint.arcs:
            if is_silkscreen(arc.layer):
                points = tessellate_arc(arc.start, arc.mid, arc.end, ctx.config.arc_segments)
                routes.append((arc.layer, [place(p) for p in points], arc.width))
        for circle in footprint.circles:
            if is_silkscreen(circle.layer):
                points = tessellate_circle(circle.center, circle.radius, ctx.config.circle_segments)
                routes.append((circle.layer, [place(p) for p in points], circle.width))

        for layer, route, width in routes:
            ctx.db.pcb_silkscreen_path.insert(
                PcbSilkscreenPath(
                    pcb_component_id=pcb_component_id,
                    layer=map_layer(layer),
                    route=route,
                    stroke_width=width or ctx.config.default_stroke_width,
                )
            )

        for text in footprint.texts:
            if text.hidden or not text.text or not is_silkscreen(text.layer):
                continue
            content = text.text.replace("${REFERENCE}", footprint.reference).replace(
                "${VALUE}", footprint.value
            )
            ctx.db.pcb_silkscreen_text.insert(
                PcbSilkscreenText(
                    pcb_component_id=pcb_component_id,
                    text=content,
                    anchor_position=place(text.position.point),
                    layer=map_layer(text.layer),
                    font_size=text.font_size * ctx.config.silkscreen_font_scale,
                    ccw_rotation=normalize_angle(text.position.angle),
                )
            )
