"""Pad emission: SMD pads, plated holes and non-plated holes.

Each pad becomes exactly one shape record; pads with a number also get a
pcb_port at the same position.
"""

from __future__ import annotations

from ...circuit import (
    HoleCircle,
    HolePill,
    PlatedHoleCircle,
    PlatedHolePill,
    PlatedHoleRectPad,
    SmtPadCircle,
    SmtPadPill,
    SmtPadPolygon,
    SmtPadRect,
)
from ...geometry import compose_rotation, local_to_board, resolve_pad_position
from ...geometry.placement import is_quarter_turned
from ...schema import Footprint, Pad
from ...schema.common import Point
from ..base import ConverterContext
from ..layers import pad_layer
from .ports import create_pcb_port

SMD_PAD_TYPES = ("smd", "connect")
RECT_SHAPES = ("rect", "square", "roundrect")


def pad_rotation(pad: Pad, footprint: Footprint) -> float:
    """Total pad rotation: footprint rotation plus the pad's own angle."""
    return compose_rotation(pad.position.angle, footprint.position.angle)


def process_pad(ctx: ConverterContext, pad: Pad, footprint: Footprint, pcb_component_id: str) -> None:
    """Emit the shape record and port for one pad."""
    assert ctx.pcb_transform is not None
    position = resolve_pad_position(
        footprint.position.point,
        footprint.position.angle,
        pad.position.point,
        ctx.pcb_transform,
    )

    if pad.pad_type == "np_thru_hole":
        _emit_hole(ctx, pad, position)
        return

    if pad.pad_type in SMD_PAD_TYPES:
        _emit_smd_pad(ctx, pad, footprint, pcb_component_id, position)
        port_layers = [pad_layer(pad.layers)]
    else:
        _emit_plated_hole(ctx, pad, footprint, pcb_component_id, position)
        port_layers = ["top", "bottom"]
    ctx.stats.pads += 1

    if pad.number:
        create_pcb_port(ctx, pcb_component_id, pad.number, position, port_layers)


def _port_hints(pad: Pad) -> list[str]:
    return [pad.number] if pad.number else []


def _emit_smd_pad(
    ctx: ConverterContext,
    pad: Pad,
    footprint: Footprint,
    pcb_component_id: str,
    position: Point,
) -> None:
    layer = pad_layer(pad.layers)
    hints = _port_hints(pad)
    width, height = pad.size.width, pad.size.height

    if pad.shape == "custom" and pad.primitives:
        ctx.db.pcb_smtpad.insert(
            SmtPadPolygon(
                pcb_component_id=pcb_component_id,
                points=_custom_pad_points(ctx, pad, footprint),
                layer=layer,
                port_hints=hints,
            )
        )
        return

    if pad.shape == "circle":
        ctx.db.pcb_smtpad.insert(
            SmtPadCircle(
                pcb_component_id=pcb_component_id,
                x=position.x,
                y=position.y,
                radius=max(width, height) / 2,
                layer=layer,
                port_hints=hints,
            )
        )
        return

    if pad.shape == "oval":
        ctx.db.pcb_smtpad.insert(
            SmtPadPill(
                pcb_component_id=pcb_component_id,
                x=position.x,
                y=position.y,
                width=width,
                height=height,
                radius=min(width, height) / 2,
                layer=layer,
                port_hints=hints,
            )
        )
        return

    if pad.shape not in RECT_SHAPES:
        ctx.warn(
            f"{footprint.reference or footprint.library} pad {pad.number!r}: "
            f"unsupported SMD shape {pad.shape!r}, emitting a rect pad"
        )

    corner_radius = None
    if pad.shape == "roundrect" and pad.roundrect_rratio:
        corner_radius = min(width, height) * pad.roundrect_rratio / 2
    ctx.db.pcb_smtpad.insert(
        SmtPadRect(
            pcb_component_id=pcb_component_id,
            x=position.x,
            y=position.y,
            width=width,
            height=height,
            layer=layer,
            port_hints=hints,
            corner_radius=corner_radius,
        )
    )


def _custom_pad_points(ctx: ConverterContext, pad: Pad, footprint: Footprint) -> list[Point]:
    """Outline of a custom pad's first primitive polygon, in output space."""
    assert ctx.pcb_transform is not None
    pad_center = local_to_board(
        footprint.position.point, footprint.position.angle, pad.position.point
    )
    rotation = pad_rotation(pad, footprint)
    return [
        resolve_pad_position(pad_center, rotation, point, ctx.pcb_transform)
        for point in pad.primitives[0]
    ]


def _emit_plated_hole(
    ctx: ConverterContext,
    pad: Pad,
    footprint: Footprint,
    pcb_component_id: str,
    position: Point,
) -> None:
    hints = _port_hints(pad)
    width, height = pad.size.width, pad.size.height
    if pad.drill is not None:
        hole_width, hole_height = pad.drill.width, pad.drill.height
    else:
        hole_width = hole_height = ctx.config.default_plated_drill

    if pad.shape == "circle":
        ctx.db.pcb_plated_hole.insert(
            PlatedHoleCircle(
                pcb_component_id=pcb_component_id,
                x=position.x,
                y=position.y,
                hole_diameter=hole_width,
                outer_diameter=max(width, height),
                port_hints=hints,
            )
        )
        return

    if pad.shape == "oval":
        if is_quarter_turned(pad_rotation(pad, footprint)):
            width, height = height, width
            hole_width, hole_height = hole_height, hole_width
        ctx.db.pcb_plated_hole.insert(
            PlatedHolePill(
                pcb_component_id=pcb_component_id,
                x=position.x,
                y=position.y,
                hole_width=hole_width,
                hole_height=hole_height,
                outer_width=width,
                outer_height=height,
                port_hints=hints,
            )
        )
        return

    if pad.shape not in RECT_SHAPES:
        ctx.warn(
            f"{footprint.reference or footprint.library} pad {pad.number!r}: "
            f"unsupported plated shape {pad.shape!r}, emitting a rect pad"
        )
    ctx.db.pcb_plated_hole.insert(
        PlatedHoleRectPad(
            pcb_component_id=pcb_component_id,
            x=position.x,
            y=position.y,
            hole_width=hole_width,
            hole_height=hole_height,
            rect_pad_width=width,
            rect_pad_height=height,
            port_hints=hints,
        )
    )


def _emit_hole(ctx: ConverterContext, pad: Pad, position: Point) -> None:
    drill = pad.drill
    if drill is not None and drill.oval and drill.width != drill.height:
        ctx.db.pcb_hole.insert(
            HolePill(x=position.x, y=position.y, hole_width=drill.width, hole_height=drill.height)
        )
        return
    diameter = drill.diameter if drill is not None else ctx.config.default_npth_drill
    ctx.db.pcb_hole.insert(HoleCircle(x=position.x, y=position.y, hole_diameter=diameter))
