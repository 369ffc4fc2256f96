"""Coordinate transforms, arc tessellation, outline chaining and placement."""

from .arcs import arc_from_center, circumcircle, tessellate_arc, tessellate_circle
from .outline import (
    Segment,
    chain_segments,
    is_closed,
    order_segments,
    outline_size,
    polyline_from_segments,
    reconstruct_outline,
    reconstruct_polylines,
)
from .placement import (
    Direction,
    facing_direction,
    local_to_board,
    resolve_pad_position,
    resolve_pin_offset,
    resolve_pin_position,
    rotate_point,
    rotation_to_direction,
)
from .transform import Affine, compose_rotation, kicad_to_output, normalize_angle

__all__ = [
    "Affine",
    "Direction",
    "Segment",
    "arc_from_center",
    "chain_segments",
    "circumcircle",
    "compose_rotation",
    "facing_direction",
    "is_closed",
    "kicad_to_output",
    "local_to_board",
    "normalize_angle",
    "order_segments",
    "outline_size",
    "polyline_from_segments",
    "reconstruct_outline",
    "reconstruct_polylines",
    "resolve_pad_position",
    "resolve_pin_offset",
    "resolve_pin_position",
    "rotate_point",
    "rotation_to_direction",
    "tessellate_arc",
    "tessellate_circle",
]
