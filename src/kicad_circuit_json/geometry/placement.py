"""Placement of pads and pins inside rotated components.

Pad/pin offsets are local to their owning component. They are rotated by
the component rotation in source space first, then mapped to output space.
"""

from __future__ import annotations

import math
from typing import Literal

from ..schema.common import Point
from .transform import Affine, compose_rotation, normalize_angle

Direction = Literal["up", "right", "down", "left"]


def rotate_point(point: Point, degrees: float) -> Point:
    """Rotate a point about the origin (standard 2D rotation matrix)."""
    rad = degrees * math.pi / 180
    cos_r = math.cos(rad)
    sin_r = math.sin(rad)
    return Point(
        x=point.x * cos_r - point.y * sin_r,
        y=point.x * sin_r + point.y * cos_r,
    )


def rotation_to_direction(rotation: float) -> Direction:
    """Map an angle to its quadrant.

    [315, 45) -> up, [45, 135) -> right, [135, 225) -> down, [225, 315) -> left
    """
    normalized = normalize_angle(rotation)
    if normalized >= 315 or normalized < 45:
        return "up"
    if normalized < 135:
        return "right"
    if normalized < 225:
        return "down"
    return "left"


def is_quarter_turned(rotation: float) -> bool:
    """True when the rotation faces left or right (width and height swap)."""
    return rotation_to_direction(rotation) in ("right", "left")


def facing_direction(local_rotation: float, component_rotation: float) -> Direction:
    """Direction a pin faces once its component rotation is applied."""
    return rotation_to_direction(compose_rotation(local_rotation, component_rotation))


def resolve_pin_offset(offset: Point, component_rotation: float, scale: float) -> Point:
    """Output-space offset of a pin from its component center.

    The local offset is rotated by the component rotation, scaled, and its Y
    negated for the vertical axis flip.
    """
    rotated = rotate_point(offset, component_rotation)
    return Point(x=rotated.x * scale, y=-rotated.y * scale)


def resolve_pin_position(
    center: Point,
    component_rotation: float,
    offset: Point,
    scale: float,
) -> Point:
    """Absolute output-space position of a pin."""
    relative = resolve_pin_offset(offset, component_rotation, scale)
    return Point(x=center.x + relative.x, y=center.y + relative.y)


def local_to_board(component_position: Point, component_rotation: float, local: Point) -> Point:
    """Source-space position of a point given in a footprint's local frame.

    KiCad footprint rotation is counter-clockwise on screen; with Y pointing
    down that is a rotation by the negated angle in source coordinates.
    """
    rotated = rotate_point(local, -component_rotation)
    return Point(component_position.x + rotated.x, component_position.y + rotated.y)


def resolve_pad_position(
    component_position: Point,
    component_rotation: float,
    local: Point,
    transform: Affine,
) -> Point:
    """Output-space position of a point given in a footprint's local frame."""
    return transform.apply(local_to_board(component_position, component_rotation, local))
