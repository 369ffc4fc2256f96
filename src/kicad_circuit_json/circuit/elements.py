"""Circuit JSON output records.

One dataclass per element kind and, for pads and holes, one per shape. The
store assigns ``id`` on insert unless the record carries a preset id.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from ..constants import SILKSCREEN_FONT
from ..schema.common import Point, Size


def _points(points: list[Point]) -> list[dict[str, Any]]:
    return [p.to_dict() for p in points]


class CircuitElement:
    """Base for every record held by ``CircuitDb``."""

    element_type: ClassVar[str] = ""
    id: str

    def _header(self) -> dict[str, Any]:
        return {"type": self.element_type, f"{self.element_type}_id": self.id}

    def to_dict(self) -> dict[str, Any]:
        raise NotImplementedError


# ── Source (logical) elements ──────────────────────────────────────


@dataclass
class SourceComponent(CircuitElement):
    """Logical component: what the part is, independent of placement."""

    element_type: ClassVar[str] = "source_component"

    ftype: str
    name: str
    resistance: str | None = None
    capacitance: str | None = None
    inductance: str | None = None
    transistor_type: str | None = None
    manufacturer_part_number: str | None = None
    id: str = ""

    def to_dict(self) -> dict[str, Any]:
        d = self._header()
        d.update({"ftype": self.ftype, "name": self.name})
        for key in (
            "resistance",
            "capacitance",
            "inductance",
            "transistor_type",
            "manufacturer_part_number",
        ):
            value = getattr(self, key)
            if value is not None:
                d[key] = value
        return d


@dataclass
class SourcePort(CircuitElement):
    """Logical endpoint of a component (one per connected pad)."""

    element_type: ClassVar[str] = "source_port"

    source_component_id: str
    name: str
    pin_number: int | None = None
    id: str = ""

    def to_dict(self) -> dict[str, Any]:
        d = self._header()
        d.update({"source_component_id": self.source_component_id, "name": self.name})
        if self.pin_number is not None:
            d["pin_number"] = self.pin_number
        return d


@dataclass
class SourceTrace(CircuitElement):
    """Logical connection between all ports sharing a net."""

    element_type: ClassVar[str] = "source_trace"

    connected_source_port_ids: list[str]
    display_name: str
    connected_source_net_ids: list[str] = field(default_factory=list)
    id: str = ""

    def to_dict(self) -> dict[str, Any]:
        d = self._header()
        d.update(
            {
                "connected_source_port_ids": list(self.connected_source_port_ids),
                "connected_source_net_ids": list(self.connected_source_net_ids),
                "display_name": self.display_name,
            }
        )
        return d


# ── PCB elements ───────────────────────────────────────────────────


@dataclass
class PcbBoard(CircuitElement):
    """Board outline. At most one per run; updated in place."""

    element_type: ClassVar[str] = "pcb_board"

    outline: list[Point]
    width: float
    height: float
    center: Point = field(default_factory=lambda: Point(0.0, 0.0))
    thickness: float = 1.6
    id: str = ""

    def to_dict(self) -> dict[str, Any]:
        d = self._header()
        d.update(
            {
                "center": self.center.to_dict(),
                "width": self.width,
                "height": self.height,
                "thickness": self.thickness,
                "outline": _points(self.outline),
            }
        )
        return d


@dataclass
class PcbComponent(CircuitElement):
    """Placement of a component on the board."""

    element_type: ClassVar[str] = "pcb_component"

    source_component_id: str
    center: Point
    layer: str
    rotation: float
    width: float = 0.0
    height: float = 0.0
    id: str = ""

    def to_dict(self) -> dict[str, Any]:
        d = self._header()
        d.update(
            {
                "source_component_id": self.source_component_id,
                "center": self.center.to_dict(),
                "layer": self.layer,
                "rotation": self.rotation,
                "width": self.width,
                "height": self.height,
            }
        )
        return d


@dataclass
class SmtPadRect(CircuitElement):
    element_type: ClassVar[str] = "pcb_smtpad"
    shape: ClassVar[str] = "rect"

    pcb_component_id: str
    x: float
    y: float
    width: float
    height: float
    layer: str
    port_hints: list[str] = field(default_factory=list)
    corner_radius: float | None = None
    id: str = ""

    def to_dict(self) -> dict[str, Any]:
        d = self._header()
        d.update(
            {
                "shape": self.shape,
                "pcb_component_id": self.pcb_component_id,
                "x": self.x,
                "y": self.y,
                "width": self.width,
                "height": self.height,
                "layer": self.layer,
                "port_hints": list(self.port_hints),
            }
        )
        if self.corner_radius is not None:
            d["corner_radius"] = self.corner_radius
        return d


@dataclass
class SmtPadCircle(CircuitElement):
    element_type: ClassVar[str] = "pcb_smtpad"
    shape: ClassVar[str] = "circle"

    pcb_component_id: str
    x: float
    y: float
    radius: float
    layer: str
    port_hints: list[str] = field(default_factory=list)
    id: str = ""

    def to_dict(self) -> dict[str, Any]:
        d = self._header()
        d.update(
            {
                "shape": self.shape,
                "pcb_component_id": self.pcb_component_id,
                "x": self.x,
                "y": self.y,
                "radius": self.radius,
                "layer": self.layer,
                "port_hints": list(self.port_hints),
            }
        )
        return d


@dataclass
class SmtPadPill(CircuitElement):
    element_type: ClassVar[str] = "pcb_smtpad"
    shape: ClassVar[str] = "pill"

    pcb_component_id: str
    x: float
    y: float
    width: float
    height: float
    radius: float
    layer: str
    port_hints: list[str] = field(default_factory=list)
    id: str = ""

    def to_dict(self) -> dict[str, Any]:
        d = self._header()
        d.update(
            {
                "shape": self.shape,
                "pcb_component_id": self.pcb_component_id,
                "x": self.x,
                "y": self.y,
                "width": self.width,
                "height": self.height,
                "radius": self.radius,
                "layer": self.layer,
                "port_hints": list(self.port_hints),
            }
        )
        return d


@dataclass
class SmtPadPolygon(CircuitElement):
    element_type: ClassVar[str] = "pcb_smtpad"
    shape: ClassVar[str] = "polygon"

    pcb_component_id: str
    points: list[Point]
    layer: str
    port_hints: list[str] = field(default_factory=list)
    id: str = ""

    def to_dict(self) -> dict[str, Any]:
        d = self._header()
        d.update(
            {
                "shape": self.shape,
                "pcb_component_id": self.pcb_component_id,
                "points": _points(self.points),
                "layer": self.layer,
                "port_hints": list(self.port_hints),
            }
        )
        return d


@dataclass
class PlatedHoleCircle(CircuitElement):
    element_type: ClassVar[str] = "pcb_plated_hole"
    shape: ClassVar[str] = "circle"

    pcb_component_id: str
    x: float
    y: float
    hole_diameter: float
    outer_diameter: float
    port_hints: list[str] = field(default_factory=list)
    layers: list[str] = field(default_factory=lambda: ["top", "bottom"])
    id: str = ""

    def to_dict(self) -> dict[str, Any]:
        d = self._header()
        d.update(
            {
                "shape": self.shape,
                "pcb_component_id": self.pcb_component_id,
                "x": self.x,
                "y": self.y,
                "hole_diameter": self.hole_diameter,
                "outer_diameter": self.outer_diameter,
                "port_hints": list(self.port_hints),
                "layers": list(self.layers),
            }
        )
        return d


@dataclass
class PlatedHolePill(CircuitElement):
    element_type: ClassVar[str] = "pcb_plated_hole"
    shape: ClassVar[str] = "pill"

    pcb_component_id: str
    x: float
    y: float
    hole_width: float
    hole_height: float
    outer_width: float
    outer_height: float
    port_hints: list[str] = field(default_factory=list)
    layers: list[str] = field(default_factory=lambda: ["top", "bottom"])
    id: str = ""

    def to_dict(self) -> dict[str, Any]:
        d = self._header()
        d.update(
            {
                "shape": self.shape,
                "pcb_component_id": self.pcb_component_id,
                "x": self.x,
                "y": self.y,
                "hole_width": self.hole_width,
                "hole_height": self.hole_height,
                "outer_width": self.outer_width,
                "outer_height": self.outer_height,
                "port_hints": list(self.port_hints),
                "layers": list(self.layers),
            }
        )
        return d


@dataclass
class PlatedHoleRectPad(CircuitElement):
    """Rectangular copper pad around a round or pill-shaped drill."""

    element_type: ClassVar[str] = "pcb_plated_hole"

    pcb_component_id: str
    x: float
    y: float
    hole_width: float
    hole_height: float
    rect_pad_width: float
    rect_pad_height: float
    port_hints: list[str] = field(default_factory=list)
    layers: list[str] = field(default_factory=lambda: ["top", "bottom"])
    id: str = ""

    @property
    def hole_shape(self) -> str:
        return "circle" if self.hole_width == self.hole_height else "pill"

    @property
    def shape(self) -> str:
        if self.hole_shape == "circle":
            return "circular_hole_with_rect_pad"
        return "pill_hole_with_rect_pad"

    def to_dict(self) -> dict[str, Any]:
        d = self._header()
        d.update(
            {
                "shape": self.shape,
                "hole_shape": self.hole_shape,
                "pad_shape": "rect",
                "pcb_component_id": self.pcb_component_id,
                "x": self.x,
                "y": self.y,
                "rect_pad_width": self.rect_pad_width,
                "rect_pad_height": self.rect_pad_height,
                "port_hints": list(self.port_hints),
                "layers": list(self.layers),
            }
        )
        if self.hole_shape == "circle":
            d["hole_diameter"] = self.hole_width
        else:
            d["hole_width"] = self.hole_width
            d["hole_height"] = self.hole_height
        return d


@dataclass
class HoleCircle(CircuitElement):
    """Non-plated round hole."""

    element_type: ClassVar[str] = "pcb_hole"
    hole_shape: ClassVar[str] = "circle"

    x: float
    y: float
    hole_diameter: float
    id: str = ""

    def to_dict(self) -> dict[str, Any]:
        d = self._header()
        d.update(
            {
                "hole_shape": self.hole_shape,
                "x": self.x,
                "y": self.y,
                "hole_diameter": self.hole_diameter,
            }
        )
        return d


@dataclass
class HolePill(CircuitElement):
    """Non-plated slot."""

    element_type: ClassVar[str] = "pcb_hole"
    hole_shape: ClassVar[str] = "pill"

    x: float
    y: float
    hole_width: float
    hole_height: float
    id: str = ""

    def to_dict(self) -> dict[str, Any]:
        d = self._header()
        d.update(
            {
                "hole_shape": self.hole_shape,
                "x": self.x,
                "y": self.y,
                "hole_width": self.hole_width,
                "hole_height": self.hole_height,
            }
        )
        return d


@dataclass
class PcbPort(CircuitElement):
    element_type: ClassVar[str] = "pcb_port"

    pcb_component_id: str
    source_port_id: str
    x: float
    y: float
    layers: list[str] = field(default_factory=list)
    id: str = ""

    def to_dict(self) -> dict[str, Any]:
        d = self._header()
        d.update(
            {
                "pcb_component_id": self.pcb_component_id,
                "source_port_id": self.source_port_id,
                "x": self.x,
                "y": self.y,
                "layers": list(self.layers),
            }
        )
        return d


@dataclass
class PcbSilkscreenPath(CircuitElement):
    element_type: ClassVar[str] = "pcb_silkscreen_path"

    pcb_component_id: str
    layer: str
    route: list[Point]
    stroke_width: float
    id: str = ""

    def to_dict(self) -> dict[str, Any]:
        d = self._header()
        d.update(
            {
                "pcb_component_id": self.pcb_component_id,
                "layer": self.layer,
                "route": _points(self.route),
                "stroke_width": self.stroke_width,
            }
        )
        return d


@dataclass
class PcbSilkscreenText(CircuitElement):
    element_type: ClassVar[str] = "pcb_silkscreen_text"

    pcb_component_id: str
    text: str
    anchor_position: Point
    layer: str
    font_size: float
    font: str = SILKSCREEN_FONT
    ccw_rotation: float = 0.0
    id: str = ""

    def to_dict(self) -> dict[str, Any]:
        d = self._header()
        d.update(
            {
                "pcb_component_id": self.pcb_component_id,
                "text": self.text,
                "anchor_position": self.anchor_position.to_dict(),
                "layer": self.layer,
                "font_size": self.font_size,
                "font": self.font,
                "ccw_rotation": self.ccw_rotation,
            }
        )
        return d


@dataclass
class PcbVia(CircuitElement):
    element_type: ClassVar[str] = "pcb_via"

    x: float
    y: float
    outer_diameter: float
    hole_diameter: float
    layers: list[str]
    net_name: str = ""
    id: str = ""

    def to_dict(self) -> dict[str, Any]:
        d = self._header()
        d.update(
            {
                "x": self.x,
                "y": self.y,
                "outer_diameter": self.outer_diameter,
                "hole_diameter": self.hole_diameter,
                "layers": list(self.layers),
                "from_layer": self.layers[0],
                "to_layer": self.layers[-1],
            }
        )
        if self.net_name:
            d["net_name"] = self.net_name
        return d


@dataclass
class PcbCopperPour(CircuitElement):
    element_type: ClassVar[str] = "pcb_copper_pour"
    shape: ClassVar[str] = "polygon"

    layer: str
    net_name: str
    points: list[Point]
    id: str = ""

    def to_dict(self) -> dict[str, Any]:
        d = self._header()
        d.update(
            {
                "shape": self.shape,
                "layer": self.layer,
                "net_name": self.net_name,
                "points": _points(self.points),
            }
        )
        return d


# ── Schematic elements ─────────────────────────────────────────────


@dataclass
class SchematicComponent(CircuitElement):
    element_type: ClassVar[str] = "schematic_component"

    source_component_id: str
    center: Point
    size: Size
    symbol_name: str | None = None
    id: str = ""

    def to_dict(self) -> dict[str, Any]:
        d = self._header()
        d.update(
            {
                "source_component_id": self.source_component_id,
                "center": self.center.to_dict(),
                "size": self.size.to_dict(),
            }
        )
        if self.symbol_name:
            d["symbol_name"] = self.symbol_name
        return d


@dataclass
class SchematicPort(CircuitElement):
    element_type: ClassVar[str] = "schematic_port"

    schematic_component_id: str
    center: Point
    facing_direction: str
    pin_number: int | str | None = None
    id: str = ""

    def to_dict(self) -> dict[str, Any]:
        d = self._header()
        d.update(
            {
                "schematic_component_id": self.schematic_component_id,
                "center": self.center.to_dict(),
                "facing_direction": self.facing_direction,
            }
        )
        if self.pin_number is not None:
            d["pin_number"] = self.pin_number
        return d


SmtPad = SmtPadRect | SmtPadCircle | SmtPadPill | SmtPadPolygon
PlatedHole = PlatedHoleCircle | PlatedHolePill | PlatedHoleRectPad
Hole = HoleCircle | HolePill
