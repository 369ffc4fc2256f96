"""Typed input tree for KiCad PCB board files (.kicad_pcb)."""

from __future__ import annotations

from dataclasses import dataclass, field

from .common import Point, Position, Size


@dataclass
class Net:
    """A net declared in the board net table."""

    number: int
    name: str


@dataclass(frozen=True)
class Drill:
    """Pad drill: (drill 0.8) or (drill oval 1.0 1.5)."""

    width: float
    height: float
    oval: bool = False

    @property
    def diameter(self) -> float:
        return self.width


@dataclass
class Pad:
    """A pad on a footprint. ``position`` is relative to the footprint origin."""

    number: str
    pad_type: str  # "smd", "thru_hole", "np_thru_hole", "connect"
    shape: str  # "roundrect", "circle", "rect", "oval", "custom", ...
    position: Position
    size: Size
    layers: list[str] = field(default_factory=list)
    drill: Drill | None = None
    roundrect_rratio: float | None = None
    primitives: list[list[Point]] = field(default_factory=list)  # custom gr_poly outlines
    net_number: int | None = None
    net_name: str | None = None


@dataclass
class GraphicLine:
    """gr_line / fp_line."""

    start: Point
    end: Point
    layer: str
    width: float = 0.0


@dataclass
class GraphicArc:
    """gr_arc / fp_arc in three-point form."""

    start: Point
    mid: Point
    end: Point
    layer: str
    width: float = 0.0


@dataclass
class GraphicCircle:
    """gr_circle / fp_circle: ``end`` lies on the circumference."""

    center: Point
    end: Point
    layer: str
    width: float = 0.0
    filled: bool = False

    @property
    def radius(self) -> float:
        return ((self.end.x - self.center.x) ** 2 + (self.end.y - self.center.y) ** 2) ** 0.5


@dataclass
class GraphicRect:
    """gr_rect given by two opposite corners."""

    start: Point
    end: Point
    layer: str
    width: float = 0.0
    filled: bool = False


@dataclass
class GraphicText:
    """gr_text, fp_text or a footprint property drawn on a layer."""

    text: str
    position: Position
    layer: str
    font_size: float = 1.0  # font height (mm)
    hidden: bool = False
    kind: str = "user"  # "reference", "value", "user"


@dataclass
class Footprint:
    """A component footprint placed on the board."""

    library: str  # e.g. "Resistor_SMD:R_0805_2012Metric"
    reference: str  # e.g. "R1"
    value: str  # e.g. "10k"
    position: Position
    layer: str  # e.g. "F.Cu"
    uuid: str = ""
    pads: list[Pad] = field(default_factory=list)
    lines: list[GraphicLine] = field(default_factory=list)
    arcs: list[GraphicArc] = field(default_factory=list)
    circles: list[GraphicCircle] = field(default_factory=list)
    texts: list[GraphicText] = field(default_factory=list)


@dataclass
class Via:
    """A via between copper layers."""

    position: Point
    size: float | None = None
    drill: float | None = None
    layers: list[str] = field(default_factory=list)
    net_number: int = 0


@dataclass
class FilledPolygon:
    """One filled region of a zone."""

    layer: str
    points: list[Point] = field(default_factory=list)


@dataclass
class Zone:
    """A copper zone (pour)."""

    net_number: int = 0
    net_name: str = ""
    layers: list[str] = field(default_factory=list)
    fill_enabled: bool = False
    outline: list[Point] = field(default_factory=list)
    filled_polygons: list[FilledPolygon] = field(default_factory=list)

    @property
    def layer(self) -> str:
        return self.layers[0] if self.layers else ""

    @property
    def is_filled(self) -> bool:
        return self.fill_enabled or bool(self.filled_polygons)


@dataclass
class KicadBoard:
    """The typed tree of one .kicad_pcb file."""

    version: str = ""
    generator: str = ""
    thickness: float = 1.6
    nets: list[Net] = field(default_factory=list)
    footprints: list[Footprint] = field(default_factory=list)
    lines: list[GraphicLine] = field(default_factory=list)
    arcs: list[GraphicArc] = field(default_factory=list)
    circles: list[GraphicCircle] = field(default_factory=list)
    rects: list[GraphicRect] = field(default_factory=list)
    texts: list[GraphicText] = field(default_factory=list)
    vias: list[Via] = field(default_factory=list)
    zones: list[Zone] = field(default_factory=list)
