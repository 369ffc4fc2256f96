"""Typed input tree for KiCad boards and schematics."""

from .board import (
    Drill,
    FilledPolygon,
    Footprint,
    GraphicArc,
    GraphicCircle,
    GraphicLine,
    GraphicRect,
    GraphicText,
    KicadBoard,
    Net,
    Pad,
    Via,
    Zone,
)
from .common import BoundingBox, Point, Position, Size
from .extract import extract_board
from .extract_schematic import extract_schematic
from .schematic import KicadSchematic, LibPin, LibSymbol, SchSymbol

__all__ = [
    "BoundingBox",
    "Drill",
    "FilledPolygon",
    "Footprint",
    "GraphicArc",
    "GraphicCircle",
    "GraphicLine",
    "GraphicRect",
    "GraphicText",
    "KicadBoard",
    "KicadSchematic",
    "LibPin",
    "LibSymbol",
    "Net",
    "Pad",
    "Point",
    "Position",
    "SchSymbol",
    "Size",
    "Via",
    "Zone",
    "extract_board",
    "extract_schematic",
]
