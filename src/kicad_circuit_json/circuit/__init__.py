"""Circuit JSON output records and the in-memory store."""

from .db import CircuitDb, Collection
from .elements import (
    CircuitElement,
    HoleCircle,
    HolePill,
    PcbBoard,
    PcbComponent,
    PcbCopperPour,
    PcbPort,
    PcbSilkscreenPath,
    PcbSilkscreenText,
    PcbVia,
    PlatedHoleCircle,
    PlatedHolePill,
    PlatedHoleRectPad,
    SchematicComponent,
    SchematicPort,
    SmtPadCircle,
    SmtPadPill,
    SmtPadPolygon,
    SmtPadRect,
    SourceComponent,
    SourcePort,
    SourceTrace,
)

__all__ = [
    "CircuitDb",
    "CircuitElement",
    "Collection",
    "HoleCircle",
    "HolePill",
    "PcbBoard",
    "PcbComponent",
    "PcbCopperPour",
    "PcbPort",
    "PcbSilkscreenPath",
    "PcbSilkscreenText",
    "PcbVia",
    "PlatedHoleCircle",
    "PlatedHolePill",
    "PlatedHoleRectPad",
    "SchematicComponent",
    "SchematicPort",
    "SmtPadCircle",
    "SmtPadPill",
    "SmtPadPolygon",
    "SmtPadRect",
    "SourceComponent",
    "SourcePort",
    "SourceTrace",
]
