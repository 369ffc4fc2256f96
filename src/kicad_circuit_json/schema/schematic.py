"""Typed input tree for KiCad schematic files (.kicad_sch)."""

from __future__ import annotations

from dataclasses import dataclass, field

from .common import Position


@dataclass
class LibPin:
    """A pin of a library symbol. ``position`` is relative to the symbol origin."""

    number: str
    name: str
    electrical_type: str  # "passive", "input", "power_in", ...
    position: Position
    length: float = 0.0
    unit: int = 0  # 0: shared by every unit


@dataclass
class LibSymbol:
    """A symbol definition from the lib_symbols block."""

    lib_id: str  # e.g. "Device:R"
    pins: list[LibPin] = field(default_factory=list)
    power: bool = False


@dataclass
class SchSymbol:
    """A symbol instance placed on the schematic."""

    lib_id: str  # e.g., "Device:R"
    reference: str  # e.g., "R1"
    value: str  # e.g., "10k"
    position: Position
    unit: int = 1
    uuid: str = ""


@dataclass
class KicadSchematic:
    """The typed tree of one .kicad_sch file."""

    version: str = ""
    generator: str = ""
    uuid: str = ""
    paper: str = ""
    symbols: list[SchSymbol] = field(default_factory=list)
    lib_symbols: list[LibSymbol] = field(default_factory=list)

    def find_lib_symbol(self, lib_id: str) -> LibSymbol | None:
        for lib in self.lib_symbols:
            if lib.lib_id == lib_id:
                return lib
        return None
