"""Extract the typed schematic tree from a parsed .kicad_sch S-expression."""

from __future__ import annotations

from ..sexp import Document, SExp
from .extract import extract_position
from .schematic import KicadSchematic, LibPin, LibSymbol, SchSymbol


def _float(val: str | None, default: float = 0.0) -> float:
    if val is None:
        return default
    try:
        return float(val)
    except (ValueError, TypeError):
        return default


def _sub_symbol_unit(name: str) -> int:
    """Unit number encoded in a sub-symbol name: "LM358_2_1" -> 2."""
    parts = name.rsplit("_", 2)
    if len(parts) == 3 and parts[1].isdigit():
        return int(parts[1])
    return 0


def _extract_lib_pins(sym_node: SExp) -> list[LibPin]:
    """Pins of a library symbol, including those of its unit sub-symbols."""
    pins: list[LibPin] = []
    nodes = [(pin, 0) for pin in sym_node.find_all("pin")]
    for sub in sym_node.find_all("symbol"):
        unit = _sub_symbol_unit(sub.first_value or "")
        nodes.extend((pin, unit) for pin in sub.find_all("pin"))
    for pin_node, unit in nodes:
        vals = pin_node.atom_values
        pins.append(
            LibPin(
                number=pin_node.child_value("number") or "",
                name=pin_node.child_value("name") or "",
                electrical_type=vals[0] if vals else "",
                position=extract_position(pin_node.get("at")),
                length=_float(pin_node.child_value("length")),
                unit=unit,
            )
        )
    return pins


def extract_lib_symbols(root: SExp) -> list[LibSymbol]:
    """Extract symbol definitions from the lib_symbols block."""
    lib_node = root.get("lib_symbols")
    if lib_node is None:
        return []
    return [
        LibSymbol(
            lib_id=sym.first_value or "",
            pins=_extract_lib_pins(sym),
            power=sym.get("power") is not None,
        )
        for sym in lib_node.find_all("symbol")
    ]


def extract_symbols(root: SExp) -> list[SchSymbol]:
    """Extract all placed symbol instances from a schematic."""
    symbols: list[SchSymbol] = []
    for sym_node in root.find_all("symbol"):
        lib_id = sym_node.child_value("lib_id")
        if lib_id is None:
            continue

        unit = sym_node.child_value("unit")

        reference = ""
        value = ""
        for prop in sym_node.find_all("property"):
            prop_vals = prop.atom_values
            prop_name = prop_vals[0] if prop_vals else ""
            prop_val = prop_vals[1] if len(prop_vals) > 1 else ""
            if prop_name == "Reference":
                reference = prop_val
            elif prop_name == "Value":
                value = prop_val

        symbols.append(
            SchSymbol(
                lib_id=lib_id,
                reference=reference,
                value=value,
                position=extract_position(sym_node.get("at")),
                unit=int(unit) if unit and unit.isdigit() else 1,
                uuid=sym_node.child_value("uuid") or "",
            )
        )
    return symbols


def extract_schematic(doc: Document | SExp) -> KicadSchematic:
    """Extract the complete typed tree of a schematic document."""
    root = doc.root if isinstance(doc, Document) else doc
    return KicadSchematic(
        version=root.child_value("version") or "",
        generator=root.child_value("generator") or "",
        uuid=root.child_value("uuid") or "",
        paper=root.child_value("paper") or "",
        symbols=extract_symbols(root),
        lib_symbols=extract_lib_symbols(root),
    )
