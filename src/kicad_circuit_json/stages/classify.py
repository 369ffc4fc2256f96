"""String heuristics: component type from reference designators and library ids."""

from __future__ import annotations

import re

_PREFIX_RE = re.compile(r"^([A-Z]+)")

_PREFIX_FTYPES: dict[str, str] = {
    "R": "simple_resistor",
    "C": "simple_capacitor",
    "L": "simple_inductor",
    "D": "simple_diode",
    "LED": "simple_diode",
    "Q": "simple_transistor",
    "U": "simple_chip",
    "IC": "simple_chip",
    "J": "simple_chip",  # connectors are treated as chips
    "P": "simple_chip",
}

# ftype -> source_component attribute holding the component value
VALUE_ATTRIBUTES: dict[str, str] = {
    "simple_resistor": "resistance",
    "simple_capacitor": "capacitance",
    "simple_inductor": "inductance",
}


def infer_component_type(reference: str | None) -> str:
    """ftype from the reference designator prefix ("R12" -> simple_resistor)."""
    if not reference:
        return "simple_chip"
    match = _PREFIX_RE.match(reference)
    if match is None:
        return "simple_chip"
    return _PREFIX_FTYPES.get(match.group(1), "simple_chip")


def infer_transistor_type(value: str | None, library: str | None) -> str:
    """Best-effort "npn"/"pnp" from the value, then the library id. Defaults to npn."""
    for text in (value, library):
        lower = (text or "").lower()
        if "pnp" in lower:
            return "pnp"
        if "npn" in lower:
            return "npn"
    return "npn"


def infer_ftype_from_lib_id(lib_id: str, reference: str) -> str:
    """ftype for a schematic symbol from its library id or reference."""
    lower = lib_id.lower()
    if ":r_" in lower or reference.startswith("R"):
        return "simple_resistor"
    if ":c_" in lower or reference.startswith("C"):
        return "simple_capacitor"
    if ":l_" in lower or reference.startswith("L"):
        return "simple_inductor"
    if ":d_" in lower or reference.startswith("D"):
        return "simple_diode"
    if ":led" in lower or reference.startswith("LED"):
        return "simple_led"
    if ":q_" in lower or reference.startswith("Q"):
        return "simple_transistor"
    return "simple_chip"


def sanitize_value(value: str) -> str:
    """Decimal commas to dots: "5,1K" -> "5.1K"."""
    return value.replace(",", ".")
