"""Library id -> schematic-symbols name (``boxresistor_right``, ``diode_up``, ...)."""

from __future__ import annotations

from ...geometry import rotation_to_direction


def _symbol_base(lower: str, reference: str) -> str | None:
    if ":r_" in lower or (":r" in lower and reference.startswith("R")):
        return "boxresistor"
    if ":c_" in lower or (":c" in lower and reference.startswith("C")):
        return "capacitor"
    if ":l_" in lower or (":l" in lower and reference.startswith("L")):
        return "inductor"
    if ":d_" in lower or "diode" in lower or reference.startswith("D"):
        if "led" in lower:
            return "led"
        if "schottky" in lower:
            return "schottky_diode"
        if "zener" in lower:
            return "zener_diode"
        return "diode"
    if ":q_" in lower or reference.startswith("Q"):
        if "pnp" in lower:
            return "pnp_bipolar_transistor"
        if "_n_" in lower or "nmos" in lower:
            return "n_channel_mosfet_transistor"
        if "_p_" in lower or "pmos" in lower:
            return "p_channel_mosfet_transistor"
        return "npn_bipolar_transistor"
    return None


def infer_symbol_name(lib_id: str, reference: str, rotation: float) -> str | None:
    """Symbol name with an orientation suffix, or None.

    Power symbols and parts with no known symbol (chips, connectors) get
    None.

    Examples:
        >>> infer_symbol_name("Device:R_Small", "R1", 90)
        'boxresistor_right'
        >>> infer_symbol_name("power:GND", "#PWR01", 0) is None
        True
    """
    lower = lib_id.lower()
    if lower.startswith("power:"):
        return None
    base = _symbol_base(lower, reference)
    if base is None:
        return None
    return f"{base}_{rotation_to_direction(rotation)}"
