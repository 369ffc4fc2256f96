"""KiCad layer names → Circuit JSON layer names."""

from __future__ import annotations

import re
from collections.abc import Iterable

_INNER_RE = re.compile(r"^In(\d+)\.Cu$")


def map_layer(layer: str | Iterable[str]) -> str:
    """Map a layer (or layer list) to "top" or "bottom"."""
    layer_str = layer if isinstance(layer, str) else " ".join(layer)
    if "B." in layer_str or "Back" in layer_str or "Bottom" in layer_str:
        return "bottom"
    return "top"


def component_layer(footprint_layer: str) -> str:
    return "bottom" if footprint_layer.startswith("B.") else "top"


def pad_layer(layers: Iterable[str]) -> str:
    """Side an SMD pad sits on, judged from its copper layers."""
    names = list(layers)
    if any(name in ("F.Cu", "*.Cu") for name in names):
        return "top"
    if "B.Cu" in names:
        return "bottom"
    return "top"


def copper_layer(name: str) -> str | None:
    """Circuit JSON name of a copper layer, or None for non-copper layers."""
    if name == "F.Cu":
        return "top"
    if name == "B.Cu":
        return "bottom"
    match = _INNER_RE.match(name)
    if match:
        return f"inner{match.group(1)}"
    return None


def is_copper(layer: str) -> bool:
    return ".Cu" in layer


def is_edge_cuts(layer: str) -> bool:
    return "Edge.Cuts" in layer


def is_silkscreen(layer: str) -> bool:
    return "SilkS" in layer or "Silkscreen" in layer


def is_fab(layer: str) -> bool:
    return "Fab" in layer
