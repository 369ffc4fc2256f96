"""Connection endpoints shared by the footprint and trace passes."""

from __future__ import annotations

from ...circuit import PcbPort
from ...schema.common import Point
from ..base import ConverterContext


def endpoint_id(pcb_component_id: str, pad_number: str) -> str:
    """Identifier joining a pcb_port to the source_port created for its net."""
    return f"{pcb_component_id}_port_{pad_number}"


def create_pcb_port(
    ctx: ConverterContext,
    pcb_component_id: str,
    pad_number: str,
    position: Point,
    layers: list[str],
) -> PcbPort:
    return ctx.db.pcb_port.insert(
        PcbPort(
            pcb_component_id=pcb_component_id,
            source_port_id=endpoint_id(pcb_component_id, pad_number),
            x=position.x,
            y=position.y,
            layers=layers,
        )
    )
