"""Net connectivity -> source ports and source traces."""

from __future__ import annotations

from ...circuit import SourcePort, SourceTrace
from ...constants import UNCONNECTED_NET
from ...logging_config import create_logger
from ...schema import Footprint, Pad
from ..base import ConverterStage
from .ports import endpoint_id

logger = create_logger(__name__)


def pin_number(pad_number: str) -> int | None:
    return int(pad_number) if pad_number.isdigit() else None


class CollectSourceTracesStage(ConverterStage):
    """Group every connected pad by net and emit one trace per multi-pad net.

    Only footprints already placed by the footprint pass contribute.
    """

    name = "collect_source_traces"

    def execute(self) -> None:
        ctx = self.ctx
        board = ctx.board
        if board is None or ctx.net_names is None:
            return

        endpoints_by_net: dict[int, list[str]] = {}
        for footprint in board.footprints:
            pcb_component_id = ctx.footprint_uuid_to_component_id.get(footprint.uuid)
            if pcb_component_id is None:
                continue
            for pad in footprint.pads:
                if not pad.number or pad.net_number is None or pad.net_number == UNCONNECTED_NET:
                    continue
                port_id = self._ensure_source_port(footprint, pad, pcb_component_id)
                endpoints = endpoints_by_net.setdefault(pad.net_number, [])
                if port_id not in endpoints:
                    endpoints.append(port_id)

        emitted = 0
        for net_number, endpoints in endpoints_by_net.items():
            if len(endpoints) < 2:
                continue
            emitted += 1
            ctx.db.source_trace.insert(
                SourceTrace(
                    connected_source_port_ids=endpoints,
                    display_name=ctx.net_names.get(net_number) or f"Net-{net_number}",
                )
            )
            ctx.stats.traces += 1
        logger.debug(f"Emitted {emitted} source traces")

    def _ensure_source_port(self, footprint: Footprint, pad: Pad, pcb_component_id: str) -> str:
        ctx = self.ctx
        port_id = endpoint_id(pcb_component_id, pad.number)
        source_component_id = (
            ctx.footprint_uuid_to_source_component_id.get(footprint.uuid) or pcb_component_id
        )
        ctx.db.source_port.get_or_create(
            port_id,
            lambda: SourcePort(
                source_component_id=source_component_id,
                name=f"{footprint.reference or 'U'}.{pad.number}",
                pin_number=pin_number(pad.number),
                id=port_id,
            ),
        )
        return port_id
