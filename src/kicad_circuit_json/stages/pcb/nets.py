"""Net table: numeric net id -> display name."""

from __future__ import annotations

from ...constants import UNCONNECTED_NET
from ...logging_config import create_logger
from ..base import ConverterStage

logger = create_logger(__name__)


def net_display_name(number: int, name: str | None) -> str:
    """Name used in the output for a net.

    Net 0 is the unconnected placeholder and stays unnamed; any other net
    without a name gets a synthesized ``Net-<id>``.
    """
    if number == UNCONNECTED_NET:
        return ""
    return name if name else f"Net-{number}"


class CollectNetsStage(ConverterStage):
    """Build ``ctx.net_names`` from the board net table and pad net references.

    Named entries from the net table win, then names carried by pads fill
    ids the table leaves unnamed, then any remaining id is synthesized.
    """

    name = "collect_nets"

    def execute(self) -> None:
        board = self.ctx.board
        net_names = self.ctx.net_names
        if board is None or net_names is None:
            return

        net_names.set(UNCONNECTED_NET, "")

        for net in board.nets:
            if net.name:
                net_names.set(net.number, net_display_name(net.number, net.name))

        for footprint in board.footprints:
            for pad in footprint.pads:
                if pad.net_number is not None and pad.net_name:
                    net_names.set(pad.net_number, net_display_name(pad.net_number, pad.net_name))

        for net in board.nets:
            net_names.set(net.number, net_display_name(net.number, None))
        for footprint in board.footprints:
            for pad in footprint.pads:
                if pad.net_number is not None:
                    net_names.set(pad.net_number, net_display_name(pad.net_number, None))

        logger.debug(f"Collected {len(net_names)} nets")
