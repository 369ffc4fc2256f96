"""Copper zones -> copper pours."""

from __future__ import annotations

from ...circuit import PcbCopperPour
from ...logging_config import create_logger
from ...schema import Zone
from ..base import ConverterStage
from ..layers import map_layer

logger = create_logger(__name__)


class CollectZonesStage(ConverterStage):
    """One pour per filled polygon; the zone outline when it has none."""

    name = "collect_zones"

    def execute(self) -> None:
        board = self.ctx.board
        if board is None or self.ctx.pcb_transform is None or self.ctx.net_names is None:
            return
        for zone in board.zones:
            self.process_zone(zone)

    def process_zone(self, zone: Zone) -> None:
        ctx = self.ctx
        transform = ctx.pcb_transform
        assert transform is not None
        if not zone.is_filled:
            logger.debug(f"Zone on net {zone.net_number} is not filled")
            return
        assert ctx.net_names is not None
        net_name = ctx.net_names.get(zone.net_number) or zone.net_name

        if zone.filled_polygons:
            regions = [(poly.layer or zone.layer, poly.points) for poly in zone.filled_polygons]
        elif zone.outline:
            regions = [(layer, zone.outline) for layer in zone.layers or [zone.layer]]
        else:
            ctx.warn(f"Filled zone on net {zone.net_number} has no polygon, skipped")
            return

        for layer, points in regions:
            if len(points) < 3:
                continue
            ctx.db.pcb_copper_pour.insert(
                PcbCopperPour(
                    layer=map_layer(layer),
                    net_name=net_name,
                    points=[transform.apply(p) for p in points],
                )
            )
            ctx.stats.copper_pours += 1
