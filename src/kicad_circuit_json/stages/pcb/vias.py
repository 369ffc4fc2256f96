"""Vias."""

from __future__ import annotations

from ...circuit import PcbVia
from ...schema import Via
from ..base import ConverterStage
from ..layers import copper_layer


class CollectViasStage(ConverterStage):
    name = "collect_vias"

    def execute(self) -> None:
        ctx = self.ctx
        board = ctx.board
        if board is None or ctx.pcb_transform is None or ctx.net_names is None:
            return
        for via in board.vias:
            self.process_via(via)

    def via_layers(self, via: Via) -> list[str] | None:
        """[from, to] copper layers, or None when no listed layer is copper.

        A via without a layer list spans top to bottom.
        """
        if not via.layers:
            return ["top", "bottom"]
        mapped = [name for name in (copper_layer(layer) for layer in via.layers) if name]
        if not mapped:
            return None
        to_layer = mapped[-1] if len(mapped) > 1 else "bottom"
        return [mapped[0], to_layer]

    def process_via(self, via: Via) -> None:
        ctx = self.ctx
        assert ctx.pcb_transform is not None and ctx.net_names is not None
        layers = self.via_layers(via)
        if layers is None:
            ctx.warn(f"Via at ({via.position.x}, {via.position.y}) has no copper layers, skipped")
            return

        position = ctx.pcb_transform.apply(via.position)
        ctx.db.pcb_via.insert(
            PcbVia(
                x=position.x,
                y=position.y,
                outer_diameter=via.size or ctx.config.default_via_diameter,
                hole_diameter=via.drill or ctx.config.default_via_drill,
                layers=layers,
                net_name=ctx.net_names.get(via.net_number) or "",
            )
        )
        ctx.stats.vias += 1
