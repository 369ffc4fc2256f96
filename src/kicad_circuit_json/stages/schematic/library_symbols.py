"""Placed schematic symbols -> source components, schematic components and ports."""

from __future__ import annotations

from ...circuit import SchematicComponent, SchematicPort, SourceComponent
from ...geometry import facing_direction, resolve_pin_offset, resolve_pin_position
from ...logging_config import create_logger
from ...schema import LibPin, SchSymbol, Size
from ..base import ConverterStage
from ..classify import infer_ftype_from_lib_id
from .symbol_names import infer_symbol_name

logger = create_logger(__name__)

MIN_SYMBOL_SIZE = 1.0


def symbol_size(pins: list[LibPin], rotation: float, scale: float) -> Size:
    """Box spanned by the pin offsets, at least 1x1."""
    if not pins:
        return Size(MIN_SYMBOL_SIZE, MIN_SYMBOL_SIZE)
    offsets = [resolve_pin_offset(pin.position.point, rotation, scale) for pin in pins]
    xs = [p.x for p in offsets]
    ys = [p.y for p in offsets]
    return Size(
        max(max(xs) - min(xs), MIN_SYMBOL_SIZE),
        max(max(ys) - min(ys), MIN_SYMBOL_SIZE),
    )


def _pin_number(number: str) -> int | str | None:
    if not number:
        return None
    return int(number) if number.isdigit() else number


class CollectLibrarySymbolsStage(ConverterStage):
    """One schematic_component per placed symbol, with a port per library pin."""

    name = "collect_library_symbols"

    def execute(self) -> None:
        ctx = self.ctx
        schematic = ctx.schematic
        if schematic is None or ctx.sch_transform is None:
            return
        for symbol in schematic.symbols:
            if not symbol.uuid:
                logger.debug(f"Skipping symbol {symbol.reference!r} without uuid")
                continue
            if symbol.uuid in ctx.symbol_uuid_to_component_id:
                continue
            self.process_symbol(symbol)

    def process_symbol(self, symbol: SchSymbol) -> None:
        ctx = self.ctx
        schematic = ctx.schematic
        transform = ctx.sch_transform
        assert schematic is not None and transform is not None

        reference = symbol.reference or "U?"
        lib_id = symbol.lib_id
        rotation = symbol.position.angle
        center = transform.apply(symbol.position.point)
        scale = transform.scale_factor

        source = ctx.db.source_component.get_or_create(
            f"{lib_id}_source",
            lambda: SourceComponent(
                ftype=infer_ftype_from_lib_id(lib_id, reference),
                name=lib_id or reference,
                manufacturer_part_number=symbol.value or None,
            ),
        )

        lib = schematic.find_lib_symbol(lib_id)
        if lib is None:
            ctx.warn(f"Symbol {reference} references unknown library symbol {lib_id!r}")
            pins: list[LibPin] = []
        else:
            pins = [pin for pin in lib.pins if pin.unit in (0, symbol.unit)]

        symbol_name = None
        if lib is None or not lib.power:
            symbol_name = infer_symbol_name(lib_id, reference, rotation)

        component = ctx.db.schematic_component.insert(
            SchematicComponent(
                source_component_id=source.id,
                center=center,
                size=symbol_size(pins, rotation, scale),
                symbol_name=symbol_name,
            )
        )
        ctx.symbol_uuid_to_component_id.set(symbol.uuid, component.id)
        ctx.stats.components += 1

        for pin in pins:
            ctx.db.schematic_port.insert(
                SchematicPort(
                    schematic_component_id=component.id,
                    center=resolve_pin_position(center, rotation, pin.position.point, scale),
                    facing_direction=facing_direction(pin.position.angle, rotation),
                    pin_number=_pin_number(pin.number),
                )
            )
