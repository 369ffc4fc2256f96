"""Conversion stages and the context they share."""

from .base import ConversionStats, ConverterContext, ConverterStage, CrossReference
from .pcb import (
    CollectFootprintsStage,
    CollectGraphicsStage,
    CollectNetsStage,
    CollectSourceTracesStage,
    CollectViasStage,
    CollectZonesStage,
)
from .schematic import CollectLibrarySymbolsStage

PCB_STAGES: tuple[type[ConverterStage], ...] = (
    CollectNetsStage,
    CollectFootprintsStage,
    CollectGraphicsStage,
    CollectZonesStage,
    CollectViasStage,
    CollectSourceTracesStage,
)
"""Board passes in execution order: later passes read maps built by earlier ones."""

SCHEMATIC_STAGES: tuple[type[ConverterStage], ...] = (CollectLibrarySymbolsStage,)

__all__ = [
    "PCB_STAGES",
    "SCHEMATIC_STAGES",
    "CollectFootprintsStage",
    "CollectGraphicsStage",
    "CollectLibrarySymbolsStage",
    "CollectNetsStage",
    "CollectSourceTracesStage",
    "CollectViasStage",
    "CollectZonesStage",
    "ConversionStats",
    "ConverterContext",
    "ConverterStage",
    "CrossReference",
]
