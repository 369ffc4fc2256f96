"""Schematic passes."""

from .library_symbols import CollectLibrarySymbolsStage
from .symbol_names import infer_symbol_name

__all__ = ["CollectLibrarySymbolsStage", "infer_symbol_name"]
