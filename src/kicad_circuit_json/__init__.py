"""Convert KiCad boards and schematics to Circuit JSON."""

from .config import ConverterConfig
from .converter import (
    ConversionResult,
    convert,
    convert_board,
    convert_file,
    convert_schematic,
    load_design,
)
from .exceptions import (
    ConversionError,
    InputLoadingError,
    KicadCircuitError,
    UnsupportedDocumentError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "ConversionError",
    "ConversionResult",
    "ConverterConfig",
    "InputLoadingError",
    "KicadCircuitError",
    "UnsupportedDocumentError",
    "ValidationError",
    "convert",
    "convert_board",
    "convert_file",
    "convert_schematic",
    "load_design",
]
