"""Conversion tools: KiCad board/schematic files -> Circuit JSON."""

from __future__ import annotations

from typing import Any

from ..config import ConverterConfig
from ..converter import (
    BOARD_ROOT,
    SCHEMATIC_ROOT,
    ConversionResult,
    convert_board,
    convert_file,
    convert_schematic,
    load_design,
)
from ..exceptions import KicadCircuitError, UnsupportedDocumentError
from ..logging_config import create_logger
from ..schema import KicadBoard, KicadSchematic
from .registry import register_tool

logger = create_logger(__name__)


def _result_dict(result: ConversionResult, include_elements: bool) -> dict[str, Any]:
    d = result.to_dict()
    if not include_elements:
        d.pop("circuit_json")
    d["status"] = "ok"
    return d


def _convert_board_handler(board_path: str, include_elements: bool = True) -> dict[str, Any]:
    """Convert a .kicad_pcb file to Circuit JSON.

    Args:
        board_path: Path to the .kicad_pcb file.
        include_elements: Include the element list (False returns stats only).
    """
    try:
        design = load_design(board_path)
        if not isinstance(design, KicadBoard):
            raise UnsupportedDocumentError(
                f"{board_path!r} is not a board file", root_name=SCHEMATIC_ROOT
            )
        result = convert_board(design, ConverterConfig.from_env())
    except KicadCircuitError as exc:
        logger.warning(f"convert_board failed: {exc.message}")
        return exc.to_dict()
    return _result_dict(result, include_elements)


def _convert_schematic_handler(
    schematic_path: str, include_elements: bool = True
) -> dict[str, Any]:
    """Convert a .kicad_sch file to Circuit JSON.

    Args:
        schematic_path: Path to the .kicad_sch file.
        include_elements: Include the element list (False returns stats only).
    """
    try:
        design = load_design(schematic_path)
        if not isinstance(design, KicadSchematic):
            raise UnsupportedDocumentError(
                f"{schematic_path!r} is not a schematic file", root_name=BOARD_ROOT
            )
        result = convert_schematic(design, ConverterConfig.from_env())
    except KicadCircuitError as exc:
        logger.warning(f"convert_schematic failed: {exc.message}")
        return exc.to_dict()
    return _result_dict(result, include_elements)


def _convert_design_handler(path: str, include_elements: bool = True) -> dict[str, Any]:
    """Convert a board or schematic file, picking the pipeline from its root.

    Args:
        path: Path to a .kicad_pcb or .kicad_sch file.
        include_elements: Include the element list (False returns stats only).
    """
    try:
        result = convert_file(path, ConverterConfig.from_env())
    except KicadCircuitError as exc:
        logger.warning(f"convert_design failed: {exc.message}")
        return exc.to_dict()
    return _result_dict(result, include_elements)


_INCLUDE_ELEMENTS = {
    "type": "boolean",
    "description": "Include the Circuit JSON element list (default true).",
}

register_tool(
    name="convert_board",
    description="Convert a KiCad board (.kicad_pcb) to Circuit JSON.",
    parameters={
        "board_path": {"type": "string", "description": "Path to the .kicad_pcb file."},
        "include_elements": _INCLUDE_ELEMENTS,
    },
    handler=_convert_board_handler,
)

register_tool(
    name="convert_schematic",
    description="Convert a KiCad schematic (.kicad_sch) to Circuit JSON.",
    parameters={
        "schematic_path": {"type": "string", "description": "Path to the .kicad_sch file."},
        "include_elements": _INCLUDE_ELEMENTS,
    },
    handler=_convert_schematic_handler,
)

register_tool(
    name="convert_design",
    description="Convert a KiCad board or schematic file, detected from its contents.",
    parameters={
        "path": {"type": "string", "description": "Path to a .kicad_pcb or .kicad_sch file."},
        "include_elements": _INCLUDE_ELEMENTS,
    },
    handler=_convert_design_handler,
)
