"""Conversion entry points: typed KiCad trees or files in, Circuit JSON out."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .circuit import CircuitDb
from .config import ConverterConfig
from .exceptions import ConversionError, UnsupportedDocumentError
from .geometry import Affine, kicad_to_output
from .logging_config import conversion_run, create_logger
from .schema import KicadBoard, KicadSchematic, extract_board, extract_schematic
from .sexp import Document
from .stages import PCB_STAGES, SCHEMATIC_STAGES, ConversionStats, ConverterContext
from .stages.pcb.graphics import edge_cuts_bounds

logger = create_logger(__name__)

BOARD_ROOT = "kicad_pcb"
SCHEMATIC_ROOT = "kicad_sch"


@dataclass
class ConversionResult:
    """Output of one run: the element store plus run metadata."""

    db: CircuitDb
    stats: ConversionStats
    warnings: list[str] = field(default_factory=list)
    run_id: str = ""

    @property
    def circuit_json(self) -> list[dict[str, Any]]:
        return self.db.to_list()

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "stats": self.stats.to_dict(),
            "warnings": list(self.warnings),
            "element_counts": self.db.counts(),
            "circuit_json": self.circuit_json,
        }


def board_transform(board: KicadBoard, config: ConverterConfig) -> Affine:
    """Y flip, with the Edge.Cuts center moved to the origin when configured."""
    origin = None
    if config.center_board:
        bounds = edge_cuts_bounds(board, config.arc_segments)
        if bounds is not None:
            origin = bounds.center
    return kicad_to_output(1.0, origin)


def schematic_transform(config: ConverterConfig) -> Affine:
    return kicad_to_output(config.schematic_scale)


def convert(
    board: KicadBoard | None = None,
    schematic: KicadSchematic | None = None,
    config: ConverterConfig | None = None,
) -> ConversionResult:
    """Run every stage over the supplied trees.

    Args:
        board: Typed board tree, if any
        schematic: Typed schematic tree, if any
        config: Converter settings (defaults when omitted)

    Returns:
        ConversionResult holding the populated CircuitDb

    Raises:
        ConversionError: If neither a board nor a schematic is given
    """
    if board is None and schematic is None:
        raise ConversionError("Nothing to convert: supply a board, a schematic or both")
    config = config or ConverterConfig()

    with conversion_run() as run_id:
        ctx = ConverterContext(config=config, board=board, schematic=schematic)
        if board is not None:
            ctx.pcb_transform = board_transform(board, config)
        if schematic is not None:
            ctx.sch_transform = schematic_transform(config)

        for stage_cls in PCB_STAGES + SCHEMATIC_STAGES:
            stage_cls(ctx).run()

        logger.info(
            f"Converted {ctx.stats.components} components, {ctx.stats.pads} pads, "
            f"{ctx.stats.traces} traces ({len(ctx.warnings)} warnings)"
        )
        return ConversionResult(
            db=ctx.db, stats=ctx.stats, warnings=ctx.warnings, run_id=run_id
        )


def convert_board(board: KicadBoard, config: ConverterConfig | None = None) -> ConversionResult:
    return convert(board=board, config=config)


def convert_schematic(
    schematic: KicadSchematic, config: ConverterConfig | None = None
) -> ConversionResult:
    return convert(schematic=schematic, config=config)


def load_design(path: str | Path) -> KicadBoard | KicadSchematic:
    """Parse a .kicad_pcb or .kicad_sch file into its typed tree.

    Raises:
        InputLoadingError: If the file cannot be read or parsed
        UnsupportedDocumentError: If the root is neither kicad_pcb nor kicad_sch
    """
    doc = Document.load(path)
    if doc.file_type == BOARD_ROOT:
        return extract_board(doc)
    if doc.file_type == SCHEMATIC_ROOT:
        return extract_schematic(doc)
    raise UnsupportedDocumentError(
        f"Unsupported KiCad document {str(path)!r}", root_name=doc.file_type
    )


def convert_file(path: str | Path, config: ConverterConfig | None = None) -> ConversionResult:
    """Load one KiCad file and convert it."""
    design = load_design(path)
    if isinstance(design, KicadBoard):
        return convert_board(design, config)
    return convert_schematic(design, config)
