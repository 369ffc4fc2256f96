"""Shared run context and the stage base class.

Stages communicate only through ``ConverterContext``: the output store, the
transforms and the write-once cross-reference tables.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic, TypeVar

from ..circuit import CircuitDb
from ..config import ConverterConfig
from ..geometry import Affine
from ..logging_config import create_logger
from ..schema import KicadBoard, KicadSchematic

logger = create_logger(__name__)

K = TypeVar("K")
V = TypeVar("V")


class CrossReference(Generic[K, V]):
    """Mapping whose keys are written once.

    A second write for an existing key is ignored, so reprocessing an
    entity that was already seen cannot redirect later lookups.
    """

    def __init__(self) -> None:
        self._data: dict[K, V] = {}

    def set(self, key: K, value: V) -> bool:
        """Store ``value`` unless ``key`` is present. True if written."""
        if key in self._data:
            return False
        self._data[key] = value
        return True

    def get(self, key: K, default: V | None = None) -> V | None:
        return self._data.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


@dataclass
class ConversionStats:
    """Counters reported at the end of a run."""

    components: int = 0
    pads: int = 0
    traces: int = 0
    vias: int = 0
    copper_pours: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "components": self.components,
            "pads": self.pads,
            "traces": self.traces,
            "vias": self.vias,
            "copper_pours": self.copper_pours,
        }


@dataclass
class ConverterContext:
    """State shared by every stage of one conversion run."""

    db: CircuitDb = field(default_factory=CircuitDb)
    config: ConverterConfig = field(default_factory=ConverterConfig)
    board: KicadBoard | None = None
    schematic: KicadSchematic | None = None
    pcb_transform: Affine | None = None
    sch_transform: Affine | None = None
    net_names: CrossReference[int, str] | None = field(default_factory=CrossReference)
    footprint_uuid_to_component_id: CrossReference[str, str] = field(
        default_factory=CrossReference
    )
    footprint_uuid_to_source_component_id: CrossReference[str, str] = field(
        default_factory=CrossReference
    )
    symbol_uuid_to_component_id: CrossReference[str, str] = field(
        default_factory=CrossReference
    )
    stats: ConversionStats = field(default_factory=ConversionStats)
    warnings: list[str] = field(default_factory=list)

    def warn(self, message: str) -> None:
        """Record a recoverable anomaly."""
        self.warnings.append(message)
        logger.warning(message)


class ConverterStage:
    """One pass over the input tree.

    Subclasses implement ``execute``. ``run`` executes at most once per
    instance; a stage whose preconditions are missing simply returns.
    """

    name: ClassVar[str] = ""

    def __init__(self, ctx: ConverterContext) -> None:
        self.ctx = ctx
        self.finished = False

    def run(self) -> None:
        if self.finished:
            return
        try:
            logger.debug(f"Running stage {self.name or type(self).__name__}")
            self.execute()
        finally:
            self.finished = True

    def execute(self) -> None:
        raise NotImplementedError
