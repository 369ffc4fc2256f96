"""In-memory Circuit JSON store.

Append-only collections keyed by generated ids, one per element kind. The
board record is the single exception: stages may update it in place.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any, Generic, TypeVar

from .elements import (
    CircuitElement,
    Hole,
    PcbBoard,
    PcbComponent,
    PcbCopperPour,
    PcbPort,
    PcbSilkscreenPath,
    PcbSilkscreenText,
    PcbVia,
    PlatedHole,
    SchematicComponent,
    SchematicPort,
    SmtPad,
    SourceComponent,
    SourcePort,
    SourceTrace,
)

T = TypeVar("T", bound=CircuitElement)


class Collection(Generic[T]):
    """Records of one element kind.

    ``insert`` assigns ``<element_type>_<n>`` ids. ``get_or_create`` keeps at
    most one record per caller-supplied key.
    """

    def __init__(self, element_type: str) -> None:
        self.element_type = element_type
        self._records: list[T] = []
        self._by_id: dict[str, T] = {}
        self._by_key: dict[str, T] = {}
        self._next_index = 0

    def insert(self, record: T) -> T:
        """Append a record, assigning an id unless it carries one.

        Raises:
            ValueError: If a record with the same id already exists.
        """
        if not record.id:
            record.id = f"{self.element_type}_{self._next_index}"
            self._next_index += 1
        if record.id in self._by_id:
            raise ValueError(f"Duplicate {self.element_type} id: {record.id}")
        self._records.append(record)
        self._by_id[record.id] = record
        return record

    def get_or_create(self, key: str, factory: Callable[[], T]) -> T:
        """Return the record stored under ``key``, creating it on first use."""
        existing = self._by_key.get(key)
        if existing is not None:
            return existing
        record = self.insert(factory())
        self._by_key[key] = record
        return record

    def get(self, record_id: str) -> T | None:
        return self._by_id.get(record_id)

    def list(self) -> list[T]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[T]:
        return iter(self._records)


class CircuitDb:
    """All output collections of one conversion run."""

    def __init__(self) -> None:
        self.source_component: Collection[SourceComponent] = Collection("source_component")
        self.source_port: Collection[SourcePort] = Collection("source_port")
        self.source_trace: Collection[SourceTrace] = Collection("source_trace")
        self.pcb_board: Collection[PcbBoard] = Collection("pcb_board")
        self.pcb_component: Collection[PcbComponent] = Collection("pcb_component")
        self.pcb_smtpad: Collection[SmtPad] = Collection("pcb_smtpad")
        self.pcb_plated_hole: Collection[PlatedHole] = Collection("pcb_plated_hole")
        self.pcb_hole: Collection[Hole] = Collection("pcb_hole")
        self.pcb_port: Collection[PcbPort] = Collection("pcb_port")
        self.pcb_silkscreen_path: Collection[PcbSilkscreenPath] = Collection(
            "pcb_silkscreen_path"
        )
        self.pcb_silkscreen_text: Collection[PcbSilkscreenText] = Collection(
            "pcb_silkscreen_text"
        )
        self.pcb_via: Collection[PcbVia] = Collection("pcb_via")
        self.pcb_copper_pour: Collection[PcbCopperPour] = Collection("pcb_copper_pour")
        self.schematic_component: Collection[SchematicComponent] = Collection(
            "schematic_component"
        )
        self.schematic_port: Collection[SchematicPort] = Collection("schematic_port")

    def collections(self) -> list[Collection[Any]]:
        return [value for value in vars(self).values() if isinstance(value, Collection)]

    def counts(self) -> dict[str, int]:
        return {c.element_type: len(c) for c in self.collections() if len(c)}

    def to_list(self) -> list[dict[str, Any]]:
        """Flatten every record into Circuit JSON dicts."""
        return [record.to_dict() for c in self.collections() for record in c]

    def __len__(self) -> int:
        return sum(len(c) for c in self.collections())
