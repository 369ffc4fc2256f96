"""Document wrapper for KiCad S-expression files.

Loads .kicad_pcb and .kicad_sch files into an SExp tree.
"""

from __future__ import annotations

from pathlib import Path

from ..exceptions import InputLoadingError
from .parser import SExp, parse


class Document:
    """A loaded KiCad S-expression file.

    Usage::

        doc = Document.load("board.kicad_pcb")
        doc.root.name  # "kicad_pcb"
        doc.root["version"].first_value  # "20241229"
    """

    __slots__ = ("path", "root")

    def __init__(self, path: Path, root: SExp) -> None:
        self.path = path
        self.root = root

    @classmethod
    def load(cls, path: str | Path) -> Document:
        """Load and parse a KiCad S-expression file.

        Raises:
            InputLoadingError: If the file is missing, unreadable or malformed.
        """
        path = Path(path)
        if not path.exists():
            raise InputLoadingError(f"File not found: {path}", path=str(path))
        try:
            raw_text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise InputLoadingError(f"Invalid encoding in {path}: {e}", path=str(path)) from e
        except OSError as e:
            raise InputLoadingError(f"Error reading {path}: {e}", path=str(path)) from e

        return cls.from_text(raw_text, path=path)

    @classmethod
    def from_text(cls, text: str, path: str | Path = "<memory>") -> Document:
        """Parse S-expression text that did not come from disk."""
        try:
            root = parse(text)
        except ValueError as e:
            raise InputLoadingError(f"Failed to parse {path}: {e}", path=str(path)) from e
        return cls(path=Path(path), root=root)

    @property
    def file_type(self) -> str:
        """Root node name, e.g. 'kicad_pcb' or 'kicad_sch'."""
        return self.root.name or ""

    def __repr__(self) -> str:
        return f"Document({self.path.name!r}, root={self.root.name!r})"
