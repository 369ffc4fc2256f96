"""S-expression reader for KiCad file formats."""

from .document import Document
from .parser import SExp, parse, parse_all

__all__ = ["Document", "SExp", "parse", "parse_all"]
