"""S-expression reader for KiCad files.

KiCad stores boards (.kicad_pcb), schematics (.kicad_sch) and footprints
(.kicad_mod) as S-expressions. The converter only reads them, so nodes are
query-only and parsing uses an explicit stack (deep zone fills nest well past
the recursion limit on large boards).
"""

from __future__ import annotations

from collections.abc import Iterator


class SExp:
    """A node in an S-expression tree.

    An SExp is either an atom (``value`` set, no name) or a list whose first
    atom became ``name``.

    Usage::

        tree = parse('(pad "1" smd rect (at 1 2 90) (size 1 1.2))')
        tree.name                 # "pad"
        tree.atom_values          # ["1", "smd", "rect"]
        tree["at"].floats()       # [1.0, 2.0, 90.0]
    """

    __slots__ = ("name", "value", "children")

    def __init__(
        self,
        name: str | None = None,
        value: str | None = None,
        children: list[SExp] | None = None,
    ) -> None:
        self.name = name
        self.value = value
        self.children: list[SExp] = children if children is not None else []

    @property
    def is_atom(self) -> bool:
        return self.name is None and self.value is not None

    @property
    def is_list(self) -> bool:
        return self.name is not None

    def __getitem__(self, key: str) -> SExp:
        """Get the first child list with the given name. Raises KeyError."""
        found = self.get(key)
        if found is None:
            raise KeyError(f"No child named {key!r}")
        return found

    def get(self, key: str, default: SExp | None = None) -> SExp | None:
        """Get the first child list with the given name, or default."""
        for child in self.children:
            if child.name == key:
                return child
        return default

    def find_all(self, name: str) -> list[SExp]:
        """Find all direct children with the given name."""
        return [child for child in self.children if child.name == name]

    def find_recursive(self, name: str) -> Iterator[SExp]:
        """Find all descendants (recursive) with the given name."""
        for child in self.children:
            if child.name == name:
                yield child
            if child.children:
                yield from child.find_recursive(name)

    @property
    def first_value(self) -> str | None:
        """Value of the first atom child, e.g. (layer "F.Cu") -> 'F.Cu'."""
        for child in self.children:
            if child.is_atom:
                return child.value
        return None

    @property
    def atom_values(self) -> list[str]:
        """All atom values among direct children."""
        return [child.value for child in self.children if child.is_atom and child.value is not None]

    def has_flag(self, flag: str) -> bool:
        """True for a bare ``flag`` atom or a ``(flag yes)`` child.

        KiCad 6 writes ``hide`` as an atom, KiCad 8+ writes ``(hide yes)``.
        """
        if flag in self.atom_values:
            return True
        node = self.get(flag)
        return node is not None and node.first_value in (None, "yes")

    def child_value(self, key: str) -> str | None:
        """First atom of the named child: ``node.child_value("layer")``."""
        node = self.get(key)
        return node.first_value if node is not None else None

    def floats(self) -> list[float]:
        """Atom values that parse as numbers, in order."""
        result: list[float] = []
        for val in self.atom_values:
            try:
                result.append(float(val))
            except ValueError:
                continue
        return result

    def __repr__(self) -> str:
        if self.is_atom:
            return f"SExp(value={self.value!r})"
        return f"SExp(name={self.name!r}, children={len(self.children)})"


def _tokenize(text: str) -> Iterator[tuple[str, str]]:
    """Yield (token_type, value) pairs. Types: OPEN, CLOSE, STRING, ATOM."""
    pos = 0
    length = len(text)
    while pos < length:
        ch = text[pos]
        if ch in " \t\n\r":
            pos += 1
        elif ch == "(":
            pos += 1
            yield ("OPEN", "(")
        elif ch == ")":
            pos += 1
            yield ("CLOSE", ")")
        elif ch == '"':
            pos += 1
            chars: list[str] = []
            while True:
                if pos >= length:
                    raise ValueError("Unterminated quoted string")
                ch = text[pos]
                if ch == "\\" and pos + 1 < length:
                    chars.append(text[pos + 1])
                    pos += 2
                    continue
                pos += 1
                if ch == '"':
                    break
                chars.append(ch)
            yield ("STRING", "".join(chars))
        else:
            start = pos
            while pos < length and text[pos] not in ' \t\n\r()"':
                pos += 1
            yield ("ATOM", text[start:pos])


def _read(tokens: Iterator[tuple[str, str]], first: tuple[str, str]) -> SExp:
    """Build one expression starting at ``first``, pulling further tokens."""
    token_type, token_value = first
    if token_type == "CLOSE":
        raise ValueError("Unexpected ')'")
    if token_type != "OPEN":
        return SExp(value=token_value)

    root = SExp(name="")
    stack: list[SExp] = [root]
    expect_name = True
    for token_type, token_value in tokens:
        top = stack[-1]
        if token_type == "OPEN":
            node = SExp(name="")
            if expect_name:
                # A list as first element: the list is unnamed
                top.name = ""
            top.children.append(node)
            stack.append(node)
            expect_name = True
            continue
        if token_type == "CLOSE":
            stack.pop()
            expect_name = False
            if not stack:
                return root
            continue
        if expect_name and token_type == "ATOM":
            top.name = token_value
        else:
            top.children.append(SExp(value=token_value))
        expect_name = False
    raise ValueError("Unexpected end of input: unclosed '('")


def parse(text: str) -> SExp:
    """Parse an S-expression string into an SExp tree.

    Raises:
        ValueError: If the input is malformed.
    """
    tokens = _tokenize(text)
    first = next(tokens, None)
    if first is None:
        raise ValueError("Unexpected end of input")
    return _read(tokens, first)


def parse_all(text: str) -> list[SExp]:
    """Parse text that may contain multiple top-level S-expressions."""
    tokens = _tokenize(text)
    return [_read(tokens, first) for first in tokens]
