"""Tool registry: one declarative entry per MCP tool."""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass
class ToolSpec:
    """Declarative description of a single MCP tool."""

    name: str
    description: str
    parameters: dict[str, Any]
    handler: Callable[..., Any]

    @property
    def required(self) -> list[str]:
        """Parameters the handler has no default for."""
        signature = inspect.signature(self.handler)
        return [
            name
            for name in self.parameters
            if signature.parameters[name].default is inspect.Parameter.empty
        ]


TOOL_REGISTRY: dict[str, ToolSpec] = {}


def register_tool(
    name: str,
    description: str,
    parameters: dict[str, Any],
    handler: Callable[..., Any],
) -> None:
    """Register a tool in the global registry.

    Raises:
        ValueError: If the name is taken or a declared parameter is not an
            argument of the handler.
    """
    if name in TOOL_REGISTRY:
        raise ValueError(f"Tool {name!r} is already registered")
    accepted = inspect.signature(handler).parameters
    unknown = [p for p in parameters if p not in accepted]
    if unknown:
        raise ValueError(f"Tool {name!r} declares parameters its handler lacks: {unknown}")
    TOOL_REGISTRY[name] = ToolSpec(
        name=name,
        description=description,
        parameters=parameters,
        handler=handler,
    )
