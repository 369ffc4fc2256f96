"""KiCad to Circuit JSON MCP server, entry point."""

from __future__ import annotations

from fastmcp import FastMCP

from .logging_config import create_logger, setup_logging
from .tools import TOOL_REGISTRY

logger = create_logger(__name__)


def create_server() -> FastMCP:
    """Create the MCP server with every registered conversion tool."""
    mcp = FastMCP("kicad-circuit-json")
    for spec in TOOL_REGISTRY.values():
        mcp.tool(spec.handler, name=spec.name, description=spec.description)
    logger.debug(f"Registered {len(TOOL_REGISTRY)} tools")
    return mcp


def main() -> None:
    """CLI entry point."""
    setup_logging()
    server = create_server()
    server.run()


if __name__ == "__main__":
    main()
