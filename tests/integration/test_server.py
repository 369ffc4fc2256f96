"""Integration tests for the MCP server and its conversion tools."""

from __future__ import annotations

from dataclasses import fields
from pathlib import Path

import pytest

from kicad_circuit_json.server import create_server
from kicad_circuit_json.tools import TOOL_REGISTRY, ToolSpec, register_tool

FIXTURES = Path(__file__).parent.parent / "fixtures"
BOARD_PATH = FIXTURES / "minimal_board.kicad_pcb"
SCHEMATIC_PATH = FIXTURES / "minimal_schematic.kicad_sch"


class TestServerCreation:
    def test_create_server(self) -> None:
        server = create_server()
        assert server is not None
        assert server.name == "kicad-circuit-json"

    def test_tools_registered(self) -> None:
        assert {"convert_board", "convert_schematic", "convert_design"} <= set(TOOL_REGISTRY)
        spec = TOOL_REGISTRY["convert_board"]
        assert "board_path" in spec.parameters


class TestEndToEnd:
    """Drive each tool handler the way the server would."""

    def test_convert_board(self) -> None:
        result = TOOL_REGISTRY["convert_board"].handler(board_path=str(BOARD_PATH))
        assert result["status"] == "ok"
        assert result["stats"]["components"] == 3
        assert result["stats"]["traces"] == 2
        types = {element["type"] for element in result["circuit_json"]}
        assert {"pcb_board", "pcb_smtpad", "pcb_plated_hole", "source_trace"} <= types

    def test_convert_schematic_stats_only(self) -> None:
        result = TOOL_REGISTRY["convert_schematic"].handler(
            schematic_path=str(SCHEMATIC_PATH), include_elements=False
        )
        assert result["status"] == "ok"
        assert "circuit_json" not in result
        assert result["element_counts"]["schematic_port"] == 5

    @pytest.mark.parametrize("path", [BOARD_PATH, SCHEMATIC_PATH])
    def test_convert_design(self, path: Path) -> None:
        result = TOOL_REGISTRY["convert_design"].handler(path=str(path))
        assert result["status"] == "ok"
        assert result["stats"]["components"] == 3

    def test_wrong_document_type(self) -> None:
        result = TOOL_REGISTRY["convert_board"].handler(board_path=str(SCHEMATIC_PATH))
        assert result["error"] is True
        assert result["error_code"] == "UNSUPPORTED_DOCUMENT"

    def test_missing_file(self, tmp_path: Path) -> None:
        result = TOOL_REGISTRY["convert_design"].handler(path=str(tmp_path / "gone.kicad_pcb"))
        assert result["error"] is True
        assert result["error_code"] == "INPUT_LOADING_ERROR"


class TestRegistry:
    def test_required_parameters(self) -> None:
        assert TOOL_REGISTRY["convert_design"].required == ["path"]

    def test_spec_fields(self) -> None:
        assert [f.name for f in fields(ToolSpec)] == ["name", "description", "parameters", "handler"]

    def test_duplicate_name_rejected(self) -> None:
        spec = TOOL_REGISTRY["convert_board"]
        with pytest.raises(ValueError, match="already registered"):
            register_tool(spec.name, spec.description, spec.parameters, spec.handler)

    def test_unknown_parameter_rejected(self) -> None:
        def handler(path: str) -> dict[str, str]:
            return {"path": path}

        with pytest.raises(ValueError, match="lacks"):
            register_tool("scratch_tool", "scratch", {"board": {"type": "string"}}, handler)
        assert "scratch_tool" not in TOOL_REGISTRY
