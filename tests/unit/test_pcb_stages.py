"""Tests for the board conversion passes."""

from __future__ import annotations

from pathlib import Path

import pytest

from kicad_circuit_json.circuit import (
    HoleCircle,
    HolePill,
    PlatedHoleCircle,
    PlatedHolePill,
    PlatedHoleRectPad,
    SmtPadCircle,
    SmtPadPill,
    SmtPadPolygon,
    SmtPadRect,
)
from kicad_circuit_json.converter import ConversionResult, convert_board
from kicad_circuit_json.geometry import kicad_to_output
from kicad_circuit_json.schema import KicadBoard, extract_board
from kicad_circuit_json.sexp import Document, parse
from kicad_circuit_json.stages import (
    PCB_STAGES,
    CollectFootprintsStage,
    CollectGraphicsStage,
    CollectNetsStage,
    ConverterContext,
)

FIXTURES = Path(__file__).parent.parent / "fixtures"


def _board(text: str) -> KicadBoard:
    return extract_board(parse(text))


def _convert(text: str) -> ConversionResult:
    return convert_board(_board(text))


def _footprint(*pads: str, at: str = "0 0", layer: str = "F.Cu", ref: str = "U1", uuid: str = "fp") -> str:
    return (
        f'(footprint "Lib:X" (layer "{layer}") (uuid "{uuid}") (at {at})'
        f' (property "Reference" "{ref}") {" ".join(pads)})'
    )


@pytest.fixture(scope="module")
def board() -> KicadBoard:
    return extract_board(Document.load(FIXTURES / "minimal_board.kicad_pcb"))


@pytest.fixture(scope="module")
def result(board: KicadBoard) -> ConversionResult:
    return convert_board(board)


class TestPreconditions:
    def test_no_transform_produces_nothing(self, board: KicadBoard) -> None:
        ctx = ConverterContext(board=board)
        assert ctx.pcb_transform is None
        for stage_cls in PCB_STAGES:
            stage_cls(ctx).run()
        assert ctx.db.counts() == {}
        assert ctx.warnings == []
        assert set(ctx.stats.to_dict().values()) == {0}

    def test_no_board_produces_nothing(self) -> None:
        ctx = ConverterContext(pcb_transform=kicad_to_output(1.0))
        for stage_cls in PCB_STAGES:
            stage_cls(ctx).run()
        assert ctx.db.counts() == {}
        assert ctx.warnings == []


class TestNets:
    def test_net_table(self, board: KicadBoard) -> None:
        ctx = ConverterContext(board=board)
        CollectNetsStage(ctx).run()
        assert ctx.net_names is not None
        assert ctx.net_names.get(0) == ""
        assert ctx.net_names.get(1) == "GND"
        assert ctx.net_names.get(3) == "Net-3"

    def test_pad_names_fill_missing_ids(self) -> None:
        board = _board(
            '(kicad_pcb (net 0 "") (net 4 "")'
            + _footprint('(pad "1" smd rect (at 0 0) (size 1 1) (net 5 "SIG"))')
            + _footprint('(pad "1" smd rect (at 0 0) (size 1 1) (net 4 "LATE"))', uuid="fp2")
            + ")"
        )
        ctx = ConverterContext(board=board)
        CollectNetsStage(ctx).run()
        assert ctx.net_names is not None
        assert ctx.net_names.get(5) == "SIG"
        assert ctx.net_names.get(4) == "LATE"

    def test_unnamed_pad_net_synthesized(self) -> None:
        board = _board("(kicad_pcb " + _footprint('(pad "1" smd rect (at 0 0) (size 1 1) (net 7))') + ")")
        ctx = ConverterContext(board=board)
        CollectNetsStage(ctx).run()
        assert ctx.net_names is not None
        assert ctx.net_names.get(7) == "Net-7"

    def test_missing_board_is_noop(self) -> None:
        ctx = ConverterContext()
        stage = CollectNetsStage(ctx)
        stage.run()
        assert stage.finished
        assert ctx.net_names is not None
        assert len(ctx.net_names) == 0


class TestFootprints:
    def test_source_components(self, result: ConversionResult) -> None:
        r1, c1, h1 = result.db.source_component.list()
        assert (r1.name, r1.ftype, r1.resistance) == ("R1", "simple_resistor", "4.7k")
        assert (c1.name, c1.ftype, c1.capacitance) == ("C1", "simple_capacitor", "100n")
        assert (h1.name, h1.ftype) == ("H1", "simple_chip")

    def test_pcb_component_placement(self, result: ConversionResult) -> None:
        r1, c1, _ = result.db.pcb_component.list()
        assert (r1.center.x, r1.center.y) == pytest.approx((-10.0, 0.0))
        assert r1.rotation == 0
        assert r1.layer == "top"
        assert (r1.width, r1.height) == pytest.approx((3.0, 1.2))
        assert c1.rotation == 270
        assert r1.source_component_id == "source_component_0"

    def test_smd_pads(self, result: ConversionResult) -> None:
        pads = result.db.pcb_smtpad.list()
        assert len(pads) == 2
        assert all(isinstance(p, SmtPadRect) for p in pads)
        pad1 = pads[0]
        assert isinstance(pad1, SmtPadRect)
        assert (pad1.x, pad1.y) == pytest.approx((-11.0, 0.0))
        assert pad1.corner_radius == pytest.approx(0.125)
        assert pad1.port_hints == ["1"]
        assert pad1.pcb_component_id == "pcb_component_0"

    def test_plated_holes(self, result: ConversionResult) -> None:
        circle, pill = result.db.pcb_plated_hole.list()
        assert isinstance(circle, PlatedHoleCircle)
        assert (circle.hole_diameter, circle.outer_diameter) == (0.8, 1.6)
        assert isinstance(pill, PlatedHolePill)
        # quarter-turned footprint swaps the pill dimensions
        assert (pill.outer_width, pill.outer_height) == (2.4, 1.6)
        assert (pill.x, pill.y) == pytest.approx((0.0, 2.5), abs=1e-9)

    def test_mounting_hole(self, result: ConversionResult) -> None:
        (hole,) = result.db.pcb_hole.list()
        assert isinstance(hole, HoleCircle)
        assert hole.hole_diameter == 3.2
        assert (hole.x, hole.y) == pytest.approx((10.0, -5.0))

    def test_ports(self, result: ConversionResult) -> None:
        ports = result.db.pcb_port.list()
        assert [p.source_port_id for p in ports] == [
            "pcb_component_0_port_1",
            "pcb_component_0_port_2",
            "pcb_component_1_port_1",
            "pcb_component_1_port_2",
        ]
        assert ports[0].layers == ["top"]
        assert ports[2].layers == ["top", "bottom"]

    def test_stats(self, result: ConversionResult) -> None:
        assert result.stats.components == 3
        assert result.stats.pads == 4

    def test_footprint_silkscreen(self, result: ConversionResult) -> None:
        paths = [p for p in result.db.pcb_silkscreen_path.list() if p.pcb_component_id]
        assert len(paths) == 1
        route = paths[0].route
        assert (route[0].x, route[0].y) == pytest.approx((-10.5, 0.7))
        assert paths[0].stroke_width == 0.12

        texts = {t.text: t for t in result.db.pcb_silkscreen_text.list() if t.pcb_component_id}
        assert set(texts) == {"R1", "C1"}
        r1 = texts["R1"]
        assert (r1.anchor_position.x, r1.anchor_position.y) == pytest.approx((-10.0, 1.65))
        assert r1.font_size == pytest.approx(1.5)
        c1 = texts["C1"]
        assert (c1.anchor_position.x, c1.anchor_position.y) == pytest.approx((-2.0, 0.0), abs=1e-9)
        assert c1.ccw_rotation == 90

    def test_duplicate_uuid_processed_once(self) -> None:
        pad = '(pad "1" smd rect (at 0 0) (size 1 1) (layers "F.Cu"))'
        result = _convert("(kicad_pcb " + _footprint(pad) + _footprint(pad) + ")")
        assert len(result.db.pcb_component) == 1
        assert len(result.db.pcb_smtpad) == 1
        assert result.stats.components == 1

    def test_stage_rerun_is_idempotent(self, board: KicadBoard) -> None:
        ctx = ConverterContext(board=board, pcb_transform=kicad_to_output())
        CollectFootprintsStage(ctx).run()
        CollectFootprintsStage(ctx).run()
        assert len(ctx.db.pcb_component) == 3
        assert len(ctx.db.source_component) == 3

    def test_footprint_without_uuid_skipped(self) -> None:
        result = _convert('(kicad_pcb (footprint "Lib:X" (layer "F.Cu") (at 0 0)))')
        assert len(result.db.pcb_component) == 0

    def test_bottom_footprint(self) -> None:
        result = _convert(
            "(kicad_pcb "
            + _footprint('(pad "1" smd rect (at 0 0) (size 1 1) (layers "B.Cu"))', layer="B.Cu")
            + ")"
        )
        assert result.db.pcb_component.list()[0].layer == "bottom"
        assert result.db.pcb_smtpad.list()[0].layer == "bottom"
        assert result.db.pcb_port.list()[0].layers == ["bottom"]

    def test_transistor_type(self) -> None:
        text = (
            '(kicad_pcb (footprint "Package_TO_SOT_SMD:SOT-23" (layer "F.Cu") (uuid "q")'
            ' (at 0 0) (property "Reference" "Q1") (property "Value" "BC857 PNP")))'
        )
        source = _convert(text).db.source_component.list()[0]
        assert source.ftype == "simple_transistor"
        assert source.transistor_type == "pnp"
        assert source.manufacturer_part_number == "BC857 PNP"


class TestPadShapes:
    def _pads(self, *pads: str, at: str = "0 0") -> ConversionResult:
        return _convert("(kicad_pcb " + _footprint(*pads, at=at) + ")")

    def test_smd_circle(self) -> None:
        (pad,) = self._pads('(pad "1" smd circle (at 0 0) (size 1.2 1.2) (layers "F.Cu"))').db.pcb_smtpad
        assert isinstance(pad, SmtPadCircle)
        assert pad.radius == pytest.approx(0.6)

    def test_smd_oval(self) -> None:
        (pad,) = self._pads('(pad "1" smd oval (at 0 0) (size 1 2) (layers "F.Cu"))').db.pcb_smtpad
        assert isinstance(pad, SmtPadPill)
        assert pad.radius == pytest.approx(0.5)

    def test_custom_polygon_rotates_with_footprint(self) -> None:
        result = self._pads(
            '(pad "1" smd custom (at 1 0) (size 0.5 0.5) (layers "F.Cu")'
            " (primitives (gr_poly (pts (xy 0 0) (xy 1 0) (xy 0 1)) (width 0))))",
            at="0 0 90",
        )
        (pad,) = result.db.pcb_smtpad
        assert isinstance(pad, SmtPadPolygon)
        assert len(pad.points) == 3
        assert (pad.points[0].x, pad.points[0].y) == pytest.approx((0.0, 1.0), abs=1e-9)
        assert (pad.points[1].x, pad.points[1].y) == pytest.approx((0.0, 2.0), abs=1e-9)

    def test_unknown_smd_shape_warns(self) -> None:
        result = self._pads('(pad "1" smd trapezoid (at 0 0) (size 1 1) (layers "F.Cu"))')
        (pad,) = result.db.pcb_smtpad
        assert isinstance(pad, SmtPadRect)
        assert any("trapezoid" in w for w in result.warnings)

    def test_thru_hole_rect(self) -> None:
        result = self._pads('(pad "1" thru_hole rect (at 0 0) (size 1.7 1.7) (drill 1) (layers "*.Cu"))')
        (hole,) = result.db.pcb_plated_hole
        assert isinstance(hole, PlatedHoleRectPad)
        assert hole.shape == "circular_hole_with_rect_pad"
        assert (hole.rect_pad_width, hole.hole_width) == (1.7, 1.0)
        assert not result.warnings

    def test_thru_hole_rect_with_slot(self) -> None:
        result = self._pads(
            '(pad "1" thru_hole rect (at 0 0) (size 2 3) (drill oval 1 2) (layers "*.Cu"))'
        )
        (hole,) = result.db.pcb_plated_hole
        assert isinstance(hole, PlatedHoleRectPad)
        assert hole.shape == "pill_hole_with_rect_pad"

    def test_missing_drill_uses_default(self) -> None:
        result = self._pads('(pad "1" thru_hole circle (at 0 0) (size 1.6 1.6) (layers "*.Cu"))')
        (hole,) = result.db.pcb_plated_hole
        assert isinstance(hole, PlatedHoleCircle)
        assert hole.hole_diameter == 0.8

    def test_npth_slot(self) -> None:
        result = self._pads('(pad "" np_thru_hole oval (at 0 0) (size 1 2) (drill oval 1 2))')
        (hole,) = result.db.pcb_hole
        assert isinstance(hole, HolePill)
        assert (hole.hole_width, hole.hole_height) == (1.0, 2.0)
        assert result.stats.pads == 0
        assert len(result.db.pcb_port) == 0

    def test_unnumbered_pad_has_geometry_but_no_port(self) -> None:
        result = self._pads('(pad "" smd rect (at 0 0) (size 1 1) (layers "F.Cu"))')
        assert len(result.db.pcb_smtpad) == 1
        assert len(result.db.pcb_port) == 0
        assert result.stats.pads == 1


class TestGraphics:
    def test_board_outline(self, result: ConversionResult) -> None:
        (pcb_board,) = result.db.pcb_board.list()
        assert len(pcb_board.outline) == 4
        assert (pcb_board.width, pcb_board.height) == pytest.approx((40.0, 20.0))
        assert (pcb_board.center.x, pcb_board.center.y) == pytest.approx((0.0, 0.0))
        assert pcb_board.thickness == 1.6

    def test_outline_from_lines_and_arc(self) -> None:
        result = _convert(
            "(kicad_pcb"
            ' (gr_line (start 0 0) (end 10 0) (layer "Edge.Cuts"))'
            ' (gr_line (start 10 10) (end 0 10) (layer "Edge.Cuts"))'
            ' (gr_arc (start 10 0) (mid 15 5) (end 10 10) (layer "Edge.Cuts"))'
            ' (gr_line (start 0 10) (end 0 0) (layer "Edge.Cuts")))'
        )
        (pcb_board,) = result.db.pcb_board.list()
        # 3 lines + 8 arc pieces, closed loop
        assert len(pcb_board.outline) == 11
        assert (pcb_board.width, pcb_board.height) == pytest.approx((15.0, 10.0))

    def test_circular_board(self) -> None:
        result = _convert(
            '(kicad_pcb (gr_circle (center 0 0) (end 5 0) (layer "Edge.Cuts")))'
        )
        (pcb_board,) = result.db.pcb_board.list()
        assert len(pcb_board.outline) == 16
        assert pcb_board.width == pytest.approx(10.0)

    def test_no_edge_cuts_no_board(self) -> None:
        result = _convert('(kicad_pcb (gr_line (start 0 0) (end 1 0) (layer "F.SilkS")))')
        assert len(result.db.pcb_board) == 0
        assert len(result.db.pcb_silkscreen_path) == 1

    def test_board_updated_in_place(self) -> None:
        board = _board('(kicad_pcb (gr_rect (start 0 0) (end 4 2) (layer "Edge.Cuts")))')
        ctx = ConverterContext(board=board, pcb_transform=kicad_to_output())
        CollectGraphicsStage(ctx).run()
        first = ctx.db.pcb_board.list()[0]
        CollectGraphicsStage(ctx).run()
        assert ctx.db.pcb_board.list() == [first]

    def test_silkscreen_shapes(self) -> None:
        result = _convert(
            "(kicad_pcb"
            ' (gr_circle (center 0 0) (end 1 0) (layer "F.SilkS") (stroke (width 0.2)))'
            ' (gr_arc (start 1 0) (mid 0 1) (end -1 0) (layer "B.SilkS")))'
        )
        arc, circle = result.db.pcb_silkscreen_path.list()
        assert len(circle.route) == 17
        assert circle.stroke_width == 0.2
        assert len(arc.route) == 9
        assert arc.layer == "bottom"
        assert arc.stroke_width == 0.15

    def test_filled_copper_rect(self) -> None:
        result = _convert('(kicad_pcb (gr_rect (start 0 0) (end 2 1) (fill solid) (layer "F.Cu")))')
        (pad,) = result.db.pcb_smtpad
        assert isinstance(pad, SmtPadRect)
        assert pad.pcb_component_id == ""
        assert (pad.width, pad.height) == pytest.approx((2.0, 1.0))
        assert (pad.x, pad.y) == pytest.approx((1.0, -0.5))
        assert result.stats.pads == 1

    def test_texts(self, result: ConversionResult) -> None:
        board_texts = [t for t in result.db.pcb_silkscreen_text.list() if not t.pcb_component_id]
        assert [t.text for t in board_texts] == ["v1.0"]
        assert board_texts[0].font_size == pytest.approx(1.5)

    def test_text_layers(self) -> None:
        result = _convert(
            "(kicad_pcb"
            ' (gr_text "copper" (at 0 0) (layer "B.Cu"))'
            ' (gr_text "fab" (at 0 0) (layer "F.Fab"))'
            ' (gr_text "drawing" (at 0 0) (layer "Dwgs.User"))'
            ' (gr_text "hidden" (at 0 0) (layer "F.SilkS") (effects (font (size 1 1)) hide)))'
        )
        texts = result.db.pcb_silkscreen_text.list()
        assert [(t.text, t.layer) for t in texts] == [("copper", "bottom"), ("fab", "top")]


class TestZones:
    def test_fixture_zone(self, result: ConversionResult) -> None:
        (pour,) = result.db.pcb_copper_pour.list()
        assert pour.layer == "bottom"
        assert pour.net_name == "GND"
        assert len(pour.points) == 4
        assert (pour.points[0].x, pour.points[0].y) == pytest.approx((-19.0, 9.0))
        assert result.stats.copper_pours == 1

    def test_unfilled_zone_skipped(self) -> None:
        result = _convert(
            '(kicad_pcb (zone (net 1) (net_name "GND") (layer "F.Cu")'
            " (polygon (pts (xy 0 0) (xy 1 0) (xy 1 1)))))"
        )
        assert len(result.db.pcb_copper_pour) == 0
        assert not result.warnings

    def test_outline_used_without_fill_data(self) -> None:
        result = _convert(
            '(kicad_pcb (net 1 "GND") (zone (net 1) (net_name "OLD") (layers "F.Cu" "B.Cu")'
            " (fill yes) (polygon (pts (xy 0 0) (xy 1 0) (xy 1 1)))))"
        )
        pours = result.db.pcb_copper_pour.list()
        assert [p.layer for p in pours] == ["top", "bottom"]
        assert all(p.net_name == "GND" for p in pours)

    def test_filled_zone_without_polygon_warns(self) -> None:
        result = _convert('(kicad_pcb (zone (net 1) (layer "F.Cu") (fill yes)))')
        assert len(result.db.pcb_copper_pour) == 0
        assert len(result.warnings) == 1


class TestVias:
    def test_fixture_via(self, result: ConversionResult) -> None:
        (via,) = result.db.pcb_via.list()
        assert (via.x, via.y) == pytest.approx((-5.0, 5.0))
        assert (via.outer_diameter, via.hole_diameter) == (0.6, 0.3)
        assert via.layers == ["top", "bottom"]
        assert via.net_name == "GND"
        assert result.stats.vias == 1

    def test_defaults(self) -> None:
        (via,) = _convert("(kicad_pcb (via (at 1 1)))").db.pcb_via
        assert via.layers == ["top", "bottom"]
        assert (via.outer_diameter, via.hole_diameter) == (0.8, 0.4)
        assert via.net_name == ""

    def test_blind_via(self) -> None:
        (via,) = _convert('(kicad_pcb (via (at 1 1) (layers "F.Cu" "In1.Cu")))').db.pcb_via
        assert via.layers == ["top", "inner1"]

    def test_non_copper_layers_skipped(self) -> None:
        result = _convert('(kicad_pcb (via (at 1 1) (layers "F.SilkS")))')
        assert len(result.db.pcb_via) == 0
        assert len(result.warnings) == 1


class TestSourceTraces:
    def test_fixture_traces(self, result: ConversionResult) -> None:
        traces = result.db.source_trace.list()
        assert [t.display_name for t in traces] == ["GND", "VCC"]
        assert traces[0].connected_source_port_ids == [
            "pcb_component_0_port_1",
            "pcb_component_1_port_1",
        ]
        assert result.stats.traces == 2

    def test_source_ports(self, result: ConversionResult) -> None:
        ports = {p.id: p for p in result.db.source_port.list()}
        port = ports["pcb_component_1_port_2"]
        assert port.name == "C1.2"
        assert port.pin_number == 2
        assert port.source_component_id == "source_component_1"

    def test_every_trace_endpoint_has_a_pcb_port(self, result: ConversionResult) -> None:
        pcb_port_ids = {p.source_port_id for p in result.db.pcb_port.list()}
        for trace in result.db.source_trace.list():
            assert len(trace.connected_source_port_ids) >= 2
            assert set(trace.connected_source_port_ids) <= pcb_port_ids

    def test_single_pad_net_has_no_trace(self) -> None:
        result = _convert(
            '(kicad_pcb (net 1 "LONELY")'
            + _footprint('(pad "1" smd rect (at 0 0) (size 1 1) (net 1 "LONELY"))')
            + ")"
        )
        assert len(result.db.source_trace) == 0
        assert len(result.db.source_port) == 1

    def test_unconnected_net_ignored(self) -> None:
        pad = '(pad "1" smd rect (at 0 0) (size 1 1) (net 0 ""))'
        result = _convert("(kicad_pcb " + _footprint(pad) + _footprint(pad, uuid="fp2") + ")")
        assert len(result.db.source_trace) == 0
        assert len(result.db.source_port) == 0

    def test_repeated_pad_number_counts_once(self) -> None:
        text = (
            "(kicad_pcb "
            + _footprint(
                '(pad "1" smd rect (at 0 0) (size 1 1) (net 3 "X"))',
                '(pad "1" smd rect (at 2 0) (size 1 1) (net 3 "X"))',
            )
            + _footprint('(pad "A1" smd rect (at 0 0) (size 1 1) (net 3 "X"))', uuid="fp2", ref="U2")
            + ")"
        )
        result = _convert(text)
        (trace,) = result.db.source_trace.list()
        assert trace.connected_source_port_ids == [
            "pcb_component_0_port_1",
            "pcb_component_1_port_A1",
        ]
        assert result.db.source_port.get("pcb_component_1_port_A1").pin_number is None  # type: ignore[union-attr]
