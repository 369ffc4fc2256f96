"""Extract the typed board tree from a parsed .kicad_pcb S-expression.

Converts raw SExp nodes into the dataclasses of ``schema.board``. Values
that are missing or malformed fall back to neutral defaults; deciding what
to do with such entities is left to the conversion stages.
"""

from __future__ import annotations

from ..geometry import arcs
from ..sexp import Document, SExp
from .board import (
    Drill,
    FilledPolygon,
    Footprint,
    GraphicArc,
    GraphicCircle,
    GraphicLine,
    GraphicRect,
    GraphicText,
    KicadBoard,
    Net,
    Pad,
    Via,
    Zone,
)
from .common import Point, Position, Size

_FILLED_VALUES = ("yes", "solid")


def _float(val: str | None, default: float = 0.0) -> float:
    if val is None:
        return default
    try:
        return float(val)
    except (ValueError, TypeError):
        return default


def _int(val: str | None, default: int = 0) -> int:
    if val is None:
        return default
    try:
        return int(val)
    except (ValueError, TypeError):
        return default


def extract_position(node: SExp | None) -> Position:
    """Extract Position from an (at x y [angle]) node."""
    if node is None:
        return Position(0, 0)
    vals = node.atom_values
    x = _float(vals[0]) if len(vals) > 0 else 0.0
    y = _float(vals[1]) if len(vals) > 1 else 0.0
    angle = _float(vals[2]) if len(vals) > 2 else 0.0
    return Position(x, y, angle)


def extract_point(node: SExp | None) -> Point:
    """Extract Point from a (start x y) / (xy x y) style node."""
    pos = extract_position(node)
    return Point(pos.x, pos.y)


def extract_points(node: SExp | None) -> list[Point]:
    """Extract the (xy ...) points of a node holding a (pts ...) child."""
    if node is None:
        return []
    pts = node.get("pts")
    if pts is None:
        return []
    return [extract_point(xy) for xy in pts.find_all("xy")]


def _stroke_width(node: SExp) -> float:
    stroke = node.get("stroke")
    if stroke is not None:
        return _float(stroke.child_value("width"))
    return _float(node.child_value("width"))


def _is_filled(node: SExp) -> bool:
    fill = node.get("fill")
    if fill is None:
        return False
    if fill.first_value in _FILLED_VALUES:
        return True
    # (fill (type solid)) in KiCad 7
    return fill.child_value("type") in _FILLED_VALUES


def _layer(node: SExp) -> str:
    return node.child_value("layer") or ""


def _font_size(node: SExp) -> float:
    effects = node.get("effects")
    font = effects.get("font") if effects is not None else None
    size = font.get("size") if font is not None else None
    if size is None:
        return 1.0
    vals = size.floats()
    return vals[0] if vals else 1.0


def _is_hidden(node: SExp) -> bool:
    if node.has_flag("hide"):
        return True
    effects = node.get("effects")
    return effects is not None and effects.has_flag("hide")


def extract_line(node: SExp) -> GraphicLine:
    return GraphicLine(
        start=extract_point(node.get("start")),
        end=extract_point(node.get("end")),
        layer=_layer(node),
        width=_stroke_width(node),
    )


def extract_arc(node: SExp) -> GraphicArc:
    """Extract an arc, converting the legacy (start=center, end, angle) form."""
    if node.get("mid") is None and node.get("angle") is not None:
        center = extract_point(node.get("start"))
        start = extract_point(node.get("end"))
        mid, end = arcs.arc_from_center(center, start, _float(node.child_value("angle")))
    else:
        start = extract_point(node.get("start"))
        mid = extract_point(node.get("mid"))
        end = extract_point(node.get("end"))
    return GraphicArc(start=start, mid=mid, end=end, layer=_layer(node), width=_stroke_width(node))


def extract_circle(node: SExp) -> GraphicCircle:
    return GraphicCircle(
        center=extract_point(node.get("center")),
        end=extract_point(node.get("end")),
        layer=_layer(node),
        width=_stroke_width(node),
        filled=_is_filled(node),
    )


def extract_rect(node: SExp) -> GraphicRect:
    return GraphicRect(
        start=extract_point(node.get("start")),
        end=extract_point(node.get("end")),
        layer=_layer(node),
        width=_stroke_width(node),
        filled=_is_filled(node),
    )


def extract_text(node: SExp) -> GraphicText:
    """Extract gr_text / fp_text: (fp_text reference "R1" (at ..) (layer ..) ...)."""
    vals = node.atom_values
    if node.name == "fp_text" and len(vals) >= 2:
        kind, text = vals[0], vals[1]
    else:
        kind, text = "user", (vals[0] if vals else "")
    return GraphicText(
        text=text,
        position=extract_position(node.get("at")),
        layer=_layer(node),
        font_size=_font_size(node),
        hidden=_is_hidden(node),
        kind=kind,
    )


def _extract_net(node: SExp | None) -> tuple[int | None, str | None]:
    """(net 1 "GND") -> (1, "GND"); (net "GND") -> (None, "GND")."""
    if node is None:
        return None, None
    vals = node.atom_values
    if not vals:
        return None, None
    try:
        number = int(vals[0])
    except ValueError:
        return None, vals[0]
    return number, (vals[1] if len(vals) > 1 else None)


def _extract_drill(node: SExp | None) -> Drill | None:
    if node is None:
        return None
    nums = node.floats()
    if not nums:
        return None
    width = nums[0]
    height = nums[1] if len(nums) > 1 else width
    return Drill(width=width, height=height, oval="oval" in node.atom_values)


def extract_pad(pad_node: SExp) -> Pad:
    """Extract a Pad from a (pad ...) S-expression node."""
    vals = pad_node.atom_values
    number = vals[0] if len(vals) > 0 else ""
    pad_type = vals[1] if len(vals) > 1 else ""
    shape = vals[2] if len(vals) > 2 else ""

    size_node = pad_node.get("size")
    size = Size(0.0, 0.0)
    if size_node is not None:
        size_vals = size_node.floats()
        width = size_vals[0] if len(size_vals) > 0 else 0.0
        size = Size(width, size_vals[1] if len(size_vals) > 1 else width)

    layers_node = pad_node.get("layers")
    rratio = pad_node.child_value("roundrect_rratio")

    primitives: list[list[Point]] = []
    prim_node = pad_node.get("primitives")
    if prim_node is not None:
        for poly in prim_node.find_all("gr_poly"):
            points = extract_points(poly)
            if points:
                primitives.append(points)

    net_number, net_name = _extract_net(pad_node.get("net"))

    return Pad(
        number=number,
        pad_type=pad_type,
        shape=shape,
        position=extract_position(pad_node.get("at")),
        size=size,
        layers=layers_node.atom_values if layers_node is not None else [],
        drill=_extract_drill(pad_node.get("drill")),
        roundrect_rratio=_float(rratio) if rratio is not None else None,
        primitives=primitives,
        net_number=net_number,
        net_name=net_name,
    )


def extract_footprint(fp_node: SExp) -> Footprint:
    """Extract one (footprint ...) or legacy (module ...) node."""
    reference = ""
    value = ""
    texts: list[GraphicText] = []
    for prop in fp_node.find_all("property"):
        prop_vals = prop.atom_values
        prop_name = prop_vals[0] if prop_vals else ""
        prop_val = prop_vals[1] if len(prop_vals) > 1 else ""
        if prop_name == "Reference":
            reference = prop_val
        elif prop_name == "Value":
            value = prop_val
        # KiCad 8+ draws reference/value as positioned properties
        if prop.get("layer") is not None:
            kind = {"Reference": "reference", "Value": "value"}.get(prop_name, "user")
            texts.append(
                GraphicText(
                    text=prop_val,
                    position=extract_position(prop.get("at")),
                    layer=_layer(prop),
                    font_size=_font_size(prop),
                    hidden=_is_hidden(prop),
                    kind=kind,
                )
            )

    for text_node in fp_node.find_all("fp_text"):
        text = extract_text(text_node)
        if text.kind == "reference" and not reference:
            reference = text.text
        elif text.kind == "value" and not value:
            value = text.text
        texts.append(text)

    uuid = fp_node.child_value("uuid") or fp_node.child_value("tstamp") or ""

    return Footprint(
        library=fp_node.first_value or "",
        reference=reference,
        value=value,
        position=extract_position(fp_node.get("at")),
        layer=_layer(fp_node),
        uuid=uuid,
        pads=[extract_pad(p) for p in fp_node.find_all("pad")],
        lines=[extract_line(n) for n in fp_node.find_all("fp_line")],
        arcs=[extract_arc(n) for n in fp_node.find_all("fp_arc")],
        circles=[extract_circle(n) for n in fp_node.find_all("fp_circle")],
        texts=texts,
    )


def extract_nets(root: SExp) -> list[Net]:
    """Extract the board-level net table."""
    nets: list[Net] = []
    for node in root.find_all("net"):
        vals = node.atom_values
        if len(vals) >= 2:
            nets.append(Net(number=_int(vals[0]), name=vals[1]))
        elif len(vals) == 1:
            nets.append(Net(number=_int(vals[0]), name=""))
    return nets


def extract_via(node: SExp) -> Via:
    size = node.child_value("size")
    drill = node.child_value("drill")
    layers_node = node.get("layers")
    return Via(
        position=extract_point(node.get("at")),
        size=_float(size) if size is not None else None,
        drill=_float(drill) if drill is not None else None,
        layers=layers_node.atom_values if layers_node is not None else [],
        net_number=_int(node.child_value("net")),
    )


def extract_zone(node: SExp) -> Zone:
    layers_node = node.get("layers")
    if layers_node is not None:
        layers = layers_node.atom_values
    else:
        layer = node.child_value("layer")
        layers = [layer] if layer else []

    fill = node.get("fill")
    filled_polygons = [
        FilledPolygon(layer=fp.child_value("layer") or "", points=extract_points(fp))
        for fp in node.find_all("filled_polygon")
    ]

    return Zone(
        net_number=_int(node.child_value("net")),
        net_name=node.child_value("net_name") or "",
        layers=layers,
        fill_enabled=fill is not None and fill.first_value == "yes",
        outline=extract_points(node.get("polygon")),
        filled_polygons=[fp for fp in filled_polygons if fp.points],
    )


def extract_board(doc: Document | SExp) -> KicadBoard:
    """Extract the complete typed tree of a board document."""
    root = doc.root if isinstance(doc, Document) else doc

    thickness = 1.6
    general = root.get("general")
    if general is not None:
        thickness = _float(general.child_value("thickness"), 1.6)

    footprint_nodes = root.find_all("footprint") + root.find_all("module")

    return KicadBoard(
        version=root.child_value("version") or "",
        generator=root.child_value("generator") or "",
        thickness=thickness,
        nets=extract_nets(root),
        footprints=[extract_footprint(n) for n in footprint_nodes],
        lines=[extract_line(n) for n in root.find_all("gr_line")],
        arcs=[extract_arc(n) for n in root.find_all("gr_arc")],
        circles=[extract_circle(n) for n in root.find_all("gr_circle")],
        rects=[extract_rect(n) for n in root.find_all("gr_rect")],
        texts=[extract_text(n) for n in root.find_all("gr_text")],
        vias=[extract_via(n) for n in root.find_all("via")],
        zones=[extract_zone(n) for n in root.find_all("zone")],
    )
