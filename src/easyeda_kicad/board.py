"""Converters from EasyEDA primitive records to KiCad nodes.

Every converter takes ``(fields, nets=(), pose=None)``. Passing the pose of
the owning footprint switches to the footprint form of the node (``fp_*``
names, footprint-local coordinates); board-level calls leave it as None.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .arcs import resolve_arc
from .exceptions import RecordError
from .layers import MULTI_LAYER_ID, get_layer, pad_layers
from .models import LayerEntry, Point, Pose
from .nets import resolve_net
from .records import (
    parse_arc,
    parse_circle,
    parse_copper_area,
    parse_hole,
    parse_pad,
    parse_solid_region,
    parse_text,
    parse_track,
    parse_via,
)
from .sexpr import Symbol, node
from .svg_path import extract_polygon, extract_single_arc, has_arc
from .transforms import BOARD_POSE, place, place_angle, round_value, to_length, to_local, to_point

logger = logging.getLogger(__name__)

ZONE_HATCH_PITCH = 0.508
ZONE_CLEARANCE = 0.254

PAD_SHAPES = {
    "ELLIPSE": "circle",
    "RECT": "rect",
    "OVAL": "oval",
    "POLYGON": "custom",
}

LOCKED = Symbol("locked")
HIDE = Symbol("hide")

# Pads with no owning footprint are anchored at the raw zero point
_PAD_ANCHOR = Pose(0.0, 0.0, 0.0)


def _xy(keyword: str, point: Point) -> list:
    return [keyword, point.x, point.y]


def _at(point: Point, angle: float = 0.0) -> list:
    """``(at x y [angle])``; a zero angle is omitted."""
    return node("at", point.x, point.y, angle or None)


def _pts(points: list[Point]) -> list:
    return ["pts", *(_xy("xy", p) for p in points)]


def _mirrored(layer: LayerEntry, pose: Pose | None) -> bool:
    """Back-side footprint children are mirrored; board elements never are."""
    return pose is not None and layer.is_back


def _prefix(pose: Pose | None) -> str:
    return "gr_" if pose is None else "fp_"


def _net_node(name: str, nets: Sequence[str]) -> list | None:
    """``(net index name)`` for pads, omitted when the net is not cataloged."""
    net_id = resolve_net(name, nets)
    if not name or net_id < 0:
        return None
    return ["net", net_id, name]


def convert_track(fields: list[str], nets: Sequence[str] = (), pose: Pose | None = None) -> list[list]:
    """Convert a TRACK polyline into one node per segment.

    Copper tracks become ``segment`` nodes carrying the net index; other
    layers become ``gr_line``. Inside footprints every segment is an
    ``fp_line``.

    Raises:
        MissingLayerError: if the layer id is unknown.
    """
    track = parse_track(fields)
    layer = get_layer(track.layer_id)
    mirror = _mirrored(layer, pose)
    width = to_length(track.width)
    points = [place(p.x, p.y, pose, mirror) for p in track.points]

    if pose is None and layer.is_copper:
        net_id = resolve_net(track.net, nets)
        return [
            [
                "segment",
                _xy("start", start),
                _xy("end", end),
                ["width", width],
                ["layer", layer.name],
                ["net", net_id],
            ]
            for start, end in zip(points, points[1:])
        ]

    keyword = _prefix(pose) + "line"
    return [
        [keyword, _xy("start", start), _xy("end", end), ["width", width], ["layer", layer.name]]
        for start, end in zip(points, points[1:])
    ]


def convert_arc(fields: list[str], nets: Sequence[str] = (), pose: Pose | None = None) -> list | None:
    """Convert an ARC record to ``gr_arc``/``fp_arc``.

    KiCad arcs are given as center (``start``), the point the sweep departs
    from (``end``) and the sweep ``angle``. Paths that are not a single
    circular arc yield None.
    """
    record = parse_arc(fields)
    layer = get_layer(record.layer_id)
    arc = extract_single_arc(record.path)
    if arc is None:
        logger.debug("Skipping ARC %s: path is not a single circular arc", record.id)
        return None

    geometry = resolve_arc(arc.start, arc.end, arc.radius, arc.large_arc, arc.sweep)
    mirror = _mirrored(layer, pose)
    # Mirroring reverses the direction; departing from the other end keeps
    # the sweep positive.
    departure = geometry.end if mirror else geometry.start
    return [
        _prefix(pose) + "arc",
        _xy("start", place(geometry.center.x, geometry.center.y, pose, mirror)),
        _xy("end", place(departure.x, departure.y, pose, mirror)),
        ["angle", round_value(geometry.angle)],
        ["width", to_length(record.width)],
        ["layer", layer.name],
    ]


def convert_copper_area(fields: list[str], nets: Sequence[str] = (), pose: Pose | None = None) -> list | None:
    """Convert a COPPERAREA record to a copper-pour ``zone``."""
    area = parse_copper_area(fields)
    layer = get_layer(area.layer_id)
    polygon = extract_polygon(area.path)
    if polygon is None:
        logger.debug("Skipping COPPERAREA %s: outline is not a straight-edged polygon", area.id)
        return None

    clearance = ZONE_CLEARANCE if area.clearance is None else to_length(area.clearance)
    return [
        "zone",
        ["net", resolve_net(area.net, nets)],
        ["net_name", area.net],
        ["layer", layer.name],
        ["hatch", "edge", ZONE_HATCH_PITCH],
        ["connect_pads", ["clearance", clearance]],
        ["polygon", _pts([to_point(p.x, p.y) for p in polygon])],
    ]


def convert_solid_region(fields: list[str], nets: Sequence[str] = (), pose: Pose | None = None) -> list | None:
    """Convert a SOLIDREGION record.

    Regions bounded by arcs (typically circular cutouts) are not supported
    and yield None. On the board a ``cutout`` becomes a keepout zone and a
    ``solid`` region a filled zone on copper or a ``gr_poly`` elsewhere;
    inside footprints solid regions become ``fp_poly``.
    """
    region = parse_solid_region(fields)
    layer = get_layer(region.layer_id)
    if has_arc(region.path):
        logger.debug("Skipping SOLIDREGION %s: arcs in region outlines are unsupported", region.id)
        return None
    polygon = extract_polygon(region.path)
    if polygon is None:
        logger.debug("Skipping SOLIDREGION %s: outline is not a polygon", region.id)
        return None

    mirror = _mirrored(layer, pose)
    pts = _pts([place(p.x, p.y, pose, mirror) for p in polygon])

    if pose is not None:
        if region.kind != "solid":
            logger.debug("Skipping %s region %s inside footprint", region.kind, region.id)
            return None
        return ["fp_poly", pts, ["layer", layer.name], ["width", 0]]

    if region.kind == "cutout":
        return [
            "zone",
            ["net", 0],
            ["net_name", ""],
            ["hatch", "edge", ZONE_HATCH_PITCH],
            ["layer", layer.name],
            ["keepout", ["tracks", "allowed"], ["vias", "allowed"], ["copperpour", "not_allowed"]],
            ["polygon", pts],
        ]
    if region.kind == "solid":
        if not layer.is_copper:
            return ["gr_poly", pts, ["layer", layer.name], ["width", 0]]
        return [
            "zone",
            ["net", resolve_net(region.net, nets)],
            ["net_name", region.net],
            ["hatch", "edge", ZONE_HATCH_PITCH],
            ["layer", layer.name],
            ["connect_pads", ["clearance", ZONE_CLEARANCE]],
            ["fill", "yes"],
            ["polygon", pts],
        ]

    logger.debug("Skipping SOLIDREGION %s of unsupported kind %r", region.id, region.kind)
    return None


def _hole_pad(position: Point, diameter: float) -> list:
    return [
        "pad",
        "",
        "np_thru_hole",
        "circle",
        _at(position),
        ["size", diameter, diameter],
        ["drill", diameter],
        ["layers", "*.Cu", "*.Mask"],
    ]


def convert_hole(fields: list[str], nets: Sequence[str] = (), pose: Pose | None = None) -> list:
    """Convert a HOLE record.

    On the board the hole is wrapped in a virtual mounting-hole footprint;
    inside a footprint it is a bare non-plated pad.
    """
    hole = parse_hole(fields)
    diameter = to_length(hole.radius * 2)
    if pose is not None:
        return _hole_pad(to_local(hole.x, hole.y, pose), diameter)

    return node(
        "module",
        f"AutoGenerated:MountingHole_{diameter:.2f}mm",
        LOCKED if hole.locked else None,
        ["layer", "F.Cu"],
        _at(to_point(hole.x, hole.y)),
        ["attr", "virtual"],
        ["fp_text", "reference", "", _at(Point(0, 0)), ["layer", "F.SilkS"]],
        ["fp_text", "value", "", _at(Point(0, 0)), ["layer", "F.SilkS"]],
        _hole_pad(Point(0, 0), diameter),
    )


def convert_circle(fields: list[str], nets: Sequence[str] = (), pose: Pose | None = None) -> list:
    """Convert a CIRCLE record; ``end`` lies one radius along +X."""
    circle = parse_circle(fields)
    layer = get_layer(circle.layer_id)
    mirror = _mirrored(layer, pose)
    return [
        _prefix(pose) + "circle",
        _xy("center", place(circle.x, circle.y, pose, mirror)),
        _xy("end", place(circle.x + circle.radius, circle.y, pose, mirror)),
        ["layer", layer.name],
        ["width", to_length(circle.width)],
    ]


def convert_via(fields: list[str], nets: Sequence[str] = (), pose: Pose | None = None) -> list:
    via = parse_via(fields)
    return [
        "via",
        _xy("at", place(via.x, via.y, pose)),
        ["size", to_length(via.diameter)],
        ["drill", to_length(via.hole_radius * 2)],
        ["layers", "F.Cu", "B.Cu"],
        ["net", resolve_net(via.net, nets)],
    ]


def is_via_pad(fields: list[str]) -> bool:
    """Round multi-layer pads are plain vias in KiCad."""
    pad = parse_pad(fields)
    return pad.shape == "ELLIPSE" and pad.layer_id == MULTI_LAYER_ID and pad.hole_radius > 0


def convert_pad_to_via(fields: list[str], nets: Sequence[str] = (), pose: Pose | None = None) -> list:
    """Convert a round multi-layer PAD into a ``via``.

    Pad coordinates are taken relative to ``pose``; without one they are
    used as already-local raw units.

    Raises:
        RecordError: if the pad is not a round multi-layer pad.
    """
    pad = parse_pad(fields)
    if pad.shape != "ELLIPSE" or pad.layer_id != MULTI_LAYER_ID:
        msg = f"Pad {pad.id} ({pad.shape} on layer {pad.layer_id}) cannot become a via"
        raise RecordError(msg, pad.id)

    position = to_local(pad.x, pad.y, pose or _PAD_ANCHOR)
    return [
        "via",
        _xy("at", position),
        ["size", round_value(to_length(max(pad.width, pad.height)))],
        ["drill", round_value(to_length(pad.hole_radius * 2))],
        ["layers", "F.Cu", "B.Cu"],
        ["net", resolve_net(pad.net, nets)],
    ]


def _pad_drill(shape: str, drill: float, hole_length: float, width: float, height: float) -> list | None:
    if drill <= 0:
        return None
    if shape == "oval" and hole_length > 0:
        slot = to_length(hole_length)
        # The slot runs along the pad's longer side
        if width >= height:
            return ["drill", "oval", slot, drill]
        return ["drill", "oval", drill, slot]
    return ["drill", drill]


def convert_pad(fields: list[str], nets: Sequence[str] = (), pose: Pose | None = None) -> list:
    """Convert a PAD record to a footprint ``pad`` node.

    Without a pose the pad is placed relative to the board origin, as used by
    ``convert_board_pad``.

    Raises:
        RecordError: for pad shapes KiCad has no equivalent for.
    """
    pad = parse_pad(fields)
    shape = PAD_SHAPES.get(pad.shape)
    if shape is None:
        msg = f"Unsupported pad shape {pad.shape!r}"
        raise RecordError(msg, pad.id)

    layer = get_layer(pad.layer_id)
    anchor = pose or BOARD_POSE
    mirror = _mirrored(layer, pose)
    drill = to_length(pad.hole_radius * 2)
    width = to_length(pad.width)
    height = to_length(pad.height)
    number = int(pad.number) if pad.number.isdigit() else pad.number
    if drill <= 0:
        pad_type = "smd"
    elif pad.plated:
        pad_type = "thru_hole"
    else:
        pad_type = "np_thru_hole"

    primitives = options = None
    if shape == "custom":
        # Outline vertices are expressed in the pad's own frame
        pad_pose = Pose(pad.x, pad.y, pad.rotation)
        outline = [to_local(p.x, p.y, pad_pose, mirror) for p in pad.points]
        options = ["options", ["clearance", "outline"], ["anchor", "circle"]]
        primitives = ["primitives", ["gr_poly", _pts(outline), ["width", 0]]]
        width = height = min(width, height)

    return node(
        "pad",
        number,
        pad_type,
        shape,
        _at(to_local(pad.x, pad.y, anchor, mirror), place_angle(pad.rotation, anchor, mirror)),
        ["size", width, height],
        ["layers", *pad_layers(pad.layer_id)],
        _pad_drill(shape, drill, pad.hole_length, width, height),
        _net_node(pad.net, nets),
        options,
        primitives,
    )


def convert_board_pad(fields: list[str], nets: Sequence[str] = (), pose: Pose | None = None) -> list:
    """Convert a free-standing PAD placed directly on the board.

    Round multi-layer pads become vias; anything else is wrapped in a
    single-pad footprint.
    """
    if is_via_pad(fields):
        return convert_pad_to_via(fields, nets, BOARD_POSE)

    pad = parse_pad(fields)
    pad_pose = Pose(pad.x, pad.y, 0.0)
    return node(
        "module",
        f"AutoGenerated:Pad_{pad.number or pad.id}",
        LOCKED if pad.locked else None,
        ["layer", "F.Cu"],
        _at(to_point(pad.x, pad.y)),
        convert_pad(fields, nets, pad_pose),
    )


def convert_text(fields: list[str], nets: Sequence[str] = (), pose: Pose | None = None) -> list:
    """Convert a TEXT record to ``gr_text`` or ``fp_text``.

    Footprint texts of kind ``P`` are the reference, ``N`` the value (moved
    from silkscreen to the fabrication layer), anything else user text.
    """
    text = parse_text(fields)
    layer = get_layer(text.layer_id)
    mirror = _mirrored(layer, pose)
    size = to_length(text.font_size) if text.font_size is not None else 1.0
    position = _at(place(text.x, text.y, pose, mirror), place_angle(text.rotation, pose, mirror))
    effects = [
        "effects",
        ["font", ["size", size, size], ["thickness", to_length(text.stroke_width)]],
        # Back-side text reads mirrored in KiCad
        node("justify", "left", Symbol("mirror") if layer.is_back else None),
    ]
    hidden = HIDE if text.display == "none" else None

    if pose is None:
        return node("gr_text", text.text, position, ["layer", layer.name], hidden, effects)

    kind = {"P": "reference", "N": "value"}.get(text.kind, "user")
    layer_name = layer.name.replace(".SilkS", ".Fab") if kind == "value" else layer.name
    return node("fp_text", kind, text.text, position, ["layer", layer_name], hidden, effects)
