"""Split raw EasyEDA record strings and parse their fields by kind.

Each ``parse_<kind>`` turns the positional field list (record type already
stripped) into a typed record. Missing trailing fields read as empty.
"""

from __future__ import annotations

from .exceptions import RecordError
from .models import (
    ArcRecord,
    ChildBlock,
    CircleRecord,
    CopperAreaRecord,
    HoleRecord,
    LibRecord,
    PadRecord,
    Point,
    SolidRegionRecord,
    TextRecord,
    TrackRecord,
    ViaRecord,
)

CHILD_MARKER = "#@$"

# Position of the element id in each record kind, used for error reports
RECORD_ID_INDEX = {
    "TRACK": 4,
    "ARC": 5,
    "COPPERAREA": 6,
    "SOLIDREGION": 4,
    "HOLE": 3,
    "CIRCLE": 5,
    "PAD": 11,
    "VIA": 5,
    "TEXT": 12,
    "LIB": 5,
}


def split_record(line: str) -> tuple[str, list[str]]:
    """Split ``TYPE~f1~f2...`` into the type tag and its fields."""
    record_type, *fields = line.split("~")
    return record_type, fields


def record_id(record_type: str, fields: list[str]) -> str:
    index = RECORD_ID_INDEX.get(record_type)
    if index is None or index >= len(fields):
        return ""
    return fields[index]


def _field(fields: list[str], index: int, default: str = "") -> str:
    """Get a field as a stripped string, ``default`` when absent."""
    if index < len(fields):
        return fields[index].strip()
    return default


def _float(fields: list[str], index: int, default: float = 0.0) -> float:
    value = _field(fields, index)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        msg = f"Field {index} is not a number: {value!r}"
        raise RecordError(msg) from None


def _optional_float(fields: list[str], index: int) -> float | None:
    if not _field(fields, index):
        return None
    return _float(fields, index)


def _flag(fields: list[str], index: int) -> bool:
    return _field(fields, index) == "1"


def parse_point_list(text: str) -> list[Point]:
    """Parse ``"x1 y1 x2 y2 ..."`` into points."""
    values = text.replace(",", " ").split()
    if len(values) % 2:
        msg = f"Odd number of coordinates in point list: {text!r}"
        raise RecordError(msg)
    try:
        numbers = [float(v) for v in values]
    except ValueError:
        msg = f"Invalid coordinate in point list: {text!r}"
        raise RecordError(msg) from None
    return [Point(numbers[i], numbers[i + 1]) for i in range(0, len(numbers), 2)]


def parse_track(fields: list[str]) -> TrackRecord:
    return TrackRecord(
        width=_float(fields, 0),
        layer_id=_field(fields, 1),
        net=_field(fields, 2),
        points=parse_point_list(_field(fields, 3)),
        id=_field(fields, 4),
        locked=_flag(fields, 5),
    )


def parse_arc(fields: list[str]) -> ArcRecord:
    return ArcRecord(
        width=_float(fields, 0),
        layer_id=_field(fields, 1),
        net=_field(fields, 2),
        path=_field(fields, 3),
        id=_field(fields, 5),
        locked=_flag(fields, 6),
    )


def parse_copper_area(fields: list[str]) -> CopperAreaRecord:
    return CopperAreaRecord(
        layer_id=_field(fields, 1),
        net=_field(fields, 2),
        path=_field(fields, 3),
        clearance=_optional_float(fields, 4),
        id=_field(fields, 6),
        locked=_flag(fields, 10),
    )


def parse_solid_region(fields: list[str]) -> SolidRegionRecord:
    return SolidRegionRecord(
        layer_id=_field(fields, 0),
        net=_field(fields, 1),
        path=_field(fields, 2),
        kind=_field(fields, 3),
        id=_field(fields, 4),
        locked=_flag(fields, 5),
    )


def parse_hole(fields: list[str]) -> HoleRecord:
    return HoleRecord(
        x=_float(fields, 0),
        y=_float(fields, 1),
        radius=_float(fields, 2),
        id=_field(fields, 3),
        locked=_flag(fields, 4),
    )


def parse_circle(fields: list[str]) -> CircleRecord:
    return CircleRecord(
        x=_float(fields, 0),
        y=_float(fields, 1),
        radius=_float(fields, 2),
        width=_float(fields, 3),
        layer_id=_field(fields, 4),
        id=_field(fields, 5),
        locked=_flag(fields, 6),
    )


def parse_pad(fields: list[str]) -> PadRecord:
    return PadRecord(
        shape=_field(fields, 0).upper(),
        x=_float(fields, 1),
        y=_float(fields, 2),
        width=_float(fields, 3),
        height=_float(fields, 4),
        layer_id=_field(fields, 5),
        net=_field(fields, 6),
        number=_field(fields, 7),
        hole_radius=_float(fields, 8),
        points=parse_point_list(_field(fields, 9)),
        rotation=_float(fields, 10),
        id=_field(fields, 11),
        hole_length=_float(fields, 12),
        plated=_field(fields, 14, "Y") != "N",
        locked=_flag(fields, 15),
    )


def parse_via(fields: list[str]) -> ViaRecord:
    return ViaRecord(
        x=_float(fields, 0),
        y=_float(fields, 1),
        diameter=_float(fields, 2),
        net=_field(fields, 3),
        hole_radius=_float(fields, 4),
        id=_field(fields, 5),
        locked=_flag(fields, 6),
    )


def parse_text(fields: list[str]) -> TextRecord:
    return TextRecord(
        kind=_field(fields, 0),
        x=_float(fields, 1),
        y=_float(fields, 2),
        stroke_width=_float(fields, 3),
        rotation=_float(fields, 4),
        layer_id=_field(fields, 6),
        font_size=_optional_float(fields, 8),
        # Text content keeps its surrounding whitespace
        text=fields[9] if len(fields) > 9 else "",
        display=_field(fields, 11),
        id=_field(fields, 12),
        locked=_flag(fields, 14),
    )


def _package_name(attributes: str) -> str:
    """Read the ``package`` entry from a backtick-separated key/value list.

    ``package`1206`3DModel`R_0603`` yields ``1206``; the 3D model pair and
    any other attribute are dropped.
    """
    parts = attributes.split("`")
    pairs = dict(zip(parts[0::2], parts[1::2]))
    return pairs.get("package", "")


def split_children(fields: list[str]) -> tuple[list[str], list[ChildBlock]]:
    """Split a LIB field list into its header and marker-tagged child blocks.

    Child markers can sit inside a field (``...~4177,3108.67#@$SVGNODE~...``),
    so the fields are rejoined before splitting. Empty blocks are dropped.
    """
    header, *blocks = "~".join(fields).split(CHILD_MARKER)
    children = []
    for block in blocks:
        if not block:
            continue
        marker, *child_fields = block.split("~")
        children.append(ChildBlock(marker=marker, fields=child_fields))
    return header.split("~"), children


def parse_lib(fields: list[str]) -> LibRecord:
    header, children = split_children(fields)
    return LibRecord(
        x=_float(header, 0),
        y=_float(header, 1),
        package=_package_name(_field(header, 2)),
        rotation=_float(header, 3),
        id=_field(header, 5),
        locked=_flag(header, 9),
        children=children,
    )
