"""Convert composite LIB records into KiCad ``module`` nodes."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TypeAlias

from .board import (
    LOCKED,
    convert_arc,
    convert_circle,
    convert_hole,
    convert_pad,
    convert_solid_region,
    convert_text,
    convert_track,
)
from .models import ChildBlock, Pose
from .records import parse_lib
from .sexpr import node
from .transforms import normalize_angle, to_point

logger = logging.getLogger(__name__)

COMMENT_LAYER = "Cmts.User"
COMMENT_FONT_SIZE = 1
COMMENT_THICKNESS = 0.15

ChildConverter: TypeAlias = Callable[[list[str], Sequence[str], Pose], list | None]

CHILD_CONVERTERS: dict[str, ChildConverter] = {
    "PAD": convert_pad,
    "TEXT": convert_text,
    "TRACK": convert_track,
    "ARC": convert_arc,
    "CIRCLE": convert_circle,
    "HOLE": convert_hole,
    "SOLIDREGION": convert_solid_region,
}


def _convert_child(child: ChildBlock, nets: Sequence[str], pose: Pose) -> list[list]:
    """Convert one child block; unknown markers contribute nothing."""
    converter = CHILD_CONVERTERS.get(child.marker)
    if converter is None:
        logger.debug("Ignoring footprint child %s", child.marker)
        return []
    result = converter(child.fields, nets, pose)
    if result is None:
        return []
    if child.marker == "TRACK":
        return result
    return [result]


def _comment(element_id: str) -> list:
    size = COMMENT_FONT_SIZE
    return [
        "fp_text",
        "user",
        element_id,
        ["at", 0, 0],
        ["layer", COMMENT_LAYER],
        ["effects", ["font", ["size", size, size], ["thickness", COMMENT_THICKNESS]]],
    ]


def convert_lib(fields: list[str], nets: Sequence[str] = ()) -> list:
    """Convert a LIB record and its child elements to a ``module``.

    Children keep their source order and are positioned relative to the
    footprint origin and rotation. A comment text echoing the EasyEDA id is
    always appended.

    Raises:
        ConversionError: if any child fails to convert.
    """
    lib = parse_lib(fields)
    pose = Pose(lib.x, lib.y, lib.rotation)
    children: list[list] = []
    for child in lib.children:
        children.extend(_convert_child(child, nets, pose))

    is_smd = any(child[0] == "pad" and child[2] == "smd" for child in children)
    origin = to_point(lib.x, lib.y)
    angle = normalize_angle(lib.rotation)
    return node(
        "module",
        f"easyeda:{lib.package}",
        LOCKED if lib.locked else None,
        ["layer", "F.Cu"],
        node("at", origin.x, origin.y, angle or None),
        ["attr", "smd"] if is_smd else None,
        *children,
        _comment(lib.id),
    )
