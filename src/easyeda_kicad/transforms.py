"""Coordinate transforms from EasyEDA raw units to KiCad millimetres.

Board-level elements map through the fixed global origin; footprint children
are expressed relative to their footprint's pose.
"""

from __future__ import annotations

import sys

from ezdxf.math import Vec2

from .models import Point, Pose

ORIGIN = Point(4000.0, 3000.0)
SCALE = 0.254  # mm per raw unit
PRECISION = 3
EPSILON = sys.float_info.epsilon

BOARD_POSE = Pose(ORIGIN.x, ORIGIN.y, 0.0)


def round_value(value: float, precision: int = PRECISION) -> float:
    """Round to ``precision`` places, collapsing values near zero to 0."""
    if -EPSILON < value < EPSILON:
        return 0.0
    rounded = round(value, precision)
    return rounded if rounded != 0 else 0.0


def to_length(raw: float) -> float:
    """Scale a raw length (width, size, drill) to millimetres."""
    return round(float(raw) * SCALE, 6)


def to_point(x: float, y: float) -> Point:
    """Map a raw board point to target space."""
    return Point(
        round_value((float(x) - ORIGIN.x) * SCALE),
        round_value((float(y) - ORIGIN.y) * SCALE),
    )


def normalize_angle(angle_deg: float) -> float:
    """Normalize an angle into (-180, 180]."""
    angle = float(angle_deg) % 360.0
    if angle > 180.0:
        angle -= 360.0
    return round_value(angle)


def compose_rotation(parent_deg: float, child_deg: float) -> float:
    return normalize_angle(parent_deg + child_deg)


def to_local(x: float, y: float, pose: Pose, mirror: bool = False) -> Point:
    """Transform a raw board point into footprint-local millimetres.

    1. Subtract the footprint anchor and scale
    2. Rotate by pose.angle degrees
    3. Negate X if the element sits on the back side
    """
    offset = Vec2((float(x) - pose.x) * SCALE, (float(y) - pose.y) * SCALE)
    local = offset.rotate_deg(pose.angle)
    local_x = -local.x if mirror else local.x
    return Point(round_value(local_x), round_value(local.y))


def local_rotation(angle_deg: float, pose: Pose, mirror: bool = False) -> float:
    """Rotation of a footprint child, composed with the footprint rotation.

    Child rotations are stored board-absolute, so the relative part is
    recovered first and negated for back-side elements.
    """
    relative = float(angle_deg) - pose.angle
    if mirror:
        relative = -relative
    return compose_rotation(pose.angle, relative)


def place(x: float, y: float, pose: Pose | None = None, mirror: bool = False) -> Point:
    """Board coordinates when ``pose`` is None, footprint-local otherwise."""
    if pose is None:
        return to_point(x, y)
    return to_local(x, y, pose, mirror)


def place_angle(angle_deg: float, pose: Pose | None = None, mirror: bool = False) -> float:
    if pose is None:
        return normalize_angle(angle_deg)
    return local_rotation(angle_deg, pose, mirror)
