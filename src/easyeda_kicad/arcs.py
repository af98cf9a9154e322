"""Resolve endpoint-parameterized circular arcs to center form."""

from __future__ import annotations

import math

from ezdxf.math import Vec2

from .exceptions import ArcGeometryError
from .models import ArcGeometry, Point
from .transforms import round_value

_MIN_CHORD = 1e-9


def _sweep_between(start: Vec2, end: Vec2, center: Vec2, sweep: bool) -> float:
    """Angle travelled from start to end around center, in [0, 360).

    ``sweep`` set means increasing angles, which is clockwise on screen
    because both coordinate spaces have Y pointing down.
    """
    a0 = (start - center).angle_deg
    a1 = (end - center).angle_deg
    delta = (a1 - a0) if sweep else (a0 - a1)
    return delta % 360.0


def _candidate_centers(start: Vec2, end: Vec2, radius: float) -> list[Vec2]:
    chord = end - start
    half = chord.magnitude / 2.0
    mid = start.lerp(end)
    h = math.sqrt(max(radius * radius - half * half, 0.0))
    if h < _MIN_CHORD:
        return [mid]
    normal = chord.orthogonal().normalize()
    return [mid + normal * h, mid - normal * h]


def resolve_arc(
    start: Point,
    end: Point,
    radius: float,
    large_arc: bool,
    sweep: bool,
) -> ArcGeometry:
    """Compute center, angles and sweep of a circular arc.

    Both candidate centers on the chord's perpendicular bisector are tried;
    the one whose traversal in the ``sweep`` direction spans more than 180
    degrees exactly when ``large_arc`` is set wins. A radius too small to
    reach both endpoints is scaled up to half the chord, as SVG renderers do.

    When ``sweep`` is false the arc is reported from ``end`` to ``start`` so
    that the reported start is always where the positive sweep departs.

    Raises:
        ArcGeometryError: for coincident endpoints or a non-positive radius.
    """
    s = Vec2(start.x, start.y)
    e = Vec2(end.x, end.y)
    chord = s.distance(e)
    if chord < _MIN_CHORD:
        msg = f"Arc endpoints coincide at ({start.x:g}, {start.y:g})"
        raise ArcGeometryError(msg)
    if radius <= 0:
        msg = f"Arc radius must be positive, got {radius:g}"
        raise ArcGeometryError(msg)

    radius = max(radius, chord / 2.0)
    candidates = _candidate_centers(s, e, radius)

    center = candidates[0]
    for candidate in candidates:
        span = _sweep_between(s, e, candidate, sweep)
        if (span > 180.0) == large_arc:
            center = candidate
            break

    # Rounding can land exactly on a full turn
    angle = round_value(_sweep_between(s, e, center, sweep)) % 360.0
    first, second = (start, end) if sweep else (end, start)
    c = Point(center.x, center.y)
    return ArcGeometry(
        center=c,
        start=first,
        end=second,
        radius=radius,
        start_angle=(Vec2(first.x, first.y) - center).angle_deg,
        end_angle=(Vec2(second.x, second.y) - center).angle_deg,
        angle=angle,
    )
