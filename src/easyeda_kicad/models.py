"""Data classes for EasyEDA records, path geometry and conversion results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TypeAlias

from .exceptions import ConversionError


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Pose:
    """Raw-space anchor of a footprint: position plus rotation in degrees."""
    x: float
    y: float
    angle: float = 0.0


class LayerKind(Enum):
    COPPER = "copper"
    SILK = "silk"
    MASK = "mask"
    PASTE = "paste"
    EDGECUT = "edgecut"
    USER = "user"


@dataclass(frozen=True)
class LayerEntry:
    name: str
    kind: LayerKind

    @property
    def is_copper(self) -> bool:
        return self.kind is LayerKind.COPPER

    @property
    def is_back(self) -> bool:
        return self.name.startswith("B.")


# --- Path commands ---


@dataclass(frozen=True)
class PathCommand:
    """A single command of an EasyEDA path string."""


@dataclass(frozen=True)
class MoveTo(PathCommand):
    point: Point = Point(0, 0)


@dataclass(frozen=True)
class LineTo(PathCommand):
    point: Point = Point(0, 0)


@dataclass(frozen=True)
class ArcTo(PathCommand):
    end: Point = Point(0, 0)
    rx: float = 0.0
    ry: float = 0.0
    rotation: float = 0.0  # degrees, irrelevant for circular arcs
    large_arc: bool = False
    sweep: bool = False


@dataclass(frozen=True)
class ClosePath(PathCommand):
    pass


@dataclass(frozen=True)
class SingleArc:
    """A path made of one move and one circular arc, in raw units."""
    start: Point
    end: Point
    radius: float
    large_arc: bool
    sweep: bool


@dataclass(frozen=True)
class ArcGeometry:
    center: Point
    start: Point  # point the positive sweep departs from
    end: Point
    radius: float
    start_angle: float  # degrees
    end_angle: float  # degrees
    angle: float  # sweep, degrees in [0, 360)


# --- Source records, one per EasyEDA primitive kind ---
# Every kind carries its lock flag; only holes, free pads and footprints
# emit it.


@dataclass(frozen=True)
class TrackRecord:
    width: float
    layer_id: str
    net: str
    points: list[Point]
    id: str
    locked: bool


@dataclass(frozen=True)
class ArcRecord:
    width: float
    layer_id: str
    net: str
    path: str
    id: str
    locked: bool


@dataclass(frozen=True)
class CopperAreaRecord:
    layer_id: str
    net: str
    path: str
    clearance: float | None  # raw units, None when the field is empty
    id: str
    locked: bool


@dataclass(frozen=True)
class SolidRegionRecord:
    layer_id: str
    net: str
    path: str
    kind: str  # "solid", "cutout" or "npth"
    id: str
    locked: bool


@dataclass(frozen=True)
class HoleRecord:
    x: float
    y: float
    radius: float
    id: str
    locked: bool


@dataclass(frozen=True)
class CircleRecord:
    x: float
    y: float
    radius: float
    width: float
    layer_id: str
    id: str
    locked: bool


@dataclass(frozen=True)
class PadRecord:
    shape: str
    x: float
    y: float
    width: float
    height: float
    layer_id: str
    net: str
    number: str
    hole_radius: float
    points: list[Point]
    rotation: float
    id: str
    hole_length: float
    plated: bool
    locked: bool


@dataclass(frozen=True)
class ViaRecord:
    x: float
    y: float
    diameter: float
    net: str
    hole_radius: float
    id: str
    locked: bool


@dataclass(frozen=True)
class TextRecord:
    kind: str  # "P" reference, "N" value, anything else user text
    x: float
    y: float
    stroke_width: float
    rotation: float
    layer_id: str
    font_size: float | None
    text: str
    display: str
    id: str
    locked: bool


@dataclass(frozen=True)
class ChildBlock:
    """One marker-tagged element of a footprint's flattened child stream."""
    marker: str
    fields: list[str]


@dataclass(frozen=True)
class LibRecord:
    x: float
    y: float
    package: str
    rotation: float
    id: str
    locked: bool
    children: list[ChildBlock] = field(default_factory=list)


# --- Conversion results ---


@dataclass
class Converted:
    record_type: str
    record_id: str
    nodes: list


@dataclass
class Skipped:
    record_type: str
    record_id: str
    reason: str


@dataclass
class Failed:
    record_type: str
    record_id: str
    error: ConversionError


ConversionResult: TypeAlias = Converted | Skipped | Failed


@dataclass
class BoardConversion:
    nets: list[str]
    results: list[ConversionResult]
    tree: list

    @property
    def failures(self) -> list[Failed]:
        return [r for r in self.results if isinstance(r, Failed)]

    @property
    def skipped(self) -> list[Skipped]:
        return [r for r in self.results if isinstance(r, Skipped)]
