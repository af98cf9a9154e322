"""easyeda-kicad: Convert EasyEDA PCB records to KiCad board S-expressions."""

__version__ = "0.1.0"

from .arcs import resolve_arc
from .board import (
    convert_arc,
    convert_board_pad,
    convert_circle,
    convert_copper_area,
    convert_hole,
    convert_pad,
    convert_pad_to_via,
    convert_solid_region,
    convert_text,
    convert_track,
    convert_via,
)
from .document import convert_board, convert_record, convert_shapes, load_document
from .exceptions import ArcGeometryError, ConversionError, MissingLayerError, PathSyntaxError, RecordError
from .footprint import convert_lib
from .layers import get_layer
from .nets import collect_nets, resolve_net
from .sexpr import encode_object, format_document, normalize
from .svg_path import extract_polygon, extract_single_arc, parse_path
from .transforms import to_length, to_point

__all__ = [
    "ArcGeometryError",
    "ConversionError",
    "MissingLayerError",
    "PathSyntaxError",
    "RecordError",
    "collect_nets",
    "convert_arc",
    "convert_board",
    "convert_board_pad",
    "convert_circle",
    "convert_copper_area",
    "convert_hole",
    "convert_lib",
    "convert_pad",
    "convert_pad_to_via",
    "convert_record",
    "convert_shapes",
    "convert_solid_region",
    "convert_text",
    "convert_track",
    "convert_via",
    "encode_object",
    "extract_polygon",
    "extract_single_arc",
    "format_document",
    "get_layer",
    "load_document",
    "normalize",
    "parse_path",
    "resolve_arc",
    "resolve_net",
    "to_length",
    "to_point",
]
