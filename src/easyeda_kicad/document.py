"""Batch conversion of EasyEDA board documents into a ``kicad_pcb`` tree."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable, Sequence
from typing import TypeAlias
from pathlib import Path

from .board import (
    convert_arc,
    convert_board_pad,
    convert_circle,
    convert_copper_area,
    convert_hole,
    convert_solid_region,
    convert_text,
    convert_track,
    convert_via,
)
from .exceptions import ConversionError
from .footprint import convert_lib
from .layers import board_layer_declarations
from .models import BoardConversion, ConversionResult, Converted, Failed, Skipped
from .nets import collect_nets
from .records import record_id, split_record

logger = logging.getLogger(__name__)

KICAD_VERSION = 20171130
HOST = ["host", "pcbnew", "(5.1.5)-3"]
PAGE_SIZE = "A4"

RecordConverter: TypeAlias = Callable[[list[str], Sequence[str]], list | None]

CONVERTERS: dict[str, RecordConverter] = {
    "TRACK": convert_track,
    "ARC": convert_arc,
    "COPPERAREA": convert_copper_area,
    "SOLIDREGION": convert_solid_region,
    "HOLE": convert_hole,
    "CIRCLE": convert_circle,
    "VIA": convert_via,
    "PAD": convert_board_pad,
    "TEXT": convert_text,
    "LIB": convert_lib,
}

# Converters that emit several nodes per record
_MULTI_NODE = {"TRACK"}


def convert_record(record_type: str, fields: list[str], nets: Sequence[str]) -> ConversionResult:
    """Convert one tokenized record, capturing hard failures as ``Failed``."""
    element_id = record_id(record_type, fields)
    converter = CONVERTERS.get(record_type)
    if converter is None:
        logger.debug("Skipping unsupported record type %s (%s)", record_type, element_id)
        return Skipped(record_type, element_id, f"unsupported record type {record_type}")

    try:
        result = converter(fields, nets)
    except ConversionError as e:
        e.record_id = e.record_id or element_id
        logger.warning("Failed to convert %s %s: %s", record_type, element_id, e)
        return Failed(record_type, element_id, e)

    if record_type in _MULTI_NODE:
        nodes = result
    else:
        nodes = [] if result is None else [result]
    if not nodes:
        logger.debug("Skipping %s %s: no supported geometry", record_type, element_id)
        return Skipped(record_type, element_id, "no supported geometry")
    return Converted(record_type, element_id, nodes)


def convert_shapes(shapes: Iterable[str], nets: Sequence[str]) -> list[ConversionResult]:
    """Convert raw ``TYPE~...`` record strings in order."""
    results = []
    for line in shapes:
        if not line.strip():
            continue
        record_type, fields = split_record(line)
        results.append(convert_record(record_type, fields, nets))
    return results


def _layer_names(tree) -> set[str]:
    """Every name used in a ``(layer ...)`` node of a tree."""
    names: set[str] = set()
    if isinstance(tree, list):
        if len(tree) == 2 and tree[0] == "layer" and isinstance(tree[1], str):
            names.add(tree[1])
        for item in tree:
            names |= _layer_names(item)
    return names


def build_board_tree(nets: Sequence[str], nodes: list[list]) -> list:
    """Assemble the ``kicad_pcb`` root from nets and converted nodes."""
    return [
        "kicad_pcb",
        ["version", KICAD_VERSION],
        HOST,
        ["page", PAGE_SIZE],
        ["layers", *board_layer_declarations(_layer_names(nodes))],
        *(["net", index, name] for index, name in enumerate(nets)),
        *nodes,
    ]


def convert_board(document: dict, strict: bool = False) -> BoardConversion:
    """Convert a parsed EasyEDA board document.

    Args:
        document: EasyEDA JSON with a ``shape`` list of record strings.
        strict: If True, re-raise the first hard failure instead of
            leaving it in the results.

    Returns:
        BoardConversion with the net catalog, per-record results and tree.
    """
    shapes = document.get("shape", [])
    nets = collect_nets(shapes)
    results = convert_shapes(shapes, nets)

    if strict:
        for result in results:
            if isinstance(result, Failed):
                raise result.error

    nodes = [n for r in results if isinstance(r, Converted) for n in r.nodes]
    return BoardConversion(nets=nets, results=results, tree=build_board_tree(nets, nodes))


def load_document(path: str | Path) -> dict:
    """Read an EasyEDA board JSON file.

    Documents fetched from the EasyEDA API wrap the board in ``dataStr``.
    """
    document = json.loads(Path(path).read_text(encoding="utf-8"))
    if "shape" not in document and isinstance(document.get("dataStr"), dict):
        document = document["dataStr"]
    if "shape" not in document:
        msg = f"No 'shape' list found in {path}"
        raise ValueError(msg)
    return document
