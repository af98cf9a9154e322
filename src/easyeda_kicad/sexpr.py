"""Symbolic node trees and their S-expression text encoding.

A node is a Python list whose first item is the keyword, e.g.
``["segment", ["start", 0, 0], ["layer", "F.Cu"]]``. ``None`` items are
placeholders for optional children and never reach the output.
"""

from __future__ import annotations

import re

from .transforms import PRECISION, round_value

_BARE_RE = re.compile(r"^[a-z][a-z0-9_]*$")


class Symbol(str):
    """A keyword atom rendered without quotes, e.g. ``locked`` or ``hide``."""

    __slots__ = ()


def node(*items) -> list:
    """Build a node, dropping ``None`` items."""
    return [item for item in items if item is not None]


def prune(tree):
    """Recursively remove ``None`` entries from a tree."""
    if isinstance(tree, list):
        return [prune(item) for item in tree if item is not None]
    return tree


def round_numbers(tree, precision: int = PRECISION):
    """Recursively round every float in a tree."""
    if isinstance(tree, list):
        return [round_numbers(item, precision) for item in tree]
    if isinstance(tree, float):
        return round_value(tree, precision)
    return tree


def normalize(tree):
    return round_numbers(prune(tree))


def format_number(value: float) -> str:
    """Render a number with at most 3 decimals and no trailing zeros."""
    if isinstance(value, int):
        return str(value)
    text = f"{round_value(value):.{PRECISION}f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def encode_string(value: str) -> str:
    if isinstance(value, Symbol) or _BARE_RE.match(value):
        return str(value)
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def encode_value(value) -> str:
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, str):
        return encode_string(value)
    if isinstance(value, list):
        return encode_object(value)
    msg = f"Cannot encode {type(value).__name__} value {value!r}"
    raise TypeError(msg)


def encode_object(tree: list) -> str:
    """Encode a node on a single line."""
    return "(" + " ".join(encode_value(item) for item in tree if item is not None) + ")"


def format_document(tree: list, indent: str = "  ") -> str:
    """Encode a document node with each top-level child on its own line."""
    head: list[str] = []
    children: list[str] = []
    for item in tree:
        if item is None:
            continue
        if isinstance(item, list):
            children.append(indent + encode_object(item))
        elif children:
            children.append(indent + encode_value(item))
        else:
            head.append(encode_value(item))
    return "(" + " ".join(head) + "\n" + "\n".join(children) + "\n)\n"
