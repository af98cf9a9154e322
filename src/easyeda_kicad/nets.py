"""Net catalog lookups."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .records import split_children, split_record

NO_NET = -1

# Field index of the net name within each record kind that carries one
_NET_FIELDS = {
    "TRACK": 2,
    "ARC": 2,
    "COPPERAREA": 2,
    "SOLIDREGION": 1,
    "PAD": 6,
    "VIA": 3,
}


def resolve_net(name: str, nets: Sequence[str]) -> int:
    """Return the catalog index of ``name``, or -1 when it is absent."""
    try:
        return list(nets).index(name)
    except ValueError:
        return NO_NET


def _field_net(record_type: str, fields: list[str]) -> Iterable[str]:
    index = _NET_FIELDS.get(record_type)
    if index is not None and index < len(fields):
        yield fields[index]


def _record_nets(line: str) -> Iterable[str]:
    record_type, fields = split_record(line)
    if record_type != "LIB":
        yield from _field_net(record_type, fields)
        return
    _, children = split_children(fields)
    for child in children:
        yield from _field_net(child.marker, child.fields)


def collect_nets(shapes: Iterable[str]) -> list[str]:
    """Build a net catalog from raw record strings.

    The empty net always comes first so that index 0 means "no net".
    """
    catalog = [""]
    seen = {""}
    for line in shapes:
        for name in _record_nets(line):
            if name not in seen:
                seen.add(name)
                catalog.append(name)
    return catalog
