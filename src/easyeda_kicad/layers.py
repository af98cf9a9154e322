"""EasyEDA layer ids mapped to KiCad layer names and kinds."""

from __future__ import annotations

from types import MappingProxyType

from .exceptions import MissingLayerError
from .models import LayerEntry, LayerKind

_INNER_LAYER_IDS = range(21, 51)  # EasyEDA Inner1..Inner30

_LAYERS: dict[str, LayerEntry] = {
    "1": LayerEntry("F.Cu", LayerKind.COPPER),
    "2": LayerEntry("B.Cu", LayerKind.COPPER),
    "3": LayerEntry("F.SilkS", LayerKind.SILK),
    "4": LayerEntry("B.SilkS", LayerKind.SILK),
    "5": LayerEntry("F.Paste", LayerKind.PASTE),
    "6": LayerEntry("B.Paste", LayerKind.PASTE),
    "7": LayerEntry("F.Mask", LayerKind.MASK),
    "8": LayerEntry("B.Mask", LayerKind.MASK),
    "10": LayerEntry("Edge.Cuts", LayerKind.EDGECUT),
    "11": LayerEntry("*.Cu", LayerKind.COPPER),
    "12": LayerEntry("Cmts.User", LayerKind.USER),
    "13": LayerEntry("F.Fab", LayerKind.USER),
    "14": LayerEntry("B.Fab", LayerKind.USER),
    "15": LayerEntry("Dwgs.User", LayerKind.USER),
    "99": LayerEntry("Dwgs.User", LayerKind.USER),
    "100": LayerEntry("Eco1.User", LayerKind.USER),
    "101": LayerEntry("Eco2.User", LayerKind.USER),
}
for _n, _layer_id in enumerate(_INNER_LAYER_IDS, start=1):
    _LAYERS[str(_layer_id)] = LayerEntry(f"In{_n}.Cu", LayerKind.COPPER)

LAYERS = MappingProxyType(_LAYERS)

MULTI_LAYER_ID = "11"

_PAD_LAYER_SETS = {
    "1": ("F.Cu", "F.Paste", "F.Mask"),
    "2": ("B.Cu", "B.Paste", "B.Mask"),
    MULTI_LAYER_ID: ("*.Cu", "*.Paste", "*.Mask"),
}

# KiCad 5 layer numbers used for the board's (layers ...) header
KICAD_LAYER_NUMBERS: dict[str, int] = {
    "F.Cu": 0,
    **{f"In{n}.Cu": n for n in range(1, 31)},
    "B.Cu": 31,
    "B.Adhes": 32,
    "F.Adhes": 33,
    "B.Paste": 34,
    "F.Paste": 35,
    "B.SilkS": 36,
    "F.SilkS": 37,
    "B.Mask": 38,
    "F.Mask": 39,
    "Dwgs.User": 40,
    "Cmts.User": 41,
    "Eco1.User": 42,
    "Eco2.User": 43,
    "Edge.Cuts": 44,
    "Margin": 45,
    "B.CrtYd": 46,
    "F.CrtYd": 47,
    "B.Fab": 48,
    "F.Fab": 49,
}


def get_layer(layer_id: str) -> LayerEntry:
    """Look up a layer by EasyEDA id.

    Raises:
        MissingLayerError: if the id is not in the table.
    """
    entry = LAYERS.get(str(layer_id).strip())
    if entry is None:
        raise MissingLayerError(layer_id)
    return entry


def pad_layers(layer_id: str) -> tuple[str, ...]:
    """Layers a pad on ``layer_id`` occupies, including paste and mask."""
    layer_set = _PAD_LAYER_SETS.get(str(layer_id).strip())
    if layer_set is not None:
        return layer_set
    return (get_layer(layer_id).name,)


def board_layer_declarations(used_names: set[str]) -> list[list]:
    """Build the entries of a board's ``(layers ...)`` header.

    Outer copper and every technical layer are always declared; inner copper
    layers only when ``used_names`` references them.
    """
    declarations: list[list] = []
    for name, number in sorted(KICAD_LAYER_NUMBERS.items(), key=lambda item: item[1]):
        is_inner = name.startswith("In")
        if is_inner and name not in used_names:
            continue
        layer_type = "signal" if name.endswith(".Cu") else "user"
        declarations.append([number, name, layer_type])
    return declarations
