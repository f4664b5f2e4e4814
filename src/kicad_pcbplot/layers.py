"""Board layer identifiers, names and layer sets."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import Enum, IntEnum

from .exceptions import UnknownLayerError


class PcbLayerId(IntEnum):
    """Physical and technical layer ids, in KiCad's fixed order."""

    F_Cu = 0
    In1_Cu = 1
    In2_Cu = 2
    In3_Cu = 3
    In4_Cu = 4
    In5_Cu = 5
    In6_Cu = 6
    In7_Cu = 7
    In8_Cu = 8
    In9_Cu = 9
    In10_Cu = 10
    In11_Cu = 11
    In12_Cu = 12
    In13_Cu = 13
    In14_Cu = 14
    In15_Cu = 15
    In16_Cu = 16
    In17_Cu = 17
    In18_Cu = 18
    In19_Cu = 19
    In20_Cu = 20
    In21_Cu = 21
    In22_Cu = 22
    In23_Cu = 23
    In24_Cu = 24
    In25_Cu = 25
    In26_Cu = 26
    In27_Cu = 27
    In28_Cu = 28
    In29_Cu = 29
    In30_Cu = 30
    B_Cu = 31
    B_Adhes = 32
    F_Adhes = 33
    B_Paste = 34
    F_Paste = 35
    B_SilkS = 36
    F_SilkS = 37
    B_Mask = 38
    F_Mask = 39
    Dwgs_User = 40
    Cmts_User = 41
    Eco1_User = 42
    Eco2_User = 43
    Edge_Cuts = 44
    Margin = 45
    B_CrtYd = 46
    F_CrtYd = 47
    B_Fab = 48
    F_Fab = 49

    @property
    def layer_name(self) -> str:
        """KiCad file name of the layer, e.g. ``"F.Cu"``."""
        return _LAYER_NAMES[self]


PCB_LAYER_ID_COUNT = len(PcbLayerId)

_LAYER_NAMES: dict[PcbLayerId, str] = {lid: lid.name.replace("_", ".") for lid in PcbLayerId}

_NAME_TO_ID: dict[str, PcbLayerId] = {name: lid for lid, name in _LAYER_NAMES.items()}

# Display name → internal name mapping for KiCad layers.
_LAYER_ALIASES: dict[str, str] = {
    "F.Silkscreen": "F.SilkS",
    "B.Silkscreen": "B.SilkS",
    "F.Adhesive": "F.Adhes",
    "B.Adhesive": "B.Adhes",
    "F.Courtyard": "F.CrtYd",
    "B.Courtyard": "B.CrtYd",
    "User.Drawings": "Dwgs.User",
    "User.Comments": "Cmts.User",
    "User.Eco1": "Eco1.User",
    "User.Eco2": "Eco2.User",
}


def _normalize_layer(name: str) -> str:
    """Map display-name layer aliases to internal KiCad names."""
    return _LAYER_ALIASES.get(name, name)


def layer_id(layer: str | int) -> PcbLayerId:
    """Resolve a layer name, display alias or numeric id.

    Raises:
        UnknownLayerError: if the layer is not part of the layer table.
    """
    if isinstance(layer, str):
        name = _normalize_layer(layer.strip())
        if name in _NAME_TO_ID:
            return _NAME_TO_ID[name]
        raise UnknownLayerError(f"Unknown layer name {layer!r}", layer=layer)
    try:
        return PcbLayerId(layer)
    except ValueError:
        raise UnknownLayerError(f"Unknown layer id {layer!r}", layer=layer) from None


def is_copper_layer(layer: int) -> bool:
    return PcbLayerId.F_Cu <= layer <= PcbLayerId.B_Cu


def copper_layers_between(layer1: int, layer2: int) -> LayerSet:
    """All copper layers spanned by a via going from ``layer1`` to ``layer2``."""
    lo, hi = sorted((layer1, layer2))
    return LayerSet(lid for lid in range(lo, hi + 1) if is_copper_layer(lid))


class LayerCategory(Enum):
    """Groups of layers that share a plot pass."""

    COPPER = "copper"
    MASK = "mask"
    PASTE = "paste"
    ADHESIVE = "adhesive"
    SILKSCREEN = "silkscreen"
    TECHNICAL = "technical"


_CATEGORIES: dict[PcbLayerId, LayerCategory] = {
    PcbLayerId.B_Mask: LayerCategory.MASK,
    PcbLayerId.F_Mask: LayerCategory.MASK,
    PcbLayerId.B_Paste: LayerCategory.PASTE,
    PcbLayerId.F_Paste: LayerCategory.PASTE,
    PcbLayerId.B_Adhes: LayerCategory.ADHESIVE,
    PcbLayerId.F_Adhes: LayerCategory.ADHESIVE,
    PcbLayerId.B_SilkS: LayerCategory.SILKSCREEN,
    PcbLayerId.F_SilkS: LayerCategory.SILKSCREEN,
}


def layer_category(layer: int) -> LayerCategory:
    """Return the plot category of a layer id."""
    lid = layer_id(layer)
    if is_copper_layer(lid):
        return LayerCategory.COPPER
    return _CATEGORIES.get(lid, LayerCategory.TECHNICAL)


class LayerSet:
    """Immutable set of layer ids."""

    __slots__ = ("_ids",)

    def __init__(self, layers: Iterable[str | int] = ()) -> None:
        self._ids: frozenset[PcbLayerId] = frozenset(layer_id(lyr) for lyr in layers)

    @classmethod
    def of(cls, *layers: str | int) -> LayerSet:
        return cls(layers)

    @classmethod
    def all_copper(cls) -> LayerSet:
        return copper_layers_between(PcbLayerId.F_Cu, PcbLayerId.B_Cu)

    def has(self, layer: int) -> bool:
        return layer in self._ids

    def __contains__(self, layer: object) -> bool:
        return layer in self._ids

    def intersect(self, other: LayerSet) -> LayerSet:
        return LayerSet(self._ids & other._ids)

    def __and__(self, other: LayerSet) -> LayerSet:
        return self.intersect(other)

    def __or__(self, other: LayerSet) -> LayerSet:
        return LayerSet(self._ids | other._ids)

    def __bool__(self) -> bool:
        return bool(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[PcbLayerId]:
        return iter(sorted(self._ids))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LayerSet):
            return NotImplemented
        return self._ids == other._ids

    def __hash__(self) -> int:
        return hash(self._ids)

    def __repr__(self) -> str:
        return f"LayerSet({', '.join(self.names())})"

    def sequence(self) -> list[PcbLayerId]:
        """Layer ids in ascending id order."""
        return sorted(self._ids)

    def names(self) -> list[str]:
        return [lid.layer_name for lid in self.sequence()]
