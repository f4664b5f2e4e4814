"""Colors, layer palettes and the color resolution policy.

The palettes are immutable module-level tables. The orchestrator never reads
them directly; it is handed a ``LayerColorPolicy`` built from them, so tests
can inject their own tables.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar

from .layers import LayerSet, PcbLayerId


@dataclass(frozen=True)
class Color:
    """RGBA color; r, g, b are 0-255 integers and a is 0-1."""

    r: int
    g: int
    b: int
    a: float = 1.0

    BLACK: ClassVar[Color]
    DARKDARKGRAY: ClassVar[Color]
    DARKGRAY: ClassVar[Color]
    LIGHTGRAY: ClassVar[Color]
    WHITE: ClassVar[Color]
    LIGHTYELLOW: ClassVar[Color]
    DARKBLUE: ClassVar[Color]
    DARKGREEN: ClassVar[Color]
    DARKCYAN: ClassVar[Color]
    DARKRED: ClassVar[Color]
    DARKMAGENTA: ClassVar[Color]
    DARKBROWN: ClassVar[Color]
    BLUE: ClassVar[Color]
    GREEN: ClassVar[Color]
    CYAN: ClassVar[Color]
    RED: ClassVar[Color]
    MAGENTA: ClassVar[Color]
    BROWN: ClassVar[Color]
    LIGHTBLUE: ClassVar[Color]
    LIGHTGREEN: ClassVar[Color]
    LIGHTCYAN: ClassVar[Color]
    LIGHTRED: ClassVar[Color]
    LIGHTMAGENTA: ClassVar[Color]
    YELLOW: ClassVar[Color]
    PUREBLUE: ClassVar[Color]
    PUREGREEN: ClassVar[Color]
    PURECYAN: ClassVar[Color]
    PURERED: ClassVar[Color]
    PUREMAGENTA: ClassVar[Color]
    PUREYELLOW: ClassVar[Color]

    def mix(self, other: Color) -> Color:
        """Blend by bitwise OR of each channel, keeping the brighter bits."""
        return Color(self.r | other.r, self.g | other.g, self.b | other.b, self.a * other.a)

    def to_css(self) -> str:
        return f"rgba({self.r}, {self.g}, {self.b}, {self.a})"

    def to_dict(self) -> dict[str, Any]:
        return {"r": self.r, "g": self.g, "b": self.b, "a": self.a}


class NamedColor(Enum):
    """Identifiers of KiCad's fixed color set (common/colors.cpp)."""

    BLACK = (0, 0, 0)
    DARKDARKGRAY = (72, 72, 72)
    DARKGRAY = (132, 132, 132)
    LIGHTGRAY = (194, 194, 194)
    WHITE = (255, 255, 255)
    LIGHTYELLOW = (255, 255, 194)
    DARKBLUE = (0, 0, 72)
    DARKGREEN = (0, 72, 0)
    DARKCYAN = (0, 72, 72)
    DARKRED = (72, 0, 0)
    DARKMAGENTA = (72, 0, 72)
    DARKBROWN = (72, 72, 0)
    BLUE = (0, 0, 132)
    GREEN = (0, 132, 0)
    CYAN = (0, 132, 132)
    RED = (132, 0, 0)
    MAGENTA = (132, 0, 132)
    BROWN = (132, 132, 0)
    LIGHTBLUE = (0, 0, 194)
    LIGHTGREEN = (0, 194, 0)
    LIGHTCYAN = (0, 194, 194)
    LIGHTRED = (194, 0, 0)
    LIGHTMAGENTA = (194, 0, 194)
    YELLOW = (194, 194, 0)
    PUREBLUE = (0, 0, 255)
    PUREGREEN = (0, 255, 0)
    PURECYAN = (0, 255, 255)
    PURERED = (255, 0, 0)
    PUREMAGENTA = (255, 0, 255)
    PUREYELLOW = (255, 255, 0)

    @property
    def color(self) -> Color:
        return Color(*self.value)


for _named in NamedColor:
    setattr(Color, _named.name, _named.color)


@dataclass(frozen=True)
class ColorDefinition:
    """Display metadata for a named color."""

    color: Color
    name: str
    light: Color


def _definition(named: NamedColor, name: str, light: NamedColor) -> ColorDefinition:
    return ColorDefinition(named.color, name, light.color)


COLOR_DEFINITIONS: Mapping[NamedColor, ColorDefinition] = MappingProxyType(
    {
        NamedColor.BLACK: _definition(NamedColor.BLACK, "Black", NamedColor.DARKDARKGRAY),
        NamedColor.DARKDARKGRAY: _definition(NamedColor.DARKDARKGRAY, "Gray 1", NamedColor.DARKGRAY),
        NamedColor.DARKGRAY: _definition(NamedColor.DARKGRAY, "Gray 2", NamedColor.LIGHTGRAY),
        NamedColor.LIGHTGRAY: _definition(NamedColor.LIGHTGRAY, "Gray 3", NamedColor.WHITE),
        NamedColor.WHITE: _definition(NamedColor.WHITE, "White", NamedColor.WHITE),
        NamedColor.LIGHTYELLOW: _definition(NamedColor.LIGHTYELLOW, "L.Yellow", NamedColor.WHITE),
        NamedColor.DARKBLUE: _definition(NamedColor.DARKBLUE, "Blue 1", NamedColor.BLUE),
        NamedColor.DARKGREEN: _definition(NamedColor.DARKGREEN, "Green 1", NamedColor.GREEN),
        NamedColor.DARKCYAN: _definition(NamedColor.DARKCYAN, "Cyan 1", NamedColor.CYAN),
        NamedColor.DARKRED: _definition(NamedColor.DARKRED, "Red 1", NamedColor.RED),
        NamedColor.DARKMAGENTA: _definition(NamedColor.DARKMAGENTA, "Magenta 1", NamedColor.MAGENTA),
        NamedColor.DARKBROWN: _definition(NamedColor.DARKBROWN, "Brown 1", NamedColor.BROWN),
        NamedColor.BLUE: _definition(NamedColor.BLUE, "Blue 2", NamedColor.LIGHTBLUE),
        NamedColor.GREEN: _definition(NamedColor.GREEN, "Green 2", NamedColor.LIGHTGREEN),
        NamedColor.CYAN: _definition(NamedColor.CYAN, "Cyan 2", NamedColor.LIGHTCYAN),
        NamedColor.RED: _definition(NamedColor.RED, "Red 2", NamedColor.LIGHTRED),
        NamedColor.MAGENTA: _definition(NamedColor.MAGENTA, "Magenta 2", NamedColor.LIGHTMAGENTA),
        NamedColor.BROWN: _definition(NamedColor.BROWN, "Brown 2", NamedColor.YELLOW),
        NamedColor.LIGHTBLUE: _definition(NamedColor.LIGHTBLUE, "Blue 3", NamedColor.PUREBLUE),
        NamedColor.LIGHTGREEN: _definition(NamedColor.LIGHTGREEN, "Green 3", NamedColor.PUREGREEN),
        NamedColor.LIGHTCYAN: _definition(NamedColor.LIGHTCYAN, "Cyan 3", NamedColor.PURECYAN),
        NamedColor.LIGHTRED: _definition(NamedColor.LIGHTRED, "Red 3", NamedColor.PURERED),
        NamedColor.LIGHTMAGENTA: _definition(NamedColor.LIGHTMAGENTA, "Magenta 3", NamedColor.PUREMAGENTA),
        NamedColor.YELLOW: _definition(NamedColor.YELLOW, "Yellow 3", NamedColor.PUREYELLOW),
        NamedColor.PUREBLUE: _definition(NamedColor.PUREBLUE, "Blue 4", NamedColor.WHITE),
        NamedColor.PUREGREEN: _definition(NamedColor.PUREGREEN, "Green 4", NamedColor.WHITE),
        NamedColor.PURECYAN: _definition(NamedColor.PURECYAN, "Cyan 4", NamedColor.WHITE),
        NamedColor.PURERED: _definition(NamedColor.PURERED, "Red 4", NamedColor.WHITE),
        NamedColor.PUREMAGENTA: _definition(NamedColor.PUREMAGENTA, "Magenta 4", NamedColor.WHITE),
        NamedColor.PUREYELLOW: _definition(NamedColor.PUREYELLOW, "Yellow 4", NamedColor.WHITE),
    }
)

# ── Palettes ───────────────────────────────────────────────────────

# Indexed by layer id: 32 copper layers then 16 technical layers. The fab
# layers have no entry and resolve through the white fallback.
_COPPER_CYCLE = (
    Color.RED, Color.YELLOW, Color.LIGHTMAGENTA, Color.LIGHTRED,
    Color.CYAN, Color.GREEN, Color.BLUE, Color.DARKGRAY,
    Color.MAGENTA, Color.LIGHTGRAY, Color.MAGENTA, Color.RED,
    Color.BROWN, Color.LIGHTGRAY, Color.BLUE, Color.GREEN,
)  # fmt: skip

DEFAULT_LAYER_COLORS: tuple[Color, ...] = _COPPER_CYCLE + _COPPER_CYCLE + (
    Color.BLUE,         # B.Adhes
    Color.MAGENTA,      # F.Adhes
    Color.LIGHTCYAN,    # B.Paste
    Color.RED,          # F.Paste
    Color.MAGENTA,      # B.SilkS
    Color.CYAN,         # F.SilkS
    Color.BROWN,        # B.Mask
    Color.MAGENTA,      # F.Mask
    Color.LIGHTGRAY,    # Dwgs.User
    Color.BLUE,         # Cmts.User
    Color.GREEN,        # Eco1.User
    Color.YELLOW,       # Eco2.User
    Color.YELLOW,       # Edge.Cuts
    Color.LIGHTMAGENTA, # Margin
    Color.YELLOW,       # B.CrtYd
    Color.DARKGRAY,     # F.CrtYd
)  # fmt: skip

# Greyscale palette for revision-to-revision diff images.
DIFF_LAYER_COLORS: Mapping[int, Color] = MappingProxyType(
    {
        0: Color(33, 33, 33),
        1: Color(66, 66, 66),
        2: Color(54, 54, 54),
        3: Color(89, 89, 89),
        4: Color(47, 47, 47),
        5: Color(79, 77, 77),
        6: Color(105, 105, 105),
        7: Color(87, 87, 87),
        8: Color(71, 71, 71),
        9: Color(63, 63, 63),
        10: Color(39, 39, 39),
        11: Color(74, 74, 74),
        12: Color(81, 81, 81),
        13: Color(199, 199, 199),
        14: Color(207, 198, 198),
        15: Color(222, 222, 222),
        16: Color(171, 164, 164),
        17: Color(122, 118, 118),
        18: Color(74, 71, 71),
        19: Color(99, 96, 96),
        20: Color(195, 195, 195),
        21: Color(223, 223, 223),
        22: Color(231, 231, 231),
        23: Color(214, 214, 214),
        24: Color(225, 225, 225),
        25: Color(202, 202, 202),
        26: Color(233, 233, 233),
        27: Color(194, 194, 194),
        28: Color(223, 223, 223),
        29: Color(199, 199, 199),
        30: Color(212, 212, 212),
        31: Color(79, 79, 79),
        32: Color(176, 176, 176),
        33: Color(156, 156, 156),
        34: Color(97, 97, 97),
        35: Color(82, 82, 82),
        36: Color(138, 138, 138),
        37: Color(122, 122, 122),
        38: Color(59, 59, 59),
        39: Color(41, 41, 41),
        40: Color(112, 112, 112),
        41: Color(161, 161, 161),
        42: Color(148, 148, 148),
        43: Color(166, 166, 166),
        44: Color(0, 0, 0),
        45: Color(191, 191, 191),
        46: Color(128, 128, 128),
        47: Color(112, 112, 112),
        48: Color(177, 177, 177),
        49: Color(196, 196, 196),
    }
)


# ── Resolution policy ──────────────────────────────────────────────


@dataclass(frozen=True)
class LayerColorPolicy:
    """Resolves the color used for a layer or a pad.

    Args:
        diffing: Use the greyscale diff palette instead of the layer palette.
        layer_colors: Standard palette indexed by layer id.
        diff_colors: Diff palette keyed by layer id.
    """

    diffing: bool = False
    layer_colors: Sequence[Color] = DEFAULT_LAYER_COLORS
    diff_colors: Mapping[int, Color] = field(default_factory=lambda: DIFF_LAYER_COLORS)

    def color_for_layer(self, layer: int) -> Color:
        if self.diffing:
            return self.diff_colors.get(layer, Color.LIGHTGRAY)

        color = self.layer_colors[layer] if 0 <= layer < len(self.layer_colors) else Color.WHITE
        # white would vanish on a white canvas
        if color == Color.WHITE:
            return Color.LIGHTGRAY
        return color

    def pad_color(self, layers: LayerSet) -> Color:
        """Color of a pad from its copper side membership.

        Bottom copper starts from green; top copper is OR-blended with red, so
        a through pad on both sides ends up brown-ish. In diff mode the side's
        diff color is used as is.
        """
        color = Color.BLACK
        if PcbLayerId.B_Cu in layers:
            diff_color = self.diff_colors.get(PcbLayerId.B_Cu) if self.diffing else None
            color = diff_color if diff_color is not None else Color.GREEN
        if PcbLayerId.F_Cu in layers:
            diff_color = self.diff_colors.get(PcbLayerId.F_Cu) if self.diffing else None
            color = diff_color if diff_color is not None else color.mix(Color.RED)
        return color
