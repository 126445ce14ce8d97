"""Paint state for drawable elements and the properties that set it."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

_U32_MAX = 0xFFFFFFFF


def _number(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{name} must be a number")
    return float(value)


def _string(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string")
    return value


def _to_u32(value: float) -> int:
    """Saturating float-to-u32 conversion, NaN becoming zero."""
    if math.isnan(value) or value <= 0:
        return 0
    if value >= _U32_MAX:
        return _U32_MAX
    return int(value)


@dataclass(frozen=True)
class Color:
    """An sRGB colour with components in 0..1."""

    r: float
    g: float
    b: float
    a: float

    @classmethod
    def from_rgba32(cls, value: int) -> "Color":
        """Build a colour from a packed 0xRRGGBBAA integer."""
        return cls(
            ((value >> 24) & 0xFF) / 255.0,
            ((value >> 16) & 0xFF) / 255.0,
            ((value >> 8) & 0xFF) / 255.0,
            (value & 0xFF) / 255.0,
        )


class DrawStyle(Enum):
    FILL = "fill"
    STROKE = "stroke"
    STROKE_AND_FILL = "strokeAndFill"


class StrokeCap(Enum):
    BUTT = "butt"
    ROUND = "round"
    SQUARE = "square"


class StrokeJoin(Enum):
    MITER = "miter"
    ROUND = "round"
    BEVEL = "bevel"


class BlendMode(Enum):
    CLEAR = "clear"
    SOURCE = "source"
    DESTINATION = "destination"
    SOURCE_OVER = "sourceOver"
    DESTINATION_OVER = "destinationOver"
    SOURCE_IN = "sourceIn"
    DESTINATION_IN = "destinationIn"
    SOURCE_OUT = "sourceOut"
    DESTINATION_OUT = "destinationOut"
    SOURCE_ATOP = "sourceATop"
    DESTINATION_ATOP = "destinationATop"
    XOR = "xor"
    PLUS = "plus"
    MODULATE = "modulate"
    SCREEN = "screen"
    OVERLAY = "overlay"
    DARKEN = "darken"
    LIGHTEN = "lighten"
    COLOR_DODGE = "colorDodge"
    COLOR_BURN = "colorBurn"
    HARD_LIGHT = "hardLight"
    SOFT_LIGHT = "softLight"
    DIFFERENCE = "difference"
    EXCLUSION = "exclusion"
    MULTIPLY = "multiply"
    HUE = "hue"
    SATURATION = "saturation"
    COLOR = "color"
    LUMINOSITY = "luminosity"


def _choice(enum_cls: type[Enum], value: Any, name: str) -> Any:
    text = _string(value, name)
    try:
        return enum_cls(text)
    except ValueError:
        raise ValueError(f"unknown {name} '{text}'") from None


@dataclass
class PaintState:
    """How an element is filled or stroked."""

    color: Color = field(default_factory=lambda: Color(0.5, 0.5, 0.5, 1.0))
    draw_style: DrawStyle = DrawStyle.FILL
    blend_mode: BlendMode = BlendMode.SOURCE_OVER
    stroke_width: float = 0.0
    stroke_cap: StrokeCap = StrokeCap.BUTT
    stroke_join: StrokeJoin = StrokeJoin.MITER
    stroke_miter: float = 4.0

    def set_property(self, prop: str, value: Any) -> Optional[bool]:
        """Apply a paint property.

        Returns False when handled (paint never affects layout) and None
        when the property is not a paint property.
        """
        if prop == "color":
            self.color = Color.from_rgba32(_to_u32(_number(value, "color")))
        elif prop == "strokeWidth":
            self.stroke_width = _number(value, "strokeWidth")
        elif prop == "strokeMiter":
            self.stroke_miter = _number(value, "strokeMiter")
        elif prop == "drawStyle":
            self.draw_style = _choice(DrawStyle, value, "drawStyle")
        elif prop == "strokeCap":
            self.stroke_cap = _choice(StrokeCap, value, "strokeCap")
        elif prop == "strokeJoin":
            self.stroke_join = _choice(StrokeJoin, value, "strokeJoin")
        elif prop == "blendMode":
            self.blend_mode = _choice(BlendMode, value, "blendMode")
        else:
            return None
        return False