"""Layout style for render-tree elements and the properties that set it."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from lattice.units import (
    Length,
    TrackSizing,
    _parse_float,
    parse_dimension,
    parse_dimension_str,
    parse_grid_template,
    parse_length_percentage,
    parse_length_percentage_auto,
)


class Display(Enum):
    FLEX = "flex"
    BLOCK = "block"
    GRID = "grid"
    NONE = "none"


class FlexDirection(Enum):
    ROW = "row"
    COLUMN = "column"
    ROW_REVERSE = "row-reverse"
    COLUMN_REVERSE = "column-reverse"


class FlexWrap(Enum):
    NO_WRAP = "nowrap"
    WRAP = "wrap"
    WRAP_REVERSE = "wrap-reverse"


class AlignItems(Enum):
    START = "start"
    END = "end"
    FLEX_START = "flex-start"
    FLEX_END = "flex-end"
    CENTER = "center"
    BASELINE = "baseline"
    STRETCH = "stretch"


AlignSelf = Enum(  # same keywords as AlignItems
    "AlignSelf", [(m.name, m.value) for m in AlignItems], module=__name__
)


class JustifyContent(Enum):
    START = "start"
    END = "end"
    FLEX_START = "flex-start"
    FLEX_END = "flex-end"
    CENTER = "center"
    SPACE_BETWEEN = "space-between"
    SPACE_AROUND = "space-around"
    SPACE_EVENLY = "space-evenly"
    STRETCH = "stretch"


AlignContent = Enum(  # same keywords as JustifyContent
    "AlignContent", [(m.name, m.value) for m in JustifyContent], module=__name__
)


class Position(Enum):
    RELATIVE = "relative"
    ABSOLUTE = "absolute"


class Overflow(Enum):
    VISIBLE = "visible"
    HIDDEN = "hidden"
    SCROLL = "scroll"
    CLIP = "clip"


class GridAutoFlow(Enum):
    ROW = "row"
    COLUMN = "column"
    ROW_DENSE = "row-dense"
    COLUMN_DENSE = "column-dense"


def _zero() -> Length:
    return Length.length(0.0)


def _auto() -> Length:
    return Length.auto()


@dataclass
class Style:
    """Box, flex and grid layout settings; grid lines of None mean auto placement."""

    display: Display = Display.FLEX
    position: Position = Position.RELATIVE
    overflow_x: Overflow = Overflow.VISIBLE
    overflow_y: Overflow = Overflow.VISIBLE

    width: Length = field(default_factory=_auto)
    height: Length = field(default_factory=_auto)
    min_width: Length = field(default_factory=_auto)
    min_height: Length = field(default_factory=_auto)
    max_width: Length = field(default_factory=_auto)
    max_height: Length = field(default_factory=_auto)

    padding_top: Length = field(default_factory=_zero)
    padding_right: Length = field(default_factory=_zero)
    padding_bottom: Length = field(default_factory=_zero)
    padding_left: Length = field(default_factory=_zero)

    margin_top: Length = field(default_factory=_zero)
    margin_right: Length = field(default_factory=_zero)
    margin_bottom: Length = field(default_factory=_zero)
    margin_left: Length = field(default_factory=_zero)

    top: Length = field(default_factory=_auto)
    right: Length = field(default_factory=_auto)
    bottom: Length = field(default_factory=_auto)
    left: Length = field(default_factory=_auto)

    row_gap: Length = field(default_factory=_zero)
    column_gap: Length = field(default_factory=_zero)

    flex_direction: FlexDirection = FlexDirection.ROW
    flex_wrap: FlexWrap = FlexWrap.NO_WRAP
    flex_grow: float = 0.0
    flex_shrink: float = 1.0
    flex_basis: Length = field(default_factory=_auto)
    align_items: Optional[AlignItems] = None
    align_self: Optional[Any] = None
    justify_content: Optional[JustifyContent] = None
    align_content: Optional[Any] = None

    grid_auto_flow: GridAutoFlow = GridAutoFlow.ROW
    grid_template_columns: list[TrackSizing] = field(default_factory=list)
    grid_template_rows: list[TrackSizing] = field(default_factory=list)
    grid_auto_columns: list[TrackSizing] = field(default_factory=list)
    grid_auto_rows: list[TrackSizing] = field(default_factory=list)
    grid_column_start: Optional[int] = None
    grid_column_end: Optional[int] = None
    grid_row_start: Optional[int] = None
    grid_row_end: Optional[int] = None


def _number(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{name} must be a number")
    return float(value)


def _string(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string")
    return value


def _choice(enum_cls: Any, value: Any, name: str) -> Any:
    text = _string(value, name)
    try:
        return enum_cls(text)
    except ValueError:
        raise ValueError(f"unknown {name} value '{text}'") from None


def _grid_line(value: Any, name: str) -> int:
    """Saturating float-to-i16 conversion, truncating toward zero."""
    n = _number(value, name)
    if math.isnan(n):
        return 0
    return int(max(-32768.0, min(32767.0, n)))


def _set_flex(style: Style, value: Any) -> None:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        style.flex_grow = float(value)
        style.flex_shrink = 1.0
        style.flex_basis = Length.length(0.0)
        return
    if not isinstance(value, str):
        raise TypeError("flex must be a number or string")
    if value == "none":
        style.flex_grow, style.flex_shrink, style.flex_basis = 0.0, 0.0, Length.auto()
    elif value == "auto":
        style.flex_grow, style.flex_shrink, style.flex_basis = 1.0, 1.0, Length.auto()
    else:
        parts = value.split()
        if len(parts) not in (2, 3):
            raise ValueError(f"invalid flex value: '{value}'")
        style.flex_grow = _parse_float(parts[0], "flex grow must be a number")
        style.flex_shrink = _parse_float(parts[1], "flex shrink must be a number")
        style.flex_basis = (
            parse_dimension_str(parts[2]) if len(parts) == 3 else Length.length(0.0)
        )


_DIMENSIONS = {
    "width": "width",
    "height": "height",
    "minWidth": "min_width",
    "minHeight": "min_height",
    "maxWidth": "max_width",
    "maxHeight": "max_height",
    "flexBasis": "flex_basis",
}

_LENGTH_PERCENT = {
    "paddingTop": "padding_top",
    "paddingRight": "padding_right",
    "paddingBottom": "padding_bottom",
    "paddingLeft": "padding_left",
    "rowGap": "row_gap",
    "columnGap": "column_gap",
}

_LENGTH_PERCENT_AUTO = {
    "marginTop": "margin_top",
    "marginRight": "margin_right",
    "marginBottom": "margin_bottom",
    "marginLeft": "margin_left",
    "top": "top",
    "right": "right",
    "bottom": "bottom",
    "left": "left",
}

_CHOICES = {
    "display": ("display", Display),
    "flexDirection": ("flex_direction", FlexDirection),
    "flexWrap": ("flex_wrap", FlexWrap),
    "alignItems": ("align_items", AlignItems),
    "justifyContent": ("justify_content", JustifyContent),
    "alignContent": ("align_content", AlignContent),
    "alignSelf": ("align_self", AlignSelf),
    "position": ("position", Position),
    "gridAutoFlow": ("grid_auto_flow", GridAutoFlow),
}

_GRID_LINES = {
    "gridColumnStart": "grid_column_start",
    "gridColumnEnd": "grid_column_end",
    "gridRowStart": "grid_row_start",
    "gridRowEnd": "grid_row_end",
}


def set_style_property(style: Style, prop: str, value: Any) -> Optional[bool]:
    """Apply a layout property to a style.

    Returns True when handled (layout must be recomputed) and None when
    the property is not a layout property.
    """
    if prop in _DIMENSIONS:
        setattr(style, _DIMENSIONS[prop], parse_dimension(value))
    elif prop in _LENGTH_PERCENT:
        setattr(style, _LENGTH_PERCENT[prop], parse_length_percentage(value))
    elif prop in _LENGTH_PERCENT_AUTO:
        setattr(style, _LENGTH_PERCENT_AUTO[prop], parse_length_percentage_auto(value))
    elif prop in _CHOICES:
        attr, enum_cls = _CHOICES[prop]
        setattr(style, attr, _choice(enum_cls, value, prop))
    elif prop in _GRID_LINES:
        setattr(style, _GRID_LINES[prop], _grid_line(value, prop))
    elif prop == "padding":
        v = parse_length_percentage(value)
        style.padding_top = style.padding_right = style.padding_bottom = style.padding_left = v
    elif prop == "margin":
        v = parse_length_percentage_auto(value)
        style.margin_top = style.margin_right = style.margin_bottom = style.margin_left = v
    elif prop == "gap":
        v = parse_length_percentage(value)
        style.row_gap = style.column_gap = v
    elif prop == "flex":
        _set_flex(style, value)
    elif prop == "flexGrow":
        style.flex_grow = _number(value, "flexGrow")
    elif prop == "flexShrink":
        style.flex_shrink = _number(value, "flexShrink")
    elif prop == "overflow":
        o = _choice(Overflow, value, "overflow")
        style.overflow_x = style.overflow_y = o
    elif prop == "gridTemplateColumns":
        style.grid_template_columns = parse_grid_template(
            _string(value, "gridTemplateColumns")
        )
    elif prop == "gridTemplateRows":
        style.grid_template_rows = parse_grid_template(_string(value, "gridTemplateRows"))
    elif prop == "gridAutoColumns":
        v = Length.length(_number(value, "gridAutoColumns"))
        style.grid_auto_columns = [TrackSizing(v, v)]
    elif prop == "gridAutoRows":
        v = Length.length(_number(value, "gridAutoRows"))
        style.grid_auto_rows = [TrackSizing(v, v)]
    else:
        return None
    return True