"""Length units and parsers for layout property values."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

_FLOAT_RE = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)",
    re.IGNORECASE,
)


def _parse_float(text: str, message: str) -> float:
    if not _FLOAT_RE.fullmatch(text):
        raise ValueError(message)
    return float(text)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class Unit(Enum):
    AUTO = "auto"
    LENGTH = "length"
    PERCENT = "percent"
    FR = "fr"


@dataclass(frozen=True)
class Length:
    """A layout length: auto, an absolute length, a fraction of the parent, or a flex fraction."""

    unit: Unit
    value: float = 0.0

    @classmethod
    def auto(cls) -> "Length":
        return cls(Unit.AUTO, 0.0)

    @classmethod
    def length(cls, value: float) -> "Length":
        return cls(Unit.LENGTH, float(value))

    @classmethod
    def percent(cls, value: float) -> "Length":
        """A fraction of the parent, where 1.0 is the full size."""
        return cls(Unit.PERCENT, float(value))


@dataclass(frozen=True)
class TrackSizing:
    """A grid track sized between a minimum and a maximum."""

    min: Length
    max: Length


def parse_dimension_str(s: str) -> Length:
    """Parse 'auto', 'N%' or a bare number."""
    if s == "auto":
        return Length.auto()
    if s.endswith("%"):
        n = _parse_float(s.rstrip("%"), "percentage value must be a number")
        return Length.percent(n / 100.0)
    return Length.length(_parse_float(s, "dimension value must be a number or 'auto'"))


def parse_dimension(value: Any) -> Length:
    if _is_number(value):
        return Length.length(value)
    if isinstance(value, str):
        return parse_dimension_str(value)
    raise TypeError("dimension must be a number or string")


def parse_length_percentage(value: Any) -> Length:
    if _is_number(value):
        return Length.length(value)
    if isinstance(value, str):
        if value.endswith("%"):
            n = _parse_float(value.rstrip("%"), "percentage value must be a number")
            return Length.percent(n / 100.0)
        raise ValueError(f"invalid length/percentage value: '{value}'")
    raise TypeError("length/percentage must be a number or percentage string")


def parse_length_percentage_auto(value: Any) -> Length:
    if _is_number(value):
        return Length.length(value)
    if isinstance(value, str):
        if value == "auto":
            return Length.auto()
        if value.endswith("%"):
            n = _parse_float(value.rstrip("%"), "percentage value must be a number")
            return Length.percent(n / 100.0)
        raise ValueError(f"invalid length/percentage/auto value: '{value}'")
    raise TypeError("length/percentage/auto must be a number or string")


def _parse_track(part: str) -> TrackSizing:
    if part == "auto":
        return TrackSizing(Length.auto(), Length.auto())
    if part.endswith("fr"):
        v = _parse_float(part[:-2], "fr value must be a number")
        return TrackSizing(Length.length(0.0), Length(Unit.FR, v))
    if part.endswith("px"):
        v = _parse_float(part[:-2], "px value must be a number")
        return TrackSizing(Length.length(v), Length.length(v))
    v = _parse_float(part, "grid track value must be a number")
    return TrackSizing(Length.length(v), Length.length(v))


def parse_grid_template(template: str) -> list[TrackSizing]:
    """Parse a whitespace-separated list of tracks: auto, Nfr, Npx or N."""
    return [_parse_track(part) for part in template.split()]