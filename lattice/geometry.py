"""Plain two-dimensional value types shared by the render tree."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class XY:
    """A point or offset."""

    x: float = 0.0
    y: float = 0.0


@dataclass
class WH:
    """A width and height."""

    w: float = 0.0
    h: float = 0.0


@dataclass
class Rect:
    """An axis-aligned rectangle given by its top-left corner and size."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def origin(self) -> XY:
        return XY(self.x, self.y)

    @property
    def size(self) -> WH:
        return WH(self.width, self.height)

    def right(self) -> float:
        """X coordinate of the right edge."""
        return self.x + self.width

    def bottom(self) -> float:
        """Y coordinate of the bottom edge."""
        return self.y + self.height