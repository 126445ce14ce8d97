"""Rectangle elements with optional per-corner rounding."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Optional

from lattice.geometry import WH, XY, Rect
from lattice.paint import DrawStyle, PaintState, _number

Radii = tuple[float, float, float, float]


def in_rounded_rect(
    point: XY, rx: float, ry: float, rw: float, rh: float, radii: Radii
) -> bool:
    """Whether point lies inside a rounded rectangle.

    Radii are (top-left, top-right, bottom-right, bottom-left); with all
    radii zero this is a plain bounding-box check.
    """
    if point.x < rx or point.x >= rx + rw or point.y < ry or point.y >= ry + rh:
        return False
    max_r = min(rw / 2.0, rh / 2.0)
    tl, tr, br, bl = (max(min(r, max_r), 0.0) for r in radii)

    if point.x < rx + tl and point.y < ry + tl:
        cx, cy, r = rx + tl, ry + tl, tl
    elif point.x >= rx + rw - tr and point.y < ry + tr:
        cx, cy, r = rx + rw - tr, ry + tr, tr
    elif point.x >= rx + rw - br and point.y >= ry + rh - br:
        cx, cy, r = rx + rw - br, ry + rh - br, br
    elif point.x < rx + bl and point.y >= ry + rh - bl:
        cx, cy, r = rx + bl, ry + rh - bl, bl
    else:
        return True

    if r <= 0.0:
        return True
    dx = point.x - cx
    dy = point.y - cy
    return dx * dx + dy * dy <= r * r


@dataclass
class Rectangle:
    """A filled or stroked rectangle; unset width and height follow the layout box."""

    x: Optional[float] = None
    y: Optional[float] = None
    w: Optional[float] = None
    h: Optional[float] = None
    # (top-left, top-right, bottom-right, bottom-left), CSS border-radius order.
    radius: Optional[Radii] = None
    paint: PaintState = field(default_factory=PaintState)

    def set_property(self, prop: str, value: Any) -> Optional[bool]:
        """Apply a rectangle property; False when handled, None if unknown."""
        if prop in ("x", "y", "w", "h"):
            setattr(self, prop, _number(value, prop))
        elif prop == "radius":
            self.radius = self._parse_radius(value)
        else:
            return None
        return False

    @staticmethod
    def _parse_radius(value: Any) -> Radii:
        if isinstance(value, (list, tuple)):
            if len(value) != 4:
                raise ValueError(
                    "radius array must have 4 elements "
                    "[top-left, top-right, bottom-right, bottom-left]"
                )
            tl, tr, br, bl = (_number(v, f"radius[{i}]") for i, v in enumerate(value))
            return (tl, tr, br, bl)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError("radius must be a number or an array of 4 numbers")
        v = float(value)
        return (v, v, v, v)

    def measure(self, known_width: Optional[float], known_height: Optional[float]) -> WH:
        width = known_width if known_width is not None else (self.w if self.w is not None else 0.0)
        height = known_height if known_height is not None else (self.h if self.h is not None else 0.0)
        return WH(width, height)

    def _frame(self, size: WH) -> tuple[float, float, float, float]:
        return (
            self.x if self.x is not None else 0.0,
            self.y if self.y is not None else 0.0,
            self.w if self.w is not None else size.w,
            self.h if self.h is not None else size.h,
        )

    def is_in_bounds(self, point: XY, size: WH) -> bool:
        rx, ry, rw, rh = self._frame(size)
        half = self.paint.stroke_width / 2.0
        radii = self.radius if self.radius is not None else (0.0, 0.0, 0.0, 0.0)
        outer = tuple(r + half for r in radii)

        def in_outer() -> bool:
            return in_rounded_rect(point, rx - half, ry - half, rw + half * 2.0, rh + half * 2.0, outer)

        if self.paint.draw_style is DrawStyle.FILL:
            return in_rounded_rect(point, rx, ry, rw, rh, radii)
        if self.paint.draw_style is DrawStyle.STROKE:
            inner = tuple(max(r - half, 0.0) for r in radii)
            in_inner = in_rounded_rect(
                point, rx + half, ry + half, rw - half * 2.0, rh - half * 2.0, inner
            )
            return in_outer() and not in_inner
        return in_outer()

    def build(self, ctx: Any, builder: Any) -> None:
        x, y, w, h = self._frame(ctx.size)
        rect = Rect(x, y, w, h)
        paint = replace(self.paint)
        if self.radius is not None:
            radii = tuple(XY(r, r) for r in self.radius)
            builder.draw_rounded_rect(rect, radii, paint)
        else:
            builder.draw_rect(rect, paint)