"""Container elements that translate, scale and rotate their children."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional

from lattice.geometry import WH, XY
from lattice.paint import _number


@dataclass
class View:
    """A transform group; rotation is in radians around the center."""

    rotate: Optional[float] = None
    scale: Optional[float] = None
    pos: Optional[XY] = None
    center: Optional[XY] = None

    def _resolve_pos(self) -> XY:
        return XY(self.pos.x, self.pos.y) if self.pos is not None else XY()

    def _resolve_center(self, size: WH) -> XY:
        if self.center is not None:
            return XY(self.center.x, self.center.y)
        return XY(size.w / 2.0, size.h / 2.0)

    def build(self, ctx: Any, builder: Any) -> None:
        p = self._resolve_pos()
        c = self._resolve_center(ctx.size)
        builder.translate(p.x, p.y)
        builder.translate(c.x, c.y)
        if self.scale is not None:
            builder.scale(self.scale, self.scale)
        if self.rotate is not None:
            builder.rotate(math.degrees(self.rotate))
        builder.translate(-c.x, -c.y)

    def transform_to_local(self, point: XY, size: WH) -> XY:
        """Map a parent-space point into this view's untransformed space."""
        p = self._resolve_pos()
        c = self._resolve_center(size)
        lx = point.x - p.x - c.x
        ly = point.y - p.y - c.y
        if self.scale is not None and self.scale != 0.0:
            lx /= self.scale
            ly /= self.scale
        if self.rotate is not None:
            cos_a = math.cos(-self.rotate)
            sin_a = math.sin(-self.rotate)
            lx, ly = lx * cos_a - ly * sin_a, lx * sin_a + ly * cos_a
        return XY(lx + c.x, ly + c.y)

    def set_property(self, prop: str, value: Any) -> Optional[bool]:
        """Apply a transform property; False when handled, None if unknown."""
        if prop == "rotate":
            self.rotate = _number(value, "rotate")
        elif prop == "scale":
            self.scale = _number(value, "scale")
        elif prop in ("x", "y"):
            n = _number(value, prop)
            if self.pos is None:
                self.pos = XY()
            setattr(self.pos, prop, n)
        elif prop in ("cx", "cy"):
            n = _number(value, prop)
            if self.center is None:
                self.center = XY()
            setattr(self.center, prop[1], n)
        else:
            return None
        return False