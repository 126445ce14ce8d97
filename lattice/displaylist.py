"""A recording display list builder with a transform stack."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

# Affine matrix (a, b, c, d, e, f): x' = a*x + c*y + e, y' = b*x + d*y + f.
Matrix = tuple[float, float, float, float, float, float]

IDENTITY: Matrix = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


@dataclass(frozen=True)
class Op:
    """One recorded drawing operation and the transform in effect after it."""

    kind: str
    args: tuple[Any, ...]
    transform: Matrix


class DisplayListBuilder:
    """Records drawing operations in order, tracking the current transform."""

    def __init__(self) -> None:
        self._ops: list[Op] = []
        self._transform: Matrix = IDENTITY
        self._stack: list[Matrix] = []

    @property
    def transform(self) -> Matrix:
        return self._transform

    def map_point(self, x: float, y: float) -> tuple[float, float]:
        """Map a point through the current transform."""
        a, b, c, d, e, f = self._transform
        return (a * x + c * y + e, b * x + d * y + f)

    def _record(self, kind: str, *args: Any) -> None:
        self._ops.append(Op(kind, args, self._transform))

    def save(self) -> None:
        self._stack.append(self._transform)
        self._record("save")

    def restore(self) -> None:
        if not self._stack:
            return
        self._transform = self._stack.pop()
        self._record("restore")

    def translate(self, x: float, y: float) -> None:
        a, b, c, d, e, f = self._transform
        self._transform = (a, b, c, d, a * x + c * y + e, b * x + d * y + f)
        self._record("translate", x, y)

    def scale(self, x: float, y: float) -> None:
        a, b, c, d, e, f = self._transform
        self._transform = (a * x, b * x, c * y, d * y, e, f)
        self._record("scale", x, y)

    def rotate(self, degrees: float) -> None:
        rad = math.radians(degrees)
        cos, sin = math.cos(rad), math.sin(rad)
        a, b, c, d, e, f = self._transform
        self._transform = (
            a * cos + c * sin,
            b * cos + d * sin,
            -a * sin + c * cos,
            -b * sin + d * cos,
            e,
            f,
        )
        self._record("rotate", degrees)

    def draw_rect(self, rect: Any, paint: Any) -> None:
        self._record("rect", rect, paint)

    def draw_rounded_rect(self, rect: Any, radii: Any, paint: Any) -> None:
        self._record("rounded_rect", rect, radii, paint)

    def draw_path(self, path: Any, paint: Any) -> None:
        self._record("path", path, paint)

    def draw_paragraph(self, paragraph: Any, origin: Any) -> None:
        self._record("paragraph", paragraph, origin)

    def build(self) -> tuple[Op, ...]:
        """Return the operations recorded so far, in order."""
        return tuple(self._ops)