"""Render-tree elements: a kind plus children, layout data and hit settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from lattice.geometry import WH, XY
from lattice.paint import PaintState
from lattice.path import Path
from lattice.platform import PlatformContext
from lattice.rectangle import Rectangle
from lattice.span import Span
from lattice.style import Display, FlexDirection, Style
from lattice.text import Text
from lattice.units import Length
from lattice.view import View
from lattice.window import Window

ElementKind = Union[Window, View, Rectangle, Path, Text, Span]


class PointerEvents(Enum):
    """Whether an element takes part in hit testing."""

    AUTO = "auto"  # hit-testable; a miss clips children
    NONE = "none"  # transparent to hit testing
    ALL = "all"  # captures every hit within its bounds


@dataclass
class HitConfig:
    pointer_events: PointerEvents = PointerEvents.AUTO


@dataclass
class Layout:
    """A computed layout box relative to the parent."""

    location: XY = field(default_factory=XY)
    size: WH = field(default_factory=WH)
    padding_top: float = 0.0
    padding_right: float = 0.0
    padding_bottom: float = 0.0
    padding_left: float = 0.0


@dataclass
class LayoutData:
    """Layout style, last computed box, measurement cache and laid-out children."""

    style: Style
    computed: Layout = field(default_factory=Layout)
    cache: dict[Any, Any] = field(default_factory=dict)
    layout_children: list[int] = field(default_factory=list)


@dataclass
class BuildContext:
    """State carried through the tree while building a display list."""

    platform: PlatformContext
    size: WH = field(default_factory=WH)
    origin: XY = field(default_factory=XY)


def _default_style(kind: ElementKind) -> Style:
    if isinstance(kind, Window):
        return Style(
            display=Display.FLEX,
            flex_direction=FlexDirection.COLUMN,
            width=Length.percent(1.0),
            height=Length.percent(1.0),
        )
    if isinstance(kind, View):
        return Style(flex_direction=FlexDirection.COLUMN)
    if isinstance(kind, (Rectangle, Path, Text)):
        return Style(display=Display.BLOCK)
    raise TypeError(f"{type(kind).__name__} elements take no layout")


@dataclass
class Element:
    """A node of the render tree."""

    kind: ElementKind
    children: list[int] = field(default_factory=list)
    parent: Optional[int] = None
    layout: Optional[LayoutData] = None
    interaction: Optional[HitConfig] = field(default_factory=HitConfig)

    @classmethod
    def with_layout(cls, kind: ElementKind) -> "Element":
        """An element that takes part in layout, with its kind's default style."""
        return cls(kind, layout=LayoutData(_default_style(kind)))

    @classmethod
    def no_layout(cls, kind: ElementKind) -> "Element":
        """An element positioned by its own properties, outside layout."""
        return cls(kind)

    def has_layout(self) -> bool:
        return self.layout is not None

    def style(self) -> Optional[Style]:
        return self.layout.style if self.layout is not None else None

    def paint(self) -> Optional[PaintState]:
        if isinstance(self.kind, (Rectangle, Path, Text)):
            return self.kind.paint
        return None

    def build(self, ctx: BuildContext, builder: Any) -> None:
        if isinstance(self.kind, Span):
            return
        self.kind.build(ctx, builder)

    def measure(self, known_width: Optional[float], known_height: Optional[float]) -> WH:
        """Content size; kinds without intrinsic content keep only known dimensions."""
        if isinstance(self.kind, (Rectangle, Path)):
            return self.kind.measure(known_width, known_height)
        if isinstance(self.kind, Text):
            return WH(
                known_width if known_width is not None else 0.0,
                known_height if known_height is not None else 0.0,
            )
        return WH(0.0, 0.0)