from types import SimpleNamespace

import pytest

from lattice.displaylist import DisplayListBuilder
from lattice.element import BuildContext, Element, HitConfig, Layout, LayoutData, PointerEvents
from lattice.geometry import WH, XY
from lattice.path import Path
from lattice.platform import PlatformContext
from lattice.rectangle import Rectangle
from lattice.span import Span
from lattice.style import Display, FlexDirection, Style
from lattice.text import Text
from lattice.units import Length
from lattice.view import View
from lattice.window import Window


def test_window_fills_its_parent_as_a_column():
    style = Element.with_layout(Window()).style()
    assert style.display is Display.FLEX
    assert style.flex_direction is FlexDirection.COLUMN
    assert style.width == Length.percent(1.0)
    assert style.height == Length.percent(1.0)


def test_view_is_a_column():
    style = Element.with_layout(View()).style()
    assert style.flex_direction is FlexDirection.COLUMN


@pytest.mark.parametrize("kind", [Rectangle(), Path(), Text()])
def test_drawables_lay_out_as_blocks(kind):
    assert Element.with_layout(kind).style().display is Display.BLOCK


def test_span_takes_no_layout():
    with pytest.raises(TypeError):
        Element.with_layout(Span())


def test_no_layout_element():
    element = Element.no_layout(Rectangle())
    assert element.has_layout() is False
    assert element.style() is None
    assert element.children == []
    assert element.parent is None


def test_new_elements_are_hit_testable():
    element = Element.with_layout(View())
    assert element.interaction == HitConfig(PointerEvents.AUTO)
    assert element.layout.cache == {}
    assert element.layout.layout_children == []


def test_paint_only_for_drawables():
    rect = Rectangle()
    assert Element.no_layout(rect).paint() is rect.paint
    assert Element.with_layout(View()).paint() is None


def test_build_delegates_to_kind():
    builder = DisplayListBuilder()
    ctx = BuildContext(PlatformContext(), size=WH(10, 20))
    Element.with_layout(Rectangle()).build(ctx, builder)
    Element.no_layout(Span("x")).build(ctx, builder)
    assert [op.kind for op in builder.build()] == ["rect"]


def test_measure_dispatch():
    assert Element.no_layout(Rectangle(w=3, h=4)).measure(None, None) == WH(3, 4)
    assert Element.with_layout(View()).measure(5.0, 6.0) == WH(0.0, 0.0)
    assert Element.with_layout(Text()).measure(7.0, 8.0) == WH(7.0, 8.0)


def test_layout_defaults_are_zeroed():
    layout = LayoutData(Style()).computed
    assert layout == Layout()
    assert layout.location == XY()
    assert layout.size == WH()


def test_build_context_starts_at_origin():
    ctx = BuildContext(SimpleNamespace())
    assert ctx.origin == XY()
    assert ctx.size == WH()