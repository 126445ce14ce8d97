from types import SimpleNamespace

import pytest

from lattice.displaylist import DisplayListBuilder
from lattice.geometry import WH, XY
from lattice.view import View


def test_set_position_keeps_other_axis_zero():
    view = View()
    assert view.set_property("x", 3) is False
    assert view.pos == XY(3, 0)
    view.set_property("y", 4)
    assert view.pos == XY(3, 4)


def test_set_center_and_transforms():
    view = View()
    view.set_property("cy", 2)
    assert view.center == XY(0, 2)
    view.set_property("scale", 1.5)
    view.set_property("rotate", 0.25)
    assert view.scale == 1.5
    assert view.rotate == 0.25


def test_unknown_and_invalid_properties():
    view = View()
    assert view.set_property("color", 1) is None
    with pytest.raises(TypeError):
        view.set_property("rotate", "fast")


def test_identity_transform():
    assert View().transform_to_local(XY(7, 9), WH(20, 20)) == XY(7, 9)


def test_position_only():
    view = View(pos=XY(3, 4))
    assert view.transform_to_local(XY(10, 10), WH(20, 20)) == XY(7, 6)


def test_zero_scale_is_ignored():
    view = View(scale=0.0)
    assert view.transform_to_local(XY(7, 9), WH(20, 20)) == XY(7, 9)


def test_center_is_fixed_point_of_scale():
    view = View(scale=2.0)
    local = view.transform_to_local(XY(5, 5), WH(10, 10))
    assert (local.x, local.y) == pytest.approx((5, 5))


def test_local_point_maps_back_through_build_transform():
    view = View(rotate=0.5, scale=2.0, pos=XY(3, 4))
    size = WH(20, 10)
    builder = DisplayListBuilder()
    view.build(SimpleNamespace(size=size), builder)
    local = view.transform_to_local(XY(12, 7), size)
    assert builder.map_point(local.x, local.y) == pytest.approx((12, 7))


def test_build_ops_without_scale_or_rotation():
    builder = DisplayListBuilder()
    View().build(SimpleNamespace(size=WH(10, 10)), builder)
    assert [op.kind for op in builder.build()] == ["translate", "translate", "translate"]
    assert builder.map_point(1, 2) == pytest.approx((1, 2))