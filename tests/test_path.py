import math
from types import SimpleNamespace

import pytest

from lattice.displaylist import DisplayListBuilder
from lattice.geometry import WH, XY
from lattice.paint import DrawStyle
from lattice.path import FillType, Path, dist_sq_to_segment, point_near_path

SQUARE = "M0 0 L10 0 L10 10 L0 10 Z"


def segs(d, **kwargs):
    return Path(d=d, **kwargs).segments()


def test_empty_path_has_nothing():
    path = Path()
    assert path.segments() == ()
    assert path.bounds() is None
    assert path.measure(None, None) == WH(0.0, 0.0)
    assert path.is_in_bounds(XY(0, 0), WH(10, 10)) is False


def test_square_commands():
    assert segs("M0 0 L10 0 L10 10 Z") == (
        ("move", (0, 0)),
        ("line", (10, 0)),
        ("line", (10, 10)),
        ("close",),
    )


def test_bounds_of_square():
    assert Path(d=SQUARE).bounds() == (0, 0, 10, 10)


def test_offset_applies_to_absolute_coordinates():
    assert Path(d="M0 0 L10 10", x=5, y=7).bounds() == (5, 7, 10, 10)


def test_relative_matches_absolute():
    assert segs("m1 1 l2 3") == segs("M1 1 L3 4")


def test_horizontal_and_vertical():
    assert segs("M1 2 H5 V9") == segs("M1 2 L5 2 L5 9")


def test_implicit_lineto_after_moveto():
    assert segs("M0 0 10 10 20 0") == segs("M0 0 L10 10 L20 0")


def test_compact_numbers():
    assert segs("M0,0L1-1.5.5.5") == segs("M 0 0 L 1 -1.5 L 0.5 0.5")


def test_parse_error_stops_parsing():
    assert segs("M0 0 L10 10 X 5 5") == segs("M0 0 L10 10")


def test_must_start_with_moveto():
    assert segs("L10 10") == ()


def test_smooth_cubic_reflects_previous_control():
    assert segs("M0 0 C0 10 10 10 10 0 S20 -10 20 0") == segs(
        "M0 0 C0 10 10 10 10 0 C10 -10 20 -10 20 0"
    )


def test_smooth_cubic_without_previous_uses_cursor():
    assert segs("M0 0 S10 10 20 0") == segs("M0 0 C0 0 10 10 20 0")


def test_smooth_quadratic_reflects_previous_control():
    assert segs("M0 0 Q5 10 10 0 T20 0") == segs("M0 0 Q5 10 10 0 Q15 -10 20 0")


def test_close_returns_cursor_to_subpath_start():
    assert segs("M1 1 L5 1 L5 5 Z l1 0") == segs("M1 1 L5 1 L5 5 Z L2 1")


def test_arc_points_lie_on_circle():
    commands = segs("M0 0 A10 10 0 0 1 20 0")
    cubics = [c for c in commands if c[0] == "cubic"]
    assert len(cubics) == 2
    assert cubics[-1][3] == pytest.approx((20, 0), abs=1e-9)
    for cubic in cubics:
        end = cubic[3]
        assert math.hypot(end[0] - 10, end[1]) == pytest.approx(10)


def test_zero_radius_arc_is_straight_cubic():
    assert segs("M0 0 A0 0 0 0 1 10 5")[1] == ("cubic", (0, 0), (10, 5), (10, 5))


def test_set_property_results():
    path = Path()
    assert path.set_property("d", SQUARE) is True
    assert path.set_property("x", 3) is True
    assert path.set_property("y", 4) is True
    assert path.set_property("fillRule", "evenOdd") is False
    assert path.fill_rule is FillType.ODD
    assert path.set_property("color", 0) is None


def test_set_property_errors():
    path = Path()
    with pytest.raises(ValueError):
        path.set_property("fillRule", "sideways")
    with pytest.raises(TypeError):
        path.set_property("d", 12)
    with pytest.raises(TypeError):
        path.set_property("x", "left")


def test_setting_d_rebuilds_geometry():
    path = Path(d=SQUARE)
    assert path.bounds() == (0, 0, 10, 10)
    path.set_property("d", "M0 0 L4 6")
    assert path.bounds() == (0, 0, 4, 6)


def test_measure():
    path = Path(d="M0 0 L10 20")
    assert path.measure(3, 7) == WH(3, 7)
    assert path.measure(4, None) == WH(4, 20)
    assert path.measure(None, None) == WH(10, 20)


def test_fill_hit():
    path = Path(d=SQUARE)
    assert path.is_in_bounds(XY(5, 5), WH(0, 0)) is True
    assert path.is_in_bounds(XY(15, 5), WH(0, 0)) is False


def test_fill_rules_on_nested_squares():
    d = "M0 0 L30 0 L30 30 L0 30 Z M10 10 L20 10 L20 20 L10 20 Z"
    path = Path(d=d)
    assert path.is_in_bounds(XY(15, 15), WH(0, 0)) is True
    path.set_property("fillRule", "evenOdd")
    assert path.is_in_bounds(XY(15, 15), WH(0, 0)) is False
    assert path.is_in_bounds(XY(5, 5), WH(0, 0)) is True


def test_stroke_hit():
    path = Path(d=SQUARE)
    path.paint.draw_style = DrawStyle.STROKE
    path.paint.stroke_width = 2
    assert path.is_in_bounds(XY(5, 0.5), WH(0, 0)) is True
    assert path.is_in_bounds(XY(5, 5), WH(0, 0)) is False
    path.paint.draw_style = DrawStyle.STROKE_AND_FILL
    assert path.is_in_bounds(XY(5, 5), WH(0, 0)) is True


def test_dist_sq_to_segment():
    assert dist_sq_to_segment((5, 3), (0, 0), (10, 0)) == pytest.approx(9)
    assert dist_sq_to_segment((3, 4), (0, 0), (0, 0)) == pytest.approx(25)
    assert dist_sq_to_segment((13, 4), (0, 0), (10, 0)) == pytest.approx(25)


def test_point_near_path_closing_edge():
    points = [(0, 0), (10, 0), (10, 10)]
    assert point_near_path((5, 5), [(points, True)], 1.0) is True
    assert point_near_path((5, 5), [(points, False)], 1.0) is False


def test_build_draws_path():
    path = Path(d=SQUARE)
    builder = DisplayListBuilder()
    path.build(SimpleNamespace(size=WH(10, 10)), builder)
    ops = builder.build()
    assert [op.kind for op in ops] == ["path"]
    assert ops[0].args[0].commands == path.segments()
    assert ops[0].args[1] == path.paint


def test_build_empty_draws_nothing():
    builder = DisplayListBuilder()
    Path().build(SimpleNamespace(size=WH(10, 10)), builder)
    assert builder.build() == ()