import pytest

from lattice.paint import BlendMode, Color, DrawStyle, PaintState, StrokeCap, StrokeJoin


def test_defaults():
    p = PaintState()
    assert p.color == Color(0.5, 0.5, 0.5, 1.0)
    assert p.draw_style is DrawStyle.FILL
    assert p.blend_mode is BlendMode.SOURCE_OVER
    assert p.stroke_width == 0.0
    assert p.stroke_cap is StrokeCap.BUTT
    assert p.stroke_join is StrokeJoin.MITER
    assert p.stroke_miter == 4.0


def test_from_rgba32_bytes_round_trip():
    c = Color.from_rgba32(0x336699CC)
    assert [round(v * 255) for v in (c.r, c.g, c.b, c.a)] == [0x33, 0x66, 0x99, 0xCC]


def test_from_rgba32_extremes():
    assert Color.from_rgba32(0xFFFFFFFF) == Color(1.0, 1.0, 1.0, 1.0)
    assert Color.from_rgba32(0) == Color(0.0, 0.0, 0.0, 0.0)


def test_set_color_from_number():
    p = PaintState()
    assert p.set_property("color", 0x11223344) is False
    assert p.color == Color.from_rgba32(0x11223344)


def test_color_negative_saturates_to_zero():
    p = PaintState()
    p.set_property("color", -5)
    assert p.color == Color.from_rgba32(0)


def test_color_too_large_saturates():
    p = PaintState()
    p.set_property("color", 1e20)
    assert p.color == Color.from_rgba32(0xFFFFFFFF)


def test_color_must_be_number():
    with pytest.raises(TypeError):
        PaintState().set_property("color", "red")


def test_stroke_numbers():
    p = PaintState()
    assert p.set_property("strokeWidth", 3) is False
    assert p.set_property("strokeMiter", 2.5) is False
    assert p.stroke_width == 3.0
    assert p.stroke_miter == 2.5


def test_bool_is_not_a_number():
    with pytest.raises(TypeError):
        PaintState().set_property("strokeWidth", True)


@pytest.mark.parametrize(
    "prop,value,attr,expected",
    [
        ("drawStyle", "stroke", "draw_style", DrawStyle.STROKE),
        ("drawStyle", "strokeAndFill", "draw_style", DrawStyle.STROKE_AND_FILL),
        ("strokeCap", "round", "stroke_cap", StrokeCap.ROUND),
        ("strokeCap", "square", "stroke_cap", StrokeCap.SQUARE),
        ("strokeJoin", "bevel", "stroke_join", StrokeJoin.BEVEL),
        ("blendMode", "sourceATop", "blend_mode", BlendMode.SOURCE_ATOP),
        ("blendMode", "luminosity", "blend_mode", BlendMode.LUMINOSITY),
        ("blendMode", "color", "blend_mode", BlendMode.COLOR),
    ],
)
def test_enum_properties(prop, value, attr, expected):
    p = PaintState()
    assert p.set_property(prop, value) is False
    assert getattr(p, attr) is expected


def test_every_blend_mode_name_parses():
    for mode in BlendMode:
        p = PaintState()
        p.set_property("blendMode", mode.value)
        assert p.blend_mode is mode


@pytest.mark.parametrize("prop", ["drawStyle", "strokeCap", "strokeJoin", "blendMode"])
def test_unknown_enum_value_raises(prop):
    with pytest.raises(ValueError, match="unknown"):
        PaintState().set_property(prop, "bogus")


def test_enum_value_must_be_string():
    with pytest.raises(TypeError):
        PaintState().set_property("drawStyle", 1)


def test_unknown_property_returns_none_and_leaves_state():
    p = PaintState()
    assert p.set_property("width", 10) is None
    assert p == PaintState()