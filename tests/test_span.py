import pytest

from lattice.span import Span


def test_default_text_is_empty():
    assert Span().text == ""


def test_set_text():
    span = Span()
    assert span.set_property("text", "hello") is True
    assert span.text == "hello"


def test_unknown_property():
    span = Span(text="keep")
    assert span.set_property("fontSize", 12) is None
    assert span.text == "keep"


def test_text_must_be_string():
    with pytest.raises(TypeError):
        Span().set_property("text", 5)