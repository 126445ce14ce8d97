"""Text elements whose content is gathered from their span children."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional

from lattice.geometry import XY
from lattice.paint import PaintState, _number, _to_u32

FONT_FAMILY = "Noto Sans"


class FontStyle(Enum):
    NORMAL = "normal"
    ITALIC = "italic"


class FontWeight(Enum):
    THIN = 100
    EXTRA_LIGHT = 200
    LIGHT = 300
    REGULAR = 400
    MEDIUM = 500
    SEMI_BOLD = 600
    BOLD = 700
    EXTRA_BOLD = 800
    BLACK = 900


class TextAlignment(Enum):
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"
    JUSTIFY = "justify"
    START = "start"
    END = "end"


@dataclass(frozen=True)
class Paragraph:
    """Styled text laid out to a given width, ready to draw."""

    text: str
    width: float
    font_family: str = FONT_FAMILY
    font_size: float = 20.0
    font_style: FontStyle = FontStyle.NORMAL
    font_weight: FontWeight = FontWeight.BOLD
    text_alignment: TextAlignment = TextAlignment.LEFT
    max_lines: int = 0
    paint: Optional[PaintState] = None


@dataclass
class Text:
    """A paragraph of text; max_lines of 0 means unlimited."""

    computed_text: str = ""
    font_size: float = 20.0
    font_style: FontStyle = FontStyle.NORMAL
    font_weight: FontWeight = FontWeight.BOLD
    text_alignment: TextAlignment = TextAlignment.LEFT
    max_lines: int = 0
    paint: PaintState = field(default_factory=PaintState)

    def set_property(self, prop: str, value: Any) -> Optional[bool]:
        """Apply a text property; True when handled, None if unknown."""
        if prop == "fontSize":
            self.font_size = _number(value, "fontSize")
        elif prop == "maxLines":
            self.max_lines = _to_u32(_number(value, "maxLines"))
        elif prop == "fontWeight":
            weight = _to_u32(_number(value, "fontWeight"))
            try:
                self.font_weight = FontWeight(weight)
            except ValueError:
                self.font_weight = FontWeight.REGULAR
        else:
            return None
        return True

    def paragraph(self, width: float) -> Paragraph:
        """The paragraph this element draws at the given width."""
        return Paragraph(
            text=self.computed_text,
            width=width,
            font_size=self.font_size,
            font_style=self.font_style,
            font_weight=self.font_weight,
            text_alignment=self.text_alignment,
            max_lines=self.max_lines,
            paint=replace(self.paint),
        )

    def build(self, ctx: Any, builder: Any) -> None:
        builder.draw_paragraph(self.paragraph(ctx.size.w), XY(0.0, 0.0))