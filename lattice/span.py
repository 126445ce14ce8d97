"""Text runs that make up the content of a text element."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from lattice.paint import _string


@dataclass
class Span:
    """A run of text inside a text element."""

    text: str = ""

    def set_property(self, prop: str, value: Any) -> Optional[bool]:
        """Apply a span property; True when handled, None if unknown."""
        if prop == "text":
            self.text = _string(value, "text")
            return True
        return None