"""The root window element and the commands it sends to the host."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass(frozen=True)
class SetTitle:
    """Ask the host to change the window title."""

    title: str


@dataclass(frozen=True)
class SetFullscreen:
    """Ask the host to enter or leave fullscreen."""

    fullscreen: bool


@dataclass
class Window:
    """The root element; its properties are forwarded to the host window."""

    title: str = "SolidRT"
    fullscreen: bool = False

    def set_property(
        self, prop: str, value: Any, send_command: Callable[[Any], Any]
    ) -> Optional[bool]:
        """Apply a window property and notify the host; None if unknown."""
        if prop == "title":
            if not isinstance(value, str):
                raise TypeError("title must be a string")
            self.title = value
            send_command(SetTitle(self.title))
        elif prop == "fullscreen":
            if not isinstance(value, bool):
                raise TypeError("fullscreen must be a boolean")
            self.fullscreen = value
            send_command(SetFullscreen(self.fullscreen))
        else:
            return None
        return False

    def build(self, ctx: Any, builder: Any) -> None:
        """Add nothing to the display list; children are drawn by the caller."""
        del ctx, builder