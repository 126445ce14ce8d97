"""Routing of host window events into platform state, input state and the script."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

from lattice.devclient import Reload, Stop
from lattice.frame import (
    EngineState,
    InputState,
    Modifiers,
    PointerDown,
    PointerMove,
    PointerType,
    PointerUp,
    Wheel,
)
from lattice.geometry import WH, Rect
from lattice.platform import PlatformContext

Emit = Callable[[str, dict[str, Any]], Any]


@dataclass(frozen=True)
class Quit:
    """The host window was closed."""


@dataclass(frozen=True)
class WindowFocus:
    """The window gained focus."""


@dataclass(frozen=True)
class WindowBlur:
    """The window lost focus."""


@dataclass(frozen=True)
class Resize:
    """The window changed size, safe area or display scale."""

    size: WH
    safe_area: Rect
    display_scale: float = 1.0


@dataclass(frozen=True)
class KeyDown:
    key: str = ""
    code: str = ""
    modifiers: Modifiers = field(default_factory=Modifiers)


@dataclass(frozen=True)
class KeyUp:
    key: str = ""
    code: str = ""
    modifiers: Modifiers = field(default_factory=Modifiers)


@dataclass(frozen=True)
class FrameRendered:
    """The host finished presenting a frame."""

    frame: int
    fps: int


HostEvent = Union[
    Quit,
    WindowFocus,
    WindowBlur,
    Resize,
    KeyDown,
    KeyUp,
    FrameRendered,
    PointerMove,
    PointerDown,
    PointerUp,
    Wheel,
]


def resize_payload(size: WH, safe_area: Rect, display_scale: float) -> dict[str, Any]:
    """The event object scripts receive on resize."""
    return {
        "width": size.w,
        "height": size.h,
        "safeArea": {
            "top": safe_area.y,
            "left": safe_area.x,
            "right": safe_area.right(),
            "bottom": safe_area.bottom(),
        },
        "displayScale": display_scale,
    }


def key_payload(key: str, code: str, modifiers: Modifiers) -> dict[str, Any]:
    """The event object scripts receive on key presses and releases."""
    return {
        "key": key,
        "code": code,
        "shiftKey": modifiers.shift,
        "ctrlKey": modifiers.ctrl,
        "altKey": modifiers.alt,
        "metaKey": modifiers.meta,
    }


def next_source(command: Union[Reload, Stop], default_source: str) -> str:
    """The script source to run after a development-server command."""
    if isinstance(command, Reload):
        return command.code
    if isinstance(command, Stop):
        return default_source
    raise TypeError(f"not an engine command: {command!r}")


class EventRouter:
    """Applies host events to shared state and forwards them to the current engine."""

    def __init__(
        self,
        platform: Optional[PlatformContext] = None,
        input_state: Optional[InputState] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.platform = platform if platform is not None else PlatformContext()
        self.input_state = input_state if input_state is not None else InputState()
        self.emit: Optional[Emit] = None
        self.engine_state: Optional[EngineState] = None
        self._clock = clock
        self._start = clock()

    def attach(self, emit: Emit, engine_state: EngineState) -> None:
        """Direct events to a new engine, dropping the previous one's state."""
        self.emit = emit
        self.engine_state = engine_state

    def _send(self, name: str, payload: dict[str, Any]) -> None:
        if self.emit is not None:
            self.emit(name, payload)

    def _queue(self, event: Any) -> None:
        if self.engine_state is not None:
            self.engine_state.push_input(event)

    def handle(self, event: HostEvent) -> None:
        """Process one host event; a Quit event exits the program."""
        if isinstance(event, Quit):
            raise SystemExit(0)
        if isinstance(event, WindowFocus):
            self._send("windowFocus", {})
        elif isinstance(event, WindowBlur):
            self._send("windowBlur", {})
        elif isinstance(event, Resize):
            self.platform.set_window_size(event.size.w, event.size.h)
            self.platform.display_scale = event.display_scale
            self.platform.safe_area = event.safe_area
            self._send(
                "resize", resize_payload(event.size, event.safe_area, event.display_scale)
            )
        elif isinstance(event, (PointerMove, PointerDown, PointerUp)):
            key = (event.pointer_type, event.pointer_id)
            self.input_state.set_pointer_pos(key, event.x, event.y)
            self.input_state.modifiers = event.modifiers
            self._queue(event)
            # Touch pointers end at release; mouse pointers persist.
            if isinstance(event, PointerUp) and event.pointer_type is PointerType.TOUCH:
                self.input_state.remove_pointer(key)
        elif isinstance(event, Wheel):
            self.input_state.modifiers = event.modifiers
            self._queue(event)
        elif isinstance(event, (KeyDown, KeyUp)):
            self.input_state.modifiers = event.modifiers
            name = "keydown" if isinstance(event, KeyDown) else "keyup"
            self._send(name, key_payload(event.key, event.code, event.modifiers))
        elif isinstance(event, FrameRendered):
            self.platform.fps = event.fps
            if self.emit is not None:
                elapsed = self._clock() - self._start
                self._send("render", {"frame": event.frame, "time": elapsed})
        else:
            raise TypeError(f"unknown host event: {event!r}")