"""Per-frame input state, split by lifetime.

InputState holds facts about the physical input devices and survives
engine reloads. EngineState holds anything tied to the current render
tree (node ids, queued input aimed at that tree) and is recreated on
every reload. Pointer state is keyed by (pointer type, pointer id) so
several pointers can be active at once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class PointerType(Enum):
    MOUSE = "mouse"
    TOUCH = "touch"
    PEN = "pen"

    def as_str(self) -> str:
        """The name scripts see for this pointer type."""
        return self.value


@dataclass(frozen=True)
class Modifiers:
    """Which modifier keys are held."""

    shift: bool = False
    ctrl: bool = False
    alt: bool = False
    meta: bool = False


PointerKey = tuple[PointerType, int]


@dataclass(frozen=True)
class PointerMove:
    pointer_id: int
    pointer_type: PointerType
    x: float
    y: float
    modifiers: Modifiers = field(default_factory=Modifiers)


@dataclass(frozen=True)
class PointerDown:
    pointer_id: int
    pointer_type: PointerType
    button: int
    x: float
    y: float
    modifiers: Modifiers = field(default_factory=Modifiers)


@dataclass(frozen=True)
class PointerUp:
    pointer_id: int
    pointer_type: PointerType
    button: int
    x: float
    y: float
    modifiers: Modifiers = field(default_factory=Modifiers)


@dataclass(frozen=True)
class Wheel:
    pointer_id: int
    pointer_type: PointerType
    x: float
    y: float
    delta_x: float
    delta_y: float
    modifiers: Modifiers = field(default_factory=Modifiers)


InputEvent = Union[PointerMove, PointerDown, PointerUp, Wheel]


class InputState:
    """Pointer positions and held modifiers; kept across engine reloads."""

    def __init__(self) -> None:
        self._pointers: dict[PointerKey, tuple[float, float]] = {}
        self.modifiers = Modifiers()

    def set_pointer_pos(self, key: PointerKey, x: float, y: float) -> None:
        self._pointers[key] = (x, y)

    def remove_pointer(self, key: PointerKey) -> None:
        self._pointers.pop(key, None)

    def pointers(self) -> list[tuple[PointerKey, tuple[float, float]]]:
        """A snapshot of every known pointer and its position."""
        return list(self._pointers.items())


class EngineState:
    """Hover paths and queued input for the current render tree."""

    def __init__(self) -> None:
        self._hovered_paths: dict[PointerKey, list[int]] = {}
        self._input_queue: list[InputEvent] = []

    def hovered_path(self, key: PointerKey) -> list[int]:
        """A copy of the node ids under the pointer at the last frame, root first."""
        return list(self._hovered_paths.get(key, ()))

    def set_hovered_path(self, key: PointerKey, path: list[int]) -> None:
        self._hovered_paths[key] = list(path)

    def remove_hovered_path(self, key: PointerKey) -> None:
        self._hovered_paths.pop(key, None)

    def push_input(self, event: InputEvent) -> None:
        self._input_queue.append(event)

    def drain_input(self) -> list[InputEvent]:
        """Take every queued event, oldest first, leaving the queue empty."""
        events, self._input_queue = self._input_queue, []
        return events