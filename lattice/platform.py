"""Host window facts shared with layout and drawing."""

from __future__ import annotations

from dataclasses import dataclass, field

from lattice.geometry import Rect


@dataclass
class PlatformContext:
    """Window size, scale, safe area and frame rate reported by the host."""

    display_scale: float = 1.0
    safe_area: Rect = field(default_factory=Rect)
    fps: int = 0
    _window_size: tuple[float, float] = field(default=(0.0, 0.0), repr=False)
    _window_size_dirty: bool = field(default=False, repr=False)

    @property
    def window_size(self) -> tuple[float, float]:
        return self._window_size

    def set_window_size(self, width: float, height: float) -> None:
        """Record a new window size and mark it as changed."""
        self._window_size = (float(width), float(height))
        self._window_size_dirty = True

    def take_window_size_dirty(self) -> bool:
        """Return whether the size changed since the last call, and clear the flag."""
        dirty = self._window_size_dirty
        self._window_size_dirty = False
        return dirty