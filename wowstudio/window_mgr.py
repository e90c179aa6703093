"""Management of a set of application windows."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

CLOSE_REQUESTED = "window_close_requested"


@dataclass
class WindowEvent:
    """An input or window event.

    Events carrying a ``window_id`` go to that window only; events without
    one go to every window.
    """

    type: str
    window_id: Optional[int] = None
    data: dict[str, Any] = field(default_factory=dict)


class Window:
    """Base window; subclasses override the frame hooks."""

    def __init__(self, name: str, window_id: int) -> None:
        self.name = name
        self.window_id = window_id
        self.initialized = False
        self.frame_start = 0
        self.frame_end = 0
        self.frame_delta = 0
        self._closing = False

    def init(self) -> bool:
        self.initialized = True
        return True

    def update(self) -> bool:
        return True

    def render(self) -> bool:
        return True

    def process_event(self, event: WindowEvent) -> bool:
        """Handle a close request; return whether the window stays open."""
        if event.type == CLOSE_REQUESTED:
            self.close()
        return not self._closing

    def close(self) -> None:
        self._closing = True

    def should_close(self) -> bool:
        return self._closing


class WindowManager:
    """Holds the open windows and drives their frames and events."""

    def __init__(self) -> None:
        self._windows: list[Window] = []

    def add_window(self, window: Window) -> Window:
        self._windows.append(window)
        return window

    def get_window(self, window: Window) -> Optional[Window]:
        return next((w for w in self._windows if w is window), None)

    def get_window_from_id(self, window_id: int) -> Optional[Window]:
        return next((w for w in self._windows if w.window_id == window_id), None)

    def remove_window(self, window: Window) -> None:
        for position, candidate in enumerate(self._windows):
            if candidate is window:
                del self._windows[position]
                return
        raise ValueError(f"window {window.name!r} is not managed")

    def clear_windows(self) -> None:
        self._windows.clear()

    def __len__(self) -> int:
        return len(self._windows)

    def cleanup_windows(self, force: bool = False) -> list[Window]:
        """Drop windows that asked to close, or all of them with ``force``."""
        removed = [w for w in self._windows if force or w.should_close()]
        self._windows = [w for w in self._windows if w not in removed]
        return removed

    def update_windows(self) -> None:
        """Run one update and render for each window that is still open."""
        for window in list(self._windows):
            if window.should_close():
                continue
            window.frame_start = time.perf_counter_ns()
            window.update()
            window.render()
            window.frame_end = time.perf_counter_ns()
            window.frame_delta = (window.frame_end - window.frame_start) // 1_000_000

    def process_events(self, events: Iterable[WindowEvent]) -> None:
        """Initialise new windows, then dispatch each event."""
        for window in list(self._windows):
            if not window.initialized:
                window.init()

        for event in events:
            if event.window_id is None:
                targets = list(self._windows)
            else:
                target = self.get_window_from_id(event.window_id)
                targets = [target] if target is not None else []
            for window in targets:
                window.process_event(event)