"""
Shared test fixtures.

Qt runs on the offscreen platform; timers and the drawing surface are
replaced by recording doubles so no event loop or window is needed.
"""
import os
from datetime import datetime
from typing import Callable, List, Optional, Tuple

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from src.features.day_grid.application.renderer import Canvas


@pytest.fixture
def qapp():
    """Ensure QApplication exists for widgets, signals and QTimer."""
    from PyQt6.QtWidgets import QApplication
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


@pytest.fixture(autouse=True)
def _isolated_data_dir(tmp_path, monkeypatch):
    """Keep preferences and logs out of the real user data directory."""
    monkeypatch.setenv("DAYGRID_DATA_DIR", str(tmp_path / "data"))


class FakeQTimer:
    """Minimal QTimer stand-in for unit tests."""

    def __init__(self):
        self._single_shot = False
        self._interval = None
        self._active = False
        self._callback: Optional[Callable[[], None]] = None
        self.start_calls: List[int] = []

    def setSingleShot(self, val):
        self._single_shot = val

    def isSingleShot(self):
        return self._single_shot

    def start(self, ms):
        self._interval = ms
        self._active = True
        self.start_calls.append(ms)

    def interval(self):
        return self._interval

    def isActive(self):
        return self._active

    def stop(self):
        self._active = False

    def fire(self):
        """Simulate timer expiry."""
        self._active = False
        if self._callback:
            self._callback()

    @property
    def timeout(self):
        """Return an object with .connect()."""
        parent = self

        class _Sig:
            def connect(self, cb):
                parent._callback = cb

            def disconnect(self):
                parent._callback = None

        return _Sig()


class RecordingCanvas(Canvas):
    """Canvas double that records every draw call."""

    def __init__(self):
        self.rects: List[Tuple[float, float, float, float, str]] = []
        self.clears: List[str] = []
        self.allocations: List[Tuple[float, float, float]] = []

    def allocate(self, width, height, device_pixel_ratio=1.0):
        self.allocations.append((width, height, device_pixel_ratio))

    def fill_rect(self, x, y, w, h, color):
        self.rects.append((x, y, w, h, color))

    def clear(self, color):
        self.clears.append(color)
        self.rects.clear()

    def rects_in(self, color: str) -> List[Tuple[float, float, float, float]]:
        return [r[:4] for r in self.rects if r[4] == color]

    def reset(self):
        self.rects.clear()
        self.clears.clear()


class SteppingClock:
    """Callable clock for TimeSource; set() moves it."""

    def __init__(self, now: datetime):
        self.current = now

    def __call__(self) -> datetime:
        return self.current

    def set(self, now: datetime):
        self.current = now


@pytest.fixture
def fake_timer_factory():
    return FakeQTimer


@pytest.fixture
def canvas():
    return RecordingCanvas()


@pytest.fixture
def clock():
    return SteppingClock(datetime(2026, 3, 14, 12, 0, 0))
