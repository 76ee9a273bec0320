"""
Scheduling

TickScheduler re-arms a single-shot QTimer to the next wall-clock second
boundary after every tick. The delay is measured against the real clock each
time, so ticks stay locked to second boundaries instead of accumulating drift
the way a fixed 1000ms interval would.

FrameLoop arms one renderer drain per animation frame and re-arms while the
drain reports remaining work.

Both accept an injected timer (anything with setSingleShot/start/stop/
isActive and a timeout signal) so tests can run without an event loop.
"""
from datetime import datetime
from typing import Callable, Optional

from PyQt6.QtCore import QTimer

from src.features.day_grid.domain.time_slots import TimeSource
from src.utils.message import Log


MIN_TICK_DELAY_MS = 10
BOUNDARY_SLACK_MS = 2
DEFAULT_FRAME_INTERVAL_MS = 16


def next_tick_delay_ms(now: datetime) -> int:
    """Milliseconds until just past the next second boundary."""
    return max(MIN_TICK_DELAY_MS, 1000 - now.microsecond // 1000 + BOUNDARY_SLACK_MS)


class TickScheduler:
    """
    Second-aligned tick driver.

    pause() cancels the pending timer. resume() runs one catch-up tick
    immediately, then continues the schedule. on_visibility_regained()
    ticks immediately without waiting for the timer.
    """

    def __init__(self, on_tick: Callable[[datetime], None],
                 time_source: Optional[TimeSource] = None, timer=None):
        self._on_tick = on_tick
        self._time = time_source or TimeSource()
        self._timer = timer if timer is not None else QTimer()
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._fire)
        self._paused = False
        self.last_delay_ms: Optional[int] = None

    @property
    def is_paused(self) -> bool:
        return self._paused

    @property
    def is_active(self) -> bool:
        return self._timer.isActive()

    def start(self) -> None:
        """Tick now and begin the aligned schedule."""
        self._paused = False
        self.tick_now()

    def tick_now(self) -> None:
        if self._paused:
            return
        self._on_tick(self._time.now())
        self.schedule_next_tick()

    def schedule_next_tick(self, now: Optional[datetime] = None) -> None:
        self._timer.stop()
        if self._paused:
            return
        delay = next_tick_delay_ms(now or self._time.now())
        self.last_delay_ms = delay
        self._timer.start(delay)

    def pause(self) -> None:
        if self._paused:
            return
        self._paused = True
        self._timer.stop()
        Log.info("TickScheduler: paused")

    def resume(self) -> None:
        if not self._paused:
            return
        self._paused = False
        Log.info("TickScheduler: resumed, catching up")
        self.tick_now()

    def on_visibility_regained(self) -> None:
        if self._paused:
            return
        Log.debug("TickScheduler: visible again, catching up")
        self.tick_now()

    def stop(self) -> None:
        self._timer.stop()

    def _fire(self) -> None:
        self.tick_now()


class FrameLoop:
    """
    One-frame-at-a-time driver for renderer drains.

    on_frame returns True while work remains. suspend() lets a running
    frame finish but arms no further frames until resume().
    """

    def __init__(self, on_frame: Callable[[], bool], timer=None,
                 interval_ms: int = DEFAULT_FRAME_INTERVAL_MS):
        self._on_frame = on_frame
        self._interval_ms = interval_ms
        self._timer = timer if timer is not None else QTimer()
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._fire)
        self._suspended = False
        self.frames_run = 0

    @property
    def is_armed(self) -> bool:
        return self._timer.isActive()

    @property
    def is_suspended(self) -> bool:
        return self._suspended

    def request(self) -> None:
        if self._suspended or self._timer.isActive():
            return
        self._timer.start(self._interval_ms)

    def suspend(self) -> None:
        self._suspended = True
        self._timer.stop()

    def resume(self, has_pending: bool) -> None:
        self._suspended = False
        if has_pending:
            self.request()

    def stop(self) -> None:
        self._timer.stop()

    def _fire(self) -> None:
        self.frames_run += 1
        if self._on_frame():
            self.request()
