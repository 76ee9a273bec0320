"""
Reconciler

Per-tick state machine over last_filled, the highest slot handed to the
renderer for the current day (-1 when the day has not started filling).

Each tick compares the wall-clock slot (target) with last_filled:

- rollover:     target < last_filled, or the calendar date changed
                -> bitmap cleared, last_filled = -1, floor = 0
- forward fill: target > last_filled -> pending [max(last_filled + 1, floor), target]
- otherwise:    nothing to do

A fresh start (start_from_now off) sets the floor to the start slot so the
elapsed part of the day stays empty; rollover resets the floor to 0.

At exact midnight with nothing filled (last_filled == -1, target == 0) the
forward-fill rule yields [0, 0]: slot 0 is painted as the current second.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional

from src.features.day_grid.domain.fill_bitmap import FillBitmap
from src.features.day_grid.domain.time_slots import SLOTS_PER_DAY
from src.utils.message import Log


@dataclass(frozen=True)
class RenderRange:
    """Inclusive pending-paint interval over slot indices."""
    start: int
    end: int


@dataclass(frozen=True)
class ReconcileResult:
    rolled_over: bool = False
    range: Optional[RenderRange] = None


def _check_target(target: int) -> None:
    if not 0 <= target < SLOTS_PER_DAY:
        raise ValueError(f"target slot {target} outside [0, {SLOTS_PER_DAY - 1}]")


class Reconciler:
    """Turns wall-clock slots into contiguous fill ranges."""

    def __init__(self, bitmap: FillBitmap):
        self._bitmap = bitmap
        self._last_filled = -1
        self._day: Optional[date] = None
        self._floor = 0

    @property
    def floor(self) -> int:
        """Lowest slot forward fill may paint today."""
        return self._floor

    @property
    def last_filled(self) -> int:
        return self._last_filled

    @property
    def day(self) -> Optional[date]:
        return self._day

    def start(self, target: int, start_from_now: bool, day: Optional[date] = None) -> Optional[RenderRange]:
        """
        Begin a day from scratch.

        With start_from_now the elapsed part of the day counts as filled and
        [0, target] is returned for bulk catch-up; otherwise slots fill only
        as time advances from here, starting with the current second.
        """
        _check_target(target)
        self._bitmap.clear_all()
        self._day = day

        if start_from_now:
            self._floor = 0
            self._last_filled = target
            Log.debug(f"Reconciler: start from now, catching up [0, {target}]")
            return RenderRange(0, target)

        self._floor = target
        self._last_filled = -1
        Log.debug(f"Reconciler: start fresh at {target}")
        return None

    def reconcile(self, target: int, day: Optional[date] = None) -> ReconcileResult:
        """Advance to the wall-clock slot target."""
        _check_target(target)
        rolled_over = False

        day_changed = day is not None and self._day is not None and day != self._day
        if day_changed or target < self._last_filled:
            Log.info(f"Reconciler: day rollover (last filled {self._last_filled}, now {target})")
            self._bitmap.clear_all()
            self._last_filled = -1
            self._floor = 0
            rolled_over = True

        if day is not None:
            self._day = day

        if target > self._last_filled:
            if target < self._floor:
                return ReconcileResult(rolled_over=rolled_over)
            pending = RenderRange(max(self._last_filled + 1, self._floor), target)
            self._last_filled = target
            return ReconcileResult(rolled_over=rolled_over, range=pending)

        return ReconcileResult(rolled_over=rolled_over)
