"""
Unit tests for TickScheduler and FrameLoop.

Timers are FakeQTimer doubles; fire() simulates expiry.
"""
from datetime import datetime

import pytest

from src.features.day_grid.application.scheduler import (
    MIN_TICK_DELAY_MS,
    FrameLoop,
    TickScheduler,
    next_tick_delay_ms,
)
from src.features.day_grid.domain.time_slots import TimeSource


def at_ms(ms: int) -> datetime:
    return datetime(2026, 3, 14, 12, 0, 0, ms * 1000)


class TestNextTickDelay:

    @pytest.mark.parametrize("ms,expected", [(0, 1002), (500, 502), (990, 12), (998, MIN_TICK_DELAY_MS), (999, MIN_TICK_DELAY_MS)])
    def test_aligns_to_next_second(self, ms, expected):
        assert next_tick_delay_ms(at_ms(ms)) == expected

    def test_never_below_minimum(self):
        assert all(next_tick_delay_ms(at_ms(ms)) >= MIN_TICK_DELAY_MS for ms in range(1000))


class TestTickScheduler:

    @pytest.fixture
    def timer(self, fake_timer_factory):
        return fake_timer_factory()

    @pytest.fixture
    def ticks(self):
        return []

    @pytest.fixture
    def scheduler(self, clock, timer, ticks):
        return TickScheduler(ticks.append, TimeSource(clock), timer=timer)

    def test_timer_is_single_shot(self, scheduler, timer):
        assert timer.isSingleShot()

    def test_start_ticks_and_arms(self, scheduler, timer, ticks, clock):
        clock.set(at_ms(250))
        scheduler.start()
        assert ticks == [at_ms(250)]
        assert timer.isActive()
        assert scheduler.last_delay_ms == 752

    def test_delay_recomputed_each_tick(self, scheduler, timer, clock):
        scheduler.start()
        clock.set(datetime(2026, 3, 14, 12, 0, 1, 40_000))
        timer.fire()
        assert scheduler.last_delay_ms == 962
        assert timer.start_calls[-1] == 962

    def test_pause_stops_timer(self, scheduler, timer, ticks):
        scheduler.start()
        scheduler.pause()
        assert scheduler.is_paused
        assert not timer.isActive()
        scheduler.tick_now()
        assert len(ticks) == 1

    def test_resume_catches_up_immediately(self, scheduler, timer, ticks, clock):
        scheduler.start()
        scheduler.pause()
        clock.set(datetime(2026, 3, 14, 14, 0, 0))
        scheduler.resume()
        assert not scheduler.is_paused
        assert ticks[-1] == datetime(2026, 3, 14, 14, 0, 0)
        assert timer.isActive()

    def test_visibility_regained_ticks(self, scheduler, ticks):
        scheduler.start()
        scheduler.on_visibility_regained()
        assert len(ticks) == 2

    def test_visibility_regained_ignored_when_paused(self, scheduler, ticks):
        scheduler.start()
        scheduler.pause()
        scheduler.on_visibility_regained()
        assert len(ticks) == 1

    def test_stop(self, scheduler, timer):
        scheduler.start()
        scheduler.stop()
        assert not scheduler.is_active


class TestFrameLoop:

    @pytest.fixture
    def timer(self, fake_timer_factory):
        return fake_timer_factory()

    def test_request_arms_once(self, timer):
        loop = FrameLoop(lambda: False, timer=timer, interval_ms=16)
        loop.request()
        loop.request()
        assert loop.is_armed
        assert timer.start_calls == [16]

    def test_rearms_while_work_remains(self, timer):
        remaining = [3]

        def on_frame():
            remaining[0] -= 1
            return remaining[0] > 0

        loop = FrameLoop(on_frame, timer=timer)
        loop.request()
        while timer.isActive():
            timer.fire()
        assert loop.frames_run == 3
        assert not loop.is_armed

    def test_suspend_stops_rearming(self, timer):
        loop = FrameLoop(lambda: True, timer=timer)
        loop.request()
        loop.suspend()
        assert not loop.is_armed
        loop.request()
        assert not loop.is_armed

    def test_suspend_during_frame_lets_batch_finish(self, timer):
        loop = None

        def on_frame():
            loop.suspend()
            return True

        loop = FrameLoop(on_frame, timer=timer)
        loop.request()
        timer.fire()
        assert loop.frames_run == 1
        assert not loop.is_armed

    def test_resume_rearms_only_with_pending_work(self, timer):
        loop = FrameLoop(lambda: False, timer=timer)
        loop.suspend()
        loop.resume(has_pending=False)
        assert not loop.is_armed
        loop.suspend()
        loop.resume(has_pending=True)
        assert loop.is_armed
        assert not loop.is_suspended

    def test_real_qtimer_default(self, qapp):
        loop = FrameLoop(lambda: False)
        loop.request()
        assert loop.is_armed
        loop.stop()
        assert not loop.is_armed
