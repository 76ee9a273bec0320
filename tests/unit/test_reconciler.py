"""
Unit tests for the Reconciler tick state machine.
"""
from datetime import date

import pytest

from src.features.day_grid.application.reconciler import Reconciler, RenderRange
from src.features.day_grid.domain.fill_bitmap import FillBitmap
from src.features.day_grid.domain.time_slots import SLOTS_PER_DAY


DAY = date(2026, 3, 14)
NEXT_DAY = date(2026, 3, 15)


@pytest.fixture
def bitmap():
    return FillBitmap()


@pytest.fixture
def reconciler(bitmap):
    return Reconciler(bitmap)


class TestStart:

    def test_start_from_now_returns_catch_up_range(self, reconciler):
        assert reconciler.start(43200, start_from_now=True, day=DAY) == RenderRange(0, 43200)
        assert reconciler.last_filled == 43200
        assert reconciler.day == DAY

    def test_start_fresh_fills_only_from_now(self, reconciler):
        assert reconciler.start(43200, start_from_now=False, day=DAY) is None
        assert reconciler.last_filled == -1
        assert reconciler.floor == 43200

        result = reconciler.reconcile(43202, day=DAY)
        assert result.range == RenderRange(43200, 43202)
        assert reconciler.last_filled == 43202

    def test_start_clears_bitmap(self, reconciler, bitmap):
        bitmap.set(5)
        reconciler.start(10, start_from_now=False)
        assert len(bitmap.set_indices()) == 0

    def test_start_rejects_out_of_range(self, reconciler):
        with pytest.raises(ValueError):
            reconciler.start(SLOTS_PER_DAY, start_from_now=True)


class TestReconcile:

    def test_forward_fill_is_contiguous(self, reconciler):
        reconciler.start(100, start_from_now=True, day=DAY)
        result = reconciler.reconcile(105, day=DAY)
        assert not result.rolled_over
        assert result.range == RenderRange(101, 105)
        assert reconciler.last_filled == 105

    def test_same_second_does_nothing(self, reconciler):
        reconciler.start(100, start_from_now=True, day=DAY)
        result = reconciler.reconcile(100, day=DAY)
        assert result.range is None
        assert not result.rolled_over

    def test_last_filled_is_monotonic_within_day(self, reconciler):
        reconciler.start(0, start_from_now=False, day=DAY)
        seen = []
        for target in (0, 3, 3, 10, 11, 500):
            reconciler.reconcile(target, day=DAY)
            seen.append(reconciler.last_filled)
        assert seen == sorted(seen)

    def test_backlog_becomes_one_range(self, reconciler):
        reconciler.start(1000, start_from_now=True, day=DAY)
        result = reconciler.reconcile(1000 + 7200, day=DAY)
        assert result.range == RenderRange(1001, 8200)

    def test_rollover_clears_and_leaves_slot_zero_pending(self, reconciler, bitmap):
        reconciler.start(SLOTS_PER_DAY - 1, start_from_now=True, day=DAY)
        for index in range(SLOTS_PER_DAY - 10, SLOTS_PER_DAY):
            bitmap.set(index)

        result = reconciler.reconcile(0, day=NEXT_DAY)
        assert result.rolled_over
        assert len(bitmap.set_indices()) == 0
        assert result.range == RenderRange(0, 0)
        assert reconciler.last_filled == 0

    def test_rollover_without_date(self, reconciler, bitmap):
        reconciler.start(SLOTS_PER_DAY - 1, start_from_now=True)
        bitmap.set(SLOTS_PER_DAY - 1)
        result = reconciler.reconcile(5)
        assert result.rolled_over
        assert result.range == RenderRange(0, 5)

    def test_rollover_resets_fresh_start_floor(self, reconciler):
        reconciler.start(80000, start_from_now=False, day=DAY)
        reconciler.reconcile(80001, day=DAY)
        result = reconciler.reconcile(2, day=NEXT_DAY)
        assert result.rolled_over
        assert reconciler.floor == 0
        assert result.range == RenderRange(0, 2)

    def test_date_change_rolls_over_even_when_target_is_ahead(self, reconciler, bitmap):
        reconciler.start(100, start_from_now=True, day=DAY)
        bitmap.set(50)
        result = reconciler.reconcile(200, day=NEXT_DAY)
        assert result.rolled_over
        assert not bitmap.is_set(50)
        assert result.range == RenderRange(0, 200)

    def test_exact_midnight_paints_slot_zero(self, reconciler):
        reconciler.start(0, start_from_now=False, day=DAY)
        result = reconciler.reconcile(0, day=DAY)
        assert not result.rolled_over
        assert result.range == RenderRange(0, 0)
        assert reconciler.last_filled == 0

    def test_never_fills_future_slots(self, reconciler):
        reconciler.start(100, start_from_now=True, day=DAY)
        result = reconciler.reconcile(150, day=DAY)
        assert result.range.end == 150

    def test_reconcile_rejects_out_of_range(self, reconciler):
        with pytest.raises(ValueError):
            reconciler.reconcile(-1)
