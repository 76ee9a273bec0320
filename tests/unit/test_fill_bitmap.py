"""
Unit tests for FillBitmap.
"""
import numpy as np

from src.features.day_grid.domain.fill_bitmap import FillBitmap
from src.features.day_grid.domain.time_slots import SLOTS_PER_DAY


class TestFillBitmap:

    def test_starts_empty(self):
        bitmap = FillBitmap()
        assert len(bitmap) == SLOTS_PER_DAY
        assert len(bitmap.set_indices()) == 0
        assert bitmap.last_filled_index == -1
        assert not bitmap.is_set(0)

    def test_set_reports_new_slots_only(self):
        bitmap = FillBitmap()
        assert bitmap.set(10) is True
        assert bitmap.set(10) is False
        assert bitmap.is_set(10)
        assert len(bitmap.set_indices()) == 1

    def test_out_of_range_is_ignored(self):
        bitmap = FillBitmap()
        assert bitmap.set(-1) is False
        assert bitmap.set(SLOTS_PER_DAY) is False
        assert not bitmap.is_set(SLOTS_PER_DAY)
        assert len(bitmap.set_indices()) == 0

    def test_last_filled_index_tracks_highest(self):
        bitmap = FillBitmap()
        bitmap.set(50)
        bitmap.set(5)
        assert bitmap.last_filled_index == 50

    def test_clear_all(self):
        bitmap = FillBitmap()
        for index in range(100):
            bitmap.set(index)
        bitmap.clear_all()
        assert len(bitmap.set_indices()) == 0
        assert bitmap.last_filled_index == -1
        assert not bitmap.is_set(42)

    def test_set_indices_ascending(self):
        bitmap = FillBitmap()
        for index in (900, 3, 77):
            bitmap.set(index)
        assert np.array_equal(bitmap.set_indices(), np.array([3, 77, 900]))
