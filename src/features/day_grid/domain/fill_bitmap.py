"""
Fill bitmap

One boolean per slot, row-major (index = row * cols + col). Filling is
monotonic within a day: set() never unsets, and clear_all() is the only
way back to empty.
"""
import numpy as np

from src.features.day_grid.domain.time_slots import SLOTS_PER_DAY


class FillBitmap:
    """Filled-slot record for the current day."""

    def __init__(self, size: int = SLOTS_PER_DAY):
        self._cells = np.zeros(size, dtype=bool)
        self._last_filled_index = -1

    def __len__(self) -> int:
        return len(self._cells)

    @property
    def last_filled_index(self) -> int:
        """Highest set index, or -1 when nothing is filled."""
        return self._last_filled_index

    def set(self, index: int) -> bool:
        """
        Mark a slot filled.

        Returns:
            True if the slot was newly set; False if it was already set
            or the index is out of range.
        """
        if index < 0 or index >= len(self._cells):
            return False
        if self._cells[index]:
            return False
        self._cells[index] = True
        if index > self._last_filled_index:
            self._last_filled_index = index
        return True

    def is_set(self, index: int) -> bool:
        if index < 0 or index >= len(self._cells):
            return False
        return bool(self._cells[index])

    def clear_all(self) -> None:
        self._cells[:] = False
        self._last_filled_index = -1

    def set_indices(self) -> np.ndarray:
        """Ascending indices of every filled slot."""
        return np.flatnonzero(self._cells)
