"""
Incremental Renderer

Paints the fill bitmap onto a Canvas.

Two paths:
- drain_one_frame(): paints at most `budget` slots of the pending range per
  call, so a multi-hour backlog is spread over several frames.
- redraw_all(): repaints background, empty grid and every filled slot from
  the bitmap. Used whenever the visual baseline changed (layout, colors,
  grid lines, rollover).

A drain in flight after a redraw keeps going against the current grid; it
only paints slots that are not yet set, so it never repaints over the
redrawn baseline.
"""
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

import numpy as np

from src.features.day_grid.application.reconciler import RenderRange
from src.features.day_grid.domain.fill_bitmap import FillBitmap
from src.features.day_grid.domain.grid import Grid
from src.utils.message import Log


DEFAULT_BUDGET = 3500
DEFAULT_BACKGROUND = "#05070d"
DEFAULT_GRID_LINE_COLOR = "#1b2233"


class RenderContextError(RuntimeError):
    """The drawing surface could not be created."""


class Canvas(ABC):
    """Drawing surface the renderer paints on."""

    @abstractmethod
    def fill_rect(self, x: float, y: float, w: float, h: float, color: str) -> None:
        pass

    @abstractmethod
    def clear(self, color: str) -> None:
        pass

    def allocate(self, width: float, height: float, device_pixel_ratio: float = 1.0) -> None:
        """
        Size the surface to a logical viewport at a device pixel ratio.

        Raises:
            RenderContextError: If the surface cannot be created
        """

    @contextmanager
    def batch(self) -> Iterator[None]:
        """Group draw calls; surfaces with per-call setup cost override this."""
        yield


@dataclass(frozen=True)
class RenderStyle:
    fill_color: str = "#2d7dff"
    empty_color: str = "#0b0f1a"
    show_grid: bool = False
    background: str = DEFAULT_BACKGROUND
    grid_line_color: str = DEFAULT_GRID_LINE_COLOR


class IncrementalRenderer:
    """
    Budgeted painter for one pending range at a time.

    Submitted ranges merge into the pending range as their covering hull.
    """

    def __init__(self, bitmap: FillBitmap, canvas: Canvas, grid: Grid,
                 style: Optional[RenderStyle] = None, budget: int = DEFAULT_BUDGET):
        if budget < 1:
            raise ValueError(f"render budget must be >= 1, got {budget}")
        self._bitmap = bitmap
        self._canvas = canvas
        self.grid = grid
        self.style = style or RenderStyle()
        self._budget = budget
        self._pending: Optional[RenderRange] = None
        self.last_frame_painted = 0

    @property
    def budget(self) -> int:
        return self._budget

    @property
    def pending(self) -> Optional[RenderRange]:
        return self._pending

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def clear_pending(self) -> None:
        self._pending = None

    def submit(self, pending: RenderRange) -> bool:
        """
        Queue a range for painting.

        Returns:
            True if a frame should be requested (the range was not empty).
        """
        last = len(self._bitmap) - 1
        start = max(0, min(last, pending.start))
        end = max(0, min(last, pending.end))
        if end < start:
            return False

        if self._pending is not None:
            start = min(start, self._pending.start)
            end = max(end, self._pending.end)

        self._pending = RenderRange(start, end)
        return True

    def drain_one_frame(self) -> bool:
        """
        Paint up to `budget` slots from the start of the pending range.

        Returns:
            True if slots remain and another frame is needed.
        """
        self.last_frame_painted = 0
        if self._pending is None:
            return False

        start = self._pending.start
        end = min(start + self._budget - 1, self._pending.end)
        gap = self.grid.draws_gaps(self.style.show_grid)
        color = self.style.fill_color

        painted = 0
        with self._canvas.batch():
            for index in range(start, end + 1):
                if self._bitmap.set(index):
                    self._canvas.fill_rect(*self.grid.cell_rect(index, gap), color)
                    painted += 1
        self.last_frame_painted = painted

        if end >= self._pending.end:
            self._pending = None
            return False

        self._pending = RenderRange(end + 1, self._pending.end)
        return True

    def redraw_all(self) -> None:
        """Repaint everything from the bitmap."""
        grid = self.grid
        style = self.style
        gap = grid.draws_gaps(style.show_grid)
        indices = self._bitmap.set_indices()

        with self._canvas.batch():
            self._canvas.clear(style.background)
            self._canvas.fill_rect(grid.offset_x, grid.offset_y,
                                   grid.pixel_width, grid.pixel_height, style.empty_color)
            if gap:
                self._draw_grid_lines()
                for index in indices:
                    self._canvas.fill_rect(*grid.cell_rect(int(index), True), style.fill_color)
            else:
                self._draw_row_runs(indices)

        Log.debug(f"IncrementalRenderer: full redraw ({len(indices)} filled, "
                  f"{grid.cols}x{grid.rows}, gaps={gap})")

    def _draw_grid_lines(self) -> None:
        grid = self.grid
        color = self.style.grid_line_color
        for col in range(grid.cols):
            x = grid.offset_x + (col + 1) * grid.cell_w - 1
            self._canvas.fill_rect(x, grid.offset_y, 1, grid.pixel_height, color)
        for row in range(grid.rows):
            y = grid.offset_y + (row + 1) * grid.cell_h - 1
            self._canvas.fill_rect(grid.offset_x, y, grid.pixel_width, 1, color)

    def _draw_row_runs(self, indices: np.ndarray) -> None:
        """Fill contiguous same-row stretches of set slots with one rect each."""
        if len(indices) == 0:
            return

        cols = self.grid.cols
        rows_of = indices // cols
        breaks = np.flatnonzero((np.diff(indices) != 1) | (np.diff(rows_of) != 0)) + 1
        starts = np.concatenate(([0], breaks))
        ends = np.concatenate((breaks - 1, [len(indices) - 1]))

        color = self.style.fill_color
        for s, e in zip(starts, ends):
            first = int(indices[s])
            last = int(indices[e])
            row = first // cols
            self._canvas.fill_rect(*self.grid.row_run_rect(row, first % cols, last % cols), color)
