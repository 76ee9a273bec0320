"""
Grid geometry and selection

A Grid is an exact cols x rows factorization of the day's slot count plus
the cell geometry that places it in the viewport. Grids are immutable: a
resize or grid-mode change produces a new Grid.

GridSelector picks the factorization (automatically by aspect ratio, or
from a validated custom cols/rows pair) and lays it out under one of the
scaling policies:

- contain: square integer cells, letterboxed and centered
- cover:   square integer cells, centered and cropped
- stretch: rectangular cells filling the viewport exactly
- auto:    contain when a whole pixel per cell fits, otherwise stretch
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from src.features.day_grid.domain.time_slots import SLOTS_PER_DAY
from src.shared.application.validation import (
    ValidationError,
    ValidationResult,
    RangeValidator,
    TypeValidator,
    validate,
)


DEFAULT_PIXEL_BUDGET = 12_000_000
DEFAULT_TARGET_RATIO = 1.5
SCORE_EPSILON = 1e-6
MIN_DPR = 1.0
MAX_DPR = 3.0


class InvalidGridError(ValidationError):
    """Raised when cols/rows do not form an exact factorization of the day."""


class ScalingMode(Enum):
    CONTAIN = "contain"
    COVER = "cover"
    STRETCH = "stretch"
    AUTO = "auto"

    @classmethod
    def from_setting(cls, value: "str | ScalingMode") -> "ScalingMode":
        """
        Resolve a persisted layout mode.

        Accepts the enum itself, its value, or the settings aliases
        fit (contain) and fill (cover).
        """
        if isinstance(value, cls):
            return value
        aliases = {"fit": cls.CONTAIN, "fill": cls.COVER}
        key = str(value).strip().lower()
        if key in aliases:
            return aliases[key]
        return cls(key)


class GridMode(Enum):
    AUTO = "auto"
    CUSTOM = "custom"


def check_dimensions(cols, rows, n: int = SLOTS_PER_DAY) -> Tuple[int, int]:
    """
    Validate a cols/rows pair against the slot count.

    Returns:
        (cols, rows) unchanged when valid

    Raises:
        InvalidGridError: non-integer or non-positive dimension, or cols*rows != n
    """
    result = ValidationResult()
    for name, value in (("cols", cols), ("rows", rows)):
        if value is None:
            result.add_error(f"{name}: is required")
            continue
        result.merge(validate(
            value,
            [TypeValidator(int), RangeValidator(min_value=1)],
            field_name=name,
            stop_on_first_error=True,
        ))

    if result.valid and cols * rows != n:
        result.add_error(f"cols x rows must equal {n}, got {cols} x {rows} = {cols * rows}")

    result.raise_if_invalid(InvalidGridError)
    return cols, rows


@dataclass(frozen=True)
class Grid:
    """
    Cell layout for one viewport.

    Coordinates are logical (device-independent) pixels relative to the
    viewport origin; offsets may be negative when the grid is cropped.
    """
    cols: int
    rows: int
    cell_w: float
    cell_h: float
    offset_x: float = 0.0
    offset_y: float = 0.0
    device_pixel_ratio: float = 1.0
    scaling: ScalingMode = ScalingMode.CONTAIN
    viewport_w: float = 0.0
    viewport_h: float = 0.0

    def __post_init__(self):
        check_dimensions(self.cols, self.rows, SLOTS_PER_DAY)

    @property
    def pixel_width(self) -> float:
        return self.cols * self.cell_w

    @property
    def pixel_height(self) -> float:
        return self.rows * self.cell_h

    def draws_gaps(self, show_grid: bool) -> bool:
        """Grid lines are drawn as a 1px gap only when cells are at least 2px."""
        return show_grid and self.cell_w >= 2 and self.cell_h >= 2

    def cell_rect(self, index: int, gap: bool = False) -> Tuple[float, float, float, float]:
        """(x, y, w, h) of a slot; gap trims 1px from the right and bottom."""
        row, col = divmod(index, self.cols)
        inset = 1 if gap else 0
        return (
            self.offset_x + col * self.cell_w,
            self.offset_y + row * self.cell_h,
            self.cell_w - inset,
            self.cell_h - inset,
        )

    def row_run_rect(self, row: int, first_col: int, last_col: int) -> Tuple[float, float, float, float]:
        """Rectangle covering columns first_col..last_col (inclusive) of one row."""
        return (
            self.offset_x + first_col * self.cell_w,
            self.offset_y + row * self.cell_h,
            (last_col - first_col + 1) * self.cell_w,
            self.cell_h,
        )

    def cell_at(self, x: float, y: float) -> Optional[int]:
        """
        Map a viewport-relative point to a slot index.

        Returns None outside the viewport (when known) or outside the grid.
        """
        if self.viewport_w > 0 and not (0 <= x < self.viewport_w):
            return None
        if self.viewport_h > 0 and not (0 <= y < self.viewport_h):
            return None

        gx = x - self.offset_x
        gy = y - self.offset_y
        if gx < 0 or gy < 0:
            return None

        col = int(gx // self.cell_w)
        row = int(gy // self.cell_h)
        if col >= self.cols or row >= self.rows:
            return None
        return row * self.cols + col


def divisor_pairs(n: int = SLOTS_PER_DAY) -> List[Tuple[int, int]]:
    """All (cols, rows) with cols * rows == n, both orientations."""
    pairs = []
    for a in range(1, math.isqrt(n) + 1):
        if n % a:
            continue
        b = n // a
        pairs.append((b, a))
        if a != b:
            pairs.append((a, b))
    return pairs


def target_ratio(width: float, height: float) -> float:
    if width <= 0 or height <= 0:
        return DEFAULT_TARGET_RATIO
    return width / height


def aspect_score(cols: int, rows: int, width: float, height: float) -> float:
    """|ln(ratio / target)|; lower is a better aspect match."""
    return abs(math.log((cols / rows) / target_ratio(width, height)))


def contain_cell_size(cols: int, rows: int, width: float, height: float) -> int:
    if width <= 0 or height <= 0:
        return 1
    return max(1, math.floor(min(width / cols, height / rows)))


def cover_cell_size(cols: int, rows: int, width: float, height: float) -> int:
    if width <= 0 or height <= 0:
        return 1
    return max(1, math.ceil(max(width / cols, height / rows)))


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class GridSelector:
    """
    Chooses and lays out grids for the day's slot count.

    The pixel budget bounds the backing store: square-cell layouts shrink
    their cell size, and the device pixel ratio is capped so that the
    viewport backing store stays within budget (dpr clamped to [1, 3]).
    """

    def __init__(self, pixel_budget: int = DEFAULT_PIXEL_BUDGET):
        self.pixel_budget = pixel_budget
        self._candidates = divisor_pairs(SLOTS_PER_DAY)

    def max_device_pixel_ratio(self, width: float, height: float) -> float:
        """
        Largest ratio whose backing store for the whole viewport fits the budget.

        The store is ceil(width * dpr) x ceil(height * dpr) pixels; one extra
        logical pixel per axis covers the rounding. Never below MIN_DPR.
        """
        area = (width + 1) * (height + 1)
        return _clamp(math.sqrt(self.pixel_budget / area), MIN_DPR, MAX_DPR)

    def choose_shape(self, width: float, height: float) -> Tuple[int, int]:
        """Best (cols, rows) for the viewport aspect."""
        best = None
        best_score = 0.0
        best_cell = 0

        for cols, rows in self._candidates:
            score = aspect_score(cols, rows, width, height)
            cell = contain_cell_size(cols, rows, width, height)

            if best is None or score < best_score - SCORE_EPSILON:
                replace = True
            elif abs(score - best_score) <= SCORE_EPSILON:
                replace = cell > best_cell or (cell == best_cell and score < best_score)
            else:
                replace = False

            if replace:
                best, best_score, best_cell = (cols, rows), score, cell

        return best

    def resolve_scaling(self, mode: ScalingMode, cols: int, rows: int,
                        width: float, height: float) -> ScalingMode:
        if mode is not ScalingMode.AUTO:
            return mode
        if width > 0 and height > 0 and min(width / cols, height / rows) >= 1:
            return ScalingMode.CONTAIN
        return ScalingMode.STRETCH

    def layout(self, cols: int, rows: int, width: float, height: float,
               mode: ScalingMode = ScalingMode.CONTAIN,
               device_pixel_ratio: float = 1.0) -> Grid:
        """Lay out an already-validated factorization in the viewport."""
        width = max(0.0, float(width))
        height = max(0.0, float(height))
        scaling = self.resolve_scaling(mode, cols, rows, width, height)

        if scaling is ScalingMode.STRETCH:
            if width > 0 and height > 0:
                cell_w, cell_h = width / cols, height / rows
            else:
                cell_w = cell_h = 1.0
            offset_x = offset_y = 0.0
        else:
            if scaling is ScalingMode.CONTAIN:
                cell = contain_cell_size(cols, rows, width, height)
            else:
                cell = cover_cell_size(cols, rows, width, height)

            while cell > 1 and cols * rows * cell * cell > self.pixel_budget:
                cell -= 1

            cell_w = cell_h = float(cell)
            offset_x = math.floor((width - cols * cell) / 2)
            offset_y = math.floor((height - rows * cell) / 2)
            if scaling is ScalingMode.CONTAIN:
                offset_x = max(0, offset_x)
                offset_y = max(0, offset_y)

        dpr = _clamp(device_pixel_ratio or 1.0, MIN_DPR, MAX_DPR)
        dpr = min(dpr, self.max_device_pixel_ratio(width, height))

        return Grid(
            cols=cols,
            rows=rows,
            cell_w=cell_w,
            cell_h=cell_h,
            offset_x=float(offset_x),
            offset_y=float(offset_y),
            device_pixel_ratio=dpr,
            scaling=scaling,
            viewport_w=width,
            viewport_h=height,
        )

    def select(self, width: float, height: float,
               mode: ScalingMode = ScalingMode.CONTAIN,
               grid_mode: GridMode = GridMode.AUTO,
               custom: Optional[Tuple[int, int]] = None,
               device_pixel_ratio: float = 1.0) -> Grid:
        """
        Select and lay out a grid.

        Raises:
            InvalidGridError: custom grid mode with a missing or invalid pair
        """
        if grid_mode is GridMode.CUSTOM:
            if custom is None:
                raise InvalidGridError("custom grid mode requires cols and rows")
            cols, rows = check_dimensions(custom[0], custom[1])
        else:
            cols, rows = self.choose_shape(width, height)

        return self.layout(cols, rows, width, height, mode, device_pixel_ratio)
