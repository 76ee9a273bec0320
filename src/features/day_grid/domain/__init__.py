"""
Domain layer for the day grid feature.

Contains:
- Time slot helpers (TimeSource, format_hms, parse_hms)
- Grid value object and GridSelector
- FillBitmap
"""
from src.features.day_grid.domain.time_slots import (
    SLOTS_PER_DAY,
    TimeSource,
    seconds_since_midnight,
    format_hms,
    parse_hms,
)
from src.features.day_grid.domain.grid import (
    Grid,
    GridMode,
    GridSelector,
    InvalidGridError,
    ScalingMode,
    check_dimensions,
    divisor_pairs,
)
from src.features.day_grid.domain.fill_bitmap import FillBitmap

__all__ = [
    'SLOTS_PER_DAY',
    'TimeSource',
    'seconds_since_midnight',
    'format_hms',
    'parse_hms',
    'Grid',
    'GridMode',
    'GridSelector',
    'InvalidGridError',
    'ScalingMode',
    'check_dimensions',
    'divisor_pairs',
    'FillBitmap',
]
