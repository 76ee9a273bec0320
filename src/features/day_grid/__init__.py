"""
Day grid feature module.

Usage:
    from src.features.day_grid.domain import Grid, GridSelector, FillBitmap
    from src.features.day_grid.application import DayGridEngine, TickScheduler
"""
from src.features.day_grid.domain import (
    SLOTS_PER_DAY,
    FillBitmap,
    Grid,
    GridSelector,
    InvalidGridError,
)

__all__ = [
    'SLOTS_PER_DAY',
    'FillBitmap',
    'Grid',
    'GridSelector',
    'InvalidGridError',
]
