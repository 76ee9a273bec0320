"""
Application layer for the day grid feature.

Contains:
- Reconciler (wall clock -> pending fill ranges)
- IncrementalRenderer and the Canvas interface
- TickScheduler / FrameLoop
- DayGridEngine (context owner and event handlers)
"""
from src.features.day_grid.application.reconciler import Reconciler, ReconcileResult, RenderRange
from src.features.day_grid.application.renderer import (
    Canvas,
    IncrementalRenderer,
    RenderContextError,
    RenderStyle,
)
from src.features.day_grid.application.scheduler import FrameLoop, TickScheduler, next_tick_delay_ms
from src.features.day_grid.application.engine import DayGridContext, DayGridEngine, EngineEffects

__all__ = [
    'Reconciler',
    'ReconcileResult',
    'RenderRange',
    'Canvas',
    'IncrementalRenderer',
    'RenderContextError',
    'RenderStyle',
    'FrameLoop',
    'TickScheduler',
    'next_tick_delay_ms',
    'DayGridContext',
    'DayGridEngine',
    'EngineEffects',
]
