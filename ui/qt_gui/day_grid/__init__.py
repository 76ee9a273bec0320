"""
Day Grid Qt Components

- QImageCanvas / DayGridCanvasWidget: offscreen image surface and its host widget
- DayGridController: timers, resizes and settings wired to the engine
"""
from .canvas_widget import DayGridCanvasWidget, QImageCanvas
from .day_grid_controller import DayGridController

__all__ = [
    'DayGridCanvasWidget',
    'QImageCanvas',
    'DayGridController',
]
