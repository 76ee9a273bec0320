"""
Day Grid Controller

Wires the engine to Qt: tick and frame timers, canvas resizes, settings
changes and the pause/reset controls. The engine decides what to draw; this
class only schedules it and asks the widget to repaint.
"""
from datetime import datetime
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal

from src.application.api.result_types import CommandResult
from src.application.settings.day_grid_settings import DayGridSettingsManager
from src.features.day_grid.application.engine import DayGridEngine, EngineEffects
from src.features.day_grid.application.renderer import RenderContextError
from src.features.day_grid.application.scheduler import FrameLoop, TickScheduler
from src.features.day_grid.domain.grid import Grid, GridSelector
from src.features.day_grid.domain.time_slots import TimeSource, format_hms, seconds_since_midnight
from src.utils.config import RuntimeConfig
from src.utils.message import Log
from ui.qt_gui.day_grid.canvas_widget import DayGridCanvasWidget


class DayGridController(QObject):
    """Drives one DayGridEngine from Qt events."""

    clock_changed = pyqtSignal(str)  # HH:MM:SS of the latest tick
    paused_changed = pyqtSignal(bool)

    def __init__(self, canvas_widget: DayGridCanvasWidget, settings_manager: DayGridSettingsManager,
                 config: Optional[RuntimeConfig] = None, time_source: Optional[TimeSource] = None,
                 tick_timer=None, frame_timer=None, parent=None):
        super().__init__(parent)
        config = config or RuntimeConfig.from_env()
        self._widget = canvas_widget
        self._settings_manager = settings_manager
        self._time = time_source or TimeSource()

        self.engine = DayGridEngine(
            canvas_widget.canvas,
            settings=settings_manager.settings,
            selector=GridSelector(pixel_budget=config.pixel_budget),
            time_source=self._time,
            budget=config.render_budget,
            viewport_w=float(canvas_widget.width()),
            viewport_h=float(canvas_widget.height()),
            device_pixel_ratio=canvas_widget.devicePixelRatioF(),
        )
        self.ticks = TickScheduler(self._on_tick, self._time, timer=tick_timer)
        self.frames = FrameLoop(self._on_frame, timer=frame_timer,
                                interval_ms=config.frame_interval_ms)

        canvas_widget.viewport_resized.connect(self.on_resize)
        canvas_widget.set_tooltip_provider(self.engine.tooltip_text_at)
        settings_manager.settings_changed.connect(self._on_setting_changed)

    @property
    def is_paused(self) -> bool:
        return self.ticks.is_paused

    @property
    def grid(self) -> Grid:
        return self.engine.grid

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self):
        self._apply(self.engine.start(self._time.now()))
        self.ticks.start()

    def stop(self):
        self.ticks.stop()
        self.frames.stop()

    def toggle_pause(self):
        if self.is_paused:
            self.resume()
        else:
            self.pause()

    def pause(self):
        if self.is_paused:
            return
        self.ticks.pause()
        self.frames.suspend()
        self.paused_changed.emit(True)

    def resume(self):
        if not self.is_paused:
            return
        self.frames.resume(self.engine.has_pending)
        self.ticks.resume()
        self.paused_changed.emit(False)

    def reset(self):
        """Re-apply the start policy; tick right away unless paused."""
        Log.info("DayGridController: reset")
        self._apply(self.engine.reset(self._time.now()))
        if not self.is_paused:
            self.ticks.tick_now()

    def on_visibility_changed(self, visible: bool):
        if visible:
            self.ticks.on_visibility_regained()

    # =========================================================================
    # Event handlers
    # =========================================================================

    def on_resize(self, width: float, height: float, device_pixel_ratio: float):
        try:
            effects = self.engine.on_resize(width, height, device_pixel_ratio)
        except RenderContextError as e:
            Log.error(f"DayGridController: resize to {width:g}x{height:g} failed: {e}")
            return
        self._apply(effects)

    def apply_custom_grid(self, cols, rows) -> CommandResult:
        result = self.engine.apply_custom_grid(cols, rows)
        if result.success:
            self._widget.update()
            # Engine already uses this shape; persisting it triggers no relayout
            self._settings_manager.update(grid_mode="custom", custom_cols=cols, custom_rows=rows)
        return result

    def _on_setting_changed(self, key: str):
        settings = self._settings_manager.settings
        effects = self.engine.on_settings_changed(settings, self._time.now())
        self._apply(effects)
        if key == "start_from_now" and not self.is_paused:
            self.ticks.tick_now()

    def _on_tick(self, now: datetime):
        self._apply(self.engine.on_tick(now))
        self.clock_changed.emit(format_hms(seconds_since_midnight(now)))

    def _on_frame(self) -> bool:
        more = self.engine.on_frame()
        self._widget.update()
        return more

    def _apply(self, effects: EngineEffects):
        if effects.redrawn:
            self._widget.update()
        if effects.request_frame:
            self.frames.request()
