"""
Day Grid Engine

Owns the engine context (grid, bitmap, reconciler, renderer, settings) and
exposes one handler per event:

    start / reset     -> begin the day under the start policy
    on_tick(now)      -> reconcile against the wall clock
    on_frame()        -> drain one renderer batch
    on_resize(...)    -> new layout + full redraw
    on_settings_changed(settings) -> redraw / relayout / restart as needed
    apply_custom_grid(cols, rows) -> validated custom shape

Handlers draw through the renderer's Canvas and return EngineEffects
describing what the caller must schedule. Timers live outside the engine
(see scheduler.py), so every transition can be driven directly in tests.
"""
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from src.application.api.result_types import CommandResult
from src.application.settings.day_grid_settings import DayGridSettings
from src.features.day_grid.application.reconciler import Reconciler, RenderRange
from src.features.day_grid.application.renderer import (
    DEFAULT_BUDGET,
    Canvas,
    IncrementalRenderer,
    RenderStyle,
)
from src.features.day_grid.domain.fill_bitmap import FillBitmap
from src.features.day_grid.domain.grid import (
    Grid,
    GridMode,
    GridSelector,
    InvalidGridError,
    check_dimensions,
)
from src.features.day_grid.domain.time_slots import TimeSource, format_hms, seconds_since_midnight
from src.utils.message import Log


STYLE_FIELDS = ("fill_color", "empty_color", "show_grid")
LAYOUT_FIELDS = ("layout_mode", "grid_mode", "custom_cols", "custom_rows")


@dataclass
class EngineEffects:
    """What the caller has to do after an engine event."""
    request_frame: bool = False
    redrawn: bool = False
    rolled_over: bool = False

    def merge(self, other: "EngineEffects") -> "EngineEffects":
        return EngineEffects(
            request_frame=self.request_frame or other.request_frame,
            redrawn=self.redrawn or other.redrawn,
            rolled_over=self.rolled_over or other.rolled_over,
        )


@dataclass
class DayGridContext:
    settings: DayGridSettings
    bitmap: FillBitmap
    reconciler: Reconciler
    renderer: IncrementalRenderer
    viewport_w: float = 0.0
    viewport_h: float = 0.0
    device_pixel_ratio: float = 1.0

    @property
    def grid(self) -> Grid:
        return self.renderer.grid


def style_from_settings(settings: DayGridSettings) -> RenderStyle:
    return RenderStyle(
        fill_color=settings.fill_color,
        empty_color=settings.empty_color,
        show_grid=settings.show_grid,
    )


class DayGridEngine:
    """Controller for one day grid on one canvas."""

    def __init__(self, canvas: Canvas, settings: Optional[DayGridSettings] = None,
                 selector: Optional[GridSelector] = None,
                 time_source: Optional[TimeSource] = None,
                 budget: int = DEFAULT_BUDGET,
                 viewport_w: float = 0.0, viewport_h: float = 0.0,
                 device_pixel_ratio: float = 1.0):
        settings = replace(settings) if settings is not None else DayGridSettings()
        self._selector = selector or GridSelector()
        self._time = time_source or TimeSource()

        bitmap = FillBitmap()
        grid = self._initial_grid(settings, viewport_w, viewport_h, device_pixel_ratio)
        self._canvas = canvas
        self._surface = None
        self._allocate(grid)
        renderer = IncrementalRenderer(bitmap, canvas, grid, style_from_settings(settings), budget)

        self.context = DayGridContext(
            settings=settings,
            bitmap=bitmap,
            reconciler=Reconciler(bitmap),
            renderer=renderer,
            viewport_w=viewport_w,
            viewport_h=viewport_h,
            device_pixel_ratio=device_pixel_ratio,
        )
        self.last_tick: Optional[datetime] = None

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def grid(self) -> Grid:
        return self.context.grid

    @property
    def bitmap(self) -> FillBitmap:
        return self.context.bitmap

    @property
    def settings(self) -> DayGridSettings:
        return self.context.settings

    @property
    def last_filled(self) -> int:
        return self.context.reconciler.last_filled

    @property
    def pending(self) -> Optional[RenderRange]:
        return self.context.renderer.pending

    @property
    def has_pending(self) -> bool:
        return self.context.renderer.has_pending

    # =========================================================================
    # Layout
    # =========================================================================

    def _select(self, settings: DayGridSettings, width: float, height: float, dpr: float) -> Grid:
        return self._selector.select(
            width, height,
            mode=settings.scaling,
            grid_mode=settings.grid_shape_mode,
            custom=settings.custom_shape,
            device_pixel_ratio=dpr,
        )

    def _initial_grid(self, settings: DayGridSettings, width: float, height: float, dpr: float) -> Grid:
        try:
            return self._select(settings, width, height, dpr)
        except InvalidGridError as e:
            # Persisted custom shape is unusable; run with the automatic shape
            Log.warning(f"DayGridEngine: stored custom grid rejected ({e}), using automatic grid")
            return self._selector.select(width, height, mode=settings.scaling,
                                         device_pixel_ratio=dpr)

    def _allocate(self, grid: Grid) -> None:
        """Size the canvas to the grid's viewport at its budget-capped ratio."""
        surface = (grid.viewport_w, grid.viewport_h, grid.device_pixel_ratio)
        if surface == self._surface:
            return
        self._canvas.allocate(*surface)
        self._surface = surface

    def _apply_grid(self, grid: Grid) -> EngineEffects:
        self._allocate(grid)
        renderer = self.context.renderer
        renderer.grid = grid
        renderer.redraw_all()
        Log.debug(f"DayGridEngine: layout {grid.cols}x{grid.rows} cell "
                  f"{grid.cell_w:g}x{grid.cell_h:g} ({grid.scaling.value})")
        return EngineEffects(request_frame=renderer.has_pending, redrawn=True)

    # =========================================================================
    # Events
    # =========================================================================

    def start(self, now: Optional[datetime] = None) -> EngineEffects:
        """Begin the day under the start-from-now policy."""
        now = now or self._time.now()
        ctx = self.context
        ctx.renderer.clear_pending()
        catch_up = ctx.reconciler.start(
            seconds_since_midnight(now), ctx.settings.start_from_now, day=now.date()
        )
        ctx.renderer.redraw_all()
        self.last_tick = now

        effects = EngineEffects(redrawn=True)
        if catch_up is not None:
            effects.request_frame = ctx.renderer.submit(catch_up)
        Log.info(f"DayGridEngine: started at {now:%H:%M:%S} "
                 f"(start_from_now={ctx.settings.start_from_now})")
        return effects

    def reset(self, now: Optional[datetime] = None) -> EngineEffects:
        return self.start(now)

    def on_tick(self, now: Optional[datetime] = None) -> EngineEffects:
        now = now or self._time.now()
        ctx = self.context
        self.last_tick = now

        result = ctx.reconciler.reconcile(seconds_since_midnight(now), day=now.date())
        effects = EngineEffects()

        if result.rolled_over:
            ctx.renderer.clear_pending()
            ctx.renderer.redraw_all()
            effects.redrawn = True
            effects.rolled_over = True

        if result.range is not None:
            effects.request_frame = ctx.renderer.submit(result.range)
        return effects

    def on_frame(self) -> bool:
        """Drain one batch; True while more frames are needed."""
        return self.context.renderer.drain_one_frame()

    def on_resize(self, width: float, height: float, device_pixel_ratio: Optional[float] = None) -> EngineEffects:
        """
        Lay out for a new viewport and redraw.

        Raises:
            RenderContextError: If the canvas cannot be resized; the current
                grid and viewport are kept
        """
        ctx = self.context
        dpr = ctx.device_pixel_ratio if device_pixel_ratio is None else device_pixel_ratio
        effects = self._apply_grid(self._initial_grid(ctx.settings, width, height, dpr))
        ctx.viewport_w, ctx.viewport_h, ctx.device_pixel_ratio = width, height, dpr
        return effects

    def on_settings_changed(self, settings: DayGridSettings, now: Optional[datetime] = None) -> EngineEffects:
        """
        Adopt new settings.

        Style changes redraw, layout changes relayout, and toggling
        start_from_now restarts the day. A custom grid that fails
        validation keeps the current grid and layout settings.
        """
        ctx = self.context
        old = ctx.settings
        ctx.settings = replace(settings)
        effects = EngineEffects()

        restyled = any(getattr(old, name) != getattr(settings, name) for name in STYLE_FIELDS)
        relayout = any(getattr(old, name) != getattr(settings, name) for name in LAYOUT_FIELDS)

        if restyled:
            ctx.renderer.style = style_from_settings(settings)

        if relayout:
            try:
                grid = self._select(settings, ctx.viewport_w, ctx.viewport_h, ctx.device_pixel_ratio)
            except InvalidGridError as e:
                Log.warning(f"DayGridEngine: keeping current grid: {e}")
                ctx.settings = replace(settings, **{name: getattr(old, name) for name in LAYOUT_FIELDS})
                grid = None
            if grid is not None:
                effects = effects.merge(self._apply_grid(grid))

        if restyled and not effects.redrawn:
            ctx.renderer.redraw_all()
            effects.redrawn = True

        if old.start_from_now != settings.start_from_now:
            effects = effects.merge(self.start(now))

        return effects

    def apply_custom_grid(self, cols, rows) -> CommandResult[Grid]:
        """
        Switch to a user-specified cols x rows grid.

        On validation failure the active grid and settings are untouched.
        """
        try:
            check_dimensions(cols, rows)
        except InvalidGridError as e:
            Log.warning(f"DayGridEngine: custom grid {cols}x{rows} rejected: {e}")
            return CommandResult.error_result("Invalid custom grid", errors=[str(e)])

        ctx = self.context
        ctx.settings = replace(ctx.settings, grid_mode=GridMode.CUSTOM.value,
                               custom_cols=cols, custom_rows=rows)
        self._apply_grid(self._select(ctx.settings, ctx.viewport_w, ctx.viewport_h,
                                      ctx.device_pixel_ratio))
        return CommandResult.success_result(f"Grid set to {cols}x{rows}", data=self.grid)

    # =========================================================================
    # Pointer / time queries
    # =========================================================================

    def cell_at(self, x: float, y: float) -> Optional[int]:
        return self.grid.cell_at(x, y)

    def tooltip_text_at(self, x: float, y: float) -> Optional[str]:
        index = self.cell_at(x, y)
        if index is None:
            return None
        return format_hms(index)
