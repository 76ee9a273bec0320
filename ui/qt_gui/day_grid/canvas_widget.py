"""
Day Grid Canvas Widget

QImage-backed drawing surface for the day grid.

The renderer paints into an offscreen QImage sized to the viewport times
the layout's budget-capped device pixel ratio; paintEvent only blits that
image. Nothing is repainted per frame except the cells the renderer touched.
"""
import math
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, Optional

from PyQt6.QtCore import QPointF, QRectF, pyqtSignal
from PyQt6.QtGui import QColor, QImage, QPainter
from PyQt6.QtWidgets import QSizePolicy, QToolTip, QWidget

from src.features.day_grid.application.renderer import Canvas, RenderContextError


class QImageCanvas(Canvas):
    """Canvas implementation over a QImage."""

    def __init__(self):
        self._image: Optional[QImage] = None
        self._painter: Optional[QPainter] = None
        self._colors: Dict[str, QColor] = {}
        self._logical_w = 0.0
        self._logical_h = 0.0

    @property
    def image(self) -> Optional[QImage]:
        return self._image

    def allocate(self, width: float, height: float, device_pixel_ratio: float = 1.0) -> QImage:
        """
        (Re)create the backing image for a logical viewport size.

        Raises:
            RenderContextError: If the image cannot be allocated
        """
        dpr = device_pixel_ratio if device_pixel_ratio > 0 else 1.0
        pixel_w = max(1, math.ceil(width * dpr))
        pixel_h = max(1, math.ceil(height * dpr))

        image = QImage(pixel_w, pixel_h, QImage.Format.Format_RGB32)
        if image.isNull():
            raise RenderContextError(f"Cannot allocate a {pixel_w}x{pixel_h} drawing surface")
        image.setDevicePixelRatio(dpr)

        self._image = image
        self._logical_w = width
        self._logical_h = height
        return image

    def _color(self, color: str) -> QColor:
        qcolor = self._colors.get(color)
        if qcolor is None:
            qcolor = QColor(color)
            self._colors[color] = qcolor
        return qcolor

    @contextmanager
    def batch(self) -> Iterator[None]:
        if self._painter is not None:
            yield
            return
        if self._image is None:
            raise RenderContextError("Drawing surface has not been allocated")

        painter = QPainter(self._image)
        if not painter.isActive():
            raise RenderContextError("Cannot open a painter on the drawing surface")
        self._painter = painter
        try:
            yield
        finally:
            painter.end()
            self._painter = None

    def fill_rect(self, x: float, y: float, w: float, h: float, color: str) -> None:
        if self._painter is None:
            with self.batch():
                self.fill_rect(x, y, w, h, color)
            return
        self._painter.fillRect(QRectF(x, y, w, h), self._color(color))

    def clear(self, color: str) -> None:
        self.fill_rect(0, 0, self._logical_w, self._logical_h, color)


class DayGridCanvasWidget(QWidget):
    """
    Widget hosting the QImage canvas.

    Emits viewport_resized with the raw device pixel ratio. The listener
    lays out, reallocates the canvas and redraws into it.
    """

    viewport_resized = pyqtSignal(float, float, float)  # width, height, device pixel ratio

    def __init__(self, parent=None):
        super().__init__(parent)
        self.canvas = QImageCanvas()
        self._tooltip_provider: Optional[Callable[[float, float], Optional[str]]] = None

        self.setMouseTracking(True)
        self.setMinimumSize(64, 64)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

    def set_tooltip_provider(self, provider: Optional[Callable[[float, float], Optional[str]]]):
        """provider(x, y) returns tooltip text for a viewport point, or None."""
        self._tooltip_provider = provider

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.viewport_resized.emit(float(self.width()), float(self.height()), self.devicePixelRatioF())

    def paintEvent(self, event):
        image = self.canvas.image
        if image is None:
            return
        painter = QPainter(self)
        painter.drawImage(QPointF(0, 0), image)
        painter.end()

    def mouseMoveEvent(self, event):
        text = None
        if self._tooltip_provider is not None:
            pos = event.position()
            text = self._tooltip_provider(pos.x(), pos.y())
        if text:
            QToolTip.showText(event.globalPosition().toPoint(), text, self)
        else:
            QToolTip.hideText()
        super().mouseMoveEvent(event)

    def leaveEvent(self, event):
        QToolTip.hideText()
        super().leaveEvent(event)
