from __future__ import annotations

import logging
import sys
from typing import Callable, Optional

from PySide6.QtCore import QPointF, QRectF, Qt, QTimer
from PySide6.QtGui import QColor, QImage, QPainter, QPainterPath
from PySide6.QtWidgets import QApplication, QVBoxLayout, QWidget

from ..config import Settings
from ..core.animation import Polytension
from ..core.colors import parse_color
from ..core.seed import Location

logger = logging.getLogger(__name__)


def to_qcolor(style: str) -> QColor:
    r, g, b, a = parse_color(style)
    return QColor(r, g, b, a)


class QPainterSurface:
    """Canvas-style drawing into a QImage.

    The painter is opened on the first drawing call and released by `end`,
    once per frame.
    """

    def __init__(self, width: int, height: int, background: str = "black"):
        self.background = background
        self.image = QImage()
        self.width = 0
        self.height = 0
        self._painter: Optional[QPainter] = None
        self._color = QColor(0, 0, 0)
        self._path = QPainterPath()
        self.resize(width, height)

    def resize(self, width: int, height: int) -> None:
        self.end()
        self.width = max(1, int(width))
        self.height = max(1, int(height))
        self.image = QImage(self.width, self.height, QImage.Format_ARGB32_Premultiplied)
        self.image.fill(to_qcolor(self.background))

    def _p(self) -> QPainter:
        if self._painter is None:
            self._painter = QPainter(self.image)
            self._painter.setRenderHint(QPainter.Antialiasing, True)
        return self._painter

    def end(self) -> None:
        if self._painter is not None:
            self._painter.end()
            self._painter = None

    def set_fill_style(self, style: str) -> None:
        self._color = to_qcolor(style)

    def fill_rect(self, x: float, y: float, w: float, h: float) -> None:
        self._p().fillRect(QRectF(x, y, w, h), self._color)

    def begin_path(self) -> None:
        self._path = QPainterPath()

    def move_to(self, x: float, y: float) -> None:
        self._path.moveTo(QPointF(x, y))

    def line_to(self, x: float, y: float) -> None:
        self._path.lineTo(QPointF(x, y))

    def close_path(self) -> None:
        self._path.closeSubpath()

    def fill(self) -> None:
        self._p().fillPath(self._path, self._color)


class QtFrameScheduler:
    """Single-shot QTimers standing in for requestAnimationFrame."""

    def __init__(self, interval_ms: int = 16, parent=None):
        self.interval_ms = interval_ms
        self.parent = parent

    def schedule_next_frame(self, callback: Callable[[], None]) -> QTimer:
        timer = QTimer(self.parent)
        timer.setSingleShot(True)
        timer.timeout.connect(callback)
        timer.timeout.connect(timer.deleteLater)
        timer.start(self.interval_ms)
        return timer

    def cancel_scheduled_frame(self, handle: QTimer) -> None:
        handle.stop()
        handle.deleteLater()


class CanvasWidget(QWidget):
    """Shows the surface image; a click asks for a brand-new pattern."""

    def __init__(self, surface: QPainterSurface, pixel_ratio: float = 2.0, on_click=None, parent=None):
        super().__init__(parent)
        self.surface = surface
        self.pixel_ratio = pixel_ratio
        self.on_click = on_click
        self.setMinimumSize(160, 120)
        self.setCursor(Qt.PointingHandCursor)

    def present(self) -> None:
        self.surface.end()
        self.update()

    def resizeEvent(self, event):
        self.surface.resize(self.width() * self.pixel_ratio, self.height() * self.pixel_ratio)
        super().resizeEvent(event)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.SmoothPixmapTransform, True)
        painter.drawImage(QRectF(self.rect()), self.surface.image)
        painter.end()

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.LeftButton and self.on_click is not None:
            self.on_click()
        super().mouseReleaseEvent(event)


class MainWindow(QWidget):
    def __init__(self, settings: Settings, location: Location):
        super().__init__()
        self.settings = settings
        self.resize(1280, 800)
        self.setStyleSheet(f"background: {settings.background};")

        self.surface = QPainterSurface(
            1280 * settings.pixel_ratio, 800 * settings.pixel_ratio, settings.background
        )
        self.canvas = CanvasWidget(self.surface, settings.pixel_ratio, on_click=self.reseed)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.canvas)

        scheduler = QtFrameScheduler(settings.frame_interval_ms(), parent=self)
        self.polytension = Polytension(self.surface, scheduler, location, settings.background)
        self.polytension.on_frame = lambda _session: self.canvas.present()

    def start(self, force_new_seed: bool = False, seed: Optional[str] = None) -> None:
        self.polytension.run(force_new_seed, seed=seed)
        self._update_title()

    def reseed(self) -> None:
        self.start(force_new_seed=True)

    def _update_title(self) -> None:
        self.setWindowTitle(f"Polytension - {self.polytension.location.url}")

    def keyPressEvent(self, e):
        if e.key() == Qt.Key_F11:
            if self.isFullScreen():
                self.showNormal()
            else:
                self.showFullScreen()
        elif e.key() == Qt.Key_Escape and self.isFullScreen():
            self.showNormal()
        else:
            super().keyPressEvent(e)

    def closeEvent(self, event):
        self.polytension.reset()
        self.surface.end()
        super().closeEvent(event)


def main(settings: Settings, url: Optional[str] = None, seed: Optional[str] = None) -> int:
    location = Location(url or settings.base_url)
    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("Polytension")

    window = MainWindow(settings, location)
    window.show()
    window.start(seed=seed)
    logger.info("Desktop window ready at %s", location.url)
    return app.exec()
