"""
Metaball canvas widget — animated display with QTimer-driven rendering.

Each tick advances the animator into an offscreen image, which
``paintEvent`` then draws over the scheme background.  The viewport
follows the widget size.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from PyQt5.QtCore import QTimer, Qt, pyqtSignal
from PyQt5.QtGui import QColor, QImage, QPainter
from PyQt5.QtWidgets import QWidget

from .animator import FieldAnimator
from .palettes import ColorScheme
from .qt_surface import QImageSurface

logger = logging.getLogger(__name__)


class FieldCanvas(QWidget):
    """Animated metaball display.

    Signals:
        fps_changed(float):   current rendering FPS
    """

    fps_changed = pyqtSignal(float)

    def __init__(
        self,
        scheme: ColorScheme,
        source_count: int = 6,
        fps: int = 60,
        seed: Optional[int] = None,
        width: int = 800,
        height: int = 600,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.surface = QImageSurface(width, height)
        self.animator = FieldAnimator(
            self.surface, width, height,
            source_count=source_count, scheme=scheme, seed=seed,
        )
        self._paused = False

        # Timing
        self._last_time = time.perf_counter()
        self._frame_count = 0
        self._fps_accum = 0.0

        self.setMinimumSize(200, 150)
        self.resize(width, height)

        self._timer = QTimer(self)
        self._timer.timeout.connect(self._tick)
        self.set_fps(fps)
        self._timer.start()

    # ── properties ────────────────────────────────────────────────────────

    @property
    def scheme(self) -> ColorScheme:
        return self.animator.scheme

    @property
    def paused(self) -> bool:
        return self._paused

    @paused.setter
    def paused(self, val: bool) -> None:
        self._paused = val
        if not val:
            self._last_time = time.perf_counter()

    def set_scheme(self, scheme: ColorScheme) -> None:
        self.animator.set_scheme(scheme)
        self.update()

    def set_fps(self, fps: int) -> None:
        fps = max(10, min(120, fps))
        self._timer.setInterval(int(1000 / fps))

    def reset_sources(self, count: int) -> None:
        self.animator.reset(count)

    # ── animation loop ────────────────────────────────────────────────────

    def _tick(self) -> None:
        now = time.perf_counter()
        dt = now - self._last_time
        self._last_time = now

        if self._paused:
            return

        self.animator.advance_and_draw()
        self.update()

        self._frame_count += 1
        self._fps_accum += dt
        if self._fps_accum >= 1.0:
            fps = self._frame_count / self._fps_accum
            logger.debug("Frame %d, %.1f fps", self.animator.frame, fps)
            self.fps_changed.emit(fps)
            self._frame_count = 0
            self._fps_accum = 0.0

    # ── Qt events ─────────────────────────────────────────────────────────

    def resizeEvent(self, event):
        w = max(1, self.width())
        h = max(1, self.height())
        self.surface.resize(w, h)
        self.animator.resize(w, h)
        super().resizeEvent(event)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(*self.scheme.background))
        painter.drawImage(0, 0, self.surface.image)

        if self._paused:
            painter.setPen(QColor(220, 220, 220, 180))
            painter.drawText(self.rect(), Qt.AlignCenter, "⏸ PAUSED")

        painter.end()

    # ── save ──────────────────────────────────────────────────────────────

    def get_image(self) -> Optional[QImage]:
        """Current frame flattened onto the background."""
        img = QImage(self.surface.image.size(), QImage.Format_ARGB32_Premultiplied)
        img.fill(QColor(*self.scheme.background))
        painter = QPainter(img)
        painter.drawImage(0, 0, self.surface.image)
        painter.end()
        return img
