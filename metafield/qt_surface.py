"""
Qt drawing surface — renders paths into an offscreen ``QImage``.

Paths are accumulated in a ``QPainterPath`` and filled with an
antialiased ``QPainter``; the canvas widget then blits the image.
"""

from __future__ import annotations

import logging
from typing import Optional

from PyQt5.QtCore import QPointF, Qt
from PyQt5.QtGui import QBrush, QColor, QImage, QPainter, QPainterPath, QRadialGradient

from .palettes import RGB

logger = logging.getLogger(__name__)


class QImageSurface:
    """DrawingSurface backed by an ARGB ``QImage``."""

    def __init__(self, width: int, height: int) -> None:
        self.image = self._new_image(width, height)
        self._path = QPainterPath()

    @staticmethod
    def _new_image(width: int, height: int) -> QImage:
        img = QImage(max(1, width), max(1, height), QImage.Format_ARGB32_Premultiplied)
        img.fill(Qt.transparent)
        return img

    def resize(self, width: int, height: int) -> None:
        self.image = self._new_image(width, height)

    # ── DrawingSurface ────────────────────────────────────────────────────

    def begin_path(self) -> None:
        self._path = QPainterPath()

    def line_to(self, x: float, y: float) -> None:
        # Canvas semantics: the first point of an empty path starts it.
        if self._path.elementCount() == 0:
            self._path.moveTo(QPointF(x, y))
        else:
            self._path.lineTo(QPointF(x, y))

    def close_path(self) -> None:
        self._path.closeSubpath()

    def fill(self, style: QRadialGradient) -> None:
        painter = QPainter(self.image)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.fillPath(self._path, QBrush(style))
        painter.end()

    def clear_rect(self, x: float, y: float, width: float, height: float) -> None:
        painter = QPainter(self.image)
        painter.setCompositionMode(QPainter.CompositionMode_Clear)
        painter.fillRect(int(x), int(y), int(width), int(height), Qt.transparent)
        painter.end()

    def create_radial_gradient(
        self, cx: float, cy: float, radius: float, inner: RGB, outer: RGB,
    ) -> QRadialGradient:
        gradient = QRadialGradient(QPointF(cx, cy), radius)
        gradient.setColorAt(0.0, QColor(*inner))
        gradient.setColorAt(1.0, QColor(*outer))
        return gradient

    # ── export ────────────────────────────────────────────────────────────

    def save(self, path: str, background: Optional[RGB] = None) -> bool:
        """Write the image to *path*, optionally flattened onto a background."""
        img = self.image
        if background is not None:
            img = QImage(self.image.size(), QImage.Format_ARGB32_Premultiplied)
            img.fill(QColor(*background))
            painter = QPainter(img)
            painter.drawImage(0, 0, self.image)
            painter.end()
        ok = img.save(path)
        if ok:
            logger.info("Saved %dx%d image to %s", img.width(), img.height(), path)
        else:
            logger.error("Failed to save image to %s", path)
        return ok
