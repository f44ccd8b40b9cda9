"""
Control panel — user-adjustable settings for the metaball canvas.

Organised into groups:
  - Colour scheme (built-in schemes, custom inner colour, contrast mode)
  - Sources (count, frame rate)
  - Actions (pause, reset, save)
"""

from __future__ import annotations

import logging
from typing import Optional

from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QColor
from PyQt5.QtWidgets import (
    QColorDialog,
    QComboBox,
    QFrame,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from .canvas import FieldCanvas
from .palettes import (
    CONTRAST_MODES,
    SCHEMES,
    ColorScheme,
    create_custom_scheme,
    get_scheme,
    list_schemes,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Labelled slider helper
# ---------------------------------------------------------------------------

class LSlider(QWidget):
    """Horizontal slider with label and readout."""

    valueChanged = pyqtSignal(int)

    def __init__(self, label, lo, hi, val, suffix="", parent=None):
        super().__init__(parent)
        lay = QHBoxLayout(self)
        lay.setContentsMargins(0, 1, 0, 1)

        self._lbl = QLabel(label)
        self._lbl.setFixedWidth(90)
        lay.addWidget(self._lbl)

        self._slider = QSlider(Qt.Horizontal)
        self._slider.setRange(lo, hi)
        self._slider.setValue(val)
        lay.addWidget(self._slider, stretch=1)

        self._suffix = suffix
        self._ro = QLabel(f"{val}{suffix}")
        self._ro.setFixedWidth(48)
        self._ro.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
        lay.addWidget(self._ro)

        self._slider.valueChanged.connect(self._changed)

    def _changed(self, v):
        self._ro.setText(f"{v}{self._suffix}")
        self.valueChanged.emit(v)

    def value(self):
        return self._slider.value()


# ---------------------------------------------------------------------------
# Control panel
# ---------------------------------------------------------------------------

class ControlPanel(QWidget):
    """Side panel with canvas controls."""

    save_requested = pyqtSignal()

    def __init__(
        self,
        canvas: FieldCanvas,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.canvas = canvas
        self.setFixedWidth(280)

        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.NoFrame)
        outer.addWidget(scroll)

        inner = QWidget()
        scroll.setWidget(inner)
        layout = QVBoxLayout(inner)
        layout.setSpacing(8)

        # ══════════════════════════════════════════════════════════════════
        # COLOUR SCHEME
        # ══════════════════════════════════════════════════════════════════
        color_group = QGroupBox("Colour Scheme")
        cg = QVBoxLayout(color_group)

        self._scheme_combo = QComboBox()
        for key in list_schemes():
            self._scheme_combo.addItem(SCHEMES[key].name, key)
        current = self._scheme_combo.findText(canvas.scheme.name)
        if current >= 0:
            self._scheme_combo.setCurrentIndex(current)
        self._scheme_combo.currentIndexChanged.connect(self._on_scheme_changed)
        cg.addWidget(self._scheme_combo)

        self._swatch_layout = QHBoxLayout()
        cg.addLayout(self._swatch_layout)

        custom_row = QHBoxLayout()
        custom_row.addWidget(QLabel("Custom:"))
        self._contrast_combo = QComboBox()
        for mode in CONTRAST_MODES:
            self._contrast_combo.addItem(mode.capitalize(), mode)
        custom_row.addWidget(self._contrast_combo, stretch=1)
        pick_btn = QPushButton("Pick…")
        pick_btn.setFixedWidth(50)
        pick_btn.clicked.connect(self._pick_inner_color)
        custom_row.addWidget(pick_btn)
        cg.addLayout(custom_row)

        layout.addWidget(color_group)

        # ══════════════════════════════════════════════════════════════════
        # SOURCES
        # ══════════════════════════════════════════════════════════════════
        src_group = QGroupBox("Sources")
        sg = QVBoxLayout(src_group)

        self._count_slider = LSlider("Count", 1, 20, canvas.animator.source_count)
        self._count_slider.valueChanged.connect(self.canvas.reset_sources)
        sg.addWidget(self._count_slider)

        self._fps_slider = LSlider("Frame Rate", 10, 120, 60, " fps")
        self._fps_slider.valueChanged.connect(self.canvas.set_fps)
        sg.addWidget(self._fps_slider)

        layout.addWidget(src_group)

        # ══════════════════════════════════════════════════════════════════
        # ACTIONS
        # ══════════════════════════════════════════════════════════════════
        action_group = QGroupBox("Actions")
        ag = QGridLayout(action_group)

        self._pause_btn = QPushButton("⏸  Pause")
        self._pause_btn.setCheckable(True)
        self._pause_btn.toggled.connect(self._on_pause)
        ag.addWidget(self._pause_btn, 0, 0)

        reset_btn = QPushButton("↻  Reset")
        reset_btn.clicked.connect(self._on_reset)
        ag.addWidget(reset_btn, 0, 1)

        save_btn = QPushButton("↓  Save PNG")
        save_btn.clicked.connect(self.save_requested.emit)
        ag.addWidget(save_btn, 1, 0, 1, 2)

        layout.addWidget(action_group)

        self._status = QLabel("Ready")
        self._status.setWordWrap(True)
        self._status.setStyleSheet("color: #888; font-size: 11px; font-style: italic;")
        layout.addWidget(self._status)

        layout.addStretch()

        canvas.fps_changed.connect(self._on_fps)
        self._update_swatches()

    # ── colour slots ──────────────────────────────────────────────────────

    def _on_scheme_changed(self, idx: int) -> None:
        key = self._scheme_combo.currentData()
        try:
            self.canvas.set_scheme(get_scheme(key))
            self._update_swatches()
        except KeyError as e:
            logger.error("Scheme error: %s", e)

    def _pick_inner_color(self) -> None:
        color = QColorDialog.getColor(
            QColor(*self.canvas.scheme.inner), self, "Pick Inner Colour"
        )
        if color.isValid():
            scheme = create_custom_scheme(
                "Custom",
                (color.red(), color.green(), color.blue()),
                self._contrast_combo.currentData(),
            )
            self.canvas.set_scheme(scheme)
            self._update_swatches()

    def _update_swatches(self) -> None:
        while self._swatch_layout.count():
            item = self._swatch_layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()

        scheme = self.canvas.scheme
        for c in (scheme.inner, scheme.outer, scheme.background):
            sw = QWidget()
            sw.setFixedSize(20, 20)
            sw.setStyleSheet(
                f"background: rgb({c[0]},{c[1]},{c[2]}); "
                "border-radius: 10px; border: 1px solid #555;"
            )
            self._swatch_layout.addWidget(sw)
        self._swatch_layout.addStretch()

    # ── action slots ──────────────────────────────────────────────────────

    def _on_pause(self, checked: bool) -> None:
        self.canvas.paused = checked
        self._pause_btn.setText("▶  Play" if checked else "⏸  Pause")

    def _on_reset(self) -> None:
        self.canvas.reset_sources(self._count_slider.value())

    def _on_fps(self, fps: float) -> None:
        a = self.canvas.animator
        self._status.setText(
            f"{a.source_count} sources  •  {fps:.0f} fps  •  "
            f"lattice {a.field.columns}×{a.field.rows}"
        )

    def current_scheme(self) -> ColorScheme:
        return self.canvas.scheme
