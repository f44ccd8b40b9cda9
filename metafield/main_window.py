"""
Main window — assembles the metaball canvas, control panel, and menu bar.
"""

from __future__ import annotations

import logging
from typing import Optional

from PyQt5.QtGui import QKeySequence
from PyQt5.QtWidgets import (
    QAction,
    QFileDialog,
    QHBoxLayout,
    QMainWindow,
    QMessageBox,
    QWidget,
)

from . import __version__
from .canvas import FieldCanvas
from .controls import ControlPanel
from .palettes import ColorScheme

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Top-level window for the metaball viewer."""

    def __init__(
        self,
        scheme: ColorScheme,
        source_count: int = 6,
        fps: int = 60,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle(f"Metaball Field  v{__version__}")
        self.setMinimumSize(620, 420)

        self.canvas = FieldCanvas(scheme, source_count=source_count, fps=fps, seed=seed)
        self.controls = ControlPanel(self.canvas)

        central = QWidget()
        self.setCentralWidget(central)
        h_layout = QHBoxLayout(central)
        h_layout.setContentsMargins(8, 8, 8, 8)
        h_layout.setSpacing(12)
        h_layout.addWidget(self.canvas, stretch=1)
        h_layout.addWidget(self.controls)

        self._build_menu()
        self.statusBar().showMessage("Running")

        self.controls.save_requested.connect(self._save)

    def _build_menu(self) -> None:
        menu = self.menuBar()

        file_menu = menu.addMenu("&File")
        save_act = QAction("&Save Image…", self)
        save_act.setShortcut(QKeySequence.Save)
        save_act.triggered.connect(self._save)
        file_menu.addAction(save_act)
        file_menu.addSeparator()
        quit_act = QAction("&Quit", self)
        quit_act.setShortcut(QKeySequence.Quit)
        quit_act.triggered.connect(self.close)
        file_menu.addAction(quit_act)

        edit_menu = menu.addMenu("&Edit")
        pause_act = QAction("&Pause / Resume", self)
        pause_act.setShortcut(QKeySequence("Space"))
        pause_act.triggered.connect(self._toggle_pause)
        edit_menu.addAction(pause_act)
        reset_act = QAction("&Reset Sources", self)
        reset_act.setShortcut(QKeySequence("Ctrl+R"))
        reset_act.triggered.connect(self.controls._on_reset)
        edit_menu.addAction(reset_act)

        help_menu = menu.addMenu("&Help")
        about_act = QAction("&About", self)
        about_act.triggered.connect(self._about)
        help_menu.addAction(about_act)

    def _save(self) -> None:
        img = self.canvas.get_image()
        if img is None:
            QMessageBox.warning(self, "Save Error", "No image to save yet.")
            return
        path, _ = QFileDialog.getSaveFileName(
            self, "Save Metaball Image", "metafield.png",
            "PNG (*.png);;JPEG (*.jpg);;All (*)",
        )
        if path:
            if img.save(path):
                self.statusBar().showMessage(f"Saved to {path}")
            else:
                QMessageBox.critical(self, "Save Error", f"Failed to save:\n{path}")

    def _toggle_pause(self) -> None:
        self.controls._pause_btn.setChecked(not self.canvas.paused)

    def _about(self) -> None:
        QMessageBox.about(
            self,
            "About Metaball Field",
            f"<h3>Metaball Field v{__version__}</h3>"
            "<p>Bouncing influence sources rendered as filled metaball "
            "contours.</p>"
            "<p><b>Rendering:</b> the field Σ(sizeᵢ²/dᵢ²) is sampled lazily "
            "on a 5 px lattice and the threshold contour is walked with "
            "marching squares, one filled path per source. The field "
            "polarity flips every frame.</p>",
        )
