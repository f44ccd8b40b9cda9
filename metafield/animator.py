"""
Per-frame orchestration of sources, field and tracer.

The animator owns the source pool and the drawing surface; the field and
tracer only ever see the sources and produce geometry.  The host calls
:meth:`FieldAnimator.advance_and_draw` once per display refresh and
:meth:`FieldAnimator.resize` when the viewport changes.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import numpy as np

from .field import LATTICE_STEP, ScalarField
from .palettes import ColorScheme, get_scheme
from .sources import FieldParams, InfluenceSource, spawn_sources
from .surfaces import DrawingSurface
from .tracer import ContourTracer, Point

logger = logging.getLogger(__name__)


class FieldAnimator:
    """Bouncing metaballs filled along their threshold contour.

    Parameters:
        surface:      Drawing surface to render into.
        width:        Viewport width in pixels.
        height:       Viewport height in pixels.
        source_count: Number of influence sources.
        scheme:       Gradient colours (default: the original teal/pink).
        params:       Field constants (or defaults).
        seed:         RNG seed for reproducibility (None = random).
    """

    def __init__(
        self,
        surface: DrawingSurface,
        width: int,
        height: int,
        source_count: int = 6,
        scheme: Optional[ColorScheme] = None,
        params: Optional[FieldParams] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.surface = surface
        self.params = params or FieldParams()
        self.scheme = scheme or get_scheme("original")
        self.rng = np.random.default_rng(seed)
        self.sources: List[InfluenceSource] = []
        self.field = ScalarField(width, height, self.sources, self.params, LATTICE_STEP)
        self.tracer = ContourTracer(self.field)
        self.frame = 0
        self._source_count = 0
        self.fill_style = self._make_fill()
        self.reset(source_count)

    # ── properties ────────────────────────────────────────────────────────

    @property
    def width(self) -> int:
        return self.field.width

    @property
    def height(self) -> int:
        return self.field.height

    @property
    def source_count(self) -> int:
        return self._source_count

    @property
    def paint(self) -> bool:
        return self.tracer.paint

    # ── configuration ─────────────────────────────────────────────────────

    def reset(self, source_count: Optional[int] = None) -> None:
        """Respawn the source pool (in place; the field keeps its reference)."""
        if source_count is not None:
            self._source_count = source_count
        self.sources[:] = spawn_sources(
            self._source_count, self.width, self.height, self.rng, self.params,
        )
        logger.info("Animator reset: %d sources", self._source_count)

    def set_scheme(self, scheme: ColorScheme) -> None:
        self.scheme = scheme
        self.fill_style = self._make_fill()

    def resize(self, width: int, height: int) -> None:
        """Adopt a new viewport; the lattice is rebuilt before the next frame."""
        if (width, height) == (self.width, self.height):
            return
        self.field.resize(width, height)
        for s in self.sources:
            s.resize(width, height)
        self.fill_style = self._make_fill()
        logger.info("Animator resized to %dx%d", width, height)

    def _make_fill(self) -> Any:
        w, h = self.width, self.height
        return self.surface.create_radial_gradient(
            w, h, w, self.scheme.inner, self.scheme.outer,
        )

    # ── frame ─────────────────────────────────────────────────────────────

    def advance_and_draw(self) -> None:
        """Clear the viewport and render the next frame."""
        self.surface.clear_rect(0, 0, self.width, self.height)
        self.render_frame()

    def render_frame(self) -> None:
        """Move every source and fill one contour per source."""
        for s in self.sources:
            s.advance()

        self.field.begin_iteration()
        self.tracer.paint = False

        surface = self.surface
        surface.begin_path()
        for s in self.sources:
            x, y = self.field.nearest_cell(s.x, s.y)
            path = self.tracer.trace(x, y)
            if self.tracer.paint:
                self._emit(path)
                surface.fill(self.fill_style)
                surface.close_path()
                surface.begin_path()
                self.tracer.paint = False
        self.frame += 1

    def _emit(self, path: List[Point]) -> None:
        for px, py in path:
            self.surface.line_to(px, py)

    def contours(self) -> List[List[Point]]:
        """Trace the current field without moving sources or drawing.

        Each call starts a fresh iteration, so the polarity flips just as
        it does for a rendered frame.
        """
        self.field.begin_iteration()
        paths = []
        for s in self.sources:
            path = self.tracer.trace(*self.field.nearest_cell(s.x, s.y))
            if path:
                paths.append(path)
        return paths
