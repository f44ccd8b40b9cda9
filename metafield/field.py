"""
Scalar field sampled on a regular lattice.

Lattice nodes live in one numpy structured array (an arena of fixed-size
records indexed ``[j, i]``).  Each record caches its force together with
the iteration it was computed in, so invalidating the whole lattice for a
new frame is a single counter increment rather than a clear.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .sources import FieldParams, InfluenceSource

logger = logging.getLogger(__name__)

#: Lattice sampling step in pixels.
LATTICE_STEP = 5

NODE_DTYPE = np.dtype([
    ("x", np.float64),
    ("y", np.float64),
    ("magnitude", np.float64),   # x² + y²
    ("force", np.float64),
    ("computed", np.int64),      # iteration the force was evaluated in
    ("visited", np.int64),       # iteration the tracer last stamped this cell
])


def build_lattice(columns: int, rows: int, step: int) -> np.ndarray:
    """Return a fresh node arena with every stamp set to -1."""
    nodes = np.zeros((rows, columns), dtype=NODE_DTYPE)
    jj, ii = np.meshgrid(np.arange(rows), np.arange(columns), indexing="ij")
    nodes["x"] = ii * step
    nodes["y"] = jj * step
    nodes["magnitude"] = nodes["x"] ** 2 + nodes["y"] ** 2
    nodes["computed"] = -1
    nodes["visited"] = -1
    return nodes


class ScalarField:
    """Lazily evaluated metaball field over the viewport.

    Parameters:
        width, height: Viewport size in pixels.
        sources:       Live source list; read on every evaluation, never copied.
        params:        Field constants (or defaults).
        step:          Lattice spacing in pixels.
    """

    def __init__(
        self,
        width: int,
        height: int,
        sources: Sequence[InfluenceSource],
        params: Optional[FieldParams] = None,
        step: int = LATTICE_STEP,
    ) -> None:
        self.params = params or FieldParams()
        self.step = step
        self.sources = sources
        self.sign = 1
        self.iteration = 0
        self._source_cache: Optional[Tuple[np.ndarray, ...]] = None
        self._source_cache_iter = -1
        self._build(width, height)

    def _build(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Viewport must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.columns = int(width // self.step) + 2
        self.rows = int(height // self.step) + 2
        self.nodes = build_lattice(self.columns, self.rows, self.step)

    # ── lifecycle ─────────────────────────────────────────────────────────

    def begin_iteration(self) -> None:
        """Invalidate every cached value and flip the polarity."""
        self.iteration += 1
        self.sign = -self.sign

    def resize(self, width: int, height: int) -> None:
        """Rebuild the lattice for a new viewport.

        The fresh arena carries no valid stamps and the epoch is bumped,
        so nothing computed for the old viewport can be served.
        """
        self._build(width, height)
        self.iteration += 1
        self._source_cache = None
        logger.info(
            "Lattice rebuilt: %dx%d nodes for %dx%d viewport",
            self.columns, self.rows, width, height,
        )

    # ── geometry helpers ──────────────────────────────────────────────────

    def is_border(self, i: int, j: int) -> bool:
        return i <= 0 or j <= 0 or i >= self.columns - 2 or j >= self.rows - 2

    def has_cell(self, x: int, y: int) -> bool:
        """True if cell (x, y) has all four corners inside the lattice."""
        return 0 <= x <= self.columns - 2 and 0 <= y <= self.rows - 2

    def node_position(self, i: int, j: int) -> Tuple[float, float]:
        return float(self.nodes["x"][j, i]), float(self.nodes["y"][j, i])

    def nearest_cell(self, x: float, y: float) -> Tuple[int, int]:
        """Cell whose top-left node is closest to pixel (x, y)."""
        i = int(math.floor(x / self.step + 0.5))
        j = int(math.floor(y / self.step + 0.5))
        i = max(0, min(self.columns - 2, i))
        j = max(0, min(self.rows - 2, j))
        return i, j

    # ── force evaluation ──────────────────────────────────────────────────

    def force_at(self, i: int, j: int) -> float:
        """Field value at node (i, j), evaluated at most once per iteration."""
        nodes = self.nodes
        if nodes["computed"][j, i] == self.iteration:
            return float(nodes["force"][j, i])

        if self.is_border(i, j):
            force = self.params.border_force * self.sign
        else:
            force = self.sign * self._sum_contributions(
                nodes["x"][j, i], nodes["y"][j, i], nodes["magnitude"][j, i],
            )

        nodes["force"][j, i] = force
        nodes["computed"][j, i] = self.iteration
        return float(force)

    def _sum_contributions(self, nx: float, ny: float, nmag: float) -> float:
        if not self.sources:
            return 0.0
        sx, sy, smag, size2 = self._source_arrays()
        dist2 = smag + nmag - 2.0 * (nx * sx + ny * sy)
        # A node sitting on a source centre would divide by zero.
        dist2 = np.maximum(dist2, self.params.epsilon)
        return float(np.sum(size2 / dist2))

    def _source_arrays(self) -> Tuple[np.ndarray, ...]:
        # Sources only move between iterations, so pack them once per frame.
        if self._source_cache is None or self._source_cache_iter != self.iteration:
            sx = np.array([s.x for s in self.sources], dtype=np.float64)
            sy = np.array([s.y for s in self.sources], dtype=np.float64)
            size = np.array([s.size for s in self.sources], dtype=np.float64)
            self._source_cache = (sx, sy, sx * sx + sy * sy, size * size)
            self._source_cache_iter = self.iteration
        return self._source_cache

    # ── visit stamps (used by the contour tracer) ─────────────────────────

    def is_visited(self, i: int, j: int) -> bool:
        return bool(self.nodes["visited"][j, i] == self.iteration)

    def mark_visited(self, i: int, j: int) -> None:
        self.nodes["visited"][j, i] = self.iteration

    def stale_stamps(self) -> int:
        """Number of nodes stamped in an iteration other than the current one."""
        computed = self.nodes["computed"]
        visited = self.nodes["visited"]
        stale = ((computed >= 0) & (computed != self.iteration)) | (
            (visited >= 0) & (visited != self.iteration)
        )
        return int(np.count_nonzero(stale))

    def force_grid(self) -> np.ndarray:
        """Evaluate every node for the current iteration; returns a (rows, columns) array."""
        for j in range(self.rows):
            for i in range(self.columns):
                self.force_at(i, j)
        return self.nodes["force"].copy()


def cell_corners(x: int, y: int) -> List[Tuple[int, int]]:
    """Corner nodes of cell (x, y) in case-bit order: TL, TR, BR, BL."""
    return [(x, y), (x + 1, y), (x + 1, y + 1), (x, y + 1)]
