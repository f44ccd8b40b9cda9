"""
Influence sources — the bouncing points that generate the metaball field.

Each source moves in a straight line and reflects off the edges of the
viewport.  Spawning draws from a ``numpy.random.Generator`` so a seed
reproduces the same pool.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Field parameters (construction-time constants)
# ---------------------------------------------------------------------------

@dataclass
class FieldParams:
    """Constants for source spawning and field evaluation.

    Attributes are grouped by category and default to the values the
    reference animation uses.
    """
    # Velocity
    min_velocity: float = 0.2
    x_velocity_range: float = 0.25
    y_velocity_range: float = 1.0

    # Size, as a multiple of min(width, height) / 15
    min_size: float = 0.1
    max_size: float = 1.5

    # Spawn inside the viewport minus this fraction on each side
    spawn_margin: float = 0.2

    # Field
    threshold: float = 1.0
    border_force: float = 0.6
    epsilon: float = 1e-6


# ---------------------------------------------------------------------------
# Source
# ---------------------------------------------------------------------------

@dataclass
class InfluenceSource:
    """A single bouncing source in viewport pixel space."""
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    size: float = 1.0
    width: float = 1.0
    height: float = 1.0

    @property
    def magnitude(self) -> float:
        """Squared distance of the position from the origin."""
        return self.x * self.x + self.y * self.y

    @classmethod
    def spawn(
        cls,
        width: float,
        height: float,
        rng: np.random.Generator,
        params: Optional[FieldParams] = None,
    ) -> "InfluenceSource":
        p = params or FieldParams()
        wh = min(width, height)
        sx = 1.0 if rng.random() > 0.5 else -1.0
        sy = 1.0 if rng.random() > 0.5 else -1.0
        span = 1.0 - 2.0 * p.spawn_margin
        unit = wh / 15
        return cls(
            x=p.spawn_margin * width + rng.random() * width * span,
            y=p.spawn_margin * height + rng.random() * height * span,
            vx=sx * (p.min_velocity + p.x_velocity_range * rng.random()),
            vy=sy * (p.min_velocity + p.y_velocity_range * rng.random()),
            size=unit + (rng.random() * (p.max_size - p.min_size) + p.min_size) * unit,
            width=width,
            height=height,
        )

    # ── motion ────────────────────────────────────────────────────────────

    def advance(self) -> None:
        """Move by one velocity step, reflecting off the viewport edges."""
        self.x, self.vx = _bounce(self.x, self.vx, self.size, self.width - self.size)
        self.y, self.vy = _bounce(self.y, self.vy, self.size, self.height - self.size)
        self.x += self.vx
        self.y += self.vy
        self._clamp()

    def resize(self, width: float, height: float) -> None:
        """Adopt new viewport bounds and pull the position back inside."""
        self.width = width
        self.height = height
        self._clamp()

    def _clamp(self) -> None:
        self.x = _clip(self.x, self.size, self.width - self.size)
        self.y = _clip(self.y, self.size, self.height - self.size)


def _bounce(pos: float, vel: float, lo: float, hi: float):
    # Only flip when still heading outward, so a clamped source isn't
    # reflected twice.
    if pos >= hi:
        if vel > 0:
            vel = -vel
        pos = hi
    elif pos <= lo:
        if vel < 0:
            vel = -vel
        pos = lo
    return pos, vel


def _clip(value: float, lo: float, hi: float) -> float:
    if hi < lo:
        # Source larger than the viewport: park it in the middle.
        return (lo + hi) / 2.0
    return max(lo, min(hi, value))


def spawn_sources(
    count: int,
    width: float,
    height: float,
    rng: np.random.Generator,
    params: Optional[FieldParams] = None,
) -> List[InfluenceSource]:
    """Create a fresh pool of *count* randomised sources."""
    if count < 0:
        raise ValueError(f"Source count must be >= 0, got {count}")
    sources = [InfluenceSource.spawn(width, height, rng, params) for _ in range(count)]
    logger.debug("Spawned %d sources in %gx%g viewport", count, width, height)
    return sources
