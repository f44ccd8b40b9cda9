"""
Drawing surfaces the animator renders into.

``DrawingSurface`` is the small canvas-style API the animator needs.
``RecordingSurface`` implements it without any graphics backend and keeps
every filled path, which is what the tests and headless tooling use.
The Qt-backed surface lives in :mod:`metafield.qt_surface`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Protocol, Tuple

from .palettes import RGB

Point = Tuple[float, float]


class DrawingSurface(Protocol):
    """Host drawing operations used by :class:`~metafield.animator.FieldAnimator`."""

    def begin_path(self) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...

    def close_path(self) -> None: ...

    def fill(self, style: Any) -> None: ...

    def clear_rect(self, x: float, y: float, width: float, height: float) -> None: ...

    def create_radial_gradient(
        self, cx: float, cy: float, radius: float, inner: RGB, outer: RGB,
    ) -> Any: ...


@dataclass(frozen=True)
class GradientSpec:
    """Plain description of a radial gradient."""
    cx: float
    cy: float
    radius: float
    inner: RGB
    outer: RGB


@dataclass
class FilledPath:
    points: List[Point]
    style: Any


@dataclass
class RecordingSurface:
    """Surface that records operations instead of drawing them."""
    ops: List[str] = field(default_factory=list)
    filled: List[FilledPath] = field(default_factory=list)
    clears: int = 0
    _current: List[Point] = field(default_factory=list)

    def begin_path(self) -> None:
        self.ops.append("begin_path")
        self._current = []

    def line_to(self, x: float, y: float) -> None:
        self.ops.append("line_to")
        self._current.append((x, y))

    def close_path(self) -> None:
        self.ops.append("close_path")

    def fill(self, style: Any) -> None:
        self.ops.append("fill")
        self.filled.append(FilledPath(list(self._current), style))

    def clear_rect(self, x: float, y: float, width: float, height: float) -> None:
        self.ops.append("clear_rect")
        self.clears += 1
        self.filled.clear()

    def create_radial_gradient(
        self, cx: float, cy: float, radius: float, inner: RGB, outer: RGB,
    ) -> GradientSpec:
        return GradientSpec(cx, cy, radius, inner, outer)

    def reset(self) -> None:
        self.ops.clear()
        self.filled.clear()
        self.clears = 0
        self._current = []
