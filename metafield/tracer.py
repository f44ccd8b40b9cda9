"""
Marching-squares contour tracer.

Starting from a seed cell, the tracer follows the threshold crossing
from cell to cell, choosing an exit edge from the inside/outside pattern
of the cell's four corners.  Each step emits one point, linearly
interpolated along the exit edge.  The tracer only produces geometry;
drawing is left to the caller.

Directions name the edge a walk leaves through and are also the entry
direction of the next cell:

    0 = up (top edge)     1 = right
    2 = down (bottom)     3 = left
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .field import ScalarField, cell_corners

logger = logging.getLogger(__name__)

Point = Tuple[float, float]
Cursor = Tuple[int, int, int]   # cell x, cell y, entry direction

UP, RIGHT, DOWN, LEFT = 0, 1, 2, 3

SATURATED = 15
SADDLES = (5, 10)


@dataclass(frozen=True)
class EdgeRecord:
    """Geometry of one exit direction, in corner offsets from the cell origin."""
    start: Tuple[int, int]
    end: Tuple[int, int]
    along: Tuple[int, int]     # unit vector from start to end
    next_cell: Tuple[int, int]


EDGES: Tuple[EdgeRecord, ...] = (
    EdgeRecord(start=(0, 0), end=(1, 0), along=(1, 0), next_cell=(0, -1)),    # up
    EdgeRecord(start=(1, 0), end=(1, 1), along=(0, 1), next_cell=(1, 0)),     # right
    EdgeRecord(start=(1, 1), end=(0, 1), along=(-1, 0), next_cell=(0, 1)),    # down
    EdgeRecord(start=(0, 1), end=(0, 0), along=(0, -1), next_cell=(-1, 0)),   # left
)

# Corner bits: 1 = top-left, 2 = top-right, 4 = bottom-right, 8 = bottom-left.
EXIT_BY_CASE: Dict[int, int] = {
    0: UP, 1: LEFT, 2: UP, 3: LEFT,
    4: RIGHT, 6: UP, 7: LEFT,
    8: DOWN, 9: DOWN, 11: DOWN,
    12: RIGHT, 13: RIGHT, 14: UP,
}


def saddle_exit(case: int, entry: int) -> int:
    """Exit for an ambiguous diagonal cell, decided by how it was entered."""
    if case == 5:
        return LEFT if entry == DOWN else RIGHT
    if case == 10:
        return UP if entry == LEFT else DOWN
    raise ValueError(f"Case {case} is not a saddle")


def interpolate(f_start: float, f_end: float, step: float, threshold: float = 1.0,
                epsilon: float = 1e-6) -> float:
    """Distance from the start corner to the threshold crossing on an edge.

    Result lies in ``[0, step]``; the start-side distance is clamped to
    *epsilon* so equal magnitudes never divide by zero.
    """
    a = abs(abs(f_start) - threshold)
    b = abs(abs(f_end) - threshold)
    return step / (b / max(a, epsilon) + 1.0)


class ContourTracer:
    """Walks one contour of a :class:`ScalarField` per :meth:`trace` call.

    Attributes:
        paint: True once any step has emitted a point since the last reset.
        steps: Number of steps taken by the most recent trace.
    """

    def __init__(self, field: ScalarField) -> None:
        self.field = field
        self.paint = False
        self.steps = 0

    def case_at(self, x: int, y: int) -> int:
        """Corner inside/outside pattern of cell (x, y) as a value 0–15."""
        threshold = self.field.params.threshold
        case = 0
        for bit, (i, j) in enumerate(cell_corners(x, y)):
            if abs(self.field.force_at(i, j)) > threshold:
                case |= 1 << bit
        return case

    def step(self, cursor: Cursor, path: List[Point]) -> Optional[Cursor]:
        """Advance one cell; append the crossing to *path*.

        Returns the next cursor, or None when the walk should stop.
        """
        x, y, entry = cursor
        field = self.field
        if not field.has_cell(x, y) or field.is_visited(x, y):
            return None

        case = self.case_at(x, y)
        if case == SATURATED:
            return x, y - 1, UP

        if case in SADDLES:
            direction = saddle_exit(case, entry)
        else:
            direction = EXIT_BY_CASE[case]
            field.mark_visited(x, y)

        edge = EDGES[direction]
        si, sj = x + edge.start[0], y + edge.start[1]
        ei, ej = x + edge.end[0], y + edge.end[1]
        t = interpolate(
            field.force_at(si, sj), field.force_at(ei, ej), field.step,
            field.params.threshold, field.params.epsilon,
        )
        px, py = field.node_position(si, sj)
        path.append((px + edge.along[0] * t, py + edge.along[1] * t))

        self.paint = True
        return x + edge.next_cell[0], y + edge.next_cell[1], direction

    def trace(self, x: int, y: int) -> List[Point]:
        """Follow the contour reachable from seed cell (x, y)."""
        path: List[Point] = []
        budget = self.field.columns * self.field.rows
        cursor: Optional[Cursor] = (x, y, UP)
        self.steps = 0
        while cursor is not None:
            if self.steps >= budget:
                logger.debug("Trace from (%d, %d) hit step budget %d", x, y, budget)
                break
            cursor = self.step(cursor, path)
            self.steps += 1
        return path
