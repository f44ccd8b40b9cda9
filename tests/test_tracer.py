import math

import pytest

from metafield.field import ScalarField
from metafield.sources import InfluenceSource
from metafield.tracer import (
    DOWN,
    EDGES,
    EXIT_BY_CASE,
    LEFT,
    RIGHT,
    SADDLES,
    SATURATED,
    UP,
    ContourTracer,
    interpolate,
    saddle_exit,
)


def _field(sources, w=800, h=600):
    return ScalarField(w, h, [
        InfluenceSource(x=x, y=y, size=size, width=w, height=h) for x, y, size in sources
    ])


def test_every_case_is_handled():
    for case in range(16):
        if case == SATURATED:
            continue
        if case in SADDLES:
            for entry in range(4):
                assert saddle_exit(case, entry) in (UP, RIGHT, DOWN, LEFT)
        else:
            assert EXIT_BY_CASE[case] in (UP, RIGHT, DOWN, LEFT)


def test_saddle_exits_depend_on_entry():
    assert saddle_exit(5, DOWN) == LEFT
    assert saddle_exit(5, UP) == RIGHT
    assert saddle_exit(5, LEFT) == RIGHT
    assert saddle_exit(10, LEFT) == UP
    assert saddle_exit(10, RIGHT) == DOWN
    with pytest.raises(ValueError):
        saddle_exit(3, UP)


def test_edge_records_are_consistent():
    for edge in EDGES:
        assert (edge.end[0] - edge.start[0], edge.end[1] - edge.start[1]) == edge.along
        assert abs(edge.next_cell[0]) + abs(edge.next_cell[1]) == 1


def test_interpolation_stays_on_edge():
    values = [0.0, 0.3, 0.99, 1.0, 1.01, 1.5, 4.0, 250.0, -0.6, -3.0]
    for a in values:
        for b in values:
            t = interpolate(a, b, 5)
            assert math.isfinite(t)
            assert 0.0 <= t <= 5.0


def test_interpolation_is_linear_between_corners():
    # |f| runs 0.5 -> 2.0 along the edge, crossing 1.0 a third of the way.
    assert interpolate(0.5, 2.0, 6) == pytest.approx(2.0)
    assert interpolate(-0.5, -2.0, 6) == pytest.approx(2.0)


def test_case_value_from_corners():
    field = _field([(400, 300, 60)])
    tracer = ContourTracer(field)
    assert tracer.case_at(80, 60) == 15
    assert tracer.case_at(10, 10) == 0
    # Top corners at distance 60 (not inside), bottom ones inside.
    assert tracer.case_at(80, 48) == 12


def test_saturated_cell_moves_up_without_stamping():
    field = _field([(400, 300, 60)])
    tracer = ContourTracer(field)
    path = []
    assert tracer.step((80, 60, RIGHT), path) == (80, 59, UP)
    assert path == []
    assert not field.is_visited(80, 60)
    assert not tracer.paint


def test_step_emits_point_and_stamps():
    field = _field([(400, 300, 60)])
    tracer = ContourTracer(field)
    path = []
    nxt = tracer.step((80, 48, UP), path)
    assert nxt == (81, 48, RIGHT)
    assert field.is_visited(80, 48)
    assert tracer.paint
    (px, py), = path
    assert px == pytest.approx(405.0)
    assert 240.0 <= py <= 245.0
    # Visited cells stop the walk.
    assert tracer.step((80, 48, UP), []) is None


def test_step_outside_lattice_stops():
    field = _field([])
    tracer = ContourTracer(field)
    assert tracer.step((-1, 3, UP), []) is None
    assert tracer.step((3, field.rows - 1, UP), []) is None


def test_single_source_traces_circle():
    field = _field([(400, 300, 60)])
    tracer = ContourTracer(field)
    path = tracer.trace(80, 60)
    assert len(path) > 40
    for px, py in path:
        assert math.hypot(px - 400, py - 300) == pytest.approx(60, abs=field.step)
    cx = sum(p[0] for p in path) / len(path)
    cy = sum(p[1] for p in path) / len(path)
    assert cx == pytest.approx(400, abs=2)
    assert cy == pytest.approx(300, abs=2)
    # Closed: the walk ends next to where it started.
    assert math.dist(path[0], path[-1]) <= 2 * field.step


def test_trace_terminates_within_budget():
    field = _field([(200, 200, 50), (260, 220, 45), (600, 400, 70)])
    tracer = ContourTracer(field)
    stamped = []
    mark = field.mark_visited

    def recording_mark(i, j):
        stamped.append((i, j))
        mark(i, j)

    field.mark_visited = recording_mark
    for seed in [(40, 40), (52, 44), (120, 80), (1, 1)]:
        tracer.trace(*seed)
        assert tracer.steps <= field.columns * field.rows
    assert len(stamped) == len(set(stamped))


def test_empty_cells_walk_up_to_the_lattice_edge():
    field = _field([])
    tracer = ContourTracer(field)
    path = tracer.trace(80, 60)
    # One point per row on the way up, then the walk leaves the lattice.
    assert len(path) == 61
    assert tracer.steps == 62
    assert all(px == pytest.approx(402.5) for px, _ in path)
    assert all(math.isfinite(py) for _, py in path)
