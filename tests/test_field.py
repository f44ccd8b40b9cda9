import math

import pytest

from metafield.field import LATTICE_STEP, ScalarField, build_lattice
from metafield.sources import InfluenceSource


def _source(x, y, size, w=800, h=600):
    return InfluenceSource(x=x, y=y, size=size, width=w, height=h)


def test_lattice_dimensions_and_positions():
    field = ScalarField(800, 600, [])
    assert field.step == LATTICE_STEP
    assert field.columns == 800 // 5 + 2
    assert field.rows == 600 // 5 + 2
    assert field.nodes.shape == (field.rows, field.columns)
    assert field.node_position(3, 7) == (15.0, 35.0)
    assert field.nodes["magnitude"][7, 3] == 15.0 ** 2 + 35.0 ** 2


def test_fresh_lattice_has_no_stamps():
    nodes = build_lattice(4, 3, 5)
    assert (nodes["computed"] == -1).all()
    assert (nodes["visited"] == -1).all()


def test_rejects_empty_viewport():
    with pytest.raises(ValueError):
        ScalarField(0, 600, [])


def test_border_nodes_follow_sign():
    field = ScalarField(100, 100, [_source(50, 50, 30, 100, 100)])
    for i, j in [(0, 5), (5, 0), (field.columns - 2, 5), (5, field.rows - 2),
                 (field.columns - 1, field.rows - 1)]:
        assert field.is_border(i, j)
        assert field.force_at(i, j) == pytest.approx(0.6)
    field.begin_iteration()
    assert field.force_at(0, 5) == pytest.approx(-0.6)
    assert not field.is_border(1, 1)


def test_interior_force_is_inverse_square_sum():
    sources = [_source(100, 100, 20), _source(300, 50, 10)]
    field = ScalarField(800, 600, sources)
    # node (10, 10) sits at (50, 50)
    expected = 400 / (50 ** 2 + 50 ** 2) + 100 / (250 ** 2 + 0 ** 2)
    assert field.force_at(10, 10) == pytest.approx(expected)
    field.begin_iteration()
    assert field.force_at(10, 10) == pytest.approx(-expected)


def test_cache_coherence_within_iteration():
    sources = [_source(100, 100, 20)]
    field = ScalarField(800, 600, sources)
    first = field.force_at(12, 9)
    sources[0].x = 400.0
    assert field.force_at(12, 9) == first
    assert field.nodes["computed"][9, 12] == field.iteration

    field.begin_iteration()
    moved = field.force_at(12, 9)
    assert moved != -first


def test_coincident_source_stays_finite():
    field = ScalarField(800, 600, [_source(50, 50, 20)])
    value = field.force_at(10, 10)
    assert math.isfinite(value)
    assert value > 1.0


def test_zero_sources_interior_is_zero():
    field = ScalarField(60, 40, [])
    grid = field.force_grid()
    assert grid[3, 3] == 0.0
    assert grid[0, 0] == pytest.approx(0.6)
    assert (abs(grid) < 1.0).all()


def test_sign_alternates_each_iteration():
    field = ScalarField(100, 100, [])
    initial = field.sign
    for n in range(1, 10):
        field.begin_iteration()
        assert field.sign == initial * (-1) ** n
        assert field.iteration == n


def test_nearest_cell_rounds_half_up_and_clamps():
    field = ScalarField(800, 600, [])
    assert field.nearest_cell(12.5, 7.4) == (3, 1)
    assert field.nearest_cell(-30, -30) == (0, 0)
    assert field.nearest_cell(5000, 5000) == (field.columns - 2, field.rows - 2)


def test_has_cell():
    field = ScalarField(100, 50, [])
    assert field.has_cell(0, 0)
    assert field.has_cell(field.columns - 2, field.rows - 2)
    assert not field.has_cell(field.columns - 1, 0)
    assert not field.has_cell(0, -1)


def test_visit_stamps_expire_with_iteration():
    field = ScalarField(100, 100, [])
    field.mark_visited(4, 4)
    assert field.is_visited(4, 4)
    field.begin_iteration()
    assert not field.is_visited(4, 4)


def test_resize_rebuilds_and_bumps_epoch():
    sources = [_source(400, 300, 40)]
    field = ScalarField(800, 600, sources)
    for _ in range(3):
        field.begin_iteration()
        field.force_at(80, 60)
        field.mark_visited(80, 60)
    before = field.iteration

    field.resize(400, 300)
    assert field.iteration == before + 1
    assert (field.columns, field.rows) == (82, 62)
    assert field.stale_stamps() == 0
    assert (field.nodes["computed"] == -1).all()
    assert field.sources is sources
