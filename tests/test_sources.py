import numpy as np
import pytest

from metafield.sources import FieldParams, InfluenceSource, spawn_sources


def test_spawn_ranges():
    rng = np.random.default_rng(0)
    w, h = 800, 600
    unit = min(w, h) / 15
    for _ in range(500):
        s = InfluenceSource.spawn(w, h, rng)
        assert 0.2 * w <= s.x <= 0.8 * w
        assert 0.2 * h <= s.y <= 0.8 * h
        assert 0.2 <= abs(s.vx) <= 0.45
        assert 0.2 <= abs(s.vy) <= 1.2
        assert unit * 1.1 <= s.size <= unit * 2.5
        assert (s.width, s.height) == (w, h)


def test_spawn_is_reproducible_with_seed():
    a = spawn_sources(5, 400, 300, np.random.default_rng(42))
    b = spawn_sources(5, 400, 300, np.random.default_rng(42))
    assert a == b


def test_spawn_both_velocity_signs():
    rng = np.random.default_rng(3)
    pool = spawn_sources(200, 800, 600, rng)
    assert any(s.vx > 0 for s in pool) and any(s.vx < 0 for s in pool)
    assert any(s.vy > 0 for s in pool) and any(s.vy < 0 for s in pool)


def test_negative_count_rejected():
    with pytest.raises(ValueError):
        spawn_sources(-1, 800, 600, np.random.default_rng(0))


def test_containment_over_many_frames():
    rng = np.random.default_rng(7)
    pool = spawn_sources(12, 800, 600, rng, FieldParams(y_velocity_range=6.0))
    for _ in range(3000):
        for s in pool:
            s.advance()
            assert s.size <= s.x <= s.width - s.size
            assert s.size <= s.y <= s.height - s.size


def test_bounce_flips_sign_without_scaling():
    s = InfluenceSource(x=89.5, y=50.0, vx=1.0, vy=0.0, size=10, width=100, height=100)
    seen = []
    for _ in range(6):
        s.advance()
        seen.append(s.vx)
    assert all(abs(v) == 1.0 for v in seen)
    assert seen[0] == 1.0
    assert seen[-1] == -1.0
    assert s.x <= 90.0


def test_no_double_inversion_when_clamped():
    # Already at the wall but heading back inside: keep going inside.
    s = InfluenceSource(x=90.0, y=50.0, vx=-1.0, vy=0.0, size=10, width=100, height=100)
    s.advance()
    assert s.vx == -1.0
    assert s.x == 89.0


def test_lower_bound_bounce():
    s = InfluenceSource(x=10.0, y=10.0, vx=-0.5, vy=-2.0, size=10, width=100, height=100)
    s.advance()
    assert s.vx == 0.5
    assert s.vy == 2.0
    assert s.x == 10.5
    assert s.y == 12.0


def test_magnitude():
    s = InfluenceSource(x=3.0, y=4.0)
    assert s.magnitude == 25.0


def test_resize_clamps_into_new_box():
    s = InfluenceSource(x=700.0, y=500.0, vx=1.0, vy=1.0, size=20, width=800, height=600)
    s.resize(400, 300)
    assert (s.width, s.height) == (400, 300)
    assert s.x == 380.0
    assert s.y == 280.0
    assert (s.vx, s.vy) == (1.0, 1.0)
