import pytest

from metafield.animator import FieldAnimator
from metafield.sources import InfluenceSource
from metafield.surfaces import RecordingSurface


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def make_animator(surface):
    """Animator factory; ``sources`` replaces the random pool with resting ones."""

    def _make(width=800, height=600, source_count=6, seed=1234, sources=None):
        animator = FieldAnimator(
            surface, width, height,
            source_count=0 if sources is not None else source_count,
            seed=seed,
        )
        if sources is not None:
            for x, y, size in sources:
                animator.sources.append(InfluenceSource(
                    x=x, y=y, vx=0.0, vy=0.0, size=size, width=width, height=height,
                ))
        return animator

    return _make
