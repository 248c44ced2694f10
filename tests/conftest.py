"""Pytest configuration and shared fixtures."""

import pytest
import sys
from pathlib import Path

import numpy as np

# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from novafield import Category, ParticleSimulation, Shape, SimulationParams  # noqa: E402


@pytest.fixture
def rng():
    """Seeded generator so random emission is repeatable."""
    return np.random.default_rng(1234)


@pytest.fixture
def params():
    """Fresh parameters built from the config defaults."""
    return SimulationParams.from_config()


@pytest.fixture
def engine(params, rng):
    """An initialized engine on an 800x600 surface."""
    sim = ParticleSimulation(params=params, rng=rng)
    sim.initialize(800, 600)
    yield sim
    sim.destroy()


@pytest.fixture
def spawn_dot():
    """Spawn one plain circle particle with sensible defaults."""
    def spawn(pool, x=0.0, y=0.0, vx=0.0, vy=0.0, **overrides):
        kwargs = dict(
            size=2.0,
            color=(1.0, 1.0, 1.0),
            max_life=100.0,
            category=Category.PRIMARY,
            shape=Shape.CIRCLE,
            mass=0.01,
        )
        kwargs.update(overrides)
        return pool.spawn(x, y, vx, vy, **kwargs)
    return spawn
