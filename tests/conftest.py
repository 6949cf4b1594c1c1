import random

import pytest

from game.asteroids.engine import GameStateMachine
from game.asteroids.entities import Asteroid, AsteroidShape


def _asteroid(x, y, tier=3, vx=0.0, vy=0.0, vertices=8):
    """Stationary asteroid with a regular outline"""
    return Asteroid(x=x, y=y, vx=vx, vy=vy, tier=tier, shape=AsteroidShape(offsets=(1.0,) * vertices))


@pytest.fixture
def make_asteroid():
    return _asteroid


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def engine():
    """Started engine on the default 800x500 field with a silent alien gun"""
    eng = GameStateMachine(seed=7, alien_fire_chance=0.0)
    eng.start()
    yield eng
    eng.close()
