import math
import random

import pytest

from game.asteroids.entities import AlienShip, Ship, EXPLOSION_COLORS
from game.asteroids.spawner import (
    alien_fire,
    asteroid_points,
    create_asteroid,
    create_explosion,
    create_fragments,
    init_asteroids,
    spawn_alien,
    spawn_point,
    split_asteroid,
)
from game.asteroids.utils import distance


@pytest.mark.parametrize("tier", [1, 2, 3])
def test_new_asteroid_shape(tier, rng):
    for _ in range(50):
        a = create_asteroid(100, 100, tier, 1, rng)
        assert a.radius == tier * 20
        assert 7 <= a.vertices <= 10
        assert all(0.8 <= o < 1.2 for o in a.offsets)
        assert -1 <= a.vx <= 1 and -1 <= a.vy <= 1


def test_invalid_tier_rejected(make_asteroid):
    with pytest.raises(ValueError):
        make_asteroid(0, 0, tier=4)


def test_asteroid_speed_scales_with_level():
    a1 = create_asteroid(0, 0, 3, 1, random.Random(5))
    a3 = create_asteroid(0, 0, 3, 3, random.Random(5))
    assert a3.vx == pytest.approx(a1.vx * 1.4)
    assert a3.vy == pytest.approx(a1.vy * 1.4)


@pytest.mark.parametrize("tier, children", [(3, 2), (2, 2), (1, 0)])
def test_split(tier, children, make_asteroid, rng):
    parent = make_asteroid(321, 123, tier=tier)
    kids = split_asteroid(parent, 1, rng)
    assert len(kids) == children
    for k in kids:
        assert k.tier == tier - 1
        assert k.radius == (tier - 1) * 20
        assert (k.x, k.y) == (321, 123)


def test_split_children_have_independent_velocities(make_asteroid, rng):
    a, b = split_asteroid(make_asteroid(0, 0, tier=3), 1, rng)
    assert (a.vx, a.vy) != (b.vx, b.vy)


@pytest.mark.parametrize("tier, points", [(3, 50), (2, 100), (1, 150)])
def test_points_per_tier(tier, points, make_asteroid):
    assert asteroid_points(make_asteroid(0, 0, tier=tier)) == points


def test_one_fragment_per_edge(make_asteroid, rng):
    rock = make_asteroid(100, 100, tier=3, vx=1.0, vertices=8)
    frags = create_fragments(rock, rng)
    assert len(frags) == 8

    edge = 2 * 60 * math.sin(math.pi / 8)
    for f in frags:
        assert f.length == pytest.approx(edge)
        assert f.lifespan == 60
        assert 200 <= f.color[0] < 255
        assert 0 <= f.vx <= 2.0

    # first edge runs from angle 0 to angle pi/4
    x1, y1 = 160, 100
    x2, y2 = 100 + 60 * math.cos(math.pi / 4), 100 + 60 * math.sin(math.pi / 4)
    assert frags[0].x == pytest.approx((x1 + x2) / 2)
    assert frags[0].y == pytest.approx((y1 + y2) / 2)
    assert frags[0].angle == pytest.approx(math.atan2(y2 - y1, x2 - x1))


def test_explosion(rng):
    parts = create_explosion(50, 60, 30, rng)
    assert len(parts) == 30
    for p in parts:
        assert (p.x, p.y) == (50, 60)
        assert 1 <= math.hypot(p.vx, p.vy) < 4
        assert 2 <= p.radius < 5
        assert p.color in EXPLOSION_COLORS
        assert p.lifespan == 60


def test_spawn_point_respects_exclusion(rng):
    for _ in range(200):
        x, y = spawn_point(800, 500, (400, 250), 100, 100, rng)
        assert distance(x, y, 400, 250) >= 100


def test_spawn_point_gives_up_on_tiny_field(rng):
    # no point of a 50x50 field is 100 units from its centre
    x, y = spawn_point(50, 50, (25, 25), 100, 10, rng)
    assert 0 <= x <= 50 and 0 <= y <= 50


@pytest.mark.parametrize("level", [1, 2, 5])
def test_level_population(level, rng):
    rocks = init_asteroids(level, 800, 500, (400, 250), rng)
    assert len(rocks) == level + 2
    assert all(r.tier == 3 for r in rocks)
    assert all(distance(r.x, r.y, 400, 250) >= 100 for r in rocks)


def test_alien_enters_from_side(rng):
    for _ in range(20):
        alien = spawn_alien(800, 500, 1, rng)
        assert alien.x in (0.0, 800.0)
        assert 0 <= alien.y <= 500
        assert alien.radius == 20


def test_alien_random_fire(rng):
    alien = AlienShip(x=10, y=20, vx=0, vy=0)
    shot = alien_fire(alien, rng)
    assert (shot.x, shot.y) == (10, 20)
    assert math.hypot(shot.vx, shot.vy) == pytest.approx(3.0)
    assert shot.lifespan == 100


def test_alien_aimed_fire(rng):
    alien = AlienShip(x=0, y=0, vx=0, vy=0)
    target = Ship(x=100, y=0)
    for _ in range(50):
        shot = alien_fire(alien, rng, target=target)
        assert abs(math.atan2(shot.vy, shot.vx)) <= math.pi / 8
