from types import SimpleNamespace

from game.asteroids.collision import collides
from game.asteroids.entities import AlienShip, Projectile, Ship


def test_overlapping_circles_collide():
    ship = Ship(x=100, y=100)
    shot = Projectile(x=110, y=100, vx=0, vy=0)
    assert collides(ship, shot)
    assert collides(shot, ship)


def test_touching_circles_do_not_collide():
    a = SimpleNamespace(x=0.0, y=0.0, radius=10.0)
    b = SimpleNamespace(x=20.0, y=0.0, radius=10.0)
    assert not collides(a, b)


def test_distant_circles_do_not_collide():
    ship = Ship(x=100, y=100)
    alien = AlienShip(x=300, y=300, vx=0, vy=0)
    assert not collides(ship, alien)


def test_absent_entity_never_collides():
    ship = Ship(x=100, y=100)
    assert not collides(ship, None)
    assert not collides(None, ship)
    assert not collides(None, None)


def test_asteroid_radius_follows_tier(make_asteroid):
    shot = Projectile(x=145, y=100, vx=0, vy=0)
    assert collides(shot, make_asteroid(100, 100, tier=3))
    assert not collides(shot, make_asteroid(100, 100, tier=2))
