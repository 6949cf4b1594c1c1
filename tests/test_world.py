import pytest

from game.asteroids.entities import AlienShip, EntityKind, Fragment, Particle, Projectile
from game.asteroids.world import EntityWorld


def _shot(x):
    return Projectile(x=x, y=0, vx=0, vy=0)


def test_sweep_removes_marked_indices_without_skipping():
    w = EntityWorld(800, 500)
    w.projectiles = [_shot(0), _shot(1), _shot(2), _shot(3)]
    removed = w.sweep(EntityKind.PROJECTILE, {0, 2})
    assert removed == 2
    assert [p.x for p in w.projectiles] == [1, 3]


def test_sweep_ignores_duplicates_and_stale_indices():
    w = EntityWorld(800, 500)
    w.projectiles = [_shot(0), _shot(1), _shot(2)]
    assert w.sweep(EntityKind.PROJECTILE, [2, 2, 7, 1]) == 2
    assert [p.x for p in w.projectiles] == [0]


def test_sweep_expired():
    w = EntityWorld(800, 500)
    w.particles = [
        Particle(x=0, y=0, vx=0, vy=0, radius=2, color=(255, 0, 0), lifespan=1),
        Particle(x=1, y=0, vx=0, vy=0, radius=2, color=(255, 0, 0), lifespan=0),
        Particle(x=2, y=0, vx=0, vy=0, radius=2, color=(255, 0, 0), lifespan=-3),
    ]
    assert w.sweep_expired(EntityKind.PARTICLE) == 2
    assert [p.x for p in w.particles] == [0]


def test_spawns_are_held_until_commit(make_asteroid):
    w = EntityWorld(800, 500)
    w.queue_spawn([make_asteroid(1, 1, tier=2), _shot(5)])
    assert w.asteroids == [] and w.projectiles == []
    assert w.commit_spawns() == 2
    assert len(w.asteroids) == 1 and len(w.projectiles) == 1
    assert w.commit_spawns() == 0


def test_spawn_ship_at_center():
    w = EntityWorld(800, 500)
    ship = w.spawn_ship()
    assert (ship.x, ship.y) == (400, 250)
    assert w.ship is ship


def test_clear_transients_keeps_ship_and_asteroids(make_asteroid):
    w = EntityWorld(800, 500)
    w.spawn_ship()
    w.asteroids = [make_asteroid(1, 1)]
    w.alien = AlienShip(x=0, y=0, vx=0, vy=0)
    w.projectiles = [_shot(1)]
    w.queue_spawn([_shot(2)])
    w.clear_transients()
    assert w.alien is None and w.projectiles == []
    assert w.ship is not None and len(w.asteroids) == 1
    assert w.commit_spawns() == 0

    w.clear()
    assert w.ship is None and w.asteroids == []


def test_render_directives(make_asteroid):
    w = EntityWorld(800, 500)
    w.spawn_ship()
    w.ship.thrusting = True
    w.asteroids = [make_asteroid(10, 20, tier=2, vertices=9)]
    w.fragments = [Fragment(x=0, y=0, vx=0, vy=0, angle=0.5, rotation_speed=0, length=12,
                            color=(210, 210, 210), lifespan=30)]
    w.alien = AlienShip(x=5, y=5, vx=1, vy=0)

    directives = {d.kind: d for d in w.render_directives()}
    assert set(directives) == {"ship", "asteroid", "fragment", "alien"}

    ship = directives["ship"]
    assert ship.params["thrusting"] is True
    assert ship.angle == w.ship.angle

    rock = directives["asteroid"]
    assert rock.radius == 40
    assert len(rock.params["offsets"]) == 9

    frag = directives["fragment"]
    assert frag.params["alpha"] == pytest.approx(0.5)
    assert frag.params["length"] == 12
