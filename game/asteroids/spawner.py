"""
Spawning of new entities: level populations, asteroid splits,
debris from destroyed rocks, explosions and the alien ship.

All functions take the random source explicitly so a seeded engine
replays identically.
"""

from __future__ import annotations

import math
import random
from typing import List, Optional, Tuple

from .entities import (
    Asteroid,
    AsteroidShape,
    AlienShip,
    AlienProjectile,
    Fragment,
    Particle,
    Ship,
    ALIEN_PROJECTILE_SPEED,
    EXPLOSION_COLORS,
)
from .utils import distance, speed_multiplier

SPLIT_CHILDREN = 2
SHIP_EXPLOSION_PARTICLES = 20
ALIEN_EXPLOSION_PARTICLES = 30
ALIEN_AIM_JITTER = math.pi / 4


def random_shape(rng: random.Random) -> AsteroidShape:
    """7-10 vertices, each pushed in/out by a factor in [0.8, 1.2)"""
    vertices = rng.randint(7, 10)
    return AsteroidShape(offsets=tuple(rng.random() * 0.4 + 0.8 for _ in range(vertices)))


def create_asteroid(x: float, y: float, tier: int, level: int, rng: random.Random) -> Asteroid:
    mult = speed_multiplier(level)
    vx = (rng.random() * 2 - 1) * mult
    vy = (rng.random() * 2 - 1) * mult
    return Asteroid(x=x, y=y, vx=vx, vy=vy, tier=tier, shape=random_shape(rng))


def split_asteroid(asteroid: Asteroid, level: int, rng: random.Random) -> List[Asteroid]:
    """Children of a destroyed asteroid; small rocks leave nothing behind"""
    if asteroid.tier <= 1:
        return []
    return [
        create_asteroid(asteroid.x, asteroid.y, asteroid.tier - 1, level, rng)
        for _ in range(SPLIT_CHILDREN)
    ]


def asteroid_points(asteroid: Asteroid) -> int:
    """Smaller rocks are worth more: 50 / 100 / 150 for tier 3 / 2 / 1"""
    return (4 - asteroid.tier) * 50


def create_fragments(asteroid: Asteroid, rng: random.Random) -> List[Fragment]:
    """One drifting line segment per edge of the asteroid outline"""
    points = asteroid.outline()
    n = len(points)
    fragments = []
    for i in range(n):
        x1, y1 = points[i]
        x2, y2 = points[(i + 1) % n]

        brightness = rng.randrange(200, 255)
        fragments.append(Fragment(
            x=(x1 + x2) / 2,
            y=(y1 + y2) / 2,
            vx=asteroid.vx + (rng.random() - 0.5) * 2,
            vy=asteroid.vy + (rng.random() - 0.5) * 2,
            angle=math.atan2(y2 - y1, x2 - x1),
            rotation_speed=(rng.random() - 0.5) * 0.2,
            length=math.hypot(x2 - x1, y2 - y1),
            color=(brightness, brightness, brightness),
        ))
    return fragments


def create_explosion(x: float, y: float, count: int, rng: random.Random) -> List[Particle]:
    particles = []
    for _ in range(count):
        ang = rng.random() * math.pi * 2
        speed = rng.random() * 3 + 1
        particles.append(Particle(
            x=x,
            y=y,
            vx=math.cos(ang) * speed,
            vy=math.sin(ang) * speed,
            radius=rng.random() * 3 + 2,
            color=rng.choice(EXPLOSION_COLORS),
        ))
    return particles


def spawn_point(
    width: float,
    height: float,
    avoid: Tuple[float, float],
    exclusion_radius: float,
    max_attempts: int,
    rng: random.Random,
) -> Tuple[float, float]:
    """Random point at least `exclusion_radius` away from `avoid`.

    Gives up after `max_attempts` rejected candidates and returns the last
    one, so a field too small to honour the radius cannot hang the game.
    """
    ax, ay = avoid
    x = rng.random() * width
    y = rng.random() * height
    attempts = 1
    while distance(x, y, ax, ay) < exclusion_radius and attempts < max_attempts:
        x = rng.random() * width
        y = rng.random() * height
        attempts += 1
    return x, y


def init_asteroids(
    level: int,
    width: float,
    height: float,
    ship_pos: Tuple[float, float],
    rng: random.Random,
    exclusion_radius: float = 100.0,
    max_attempts: int = 100,
) -> List[Asteroid]:
    """Fresh population of level + 2 large asteroids away from the ship"""
    asteroids = []
    for _ in range(level + 2):
        x, y = spawn_point(width, height, ship_pos, exclusion_radius, max_attempts, rng)
        asteroids.append(create_asteroid(x, y, 3, level, rng))
    return asteroids


def spawn_alien(width: float, height: float, level: int, rng: random.Random) -> AlienShip:
    """Alien enters from the left or right edge at a random height"""
    mult = speed_multiplier(level)
    x = 0.0 if rng.random() < 0.5 else float(width)
    y = rng.random() * height
    return AlienShip(
        x=x,
        y=y,
        vx=(rng.random() * 2 - 1) * mult,
        vy=(rng.random() * 2 - 1) * mult,
    )


def alien_fire(
    alien: AlienShip,
    rng: random.Random,
    target: Optional[Ship] = None,
) -> AlienProjectile:
    """Shot from the alien; aimed at `target` (with jitter) when one is given"""
    if target is not None:
        base = math.atan2(target.y - alien.y, target.x - alien.x)
        ang = base + (rng.random() - 0.5) * ALIEN_AIM_JITTER
    else:
        ang = rng.random() * math.pi * 2
    return AlienProjectile(
        x=alien.x,
        y=alien.y,
        vx=math.cos(ang) * ALIEN_PROJECTILE_SPEED,
        vy=math.sin(ang) * ALIEN_PROJECTILE_SPEED,
    )
