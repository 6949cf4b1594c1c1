"""
Game entity dataclasses
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, List, Protocol, Tuple


SHIP_RADIUS = 15.0
SHIP_FRICTION = 0.98
SHIP_THRUST_POWER = 0.1
SHIP_ROTATION_STEP = 0.1  # radians per tick

ASTEROID_TIER_RADIUS = 20.0
ASTEROID_TIERS = (1, 2, 3)

PROJECTILE_SPEED = 5.0
PROJECTILE_RADIUS = 2.0
PROJECTILE_LIFESPAN = 100

ALIEN_RADIUS = 20.0
ALIEN_PROJECTILE_SPEED = 3.0
ALIEN_DIRECTION_CHANGE = 100

FRAGMENT_LIFESPAN = 60
PARTICLE_LIFESPAN = 60
DEBRIS_DRAG = 0.98


class Circle(Protocol):
    """Anything with a centre and a radius can take part in collisions"""
    x: float
    y: float
    radius: float


class EntityKind(str, Enum):
    SHIP = "ship"
    ASTEROID = "asteroid"
    PROJECTILE = "projectile"
    ALIEN = "alien"
    ALIEN_PROJECTILE = "alien_projectile"
    FRAGMENT = "fragment"
    PARTICLE = "particle"


@dataclass
class Ship:
    """Player ship, points up by default"""
    kind: ClassVar[EntityKind] = EntityKind.SHIP

    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    angle: float = -math.pi / 2
    thrusting: bool = False
    radius: float = SHIP_RADIUS
    friction: float = SHIP_FRICTION
    thrust_power: float = SHIP_THRUST_POWER

    def rotate(self, delta: float):
        self.angle += delta

    def thrust(self):
        self.thrusting = True
        self.vx += math.cos(self.angle) * self.thrust_power
        self.vy += math.sin(self.angle) * self.thrust_power

    def stop_thrust(self):
        self.thrusting = False


@dataclass(frozen=True)
class AsteroidShape:
    """Irregular outline: one radial offset per vertex, fixed at creation"""
    offsets: Tuple[float, ...]

    @property
    def vertices(self) -> int:
        return len(self.offsets)


@dataclass
class Asteroid:
    """Drifting rock; tier 3 = large, 2 = medium, 1 = small"""
    kind: ClassVar[EntityKind] = EntityKind.ASTEROID

    x: float
    y: float
    vx: float
    vy: float
    tier: int
    shape: AsteroidShape

    def __post_init__(self):
        if self.tier not in ASTEROID_TIERS:
            raise ValueError(f"Asteroid tier must be one of {ASTEROID_TIERS}, got {self.tier}")

    @property
    def radius(self) -> float:
        return self.tier * ASTEROID_TIER_RADIUS

    @property
    def vertices(self) -> int:
        return self.shape.vertices

    @property
    def offsets(self) -> Tuple[float, ...]:
        return self.shape.offsets

    def outline(self) -> List[Tuple[float, float]]:
        """World-space polygon points of the asteroid outline"""
        n = self.vertices
        points = []
        for i, offset in enumerate(self.offsets):
            ang = (i * 2 * math.pi) / n
            r = self.radius * offset
            points.append((self.x + r * math.cos(ang), self.y + r * math.sin(ang)))
        return points


@dataclass
class Projectile:
    """Player bullet"""
    kind: ClassVar[EntityKind] = EntityKind.PROJECTILE

    x: float
    y: float
    vx: float
    vy: float
    radius: float = PROJECTILE_RADIUS
    lifespan: int = PROJECTILE_LIFESPAN


@dataclass
class AlienProjectile:
    """Bullet fired by the alien ship"""
    kind: ClassVar[EntityKind] = EntityKind.ALIEN_PROJECTILE

    x: float
    y: float
    vx: float
    vy: float
    radius: float = PROJECTILE_RADIUS
    lifespan: int = PROJECTILE_LIFESPAN


@dataclass
class AlienShip:
    """Hostile saucer that wanders and fires at random"""
    kind: ClassVar[EntityKind] = EntityKind.ALIEN

    x: float
    y: float
    vx: float
    vy: float
    radius: float = ALIEN_RADIUS
    change_counter: int = 0


@dataclass
class Fragment:
    """Line segment of debris from a destroyed asteroid's outline"""
    kind: ClassVar[EntityKind] = EntityKind.FRAGMENT

    x: float
    y: float
    vx: float
    vy: float
    angle: float
    rotation_speed: float
    length: float
    color: Tuple[int, int, int]
    lifespan: int = FRAGMENT_LIFESPAN
    max_lifespan: int = FRAGMENT_LIFESPAN

    @property
    def alpha(self) -> float:
        return max(0.0, self.lifespan / self.max_lifespan)


@dataclass
class Particle:
    """Explosion particle"""
    kind: ClassVar[EntityKind] = EntityKind.PARTICLE

    x: float
    y: float
    vx: float
    vy: float
    radius: float
    color: Tuple[int, int, int]
    lifespan: int = PARTICLE_LIFESPAN
    max_lifespan: int = PARTICLE_LIFESPAN

    @property
    def alpha(self) -> float:
        return max(0.0, self.lifespan / self.max_lifespan)


EXPLOSION_COLORS = [
    (255, 0, 0),
    (255, 51, 0),
    (255, 102, 0),
    (255, 153, 0),
    (255, 204, 0),
]
