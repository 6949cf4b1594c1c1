"""
Per-tick movement for every entity kind.

Ship, projectiles and the alien snap to the opposite edge as soon as they
leave the field. Asteroids only wrap once their whole circle is outside, so
large rocks visibly slide off the edge first. Fragments and particles never
wrap; they just drift and slow down until their lifespan runs out.
"""

from __future__ import annotations

import random
from typing import Tuple

from .entities import EntityKind, ALIEN_DIRECTION_CHANGE, DEBRIS_DRAG


def edge_wrap(x: float, y: float, width: float, height: float) -> Tuple[float, float]:
    if x < 0:
        x = width
    elif x > width:
        x = 0.0
    if y < 0:
        y = height
    elif y > height:
        y = 0.0
    return x, y


def margin_wrap(x: float, y: float, radius: float, width: float, height: float) -> Tuple[float, float]:
    if x < -radius:
        x = width + radius
    elif x > width + radius:
        x = -radius
    if y < -radius:
        y = height + radius
    elif y > height + radius:
        y = -radius
    return x, y


def integrate(entity, width: float, height: float, rng: random.Random = random):
    """Advance one entity by one tick in place"""
    kind = entity.kind

    if kind == EntityKind.SHIP:
        # friction first, then move
        entity.vx *= entity.friction
        entity.vy *= entity.friction
        entity.x += entity.vx
        entity.y += entity.vy
        entity.x, entity.y = edge_wrap(entity.x, entity.y, width, height)

    elif kind in (EntityKind.PROJECTILE, EntityKind.ALIEN_PROJECTILE):
        entity.x += entity.vx
        entity.y += entity.vy
        entity.x, entity.y = edge_wrap(entity.x, entity.y, width, height)
        entity.lifespan -= 1

    elif kind == EntityKind.ASTEROID:
        entity.x += entity.vx
        entity.y += entity.vy
        entity.x, entity.y = margin_wrap(entity.x, entity.y, entity.radius, width, height)

    elif kind == EntityKind.ALIEN:
        entity.x += entity.vx
        entity.y += entity.vy
        entity.x, entity.y = edge_wrap(entity.x, entity.y, width, height)

        entity.change_counter += 1
        if entity.change_counter > ALIEN_DIRECTION_CHANGE:
            entity.vx = rng.random() * 2 - 1
            entity.vy = rng.random() * 2 - 1
            entity.change_counter = 0

    elif kind == EntityKind.FRAGMENT:
        entity.x += entity.vx
        entity.y += entity.vy
        entity.angle += entity.rotation_speed
        entity.vx *= DEBRIS_DRAG
        entity.vy *= DEBRIS_DRAG
        entity.lifespan -= 1

    elif kind == EntityKind.PARTICLE:
        entity.x += entity.vx
        entity.y += entity.vy
        entity.vx *= DEBRIS_DRAG
        entity.vy *= DEBRIS_DRAG
        entity.lifespan -= 1

    else:
        raise ValueError(f"Unknown entity kind: {kind}")
