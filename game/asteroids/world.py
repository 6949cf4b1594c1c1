"""
EntityWorld - sole owner of every live entity collection.

Collections are never edited while being scanned: callers collect the
indices to remove during a read pass and hand them to `sweep`, and new
entities produced mid-tick go through `queue_spawn` / `commit_spawns`.
"""

from __future__ import annotations

import math
from typing import Dict, Iterable, List, Optional

from .entities import (
    Ship,
    Asteroid,
    Projectile,
    AlienShip,
    AlienProjectile,
    Fragment,
    Particle,
    EntityKind,
)
from .events import RenderDirective

# Collections that hold lists of entities, keyed by entity kind
LIST_ATTRS: Dict[EntityKind, str] = {
    EntityKind.ASTEROID: "asteroids",
    EntityKind.PROJECTILE: "projectiles",
    EntityKind.ALIEN_PROJECTILE: "alien_projectiles",
    EntityKind.FRAGMENT: "fragments",
    EntityKind.PARTICLE: "particles",
}


class EntityWorld:
    """Live entities of one game session"""

    def __init__(self, width: float, height: float):
        self.width = width
        self.height = height

        self.ship: Optional[Ship] = None
        self.alien: Optional[AlienShip] = None
        self.asteroids: List[Asteroid] = []
        self.projectiles: List[Projectile] = []
        self.alien_projectiles: List[AlienProjectile] = []
        self.fragments: List[Fragment] = []
        self.particles: List[Particle] = []

        self._pending: List = []

    @property
    def center(self):
        return self.width * 0.5, self.height * 0.5

    def spawn_ship(self) -> Ship:
        cx, cy = self.center
        self.ship = Ship(x=cx, y=cy)
        return self.ship

    def collection(self, kind: EntityKind) -> List:
        return getattr(self, LIST_ATTRS[kind])

    # ----------------------------
    # Mutation
    # ----------------------------

    def sweep(self, kind: EntityKind, indices: Iterable[int]) -> int:
        """Remove the entities at `indices`, highest index first"""
        items = self.collection(kind)
        removed = 0
        for i in sorted(set(indices), reverse=True):
            if 0 <= i < len(items):
                del items[i]
                removed += 1
        return removed

    def sweep_expired(self, kind: EntityKind) -> int:
        """Drop entities whose lifespan has run out"""
        expired = [i for i, e in enumerate(self.collection(kind)) if e.lifespan <= 0]
        return self.sweep(kind, expired)

    def queue_spawn(self, entities: Iterable):
        self._pending.extend(entities)

    def commit_spawns(self) -> int:
        """Append everything queued this tick to its collection"""
        count = len(self._pending)
        for e in self._pending:
            self.collection(e.kind).append(e)
        self._pending = []
        return count

    def clear_transients(self):
        """Drop shots, the alien and debris (level change)"""
        self.alien = None
        self.projectiles = []
        self.alien_projectiles = []
        self.fragments = []
        self.particles = []
        self._pending = []

    def clear(self):
        self.ship = None
        self.asteroids = []
        self.clear_transients()

    # ----------------------------
    # Rendering
    # ----------------------------

    def entities(self) -> List:
        """Every live entity in draw order"""
        out: List = list(self.asteroids)
        out += self.fragments
        out += self.particles
        out += self.projectiles
        out += self.alien_projectiles
        if self.alien is not None:
            out.append(self.alien)
        if self.ship is not None:
            out.append(self.ship)
        return out

    def render_directives(self) -> List[RenderDirective]:
        return [self.directive_for(e) for e in self.entities()]

    @staticmethod
    def directive_for(entity) -> RenderDirective:
        kind = entity.kind
        if kind == EntityKind.SHIP:
            return RenderDirective(
                kind=kind.value, x=entity.x, y=entity.y, radius=entity.radius,
                angle=entity.angle, params={"thrusting": entity.thrusting},
            )
        if kind == EntityKind.ASTEROID:
            return RenderDirective(
                kind=kind.value, x=entity.x, y=entity.y, radius=entity.radius,
                params={"tier": entity.tier, "offsets": entity.offsets},
            )
        if kind in (EntityKind.PROJECTILE, EntityKind.ALIEN_PROJECTILE):
            return RenderDirective(kind=kind.value, x=entity.x, y=entity.y, radius=entity.radius)
        if kind == EntityKind.ALIEN:
            return RenderDirective(
                kind=kind.value, x=entity.x, y=entity.y, radius=entity.radius,
                angle=math.atan2(entity.vy, entity.vx),
            )
        if kind == EntityKind.FRAGMENT:
            return RenderDirective(
                kind=kind.value, x=entity.x, y=entity.y, angle=entity.angle,
                params={"length": entity.length, "color": entity.color, "alpha": entity.alpha},
            )
        if kind == EntityKind.PARTICLE:
            return RenderDirective(
                kind=kind.value, x=entity.x, y=entity.y, radius=entity.radius,
                params={"color": entity.color, "alpha": entity.alpha},
            )
        raise ValueError(f"Unknown entity kind: {kind}")
