"""
GameStateMachine - drives one asteroids game session tick by tick
-----------------------------------------------------------------
- Player ship with rotation, thrust and a capped number of live shots
- Asteroids that split into two smaller rocks when destroyed
- An alien saucer on a repeating timer that fires at random
- Lives, score and level progression with delayed respawn / level change

Every delayed transition (ship respawn, level advance, alien appearance,
game over) goes through an EventScheduler drained at the top of each tick,
so resetting the game only has to empty the queue.

Each tick, in order:
    1. drain due events; if a level transition is running, render only
    2. apply intents to the ship (rotate, thrust, fire)
    3. integrate ship, shots, alien shots, asteroids, alien
    4. collision sweeps (read only): shot x asteroid, shot x alien,
       alien shot x ship, ship x asteroid, ship x alien
    5. apply consequences and commit removals / spawns
    6. age fragments and particles
    7. level-complete check
    8. game-over check
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set

from .collision import collides
from .entities import (
    EntityKind,
    Projectile,
    PROJECTILE_SPEED,
    SHIP_ROTATION_STEP,
)
from .events import (
    AudioCue,
    AudioEvent,
    GameSnapshot,
    HitSize,
    Intent,
    TickResult,
    backbeat_bpm,
)
from .physics import integrate
from .scheduler import EventKind, EventScheduler
from .spawner import (
    ALIEN_EXPLOSION_PARTICLES,
    SHIP_EXPLOSION_PARTICLES,
    alien_fire,
    asteroid_points,
    create_explosion,
    create_fragments,
    init_asteroids,
    spawn_alien,
    split_asteroid,
)
from .utils import ms_to_ticks
from .world import EntityWorld


class GameState(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    SHIP_RESPAWNING = "ship_respawning"
    LEVEL_TRANSITION = "level_transition"
    GAME_OVER = "game_over"


@dataclass
class _Hits:
    """Everything the collision sweeps found in one tick"""
    projectiles: Set[int] = field(default_factory=set)
    alien_projectiles: Set[int] = field(default_factory=set)
    asteroids: List[int] = field(default_factory=list)
    alien_killed: bool = False
    alien_shot_down: bool = False
    ship_killed: bool = False


class GameStateMachine:
    """Owns the world, score, lives, level and all pending transitions"""

    def __init__(
        self,
        width: int = 800,
        height: int = 500,
        tick_rate: int = 60,
        initial_lives: int = 3,
        max_projectiles: int = 5,
        alien_points: int = 200,
        respawn_delay_ms: float = 1000,
        level_delay_ms: float = 3000,
        alien_interval_ms: float = 20000,
        spawn_exclusion_radius: float = 100.0,
        spawn_max_attempts: int = 100,
        alien_fire_chance: float = 0.01,
        alien_aimed_fire: bool = False,
        extra_life_every: Optional[int] = None,
        seed: Optional[int] = None,
        verbose: int = 0,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"Field size must be positive, got {width}x{height}")
        if tick_rate <= 0:
            raise ValueError(f"tick_rate must be positive, got {tick_rate}")
        if initial_lives < 1:
            raise ValueError(f"initial_lives must be at least 1, got {initial_lives}")
        if max_projectiles < 1:
            raise ValueError(f"max_projectiles must be at least 1, got {max_projectiles}")
        if min(respawn_delay_ms, level_delay_ms, alien_interval_ms) < 0:
            raise ValueError("Delays must not be negative")
        if not 0.0 <= alien_fire_chance <= 1.0:
            raise ValueError(f"alien_fire_chance must be in [0, 1], got {alien_fire_chance}")
        if extra_life_every is not None and extra_life_every <= 0:
            raise ValueError(f"extra_life_every must be positive, got {extra_life_every}")

        self.width = width
        self.height = height
        self.tick_rate = tick_rate
        self.initial_lives = initial_lives
        self.max_projectiles = max_projectiles
        self.alien_points = alien_points
        self.spawn_exclusion_radius = spawn_exclusion_radius
        self.spawn_max_attempts = spawn_max_attempts
        self.alien_fire_chance = alien_fire_chance
        self.alien_aimed_fire = alien_aimed_fire
        self.extra_life_every = extra_life_every
        self.verbose = verbose

        # Delays in ticks
        self.respawn_delay = ms_to_ticks(respawn_delay_ms, tick_rate)
        self.level_delay = ms_to_ticks(level_delay_ms, tick_rate)
        self.alien_interval = ms_to_ticks(alien_interval_ms, tick_rate)

        self.rng = random.Random(seed)
        self.world = EntityWorld(width, height)
        self.scheduler = EventScheduler()

        # Session state
        self.started = False
        self.score = 0
        self.lives = initial_lives
        self.level = 1
        self.final_score: Optional[int] = None
        self.game_over = False
        self.level_complete = False
        self.ship_destroyed = False
        self.tick_count = 0

        self._game_over_due = False
        self._fire_held = False
        self._thrust_sounding = False
        self._level_total = 0
        self._audio: List[AudioEvent] = []

    # ----------------------------
    # Lifecycle
    # ----------------------------

    @property
    def state(self) -> GameState:
        if not self.started:
            return GameState.IDLE
        if self.game_over:
            return GameState.GAME_OVER
        if self.level_complete:
            return GameState.LEVEL_TRANSITION
        if self.ship_destroyed:
            return GameState.SHIP_RESPAWNING
        return GameState.PLAYING

    def start(self, seed: Optional[int] = None) -> TickResult:
        """Begin a new game; cancels anything pending from a previous one"""
        if seed is not None:
            self.rng.seed(seed)
        self.scheduler.cancel_all()
        self.world.clear()
        self._audio = []

        self.score = 0
        self.lives = self.initial_lives
        self.level = 1
        self.final_score = None
        self.game_over = False
        self.level_complete = False
        self.ship_destroyed = False
        self.tick_count = 0
        self._game_over_due = False
        self._fire_held = False
        self._thrust_sounding = False

        self.world.spawn_ship()
        self._init_level()
        self.scheduler.schedule(EventKind.ALIEN_APPEAR, self.alien_interval)
        self.started = True

        self._emit(AudioCue.LEVEL_START)
        self._log(f"Game started: {len(self.world.asteroids)} asteroids, {self.lives} lives")
        return self._result()

    def reset(self, seed: Optional[int] = None) -> TickResult:
        return self.start(seed=seed)

    def close(self):
        """Tear down the session; nothing scheduled survives"""
        self.scheduler.cancel_all()
        self.world.clear()
        self.started = False

    # ----------------------------
    # Tick
    # ----------------------------

    def tick(self, intent: Optional[Intent] = None) -> TickResult:
        if not self.started:
            raise RuntimeError("tick() called before start()")
        if intent is None:
            intent = Intent()
        self._audio = []

        if self.game_over:
            self._fire_held = intent.fire
            return self._result()

        self.tick_count += 1
        for kind in self.scheduler.drain():
            self._handle_event(kind)

        if self.level_complete:
            # Frozen until the level advance fires
            self._fire_held = intent.fire
            self._check_game_over()
            return self._result()

        self._apply_intent(intent)
        self._integrate()
        hits = self._detect_collisions()
        self._apply_hits(hits)
        self._age_debris()
        self._check_level_complete()
        self._check_game_over()
        return self._result()

    def fire(self) -> bool:
        """Launch a shot from the ship's nose; refused at the live-shot cap"""
        ship = self.world.ship
        if ship is None or self.level_complete or self.game_over:
            return False
        if len(self.world.projectiles) >= self.max_projectiles:
            return False
        self.world.projectiles.append(Projectile(
            x=ship.x,
            y=ship.y,
            vx=math.cos(ship.angle) * PROJECTILE_SPEED,
            vy=math.sin(ship.angle) * PROJECTILE_SPEED,
        ))
        self._emit(AudioCue.FIRE)
        return True

    def _apply_intent(self, intent: Intent):
        pressed = intent.fire and not self._fire_held
        self._fire_held = intent.fire

        ship = self.world.ship
        if ship is None:
            return

        if intent.rotate_left:
            ship.rotate(-SHIP_ROTATION_STEP)
        if intent.rotate_right:
            ship.rotate(SHIP_ROTATION_STEP)
        if intent.thrust:
            ship.thrust()
        else:
            ship.stop_thrust()
        self._set_thrust_sound(ship.thrusting)

        if pressed:
            self.fire()

    def _integrate(self):
        w = self.world
        if w.ship is not None:
            integrate(w.ship, w.width, w.height, self.rng)
        for p in w.projectiles:
            integrate(p, w.width, w.height, self.rng)
        for p in w.alien_projectiles:
            integrate(p, w.width, w.height, self.rng)
        for a in w.asteroids:
            integrate(a, w.width, w.height, self.rng)

        if w.alien is not None:
            integrate(w.alien, w.width, w.height, self.rng)
            if self.rng.random() < self.alien_fire_chance:
                target = w.ship if self.alien_aimed_fire else None
                w.alien_projectiles.append(alien_fire(w.alien, self.rng, target=target))

    def _detect_collisions(self) -> _Hits:
        w = self.world
        hits = _Hits()

        # Shots that ran out this tick take no part in the sweeps
        hits.projectiles = {i for i, p in enumerate(w.projectiles) if p.lifespan <= 0}
        hits.alien_projectiles = {i for i, p in enumerate(w.alien_projectiles) if p.lifespan <= 0}

        # One kill per shot; an asteroid can only be hit once per tick
        for i, p in enumerate(w.projectiles):
            if i in hits.projectiles:
                continue
            for j, a in enumerate(w.asteroids):
                if j in hits.asteroids:
                    continue
                if collides(p, a):
                    hits.projectiles.add(i)
                    hits.asteroids.append(j)
                    break

        if w.alien is not None:
            for i, p in enumerate(w.projectiles):
                if i in hits.projectiles:
                    continue
                if collides(p, w.alien):
                    hits.projectiles.add(i)
                    hits.alien_killed = True
                    hits.alien_shot_down = True
                    break

        ship = None if self.ship_destroyed else w.ship
        if ship is None:
            return hits

        for i, p in enumerate(w.alien_projectiles):
            if i in hits.alien_projectiles:
                continue
            if collides(p, ship):
                hits.alien_projectiles.add(i)
                hits.ship_killed = True
                break

        if not hits.ship_killed:
            for j, a in enumerate(w.asteroids):
                if j in hits.asteroids:
                    continue
                if collides(ship, a):
                    hits.asteroids.append(j)
                    hits.ship_killed = True
                    break

        if not hits.ship_killed and not hits.alien_killed and collides(ship, w.alien):
            hits.ship_killed = True
            hits.alien_killed = True

        return hits

    def _apply_hits(self, hits: _Hits):
        w = self.world

        for j in hits.asteroids:
            a = w.asteroids[j]
            w.queue_spawn(create_fragments(a, self.rng))
            w.queue_spawn(split_asteroid(a, self.level, self.rng))
            self._award(asteroid_points(a))
            self._emit(AudioCue.HIT, HitSize.for_tier(a.tier))

        if hits.alien_killed:
            self._destroy_alien(award=hits.alien_shot_down)
        if hits.ship_killed:
            self._destroy_ship()

        w.sweep(EntityKind.PROJECTILE, hits.projectiles)
        w.sweep(EntityKind.ALIEN_PROJECTILE, hits.alien_projectiles)
        w.sweep(EntityKind.ASTEROID, hits.asteroids)
        w.commit_spawns()

    def _age_debris(self):
        w = self.world
        for f in w.fragments:
            integrate(f, w.width, w.height, self.rng)
        for p in w.particles:
            integrate(p, w.width, w.height, self.rng)
        w.sweep_expired(EntityKind.FRAGMENT)
        w.sweep_expired(EntityKind.PARTICLE)

    def _check_level_complete(self):
        if self.world.asteroids or self.level_complete:
            return
        self.level_complete = True
        self.scheduler.schedule(EventKind.LEVEL_ADVANCE, self.level_delay)
        # No alien until the next level starts
        self.scheduler.cancel(EventKind.ALIEN_APPEAR)
        if self.world.ship is not None:
            self.world.ship.stop_thrust()
        self._set_thrust_sound(False)
        self._log(f"Level {self.level} complete, score {self.score}")

    def _check_game_over(self):
        if not self._game_over_due or self.game_over:
            return
        self.game_over = True
        self.final_score = self.score
        self.scheduler.cancel_all()
        self._set_thrust_sound(False)
        if self.world.alien is not None:
            self._emit(AudioCue.ALIEN_ENGINE_STOP)
        self._emit(AudioCue.GAME_OVER)
        self._log(f"Game over, final score {self.final_score}")

    # ----------------------------
    # Consequences
    # ----------------------------

    def _destroy_alien(self, award: bool):
        w = self.world
        alien = w.alien
        if alien is None:
            return
        if award:
            self._award(self.alien_points)
        w.queue_spawn(create_explosion(alien.x, alien.y, ALIEN_EXPLOSION_PARTICLES, self.rng))
        w.alien = None
        self._emit(AudioCue.HIT, HitSize.ALIEN)
        self._emit(AudioCue.ALIEN_ENGINE_STOP)
        self.scheduler.schedule(EventKind.ALIEN_APPEAR, self.alien_interval)

    def _destroy_ship(self):
        if self.ship_destroyed:
            return
        w = self.world
        ship = w.ship
        self.ship_destroyed = True
        if ship is not None:
            w.queue_spawn(create_explosion(ship.x, ship.y, SHIP_EXPLOSION_PARTICLES, self.rng))
        w.ship = None
        self._set_thrust_sound(False)

        self.lives = max(0, self.lives - 1)
        if self.lives == 0:
            self.scheduler.cancel(EventKind.RESPAWN_SHIP)
            self.scheduler.schedule(EventKind.GAME_OVER, self.respawn_delay)
            self._log("Ship destroyed, no lives left")
        else:
            self.scheduler.schedule(EventKind.RESPAWN_SHIP, self.respawn_delay)
            self._log(f"Ship destroyed, {self.lives} lives left")

    def _award(self, points: int):
        before = self.score
        self.score += points
        if self.extra_life_every is None or self.lives <= 0:
            return
        if self.score // self.extra_life_every > before // self.extra_life_every:
            if self.lives < self.initial_lives:
                self.lives += 1
                self._emit(AudioCue.EXTRA_LIFE)
                self._log(f"Extra life at {self.score}, {self.lives} lives")

    # ----------------------------
    # Scheduled transitions
    # ----------------------------

    def _handle_event(self, kind: EventKind):
        if kind == EventKind.RESPAWN_SHIP:
            self._respawn_ship()
        elif kind == EventKind.LEVEL_ADVANCE:
            self._advance_level()
        elif kind == EventKind.ALIEN_APPEAR:
            self._alien_appear()
        elif kind == EventKind.GAME_OVER:
            self._game_over_due = True

    def _respawn_ship(self):
        if not self.ship_destroyed or self.lives <= 0:
            return
        self.world.spawn_ship()
        self.ship_destroyed = False

    def _alien_appear(self):
        w = self.world
        if w.alien is not None:
            return
        w.alien = spawn_alien(w.width, w.height, self.level, self.rng)
        self._emit(AudioCue.ALIEN_ENGINE_START)
        self._log(f"Alien appeared at ({w.alien.x:.0f}, {w.alien.y:.0f})")

    def _advance_level(self):
        w = self.world
        self.level += 1
        self.level_complete = False

        if w.alien is not None:
            self._emit(AudioCue.ALIEN_ENGINE_STOP)
        w.clear_transients()

        if self.lives > 0:
            self._set_thrust_sound(False)
            w.spawn_ship()
            self.ship_destroyed = False
            self.scheduler.cancel(EventKind.RESPAWN_SHIP)

        self._init_level()
        self.scheduler.schedule(EventKind.ALIEN_APPEAR, self.alien_interval)
        self._emit(AudioCue.LEVEL_START)
        self._log(f"Level {self.level} started with {len(w.asteroids)} asteroids")

    def _init_level(self):
        w = self.world
        w.asteroids = init_asteroids(
            self.level,
            w.width,
            w.height,
            w.center,
            self.rng,
            exclusion_radius=self.spawn_exclusion_radius,
            max_attempts=self.spawn_max_attempts,
        )
        self._level_total = self.remaining_destructions()

    # ----------------------------
    # Outputs
    # ----------------------------

    def remaining_destructions(self) -> int:
        """Asteroid kills still needed to clear the level (a tier-t rock needs 2^t - 1)"""
        return sum(2 ** a.tier - 1 for a in self.world.asteroids)

    def tempo_bpm(self) -> float:
        return backbeat_bpm(self.remaining_destructions(), self._level_total)

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            state=self.state.value,
            score=self.score,
            lives=self.lives,
            level=self.level,
            game_over=self.game_over,
            level_complete=self.level_complete,
            final_score=self.final_score,
        )

    def _result(self) -> TickResult:
        return TickResult(
            snapshot=self.snapshot(),
            directives=self.world.render_directives(),
            audio=list(self._audio),
            tempo_bpm=self.tempo_bpm(),
        )

    def _set_thrust_sound(self, on: bool):
        if on == self._thrust_sounding:
            return
        self._thrust_sounding = on
        self._emit(AudioCue.THRUST_START if on else AudioCue.THRUST_STOP)

    def _emit(self, cue: AudioCue, size: Optional[HitSize] = None):
        self._audio.append(AudioEvent(cue=cue, size=size))

    def _log(self, msg: str):
        if self.verbose > 0:
            print(f"[GameStateMachine] {msg}")
