"""
AsteroidsEnv - Gymnasium wrapper around the asteroids game engine
-----------------------------------------------------------------
- GameStateMachine for simulation, Arcade for (optional) rendering
- Gymnasium API
- 1 RL agent that rotates, thrusts and fires (edge-triggered, max 5 live shots)
- Reward from score, lost lives and cleared levels
- Vector observation: ship state + top-K nearest asteroids + alien + top-M nearest alien shots
- Discrete MultiDiscrete action space: [rotate(3), thrust(2), fire(2)]

Install:
    pip install gymnasium arcade numpy

Quick test:
    python -m game.asteroids.asteroids_env
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .engine import GameStateMachine
from .events import Intent, TickResult
from .utils import clamp

# Terminal speed of a thrusting ship is about 0.1 * 0.98 / 0.02 ~ 4.9
SHIP_MAX_SPEED = 5.0
ASTEROID_MAX_SPEED = 3.0

DEFAULT_REWARD = {
    "R_SCORE": 0.01,  # per point
    "R_LIFE": 5.0,    # per life lost
    "R_LEVEL": 2.0,   # per level cleared
    "R_TIME": 0.001,
}


class AsteroidsEnv(gym.Env):
    """Asteroids as a Gymnasium environment"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        obs_mode: str = "vector",
        max_steps: int = 3600,  # 60s at 60 FPS
        k_asteroids: int = 5,
        m_alien_shots: int = 3,
        reward_config: Optional[Dict[str, float]] = None,
        **engine_kwargs,
    ):
        super().__init__()

        assert obs_mode in ("vector",), "Only 'vector' observations are implemented."
        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode: {render_mode}")
        self.render_mode = render_mode
        self.obs_mode = obs_mode
        self.max_steps = max_steps

        # Observation config
        self.k_asteroids = k_asteroids
        self.m_alien_shots = m_alien_shots

        self.reward_config = dict(DEFAULT_REWARD)
        if reward_config:
            self.reward_config.update(reward_config)

        self.engine = GameStateMachine(**engine_kwargs)
        self.width = self.engine.width
        self.height = self.engine.height

        # Action space:
        # rotate: 0 none, 1 left, 2 right
        # thrust: 0/1
        # fire: 0/1 (a shot needs the button released in between)
        self.action_space = spaces.MultiDiscrete([3, 2, 2])

        # Observation space (vector)
        # Ship: pos(2) vel(2) heading(2) alive(1) lives(1) free shots(1)
        # Each asteroid: rel pos(2) rel vel(2) tier(1)
        # Alien: present(1) rel pos(2)
        # Each alien shot: rel pos(2)
        obs_dim = 9 + (self.k_asteroids * 5) + 3 + (self.m_alien_shots * 2)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self._last_result: Optional[TickResult] = None
        self._step_count = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        self._step_count = 0
        engine_seed = int(self.np_random.integers(0, 2**31 - 1))
        self._last_result = self.engine.start(seed=engine_seed)

        obs = self._get_obs()
        info = self._get_info()
        return obs, info

    def step(self, action):
        rotate, thrust, fire = int(action[0]), int(action[1]), int(action[2])
        intent = Intent(
            rotate_left=rotate == 1,
            rotate_right=rotate == 2,
            thrust=thrust == 1,
            fire=fire == 1,
        )

        before = self.engine.snapshot()
        self._last_result = self.engine.tick(intent)
        after = self._last_result.snapshot

        reward = self._compute_reward(before, after)

        terminated = after.game_over
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        w = self.engine.world
        ship = w.ship
        if ship is not None:
            sx, sy, svx, svy = ship.x, ship.y, ship.vx, ship.vy
            heading = [float(np.cos(ship.angle)), float(np.sin(ship.angle))]
        else:
            sx, sy = w.center
            svx = svy = 0.0
            heading = [0.0, 0.0]

        free_shots = 1.0 - len(w.projectiles) / self.engine.max_projectiles
        obs_parts = [
            (sx / self.width) * 2 - 1,
            (sy / self.height) * 2 - 1,
            clamp(svx / SHIP_MAX_SPEED, -1, 1),
            clamp(svy / SHIP_MAX_SPEED, -1, 1),
            *heading,
            1.0 if ship is not None else -1.0,
            (self.engine.lives / self.engine.initial_lives) * 2 - 1,
            free_shots * 2 - 1,
        ]

        # Asteroids: top-K nearest
        asteroids_sorted = sorted(
            w.asteroids, key=lambda a: (a.x - sx) ** 2 + (a.y - sy) ** 2
        )
        for i in range(self.k_asteroids):
            if i < len(asteroids_sorted):
                a = asteroids_sorted[i]
                obs_parts += [
                    clamp((a.x - sx) / self.width, -1, 1),
                    clamp((a.y - sy) / self.height, -1, 1),
                    clamp((a.vx - svx) / ASTEROID_MAX_SPEED, -1, 1),
                    clamp((a.vy - svy) / ASTEROID_MAX_SPEED, -1, 1),
                    a.tier / 3.0,
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0, 0.0]

        # Alien
        if w.alien is not None:
            obs_parts += [
                1.0,
                clamp((w.alien.x - sx) / self.width, -1, 1),
                clamp((w.alien.y - sy) / self.height, -1, 1),
            ]
        else:
            obs_parts += [-1.0, 0.0, 0.0]

        # Alien shots: top-M nearest
        shots_sorted = sorted(
            w.alien_projectiles, key=lambda p: (p.x - sx) ** 2 + (p.y - sy) ** 2
        )
        for i in range(self.m_alien_shots):
            if i < len(shots_sorted):
                p = shots_sorted[i]
                obs_parts += [
                    clamp((p.x - sx) / self.width, -1, 1),
                    clamp((p.y - sy) / self.height, -1, 1),
                ]
            else:
                obs_parts += [0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, before, after) -> float:
        cfg = self.reward_config
        reward = 0.0

        reward += cfg["R_SCORE"] * (after.score - before.score)
        reward -= cfg["R_LIFE"] * max(0, before.lives - after.lives)
        reward += cfg["R_LEVEL"] * max(0, after.level - before.level)
        reward -= cfg["R_TIME"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        snap = self.engine.snapshot()
        w = self.engine.world
        return {
            "score": snap.score,
            "lives": snap.lives,
            "level": snap.level,
            "state": snap.state,
            "num_asteroids": len(w.asteroids),
            "num_projectiles": len(w.projectiles),
            "alien": w.alien is not None,
            "tempo_bpm": self.engine.tempo_bpm(),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            # arcade needs a display; only pull it in when a window is wanted
            from .render import AsteroidsWindow
            self._window = AsteroidsWindow(self.width, self.height, "AsteroidsEnv - Arcade")

        self._window.show(self._last_result)
        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None
        self.engine.close()


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: Optional[int] = 42) -> float:
    """Run a random episode and return its total reward"""
    env = AsteroidsEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward
        if render:
            time.sleep(1 / env.metadata["render_fps"])

    print(f"Random episode return: {total:.2f}, score {info['score']}, "
          f"level {info['level']}, steps {info['step']}")

    env.close()
    return total


if __name__ == "__main__":
    run_random_episode(render=True)
