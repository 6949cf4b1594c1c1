import numpy as np
import pytest

from game.asteroids import AsteroidsEnv
from game.asteroids.entities import Asteroid, AsteroidShape


def _rock(x, y, tier):
    return Asteroid(x=x, y=y, vx=0.0, vy=0.0, tier=tier, shape=AsteroidShape(offsets=(1.0,) * 8))


@pytest.fixture
def env():
    e = AsteroidsEnv(alien_fire_chance=0.0)
    yield e
    e.close()


def test_reset_returns_valid_observation(env):
    obs, info = env.reset(seed=0)
    assert obs.dtype == np.float32
    assert obs.shape == env.observation_space.shape == (9 + 5 * 5 + 3 + 3 * 2,)
    assert env.observation_space.contains(obs)
    assert info["score"] == 0
    assert info["lives"] == 3
    assert info["level"] == 1
    assert info["num_asteroids"] == 3
    assert info["alien"] is False


def test_step_api(env):
    env.reset(seed=1)
    for _ in range(20):
        obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
        assert env.observation_space.contains(obs)
        assert isinstance(reward, float)
    assert info["step"] == 20


def test_idle_step_costs_time_penalty(env):
    env.reset(seed=2)
    env.engine.world.asteroids = [_rock(60, 60, 3)]
    _, reward, terminated, truncated, _ = env.step(np.array([0, 0, 0]))
    assert reward == pytest.approx(-env.reward_config["R_TIME"])
    assert not terminated and not truncated


def test_score_and_life_loss_rewards(env):
    env.reset(seed=3)
    env.engine.world.asteroids = [_rock(400, 250, 1), _rock(60, 60, 3)]
    _, reward, _, _, info = env.step(np.array([0, 0, 0]))
    cfg = env.reward_config
    assert info["lives"] == 2
    assert reward == pytest.approx(cfg["R_SCORE"] * 150 - cfg["R_LIFE"] - cfg["R_TIME"])

    obs, _, _, _, _ = env.step(np.array([0, 0, 0]))
    assert obs[6] == -1.0  # ship absent


def test_terminates_on_game_over():
    env = AsteroidsEnv(initial_lives=1, alien_fire_chance=0.0)
    env.reset(seed=4)
    env.engine.world.asteroids = [_rock(400, 250, 1), _rock(60, 60, 3)]
    terminated = False
    steps = 0
    while not terminated and steps < 100:
        _, _, terminated, truncated, info = env.step(np.array([0, 0, 0]))
        steps += 1
    assert terminated
    assert steps == 61
    assert info["state"] == "game_over"
    env.close()


def test_truncates_at_max_steps():
    env = AsteroidsEnv(max_steps=5)
    env.reset(seed=5)
    env.engine.world.asteroids = [_rock(60, 60, 3)]
    truncated = False
    for _ in range(5):
        _, _, _, truncated, _ = env.step(np.array([0, 0, 0]))
    assert truncated
    env.close()


def test_fire_action_spawns_projectile(env):
    env.reset(seed=6)
    env.engine.world.asteroids = [_rock(60, 60, 3)]
    _, _, _, _, info = env.step(np.array([1, 1, 1]))
    assert info["num_projectiles"] == 1
    _, _, _, _, info = env.step(np.array([0, 0, 1]))
    assert info["num_projectiles"] == 1


def test_custom_reward_config_overrides_defaults():
    env = AsteroidsEnv(reward_config={"R_TIME": 0.5})
    assert env.reward_config["R_TIME"] == 0.5
    assert env.reward_config["R_LIFE"] == 5.0


def test_unknown_render_mode_rejected():
    with pytest.raises(ValueError):
        AsteroidsEnv(render_mode="rgb_array")


def test_reset_seed_drives_engine_layout():
    a, b = AsteroidsEnv(), AsteroidsEnv()
    obs_a, _ = a.reset(seed=11)
    obs_b, _ = b.reset(seed=11)
    np.testing.assert_array_equal(obs_a, obs_b)
    rocks = [(r.x, r.y) for r in a.engine.world.asteroids]
    assert rocks == [(r.x, r.y) for r in b.engine.world.asteroids]

    # unseeded resets continue the env's own generator
    a.reset()
    assert [(r.x, r.y) for r in a.engine.world.asteroids] != rocks
    a.close()
    b.close()
