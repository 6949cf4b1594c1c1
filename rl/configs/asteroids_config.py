"""
Configuration for the asteroids engine, its Gymnasium wrapper and training
"""

# Game engine parameters (GameStateMachine keyword arguments)
ENGINE_CONFIG = {
    "width": 800,
    "height": 500,
    "tick_rate": 60,
    "initial_lives": 3,
    "max_projectiles": 5,
    "alien_points": 200,
    "respawn_delay_ms": 1000,
    "level_delay_ms": 3000,
    "alien_interval_ms": 20000,  # 20 seconds
    "spawn_exclusion_radius": 100.0,
    "spawn_max_attempts": 100,
    "alien_fire_chance": 0.01,
    "alien_aimed_fire": False,
    "extra_life_every": None,  # e.g. 10_000 for a bonus life every 10k points
}

# ==============================================================================
# REWARD SHAPING
# ==============================================================================

REWARD_CONFIG = {
    "R_SCORE": 0.01,     # Reward per point scored
    "R_LIFE": 5.0,       # Penalty per life lost
    "R_LEVEL": 2.0,      # Bonus for clearing a level
    "R_TIME": 0.001,     # Small time penalty
}

# Environment parameters (AsteroidsEnv keyword arguments)
ENV_CONFIG = {
    # "render_mode": None,  # Don't render during training
    "max_steps": 3600,  # 60 seconds at 60 FPS
    "k_asteroids": 5,
    "m_alien_shots": 3,
    "reward_config": REWARD_CONFIG,
    **ENGINE_CONFIG,
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

# PPO hyperparameters
PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 2048,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.99,
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

# DQN hyperparameters
DQN_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 1e-4,
    "buffer_size": 100_000,
    "learning_starts": 1000,
    "batch_size": 128,
    "tau": 1.0,
    "gamma": 0.99,
    "train_freq": 4,
    "gradient_steps": 1,
    "target_update_interval": 1000,
    "exploration_fraction": 0.1,
    "exploration_initial_eps": 1.0,
    "exploration_final_eps": 0.05,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 1_000_000,
    "save_freq": 20_000,
    "eval_freq": 10_000,
    "n_eval_episodes": 5,
    "log_dir": "./logs",
    "model_dir": "./models",
}
