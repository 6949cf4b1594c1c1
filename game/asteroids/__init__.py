"""Asteroids game module - entity simulation, game-state engine and Gymnasium env"""

from .engine import GameStateMachine, GameState
from .events import Intent, AudioCue, HitSize, TickResult
from .asteroids_env import AsteroidsEnv, run_random_episode

__all__ = [
    'GameStateMachine',
    'GameState',
    'Intent',
    'AudioCue',
    'HitSize',
    'TickResult',
    'AsteroidsEnv',
    'run_random_episode',
]
