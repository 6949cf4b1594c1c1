"""
What the engine hands to its collaborators each tick: control intents in,
audio cues, draw directives and a HUD snapshot out.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .utils import clamp


@dataclass(frozen=True)
class Intent:
    """Normalized controls for one tick; fire is read as a press, the rest as held"""
    rotate_left: bool = False
    rotate_right: bool = False
    thrust: bool = False
    fire: bool = False


class AudioCue(str, Enum):
    FIRE = "fire"
    HIT = "hit"
    THRUST_START = "thrust_start"
    THRUST_STOP = "thrust_stop"
    ALIEN_ENGINE_START = "alien_engine_start"
    ALIEN_ENGINE_STOP = "alien_engine_stop"
    EXTRA_LIFE = "extra_life"
    LEVEL_START = "level_start"
    GAME_OVER = "game_over"


class HitSize(str, Enum):
    LARGE = "large"
    MEDIUM = "medium"
    SMALL = "small"
    ALIEN = "alien"

    @classmethod
    def for_tier(cls, tier: int) -> "HitSize":
        return {3: cls.LARGE, 2: cls.MEDIUM, 1: cls.SMALL}[tier]


@dataclass(frozen=True)
class AudioEvent:
    cue: AudioCue
    size: Optional[HitSize] = None


@dataclass
class RenderDirective:
    kind: str
    x: float
    y: float
    radius: float = 0.0
    angle: float = 0.0
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view for score/lives/level display"""
    state: str
    score: int
    lives: int
    level: int
    game_over: bool
    level_complete: bool
    final_score: Optional[int] = None


@dataclass
class TickResult:
    snapshot: GameSnapshot
    directives: List[RenderDirective] = field(default_factory=list)
    audio: List[AudioEvent] = field(default_factory=list)
    tempo_bpm: float = 60.0


def backbeat_bpm(remaining: float, total: float) -> float:
    """Backbeat tempo rising from 60 to 180 BPM as the level is cleared"""
    if total <= 0:
        return 60.0
    progress = 1.0 - remaining / total
    return clamp(60.0 + progress * 120.0, 60.0, 180.0)
