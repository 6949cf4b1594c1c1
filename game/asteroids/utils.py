"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points"""
    return math.hypot(x1 - x2, y1 - y2)


def speed_multiplier(level: int) -> float:
    """Velocity scale for entities spawned on a given level"""
    return 1.0 + (level - 1) * 0.2


def ms_to_ticks(ms: float, tick_rate: int) -> int:
    """Convert a delay in milliseconds to a whole number of ticks (at least 1)"""
    return max(1, int(round(ms * tick_rate / 1000.0)))
