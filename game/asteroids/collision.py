"""
Circle-overlap collision test
"""

from __future__ import annotations

from typing import Optional

from .entities import Circle


def collides(a: Optional[Circle], b: Optional[Circle]) -> bool:
    """Check if two circles overlap; an absent entity never collides"""
    if a is None or b is None:
        return False
    dx = a.x - b.x
    dy = a.y - b.y
    rr = a.radius + b.radius
    # strict: touching circles do not collide
    return (dx * dx + dy * dy) < (rr * rr)
