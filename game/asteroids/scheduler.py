"""
Tick-keyed queue of delayed game transitions.

Delays are counted in ticks and the queue is drained by the engine once per
tick, so every transition runs synchronously with the simulation. Cancelling
an event removes it from the queue; nothing can fire after `cancel_all`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List


class EventKind(str, Enum):
    RESPAWN_SHIP = "respawn_ship"
    LEVEL_ADVANCE = "level_advance"
    ALIEN_APPEAR = "alien_appear"
    GAME_OVER = "game_over"


@dataclass
class ScheduledEvent:
    kind: EventKind
    remaining: int


class EventScheduler:
    """At most one pending event per kind; re-scheduling a kind restarts it"""

    def __init__(self):
        self._events: List[ScheduledEvent] = []

    def schedule(self, kind: EventKind, ticks: int):
        if ticks < 1:
            raise ValueError(f"Delay must be at least one tick, got {ticks}")
        self.cancel(kind)
        self._events.append(ScheduledEvent(kind=kind, remaining=ticks))

    def cancel(self, kind: EventKind) -> bool:
        before = len(self._events)
        self._events = [e for e in self._events if e.kind != kind]
        return len(self._events) != before

    def cancel_all(self):
        self._events = []

    def pending(self, kind: EventKind) -> bool:
        return any(e.kind == kind for e in self._events)

    def remaining(self, kind: EventKind) -> int:
        """Ticks left before `kind` fires, or -1 if it is not queued"""
        for e in self._events:
            if e.kind == kind:
                return e.remaining
        return -1

    def drain(self) -> List[EventKind]:
        """Count down one tick and pop every event that is now due, in scheduling order"""
        due = []
        keep = []
        for e in self._events:
            e.remaining -= 1
            if e.remaining <= 0:
                due.append(e.kind)
            else:
                keep.append(e)
        self._events = keep
        return due

    def __len__(self) -> int:
        return len(self._events)
