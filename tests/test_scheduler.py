import pytest

from game.asteroids.scheduler import EventKind, EventScheduler


def test_event_fires_after_its_delay():
    s = EventScheduler()
    s.schedule(EventKind.RESPAWN_SHIP, 3)
    assert s.drain() == []
    assert s.drain() == []
    assert s.remaining(EventKind.RESPAWN_SHIP) == 1
    assert s.drain() == [EventKind.RESPAWN_SHIP]
    assert not s.pending(EventKind.RESPAWN_SHIP)
    assert s.drain() == []


def test_rescheduling_restarts_the_countdown():
    s = EventScheduler()
    s.schedule(EventKind.ALIEN_APPEAR, 2)
    s.drain()
    s.schedule(EventKind.ALIEN_APPEAR, 2)
    assert len(s) == 1
    assert s.drain() == []
    assert s.drain() == [EventKind.ALIEN_APPEAR]


def test_cancel_removes_the_event():
    s = EventScheduler()
    s.schedule(EventKind.LEVEL_ADVANCE, 1)
    assert s.cancel(EventKind.LEVEL_ADVANCE)
    assert not s.cancel(EventKind.LEVEL_ADVANCE)
    assert s.drain() == []


def test_cancel_all():
    s = EventScheduler()
    for kind in EventKind:
        s.schedule(kind, 1)
    s.cancel_all()
    assert len(s) == 0
    assert s.drain() == []
    assert s.remaining(EventKind.GAME_OVER) == -1


def test_events_due_together_keep_scheduling_order():
    s = EventScheduler()
    s.schedule(EventKind.GAME_OVER, 2)
    s.schedule(EventKind.RESPAWN_SHIP, 1)
    s.drain()
    s.schedule(EventKind.ALIEN_APPEAR, 1)
    assert s.drain() == [EventKind.GAME_OVER, EventKind.ALIEN_APPEAR]


def test_zero_delay_rejected():
    with pytest.raises(ValueError):
        EventScheduler().schedule(EventKind.GAME_OVER, 0)
