"""Tests for the cooperative tick scheduler."""


def test_call_fires_when_due(clock, scheduler):
    fired = []
    scheduler.call_later(0.5, lambda: fired.append("a"))

    clock.now = 0.4
    assert scheduler.tick() == 0
    clock.now = 0.5
    assert scheduler.tick() == 1
    assert fired == ["a"]
    assert scheduler.pending == 0


def test_calls_fire_in_due_order(clock, scheduler):
    fired = []
    scheduler.call_later(0.3, lambda: fired.append("late"))
    scheduler.call_later(0.1, lambda: fired.append("early"))
    scheduler.call_later(0.3, lambda: fired.append("late-2"))

    clock.advance(1)
    scheduler.tick()
    assert fired == ["early", "late", "late-2"]


def test_cancelled_call_never_fires(clock, scheduler):
    fired = []
    call = scheduler.call_later(0.1, lambda: fired.append("x"))
    call.cancel()

    clock.advance(1)
    assert scheduler.tick() == 0
    assert fired == []


def test_cancel_within_batch(clock, scheduler):
    fired = []
    second = scheduler.call_later(0.2, lambda: fired.append("second"))
    scheduler.call_later(0.1, lambda: (fired.append("first"), second.cancel()))

    clock.advance(1)
    assert scheduler.tick() == 1
    assert fired == ["first"]


def test_call_scheduled_during_tick_waits(clock, scheduler):
    fired = []

    def reschedule():
        fired.append("outer")
        scheduler.call_later(0, lambda: fired.append("inner"))

    scheduler.call_later(0, reschedule)
    scheduler.tick()
    assert fired == ["outer"]
    scheduler.tick()
    assert fired == ["outer", "inner"]


def test_next_due(clock, scheduler):
    assert scheduler.next_due() is None
    scheduler.call_later(2, lambda: None)
    first = scheduler.call_later(1, lambda: None)
    assert scheduler.next_due() == 1
    first.cancel()
    assert scheduler.next_due() == 2
    assert scheduler.pending == 1
