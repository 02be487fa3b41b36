"""Tests for the step driver state machine."""

from types import MappingProxyType

import pytest

from algorithms.frame import FrameBuilder
from algorithms.registry import REGISTRY, AlgoInfo, UnknownAlgorithmError
from engine import DriverState, Recorder, StepDriver


def make_driver(scheduler, **kwargs):
    delivered = []
    finished = []
    driver = StepDriver(
        scheduler,
        on_frame=lambda frame, view: delivered.append(frame),
        on_finish=finished.append,
        **kwargs,
    )
    return driver, delivered, finished


def run_out(driver, clock, scheduler):
    while driver.is_running:
        clock.advance(10)
        scheduler.tick()


def recorded(key, params):
    rec = Recorder()
    rec.start(key, params)
    rec.run_to_completion()
    return rec.frames


BUBBLE = {"array": [3, 1, 2], "speed": 100}


def test_start_delivers_first_frame(scheduler):
    driver, delivered, _ = make_driver(scheduler)
    driver.start("bubble-sort", BUBBLE)

    assert driver.state == DriverState.RUNNING
    assert driver.current_frame.step_number == 0
    assert driver.current_algo.key == "bubble-sort"
    assert "array-view" in driver.current_view
    assert driver.has_pending
    assert len(delivered) == 1


def test_frames_follow_their_speed(clock, scheduler):
    driver, delivered, _ = make_driver(scheduler)
    driver.start("bubble-sort", BUBBLE)

    clock.now = 0.099
    scheduler.tick()
    assert len(delivered) == 1
    clock.now = 0.1
    scheduler.tick()
    assert len(delivered) == 2


def test_default_speed_used_when_frame_has_none(clock, scheduler):
    driver, delivered, _ = make_driver(scheduler, default_speed_ms=200)
    driver.start("bubble-sort", {"array": [3, 1, 2]})

    clock.now = 0.199
    scheduler.tick()
    assert len(delivered) == 1
    clock.now = 0.2
    scheduler.tick()
    assert len(delivered) == 2


def test_run_to_finish(clock, scheduler):
    driver, delivered, finished = make_driver(scheduler)
    driver.start("bubble-sort", BUBBLE)
    run_out(driver, clock, scheduler)

    assert driver.state == DriverState.FINISHED
    assert driver.is_idle
    assert driver.result == [1, 2, 3]
    assert driver.completion_message == "Array is sorted"
    assert finished == [delivered[-1]]
    assert [f.step_number for f in delivered] == list(range(len(delivered)))
    assert driver.frames_delivered == len(delivered)
    assert not driver.has_pending
    assert scheduler.pending == 0


def test_pause_resume_keeps_every_frame(clock, scheduler):
    driver, delivered, _ = make_driver(scheduler)
    driver.start("bubble-sort", BUBBLE)

    clock.advance(10)
    scheduler.tick()
    driver.pause()
    assert driver.state == DriverState.PAUSED
    assert not driver.has_pending

    clock.advance(10)
    assert scheduler.tick() == 0
    assert len(delivered) == 2

    driver.resume()
    assert driver.state == DriverState.RUNNING
    assert len(delivered) == 3

    run_out(driver, clock, scheduler)
    expected = recorded("bubble-sort", BUBBLE)
    assert [f.array for f in delivered] == [f.array for f in expected]
    assert [f.message for f in delivered] == [f.message for f in expected]


def test_step_while_paused(clock, scheduler):
    driver, delivered, _ = make_driver(scheduler)
    driver.start("bubble-sort", BUBBLE)
    driver.pause()

    driver.step()
    assert driver.state == DriverState.PAUSED
    assert driver.current_frame.step_number == 1
    assert not driver.has_pending

    clock.advance(10)
    assert scheduler.tick() == 0
    assert len(delivered) == 2


def test_step_to_the_end(scheduler):
    driver, delivered, finished = make_driver(scheduler)
    driver.start("linear-search", {"array": [5], "target": 5})
    driver.pause()
    driver.step()

    assert driver.state == DriverState.FINISHED
    assert driver.result == 0
    assert len(finished) == 1


def test_stop_stops_everything(clock, scheduler):
    driver, delivered, _ = make_driver(scheduler)
    driver.start("bubble-sort", BUBBLE)
    driver.stop()

    assert driver.state == DriverState.IDLE
    assert not driver.has_pending
    clock.advance(10)
    assert scheduler.tick() == 0
    assert len(delivered) == 1


def test_restart_ignores_stale_timer(scheduler):
    driver, delivered, _ = make_driver(scheduler)
    driver.start("bubble-sort", BUBBLE)
    stale = driver._context.pending

    driver.start("linear-search", {"array": [1, 2, 3], "target": 3})
    assert stale.cancelled

    stale.callback()
    assert driver.current_algo.key == "linear-search"
    assert driver.current_frame.step_number == 0
    assert len(delivered) == 2


@pytest.mark.parametrize("call", ["pause", "resume", "step"])
def test_invalid_transitions_from_idle_are_ignored(scheduler, call):
    driver, delivered, _ = make_driver(scheduler)
    getattr(driver, call)()

    assert driver.state == DriverState.IDLE
    assert delivered == []


def test_invalid_transitions_while_running_are_ignored(scheduler):
    driver, delivered, _ = make_driver(scheduler)
    driver.start("bubble-sort", BUBBLE)
    driver.resume()
    driver.step()

    assert driver.state == DriverState.RUNNING
    assert len(delivered) == 1
    assert scheduler.pending == 1


def test_finished_ignores_pause(clock, scheduler):
    driver, _, _ = make_driver(scheduler)
    driver.start("linear-search", {"array": [], "target": 1})
    assert driver.state == DriverState.FINISHED

    driver.pause()
    assert driver.state == DriverState.FINISHED
    assert driver.result == -1


def test_unknown_algorithm_leaves_run_alone(scheduler):
    driver, _, _ = make_driver(scheduler)
    driver.start("bubble-sort", BUBBLE)

    with pytest.raises(UnknownAlgorithmError):
        driver.start("nope", {})
    assert driver.state == DriverState.RUNNING
    assert driver.current_algo.key == "bubble-sort"
    assert driver.has_pending


def test_start_does_not_mutate_params(clock, scheduler):
    driver, _, _ = make_driver(scheduler)
    params = {"array": [3, 1, 2]}
    driver.start("bubble-sort", params)
    run_out(driver, clock, scheduler)
    assert params == {"array": [3, 1, 2]}


def _broken(params):
    fb = FrameBuilder([1, 2])
    yield fb.build(message="first")
    raise RuntimeError("boom")


def _truncated(params):
    fb = FrameBuilder([1, 2])
    yield fb.build(message="only")


def _registry(**fns):
    entries = dict(REGISTRY)
    for key, fn in fns.items():
        entries[key] = AlgoInfo(key=key, label=key.title(), topic="Test", fn=fn, params=())
    return MappingProxyType(entries)


def test_runner_error_tears_down_run(clock, scheduler):
    driver, _, _ = make_driver(scheduler, registry=_registry(broken=_broken))
    driver.start("broken", {})

    clock.advance(10)
    with pytest.raises(RuntimeError):
        scheduler.tick()
    assert driver.state == DriverState.IDLE
    assert not driver.has_pending


def test_runner_without_terminal_frame_finishes(clock, scheduler):
    driver, _, finished = make_driver(scheduler, registry=_registry(truncated=_truncated))
    driver.start("truncated", {})

    clock.advance(10)
    scheduler.tick()
    assert driver.state == DriverState.FINISHED
    assert driver.result is None
    assert driver.completion_message == ""
    assert finished == []


def test_pause_from_on_frame_leaves_one_pending_pull(clock, scheduler):
    driver = StepDriver(scheduler)
    delivered = []

    def on_frame(frame, view):
        delivered.append(frame.step_number)
        if frame.step_number == 1:
            driver.pause()

    driver.on_frame = on_frame
    driver.start("bubble-sort", BUBBLE)
    clock.advance(10)
    scheduler.tick()

    assert driver.state == DriverState.PAUSED
    assert scheduler.pending == 0

    driver.resume()
    assert scheduler.pending == 1
    clock.advance(10)
    assert scheduler.tick() == 1
    assert delivered == [0, 1, 2, 3]


def test_stop_from_on_frame_schedules_nothing(scheduler):
    driver = StepDriver(scheduler)
    driver.on_frame = lambda frame, view: driver.stop()
    driver.start("bubble-sort", BUBBLE)

    assert driver.state == DriverState.IDLE
    assert scheduler.pending == 0


def test_restart_from_terminal_frame_keeps_new_run(clock, scheduler):
    driver = StepDriver(scheduler)
    finished = []

    def on_frame(frame, view):
        if frame.is_final and driver.current_algo.key == "linear-search":
            driver.start("bubble-sort", BUBBLE)

    driver.on_frame = on_frame
    driver.on_finish = finished.append
    driver.start("linear-search", {"array": [5], "target": 5})
    clock.advance(10)
    scheduler.tick()

    assert driver.state == DriverState.RUNNING
    assert driver.current_algo.key == "bubble-sort"
    assert driver.has_pending
    assert finished == []

    run_out(driver, clock, scheduler)
    assert driver.state == DriverState.FINISHED
    assert driver.result == [1, 2, 3]
    assert len(finished) == 1


def _failing_view(frame, is_final):
    if frame.step_number == 1:
        raise ValueError("cannot draw")
    return ""


def test_renderer_error_tears_down_run(clock, scheduler):
    entries = dict(REGISTRY)
    entries["bad-view"] = AlgoInfo(
        key="bad-view", label="Bad View", topic="Test",
        fn=REGISTRY["bubble-sort"].fn, params=(), visualize=_failing_view,
    )
    driver, _, _ = make_driver(scheduler, registry=MappingProxyType(entries))
    driver.start("bad-view", BUBBLE)

    clock.advance(10)
    with pytest.raises(ValueError):
        scheduler.tick()
    assert driver.state == DriverState.IDLE
    assert not driver.has_pending
    assert scheduler.pending == 0


def test_on_frame_error_tears_down_run(scheduler):
    def on_frame(frame, view):
        raise RuntimeError("listener failed")

    driver = StepDriver(scheduler, on_frame=on_frame)
    with pytest.raises(RuntimeError):
        driver.start("bubble-sort", BUBBLE)
    assert driver.state == DriverState.IDLE
    assert scheduler.pending == 0
