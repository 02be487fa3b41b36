"""
driver.py — Step Driver
========================
The StepDriver is the ONLY object the UI interacts with during a run.
It owns the active run (the runner's frame generator), pulls one Frame
at a time, hands it to the algorithm's renderer, and asks the scheduler
to call back after the frame's hold time.

State machine:
    IDLE      →  start()   →  RUNNING   (first frame pulled immediately)
    RUNNING   →  pause()   →  PAUSED
    PAUSED    →  resume()  →  RUNNING   (next frame pulled immediately)
    PAUSED    →  step()    →  PAUSED    (exactly one frame, no timer)
    RUNNING   →  (terminal frame)  →  FINISHED
    any       →  stop()    →  IDLE
    any       →  start()   →  RUNNING   (old run torn down first)

Any other call is a no-op.

Ordering:
  - At most one scheduled pull exists.  start / pause / stop cancel it
    before doing anything else.
  - A timer callback carries the run it was scheduled for.  If that run is
    no longer the active one, or the driver is not RUNNING, it does nothing.
  - on_frame may call back into the driver.  After it returns, the next
    pull is scheduled only if its run is still active and RUNNING.
  - If the renderer or on_frame raises, the run is dropped (IDLE) and the
    exception propagates.

Thread safety:
  None.  Call everything, including the scheduler's tick(), from one thread
  or under one lock per driver.
"""

import itertools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterator, Mapping, Optional

from algorithms.frame import Frame
from algorithms.registry import REGISTRY, AlgoInfo, require_algorithm
from engine.scheduler import ScheduledCall, TickScheduler

logger = logging.getLogger(__name__)

DEFAULT_SPEED_MS = 500


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class DriverState(Enum):
    IDLE     = "idle"
    RUNNING  = "running"
    PAUSED   = "paused"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Run context: one live run
# ---------------------------------------------------------------------------
@dataclass
class RunContext:
    run_id:    int
    algo:      AlgoInfo
    params:    Dict[str, Any]
    frames:    Iterator[Frame]
    delivered: int                     = 0
    pending:   Optional[ScheduledCall] = None


# ---------------------------------------------------------------------------
# StepDriver
# ---------------------------------------------------------------------------
class StepDriver:
    """
    Attributes:
        state              : Current DriverState.
        current_frame      : Last Frame delivered (kept after stop / finish).
        current_view       : What the renderer produced for current_frame.
        result             : Terminal frame's result, once FINISHED.
        completion_message : Terminal frame's completion text, once FINISHED.
        on_frame           : Optional callback(frame, view) after each delivery.
        on_finish          : Optional callback(frame) after the terminal frame.
    """

    def __init__(
        self,
        scheduler: TickScheduler,
        registry: Mapping[str, AlgoInfo] = REGISTRY,
        on_frame: Optional[Callable[[Frame, Any], None]] = None,
        on_finish: Optional[Callable[[Frame], None]] = None,
        default_speed_ms: float = DEFAULT_SPEED_MS,
    ):
        self.scheduler        = scheduler
        self.registry         = registry
        self.on_frame         = on_frame
        self.on_finish        = on_finish
        self.default_speed_ms = default_speed_ms

        self.state:              DriverState      = DriverState.IDLE
        self.current_frame:      Optional[Frame]  = None
        self.current_view:       Any              = None
        self.current_algo:       Optional[AlgoInfo] = None
        self.result:             Any              = None
        self.completion_message: str              = ""

        self._context: Optional[RunContext] = None
        self._run_ids = itertools.count(1)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, algo_key: str, params: Dict[str, Any]) -> None:
        """Tear down any current run and start `algo_key` from scratch."""
        algo = require_algorithm(algo_key, self.registry)

        self._teardown()
        self.current_frame      = None
        self.current_view       = None
        self.current_algo       = algo
        self.result             = None
        self.completion_message = ""

        self._context = RunContext(
            run_id=next(self._run_ids),
            algo=algo,
            params=dict(params),
            frames=algo.fn(params),
        )
        self.state = DriverState.RUNNING
        logger.info("Run %d started: %s", self._context.run_id, algo.key)
        self._pull()

    def pause(self) -> None:
        if self.state != DriverState.RUNNING:
            logger.debug("pause() ignored in state %s", self.state.value)
            return
        self._cancel_pending()
        self.state = DriverState.PAUSED

    def resume(self) -> None:
        if self.state != DriverState.PAUSED:
            logger.debug("resume() ignored in state %s", self.state.value)
            return
        self.state = DriverState.RUNNING
        self._pull()

    def step(self) -> None:
        """While PAUSED, deliver exactly one more frame."""
        if self.state != DriverState.PAUSED:
            logger.debug("step() ignored in state %s", self.state.value)
            return
        self._pull(schedule=False)

    def stop(self) -> None:
        if self._context is not None:
            logger.info("Run %d stopped", self._context.run_id)
        self._teardown()
        self.state = DriverState.IDLE

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def is_running(self) -> bool:
        return self.state == DriverState.RUNNING

    @property
    def is_paused(self) -> bool:
        return self.state == DriverState.PAUSED

    @property
    def is_finished(self) -> bool:
        return self.state == DriverState.FINISHED

    @property
    def is_idle(self) -> bool:
        return self.state in (DriverState.IDLE, DriverState.FINISHED)

    @property
    def has_pending(self) -> bool:
        return self._context is not None and self._context.pending is not None

    @property
    def frames_delivered(self) -> int:
        if self._context is not None:
            return self._context.delivered
        if self.current_frame is not None:
            return self.current_frame.step_number + 1
        return 0

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _pull(self, schedule: bool = True) -> None:
        ctx = self._context
        if ctx is None:
            return

        try:
            frame = next(ctx.frames, None)
            view = ctx.algo.visualize(frame, frame.is_final) if frame is not None else None
        except Exception:
            logger.exception("Run %d (%s) failed on frame %d", ctx.run_id, ctx.algo.key, ctx.delivered)
            self._abort(ctx)
            raise

        if frame is None:
            # a runner must end on a terminal frame; a bare end finishes with no result
            logger.warning("Runner %s ended without a terminal frame", ctx.algo.key)
            self._finish(ctx, None)
            return

        ctx.delivered      += 1
        self.current_frame  = frame
        self.current_view   = view
        if self.on_frame:
            try:
                self.on_frame(frame, view)
            except Exception:
                logger.exception("on_frame callback failed in run %d", ctx.run_id)
                self._abort(ctx)
                raise

        # the callback may have paused, stopped or restarted the driver
        if ctx is not self._context:
            return
        if frame.is_final:
            self._finish(ctx, frame)
        elif schedule and self.state == DriverState.RUNNING:
            delay_ms = frame.speed if frame.speed is not None else self.default_speed_ms
            ctx.pending = self.scheduler.call_later(
                delay_ms / 1000.0,
                lambda: self._on_timer(ctx),
            )

    def _on_timer(self, ctx: RunContext) -> None:
        if ctx is not self._context or self.state != DriverState.RUNNING:
            logger.debug("Stale timer for run %d ignored", ctx.run_id)
            return
        ctx.pending = None
        self._pull()

    def _finish(self, ctx: RunContext, frame: Optional[Frame]) -> None:
        """Finish `ctx`; `frame` is its terminal frame, or None if it had none."""
        if ctx is not self._context:
            return
        if frame is not None:
            self.result             = frame.result
            self.completion_message = frame.completion_message
        self._context = None
        self.state    = DriverState.FINISHED
        logger.info("Run %d finished after %d frame(s): result=%r", ctx.run_id, ctx.delivered, self.result)
        if self.on_finish and frame is not None:
            self.on_finish(frame)

    def _abort(self, ctx: RunContext) -> None:
        """Drop a failed run and go back to IDLE, unless a newer run took over."""
        if ctx is not self._context:
            return
        self._teardown()
        self.state = DriverState.IDLE

    def _cancel_pending(self) -> None:
        ctx = self._context
        if ctx is not None and ctx.pending is not None:
            ctx.pending.cancel()
            ctx.pending = None

    def _teardown(self) -> None:
        """Cancel the pending pull and detach the current run."""
        ctx = self._context
        if ctx is None:
            return
        self._cancel_pending()
        self._context = None
        close = getattr(ctx.frames, "close", None)
        if close is not None:
            close()
