"""
scheduler.py — Cooperative Timer
=================================
The driver never sleeps.  It asks a scheduler to call it back later and
returns; the host decides when "later" is checked.

TickScheduler is the polling flavour: the host calls tick() from its
event loop (or, for the web UI, on every status poll) and every call
that has come due fires, in due order.

    sched = TickScheduler()
    call  = sched.call_later(0.5, advance)
    ...
    sched.tick()        # fires `advance` once 0.5 s have passed
    call.cancel()       # or never fires at all

Thread safety: none.  Everything runs on one thread.
"""

import itertools
import time
from typing import Callable, List, Optional


class ScheduledCall:
    """Handle for one pending callback."""

    __slots__ = ("due", "callback", "cancelled", "_seq")

    def __init__(self, due: float, callback: Callable[[], None], seq: int):
        self.due:       float               = due
        self.callback:  Callable[[], None]  = callback
        self.cancelled: bool                = False
        self._seq:      int                 = seq

    def cancel(self) -> None:
        self.cancelled = True

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "pending"
        return f"<ScheduledCall due={self.due:.3f} {state}>"


class TickScheduler:
    """
    Attributes:
        clock : Zero-arg callable returning seconds (monotonic by default).
                Tests pass a fake clock they can move by hand.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._calls: List[ScheduledCall] = []
        self._seq = itertools.count()

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(self.clock() + max(0.0, delay_s), callback, next(self._seq))
        self._calls.append(call)
        return call

    def tick(self) -> int:
        """
        Fire every live call that is due now.  Returns how many fired.

        Calls scheduled by a callback during this tick wait for the next one.
        """
        now = self.clock()
        due = sorted(
            (c for c in self._calls if not c.cancelled and c.due <= now),
            key=lambda c: (c.due, c._seq),
        )
        self._calls = [c for c in self._calls if not c.cancelled and c.due > now]

        fired = 0
        for call in due:
            # an earlier callback in this batch may have cancelled it
            if call.cancelled:
                continue
            call.cancelled = True
            call.callback()
            fired += 1
        return fired

    @property
    def pending(self) -> int:
        return sum(1 for c in self._calls if not c.cancelled)

    def next_due(self) -> Optional[float]:
        live = [c.due for c in self._calls if not c.cancelled]
        return min(live) if live else None
