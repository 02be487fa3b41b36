"""
engine/
-------
Playback & recording layer.

    from engine import StepDriver, TickScheduler, Recorder
"""

from engine.scheduler import TickScheduler, ScheduledCall
from engine.driver    import StepDriver, DriverState, DEFAULT_SPEED_MS
from engine.recorder  import Recorder, RunMetrics, metrics_from_frame

__all__ = [
    "TickScheduler",
    "ScheduledCall",
    "StepDriver",
    "DriverState",
    "DEFAULT_SPEED_MS",
    "Recorder",
    "RunMetrics",
    "metrics_from_frame",
]
