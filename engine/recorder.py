"""
recorder.py — Run Recorder & Analytics
=======================================
Records a complete algorithm run (all Frames) without any timers, then
computes the analytics card the UI shows when a run ends.

Usage:
    rec = Recorder()
    rec.start(algo_key="bubble-sort", params={"array": [3, 1, 2]})
    rec.run_to_completion()          # exhausts the generator
    metrics = rec.get_metrics()      # the analytics card
    rec.export()                     # serialisable snapshot for download
"""

import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Mapping, Optional

from algorithms.frame import Frame, frame_to_dict
from algorithms.registry import REGISTRY, AlgoInfo, require_algorithm


# ---------------------------------------------------------------------------
# Metrics dataclass: what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:           str   = ""
    algo_label:         str   = ""
    total_frames:       int   = 0
    comparisons:        int   = 0
    swaps:              int   = 0
    result:             Any   = None
    completion_message: str   = ""
    wall_time_ms:       float = 0.0     # 0 when built from a live (timed) run


def metrics_from_frame(info: AlgoInfo, frame: Frame, total_frames: int) -> RunMetrics:
    """Analytics card from a terminal frame."""
    return RunMetrics(
        algo_key=info.key,
        algo_label=info.label,
        total_frames=total_frames,
        comparisons=frame.metrics.get("comparisons", 0),
        swaps=frame.metrics.get("swaps", 0),
        result=frame.result,
        completion_message=frame.completion_message,
    )


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        frames  : Full list of Frames from the run.
        metrics : Computed RunMetrics (available after run_to_completion).
    """

    def __init__(self, registry: Mapping[str, AlgoInfo] = REGISTRY):
        self.frames:   List[Frame]          = []
        self.metrics:  Optional[RunMetrics] = None
        self.registry = registry

        self._algo_info: Optional[AlgoInfo] = None
        self._params:    Dict[str, Any]     = {}

    def start(self, algo_key: str, params: Dict[str, Any]) -> None:
        self._algo_info = require_algorithm(algo_key, self.registry)
        self._params    = dict(params)
        self.frames     = []
        self.metrics    = None

    def run_to_completion(self) -> RunMetrics:
        """Exhaust the runner, record every frame, compute metrics."""
        if self._algo_info is None:
            raise RuntimeError("Call start() first.")

        started = time.monotonic()
        self.frames = list(self._algo_info.fn(self._params))
        wall_ms = (time.monotonic() - started) * 1000

        last = self.frames[-1]
        self.metrics = metrics_from_frame(self._algo_info, last, len(self.frames))
        self.metrics.wall_time_ms = round(wall_ms, 2)
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    def export(self) -> Dict[str, Any]:
        metrics = asdict(self.metrics) if self.metrics else {}
        if isinstance(metrics.get("result"), tuple):
            metrics["result"] = list(metrics["result"])
        return {
            "algo_key": self._algo_info.key if self._algo_info else "",
            "params":   self._params,
            "frames":   [frame_to_dict(f) for f in self.frames],
            "metrics":  metrics,
        }
