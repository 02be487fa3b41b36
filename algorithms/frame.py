"""
frame.py — Visualization Frame
===============================
Every runner is a generator that yields Frame objects.
A Frame is one step of progress, carrying everything the renderer
needs to draw it:

    • The array as it looked when the frame was built
    • Which cells to style, and how (VisualCommands)
    • A narration line and its color
    • How long to hold the frame before the next one (ms)
    • On the last frame only: the result and a completion message

Design decisions:
  - Frame is frozen and owns a SNAPSHOT of the array (a tuple), so a
    frame kept around after the run moved on still shows its own step.
    The runner's working list is the only thing that ever mutates.
  - `is_final` marks the terminal frame; it is the only frame whose
    `result` means anything.
  - `speed=None` means "no preference", the driver supplies a default.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from algorithms.commands import VisualCommand


@dataclass(frozen=True)
class Frame:
    """
    Attributes:
        array              : Snapshot of the working array.
        commands           : Ordered VisualCommands (later wins).
        message            : Narration for this step ("" if none).
        message_color      : CSS color for the narration, or None.
        speed              : Suggested hold time in ms, or None.
        result             : Terminal frames only: index, -1, or sorted list.
        completion_message : Terminal frames only.
        is_final           : True on the very last frame.
        step_number        : 0-based position in the run.
        pseudocode_line    : 0-based pseudocode line illustrated (-1 = none).
        metrics            : Running tally: comparisons, swaps.
    """

    array:              Tuple[Any, ...]              = ()
    commands:           Tuple[VisualCommand, ...]    = ()
    message:            str                          = ""
    message_color:      Optional[str]                = None
    speed:              Optional[float]              = None
    result:             Any                          = None
    completion_message: str                          = ""
    is_final:           bool                         = False
    step_number:        int                          = 0
    pseudocode_line:    int                          = -1
    metrics:            Dict[str, int]               = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Builder: owns the working array for one run
# ---------------------------------------------------------------------------
class FrameBuilder:
    """
    Scratch-pad that runners use to emit Frames.

    Usage inside a runner:
        fb = FrameBuilder(list(params["array"]), params.get("speed"))
        yield fb.build([highlight_index(0)], "Checking index 0", line=2)
        fb.swap(0, 1)
        yield fb.finish(list(fb.array), "Array is sorted")
    """

    def __init__(self, array: List[Any], speed: Optional[float] = None):
        self.array:       List[Any]       = array
        self.speed:       Optional[float] = speed
        self.step_number: int             = 0
        self.metrics:     Dict[str, int]  = {"comparisons": 0, "swaps": 0}

    def compared(self, count: int = 1) -> None:
        self.metrics["comparisons"] += count

    def swap(self, i: int, j: int) -> None:
        self.array[i], self.array[j] = self.array[j], self.array[i]
        self.metrics["swaps"] += 1

    def build(
        self,
        commands: Sequence[VisualCommand] = (),
        message: str = "",
        color: Optional[str] = None,
        line: int = -1,
        speed_factor: float = 1.0,
    ) -> Frame:
        speed = self.speed
        if speed is not None and speed_factor != 1.0:
            speed = speed * speed_factor
        return self._emit(
            commands=commands,
            message=message,
            message_color=color,
            speed=speed,
            pseudocode_line=line,
        )

    def finish(
        self,
        result: Any,
        completion_message: str,
        commands: Sequence[VisualCommand] = (),
        line: int = -1,
    ) -> Frame:
        return self._emit(
            commands=commands,
            speed=self.speed,
            result=result,
            completion_message=completion_message,
            is_final=True,
            pseudocode_line=line,
        )

    def _emit(self, commands: Sequence[VisualCommand], **kwargs: Any) -> Frame:
        frame = Frame(
            array=tuple(self.array),
            commands=tuple(c for c in commands if c.indices),
            step_number=self.step_number,
            metrics=dict(self.metrics),
            **kwargs,
        )
        self.step_number += 1
        return frame


# ---------------------------------------------------------------------------
# Serialisation
# ---------------------------------------------------------------------------
def frame_to_dict(frame: Frame) -> Dict[str, Any]:
    """JSON-ready view of a Frame (indices sorted, tuples as lists)."""
    return {
        "array":              list(frame.array),
        "commands":           [
            {"indices": sorted(c.indices), "style": dict(c.style)} for c in frame.commands
        ],
        "message":            frame.message,
        "message_color":      frame.message_color,
        "speed":              frame.speed,
        "result":             list(frame.result) if isinstance(frame.result, (list, tuple)) else frame.result,
        "completion_message": frame.completion_message,
        "is_final":           frame.is_final,
        "step_number":        frame.step_number,
        "pseudocode_line":    frame.pseudocode_line,
        "metrics":            dict(frame.metrics),
    }
