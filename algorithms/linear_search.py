"""
linear_search.py — Linear Search
=================================
Generator-based linear scan.  Yields a Frame at:
  1. Every index examined  →  highlighted
  2. A match               →  cell marked FOUND
  3. Final frame           →  result = index, or -1 when the scan runs out
"""

from typing import Any, Dict, Iterator, List

from algorithms.commands import COLOR_SUCCESS, highlight_index, mark_found
from algorithms.frame import Frame, FrameBuilder


# ---------------------------------------------------------------------------
# Pseudocode: each string is one displayed line; index = pseudocode_line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def linear_search(array, target):",     # 0
    "    for i in 0 .. n-1:",                # 1
    "        if array[i] == target:",        # 2
    "            return i",                  # 3
    "    return -1",                         # 4
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def linear_search(params: Dict[str, Any]) -> Iterator[Frame]:
    """
    Args:
        params : {"array": [...], "target": number, "speed": ms (optional)}

    Yields:
        Frame – one per index checked, then the terminal frame.
    """
    arr    = list(params["array"])
    target = params["target"]
    fb     = FrameBuilder(arr, params.get("speed"))

    for i in range(len(arr)):
        commands = [highlight_index(i)]
        fb.compared()

        if arr[i] == target:
            commands.append(mark_found(i))
            yield fb.build(
                commands,
                f"Found target {target} at index {i}",
                color=COLOR_SUCCESS,
                line=3,
            )
            yield fb.finish(i, f"Element found at index {i}", commands, line=3)
            return

        yield fb.build(commands, f"Checking index {i}: {arr[i]} != {target}", line=2)

    yield fb.finish(-1, "Element not found", line=4)
