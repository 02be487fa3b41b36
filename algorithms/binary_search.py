"""
binary_search.py — Binary Search
=================================
Generator-based binary search over a SORTED array.

Yields a Frame per midpoint: the midpoint is highlighted and everything
outside [left, right] is dimmed, with the comparison direction narrated.

Precondition: the input is sorted ascending.  This is not checked; an
unsorted input gives an arbitrary (but non-crashing) answer.
"""

from typing import Any, Dict, Iterator, List

from algorithms.commands import COLOR_SUCCESS, disable_range, highlight_index, mark_found
from algorithms.frame import Frame, FrameBuilder


PSEUDOCODE: List[str] = [
    "def binary_search(array, target):",         # 0
    "    left, right ← 0, n-1",                   # 1
    "    while left <= right:",                   # 2
    "        middle ← (left + right) // 2",       # 3
    "        if array[middle] == target:",        # 4
    "            return middle",                  # 5
    "        if array[middle] > target:",         # 6
    "            right ← middle - 1",             # 7
    "        else: left ← middle + 1",            # 8
    "    return -1",                              # 9
]


def binary_search(params: Dict[str, Any]) -> Iterator[Frame]:
    arr    = list(params["array"])
    target = params["target"]
    fb     = FrameBuilder(arr, params.get("speed"))

    left, right = 0, len(arr) - 1
    while left <= right:
        middle = (left + right) // 2
        commands = [
            highlight_index(middle),
            disable_range(0, left - 1),
            disable_range(right + 1, len(arr) - 1),
        ]
        fb.compared()

        if arr[middle] == target:
            commands.append(mark_found(middle))
            yield fb.build(
                commands,
                f"Found target {target} at index {middle}",
                color=COLOR_SUCCESS,
                line=5,
            )
            yield fb.finish(middle, f"Element found at index {middle}", commands, line=5)
            return

        if arr[middle] > target:
            yield fb.build(
                commands,
                f"Checking middle ({middle}): {arr[middle]} > {target}, search the left half",
                line=7,
            )
            right = middle - 1
        else:
            yield fb.build(
                commands,
                f"Checking middle ({middle}): {arr[middle]} < {target}, search the right half",
                line=8,
            )
            left = middle + 1

    yield fb.finish(-1, "Element not found", line=9)
