"""
bubble_sort.py — Bubble Sort
=============================
Generator-based bubble sort with the early-exit optimisation.

Yields a Frame at:
  1. Each adjacent comparison        →  pair highlighted
  2. An inversion, before the swap   →  pair marked SWAPPING
  3. After the swap                  →  pair marked SWAPPED
  4. Final frame                     →  result = sorted array

The suffix already bubbled into place is dimmed on every frame of a pass.
A pass with no swaps ends the sort.
"""

from typing import Any, Dict, Iterator, List

from algorithms.commands import (
    COLOR_SUCCESS,
    COLOR_SWAP,
    disable_range,
    highlight_multiple,
    mark_swapped,
    mark_swapped_success,
)
from algorithms.frame import Frame, FrameBuilder


PSEUDOCODE: List[str] = [
    "def bubble_sort(array):",                          # 0
    "    for i in 0 .. n-2:",                           # 1
    "        swapped ← False",                          # 2
    "        for j in 0 .. n-2-i:",                     # 3
    "            if array[j] > array[j+1]:",            # 4
    "                swap(array[j], array[j+1])",       # 5
    "                swapped ← True",                   # 6
    "        if not swapped: break",                    # 7
    "    return array",                                 # 8
]


def bubble_sort(params: Dict[str, Any]) -> Iterator[Frame]:
    arr = list(params["array"])
    n   = len(arr)
    fb  = FrameBuilder(arr, params.get("speed"))

    for i in range(n - 1):
        swapped = False
        done    = disable_range(n - i, n - 1)

        for j in range(n - i - 1):
            fb.compared()
            yield fb.build(
                [highlight_multiple([j, j + 1]), done],
                f"Comparing {arr[j]} and {arr[j + 1]}",
                line=4,
            )

            if arr[j] > arr[j + 1]:
                yield fb.build(
                    [mark_swapped([j, j + 1]), done],
                    f"Swapping {arr[j]} and {arr[j + 1]}",
                    color=COLOR_SWAP,
                    line=5,
                )
                fb.swap(j, j + 1)
                swapped = True
                yield fb.build(
                    [mark_swapped_success([j, j + 1]), done],
                    f"Swapped! New order: {arr[j]}, {arr[j + 1]}",
                    color=COLOR_SUCCESS,
                    line=6,
                )

        if not swapped:
            break

    yield fb.finish(list(arr), "Array is sorted", line=8)
