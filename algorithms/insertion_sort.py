"""
insertion_sort.py — Insertion Sort
===================================
Generator-based insertion sort, drawn as a chain of adjacent swaps.

For each i the key array[i] walks left while its left neighbour is
strictly greater; each step is an "about to swap" Frame followed by a
"swapped" Frame.  The not-yet-processed suffix is dimmed.
"""

from typing import Any, Dict, Iterator, List

from algorithms.commands import (
    COLOR_SUCCESS,
    COLOR_SWAP,
    disable_range,
    highlight_index,
    mark_swapped,
    mark_swapped_success,
)
from algorithms.frame import Frame, FrameBuilder


PSEUDOCODE: List[str] = [
    "def insertion_sort(array):",                       # 0
    "    for i in 1 .. n-1:",                           # 1
    "        k ← i",                                    # 2
    "        while k > 0 and array[k-1] > array[k]:",   # 3
    "            swap(array[k-1], array[k])",           # 4
    "            k ← k - 1",                            # 5
    "    return array",                                 # 6
]


def insertion_sort(params: Dict[str, Any]) -> Iterator[Frame]:
    arr = list(params["array"])
    n   = len(arr)
    fb  = FrameBuilder(arr, params.get("speed"))

    for i in range(1, n):
        key     = arr[i]
        k       = i
        pending = disable_range(i + 1, n - 1)

        yield fb.build(
            [highlight_index(i), pending],
            f"Inserting {key} into sorted portion",
            line=2,
        )

        while k > 0:
            fb.compared()
            if not arr[k - 1] > arr[k]:
                break

            yield fb.build(
                [mark_swapped([k - 1, k]), pending],
                f"Moving {arr[k]} left (swapping with {arr[k - 1]})",
                color=COLOR_SWAP,
                line=4,
            )
            fb.swap(k - 1, k)
            k -= 1
            yield fb.build(
                [mark_swapped_success([k, k + 1]), pending],
                f"Moved {key} to position {k}",
                color=COLOR_SUCCESS,
                line=5,
            )

    yield fb.finish(list(arr), "Array is sorted", line=6)
