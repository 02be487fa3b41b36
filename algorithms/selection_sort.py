"""
selection_sort.py — Selection Sort
===================================
Generator-based selection sort.

For each position i the unsorted suffix is scanned for its minimum; one
Frame per candidate shows the running minimum against the candidate.
The minimum is swapped into place only when it is not already at i.
The sorted prefix is dimmed throughout.
"""

from typing import Any, Dict, Iterator, List

from algorithms.commands import (
    COLOR_SUCCESS,
    COLOR_SWAP,
    disable_range,
    highlight_index,
    mark_minimum,
    mark_swapped,
    mark_swapped_success,
)
from algorithms.frame import Frame, FrameBuilder


PSEUDOCODE: List[str] = [
    "def selection_sort(array):",                   # 0
    "    for i in 0 .. n-2:",                       # 1
    "        min_index ← i",                        # 2
    "        for j in i+1 .. n-1:",                 # 3
    "            if array[j] < array[min_index]:",  # 4
    "                min_index ← j",                # 5
    "        if min_index != i:",                   # 6
    "            swap(array[i], array[min_index])", # 7
    "    return array",                             # 8
]


def selection_sort(params: Dict[str, Any]) -> Iterator[Frame]:
    arr = list(params["array"])
    n   = len(arr)
    fb  = FrameBuilder(arr, params.get("speed"))

    for i in range(n - 1):
        min_index = i
        prefix    = disable_range(0, i - 1)

        yield fb.build(
            [mark_minimum(min_index), prefix],
            f"Finding minimum in unsorted portion (starting from index {i})",
            line=2,
        )

        for j in range(i + 1, n):
            commands = [mark_minimum(min_index), highlight_index(j), prefix]
            fb.compared()
            if arr[j] < arr[min_index]:
                min_index = j
            yield fb.build(
                commands,
                f"Current minimum: {arr[min_index]} at index {min_index}",
                line=4,
            )

        if min_index != i:
            yield fb.build(
                [mark_swapped([i, min_index]), prefix],
                f"Swapping minimum {arr[min_index]} with {arr[i]}",
                color=COLOR_SWAP,
                line=7,
            )
            fb.swap(i, min_index)
            yield fb.build(
                [mark_swapped_success([i, min_index]), prefix],
                f"Swapped! {arr[i]} is now in position {i}",
                color=COLOR_SUCCESS,
                line=7,
            )

    yield fb.finish(list(arr), "Array is sorted", line=8)
