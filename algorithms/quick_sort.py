"""
quick_sort.py — Quick Sort (Lomuto partition)
==============================================
Generator-based quick sort, last element as pivot.

The recursion is written with `yield from`, so every nested call streams
its Frames straight through the top-level generator.  partition() is a
generator too; its return value (the pivot's final index) comes back
through `yield from`.

Yields a Frame at:
  1. Each subarray about to be sorted
  2. Partition start (pivot marked)
  3. Each element compared with the pivot
  4. Each swap into the "smaller" section (before + after)
  5. Pivot placement (before + after, the summary held 1.5× longer)
  6. Each recursive call into the left / right part
  7. Final frame → result = sorted array

Left part is sorted completely before the right part; a part is only
recursed into when it holds more than one element.
"""

from typing import Any, Dict, Generator, Iterator, List

from algorithms.commands import (
    COLOR_GREATER,
    COLOR_LESS,
    COLOR_PIVOT,
    COLOR_SPLIT,
    COLOR_SWAP,
    disable_range,
    highlight_index,
    mark_current_subarray,
    mark_greater_than_pivot,
    mark_less_than_pivot,
    mark_partition_boundary,
    mark_pivot,
    mark_swapped,
    mark_swapped_success,
)
from algorithms.frame import Frame, FrameBuilder


PSEUDOCODE: List[str] = [
    "def quick_sort(array, low, high):",                # 0
    "    if low < high:",                               # 1
    "        p ← partition(array, low, high)",          # 2
    "        quick_sort(array, low, p - 1)",            # 3
    "        quick_sort(array, p + 1, high)",           # 4
    "def partition(array, low, high):",                 # 5
    "    pivot ← array[high]; i ← low - 1",             # 6
    "    for j in low .. high-1:",                      # 7
    "        if array[j] < pivot:",                     # 8
    "            i ← i + 1; swap(array[i], array[j])",  # 9
    "    swap(array[i+1], array[high])",                # 10
    "    return i + 1",                                 # 11
]

SUMMARY_SPEED_FACTOR = 1.5


def quick_sort(params: Dict[str, Any]) -> Iterator[Frame]:
    arr = list(params["array"])
    fb  = FrameBuilder(arr, params.get("speed"))

    if arr:
        yield fb.build(
            [mark_current_subarray(0, len(arr) - 1)],
            "Starting Quick Sort on entire array",
            line=0,
        )
        yield from _sort(fb, 0, len(arr) - 1, 0)

    yield fb.finish(list(arr), "Array is sorted", line=0)


def _sort(fb: FrameBuilder, low: int, high: int, depth: int) -> Generator[Frame, None, None]:
    if low >= high:
        return

    arr  = fb.array
    last = len(arr) - 1

    yield fb.build(
        [mark_current_subarray(low, high), disable_range(0, low - 1), disable_range(high + 1, last)],
        f"Sorting subarray from index {low} to {high} (depth {depth})",
        line=1,
    )

    p = yield from partition(fb, low, high)

    if low < p - 1:
        yield fb.build(
            [
                mark_current_subarray(low, p - 1),
                mark_pivot(p),
                disable_range(0, low - 1),
                disable_range(p + 1, last),
            ],
            f"Recursively sorting left partition [{low}...{p - 1}]",
            color=COLOR_LESS,
            line=3,
        )
        yield from _sort(fb, low, p - 1, depth + 1)

    if p + 1 < high:
        yield fb.build(
            [
                mark_current_subarray(p + 1, high),
                mark_pivot(p),
                disable_range(0, p - 1),
                disable_range(high + 1, last),
            ],
            f"Recursively sorting right partition [{p + 1}...{high}]",
            color=COLOR_GREATER,
            line=4,
        )
        yield from _sort(fb, p + 1, high, depth + 1)


def partition(fb: FrameBuilder, low: int, high: int) -> Generator[Frame, None, int]:
    """
    Lomuto partition of fb.array[low..high] around fb.array[high].

    Yields Frames; returns the pivot's final index.  Afterwards every
    element in low..p-1 is < pivot and every element in p+1..high is >= pivot.
    """
    arr   = fb.array
    last  = len(arr) - 1
    pivot = arr[high]
    i     = low - 1
    outside = [disable_range(0, low - 1), disable_range(high + 1, last)]

    yield fb.build(
        [mark_pivot(high), mark_current_subarray(low, high - 1), *outside],
        f"Partitioning with pivot {pivot} at index {high}",
        color=COLOR_PIVOT,
        line=6,
    )

    for j in range(low, high):
        yield fb.build(
            [mark_pivot(high), highlight_index(j), mark_partition_boundary(i + 1), *outside],
            f"Comparing {arr[j]} with pivot {pivot}",
            line=8,
        )
        fb.compared()

        if arr[j] < pivot:
            i += 1
            if i != j:
                yield fb.build(
                    [mark_pivot(high), mark_swapped([i, j]), *outside],
                    f"{arr[j]} < {pivot}, swapping with position {i}",
                    color=COLOR_SWAP,
                    line=9,
                )
                fb.swap(i, j)
                yield fb.build(
                    [mark_pivot(high), mark_swapped_success([i, j]), *outside],
                    f"Swapped! {arr[i]} moved to smaller elements section",
                    color=COLOR_LESS,
                    line=9,
                )
            else:
                yield fb.build(
                    [mark_pivot(high), mark_swapped_success([i]), *outside],
                    f"{arr[j]} < {pivot}, already in correct position",
                    color=COLOR_LESS,
                    line=9,
                )
        else:
            yield fb.build(
                [
                    mark_pivot(high),
                    highlight_index(j, COLOR_GREATER),
                    mark_partition_boundary(i + 1),
                    *outside,
                ],
                f"{arr[j]} >= {pivot}, stays in greater elements section",
                color=COLOR_GREATER,
                line=8,
            )

    p = i + 1
    yield fb.build(
        [mark_swapped([p, high]), *outside],
        f"Moving pivot {pivot} to its final position {p}",
        color=COLOR_SWAP,
        line=10,
    )
    if p != high:
        fb.swap(p, high)

    yield fb.build(
        [
            mark_pivot(p),
            mark_less_than_pivot(range(low, p)),
            mark_greater_than_pivot(range(p + 1, high + 1)),
            *outside,
        ],
        f"Partition complete! Pivot {arr[p]} is in final position {p}",
        color=COLOR_SPLIT,
        line=11,
        speed_factor=SUMMARY_SPEED_FACTOR,
    )
    return p
