"""
registry.py — Algorithm Registry
=================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms.registry import REGISTRY, get_algorithm

REGISTRY is a read-only mapping:
    {
        "bubble-sort": AlgoInfo(key, label, topic, fn, params, visualize, …),
        …
    }

AlgoInfo is a lightweight dataclass.  The engine and UI both consume it,
so adding an algorithm is: write the generator, add one entry here.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, Iterator, List, Mapping, Optional, Tuple

from algorithms.frame import Frame
from algorithms.params import ParamSpec

from algorithms.linear_search  import linear_search  as _linear,    PSEUDOCODE as _linear_pc
from algorithms.binary_search  import binary_search  as _binary,    PSEUDOCODE as _binary_pc
from algorithms.bubble_sort    import bubble_sort    as _bubble,    PSEUDOCODE as _bubble_pc
from algorithms.selection_sort import selection_sort as _selection, PSEUDOCODE as _selection_pc
from algorithms.insertion_sort import insertion_sort as _insertion, PSEUDOCODE as _insertion_pc
from algorithms.quick_sort     import quick_sort     as _quick,     PSEUDOCODE as _quick_pc

from ui.array_view import render_array


Runner   = Callable[[Dict], Iterator[Frame]]
Renderer = Callable[[Optional[Frame], bool], str]


class UnknownAlgorithmError(ValueError):
    """Raised when a key is not in the registry."""

    def __init__(self, key: str):
        super().__init__(f"Unknown algorithm: {key}")
        self.key = key


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AlgoInfo:
    key:              str                       # registry key, e.g. "bubble-sort"
    label:            str                       # human label, e.g. "Bubble Sort"
    topic:            str                       # menu group, e.g. "Sorting"
    fn:               Runner                    # the frame generator
    params:           Tuple[ParamSpec, ...]     # ordered input schema
    visualize:        Renderer = render_array   # frame renderer for fn's frames
    pseudocode:       List[str] = field(default_factory=list)
    complexity_time:  str = ""
    complexity_space: str = ""
    description:      str = ""


# ---------------------------------------------------------------------------
# Shared parameter fields
# ---------------------------------------------------------------------------
SPEED = ParamSpec("Speed (ms)", "speed", "range", 500, min=100, max=2000, step=100)

SORT_PARAMS = (
    ParamSpec("Array (comma separated)", "array", "array", "4,-2,-8,0,5,2,1,1,0"),
    SPEED,
)


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Mapping[str, AlgoInfo] = MappingProxyType({

    "linear-search": AlgoInfo(
        key="linear-search", label="Linear Search", topic="Searching",
        fn=_linear, pseudocode=_linear_pc,
        params=(
            ParamSpec("Array (comma separated)", "array", "array", "2,6,-2,4,3,2"),
            ParamSpec("Target", "target", "number", -2),
            SPEED,
        ),
        complexity_time="O(n)", complexity_space="O(1)",
        description="Linear search scans each element in the array sequentially to find "
                    "the target value. Returns the index if found, otherwise -1.",
    ),

    "binary-search": AlgoInfo(
        key="binary-search", label="Binary Search", topic="Searching",
        fn=_binary, pseudocode=_binary_pc,
        params=(
            ParamSpec("Sorted Array (comma separated)", "array", "array",
                      "1,2,3,4,5,6,7,8,9,10,11,12,13,14,15,16"),
            ParamSpec("Target", "target", "number", 5),
            SPEED,
        ),
        complexity_time="O(log n)", complexity_space="O(1)",
        description="Binary search finds the position of a target value within a sorted "
                    "array. It compares the target to the middle element and narrows down "
                    "the search range accordingly.",
    ),

    "bubble-sort": AlgoInfo(
        key="bubble-sort", label="Bubble Sort", topic="Sorting",
        fn=_bubble, pseudocode=_bubble_pc, params=SORT_PARAMS,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Repeatedly swaps adjacent elements that are in the wrong order. "
                    "Stops early once a full pass makes no swaps.",
    ),

    "selection-sort": AlgoInfo(
        key="selection-sort", label="Selection Sort", topic="Sorting",
        fn=_selection, pseudocode=_selection_pc, params=SORT_PARAMS,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="In-place comparison sort: finds the minimum of the unsorted part "
                    "and moves it to the front. Simple, and light on auxiliary memory.",
    ),

    "insertion-sort": AlgoInfo(
        key="insertion-sort", label="Insertion Sort", topic="Sorting",
        fn=_insertion, pseudocode=_insertion_pc, params=SORT_PARAMS,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Grows a sorted prefix one element at a time, sliding each new "
                    "element left until its neighbour is no larger.",
    ),

    "quick-sort": AlgoInfo(
        key="quick-sort", label="Quick Sort", topic="Sorting",
        fn=_quick, pseudocode=_quick_pc, params=SORT_PARAMS,
        complexity_time="O(n log n) avg, O(n²) worst", complexity_space="O(log n)",
        description="Divide and conquer: partitions around the last element (Lomuto "
                    "scheme), then sorts the smaller and larger parts recursively.",
    ),
})


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str, registry: Mapping[str, AlgoInfo] = REGISTRY) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return registry.get(key)


def require_algorithm(key: str, registry: Mapping[str, AlgoInfo] = REGISTRY) -> AlgoInfo:
    """Return AlgoInfo by key, raising UnknownAlgorithmError if absent."""
    info = registry.get(key)
    if info is None:
        raise UnknownAlgorithmError(key)
    return info


def list_algorithms(registry: Mapping[str, AlgoInfo] = REGISTRY) -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(registry.values())


def algorithms_by_topic(registry: Mapping[str, AlgoInfo] = REGISTRY) -> Dict[str, List[AlgoInfo]]:
    """Group by topic; topics and members keep declaration order."""
    groups: Dict[str, List[AlgoInfo]] = {}
    for info in registry.values():
        groups.setdefault(info.topic, []).append(info)
    return groups


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "UnknownAlgorithmError",
    "get_algorithm",
    "require_algorithm",
    "list_algorithms",
    "algorithms_by_topic",
]
