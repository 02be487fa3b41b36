"""Tests for the algorithm registry."""

import pytest

from algorithms.params import default_params
from algorithms.registry import (
    REGISTRY,
    UnknownAlgorithmError,
    algorithms_by_topic,
    get_algorithm,
    list_algorithms,
    require_algorithm,
)


def test_registry_order():
    assert [info.key for info in list_algorithms()] == [
        "linear-search",
        "binary-search",
        "bubble-sort",
        "selection-sort",
        "insertion-sort",
        "quick-sort",
    ]


def test_lookup():
    assert get_algorithm("bubble-sort").label == "Bubble Sort"
    assert get_algorithm("nope") is None


def test_require_unknown():
    with pytest.raises(UnknownAlgorithmError) as info:
        require_algorithm("nope")
    assert info.value.key == "nope"
    assert isinstance(info.value, ValueError)


def test_topics():
    groups = algorithms_by_topic()
    assert list(groups) == ["Searching", "Sorting"]
    assert len(groups["Searching"]) == 2
    assert len(groups["Sorting"]) == 4


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        REGISTRY["x"] = REGISTRY["bubble-sort"]


@pytest.mark.parametrize("key", list(REGISTRY))
def test_defaults_run_to_a_final_frame(key):
    info = REGISTRY[key]
    frames = list(info.fn(default_params(info.params)))

    assert frames[-1].is_final
    for frame in frames:
        assert -1 <= frame.pseudocode_line < len(info.pseudocode)


@pytest.mark.parametrize("key", list(REGISTRY))
def test_every_algorithm_has_a_speed_field(key):
    assert "speed" in [spec.id for spec in REGISTRY[key].params]


def test_default_search_results():
    linear = REGISTRY["linear-search"]
    binary = REGISTRY["binary-search"]
    assert list(linear.fn(default_params(linear.params)))[-1].result == 2
    assert list(binary.fn(default_params(binary.params)))[-1].result == 4
