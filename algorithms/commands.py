"""
commands.py — Visualization Commands
=====================================
A VisualCommand says "paint these array cells like this".  Runners put
an ordered list of them on every Frame; the renderer merges them over a
fixed default style, cell by cell.

    frame.commands = (highlight_index(3), disable_range(0, 1))

Merge order:
  - Every cell starts from DEFAULT_STYLE.
  - Commands are applied in list order; a later command overwrites the
    fields it sets for the cells it names.  Fields it does not set are
    left alone.
  - Indices outside the array are ignored.

The constructors below are pure: same arguments, equal command.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Sequence


# ---------------------------------------------------------------------------
# Style fields
# ---------------------------------------------------------------------------
STYLE_FIELDS = ("background", "border", "color", "font_weight", "opacity")

DEFAULT_STYLE: Dict[str, Any] = {
    "background":  "#222",
    "border":      "#444",
    "color":       "#fff",
    "font_weight": "normal",
    "opacity":     1,
}

# narration colors shared by the runners
COLOR_SUCCESS = "#90ee90"
COLOR_FAILURE = "#ff6f6f"
COLOR_SWAP    = "#ff8c42"
COLOR_PIVOT   = "#9c27b0"
COLOR_SPLIT   = "#e91e63"
COLOR_LESS    = "#4caf50"
COLOR_GREATER = "#f44336"

HIGHLIGHT = "#ffb347"


# ---------------------------------------------------------------------------
# VisualCommand
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class VisualCommand:
    """
    Attributes:
        indices : Array positions this command styles.
        style   : read-only {field: value}; keys must come from STYLE_FIELDS.
    """

    indices: FrozenSet[int]         = frozenset()
    style:   Mapping[str, Any]      = field(default_factory=dict)

    def __post_init__(self):
        unknown = set(self.style) - set(STYLE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown style field(s): {', '.join(sorted(unknown))}")
        object.__setattr__(self, "indices", frozenset(self.indices))
        object.__setattr__(self, "style", MappingProxyType(dict(self.style)))

    def __hash__(self) -> int:
        return hash((self.indices, tuple(sorted(self.style.items()))))


def _command(indices: Iterable[int], **style: Any) -> VisualCommand:
    return VisualCommand(indices=frozenset(i for i in indices if i >= 0), style=style)


def _span(start: int, end: int) -> range:
    # inverted ranges come out empty
    return range(max(start, 0), end + 1)


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------
def highlight_index(index: int, color: str = HIGHLIGHT) -> VisualCommand:
    return _command([index], border=color, font_weight="bold")


def highlight_multiple(indices: Sequence[int], color: str = HIGHLIGHT) -> VisualCommand:
    return _command(indices, border=color, font_weight="bold")


def mark_found(index: int) -> VisualCommand:
    return _command([index], background="#2e7d32", border="#4caf50", font_weight="bold")


def mark_swapped(indices: Sequence[int]) -> VisualCommand:
    """Pair that is about to trade places."""
    return _command(indices, background="#ff6b35", border="#ff8c42", font_weight="bold")


def mark_swapped_success(indices: Sequence[int]) -> VisualCommand:
    return _command(indices, background="#44a344", border="#4caf50", font_weight="bold")


def mark_comparing(indices: Sequence[int]) -> VisualCommand:
    return _command(indices, background="#444d", border=HIGHLIGHT, font_weight="bold")


def disable_range(start: int, end: int) -> VisualCommand:
    """Dim start..end inclusive.  start > end gives an empty command."""
    return _command(_span(start, end), background="#181818", opacity=0.5)


def mark_minimum(index: int) -> VisualCommand:
    return _command([index], border="#5454ff", font_weight="bold")


def mark_pivot(index: int) -> VisualCommand:
    return _command([index], background="#9c27b0", border="#e91e63", font_weight="bold", color="#fff")


def mark_partition_boundary(index: int) -> VisualCommand:
    return _command([index], background="#ff9800", border="#f57c00", font_weight="bold")


def mark_less_than_pivot(indices: Sequence[int]) -> VisualCommand:
    return _command(indices, background="#4caf50", border="#388e3c", font_weight="bold")


def mark_greater_than_pivot(indices: Sequence[int]) -> VisualCommand:
    return _command(indices, background="#f44336", border="#d32f2f", font_weight="bold")


def mark_current_subarray(start: int, end: int) -> VisualCommand:
    return _command(_span(start, end), border="#2196f3", background="#1976d2", opacity=0.8)


# ---------------------------------------------------------------------------
# Merge
# ---------------------------------------------------------------------------
def merge_styles(
    commands: Sequence[VisualCommand],
    length: int,
    default: Mapping[str, Any] = DEFAULT_STYLE,
) -> List[Dict[str, Any]]:
    """
    Resolve the final style of every cell.

    Returns one dict per index 0..length-1, each holding every field of
    STYLE_FIELDS.  Later commands win per field, per index.
    """
    styles = [dict(default) for _ in range(length)]
    for command in commands:
        for idx in command.indices:
            if 0 <= idx < length:
                styles[idx].update(command.style)
    return styles
