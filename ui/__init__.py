"""
ui/
---
Presentation layer.

    from ui import render_array
    from ui import algorithm_menu, parameter_form, playback_controls, …
"""

from ui.array_view import render_array, ArrayViewConfig

from ui.controls import (
    algorithm_menu,
    parameter_form,
    playback_controls,
    pseudocode_viewer,
    explanation_panel,
    result_panel,
    analytics_panel,
)

__all__ = [
    "render_array",
    "ArrayViewConfig",
    "algorithm_menu",
    "parameter_form",
    "playback_controls",
    "pseudocode_viewer",
    "explanation_panel",
    "result_panel",
    "analytics_panel",
]
