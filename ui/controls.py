"""
controls.py — UI Control Panels
================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • algorithm_menu      – algorithms grouped by topic
  • parameter_form      – one input per ParamSpec of the selected algorithm
  • playback_controls   – start/pause/resume/step/stop + driver state
  • pseudocode_viewer   – with live line highlighting
  • explanation_panel   – the current frame's narration
  • result_panel        – return value once a run finishes
  • analytics_panel     – frames, comparisons, swaps, …

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together.
"""

from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from algorithms.registry import AlgoInfo
    from engine.recorder import RunMetrics


# ParamSpec.kind → <input type>
INPUT_TYPES = {
    "array":  "text",
    "number": "number",
    "range":  "range",
}


# ---------------------------------------------------------------------------
# Algorithm Menu
# ---------------------------------------------------------------------------
def algorithm_menu(groups: Dict[str, List["AlgoInfo"]], selected_key: str = "") -> str:
    sections = []
    for topic, infos in groups.items():
        items = []
        for info in infos:
            active = "active" if info.key == selected_key else ""
            items.append(
                f'<li class="algo-item {active}" data-key="{info.key}" '
                f'title="{info.complexity_time}">{info.label}</li>'
            )
        sections.append(
            f'<li class="topic-header">{topic}</li>'
            f'<ul class="topic-group">{"".join(items)}</ul>'
        )

    return f"""
    <div class="panel algorithm-menu">
      <h3>🧠 Algorithms</h3>
      <ul id="algorithm-list">
        {''.join(sections)}
      </ul>
    </div>
    """


# ---------------------------------------------------------------------------
# Parameter Form
# ---------------------------------------------------------------------------
def parameter_form(info: Optional["AlgoInfo"], values: Optional[Dict[str, Any]] = None) -> str:
    if info is None:
        return """
        <div class="panel parameters-panel">
          <p class="placeholder">Select an algorithm from the menu.</p>
        </div>
        """

    values = values or {}
    fields = []
    for spec in info.params:
        value = values.get(spec.id, spec.default)
        bounds = "".join(
            f' {name}="{limit}"'
            for name, limit in (("min", spec.min), ("max", spec.max), ("step", spec.step))
            if limit is not None
        )
        fields.append(
            f'<label>{spec.label}:<br>'
            f'<input id="param-{spec.id}" data-param="{spec.id}" '
            f'type="{INPUT_TYPES[spec.kind]}" value="{value}"{bounds}></label><br>'
        )

    return f"""
    <div class="panel parameters-panel">
      <h3>{info.label}</h3>
      <div id="algorithm-description">{info.description}</div>
      <form id="algo-form" data-key="{info.key}">
        {''.join(fields)}
      </form>
    </div>
    """


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(state: str = "idle", step_number: int = 0) -> str:
    running = state == "running"
    paused  = state == "paused"

    def disabled(flag: bool) -> str:
        return "" if flag else "disabled"

    return f"""
    <div class="panel playback-controls">
      <h3>⏯ Playback</h3>
      <div class="button-row">
        <button id="btn-start" title="Start from the beginning">▶ Start</button>
        <button id="btn-pause" title="Pause" {disabled(running)}>⏸ Pause</button>
        <button id="btn-resume" title="Resume" {disabled(paused)}>⏵ Resume</button>
        <button id="btn-step" title="One step" {disabled(paused)}>⏭ Step</button>
        <button id="btn-stop" title="Stop" {disabled(running or paused)}>⏹ Stop</button>
      </div>
      <div class="step-info">
        State <span id="driver-state">{state}</span> · Frame <span id="current-step">{step_number}</span>
        {' <span class="finished-badge">FINISHED</span>' if state == 'finished' else ''}
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Pseudocode Viewer
# ---------------------------------------------------------------------------
def pseudocode_viewer(
    pseudocode_lines: List[str],
    current_line: int = -1,
    algo_label: str = "",
) -> str:
    if not pseudocode_lines:
        return """
        <div class="code-block">
          <div style="color: #7d8590; padding: 20px; text-align: center;">
            Select an algorithm to view pseudocode
          </div>
        </div>
        """

    lines_html = []
    for i, line in enumerate(pseudocode_lines):
        highlight = 'highlight' if i == current_line else ''
        line_escaped = line.replace('&', '&amp;').replace('<', '&lt;').replace('>', '&gt;')
        lines_html.append(f'<div class="code-line {highlight}" data-line="{i}">{line_escaped}</div>')

    return f"""
    <div class="code-block" title="{algo_label}">
      {''.join(lines_html)}
    </div>
    """


# ---------------------------------------------------------------------------
# Explanation Panel
# ---------------------------------------------------------------------------
def explanation_panel(message: str = "", color: Optional[str] = None) -> str:
    if not message:
        message = "▶ Press <strong>Start</strong> to watch the algorithm step by step."
        return f"""<div class="explanation-text">{message}</div>"""

    style = f' style="color: {color};"' if color else ""
    message = message.replace('&', '&amp;').replace('<', '&lt;').replace('>', '&gt;')
    return f"""<div class="explanation-text"{style}>{message}</div>"""


# ---------------------------------------------------------------------------
# Result Panel
# ---------------------------------------------------------------------------
def result_panel(result: Any = None, completion_message: str = "") -> str:
    if result is None:
        return '<div id="return-value"></div>'

    if isinstance(result, (list, tuple)):
        shown = "[" + ", ".join(str(v) for v in result) + "]"
    else:
        shown = str(result)
    return f"""
    <div id="return-value">
      <div>Return value: <strong>{shown}</strong></div>
      <div class="completion">{completion_message}</div>
    </div>
    """


# ---------------------------------------------------------------------------
# Analytics Panel
# ---------------------------------------------------------------------------
def analytics_panel(metrics: Optional["RunMetrics"] = None) -> str:
    if not metrics:
        return """
        <div class="panel analytics-panel">
          <h3>📊 Analytics</h3>
          <p class="placeholder">Run an algorithm to see metrics.</p>
        </div>
        """

    return f"""
    <div class="panel analytics-panel">
      <h3>📊 Analytics — {metrics.algo_label}</h3>
      <table>
        <tr><td>Frames:</td><td><strong>{metrics.total_frames}</strong></td></tr>
        <tr><td>Comparisons:</td><td><strong>{metrics.comparisons}</strong></td></tr>
        <tr><td>Swaps:</td><td><strong>{metrics.swaps}</strong></td></tr>
        <tr><td>Outcome:</td><td><strong>{metrics.completion_message}</strong></td></tr>
      </table>
    </div>
    """
