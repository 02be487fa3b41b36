"""
array_view.py — HTML Array Renderer
====================================
Pure rendering function: Frame → HTML string.

The renderer consumes:
  • frame    – the Frame snapshot (array, visual commands, narration)
  • is_final – whether this is the run's terminal frame
  • config   – visual config (cell size, fallback colors)

And produces an HTML fragment ready to inject into the DOM: one cell per
array element, the narration line, and on the terminal frame the
completion line.

Design decisions:
  - NO mutation.  The caller passes in everything and gets back a string.
  - Cell styling is resolved by merge_styles(): default style, then each
    command in order.
  - Every Frame field it reads may be empty: no array, no commands, no
    message, no result.
"""

from typing import Any, Dict, Optional

from algorithms.commands import COLOR_FAILURE, COLOR_SUCCESS, merge_styles
from algorithms.frame import Frame


# ---------------------------------------------------------------------------
# Visual Config
# ---------------------------------------------------------------------------
class ArrayViewConfig:
    cell_size:     int = 40
    cell_margin:   int = 2
    border_width:  int = 2
    message_color: str = "#fff"
    success_color: str = COLOR_SUCCESS
    failure_color: str = COLOR_FAILURE


CONFIG = ArrayViewConfig()


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_array(
    frame: Optional[Frame],
    is_final: bool = False,
    config: ArrayViewConfig = CONFIG,
) -> str:
    """
    Returns an HTML string.

    Args:
        frame    : Frame to draw (None draws an empty view).
        is_final : Show the completion line when the frame carries a result.
        config   : Visual config.
    """
    if frame is None:
        return '<div class="array-view"></div>'

    styles = merge_styles(frame.commands, len(frame.array))
    cells = [
        _render_cell(value, style, config)
        for value, style in zip(frame.array, styles)
    ]

    parts = [
        '<div class="array-view">',
        f'  <div class="cells">{"".join(cells)}</div>',
    ]

    if frame.message:
        color = frame.message_color or config.message_color
        parts.append(f'  <div class="message" style="margin-top:10px;color:{color};">{_escape(frame.message)}</div>')

    if is_final and frame.result is not None:
        succeeded = frame.result != -1
        color = config.success_color if succeeded else config.failure_color
        text = frame.completion_message or (f"Result: {frame.result}" if succeeded else "Operation completed")
        parts.append(f'  <div class="completion" style="margin-top:10px;color:{color};">{_escape(text)}</div>')

    parts.append("</div>")
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Cell Rendering
# ---------------------------------------------------------------------------
def _render_cell(value: Any, style: Dict[str, Any], config: ArrayViewConfig) -> str:
    size = config.cell_size
    return (
        f'<span class="cell" style="display:inline-block;'
        f'width:{size}px;height:{size}px;line-height:{size}px;'
        f'text-align:center;margin:{config.cell_margin}px;'
        f'border:{config.border_width}px solid {style["border"]};'
        f'background:{style["background"]};'
        f'color:{style["color"]};'
        f'font-weight:{style["font_weight"]};'
        f'opacity:{style["opacity"]};">{_escape(str(value))}</span>'
    )


def _escape(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
