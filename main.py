"""
main.py — Array Algorithm Visualizer Flask App
===============================================
The web server that powers the visualizer.

Routes:
  GET  /                 – main UI
  POST /api/select       – pick an algorithm (stops any run)
  POST /api/start        – parse parameters and start a run
  POST /api/pause        – pause the run
  POST /api/resume       – resume a paused run
  POST /api/step         – advance a paused run by one frame
  POST /api/stop         – abandon the run
  GET  /api/state        – tick the run's timer, return the current view
  POST /api/export       – run to completion, return every frame as JSON

State management:
  Each browser session gets its own StepDriver, kept in process memory
  and keyed by a random id stored in the Flask session cookie.  The
  driver's TickScheduler is ticked whenever the page polls /api/state,
  so frames advance at the pace the frames ask for while the page is open.
  Flask serves requests on several threads, so every call into a driver
  holds that session's lock.
"""

import logging
import secrets
import threading
from collections import OrderedDict
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator

from flask import Flask, jsonify, render_template_string, request, session

from algorithms.params import ParameterError, parse_params
from algorithms.registry import algorithms_by_topic, get_algorithm
from config import load_config
from engine import Recorder, StepDriver, TickScheduler, metrics_from_frame
from logging_setup import init_logging
from ui import (
    algorithm_menu,
    analytics_panel,
    explanation_panel,
    parameter_form,
    playback_controls,
    pseudocode_viewer,
    render_array,
    result_panel,
)

logger = logging.getLogger(__name__)

CONFIG = load_config()
DEFAULT_ALGO = "linear-search"
MAX_SESSIONS = 256

app = Flask(__name__)
app.secret_key = secrets.token_hex(32)

_TABLE_LOCK = threading.Lock()
_DRIVERS: "OrderedDict[str, SessionRun]" = OrderedDict()


@dataclass
class SessionRun:
    """A session's driver and the lock that serialises calls into it."""
    driver: StepDriver
    lock:   threading.Lock = field(default_factory=threading.Lock)


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_session_run() -> SessionRun:
    """This session's driver, created on first use."""
    sid = session.get("sid")
    if sid is None:
        sid = secrets.token_hex(16)
        session["sid"] = sid

    with _TABLE_LOCK:
        entry = _DRIVERS.get(sid)
        if entry is None:
            entry = SessionRun(StepDriver(TickScheduler(), default_speed_ms=CONFIG.default_speed_ms))
            _DRIVERS[sid] = entry
            while len(_DRIVERS) > MAX_SESSIONS:
                old_sid, old = _DRIVERS.popitem(last=False)
                with old.lock:
                    old.driver.stop()
                logger.info("Dropped idle session %s", old_sid[:8])
        else:
            _DRIVERS.move_to_end(sid)
    return entry


@contextmanager
def locked_driver() -> Iterator[StepDriver]:
    """Hold this session's driver lock; Flask serves requests on several threads."""
    entry = get_session_run()
    with entry.lock:
        yield entry.driver


def selected_algo() -> str:
    return session.get("selected_algo", DEFAULT_ALGO)


def error(message: str, status: int, **extra: Any):
    return jsonify({"error": message, **extra}), status


def run_payload(driver: StepDriver) -> Dict[str, Any]:
    """Everything the page needs to redraw after a driver call."""
    frame = driver.current_frame
    algo  = driver.current_algo or get_algorithm(selected_algo())

    metrics = None
    if driver.is_finished and frame is not None and driver.current_algo is not None:
        metrics = metrics_from_frame(driver.current_algo, frame, driver.frames_delivered)

    return {
        "state":              driver.state.value,
        "view":               driver.current_view if driver.current_view is not None else render_array(None),
        "step_number":        frame.step_number if frame else 0,
        "pseudocode":         pseudocode_viewer(
            pseudocode_lines=algo.pseudocode if algo else [],
            current_line=frame.pseudocode_line if frame else -1,
            algo_label=algo.label if algo else "",
        ),
        "explanation":        explanation_panel(frame.message, frame.message_color) if frame else explanation_panel(),
        "result":             driver.result,
        "completion_message": driver.completion_message,
        "result_html":        result_panel(driver.result, driver.completion_message),
        "analytics":          analytics_panel(metrics),
        "playback":           playback_controls(driver.state.value, frame.step_number if frame else 0),
    }


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    key  = selected_algo()
    info = get_algorithm(key)
    with locked_driver() as driver:
        payload = run_payload(driver)

    html = render_template_string(INDEX_TEMPLATE,
        menu=algorithm_menu(algorithms_by_topic(), selected_key=key),
        form=parameter_form(info),
        playback=payload["playback"],
        view=payload["view"],
        pseudocode=payload["pseudocode"],
        explanation=payload["explanation"],
        result=payload["result_html"],
        analytics=payload["analytics"],
        selected_key=key,
        tick_interval_ms=CONFIG.tick_interval_ms,
    )
    return html


# ---------------------------------------------------------------------------
# API: Selection
# ---------------------------------------------------------------------------
@app.route("/api/select", methods=["POST"])
def api_select():
    data = request.get_json(silent=True) or {}
    key  = data.get("algo_key", DEFAULT_ALGO)
    info = get_algorithm(key)
    if info is None:
        return error(f"Unknown algorithm: {key}", 404)

    session["selected_algo"] = key
    with locked_driver() as driver:
        driver.stop()
        payload = run_payload(driver)

    payload.update({
        "algo_key": key,
        "form":     parameter_form(info),
        "menu":     algorithm_menu(algorithms_by_topic(), selected_key=key),
        "pseudocode": pseudocode_viewer(info.pseudocode, -1, info.label),
    })
    return jsonify(payload)


# ---------------------------------------------------------------------------
# API: Run Control
# ---------------------------------------------------------------------------
@app.route("/api/start", methods=["POST"])
def api_start():
    data = request.get_json(silent=True) or {}
    key  = data.get("algo_key") or selected_algo()
    info = get_algorithm(key)
    if info is None:
        return error(f"Unknown algorithm: {key}", 404)

    try:
        params = parse_params(info.params, data.get("params") or {})
    except ParameterError as e:
        return error(str(e), 400, field=e.field)

    session["selected_algo"] = key
    with locked_driver() as driver:
        driver.start(key, params)
        return jsonify(run_payload(driver))


@app.route("/api/pause", methods=["POST"])
def api_pause():
    with locked_driver() as driver:
        driver.pause()
        return jsonify(run_payload(driver))


@app.route("/api/resume", methods=["POST"])
def api_resume():
    with locked_driver() as driver:
        driver.resume()
        return jsonify(run_payload(driver))


@app.route("/api/step", methods=["POST"])
def api_step():
    with locked_driver() as driver:
        driver.step()
        return jsonify(run_payload(driver))


@app.route("/api/stop", methods=["POST"])
def api_stop():
    with locked_driver() as driver:
        driver.stop()
        return jsonify(run_payload(driver))


@app.route("/api/state")
def api_state():
    with locked_driver() as driver:
        driver.scheduler.tick()
        return jsonify(run_payload(driver))


# ---------------------------------------------------------------------------
# API: Export
# ---------------------------------------------------------------------------
@app.route("/api/export", methods=["POST"])
def api_export():
    data = request.get_json(silent=True) or {}
    key  = data.get("algo_key") or selected_algo()
    info = get_algorithm(key)
    if info is None:
        return error(f"Unknown algorithm: {key}", 404)

    try:
        params = parse_params(info.params, data.get("params") or {})
    except ParameterError as e:
        return error(str(e), 400, field=e.field)

    rec = Recorder()
    rec.start(key, params)
    rec.run_to_completion()
    return jsonify(rec.export())


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Array Algorithm Visualizer</title>
  <link rel="preconnect" href="https://fonts.googleapis.com">
  <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
  <link href="https://fonts.googleapis.com/css2?family=JetBrains+Mono:wght@400;500;700&family=DM+Sans:wght@400;500;700&display=swap" rel="stylesheet">
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg-dark: #0d1117;
      --bg-darker: #010409;
      --bg-panel: #161b22;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --accent-cyan: #0ea5e9;
      --accent-teal: #06b6d4;
      --accent-rose: #f43f5e;
      --glow-cyan: rgba(14, 165, 233, 0.4);
    }

    body {
      font-family: 'DM Sans', -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      display: flex;
      height: 100vh;
      overflow: hidden;
    }

    #sidebar {
      width: 340px;
      background: linear-gradient(180deg, var(--bg-dark) 0%, var(--bg-darker) 100%);
      border-right: 1px solid var(--border);
      overflow-y: auto;
      padding: 24px 16px;
    }

    #main {
      flex: 1;
      display: flex;
      flex-direction: column;
      padding: 24px;
      gap: 16px;
      overflow-y: auto;
    }

    #visualization {
      background: var(--bg-dark);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 24px;
      min-height: 160px;
    }

    #bottom-panel { display: flex; gap: 16px; }
    #pseudocode-container, #explanation-container { flex: 1; }

    .panel {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 18px;
      margin-bottom: 16px;
    }

    .panel h3, #bottom-panel h3 {
      font-size: 13px;
      font-weight: 700;
      margin-bottom: 14px;
      text-transform: uppercase;
      letter-spacing: 0.5px;
    }

    #algorithm-list { list-style: none; }
    .topic-header { color: var(--text-secondary); font-size: 12px; margin-top: 10px; text-transform: uppercase; }
    .topic-group { list-style: none; margin-left: 8px; }
    .algo-item { cursor: pointer; padding: 6px 10px; border-radius: 6px; }
    .algo-item:hover, .algo-item.active { background: var(--border); }

    .button-row { display: flex; flex-wrap: wrap; gap: 8px; margin-bottom: 12px; }

    button {
      background: linear-gradient(135deg, var(--accent-cyan), var(--accent-teal));
      color: #fff;
      border: none;
      padding: 8px 12px;
      border-radius: 8px;
      cursor: pointer;
      font-size: 13px;
      font-weight: 600;
    }
    button:disabled { opacity: 0.4; cursor: default; }

    input[type="text"], input[type="number"], input[type="range"] {
      width: 100%;
      padding: 8px 10px;
      margin: 6px 0;
      background: var(--bg-darker);
      border: 1px solid var(--border);
      border-radius: 8px;
      color: var(--text-primary);
    }

    label { display: block; margin: 10px 0 4px; font-size: 12px; color: var(--text-secondary); }

    .step-info {
      font-size: 13px;
      color: var(--text-secondary);
      font-family: 'JetBrains Mono', monospace;
      padding: 8px 12px;
      background: var(--bg-darker);
      border-left: 3px solid var(--accent-cyan);
      border-radius: 6px;
    }

    .code-block {
      background: var(--bg-darker);
      border: 1px solid var(--border);
      border-radius: 8px;
      padding: 16px;
      font-family: 'JetBrains Mono', 'Courier New', monospace;
      font-size: 13px;
      line-height: 1.6;
      white-space: pre;
    }
    .code-line.highlight {
      background: linear-gradient(90deg, rgba(6, 182, 212, 0.15) 0%, transparent 100%);
      border-left: 3px solid var(--accent-cyan);
    }

    .explanation-text { color: var(--text-secondary); line-height: 1.8; font-size: 14px; }
    #error { color: var(--accent-rose); min-height: 1em; }

    table { width: 100%; font-size: 13px; }
    table td:last-child { text-align: right; color: var(--accent-cyan); }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="menu">{{ menu|safe }}</div>
    <div id="form">{{ form|safe }}</div>
    <div id="playback">{{ playback|safe }}</div>
    <div id="analytics">{{ analytics|safe }}</div>
  </div>

  <div id="main">
    <div id="error"></div>
    <div id="visualization">{{ view|safe }}</div>
    <div id="result">{{ result|safe }}</div>

    <div id="bottom-panel">
      <div id="pseudocode-container">
        <h3>Pseudocode</h3>
        <div id="pseudocode">{{ pseudocode|safe }}</div>
      </div>
      <div id="explanation-container">
        <h3>Step Explanation</h3>
        <div id="explanation">{{ explanation|safe }}</div>
      </div>
    </div>
  </div>

  <script>
    const TICK_MS = {{ tick_interval_ms }};
    let selectedKey = "{{ selected_key }}";
    let pollTimer = null;

    // API helpers
    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data || {}),
      });
      return await res.json();
    }

    function setHtml(id, html) {
      if (html !== undefined) document.getElementById(id).innerHTML = html;
    }

    function apply(data) {
      document.getElementById('error').textContent = data.error || '';
      if (data.error) return;
      setHtml('visualization', data.view);
      setHtml('pseudocode', data.pseudocode);
      setHtml('explanation', data.explanation);
      setHtml('result', data.result_html);
      setHtml('analytics', data.analytics);
      setHtml('playback', data.playback);
      if (data.state === 'running') startPolling(); else stopPolling();
    }

    function startPolling() {
      if (pollTimer) return;
      pollTimer = setInterval(async () => {
        const res = await fetch('/api/state');
        apply(await res.json());
      }, TICK_MS);
    }

    function stopPolling() {
      if (pollTimer) clearInterval(pollTimer);
      pollTimer = null;
    }

    function readParams() {
      const params = {};
      document.querySelectorAll('#algo-form [data-param]').forEach((el) => {
        params[el.dataset.param] = el.value;
      });
      return params;
    }

    document.addEventListener('click', async (e) => {
      const item = e.target.closest('.algo-item');
      if (item) {
        const data = await post('/api/select', {algo_key: item.dataset.key});
        if (!data.error) {
          selectedKey = data.algo_key;
          setHtml('menu', data.menu);
          setHtml('form', data.form);
        }
        apply(data);
        return;
      }

      switch (e.target.id) {
        case 'btn-start':
          apply(await post('/api/start', {algo_key: selectedKey, params: readParams()}));
          break;
        case 'btn-pause':
          apply(await post('/api/pause'));
          break;
        case 'btn-resume':
          apply(await post('/api/resume'));
          break;
        case 'btn-step':
          apply(await post('/api/step'));
          break;
        case 'btn-stop':
          apply(await post('/api/stop'));
          break;
      }
    });
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
def run() -> None:
    init_logging(CONFIG.log_level, CONFIG.log_file)
    logger.info("Array Algorithm Visualizer on http://%s:%d", CONFIG.host, CONFIG.port)
    app.run(debug=CONFIG.debug, host=CONFIG.host, port=CONFIG.port)


if __name__ == "__main__":
    run()
