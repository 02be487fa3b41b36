"""Tests for the Flask routes."""

import threading

import pytest

import main
from engine import DriverState


@pytest.fixture
def client():
    main.app.config["TESTING"] = True
    main._DRIVERS.clear()
    with main.app.test_client() as client:
        yield client
    for entry in main._DRIVERS.values():
        entry.driver.stop()
    main._DRIVERS.clear()


def start(client, key="linear-search", **params):
    return client.post("/api/start", json={"algo_key": key, "params": params})


def test_index(client):
    res = client.get("/")
    html = res.get_data(as_text=True)

    assert res.status_code == 200
    assert "Array Algorithm Visualizer" in html
    assert 'id="btn-start"' in html
    assert 'data-key="linear-search"' in html


def test_select(client):
    data = client.post("/api/select", json={"algo_key": "quick-sort"}).get_json()

    assert data["algo_key"] == "quick-sort"
    assert data["state"] == "idle"
    assert 'data-key="quick-sort"' in data["form"]
    assert "partition" in data["pseudocode"]


def test_select_unknown(client):
    res = client.post("/api/select", json={"algo_key": "nope"})
    assert res.status_code == 404
    assert "nope" in res.get_json()["error"]


def test_start_unknown(client):
    res = client.post("/api/start", json={"algo_key": "nope"})
    assert res.status_code == 404


def test_start_with_bad_params(client):
    res = start(client, array="1,x")
    assert res.status_code == 400
    assert res.get_json()["field"] == "array"


def test_playback_round_trip(client):
    data = start(client, array="1,2,3", target="3", speed="100").get_json()
    assert data["state"] == "running"
    assert data["step_number"] == 0
    assert "Checking index 0" in data["explanation"]

    data = client.post("/api/pause").get_json()
    assert data["state"] == "paused"

    data = client.post("/api/step").get_json()
    assert data["state"] == "paused"
    assert data["step_number"] == 1

    data = client.post("/api/resume").get_json()
    assert data["state"] == "running"
    assert data["step_number"] == 2

    data = client.post("/api/stop").get_json()
    assert data["state"] == "idle"
    assert client.get("/api/state").get_json()["state"] == "idle"


def test_finished_run_reports_result(client):
    start(client, array="5", target="5")
    client.post("/api/pause")
    data = client.post("/api/step").get_json()

    assert data["state"] == "finished"
    assert data["result"] == 0
    assert data["completion_message"] == "Element found at index 0"
    assert "Comparisons" in data["analytics"]
    assert "Element found at index 0" in data["result_html"]


def test_invalid_transition_is_harmless(client):
    data = client.post("/api/resume").get_json()
    assert data["state"] == "idle"
    assert data["step_number"] == 0


def test_state_polls_the_timer(client):
    start(client, array="", target="1")
    data = client.get("/api/state").get_json()
    assert data["state"] == "finished"
    assert data["result"] == -1


def test_sessions_are_isolated(client):
    start(client, key="bubble-sort", array="3,1,2")
    with main.app.test_client() as other:
        assert other.get("/api/state").get_json()["state"] == "idle"
    assert client.get("/api/state").get_json()["state"] == "running"


def test_export(client):
    res = client.post("/api/export", json={"algo_key": "bubble-sort", "params": {"array": "3,1,2"}})
    data = res.get_json()

    assert res.status_code == 200
    assert data["metrics"]["result"] == [1, 2, 3]
    assert len(data["frames"]) == 8
    assert data["params"]["array"] == [3, 1, 2]


def test_driver_calls_wait_for_the_session_lock(client):
    browser = main.app.test_client()
    start(browser, key="bubble-sort", array="3,1,2")
    (entry,) = main._DRIVERS.values()

    responses = []
    worker = threading.Thread(target=lambda: responses.append(browser.post("/api/pause")))
    with entry.lock:
        worker.start()
        worker.join(timeout=0.2)
        assert worker.is_alive()
        assert entry.driver.state == DriverState.RUNNING

    worker.join(timeout=5)
    assert responses[0].get_json()["state"] == "paused"
    assert entry.driver.scheduler.pending == 0
