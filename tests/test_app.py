from __future__ import annotations

import datetime
import random

import pytest

from core.view_state import PriceChartState
from tests.conftest import NOW
from ui import app as app_module


@pytest.fixture()
def make_client(tmp_path, monkeypatch):
    monkeypatch.setattr(app_module, "LOGS_DIR", str(tmp_path / "logs"))
    monkeypatch.setattr(app_module, "PLOTLY_VENDOR_PATH", tmp_path / "plotly.min.js")
    monkeypatch.setattr(app_module, "get_plotlyjs", lambda: "// plotly")

    def _make(state: PriceChartState):
        flask_app = app_module.create_app(state)
        flask_app.config["TESTING"] = True
        return flask_app.test_client()

    return _make


@pytest.fixture()
def client(state, make_client):
    return make_client(state)


def test_index_renders_chart_and_selector(client) -> None:
    response = client.get("/")

    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "plotly-graph-div" in body
    for label in ("1D", "1W", "1M", "3M", "1Y", "ALL"):
        assert f">{label}</a>" in body


def test_index_range_query_selects_range(client, state) -> None:
    assert client.get("/?range=1W").status_code == 200
    assert state.time_range.value == "1W"

    assert client.get("/?range=bogus").status_code == 200
    assert state.time_range.value == "1W"


def test_state_api(client) -> None:
    payload = client.get("/api/state").get_json()

    assert payload["time_range"] == "1Y"
    assert payload["is_simulating"] is False
    assert payload["selected_event"] is None
    assert len(payload["prices"]) == 367


def test_range_api(client) -> None:
    response = client.post("/api/range/1M")

    assert response.status_code == 200
    assert response.get_json()["time_range"] == "1M"
    assert client.post("/api/range/5Y").status_code == 400


def test_select_event_api_and_stale_detail(client, sample_events) -> None:
    target = sample_events[1]

    selected = client.post(f"/api/events/{target.id}/select").get_json()["selected_event"]
    assert selected["name"] == target.name
    assert selected["in_window"] is True

    narrowed = client.post("/api/range/1W").get_json()["selected_event"]
    assert narrowed["name"] == target.name
    assert narrowed["in_window"] is False

    body = client.get("/").get_data(as_text=True)
    assert target.name in body
    assert "Outside the selected time range." in body


def test_select_unknown_event_is_404(client) -> None:
    response = client.post("/api/events/not-an-id/select")

    assert response.status_code == 404
    assert "error" in response.get_json()


def test_clear_selection_api(client, sample_events) -> None:
    client.post(f"/api/events/{sample_events[0].id}/select")

    assert client.post("/api/selection/clear").get_json()["selected_event"] is None


def test_toggle_simulation_api(client) -> None:
    assert client.post("/api/simulation/toggle").get_json()["is_simulating"] is True
    assert client.post("/api/simulation/toggle").get_json()["is_simulating"] is False


def test_chart_is_rebuilt_after_state_change(client, sample_events) -> None:
    first = client.get("/api/chart").get_json()["html"]
    assert client.get("/api/chart").get_json()["html"] == first

    client.post("/api/range/1D")
    assert client.get("/api/chart").get_json()["html"] != first


def test_chart_is_rebuilt_when_the_day_rolls_over(make_client, series, sample_events) -> None:
    clock = {"today": NOW}
    state = PriceChartState(sample_events, series, clock=lambda: clock["today"], rng=random.Random(5))
    client = make_client(state)
    client.post("/api/range/1D")
    first = client.get("/api/chart").get_json()["html"]
    assert client.get("/api/chart").get_json()["html"] == first

    clock["today"] = NOW + datetime.timedelta(days=1)

    rebuilt = client.get("/api/chart").get_json()["html"]
    assert rebuilt != first
    assert client.get("/api/chart").get_json()["html"] == rebuilt
    assert [item["date"] for item in client.get("/api/state").get_json()["prices"]] == ["2024-06-15"]


def test_marker_click_posts_to_routed_select_url(client) -> None:
    body = client.get("/").get_data(as_text=True)

    assert 'var selectEventUrl = "/api/events/__ID__/select";' in body
    assert 'post("/api/events/"' not in body
