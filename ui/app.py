"""Local read-only Flask UI for the Ethereum price chart with news events."""

from __future__ import annotations

import logging
import os
from pathlib import Path
import sys
import tempfile
import threading
from typing import Any

MPL_CONFIG_DIR = os.path.join(tempfile.gettempdir(), "matplotlib")
os.environ.setdefault("MPLCONFIGDIR", MPL_CONFIG_DIR)
os.makedirs(MPL_CONFIG_DIR, exist_ok=True)

from flask import Flask, got_request_exception, jsonify, render_template, request, url_for
from plotly.offline import get_plotlyjs

# Make `python ui/app.py` work without external PYTHONPATH setup.
THIS_DIR = Path(__file__).resolve().parent
PROJECT_DIR = THIS_DIR.parent
if str(PROJECT_DIR) not in sys.path:
    sys.path.insert(0, str(PROJECT_DIR))

from config.settings import LOGS_DIR, UI_HOST, UI_PORT
from core.filters import TimeRange
from core.view_state import PriceChartState
from ui.api import build_header, parse_time_range, selected_event_detail, state_payload
from ui.charts import build_interactive_chart


UI_DIR = THIS_DIR
STATIC_DIR = UI_DIR / "static"

PLOTLY_VENDOR_RELATIVE_PATH = "vendor/plotly.min.js"
PLOTLY_VENDOR_PATH = STATIC_DIR / PLOTLY_VENDOR_RELATIVE_PATH


def _configure_ui_logger() -> logging.Logger:
    """Configure file logger for the UI app."""
    logs_dir = Path(LOGS_DIR)
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / "ui.log"

    logger = logging.getLogger("ethchart.ui")
    logger.setLevel(logging.INFO)
    logger.propagate = False

    existing = None
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler):
            existing = handler
            break

    if existing is None:
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s"))
        logger.addHandler(handler)

    return logger


def _write_plotly_bundle(logger: logging.Logger) -> None:
    if PLOTLY_VENDOR_PATH.exists():
        return
    try:
        PLOTLY_VENDOR_PATH.parent.mkdir(parents=True, exist_ok=True)
        PLOTLY_VENDOR_PATH.write_text(get_plotlyjs(), encoding="utf-8")
        logger.info("Wrote local Plotly bundle: %s", PLOTLY_VENDOR_PATH)
    except OSError as exc:
        logger.warning("Failed to write local Plotly bundle: %s", exc)


def create_app(state: PriceChartState | None = None) -> Flask:
    """Create and configure the local Flask application."""
    app = Flask(
        __name__,
        template_folder=str(UI_DIR / "templates"),
        static_folder=str(STATIC_DIR),
    )
    app.config["TEMPLATES_AUTO_RELOAD"] = True

    logger = _configure_ui_logger()
    _write_plotly_bundle(logger)

    chart_state = state if state is not None else PriceChartState.from_bundle()
    state_lock = threading.RLock()
    chart_cache: dict[str, Any] = {"html": None, "day": None}

    def _invalidate_chart(_: PriceChartState) -> None:
        chart_cache["html"] = None

    chart_state.subscribe(_invalidate_chart)
    app.extensions["price_chart_state"] = chart_state
    logger.info(
        "UI app initialized with %d events and %d price points",
        len(chart_state.events),
        len(chart_state.price_series),
    )

    def _chart_html() -> str:
        """Build the chart for the current state, reusing it until state or the day changes."""
        with state_lock:
            today = chart_state.now()
            cached = chart_cache["html"]
            if cached is None or chart_cache["day"] != today:
                cached = build_interactive_chart(
                    chart_state.filtered_price_series(),
                    chart_state.filtered_events(),
                    chart_state.selected_event,
                )
                chart_cache["html"] = cached
                chart_cache["day"] = today
            return cached

    def _error(message: str, status_code: int):
        return jsonify({"error": message}), status_code

    @app.route("/")
    def index() -> str:
        """Single chart view with range selector and event detail panel."""
        raw_range = request.args.get("range")
        with state_lock:
            if raw_range is not None:
                selected = parse_time_range(raw_range, chart_state.time_range)
                if selected is not chart_state.time_range:
                    chart_state.select_time_range(selected)
            header = build_header(chart_state.filtered_price_series())
            detail = selected_event_detail(chart_state)
            time_range = chart_state.time_range
            is_simulating = chart_state.is_simulating
            event_count = len(chart_state.filtered_events())

        return render_template(
            "index.html",
            header=header,
            detail=detail,
            time_range=time_range.value,
            time_ranges=[item.value for item in TimeRange],
            is_simulating=is_simulating,
            event_count=event_count,
            chart_html=_chart_html(),
            plotly_script_url=url_for("static", filename=PLOTLY_VENDOR_RELATIVE_PATH),
        )

    @app.route("/api/state")
    def state_api():
        with state_lock:
            return jsonify(state_payload(chart_state))

    @app.route("/api/chart")
    def chart_api():
        return jsonify({"html": _chart_html()})

    @app.route("/api/range/<label>", methods=["POST"])
    def range_api(label: str):
        try:
            selected = TimeRange.parse(label)
        except ValueError as exc:
            logger.warning("Rejected range selection %r: %s", label, exc)
            return _error(str(exc), 400)
        with state_lock:
            chart_state.select_time_range(selected)
            return jsonify(state_payload(chart_state))

    @app.route("/api/events/<event_id>/select", methods=["POST"])
    def select_event_api(event_id: str):
        with state_lock:
            try:
                chart_state.select_event_by_id(event_id)
            except KeyError:
                logger.warning("Select requested for unknown event %s", event_id)
                return _error(f"Unknown event: {event_id}", 404)
            return jsonify(state_payload(chart_state))

    @app.route("/api/selection/clear", methods=["POST"])
    def clear_selection_api():
        with state_lock:
            chart_state.clear_selection()
            return jsonify(state_payload(chart_state))

    @app.route("/api/simulation/toggle", methods=["POST"])
    def toggle_simulation_api():
        with state_lock:
            chart_state.toggle_simulation()
            return jsonify(state_payload(chart_state))

    def _log_unhandled_exception(sender: Flask, exception: Exception, **_: Any) -> None:
        logger.exception("Unhandled UI exception: %s", exception)

    got_request_exception.connect(_log_unhandled_exception, app)

    return app


if __name__ == "__main__":
    create_app().run(host=UI_HOST, port=UI_PORT, debug=False)
