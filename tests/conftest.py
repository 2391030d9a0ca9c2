from __future__ import annotations

import datetime
import json
import random
from pathlib import Path
from typing import Any

import pytest

from core.events import Event, Impact
from core.price_series import generate_price_series
from core.view_state import PriceChartState

NOW = datetime.date(2024, 6, 15)


def _record(name: str, date: str, impact: str, news: str = "Headline") -> dict[str, str]:
    return {"name": name, "date": date, "impact": impact, "news_example": news}


@pytest.fixture()
def events_document() -> dict[str, Any]:
    # Upcoming group holds an event dated before the last past event on purpose.
    return {
        "past_events": [
            _record("Dencun Upgrade", "2024-03-13", "Upward"),
            _record("Exchange Lawsuit", "2023-06-06", "Downward"),
            _record("ETF Decision", "2024-05-23", "Mixed"),
        ],
        "upcoming_events": [
            _record("Next Upgrade", "2024-06-10", "Potential Upward"),
            _record("Rate Decision", "2024-07-31", "Mixed"),
        ],
    }


@pytest.fixture()
def write_events(tmp_path: Path):
    def _write(document: Any, name: str = "events.json") -> Path:
        target = tmp_path / name
        payload = document if isinstance(document, str) else json.dumps(document)
        target.write_text(payload, encoding="utf-8")
        return target

    return _write


@pytest.fixture()
def sample_events() -> list[Event]:
    return [
        Event(name="Old News", date=datetime.date(2023, 1, 5), impact=Impact.DOWNWARD, news_example="a"),
        Event(name="Spring Rally", date=datetime.date(2024, 4, 1), impact=Impact.UPWARD, news_example="b"),
        Event(name="Mid May", date=datetime.date(2024, 5, 20), impact=Impact.MIXED, news_example="c"),
        Event(name="Last Week", date=datetime.date(2024, 6, 12), impact=Impact.POTENTIAL_UPWARD, news_example="d"),
    ]


@pytest.fixture()
def series():
    return generate_price_series(NOW, random.Random(7))


@pytest.fixture()
def state(sample_events, series) -> PriceChartState:
    return PriceChartState(sample_events, series, clock=lambda: NOW, rng=random.Random(11))
