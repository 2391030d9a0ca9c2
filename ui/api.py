"""JSON payload helpers for the price chart UI API routes."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from core.events import Event
from core.filters import TimeRange
from core.price_series import PricePoint
from core.view_state import PriceChartState
from ui.models import EventDetailViewModel, HeaderViewModel, marker_color

ASSET_TITLE = "Ethereum"


def parse_time_range(raw_value: str | None, default: TimeRange) -> TimeRange:
    """Parse an optional range label from request args, falling back to `default`."""
    if raw_value is None or not raw_value.strip():
        return default
    try:
        return TimeRange.parse(raw_value)
    except ValueError:
        return default


def serialize_price_point(point: PricePoint) -> dict[str, Any]:
    return {
        "id": point.id,
        "date": point.date.isoformat(),
        "price": round(point.price, 2),
        "volume": round(point.volume, 2),
    }


def serialize_event(event: Event) -> dict[str, Any]:
    return {
        "id": event.id,
        "name": event.name,
        "date": event.date.isoformat(),
        "impact": event.impact.label,
        "marker_color": marker_color(event.impact),
        "news_example": event.news_example,
    }


def build_header(points: list[PricePoint]) -> HeaderViewModel:
    """Latest visible price and its change since the first visible day."""
    if not points:
        return HeaderViewModel(title=ASSET_TITLE, last_price=None, change_pct=None)
    first = points[0].price
    last = points[-1].price
    change_pct = ((last / first) - 1.0) * 100.0 if first else None
    return HeaderViewModel(
        title=ASSET_TITLE,
        last_price=round(last, 2),
        change_pct=round(change_pct, 2) if change_pct is not None else None,
    )


def selected_event_detail(state: PriceChartState) -> EventDetailViewModel | None:
    event = state.selected_event
    if event is None:
        return None
    return EventDetailViewModel.from_event(event, in_window=state.selection_in_window())


def state_payload(state: PriceChartState) -> dict[str, Any]:
    """Snapshot of everything the single view renders."""
    prices = state.filtered_price_series()
    events = state.filtered_events()
    detail = selected_event_detail(state)
    return {
        "time_range": state.time_range.value,
        "time_ranges": [item.value for item in TimeRange],
        "is_simulating": state.is_simulating,
        "header": asdict(build_header(prices)),
        "prices": [serialize_price_point(point) for point in prices],
        "events": [serialize_event(event) for event in events],
        "selected_event": asdict(detail) if detail is not None else None,
    }
