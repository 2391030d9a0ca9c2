"""UI data models and impact colour tables for the price chart view."""

from __future__ import annotations

from dataclasses import dataclass

from core.events import Event, Impact

# Marker dots on the chart.
MARKER_COLORS: dict[Impact, str] = {
    Impact.UPWARD: "green",
    Impact.POTENTIAL_UPWARD: "green",
    Impact.DOWNWARD: "red",
    Impact.MIXED: "yellow",
}

# Impact label in the detail panel.
DETAIL_COLORS: dict[Impact, str] = {
    Impact.UPWARD: "green",
    Impact.POTENTIAL_UPWARD: "green",
    Impact.DOWNWARD: "red",
    Impact.MIXED: "orange",
}


def marker_color(impact: Impact) -> str:
    return MARKER_COLORS[impact]


def detail_color(impact: Impact) -> str:
    return DETAIL_COLORS[impact]


@dataclass
class EventDetailViewModel:
    """Payload for the selected-event detail panel."""

    id: str
    name: str
    date: str
    date_label: str
    impact: str
    impact_color: str
    news_example: str
    in_window: bool

    @classmethod
    def from_event(cls, event: Event, in_window: bool) -> "EventDetailViewModel":
        return cls(
            id=event.id,
            name=event.name,
            date=event.date.isoformat(),
            date_label=event.date.strftime("%b %d, %Y"),
            impact=event.impact.label,
            impact_color=detail_color(event.impact),
            news_example=event.news_example,
            in_window=in_window,
        )


@dataclass
class HeaderViewModel:
    """Asset title plus latest visible price and change over the window."""

    title: str
    last_price: float | None
    change_pct: float | None
