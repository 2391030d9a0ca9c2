"""Interactive and static chart builders for the price view."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from matplotlib.figure import Figure
import pandas as pd
import plotly.graph_objects as go
from plotly.offline import plot

from core.events import Event
from core.price_series import PricePoint, price_at, price_frame
from ui.models import marker_color

CHART_HEIGHT = 360


def event_marker_y(points: Sequence[PricePoint], event: Event) -> float:
    """Marker height: the visible price on the event day, or 0 when there is none."""
    price = price_at(points, event.date)
    return price if price is not None else 0.0


def build_price_figure(
    points: Sequence[PricePoint],
    events: Sequence[Event],
    selected_event: Event | None = None,
) -> go.Figure:
    """Price line with one tappable marker per visible event."""
    data = price_frame(points)
    figure = go.Figure()

    figure.add_trace(
        go.Scatter(
            x=data["Date"],
            y=data["Price"],
            mode="lines",
            name="ETH",
            line={"color": "royalblue", "width": 2, "shape": "spline"},
            hovertemplate="Date: %{x|%Y-%m-%d}<br>Price: %{y:,.2f}<extra></extra>",
        )
    )

    if events:
        selected_id = selected_event.id if selected_event is not None else None
        figure.add_trace(
            go.Scatter(
                x=[pd.Timestamp(event.date) for event in events],
                y=[event_marker_y(points, event) for event in events],
                mode="markers",
                name="Events",
                marker={
                    "size": [16 if event.id == selected_id else 11 for event in events],
                    "color": [marker_color(event.impact) for event in events],
                    "line": {"width": 1, "color": "#333333"},
                },
                customdata=[[event.id, event.name, event.impact.label] for event in events],
                hovertemplate="%{customdata[1]}<br>%{x|%Y-%m-%d}<br>Impact: %{customdata[2]}<extra></extra>",
            )
        )

    figure.update_layout(
        template="plotly_white",
        height=CHART_HEIGHT,
        hovermode="closest",
        showlegend=False,
        margin={"l": 40, "r": 20, "t": 20, "b": 30},
        xaxis={"type": "date", "showgrid": True},
        yaxis={"title": "Price", "rangemode": "normal"},
    )
    return figure


def build_interactive_chart(
    points: Sequence[PricePoint],
    events: Sequence[Event],
    selected_event: Event | None = None,
) -> str:
    """Render the chart as an embeddable div; Plotly JS is served separately."""
    figure = build_price_figure(points, events, selected_event)
    return plot(
        figure,
        output_type="div",
        include_plotlyjs=False,
        config={"displaylogo": False, "responsive": True},
    )


def save_price_chart(
    points: Sequence[PricePoint],
    events: Sequence[Event],
    title: str,
    output_path: Path,
) -> Path:
    """Save a static PNG of the visible price line with event markers."""
    data = price_frame(points)
    fig = Figure(figsize=(11, 5.5))
    ax = fig.add_subplot(111)

    ax.plot(data["Date"], data["Price"], label="ETH", color="royalblue", linewidth=1.6)

    for event in events:
        ax.scatter(
            pd.Timestamp(event.date),
            event_marker_y(points, event),
            s=70,
            color=marker_color(event.impact),
            edgecolors="black",
            linewidths=0.6,
            zorder=3,
            label=event.impact.label,
        )

    handles, labels = ax.get_legend_handles_labels()
    unique: dict[str, object] = {}
    for handle, label in zip(handles, labels):
        unique[label] = handle

    ax.legend(unique.values(), unique.keys(), loc="upper left")
    ax.set_title(title)
    ax.set_ylabel("Price")
    ax.grid(alpha=0.25)
    fig.tight_layout()

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=130)
    return output_path
