"""Single owner of the chart view state with explicit change notification."""

from __future__ import annotations

import datetime
import logging
import random
from typing import Callable

from config.settings import DEFAULT_TIME_RANGE
from core.events import Event, load_events
from core.filters import TimeRange, filter_by_range, filter_events_to_window
from core.price_series import PricePoint, generate_price_series

LOGGER = logging.getLogger("ethchart.state")

Listener = Callable[["PriceChartState"], None]
Clock = Callable[[], datetime.date]


class PriceChartState:
    """Events, mocked prices, and the user's selections for one chart view."""

    def __init__(
        self,
        events: list[Event] | None = None,
        price_series: list[PricePoint] | None = None,
        *,
        time_range: TimeRange | None = None,
        clock: Clock | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._clock: Clock = clock or datetime.date.today
        self._rng = rng
        self._events: list[Event] = list(events) if events is not None else []
        self._price_series: list[PricePoint] = (
            list(price_series) if price_series is not None else generate_price_series(self.now(), self._rng)
        )
        self._time_range = time_range or TimeRange.parse(DEFAULT_TIME_RANGE)
        self._selected_event: Event | None = None
        self._is_simulating = False
        self._listeners: list[Listener] = []

    @classmethod
    def from_bundle(
        cls,
        events_path: str | None = None,
        *,
        skip_invalid: bool = False,
        clock: Clock | None = None,
        rng: random.Random | None = None,
    ) -> "PriceChartState":
        """Load bundled events and generate a fresh price walk."""
        events = load_events(events_path, skip_invalid=skip_invalid)
        return cls(events, clock=clock, rng=rng)

    def now(self) -> datetime.date:
        return self._clock()

    @property
    def events(self) -> list[Event]:
        return list(self._events)

    @property
    def price_series(self) -> list[PricePoint]:
        return list(self._price_series)

    @property
    def time_range(self) -> TimeRange:
        return self._time_range

    @property
    def selected_event(self) -> Event | None:
        return self._selected_event

    @property
    def is_simulating(self) -> bool:
        return self._is_simulating

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener and return a callable that removes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception as exc:
                LOGGER.exception("State listener %r failed: %s", listener, exc)

    def select_time_range(self, time_range: TimeRange) -> None:
        """Change the visible window. The selected event is left untouched."""
        self._time_range = time_range
        self._notify()

    def select_event(self, event: Event) -> None:
        """Replace the current selection; the event may lie outside the window."""
        self._selected_event = event
        self._notify()

    def select_event_by_id(self, event_id: str) -> Event:
        """Select a loaded event by identifier. Raises KeyError when unknown."""
        for event in self._events:
            if event.id == event_id:
                self.select_event(event)
                return event
        raise KeyError(event_id)

    def clear_selection(self) -> None:
        self._selected_event = None
        self._notify()

    def toggle_simulation(self) -> bool:
        """Flip the live-simulation flag. Price and event data are not touched."""
        self._is_simulating = not self._is_simulating
        LOGGER.info("Simulation %s", "started" if self._is_simulating else "stopped")
        self._notify()
        return self._is_simulating

    def regenerate_prices(self) -> None:
        """Replace the whole price walk with a freshly generated one."""
        self._price_series = generate_price_series(self.now(), self._rng)
        self._notify()

    def filtered_price_series(self) -> list[PricePoint]:
        return filter_by_range(self._price_series, self._time_range, self.now())

    def filtered_events(self) -> list[Event]:
        return filter_events_to_window(self._events, self.filtered_price_series())

    def selection_in_window(self) -> bool:
        """True when the selected event is among the currently visible events."""
        if self._selected_event is None:
            return False
        return any(event.id == self._selected_event.id for event in self.filtered_events())
