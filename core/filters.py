"""Time-range selection and event-window filtering for the price chart."""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Iterable, Sequence

from dateutil.relativedelta import relativedelta

from core.events import Event
from core.price_series import PricePoint, as_day


class TimeRange(Enum):
    """User-selectable visible window."""

    ONE_DAY = "1D"
    ONE_WEEK = "1W"
    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    ONE_YEAR = "1Y"
    ALL = "ALL"

    @classmethod
    def parse(cls, raw_value: str) -> "TimeRange":
        """Resolve a selector label such as `1M` or `all`."""
        text = (raw_value or "").strip().upper()
        for item in cls:
            if item.value == text:
                return item
        allowed = ", ".join(item.value for item in cls)
        raise ValueError(f"Unknown time range {raw_value!r} (expected one of: {allowed})")


_RANGE_OFFSETS: dict[TimeRange, relativedelta] = {
    TimeRange.ONE_DAY: relativedelta(days=1),
    TimeRange.ONE_WEEK: relativedelta(weeks=1),
    TimeRange.ONE_MONTH: relativedelta(months=1),
    TimeRange.THREE_MONTHS: relativedelta(months=3),
    TimeRange.ONE_YEAR: relativedelta(years=1),
}


def range_cutoff(
    time_range: TimeRange,
    now: datetime.date | datetime.datetime | None = None,
) -> datetime.date | None:
    """Return the earliest visible day for `time_range`, or None for ALL."""
    offset = _RANGE_OFFSETS.get(time_range)
    if offset is None:
        return None
    return as_day(now) - offset


def filter_by_range(
    series: Sequence[PricePoint],
    time_range: TimeRange,
    now: datetime.date | datetime.datetime | None = None,
) -> list[PricePoint]:
    """Return the points dated on or after the range cutoff."""
    cutoff = range_cutoff(time_range, now)
    if cutoff is None:
        return list(series)
    return [point for point in series if point.date >= cutoff]


def filter_events_to_window(events: Iterable[Event], filtered_series: Sequence[PricePoint]) -> list[Event]:
    """Return events inside the [first, last] span of the visible series."""
    if not filtered_series:
        return []
    start = filtered_series[0].date
    end = filtered_series[-1].date
    return [event for event in events if start <= event.date <= end]
