"""Mock daily ETH price walk over the trailing year."""

from __future__ import annotations

import datetime
import random
import uuid
from dataclasses import dataclass, field
from typing import Iterable

import pandas as pd
from dateutil.relativedelta import relativedelta

from config.settings import (
    HISTORY_YEARS,
    MAX_DAILY_MOVE,
    MAX_PRICE,
    MAX_VOLUME,
    MIN_PRICE,
    MIN_VOLUME,
    START_PRICE,
)

PRICE_COLUMNS = ["Date", "Price", "Volume"]


@dataclass(frozen=True)
class PricePoint:
    """One mocked daily price observation."""

    date: datetime.date
    price: float
    volume: float
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


def as_day(value: datetime.date | datetime.datetime | None) -> datetime.date:
    """Normalize a clock reading to a calendar day."""
    if value is None:
        return datetime.date.today()
    if isinstance(value, datetime.datetime):
        return value.date()
    return value


def _clamp_price(value: float) -> float:
    return max(MIN_PRICE, min(MAX_PRICE, value))


def _random_volume(rng: random.Random) -> float:
    # random() is half-open, so the upper bound is never reached.
    return MIN_VOLUME + rng.random() * (MAX_VOLUME - MIN_VOLUME)


def generate_price_series(
    now: datetime.date | datetime.datetime | None = None,
    rng: random.Random | None = None,
) -> list[PricePoint]:
    """
    Generate one point per calendar day from one year before `now` through `now`.

    The first price is the configured start price; each following day moves by
    a uniform delta and is clamped into the allowed band. Pass a seeded
    `random.Random` for a reproducible walk.
    """
    end = as_day(now)
    start = end - relativedelta(years=HISTORY_YEARS)
    source = rng if rng is not None else random.Random()

    points: list[PricePoint] = []
    current_date = start
    current_price = START_PRICE
    while current_date <= end:
        if points:
            delta = source.uniform(-MAX_DAILY_MOVE, MAX_DAILY_MOVE)
            current_price = _clamp_price(current_price + delta)
        points.append(PricePoint(date=current_date, price=current_price, volume=_random_volume(source)))
        current_date += datetime.timedelta(days=1)

    return points


def price_frame(points: Iterable[PricePoint]) -> pd.DataFrame:
    """Return a Date/Price/Volume frame for chart builders."""
    rows = [(pd.Timestamp(point.date), point.price, point.volume) for point in points]
    return pd.DataFrame(rows, columns=PRICE_COLUMNS)


def price_at(points: Iterable[PricePoint], day: datetime.date) -> float | None:
    """Return the price recorded on `day`, if any."""
    for point in points:
        if point.date == day:
            return point.price
    return None
