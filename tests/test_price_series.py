from __future__ import annotations

import datetime
import random

import pytest

from core.price_series import generate_price_series, price_at, price_frame


def test_series_spans_trailing_year_inclusive() -> None:
    points = generate_price_series(datetime.date(2024, 6, 15), random.Random(1))

    assert len(points) == 367
    assert points[0].date == datetime.date(2023, 6, 15)
    assert points[-1].date == datetime.date(2024, 6, 15)
    for previous, current in zip(points, points[1:]):
        assert current.date - previous.date == datetime.timedelta(days=1)


def test_prices_and_volumes_stay_in_bounds() -> None:
    points = generate_price_series(datetime.date(2024, 6, 15), random.Random(2))

    assert points[0].price == 1500.0
    assert all(1000.0 <= point.price <= 4000.0 for point in points)
    assert all(1000.0 <= point.volume < 10000.0 for point in points)
    for previous, current in zip(points, points[1:]):
        assert abs(current.price - previous.price) <= 50.0 + 1e-9


def test_seeded_walk_is_reproducible() -> None:
    first = generate_price_series(datetime.date(2024, 6, 15), random.Random(42))
    second = generate_price_series(datetime.date(2024, 6, 15), random.Random(42))

    assert [point.price for point in first] == [point.price for point in second]
    assert [point.volume for point in first] == [point.volume for point in second]
    assert first[0].id != second[0].id


def test_walk_clamps_at_the_floor() -> None:
    class Falling(random.Random):
        def uniform(self, a, b):
            return a

    points = generate_price_series(datetime.date(2024, 6, 15), Falling(0))

    assert points[1].price == pytest.approx(1450.0)
    assert points[-1].price == 1000.0
    assert min(point.price for point in points) == 1000.0


def test_leap_day_now_uses_calendar_year() -> None:
    points = generate_price_series(datetime.date(2024, 2, 29), random.Random(3))

    assert points[0].date == datetime.date(2023, 2, 28)
    assert len(points) == 367


def test_datetime_now_is_truncated_to_day() -> None:
    points = generate_price_series(datetime.datetime(2024, 6, 15, 18, 30), random.Random(4))

    assert points[-1].date == datetime.date(2024, 6, 15)


def test_price_frame_and_lookup() -> None:
    points = generate_price_series(datetime.date(2024, 6, 15), random.Random(5))
    frame = price_frame(points)

    assert list(frame.columns) == ["Date", "Price", "Volume"]
    assert len(frame) == len(points)
    assert frame["Price"].iloc[0] == pytest.approx(1500.0)
    assert price_at(points, datetime.date(2024, 6, 15)) == points[-1].price
    assert price_at(points, datetime.date(2025, 1, 1)) is None
