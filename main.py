"""Headless entry point: build the chart state and save a static snapshot."""

from __future__ import annotations

import argparse
import logging
import os
import random
import sys
from pathlib import Path

from config import settings
from core.filters import TimeRange
from core.view_state import PriceChartState
from ui.api import build_header
from ui.charts import save_price_chart


def _configure_logging() -> None:
    """Configure file logging for local runs."""
    os.makedirs(settings.LOGS_DIR, exist_ok=True)

    log_file = os.path.join(settings.LOGS_DIR, "ethchart.log")
    formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.INFO)

    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(formatter)
    root.addHandler(handler)


def main(argv: list[str] | None = None) -> int:
    _configure_logging()
    logger = logging.getLogger("ethchart.runner")

    parser = argparse.ArgumentParser(description="Render the ETH price chart with news events")
    parser.add_argument(
        "--range",
        dest="time_range",
        choices=[item.value for item in TimeRange],
        default=settings.DEFAULT_TIME_RANGE,
        help="Visible time range (default: %(default)s)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible price walk")
    parser.add_argument("--events", default=None, help="Path to an events JSON file (default: bundled)")
    parser.add_argument(
        "--skip-invalid-events",
        action="store_true",
        help="Drop invalid event records instead of rejecting the whole file",
    )
    args = parser.parse_args(argv)

    rng = random.Random(args.seed) if args.seed is not None else None
    state = PriceChartState.from_bundle(args.events, skip_invalid=args.skip_invalid_events, rng=rng)
    state.select_time_range(TimeRange.parse(args.time_range))

    prices = state.filtered_price_series()
    events = state.filtered_events()
    header = build_header(prices)

    print(f"{header.title} | range {state.time_range.value} | {len(prices)} days | {len(events)} events")
    if header.last_price is not None:
        print(f"Last price: ${header.last_price:,.2f} ({header.change_pct:+.2f}%)")
    for event in events:
        print(f"- {event.date.isoformat()} [{event.impact.label}] {event.name}")

    output_path = Path(settings.REPORTS_DIR) / "charts" / f"eth_price_{state.time_range.value}.png"
    save_price_chart(prices, events, f"{header.title} Price ({state.time_range.value})", output_path)
    print(f"Chart: {output_path}")
    logger.info("Saved chart snapshot to %s", output_path)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nExecution interrupted by user.")
        sys.exit(0)
    except Exception as e:
        print(f"\nFatal error: {e}")
        sys.exit(1)
