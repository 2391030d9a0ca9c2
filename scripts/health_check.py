#!/usr/bin/env python3
"""Validate the bundled events file and report what the chart would load."""

import os
import sys
from collections import Counter
from pathlib import Path

# Add project to path
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if BASE_DIR not in sys.path:
    sys.path.insert(0, BASE_DIR)

from config.settings import EVENTS_FILE
from core.events import EventDecodeError, EventsData, decode_events_document


def _print_group(label, events):
    print(f"\n{label} ({len(events)})")
    for event in events:
        print(f"  {event.date.isoformat()}  {event.impact.value:17} {event.name}")


def check_events_file(path=None):
    """Strictly decode the events file; return the decoded data or None."""
    events_path = Path(path or EVENTS_FILE)
    print("\nEvents File Health Check")
    print("=" * 70)
    print(f"File: {events_path}")

    if not events_path.exists():
        print("✗ Missing: the chart will start with no events.")
        return None

    try:
        payload = events_path.read_bytes()
    except OSError as e:
        print(f"✗ Unreadable: {e}")
        print("  The chart will start with no events.")
        return None

    try:
        data = decode_events_document(payload)
    except EventDecodeError as e:
        print(f"✗ Decode failed: {e}")
        print("  The chart will start with no events.")
        return None

    _print_group("Past events", data.past)
    _print_group("Upcoming events", data.upcoming)
    return data


def summarize(data: EventsData):
    merged = data.merged()
    impacts = Counter(event.impact.value for event in merged)
    out_of_order = sum(1 for prev, cur in zip(merged, merged[1:]) if cur.date < prev.date)

    print("\n" + "=" * 70)
    print("Summary:")
    print(f"  Total events:         {len(merged):3}")
    for impact, count in sorted(impacts.items()):
        print(f"  {impact + ':':22}{count:3}")
    if out_of_order:
        print(f"  ⚠ {out_of_order} event(s) dated before their predecessor (display order is file order)")


def main():
    path = sys.argv[1] if len(sys.argv) > 1 else None
    data = check_events_file(path)
    if data is None:
        return 1
    summarize(data)
    print("✓ Events file is valid.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
