"""Decode the bundled news-event document into typed event records."""

from __future__ import annotations

import datetime
import json
import logging
import re
import uuid
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from config.settings import EVENTS_FILE

LOGGER = logging.getLogger("ethchart.events")

DATE_FORMAT = "%Y-%m-%d"
_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
EVENT_GROUPS = ("past_events", "upcoming_events")
REQUIRED_FIELDS = ("name", "date", "impact", "news_example")


class EventDecodeError(ValueError):
    """Raised when the events document or one of its records is invalid."""


class Impact(Enum):
    """Expected directional effect of an event on price."""

    UPWARD = "Upward"
    DOWNWARD = "Downward"
    MIXED = "Mixed"
    POTENTIAL_UPWARD = "Potential Upward"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class Event:
    """One curated news event shown as a chart marker."""

    name: str
    date: datetime.date
    impact: Impact
    news_example: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass(frozen=True)
class EventsData:
    """Past and upcoming events in source order."""

    past: list[Event]
    upcoming: list[Event]

    def merged(self) -> list[Event]:
        """Return past events followed by upcoming events, without re-sorting."""
        return [*self.past, *self.upcoming]


def parse_event_date(raw_value: str) -> datetime.date:
    """Parse a strict `yyyy-MM-dd` calendar day."""
    if not _DATE_PATTERN.match(raw_value):
        raise EventDecodeError(f"Date {raw_value!r} does not match yyyy-MM-dd")
    try:
        return datetime.datetime.strptime(raw_value, DATE_FORMAT).date()
    except ValueError as exc:
        raise EventDecodeError(f"Date {raw_value!r} is not a valid calendar day") from exc


def parse_impact(raw_value: str) -> Impact:
    try:
        return Impact(raw_value)
    except ValueError as exc:
        allowed = ", ".join(item.value for item in Impact)
        raise EventDecodeError(f"Unknown impact {raw_value!r} (expected one of: {allowed})") from exc


def parse_event(record: Any) -> Event:
    """Build one Event from a decoded JSON object."""
    if not isinstance(record, dict):
        raise EventDecodeError("Event record is not a JSON object")

    values: dict[str, str] = {}
    for key in REQUIRED_FIELDS:
        if key not in record:
            raise EventDecodeError(f"Missing required field {key!r}")
        value = record[key]
        if not isinstance(value, str):
            raise EventDecodeError(f"Field {key!r} must be a string, got {type(value).__name__}")
        values[key] = value

    return Event(
        name=values["name"],
        date=parse_event_date(values["date"]),
        impact=parse_impact(values["impact"]),
        news_example=values["news_example"],
    )


def _decode_document(payload: bytes | str) -> dict[str, list[Any]]:
    """Decode JSON and check the top-level two-group shape."""
    try:
        document = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
        raise EventDecodeError(f"Malformed events JSON: {exc}") from exc

    if not isinstance(document, dict):
        raise EventDecodeError("Events document must be a JSON object")

    groups: dict[str, list[Any]] = {}
    for group in EVENT_GROUPS:
        if group not in document:
            raise EventDecodeError(f"Missing required field {group!r}")
        records = document[group]
        if not isinstance(records, list):
            raise EventDecodeError(f"Field {group!r} must be a list")
        groups[group] = records
    return groups


def _parse_group(group: str, records: list[Any], skip_invalid: bool) -> list[Event]:
    events: list[Event] = []
    for index, record in enumerate(records):
        try:
            events.append(parse_event(record))
        except EventDecodeError as exc:
            message = f"{group}[{index}]: {exc}"
            if not skip_invalid:
                raise EventDecodeError(message) from exc
            LOGGER.warning("Skipping invalid event %s", message)
    return events


def decode_events_document(payload: bytes | str, *, skip_invalid: bool = False) -> EventsData:
    """
    Decode the events document into past and upcoming groups.

    By default one invalid record fails the whole document. With
    `skip_invalid=True` invalid records are logged and dropped instead;
    structural problems (bad JSON, missing groups) always raise.

    Raises:
        EventDecodeError: When the document or a record cannot be decoded.
    """
    groups = _decode_document(payload)
    return EventsData(
        past=_parse_group("past_events", groups["past_events"], skip_invalid),
        upcoming=_parse_group("upcoming_events", groups["upcoming_events"], skip_invalid),
    )


def load_events(path: str | Path | None = None, *, skip_invalid: bool = False) -> list[Event]:
    """Load the merged event list, degrading to an empty list on any failure."""
    events_path = Path(path) if path is not None else Path(EVENTS_FILE)

    try:
        payload = events_path.read_bytes()
    except FileNotFoundError:
        LOGGER.warning("Events file not found: %s", events_path)
        return []
    except OSError as exc:
        LOGGER.warning("Failed to read events file %s: %s", events_path, exc)
        return []

    try:
        data = decode_events_document(payload, skip_invalid=skip_invalid)
    except EventDecodeError as exc:
        LOGGER.warning("Error decoding events from %s: %s", events_path, exc)
        return []

    events = data.merged()
    LOGGER.info(
        "Loaded %d events (%d past, %d upcoming) from %s",
        len(events),
        len(data.past),
        len(data.upcoming),
        events_path,
    )
    return events
