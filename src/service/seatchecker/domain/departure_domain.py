"""Departure bookkeeping - which flight of the trip the stored seat state belongs to."""

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Optional


def parse_departure(value: str) -> datetime:
    """
    Parse an RFC3339 / ISO-8601 timestamp.

    The booking API returns departUTC without an offset ('2024-06-01T05:25:00'),
    so naive values are read as UTC.
    """
    parsed = datetime.fromisoformat(value.strip())
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def select_next_departure(journeys: Iterable[str], *, now: datetime) -> Optional[datetime]:
    """Earliest journey departing after `now`; malformed timestamps are skipped."""
    upcoming: list[datetime] = []
    for journey in journeys:
        try:
            departure = parse_departure(journey)
        except ValueError:
            continue
        if departure > now:
            upcoming.append(departure)
    return min(upcoming, default=None)


def has_departed(departure: datetime, *, now: datetime) -> bool:
    return departure <= now
