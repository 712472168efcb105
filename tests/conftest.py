from __future__ import annotations

from datetime import date, datetime

import pytest
from dateutil import tz

from itinerary_trips.context import Context
from itinerary_trips.models import Segment

CET = tz.tzoffset(None, 3600)


def at(day: str, hhmm: str) -> datetime:
    """2026-01-01, 10:00 → aware datetime at +01:00."""
    y, m, d = (int(p) for p in day.split("-"))
    hh, mm = (int(p) for p in hhmm.split(":"))
    return datetime(y, m, d, hh, mm, tzinfo=CET)


def flight(origin: str, destination: str, day: str, dep: str, arr: str, line: int = 1) -> Segment:
    return Segment.flight(origin, destination, at(day, dep), at(day, arr), line)


def train(origin: str, destination: str, day: str, dep: str, arr: str, line: int = 1) -> Segment:
    return Segment.train(origin, destination, at(day, dep), at(day, arr), line)


def hotel(location: str, check_in: str, check_out: str, line: int = 1) -> Segment:
    return Segment.hotel(
        location,
        date.fromisoformat(check_in),
        date.fromisoformat(check_out),
        line,
        tzinfo=CET,
    )


@pytest.fixture
def context() -> Context:
    return Context.create("MAD", time_zone="Europe/Madrid")


@pytest.fixture
def utc_context() -> Context:
    return Context.create("MAD")
