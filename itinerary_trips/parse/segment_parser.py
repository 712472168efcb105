"""Segment line grammar: one SEGMENT value → Flight, Train or Hotel Segment.

    Flight <IATA> <YYYY-MM-DD> <HH:MM> -> <IATA> <HH:MM>
    Train  <IATA> <YYYY-MM-DD> <HH:MM> -> <IATA> <HH:MM>
    Hotel  <IATA> <YYYY-MM-DD> -> <YYYY-MM-DD>

Keywords are case-insensitive. Both ends of a flight or train share the
departure date, so overnight legs cannot be expressed.
"""

import re
from datetime import date, datetime, tzinfo

from dateutil import tz

from itinerary_trips.context import Context
from itinerary_trips.errors import SegmentParseError, SegmentValidationError
from itinerary_trips.models import Segment, SegmentType

_KEYWORD = re.compile(r'^(flight|train|hotel)\b', re.I)

_MOVING = re.compile(
    r'^(?:flight|train)\s+(\w{3})\s+(\d{4}-\d{2}-\d{2})\s+(\d{2}:\d{2})'
    r'\s+->\s+(\w{3})\s+(\d{2}:\d{2})$',
    re.I,
)
_HOTEL = re.compile(
    r'^hotel\s+(\w{3})\s+(\d{4}-\d{2}-\d{2})\s+->\s+(\d{4}-\d{2}-\d{2})$',
    re.I,
)


def _to_date(raw: str) -> date:
    year, month, day = (int(p) for p in raw.split("-"))
    return date(year, month, day)


def _to_datetime(raw_date: str, raw_time: str, zone: tzinfo) -> datetime:
    d = _to_date(raw_date)
    hour, minute = (int(p) for p in raw_time.split(":"))
    # Wall times skipped by a DST jump move forward to the next real instant.
    return tz.resolve_imaginary(datetime(d.year, d.month, d.day, hour, minute, tzinfo=zone))


def _parse_moving(kind: SegmentType, text: str, line_number: int, context: Context) -> Segment:
    m = _MOVING.match(text)
    if not m:
        raise SegmentParseError(
            f"Invalid {kind.value} segment line {line_number}: {text!r}",
            line_number=line_number,
        )
    origin, raw_date, dep_time, destination, arr_time = m.groups()
    zone = context.tzinfo
    try:
        departure_at = _to_datetime(raw_date, dep_time, zone)
        arrival_at = _to_datetime(raw_date, arr_time, zone)
    except ValueError as e:
        raise SegmentParseError(
            f"Invalid date or time at line {line_number}: {text!r}",
            cause=e,
            line_number=line_number,
        )
    build = Segment.flight if kind == SegmentType.FLIGHT else Segment.train
    return build(
        origin_iata=origin,
        destination_iata=destination,
        departure_at=departure_at,
        arrival_at=arrival_at,
        line_number=line_number,
    )


def _parse_hotel(text: str, line_number: int, context: Context) -> Segment:
    m = _HOTEL.match(text)
    if not m:
        raise SegmentParseError(
            f"Invalid hotel segment line {line_number}: {text!r}",
            line_number=line_number,
        )
    location, raw_check_in, raw_check_out = m.groups()
    try:
        check_in_on = _to_date(raw_check_in)
        check_out_on = _to_date(raw_check_out)
    except ValueError as e:
        raise SegmentParseError(
            f"Invalid date or time at line {line_number}: {text!r}",
            cause=e,
            line_number=line_number,
        )
    return Segment.hotel(
        location_iata=location,
        check_in_on=check_in_on,
        check_out_on=check_out_on,
        line_number=line_number,
        tzinfo=context.tzinfo,
    )


def parse_segment(text: str, line_number: int, context: Context) -> Segment:
    """Parse one segment line, raising SegmentParseError on any failure.

    Dates and times are read as wall-clock values in the context's time
    zone. Segment invariant violations are re-raised as SegmentParseError
    so callers only deal with one error type.
    """
    text = (text or "").strip()
    keyword = _KEYWORD.match(text)
    if not keyword:
        raise SegmentParseError(
            f"Unknown segment type at line {line_number}: {text!r}",
            line_number=line_number,
        )

    kind = SegmentType(keyword.group(1).lower())
    try:
        if kind == SegmentType.HOTEL:
            return _parse_hotel(text, line_number, context)
        return _parse_moving(kind, text, line_number, context)
    except SegmentValidationError as e:
        raise SegmentParseError(
            f"Invalid segment line {line_number}: {e.message}",
            cause=e,
            line_number=line_number,
        )
