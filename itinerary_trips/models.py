"""Data models for the itinerary pipeline."""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, tzinfo
from enum import Enum
from typing import List, Optional

from dateutil import tz

from itinerary_trips.errors import (
    ReservationValidationError,
    SegmentValidationError,
    TripValidationError,
)


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------

class StatementType(str, Enum):
    RESERVATION_START = "reservation_start"
    SEGMENT_LINE = "segment_line"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Statement:
    """One classified, non-blank input line."""
    kind: StatementType
    value: Optional[str]
    line_number: int
    raw: str = ""

    def __post_init__(self):
        if not isinstance(self.kind, StatementType):
            raise ValueError(f"Invalid statement type: {self.kind!r}")
        if self.kind == StatementType.RESERVATION_START and self.value and self.value.strip():
            raise ValueError(
                f"Reservation start statements must not have a value (line {self.line_number})"
            )
        if self.kind == StatementType.SEGMENT_LINE and not (self.value and self.value.strip()):
            raise ValueError(
                f"Segment lines must have a non-empty value (line {self.line_number})"
            )

    @property
    def is_reservation_start(self) -> bool:
        return self.kind == StatementType.RESERVATION_START

    @property
    def is_segment_line(self) -> bool:
        return self.kind == StatementType.SEGMENT_LINE

    @property
    def is_unknown(self) -> bool:
        return self.kind == StatementType.UNKNOWN


# ---------------------------------------------------------------------------
# Segments
# ---------------------------------------------------------------------------

class SegmentType(str, Enum):
    FLIGHT = "flight"
    TRAIN = "train"
    HOTEL = "hotel"


MOVING_TYPES = (SegmentType.FLIGHT, SegmentType.TRAIN)

_END_OF_DAY = time(23, 59, 59)


def _utc(moment: datetime) -> datetime:
    return moment.astimezone(tz.UTC)


@dataclass(frozen=True)
class Leg:
    origin_iata: str
    destination_iata: str


@dataclass(frozen=True)
class Stay:
    location_iata: str
    check_in_on: date
    check_out_on: date


@dataclass(eq=False)
class Segment:
    """A flight, train or hotel booking line.

    Moving segments (flight/train) carry a Leg, hotels carry a Stay. Only
    ``is_a_connection`` changes after construction; TripBuilder sets it.
    Segments compare by identity so the same booking can be located
    inside a trip.
    """
    kind: SegmentType
    starts_at: datetime
    ends_at: datetime
    line_number: int
    leg: Optional[Leg] = None
    stay: Optional[Stay] = None
    is_a_connection: bool = False

    def __post_init__(self):
        if not isinstance(self.starts_at, datetime):
            raise SegmentValidationError("starts_at must be a datetime")
        if not isinstance(self.ends_at, datetime):
            raise SegmentValidationError("ends_at must be a datetime")
        if _utc(self.ends_at) < _utc(self.starts_at):
            raise SegmentValidationError("ends_at must be >= starts_at")
        if self.kind in MOVING_TYPES and self.leg is None:
            raise SegmentValidationError(f"{self.kind.value} segment needs an origin and destination")
        if self.kind == SegmentType.HOTEL and self.stay is None:
            raise SegmentValidationError("hotel segment needs a location and stay dates")

    @classmethod
    def flight(cls, origin_iata: str, destination_iata: str, departure_at: datetime,
               arrival_at: datetime, line_number: int) -> "Segment":
        return cls(
            kind=SegmentType.FLIGHT,
            starts_at=departure_at,
            ends_at=arrival_at,
            line_number=line_number,
            leg=Leg(origin_iata, destination_iata),
        )

    @classmethod
    def train(cls, origin_iata: str, destination_iata: str, departure_at: datetime,
              arrival_at: datetime, line_number: int) -> "Segment":
        return cls(
            kind=SegmentType.TRAIN,
            starts_at=departure_at,
            ends_at=arrival_at,
            line_number=line_number,
            leg=Leg(origin_iata, destination_iata),
        )

    @classmethod
    def hotel(cls, location_iata: str, check_in_on: date, check_out_on: date,
              line_number: int, tzinfo: Optional[tzinfo] = None) -> "Segment":
        """Build a hotel stay spanning check-in 00:00:00 to check-out 23:59:59."""
        for name, value in (("check_in_on", check_in_on), ("check_out_on", check_out_on)):
            if not isinstance(value, date):
                raise SegmentValidationError(f"{name} must be a date")
        # datetime is a date subclass; keep only the calendar part
        if isinstance(check_in_on, datetime):
            check_in_on = check_in_on.date()
        if isinstance(check_out_on, datetime):
            check_out_on = check_out_on.date()
        zone = tzinfo or tz.UTC
        return cls(
            kind=SegmentType.HOTEL,
            starts_at=datetime.combine(check_in_on, time.min, tzinfo=zone),
            ends_at=datetime.combine(check_out_on, _END_OF_DAY, tzinfo=zone),
            line_number=line_number,
            stay=Stay(location_iata, check_in_on, check_out_on),
        )

    @property
    def is_moving(self) -> bool:
        return self.kind in MOVING_TYPES

    @property
    def is_hotel(self) -> bool:
        return self.kind == SegmentType.HOTEL

    @property
    def origin_iata(self) -> Optional[str]:
        return self.leg.origin_iata if self.leg else None

    @property
    def destination_iata(self) -> Optional[str]:
        return self.leg.destination_iata if self.leg else None

    @property
    def departure_at(self) -> Optional[datetime]:
        return self.starts_at if self.is_moving else None

    @property
    def arrival_at(self) -> Optional[datetime]:
        return self.ends_at if self.is_moving else None

    @property
    def location_iata(self) -> Optional[str]:
        return self.stay.location_iata if self.stay else None

    @property
    def check_in_on(self) -> Optional[date]:
        return self.stay.check_in_on if self.stay else None

    @property
    def check_out_on(self) -> Optional[date]:
        return self.stay.check_out_on if self.stay else None

    @property
    def duration(self) -> timedelta:
        return _utc(self.ends_at) - _utc(self.starts_at)


# ---------------------------------------------------------------------------
# Reservations
# ---------------------------------------------------------------------------

@dataclass
class Reservation:
    start_line_number: int
    segments: List[Segment] = field(default_factory=list)

    def add_segment(self, segment: Segment):
        self.segments.append(segment)

    def validate(self):
        if not self.segments:
            raise ReservationValidationError(
                f"Reservation at line {self.start_line_number} must have at least one segment"
            )


# ---------------------------------------------------------------------------
# Trips
# ---------------------------------------------------------------------------

@dataclass
class Trip:
    """Segments travelled away from the based city and back.

    Moving segments are appended in time order; hotels are inserted
    afterwards next to the segment that brought the traveller to them,
    so ``segments`` is ordered by position, not strictly by time.
    """
    based_city: str
    segments: List[Segment] = field(default_factory=list)
    destination_iata: Optional[str] = None
    closed: bool = False

    def add_segment(self, segment: Segment):
        if self.closed:
            raise TripValidationError("Trip is closed, cannot add segments")
        self.segments.append(segment)

    def close(self):
        """Fix the destination (inferring it if unset) and forbid new segments."""
        if self.closed:
            raise TripValidationError("Trip is already closed")
        if not self.segments:
            raise TripValidationError("Trip must have at least one segment")
        if self.destination_iata is None:
            self.destination_iata = self.infer_destination()
        if self.destination_iata is None:
            raise TripValidationError("Destination IATA could not be inferred")
        self.closed = True

    def infer_destination(self) -> Optional[str]:
        # Last moving segment that neither returns home nor is a connection.
        for segment in reversed(self.moving_segments):
            if segment.destination_iata == self.based_city:
                continue
            if segment.is_a_connection:
                continue
            return segment.destination_iata
        return None

    def insert_hotel_segment(self, hotel: Segment):
        """Insert a hotel after the last moving segment arriving at its location."""
        anchor = None
        for segment in reversed(self.moving_segments):
            if segment.destination_iata == hotel.location_iata:
                anchor = segment
                break
        if anchor is None:
            raise TripValidationError(
                f"Hotel segment could not be inserted: no segment found with destination in {hotel.location_iata}"
            )
        position = next(i for i, s in enumerate(self.segments) if s is anchor)
        self.segments.insert(position + 1, hotel)

    def matches_hotel(self, hotel: Segment) -> bool:
        if not self.segments:
            return False
        return (
            self.destination_iata == hotel.location_iata
            and hotel.check_in_on >= self.departure_date
            and hotel.check_out_on <= self.arrival_date
        )

    @property
    def moving_segments(self) -> List[Segment]:
        return [s for s in self.segments if s.is_moving]

    @property
    def hotel_segments(self) -> List[Segment]:
        return [s for s in self.segments if s.is_hotel]

    @property
    def first_segment(self) -> Optional[Segment]:
        return self.segments[0] if self.segments else None

    @property
    def last_segment(self) -> Optional[Segment]:
        return self.segments[-1] if self.segments else None

    @property
    def last_flight_not_connection(self) -> Optional[Segment]:
        candidates = [s for s in self.moving_segments if not s.is_a_connection]
        return candidates[-1] if candidates else None

    @property
    def departure_date(self) -> Optional[date]:
        return self.first_segment.starts_at.date() if self.segments else None

    @property
    def arrival_date(self) -> Optional[date]:
        return self.last_segment.ends_at.date() if self.segments else None

    @property
    def duration(self) -> Optional[timedelta]:
        """Time from the first segment start to the last segment start."""
        if not self.segments:
            return None
        return _utc(self.last_segment.starts_at) - _utc(self.first_segment.starts_at)

    @property
    def span(self) -> Optional[timedelta]:
        """Time from the first segment start to the last segment end."""
        if not self.segments:
            return None
        return _utc(self.last_segment.ends_at) - _utc(self.first_segment.starts_at)
