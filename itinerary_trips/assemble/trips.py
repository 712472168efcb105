"""Trip assembly: sorted Segments → Trips.

A trip starts with a flight or train leaving the based city and is
closed by one arriving back there. Segments in between are attached
when they continue from where the trip currently is, with same-day
connections tracked separately so they are not mistaken for the
destination. Hotels are attached in a second pass to the trip whose
destination and dates contain the stay.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Iterable, List, Optional

from dateutil import tz

from itinerary_trips.config import CONNECTION_WINDOW
from itinerary_trips.context import Context
from itinerary_trips.errors import Diagnostic, TripBuildError, TripValidationError
from itinerary_trips.models import Segment, Trip


@dataclass
class TripBuild:
    trips: List[Trip] = field(default_factory=list)
    segments: List[Segment] = field(default_factory=list)  # sorted by starts_at
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def errors(self) -> List[str]:
        return [d.message for d in self.diagnostics]

    @property
    def success(self) -> bool:
        return not self.diagnostics

    @property
    def fatal(self) -> bool:
        return any(d.fatal for d in self.diagnostics)


def sort_segments(segments: Iterable[Segment]) -> List[Segment]:
    """Stable sort by absolute start time; ties keep their input order."""
    return sorted(segments, key=lambda s: s.starts_at.astimezone(tz.UTC))


# ---------------------------------------------------------------------------
# Based city sanity check
# ---------------------------------------------------------------------------

def guess_base_candidates(moving: List[Segment]) -> List[str]:
    """Cities that are only ever departed from, never arrived at."""
    destinations = {s.destination_iata for s in moving}
    candidates: List[str] = []
    for s in moving:
        if s.origin_iata not in destinations and s.origin_iata not in candidates:
            candidates.append(s.origin_iata)
    return candidates


def _check_based_city(moving: List[Segment], based_city: str, diagnostics: List[Diagnostic]):
    if moving[0].origin_iata == based_city:
        return

    if any(s.origin_iata == based_city for s in moving):
        diagnostics.append(Diagnostic(
            f"Based city {based_city} does not match the first segment origin. "
            "Continuing; this could lead to incorrect results."
        ))
        return

    msg = f"Based city {based_city} does not match any segment origin."
    candidates = guess_base_candidates(moving)
    if candidates:
        msg += f" Possible base cities: {', '.join(candidates)}"
    raise TripBuildError(msg)


# ---------------------------------------------------------------------------
# Moving segments
# ---------------------------------------------------------------------------

def is_connection(trip: Trip, segment: Segment, window: timedelta = CONNECTION_WINDOW) -> bool:
    """True when ``segment`` chains onto the trip's last segment.

    Once the last segment is flagged as a connection the chain keeps
    going regardless of elapsed time.
    """
    last = trip.last_segment
    if last is None or not last.is_moving:
        return False
    if last.is_a_connection:
        return True
    return (
        segment.starts_at.astimezone(tz.UTC) - last.starts_at.astimezone(tz.UTC) < window
        and last.destination_iata == segment.origin_iata
    )


def _close(trip: Trip):
    try:
        trip.close()
    except TripValidationError as e:
        first = trip.first_segment
        where = f"Trip starting at line {first.line_number}" if first else "Trip"
        raise TripBuildError(f"{where}: {e.message[:1].lower()}{e.message[1:]}", cause=e)


def _assemble_moving(moving: List[Segment], based_city: str, result: TripBuild):
    current: Optional[Trip] = None

    for index, segment in enumerate(moving):
        if current is None:
            if segment.origin_iata == based_city:
                current = Trip(based_city=based_city)
                current.add_segment(segment)
                result.trips.append(current)
            else:
                result.diagnostics.append(Diagnostic(
                    f"Segment at line {segment.line_number} does not start at base city {based_city}",
                    line_number=segment.line_number,
                ))

        elif segment.destination_iata == based_city:
            current.add_segment(segment)
            _close(current)
            current = None

        elif is_connection(current, segment):
            segment.is_a_connection = True
            current.add_segment(segment)
            current.destination_iata = segment.destination_iata
            following = moving[index + 1] if index + 1 < len(moving) else None
            if following is None or following.origin_iata != segment.destination_iata:
                # Chain broken: leave the trip for the final close
                current = None

        elif segment.origin_iata == current.last_segment.destination_iata:
            current.add_segment(segment)
            current.destination_iata = segment.destination_iata

        else:
            result.diagnostics.append(Diagnostic(
                f"Segment at line {segment.line_number} must start in {based_city} "
                f"or end in {based_city} or connect with the current trip",
                line_number=segment.line_number,
            ))

    # Trips that never returned home are closed with what they have
    for trip in result.trips:
        if not trip.closed:
            _close(trip)


# ---------------------------------------------------------------------------
# Hotels
# ---------------------------------------------------------------------------

def _attach_hotels(hotels: List[Segment], result: TripBuild):
    for hotel in hotels:
        trip = next((t for t in result.trips if t.matches_hotel(hotel)), None)
        if trip is None:
            result.diagnostics.append(Diagnostic(
                f"Hotel at {hotel.location_iata} (line {hotel.line_number}) does not match any trip",
                line_number=hotel.line_number,
            ))
            continue
        try:
            trip.insert_hotel_segment(hotel)
        except TripValidationError as e:
            result.diagnostics.append(Diagnostic(
                f"Hotel at {hotel.location_iata} (line {hotel.line_number}): {e.message}",
                line_number=hotel.line_number,
            ))


def build_trips(segments: Iterable[Segment], context: Context) -> TripBuild:
    """Build trips from segments given in any order.

    Recoverable problems are collected as diagnostics. A fatal problem
    (no flights or trains, based city absent, destination impossible to
    infer) is recorded as the last diagnostic and stops the build; trips
    assembled up to that point are still returned.
    """
    result = TripBuild(segments=sort_segments(segments))
    based_city = context.based_city
    moving = [s for s in result.segments if s.is_moving]
    hotels = [s for s in result.segments if s.is_hotel]

    try:
        if not moving:
            raise TripBuildError("No flight/train segments found: cannot infer any trips")
        _assemble_moving(moving, based_city, result)
        _check_based_city(moving, based_city, result.diagnostics)
        _attach_hotels(hotels, result)
    except TripBuildError as e:
        result.diagnostics.append(Diagnostic(e.message, fatal=True))

    return result
