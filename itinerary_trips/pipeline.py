"""Orchestrates the full pipeline: scan → reservations → trips."""

import sys
from dataclasses import dataclass, field
from typing import List, Optional, TextIO, Tuple, Union

from itinerary_trips.assemble.reservations import build_reservations
from itinerary_trips.assemble.trips import build_trips
from itinerary_trips.config import BASED_CITY, TIME_ZONE
from itinerary_trips.context import Context
from itinerary_trips.errors import Diagnostic, InvalidInputError
from itinerary_trips.models import Reservation, Trip
from itinerary_trips.normalize.airports import AirportTable, LocationResolver
from itinerary_trips.parse.scanner import Scanner


@dataclass
class ItineraryResult:
    trips: List[Trip] = field(default_factory=list)
    reservations: List[Reservation] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def errors(self) -> List[str]:
        return [d.message for d in self.diagnostics]

    @property
    def success(self) -> bool:
        return not self.diagnostics


def parse_itinerary(source: Union[str, TextIO], context: Context) -> ItineraryResult:
    """Turn itinerary text into trips plus every diagnostic found on the way.

    Reservation diagnostics come first (in line order), followed by the
    trip builder's. Trip building runs even when some lines were rejected.
    """
    try:
        statements = Scanner(source)
    except InvalidInputError as e:
        return ItineraryResult(diagnostics=[Diagnostic(e.message, fatal=True)])

    reservations = build_reservations(statements, context)
    trips = build_trips(reservations.segments, context)

    return ItineraryResult(
        trips=trips.trips,
        reservations=reservations.reservations,
        diagnostics=reservations.diagnostics + trips.diagnostics,
    )


def run_pipeline(
    source: Union[str, TextIO],
    based_city: Optional[str] = None,
    time_zone: Optional[str] = None,
    resolver: Optional[LocationResolver] = None,
    verbose: bool = False,
) -> Tuple[List[Trip], List[str]]:
    """Run the full pipeline end to end.

    Args:
        source: Itinerary text or an open text stream.
        based_city: Home IATA code. Defaults to config BASED_CITY.
        time_zone: IANA zone for wall-clock times. Defaults to config
            TIME_ZONE, then the based city's zone.
        resolver: Location lookup for the based city. Defaults to the
            built-in AirportTable.
        verbose: Print progress to stderr.

    Returns:
        (trips, errors)

    Raises:
        ContextError: the based city or time zone is invalid.
    """
    based_city = based_city or BASED_CITY
    time_zone = time_zone or TIME_ZONE
    resolver = resolver if resolver is not None else AirportTable()

    def log(msg):
        if verbose:
            print(msg, file=sys.stderr)

    context = Context.create(based_city, time_zone=time_zone, resolver=resolver)
    log(f"Based in {context.based_city} ({context.time_zone})")

    result = parse_itinerary(source, context)
    segment_count = sum(len(r.segments) for r in result.reservations)
    log(f"  Reservations: {len(result.reservations)}")
    log(f"  Segments parsed: {segment_count}")
    log(f"  Trips built: {len(result.trips)}")
    if result.errors:
        log(f"  Problems found: {len(result.errors)}")

    return result.trips, result.errors
