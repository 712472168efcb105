"""Run context: the based city and the time zone used for all wall-clock input."""

from __future__ import annotations
from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional

from dateutil import tz

from itinerary_trips.config import DEFAULT_TIME_ZONE
from itinerary_trips.errors import ContextError
from itinerary_trips.normalize.airports import LocationResolver


def _valid_zone(name: str) -> bool:
    # gettz("") falls back to the machine's local zone
    return bool(name.strip()) and tz.gettz(name) is not None


@dataclass(frozen=True)
class Context:
    """Immutable per-run settings shared read-only by every stage.

    Build it with ``Context.create`` so the based city and time zone are
    validated and the zone is resolved in order: explicit value, resolver
    lookup from the based city, then DEFAULT_TIME_ZONE.
    """
    based_city: str
    time_zone: str = DEFAULT_TIME_ZONE

    @classmethod
    def create(
        cls,
        based_city: str,
        time_zone: Optional[str] = None,
        resolver: Optional[LocationResolver] = None,
    ) -> "Context":
        if not isinstance(based_city, str) or len(based_city) != 3:
            raise ContextError("Based city must be a 3 letter string", setting_name="based_city")

        location = None
        if resolver is not None:
            location = resolver.resolve(based_city)
            if location is None:
                raise ContextError("Based city must be a valid IATA code", setting_name="based_city")

        if time_zone is not None:
            if not isinstance(time_zone, str):
                raise ContextError("Time zone must be a string", setting_name="time_zone")
            if not _valid_zone(time_zone):
                raise ContextError(f"Time zone must be a valid time zone, got {time_zone!r}",
                                   setting_name="time_zone")
            return cls(based_city=based_city, time_zone=time_zone)

        if location is not None and location.tz_name and _valid_zone(location.tz_name):
            return cls(based_city=based_city, time_zone=location.tz_name)

        return cls(based_city=based_city, time_zone=DEFAULT_TIME_ZONE)

    @property
    def tzinfo(self) -> tzinfo:
        return tz.gettz(self.time_zone) or tz.UTC
