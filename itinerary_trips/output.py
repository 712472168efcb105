"""Output formatters: human-readable trips, JSON and CSV."""

import csv
import json
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from itinerary_trips.models import Segment, SegmentType, Trip
from itinerary_trips.normalize.airports import iata_to_city


def _date_str(d: Optional[date]) -> str:
    if d is None:
        return "?"
    if isinstance(d, datetime):
        return d.strftime("%Y-%m-%d")
    return d.isoformat()


def _date_time_str(dt: datetime) -> str:
    return dt.strftime("%Y-%m-%d %H:%M")


def _time_str(dt: datetime) -> str:
    return dt.strftime("%H:%M")


def _duration_str(trip: Trip) -> str:
    duration = trip.duration
    if duration is None:
        return "?"
    hours, rest = divmod(int(duration.total_seconds()), 3600)
    days, hours = divmod(hours, 24)
    minutes = rest // 60
    if days:
        return f"{days}d {hours}h {minutes:02d}m"
    return f"{hours}h {minutes:02d}m"


# ---------------------------------------------------------------------------
# Human-readable trips
# ---------------------------------------------------------------------------

def format_segment(segment: Segment) -> str:
    if segment.kind == SegmentType.HOTEL:
        return (
            f"Hotel at {segment.location_iata} on {_date_str(segment.check_in_on)} "
            f"to {_date_str(segment.check_out_on)}"
        )
    label = "Flight" if segment.kind == SegmentType.FLIGHT else "Train"
    return (
        f"{label} from {segment.origin_iata} to {segment.destination_iata} "
        f"at {_date_time_str(segment.departure_at)} to {_time_str(segment.arrival_at)}"
    )


def format_trip(trip: Trip) -> str:
    lines = [f"TRIP to {trip.destination_iata or '?'}"]
    for segment in trip.segments:
        lines.append(format_segment(segment))
    return "\n".join(lines)


def format_trips(trips: List[Trip]) -> str:
    """One block per trip, separated by a blank line."""
    return "\n\n".join(format_trip(t) for t in trips)


def format_errors(errors: List[str]) -> str:
    lines = [f"{len(errors)} problem(s) found:"]
    for i, err in enumerate(errors, start=1):
        lines.append(f"  {i}. {err}")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# JSON output
# ---------------------------------------------------------------------------

def _segment_dict(segment: Segment) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "type": segment.kind.value,
        "line_number": segment.line_number,
        "starts_at": segment.starts_at.isoformat(),
        "ends_at": segment.ends_at.isoformat(),
    }
    if segment.is_moving:
        d.update({
            "origin_iata": segment.origin_iata,
            "destination_iata": segment.destination_iata,
            "is_a_connection": segment.is_a_connection,
        })
    else:
        d.update({
            "location_iata": segment.location_iata,
            "check_in_on": _date_str(segment.check_in_on),
            "check_out_on": _date_str(segment.check_out_on),
        })
    return d


def trip_to_dict(trip: Trip) -> Dict[str, Any]:
    return {
        "destination_iata": trip.destination_iata,
        "destination_city": iata_to_city(trip.destination_iata) if trip.destination_iata else None,
        "departure_date": _date_str(trip.departure_date),
        "arrival_date": _date_str(trip.arrival_date),
        "duration_seconds": int(trip.duration.total_seconds()) if trip.duration is not None else None,
        "closed": trip.closed,
        "segments": [_segment_dict(s) for s in trip.segments],
    }


def trips_to_json(trips: List[Trip], errors: List[str], path: Path):
    """Write trips and diagnostics to a JSON file."""
    data = {
        "trips": [trip_to_dict(t) for t in trips],
        "errors": list(errors),
        "summary": {
            "total_trips": len(trips),
            "total_segments": sum(len(t.segments) for t in trips),
            "total_errors": len(errors),
        },
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


# ---------------------------------------------------------------------------
# CSV output
# ---------------------------------------------------------------------------

def trips_to_csv(trips: List[Trip], path: Path):
    """Write one row per segment, tagged with its trip number."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow([
            "trip", "trip_destination", "type", "line_number", "origin", "destination",
            "starts_at", "ends_at", "is_a_connection",
        ])
        for n, trip in enumerate(trips, start=1):
            for s in trip.segments:
                origin = s.origin_iata if s.is_moving else s.location_iata
                destination = s.destination_iata if s.is_moving else s.location_iata
                writer.writerow([
                    n, trip.destination_iata or "", s.kind.value, s.line_number,
                    origin, destination, _date_time_str(s.starts_at),
                    _date_time_str(s.ends_at), "yes" if s.is_a_connection else "",
                ])
