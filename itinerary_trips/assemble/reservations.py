"""Group segment lines under their RESERVATION blocks."""

from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

from itinerary_trips.context import Context
from itinerary_trips.errors import Diagnostic, ParseError, ReservationValidationError
from itinerary_trips.models import Reservation, Segment, Statement
from itinerary_trips.parse.segment_parser import parse_segment

SegmentParserFn = Callable[[str, int, Context], Segment]


@dataclass
class ReservationBuild:
    reservations: List[Reservation] = field(default_factory=list)
    segments: List[Segment] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def errors(self) -> List[str]:
        return [d.message for d in self.diagnostics]


def build_reservations(
    statements: Iterable[Statement],
    context: Context,
    parse: SegmentParserFn = parse_segment,
) -> ReservationBuild:
    """Consume statements once and collect reservations and segments.

    Never raises for bad input: unknown lines, orphan segment lines,
    unparseable segments and empty reservations all become diagnostics,
    in the order they were met. Segments are also returned as one flat
    list, which is all the trip builder needs.
    """
    result = ReservationBuild()
    current: Optional[Reservation] = None

    for statement in statements:
        if statement.is_reservation_start:
            current = Reservation(start_line_number=statement.line_number)
            result.reservations.append(current)

        elif statement.is_segment_line:
            if current is None:
                result.diagnostics.append(Diagnostic(
                    f"Segment line at line {statement.line_number} must be part of a reservation",
                    line_number=statement.line_number,
                ))
                continue
            try:
                segment = parse(statement.value, statement.line_number, context)
            except ParseError as e:
                result.diagnostics.append(Diagnostic(e.message, line_number=statement.line_number))
                continue
            current.add_segment(segment)
            result.segments.append(segment)

        else:
            result.diagnostics.append(Diagnostic(
                f"Unknown statement at line {statement.line_number}: {statement.value}",
                line_number=statement.line_number,
            ))

    # Empty reservations are reported but kept
    for reservation in result.reservations:
        try:
            reservation.validate()
        except ReservationValidationError as e:
            result.diagnostics.append(Diagnostic(e.message, line_number=reservation.start_line_number))

    return result
