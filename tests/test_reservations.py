from __future__ import annotations

from conftest import flight
from itinerary_trips.assemble.reservations import build_reservations
from itinerary_trips.errors import SegmentParseError
from itinerary_trips.models import Statement, StatementType
from itinerary_trips.parse.scanner import scan


def _start(line: int) -> Statement:
    return Statement(StatementType.RESERVATION_START, None, line, "RESERVATION")


def _segment(line: int, value: str = "Segment") -> Statement:
    return Statement(StatementType.SEGMENT_LINE, value, line, value)


class _StubParser:
    def __init__(self, fail_on=()):
        self.fail_on = set(fail_on)
        self.calls = []

    def __call__(self, text, line_number, context):
        self.calls.append((text, line_number, context))
        if line_number in self.fail_on:
            raise SegmentParseError(f"Parsing error at line {line_number}", line_number=line_number)
        return flight("MAD", "BCN", "2026-01-01", "10:00", "12:00", line=line_number)


def test_groups_segments_under_reservation(context) -> None:
    parser = _StubParser()

    result = build_reservations([_start(1), _segment(2), _segment(3)], context, parse=parser)

    assert len(result.reservations) == 1
    assert result.reservations[0].start_line_number == 1
    assert result.reservations[0].segments == result.segments
    assert [s.line_number for s in result.segments] == [2, 3]
    assert result.errors == []
    assert parser.calls[0] == ("Segment", 2, context)


def test_flattens_segments_across_reservations(context) -> None:
    statements = [_start(1), _segment(2), _start(3), _segment(4), _segment(5)]

    result = build_reservations(statements, context, parse=_StubParser())

    assert [len(r.segments) for r in result.reservations] == [1, 2]
    assert [s.line_number for s in result.segments] == [2, 4, 5]


def test_segment_without_reservation_is_dropped(context) -> None:
    parser = _StubParser()

    result = build_reservations([_segment(1)], context, parse=parser)

    assert result.reservations == []
    assert result.segments == []
    assert result.errors == ["Segment line at line 1 must be part of a reservation"]
    assert parser.calls == []


def test_empty_reservation_is_reported_but_kept(context) -> None:
    result = build_reservations([_start(1)], context, parse=_StubParser())

    assert len(result.reservations) == 1
    assert result.errors == ["Reservation at line 1 must have at least one segment"]


def test_parse_errors_drop_only_that_segment(context) -> None:
    statements = [_start(1), _segment(2), _segment(3), _segment(4)]

    result = build_reservations(statements, context, parse=_StubParser(fail_on=[3]))

    assert [s.line_number for s in result.segments] == [2, 4]
    assert result.errors == ["Parsing error at line 3"]
    assert result.diagnostics[0].line_number == 3
    assert not result.diagnostics[0].fatal


def test_unknown_statements_are_reported(context) -> None:
    unknown = Statement(StatementType.UNKNOWN, "foo bar", 2, "foo bar")

    result = build_reservations([_start(1), unknown, _segment(3)], context, parse=_StubParser())

    assert result.errors == ["Unknown statement at line 2: foo bar"]
    assert len(result.segments) == 1


def test_errors_follow_statement_order(context) -> None:
    text = (
        "SEGMENT: Flight MAD 2026-01-01 10:00 -> BCN 12:00\n"
        "RESERVATION\n"
        "garbage\n"
        "SEGMENT: Flight MAD 2026-13-01 10:00 -> BCN 12:00\n"
        "RESERVATION\n"
    )

    result = build_reservations(scan(text), context)

    assert result.errors == [
        "Segment line at line 1 must be part of a reservation",
        "Unknown statement at line 3: garbage",
        "Invalid date or time at line 4: 'Flight MAD 2026-13-01 10:00 -> BCN 12:00'",
        "Reservation at line 2 must have at least one segment",
        "Reservation at line 5 must have at least one segment",
    ]


def test_no_statements(context) -> None:
    result = build_reservations([], context)

    assert result.reservations == [] and result.segments == [] and result.errors == []
