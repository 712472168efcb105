from __future__ import annotations

import io

import pytest

from itinerary_trips.errors import InvalidInputError
from itinerary_trips.models import StatementType
from itinerary_trips.parse.scanner import Scanner, classify_line, scan

TEXT = """RESERVATION
SEGMENT: Flight MAD 2025-24-11 09:00:00 -> BCN 10:30:00

SEGMENT malformed
foo bar
"""


def test_yields_one_statement_per_non_blank_line() -> None:
    statements = scan(TEXT)

    assert [s.kind for s in statements] == [
        StatementType.RESERVATION_START,
        StatementType.SEGMENT_LINE,
        StatementType.UNKNOWN,
        StatementType.UNKNOWN,
    ]
    # blank line 3 is skipped but still counted
    assert [s.line_number for s in statements] == [1, 2, 4, 5]


def test_statement_values() -> None:
    res, seg, malformed, unknown = scan(TEXT)

    assert res.value is None
    assert seg.value == "Flight MAD 2025-24-11 09:00:00 -> BCN 10:30:00"
    assert malformed.value == "SEGMENT malformed"
    assert unknown.value == "foo bar"
    assert unknown.raw == "foo bar\n"


def test_classification_is_case_insensitive() -> None:
    assert classify_line("reservation", 1).kind == StatementType.RESERVATION_START
    seg = classify_line("segment:   Hotel BCN 2026-01-01 -> 2026-01-02", 2)
    assert seg.kind == StatementType.SEGMENT_LINE
    assert seg.value == "Hotel BCN 2026-01-01 -> 2026-01-02"


def test_reservation_must_match_exactly() -> None:
    assert classify_line("RESERVATION 1", 1).kind == StatementType.UNKNOWN


def test_segment_prefix_without_content_is_unknown() -> None:
    statement = classify_line("SEGMENT:", 3)

    assert statement.kind == StatementType.UNKNOWN
    assert statement.value == "SEGMENT:"


def test_surrounding_whitespace_is_trimmed() -> None:
    statements = scan("   RESERVATION   \n\tSEGMENT: Flight MAD 2026-01-01 10:00 -> BCN 12:00  \n")

    assert statements[0].kind == StatementType.RESERVATION_START
    assert statements[1].value == "Flight MAD 2026-01-01 10:00 -> BCN 12:00"


def test_scanner_is_lazy_and_restartable() -> None:
    scanner = Scanner(TEXT)

    first = iter(scanner)
    assert next(first).kind == StatementType.RESERVATION_START

    assert [s.line_number for s in scanner] == [1, 2, 4, 5]
    assert [s.line_number for s in scanner] == [1, 2, 4, 5]


def test_reads_text_streams_and_rewinds_them() -> None:
    stream = io.StringIO(TEXT)
    scanner = Scanner(stream)

    assert len(list(scanner)) == 4
    assert len(list(scanner)) == 4


def test_reads_files(tmp_path) -> None:
    path = tmp_path / "input.txt"
    path.write_text(TEXT, encoding="utf-8")

    with open(path, encoding="utf-8") as f:
        assert len(scan(f)) == 4


@pytest.mark.parametrize("source", [object(), b"RESERVATION", None, ["RESERVATION"]])
def test_unsupported_source_raises(source) -> None:
    with pytest.raises(InvalidInputError, match="Input type not supported"):
        Scanner(source)


def test_empty_text_yields_nothing() -> None:
    assert scan("") == []
    assert scan("\n\n   \n") == []
