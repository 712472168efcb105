"""Line scanner: raw itinerary text → classified Statements."""

import io
import re
from typing import Iterator, List, TextIO, Union

from itinerary_trips.errors import InvalidInputError
from itinerary_trips.models import Statement, StatementType

_RESERVATION_START = re.compile(r'^RESERVATION$', re.I)
_SEGMENT_PREFIX = re.compile(r'^SEGMENT:', re.I)
_SEGMENT_LINE = re.compile(r'^SEGMENT:\s*(\S.*)$', re.I)


def classify_line(line: str, line_number: int, raw: str = "") -> Statement:
    """Classify one trimmed, non-empty line."""
    if _RESERVATION_START.match(line):
        return Statement(StatementType.RESERVATION_START, None, line_number, raw)

    if _SEGMENT_PREFIX.match(line):
        m = _SEGMENT_LINE.match(line)
        if m:
            return Statement(StatementType.SEGMENT_LINE, m.group(1).strip(), line_number, raw)

    return Statement(StatementType.UNKNOWN, line, line_number, raw)


class Scanner:
    """Iterable over the statements of a text or a text stream.

    Each iteration starts again from the first line, so a Scanner can be
    walked more than once. Streams are rewound when they support seeking.
    """

    def __init__(self, source: Union[str, TextIO]):
        if not isinstance(source, (str, io.TextIOBase)):
            raise InvalidInputError(f"Input type not supported: {type(source).__name__}")
        self._source = source

    def _lines(self) -> Iterator[str]:
        if isinstance(self._source, str):
            return iter(io.StringIO(self._source))
        if self._source.seekable():
            self._source.seek(0)
        return iter(self._source)

    def __iter__(self) -> Iterator[Statement]:
        for line_number, raw_line in enumerate(self._lines(), start=1):
            line = raw_line.strip()
            if not line:
                continue
            yield classify_line(line, line_number, raw_line)


def scan(source: Union[str, TextIO]) -> List[Statement]:
    return list(Scanner(source))
