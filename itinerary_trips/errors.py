"""Error types and diagnostics for the itinerary pipeline.

Exceptions are raised inside a stage (parsing a line, validating a
segment, closing a trip) and converted into Diagnostic records at the
stage boundary, so callers see every problem of a run in one list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ItineraryError(Exception):
    """Base error for the itinerary domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class ContextError(ItineraryError):
    """Invalid run context (based city or time zone).

    Attributes:
        setting_name: Name of the offending setting
    """

    setting_name: str = ""


@dataclass
class InvalidInputError(ItineraryError):
    """The scanner was handed a source it cannot read lines from."""


@dataclass
class ParseError(ItineraryError):
    """A line could not be turned into a domain object.

    Attributes:
        line_number: 1-indexed line of the offending input
    """

    line_number: Optional[int] = None


@dataclass
class SegmentParseError(ParseError):
    """A segment line does not follow the Flight/Train/Hotel grammar."""


@dataclass
class ValidationError(ItineraryError):
    """A domain entity invariant was violated."""


@dataclass
class SegmentValidationError(ValidationError):
    pass


@dataclass
class ReservationValidationError(ValidationError):
    pass


@dataclass
class TripValidationError(ValidationError):
    pass


@dataclass
class TripBuildError(ItineraryError):
    """Trip building cannot continue for this run."""


@dataclass(frozen=True)
class Diagnostic:
    """A problem found while processing the input.

    Fatal diagnostics stop trip building; recoverable ones only drop the
    offending line or segment.
    """

    message: str
    line_number: Optional[int] = None
    fatal: bool = False

    def __str__(self) -> str:
        return self.message
