"""Token and result types shared by the scanning engine and rule catalogs."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional

from dateutil.relativedelta import relativedelta

from ...core.error_handler import ErrorKind, SemanticError

SECONDS_PER_HOUR = 3600


class WhenMarker(Enum):
    """Relative markers and meridiem indicators."""
    AM = "am"
    PM = "pm"
    THIS = "this"
    LAST = "last"
    PAST = "past"
    NEXT = "next"
    NOW = "now"
    TODAY = "today"
    TONIGHT = "tonight"
    TOMORROW = "tomorrow"
    YESTERDAY = "yesterday"


class Day(Enum):
    """Days of the week, numbered like ``datetime.weekday()``."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


@dataclass(frozen=True)
class Token:
    """Base class of recognized semantic units. Catalogs may subclass it."""


@dataclass(frozen=True)
class Hour(Token):
    value: int


@dataclass(frozen=True)
class When(Token):
    marker: WhenMarker


@dataclass(frozen=True)
class Weekday(Token):
    day: Day


@dataclass(frozen=True)
class Week(Token):
    pass


@dataclass(frozen=True)
class PrioritizedToken:
    """A token plus the priority used to order it for derivation.

    Lower priorities sort first. ``NO_TOKEN`` and ``STUB`` carry no token.
    """
    token: Optional[Token] = None
    priority: int = 0
    stub: bool = False

    @property
    def is_empty(self) -> bool:
        return self.token is None


NO_TOKEN = PrioritizedToken()
STUB = PrioritizedToken(stub=True)


@dataclass(frozen=True)
class TokenMatch:
    """Result of one successful recognizer attempt."""
    token: PrioritizedToken
    distance: int = 0


@dataclass(frozen=True)
class MatchSpan:
    """Inclusive character range of a match."""
    start: int
    end: int


@dataclass(frozen=True)
class TimeShift:
    """Semantic value derived from a match.

    ``days`` offsets the reference date; ``seconds`` is the derived time value
    counted from midnight. ``time_of_day`` is the wall-clock position used
    when resolving, for rules whose derived value is not one (12 a.m. derives
    twelve hours but means midnight). A shift without either keeps the
    reference time.
    """
    days: int = 0
    seconds: Optional[int] = None
    time_of_day: Optional[int] = field(default=None, compare=False)

    @property
    def hours(self) -> Optional[int]:
        return None if self.seconds is None else self.seconds // SECONDS_PER_HOUR

    def resolve(self, reference: datetime) -> datetime:
        """Apply the shift to ``reference``."""
        resolved = reference + relativedelta(days=self.days)
        seconds = self.seconds if self.time_of_day is None else self.time_of_day
        if seconds is not None:
            midnight = resolved.replace(hour=0, minute=0, second=0, microsecond=0)
            resolved = midnight + timedelta(seconds=seconds)
        return resolved


@dataclass
class RuleOutcome:
    """Result of running one rule interpreter against a slice of text."""
    tail: str
    tokens: Optional[List[Token]] = None
    span: Optional[MatchSpan] = None
    time_shift: Optional[TimeShift] = None
    error: Optional[SemanticError] = None
    failure: Optional[ErrorKind] = None

    @property
    def is_match(self) -> bool:
        return self.tokens is not None and self.span is not None


@dataclass
class Match:
    """A match with absolute offsets in the scanned text."""
    tokens: List[Token]
    time_shift: Optional[TimeShift]
    start: int
    end: int
    rule: str = ""
    reference_time: Optional[datetime] = field(default=None, compare=False)
    error: Optional[SemanticError] = field(default=None, compare=False)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def span(self) -> MatchSpan:
        return MatchSpan(self.start, self.end)

    def resolve(self) -> Optional[datetime]:
        """The moment this match refers to, relative to its reference time."""
        if self.time_shift is None or self.reference_time is None:
            return None
        return self.time_shift.resolve(self.reference_time)
