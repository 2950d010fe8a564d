"""Temporal Extractor for natural-language date and time expressions

Front door of the engine: normalizes the text, builds a timezone-aware
reference clock and runs the configured rule catalogs through the scanning
loop.
"""

from datetime import datetime, tzinfo
from typing import Callable, List, Optional, Sequence

from dateutil.tz import gettz

from ...core.config_manager import MatchingConfig
from ...core.error_handler import ConfigurationError
from ...core.logging_manager import LoggingManager
from ..rules import load_interpreters
from .scanner import AttemptTrace, Clock, Interpreter, ReferenceTimePolicy, scan
from .tokens import Match


def resolve_timezone(name: str) -> tzinfo:
    """Look up a timezone by name (``Europe/Berlin``, ``UTC``, ``EST5EDT``).

    Raises:
        ConfigurationError: If the name is unknown
    """
    tz = gettz(name)
    if tz is None:
        raise ConfigurationError(f"Unknown timezone: {name}")
    return tz


def normalize_text(text: str) -> str:
    """Lowercase ``text`` without changing its length.

    Characters whose lowercase form is longer than one character are kept
    as they are, so offsets in the result are offsets in ``text``.
    """
    return "".join(c.lower() if len(c.lower()) == 1 else c for c in text)


class TemporalExtractor:
    """Extracts date/time expressions with fuzzy word matching."""

    def __init__(
        self,
        config: Optional[MatchingConfig] = None,
        interpreters: Optional[Sequence[Interpreter]] = None,
        clock: Optional[Clock] = None,
    ):
        """Initialize temporal extractor.

        Args:
            config: Matching settings, defaults when omitted
            interpreters: Rule interpreters in priority order; the catalogs
                named in ``config`` when omitted
            clock: Source of reference times, the current time when omitted
        """
        self.logger = LoggingManager.get_logger(__name__)
        self.config = config or MatchingConfig()
        self.interpreters = (
            list(interpreters) if interpreters is not None
            else load_interpreters(self.config.catalogs)
        )
        self.policy = ReferenceTimePolicy(self.config.reference_time)
        self.clock = clock

    def _make_clock(self, tz: tzinfo) -> Clock:
        def now() -> datetime:
            if self.clock is None:
                return datetime.now(tz)
            current = self.clock()
            if current.tzinfo is None:
                return current.replace(tzinfo=tz)
            return current.astimezone(tz)
        return now

    def extract(
        self,
        text: str,
        timezone: Optional[str] = None,
        exact_match: Optional[bool] = None,
        on_attempt: Optional[Callable[[AttemptTrace], None]] = None,
    ) -> List[Match]:
        """Extract every date/time expression in ``text``.

        Args:
            text: Input sentence
            timezone: Timezone of the reference time, the configured default when omitted
            exact_match: Disable typo tolerance, the configured default when omitted
            on_attempt: Optional hook observing every rule attempt

        Returns:
            Matches in text order; unrecognized text yields an empty list
        """
        tz = resolve_timezone(timezone or self.config.default_timezone)
        exact = self.config.exact_match if exact_match is None else exact_match

        self.logger.debug(f"Starting temporal extraction (exact_match={exact})")

        matches = scan(
            normalize_text(text),
            exact,
            self.interpreters,
            clock=self._make_clock(tz),
            policy=self.policy,
            on_attempt=on_attempt,
        )

        self.logger.info(
            f"Temporal extraction complete: found {len(matches)} expressions, "
            f"{sum(1 for m in matches if not m.ok)} invalid"
        )

        return matches


def extract(timezone: str, text: str, exact_match: bool = False) -> List[Match]:
    """Extract date/time expressions from ``text`` with the default catalogs."""
    return TemporalExtractor().extract(text, timezone=timezone, exact_match=exact_match)
