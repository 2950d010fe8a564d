"""Multi-match scanning loop.

Applies an ordered list of rule interpreters to the remaining text, accepts
the first one that matches, advances past it and starts over from the top of
the list. Earlier interpreters win when several could match.

    input:  "you can call me this friday or next monday"
    output: [When(THIS), Weekday(FRIDAY)], [When(NEXT), Weekday(MONDAY)]
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional, Sequence

from dateutil.tz import tzlocal

from ...core.error_handler import ErrorKind
from ...core.logging_manager import LoggingManager
from .tokens import Match, RuleOutcome

logger = LoggingManager.get_logger(__name__)

Interpreter = Callable[[str, bool, datetime], RuleOutcome]
Clock = Callable[[], datetime]


class ReferenceTimePolicy(Enum):
    """When the scanning loop samples its clock."""
    PER_CALL = "per_call"        # once per scan
    PER_ATTEMPT = "per_attempt"  # before every interpreter attempt


@dataclass(frozen=True)
class AttemptTrace:
    """What happened when one interpreter was tried at one offset."""
    rule: str
    offset: int
    matched: bool
    failure: Optional[ErrorKind]
    reference_time: datetime


def local_now() -> datetime:
    return datetime.now(tzlocal())


def interpreter_name(interpreter: Interpreter) -> str:
    return getattr(interpreter, "name", None) or getattr(interpreter, "__name__", repr(interpreter))


def scan(
    text: str,
    exact_match: bool,
    interpreters: Sequence[Interpreter],
    clock: Optional[Clock] = None,
    policy: ReferenceTimePolicy = ReferenceTimePolicy.PER_CALL,
    on_attempt: Optional[Callable[[AttemptTrace], None]] = None,
) -> List[Match]:
    """Collect all matches of ``interpreters`` in ``text``.

    Failures inside an interpreter only mean it did not match; they are
    reported through ``on_attempt`` and the debug log, never raised.

    Args:
        text: Text to scan (already normalized by the caller)
        exact_match: Disable typo tolerance in every recognizer
        interpreters: Rule interpreters in priority order
        clock: Source of reference times, local time by default
        policy: Sample the clock once per call or before every attempt
        on_attempt: Optional diagnostic hook

    Returns:
        Matches with absolute offsets, in text order
    """
    clock = clock or local_now
    call_time = clock() if policy is ReferenceTimePolicy.PER_CALL else None

    matches: List[Match] = []
    end_of_last_match = 0

    while True:
        had_match = False

        for interpreter in interpreters:
            reference_time = call_time if call_time is not None else clock()
            outcome = interpreter(text, exact_match, reference_time)
            name = interpreter_name(interpreter)

            if on_attempt is not None:
                on_attempt(AttemptTrace(
                    rule=name,
                    offset=end_of_last_match,
                    matched=outcome.is_match,
                    failure=None if outcome.is_match else (outcome.failure or ErrorKind.UNKNOWN),
                    reference_time=reference_time,
                ))

            if not outcome.is_match:
                if outcome.failure is ErrorKind.AMBIGUOUS:
                    logger.debug(f"Rule {name} saw an ambiguous word after offset {end_of_last_match}")
                continue

            if len(outcome.tail) >= len(text):
                logger.warning(f"Rule {name} reported a match without consuming text, ignoring it")
                continue

            span = outcome.span
            matches.append(Match(
                tokens=outcome.tokens,
                time_shift=outcome.time_shift,
                start=end_of_last_match + span.start,
                end=end_of_last_match + span.end,
                rule=name,
                reference_time=reference_time,
                error=outcome.error,
            ))
            if outcome.error is not None:
                logger.info(f"Rule {name} matched an invalid value: {outcome.error}")

            text = outcome.tail
            end_of_last_match += span.end
            had_match = True
            break

        if not had_match:
            break

    return matches
