"""Hour followed by a meridiem marker: "5pm", "at 6 p.m.", "4a."."""

from datetime import datetime
from typing import List

from ...core.error_handler import SemanticError
from ..core.recognizers import VocabularyEntry, number, vocabulary
from ..core.rules import Rule, RuleInterpreter
from ..core.tokens import SECONDS_PER_HOUR, Hour, TimeShift, Token, When, WhenMarker

AM = When(WhenMarker.AM)
PM = When(WhenMarker.PM)

hour = number(0, 12, Hour, priority=0)

meridiem = vocabulary([
    VocabularyEntry("a.m.", AM, 1, 0),
    VocabularyEntry("a.", AM, 1, 0),
    VocabularyEntry("am", AM, 1, 0),
    VocabularyEntry("p.m.", PM, 1, 0),
    VocabularyEntry("p.", PM, 1, 0),
    VocabularyEntry("pm", PM, 1, 0),
], name="meridiem")


def make_time(tokens: List[Token], reference_time: datetime) -> TimeShift:
    """Seconds from midnight; PM adds twelve hours to the hour value.

    The wall-clock hour follows the 12-hour clock, so 12 a.m. resolves to
    midnight and 12 p.m. to noon.
    """
    hours = 0
    pm = False
    for token in tokens:
        if isinstance(token, Hour):
            hours = token.value
        elif token == PM:
            pm = True
        elif token == AM:
            pass
        else:
            raise SemanticError(f"Unexpected token in hour expression: {token!r}")

    wall_clock = hours % 12 + (12 if pm else 0)
    if pm:
        hours += 12

    return TimeShift(
        seconds=hours * SECONDS_PER_HOUR,
        time_of_day=wall_clock * SECONDS_PER_HOUR,
    )


interpreter = RuleInterpreter(Rule("hour", [hour, meridiem], word_boundaries=True), make_time, slots=[0, 1])

INTERPRETERS = [interpreter]
