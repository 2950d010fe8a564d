"""Casual day references: now, today, tonight, tomorrow, yesterday."""

from datetime import datetime
from typing import List

from ...core.error_handler import SemanticError
from ..core.recognizers import VocabularyEntry, vocabulary
from ..core.rules import Rule, RuleInterpreter
from ..core.tokens import SECONDS_PER_HOUR, TimeShift, Token, When, WhenMarker

TONIGHT_HOUR = 21

casual = vocabulary([
    VocabularyEntry("now", When(WhenMarker.NOW), 0, 0),
    VocabularyEntry("today", When(WhenMarker.TODAY), 0, 1),
    VocabularyEntry("tdy", When(WhenMarker.TODAY), 0, 0),
    VocabularyEntry("tonight", When(WhenMarker.TONIGHT), 0, 1),
    VocabularyEntry("tonite", When(WhenMarker.TONIGHT), 0, 0),
    VocabularyEntry("tomorrow", When(WhenMarker.TOMORROW), 0, 2),
    VocabularyEntry("tmrw", When(WhenMarker.TOMORROW), 0, 0),
    VocabularyEntry("yesterday", When(WhenMarker.YESTERDAY), 0, 2),
    VocabularyEntry("ystrdy", When(WhenMarker.YESTERDAY), 0, 0),
], name="casual")

SHIFTS = {
    WhenMarker.NOW: TimeShift(),
    WhenMarker.TODAY: TimeShift(),
    WhenMarker.TONIGHT: TimeShift(seconds=TONIGHT_HOUR * SECONDS_PER_HOUR),
    WhenMarker.TOMORROW: TimeShift(days=1),
    WhenMarker.YESTERDAY: TimeShift(days=-1),
}


def make_casual(tokens: List[Token], reference_time: datetime) -> TimeShift:
    (token,) = tokens
    if not isinstance(token, When) or token.marker not in SHIFTS:
        raise SemanticError(f"Not a casual day reference: {token!r}")
    return SHIFTS[token.marker]


interpreter = RuleInterpreter(Rule("casual", [casual], word_boundaries=True), make_casual)

INTERPRETERS = [interpreter]
