"""Weekday names with an optional this/next/last modifier, and relative weeks.

Full day names tolerate one typo (two for names longer than six letters,
so "today" is never read as "monday"); abbreviations must be exact. A bare
weekday means the upcoming one, today included.
"""

from datetime import datetime
from typing import List, Optional

from ..core.recognizers import VocabularyEntry, excluding, optional, vocabulary
from ..core.rules import Rule, RuleInterpreter
from ..core.tokens import Day, TimeShift, Token, Week, Weekday, When, WhenMarker

DAYS_PER_WEEK = 7

ABBREVIATIONS = {
    Day.MONDAY: ["mon"],
    Day.TUESDAY: ["tue", "tues"],
    Day.WEDNESDAY: ["wed"],
    Day.THURSDAY: ["thu", "thur", "thurs"],
    Day.FRIDAY: ["fri"],
    Day.SATURDAY: ["sat"],
    Day.SUNDAY: ["sun"],
}


# Ordinary words one edit away from a day name
NOT_WEEKDAYS = ["sundae", "sundry"]


def _weekday_rows() -> List[VocabularyEntry]:
    rows = []
    for day in Day:
        name = day.name.lower()
        rows.append(VocabularyEntry(name, Weekday(day), 1, 2 if len(name) > 6 else 1))
        rows.extend(VocabularyEntry(abbr, Weekday(day), 1, 0) for abbr in ABBREVIATIONS[day])
    return rows


modifier = vocabulary([
    VocabularyEntry("this", When(WhenMarker.THIS), 0, 0),
    VocabularyEntry("next", When(WhenMarker.NEXT), 0, 0),
    VocabularyEntry("last", When(WhenMarker.LAST), 0, 0),
], name="modifier")

weekday = vocabulary(_weekday_rows(), name="weekday")

week = vocabulary([VocabularyEntry("week", Week(), 1, 1)], name="week")


def _marker(tokens: List[Token]) -> WhenMarker:
    for token in tokens:
        if isinstance(token, When):
            return token.marker
    return WhenMarker.THIS


def weekday_delta(day: Day, marker: WhenMarker, today: int) -> int:
    """Days from ``today`` (0=Monday) to ``day`` under ``marker``."""
    days_ahead = day.value - today
    if marker is WhenMarker.NEXT:
        # next occurrence, a week ahead if today is the day
        if days_ahead <= 0:
            days_ahead += DAYS_PER_WEEK
    elif marker is WhenMarker.LAST:
        # the day in the previous week
        days_ahead -= DAYS_PER_WEEK
    elif days_ahead < 0:
        days_ahead += DAYS_PER_WEEK
    return days_ahead


def make_weekday(tokens: List[Token], reference_time: datetime) -> TimeShift:
    target: Optional[Day] = next((t.day for t in tokens if isinstance(t, Weekday)), None)
    return TimeShift(days=weekday_delta(target, _marker(tokens), reference_time.weekday()))


def make_week(tokens: List[Token], reference_time: datetime) -> TimeShift:
    offsets = {WhenMarker.THIS: 0, WhenMarker.NEXT: DAYS_PER_WEEK, WhenMarker.LAST: -DAYS_PER_WEEK}
    return TimeShift(days=offsets[_marker(tokens)])


weekday_interpreter = RuleInterpreter(
    Rule("weekday", [optional(modifier), excluding(weekday, NOT_WEEKDAYS)], word_boundaries=True),
    make_weekday,
    slots=[0, 1],
)

week_interpreter = RuleInterpreter(Rule("week", [modifier, week], word_boundaries=True), make_week, slots=[0, 1])

INTERPRETERS = [weekday_interpreter, week_interpreter]
