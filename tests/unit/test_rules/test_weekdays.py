"""
Unit tests for the weekday and relative week catalog.
"""

import pytest

from chronomatch.processors.core.tokens import Day, TimeShift, Week, Weekday, When, WhenMarker
from chronomatch.processors.rules import weekdays


class TestWeekdayDelta:
    """Test suite for weekday offsets (reference day is a Tuesday)"""

    @pytest.mark.parametrize("marker,day,expected", [
        (WhenMarker.THIS, Day.FRIDAY, 3),
        (WhenMarker.THIS, Day.MONDAY, 6),
        (WhenMarker.THIS, Day.TUESDAY, 0),
        (WhenMarker.NEXT, Day.TUESDAY, 7),
        (WhenMarker.NEXT, Day.FRIDAY, 3),
        (WhenMarker.NEXT, Day.MONDAY, 6),
        (WhenMarker.LAST, Day.FRIDAY, -4),
        (WhenMarker.LAST, Day.MONDAY, -8),
        (WhenMarker.LAST, Day.WEDNESDAY, -6),
    ])
    def test_weekday_delta(self, marker, day, expected):
        assert weekdays.weekday_delta(day, marker, Day.TUESDAY.value) == expected

    def test_bare_weekday_means_this(self, fixed_time):
        assert weekdays.make_weekday([Weekday(Day.FRIDAY)], fixed_time) == TimeShift(days=3)


class TestWeekdayRule:
    """Test suite for weekday expressions"""

    @pytest.mark.parametrize("text,tokens", [
        ("friday", [Weekday(Day.FRIDAY)]),
        ("next fri", [When(WhenMarker.NEXT), Weekday(Day.FRIDAY)]),
        ("last thurs", [When(WhenMarker.LAST), Weekday(Day.THURSDAY)]),
        ("this tues", [When(WhenMarker.THIS), Weekday(Day.TUESDAY)]),
        ("on saturdya", [Weekday(Day.SATURDAY)]),
        ("see you sundy", [Weekday(Day.SUNDAY)]),
    ])
    def test_recognized(self, fixed_time, text, tokens):
        outcome = weekdays.weekday_interpreter(text, False, fixed_time)
        assert outcome.is_match
        assert outcome.tokens == tokens

    @pytest.mark.parametrize("text", [
        "today",
        "a lemon",
        "yesterday",
        "moon",
        "frii",
        "sundae",
        "a sundry list",
    ])
    def test_not_recognized(self, fixed_time, text):
        assert not weekdays.weekday_interpreter(text, False, fixed_time).is_match

    def test_exact_mode_rejects_typos(self, fixed_time):
        assert weekdays.weekday_interpreter("fridya", False, fixed_time).is_match
        assert not weekdays.weekday_interpreter("fridya", True, fixed_time).is_match

    def test_modifiers_are_exact(self, fixed_time):
        # "nest" is not read as "next"; the weekday alone still matches
        outcome = weekdays.weekday_interpreter("nest friday", False, fixed_time)
        assert outcome.tokens == [Weekday(Day.FRIDAY)]


class TestWeekRule:
    """Test suite for relative weeks"""

    @pytest.mark.parametrize("text,days", [
        ("this week", 0),
        ("next week", 7),
        ("last week", -7),
        ("next wek", 7),
    ])
    def test_relative_weeks(self, fixed_time, text, days):
        outcome = weekdays.week_interpreter(text, False, fixed_time)
        assert outcome.tokens[1] == Week()
        assert outcome.time_shift == TimeShift(days=days)

    def test_week_needs_modifier(self, fixed_time):
        assert not weekdays.week_interpreter("a week from now", False, fixed_time).is_match


class TestWeekdayExtraction:
    """Weekday words next to look-alike words"""

    def test_lookalike_word_is_skipped(self, fixed_time):
        outcome = weekdays.weekday_interpreter("see you sundae, fridays", False, fixed_time)
        # plural day names still name the day
        assert outcome.tokens == [Weekday(Day.FRIDAY)]

    def test_sunday_still_tolerates_typos(self, fixed_time):
        assert weekdays.weekday_interpreter("sundy", False, fixed_time).tokens == [Weekday(Day.SUNDAY)]
