"""
Unit tests for the multi-match scanning loop.
"""

from dataclasses import dataclass
from unittest.mock import Mock

import pytest

from chronomatch.core.error_handler import ErrorKind, SemanticError
from chronomatch.processors.core.recognizers import number
from chronomatch.processors.core.rules import Rule, RuleInterpreter
from chronomatch.processors.core.scanner import (
    AttemptTrace,
    ReferenceTimePolicy,
    interpreter_name,
    local_now,
    scan,
)
from chronomatch.processors.core.tokens import (
    Day,
    Hour,
    Match,
    MatchSpan,
    RuleOutcome,
    TimeShift,
    Token,
    Weekday,
    When,
    WhenMarker,
)
from chronomatch.processors.rules import hour


@dataclass(frozen=True)
class Minute(Token):
    value: int


def make_minute(tokens, reference_time):
    (minute,) = tokens
    if minute.value >= 60:
        raise SemanticError(f"{minute.value} is not a valid minute")
    return TimeShift(seconds=minute.value * 60)


minute_interpreter = RuleInterpreter(
    Rule("minute", [number(0, 99, Minute)], word_boundaries=True), make_minute
)


class TestScan:
    """Test suite for scan"""

    def test_single_match(self, interpreters, fixed_clock):
        matches = scan("5pm", False, interpreters, clock=fixed_clock)
        assert matches == [
            Match([Hour(5), When(WhenMarker.PM)], TimeShift(seconds=61200), 0, 2, rule="hour")
        ]

    def test_multiple_matches_in_text_order(self, interpreters, fixed_clock):
        text = "you can call me this friday or next monday"
        matches = scan(text, False, interpreters, clock=fixed_clock)

        assert [m.tokens for m in matches] == [
            [When(WhenMarker.THIS), Weekday(Day.FRIDAY)],
            [When(WhenMarker.NEXT), Weekday(Day.MONDAY)],
        ]
        assert matches[0].span == MatchSpan(16, 26)
        # offsets after the first match are accumulated from inclusive ends
        assert matches[1].span == MatchSpan(30, 40)

    def test_no_match(self, interpreters, fixed_clock):
        assert scan("nothing to see here", False, interpreters, clock=fixed_clock) == []
        assert scan("", False, interpreters, clock=fixed_clock) == []

    def test_no_interpreters(self, fixed_clock):
        assert scan("5pm", False, [], clock=fixed_clock) == []

    def test_earlier_interpreter_wins(self, fixed_clock):
        matches = scan("at 5pm", False, [hour.interpreter, minute_interpreter], clock=fixed_clock)
        assert [m.rule for m in matches] == ["hour"]

        matches = scan("at 5pm", False, [minute_interpreter, hour.interpreter], clock=fixed_clock)
        assert [m.rule for m in matches] == ["minute"]

    def test_semantic_error_is_kept_on_match(self, fixed_clock):
        matches = scan("at 30 and 75", False, [minute_interpreter], clock=fixed_clock)

        assert len(matches) == 2
        assert matches[0].ok
        assert matches[0].time_shift == TimeShift(seconds=1800)
        assert not matches[1].ok
        assert matches[1].tokens == [Minute(75)]
        assert matches[1].time_shift is None
        assert "75" in str(matches[1].error)

    def test_match_without_consumption_is_ignored(self, fixed_clock):
        def lazy(text, exact_match, reference_time):
            return RuleOutcome(tail=text, tokens=[], span=MatchSpan(0, 0))

        assert scan("5pm", False, [lazy], clock=fixed_clock) == []

    def test_scan_is_deterministic(self, interpreters, fixed_clock):
        text = "see you tomorrow at 5pm, or next week"
        first = scan(text, False, interpreters, clock=fixed_clock)
        second = scan(text, False, interpreters, clock=fixed_clock)
        assert first == second

    def test_matches_do_not_overlap(self, interpreters, fixed_clock):
        text = "last monday, this friday and next sunday"
        matches = scan(text, False, interpreters, clock=fixed_clock)
        assert len(matches) == 3
        for earlier, later in zip(matches, matches[1:]):
            assert earlier.start <= earlier.end <= later.start

    def test_reference_time_is_attached(self, interpreters, fixed_clock, fixed_time):
        (match,) = scan("tomorrow", False, interpreters, clock=fixed_clock)
        assert match.reference_time == fixed_time
        assert match.resolve() == fixed_time.replace(day=2)


class TestAttemptTrace:
    """Test suite for the attempt hook and reference time policies"""

    def test_every_attempt_is_traced(self, interpreters, fixed_clock):
        traces = []
        scan("5pm", False, interpreters, clock=fixed_clock, on_attempt=traces.append)

        assert len(traces) == 7
        assert all(isinstance(t, AttemptTrace) for t in traces)
        assert traces[0].rule == "weekday"
        assert traces[0].failure is ErrorKind.UNKNOWN
        assert traces[2].rule == "hour"
        assert traces[2].matched
        assert traces[2].failure is None
        assert traces[2].offset == 0
        assert all(t.offset == 2 and not t.matched for t in traces[3:])

    def test_ambiguous_failure_is_reported(self, interpreters, fixed_clock):
        hook = Mock()
        assert scan("munday", False, interpreters, clock=fixed_clock, on_attempt=hook) == []
        failures = [c.args[0].failure for c in hook.call_args_list]
        assert failures[0] is ErrorKind.AMBIGUOUS

    def test_clock_sampled_once_per_call(self, interpreters, counting_clock):
        scan("5pm", False, interpreters, clock=counting_clock)
        assert counting_clock.calls == 1

    def test_clock_sampled_per_attempt(self, interpreters, counting_clock):
        scan("5pm", False, interpreters, clock=counting_clock,
             policy=ReferenceTimePolicy.PER_ATTEMPT)
        assert counting_clock.calls == 7


class TestHelpers:
    """Test suite for scanner helpers"""

    def test_local_now_is_timezone_aware(self):
        assert local_now().tzinfo is not None

    def test_interpreter_name(self):
        def my_rule(text, exact_match, reference_time):
            return RuleOutcome(tail=text)

        assert interpreter_name(hour.interpreter) == "hour"
        assert interpreter_name(my_rule) == "my_rule"

    @pytest.mark.parametrize("value", ["per_call", "per_attempt"])
    def test_policy_from_config_value(self, value):
        assert ReferenceTimePolicy(value).value == value


class TestTimeShift:
    """Test suite for TimeShift resolution"""

    def test_time_of_day_overrides_seconds(self, fixed_time):
        shift = TimeShift(seconds=86400, time_of_day=12 * 3600)
        assert shift.resolve(fixed_time) == fixed_time.replace(hour=12)
        assert shift == TimeShift(seconds=86400)

    def test_seconds_used_without_time_of_day(self, fixed_time):
        assert TimeShift(days=1, seconds=3600).resolve(fixed_time) == fixed_time.replace(day=2, hour=1)

    def test_empty_shift_keeps_reference(self, fixed_time):
        assert TimeShift().resolve(fixed_time) == fixed_time
