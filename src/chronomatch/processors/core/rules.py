"""Rules and rule interpreters.

A rule is a fixed sequence of recognizers. It does not have to match at the
start of the text it is given: the search skips one character at a time
until the whole sequence matches contiguously or the text runs out.

A rule interpreter wraps a rule with the token slots that feed derivation and
the function computing the semantic value from them.
"""

from datetime import datetime
from typing import Callable, List, Optional, Sequence, Tuple

from ...core.error_handler import ErrorKind, RecognitionError, SemanticError
from .recognizers import Recognizer
from .tokens import MatchSpan, RuleOutcome, TimeShift, Token, TokenMatch

DeriveFn = Callable[[List[Token], datetime], TimeShift]

# Higher rank wins when a search reports why it failed.
_FAILURE_RANK = {
    ErrorKind.UNKNOWN: 0,
    ErrorKind.EMPTY: 1,
    ErrorKind.OUT_OF_BOUNDS: 2,
    ErrorKind.AMBIGUOUS: 3,
}


def most_informative(a: ErrorKind, b: ErrorKind) -> ErrorKind:
    return a if _FAILURE_RANK[a] >= _FAILURE_RANK[b] else b


def match_span(skipped: int, input_length: int, tail_length: int) -> MatchSpan:
    """Compute the span of a match inside the text a rule was run against.

        "I will meet you next friday evening"
         |---skipped----|          |--tail--|
         |---------------input--------------|

    start = skipped + 1, or 0 when nothing was skipped
    end = input_length - tail_length - 1
    """
    start = 0 if skipped == 0 else skipped + 1
    return MatchSpan(start, input_length - tail_length - 1)


class Rule:
    """A fixed ordered sequence of recognizers.

    With ``word_boundaries`` the search never starts inside a word, so
    "lemon" is not read as "mon". Separator positions are still tried, which
    keeps the span arithmetic unchanged.
    """

    def __init__(self, name: str, recognizers: Sequence[Recognizer], word_boundaries: bool = False):
        if not recognizers:
            raise ValueError(f"Rule {name!r} needs at least one recognizer")
        self.name = name
        self.recognizers = list(recognizers)
        self.word_boundaries = word_boundaries

    def can_start_at(self, text: str, position: int) -> bool:
        if not self.word_boundaries or position == 0:
            return True
        return not (text[position - 1].isalnum() and text[position].isalnum())

    def match_at(self, text: str, exact_match: bool) -> Tuple[str, List[TokenMatch]]:
        """Apply every recognizer in order at the start of ``text``."""
        tail = text
        matches: List[TokenMatch] = []
        for recognizer in self.recognizers:
            tail, match = recognizer.attempt(tail, exact_match)
            matches.append(match)

        if len(tail) == len(text):
            # a sequence of optional recognizers matched nothing
            raise RecognitionError(ErrorKind.EMPTY)
        return tail, matches

    def search(self, text: str, exact_match: bool) -> Tuple[int, str, List[TokenMatch]]:
        """Find the first position where the rule matches.

        Returns:
            (skipped, tail, matches) where ``skipped`` counts the characters
            passed over before the match

        Raises:
            RecognitionError: the most informative failure seen at any position
        """
        failure = ErrorKind.UNKNOWN
        for skipped in range(len(text)):
            if not self.can_start_at(text, skipped):
                continue
            try:
                tail, matches = self.match_at(text[skipped:], exact_match)
            except RecognitionError as e:
                failure = most_informative(failure, e.kind)
                continue
            return skipped, tail, matches

        raise RecognitionError(failure, len(text))

    def __repr__(self) -> str:
        return f"<Rule {self.name}: {' '.join(r.name for r in self.recognizers)}>"


class RuleInterpreter:
    """A rule plus the derivation of its semantic value."""

    def __init__(
        self,
        rule: Rule,
        derive: DeriveFn,
        slots: Optional[Sequence[int]] = None,
        name: Optional[str] = None,
    ):
        self.rule = rule
        self.derive = derive
        self.slots = list(range(len(rule.recognizers))) if slots is None else list(slots)
        self.name = name or rule.name

        for slot in self.slots:
            if not 0 <= slot < len(rule.recognizers):
                raise ValueError(f"Slot {slot} is outside rule {rule.name!r}")

    def select_tokens(self, matches: List[TokenMatch]) -> List[Token]:
        """Pick the configured slots, drop placeholders and order by priority."""
        selected = [matches[slot].token for slot in self.slots]
        selected = [t for t in selected if not t.is_empty]
        selected.sort(key=lambda t: t.priority)
        return [t.token for t in selected]

    def interpret(self, text: str, exact_match: bool, reference_time: datetime) -> RuleOutcome:
        """Run the rule against ``text``.

        Only the tail is populated when the rule matches nowhere.
        """
        try:
            skipped, tail, matches = self.rule.search(text, exact_match)
        except RecognitionError as e:
            return RuleOutcome(tail=text, failure=e.kind)

        outcome = RuleOutcome(
            tail=tail,
            tokens=self.select_tokens(matches),
            span=match_span(skipped, len(text), len(tail)),
        )

        try:
            outcome.time_shift = self.derive(outcome.tokens, reference_time)
        except SemanticError as e:
            outcome.error = e

        return outcome

    __call__ = interpret

    def __repr__(self) -> str:
        return f"<RuleInterpreter {self.name} slots={self.slots}>"


def run_rule_interpreter(
    text: str,
    exact_match: bool,
    reference_time: datetime,
    rule: Rule,
    derive: DeriveFn,
    slots: Optional[Sequence[int]] = None,
) -> RuleOutcome:
    """Run ``rule`` once and derive its value from the selected slots."""
    return RuleInterpreter(rule, derive, slots).interpret(text, exact_match, reference_time)
