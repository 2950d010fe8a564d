"""Scanning Engine

Tokenizers, fuzzy recognizers, the best-fit selector, rules and the
multi-match scanning loop.
"""

from .recognizers import (
    BestFit,
    Recognizer,
    VocabularyEntry,
    best_fit,
    excluding,
    number,
    optional,
    recognize_bounded_number,
    recognize_word,
    stub,
    vocabulary,
)
from .rules import Rule, RuleInterpreter, match_span, run_rule_interpreter
from .scanner import AttemptTrace, ReferenceTimePolicy, scan
from .temporal_extractor import TemporalExtractor, extract
from .tokens import (
    Day,
    Hour,
    Match,
    MatchSpan,
    PrioritizedToken,
    RuleOutcome,
    TimeShift,
    Token,
    TokenMatch,
    Week,
    Weekday,
    When,
    WhenMarker,
)

__all__ = [
    "BestFit",
    "Recognizer",
    "VocabularyEntry",
    "best_fit",
    "excluding",
    "number",
    "optional",
    "recognize_bounded_number",
    "recognize_word",
    "stub",
    "vocabulary",
    "Rule",
    "RuleInterpreter",
    "match_span",
    "run_rule_interpreter",
    "AttemptTrace",
    "ReferenceTimePolicy",
    "scan",
    "TemporalExtractor",
    "extract",
    "Day",
    "Hour",
    "Match",
    "MatchSpan",
    "PrioritizedToken",
    "RuleOutcome",
    "TimeShift",
    "Token",
    "TokenMatch",
    "Week",
    "Weekday",
    "When",
    "WhenMarker",
]
