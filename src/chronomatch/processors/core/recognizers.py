"""Fuzzy word and bounded number recognizers, and the combinators built on them.

Every recognizer takes the remaining text and the exact-match flag and
returns ``(tail, TokenMatch)``, or raises ``RecognitionError`` naming why it
failed. Catalogs describe their vocabulary as tables of
``VocabularyEntry`` rows instead of writing one function per word:

    MERIDIEM = vocabulary([
        VocabularyEntry("am", When(WhenMarker.AM), 1, 0),
        VocabularyEntry("a.m.", When(WhenMarker.AM), 1, 0),
        VocabularyEntry("pm", When(WhenMarker.PM), 1, 0),
    ])
"""

import sys
from typing import Callable, Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from rapidfuzz.distance import DamerauLevenshtein

from ...core.error_handler import ErrorKind, RecognitionError
from .tokenizer import tokenize_number, tokenize_word
from .tokens import STUB, PrioritizedToken, Token, TokenMatch

RecognizerResult = Tuple[str, TokenMatch]


def effective_distance(max_distance: int, exact_match: bool) -> int:
    """Exact-match mode overrides any configured tolerance."""
    return 0 if exact_match else max_distance


def recognize_word(
    text: str,
    target: str,
    max_distance: int,
    token: PrioritizedToken,
) -> RecognizerResult:
    """Recognize ``target`` at the start of ``text`` using Damerau-Levenshtein distance.

    Punctuation that appears in the target (the periods of ``a.m.``) is
    consumed as part of the word.

    Raises:
        RecognitionError: EMPTY when no word is present, UNKNOWN when the
            word is farther than ``max_distance`` from the target
    """
    extra = "".join(sorted({c for c in target if not c.isalpha()}))
    word, tail = tokenize_word(text, extra)

    if not word:
        raise RecognitionError(ErrorKind.EMPTY)

    if max_distance == 0:
        if word == target:
            return tail, TokenMatch(token, 0)
    else:
        dist = DamerauLevenshtein.distance(word, target, score_cutoff=max_distance)
        if dist <= max_distance:
            return tail, TokenMatch(token, dist)

    raise RecognitionError(ErrorKind.UNKNOWN)


def recognize_bounded_number(
    text: str,
    low: int,
    high: int,
    ctor: Callable[[int], Token],
    priority: int = 0,
) -> RecognizerResult:
    """Recognize an unsigned integer within ``[low, high]``.

    Raises:
        RecognitionError: UNKNOWN when no number parses, OUT_OF_BOUNDS when
            it parses but lies outside the range
    """
    value, tail = tokenize_number(text)
    if low <= value <= high:
        return tail, TokenMatch(PrioritizedToken(ctor(value), priority), 0)
    raise RecognitionError(ErrorKind.OUT_OF_BOUNDS)


class Recognizer:
    """Anything that can attempt to recognize one token at a position."""

    name = "recognizer"

    def attempt(self, text: str, exact_match: bool) -> RecognizerResult:
        raise NotImplementedError

    def __call__(self, text: str, exact_match: bool) -> RecognizerResult:
        return self.attempt(text, exact_match)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class WordRecognizer(Recognizer):
    """One spelling of a word with its tolerated edit distance."""

    def __init__(self, target: str, token: PrioritizedToken, max_distance: int = 0):
        self.target = target
        self.token = token
        self.max_distance = max_distance
        self.name = target

    def attempt(self, text: str, exact_match: bool) -> RecognizerResult:
        return recognize_word(
            text, self.target, effective_distance(self.max_distance, exact_match), self.token
        )


class NumberRecognizer(Recognizer):
    """An unsigned integer constrained to a closed range."""

    def __init__(self, low: int, high: int, ctor: Callable[[int], Token], priority: int = 0):
        self.low = low
        self.high = high
        self.ctor = ctor
        self.priority = priority
        self.name = f"{getattr(ctor, '__name__', 'number')}[{low}..{high}]"

    def attempt(self, text: str, exact_match: bool) -> RecognizerResult:
        return recognize_bounded_number(text, self.low, self.high, self.ctor, self.priority)


class StubRecognizer(Recognizer):
    """Always succeeds with ``STUB`` without consuming text."""

    name = "stub"

    def attempt(self, text: str, exact_match: bool) -> RecognizerResult:
        return text, TokenMatch(STUB, 0)


stub = StubRecognizer()


class OptionalRecognizer(Recognizer):
    """Falls back to ``stub`` when the wrapped recognizer fails."""

    def __init__(self, recognizer: Recognizer):
        self.recognizer = recognizer
        self.name = f"{recognizer.name}?"

    def attempt(self, text: str, exact_match: bool) -> RecognizerResult:
        try:
            return self.recognizer.attempt(text, exact_match)
        except RecognitionError:
            return stub.attempt(text, exact_match)


def optional(recognizer: Recognizer) -> OptionalRecognizer:
    return OptionalRecognizer(recognizer)


class ExcludingRecognizer(Recognizer):
    """Rejects listed words before trying the wrapped recognizer.

    Keeps ordinary words that sit within the fuzzy tolerance of a target
    ("sundae" and "sunday") from being recognized.
    """

    def __init__(self, recognizer: Recognizer, words: Iterable[str]):
        self.recognizer = recognizer
        self.words = frozenset(words)
        self.name = recognizer.name

    def attempt(self, text: str, exact_match: bool) -> RecognizerResult:
        word, _ = tokenize_word(text)
        if word in self.words:
            raise RecognitionError(ErrorKind.UNKNOWN)
        return self.recognizer.attempt(text, exact_match)


def excluding(recognizer: Recognizer, words: Iterable[str]) -> ExcludingRecognizer:
    return ExcludingRecognizer(recognizer, words)


class Spellings(Recognizer):
    """Several spellings of the same token; the closest one wins.

    Spellings of one token never make a match ambiguous, ties go to the
    earliest listed spelling.
    """

    def __init__(self, spellings: Sequence[WordRecognizer], name: Optional[str] = None):
        self.spellings = list(spellings)
        self.name = name or "|".join(s.target for s in self.spellings)

    def attempt(self, text: str, exact_match: bool) -> RecognizerResult:
        best: Optional[RecognizerResult] = None
        kind = ErrorKind.UNKNOWN

        for spelling in self.spellings:
            try:
                tail, match = spelling.attempt(text, exact_match)
            except RecognitionError as e:
                kind = e.kind
                continue
            if best is None or match.distance < best[1].distance:
                best = (tail, match)

        if best is None:
            raise RecognitionError(kind)
        return best


def best_fit(
    text: str,
    exact_match: bool,
    candidates: Iterable[Callable[[str, bool], RecognizerResult]],
) -> RecognizerResult:
    """Run every candidate at the same position and keep the closest match.

    Raises:
        RecognitionError: AMBIGUOUS when two or more candidates tie at the
            minimum distance, UNKNOWN when none matches
    """
    min_dist = sys.maxsize
    selected: Optional[RecognizerResult] = None
    selected_count = 0

    for candidate in candidates:
        try:
            tail, match = candidate(text, exact_match)
        except RecognitionError:
            continue

        if match.distance < min_dist:
            selected = (tail, match)
            selected_count = 1
            min_dist = match.distance
        elif match.distance == min_dist:
            selected_count += 1

    if selected_count == 1:
        return selected
    if selected_count > 1:
        raise RecognitionError(ErrorKind.AMBIGUOUS)
    raise RecognitionError(ErrorKind.UNKNOWN)


class BestFit(Recognizer):
    """Combines competing recognizers; refuses to guess between ties."""

    def __init__(self, candidates: Sequence[Recognizer], name: Optional[str] = None):
        self.candidates = list(candidates)
        self.name = name or "/".join(c.name for c in self.candidates)

    def attempt(self, text: str, exact_match: bool) -> RecognizerResult:
        return best_fit(text, exact_match, self.candidates)


class VocabularyEntry(NamedTuple):
    """One row of a vocabulary table."""
    target: str
    token: Token
    priority: int = 0
    max_distance: int = 0


def vocabulary(rows: Iterable[VocabularyEntry], name: Optional[str] = None) -> BestFit:
    """Build a best-fit recognizer from table rows.

    Rows producing the same token (and priority) are grouped into
    ``Spellings``; the groups then compete in a ``BestFit``.
    """
    groups: Dict[PrioritizedToken, List[WordRecognizer]] = {}
    for row in rows:
        token = PrioritizedToken(row.token, row.priority)
        groups.setdefault(token, []).append(
            WordRecognizer(row.target, token, row.max_distance)
        )

    if not groups:
        raise ValueError("A vocabulary needs at least one row")

    return BestFit([Spellings(spellings) for spellings in groups.values()], name=name)


def number(low: int, high: int, ctor: Callable[[int], Token], priority: int = 0) -> NumberRecognizer:
    return NumberRecognizer(low, high, ctor, priority)
