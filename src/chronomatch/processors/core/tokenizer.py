"""Word and number tokenizers.

Both skip leading separators (whitespace and commas) and then take a maximal
run of one character class:

    "  , abracadabra  " -> "abracadabra"
    "  , 321  "         -> 321
"""

from typing import Tuple

from ...core.error_handler import ErrorKind, RecognitionError

# Largest value an unsigned 64-bit integer holds; bigger runs count as overflow.
MAX_UINT = 2 ** 64 - 1
MAX_UINT_DIGITS = len(str(MAX_UINT))


def _is_separator(c: str) -> bool:
    return c.isspace() or c == ','


def _is_digit(c: str) -> bool:
    return '0' <= c <= '9'


def ltrim(text: str) -> str:
    """Strip leading whitespace and commas."""
    i = 0
    while i < len(text) and _is_separator(text[i]):
        i += 1
    return text[i:]


def tokenize_word(text: str, extra: str = "") -> Tuple[str, str]:
    """Take an alphabetic run after the separators.

    Args:
        text: Text to tokenize
        extra: Additional characters allowed inside the run

    Returns:
        (word, tail); the word may be empty
    """
    text = ltrim(text)
    i = 0
    while i < len(text) and (text[i].isalpha() or text[i] in extra):
        i += 1
    return text[:i], text[i:]


def tokenize_number(text: str) -> Tuple[int, str]:
    """Take a run of ASCII digits after the separators and parse it.

    Raises:
        RecognitionError: UNKNOWN when there are no digits or the value overflows
    """
    text = ltrim(text)
    i = 0
    while i < len(text) and _is_digit(text[i]):
        i += 1

    if i == 0:
        raise RecognitionError(ErrorKind.UNKNOWN)

    digits = text[:i].lstrip("0")
    if len(digits) > MAX_UINT_DIGITS:
        # too long to fit, rejected before conversion
        raise RecognitionError(ErrorKind.UNKNOWN)

    value = int(digits or "0")
    if value > MAX_UINT:
        raise RecognitionError(ErrorKind.UNKNOWN)

    return value, text[i:]
