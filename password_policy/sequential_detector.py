"""Detection of ascending letter or digit runs across the supported scripts."""

import re

from .sequences import (
    ALPHABETS,
    ARABIC_INDIC_DIGITS,
    ASCII_DIGITS,
    consecutive_digit_pattern,
    window_pattern,
)

_WHITESPACE = re.compile(r"\s+")


def arabic_indic_run_length(min_length: int) -> int:
    """
    Run length required for Arabic-Indic digits.

    One shorter than the ASCII digit run whenever min_length is above 1.
    """
    return min_length - 1 if min_length > 1 else min_length


def _matches(text: str, pattern: str) -> bool:
    return re.search(pattern, text, re.IGNORECASE) is not None


def has_sequential_run(text: str, min_length: int) -> bool:
    """
    Check whether text contains an ascending run of at least min_length.

    Whitespace is removed before matching, so "a b c" counts as "abc".
    Letters are compared case-insensitively against the Latin alphabet and
    both Arabic orderings; digits against ASCII and Arabic-Indic numerals.

    Args:
        text: Candidate password
        min_length: Shortest run that counts as sequential

    Returns:
        True if any reference sequence matched
    """
    text = _WHITESPACE.sub("", text)

    for alphabet in ALPHABETS:
        if _matches(text, window_pattern(alphabet, min_length)):
            return True

    if _matches(text, consecutive_digit_pattern(ASCII_DIGITS, min_length)):
        return True

    return _matches(
        text,
        consecutive_digit_pattern(
            ARABIC_INDIC_DIGITS, arabic_indic_run_length(min_length)
        ),
    )
