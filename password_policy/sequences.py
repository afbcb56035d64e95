"""
Reference sequences for sequential-character detection.

Letters are matched as contiguous windows of an ordered alphabet. Digits are
matched with a lookahead pattern where each digit must be followed by its
successor (or a word boundary), repeated at least N times.

Arabic has two orderings that native speakers treat as "in order": the
Hija'i order used in dictionaries and the older Abjadi order that follows the
letters' numerical values. Both are checked independently.
"""

from functools import lru_cache
from typing import Set

LATIN_ALPHABET = "abcdefghijklmnopqrstuvwxyz"
ARABIC_HIJAI_ALPHABET = "أبتثجحخدذرزسشصضطظعغفقكلمنهوي"
ARABIC_ABJADI_ALPHABET = "أبجدهوزحطيكلمنسعفصقرشت"

ASCII_DIGITS = "0123456789"
ARABIC_INDIC_DIGITS = "٠١٢٣٤٥٦٧٨٩"

ALPHABETS = (LATIN_ALPHABET, ARABIC_HIJAI_ALPHABET, ARABIC_ABJADI_ALPHABET)
NUMERALS = (ASCII_DIGITS, ARABIC_INDIC_DIGITS)


def windows_of_length(sequence: str, length: int) -> Set[str]:
    """
    Return every contiguous substring of sequence with the given length.

    The window slides one position at a time. A length larger than the
    sequence yields a single window holding the whole sequence.

    Raises:
        ValueError: If length is not positive
    """
    if length < 1:
        raise ValueError(f"Window length must be positive, got {length}")
    if length >= len(sequence):
        return {sequence}
    return {sequence[i:i + length] for i in range(len(sequence) - length + 1)}


@lru_cache(maxsize=None)
def window_pattern(sequence: str, length: int) -> str:
    """Alternation of all windows of sequence, usable as a single regex."""
    # Windows are plain letters, no escaping needed
    return "|".join(sorted(windows_of_length(sequence, length)))


@lru_cache(maxsize=None)
def consecutive_digit_pattern(digits: str, run_length: int) -> str:
    """
    Build a regex matching at least run_length consecutive ascending digits.

    For "0123456789" and a run length of 3 this produces:
        (?:0(?=1|\\b)|1(?=2|\\b)|...|8(?=9|\\b)|9\\b){3,}
    """
    steps = [
        f"{digit}(?={successor}|\\b)"
        for digit, successor in zip(digits, digits[1:])
    ]
    steps.append(f"{digits[-1]}\\b")
    return "(?:" + "|".join(steps) + "){" + str(run_length) + ",}"
