"""Character-class counting used by the minimum-count rules."""

import re

# Each pattern matches the characters that are NOT in the counted class.
# Removing them leaves only the characters being counted.
DIGIT_PATTERN = re.compile(r"[^0-9]")
SPECIAL_CHAR_PATTERN = re.compile(r"[\w\s]")
UPPER_CASE_PATTERN = re.compile(r"[^A-Z]")
LOWER_CASE_PATTERN = re.compile(r"[^a-z]")


def count_non_matching(text: str, excluded_class_pattern) -> int:
    """
    Count the characters of text that survive removal of the excluded class.

    Args:
        text: String to inspect
        excluded_class_pattern: Compiled pattern (or pattern string) matching
            every character that should not be counted

    Returns:
        Number of remaining characters
    """
    return len(re.sub(excluded_class_pattern, "", text))


def check_minimum(text: str, excluded_class_pattern, minimum: int) -> bool:
    """Return True (rule violated) when fewer than minimum characters remain."""
    return count_non_matching(text, excluded_class_pattern) < minimum
