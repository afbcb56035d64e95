import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple

from . import character_classes
from .error_reporter import ErrorReporter
from .rule_configuration import LIST_KINDS, Rule, RuleKind, RuleSet
from .sequential_detector import has_sequential_run


@dataclass(frozen=True)
class Violation:
    """A failed rule together with the value reported in its message."""

    kind: RuleKind
    value: Any
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"rule": self.kind.value, "value": self.value, "message": self.message}


Outcome = Tuple[bool, Any]
PASSED: Outcome = (False, "")


def _check_min_length(password: str, rule: Rule) -> Outcome:
    return (len(password) < rule.value, rule.value)


def _check_max_length(password: str, rule: Rule) -> Outcome:
    return (len(password) > rule.value, rule.value)


def _count_check(pattern):
    def check(password: str, rule: Rule) -> Outcome:
        return (character_classes.check_minimum(password, pattern, rule.value), rule.value)

    return check


def _check_occurrences(password: str, rule: Rule) -> Outcome:
    # A character followed by N more copies of itself
    repeated = re.search(r"(.)\1{%d}" % int(rule.value), password)
    return (repeated is not None, rule.value)


def _check_sequential(password: str, rule: Rule) -> Outcome:
    return (has_sequential_run(password, int(rule.value)), rule.value)


def _check_cant_contain(password: str, rule: Rule) -> Outcome:
    folded = password.casefold()
    for needle in rule.value:
        if needle and needle.casefold() in folded:
            return (True, needle)
    return PASSED


def _check_black_list(password: str, rule: Rule) -> Outcome:
    return (password in rule.value, "")


def _check_not_in(password: str, rule: Rule) -> Outcome:
    reference = rule.hashed if rule.hashed else rule.value
    return (password in reference, "")


HANDLERS: Dict[RuleKind, Callable[[str, Rule], Outcome]] = {
    RuleKind.MIN_LENGTH: _check_min_length,
    RuleKind.MAX_LENGTH: _check_max_length,
    RuleKind.MIN_DIGIT: _count_check(character_classes.DIGIT_PATTERN),
    RuleKind.MIN_SPECIAL_CHAR: _count_check(character_classes.SPECIAL_CHAR_PATTERN),
    RuleKind.MIN_UPPER_CASE: _count_check(character_classes.UPPER_CASE_PATTERN),
    RuleKind.MIN_LOWER_CASE: _count_check(character_classes.LOWER_CASE_PATTERN),
    RuleKind.OCCURRENCES: _check_occurrences,
    RuleKind.SEQUENTIAL: _check_sequential,
    RuleKind.CANT_CONTAIN: _check_cant_contain,
    RuleKind.BLACK_LIST: _check_black_list,
    RuleKind.NOT_IN: _check_not_in,
}


def is_enabled(rule: Rule) -> bool:
    """Zero, negative, non-integer and empty values disable a rule."""
    if rule.kind == RuleKind.NOT_IN:
        return bool(rule.value) or bool(rule.hashed)
    if rule.kind in LIST_KINDS:
        return bool(rule.value)
    return isinstance(rule.value, int) and not isinstance(rule.value, bool) and rule.value > 0


class RuleExecutor:
    """Evaluates one RuleSet against one password, collecting violations."""

    def __init__(self, rules: RuleSet, reporter: ErrorReporter):
        """
        Initialize rule executor.

        Args:
            rules: Rules to evaluate, in evaluation order
            reporter: Renders each violation into its message
        """
        self.rules = rules
        self.reporter = reporter
        self.violations: List[Violation] = []

    def execute(self, password: str) -> List[Violation]:
        """
        Run every enabled rule in order.

        Evaluation never stops early: each failing rule adds exactly one
        violation.
        """
        for rule in self.rules:
            if not is_enabled(rule):
                continue
            violated, value = HANDLERS[rule.kind](password, rule)
            if violated:
                self._store(rule.kind, value)
        return self.violations

    def _store(self, kind: RuleKind, value: Any) -> None:
        self.violations.append(
            Violation(kind=kind, value=value, message=self.reporter.render(kind, value))
        )
