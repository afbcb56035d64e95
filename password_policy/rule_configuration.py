"""
Rule configuration model.

A policy is built with the chainable RuleConfiguration builder and finalized
into an immutable RuleSet. Each rule kind can be active only once: setting
the same kind again replaces the value but keeps its original position, so
insertion order of first appearance is evaluation order.

Example:
    rules = (
        RuleConfiguration()
        .set_min_length(10)
        .set_min_digit(2)
        .set_cant_contain(["acme"])
        .build()
    )
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple


class RuleKind(str, Enum):
    """Closed set of supported rule kinds."""

    MIN_LENGTH = "min_length"
    MAX_LENGTH = "max_length"
    MIN_DIGIT = "min_digit"
    MIN_SPECIAL_CHAR = "min_special_char"
    MIN_UPPER_CASE = "min_upper_case"
    MIN_LOWER_CASE = "min_lower_case"
    OCCURRENCES = "occurrences"
    SEQUENTIAL = "sequential"
    CANT_CONTAIN = "cant_contain"
    BLACK_LIST = "black_list"
    NOT_IN = "not_in"


# Kinds whose value is a list of strings rather than a count
LIST_KINDS = frozenset({RuleKind.CANT_CONTAIN, RuleKind.BLACK_LIST, RuleKind.NOT_IN})

DESCRIPTIONS = {
    RuleKind.MIN_LENGTH: "Password must have at least N characters",
    RuleKind.MAX_LENGTH: "Password must have at most N characters",
    RuleKind.MIN_DIGIT: "Password must contain at least N digits",
    RuleKind.MIN_SPECIAL_CHAR: "Password must contain at least N special characters",
    RuleKind.MIN_UPPER_CASE: "Password must contain at least N uppercase letters",
    RuleKind.MIN_LOWER_CASE: "Password must contain at least N lowercase letters",
    RuleKind.OCCURRENCES: "Password must not repeat one character more than N times in a row",
    RuleKind.SEQUENTIAL: "Password must not contain N ascending letters or digits",
    RuleKind.CANT_CONTAIN: "Password must not contain any of the given words",
    RuleKind.BLACK_LIST: "Password must not equal a blacklisted word",
    RuleKind.NOT_IN: "Password must not equal a previous password",
}


def _as_tuple(values: Optional[Iterable[str]]) -> Tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        return (values,)
    return tuple(values)


def _as_count(value: Any) -> int:
    """Coerce a threshold to int; values that are not numbers disable the rule."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class Rule:
    """
    One configured rule.

    value is an int threshold for count rules and a tuple of strings for
    list rules. hashed is only used by NOT_IN: when non-empty it replaces
    value as the list checked for membership.
    """

    kind: RuleKind
    value: Any
    hashed: Tuple[str, ...] = ()

    @property
    def description(self) -> str:
        return DESCRIPTIONS[self.kind]


@dataclass(frozen=True)
class RuleSet:
    """Immutable, ordered collection of rules with at most one per kind."""

    rules: Tuple[Rule, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def kinds(self) -> Tuple[RuleKind, ...]:
        return tuple(rule.kind for rule in self.rules)

    def get(self, kind: RuleKind) -> Optional[Rule]:
        for rule in self.rules:
            if rule.kind == kind:
                return rule
        return None


DEFAULT_RULES = RuleSet(
    (
        Rule(RuleKind.MIN_LENGTH, 8),
        Rule(RuleKind.MIN_DIGIT, 1),
        Rule(RuleKind.MIN_SPECIAL_CHAR, 1),
        Rule(RuleKind.MIN_UPPER_CASE, 1),
        Rule(RuleKind.OCCURRENCES, 3),
        Rule(RuleKind.SEQUENTIAL, 3),
    )
)


class RuleConfiguration:
    """Chainable builder for a RuleSet."""

    def __init__(self):
        self._rules: Dict[RuleKind, Rule] = {}

    def _set(self, rule: Rule) -> "RuleConfiguration":
        # Overwriting an existing key keeps its position in the dict
        self._rules[rule.kind] = rule
        return self

    def set_min_length(self, value: int) -> "RuleConfiguration":
        return self._set(Rule(RuleKind.MIN_LENGTH, _as_count(value)))

    def set_max_length(self, value: int) -> "RuleConfiguration":
        return self._set(Rule(RuleKind.MAX_LENGTH, _as_count(value)))

    def set_min_digit(self, value: int) -> "RuleConfiguration":
        return self._set(Rule(RuleKind.MIN_DIGIT, _as_count(value)))

    def set_special_character_minimum(self, value: int) -> "RuleConfiguration":
        return self._set(Rule(RuleKind.MIN_SPECIAL_CHAR, _as_count(value)))

    def set_upper_case_minimum(self, value: int) -> "RuleConfiguration":
        return self._set(Rule(RuleKind.MIN_UPPER_CASE, _as_count(value)))

    def set_lower_case_minimum(self, value: int) -> "RuleConfiguration":
        return self._set(Rule(RuleKind.MIN_LOWER_CASE, _as_count(value)))

    def set_occurrences_maximum(self, value: int) -> "RuleConfiguration":
        return self._set(Rule(RuleKind.OCCURRENCES, _as_count(value)))

    def set_sequential_maximum(self, value: int) -> "RuleConfiguration":
        return self._set(Rule(RuleKind.SEQUENTIAL, _as_count(value)))

    def set_cant_contain(self, values: Iterable[str]) -> "RuleConfiguration":
        return self._set(Rule(RuleKind.CANT_CONTAIN, _as_tuple(values)))

    def set_black_list(self, values: Iterable[str]) -> "RuleConfiguration":
        return self._set(Rule(RuleKind.BLACK_LIST, _as_tuple(values)))

    def set_not_in(
        self, values: Iterable[str], hashed: Optional[Iterable[str]] = None
    ) -> "RuleConfiguration":
        """
        Reject passwords equal to a previous password.

        Args:
            values: Previous passwords as supplied by the caller
            hashed: Optional reference list checked instead of values when
                non-empty. Compared by exact equality, no hashing is done here.
        """
        return self._set(
            Rule(RuleKind.NOT_IN, _as_tuple(values), hashed=_as_tuple(hashed))
        )

    def set_rule(self, kind, value, hashed=None) -> "RuleConfiguration":
        """Set a rule by kind name, used when loading policy documents."""
        kind = RuleKind(kind)
        if kind in LIST_KINDS:
            return self._set(Rule(kind, _as_tuple(value), hashed=_as_tuple(hashed)))
        return self._set(Rule(kind, _as_count(value)))

    def is_empty(self) -> bool:
        return not self._rules

    def build(self) -> RuleSet:
        """Freeze the current rules into a RuleSet."""
        return RuleSet(tuple(self._rules.values()))
