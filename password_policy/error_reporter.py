"""Rendering of rule violations into user-facing messages."""

from numbers import Number
from typing import Any, Dict, Optional

from .rule_configuration import RuleKind

DEFAULT_MESSAGE = "Password is not strong enough"

MESSAGE_TEMPLATES = {
    RuleKind.MIN_LENGTH: "Password must be at least {value} character{plural} long",
    RuleKind.MAX_LENGTH: "Password must be at most {value} character{plural} long",
    RuleKind.MIN_DIGIT: "Password must contain at least {value} digit{plural}",
    RuleKind.MIN_SPECIAL_CHAR: "Password must contain at least {value} special character{plural}",
    RuleKind.MIN_UPPER_CASE: "Password must contain at least {value} uppercase character{plural}",
    RuleKind.MIN_LOWER_CASE: "Password must contain at least {value} lowercase character{plural}",
    RuleKind.OCCURRENCES: "Password can not contain {value} occurrence{plural} of the same character",
    RuleKind.SEQUENTIAL: "Password can not contain {value} sequential letters or numbers",
    RuleKind.CANT_CONTAIN: "Password can not contain `{value}`",
    RuleKind.BLACK_LIST: "Password contains a blacklisted word",
    RuleKind.NOT_IN: "You can not reuse a previous password",
}


def plural_suffix(value: Any) -> str:
    """Return "s" for numbers greater than one, otherwise an empty string."""
    if isinstance(value, Number) and not isinstance(value, bool) and value > 1:
        return "s"
    return ""


class ErrorReporter:
    """Looks up and fills message templates by rule kind."""

    def __init__(self, templates: Optional[Dict[Any, str]] = None):
        """
        Args:
            templates: Optional overrides keyed by RuleKind or kind name,
                merged over MESSAGE_TEMPLATES

        Raises:
            ValueError: If an override uses placeholders other than
                {value} and {plural}
        """
        self.templates = dict(MESSAGE_TEMPLATES)
        self.default_message = DEFAULT_MESSAGE
        for kind, template in (templates or {}).items():
            if kind == "default":
                self.default_message = template
            else:
                self.templates[RuleKind(kind)] = _checked(kind, template)

    def render(self, kind, value: Any = "") -> str:
        try:
            template = self.templates[RuleKind(kind)]
        except (KeyError, ValueError):
            return self.default_message
        try:
            return template.format(value=value, plural=plural_suffix(value))
        except (KeyError, IndexError, ValueError):
            # e.g. a numeric format spec applied to a matched needle
            return self.default_message


def _checked(kind, template: str) -> str:
    try:
        template.format(value=0, plural="")
    except (KeyError, IndexError, ValueError) as e:
        raise ValueError(
            f"Invalid message template for {getattr(kind, 'value', kind)}: {template!r} ({e})"
        )
    return template
