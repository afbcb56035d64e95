"""
Public API for password-policy

This is the "front door" - a single chainable object for configuring a policy
and checking passwords against it.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from .config_loader import PolicyLoader
from .error_reporter import ErrorReporter
from .rule_configuration import RuleConfiguration, RuleSet
from .rule_executor import is_enabled
from .validation_engine import ValidationEngine, ValidationResult

logger = logging.getLogger(__name__)


class PasswordPolicy:
    """
    Main password policy class.

    Collects rules through chainable setters, then checks passwords against
    them. With no rules configured the default policy applies (minimum length
    8, at least one digit, special character and uppercase letter, no more
    than 3 repeats of one character, no 3-character ascending runs).

    Each call starts from an empty error list. The instance remembers only
    the errors of its most recent call; for concurrent use share a RuleSet
    and call ValidationEngine.validate directly.

    Example:
        from password_policy import PasswordPolicy

        policy = PasswordPolicy().min_length(10).min_digit(2).cant_contain(["acme"])
        if not policy.check_password("Acme-1234"):
            for error in policy.get_errors():
                print(error)
    """

    def __init__(
        self,
        configuration: Optional[RuleConfiguration] = None,
        messages: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize password policy.

        Args:
            configuration: Existing builder to continue from (new one if omitted)
            messages: Optional message template overrides keyed by rule kind
        """
        self.configuration = configuration or RuleConfiguration()
        self.engine = ValidationEngine(ErrorReporter(messages))
        self._last_result: Optional[ValidationResult] = None

    @classmethod
    def from_file(cls, source: Union[str, Path]) -> "PasswordPolicy":
        """
        Create a policy from a YAML document.

        Args:
            source: Path, file:// URI or http(s):// URI

        Raises:
            ValueError: If the document is not a valid policy
            RuntimeError: If a remote document cannot be fetched
        """
        definition = PolicyLoader().load(source)
        return cls(definition.configuration, definition.messages)

    @classmethod
    def from_dict(cls, document: Dict[str, Any]) -> "PasswordPolicy":
        """Create a policy from an already-parsed policy document."""
        definition = PolicyLoader().load(document)
        return cls(definition.configuration, definition.messages)

    def min_length(self, value: int) -> "PasswordPolicy":
        self.configuration.set_min_length(value)
        return self

    def max_length(self, value: int) -> "PasswordPolicy":
        self.configuration.set_max_length(value)
        return self

    def min_digit(self, value: int) -> "PasswordPolicy":
        self.configuration.set_min_digit(value)
        return self

    def special_character(self, value: int) -> "PasswordPolicy":
        self.configuration.set_special_character_minimum(value)
        return self

    def upper_case(self, value: int) -> "PasswordPolicy":
        self.configuration.set_upper_case_minimum(value)
        return self

    def lower_case(self, value: int) -> "PasswordPolicy":
        self.configuration.set_lower_case_minimum(value)
        return self

    def cant_contain(self, values: Iterable[str]) -> "PasswordPolicy":
        self.configuration.set_cant_contain(values)
        return self

    def black_list(self, values: Iterable[str]) -> "PasswordPolicy":
        self.configuration.set_black_list(values)
        return self

    def not_in(
        self, values: Iterable[str], hashed: Optional[Iterable[str]] = None
    ) -> "PasswordPolicy":
        """
        Reject reuse of a previous password.

        Args:
            values: Previous passwords
            hashed: Optional list compared instead of values when non-empty.
                Membership is exact string equality; nothing is hashed here.
        """
        self.configuration.set_not_in(values, hashed)
        return self

    def occurrences(self, value: int) -> "PasswordPolicy":
        self.configuration.set_occurrences_maximum(value)
        return self

    def sequential(self, value: int) -> "PasswordPolicy":
        self.configuration.set_sequential_maximum(value)
        return self

    @property
    def rules(self) -> RuleSet:
        """Rules that will be evaluated, defaults included."""
        return self.engine.resolve_rules(self.configuration)

    def validate(self, password: str) -> ValidationResult:
        """
        Validate a password against the configured rules.

        Args:
            password: Candidate password

        Returns:
            ValidationResult with passed flag and ordered error messages
        """
        self._last_result = self.engine.validate(password, self.configuration)
        return self._last_result

    def check_password(self, password: str) -> bool:
        """Return True if the password satisfies every rule."""
        return self.validate(password).passed

    def get_errors(self) -> List[str]:
        """Error messages from the most recent validation on this instance."""
        if self._last_result is None:
            return []
        return list(self._last_result.violations)

    def discover_rules(self) -> Dict[str, Dict[str, Any]]:
        """
        Describe the rules that will be evaluated, in evaluation order.

        Returns:
            Dict mapping rule kind to metadata:
            - rule: Rule kind name
            - description: Plain English description
            - value: Configured threshold or list
            - enabled: False when the value disables the rule
            - default: True when the rule comes from the default policy
        """
        using_defaults = self.configuration.is_empty()
        result = {}
        for rule in self.rules:
            result[rule.kind.value] = {
                "rule": rule.kind.value,
                "description": rule.description,
                "value": list(rule.value) if isinstance(rule.value, tuple) else rule.value,
                "enabled": is_enabled(rule),
                "default": using_defaults,
            }
        logger.debug(f"Discovered {len(result)} rules", extra={"defaults": using_defaults})
        return result
