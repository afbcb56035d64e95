"""
password-policy: Password strength validation against configurable rules

This library provides a pure Python policy engine with:
- Length, character-class, repetition and sequence rules
- Sequential-run detection for Latin and Arabic letters and digits
- Blacklist, forbidden-substring and previous-password checks
- Ordered, pluralized error messages for every violated rule
- YAML policy documents validated against a JSON schema

Example:
    from password_policy import PasswordPolicy

    policy = PasswordPolicy().min_length(10).sequential(4)
    if not policy.check_password(candidate):
        errors = policy.get_errors()
"""

from .api import PasswordPolicy
from .config_loader import PolicyLoader, load_policy
from .error_reporter import ErrorReporter
from .rule_configuration import DEFAULT_RULES, Rule, RuleConfiguration, RuleKind, RuleSet
from .rule_executor import Violation
from .validation_engine import ValidationEngine, ValidationResult

__version__ = "0.1.0"
__all__ = [
    "PasswordPolicy",
    "PolicyLoader",
    "load_policy",
    "ErrorReporter",
    "DEFAULT_RULES",
    "Rule",
    "RuleConfiguration",
    "RuleKind",
    "RuleSet",
    "Violation",
    "ValidationEngine",
    "ValidationResult",
]
