import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

from .error_reporter import ErrorReporter
from .rule_configuration import DEFAULT_RULES, RuleConfiguration, RuleSet
from .rule_executor import RuleExecutor, Violation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one validation call."""

    passed: bool
    violations: Tuple[str, ...] = ()
    records: Tuple[Violation, ...] = ()
    execution_time_ms: float = field(default=0.0, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        """
        Plain dict form, suitable for JSON responses.

        Returns:
            {
                "status": "PASS" | "FAIL",
                "errors": [message, ...],
                "violations": [{"rule", "value", "message"}, ...],
                "execution_time_ms": float
            }
        """
        return {
            "status": "PASS" if self.passed else "FAIL",
            "errors": list(self.violations),
            "violations": [v.to_dict() for v in self.records],
            "execution_time_ms": self.execution_time_ms,
        }


class ValidationEngine:
    """Core password evaluation, independent of how policies are configured"""

    def __init__(self, reporter: Optional[ErrorReporter] = None):
        """
        Initialize validation engine.

        Args:
            reporter: ErrorReporter used to render messages (default templates
                when omitted)
        """
        self.reporter = reporter or ErrorReporter()

    @staticmethod
    def resolve_rules(configuration: Union[RuleSet, RuleConfiguration, None]) -> RuleSet:
        """
        Turn the caller's configuration into the RuleSet to evaluate.

        An empty or missing configuration falls back to DEFAULT_RULES.

        Raises:
            TypeError: If configuration is not a RuleSet or RuleConfiguration
        """
        if configuration is None:
            return DEFAULT_RULES
        if isinstance(configuration, RuleConfiguration):
            configuration = configuration.build()
        if not isinstance(configuration, RuleSet):
            raise TypeError(
                f"Expected RuleSet or RuleConfiguration, got {type(configuration).__name__}"
            )
        return configuration if len(configuration) else DEFAULT_RULES

    def validate(
        self,
        password: str,
        configuration: Union[RuleSet, RuleConfiguration, None] = None,
    ) -> ValidationResult:
        """
        Evaluate password against every configured rule.

        Args:
            password: Candidate password
            configuration: Rules to apply, in evaluation order

        Returns:
            ValidationResult with passed=True iff no rule was violated
        """
        rules = self.resolve_rules(configuration)

        start = time.time()
        executor = RuleExecutor(rules, self.reporter)
        records = tuple(executor.execute(password))
        elapsed_ms = round((time.time() - start) * 1000, 2)

        logger.debug(
            f"Evaluated {len(rules)} rules in {elapsed_ms}ms, {len(records)} violated",
            extra={"violated_rules": [v.kind.value for v in records]},
        )

        return ValidationResult(
            passed=not records,
            violations=tuple(v.message for v in records),
            records=records,
            execution_time_ms=elapsed_ms,
        )
