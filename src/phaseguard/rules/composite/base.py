"""
Rule composition.

CompositeRule implements the Decorator pattern for rule composition.
"""

from collections.abc import Sequence

from phaseguard.domain.interfaces import ValidationRule
from phaseguard.domain.models import ArtifactSpec, RuleOutcome


class CompositeRule(ValidationRule):
    """
    Logical AND of multiple rules. All must pass.

    Evaluates rules in order, short-circuits on first failure, so cheap
    checks can guard more expensive ones.
    """

    name = "composite"

    def __init__(self, *rules: ValidationRule, description: str | None = None):
        """
        Args:
            *rules: Rules to compose (evaluated in order)
            description: Reported on failure; defaults to the joined
                descriptions of the composed rules
        """
        self.rules = rules
        self.description = description or "; ".join(r.description for r in rules)

    def evaluate(self, artifacts: Sequence[ArtifactSpec]) -> RuleOutcome:
        """
        Evaluate artifacts against all composed rules.

        Short-circuits on first failure.
        """
        for rule in self.rules:
            outcome = rule.evaluate(artifacts)
            if not outcome.passed:
                return RuleOutcome(
                    rule_name=self.name,
                    passed=False,
                    message=outcome.message,
                    failing_paths=outcome.failing_paths,
                )
        return RuleOutcome(
            rule_name=self.name, passed=True, message="All rules passed"
        )
