"""
Base class for rules that check artifacts one at a time.
"""

from abc import abstractmethod
from collections.abc import Sequence

from phaseguard.domain.interfaces import ValidationRule
from phaseguard.domain.models import ArtifactSpec, RuleOutcome


class PerArtifactRule(ValidationRule):
    """
    A rule that passes when every artifact it applies to passes.

    Subclasses implement check() for a single artifact and may narrow
    applies_to() to the artifacts they understand.
    """

    def __init__(self, description: str | None = None):
        """
        Args:
            description: Overrides the class description reported on failure
        """
        if description is not None:
            self.description = description

    def applies_to(self, artifact: ArtifactSpec) -> bool:
        return True

    @abstractmethod
    def check(self, artifact: ArtifactSpec) -> str | None:
        """Return a problem description, or None if the artifact passes."""
        pass

    def evaluate(self, artifacts: Sequence[ArtifactSpec]) -> RuleOutcome:
        problems: list[str] = []
        failing: list[str] = []
        for artifact in artifacts:
            if not self.applies_to(artifact):
                continue
            problem = self.check(artifact)
            if problem is not None:
                failing.append(artifact.path)
                problems.append(f"{artifact.path}: {problem}")

        if failing:
            return RuleOutcome(
                rule_name=self.name,
                passed=False,
                message=f"✗ {self.description}\n" + "\n".join(problems),
                failing_paths=tuple(failing),
            )
        return RuleOutcome(
            rule_name=self.name, passed=True, message=f"✓ {self.description}"
        )
