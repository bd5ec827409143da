"""
PhaseValidator: gates transitions between phases.
"""

import logging
from collections.abc import Collection, Sequence

from phaseguard.domain.models import Phase, PhaseStatus, ValidationResult

logger = logging.getLogger("phaseguard.validator")

DEFAULT_COMPLETION_THRESHOLD = 80.0

# (label, path fragments); the foundation phase should produce at least one of each
CRITICAL_PATTERNS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("authentication", ("auth", "login", "signup")),
    ("database", ("database", "schema", "migration")),
    ("API", ("api", "endpoint", "route")),
)


class PhaseValidator:
    """Completion, readiness and status checks for planned phases."""

    def __init__(self, completion_threshold: float = DEFAULT_COMPLETION_THRESHOLD):
        """
        Args:
            completion_threshold: Minimum percentage of expected artifacts a
                phase must generate to pass
        """
        if not 0 <= completion_threshold <= 100:
            raise ValueError(
                f"completion_threshold must be within 0-100, got {completion_threshold}"
            )
        self._threshold = completion_threshold

    @property
    def completion_threshold(self) -> float:
        return self._threshold

    def validate_phase(
        self,
        phase: Phase,
        generated_artifacts: Sequence[str],
        completed_feature_ids: Collection[str],
    ) -> ValidationResult:
        """
        Check that a built phase is complete enough to move on.

        Args:
            phase: The phase that was built
            generated_artifacts: Paths generated for the phase
            completed_feature_ids: Every feature id completed so far

        Returns:
            ValidationResult; invalid when a feature is unfinished or fewer
            than the threshold percentage of expected artifacts exist
        """
        errors: list[str] = []
        warnings: list[str] = []

        for feature in phase.features:
            if feature.id not in completed_feature_ids:
                errors.append(f'Feature "{feature.name}" was not completed')

        expected = phase.expected_artifact_count
        generated = len(generated_artifacts)
        completion = self.completion_percentage(expected, generated)

        if completion < self._threshold:
            errors.append(
                f"Phase {phase.sequence} incomplete: expected {expected} "
                f"artifacts, only {generated} generated"
            )
        elif completion < 100:
            warnings.append(
                f"Phase {phase.sequence} is {completion:.0f}% complete "
                f"({generated} of {expected} artifacts)"
            )

        if phase.sequence == 1:
            lowered = [path.lower() for path in generated_artifacts]
            for label, fragments in CRITICAL_PATTERNS:
                if not any(f in path for path in lowered for f in fragments):
                    warnings.append(f"No {label} artifacts generated in Phase 1")

        if errors:
            next_steps = (
                "Fix errors before proceeding:",
                *(f"  - {e}" for e in errors),
            )
            logger.warning(
                "Phase %d failed validation with %d errors", phase.sequence, len(errors)
            )
        else:
            next_steps = (f"Proceed to Phase {phase.sequence + 1}",)

        return ValidationResult(
            is_valid=not errors,
            errors=tuple(errors),
            warnings=tuple(warnings),
            completion_percentage=completion,
            next_steps=next_steps,
        )

    def is_phase_ready(
        self,
        phase: Phase,
        completed_phase_numbers: Collection[int],
        available_external_apis: Collection[str] = (),
    ) -> ValidationResult:
        """
        Check the preconditions for starting a phase.

        The previous phase must be completed. Missing external APIs only warn.
        """
        errors: list[str] = []
        warnings: list[str] = []
        next_steps: list[str] = []

        previous = phase.sequence - 1
        if previous >= 1 and previous not in completed_phase_numbers:
            errors.append(
                f"Phase {previous} must be completed before Phase {phase.sequence}"
            )

        available = {api.casefold() for api in available_external_apis}
        for api in phase.required_external_apis:
            if api.casefold() not in available:
                warnings.append(f"External API not configured: {api}")
                next_steps.append(f"Configure {api}")

        dependencies = tuple(
            dict.fromkeys(dep for f in phase.features for dep in f.dependencies)
        )
        next_steps.append(f"Dependencies: {', '.join(dependencies) or 'none'}")

        return ValidationResult(
            is_valid=not errors,
            errors=tuple(errors),
            warnings=tuple(warnings),
            completion_percentage=0.0,
            next_steps=tuple(next_steps),
        )

    def get_phase_status(
        self,
        phase: Phase,
        generated_artifacts: Sequence[str],
        completed_feature_ids: Collection[str],
    ) -> PhaseStatus:
        """Read-only summary; completed only if valid and above the threshold."""
        result = self.validate_phase(phase, generated_artifacts, completed_feature_ids)
        return PhaseStatus(
            sequence=phase.sequence,
            name=phase.name,
            completed=result.is_valid
            and result.completion_percentage >= self._threshold,
            completion_percentage=result.completion_percentage,
            error_count=len(result.errors),
            warning_count=len(result.warnings),
        )

    @staticmethod
    def completion_percentage(expected: int, generated: int) -> float:
        """min(100, generated / expected * 100); 100 when nothing is expected."""
        if expected <= 0:
            return 100.0
        return min(100.0, generated / expected * 100)
