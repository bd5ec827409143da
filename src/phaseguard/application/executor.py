"""
PhaseExecutor: builds phases one placeholder at a time and runs their rules.

Per-artifact and per-rule failures accumulate into the PhaseResult rather
than being raised, so the caller decides whether to halt, retry or roll back.
"""

import logging
import time
from collections.abc import Mapping, Sequence

from phaseguard.domain.exceptions import GenerationError
from phaseguard.domain.interfaces import ArtifactGeneratorInterface, ValidationRule
from phaseguard.domain.models import (
    ArtifactSpec,
    OrchestrationPlan,
    Phase,
    PhaseResult,
    PhaseRole,
    RuleOutcome,
)
from phaseguard.rules import default_rule_sets

logger = logging.getLogger("phaseguard.executor")


class PhaseExecutor:
    """
    Generates each phase's artifacts and evaluates its role's rules.

    Stateless between calls; safe to reuse across phases of one run.
    """

    def __init__(
        self,
        generator: ArtifactGeneratorInterface,
        rule_sets: Mapping[PhaseRole, Sequence[ValidationRule]] | None = None,
    ):
        """
        Args:
            generator: Fills placeholders with content
            rule_sets: Rules per phase role (defaults to the built-in sets)
        """
        self._generator = generator
        self._rule_sets = rule_sets if rule_sets is not None else default_rule_sets()

    def rules_for(self, phase: Phase) -> Sequence[ValidationRule]:
        return self._rule_sets.get(phase.role, ())

    async def build_phase(self, phase: Phase) -> PhaseResult:
        """
        Build one phase.

        Placeholders are generated in planned order, each awaited before the
        next starts. A failing placeholder is recorded and its siblings
        still run.

        Returns:
            PhaseResult with success=True only if nothing failed
        """
        started = time.monotonic()
        errors: list[str] = []
        artifacts: list[ArtifactSpec] = []
        failed_features: set[str] = set()
        placeholders = phase.placeholders()

        logger.info(
            "Building phase %d (%s): %d placeholders",
            phase.sequence,
            phase.name,
            len(placeholders),
        )

        for placeholder in placeholders:
            try:
                produced = await self._generator.generate(placeholder, phase)
            except Exception as e:
                reason = e.reason if isinstance(e, GenerationError) else str(e)
                errors.append(f"Failed to generate {placeholder.path}: {reason}")
                logger.warning(
                    "Generation failed for %s: %s", placeholder.path, reason
                )
                if placeholder.feature_id is not None:
                    failed_features.add(placeholder.feature_id)
                continue
            artifacts.extend(produced)

        completed = tuple(
            dict.fromkeys(
                p.feature_id
                for p in placeholders
                if p.feature_id is not None and p.feature_id not in failed_features
            )
        )

        outcomes: list[RuleOutcome] = []
        for rule in self.rules_for(phase):
            outcome = rule.evaluate(artifacts)
            outcomes.append(outcome)
            if not outcome.passed:
                errors.append(rule.description)
                logger.debug("Rule %s failed: %s", rule.name, outcome.message)

        result = PhaseResult(
            phase=phase,
            success=not errors,
            generated_artifacts=tuple(a.path for a in artifacts),
            artifacts=tuple(artifacts),
            completed_feature_ids=completed,
            validation_results=tuple(outcomes),
            errors=tuple(errors),
            duration_seconds=time.monotonic() - started,
        )
        if result.success:
            logger.info(
                "Phase %d completed in %.2fs", phase.sequence, result.duration_seconds
            )
        else:
            logger.error("Phase %d failed: %s", phase.sequence, "; ".join(errors))
        return result

    async def build_in_phases(
        self, plan: OrchestrationPlan | Sequence[Phase]
    ) -> list[PhaseResult]:
        """
        Build phases in ascending sequence order, stopping at the first failure.

        Returns:
            Results of every phase attempted, the failing one last
        """
        phases = plan.phases if isinstance(plan, OrchestrationPlan) else plan
        results: list[PhaseResult] = []
        for phase in sorted(phases, key=lambda p: p.sequence):
            result = await self.build_phase(phase)
            results.append(result)
            if not result.success:
                break
        return results
