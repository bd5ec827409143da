"""
PhasedBuildOrchestrator: the sequential run loop.

For each phase: readiness check, rollback point, build, validate, then
either commit (persist and advance) or halt with the rollback point kept
for a later rollback or corrected retry.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Collection, Mapping, Sequence
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from phaseguard.application.executor import PhaseExecutor
from phaseguard.application.rollback import RollbackManager
from phaseguard.application.validator import PhaseValidator
from phaseguard.domain.exceptions import RollbackError, RunTimeout
from phaseguard.domain.interfaces import (
    ArtifactGeneratorInterface,
    PersistenceStoreInterface,
    ValidationRule,
)
from phaseguard.domain.models import (
    OrchestrationPlan,
    Phase,
    PhaseResult,
    PhaseRole,
    RollbackResult,
    RunProgress,
    RunReport,
    RunStatus,
    ValidationResult,
)

if TYPE_CHECKING:
    from phaseguard.config import OrchestratorConfig

logger = logging.getLogger("phaseguard.orchestrator")

DEFAULT_RUN_TIMEOUT_SECONDS = 300.0


class PhasedBuildOrchestrator:
    """
    Runs a plan phase by phase.

    Phases never overlap and the workspace is only touched between phases.
    One orchestrator serves one run at a time; its rollback points and
    progress belong to that run.
    """

    def __init__(
        self,
        executor: PhaseExecutor,
        workspace: PersistenceStoreInterface,
        validator: PhaseValidator | None = None,
        rollback_manager: RollbackManager | None = None,
        run_timeout_seconds: float = DEFAULT_RUN_TIMEOUT_SECONDS,
    ):
        """
        Args:
            executor: Builds individual phases
            workspace: Holds artifacts and run progress between phases
            validator: Phase gate checks (default threshold if None)
            rollback_manager: Snapshot registry (restores into workspace if None)
            run_timeout_seconds: Wall-clock deadline for a whole run
        """
        if run_timeout_seconds <= 0:
            raise ValueError(
                f"run_timeout_seconds must be positive, got {run_timeout_seconds}"
            )
        self._executor = executor
        self._workspace = workspace
        self._validator = validator or PhaseValidator()
        self._rollback = rollback_manager or RollbackManager(workspace=workspace)
        self._run_timeout = run_timeout_seconds
        self._progress: RunProgress | None = None

    @classmethod
    def from_config(
        cls,
        config: OrchestratorConfig,
        generator: ArtifactGeneratorInterface,
        workspace: PersistenceStoreInterface,
        rule_sets: Mapping[PhaseRole, Sequence[ValidationRule]] | None = None,
    ) -> PhasedBuildOrchestrator:
        """Wire an orchestrator and its services from one configuration."""
        return cls(
            executor=PhaseExecutor(generator, rule_sets),
            workspace=workspace,
            validator=PhaseValidator(config.completion_threshold),
            run_timeout_seconds=config.run_timeout_seconds,
        )

    @property
    def progress(self) -> RunProgress | None:
        """Progress of the current run, None before the first run."""
        return self._progress

    @property
    def rollback_manager(self) -> RollbackManager:
        return self._rollback

    async def run(
        self,
        plan: OrchestrationPlan,
        available_external_apis: Collection[str] = (),
        resume_from: RunProgress | None = None,
    ) -> RunReport:
        """
        Execute every phase of a plan in sequence order.

        Args:
            plan: The plan to execute
            available_external_apis: APIs already configured
            resume_from: Progress of an earlier run; its completed phases
                are skipped

        Returns:
            RunReport; on failure the failing phase's rollback point is kept

        Raises:
            RunTimeout: If the run exceeds run_timeout_seconds
        """
        self._progress = resume_from or RunProgress(run_id=str(uuid.uuid4()))
        run_id = self._progress.run_id
        results: list[PhaseResult] = []
        validations: list[ValidationResult] = []

        logger.info(
            "Starting run %s: %d phases, timeout %gs",
            run_id,
            len(plan.phases),
            self._run_timeout,
        )

        try:
            async with asyncio.timeout(self._run_timeout) as deadline:
                for phase in sorted(plan.phases, key=lambda p: p.sequence):
                    if phase.sequence in self._progress.completed_phases:
                        logger.info("Skipping completed phase %d", phase.sequence)
                        continue

                    readiness = self._validator.is_phase_ready(
                        phase,
                        self._progress.completed_phases,
                        available_external_apis,
                    )
                    for warning in readiness.warnings:
                        logger.warning("Phase %d: %s", phase.sequence, warning)
                    if not readiness.is_valid:
                        validations.append(readiness)
                        return self._report(run_id, results, validations, phase)

                    result, validation = await self._execute_phase(phase)
                    results.append(result)
                    validations.append(validation)
                    if not (result.success and validation.is_valid):
                        return self._report(run_id, results, validations, phase)
                    self._commit(phase, result)
        except TimeoutError as e:
            if deadline.expired():
                logger.error("Run %s timed out after %gs", run_id, self._run_timeout)
                raise RunTimeout(self._run_timeout, tuple(results)) from e
            raise

        logger.info("Run %s completed %d phases", run_id, len(results))
        return self._report(run_id, results, validations, None)

    def rollback_phase(self, phase: Phase) -> RollbackResult:
        """Undo a failed phase using its stored rollback point."""
        return self._rollback.rollback(phase.phase_id)

    async def retry_phase(self, phase: Phase) -> tuple[PhaseResult, ValidationResult]:
        """
        Corrected retry of a single failed phase.

        Restores the workspace from the phase's stored point, takes a fresh
        point and rebuilds. On success the phase is committed to the run's
        progress.

        Raises:
            RollbackError: If there is no stored point or it cannot be restored
        """
        if not self._rollback.has_rollback_point(phase.phase_id):
            raise RollbackError(
                f"No rollback point found for phase: {phase.phase_id}"
            )
        restored = self._rollback.rollback(phase.phase_id)
        if not restored.success:
            raise RollbackError("; ".join(restored.errors))

        logger.info("Retrying phase %d (%s)", phase.sequence, phase.name)
        result, validation = await self._execute_phase(phase)
        if result.success and validation.is_valid:
            self._commit(phase, result)
        return result, validation

    def close(self) -> None:
        """Drop every rollback point held for the run."""
        self._rollback.clear_all_rollback_points()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    async def _execute_phase(
        self, phase: Phase
    ) -> tuple[PhaseResult, ValidationResult]:
        progress = self._current_progress()
        self._rollback.create_rollback_point(
            phase.phase_id, self._workspace.list_artifacts()
        )
        result = await self._executor.build_phase(phase)
        validation = self._validator.validate_phase(
            phase,
            result.generated_artifacts,
            {*progress.completed_feature_ids, *result.completed_feature_ids},
        )
        for warning in validation.warnings:
            logger.warning("Phase %d: %s", phase.sequence, warning)
        return result, validation

    def _commit(self, phase: Phase, result: PhaseResult) -> None:
        """Persist a validated phase and advance progress."""
        for artifact in result.artifacts:
            self._workspace.write_artifact(artifact)

        progress = self._current_progress()
        self._progress = RunProgress(
            run_id=progress.run_id,
            completed_phases=tuple(
                dict.fromkeys((*progress.completed_phases, phase.sequence))
            ),
            completed_feature_ids=tuple(
                dict.fromkeys(
                    (*progress.completed_feature_ids, *result.completed_feature_ids)
                )
            ),
            updated_at=datetime.now(UTC).isoformat(),
        )
        self._workspace.save_progress(self._progress)
        self._rollback.discard_rollback_point(phase.phase_id)
        logger.info("Committed phase %d (%s)", phase.sequence, phase.name)

    def _current_progress(self) -> RunProgress:
        if self._progress is None:
            self._progress = RunProgress(run_id=str(uuid.uuid4()))
        return self._progress

    @staticmethod
    def _report(
        run_id: str,
        results: list[PhaseResult],
        validations: list[ValidationResult],
        failed_phase: Phase | None,
    ) -> RunReport:
        if failed_phase is not None:
            logger.error(
                "Run %s halted at phase %d (%s)",
                run_id,
                failed_phase.sequence,
                failed_phase.name,
            )
        return RunReport(
            run_id=run_id,
            status=RunStatus.SUCCESS if failed_phase is None else RunStatus.FAILED,
            results=tuple(results),
            validations=tuple(validations),
            failed_phase=failed_phase,
        )
