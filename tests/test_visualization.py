"""Tests for rich rendering of plans and results."""

import pytest
from rich.console import Console

from phaseguard.application.planner import PhasePlanner
from phaseguard.domain.models import (
    PhaseResult,
    RollbackResult,
    RunReport,
    RunStatus,
    ValidationResult,
)
from phaseguard.visualization import render_plan, render_results, render_rollback


@pytest.fixture
def console() -> Console:
    return Console(record=True, width=160)


class TestRenderPlan:
    def test_plan_lists_phases(self, console, video_features):
        plan = PhasePlanner(capacity=10).plan_features(video_features)

        render_plan(plan, console)
        output = console.export_text()

        assert "Orchestration plan" in output
        assert "Phase 1" in output
        assert "Authentication" in output
        assert plan.estimated_timeline in output
        assert "Cloudinary" in output

    def test_artifact_plan_shows_counts(self, console, flat_artifacts):
        plan = PhasePlanner().plan_artifacts(flat_artifacts)

        render_plan(plan, console)
        output = console.export_text()

        assert "Core Components & Hooks" in output
        assert "10 artifacts" in output
        assert "simple" in output or "moderate" in output


class TestRenderResults:
    def test_failed_run_shows_validation(self, console, artifact_phase):
        result = PhaseResult(
            phase=artifact_phase,
            success=False,
            generated_artifacts=("src/config/env.ts",),
            errors=("Failed to generate src/lib/api.ts: scripted failure",),
        )
        validation = ValidationResult(
            is_valid=False,
            errors=("Phase 1 incomplete: expected 3 artifacts, only 1 generated",),
            completion_percentage=33.3,
            next_steps=("Fix errors before proceeding:",),
        )
        report = RunReport(
            run_id="run-42",
            status=RunStatus.FAILED,
            results=(result,),
            validations=(validation,),
            failed_phase=artifact_phase,
        )

        render_results(report, console)
        output = console.export_text()

        assert "failed" in output
        assert "scripted failure" in output
        assert "Phase 1 validation" in output
        assert "Run run-42: failed" in output

    def test_rollback_panel(self, console):
        render_rollback(
            "phase-2",
            RollbackResult(success=True, files_restored=3, files_deleted=1),
            console,
        )
        output = console.export_text()

        assert "Rollback phase-2" in output
        assert "Restored: 3" in output
        assert "Deleted: 1" in output
