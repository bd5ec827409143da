#!/usr/bin/env python3
"""
Phased Build Example Runner.

Plans a project into dependency-ordered, capacity-bounded phases and
executes it phase by phase with validation gates and rollback.

Usage:
    python -m examples.phased_build.run
    python -m examples.phased_build.run --request "A video app with login and comments"
    python -m examples.phased_build.run --artifacts examples/phased_build/artifacts.json
    python -m examples.phased_build.run --fail comments --on-failure retry
    python -m examples.phased_build.run --resume <run-id> --workspace ./output

Configuration:
    - config.json: Planner and orchestrator tunables (capacity, thresholds)
    - features.json: Default feature set when no request or artifacts given
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click
from examples.base import (
    common_options,
    console,
    plan_options,
    print_error,
    print_failure,
    print_header,
    print_run_info,
    print_success,
    setup_logging,
)

from phaseguard import (
    ConfigurationError,
    OrchestrationPlan,
    OrchestratorConfig,
    PhasedBuildOrchestrator,
    PhasePlanner,
    PlanningError,
    RunReport,
    RunTimeout,
    load_artifacts,
    load_config,
    load_features,
)
from phaseguard.infrastructure import (
    FilesystemPersistenceStore,
    GeneratorRegistry,
    KeywordFeatureDetector,
    MockArtifactGenerator,
    StaticResourceCatalog,
)
from phaseguard.visualization import render_plan, render_results, render_rollback


def build_plan(
    planner: PhasePlanner,
    request: str | None,
    features_path: Path,
    artifacts_path: Path | None,
) -> tuple[OrchestrationPlan, str]:
    """Plan from whichever input was given; returns (plan, source label)."""
    if request:
        return planner.plan_request(request), f"request: {request!r}"
    if artifacts_path:
        artifacts, feature_ids = load_artifacts(artifacts_path)
        return planner.plan_artifacts(artifacts, feature_ids), str(artifacts_path)
    return planner.plan_features(load_features(features_path)), str(features_path)


async def execute(
    orchestrator: PhasedBuildOrchestrator,
    generator: MockArtifactGenerator | None,
    plan: OrchestrationPlan,
    workspace: FilesystemPersistenceStore,
    available_apis: list[str],
    resume: str | None,
    on_failure: str,
) -> RunReport:
    """Run the plan, then roll back or retry the failed phase if asked."""
    progress = workspace.load_progress(resume) if resume else None
    if resume and progress is None:
        raise ConfigurationError(f"No saved progress for run: {resume}")

    report = await orchestrator.run(plan, available_apis, resume_from=progress)
    render_results(report, console)
    if report.succeeded or report.failed_phase is None:
        return report

    failed = report.failed_phase
    if not orchestrator.rollback_manager.has_rollback_point(failed.phase_id):
        # Halted at the readiness check; nothing was built
        return report

    if on_failure == "rollback":
        render_rollback(failed.phase_id, orchestrator.rollback_phase(failed), console)
    elif on_failure == "retry":
        if generator is not None:
            generator.heal()
        console.print(f"\nRetrying phase {failed.sequence} ({failed.name})...\n")
        result, validation = await orchestrator.retry_phase(failed)
        if result.success and validation.is_valid:
            # Continue from the retried phase with the committed progress
            report = await orchestrator.run(
                plan, available_apis, resume_from=orchestrator.progress
            )
            render_results(report, console)
        else:
            print_failure(
                f"Retry of phase {failed.sequence} failed",
                "\n".join((*result.errors, *validation.errors)),
            )
    return report


@click.command()
@common_options
@plan_options
@click.option(
    "--fail",
    "fail_paths",
    multiple=True,
    help="Placeholder path or feature id the mock generator should fail",
)
@click.option(
    "--on-failure",
    type=click.Choice(["halt", "rollback", "retry"]),
    default="halt",
    help="What to do with a failed phase (default: halt)",
)
def main(
    config: str | None,
    workspace: str | None,
    generator: str,
    log_file: str | None,
    verbose: bool,
    request: str | None,
    features: str | None,
    artifacts: str | None,
    resume: str | None,
    dry_run: bool,
    fail_paths: tuple[str, ...],
    on_failure: str,
) -> None:
    """Phased Build - plan and execute a project in validated phases."""
    script_dir = Path(__file__).parent

    # Resolve paths
    config_path = Path(config) if config else script_dir / "config.json"
    features_path = Path(features) if features else script_dir / "features.json"
    artifacts_path = Path(artifacts) if artifacts else None
    workspace_path = Path(workspace) if workspace else script_dir / "output"
    workspace_path.mkdir(exist_ok=True, parents=True)
    log_path = log_file or str(workspace_path / "run.log")

    # Setup logging
    logger = setup_logging("phased_build", log_path, verbose)
    logger.info("Starting Phased Build Example")

    try:
        orchestrator_config = (
            load_config(config_path) if config_path.exists() else OrchestratorConfig()
        )
        resources = StaticResourceCatalog()
        planner = PhasePlanner.from_config(
            orchestrator_config,
            detector=KeywordFeatureDetector(),
            resource_catalog=resources,
        )
        plan, source = build_plan(planner, request, features_path, artifacts_path)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        print_error(str(e), "Check that your JSON files exist and are valid.")
        sys.exit(1)
    except PlanningError as e:
        logger.error(f"Planning failed: {e}")
        print_error(str(e), "\n".join(e.errors))
        sys.exit(1)

    print_header(
        "Phased Build", f"{len(plan.phases)} phases, {plan.estimated_timeline}"
    )
    print_run_info(
        source=source,
        generator=generator,
        workspace=str(workspace_path),
        log_file=log_path,
        extra_info=orchestrator_config.to_dict(),
    )
    render_plan(plan, console)
    if dry_run:
        return

    # The bundled mock is always available, even without installed entry points
    GeneratorRegistry.register("MockArtifactGenerator", MockArtifactGenerator)
    try:
        if generator == "MockArtifactGenerator":
            artifact_generator = GeneratorRegistry.create(
                generator, failing_paths=fail_paths
            )
        else:
            artifact_generator = GeneratorRegistry.create(generator)
    except (KeyError, TypeError) as e:
        print_error(str(e), "Register generators under 'phaseguard.generators'.")
        sys.exit(1)

    store = FilesystemPersistenceStore(workspace_path)
    orchestrator = PhasedBuildOrchestrator.from_config(
        orchestrator_config, artifact_generator, store
    )

    console.print("\nExecuting phased build...\n")

    try:
        report = asyncio.run(
            execute(
                orchestrator,
                artifact_generator
                if isinstance(artifact_generator, MockArtifactGenerator)
                else None,
                plan,
                store,
                resources.configured_apis(),
                resume,
                on_failure,
            )
        )
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)
    except RunTimeout as e:
        logger.error(f"Run timed out: {e}")
        print_failure(str(e), f"{len(e.results)} phases finished before the deadline")
        sys.exit(1)
    except ConfigurationError as e:
        print_error(str(e), "Use the run id printed by an earlier run.")
        sys.exit(1)
    finally:
        orchestrator.close()

    if report.succeeded:
        print_success(
            f"Run {report.run_id} built {len(report.results)} phases into "
            f"{store.artifacts_dir}"
        )
        sys.exit(0)
    console.print(f"Resume later with: --resume {report.run_id}")
    sys.exit(1)


if __name__ == "__main__":
    main()
