"""Rich rendering of plans, phase results and rollbacks."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from phaseguard.domain.models import (
    OrchestrationPlan,
    PhaseResult,
    RollbackResult,
    RunReport,
    ValidationResult,
)


def plan_table(plan: OrchestrationPlan) -> Table:
    """One row per phase: sequence, name, role, size, duration, prerequisites."""
    table = Table(title="Orchestration plan", show_lines=False)
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Phase", style="bold")
    table.add_column("Role", style="magenta")
    table.add_column("Contents")
    table.add_column("Units", justify="right")
    table.add_column("Duration")
    table.add_column("Depends on", style="dim")

    for phase in plan.phases:
        if phase.features:
            contents = ", ".join(f.name for f in phase.features)
        else:
            contents = f"{len(phase.artifacts)} artifacts"
        table.add_row(
            str(phase.sequence),
            phase.name,
            phase.role.value,
            contents,
            str(phase.total_work_units),
            str(phase.estimated_duration),
            ", ".join(phase.depends_on) or "-",
        )
    return table


def plan_summary(plan: OrchestrationPlan) -> Table:
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    table.add_row("Phases", str(len(plan.phases)))
    table.add_row("Features", str(plan.total_features))
    table.add_row("Work units", str(plan.total_work_units))
    table.add_row("Timeline", plan.estimated_timeline)
    if plan.complexity is not None:
        table.add_row("Complexity", plan.complexity.value)
    if plan.external_apis:
        table.add_row("External APIs", ", ".join(plan.external_apis))
    if plan.data_entities:
        table.add_row("Data entities", ", ".join(plan.data_entities))
    if plan.required_resources:
        table.add_row(
            "Resources", ", ".join(r.name for r in plan.required_resources)
        )
    return table


def results_table(results: Sequence[PhaseResult]) -> Table:
    """One row per built phase with its outcome and first error."""
    table = Table(title="Phase results")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Phase")
    table.add_column("Status")
    table.add_column("Artifacts", justify="right")
    table.add_column("Time", justify="right")
    table.add_column("Errors", style="red")

    for result in results:
        status = (
            Text("passed", style="green")
            if result.success
            else Text("failed", style="red")
        )
        table.add_row(
            str(result.phase.sequence),
            result.phase.name,
            status,
            str(len(result.generated_artifacts)),
            f"{result.duration_seconds:.2f}s",
            result.errors[0] if result.errors else "",
        )
    return table


def validation_panel(sequence: int, validation: ValidationResult) -> Panel:
    lines = Text()
    lines.append(f"Completion: {validation.completion_percentage:.0f}%\n", style="bold")
    for error in validation.errors:
        lines.append(f"✗ {error}\n", style="red")
    for warning in validation.warnings:
        lines.append(f"! {warning}\n", style="yellow")
    for step in validation.next_steps:
        lines.append(f"{step}\n", style="dim")
    return Panel(
        lines,
        title=f"Phase {sequence} validation",
        border_style="green" if validation.is_valid else "red",
    )


def render_plan(plan: OrchestrationPlan, console: Console | None = None) -> None:
    console = console or Console()
    console.print(plan_summary(plan))
    console.print(plan_table(plan))


def render_results(report: RunReport, console: Console | None = None) -> None:
    """Print results, then the failing phase's validation if the run halted."""
    console = console or Console()
    console.print(results_table(report.results))
    if report.failed_phase is not None and report.validations:
        console.print(
            validation_panel(report.failed_phase.sequence, report.validations[-1])
        )
    style = "green" if report.succeeded else "red"
    console.print(
        Panel(
            f"Run {report.run_id}: {report.status.value}",
            border_style=style,
            expand=False,
        )
    )


def render_rollback(
    phase_id: str, result: RollbackResult, console: Console | None = None
) -> None:
    console = console or Console()
    body = Group(
        Text(f"Restored: {result.files_restored}"),
        Text(f"Deleted: {result.files_deleted}"),
        *(Text(f"✗ {error}", style="red") for error in result.errors),
    )
    console.print(
        Panel(
            body,
            title=f"Rollback {phase_id}",
            border_style="green" if result.success else "red",
            expand=False,
        )
    )
