"""
Console rendering of plans and run results.
"""

from phaseguard.visualization.tables import (
    plan_summary,
    plan_table,
    render_plan,
    render_results,
    render_rollback,
    results_table,
    validation_panel,
)

__all__ = [
    "plan_summary",
    "plan_table",
    "render_plan",
    "render_results",
    "render_rollback",
    "results_table",
    "validation_panel",
]
