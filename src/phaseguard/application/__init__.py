"""
Application layer for phased builds.

Contains the planning, execution, validation and rollback services and the
run loop that coordinates them.
"""

from phaseguard.application.executor import PhaseExecutor
from phaseguard.application.orchestrator import PhasedBuildOrchestrator
from phaseguard.application.planner import (
    PhasePlanner,
    estimate_duration,
    format_timeline,
)
from phaseguard.application.rollback import RollbackManager
from phaseguard.application.validator import PhaseValidator

__all__ = [
    "PhaseExecutor",
    "PhasePlanner",
    "PhaseValidator",
    "PhasedBuildOrchestrator",
    "RollbackManager",
    "estimate_duration",
    "format_timeline",
]
