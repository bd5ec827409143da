"""
Domain exceptions for phased build planning and execution.

Planning errors are fatal and abort the whole plan. Generation and rule
failures accumulate into phase results instead of being raised; the
exceptions for them exist so adapters and callers can signal and surface
them with structured payloads.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from phaseguard.domain.models import PhaseResult


class PhaseguardError(Exception):
    """Base class for all phaseguard errors."""


class ConfigurationError(PhaseguardError):
    """Raised when configuration or input documents are invalid or missing."""


class PlanningError(PhaseguardError):
    """
    Raised when a plan cannot be produced.

    Planning is all-or-nothing: no partial plan accompanies this error.
    """

    def __init__(self, message: str, errors: tuple[str, ...] = ()):
        """
        Args:
            message: Human-readable error message
            errors: Individual analysis errors that caused the failure
        """
        super().__init__(message)
        self.errors = errors or (message,)


class CircularDependencyError(PlanningError):
    """Raised when the feature dependencies contain a cycle."""

    def __init__(self, cycle: tuple[str, ...]):
        """
        Args:
            cycle: Feature ids along the cycle, first id repeated at the end
        """
        message = f"Circular dependency detected: {' -> '.join(cycle)}"
        super().__init__(message)
        self.cycle = cycle


class MissingDependencyError(PlanningError):
    """Raised in strict planning when features depend on absent features."""

    def __init__(self, missing: dict[str, tuple[str, ...]], errors: tuple[str, ...]):
        """
        Args:
            missing: Feature id -> dependency ids not in the feature set
            errors: One message per (feature, missing id) pair
        """
        super().__init__(
            f"{len(errors)} missing feature dependencies", errors=errors
        )
        self.missing = missing


class PhaseValidationError(PhaseguardError):
    """
    Raised when a caller asks to escalate a failed phase.

    Phase validation failures are recoverable: they drive either a rollback
    or a corrected retry of the same phase.
    """

    def __init__(self, sequence: int, errors: tuple[str, ...]):
        """
        Args:
            sequence: Sequence number of the failed phase
            errors: Errors reported for the phase
        """
        super().__init__(f"Phase {sequence} failed: {'; '.join(errors) or 'unknown'}")
        self.sequence = sequence
        self.errors = errors


class GenerationError(PhaseguardError):
    """Raised by generators when a single artifact could not be produced."""

    def __init__(self, path: str, reason: str):
        """
        Args:
            path: Path of the placeholder that failed
            reason: Human-readable failure reason
        """
        super().__init__(reason)
        self.path = path
        self.reason = reason


class RollbackError(PhaseguardError):
    """Raised by workspaces when a snapshot cannot be restored."""


class RunTimeout(PhaseguardError, TimeoutError):
    """
    Raised when a run exceeds its wall-clock deadline.

    The whole run is abandoned; results of phases completed before the
    deadline are attached so a progress store can resume later.
    """

    def __init__(self, timeout_seconds: float, results: tuple[PhaseResult, ...]):
        """
        Args:
            timeout_seconds: The deadline that was exceeded
            results: Results of phases that finished before the deadline
        """
        super().__init__(f"Run exceeded timeout of {timeout_seconds:g} seconds")
        self.timeout_seconds = timeout_seconds
        self.results = results
