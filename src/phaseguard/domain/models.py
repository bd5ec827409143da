"""
Domain models for phased build planning and execution.

Pure data structures shared by the planner, executor, validator and
rollback registry. Records are frozen dataclasses; the only mutable
structure is DependencyNode, which is owned by a single DependencyGraph.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from phaseguard.domain.exceptions import PhaseValidationError

# =============================================================================
# FEATURES
# =============================================================================


class Complexity(Enum):
    """Relative implementation complexity of a feature."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Feature:
    """
    A named unit of work with declared dependencies and a cost estimate.

    Dependencies are kept in declared order so traversals are deterministic,
    but are treated as a set. Ids that are not part of the active feature set
    are ignored for ordering.
    """

    id: str
    name: str
    description: str = ""
    dependencies: tuple[str, ...] = ()
    estimated_work_units: int = 3
    complexity: Complexity = Complexity.MEDIUM
    priority: int = 99
    required_external_apis: tuple[str, ...] | None = None
    data_entities: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        if self.id in self.dependencies:
            raise ValueError(f"Feature '{self.id}' cannot depend on itself")
        if self.estimated_work_units < 0:
            raise ValueError(
                f"Feature '{self.id}' has negative work units: "
                f"{self.estimated_work_units}"
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Feature:
        """Create a Feature from its JSON document shape."""
        apis = data.get("required_external_apis")
        entities = data.get("data_entities")
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            description=data.get("description", ""),
            dependencies=tuple(data.get("dependencies", ())),
            estimated_work_units=data.get("estimated_work_units", 3),
            complexity=Complexity(data.get("complexity", "medium")),
            priority=data.get("priority", 99),
            required_external_apis=tuple(apis) if apis is not None else None,
            data_entities=tuple(entities) if entities is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        result: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "dependencies": list(self.dependencies),
            "estimated_work_units": self.estimated_work_units,
            "complexity": self.complexity.value,
            "priority": self.priority,
        }
        if self.required_external_apis is not None:
            result["required_external_apis"] = list(self.required_external_apis)
        if self.data_entities is not None:
            result["data_entities"] = list(self.data_entities)
        return result


@dataclass(eq=False)
class DependencyNode:
    """A feature plus its resolved edges. Owned by one DependencyGraph."""

    feature: Feature
    dependencies: list[DependencyNode] = field(default_factory=list, repr=False)
    dependents: list[DependencyNode] = field(default_factory=list, repr=False)
    depth: int = 0

    @property
    def feature_id(self) -> str:
        return self.feature.id


@dataclass(frozen=True)
class DependencyAnalysis:
    """Outcome of analyzing a dependency graph."""

    is_valid: bool
    errors: tuple[str, ...]
    warnings: tuple[str, ...]
    critical_path: tuple[Feature, ...]
    max_depth: int
    cycle: tuple[str, ...] = ()  # First cycle found, first id repeated at the end


# =============================================================================
# ARTIFACTS
# =============================================================================


class ArtifactKind(Enum):
    """Role of an artifact inferred from its path."""

    CONFIG = "config"  # Foundation / configuration
    SCHEMA = "schema"  # Database schemas and migrations
    TYPES = "types"  # Shared type declarations
    UTILITY = "utility"  # Shared helpers
    HOOK = "hook"  # Behavioral units
    COMPONENT = "component"  # UI units
    PAGE = "page"  # Routes and pages
    ENDPOINT = "endpoint"  # Integration endpoints
    TEST = "test"  # Test suites


@dataclass(frozen=True)
class ArtifactSpec:
    """A planned placeholder or a generated artifact."""

    path: str
    content: str = ""
    kind: ArtifactKind | None = None
    feature_id: str | None = None  # Set for feature placeholders and their output


# =============================================================================
# PHASES AND PLANS
# =============================================================================


class PhaseRole(Enum):
    """Position of a phase in the build; selects its validation rules."""

    FOUNDATION = "foundation"
    CORE = "core"
    FEATURE = "feature"


class ProjectComplexity(Enum):
    """Overall project size class for artifact-only plans."""

    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"
    ENTERPRISE = "enterprise"


@dataclass(frozen=True)
class DurationEstimate:
    """Duration bucket for a phase, in minutes."""

    min_minutes: int
    max_minutes: int

    def __str__(self) -> str:
        return f"{self.min_minutes}-{self.max_minutes} minutes"


@dataclass(frozen=True)
class Phase:
    """An ordered, capacity-bounded batch of features or artifacts."""

    sequence: int
    name: str
    role: PhaseRole
    features: tuple[Feature, ...] = ()
    artifacts: tuple[ArtifactSpec, ...] = ()
    total_work_units: int = 0
    estimated_duration: DurationEstimate = DurationEstimate(10, 15)
    depends_on: tuple[str, ...] = ()  # Names of prerequisite phases
    ready_to_start: bool = False

    @property
    def phase_id(self) -> str:
        return f"phase-{self.sequence}"

    @property
    def feature_ids(self) -> tuple[str, ...]:
        return tuple(f.id for f in self.features)

    @property
    def required_external_apis(self) -> tuple[str, ...]:
        """De-duplicated APIs required by this phase's features."""
        return _unique(
            api for f in self.features for api in f.required_external_apis or ()
        )

    @property
    def expected_artifact_count(self) -> int:
        """Number of artifacts this phase should produce."""
        if self.artifacts:
            return len(self.artifacts)
        return self.total_work_units

    def placeholders(self) -> tuple[ArtifactSpec, ...]:
        """
        Items handed to the generator, in planned order.

        Artifact phases hand over their artifacts; feature phases hand over
        one placeholder per feature, keyed by the feature id.
        """
        if self.artifacts:
            return self.artifacts
        return tuple(ArtifactSpec(path=f.id, feature_id=f.id) for f in self.features)


@dataclass(frozen=True)
class ExternalResource:
    """Third-party service a project needs, with setup metadata."""

    id: str
    name: str
    category: str
    description: str
    signup_url: str = ""
    docs_url: str = ""
    secrets: tuple[str, ...] = ()  # Environment variable names
    setup_steps: tuple[str, ...] = ()
    provides: tuple[str, ...] = ()  # Feature API names this resource satisfies


@dataclass(frozen=True)
class OrchestrationPlan:
    """Complete phased plan for one run."""

    phases: tuple[Phase, ...]
    total_features: int
    total_work_units: int
    estimated_timeline: str
    external_apis: tuple[str, ...] = ()
    data_entities: tuple[str, ...] = ()
    required_resources: tuple[ExternalResource, ...] = ()
    complexity: ProjectComplexity | None = None


# =============================================================================
# VALIDATION AND RESULTS
# =============================================================================


@dataclass(frozen=True)
class RuleOutcome:
    """Result of evaluating one validation rule over a phase's artifacts."""

    rule_name: str
    passed: bool
    message: str = ""
    failing_paths: tuple[str, ...] = ()


@dataclass(frozen=True)
class PhaseResult:
    """Outcome of building one phase."""

    phase: Phase
    success: bool
    generated_artifacts: tuple[str, ...] = ()
    artifacts: tuple[ArtifactSpec, ...] = field(default=(), repr=False)
    completed_feature_ids: tuple[str, ...] = ()
    validation_results: tuple[RuleOutcome, ...] = ()
    errors: tuple[str, ...] = ()
    duration_seconds: float = 0.0


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a phase gate check."""

    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    completion_percentage: float = 0.0
    next_steps: tuple[str, ...] = ()


@dataclass(frozen=True)
class PhaseStatus:
    """Read-only projection of a phase's progress."""

    sequence: int
    name: str
    completed: bool
    completion_percentage: float
    error_count: int
    warning_count: int


# =============================================================================
# ROLLBACK
# =============================================================================


@dataclass(frozen=True)
class FileSnapshot:
    """Content of one artifact at snapshot time."""

    path: str
    content: str
    existed: bool = True


@dataclass(frozen=True)
class RollbackPoint:
    """Immutable pre-phase snapshot keyed by phase id."""

    phase_id: str
    created_at: str  # ISO timestamp
    snapshots: tuple[FileSnapshot, ...]
    database_state: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RollbackResult:
    """Outcome of restoring a rollback point."""

    success: bool
    files_restored: int = 0
    files_deleted: int = 0
    errors: tuple[str, ...] = ()
    restored_artifacts: tuple[ArtifactSpec, ...] = field(default=(), repr=False)


# =============================================================================
# RUN STATE
# =============================================================================


class RunStatus(Enum):
    """Outcome of a phased build run."""

    SUCCESS = "success"  # All phases built and validated
    FAILED = "failed"  # A phase failed; remaining phases skipped


@dataclass(frozen=True)
class RunProgress:
    """Progress checkpoint handed to the persistence store between phases."""

    run_id: str
    completed_phases: tuple[int, ...] = ()
    completed_feature_ids: tuple[str, ...] = ()
    updated_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "completed_phases": list(self.completed_phases),
            "completed_feature_ids": list(self.completed_feature_ids),
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RunProgress:
        return cls(
            run_id=data["run_id"],
            completed_phases=tuple(data.get("completed_phases", ())),
            completed_feature_ids=tuple(data.get("completed_feature_ids", ())),
            updated_at=data.get("updated_at", ""),
        )


@dataclass(frozen=True)
class RunReport:
    """Results of a run: every completed phase plus the failing one, if any."""

    run_id: str
    status: RunStatus
    results: tuple[PhaseResult, ...] = ()
    validations: tuple[ValidationResult, ...] = ()
    failed_phase: Phase | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == RunStatus.SUCCESS

    def raise_for_failure(self) -> None:
        """Raise PhaseValidationError if the run halted on a failed phase."""
        if self.status == RunStatus.SUCCESS or self.failed_phase is None:
            return
        errors: list[str] = []
        if self.results and self.results[-1].phase == self.failed_phase:
            errors.extend(self.results[-1].errors)
        if self.validations:
            errors.extend(e for e in self.validations[-1].errors if e not in errors)
        raise PhaseValidationError(self.failed_phase.sequence, tuple(errors))


def _unique(items: Iterable[str]) -> tuple[str, ...]:
    """De-duplicate preserving first-seen order."""
    return tuple(dict.fromkeys(items))
