"""
Domain layer for phased build planning.

Contains core models, ports and graph analysis with no external dependencies.
"""

from phaseguard.domain.catalog import (
    DEFAULT_FEATURE_CATALOG,
    FeatureCatalog,
    FeatureTemplate,
)
from phaseguard.domain.classification import classify_artifact, classify_path
from phaseguard.domain.exceptions import (
    CircularDependencyError,
    ConfigurationError,
    GenerationError,
    MissingDependencyError,
    PhaseguardError,
    PhaseValidationError,
    PlanningError,
    RollbackError,
    RunTimeout,
)
from phaseguard.domain.graph import DependencyGraph
from phaseguard.domain.interfaces import (
    ArtifactGeneratorInterface,
    ExternalResourceCatalogInterface,
    FeatureDetectorInterface,
    PersistenceStoreInterface,
    ValidationRule,
)
from phaseguard.domain.models import (
    ArtifactKind,
    ArtifactSpec,
    Complexity,
    DependencyAnalysis,
    DependencyNode,
    DurationEstimate,
    ExternalResource,
    Feature,
    FileSnapshot,
    OrchestrationPlan,
    Phase,
    PhaseResult,
    PhaseRole,
    PhaseStatus,
    ProjectComplexity,
    RollbackPoint,
    RollbackResult,
    RuleOutcome,
    RunProgress,
    RunReport,
    RunStatus,
    ValidationResult,
)

__all__ = [
    # Models
    "ArtifactKind",
    "ArtifactSpec",
    "Complexity",
    "DependencyAnalysis",
    "DependencyNode",
    "DurationEstimate",
    "ExternalResource",
    "Feature",
    "FileSnapshot",
    "OrchestrationPlan",
    "Phase",
    "PhaseResult",
    "PhaseRole",
    "PhaseStatus",
    "ProjectComplexity",
    "RollbackPoint",
    "RollbackResult",
    "RuleOutcome",
    "RunProgress",
    "RunReport",
    "RunStatus",
    "ValidationResult",
    # Catalog and classification
    "DEFAULT_FEATURE_CATALOG",
    "FeatureCatalog",
    "FeatureTemplate",
    "classify_artifact",
    "classify_path",
    # Graph
    "DependencyGraph",
    # Interfaces
    "ArtifactGeneratorInterface",
    "ExternalResourceCatalogInterface",
    "FeatureDetectorInterface",
    "PersistenceStoreInterface",
    "ValidationRule",
    # Exceptions
    "PhaseguardError",
    "ConfigurationError",
    "PlanningError",
    "CircularDependencyError",
    "MissingDependencyError",
    "PhaseValidationError",
    "GenerationError",
    "RollbackError",
    "RunTimeout",
]
