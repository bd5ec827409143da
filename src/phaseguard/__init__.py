"""
phaseguard: phased build planning and execution.

Turns a decomposed list of features (or raw artifacts) into a
dependency-respecting, capacity-bounded plan, then executes it phase by
phase with validation gates and snapshot-based rollback.

Example:
    import asyncio

    from phaseguard import PhasePlanner, PhasedBuildOrchestrator, OrchestratorConfig
    from phaseguard.infrastructure import (
        InMemoryPersistenceStore,
        KeywordFeatureDetector,
        MockArtifactGenerator,
    )

    config = OrchestratorConfig()
    planner = PhasePlanner.from_config(config, detector=KeywordFeatureDetector())
    plan = planner.plan_request("A video app with login, comments and a feed")

    orchestrator = PhasedBuildOrchestrator.from_config(
        config, MockArtifactGenerator(), InMemoryPersistenceStore()
    )
    report = asyncio.run(orchestrator.run(plan))
    report.raise_for_failure()
"""

# Application layer (planning and orchestration)
from phaseguard.application import (
    PhaseExecutor,
    PhasedBuildOrchestrator,
    PhasePlanner,
    PhaseValidator,
    RollbackManager,
)

# Configuration
from phaseguard.config import (
    OrchestratorConfig,
    load_artifacts,
    load_config,
    load_features,
)

# Domain catalog and graph
from phaseguard.domain.catalog import (
    DEFAULT_FEATURE_CATALOG,
    FeatureCatalog,
    FeatureTemplate,
)

# Domain exceptions
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

# Domain interfaces (for type hints and custom implementations)
from phaseguard.domain.interfaces import (
    ArtifactGeneratorInterface,
    ExternalResourceCatalogInterface,
    FeatureDetectorInterface,
    PersistenceStoreInterface,
    ValidationRule,
)

# Domain models (most commonly used)
from phaseguard.domain.models import (
    ArtifactKind,
    ArtifactSpec,
    Complexity,
    DependencyAnalysis,
    ExternalResource,
    Feature,
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

# Rules (commonly composed)
from phaseguard.rules import (
    BalancedSyntaxRule,
    CompositeRule,
    EntryPointRule,
    ImportResolutionRule,
    TypeSoundnessRule,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Domain models
    "ArtifactKind",
    "ArtifactSpec",
    "Complexity",
    "DependencyAnalysis",
    "ExternalResource",
    "Feature",
    "OrchestrationPlan",
    "Phase",
    "PhaseResult",
    "PhaseRole",
    "RollbackResult",
    "RunProgress",
    "RunReport",
    "RunStatus",
    "ValidationResult",
    # Catalog and graph
    "DEFAULT_FEATURE_CATALOG",
    "FeatureCatalog",
    "FeatureTemplate",
    "DependencyGraph",
    # Domain interfaces
    "ArtifactGeneratorInterface",
    "ExternalResourceCatalogInterface",
    "FeatureDetectorInterface",
    "PersistenceStoreInterface",
    "ValidationRule",
    # Domain exceptions
    "PhaseguardError",
    "ConfigurationError",
    "PlanningError",
    "CircularDependencyError",
    "MissingDependencyError",
    "PhaseValidationError",
    "GenerationError",
    "RollbackError",
    "RunTimeout",
    # Application layer
    "PhaseExecutor",
    "PhasePlanner",
    "PhaseValidator",
    "PhasedBuildOrchestrator",
    "RollbackManager",
    # Configuration
    "OrchestratorConfig",
    "load_artifacts",
    "load_config",
    "load_features",
    # Rules
    "BalancedSyntaxRule",
    "CompositeRule",
    "EntryPointRule",
    "ImportResolutionRule",
    "TypeSoundnessRule",
]
