"""
PhasePlanner: turns features or raw artifacts into an OrchestrationPlan.

Feature mode sorts features dependency-first and packs them greedily into
capacity-bounded phases. Artifact mode classifies artifacts by path and
assembles foundation, core and feature phases in fixed order.
"""

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import replace
from enum import Enum
from typing import TYPE_CHECKING

from phaseguard.domain.catalog import DEFAULT_FEATURE_CATALOG, FeatureCatalog
from phaseguard.domain.classification import FOUNDATION_KINDS, classify_artifact
from phaseguard.domain.exceptions import (
    CircularDependencyError,
    ConfigurationError,
    MissingDependencyError,
)
from phaseguard.domain.graph import DependencyGraph
from phaseguard.domain.interfaces import (
    ExternalResourceCatalogInterface,
    FeatureDetectorInterface,
)
from phaseguard.domain.models import (
    ArtifactKind,
    ArtifactSpec,
    DurationEstimate,
    ExternalResource,
    Feature,
    OrchestrationPlan,
    Phase,
    PhaseRole,
    ProjectComplexity,
)

if TYPE_CHECKING:
    from phaseguard.config import OrchestratorConfig

logger = logging.getLogger("phaseguard.planner")

DEFAULT_CAPACITY = 20
DEFAULT_CORE_UI_SLICE = 10

FOUNDATION_PHASE_NAME = "Foundation & Configuration"
CORE_PHASE_NAME = "Core Components & Hooks"

# (upper bound on work units, duration bucket); larger phases get the last one
_DURATION_BUCKETS: tuple[tuple[int, DurationEstimate], ...] = (
    (5, DurationEstimate(10, 15)),
    (10, DurationEstimate(15, 25)),
    (20, DurationEstimate(25, 40)),
)
_LARGEST_DURATION = DurationEstimate(40, 60)


class _Visit(Enum):
    IN_PROGRESS = "in_progress"
    DONE = "done"


def estimate_duration(work_units: int) -> DurationEstimate:
    """Duration bucket for a phase of the given size."""
    for upper, estimate in _DURATION_BUCKETS:
        if work_units <= upper:
            return estimate
    return _LARGEST_DURATION


def format_timeline(total_minutes: int) -> str:
    """'45 minutes' below an hour, otherwise whole hours rounded up."""
    if total_minutes < 60:
        return f"{total_minutes} minutes"
    hours = math.ceil(total_minutes / 60)
    return f"{hours} hour{'s' if hours > 1 else ''}"


def _unique(items: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(items))


def _chunk(items: Sequence[ArtifactSpec], size: int) -> list[tuple[ArtifactSpec, ...]]:
    return [tuple(items[i : i + size]) for i in range(0, len(items), size)]


class PhasePlanner:
    """
    Produces dependency-respecting, capacity-bounded phase plans.

    Planning is all-or-nothing: cycles (and, in strict mode, missing
    dependencies) raise before any phase is built.
    """

    def __init__(
        self,
        catalog: FeatureCatalog = DEFAULT_FEATURE_CATALOG,
        capacity: int = DEFAULT_CAPACITY,
        core_ui_slice: int = DEFAULT_CORE_UI_SLICE,
        detector: FeatureDetectorInterface | None = None,
        resource_catalog: ExternalResourceCatalogInterface | None = None,
    ):
        """
        Args:
            catalog: Feature templates used to expand feature kinds
            capacity: Maximum work units (or artifacts) per phase
            core_ui_slice: UI components built in the core phase
            detector: Turns free-text requests into features
            resource_catalog: Detects third-party resources for a request
        """
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        if core_ui_slice < 0:
            raise ValueError(
                f"core_ui_slice must not be negative, got {core_ui_slice}"
            )
        self._catalog = catalog
        self._capacity = capacity
        self._core_ui_slice = core_ui_slice
        self._detector = detector
        self._resource_catalog = resource_catalog

    @classmethod
    def from_config(
        cls,
        config: "OrchestratorConfig",
        catalog: FeatureCatalog = DEFAULT_FEATURE_CATALOG,
        detector: FeatureDetectorInterface | None = None,
        resource_catalog: ExternalResourceCatalogInterface | None = None,
    ) -> "PhasePlanner":
        return cls(
            catalog=catalog,
            capacity=config.capacity,
            core_ui_slice=config.core_ui_slice,
            detector=detector,
            resource_catalog=resource_catalog,
        )

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def catalog(self) -> FeatureCatalog:
        return self._catalog

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    def plan_features(
        self,
        features: Sequence[Feature],
        strict: bool = True,
        resources: Sequence[ExternalResource] = (),
    ) -> OrchestrationPlan:
        """
        Analyze, sort and group features into a plan.

        Args:
            features: The active feature set
            strict: Raise on dependencies missing from the set instead of
                ignoring them
            resources: Externally detected third-party resources

        Raises:
            CircularDependencyError: If the dependencies contain a cycle
            MissingDependencyError: If strict and a dependency is absent
            PlanningError: If two features share an id
        """
        graph = DependencyGraph()
        graph.build_graph(features)
        analysis = graph.analyze_dependencies()

        if analysis.cycle:
            raise CircularDependencyError(analysis.cycle)

        missing = graph.missing_dependencies()
        if missing:
            messages = tuple(e for e in analysis.errors if "missing feature" in e)
            if strict:
                raise MissingDependencyError(missing, messages)
            for message in messages:
                logger.warning("Ignoring dependency: %s", message)

        for warning in analysis.warnings:
            logger.info(warning)

        ordered = self.topological_sort(features)
        phases = self.group_into_phases(ordered)
        plan = self.build_plan(phases, features, resources)
        logger.info(
            "Planned %d features into %d phases (%s)",
            plan.total_features,
            len(plan.phases),
            plan.estimated_timeline,
        )
        return plan

    def plan_request(self, request: str) -> OrchestrationPlan:
        """
        Detect features for a request and plan them leniently.

        Raises:
            ConfigurationError: If no feature detector was configured
        """
        if self._detector is None:
            raise ConfigurationError("PhasePlanner has no feature detector")
        features = self._detector.detect(request)
        logger.info(
            "Detected %d features: %s",
            len(features),
            ", ".join(f.id for f in features),
        )
        resources: Sequence[ExternalResource] = ()
        if self._resource_catalog is not None:
            resources = self._resource_catalog.detect_required(
                request, [f.id for f in features]
            )
        return self.plan_features(features, strict=False, resources=resources)

    def plan_artifacts(
        self,
        artifacts: Sequence[ArtifactSpec],
        feature_ids: Sequence[str] = (),
    ) -> OrchestrationPlan:
        """
        Plan a flat artifact list.

        Args:
            artifacts: Planned artifacts with paths (content optional)
            feature_ids: Feature ids known for the project, used only to
                assess overall complexity
        """
        phases = self.breakdown_into_phases(artifacts)
        plan = self.build_plan(phases, ())
        return replace(
            plan, complexity=self.assess_complexity(len(artifacts), feature_ids)
        )

    def features_for(self, kinds: Iterable[str]) -> list[Feature]:
        """
        Create catalog features for kinds, pulling in their dependencies.

        Dependencies are added only for kinds the catalog knows. Result is
        in first-requested order with dependencies appended as discovered.
        """
        pending = list(dict.fromkeys(kinds))
        created: dict[str, Feature] = {}
        while pending:
            kind = pending.pop(0)
            if kind in created:
                continue
            feature = self._catalog.create_feature(kind)
            created[kind] = feature
            pending.extend(
                d
                for d in feature.dependencies
                if d in self._catalog and d not in created
            )
        return list(created.values())

    # -------------------------------------------------------------------------
    # Feature mode
    # -------------------------------------------------------------------------

    def topological_sort(self, features: Sequence[Feature]) -> list[Feature]:
        """
        Order features so each follows its present dependencies.

        Roots are visited in input order and dependencies in declared order,
        so the result is deterministic.

        Raises:
            CircularDependencyError: On the first cycle encountered
        """
        by_id = {f.id: f for f in features}
        marks: dict[str, _Visit] = {}
        ordered: list[Feature] = []

        for root in features:
            if root.id in marks:
                continue
            marks[root.id] = _Visit.IN_PROGRESS
            stack = [(root, iter(root.dependencies))]

            while stack:
                feature, pending = stack[-1]
                for dep_id in pending:
                    dep = by_id.get(dep_id)
                    if dep is None:
                        continue
                    mark = marks.get(dep_id)
                    if mark is _Visit.IN_PROGRESS:
                        path = [f.id for f, _ in stack]
                        cycle = (*path[path.index(dep_id) :], dep_id)
                        raise CircularDependencyError(cycle)
                    if mark is None:
                        marks[dep_id] = _Visit.IN_PROGRESS
                        stack.append((dep, iter(dep.dependencies)))
                        break
                else:
                    stack.pop()
                    marks[feature.id] = _Visit.DONE
                    ordered.append(feature)

        return ordered

    def group_into_phases(
        self, ordered: Sequence[Feature], capacity: int | None = None
    ) -> list[Phase]:
        """
        Pack features greedily into phases of at most `capacity` work units.

        A feature larger than the capacity gets a phase of its own.
        """
        limit = capacity if capacity is not None else self._capacity
        batches: list[list[Feature]] = []
        current: list[Feature] = []
        current_units = 0

        for feature in ordered:
            if current and current_units + feature.estimated_work_units > limit:
                batches.append(current)
                current, current_units = [], 0
            current.append(feature)
            current_units += feature.estimated_work_units
        if current:
            batches.append(current)

        phases: list[Phase] = []
        phase_of: dict[str, str] = {}  # feature id -> phase name
        for sequence, batch in enumerate(batches, start=1):
            name = f"Phase {sequence}"
            depends_on = _unique(
                phase_of[dep]
                for feature in batch
                for dep in feature.dependencies
                if dep in phase_of
            )
            units = sum(f.estimated_work_units for f in batch)
            phases.append(
                Phase(
                    sequence=sequence,
                    name=name,
                    role=self._role_for(sequence),
                    features=tuple(batch),
                    total_work_units=units,
                    estimated_duration=estimate_duration(units),
                    depends_on=depends_on,
                    ready_to_start=sequence == 1,
                )
            )
            for feature in batch:
                phase_of[feature.id] = name

        return phases

    @staticmethod
    def _role_for(sequence: int) -> PhaseRole:
        if sequence == 1:
            return PhaseRole.FOUNDATION
        if sequence == 2:
            return PhaseRole.CORE
        return PhaseRole.FEATURE

    # -------------------------------------------------------------------------
    # Artifact mode
    # -------------------------------------------------------------------------

    def breakdown_into_phases(
        self, artifacts: Sequence[ArtifactSpec], capacity: int | None = None
    ) -> list[Phase]:
        """
        Classify artifacts by path and assemble phases in fixed order.

        Foundation (config, schemas, shared types and utilities), then core
        (hooks and the first UI components), then feature phases for the
        remaining components, pages, endpoints and tests. Every
        artifact lands in exactly one phase; each phase depends on its
        immediate predecessor only.
        """
        limit = capacity if capacity is not None else self._capacity
        groups: dict[ArtifactKind, list[ArtifactSpec]] = {k: [] for k in ArtifactKind}
        for artifact in artifacts:
            kind = classify_artifact(artifact)
            groups[kind].append(replace(artifact, kind=kind))

        components = groups[ArtifactKind.COMPONENT]
        foundation = [a for kind in FOUNDATION_KINDS for a in groups[kind]]
        core = groups[ArtifactKind.HOOK] + components[: self._core_ui_slice]
        feature = (
            components[self._core_ui_slice :]
            + groups[ArtifactKind.PAGE]
            + groups[ArtifactKind.ENDPOINT]
            + groups[ArtifactKind.TEST]
        )

        batches: list[tuple[str, PhaseRole, tuple[ArtifactSpec, ...]]] = []
        for base_name, role, items in (
            (FOUNDATION_PHASE_NAME, PhaseRole.FOUNDATION, foundation),
            (CORE_PHASE_NAME, PhaseRole.CORE, core),
        ):
            chunks = _chunk(items, limit)
            for part, chunk in enumerate(chunks, start=1):
                name = base_name if len(chunks) == 1 else f"{base_name} (Part {part})"
                batches.append((name, role, chunk))
        for number, chunk in enumerate(_chunk(feature, limit), start=1):
            name = f"Feature Implementation {number}"
            batches.append((name, PhaseRole.FEATURE, chunk))

        phases: list[Phase] = []
        for sequence, (name, role, chunk) in enumerate(batches, start=1):
            phases.append(
                Phase(
                    sequence=sequence,
                    name=name,
                    role=role,
                    artifacts=chunk,
                    total_work_units=len(chunk),
                    estimated_duration=estimate_duration(len(chunk)),
                    depends_on=(phases[-1].name,) if phases else (),
                    ready_to_start=sequence == 1,
                )
            )

        logger.debug(
            "Broke %d artifacts into %d phases", len(artifacts), len(phases)
        )
        return phases

    @staticmethod
    def assess_complexity(
        artifact_count: int, feature_ids: Sequence[str] = ()
    ) -> ProjectComplexity:
        """Size class of a project from its artifact count and features."""
        features = set(feature_ids)
        if (
            artifact_count > 80
            or len(features) > 15
            or {"videoUpload", "payments"} & features
        ):
            return ProjectComplexity.ENTERPRISE
        if artifact_count > 50 or len(features) > 10:
            return ProjectComplexity.COMPLEX
        if artifact_count > 25 or len(features) > 5 or "authentication" in features:
            return ProjectComplexity.MODERATE
        return ProjectComplexity.SIMPLE

    # -------------------------------------------------------------------------
    # Aggregation
    # -------------------------------------------------------------------------

    def build_plan(
        self,
        phases: Sequence[Phase],
        features: Sequence[Feature],
        resources: Sequence[ExternalResource] = (),
    ) -> OrchestrationPlan:
        """Aggregate phases into an OrchestrationPlan."""
        total_minutes = sum(p.estimated_duration.max_minutes for p in phases)
        by_id: dict[str, ExternalResource] = {}
        for resource in resources:
            by_id.setdefault(resource.id, resource)
        return OrchestrationPlan(
            phases=tuple(phases),
            total_features=len(features),
            total_work_units=sum(p.total_work_units for p in phases),
            estimated_timeline=format_timeline(total_minutes),
            external_apis=_unique(
                api for f in features for api in f.required_external_apis or ()
            ),
            data_entities=_unique(
                entity for f in features for entity in f.data_entities or ()
            ),
            required_resources=tuple(by_id.values()),
        )
