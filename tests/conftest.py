"""Shared pytest fixtures for phaseguard tests."""

import pytest

from phaseguard.application.planner import PhasePlanner
from phaseguard.domain.models import (
    ArtifactSpec,
    Complexity,
    Feature,
    Phase,
    PhaseRole,
)
from phaseguard.infrastructure.generators.mock import MockArtifactGenerator
from phaseguard.infrastructure.persistence.memory import InMemoryPersistenceStore


@pytest.fixture
def chain_features() -> list[Feature]:
    """database <- auth <- profiles."""
    return [
        Feature(id="database", name="Database", estimated_work_units=1, priority=1),
        Feature(
            id="auth",
            name="Auth",
            dependencies=("database",),
            estimated_work_units=5,
            priority=2,
        ),
        Feature(
            id="profiles",
            name="Profiles",
            dependencies=("auth",),
            estimated_work_units=4,
            complexity=Complexity.LOW,
            priority=3,
        ),
    ]


@pytest.fixture
def video_features() -> list[Feature]:
    """A small video app: two independent branches over auth."""
    return [
        Feature(id="database", name="Database Schema", estimated_work_units=1),
        Feature(
            id="authentication",
            name="Authentication",
            dependencies=("database",),
            estimated_work_units=5,
        ),
        Feature(
            id="videoUpload",
            name="Video Upload",
            dependencies=("authentication", "database"),
            estimated_work_units=6,
            complexity=Complexity.HIGH,
            required_external_apis=("Cloudinary",),
            data_entities=("videos",),
        ),
        Feature(
            id="feed",
            name="Content Feed",
            dependencies=("authentication", "videoUpload"),
            estimated_work_units=8,
            data_entities=("feed_items",),
        ),
        Feature(
            id="comments",
            name="Comments System",
            dependencies=("feed",),
            estimated_work_units=5,
            data_entities=("comments",),
        ),
    ]


@pytest.fixture
def flat_artifacts() -> list[ArtifactSpec]:
    """50 UI components with no recognisable role."""
    return [ArtifactSpec(path=f"src/components/Widget{i}.tsx") for i in range(50)]


@pytest.fixture
def artifact_phase() -> Phase:
    """Foundation phase over three planned artifacts."""
    return Phase(
        sequence=1,
        name="Foundation & Configuration",
        role=PhaseRole.FOUNDATION,
        artifacts=(
            ArtifactSpec(path="src/config/env.ts"),
            ArtifactSpec(path="src/lib/api.ts"),
            ArtifactSpec(path="src/utils/format.ts"),
        ),
        total_work_units=3,
    )


@pytest.fixture
def planner() -> PhasePlanner:
    """Planner with the default catalog and capacity."""
    return PhasePlanner()


@pytest.fixture
def mock_generator() -> MockArtifactGenerator:
    """Generator that stubs every placeholder."""
    return MockArtifactGenerator()


@pytest.fixture
def memory_store() -> InMemoryPersistenceStore:
    """Empty in-memory workspace."""
    return InMemoryPersistenceStore()
