"""
Domain interfaces (Ports) for phased build planning and execution.

These abstract base classes define the contracts that collaborators must
satisfy. They have no external dependencies and mark the boundary between
the planning/execution core and everything it delegates to.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from phaseguard.domain.models import (
        ArtifactSpec,
        ExternalResource,
        Feature,
        Phase,
        RuleOutcome,
        RunProgress,
    )


class FeatureDetectorInterface(ABC):
    """
    Port for turning a free-text request into features.

    Classification logic lives entirely behind this port.
    """

    @abstractmethod
    def detect(self, request: str) -> list["Feature"]:
        """
        Detect the features a request implies.

        Args:
            request: Free-text description of the project

        Returns:
            Features in detection order
        """
        pass


class ArtifactGeneratorInterface(ABC):
    """
    Port for filling artifact placeholders.

    Implementations typically call a remote generation service. Each call is
    an I/O boundary; the executor awaits one placeholder at a time.
    """

    @abstractmethod
    async def generate(
        self, placeholder: "ArtifactSpec", phase: "Phase"
    ) -> Sequence["ArtifactSpec"]:
        """
        Produce the artifact(s) for one placeholder.

        Args:
            placeholder: Planned artifact, or a feature placeholder whose
                path is the feature id
            phase: The phase being built

        Returns:
            Generated artifacts with path and content

        Raises:
            GenerationError: If the placeholder could not be produced
        """
        pass


class PersistenceStoreInterface(ABC):
    """
    Port for durable storage of artifacts and run progress.

    Touched only between phases, never from within one.
    """

    @abstractmethod
    def list_artifacts(self) -> list["ArtifactSpec"]:
        """Return every artifact currently in the workspace."""
        pass

    @abstractmethod
    def write_artifact(self, artifact: "ArtifactSpec") -> None:
        """Create or overwrite an artifact by path."""
        pass

    @abstractmethod
    def delete_artifact(self, path: str) -> bool:
        """
        Delete an artifact by path.

        Returns:
            True if the artifact existed
        """
        pass

    @abstractmethod
    def save_progress(self, progress: "RunProgress") -> None:
        """Record run progress, replacing any earlier record for the run."""
        pass

    @abstractmethod
    def load_progress(self, run_id: str) -> "RunProgress | None":
        """Return the last recorded progress for a run, if any."""
        pass


class ExternalResourceCatalogInterface(ABC):
    """Port for read-only lookup of third-party resource setup metadata."""

    @abstractmethod
    def get(self, resource_id: str) -> "ExternalResource | None":
        """Look up a resource by id."""
        pass

    @abstractmethod
    def detect_required(
        self, request: str, feature_ids: Sequence[str]
    ) -> list["ExternalResource"]:
        """
        Detect the resources a request and its features need.

        Args:
            request: Free-text description of the project
            feature_ids: Ids of the detected features

        Returns:
            Required resources, without duplicates
        """
        pass


class ValidationRule(ABC):
    """
    Port for phase validation.

    Rules are deterministic predicates over the full artifact set of a
    phase. A failing rule's description is reported as a phase error.
    """

    name: str = "rule"
    description: str = ""

    @abstractmethod
    def evaluate(self, artifacts: Sequence["ArtifactSpec"]) -> "RuleOutcome":
        """
        Evaluate the rule against a phase's artifacts.

        Args:
            artifacts: Every artifact generated by the phase

        Returns:
            RuleOutcome with passed=True/False and the failing paths
        """
        pass
