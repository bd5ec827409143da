"""
In-memory workspace and progress store.

Useful for testing and ephemeral runs.
"""

from phaseguard.domain.interfaces import PersistenceStoreInterface
from phaseguard.domain.models import ArtifactSpec, RunProgress


class InMemoryPersistenceStore(PersistenceStoreInterface):
    """Simple in-memory store for testing."""

    def __init__(self, artifacts: list[ArtifactSpec] | None = None) -> None:
        self._artifacts: dict[str, ArtifactSpec] = {a.path: a for a in artifacts or ()}
        self._progress: dict[str, RunProgress] = {}

    def list_artifacts(self) -> list[ArtifactSpec]:
        return list(self._artifacts.values())

    def write_artifact(self, artifact: ArtifactSpec) -> None:
        self._artifacts[artifact.path] = artifact

    def delete_artifact(self, path: str) -> bool:
        return self._artifacts.pop(path, None) is not None

    def save_progress(self, progress: RunProgress) -> None:
        self._progress[progress.run_id] = progress

    def load_progress(self, run_id: str) -> RunProgress | None:
        return self._progress.get(run_id)

    def read_artifact(self, path: str) -> ArtifactSpec:
        if path not in self._artifacts:
            raise KeyError(f"Artifact not found: {path}")
        return self._artifacts[path]
