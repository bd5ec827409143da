"""
Filesystem workspace and progress store.

Artifacts are plain files under <base>/artifacts/, addressed by their
relative path. Run progress is one JSON document per run under
<base>/progress/, replaced atomically on every save.
"""

import json
import logging
from pathlib import Path

from phaseguard.domain.exceptions import PhaseguardError
from phaseguard.domain.interfaces import PersistenceStoreInterface
from phaseguard.domain.models import ArtifactSpec, RunProgress

logger = logging.getLogger("phaseguard.persistence")


class FilesystemPersistenceStore(PersistenceStoreInterface):
    """
    Persistent workspace rooted at a base directory.

    Only touched between phases, so no locking is done.
    """

    def __init__(self, base_dir: str | Path):
        self._base_dir = Path(base_dir)
        self._artifacts_dir = self._base_dir / "artifacts"
        self._progress_dir = self._base_dir / "progress"
        self._artifacts_dir.mkdir(parents=True, exist_ok=True)
        self._progress_dir.mkdir(parents=True, exist_ok=True)

    @property
    def artifacts_dir(self) -> Path:
        return self._artifacts_dir

    def _resolve(self, path: str) -> Path:
        """Map an artifact path to a file inside the artifacts directory."""
        target = (self._artifacts_dir / path.lstrip("/")).resolve()
        if not target.is_relative_to(self._artifacts_dir.resolve()):
            raise PhaseguardError(f"Artifact path escapes the workspace: {path}")
        return target

    def list_artifacts(self) -> list[ArtifactSpec]:
        """
        Return every text artifact in the workspace.

        Files that are not UTF-8 text (images, fonts) are not artifacts this
        store produces; they are skipped with a warning and left untouched
        by rollbacks.
        """
        artifacts = []
        for file_path in sorted(self._artifacts_dir.rglob("*")):
            if not file_path.is_file():
                continue
            relative = file_path.relative_to(self._artifacts_dir).as_posix()
            try:
                content = file_path.read_text(encoding="utf-8")
            except UnicodeDecodeError:
                logger.warning("Skipping non-text workspace file: %s", relative)
                continue
            artifacts.append(ArtifactSpec(path=relative, content=content))
        return artifacts

    def write_artifact(self, artifact: ArtifactSpec) -> None:
        target = self._resolve(artifact.path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(artifact.content, encoding="utf-8")

    def delete_artifact(self, path: str) -> bool:
        target = self._resolve(path)
        if not target.is_file():
            return False
        target.unlink()
        self._prune_empty_dirs(target.parent)
        return True

    def _prune_empty_dirs(self, directory: Path) -> None:
        root = self._artifacts_dir.resolve()
        while directory != root and directory.is_dir() and not any(directory.iterdir()):
            directory.rmdir()
            directory = directory.parent

    def _progress_path(self, run_id: str) -> Path:
        return self._progress_dir / f"{run_id}.json"

    def save_progress(self, progress: RunProgress) -> None:
        """Write progress using write-to-temp + rename."""
        path = self._progress_path(progress.run_id)
        temp_path = path.with_suffix(".tmp")
        with open(temp_path, "w") as f:
            json.dump(progress.to_dict(), f, indent=2)
        temp_path.replace(path)  # Atomic on POSIX
        logger.debug("Saved progress for run %s", progress.run_id)

    def load_progress(self, run_id: str) -> RunProgress | None:
        path = self._progress_path(run_id)
        if not path.exists():
            return None
        with open(path) as f:
            return RunProgress.from_dict(json.load(f))
