"""Tests for FilesystemPersistenceStore - persistent workspace storage."""

import json
import logging

import pytest

from phaseguard.application.rollback import RollbackManager
from phaseguard.domain.exceptions import PhaseguardError
from phaseguard.domain.models import ArtifactSpec, RunProgress
from phaseguard.infrastructure.persistence.filesystem import (
    FilesystemPersistenceStore,
)


@pytest.fixture
def fs_store(tmp_path):  # noqa: ANN001
    """Create a FilesystemPersistenceStore with temporary directory."""
    return FilesystemPersistenceStore(tmp_path / "workspace")


class TestFilesystemPersistenceStoreInit:
    def test_init_creates_directories(self, tmp_path) -> None:  # noqa: ANN001
        FilesystemPersistenceStore(tmp_path / "workspace")

        assert (tmp_path / "workspace" / "artifacts").is_dir()
        assert (tmp_path / "workspace" / "progress").is_dir()


class TestArtifacts:
    """Tests for artifact files."""

    def test_write_and_list(self, fs_store) -> None:
        fs_store.write_artifact(ArtifactSpec(path="src/b.ts", content="B"))
        fs_store.write_artifact(ArtifactSpec(path="src/a/x.ts", content="X"))

        artifacts = fs_store.list_artifacts()

        assert [a.path for a in artifacts] == ["src/a/x.ts", "src/b.ts"]
        assert (fs_store.artifacts_dir / "src" / "b.ts").read_text() == "B"

    def test_leading_slash_stays_inside(self, fs_store) -> None:
        fs_store.write_artifact(ArtifactSpec(path="/src/a.ts", content="A"))

        assert [a.path for a in fs_store.list_artifacts()] == ["src/a.ts"]

    def test_escaping_path_rejected(self, fs_store) -> None:
        with pytest.raises(PhaseguardError, match="escapes"):
            fs_store.write_artifact(ArtifactSpec(path="../../etc/passwd", content=""))

    def test_delete_prunes_empty_directories(self, fs_store) -> None:
        fs_store.write_artifact(ArtifactSpec(path="src/deep/nested/a.ts"))

        assert fs_store.delete_artifact("src/deep/nested/a.ts")

        assert not (fs_store.artifacts_dir / "src").exists()
        assert fs_store.artifacts_dir.is_dir()

    def test_delete_missing_returns_false(self, fs_store) -> None:
        assert not fs_store.delete_artifact("nope.ts")

    def test_binary_files_skipped(self, fs_store, caplog) -> None:  # noqa: ANN001
        fs_store.write_artifact(ArtifactSpec(path="src/a.ts", content="A"))
        logo = fs_store.artifacts_dir / "public" / "logo.png"
        logo.parent.mkdir()
        logo.write_bytes(b"\x89PNG\r\n\x1a\n\xff\xfe")

        with caplog.at_level(logging.WARNING, logger="phaseguard.persistence"):
            artifacts = fs_store.list_artifacts()

        assert [a.path for a in artifacts] == ["src/a.ts"]
        assert "public/logo.png" in caplog.text

    def test_rollback_leaves_binary_files_alone(self, fs_store) -> None:
        logo = fs_store.artifacts_dir / "logo.png"
        logo.write_bytes(b"\xff\xd8\xff\xe0")
        manager = RollbackManager(workspace=fs_store)
        manager.create_rollback_point("phase-1", fs_store.list_artifacts())
        fs_store.write_artifact(ArtifactSpec(path="src/new.ts", content="N"))

        result = manager.rollback("phase-1")

        assert result.success
        assert result.files_deleted == 1
        assert logo.read_bytes() == b"\xff\xd8\xff\xe0"


class TestProgress:
    """Tests for run progress documents."""

    def test_save_and_load(self, fs_store, tmp_path) -> None:  # noqa: ANN001
        progress = RunProgress(
            run_id="run-1",
            completed_phases=(1, 2),
            completed_feature_ids=("database",),
            updated_at="2025-01-01T00:00:00+00:00",
        )

        fs_store.save_progress(progress)

        path = tmp_path / "workspace" / "progress" / "run-1.json"
        assert json.loads(path.read_text())["completed_phases"] == [1, 2]
        assert fs_store.load_progress("run-1") == progress
        assert not path.with_suffix(".tmp").exists()

    def test_progress_survives_new_instance(self, tmp_path) -> None:  # noqa: ANN001
        FilesystemPersistenceStore(tmp_path).save_progress(
            RunProgress(run_id="r", completed_phases=(1,))
        )

        reopened = FilesystemPersistenceStore(tmp_path)

        assert reopened.load_progress("r").completed_phases == (1,)

    def test_load_unknown_run(self, fs_store) -> None:
        assert fs_store.load_progress("missing") is None
