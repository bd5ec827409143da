"""Tests for RollbackManager."""

from phaseguard.application.rollback import RollbackManager
from phaseguard.domain.models import ArtifactSpec
from phaseguard.infrastructure.persistence.memory import InMemoryPersistenceStore


class TestRollbackPoints:
    """Tests for creating and managing rollback points."""

    def test_create_snapshots_current_artifacts(self):
        manager = RollbackManager()

        point = manager.create_rollback_point(
            "phase-1", [ArtifactSpec(path="a.ts", content="A")]
        )

        assert point.phase_id == "phase-1"
        assert point.snapshots[0].path == "a.ts"
        assert point.snapshots[0].content == "A"
        assert point.created_at
        assert manager.has_rollback_point("phase-1")
        assert manager.get_rollback_point("phase-1") is point

    def test_create_replaces_existing_point(self):
        manager = RollbackManager()
        manager.create_rollback_point("phase-1", [])
        manager.create_rollback_point("phase-1", [ArtifactSpec(path="b.ts")])

        assert len(manager) == 1
        assert len(manager.get_rollback_point("phase-1").snapshots) == 1

    def test_discard(self):
        manager = RollbackManager()
        manager.create_rollback_point("phase-1", [])

        assert manager.discard_rollback_point("phase-1")
        assert not manager.discard_rollback_point("phase-1")
        assert not manager.has_rollback_point("phase-1")

    def test_context_manager_clears_points(self):
        with RollbackManager() as manager:
            manager.create_rollback_point("phase-1", [])
            manager.create_rollback_point("phase-2", [])
            assert len(manager) == 2

        assert len(manager) == 0


class TestRollback:
    """Tests for restoring rollback points."""

    def test_missing_point(self):
        result = RollbackManager().rollback("missing-phase")

        assert not result.success
        assert result.files_restored == 0
        assert result.files_deleted == 0
        assert result.errors == ("No rollback point found for phase: missing-phase",)

    def test_without_workspace_reports_snapshot(self):
        manager = RollbackManager()
        manager.create_rollback_point(
            "phase-1",
            [ArtifactSpec(path="a.ts", content="A"), ArtifactSpec(path="b.ts")],
        )

        result = manager.rollback("phase-1")

        assert result.success
        assert result.files_restored == 2
        assert result.files_deleted == 0
        assert [a.path for a in result.restored_artifacts] == ["a.ts", "b.ts"]

    def test_restores_and_deletes_created_files(self):
        store = InMemoryPersistenceStore([ArtifactSpec(path="a.ts", content="v1")])
        manager = RollbackManager(workspace=store)
        manager.create_rollback_point("phase-2", store.list_artifacts())

        # The phase overwrites a.ts and creates b.ts
        store.write_artifact(ArtifactSpec(path="a.ts", content="v2"))
        store.write_artifact(ArtifactSpec(path="b.ts", content="new"))

        result = manager.rollback("phase-2")

        assert result.success
        assert result.files_restored == 1
        assert result.files_deleted == 1
        assert store.read_artifact("a.ts").content == "v1"
        assert [a.path for a in store.list_artifacts()] == ["a.ts"]

    def test_point_consumed(self):
        manager = RollbackManager()
        manager.create_rollback_point("phase-1", [])

        manager.rollback("phase-1")

        assert not manager.has_rollback_point("phase-1")
        assert not manager.rollback("phase-1").success

    def test_database_restorer_called(self):
        seen = []
        manager = RollbackManager(database_restorer=seen.append)
        manager.create_rollback_point("phase-1", [], {"tables": ["users"]})

        result = manager.rollback("phase-1")

        assert result.success
        assert seen == [{"tables": ["users"]}]

    def test_database_restorer_skipped_without_state(self):
        seen = []
        manager = RollbackManager(database_restorer=seen.append)
        manager.create_rollback_point("phase-1", [])

        manager.rollback("phase-1")

        assert seen == []

    def test_database_failure_collected(self):
        def failing_restorer(state):
            raise RuntimeError("db offline")

        manager = RollbackManager(database_restorer=failing_restorer)
        manager.create_rollback_point("phase-1", [], {"version": 3})

        result = manager.rollback("phase-1")

        assert not result.success
        assert result.errors == ("Database rollback failed: db offline",)
        assert not manager.has_rollback_point("phase-1")

    def test_write_failure_collected(self):
        class ReadOnlyStore(InMemoryPersistenceStore):
            def write_artifact(self, artifact):
                raise PermissionError("read-only")

        manager = RollbackManager(workspace=ReadOnlyStore())
        manager.create_rollback_point("phase-1", [ArtifactSpec(path="a.ts")])

        result = manager.rollback("phase-1")

        assert not result.success
        assert result.files_restored == 0
        assert result.errors == ("Failed to restore a.ts: read-only",)

    def test_listing_failure_reported(self):
        class BrokenStore(InMemoryPersistenceStore):
            def list_artifacts(self):
                raise OSError("disk gone")

        manager = RollbackManager(workspace=BrokenStore())
        manager.create_rollback_point("phase-1", [])

        result = manager.rollback("phase-1")

        assert not result.success
        assert result.errors == ("Rollback failed: disk gone",)
        assert not manager.has_rollback_point("phase-1")
