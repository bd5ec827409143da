"""
RollbackManager: per-run registry of pre-phase snapshots.

A rollback point is created right before its phase executes, discarded
when the phase succeeds, and consumed when the phase is rolled back.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from datetime import UTC, datetime
from types import TracebackType
from typing import Any

from phaseguard.domain.interfaces import PersistenceStoreInterface
from phaseguard.domain.models import (
    ArtifactSpec,
    FileSnapshot,
    RollbackPoint,
    RollbackResult,
)

logger = logging.getLogger("phaseguard.rollback")

DatabaseRestorer = Callable[[Mapping[str, Any]], None]


class RollbackManager:
    """
    Snapshot registry keyed by phase id.

    Owned by a single run; use as a context manager to drop every point
    when the run ends.
    """

    def __init__(
        self,
        workspace: PersistenceStoreInterface | None = None,
        database_restorer: DatabaseRestorer | None = None,
    ) -> None:
        """
        Args:
            workspace: Store to restore snapshots into; without one,
                rollback only reports the snapshot contents
            database_restorer: Best-effort callback given a point's
                database_state on rollback
        """
        self._workspace = workspace
        self._database_restorer = database_restorer
        self._points: dict[str, RollbackPoint] = {}

    def __enter__(self) -> RollbackManager:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.clear_all_rollback_points()

    def create_rollback_point(
        self,
        phase_id: str,
        current_artifacts: Sequence[ArtifactSpec],
        database_state: Mapping[str, Any] | None = None,
    ) -> RollbackPoint:
        """
        Snapshot the current artifacts before a phase runs.

        Replaces any earlier point for the same phase.
        """
        point = RollbackPoint(
            phase_id=phase_id,
            created_at=datetime.now(UTC).isoformat(),
            snapshots=tuple(
                FileSnapshot(path=a.path, content=a.content) for a in current_artifacts
            ),
            database_state=dict(database_state or {}),
        )
        if phase_id in self._points:
            logger.debug("Replacing rollback point for %s", phase_id)
        self._points[phase_id] = point
        logger.info(
            "Created rollback point for %s (%d files)", phase_id, len(point.snapshots)
        )
        return point

    def rollback(self, phase_id: str) -> RollbackResult:
        """
        Restore the workspace to the point taken before a phase.

        Snapshot files are written back; files present now but absent from
        the snapshot were created by the phase and are deleted. Failures
        are collected into the result. The point is consumed either way.
        """
        point = self._points.get(phase_id)
        if point is None:
            return RollbackResult(
                success=False,
                errors=(f"No rollback point found for phase: {phase_id}",),
            )

        errors: list[str] = []
        restored = 0
        deleted = 0
        artifacts = tuple(
            ArtifactSpec(path=s.path, content=s.content) for s in point.snapshots
        )

        try:
            if self._workspace is None:
                restored = len(artifacts)
            else:
                snapshot_paths = {a.path for a in artifacts}
                created = [
                    a.path
                    for a in self._workspace.list_artifacts()
                    if a.path not in snapshot_paths
                ]
                for artifact in artifacts:
                    try:
                        self._workspace.write_artifact(artifact)
                        restored += 1
                    except Exception as e:
                        errors.append(f"Failed to restore {artifact.path}: {e}")
                for path in created:
                    try:
                        if self._workspace.delete_artifact(path):
                            deleted += 1
                    except Exception as e:
                        errors.append(f"Failed to delete {path}: {e}")

            if point.database_state and self._database_restorer is not None:
                try:
                    self._database_restorer(point.database_state)
                except Exception as e:
                    errors.append(f"Database rollback failed: {e}")
        except Exception as e:
            errors.append(f"Rollback failed: {e}")
        finally:
            self._points.pop(phase_id, None)

        if errors:
            logger.error("Rollback of %s had errors: %s", phase_id, "; ".join(errors))
        else:
            logger.info(
                "Rolled back %s: %d restored, %d deleted", phase_id, restored, deleted
            )

        return RollbackResult(
            success=not errors,
            files_restored=restored,
            files_deleted=deleted,
            errors=tuple(errors),
            restored_artifacts=artifacts,
        )

    def discard_rollback_point(self, phase_id: str) -> bool:
        """Drop a point after its phase succeeded. Returns True if one existed."""
        return self._points.pop(phase_id, None) is not None

    def has_rollback_point(self, phase_id: str) -> bool:
        return phase_id in self._points

    def get_rollback_point(self, phase_id: str) -> RollbackPoint | None:
        return self._points.get(phase_id)

    def clear_all_rollback_points(self) -> None:
        if self._points:
            logger.debug("Clearing %d rollback points", len(self._points))
        self._points.clear()

    def __len__(self) -> int:
        return len(self._points)
