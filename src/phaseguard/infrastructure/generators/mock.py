"""
Mock artifact generator for testing without a generation service.

Returns scripted or stub content, and fails configured paths on demand.
"""

import asyncio
import re
from collections.abc import Collection, Mapping, Sequence

from phaseguard.domain.exceptions import GenerationError
from phaseguard.domain.interfaces import ArtifactGeneratorInterface
from phaseguard.domain.models import ArtifactSpec, Phase

_DEFAULT_SCRIPT = "export default function Component() {\n  return null;\n}\n"
_NON_IDENTIFIER = re.compile(r"\W+")


def stub_content(path: str) -> str:
    """Minimal content that passes the default rules for a path's type."""
    if path.endswith(".py"):
        return "def main():\n    return None\n"
    if path.endswith(".json"):
        return "{}\n"
    if path.endswith((".md", ".txt")):
        return f"# {path}\n"
    return _DEFAULT_SCRIPT


class MockArtifactGenerator(ArtifactGeneratorInterface):
    """
    Scripted generator for tests and demos.

    Artifact placeholders are filled from `contents`, falling back to the
    placeholder's own content and then to a stub. Feature placeholders
    expand into one stub file per estimated work unit.
    """

    def __init__(
        self,
        contents: Mapping[str, str] | None = None,
        failing_paths: Collection[str] = (),
        delay: float = 0.0,
    ):
        """
        Args:
            contents: Path -> content overrides
            failing_paths: Placeholder paths (or feature ids) that raise
                GenerationError
            delay: Seconds to sleep per call, for timeout tests
        """
        self._contents = dict(contents or {})
        self._failing = set(failing_paths)
        self._delay = delay
        self._calls: list[str] = []

    async def generate(
        self, placeholder: ArtifactSpec, phase: Phase
    ) -> Sequence[ArtifactSpec]:
        self._calls.append(placeholder.path)
        if self._delay:
            await asyncio.sleep(self._delay)
        if placeholder.path in self._failing:
            raise GenerationError(placeholder.path, "scripted failure")

        if placeholder.feature_id is not None and not phase.artifacts:
            return self._expand_feature(placeholder.feature_id, phase)

        content = self._contents.get(placeholder.path) or placeholder.content
        return [
            ArtifactSpec(
                path=placeholder.path,
                content=content or stub_content(placeholder.path),
                kind=placeholder.kind,
                feature_id=placeholder.feature_id,
            )
        ]

    def _expand_feature(self, feature_id: str, phase: Phase) -> list[ArtifactSpec]:
        units = next(
            (f.estimated_work_units for f in phase.features if f.id == feature_id), 1
        )
        name = _NON_IDENTIFIER.sub("_", feature_id)
        artifacts = []
        for n in range(1, units + 1):
            path = f"src/features/{feature_id}/part{n}.ts"
            content = self._contents.get(path, f"export const {name}Part{n} = {n};\n")
            artifacts.append(
                ArtifactSpec(path=path, content=content, feature_id=feature_id)
            )
        return artifacts

    @property
    def calls(self) -> list[str]:
        """Placeholder paths in the order generate() received them."""
        return list(self._calls)

    @property
    def call_count(self) -> int:
        """Number of times generate() has been called."""
        return len(self._calls)

    def fail(self, *paths: str) -> None:
        """Make later calls for these paths raise GenerationError."""
        self._failing.update(paths)

    def heal(self, *paths: str) -> None:
        """Stop failing these paths (all paths if none given)."""
        if paths:
            self._failing.difference_update(paths)
        else:
            self._failing.clear()

    def reset(self) -> None:
        """Forget recorded calls."""
        self._calls.clear()
