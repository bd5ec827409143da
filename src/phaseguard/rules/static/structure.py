"""
Minimal-shape rule for UI units.
"""

import re

from phaseguard.domain.classification import classify_artifact
from phaseguard.domain.models import ArtifactKind, ArtifactSpec
from phaseguard.rules.base import PerArtifactRule

_CODE_SUFFIXES = (".js", ".jsx", ".ts", ".tsx", ".vue", ".svelte", ".py")
_SCRIPT_ENTRY = re.compile(r"\bexport\b[^\n]*\b(function|const|class|default)\b")
_PYTHON_ENTRY = re.compile(r"^(def|class|async def)\s", re.MULTILINE)


class EntryPointRule(PerArtifactRule):
    """
    An artifact claiming to be a UI unit must expose an entry point.

    Script units need an exported function, const, class or default;
    Python units need a top-level def or class.
    """

    name = "structure"
    description = "Components have basic structure"

    def applies_to(self, artifact: ArtifactSpec) -> bool:
        return (
            artifact.path.endswith(_CODE_SUFFIXES)
            and classify_artifact(artifact) == ArtifactKind.COMPONENT
        )

    def check(self, artifact: ArtifactSpec) -> str | None:
        pattern = _PYTHON_ENTRY if artifact.path.endswith(".py") else _SCRIPT_ENTRY
        if pattern.search(artifact.content):
            return None
        return "No exported entry point"
