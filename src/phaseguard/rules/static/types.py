"""
Type soundness rule.

Flags escape hatches out of the type system in typed script artifacts.
"""

import re

from phaseguard.domain.models import ArtifactSpec
from phaseguard.rules.base import PerArtifactRule

# `x: any`, `<any>`, `as any`, `any[]`
_ANY_ANNOTATION = re.compile(r":\s*any\b|<any>|\bas\s+any\b|\bany\[\]")
_SUPPRESSION = "@ts-expect-error"


class TypeSoundnessRule(PerArtifactRule):
    """Rejects `any` annotations in TypeScript unless explicitly suppressed."""

    name = "types"
    description = "TypeScript types valid"

    def applies_to(self, artifact: ArtifactSpec) -> bool:
        return artifact.path.endswith((".ts", ".tsx"))

    def check(self, artifact: ArtifactSpec) -> str | None:
        if _SUPPRESSION in artifact.content:
            return None
        count = len(_ANY_ANNOTATION.findall(artifact.content))
        if count:
            return f"{count} 'any' annotation(s)"
        return None
