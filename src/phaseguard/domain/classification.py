"""
Artifact classification by path.

Maps a file path to the ArtifactKind that decides which phase it is
built in. Patterns are checked in order; the first match wins and
anything unmatched is treated as a UI component.
"""

import re

from phaseguard.domain.models import ArtifactKind, ArtifactSpec

# Order matters: "/api/hooks/x.ts" is a hook, "/lib/config.ts" a utility,
# "/db/user.test.ts" a test.
_PATH_PATTERNS: tuple[tuple[ArtifactKind, re.Pattern[str]], ...] = (
    (
        ArtifactKind.TEST,
        re.compile(
            r"/(tests?|__tests__|e2e)/|\.(test|spec)\.[^/]+$"
            r"|/test_[^/]+\.py$|/[^/]+_test\.py$"
        ),
    ),
    (
        ArtifactKind.SCHEMA,
        re.compile(
            r"/(migrations|schemas?|db|database|prisma)/"
            r"|\.(sql|prisma)$|/([\w-]+\.)?schema\.[^/]+$"
        ),
    ),
    (
        ArtifactKind.TYPES,
        re.compile(r"/(types|typings|interfaces)/|\.d\.ts$|\.pyi$|/types?\.[^/]+$"),
    ),
    (ArtifactKind.HOOK, re.compile(r"/hooks/|/use[A-Z][^/]*$")),
    (ArtifactKind.UTILITY, re.compile(r"/(utils|lib|helpers)/")),
    (ArtifactKind.ENDPOINT, re.compile(r"/(api|functions|endpoints)/")),
    (ArtifactKind.PAGE, re.compile(r"/(pages|routes)/")),
    # A "config" directory or a file named like tsconfig.json / vite.config.ts,
    # never a component that merely mentions config (ConfigPanel.tsx).
    (
        ArtifactKind.CONFIG,
        re.compile(
            r"/(config|settings)/|/\.env[^/]*$"
            r"|/[^/]*config(\.[\w-]+)+$|/settings\.[^/]+$",
            re.IGNORECASE,
        ),
    ),
)

# Kinds built in the foundation phase, in build order.
FOUNDATION_KINDS = (
    ArtifactKind.CONFIG,
    ArtifactKind.SCHEMA,
    ArtifactKind.TYPES,
    ArtifactKind.UTILITY,
)


def classify_path(path: str) -> ArtifactKind:
    """Return the ArtifactKind for a path."""
    normalized = "/" + path.replace("\\", "/").lstrip("/")
    for kind, pattern in _PATH_PATTERNS:
        if pattern.search(normalized):
            return kind
    return ArtifactKind.COMPONENT


def classify_artifact(artifact: ArtifactSpec) -> ArtifactKind:
    """Return the artifact's declared kind, or classify it by path."""
    if artifact.kind is not None:
        return artifact.kind
    return classify_path(artifact.path)
