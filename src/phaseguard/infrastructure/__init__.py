"""
Infrastructure layer for phased builds.

Contains adapters for external concerns (detection, generation,
persistence, resource lookup).
"""

from phaseguard.infrastructure.detection import KeywordFeatureDetector
from phaseguard.infrastructure.generators import (
    GeneratorRegistry,
    MockArtifactGenerator,
)
from phaseguard.infrastructure.persistence import (
    FilesystemPersistenceStore,
    InMemoryPersistenceStore,
)
from phaseguard.infrastructure.resources import (
    BUILTIN_RESOURCES,
    StaticResourceCatalog,
)

__all__ = [
    # Detection
    "KeywordFeatureDetector",
    # Generators
    "GeneratorRegistry",
    "MockArtifactGenerator",
    # Persistence
    "FilesystemPersistenceStore",
    "InMemoryPersistenceStore",
    # Resources
    "BUILTIN_RESOURCES",
    "StaticResourceCatalog",
]
