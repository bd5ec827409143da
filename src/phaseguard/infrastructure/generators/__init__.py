"""
Artifact generator adapters.
"""

from phaseguard.infrastructure.generators.mock import (
    MockArtifactGenerator,
    stub_content,
)
from phaseguard.infrastructure.generators.registry import GeneratorRegistry

__all__ = [
    "GeneratorRegistry",
    "MockArtifactGenerator",
    "stub_content",
]
