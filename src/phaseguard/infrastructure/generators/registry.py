"""
Generator Registry with Entry Points Discovery.

Provides dynamic generator loading via Python entry points (phaseguard.generators
group). External packages can register generators in their pyproject.toml:

    [project.entry-points."phaseguard.generators"]
    MyGenerator = "mypackage.generators:MyGenerator"
"""

import logging
from importlib.metadata import entry_points
from typing import Any

from phaseguard.domain.interfaces import ArtifactGeneratorInterface

logger = logging.getLogger("phaseguard.registry")

ENTRY_POINT_GROUP = "phaseguard.generators"


class GeneratorRegistry:
    """
    Registry for ArtifactGeneratorInterface implementations.

    Discovers generators via the 'phaseguard.generators' entry point group.
    Entry points are only loaded on first lookup.

    Example usage:
        registry = GeneratorRegistry()
        generator = registry.create("MockArtifactGenerator", delay=0.1)
    """

    _generators: dict[str, type[ArtifactGeneratorInterface]] = {}
    _loaded: bool = False

    @classmethod
    def _load_entry_points(cls) -> None:
        if cls._loaded:
            return

        for ep in entry_points(group=ENTRY_POINT_GROUP):
            try:
                cls._generators.setdefault(ep.name, ep.load())
            except Exception as e:
                logger.warning("Failed to load generator '%s': %s", ep.name, e)

        cls._loaded = True

    @classmethod
    def register(
        cls, name: str, generator_class: type[ArtifactGeneratorInterface]
    ) -> None:
        """Manually register a generator class (overrides entry points)."""
        cls._generators[name] = generator_class

    @classmethod
    def get(cls, name: str) -> type[ArtifactGeneratorInterface]:
        """
        Raises:
            KeyError: If generator not found
        """
        cls._load_entry_points()
        if name not in cls._generators:
            available = ", ".join(cls._generators) or "(none)"
            raise KeyError(
                f"Generator '{name}' not found. Available generators: {available}"
            )
        return cls._generators[name]

    @classmethod
    def create(cls, name: str, **config: Any) -> ArtifactGeneratorInterface:
        """
        Create a generator instance by name.

        Raises:
            KeyError: If generator not found
            TypeError: If config doesn't match constructor signature
        """
        return cls.get(name)(**config)

    @classmethod
    def available(cls) -> list[str]:
        cls._load_entry_points()
        return sorted(cls._generators)

    @classmethod
    def clear(cls) -> None:
        """Forget every registration; entry points reload on next lookup."""
        cls._generators.clear()
        cls._loaded = False
