"""Configuration and input document loading.

Documents are validated against the JSON Schemas in phaseguard.schemas
before typed records are built from them.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

import jsonschema

from phaseguard.domain.exceptions import ConfigurationError
from phaseguard.domain.models import ArtifactKind, ArtifactSpec, Feature
from phaseguard.schemas import validate_artifacts, validate_config, validate_features


@dataclass(frozen=True)
class OrchestratorConfig:
    """Tunables for planning and running phased builds."""

    capacity: int = 20  # Max work units (or artifacts) per phase
    core_ui_slice: int = 10  # UI components built in the core phase
    completion_threshold: float = 80.0  # Percent of expected artifacts required
    run_timeout_seconds: float = 300.0  # Wall-clock deadline for a whole run

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _read_json(path: Path, label: str) -> Any:
    """Read a JSON document.

    Raises:
        ConfigurationError: If the file is missing or not valid JSON
    """
    if not path.exists():
        raise ConfigurationError(f"{label} file not found: {path}")
    try:
        with open(path) as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e


def _schema_error(path: Path, error: jsonschema.ValidationError) -> ConfigurationError:
    location = "/".join(str(p) for p in error.absolute_path) or "<root>"
    return ConfigurationError(f"{path}: {location}: {error.message}")


def load_config(path: Path) -> OrchestratorConfig:
    """
    Load orchestrator configuration from a JSON file.

    Keys that are absent keep their defaults; unknown keys are rejected.

    Raises:
        ConfigurationError: If the file is missing, malformed or invalid
    """
    data = _read_json(path, "Config")
    try:
        validate_config(data)
    except jsonschema.ValidationError as e:
        raise _schema_error(path, e) from e
    return OrchestratorConfig(**data)


def load_features(path: Path) -> list[Feature]:
    """
    Load a feature set document.

    Raises:
        ConfigurationError: If the document is invalid or a feature lists
            itself as a dependency
    """
    data = _read_json(path, "Features")
    try:
        validate_features(data)
    except jsonschema.ValidationError as e:
        raise _schema_error(path, e) from e
    try:
        return [Feature.from_dict(item) for item in data["features"]]
    except ValueError as e:
        raise ConfigurationError(f"{path}: {e}") from e


def load_artifacts(path: Path) -> tuple[list[ArtifactSpec], list[str]]:
    """
    Load an artifact list document.

    Returns:
        (artifacts, feature ids) where feature ids may be empty

    Raises:
        ConfigurationError: If the document is invalid
    """
    data = _read_json(path, "Artifacts")
    try:
        validate_artifacts(data)
    except jsonschema.ValidationError as e:
        raise _schema_error(path, e) from e

    artifacts = [
        ArtifactSpec(
            path=item["path"],
            content=item.get("content", ""),
            kind=ArtifactKind(item["kind"]) if "kind" in item else None,
            feature_id=item.get("feature_id"),
        )
        for item in data["artifacts"]
    ]
    return artifacts, list(data.get("features", []))
