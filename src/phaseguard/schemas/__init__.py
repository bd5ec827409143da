"""phaseguard JSON Schema definitions and validation utilities.

Schemas:
    - features.schema.json: Feature sets for feature-mode planning
    - artifacts.schema.json: Flat artifact lists for artifact-only planning
    - config.schema.json: Orchestrator configuration

Usage:
    from phaseguard.schemas import validate_features

    with open("features.json") as f:
        data = json.load(f)
    validate_features(data)  # Raises jsonschema.ValidationError if invalid
"""

from __future__ import annotations

import json
from importlib.resources import files
from typing import Any

import jsonschema


def _load_schema(name: str) -> dict[str, Any]:
    """Load a JSON schema from the schemas package.

    Args:
        name: Schema filename (e.g., 'features.schema.json')

    Returns:
        Parsed JSON schema as a dictionary
    """
    schema_text = files("phaseguard.schemas").joinpath(name).read_text()
    result: dict[str, Any] = json.loads(schema_text)
    return result


def get_features_schema() -> dict[str, Any]:
    return _load_schema("features.schema.json")


def get_artifacts_schema() -> dict[str, Any]:
    return _load_schema("artifacts.schema.json")


def get_config_schema() -> dict[str, Any]:
    return _load_schema("config.schema.json")


def validate_features(data: Any) -> None:
    """Validate a feature set document.

    Raises:
        jsonschema.ValidationError: If validation fails
    """
    jsonschema.validate(data, get_features_schema())


def validate_artifacts(data: Any) -> None:
    """Validate an artifact list document.

    Raises:
        jsonschema.ValidationError: If validation fails
    """
    jsonschema.validate(data, get_artifacts_schema())


def validate_config(data: Any) -> None:
    """Validate an orchestrator configuration document.

    Raises:
        jsonschema.ValidationError: If validation fails
    """
    jsonschema.validate(data, get_config_schema())


__all__ = [
    "get_artifacts_schema",
    "get_config_schema",
    "get_features_schema",
    "validate_artifacts",
    "validate_config",
    "validate_features",
]
