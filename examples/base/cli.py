"""Click CLI utilities for phaseguard examples."""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

import click


def common_options[F: Callable[..., Any]](func: F) -> F:
    """
    Decorator adding common CLI options to a click command.

    Options added:
        --config: Path to config.json
        --workspace: Directory for the filesystem workspace
        --generator: Registered generator name
        --log-file: Path to log file
        -v/--verbose: Enable verbose logging
    """

    @click.option(
        "--config",
        default=None,
        type=click.Path(exists=True),
        help="Path to config.json (default: ./config.json)",
    )
    @click.option(
        "--workspace",
        default=None,
        type=click.Path(),
        help="Directory for generated artifacts and run progress",
    )
    @click.option(
        "--generator",
        default="MockArtifactGenerator",
        help="Registered artifact generator (default: MockArtifactGenerator)",
    )
    @click.option(
        "--log-file",
        default=None,
        type=click.Path(),
        help="Path to log file",
    )
    @click.option(
        "-v",
        "--verbose",
        is_flag=True,
        help="Enable verbose (DEBUG) logging to console",
    )
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def plan_options[F: Callable[..., Any]](func: F) -> F:
    """
    Decorator adding planning input options.

    Options added:
        --request: Free-text request (keyword feature detection)
        --features: Path to a features document
        --artifacts: Path to an artifacts document
        --resume: Run id to resume from the workspace's progress
        --dry-run: Print the plan without executing it
    """

    @click.option("--request", default=None, help="Free-text project request")
    @click.option(
        "--features",
        default=None,
        type=click.Path(exists=True),
        help="Path to a features document (default: ./features.json)",
    )
    @click.option(
        "--artifacts",
        default=None,
        type=click.Path(exists=True),
        help="Path to an artifacts document",
    )
    @click.option("--resume", default=None, help="Run id to resume")
    @click.option("--dry-run", is_flag=True, help="Plan only, do not execute")
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]
