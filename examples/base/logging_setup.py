"""Logging configuration for phaseguard examples."""

from __future__ import annotations

import logging
import os


def setup_logging(
    logger_name: str,
    log_file: str | None = None,
    verbose: bool = False,
    child_loggers: list[str] | None = None,
) -> logging.Logger:
    """
    Configure dual-handler logging (console + file).

    The library's own "phaseguard" logger always gets the same handlers,
    so planner, executor and rollback messages reach both outputs.

    Args:
        logger_name: Name for the example's logger
        log_file: Path to log file (None for no file logging)
        verbose: Enable DEBUG level on console (default INFO)
        child_loggers: Additional loggers to configure with same handlers

    Returns:
        Configured logger instance
    """
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(
        logging.Formatter("%(levelname)-8s | %(name)s | %(message)s")
    )

    file_handler = None
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    logger = logging.getLogger(logger_name)
    for name in [logger_name, "phaseguard", *(child_loggers or [])]:
        configured = logging.getLogger(name)
        configured.setLevel(logging.DEBUG)
        configured.addHandler(console_handler)
        if file_handler:
            configured.addHandler(file_handler)
        configured.propagate = False

    return logger
