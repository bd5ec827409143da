"""
Base module for phaseguard examples.

Provides reusable utilities for building example runners:
- Logging setup (setup_logging)
- CLI utilities (common_options, plan_options)
- Console output (print_header, print_error, print_success, etc.)
"""

from .cli import common_options, plan_options
from .console import (
    console,
    error_console,
    print_error,
    print_failure,
    print_header,
    print_run_info,
    print_success,
)
from .logging_setup import setup_logging

__all__ = [
    # Logging
    "setup_logging",
    # CLI
    "common_options",
    "plan_options",
    # Console
    "console",
    "error_console",
    "print_header",
    "print_error",
    "print_success",
    "print_failure",
    "print_run_info",
]
