"""Rich console utilities for phaseguard examples."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

# Shared console instances
console = Console()
error_console = Console(stderr=True)


def print_header(title: str, subtitle: str | None = None) -> None:
    """Print a styled header panel."""
    content = Text(title, style="bold blue")
    if subtitle:
        content.append(f"\n{subtitle}", style="dim")
    console.print(Panel(content, expand=False))


def print_error(message: str, hint: str | None = None) -> None:
    """Print formatted error message to stderr."""
    content = Text(f"ERROR: {message}", style="bold red")
    if hint:
        content.append(f"\n\nHint: {hint}", style="yellow")
    error_console.print(Panel(content, title="Error", border_style="red"))


def print_success(message: str) -> None:
    console.print(Panel(message, title="Success", border_style="green"))


def print_failure(message: str, details: str | None = None) -> None:
    content = Text(message, style="bold red")
    if details:
        content.append(f"\n{details}", style="dim")
    console.print(Panel(content, title="Failed", border_style="red"))


def print_run_info(
    source: str,
    generator: str,
    workspace: str,
    log_file: str,
    extra_info: dict[str, Any] | None = None,
) -> None:
    """Print run configuration info table."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value")

    table.add_row("Input", source)
    table.add_row("Generator", generator)
    table.add_row("Workspace", workspace)
    table.add_row("Log file", log_file)

    for key, value in (extra_info or {}).items():
        table.add_row(key, str(value))

    console.print(table)
