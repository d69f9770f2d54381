"""
Standardized error handling and exit codes for the bindsync CLI.

This module provides consistent error messaging with actionable guidance
and standardized exit codes across all CLI commands.
"""

from enum import IntEnum

from pydantic import ValidationError
from rich.console import Console

console = Console(stderr=True)


class ExitCode(IntEnum):
    """Standard exit codes for bindsync CLI operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """Generic error, or a check that found problems."""

    USER_ERROR = 2
    """User configuration or input error (actionable by user)."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it
    """
    console.print(f"[red]Error:[/red] {problem}")

    if reason:
        console.print(f"[dim]{reason}[/dim]")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {solution}")


def print_invalid_config_error(error: ValidationError) -> None:
    """Print error when .bindsync.json (or the user config) fails validation."""
    details = "; ".join(
        f"{'.'.join(str(p) for p in e['loc']) or 'config'}: {e['msg']}" for e in error.errors()
    )
    print_error(
        "Invalid bindsync configuration",
        reason=details,
        solution="Fix .bindsync.json so explicit_packages, name_overrides and policy agree",
    )


def print_metadata_unavailable_error(detail: str) -> None:
    """Print error when workspace metadata can't be loaded."""
    print_error(
        "Workspace metadata unavailable",
        reason=detail,
        solution="cargo metadata --format-version 1 --no-deps  # check it runs in the workspace",
    )
