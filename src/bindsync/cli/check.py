"""
bindsync CLI - Check command.

Validate the configuration and compare it against the live workspace.
"""

from pathlib import Path

import typer
from rich.console import Console

from bindsync.cli.context import load_sync_config, make_source
from bindsync.cli.errors import ExitCode
from bindsync.core.sync import WorkspaceSynchronizer

console = Console()


def main(
    workspace_root: Path = typer.Argument(
        Path("."),
        help="Workspace root (directory containing the root Cargo.toml)",
    ),
    metadata_file: Path | None = typer.Option(
        None,
        "--metadata",
        "-m",
        help="Read saved cargo metadata JSON instead of running cargo",
    ),
) -> None:
    """
    Check that the configuration matches the workspace.

    Fails if the configuration is inconsistent, if metadata can't be
    obtained, or if the policy's native crate isn't a workspace crate.
    Allow-listed crates missing from the workspace are reported as warnings.
    """
    config = load_sync_config(workspace_root)
    console.print("[green]✓[/green] Configuration is consistent")

    synchronizer = WorkspaceSynchronizer(config, make_source(config, metadata_file))
    metadata = synchronizer.metadata(workspace_root)
    if metadata is None:
        console.print("[red]✗[/red] Workspace metadata unavailable")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    console.print(
        f"[green]✓[/green] Workspace has {len(metadata.workspace_packages)} crates"
    )

    missing = synchronizer.missing_explicit(workspace_root)
    for name in missing:
        console.print(f"[yellow]![/yellow] Explicit crate not in workspace: {name}")

    if config.policy.native_crate in missing:
        console.print(
            f"[red]✗[/red] Policy native crate '{config.policy.native_crate}' "
            "has no project; the binding build would depend on nothing"
        )
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    console.print("[green]✓[/green] Policy targets resolve to workspace projects")
