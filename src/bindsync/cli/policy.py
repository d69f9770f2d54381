"""
bindsync CLI - Policy command.

Print (or write) the recommended orchestrator configuration: plugin
registration, target defaults wiring the binding build to the native crate,
and the reusable native-source input group.
"""

import json
from pathlib import Path

import typer
from rich.console import Console

from bindsync.cli.context import load_sync_config
from bindsync.cli.errors import ExitCode, print_error
from bindsync.core.policy import generate_policy

console = Console()


def main(
    workspace_root: Path = typer.Argument(
        Path("."),
        help="Workspace root used to locate .bindsync.json",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the policy JSON to this file instead of stdout",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing output file",
    ),
) -> None:
    """
    Generate the static orchestrator policy for the workspace.

    Examples:
        bindsync policy
        bindsync policy -o nx.bindsync.json
    """
    config = load_sync_config(workspace_root)
    text = json.dumps(generate_policy(config).to_json_dict(), indent=2)

    if output is None:
        typer.echo(text)
        return

    if output.exists() and not force:
        print_error(
            f"{output} already exists",
            solution=f"bindsync policy -o {output} --force",
        )
        raise typer.Exit(ExitCode.USER_ERROR)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n")
    console.print(f"[green]✓[/green] Policy written to {output}")
