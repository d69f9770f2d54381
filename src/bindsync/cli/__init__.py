"""
bindsync CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging
import sys

import typer

from bindsync import __version__
from bindsync.cli import check, graph, policy

app = typer.Typer(
    name="bindsync",
    help="Synchronize an orchestrator project graph with a Cargo workspace",
    no_args_is_help=True,
    add_completion=False,
    context_settings={"help_option_names": ["--help", "-h"]},
)


def setup_logging(debug: bool = False) -> None:
    """
    Configure logging for CLI commands.

    Args:
        debug: If True, enable DEBUG level logging
    """
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"bindsync {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    bindsync - keep the build graph in step with the Cargo workspace.

    Common Workflows:
        bindsync check               # Validate config against the workspace
        bindsync graph               # Show synchronized projects and edges
        bindsync policy -o nx.json   # Write recommended target defaults
    """
    setup_logging(debug)
    ctx.obj = {"debug": debug}


app.command(name="graph")(graph.main)
app.command(name="policy")(policy.main)
app.command(name="check")(check.main)


def cli_main() -> None:
    """Entry point for the bindsync console script."""
    app()


__all__ = ["app", "cli_main"]
