"""
bindsync CLI - Graph command.

Print the project graph fragment (nodes and dependency edges) that the
synchronizer would contribute for a workspace.
"""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from bindsync.cli.context import load_sync_config, make_source
from bindsync.core.sync import SyncResult, WorkspaceSynchronizer

console = Console()


def render_tables(result: SyncResult) -> None:
    """Render nodes and edges as rich tables."""
    nodes_table = Table(title="Projects")
    nodes_table.add_column("Root", style="cyan")
    nodes_table.add_column("Project")
    nodes_table.add_column("Kind")
    nodes_table.add_column("Targets")
    nodes_table.add_column("Tags", style="dim")

    for root, node in sorted(result.nodes.items()):
        kind = "[green]materialized[/green]" if node.materialized else "structural"
        nodes_table.add_row(
            root,
            node.name,
            kind,
            ", ".join(node.targets) or "-",
            ", ".join(node.tags),
        )
    console.print(nodes_table)

    edges_table = Table(title="Dependencies")
    edges_table.add_column("Source", style="cyan")
    edges_table.add_column("Target")
    edges_table.add_column("Declared in", style="dim")
    for edge in result.edges:
        edges_table.add_row(edge.source, edge.target, edge.source_file)
    console.print(edges_table)

    stats = result.stats
    console.print(
        f"[bold]{stats['node_count']}[/bold] projects "
        f"({stats['materialized_count']} materialized, "
        f"{stats['structural_count']} structural), "
        f"[bold]{stats['edge_count']}[/bold] dependencies"
    )


def main(
    workspace_root: Path = typer.Argument(
        Path("."),
        help="Workspace root (directory containing the root Cargo.toml)",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the graph as orchestrator JSON",
    ),
    metadata_file: Path | None = typer.Option(
        None,
        "--metadata",
        "-m",
        help="Read saved cargo metadata JSON instead of running cargo",
    ),
) -> None:
    """
    Show the projects and dependencies synchronized from a Cargo workspace.

    Crates on the explicit allow-list become projects with build/test/lint
    targets; every other workspace crate becomes a graph-only project.

    Examples:
        bindsync graph
        bindsync graph ../rspack --json
        bindsync graph --metadata metadata.json
    """
    config = load_sync_config(workspace_root)
    synchronizer = WorkspaceSynchronizer(config, make_source(config, metadata_file))
    result = synchronizer.sync(workspace_root)

    if not result.metadata_available:
        Console(stderr=True).print(
            "[yellow]Warning:[/yellow] workspace metadata unavailable, graph is empty"
        )

    if as_json:
        typer.echo(json.dumps(result.to_json_dict(), indent=2))
        return

    render_tables(result)
