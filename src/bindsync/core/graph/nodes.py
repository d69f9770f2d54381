"""
Graph node construction.

Every crate inside the workspace becomes exactly one node keyed by its
workspace-relative directory. Crates on the explicit allow-list are
materialized with build/test/lint targets; everything else is a structural
node with no targets, present only for dependency ordering.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path, PurePosixPath

from bindsync.core.config.models import SyncConfig
from bindsync.core.metadata.models import WorkspacePackage

from .models import GraphNode, TargetSpec

logger = logging.getLogger(__name__)


def project_root(package: WorkspacePackage, workspace_root: Path) -> str:
    """Workspace-relative POSIX directory of *package* ('.' for the root crate)."""
    return Path(os.path.relpath(package.manifest_dir, workspace_root)).as_posix()


def manifest_relpath(package: WorkspacePackage, workspace_root: Path) -> str:
    """Workspace-relative POSIX path of the package manifest."""
    return Path(os.path.relpath(package.manifest_path, workspace_root)).as_posix()


def build_targets(root: str, config: SyncConfig) -> dict[str, TargetSpec]:
    """
    Targets for a materialized crate.

    The build target watches the crate itself plus every native source in the
    workspace, so any Rust change anywhere invalidates the cached artifact.
    """
    build = config.build
    return {
        "build": TargetSpec(
            executor=build.executor,
            options={"command": build.command, "cwd": root},
            inputs=["{projectRoot}/**/*", *config.source_globs],
            outputs=list(build.outputs),
        ),
        "test": TargetSpec(executor=build.test_executor),
        "lint": TargetSpec(executor=build.lint_executor),
    }


def build_node(package: WorkspacePackage, config: SyncConfig, workspace_root: Path) -> GraphNode:
    """Build the node for a single non-external package."""
    root = project_root(package, workspace_root)
    source_root = (PurePosixPath(root) / "src").as_posix()
    name = config.project_name_for(package.name)

    if config.is_explicit(package.name):
        return GraphNode(
            root=root,
            name=name,
            native_name=package.name,
            materialized=True,
            source_root=source_root,
            targets=build_targets(root, config),
            tags=list(config.build.tags),
        )

    return GraphNode(
        root=root,
        name=name,
        native_name=package.name,
        materialized=False,
        source_root=source_root,
        implicit=True,
        targets={},
        tags=list(config.structural_tags),
    )


def build_nodes(
    packages: Iterable[WorkspacePackage],
    config: SyncConfig,
    workspace_root: Path,
) -> dict[str, GraphNode]:
    """
    Build one node per workspace package, keyed by project root.

    External packages are skipped. An empty package list (e.g. after a failed
    metadata fetch) yields an empty mapping.

    Args:
        packages: Packages from the workspace metadata
        config: Shared synchronizer configuration
        workspace_root: Absolute workspace root

    Returns:
        Mapping of workspace-relative root to GraphNode, in package order
    """
    nodes: dict[str, GraphNode] = {}

    for package in packages:
        if package.is_external:
            continue

        node = build_node(package, config, workspace_root)
        if node.root in nodes:
            logger.warning(
                "Crates %s and %s share root %s; keeping %s",
                nodes[node.root].native_name,
                package.name,
                node.root,
                nodes[node.root].native_name,
            )
            continue

        logger.debug(
            "Node %s -> %s (%s)",
            node.root,
            node.name,
            "materialized" if node.materialized else "structural",
        )
        nodes[node.root] = node

    return nodes
