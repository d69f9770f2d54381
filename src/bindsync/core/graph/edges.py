"""
Dependency edge construction.

Edges mirror declared crate dependencies between workspace nodes. Anything
that can't be resolved to a node (registry crates, optional deps, crates that
produced no node) is dropped without failing the run.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

from bindsync.core.metadata.models import WorkspacePackage

from .models import DependencyEdge, GraphNode
from .nodes import manifest_relpath
from .resolver import NamespaceResolver

logger = logging.getLogger(__name__)


def build_edges(
    packages: Iterable[WorkspacePackage],
    nodes: Mapping[str, GraphNode],
    workspace_root: Path,
    resolver: NamespaceResolver | None = None,
) -> list[DependencyEdge]:
    """
    Compute static dependency edges between workspace projects.

    Output order follows packages, then each package's declared dependencies.
    Cycles are emitted as-is; rejecting them is the orchestrator's job.

    Args:
        packages: Packages from the workspace metadata
        nodes: Nodes built for this run, keyed by root
        workspace_root: Absolute workspace root (for edge provenance)
        resolver: Name resolver (built from *nodes* when omitted)

    Returns:
        List of edges, never containing self-edges or external packages
    """
    if resolver is None:
        resolver = NamespaceResolver.from_nodes(nodes.values())

    edges: list[DependencyEdge] = []
    dropped = 0

    for package in packages:
        if package.is_external:
            continue

        source = resolver.resolve(package.name)
        if source is None:
            logger.debug("No node for crate %s, skipping its dependencies", package.name)
            dropped += len(package.dependencies)
            continue

        source_file = manifest_relpath(package, workspace_root)
        for dep_name in package.dependencies:
            target = resolver.resolve(dep_name)
            if target is None or target == source:
                dropped += 1
                continue
            edges.append(DependencyEdge(source=source, target=target, source_file=source_file))

    logger.debug("Built %d dependency edges (%d candidates dropped)", len(edges), dropped)
    return edges
