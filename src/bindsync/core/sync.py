"""
Workspace synchronizer.

Wires the metadata source, node builder and edge builder into one run. Each
WorkspaceSynchronizer instance represents a run: metadata is fetched at most
once per workspace root, however many of create_nodes / create_dependencies /
sync are called. Nothing here raises for metadata or resolution problems; a
failed fetch yields an empty result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from bindsync.core.config.models import SyncConfig
from bindsync.core.graph.edges import build_edges
from bindsync.core.graph.models import DependencyEdge, GraphNode, ProjectGraphFragment
from bindsync.core.graph.nodes import build_nodes
from bindsync.core.graph.resolver import NamespaceResolver
from bindsync.core.metadata.fetcher import CargoMetadataSource, MetadataSource, fetch_metadata
from bindsync.core.metadata.models import WorkspaceMetadata, WorkspacePackage

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Nodes and edges produced by one synchronization run."""

    workspace_root: Path
    nodes: dict[str, GraphNode] = field(default_factory=dict)
    edges: list[DependencyEdge] = field(default_factory=list)
    metadata_available: bool = True
    missing_explicit: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """No synchronization was possible this run."""
        return not self.nodes and not self.edges

    @property
    def fragment(self) -> ProjectGraphFragment:
        return ProjectGraphFragment(projects=dict(self.nodes))

    @property
    def stats(self) -> dict[str, int]:
        """Summary statistics: node, materialized, structural and edge counts."""
        materialized = sum(1 for n in self.nodes.values() if n.materialized)
        return {
            "node_count": len(self.nodes),
            "materialized_count": materialized,
            "structural_count": len(self.nodes) - materialized,
            "edge_count": len(self.edges),
        }

    def to_json_dict(self) -> dict[str, Any]:
        data = self.fragment.to_json_dict()
        data["dependencies"] = [e.model_dump(by_alias=True) for e in self.edges]
        return data


class WorkspaceSynchronizer:
    """
    Synchronize the orchestrator graph with a native workspace.

    Example:
        >>> sync = WorkspaceSynchronizer(load_config(root))
        >>> result = sync.sync(root)
        >>> result.stats["edge_count"]
        42
    """

    def __init__(
        self,
        config: SyncConfig | None = None,
        source: MetadataSource | None = None,
    ):
        self.config = config or SyncConfig()
        self.source = source or CargoMetadataSource(self.config.metadata)
        self._metadata: dict[Path, WorkspaceMetadata | None] = {}

    def metadata(self, workspace_root: Path) -> WorkspaceMetadata | None:
        """Workspace metadata, fetched once per root for this run."""
        key = workspace_root.resolve()
        if key not in self._metadata:
            self._metadata[key] = fetch_metadata(key, self.source)
        return self._metadata[key]

    def _packages(self, workspace_root: Path) -> list[WorkspacePackage]:
        metadata = self.metadata(workspace_root)
        return list(metadata.packages) if metadata is not None else []

    def create_nodes(self, workspace_root: Path) -> dict[str, GraphNode]:
        """Nodes for every workspace crate; empty if metadata is unavailable."""
        return build_nodes(
            self._packages(workspace_root), self.config, workspace_root.resolve()
        )

    def create_dependencies(
        self, workspace_root: Path, nodes: dict[str, GraphNode]
    ) -> list[DependencyEdge]:
        """Edges between *nodes*; empty if metadata is unavailable."""
        resolver = NamespaceResolver.from_nodes(nodes.values())
        return build_edges(
            self._packages(workspace_root), nodes, workspace_root.resolve(), resolver
        )

    def missing_explicit(self, workspace_root: Path) -> list[str]:
        """Allow-listed crates with no package in the workspace."""
        metadata = self.metadata(workspace_root)
        if metadata is None:
            return []
        names = metadata.package_names
        return [n for n in self.config.explicit_packages if n not in names]

    def sync(self, workspace_root: Path) -> SyncResult:
        """Run node and edge construction for *workspace_root*."""
        nodes = self.create_nodes(workspace_root)
        edges = self.create_dependencies(workspace_root, nodes)
        result = SyncResult(
            workspace_root=workspace_root.resolve(),
            nodes=nodes,
            edges=edges,
            metadata_available=self.metadata(workspace_root) is not None,
            missing_explicit=self.missing_explicit(workspace_root),
        )

        if result.missing_explicit:
            logger.info(
                "Explicit crates not found in workspace: %s",
                ", ".join(result.missing_explicit),
            )
        logger.debug("Sync stats: %s", result.stats)
        return result
