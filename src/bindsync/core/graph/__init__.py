"""
Orchestrator project graph: nodes, edges and name resolution.

Main entry points:
    - build_nodes(): one GraphNode per workspace crate, keyed by root
    - build_edges(): static dependency edges between those nodes
    - NamespaceResolver: crate name / project name lookup

Example:
    >>> nodes = build_nodes(metadata.packages, config, workspace_root)
    >>> edges = build_edges(metadata.packages, nodes, workspace_root)
"""

from .edges import build_edges
from .models import DependencyEdge, GraphNode, ProjectGraphFragment, TargetSpec
from .nodes import build_node, build_nodes, build_targets, manifest_relpath, project_root
from .resolver import NamespaceResolver

__all__ = [
    # Builders
    "build_edges",
    "build_node",
    "build_nodes",
    "build_targets",
    "manifest_relpath",
    "project_root",
    # Resolution
    "NamespaceResolver",
    # Models
    "DependencyEdge",
    "GraphNode",
    "ProjectGraphFragment",
    "TargetSpec",
]
