"""
Native crate name -> orchestrator project name resolution.

Two naming conventions coexist in the graph: materialized crates use their
bare (or overridden) name, structural crates use a prefixed name such as
``rust:rspack_core``. The resolver holds one alias table populated when the
nodes are built, so each lookup is a dict hit and no component has to know
about the prefix.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .models import GraphNode

logger = logging.getLogger(__name__)


class NamespaceResolver:
    """
    Alias table mapping any valid name of a node to its project name.

    Every node is registered under its project name; a node whose project
    name differs from its crate name is also registered under the crate name.
    Canonical project names take precedence over aliases: if a string is both
    one node's project name and another node's crate-name alias, the exact
    project name wins.

    Example::

        resolver = NamespaceResolver.from_nodes(nodes.values())
        resolver.resolve("rspack_core")       # 'rust:rspack_core'
        resolver.resolve("rust:rspack_core")  # 'rust:rspack_core'
    """

    __slots__ = ("_canonical", "_aliases")

    def __init__(self) -> None:
        self._canonical: set[str] = set()
        self._aliases: dict[str, str] = {}

    @classmethod
    def from_nodes(cls, nodes: Iterable[GraphNode]) -> NamespaceResolver:
        resolver = cls()
        for node in nodes:
            resolver.register(node)
        return resolver

    def register(self, node: GraphNode) -> None:
        """Register *node* under its project name and its crate name."""
        self._canonical.add(node.name)
        if node.native_name == node.name:
            return
        existing = self._aliases.setdefault(node.native_name, node.name)
        if existing != node.name:
            logger.debug(
                "Alias %s already points at %s, ignoring %s",
                node.native_name,
                existing,
                node.name,
            )

    def resolve(self, name: str) -> str | None:
        """Project name for *name* (crate name or project name), or None."""
        if name in self._canonical:
            return name
        return self._aliases.get(name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.resolve(name) is not None

    def __len__(self) -> int:
        return len(self._canonical)
