"""Tests for dependency edge construction."""

from pathlib import Path
from typing import Any

from bindsync.core.config import SyncConfig
from bindsync.core.graph import DependencyEdge, NamespaceResolver, build_edges, build_nodes
from bindsync.core.metadata import parse_metadata


def _edges(doc: dict[str, Any], config: SyncConfig, root: Path) -> list[DependencyEdge]:
    packages = parse_metadata(doc).packages
    nodes = build_nodes(packages, config, root)
    return build_edges(packages, nodes, root)


def _pairs(edges: list[DependencyEdge]) -> list[tuple[str, str]]:
    return [(e.source, e.target) for e in edges]


class TestBuildEdges:
    def test_scenario_a(
        self, workspace_root: Path, scenario_a: dict[str, Any], config: SyncConfig
    ) -> None:
        edges = _edges(scenario_a, config, workspace_root)
        assert _pairs(edges) == [("core", "rust:util")]
        edge = edges[0]
        assert edge.type == "static"
        assert edge.source_file == "crates/core/Cargo.toml"

    def test_no_edge_touches_external(
        self, workspace_root: Path, scenario_a: dict[str, Any], config: SyncConfig
    ) -> None:
        for edge in _edges(scenario_a, config, workspace_root):
            assert "external_dep" not in edge.source
            assert "external_dep" not in edge.target

    def test_self_dependency_dropped(
        self, workspace_root: Path, crate, metadata_doc, config: SyncConfig
    ) -> None:
        doc = metadata_doc(crate("a", ["a", "b"]), crate("b"))
        edges = _edges(doc, config, workspace_root)
        assert _pairs(edges) == [("rust:a", "rust:b")]
        assert all(e.source != e.target for e in edges)

    def test_cycle_emitted(
        self, workspace_root: Path, crate, metadata_doc, config: SyncConfig
    ) -> None:
        doc = metadata_doc(crate("a", ["b"]), crate("b", ["a"]))
        assert _pairs(_edges(doc, config, workspace_root)) == [
            ("rust:a", "rust:b"),
            ("rust:b", "rust:a"),
        ]

    def test_order_follows_packages_then_declarations(
        self, workspace_root: Path, crate, metadata_doc, config: SyncConfig
    ) -> None:
        doc = metadata_doc(
            crate("core", ["z", "serde", "m"]),
            crate("m", ["z"]),
            crate("z"),
        )
        assert _pairs(_edges(doc, config, workspace_root)) == [
            ("core", "rust:z"),
            ("core", "rust:m"),
            ("rust:m", "rust:z"),
        ]

    def test_override_named_crate_participates(
        self, workspace_root: Path, crate, metadata_doc
    ) -> None:
        doc = metadata_doc(
            crate("rspack_node", ["rspack_core"], directory="node_binding"),
            crate("rspack_core"),
            crate("rspack_binding_api", ["rspack_node"]),
        )
        edges = _edges(doc, SyncConfig(), workspace_root)
        assert _pairs(edges) == [
            ("@rspack/node-binding-crate", "rust:rspack_core"),
            ("rust:rspack_binding_api", "@rspack/node-binding-crate"),
        ]
        assert edges[0].source_file == "crates/node_binding/Cargo.toml"

    def test_package_without_node_contributes_nothing(
        self, workspace_root: Path, crate, metadata_doc, config: SyncConfig
    ) -> None:
        doc = metadata_doc(crate("a", ["b"]), crate("b"))
        packages = parse_metadata(doc).packages
        nodes = build_nodes(packages[1:], config, workspace_root)
        assert build_edges(packages, nodes, workspace_root) == []

    def test_explicit_resolver(
        self, workspace_root: Path, crate, metadata_doc, config: SyncConfig
    ) -> None:
        doc = metadata_doc(crate("a", ["b"]), crate("b"))
        packages = parse_metadata(doc).packages
        nodes = build_nodes(packages, config, workspace_root)
        resolver = NamespaceResolver.from_nodes(nodes.values())
        assert _pairs(build_edges(packages, nodes, workspace_root, resolver)) == [
            ("rust:a", "rust:b")
        ]

    def test_empty(self, workspace_root: Path) -> None:
        assert build_edges([], {}, workspace_root) == []


class TestEdgeJson:
    def test_orchestrator_shape(self) -> None:
        edge = DependencyEdge(source="a", target="b", source_file="crates/a/Cargo.toml")
        assert edge.model_dump(by_alias=True) == {
            "source": "a",
            "target": "b",
            "type": "static",
            "sourceFile": "crates/a/Cargo.toml",
        }
