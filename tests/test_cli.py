"""
Tests for the bindsync CLI.

Commands read saved metadata via --metadata so no cargo toolchain is needed.
"""

import json
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from bindsync import __version__
from bindsync.cli import app

runner = CliRunner()


@pytest.fixture
def metadata_file(tmp_path: Path, crate, metadata_doc) -> Path:
    """Saved metadata for a small rspack-like workspace."""
    doc = metadata_doc(
        crate("rspack_node", ["rspack_core"], directory="node_binding"),
        crate("rspack_core", ["rspack_util", "serde"]),
        crate("rspack_util"),
        crate("serde", source="registry+https://github.com/rust-lang/crates.io-index"),
    )
    path = tmp_path / "metadata.json"
    path.write_text(json.dumps(doc))
    return path


def _write_config(workspace_root: Path, data: dict[str, Any]) -> None:
    (workspace_root / ".bindsync.json").write_text(json.dumps(data))


class TestApp:
    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_version_matches_distribution(self) -> None:
        pyproject = Path(__file__).parents[1] / "pyproject.toml"
        assert f'version = "{__version__}"' in pyproject.read_text()

    def test_help_lists_commands(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("graph", "policy", "check"):
            assert command in result.output


class TestGraphCommand:
    def test_json_output(self, workspace_root: Path, metadata_file: Path) -> None:
        result = runner.invoke(
            app, ["graph", str(workspace_root), "--json", "--metadata", str(metadata_file)]
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert set(data["projects"]) == {
            "crates/node_binding",
            "crates/rspack_core",
            "crates/rspack_util",
        }
        binding = data["projects"]["crates/node_binding"]
        assert binding["name"] == "@rspack/node-binding-crate"
        assert set(binding["targets"]) == {"build", "test", "lint"}
        assert [(d["source"], d["target"]) for d in data["dependencies"]] == [
            ("@rspack/node-binding-crate", "rust:rspack_core"),
            ("rust:rspack_core", "rust:rspack_util"),
        ]

    def test_table_output(self, workspace_root: Path, metadata_file: Path) -> None:
        result = runner.invoke(
            app, ["graph", str(workspace_root), "--metadata", str(metadata_file)]
        )

        assert result.exit_code == 0
        assert "Projects" in result.output
        assert "Dependencies" in result.output
        assert "3 projects (1 materialized, 2 structural)" in result.output

    def test_metadata_unavailable_gives_empty_graph(self, workspace_root: Path) -> None:
        completed = MagicMock(returncode=101, stdout=b"", stderr=b"no Cargo.toml")
        with patch("bindsync.core.metadata.fetcher.subprocess.run", return_value=completed):
            result = runner.invoke(app, ["graph", str(workspace_root), "--json"])

        assert result.exit_code == 0
        assert "metadata unavailable" in result.output

    def test_missing_metadata_file(self, workspace_root: Path, tmp_path: Path) -> None:
        result = runner.invoke(
            app, ["graph", str(workspace_root), "--metadata", str(tmp_path / "nope.json")]
        )
        assert result.exit_code == 2
        assert "Workspace metadata unavailable" in result.output

    def test_non_utf8_metadata_file(self, workspace_root: Path, tmp_path: Path) -> None:
        path = tmp_path / "binary.json"
        path.write_bytes(b"\xff\xfe")
        result = runner.invoke(app, ["graph", str(workspace_root), "--metadata", str(path)])
        assert result.exit_code == 2
        assert "Workspace metadata unavailable" in result.output

    def test_invalid_config(self, workspace_root: Path, metadata_file: Path) -> None:
        _write_config(workspace_root, {"explicit_packages": ["other"]})
        result = runner.invoke(
            app, ["graph", str(workspace_root), "--metadata", str(metadata_file)]
        )
        assert result.exit_code == 2
        assert "Invalid bindsync configuration" in result.output


class TestPolicyCommand:
    def test_stdout(self, workspace_root: Path) -> None:
        result = runner.invoke(app, ["policy", str(workspace_root)])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["targetDefaults"]["@rspack/binding:build"]["dependsOn"] == [
            "@rspack/node-binding-crate:build"
        ]
        assert "rustSources" in data["namedInputs"]

    def test_write_file(self, workspace_root: Path) -> None:
        output = workspace_root / "out" / "policy.json"
        result = runner.invoke(app, ["policy", str(workspace_root), "-o", str(output)])

        assert result.exit_code == 0
        assert json.loads(output.read_text())["plugins"][0]["plugin"]

    def test_refuses_overwrite(self, workspace_root: Path) -> None:
        output = workspace_root / "policy.json"
        output.write_text("{}")
        result = runner.invoke(app, ["policy", str(workspace_root), "-o", str(output)])

        assert result.exit_code == 2
        assert output.read_text() == "{}"

    def test_force_overwrite(self, workspace_root: Path) -> None:
        output = workspace_root / "policy.json"
        output.write_text("{}")
        result = runner.invoke(
            app, ["policy", str(workspace_root), "-o", str(output), "--force"]
        )

        assert result.exit_code == 0
        assert "targetDefaults" in json.loads(output.read_text())

    def test_uses_project_config(self, workspace_root: Path) -> None:
        _write_config(
            workspace_root,
            {
                "explicit_packages": ["acme_node"],
                "name_overrides": {},
                "policy": {"native_crate": "acme_node", "binding_project": "@acme/binding"},
            },
        )
        result = runner.invoke(app, ["policy", str(workspace_root)])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["targetDefaults"]["@acme/binding:build"]["dependsOn"] == ["acme_node:build"]


class TestCheckCommand:
    def test_ok(self, workspace_root: Path, metadata_file: Path) -> None:
        result = runner.invoke(
            app, ["check", str(workspace_root), "--metadata", str(metadata_file)]
        )
        assert result.exit_code == 0
        assert "Configuration is consistent" in result.output
        assert "3 crates" in result.output

    def test_missing_explicit_is_warning(
        self, workspace_root: Path, metadata_file: Path
    ) -> None:
        _write_config(workspace_root, {"explicit_packages": ["rspack_node", "rspack_wasm"]})
        result = runner.invoke(
            app, ["check", str(workspace_root), "--metadata", str(metadata_file)]
        )
        assert result.exit_code == 0
        assert "rspack_wasm" in result.output

    def test_missing_native_crate_fails(
        self, workspace_root: Path, tmp_path: Path, crate, metadata_doc
    ) -> None:
        path = tmp_path / "other.json"
        path.write_text(json.dumps(metadata_doc(crate("rspack_core"))))
        result = runner.invoke(app, ["check", str(workspace_root), "--metadata", str(path)])
        assert result.exit_code == 1
        assert "rspack_node" in result.output

    def test_metadata_unavailable_fails(self, workspace_root: Path) -> None:
        with patch(
            "bindsync.core.metadata.fetcher.subprocess.run",
            side_effect=FileNotFoundError("cargo"),
        ):
            result = runner.invoke(app, ["check", str(workspace_root)])
        assert result.exit_code == 1
        assert "metadata unavailable" in result.output
