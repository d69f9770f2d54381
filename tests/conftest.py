"""
Pytest configuration and shared fixtures.

Provides a fake workspace root, helpers for building `cargo metadata`
documents, and isolation from the user's real bindsync config.
"""

from pathlib import Path
from typing import Any

import pytest

from bindsync.core.config import SyncConfig, clear_cache
from bindsync.core.metadata import StaticMetadataSource

# ==============================================================================
# Isolation
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point XDG_CONFIG_HOME at an empty directory and reset the config cache."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    clear_cache()
    yield
    clear_cache()


# ==============================================================================
# Workspace Fixtures
# ==============================================================================


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    """Provide an empty workspace directory."""
    root = tmp_path / "workspace"
    root.mkdir()
    return root


def _crate(
    root: Path,
    name: str,
    deps: list[str] | None = None,
    *,
    directory: str | None = None,
    source: str | None = None,
) -> dict[str, Any]:
    """Shorthand for a `cargo metadata` package entry under crates/<name>."""
    manifest = root / "crates" / (directory or name) / "Cargo.toml"
    return {
        "name": name,
        "version": "0.1.0",
        "id": f"path+file://{manifest.parent}#{name}@0.1.0",
        "manifest_path": str(manifest),
        "source": source,
        "dependencies": [
            {"name": d, "source": None, "req": "*", "kind": None} for d in (deps or [])
        ],
    }


def _metadata_doc(root: Path, *packages: dict[str, Any]) -> dict[str, Any]:
    """Wrap package entries in a `cargo metadata` document."""
    return {
        "packages": list(packages),
        "workspace_members": [p["id"] for p in packages if not p["source"]],
        "workspace_root": str(root),
        "target_directory": str(root / "target"),
        "version": 1,
    }


@pytest.fixture
def crate(workspace_root: Path):
    """Factory for package entries rooted in the test workspace."""

    def _make(name: str, deps: list[str] | None = None, **kwargs: Any) -> dict[str, Any]:
        return _crate(workspace_root, name, deps, **kwargs)

    return _make


@pytest.fixture
def metadata_doc(workspace_root: Path):
    """Factory wrapping package entries in a metadata document."""

    def _make(*packages: dict[str, Any]) -> dict[str, Any]:
        return _metadata_doc(workspace_root, *packages)

    return _make


@pytest.fixture
def config() -> SyncConfig:
    """Config with `core` materialized and no naming overrides."""
    return SyncConfig(
        explicit_packages=["core"],
        name_overrides={},
        policy={"native_crate": "core"},
    )


@pytest.fixture
def scenario_a(workspace_root: Path) -> dict[str, Any]:
    """core (explicit) -> util -> external_dep (registry crate)."""
    return _metadata_doc(
        workspace_root,
        _crate(workspace_root, "core", ["util"]),
        _crate(workspace_root, "util", ["external_dep"]),
        _crate(
            workspace_root,
            "external_dep",
            source="registry+https://github.com/rust-lang/crates.io-index",
        ),
    )


@pytest.fixture
def scenario_a_source(scenario_a: dict[str, Any]) -> StaticMetadataSource:
    return StaticMetadataSource(scenario_a)
