"""
Data models for workspace metadata.

Mirrors the subset of the `cargo metadata` (format version 1) document that
the synchronizer reads: package names, manifest paths, declared dependency
names and the external-source marker. Models are frozen; the synchronizer
never mutates workspace metadata.
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WorkspacePackage(BaseModel):
    """A package (crate) as reported by the metadata tool."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(..., min_length=1, description="Package name, unique in the workspace")
    manifest_path: Path = Field(..., description="Absolute path to the package manifest")
    dependencies: list[str] = Field(
        default_factory=list,
        description="Declared dependency names in declaration order",
    )
    source: str | None = Field(
        default=None,
        description="Registry/git source; set only for packages fetched from outside",
    )

    @field_validator("dependencies", mode="before")
    @classmethod
    def dependency_names(cls, v: Any) -> Any:
        """Accept raw dependency objects (`{"name": ...}`) as well as bare names."""
        if not isinstance(v, list):
            return v
        names: list[Any] = []
        for dep in v:
            if isinstance(dep, dict):
                names.append(dep.get("name"))
            else:
                names.append(dep)
        return names

    @property
    def is_external(self) -> bool:
        """True if the package comes from outside the workspace."""
        return bool(self.source)

    @property
    def manifest_dir(self) -> Path:
        """Directory holding the manifest (the package root)."""
        return self.manifest_path.parent


class WorkspaceMetadata(BaseModel):
    """
    Structured description of a native workspace.

    Example:
        >>> meta = WorkspaceMetadata.model_validate(json.loads(output))
        >>> [p.name for p in meta.workspace_packages]
        ['rspack_core', 'rspack_node']
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    packages: list[WorkspacePackage] = Field(default_factory=list)
    workspace_root: Path | None = Field(
        default=None, description="Workspace root as reported by the tool"
    )

    @property
    def workspace_packages(self) -> list[WorkspacePackage]:
        """Packages inside the workspace boundary, in reported order."""
        return [p for p in self.packages if not p.is_external]

    @property
    def package_names(self) -> set[str]:
        """Names of all non-external packages."""
        return {p.name for p in self.workspace_packages}
