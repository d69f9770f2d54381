"""
Data models for the orchestrator project graph.

GraphNode and DependencyEdge are the synchronizer's output. They are rebuilt
from scratch on every run and serialise to the orchestrator's camelCase JSON
via ``model_dump(by_alias=True)``.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class TargetSpec(BaseModel):
    """A runnable target declared on a materialized node."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    executor: str = Field(..., description="Executor implementing the target")
    options: dict[str, Any] = Field(default_factory=dict)
    inputs: list[str] = Field(default_factory=list, description="Change-detection globs")
    outputs: list[str] = Field(default_factory=list, description="Cached artifact globs")
    depends_on: list[str] = Field(default_factory=list, alias="dependsOn")


class GraphNode(BaseModel):
    """
    A project in the orchestrator graph.

    Materialized nodes carry build/test/lint targets. Structural nodes have no
    targets and exist only so the crate participates in dependency ordering.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    root: str = Field(..., description="Workspace-relative project directory")
    name: str = Field(..., description="Project name in the orchestrator namespace")
    native_name: str = Field(..., exclude=True, description="Crate name from the manifest")
    materialized: bool = Field(default=False, exclude=True)
    source_root: str = Field(..., alias="sourceRoot")
    project_type: Literal["library", "application"] = Field(
        default="library", alias="projectType"
    )
    implicit: bool = Field(default=False, description="True for structural nodes")
    targets: dict[str, TargetSpec] = Field(default_factory=dict)
    tags: list[str] = Field(default_factory=list)

    @property
    def is_structural(self) -> bool:
        return not self.materialized

    def to_project_config(self) -> dict[str, Any]:
        """Project configuration in the orchestrator's JSON shape."""
        data = self.model_dump(by_alias=True, exclude_none=True)
        if not self.implicit:
            data.pop("implicit")
        for target in data["targets"].values():
            for key in ("options", "inputs", "outputs", "dependsOn"):
                if not target[key]:
                    del target[key]
        return data


class DependencyEdge(BaseModel):
    """A compile-time dependency between two workspace projects."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source: str = Field(..., description="Dependent project name")
    target: str = Field(..., description="Dependency project name")
    type: Literal["static"] = "static"
    source_file: str = Field(
        ..., alias="sourceFile", description="Manifest declaring the dependency"
    )


class ProjectGraphFragment(BaseModel):
    """Nodes contributed to the orchestrator, keyed by project root."""

    projects: dict[str, GraphNode] = Field(default_factory=dict)
    external_nodes: dict[str, Any] = Field(default_factory=dict, alias="externalNodes")

    model_config = ConfigDict(populate_by_name=True)

    def to_json_dict(self) -> dict[str, Any]:
        return {
            "projects": {
                root: node.to_project_config() for root, node in self.projects.items()
            },
            "externalNodes": dict(self.external_nodes),
        }
