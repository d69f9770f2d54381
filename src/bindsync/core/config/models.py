"""
Configuration data models for bindsync.

These models define the structure of .bindsync.json and
~/.config/bindsync/config.json files, with validation and type safety via
Pydantic. A single SyncConfig instance is shared by the graph node builder
and the policy generator so the two cannot disagree about which crates are
materialized.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator

RUST_SOURCE_GLOBS = [
    "{workspaceRoot}/crates/**/*.rs",
    "!{workspaceRoot}/crates/**/target/**/*",
    "!{workspaceRoot}/crates/**/*.gen.rs",
]

# Generated .gen.rs files stay in the named group; only build output is excluded
RUST_NAMED_INPUT_GLOBS = [
    "{workspaceRoot}/crates/**/*.rs",
    "{workspaceRoot}/crates/**/Cargo.toml",
    "!{workspaceRoot}/crates/**/target/**/*",
]


class ConfigurationDriftError(ValueError):
    """Raised when the explicit allow-list and the naming/policy tables disagree."""

    pass


class MetadataConfig(BaseModel):
    """
    How the workspace metadata tool is invoked.

    The tool output can be large for big workspaces, hence the generous
    default output budget.
    """

    model_config = ConfigDict(frozen=True)

    command: list[str] = Field(
        default_factory=lambda: ["cargo", "metadata", "--format-version", "1", "--no-deps"],
        min_length=1,
        description="Command used to query workspace metadata",
    )
    max_output_bytes: int = Field(
        default=10 * 1024 * 1024,
        ge=1,
        description=(
            "Metadata output larger than this is treated as a failure; checked "
            "once the tool has exited, the output is not truncated while reading"
        ),
    )
    timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Kill the metadata tool after this many seconds",
    )


class BuildTargetConfig(BaseModel):
    """
    Targets declared on materialized (explicit) crates.

    Outputs are a fixed set relative to the project root; they are never
    discovered from disk.
    """

    model_config = ConfigDict(frozen=True)

    executor: str = Field(default="nx:run-commands", description="Executor for the build target")
    command: str = Field(
        default="napi build --platform --js binding.js --dts binding.d.ts",
        description="Command run by the build target, from the crate root",
    )
    outputs: list[str] = Field(
        default_factory=lambda: [
            "{projectRoot}/binding.js",
            "{projectRoot}/binding.d.ts",
            "{projectRoot}/*.node",
            "{projectRoot}/*.wasm",
        ],
        description="Build artifacts: compiled module plus its type descriptors",
    )
    test_executor: str = Field(default="@monodon/rust:test", description="Executor for test")
    lint_executor: str = Field(default="@monodon/rust:lint", description="Executor for lint")
    tags: list[str] = Field(
        default_factory=lambda: ["rust", "binding", "napi"],
        description="Tags applied to materialized nodes",
    )


class PolicyConfig(BaseModel):
    """
    Projects wired together by the static trigger rules.

    binding_project is the JS package wrapping the native module,
    consumer_project is the package that imports the binding, native_crate is
    the explicit crate whose build produces the native module.
    """

    model_config = ConfigDict(frozen=True)

    plugin: str = Field(
        default="./tools/bindsync-plugin.js",
        description="Path the orchestrator uses to register this synchronizer",
    )
    native_crate: str = Field(default="rspack_node", description="Crate producing the native module")
    binding_project: str = Field(default="@rspack/binding", description="Binding package project")
    consumer_project: str = Field(default="@rspack/core", description="Downstream consumer project")
    generated_binding_glob: str = Field(
        default="{workspaceRoot}/crates/node_binding/**/*",
        description="Generated binding sources watched by the consumer",
    )
    named_input: str = Field(default="rustSources", description="Name of the reusable input group")


class SyncConfig(BaseModel):
    """
    Main bindsync configuration.

    Combines the allow-list of explicit crates, the naming scheme, the native
    source globs and the static policy projects.

    Example:
        >>> config = SyncConfig()
        >>> config.project_name_for("rspack_node")
        '@rspack/node-binding-crate'
        >>> config.project_name_for("rspack_core")
        'rust:rspack_core'
    """

    model_config = ConfigDict(frozen=True)

    explicit_packages: list[str] = Field(
        default_factory=lambda: ["rspack_node"],
        description="Crates that get runnable build/test/lint targets",
    )
    name_overrides: dict[str, str] = Field(
        default_factory=lambda: {"rspack_node": "@rspack/node-binding-crate"},
        description="Public project names for explicit crates (native name -> project name)",
    )
    project_prefix: str = Field(
        default="rust:",
        min_length=1,
        description="Prefix for structural (graph-only) project names",
    )
    source_globs: list[str] = Field(
        default_factory=lambda: list(RUST_SOURCE_GLOBS),
        description="Workspace-wide native sources; '!' marks an exclusion",
    )
    named_input_globs: list[str] = Field(
        default_factory=lambda: list(RUST_NAMED_INPUT_GLOBS),
        description="Reusable native input group: sources and manifests, minus build output",
    )
    structural_tags: list[str] = Field(
        default_factory=lambda: ["rust", "lib"],
        description="Tags applied to structural nodes",
    )
    build: BuildTargetConfig = Field(default_factory=BuildTargetConfig)
    policy: PolicyConfig = Field(default_factory=PolicyConfig)
    metadata: MetadataConfig = Field(default_factory=MetadataConfig)

    @model_validator(mode="after")
    def check_consistency(self) -> "SyncConfig":
        """Reject allow-list / naming-override / policy mismatches up front."""
        explicit = set(self.explicit_packages)

        stray = sorted(set(self.name_overrides) - explicit)
        if stray:
            raise ConfigurationDriftError(
                f"name_overrides for crates not in explicit_packages: {', '.join(stray)}"
            )

        if self.policy.native_crate not in explicit:
            raise ConfigurationDriftError(
                f"policy.native_crate '{self.policy.native_crate}' is not in explicit_packages"
            )

        for native, project in self.name_overrides.items():
            if project.startswith(self.project_prefix):
                raise ConfigurationDriftError(
                    f"override '{project}' for '{native}' uses the structural "
                    f"prefix '{self.project_prefix}'"
                )

        claimed: dict[str, str] = {}
        for native in dict.fromkeys(self.explicit_packages):
            project = self.project_name_for(native)
            if project in claimed:
                raise ConfigurationDriftError(
                    f"explicit crates '{claimed[project]}' and '{native}' both map "
                    f"to project '{project}'"
                )
            claimed[project] = native

        return self

    def is_explicit(self, native_name: str) -> bool:
        """Return True if *native_name* is materialized."""
        return native_name in self.explicit_packages

    def project_name_for(self, native_name: str) -> str:
        """Project name the orchestrator sees for a native crate."""
        if self.is_explicit(native_name):
            return self.name_overrides.get(native_name, native_name)
        return f"{self.project_prefix}{native_name}"
