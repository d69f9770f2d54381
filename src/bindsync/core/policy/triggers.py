"""
Static trigger rules for the orchestrator configuration.

The policy is workspace configuration, not derived from the live graph:
target defaults that make the binding package rebuild on any native change
and keep the downstream consumer watching only its own sources plus the
generated binding directory.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from bindsync.core.config.models import SyncConfig


class TargetDefault(BaseModel):
    """Defaults applied to one `<project>:<target>` pair."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    depends_on: list[str] = Field(default_factory=list, alias="dependsOn")
    inputs: list[str] = Field(default_factory=list)


class PluginRegistration(BaseModel):
    model_config = ConfigDict(frozen=True)

    plugin: str
    options: dict[str, Any] = Field(default_factory=dict)


class OrchestratorPolicy(BaseModel):
    """Recommended orchestrator configuration fragment."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    plugins: list[PluginRegistration] = Field(default_factory=list)
    target_defaults: dict[str, TargetDefault] = Field(
        default_factory=dict, alias="targetDefaults"
    )
    named_inputs: dict[str, list[str]] = Field(default_factory=dict, alias="namedInputs")

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


def build_target(project: str, target: str = "build") -> str:
    return f"{project}:{target}"


def generate_policy(config: SyncConfig | None = None) -> OrchestratorPolicy:
    """
    Produce the static policy fragment.

    The native crate's project name comes from the same SyncConfig the node
    builder uses, so the `dependsOn` reference always names a materialized
    node.

    Args:
        config: Shared synchronizer configuration (defaults to SyncConfig())

    Returns:
        OrchestratorPolicy with plugins, targetDefaults and namedInputs
    """
    config = config or SyncConfig()
    policy = config.policy
    native_project = config.project_name_for(policy.native_crate)

    return OrchestratorPolicy(
        plugins=[PluginRegistration(plugin=policy.plugin)],
        target_defaults={
            build_target(policy.binding_project): TargetDefault(
                depends_on=[build_target(native_project)],
                inputs=["{projectRoot}/**/*", *config.source_globs],
            ),
            build_target(policy.consumer_project): TargetDefault(
                depends_on=[build_target(policy.binding_project)],
                inputs=["{projectRoot}/src/**/*", policy.generated_binding_glob],
            ),
        },
        named_inputs={
            policy.named_input: list(config.named_input_globs),
        },
    )
