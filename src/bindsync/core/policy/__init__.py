"""Static orchestrator policy (target defaults and named inputs)."""

from .triggers import (
    OrchestratorPolicy,
    PluginRegistration,
    TargetDefault,
    build_target,
    generate_policy,
)

__all__ = [
    "OrchestratorPolicy",
    "PluginRegistration",
    "TargetDefault",
    "build_target",
    "generate_policy",
]
