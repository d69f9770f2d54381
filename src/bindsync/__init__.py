"""
bindsync - Rust workspace build-graph synchronizer

Keeps an orchestrator project graph in step with a Cargo workspace and
emits the trigger rules that rebuild the native binding on any Rust change.
"""

__version__ = "0.3.0.dev0"

# Re-export core models for convenience
from bindsync.core.config.models import SyncConfig
from bindsync.core.graph.models import DependencyEdge, GraphNode
from bindsync.core.sync import SyncResult, WorkspaceSynchronizer

__all__ = [
    "DependencyEdge",
    "GraphNode",
    "SyncConfig",
    "SyncResult",
    "WorkspaceSynchronizer",
    "__version__",
]
