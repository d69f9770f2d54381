"""
Configuration models and loading.

This module provides Pydantic models for bindsync configuration
with multi-layer merging: defaults < user < project.
"""

from .loader import (
    clear_cache,
    get_project_config_path,
    get_user_config_path,
    get_xdg_config_home,
    load_config,
)
from .models import (
    RUST_NAMED_INPUT_GLOBS,
    RUST_SOURCE_GLOBS,
    BuildTargetConfig,
    ConfigurationDriftError,
    MetadataConfig,
    PolicyConfig,
    SyncConfig,
)

__all__ = [
    # Models
    "BuildTargetConfig",
    "ConfigurationDriftError",
    "MetadataConfig",
    "PolicyConfig",
    "RUST_NAMED_INPUT_GLOBS",
    "RUST_SOURCE_GLOBS",
    "SyncConfig",
    # Loader functions
    "clear_cache",
    "get_project_config_path",
    "get_user_config_path",
    "get_xdg_config_home",
    "load_config",
]
