"""
Workspace metadata: models and sources.

Main entry points:
    - fetch_metadata(): query a workspace, None on failure
    - CargoMetadataSource / StaticMetadataSource: MetadataSource implementations
"""

from .fetcher import (
    CargoMetadataSource,
    MetadataSource,
    MetadataUnavailableError,
    StaticMetadataSource,
    fetch_metadata,
    parse_metadata,
)
from .models import WorkspaceMetadata, WorkspacePackage

__all__ = [
    "CargoMetadataSource",
    "MetadataSource",
    "MetadataUnavailableError",
    "StaticMetadataSource",
    "WorkspaceMetadata",
    "WorkspacePackage",
    "fetch_metadata",
    "parse_metadata",
]
