"""
Shared helpers for CLI commands: config loading and metadata source selection.
"""

from pathlib import Path

import typer
from pydantic import ValidationError

from bindsync.cli.errors import (
    ExitCode,
    print_invalid_config_error,
    print_metadata_unavailable_error,
)
from bindsync.core.config import SyncConfig, load_config
from bindsync.core.metadata import (
    CargoMetadataSource,
    MetadataSource,
    MetadataUnavailableError,
    StaticMetadataSource,
)


def load_sync_config(workspace_root: Path) -> SyncConfig:
    """Load layered config for *workspace_root*, exiting with USER_ERROR if invalid."""
    try:
        return load_config(workspace_root)
    except ValidationError as e:
        print_invalid_config_error(e)
        raise typer.Exit(ExitCode.USER_ERROR)


def make_source(config: SyncConfig, metadata_file: Path | None) -> MetadataSource:
    """Metadata from a saved JSON file when given, otherwise from cargo."""
    if metadata_file is None:
        return CargoMetadataSource(config.metadata)
    try:
        return StaticMetadataSource.from_file(metadata_file)
    except MetadataUnavailableError as e:
        print_metadata_unavailable_error(str(e))
        raise typer.Exit(ExitCode.USER_ERROR)
