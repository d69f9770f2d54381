"""
Workspace metadata sources.

The synchronizer reads the workspace through a MetadataSource. The default
source shells out to `cargo metadata`; tests and offline runs use a static
document instead. Sources raise MetadataUnavailableError, and fetch_metadata()
turns any such failure into None plus a warning so a missing toolchain never
aborts graph construction.
"""

import json
import logging
import subprocess
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic import ValidationError

from bindsync.core.config.models import MetadataConfig

from .models import WorkspaceMetadata

logger = logging.getLogger(__name__)


class MetadataUnavailableError(Exception):
    """Raised when workspace metadata cannot be obtained or parsed."""

    pass


@runtime_checkable
class MetadataSource(Protocol):
    """Protocol for anything that can describe a native workspace."""

    def fetch_metadata(self, workspace_root: Path) -> WorkspaceMetadata:
        """
        Describe the workspace rooted at *workspace_root*.

        Raises:
            MetadataUnavailableError: If the description cannot be produced
        """
        ...


def parse_metadata(document: Any) -> WorkspaceMetadata:
    """
    Validate a decoded metadata document.

    Raises:
        MetadataUnavailableError: If the document doesn't match the schema
    """
    if not isinstance(document, dict):
        raise MetadataUnavailableError("metadata document is not a JSON object")
    try:
        return WorkspaceMetadata.model_validate(document)
    except ValidationError as e:
        raise MetadataUnavailableError(f"unexpected metadata format: {e}") from e


class CargoMetadataSource:
    """
    Query `cargo metadata` in a subprocess.

    The whole output is captured; max_output_bytes is checked after the tool
    exits and an oversized result is rejected, not truncated. The timeout is
    what bounds a runaway tool.

    Example:
        >>> source = CargoMetadataSource()
        >>> meta = source.fetch_metadata(Path("/path/to/workspace"))
    """

    def __init__(self, config: MetadataConfig | None = None):
        self.config = config or MetadataConfig()

    def fetch_metadata(self, workspace_root: Path) -> WorkspaceMetadata:
        cmd = list(self.config.command)

        try:
            result = subprocess.run(
                cmd,
                cwd=str(workspace_root),
                capture_output=True,
                timeout=self.config.timeout_seconds,
            )
        except FileNotFoundError as e:
            raise MetadataUnavailableError(f"{cmd[0]} not found: {e}") from e
        except subprocess.TimeoutExpired as e:
            raise MetadataUnavailableError(
                f"{' '.join(cmd)} timed out after {self.config.timeout_seconds}s"
            ) from e
        except OSError as e:
            raise MetadataUnavailableError(f"could not run {' '.join(cmd)}: {e}") from e

        if result.returncode != 0:
            stderr = result.stderr.decode(errors="replace").strip() if result.stderr else ""
            raise MetadataUnavailableError(
                f"{' '.join(cmd)} exited with {result.returncode}: {stderr or 'unknown error'}"
            )

        stdout = result.stdout or b""
        if len(stdout) > self.config.max_output_bytes:
            raise MetadataUnavailableError(
                f"metadata output exceeds {self.config.max_output_bytes} bytes "
                f"({len(stdout)} bytes)"
            )

        try:
            document = json.loads(stdout)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MetadataUnavailableError(f"metadata JSON parse error: {e}") from e

        return parse_metadata(document)


class StaticMetadataSource:
    """Serve a fixed metadata document, e.g. loaded from a JSON file."""

    def __init__(self, document: dict[str, Any] | WorkspaceMetadata):
        self._document = document

    @classmethod
    def from_file(cls, path: Path) -> "StaticMetadataSource":
        """
        Load a saved `cargo metadata` output.

        Raises:
            MetadataUnavailableError: If the file is missing or not JSON
        """
        try:
            return cls(json.loads(path.read_text()))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MetadataUnavailableError(f"cannot read metadata from {path}: {e}") from e

    def fetch_metadata(self, workspace_root: Path) -> WorkspaceMetadata:
        if isinstance(self._document, WorkspaceMetadata):
            return self._document
        return parse_metadata(self._document)


def fetch_metadata(
    workspace_root: Path, source: MetadataSource | None = None
) -> WorkspaceMetadata | None:
    """
    Fetch workspace metadata, degrading to None on any failure.

    Args:
        workspace_root: Workspace to describe
        source: Metadata source (defaults to CargoMetadataSource)

    Returns:
        WorkspaceMetadata, or None if the source failed (a warning is logged)
    """
    source = source or CargoMetadataSource()
    try:
        metadata = source.fetch_metadata(workspace_root)
    except MetadataUnavailableError as e:
        logger.warning("Failed to get workspace metadata for %s: %s", workspace_root, e)
        return None

    logger.debug(
        "Workspace metadata: %d packages (%d in workspace)",
        len(metadata.packages),
        len(metadata.workspace_packages),
    )
    return metadata
