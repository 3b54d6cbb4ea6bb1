"""Archive configuration resolved from CLI options and the environment."""

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field

from arcstat.categories import parse_category_filter
from arcstat.errors import ConfigError

ARCHIVE_ENV_VAR = "VG_ARCHIVE"


def expand_path(path: str) -> Path:
    """Expand ~ and environment variables in path."""
    return Path(os.path.expanduser(os.path.expandvars(path)))


class ArchiveConfig(BaseModel):
    """Where the archive lives and which categories to scan."""

    archive_root: Path = Field(..., description="Root directory of the game archive")
    desired_labels: Optional[list[str]] = Field(
        None, description="Category labels to scan exclusively; None means all"
    )
    registry_path: Optional[Path] = Field(None, description="Explicit registry file")

    @classmethod
    def from_sources(
        cls,
        archive_root: Optional[str] = None,
        systems: Optional[str] = None,
        registry: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "ArchiveConfig":
        """
        Build a config from option values, falling back to VG_ARCHIVE.

        Args:
            archive_root: Value of --archive-root, if given
            systems: Raw --systems value (comma/space separated labels)
            registry: Value of --registry, if given
            environ: Environment mapping (defaults to os.environ)

        Raises:
            ConfigError: If no archive root is available from either source
        """
        if environ is None:
            environ = os.environ

        root = archive_root or environ.get(ARCHIVE_ENV_VAR)
        if not root:
            raise ConfigError(
                "Please supply an archive path via --archive-root "
                f"or the {ARCHIVE_ENV_VAR} environment variable."
            )

        return cls(
            archive_root=expand_path(root),
            desired_labels=parse_category_filter(systems),
            registry_path=expand_path(registry) if registry else None,
        )

    def validate_root(self) -> None:
        """Raise ConfigError unless the archive root is an existing directory."""
        if not self.archive_root.exists():
            raise ConfigError(f"Archive root does not exist: {self.archive_root}")
        if not self.archive_root.is_dir():
            raise ConfigError(f"Archive root is not a directory: {self.archive_root}")
