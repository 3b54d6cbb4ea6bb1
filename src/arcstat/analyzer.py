"""Archive analysis entry point for arcstat."""

import logging

from arcstat.categories import resolve_registry, select_categories
from arcstat.config import ArchiveConfig
from arcstat.errors import ConfigError
from arcstat.models import Category, Report
from arcstat.scanner import ProgressCallback, scan_all_categories

log = logging.getLogger(__name__)


def selected_categories(config: ArchiveConfig) -> list[Category]:
    """
    Resolve the registry and apply the label filter.

    Raises:
        ConfigError: If a filter was given and matches no category
    """
    registry = resolve_registry(config.archive_root, config.registry_path)
    categories = select_categories(registry, config.desired_labels)

    if config.desired_labels and not categories:
        known = ", ".join(c.label for c in registry)
        raise ConfigError(
            f"No known system matches {', '.join(config.desired_labels)} (known: {known})"
        )

    unmatched = [
        label
        for label in config.desired_labels or []
        if not any(label in (c.label, c.relative_path) for c in registry)
    ]
    if unmatched:
        log.warning("Ignoring unknown systems: %s", ", ".join(unmatched))

    return categories


def analyze_archive(
    config: ArchiveConfig,
    progress_callback: ProgressCallback | None = None,
    sequential: bool = False,
    track_sizes: bool = False,
) -> Report:
    """
    Perform a full archive analysis.

    Args:
        config: Resolved archive configuration
        progress_callback: Optional callback(label, completed, total)
        sequential: Scan categories one at a time
        track_sizes: Compute median file sizes

    Returns:
        Report with one row per selected category plus the grand total

    Raises:
        ConfigError: If the archive root or filter is invalid
    """
    config.validate_root()
    categories = selected_categories(config)

    return scan_all_categories(
        config.archive_root,
        categories,
        progress_callback=progress_callback,
        sequential=sequential,
        track_sizes=track_sizes,
    )
