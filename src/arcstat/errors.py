"""Exceptions raised by arcstat."""


class ArcstatError(Exception):
    """Base class for all arcstat errors."""


class ConfigError(ArcstatError):
    """Invalid configuration, reported before any scanning starts."""


class RegistryError(ConfigError):
    """A category registry file could not be read or validated."""


class CategoryScanError(ArcstatError):
    """A category's top-level directory could not be opened."""

    def __init__(self, category, message: str):
        super().__init__(f"{category.label}: {message}")
        self.category = category
        self.message = message
