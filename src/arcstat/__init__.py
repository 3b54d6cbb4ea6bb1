"""arcstat - per-system statistics for an emulation game archive."""

__version__ = "0.1.0"
