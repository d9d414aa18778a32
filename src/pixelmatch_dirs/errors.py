"""Fatal error types raised by the library and reported by the CLI."""

from __future__ import annotations


class PixelmatchDirsError(RuntimeError):
    """Base class for errors that abort the whole run."""


class ConfigError(PixelmatchDirsError):
    """Startup validation failed (runtime, threshold, or directories)."""


class WorkspaceError(PixelmatchDirsError):
    """Filesystem failure while listing, staging, removing, or moving files."""


class ComparatorError(PixelmatchDirsError):
    """External comparator could not be launched or broke its exit-code contract."""


class OutputParseError(ComparatorError):
    """Pixel-mismatch output did not have the expected ``label: value`` lines."""
