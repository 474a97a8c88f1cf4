"""
Exception types raised by mcmod.

Every failure aborts the current command; the CLI turns these into exit code 1.
"""

from typing import Optional


class McmodError(Exception):
    """Base class for mcmod errors."""
    pass


class ConfigError(McmodError):
    """Configuration error."""
    pass


class ProjectError(McmodError):
    """Project could not be located or loaded."""
    pass


class SyncError(McmodError):
    """Sync-related error."""
    pass


class BuildToolError(McmodError):
    """The Gradle wrapper could not be run or exited with an error."""

    def __init__(self, message: str, exit_code: Optional[int] = None):
        super().__init__(message)
        self.exit_code = exit_code


class EulaNotAgreed(McmodError):
    """The user declined the EULA."""
    pass
