"""Custom exceptions for material cloning operations."""

from typing import Any, Mapping, Optional


class MatCloneError(Exception):
    """Base exception for all matclone errors.

    Attributes:
        message: Human-readable error message.
        details: Optional dictionary of additional error context.
    """

    def __init__(
        self, message: str, details: Optional[Mapping[str, Any]] = None
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message.
            details: Optional dictionary of additional error context.
        """
        super().__init__(message)
        self._details = dict(details) if details else {}

    @property
    def message(self) -> str:
        """Return the human-readable error message."""
        if self.args:
            return str(self.args[0])
        return ""

    @property
    def details(self) -> Mapping[str, Any]:
        """Return an immutable view of error details."""
        return self._details

    def __str__(self) -> str:
        message = self.message
        if not self._details:
            return message
        return f"{message} (details={self._details!r})"


class NoSelectionError(MatCloneError):
    """Raised when a command runs without a selected node."""

    pass


class NoMaterialsFoundError(MatCloneError):
    """Raised when a subtree references no persisted materials.

    This is informational; callers report it and return without changes.
    """

    pass


class PathResolutionError(MatCloneError):
    """Raised when a material asset has no storage path."""

    pass


class FolderCreationError(MatCloneError):
    """Raised when the clone destination folder cannot be created."""

    pass


class AssetPersistError(MatCloneError):
    """Raised when a new material asset cannot be written or loaded back."""

    pass


class FileSystemAccessError(MatCloneError):
    """Raised when file system operations fail."""

    pass


class ValidationError(MatCloneError):
    """Raised when input validation fails."""

    pass


class ConfigurationError(MatCloneError):
    """Raised when configuration is invalid."""

    pass
