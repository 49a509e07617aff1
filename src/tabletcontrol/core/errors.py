"""Error taxonomy for the project core.

Only unexpected failures are exceptions. Integrity violations are repaired in
place and policy refusals (last page, name collision) are reported as False.
"""

from pathlib import Path
from typing import Any


class ProjectError(Exception):
    """Base class for project core failures."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class InputError(ProjectError, ValueError):
    """A required argument was None or blank. Raised before any I/O."""

    pass


class NotFoundError(ProjectError, FileNotFoundError):
    """A backup or import file does not exist."""

    pass


class CorruptDataError(ProjectError):
    """A persisted document could not be read or parsed."""

    def __init__(
        self, message: str, path: Path | str | None = None, original: Exception | None = None
    ) -> None:
        super().__init__(message, path)
        self.original = original


class StorageError(ProjectError, OSError):
    """Reading or writing the storage location failed."""

    def __init__(
        self, message: str, path: Path | str | None = None, original: Exception | None = None
    ) -> None:
        super().__init__(message, path)
        self.original = original


def require_text(value: Any, name: str) -> str:
    """
    Validate a required string argument.

    Args:
        value: Argument value
        name: Argument name for the error message

    Returns:
        The value, stripped of surrounding whitespace

    Raises:
        InputError: If value is None, not a string, or blank
    """
    if value is None or not isinstance(value, str) or not value.strip():
        raise InputError(f"{name} must not be empty")
    return value.strip()


def require_value(value: Any, name: str) -> Any:
    """Reject None for a required argument."""
    if value is None:
        raise InputError(f"{name} must not be None")
    return value
