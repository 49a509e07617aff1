"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .errors import (
    ProjectError,
    InputError,
    NotFoundError,
    CorruptDataError,
    StorageError,
)
from .logging_config import configure_logging, configure_from_settings, get_logger, LogContext
from .json import JSONParseError, dumps_document, loads_document
from .id import new_component_id, is_component_id
from .locks import RWLock


def create_container(settings: Settings | None = None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Errors
    "ProjectError",
    "InputError",
    "NotFoundError",
    "CorruptDataError",
    "StorageError",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "LogContext",
    # JSON
    "JSONParseError",
    "dumps_document",
    "loads_document",
    # IDs
    "new_component_id",
    "is_component_id",
    # Concurrency
    "RWLock",
    # DI
    "create_container",
]
