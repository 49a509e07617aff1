"""
Repository Interface
Persistence boundary for project documents
"""

from abc import ABC, abstractmethod
from pathlib import Path

from ..models import ProjectData


class ProjectRepository(ABC):
    """
    Durable storage for one canonical project plus backups and exports.

    Implementations guarantee that a concurrent reader never observes a
    partially written document and that every loaded project satisfies the
    model integrity rules (repaired on the way in if necessary).
    """

    @abstractmethod
    def load(self) -> ProjectData | None:
        """
        Load the canonical project.

        Returns:
            The project, or None when nothing has been saved yet

        Raises:
            CorruptDataError: If the stored document cannot be parsed
            StorageError: If the file cannot be read
        """

    @abstractmethod
    def save(self, project: ProjectData) -> None:
        """Atomically replace the canonical project document."""

    @abstractmethod
    def backup(self, project: ProjectData, backup_name: str) -> str:
        """
        Write a timestamped snapshot.

        Returns:
            File name of the backup (``<backup_name>_<yyyyMMdd_HHmmss>.json``)
        """

    @abstractmethod
    def restore(self, backup_name: str) -> ProjectData:
        """Load the first backup (lexical order) whose file name starts with backup_name."""

    @abstractmethod
    def export_project(self, project: ProjectData, path: Path | str) -> Path:
        """Write the project document to a caller-chosen location."""

    @abstractmethod
    def import_project(self, path: Path | str) -> ProjectData:
        """Read a project document from a caller-chosen location, repairing it like load()."""

    @abstractmethod
    def list_backups(self) -> list[str]:
        """Backup file names, sorted (oldest first for a given backup name)."""

    @abstractmethod
    def project_exists(self) -> bool:
        """Whether a canonical project document exists."""

    @abstractmethod
    def delete_project(self) -> None:
        """Remove the canonical project document if present."""

    @abstractmethod
    def delete_backup(self, file_name: str) -> bool:
        """Remove one backup by exact file name. Returns False if it did not exist."""
