"""
JSON File Repository
Project documents on the local filesystem with atomic replace
"""

import os
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError

from ..core.config import Settings
from ..core.errors import CorruptDataError, InputError, NotFoundError, StorageError, require_text, require_value
from ..core.json import JSONParseError, dumps_document, loads_document
from ..core.logging_config import get_logger
from ..models import ProjectData
from .base import ProjectRepository

logger = get_logger(__name__)

BACKUP_SUFFIX = ".json"
TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


class JsonProjectRepository(ProjectRepository):
    """
    Filesystem repository.

    Layout::

        <data_dir>/<project_file_name>          canonical project
        <data_dir>/<backup_dir_name>/*.json     backups

    Every write goes to a sibling ``.tmp`` file that is fsynced and then
    moved over the target with os.replace, so readers see either the old
    document or the new one.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._project_file = settings.project_file
        self._backup_dir = settings.backup_dir

        try:
            self._backup_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create data directories: {e}", self._backup_dir, e) from e

        logger.info(
            "repository_initialized",
            project_file=str(self._project_file),
            backup_dir=str(self._backup_dir),
        )

    @property
    def project_file_path(self) -> Path:
        return self._project_file

    @property
    def backup_directory_path(self) -> Path:
        return self._backup_dir

    # Canonical project

    def load(self) -> ProjectData | None:
        if not self._project_file.is_file():
            logger.info("project_not_found", path=str(self._project_file))
            return None

        document = self._read_document(self._project_file)
        if document is None:
            logger.warning("project_file_empty", path=str(self._project_file))
            return None

        project = self._to_project(document, self._project_file)
        logger.info("project_loaded", name=project.name, pages=project.page_count())
        return project

    def save(self, project: ProjectData) -> None:
        require_value(project, "project")
        self._write_document(self._project_file, project)
        logger.info(
            "project_saved",
            name=project.name,
            pages=project.page_count(),
            components=project.total_component_count(),
        )

    def project_exists(self) -> bool:
        return self._project_file.is_file()

    def delete_project(self) -> None:
        try:
            self._project_file.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot delete project: {e}", self._project_file, e) from e
        logger.info("project_deleted", path=str(self._project_file))

    # Backups

    def backup(self, project: ProjectData, backup_name: str) -> str:
        require_value(project, "project")
        name = require_text(backup_name, "backup name")
        if Path(name).name != name or name in (".", ".."):
            raise InputError(f"Backup name must be a plain file name: {name!r}")

        file_name = f"{name}_{datetime.now().strftime(TIMESTAMP_FORMAT)}{BACKUP_SUFFIX}"
        path = self._backup_dir / file_name
        if path.exists():
            raise StorageError(f"Backup already exists: {file_name}", path)

        self._write_document(path, project)
        logger.info("backup_created", file=file_name, project=project.name)
        return file_name

    def restore(self, backup_name: str) -> ProjectData:
        name = require_text(backup_name, "backup name")

        match = next((b for b in self.list_backups() if b.startswith(name)), None)
        if match is None:
            raise NotFoundError(f"No backup matching {name!r}", self._backup_dir)

        path = self._backup_dir / match
        project = self._read_project(path)
        logger.info("backup_restored", file=match, project=project.name)
        return project

    def list_backups(self) -> list[str]:
        try:
            return sorted(
                p.name for p in self._backup_dir.iterdir() if p.is_file() and p.suffix == BACKUP_SUFFIX
            )
        except FileNotFoundError:
            return []
        except OSError as e:
            raise StorageError(f"Cannot list backups: {e}", self._backup_dir, e) from e

    def delete_backup(self, file_name: str) -> bool:
        name = require_text(file_name, "backup file name")
        path = self._backup_dir / Path(name).name
        if not path.is_file():
            logger.warning("backup_not_found", file=name)
            return False

        try:
            path.unlink()
        except OSError as e:
            raise StorageError(f"Cannot delete backup: {e}", path, e) from e
        logger.info("backup_deleted", file=name)
        return True

    # Export / import

    def export_project(self, project: ProjectData, path: Path | str) -> Path:
        require_value(project, "project")
        target = Path(require_text(str(path) if path is not None else None, "export path"))

        extension = self.settings.export_extension
        if extension and not target.name.endswith(extension):
            target = target.with_name(target.name + extension)

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create export directory: {e}", target.parent, e) from e

        self._write_document(target, project)
        logger.info("project_exported", path=str(target), project=project.name)
        return target

    def import_project(self, path: Path | str) -> ProjectData:
        source = Path(require_text(str(path) if path is not None else None, "import path"))
        if not source.is_file():
            raise NotFoundError(f"Import file not found: {source}", source)

        project = self._read_project(source)
        logger.info("project_imported", path=str(source), project=project.name)
        return project

    # Internals

    def _read_project(self, path: Path) -> ProjectData:
        """Read a document that must exist and hold a project."""
        document = self._read_document(path)
        if document is None:
            raise CorruptDataError(f"Empty project document: {path}", path)
        return self._to_project(document, path)

    def _read_document(self, path: Path) -> dict | None:
        try:
            raw = path.read_bytes()
        except FileNotFoundError as e:
            raise NotFoundError(f"File not found: {path}", path) from e
        except OSError as e:
            raise StorageError(f"Cannot read {path}: {e}", path, e) from e

        try:
            return loads_document(raw)
        except JSONParseError as e:
            logger.error("document_parse_failed", path=str(path), error=str(e))
            raise CorruptDataError(f"Corrupt project document {path}: {e}", path, e) from e

    def _to_project(self, document: dict, path: Path) -> ProjectData:
        try:
            project = ProjectData.from_document(document)
        except ValidationError as e:
            logger.error("document_invalid", path=str(path), errors=e.error_count())
            raise CorruptDataError(f"Invalid project document {path}: {e}", path, e) from e

        if not project.validate_integrity():
            report = project.repair_integrity()
            logger.warning("project_repaired_on_read", path=str(path), changes=len(report))
        return project

    def _write_document(self, path: Path, project: ProjectData) -> None:
        data = dumps_document(project.to_document(), indent=self.settings.json_indent)
        temp = path.with_name(path.name + ".tmp")

        try:
            with open(temp, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp, path)
        except OSError as e:
            temp.unlink(missing_ok=True)
            logger.error("document_write_failed", path=str(path), error=str(e))
            raise StorageError(f"Cannot write {path}: {e}", path, e) from e
