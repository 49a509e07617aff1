"""
Project Service
Single current project guarded by one readers-writer lock.
"""

from collections import Counter
from pathlib import Path
from typing import Any

from ..core.config import Settings
from ..core.errors import ProjectError, require_text, require_value
from ..core.id import now_millis
from ..core.locks import RWLock
from ..core.logging_config import LogContext, get_logger
from ..models import ComponentData, PageData, ProjectData, RepairReport
from ..repository import ProjectRepository
from .base import ProjectService

logger = get_logger(__name__)


class ProjectServiceImpl(ProjectService):
    """
    Locked project service.

    Every read takes the read lock; every mutation, including the
    repository call it makes, holds the write lock for its whole duration.
    The lock is not re-entrant, so public methods only call the private
    ``_unlocked`` helpers below, never each other.

    Page and component mutations create a project first when none is held.
    Read-only queries never do.
    """

    def __init__(self, repository: ProjectRepository, settings: Settings) -> None:
        self.repository = repository
        self.settings = settings

        self._lock = RWLock()
        self._project: ProjectData | None = None
        self._current_page_name: str | None = None
        self._dirty = False
        self._last_saved_time = 0

    # Project lifecycle

    def create_new_project(self) -> ProjectData:
        with self._lock.write_locked():
            return self._create_new_unlocked()

    def load_project(self) -> ProjectData:
        with self._lock.write_locked():
            project = self.repository.load()
            if project is None:
                logger.info("no_stored_project_creating_new")
                return self._create_new_unlocked()

            self._ensure_valid(project)
            self._install(project, dirty=False)
            self._last_saved_time = now_millis()
            logger.info("project_loaded", name=project.name, pages=project.page_count())
            return project

    def save_project(self, project: ProjectData) -> None:
        require_value(project, "project")
        with self._lock.write_locked():
            self._save_unlocked(project)

    def save_current_project(self) -> None:
        with self._lock.write_locked():
            self._save_unlocked(self._require_project())

    def backup_project(self, backup_name: str) -> str:
        name = require_text(backup_name, "backup name")
        with self._lock.write_locked():
            return self.repository.backup(self._require_project(), name)

    def restore_project(self, backup_name: str) -> ProjectData:
        name = require_text(backup_name, "backup name")
        with self._lock.write_locked():
            project = self.repository.restore(name)
            self._ensure_valid(project)
            self._install(project, dirty=True)
            logger.info("project_restored", backup=name, name=project.name)
            return project

    def import_project(self, path: Path | str) -> ProjectData:
        require_value(path, "import path")
        with self._lock.write_locked():
            project = self.repository.import_project(path)
            self._ensure_valid(project)
            self._install(project, dirty=True)
            logger.info("project_imported", path=str(path), name=project.name)
            return project

    def export_project(self, path: Path | str) -> Path:
        require_value(path, "export path")
        with self._lock.write_locked():
            return self.repository.export_project(self._require_project(), path)

    def list_backups(self) -> list[str]:
        with self._lock.read_locked():
            return self.repository.list_backups()

    def delete_backup(self, file_name: str) -> bool:
        name = require_text(file_name, "backup file name")
        with self._lock.write_locked():
            return self.repository.delete_backup(name)

    def get_current_project(self) -> ProjectData | None:
        with self._lock.read_locked():
            return self._project

    def set_current_project(self, project: ProjectData) -> None:
        require_value(project, "project")
        with self._lock.write_locked():
            self._install(project, dirty=True)
            logger.info("project_replaced", name=project.name)

    # Pages

    def set_current_page(self, page_name: str) -> bool:
        with self._lock.write_locked():
            project = self._ensure_project()
            if not project.set_current_page(page_name):
                logger.warning("unknown_page_not_selected", page=page_name)
                return False
            self._current_page_name = page_name
            logger.info("current_page_changed", page=page_name)
            return True

    def get_current_page_name(self) -> str | None:
        with self._lock.read_locked():
            return self._current_page_name

    def get_current_page(self) -> PageData | None:
        with self._lock.read_locked():
            return self._page_unlocked(self._current_page_name)

    def get_page(self, page_name: str) -> PageData | None:
        with self._lock.read_locked():
            return self._page_unlocked(page_name)

    def get_all_page_names(self) -> list[str]:
        with self._lock.read_locked():
            if self._project is None:
                return []
            return list(self._project.pages)

    def create_page(self, page_name: str) -> PageData | None:
        name = require_text(page_name, "page name")
        with self._lock.write_locked():
            project = self._ensure_project()
            if project.has_page(name):
                logger.info("page_exists", page=name)
                return None

            project.add_page(name)
            self._mark_dirty()
            logger.info("page_created", page=name, pages=project.page_count())
            return project.get_page(name)

    def delete_page(self, page_name: str) -> bool:
        with self._lock.write_locked():
            project = self._ensure_project()
            if not project.has_page(page_name):
                return False
            if project.page_count() <= 1:
                logger.warning("last_page_not_deleted", page=page_name)
                return False

            project.remove_page(page_name)
            if self._current_page_name == page_name:
                self._current_page_name = project.current_page
            self._mark_dirty()
            logger.info("page_deleted", page=page_name, pages=project.page_count())
            return True

    def rename_page(self, old_name: str, new_name: str) -> bool:
        new_name = require_text(new_name, "new page name")
        with self._lock.write_locked():
            project = self._ensure_project()
            if not project.rename_page(old_name, new_name):
                logger.warning("page_not_renamed", old=old_name, new=new_name)
                return False

            if self._current_page_name == old_name:
                self._current_page_name = new_name
            self._mark_dirty()
            logger.info("page_renamed", old=old_name, new=new_name)
            return True

    # Components

    def add_component(self, page_name: str, component: ComponentData) -> bool:
        require_value(component, "component")
        with self._lock.write_locked():
            return self._add_component_unlocked(page_name, component)

    def add_component_to_current_page(self, component: ComponentData) -> bool:
        require_value(component, "component")
        with self._lock.write_locked():
            self._ensure_project()
            return self._add_component_unlocked(self._current_page_name, component)

    def remove_component(self, page_name: str, component: ComponentData) -> bool:
        with self._lock.write_locked():
            return self._remove_component_unlocked(page_name, component)

    def remove_component_from_current_page(self, component: ComponentData) -> bool:
        with self._lock.write_locked():
            self._ensure_project()
            return self._remove_component_unlocked(self._current_page_name, component)

    def update_component(self, page_name: str, old: ComponentData, new: ComponentData) -> bool:
        require_value(new, "component")
        with self._lock.write_locked():
            self._ensure_project()
            page = self._page_unlocked(page_name)
            if page is None or not page.replace_component(old, new):
                return False
            self._mark_dirty()
            logger.info("component_updated", page=page_name, component_id=new.component_id)
            return True

    def get_page_components(self, page_name: str) -> list[ComponentData]:
        with self._lock.read_locked():
            page = self._page_unlocked(page_name)
            return list(page.components) if page is not None else []

    def get_current_page_components(self) -> list[ComponentData]:
        with self._lock.read_locked():
            page = self._page_unlocked(self._current_page_name)
            return list(page.components) if page is not None else []

    def clear_page_components(self, page_name: str) -> bool:
        with self._lock.write_locked():
            self._ensure_project()
            return self._clear_unlocked(page_name)

    def clear_current_page_components(self) -> bool:
        with self._lock.write_locked():
            self._ensure_project()
            return self._clear_unlocked(self._current_page_name)

    # State, integrity and adaptation

    def has_unsaved_changes(self) -> bool:
        with self._lock.read_locked():
            return self._dirty

    def mark_as_saved(self) -> None:
        with self._lock.write_locked():
            self._dirty = False
            self._last_saved_time = now_millis()
            logger.debug("project_marked_saved")

    def mark_as_modified(self) -> None:
        with self._lock.write_locked():
            self._dirty = True
            logger.debug("project_marked_modified")

    def get_project_statistics(self) -> dict[str, Any]:
        with self._lock.read_locked():
            project = self._project
            if project is None:
                return {}

            types: Counter[str] = Counter()
            for page in project.page_contents.values():
                if page is not None:
                    types.update(page.component_statistics())

            return {
                "name": project.name,
                "version": project.version,
                "pages": project.page_count(),
                "components": project.total_component_count(),
                "component_types": dict(types),
                "current_page": self._current_page_name,
                "unsaved_changes": self._dirty,
                "created_time": project.created_time,
                "last_modified_time": project.last_modified_time,
                "last_saved_time": self._last_saved_time,
            }

    def validate_project_integrity(self) -> bool:
        with self._lock.read_locked():
            return self._project is not None and self._project.validate_integrity()

    def repair_project_integrity(self) -> RepairReport:
        with self._lock.write_locked():
            if self._project is None:
                return RepairReport()

            report = self._project.repair_integrity()
            if report:
                self._sync_current_page()
                self._mark_dirty()
            logger.info("project_integrity_repaired", changes=len(report))
            return report

    def adapt_project_to_resolution(self, width: int, height: int) -> int:
        with self._lock.write_locked():
            if self._project is None or width <= 0 or height <= 0:
                logger.warning("resolution_adaptation_skipped", width=width, height=height)
                return 0

            adapted = 0
            for page in self._project.page_contents.values():
                if page is None:
                    continue
                for component in page.components:
                    if component is not None:
                        component.update_relative_position(width, height)
                        adapted += 1

            self._mark_dirty()
            logger.info("project_adapted_to_resolution", width=width, height=height, components=adapted)
            return adapted

    def get_last_saved_time(self) -> int:
        with self._lock.read_locked():
            return self._last_saved_time

    def get_project_created_time(self) -> int:
        with self._lock.read_locked():
            return self._project.created_time if self._project is not None else 0

    def get_project_last_modified_time(self) -> int:
        with self._lock.read_locked():
            return self._project.last_modified_time if self._project is not None else 0

    # Unlocked helpers (caller holds the lock)

    def _create_new_unlocked(self) -> ProjectData:
        project = ProjectData(
            name=self.settings.default_project_name,
            description=self.settings.default_project_description,
            edit_resolution=self.settings.default_edit_resolution,
        )
        project.add_page(self.settings.default_page_name)
        self._install(project, dirty=True)
        logger.info("project_created", name=project.name, page=self.settings.default_page_name)
        return project

    def _ensure_project(self) -> ProjectData:
        if self._project is None:
            return self._create_new_unlocked()
        return self._project

    def _require_project(self) -> ProjectData:
        if self._project is None:
            raise ProjectError("No current project")
        return self._project

    def _install(self, project: ProjectData, dirty: bool) -> None:
        self._project = project
        self._current_page_name = project.current_page
        self._sync_current_page()
        self._dirty = dirty

    def _sync_current_page(self) -> None:
        project = self._project
        if project is None:
            self._current_page_name = None
        elif not project.has_page(self._current_page_name):
            self._current_page_name = project.current_page or (project.pages[0] if project.pages else None)

    def _ensure_valid(self, project: ProjectData) -> None:
        if not project.validate_integrity():
            report = project.repair_integrity()
            logger.warning("project_repaired", name=project.name, changes=len(report))

    def _save_unlocked(self, project: ProjectData) -> None:
        with LogContext(project=project.name):
            self._ensure_valid(project)
            project.touch()
            self.repository.save(project)
            if project is self._project:
                self._dirty = False
                self._last_saved_time = now_millis()
                self._sync_current_page()

    def _page_unlocked(self, page_name: str | None) -> PageData | None:
        if self._project is None:
            return None
        return self._project.get_page(page_name)

    def _add_component_unlocked(self, page_name: str | None, component: ComponentData) -> bool:
        self._ensure_project()
        page = self._page_unlocked(page_name)
        if page is None:
            logger.warning("component_page_not_found", page=page_name)
            return False

        page.add_component(component)
        self._mark_dirty()
        logger.info(
            "component_added",
            page=page_name,
            component_id=component.component_id,
            function_type=component.function_type,
        )
        return True

    def _remove_component_unlocked(self, page_name: str | None, component: ComponentData) -> bool:
        self._ensure_project()
        page = self._page_unlocked(page_name)
        if page is None or component is None or not page.remove_component(component):
            return False

        self._mark_dirty()
        logger.info("component_removed", page=page_name, component_id=component.component_id)
        return True

    def _clear_unlocked(self, page_name: str | None) -> bool:
        page = self._page_unlocked(page_name)
        if page is None:
            return False

        page.clear_components()
        self._mark_dirty()
        logger.info("page_components_cleared", page=page_name)
        return True

    def _mark_dirty(self) -> None:
        self._dirty = True
