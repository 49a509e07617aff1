"""
Project Service Interface
The complete surface presentation layers may call
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from ..models import ComponentData, PageData, ProjectData, RepairReport


class ProjectService(ABC):
    """
    Owner of the single in-memory current project.

    Policy refusals (deleting the last page, renaming onto an existing
    name, unknown pages) are reported as False/None. Storage failures
    propagate as ProjectError subclasses.
    """

    # Project lifecycle

    @abstractmethod
    def create_new_project(self) -> ProjectData:
        """Replace the current project with a fresh one holding the default page."""

    @abstractmethod
    def load_project(self) -> ProjectData:
        """Load the stored project, or create a new one when nothing is stored."""

    @abstractmethod
    def save_project(self, project: ProjectData) -> None:
        """Repair if needed and persist; clears the dirty flag only for the held project."""

    @abstractmethod
    def save_current_project(self) -> None:
        pass

    @abstractmethod
    def backup_project(self, backup_name: str) -> str:
        """Snapshot the current project. Returns the backup file name."""

    @abstractmethod
    def restore_project(self, backup_name: str) -> ProjectData:
        """Replace the current project with the first backup matching the name prefix."""

    @abstractmethod
    def import_project(self, path: Path | str) -> ProjectData:
        pass

    @abstractmethod
    def export_project(self, path: Path | str) -> Path:
        pass

    @abstractmethod
    def list_backups(self) -> list[str]:
        pass

    @abstractmethod
    def delete_backup(self, file_name: str) -> bool:
        pass

    @abstractmethod
    def get_current_project(self) -> ProjectData | None:
        pass

    @abstractmethod
    def set_current_project(self, project: ProjectData) -> None:
        pass

    # Pages

    @abstractmethod
    def set_current_page(self, page_name: str) -> bool:
        pass

    @abstractmethod
    def get_current_page_name(self) -> str | None:
        pass

    @abstractmethod
    def get_current_page(self) -> PageData | None:
        pass

    @abstractmethod
    def get_page(self, page_name: str) -> PageData | None:
        pass

    @abstractmethod
    def get_all_page_names(self) -> list[str]:
        pass

    @abstractmethod
    def create_page(self, page_name: str) -> PageData | None:
        """Add a page. Returns None if the name is already taken."""

    @abstractmethod
    def delete_page(self, page_name: str) -> bool:
        """Remove a page. The last remaining page is never deleted."""

    @abstractmethod
    def rename_page(self, old_name: str, new_name: str) -> bool:
        pass

    # Components

    @abstractmethod
    def add_component(self, page_name: str, component: ComponentData) -> bool:
        pass

    @abstractmethod
    def add_component_to_current_page(self, component: ComponentData) -> bool:
        pass

    @abstractmethod
    def remove_component(self, page_name: str, component: ComponentData) -> bool:
        pass

    @abstractmethod
    def remove_component_from_current_page(self, component: ComponentData) -> bool:
        pass

    @abstractmethod
    def update_component(self, page_name: str, old: ComponentData, new: ComponentData) -> bool:
        pass

    @abstractmethod
    def get_page_components(self, page_name: str) -> list[ComponentData]:
        pass

    @abstractmethod
    def get_current_page_components(self) -> list[ComponentData]:
        pass

    @abstractmethod
    def clear_page_components(self, page_name: str) -> bool:
        pass

    @abstractmethod
    def clear_current_page_components(self) -> bool:
        pass

    # State, integrity and adaptation

    @abstractmethod
    def has_unsaved_changes(self) -> bool:
        pass

    @abstractmethod
    def mark_as_saved(self) -> None:
        pass

    @abstractmethod
    def mark_as_modified(self) -> None:
        pass

    @abstractmethod
    def get_project_statistics(self) -> dict[str, Any]:
        pass

    @abstractmethod
    def validate_project_integrity(self) -> bool:
        pass

    @abstractmethod
    def repair_project_integrity(self) -> RepairReport:
        pass

    @abstractmethod
    def adapt_project_to_resolution(self, width: int, height: int) -> int:
        """Make every component resolution-independent for a container size. Returns the count."""

    @abstractmethod
    def get_last_saved_time(self) -> int:
        pass

    @abstractmethod
    def get_project_created_time(self) -> int:
        pass

    @abstractmethod
    def get_project_last_modified_time(self) -> int:
        pass
