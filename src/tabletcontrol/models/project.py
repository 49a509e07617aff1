"""Project aggregate: ordered pages, page contents and the current page pointer."""

from typing import Any

from pydantic import Field, ValidationInfo, field_validator

from ..core.config import RESOLUTION_PATTERN
from ..core.errors import require_text
from ..core.id import now_millis
from .base import DocumentModel, RepairReport
from .page import PageData, format_millis


class ProjectData(DocumentModel):
    """
    Editable project.

    ``pages`` defines page order and ``page_contents`` holds the page data;
    both must always contain exactly the same names. ``current_page`` is
    None or one of those names.
    """

    name: str | None = "New Project"
    description: str | None = ""
    version: str | None = "1.0.0"
    edit_resolution: str | None = "1366x768"
    created_time: int = Field(default_factory=now_millis)
    last_modified_time: int = 0

    pages: list[str | None] = Field(default_factory=list)
    current_page: str | None = None
    page_contents: dict[str, PageData | None] = Field(default_factory=dict)

    @field_validator("pages", "page_contents", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            return [] if info.field_name == "pages" else {}
        return v

    def model_post_init(self, __context: Any) -> None:
        if not self.last_modified_time:
            self.last_modified_time = self.created_time

    def touch(self) -> None:
        self.last_modified_time = now_millis()

    # Metadata

    def set_name(self, name: str | None) -> None:
        self.name = name
        self.touch()

    def set_description(self, description: str | None) -> None:
        self.description = description
        self.touch()

    def set_edit_resolution(self, resolution: str | None) -> None:
        self.edit_resolution = resolution
        self.touch()

    def set_current_page(self, page_name: str | None) -> bool:
        """Point at a listed page (or None). Unknown names are refused."""
        if page_name is not None and page_name not in self.page_contents:
            return False
        self.current_page = page_name
        self.touch()
        return True

    def edit_resolution_size(self) -> tuple[int, int] | None:
        """Parse ``edit_resolution`` ("1366x768") into (width, height)."""
        match = RESOLUTION_PATTERN.match(self.edit_resolution or "")
        if match is None:
            return None
        return int(match.group(1)), int(match.group(2))

    # Pages

    def add_page(self, page: str | PageData) -> bool:
        """
        Add a page by name or as ready-made data.

        A name that already exists is never listed twice: adding a plain name
        is then a no-op, and adding PageData replaces the stored data.

        Returns:
            True if a new page name was added

        Raises:
            InputError: If the page name is None or blank
        """
        if isinstance(page, PageData):
            name = require_text(page.name, "page name")
            page.name = name
            data = page
        else:
            name = require_text(page, "page name")
            data = None

        if name in self.page_contents and name in self.pages:
            if data is None:
                return False
            self.page_contents[name] = data
            self.touch()
            return False

        if name not in self.pages:
            self.pages.append(name)
        self.page_contents[name] = data if data is not None else PageData(name=name)
        if self.current_page is None:
            self.current_page = name
        self.touch()
        return True

    def remove_page(self, page_name: str) -> bool:
        """Remove a page; the current page moves to the first remaining page."""
        if page_name not in self.pages and page_name not in self.page_contents:
            return False

        self.pages = [p for p in self.pages if p != page_name]
        self.page_contents.pop(page_name, None)
        if self.current_page == page_name:
            self.current_page = self.pages[0] if self.pages else None
        self.touch()
        return True

    def rename_page(self, old_name: str, new_name: str) -> bool:
        """Rename in place, keeping the page's position. Refused if new_name is taken."""
        if old_name not in self.page_contents or not new_name or not new_name.strip():
            return False
        if new_name in self.page_contents or new_name in self.pages:
            return False

        self.pages = [new_name if p == old_name else p for p in self.pages]
        page = self.page_contents.pop(old_name)
        if page is not None:
            page.set_name(new_name)
        self.page_contents[new_name] = page
        if self.current_page == old_name:
            self.current_page = new_name
        self.touch()
        return True

    def get_page(self, page_name: str | None) -> PageData | None:
        if page_name is None:
            return None
        return self.page_contents.get(page_name)

    def has_page(self, page_name: str | None) -> bool:
        return page_name is not None and page_name in self.page_contents

    def page_count(self) -> int:
        return len(self.pages)

    def is_empty(self) -> bool:
        return not self.pages

    def current_page_data(self) -> PageData | None:
        return self.get_page(self.current_page)

    def total_component_count(self) -> int:
        return sum(page.component_count() for page in self.page_contents.values() if page is not None)

    def project_summary(self) -> str:
        return (
            f"project: {self.name}, pages: {self.page_count()}, "
            f"components: {self.total_component_count()}, version: {self.version}, "
            f"last modified: {format_millis(self.last_modified_time)}"
        )

    # Integrity

    def validate_integrity(self) -> bool:
        """Read-only check of the project invariants, including every page."""
        if len(set(self.pages)) != len(self.pages) or None in self.pages:
            return False
        if set(self.pages) != set(self.page_contents):
            return False
        if self.current_page is not None and self.current_page not in self.pages:
            return False

        for key, page in self.page_contents.items():
            if page is None or page.name != key or not page.validate_integrity():
                return False
        return True

    def repair_integrity(self) -> RepairReport:
        """
        Restore project invariants in place.

        List entries without page data and page data without a list entry are
        removed rather than fabricated. Page names are realigned with their
        keys, the current page is reset if dangling, then every page is
        repaired.

        Returns:
            Report of the changes made
        """
        report = RepairReport()

        listed: list[str] = []
        for name in self.pages:
            if name is None or not name.strip():
                report.add(f"dropped blank page name {name!r}")
            elif name in listed:
                report.add(f"dropped duplicate page name {name!r}")
            else:
                listed.append(name)

        for name in list(self.page_contents):
            if self.page_contents[name] is None:
                report.add(f"dropped page {name!r} without data")
                del self.page_contents[name]
            elif name not in listed:
                report.add(f"dropped unlisted page data {name!r}")
                del self.page_contents[name]

        for name in list(listed):
            if name not in self.page_contents:
                report.add(f"dropped page name {name!r} without data")
                listed.remove(name)
        self.pages = listed

        for name, page in self.page_contents.items():
            if page.name != name:
                report.add(f"page name {page.name!r} -> {name!r}")
                page.name = name

        if self.current_page is not None and self.current_page not in self.page_contents:
            replacement = self.pages[0] if self.pages else None
            report.add(f"current page {self.current_page!r} -> {replacement!r}")
            self.current_page = replacement

        for name in self.pages:
            report.extend(self.page_contents[name].repair_integrity(), prefix=f"page {name!r}: ")

        if report:
            self.touch()
        return report

    def repair(self) -> RepairReport:
        return self.repair_integrity()

    # Document mapping

    def to_document(self) -> dict[str, Any]:
        """Document form with the persisted camelCase field names."""
        return self.model_dump(by_alias=True, mode="json")

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "ProjectData":
        return cls.model_validate(document)

    def __str__(self) -> str:
        return (
            f"ProjectData{{name={self.name!r}, version={self.version!r}, "
            f"pages={self.page_count()}, currentPage={self.current_page!r}, "
            f"editResolution={self.edit_resolution!r}}}"
        )


__all__ = ["ProjectData"]
