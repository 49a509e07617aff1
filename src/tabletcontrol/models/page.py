"""A named page: an ordered collection of components."""

from collections import Counter
from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from ..core.id import now_millis
from .base import DocumentModel, RepairReport
from .component import ComponentData

UNTITLED_PAGE = "Untitled Page"

# Offset applied to duplicated components so the copy does not hide the original.
DUPLICATE_OFFSET = 10


def format_millis(millis: int) -> str:
    return datetime.fromtimestamp(millis / 1000.0).isoformat(sep=" ", timespec="seconds")


class PageData(DocumentModel):
    """
    Page of components.

    Component order is significant (z-order and tab order). Components are
    matched by identity, never by value: two components with equal fields
    are still different components.
    """

    name: str | None = None
    components: list[ComponentData | None] = Field(default_factory=list)
    created_time: int = Field(default_factory=now_millis)
    last_modified_time: int = 0
    background_image: str | None = None
    background_color: str | None = None

    @field_validator("components", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    def model_post_init(self, __context: Any) -> None:
        if not self.last_modified_time:
            self.last_modified_time = self.created_time

    def touch(self) -> None:
        self.last_modified_time = now_millis()

    # Attributes

    def set_name(self, name: str | None) -> None:
        self.name = name
        self.touch()

    def set_background_image(self, path: str | None) -> None:
        self.background_image = path
        self.touch()

    def set_background_color(self, color: str | None) -> None:
        self.background_color = color
        self.touch()

    def set_components(self, components: list[ComponentData] | None) -> None:
        self.components = list(components) if components is not None else []
        self.touch()

    # Component operations

    def add_component(self, component: ComponentData | None) -> bool:
        if component is None:
            return False
        self.components.append(component)
        self.touch()
        return True

    def remove_component(self, component: ComponentData) -> bool:
        index = self.find_component_index(component)
        if index < 0:
            return False
        del self.components[index]
        self.touch()
        return True

    def remove_component_at(self, index: int) -> ComponentData | None:
        if not 0 <= index < len(self.components):
            return None
        removed = self.components.pop(index)
        self.touch()
        return removed

    def clear_components(self) -> None:
        self.components.clear()
        self.touch()

    def component_count(self) -> int:
        return len(self.components)

    def is_empty(self) -> bool:
        return not self.components

    def get_component(self, index: int) -> ComponentData | None:
        if 0 <= index < len(self.components):
            return self.components[index]
        return None

    def find_component_index(self, component: ComponentData | None) -> int:
        """Index of this exact component object, or -1."""
        for index, candidate in enumerate(self.components):
            if candidate is component:
                return index
        return -1

    def find_component_by_id(self, component_id: str) -> ComponentData | None:
        for component in self.components:
            if component is not None and component.component_id == component_id:
                return component
        return None

    def replace_component(self, target: int | ComponentData, new_component: ComponentData | None) -> bool:
        """Replace by index or by component identity. Refuses a None replacement."""
        index = target if isinstance(target, int) else self.find_component_index(target)
        if new_component is None or not 0 <= index < len(self.components):
            return False
        self.components[index] = new_component
        self.touch()
        return True

    def move_component(self, from_index: int, to_index: int) -> bool:
        size = len(self.components)
        if not (0 <= from_index < size and 0 <= to_index < size) or from_index == to_index:
            return False
        component = self.components.pop(from_index)
        self.components.insert(to_index, component)
        self.touch()
        return True

    def duplicate_component(self, index: int) -> ComponentData | None:
        """Append a copy of the component at index, offset by a few pixels, under a new id."""
        original = self.get_component(index)
        if original is None:
            return None

        duplicate = original.copy()
        duplicate.x += DUPLICATE_OFFSET
        duplicate.y += DUPLICATE_OFFSET
        self.add_component(duplicate)
        return duplicate

    def component_statistics(self) -> dict[str, int]:
        """Number of components per function type."""
        return dict(
            Counter(c.function_type for c in self.components if c is not None and c.function_type is not None)
        )

    def page_summary(self) -> str:
        return (
            f"page: {self.name}, components: {self.component_count()}, "
            f"last modified: {format_millis(self.last_modified_time)}"
        )

    # Integrity

    def validate_integrity(self) -> bool:
        """Read-only check of the page invariants."""
        if not self.name or not self.name.strip():
            return False
        return all(c is not None and c.is_valid() for c in self.components)

    def repair_integrity(self) -> RepairReport:
        """
        Restore page invariants in place.

        Components that are missing or have no function type cannot be
        recovered meaningfully and are dropped; other invalid components are
        repaired.

        Returns:
            Report of the changes made
        """
        report = RepairReport()

        if not self.name or not self.name.strip():
            report.add(f"page name {self.name!r} -> {UNTITLED_PAGE!r}")
            self.name = UNTITLED_PAGE

        kept: list[ComponentData | None] = []
        for index, component in enumerate(self.components):
            if component is None or not component.has_function_type():
                report.add(f"dropped component #{index} without function type")
                continue
            if not component.is_valid():
                report.extend(component.repair(), prefix=f"component {component.component_id}: ")
            kept.append(component)

        if report:
            self.components = kept
            self.touch()
        return report

    def repair(self) -> RepairReport:
        return self.repair_integrity()

    def __str__(self) -> str:
        return (
            f"PageData{{name={self.name!r}, componentCount={self.component_count()}, "
            f"backgroundImage={self.background_image!r}, backgroundColor={self.background_color!r}}}"
        )


__all__ = ["PageData", "UNTITLED_PAGE"]
