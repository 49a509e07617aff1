"""A single placed UI element on a page."""

from enum import Enum
from typing import Union

from pydantic import Field

from ..core.id import new_component_id
from .base import DocumentModel, RepairReport
from .label import LabelData
from .position import AbsolutePosition, RelativePosition

UNKNOWN_FUNCTION_TYPE = "Unknown Component"


class PositionMode(str, Enum):
    """Which coordinate representation is authoritative for a component."""

    ABSOLUTE = "ABSOLUTE"
    RELATIVE = "RELATIVE"


Placement = Union[AbsolutePosition, RelativePosition]


class ComponentData(DocumentModel):
    """
    One placed component.

    The absolute pixel fields and the optional RelativePosition coexist;
    position_mode says which one is authoritative. In RELATIVE mode the
    absolute fields hold the last materialised rectangle (see
    update_absolute_position), in ABSOLUTE mode the relative position,
    if any, is only a cached conversion.
    """

    position_mode: PositionMode = PositionMode.ABSOLUTE

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0
    original_width: int = 0
    original_height: int = 0

    relative_position: RelativePosition | None = None

    function_type: str | None = None
    label_data: LabelData | None = Field(default_factory=LabelData)
    component_id: str | None = Field(default_factory=new_component_id)

    visible: bool = True
    enabled: bool = True
    tooltip: str | None = None
    css_class: str | None = None

    @classmethod
    def absolute(
        cls,
        x: int,
        y: int,
        width: int,
        height: int,
        original_width: int,
        original_height: int,
        function_type: str | None,
        label_data: LabelData | None = None,
    ) -> "ComponentData":
        """Create a component placed in absolute pixels."""
        return cls(
            position_mode=PositionMode.ABSOLUTE,
            x=x,
            y=y,
            width=width,
            height=height,
            original_width=original_width,
            original_height=original_height,
            function_type=function_type,
            label_data=label_data if label_data is not None else LabelData(),
        )

    @classmethod
    def relative(
        cls,
        relative_position: RelativePosition,
        function_type: str | None,
        label_data: LabelData | None = None,
    ) -> "ComponentData":
        """Create a resolution-independent component."""
        return cls(
            position_mode=PositionMode.RELATIVE,
            relative_position=relative_position,
            function_type=function_type,
            label_data=label_data if label_data is not None else LabelData(),
        )

    def set_relative_position(self, relative_position: RelativePosition | None) -> None:
        """Store a relative position; always switches the component to RELATIVE mode."""
        self.relative_position = relative_position
        self.position_mode = PositionMode.RELATIVE

    @property
    def is_relative(self) -> bool:
        return self.position_mode == PositionMode.RELATIVE and self.relative_position is not None

    def active_placement(self) -> Placement:
        """The authoritative placement variant."""
        if self.is_relative:
            return self.relative_position
        return AbsolutePosition(self.x, self.y, self.width, self.height)

    def get_absolute_position(self, container_width: int, container_height: int) -> AbsolutePosition:
        """
        Pixel rectangle for a container size.

        RELATIVE mode converts through the relative position; ABSOLUTE mode
        returns the stored pixel fields unscaled.
        """
        placement = self.active_placement()
        if isinstance(placement, RelativePosition):
            return placement.to_absolute(container_width, container_height)
        return placement

    def update_relative_position(self, container_width: int, container_height: int) -> None:
        """Recompute the relative position from the absolute fields and switch to RELATIVE."""
        if container_width <= 0 or container_height <= 0:
            return

        relative = RelativePosition.from_absolute(
            self.x, self.y, self.width, self.height, container_width, container_height
        )
        if self.relative_position is not None:
            relative.min_width = self.relative_position.min_width
            relative.min_height = self.relative_position.min_height
            relative.max_width = self.relative_position.max_width
            relative.max_height = self.relative_position.max_height

        self.relative_position = relative
        self.position_mode = PositionMode.RELATIVE

    def update_absolute_position(self, container_width: int, container_height: int) -> None:
        """Overwrite the absolute fields from the relative position. Mode is unchanged."""
        if self.relative_position is None or container_width <= 0 or container_height <= 0:
            return

        absolute = self.relative_position.to_absolute(container_width, container_height)
        self.x, self.y = absolute.x, absolute.y
        self.width, self.height = absolute.width, absolute.height

    def has_function_type(self) -> bool:
        return bool(self.function_type and self.function_type.strip())

    def is_valid(self) -> bool:
        if not self.has_function_type():
            return False

        if self.position_mode == PositionMode.RELATIVE:
            return self.relative_position is not None and self.relative_position.is_valid()
        return self.width > 0 and self.height > 0

    def repair(self) -> RepairReport:
        """Restore the component invariants in place, manufacturing defaults where missing."""
        report = RepairReport()

        if not self.has_function_type():
            report.add(f"function type {self.function_type!r} -> {UNKNOWN_FUNCTION_TYPE!r}")
            self.function_type = UNKNOWN_FUNCTION_TYPE

        if not self.component_id or not self.component_id.strip():
            self.component_id = new_component_id()
            report.add(f"generated component id {self.component_id}")

        if self.position_mode == PositionMode.RELATIVE and self.relative_position is None:
            self.position_mode = PositionMode.ABSOLUTE
            report.add("relative mode without relative position -> absolute mode")

        if self.position_mode == PositionMode.RELATIVE:
            report.extend(self.relative_position.repair())
        else:
            fixed = (max(0, self.x), max(0, self.y), max(1, self.width), max(1, self.height))
            current = (self.x, self.y, self.width, self.height)
            if fixed != current:
                self.x, self.y, self.width, self.height = fixed
                report.add("absolute rectangle %s -> %s" % (current, fixed))

        if self.label_data is None:
            self.label_data = LabelData()
            report.add("created default label data")

        return report

    def component_summary(self) -> str:
        parts = [f"component: {self.function_type}"]
        if self.label_data is not None and self.label_data.has_text():
            parts.append(f'text: "{self.label_data.text}"')
        if self.is_relative:
            parts.append(f"position: {self.relative_position}")
        else:
            parts.append(f"position: ({self.x},{self.y}) size: {self.width}x{self.height}")
        return ", ".join(parts)

    def copy(self) -> "ComponentData":
        """Deep copy under a freshly generated component id."""
        clone = self.model_copy(deep=True)
        clone.component_id = new_component_id()
        return clone

    def __str__(self) -> str:
        placement = (
            f"relPos={self.relative_position}"
            if self.is_relative
            else f"absPos=({self.x},{self.y},{self.width},{self.height})"
        )
        return (
            f"ComponentData{{id={self.component_id!r}, type={self.function_type!r}, "
            f"mode={self.position_mode.value}, visible={self.visible}, "
            f"enabled={self.enabled}, {placement}}}"
        )


__all__ = ["ComponentData", "PositionMode", "Placement", "UNKNOWN_FUNCTION_TYPE"]
