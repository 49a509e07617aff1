"""Resolution-independent placement.

A RelativePosition stores placement and size as fractions of the container,
so a component authored at 1366x768 lands in the same spot at 800x600.
Pixel min/max bounds apply only when converting back to absolute pixels.
"""

from dataclasses import dataclass
from typing import Any

from .base import DocumentModel, RepairReport

INT_MAX = 2**31 - 1

MIN_FRACTION = 0.001  # smallest stored width/height (0.1% of the container)

# Tolerance for the right/bottom edge check; x + w is computed in floating point.
EDGE_EPSILON = 1e-9


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class AbsolutePosition:
    """Pixel rectangle inside a container."""

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def to_dict(self) -> dict[str, int]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    def __str__(self) -> str:
        return f"AbsolutePosition{{x={self.x}, y={self.y}, w={self.width}, h={self.height}}}"


class RelativePosition(DocumentModel):
    """
    Placement as container fractions with pixel size bounds.

    Invariant: every fraction in [0, 1], width/height > 0, and the rectangle
    does not cross the right or bottom edge. The invariant may be broken
    transiently (direct assignment, loaded documents); repair() restores it
    by shifting the origin, never by shrinking the size.
    """

    relative_x: float = 0.0
    relative_y: float = 0.0
    relative_width: float = 0.0
    relative_height: float = 0.0

    min_width: int = 50
    min_height: int = 20
    max_width: int = INT_MAX
    max_height: int = INT_MAX

    @classmethod
    def of(cls, x: float, y: float, width: float, height: float, **bounds: Any) -> "RelativePosition":
        """Build from fractions, clamping each into [0, 1]."""
        return cls(
            relative_x=_clamp(x, 0.0, 1.0),
            relative_y=_clamp(y, 0.0, 1.0),
            relative_width=_clamp(width, 0.0, 1.0),
            relative_height=_clamp(height, 0.0, 1.0),
            **bounds,
        )

    @classmethod
    def from_absolute(
        cls,
        x: int,
        y: int,
        width: int,
        height: int,
        container_width: int,
        container_height: int,
    ) -> "RelativePosition":
        """
        Convert a pixel rectangle to container fractions.

        Out-of-bounds rectangles are clamped into the container first, so the
        result is always representable.

        Args:
            x, y, width, height: Rectangle in pixels
            container_width, container_height: Container size in pixels

        Returns:
            RelativePosition with default pixel bounds

        Raises:
            ValueError: If either container dimension is <= 0
        """
        if container_width <= 0 or container_height <= 0:
            raise ValueError(
                f"Container size must be positive: {container_width}x{container_height}"
            )

        x = max(0, min(x, container_width))
        y = max(0, min(y, container_height))
        width = max(1, min(width, container_width - x))
        height = max(1, min(height, container_height - y))

        rel_x, rel_y, rel_w, rel_h = _fit_fractions(
            x / container_width,
            y / container_height,
            width / container_width,
            height / container_height,
        )
        return cls(relative_x=rel_x, relative_y=rel_y, relative_width=rel_w, relative_height=rel_h)

    def to_absolute(self, container_width: int, container_height: int) -> AbsolutePosition:
        """
        Convert to a pixel rectangle for a container.

        Size is clamped into [min, max] first, then the origin is pulled back
        inside the container, then the size is shrunk if it still overflows.
        The result never extends past the container's right or bottom edge.
        """
        x = int(self.relative_x * container_width)
        y = int(self.relative_y * container_height)
        width = int(self.relative_width * container_width)
        height = int(self.relative_height * container_height)

        width = max(self.min_width, min(self.max_width, width))
        height = max(self.min_height, min(self.max_height, height))

        x = max(0, min(x, container_width - width))
        y = max(0, min(y, container_height - height))

        width = min(width, container_width - x)
        height = min(height, container_height - y)

        return AbsolutePosition(x, y, width, height)

    def is_valid(self) -> bool:
        return (
            0.0 <= self.relative_x <= 1.0
            and 0.0 <= self.relative_y <= 1.0
            and 0.0 < self.relative_width <= 1.0
            and 0.0 < self.relative_height <= 1.0
            and self.relative_x + self.relative_width <= 1.0 + EDGE_EPSILON
            and self.relative_y + self.relative_height <= 1.0 + EDGE_EPSILON
        )

    def repair(self) -> RepairReport:
        """Clamp fractions into range and shift the origin back inside. Bounds are untouched."""
        report = RepairReport()
        before = (self.relative_x, self.relative_y, self.relative_width, self.relative_height)

        fitted = _fit_fractions(*before)
        if fitted != before:
            self.relative_x, self.relative_y, self.relative_width, self.relative_height = fitted
            report.add(
                "relative position (%.4f, %.4f, %.4f, %.4f) -> (%.4f, %.4f, %.4f, %.4f)"
                % (before + fitted)
            )
        return report

    def copy(self) -> "RelativePosition":
        return self.model_copy()

    def __str__(self) -> str:
        return "RelativePosition{pos=(%.3f%%, %.3f%%), size=(%.3f%%, %.3f%%)}" % (
            self.relative_x * 100,
            self.relative_y * 100,
            self.relative_width * 100,
            self.relative_height * 100,
        )


def _fit_fractions(x: float, y: float, width: float, height: float) -> tuple[float, float, float, float]:
    """Clamp fractions (size floor MIN_FRACTION) and shift the origin so the far edges stay <= 1."""
    x = _clamp(x, 0.0, 1.0)
    y = _clamp(y, 0.0, 1.0)
    width = _clamp(width, MIN_FRACTION, 1.0)
    height = _clamp(height, MIN_FRACTION, 1.0)

    if x + width > 1.0 + EDGE_EPSILON:
        x = max(0.0, 1.0 - width)
    if y + height > 1.0 + EDGE_EPSILON:
        y = max(0.0, 1.0 - height)
    return x, y, width, height


__all__ = ["AbsolutePosition", "RelativePosition", "INT_MAX", "MIN_FRACTION"]
