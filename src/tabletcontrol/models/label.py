"""Display attributes of a placed component (text, font, colour, icon)."""

import math
import re

from pydantic import Field

from .base import DocumentModel

DEFAULT_FONT = "System"
HEX_COLOR = re.compile(r"#[0-9A-Fa-f]{6}")


def map_font_family(font_name: str | None) -> str:
    """Map an authoring font name to a portable font family."""
    if font_name is None:
        return DEFAULT_FONT

    lower = font_name.lower()
    if "dialog" in lower or "sans" in lower:
        return DEFAULT_FONT
    if "serif" in lower:
        return "Serif"
    if "mono" in lower:
        return "Monospaced"
    return font_name


class LabelData(DocumentModel):
    """Label text and styling. Alignment codes follow the authoring toolkit's constants."""

    text: str | None = None
    font_name: str | None = DEFAULT_FONT
    font_family: str | None = DEFAULT_FONT
    font_size: int = 12
    font_style: int = 0  # plain
    original_font_size: int = 0
    color_rgb: int = Field(default=0x000000, alias="colorRGB")
    icon_path: str | None = None

    horizontal_alignment: int = 0  # left
    vertical_alignment: int = 0  # top
    horizontal_text_position: int = 11  # trailing
    vertical_text_position: int = 0  # center

    auto_scale_font: bool = True
    font_scale_factor: float = 1.0

    def set_font_name(self, font_name: str | None) -> None:
        """Set the font and derive its portable family."""
        self.font_name = font_name
        self.font_family = map_font_family(font_name)

    def adapted_font_size(self) -> int:
        if self.auto_scale_font:
            return int(math.floor(self.font_size * self.font_scale_factor + 0.5))
        return self.font_size

    def color_hex(self) -> str:
        return "#%06X" % (self.color_rgb & 0xFFFFFF)

    def set_color_from_hex(self, hex_color: str | None) -> None:
        """Set colour from ``#RRGGBB``; malformed values leave the colour unchanged."""
        if hex_color is None or not HEX_COLOR.fullmatch(hex_color):
            return
        self.color_rgb = int(hex_color[1:], 16)

    def rgb_components(self) -> tuple[int, int, int]:
        return (
            (self.color_rgb >> 16) & 0xFF,
            (self.color_rgb >> 8) & 0xFF,
            self.color_rgb & 0xFF,
        )

    def set_color_from_rgb(self, red: int, green: int, blue: int) -> None:
        red, green, blue = (max(0, min(255, c)) for c in (red, green, blue))
        self.color_rgb = (red << 16) | (green << 8) | blue

    def has_icon(self) -> bool:
        return bool(self.icon_path and self.icon_path.strip())

    def has_text(self) -> bool:
        return bool(self.text and self.text.strip())

    def content_summary(self) -> str:
        parts = []
        if self.has_text():
            parts.append(f'text: "{self.text}"')
        if self.has_icon():
            parts.append(f"icon: {self.icon_path}")
        return ", ".join(parts) if parts else "no content"

    def copy(self) -> "LabelData":
        return self.model_copy()


__all__ = ["LabelData", "map_font_family"]
