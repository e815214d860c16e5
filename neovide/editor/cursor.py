"""The editor cursor and its modes."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from .grid import GridCell, default_cell
from .style import Color4f, Colors, Style


class CursorShape(Enum):
    BLOCK = "block"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @classmethod
    def from_type_name(cls, name: str) -> CursorShape | None:
        """The shape named by Neovim, or None for an unknown name."""
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass
class CursorMode:
    """Cursor settings for one editor mode; None leaves a setting unspecified."""

    shape: CursorShape | None = None
    style_id: int | None = None
    cell_percentage: float | None = None
    blinkwait: int | None = None
    blinkon: int | None = None
    blinkoff: int | None = None


def _required(color: Color4f | None, name: str) -> Color4f:
    if color is None:
        raise ValueError(f"default {name} colour is not set")
    return color


@dataclass
class Cursor:
    grid_position: tuple[int, int] = (0, 0)
    parent_window_id: int = 0
    shape: CursorShape = CursorShape.BLOCK
    cell_percentage: float | None = None
    blinkwait: int | None = None
    blinkon: int | None = None
    blinkoff: int | None = None
    style: Style | None = None
    enabled: bool = True
    double_width: bool = False
    grid_cell: GridCell = field(default_factory=default_cell)

    def foreground(self, default_colors: Colors) -> Color4f:
        """The cursor's text colour: its style's foreground, else the default background."""
        if self.style is not None and self.style.colors.foreground is not None:
            return self.style.colors.foreground
        return _required(default_colors.background, "background")

    def background(self, default_colors: Colors) -> Color4f:
        """The cursor's fill colour: its style's background, else the default foreground."""
        if self.style is not None and self.style.colors.background is not None:
            return self.style.colors.background
        return _required(default_colors.foreground, "foreground")

    def alpha(self) -> int:
        """Opacity 0..255 derived from the style's blend."""
        if self.style is None:
            return 255
        value = int(255 * ((100 - self.style.blend) / 100.0))
        return max(0, min(255, value))

    def change_mode(self, cursor_mode: CursorMode, styles: Mapping[int, Style]) -> None:
        if cursor_mode.shape is not None:
            self.shape = cursor_mode.shape
        if cursor_mode.style_id is not None:
            self.style = styles.get(cursor_mode.style_id)
        self.cell_percentage = cursor_mode.cell_percentage
        self.blinkwait = cursor_mode.blinkwait
        self.blinkon = cursor_mode.blinkon
        self.blinkoff = cursor_mode.blinkoff