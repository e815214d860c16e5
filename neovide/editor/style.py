"""Colours and highlight styles."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class Color4f:
    """An RGBA colour with components in 0.0..1.0."""

    r: float
    g: float
    b: float
    a: float


@dataclass
class Colors:
    """Foreground, background and special colours, each possibly unset."""

    foreground: Color4f | None = None
    background: Color4f | None = None
    special: Color4f | None = None


class UnderlineStyle(Enum):
    UNDERLINE = "underline"
    UNDER_DOUBLE = "underdouble"
    UNDER_DASH = "underdash"
    UNDER_DOT = "underdot"
    UNDER_CURL = "undercurl"


def _required(color: Color4f | None, name: str) -> Color4f:
    if color is None:
        raise ValueError(f"default {name} colour is not set")
    return color


@dataclass
class Style:
    """A highlight style: colours and text attributes."""

    colors: Colors = field(default_factory=Colors)
    reverse: bool = False
    italic: bool = False
    bold: bool = False
    strikethrough: bool = False
    blend: int = 0
    underline: UnderlineStyle | None = None

    def _own_foreground(self, default_colors: Colors) -> Color4f:
        if self.colors.foreground is not None:
            return self.colors.foreground
        return _required(default_colors.foreground, "foreground")

    def _own_background(self, default_colors: Colors) -> Color4f:
        if self.colors.background is not None:
            return self.colors.background
        return _required(default_colors.background, "background")

    def foreground(self, default_colors: Colors) -> Color4f:
        if self.reverse:
            return self._own_background(default_colors)
        return self._own_foreground(default_colors)

    def background(self, default_colors: Colors) -> Color4f:
        if self.reverse:
            return self._own_foreground(default_colors)
        return self._own_background(default_colors)

    def special(self, default_colors: Colors) -> Color4f:
        if self.colors.special is not None:
            return self.colors.special
        return self.foreground(default_colors)