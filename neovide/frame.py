"""Window decoration options."""

from __future__ import annotations

import sys
from enum import Enum


def _is_macos(platform: str) -> bool:
    return platform in ("darwin", "macos")


class Frame(Enum):
    """Which window decorations to use."""

    FULL = "full"
    TRANSPARENT = "transparent"
    BUTTONLESS = "buttonless"
    NONE = "none"

    @classmethod
    def parse(cls, value: str) -> Frame:
        """Look a frame up by its command-line name."""
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"invalid frame: {value!r}") from None

    @classmethod
    def variants(cls, platform: str | None = None) -> tuple[Frame, ...]:
        """The frames available on the given platform (``sys.platform`` style)."""
        platform = sys.platform if platform is None else platform
        if _is_macos(platform):
            return (cls.FULL, cls.TRANSPARENT, cls.BUTTONLESS, cls.NONE)
        return (cls.FULL, cls.NONE)

    def __str__(self) -> str:
        return self.value