"""Redraw events sent by Neovim and the value helpers used to decode them."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Tuple

from ..editor.cursor import CursorMode
from ..editor.style import Color4f, Colors, Style

StyledContent = List[Tuple[int, str]]

# Option names Neovim reports through ``option_set`` that the editor knows,
# with the kind of value each one carries.
GUI_OPTION_KINDS: dict[str, str] = {
    "arabicshape": "bool",
    "ambiwidth": "string",
    "emoji": "bool",
    "guifont": "string",
    "guifontset": "string",
    "guifontwide": "string",
    "linespace": "i64",
    "pumblend": "u64",
    "showtabline": "u64",
    "termguicolors": "bool",
}


class ParseError(ValueError):
    """A value from Neovim did not have the expected shape.

    ``kind`` names what was expected (``"array"``, ``"u64"``, ...); the kind
    ``"event"`` marks a malformed event as a whole.
    """

    def __init__(self, kind: str, value: Any) -> None:
        super().__init__(f"invalid {kind} format {value}")
        self.kind = kind
        self.value = value


@dataclass
class GridLineCell:
    text: str
    highlight_id: int | None = None
    repeat: int | None = None


class MessageKind(Enum):
    UNKNOWN = ""
    CONFIRM = "confirm"
    CONFIRM_SUBSTITUTE = "confirm_sub"
    ERROR = "emsg"
    ECHO = "echo"
    ECHO_MESSAGE = "echomsg"
    ECHO_ERROR = "echoerr"
    LUA_ERROR = "lua_error"
    RPC_ERROR = "rpc_error"
    RETURN_PROMPT = "return_prompt"
    QUICK_FIX = "quickfix"
    SEARCH_COUNT = "search_count"
    WARNING = "wmsg"

    @classmethod
    def parse(cls, kind: str) -> MessageKind:
        """The kind Neovim names, or UNKNOWN."""
        try:
            return cls(kind)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class GuiOption:
    """A UI option set by Neovim."""

    name: str
    value: Any

    @property
    def known(self) -> bool:
        return self.name in GUI_OPTION_KINDS


class WindowAnchor(Enum):
    NORTH_WEST = "NW"
    NORTH_EAST = "NE"
    SOUTH_WEST = "SW"
    SOUTH_EAST = "SE"

    @classmethod
    def parse(cls, value: Any) -> WindowAnchor:
        """Decode an anchor name such as ``"NW"``."""
        if not isinstance(value, str):
            raise ParseError("string", value)
        try:
            return cls(value)
        except ValueError:
            raise ParseError("window anchor", value) from None

    def modified_top_left(
        self, grid_left: float, grid_top: float, width: int, height: int
    ) -> tuple[float, float]:
        """The top-left corner of a window of the given size anchored here."""
        left = grid_left - width if self in (WindowAnchor.NORTH_EAST, WindowAnchor.SOUTH_EAST) else grid_left
        top = grid_top - height if self in (WindowAnchor.SOUTH_WEST, WindowAnchor.SOUTH_EAST) else grid_top
        return (float(left), float(top))


_EDITOR_MODES = {
    "normal": "normal",
    "insert": "insert",
    "visual": "visual",
    "replace": "replace",
    "cmdline_normal": "cmdline",
}


@dataclass(frozen=True)
class EditorMode:
    """One of the main editor modes.

    ``kind`` is ``normal``, ``insert``, ``visual``, ``replace``, ``cmdline``
    or ``unknown``; for an unknown mode ``name`` keeps Neovim's name.
    """

    kind: str
    name: str | None = None

    @classmethod
    def parse(cls, name: str) -> EditorMode:
        kind = _EDITOR_MODES.get(name)
        if kind is None:
            return cls("unknown", name)
        return cls(kind)


class RedrawEvent:
    """Base of all events in a Neovim ``redraw`` notification."""

    __slots__ = ()


@dataclass
class SetTitle(RedrawEvent):
    title: str


@dataclass
class ModeInfoSet(RedrawEvent):
    cursor_modes: list[CursorMode] = field(default_factory=list)


@dataclass
class OptionSet(RedrawEvent):
    gui_option: GuiOption


@dataclass
class ModeChange(RedrawEvent):
    mode: EditorMode
    mode_index: int


@dataclass
class MouseOn(RedrawEvent):
    pass


@dataclass
class MouseOff(RedrawEvent):
    pass


@dataclass
class BusyStart(RedrawEvent):
    pass


@dataclass
class BusyStop(RedrawEvent):
    pass


@dataclass
class Flush(RedrawEvent):
    pass


@dataclass
class Resize(RedrawEvent):
    grid: int
    width: int
    height: int


@dataclass
class DefaultColorsSet(RedrawEvent):
    colors: Colors


@dataclass
class HighlightAttributesDefine(RedrawEvent):
    id: int
    style: Style


@dataclass
class GridLine(RedrawEvent):
    grid: int
    row: int
    column_start: int
    cells: list[GridLineCell] = field(default_factory=list)


@dataclass
class Clear(RedrawEvent):
    grid: int


@dataclass
class Destroy(RedrawEvent):
    grid: int


@dataclass
class CursorGoto(RedrawEvent):
    grid: int
    row: int
    column: int


@dataclass
class Scroll(RedrawEvent):
    grid: int
    top: int
    bottom: int
    left: int
    right: int
    rows: int
    columns: int


@dataclass
class WindowPosition(RedrawEvent):
    grid: int
    start_row: int
    start_column: int
    width: int
    height: int


@dataclass
class WindowFloatPosition(RedrawEvent):
    grid: int
    anchor: WindowAnchor
    anchor_grid: int
    anchor_row: float
    anchor_column: float
    focusable: bool
    sort_order: int | None = None


@dataclass
class WindowExternalPosition(RedrawEvent):
    grid: int


@dataclass
class WindowHide(RedrawEvent):
    grid: int


@dataclass
class WindowClose(RedrawEvent):
    grid: int


@dataclass
class MessageSetPosition(RedrawEvent):
    grid: int
    row: int
    scrolled: bool
    separator_character: str


@dataclass
class WindowViewport(RedrawEvent):
    grid: int
    top_line: float
    bottom_line: float
    current_line: float
    current_column: float
    line_count: float | None = None
    scroll_delta: float | None = None


@dataclass
class CommandLineShow(RedrawEvent):
    content: StyledContent
    position: int
    first_character: str
    prompt: str
    indent: int
    level: int


@dataclass
class CommandLinePosition(RedrawEvent):
    position: int
    level: int


@dataclass
class CommandLineSpecialCharacter(RedrawEvent):
    character: str
    shift: bool
    level: int


@dataclass
class CommandLineHide(RedrawEvent):
    pass


@dataclass
class CommandLineBlockShow(RedrawEvent):
    lines: list[StyledContent] = field(default_factory=list)


@dataclass
class CommandLineBlockAppend(RedrawEvent):
    line: StyledContent = field(default_factory=list)


@dataclass
class CommandLineBlockHide(RedrawEvent):
    pass


@dataclass
class MessageShow(RedrawEvent):
    kind: MessageKind
    content: StyledContent
    replace_last: bool


@dataclass
class MessageClear(RedrawEvent):
    pass


@dataclass
class MessageShowMode(RedrawEvent):
    content: StyledContent = field(default_factory=list)


@dataclass
class MessageShowCommand(RedrawEvent):
    content: StyledContent = field(default_factory=list)


@dataclass
class MessageRuler(RedrawEvent):
    content: StyledContent = field(default_factory=list)


@dataclass
class MessageHistoryShow(RedrawEvent):
    entries: list[tuple[MessageKind, StyledContent]] = field(default_factory=list)


def unpack_color(packed_color: int) -> Color4f:
    """Turn a packed ``0xRRGGBB`` integer into an opaque colour."""
    packed = packed_color & 0xFFFF_FFFF
    r = (packed & 0x00FF_0000) >> 16
    g = (packed & 0xFF00) >> 8
    b = packed & 0xFF
    return Color4f(r / 255.0, g / 255.0, b / 255.0, 1.0)


def extract_values(values: Sequence[Any], required: int) -> list[Any]:
    """The first ``required`` values; extra values are ignored."""
    if required > len(values):
        raise ParseError("event", repr(list(values)))
    return list(values[:required])


def extract_values_with_optional(
    values: Sequence[Any], required: int, optional: int
) -> tuple[list[Any], list[Any | None]]:
    """Split into ``required`` values and ``optional`` ones padded with None."""
    if required > len(values) or len(values) > required + optional:
        raise ParseError("event", repr(list(values)))
    present = list(values[required:])
    return list(values[:required]), present + [None] * (optional - len(present))