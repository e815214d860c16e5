"""The editor state machine that turns redraw events into draw commands."""

from __future__ import annotations

import copy
import logging
import threading
from dataclasses import dataclass

from ..bridge.events import (
    BusyStart,
    BusyStop,
    Clear,
    CursorGoto,
    DefaultColorsSet,
    Destroy,
    Flush,
    GridLine,
    GuiOption,
    HighlightAttributesDefine,
    MessageSetPosition,
    ModeChange,
    ModeInfoSet,
    MouseOff,
    MouseOn,
    OptionSet,
    RedrawEvent,
    Resize,
    Scroll,
    SetTitle,
    WindowAnchor,
    WindowClose,
    WindowFloatPosition,
    WindowHide,
    WindowPosition,
    WindowViewport,
)
from ..event_aggregator import EVENT_AGGREGATOR, EventAggregator
from .cursor import Cursor, CursorMode
from .draw_commands import (
    CloseWindow,
    DefaultStyleChanged,
    DrawCommandBatcher,
    FontChanged,
    LineSpaceChanged,
    ModeChanged,
    UpdateCursor,
)
from .style import Style
from .window import AnchorInfo, Window, WindowType

_log = logging.getLogger(__name__)

MODE_CMDLINE = 4
_BASE_GRID = 1
_MESSAGE_SORT_ORDER = 2**64 - 1


class EditorCommand:
    """Base of commands handled by the editor."""

    __slots__ = ()


@dataclass
class NeovimRedrawEvent(EditorCommand):
    event: RedrawEvent


@dataclass
class RedrawScreen(EditorCommand):
    pass


class WindowCommand:
    """Base of commands the editor sends to the application window."""

    __slots__ = ()


@dataclass
class TitleChanged(WindowCommand):
    title: str


@dataclass
class SetMouseEnabled(WindowCommand):
    enabled: bool


@dataclass
class ListAvailableFonts(WindowCommand):
    pass


class Editor:
    """Holds the windows, cursor and styles Neovim describes."""

    def __init__(self, aggregator: EventAggregator | None = None) -> None:
        self._aggregator = EVENT_AGGREGATOR if aggregator is None else aggregator
        self.windows: dict[int, Window] = {}
        self.cursor = Cursor()
        self.defined_styles: dict[int, Style] = {}
        self.mode_list: list[CursorMode] = []
        self.draw_command_batcher = DrawCommandBatcher(self._aggregator)
        self.current_mode_index: int | None = None

    def _send_window_command(self, command: WindowCommand) -> None:
        self._aggregator.send(command, WindowCommand)

    def handle_editor_command(self, command: EditorCommand) -> None:
        if isinstance(command, RedrawScreen):
            self._redraw_screen()
        elif isinstance(command, NeovimRedrawEvent):
            self._handle_redraw_event(command.event)

    def _mode_at(self, index: int) -> CursorMode | None:
        return self.mode_list[index] if 0 <= index < len(self.mode_list) else None

    def _handle_redraw_event(self, event: RedrawEvent) -> None:
        match event:
            case SetTitle(title=title):
                self._send_window_command(TitleChanged(title))
            case ModeInfoSet(cursor_modes=cursor_modes):
                self.mode_list = list(cursor_modes)
                if self.current_mode_index is not None:
                    mode = self._mode_at(self.current_mode_index)
                    if mode is not None:
                        self.cursor.change_mode(mode, self.defined_styles)
            case OptionSet(gui_option=gui_option):
                self._set_option(gui_option)
            case ModeChange(mode=mode, mode_index=mode_index):
                cursor_mode = self._mode_at(mode_index)
                if cursor_mode is not None:
                    self.cursor.change_mode(cursor_mode, self.defined_styles)
                    self.current_mode_index = mode_index
                else:
                    self.current_mode_index = None
                self.draw_command_batcher.queue(ModeChanged(mode))
            case MouseOn():
                self._send_window_command(SetMouseEnabled(True))
            case MouseOff():
                self._send_window_command(SetMouseEnabled(False))
            case BusyStart():
                _log.debug("Cursor off")
                self.cursor.enabled = False
            case BusyStop():
                _log.debug("Cursor on")
                self.cursor.enabled = True
            case Flush():
                self._send_cursor_info()
                self.draw_command_batcher.send_batch()
            case DefaultColorsSet(colors=colors):
                self.draw_command_batcher.queue(DefaultStyleChanged(Style(colors)))
                self._redraw_screen()
                self.draw_command_batcher.send_batch()
            case HighlightAttributesDefine(id=style_id, style=style):
                self.defined_styles[style_id] = style
            case CursorGoto(grid=grid, row=row, column=column):
                self._set_cursor_position(grid, column, row)
            case Resize(grid=grid, width=width, height=height):
                self._resize_window(grid, width, height)
            case GridLine(grid=grid, row=row, column_start=column_start, cells=cells):
                window = self.windows.get(grid)
                if window is not None:
                    window.draw_grid_line(row, column_start, cells, self.defined_styles)
            case Clear(grid=grid):
                window = self.windows.get(grid)
                if window is not None:
                    window.clear()
            case Destroy(grid=grid) | WindowClose(grid=grid):
                self._close_window(grid)
            case Scroll(grid=grid):
                window = self.windows.get(grid)
                if window is not None:
                    window.scroll_region(
                        event.top, event.bottom, event.left, event.right,
                        event.rows, event.columns,
                    )
            case WindowPosition():
                self._set_window_position(
                    event.grid, event.start_column, event.start_row,
                    event.width, event.height,
                )
            case WindowFloatPosition():
                self._set_window_float_position(
                    event.grid, event.anchor_grid, event.anchor,
                    event.anchor_column, event.anchor_row, event.sort_order,
                )
            case WindowHide(grid=grid):
                window = self.windows.get(grid)
                if window is not None:
                    window.hide()
            case MessageSetPosition(grid=grid, row=row):
                self._set_message_position(grid, row)
            case WindowViewport(grid=grid, scroll_delta=scroll_delta) if scroll_delta is not None:
                self._send_updated_viewport(grid, scroll_delta)
            case _:
                pass

    def _close_window(self, grid: int) -> None:
        window = self.windows.pop(grid, None)
        if window is not None:
            window.close()
            self.draw_command_batcher.queue(CloseWindow(grid))

    def _new_window(
        self,
        grid: int,
        window_type: WindowType,
        anchor_info: AnchorInfo | None,
        position: tuple[float, float],
        size: tuple[int, int],
    ) -> None:
        self.windows[grid] = Window(
            grid, window_type, anchor_info, position, size, self.draw_command_batcher
        )

    def _resize_window(self, grid: int, width: int, height: int) -> None:
        window = self.windows.get(grid)
        if window is None:
            self._new_window(grid, WindowType.EDITOR, None, (0.0, 0.0), (width, height))
            return
        window.resize((width, height))
        anchor = window.anchor_info
        if anchor is not None:
            self._set_window_float_position(
                grid, anchor.anchor_grid_id, anchor.anchor_type,
                anchor.anchor_left, anchor.anchor_top, anchor.sort_order,
            )

    def _set_window_position(
        self, grid: int, start_left: int, start_top: int, width: int, height: int
    ) -> None:
        position = (float(start_left), float(start_top))
        window = self.windows.get(grid)
        if window is None:
            self._new_window(grid, WindowType.EDITOR, None, position, (width, height))
            return
        window.position(None, (width, height), position)
        window.show()

    def _set_window_float_position(
        self,
        grid: int,
        anchor_grid: int,
        anchor_type: WindowAnchor,
        anchor_left: float,
        anchor_top: float,
        sort_order: int | None,
    ) -> None:
        parent_position = self._window_top_left(anchor_grid)
        window = self.windows.get(grid)
        if window is None:
            _log.error("Attempted to float window that does not exist.")
            return
        width, height = window.width, window.height
        left, top = anchor_type.modified_top_left(anchor_left, anchor_top, width, height)
        if parent_position is not None:
            left += parent_position[0]
            top += parent_position[1]
        window.position(
            AnchorInfo(
                anchor_grid_id=anchor_grid,
                anchor_type=anchor_type,
                anchor_left=anchor_left,
                anchor_top=anchor_top,
                sort_order=grid if sort_order is None else sort_order,
            ),
            (width, height),
            (left, top),
        )
        window.show()

    def _set_message_position(self, grid: int, grid_top: int) -> None:
        parent = self.windows.get(_BASE_GRID)
        parent_width = parent.width if parent is not None else 1
        anchor_info = AnchorInfo(
            anchor_grid_id=_BASE_GRID,
            anchor_type=WindowAnchor.NORTH_WEST,
            anchor_left=0.0,
            anchor_top=float(grid_top),
            sort_order=_MESSAGE_SORT_ORDER,
        )
        position = (0.0, float(grid_top))
        window = self.windows.get(grid)
        if window is None:
            self._new_window(grid, WindowType.MESSAGE, anchor_info, position, (parent_width, 1))
            return
        window.window_type = WindowType.MESSAGE
        window.position(anchor_info, (parent_width, window.height), position)
        window.show()

    def _window_top_left(self, grid: int) -> tuple[float, float] | None:
        window = self.windows.get(grid)
        if window is None:
            return None
        anchor = window.anchor_info
        if anchor is None:
            return window.grid_position
        parent = self._window_top_left(anchor.anchor_grid_id)
        if parent is None:
            return None
        left, top = anchor.anchor_type.modified_top_left(
            anchor.anchor_left, anchor.anchor_top, window.width, window.height
        )
        return (parent[0] + left, parent[1] + top)

    def _set_cursor_position(self, grid: int, grid_left: int, grid_top: int) -> None:
        window = self.windows.get(grid)
        if window is not None and window.window_type is WindowType.MESSAGE:
            # The cursor only enters a message grid when typing a command
            # (column 1, right after ":"), when it is already there, or in
            # command-line mode; anything else would make it jump around.
            intentional = grid_left == 1
            already_there = self.cursor.parent_window_id == grid
            using_cmdline = self.current_mode_index == MODE_CMDLINE
            if not (intentional or already_there or using_cmdline):
                _log.debug(
                    "Cursor unexpectedly sent to message buffer %s (%s, %s)",
                    grid, grid_left, grid_top,
                )
                return
        self.cursor.parent_window_id = grid
        self.cursor.grid_position = (grid_left, grid_top)

    def _send_cursor_info(self) -> None:
        grid_left, grid_top = self.cursor.grid_position
        window = self.windows.get(self.cursor.parent_window_id)
        if window is not None:
            character, style, double_width = window.get_cursor_grid_cell(grid_left, grid_top)
            self.cursor.grid_cell = (character, style)
            self.cursor.double_width = double_width
        else:
            self.cursor.double_width = False
            self.cursor.grid_cell = (" ", None)
        self.draw_command_batcher.queue(UpdateCursor(copy.copy(self.cursor)))

    def _set_option(self, gui_option: GuiOption) -> None:
        _log.debug("Option set %r", gui_option)
        if gui_option.name == "guifont":
            if gui_option.value == "*":
                self._send_window_command(ListAvailableFonts())
            self.draw_command_batcher.queue(FontChanged(gui_option.value))
            self._redraw_screen()
        elif gui_option.name == "linespace":
            self.draw_command_batcher.queue(LineSpaceChanged(gui_option.value))
            self._redraw_screen()

    def _send_updated_viewport(self, grid: int, scroll_delta: float) -> None:
        window = self.windows.get(grid)
        if window is None:
            _log.debug("viewport event received before window initialized")
            return
        window.update_viewport(scroll_delta)

    def _redraw_screen(self) -> None:
        for window in self.windows.values():
            window.redraw()


def start_editor(aggregator: EventAggregator | None = None) -> threading.Thread:
    """Run an editor on a background thread fed by ``EditorCommand`` events.

    Sending ``None`` on the ``EditorCommand`` channel stops the thread.
    """
    aggregator = EVENT_AGGREGATOR if aggregator is None else aggregator
    receiver = aggregator.register_event(EditorCommand)
    editor = Editor(aggregator)

    def run() -> None:
        while True:
            command = receiver.get()
            if command is None:
                break
            editor.handle_editor_command(command)

    thread = threading.Thread(target=run, name="editor", daemon=True)
    thread.start()
    return thread