"""An editor window: a character grid that reports its changes as draw commands."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum

import regex

from ..bridge.events import GridLineCell, WindowAnchor
from .draw_commands import (
    DrawClear,
    DrawClose,
    DrawCommandBatcher,
    DrawHide,
    DrawLine,
    DrawPosition,
    DrawScroll,
    DrawShow,
    DrawViewport,
    LineFragment,
    WindowDraw,
    WindowDrawCommand,
)
from .grid import CharacterGrid
from .style import Style

_log = logging.getLogger(__name__)
_GRAPHEME = regex.compile(r"\X")


@dataclass
class AnchorInfo:
    """Where a floating window is anchored."""

    anchor_grid_id: int
    anchor_type: WindowAnchor
    anchor_left: float
    anchor_top: float
    sort_order: int


class WindowType(Enum):
    EDITOR = "editor"
    MESSAGE = "message"


class Window:
    """One Neovim grid and its placement."""

    def __init__(
        self,
        grid_id: int,
        window_type: WindowType,
        anchor_info: AnchorInfo | None,
        grid_position: tuple[float, float],
        grid_size: tuple[int, int],
        draw_command_batcher: DrawCommandBatcher,
    ) -> None:
        self.grid_id = grid_id
        self.grid = CharacterGrid(grid_size)
        self.window_type = window_type
        self.anchor_info = anchor_info
        self.grid_position = grid_position
        self._batcher = draw_command_batcher
        self._send_updated_position()

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def _send(self, command: WindowDrawCommand) -> None:
        self._batcher.queue(WindowDraw(self.grid_id, command))

    def _send_updated_position(self) -> None:
        self._send(
            DrawPosition(
                grid_position=self.grid_position,
                grid_size=(self.grid.width, self.grid.height),
                floating_order=None if self.anchor_info is None else self.anchor_info.sort_order,
            )
        )

    def get_cursor_grid_cell(
        self, window_left: int, window_top: int
    ) -> tuple[str, Style | None, bool]:
        """The text and style under the cursor and whether the cell is double width."""
        cell = self.grid.get_cell(window_left, window_top)
        character, style = cell if cell is not None else (" ", None)
        next_cell = self.grid.get_cell(window_left + 1, window_top)
        double_width = next_cell is not None and next_cell[0] == ""
        return character, style, double_width

    def position(
        self,
        anchor_info: AnchorInfo | None,
        grid_size: tuple[int, int],
        grid_position: tuple[float, float],
    ) -> None:
        self.grid.resize(grid_size)
        self.anchor_info = anchor_info
        self.grid_position = grid_position
        self._send_updated_position()
        self.redraw()

    def resize(self, new_size: tuple[int, int]) -> None:
        self.grid.resize(new_size)
        self._send_updated_position()
        self.redraw()

    def _modify_grid(
        self,
        row: int,
        column: int,
        cell: GridLineCell,
        defined_styles: Mapping[int, Style],
        previous_style: Style | None,
    ) -> tuple[int, Style | None]:
        if cell.highlight_id == 0:
            style = None
        elif cell.highlight_id is None:
            style = previous_style
        else:
            style = defined_styles.get(cell.highlight_id)

        text = cell.text
        if cell.repeat is not None:
            text *= cell.repeat

        if not text:
            self.grid.set_cell(column, row, (text, style))
            column += 1
        else:
            for character in _GRAPHEME.findall(text):
                self.grid.set_cell(column, row, (character, style))
                column += 1
        return column, style

    def _build_line_fragment(
        self, cells: list[tuple[str, Style | None]], row: int, start: int
    ) -> tuple[int, LineFragment]:
        """A fragment from ``start`` up to a style change or double-width cell."""
        style = cells[start][1]
        text = []
        width = 0
        for character, cell_style in cells[start:]:
            if cell_style != style:
                break
            width += 1
            if character == "":
                break
            text.append(character)
        return start + width, LineFragment("".join(text), start, row, width, style)

    def _redraw_line(self, row: int) -> None:
        cells = self.grid.row(row)
        fragments = []
        start = 0
        while start < self.grid.width:
            start, fragment = self._build_line_fragment(cells, row, start)
            fragments.append(fragment)
        self._send(DrawLine(fragments))

    def draw_grid_line(
        self,
        row: int,
        column_start: int,
        cells: Iterable[GridLineCell],
        defined_styles: Mapping[int, Style],
    ) -> None:
        if row >= self.grid.height:
            _log.warning("Draw command out of bounds")
            return
        previous_style = None
        column = column_start
        for cell in cells:
            column, previous_style = self._modify_grid(
                row, column, cell, defined_styles, previous_style
            )
        # Neighbouring lines are redrawn too so underlines are not clipped.
        if row < self.grid.height - 1:
            self._redraw_line(row + 1)
        self._redraw_line(row)
        if row > 0:
            self._redraw_line(row - 1)

    def scroll_region(
        self, top: int, bottom: int, left: int, right: int, rows: int, cols: int
    ) -> None:
        if rows > 0:
            ys: Iterable[int] = range(top + rows, bottom)
        else:
            ys = reversed(range(top, bottom + rows))

        self._send(DrawScroll(top, bottom, left, right, rows, cols))

        for y in ys:
            dest_y = y - rows
            if not 0 <= dest_y < self.grid.height:
                continue
            if cols > 0:
                xs: Iterable[int] = range(left + cols, right)
            else:
                xs = reversed(range(left, right + cols))
            for x in xs:
                cell = self.grid.get_cell(x, y)
                if cell is not None:
                    self.grid.set_cell(x - cols, dest_y, cell)

    def clear(self) -> None:
        self.grid.clear()
        self._send(DrawClear())

    def redraw(self) -> None:
        """Clear and redraw every line, bottom up so underlines survive."""
        self._send(DrawClear())
        for row in reversed(range(self.grid.height)):
            self._redraw_line(row)

    def hide(self) -> None:
        self._send(DrawHide())

    def show(self) -> None:
        self._send(DrawShow())

    def close(self) -> None:
        self._send(DrawClose())

    def update_viewport(self, scroll_delta: float) -> None:
        self._send(DrawViewport(scroll_delta))