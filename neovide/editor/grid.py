"""A rectangular grid of styled character cells."""

from __future__ import annotations

from typing import Optional, Tuple

from .style import Style

GridCell = Tuple[str, Optional[Style]]


def default_cell() -> GridCell:
    """An empty cell: a space with no style."""
    return (" ", None)


class CharacterGrid:
    """Cells stored row by row, ``width`` cells per row."""

    def __init__(self, size: tuple[int, int]) -> None:
        self.width, self.height = size
        self._characters: list[GridCell] = [default_cell()] * (self.width * self.height)

    def resize(self, size: tuple[int, int]) -> None:
        """Change the size, keeping the cells that still fit."""
        width, height = size
        characters = [default_cell()] * (width * height)
        kept_width = min(self.width, width)
        for y in range(min(self.height, height)):
            old_row = self._characters[y * self.width: y * self.width + kept_width]
            characters[y * width: y * width + kept_width] = old_row
        self.width, self.height = width, height
        self._characters = characters

    def clear(self) -> None:
        self.set_all_characters(default_cell())

    def _index(self, x: int, y: int) -> int | None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            return None
        return x + y * self.width

    def get_cell(self, x: int, y: int) -> GridCell | None:
        """The cell at column ``x``, row ``y``, or None outside the grid."""
        index = self._index(x, y)
        return None if index is None else self._characters[index]

    def set_cell(self, x: int, y: int, cell: GridCell) -> bool:
        """Replace a cell; returns False and does nothing outside the grid."""
        index = self._index(x, y)
        if index is None:
            return False
        self._characters[index] = cell
        return True

    def set_all_characters(self, value: GridCell) -> None:
        self._characters = [value] * (self.width * self.height)

    def row(self, row_index: int) -> list[GridCell] | None:
        """A copy of one row, or None outside the grid."""
        if not 0 <= row_index < self.height:
            return None
        start = row_index * self.width
        return self._characters[start: start + self.width]