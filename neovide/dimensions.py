"""Window dimensions in cells or pixels."""

from __future__ import annotations

import re
from dataclasses import dataclass

_U64_MAX = 2**64 - 1
_NUMBER = re.compile(r"\+?[0-9]+")
_ZERO_MESSAGE = "Invalid Dimensions: Window dimensions should be greater than 0."


def _parse_dimension(text: str, invalid_message: str) -> int:
    if not _NUMBER.fullmatch(text):
        raise ValueError(invalid_message)
    value = int(text)
    if value > _U64_MAX:
        raise ValueError(invalid_message)
    if value == 0:
        raise ValueError(_ZERO_MESSAGE)
    return value


@dataclass(frozen=True)
class Dimensions:
    """A width and a height."""

    width: int
    height: int

    @classmethod
    def parse(cls, text: str) -> Dimensions:
        """Parse ``<width>x<height>``, both parts positive integers."""
        invalid_message = f"Invalid geometry: {text}\nValid format: <width>x<height>"
        values = [_parse_dimension(part, invalid_message) for part in text.split("x")]
        if len(values) != 2:
            raise ValueError(invalid_message)
        width, height = values
        return cls(width, height)

    def as_tuple(self) -> tuple[int, int]:
        return (self.width, self.height)

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"

    def __mul__(self, other: object) -> Dimensions:
        if not isinstance(other, Dimensions):
            return NotImplemented
        return Dimensions(self.width * other.width, self.height * other.height)

    def __rmul__(self, other: object) -> tuple[int, int]:
        if not isinstance(other, tuple) or len(other) != 2:
            return NotImplemented
        x, y = other
        return (x * self.width, y * self.height)

    def __floordiv__(self, other: object) -> Dimensions:
        if not isinstance(other, Dimensions):
            return NotImplemented
        return Dimensions(self.width // other.width, self.height // other.height)