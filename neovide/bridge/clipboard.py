"""Conversion between clipboard text and Neovim's register format."""

from __future__ import annotations

import sys
from typing import Any


def _default_endline() -> str:
    return "\r\n" if sys.platform.startswith("win") else "\n"


def format_paste(raw: str, file_format: str | None = None) -> list[Any]:
    """Turn clipboard text into ``[lines, paste_mode]`` for Neovim.

    Text ending in a newline is a line paste (``"V"``), otherwise a
    character paste (``"v"``). For the ``dos`` file format lines keep a
    trailing carriage return.
    """
    text = raw.replace("\r", "")
    is_line_paste = text.endswith("\n")
    if file_format == "dos":
        text = text.replace("\n", "\r\n")
    return [text.split("\n"), "V" if is_line_paste else "v"]


def format_copy(value: Any, endline: str | None = None) -> str:
    """Join the string lines Neovim copies into clipboard text.

    Non-string entries are dropped and carriage returns removed.
    """
    if not isinstance(value, (list, tuple)):
        raise ValueError("can't build string from provided text")
    separator = _default_endline() if endline is None else endline
    return separator.join(
        line.replace("\r", "") for line in value if isinstance(line, str)
    )