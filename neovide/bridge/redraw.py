"""Decoding of Neovim ``redraw`` notifications into redraw events."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from ..editor.cursor import CursorMode, CursorShape
from ..editor.style import Colors, Style, UnderlineStyle
from .events import (
    GUI_OPTION_KINDS,
    BusyStart,
    BusyStop,
    Clear,
    CommandLineBlockAppend,
    CommandLineBlockHide,
    CommandLineBlockShow,
    CommandLineHide,
    CommandLinePosition,
    CommandLineShow,
    CommandLineSpecialCharacter,
    CursorGoto,
    DefaultColorsSet,
    Destroy,
    EditorMode,
    Flush,
    GridLine,
    GridLineCell,
    GuiOption,
    HighlightAttributesDefine,
    MessageClear,
    MessageHistoryShow,
    MessageKind,
    MessageRuler,
    MessageSetPosition,
    MessageShow,
    MessageShowCommand,
    MessageShowMode,
    ModeChange,
    ModeInfoSet,
    MouseOff,
    MouseOn,
    OptionSet,
    ParseError,
    RedrawEvent,
    Resize,
    Scroll,
    SetTitle,
    StyledContent,
    WindowAnchor,
    WindowClose,
    WindowExternalPosition,
    WindowFloatPosition,
    WindowHide,
    WindowPosition,
    WindowViewport,
    extract_values,
    extract_values_with_optional,
    unpack_color,
)

_log = logging.getLogger(__name__)

_U64_LIMIT = 2**64
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1

_UNDERLINES = {
    "underline": UnderlineStyle.UNDERLINE,
    "undercurl": UnderlineStyle.UNDER_CURL,
    "underdotted": UnderlineStyle.UNDER_DOT,
    "underdot": UnderlineStyle.UNDER_DOT,
    "underdashed": UnderlineStyle.UNDER_DASH,
    "underdash": UnderlineStyle.UNDER_DASH,
    "underdouble": UnderlineStyle.UNDER_DOUBLE,
    "underlineline": UnderlineStyle.UNDER_DOUBLE,
}

_COLOR_ATTRIBUTES = ("foreground", "background", "special")
_FLAG_ATTRIBUTES = ("reverse", "italic", "bold", "strikethrough")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _array(value: Any) -> list[Any]:
    if not isinstance(value, (list, tuple)):
        raise ParseError("array", value)
    return list(value)


def _map(value: Any) -> list[tuple[Any, Any]]:
    if not isinstance(value, dict):
        raise ParseError("map", value)
    return list(value.items())


def _string(value: Any) -> str:
    if not isinstance(value, str):
        raise ParseError("string", value)
    return value


def _u64(value: Any) -> int:
    if not _is_int(value) or not 0 <= value < _U64_LIMIT:
        raise ParseError("u64", value)
    return value


def _i64(value: Any) -> int:
    if not _is_int(value) or not _I64_MIN <= value <= _I64_MAX:
        raise ParseError("i64", value)
    return value


def _f64(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ParseError("f64", value)
    return float(value)


def _bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ParseError("bool", value)
    return value


def _optional(value: Any | None, parse: Callable[[Any], Any]) -> Any | None:
    return None if value is None else parse(value)


_OPTION_PARSERS: dict[str, Callable[[Any], Any]] = {
    "bool": _bool,
    "string": _string,
    "i64": _i64,
    "u64": _u64,
}


def parse_style(style_map: Any) -> Style:
    """Build a highlight style from an ``hl_attr_define`` attribute map."""
    style = Style(Colors())
    for name, value in _map(style_map):
        if not isinstance(name, str):
            _log.debug("Invalid attribute format")
            continue
        if name in _COLOR_ATTRIBUTES and _is_int(value):
            setattr(style.colors, name, unpack_color(_u64(value)))
        elif name in _FLAG_ATTRIBUTES and isinstance(value, bool):
            setattr(style, name, value)
        elif name == "blend" and _is_int(value):
            style.blend = _u64(value) & 0xFF
        elif name in _UNDERLINES and value is True:
            style.underline = _UNDERLINES[name]
        else:
            _log.debug("Ignored style attribute: %s", name)
    return style


def parse_grid_line_cell(value: Any) -> GridLineCell:
    """Decode one ``[text, hl_id?, repeat?]`` cell of a ``grid_line`` event."""
    contents = _array(value)
    if not contents:
        raise ParseError("event", repr(contents))
    highlight_id = _u64(contents[1]) if len(contents) > 1 else None
    repeat = _u64(contents[2]) if len(contents) > 2 else None
    return GridLineCell(_string(contents[0]), highlight_id, repeat)


def parse_styled_content(line: Any) -> StyledContent:
    """Decode a list of ``[style_id, text]`` chunks."""
    content: StyledContent = []
    for chunk in _array(line):
        style_id, text = extract_values(_array(chunk), 2)
        content.append((_u64(style_id), _string(text)))
    return content


def _set_title(args: list[Any]) -> RedrawEvent:
    (title,) = extract_values(args, 1)
    return SetTitle(_string(title))


def _mode_info_set(args: list[Any]) -> RedrawEvent:
    _cursor_style_enabled, mode_info = extract_values(args, 2)
    cursor_modes = []
    for info in _array(mode_info):
        mode = CursorMode()
        for name, value in _map(info):
            key = _string(name)
            if key == "cursor_shape":
                mode.shape = CursorShape.from_type_name(_string(value))
            elif key == "cell_percentage":
                mode.cell_percentage = _u64(value) / 100.0
            elif key == "blinkwait":
                mode.blinkwait = _u64(value)
            elif key == "blinkon":
                mode.blinkon = _u64(value)
            elif key == "blinkoff":
                mode.blinkoff = _u64(value)
            elif key == "attr_id":
                mode.style_id = _u64(value)
        cursor_modes.append(mode)
    return ModeInfoSet(cursor_modes)


def _option_set(args: list[Any]) -> RedrawEvent:
    name, value = extract_values(args, 2)
    name = _string(name)
    kind = GUI_OPTION_KINDS.get(name)
    if kind is not None:
        value = _OPTION_PARSERS[kind](value)
    return OptionSet(GuiOption(name, value))


def _mode_change(args: list[Any]) -> RedrawEvent:
    mode, mode_index = extract_values(args, 2)
    return ModeChange(EditorMode.parse(_string(mode)), _u64(mode_index))


def _grid_resize(args: list[Any]) -> RedrawEvent:
    grid, width, height = extract_values(args, 3)
    return Resize(_u64(grid), _u64(width), _u64(height))


def _default_colors(args: list[Any]) -> RedrawEvent:
    foreground, background, special, _fg, _bg = extract_values(args, 5)
    return DefaultColorsSet(
        Colors(
            unpack_color(_u64(foreground)),
            unpack_color(_u64(background)),
            unpack_color(_u64(special)),
        )
    )


def _hl_attr_define(args: list[Any]) -> RedrawEvent:
    style_id, attributes, _terminal, _info = extract_values(args, 4)
    style = parse_style(attributes)
    return HighlightAttributesDefine(_u64(style_id), style)


def _grid_line(args: list[Any]) -> RedrawEvent:
    grid, row, column_start, cells = extract_values(args, 4)
    return GridLine(
        _u64(grid),
        _u64(row),
        _u64(column_start),
        [parse_grid_line_cell(cell) for cell in _array(cells)],
    )


def _grid_clear(args: list[Any]) -> RedrawEvent:
    (grid,) = extract_values(args, 1)
    return Clear(_u64(grid))


def _grid_destroy(args: list[Any]) -> RedrawEvent:
    (grid,) = extract_values(args, 1)
    return Destroy(_u64(grid))


def _grid_cursor_goto(args: list[Any]) -> RedrawEvent:
    grid, row, column = extract_values(args, 3)
    return CursorGoto(_u64(grid), _u64(row), _u64(column))


def _grid_scroll(args: list[Any]) -> RedrawEvent:
    grid, top, bottom, left, right, rows, columns = extract_values(args, 7)
    return Scroll(
        _u64(grid), _u64(top), _u64(bottom), _u64(left), _u64(right),
        _i64(rows), _i64(columns),
    )


def _win_pos(args: list[Any]) -> RedrawEvent:
    grid, _window, start_row, start_column, width, height = extract_values(args, 6)
    return WindowPosition(
        _u64(grid), _u64(start_row), _u64(start_column), _u64(width), _u64(height)
    )


def _win_float_pos(args: list[Any]) -> RedrawEvent:
    required, (sort_order,) = extract_values_with_optional(args, 7, 1)
    grid, _window, anchor, anchor_grid, anchor_row, anchor_column, focusable = required
    return WindowFloatPosition(
        grid=_u64(grid),
        anchor=WindowAnchor.parse(anchor),
        anchor_grid=_u64(anchor_grid),
        anchor_row=_f64(anchor_row),
        anchor_column=_f64(anchor_column),
        focusable=_bool(focusable),
        sort_order=_optional(sort_order, _u64),
    )


def _win_external_pos(args: list[Any]) -> RedrawEvent:
    grid, _window = extract_values(args, 2)
    return WindowExternalPosition(_u64(grid))


def _win_hide(args: list[Any]) -> RedrawEvent:
    (grid,) = extract_values(args, 1)
    return WindowHide(_u64(grid))


def _win_close(args: list[Any]) -> RedrawEvent:
    (grid,) = extract_values(args, 1)
    return WindowClose(_u64(grid))


def _msg_set_pos(args: list[Any]) -> RedrawEvent:
    grid, row, scrolled, separator = extract_values(args, 4)
    return MessageSetPosition(_u64(grid), _u64(row), _bool(scrolled), _string(separator))


def _win_viewport(args: list[Any]) -> RedrawEvent:
    required, (line_count, scroll_delta) = extract_values_with_optional(args, 6, 2)
    grid, _window, top_line, bottom_line, current_line, current_column = required
    return WindowViewport(
        grid=_u64(grid),
        top_line=_f64(top_line),
        bottom_line=_f64(bottom_line),
        current_line=_f64(current_line),
        current_column=_f64(current_column),
        line_count=_optional(line_count, _f64),
        scroll_delta=_optional(scroll_delta, _f64),
    )


def _cmdline_show(args: list[Any]) -> RedrawEvent:
    content, position, first_character, prompt, indent, level = extract_values(args, 6)
    return CommandLineShow(
        content=parse_styled_content(content),
        position=_u64(position),
        first_character=_string(first_character),
        prompt=_string(prompt),
        indent=_u64(indent),
        level=_u64(level),
    )


def _cmdline_pos(args: list[Any]) -> RedrawEvent:
    position, level = extract_values(args, 2)
    return CommandLinePosition(_u64(position), _u64(level))


def _cmdline_special_char(args: list[Any]) -> RedrawEvent:
    character, shift, level = extract_values(args, 3)
    return CommandLineSpecialCharacter(_string(character), _bool(shift), _u64(level))


def _cmdline_block_show(args: list[Any]) -> RedrawEvent:
    (lines,) = extract_values(args, 1)
    return CommandLineBlockShow([parse_styled_content(line) for line in _array(lines)])


def _cmdline_block_append(args: list[Any]) -> RedrawEvent:
    (line,) = extract_values(args, 1)
    return CommandLineBlockAppend(parse_styled_content(line))


def _msg_show(args: list[Any]) -> RedrawEvent:
    kind, content, replace_last = extract_values(args, 3)
    return MessageShow(
        MessageKind.parse(_string(kind)),
        parse_styled_content(content),
        _bool(replace_last),
    )


def _msg_showmode(args: list[Any]) -> RedrawEvent:
    (content,) = extract_values(args, 1)
    return MessageShowMode(parse_styled_content(content))


def _msg_showcmd(args: list[Any]) -> RedrawEvent:
    (content,) = extract_values(args, 1)
    return MessageShowCommand(parse_styled_content(content))


def _msg_ruler(args: list[Any]) -> RedrawEvent:
    (content,) = extract_values(args, 1)
    return MessageRuler(parse_styled_content(content))


def _msg_history_entry(entry: Any) -> tuple[MessageKind, StyledContent]:
    kind, content = extract_values(_array(entry), 2)
    return (MessageKind.parse(_string(kind)), parse_styled_content(content))


def _msg_history_show(args: list[Any]) -> RedrawEvent:
    (entries,) = extract_values(args, 1)
    return MessageHistoryShow([_msg_history_entry(entry) for entry in _array(entries)])


def _constant(event_type: Callable[[], RedrawEvent]) -> Callable[[list[Any]], RedrawEvent]:
    return lambda _args: event_type()


_PARSERS: dict[str, Callable[[list[Any]], RedrawEvent]] = {
    "set_title": _set_title,
    "mode_info_set": _mode_info_set,
    "option_set": _option_set,
    "mode_change": _mode_change,
    "mouse_on": _constant(MouseOn),
    "mouse_off": _constant(MouseOff),
    "busy_start": _constant(BusyStart),
    "busy_stop": _constant(BusyStop),
    "flush": _constant(Flush),
    "grid_resize": _grid_resize,
    "default_colors_set": _default_colors,
    "hl_attr_define": _hl_attr_define,
    "grid_line": _grid_line,
    "grid_clear": _grid_clear,
    "grid_destroy": _grid_destroy,
    "grid_cursor_goto": _grid_cursor_goto,
    "grid_scroll": _grid_scroll,
    "win_pos": _win_pos,
    "win_float_pos": _win_float_pos,
    "win_external_pos": _win_external_pos,
    "win_hide": _win_hide,
    "win_close": _win_close,
    "msg_set_pos": _msg_set_pos,
    "win_viewport": _win_viewport,
    "cmdline_show": _cmdline_show,
    "cmdline_pos": _cmdline_pos,
    "cmdline_special_char": _cmdline_special_char,
    "cmdline_hide": _constant(CommandLineHide),
    "cmdline_block_show": _cmdline_block_show,
    "cmdline_block_append": _cmdline_block_append,
    "cmdline_block_hide": _constant(CommandLineBlockHide),
    "msg_show": _msg_show,
    "msg_clear": _constant(MessageClear),
    "msg_showmode": _msg_showmode,
    "msg_showcmd": _msg_showcmd,
    "msg_ruler": _msg_ruler,
    "msg_history_show": _msg_history_show,
}


def parse_redraw_event(event_value: Any) -> list[RedrawEvent]:
    """Decode one ``[name, args...]`` batch of a ``redraw`` notification.

    Unknown event names (and ``set_icon``) are skipped; a malformed event
    raises ``ParseError`` naming the event.
    """
    contents = _array(event_value)
    if not contents:
        raise ParseError("event", repr(contents))
    event_name = _string(contents[0])
    parser = _PARSERS.get(event_name)

    parsed_events: list[RedrawEvent] = []
    for event in contents[1:]:
        parameters = _array(event)
        if parser is None:
            continue
        try:
            parsed_events.append(parser(list(parameters)))
        except ParseError as error:
            raise ParseError(
                "event", f"for event '{event_name}' - {parameters!r} - {error}"
            ) from error
    return parsed_events