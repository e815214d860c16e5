import pytest

from neovide.bridge.events import (
    CommandLineShow,
    CursorGoto,
    DefaultColorsSet,
    EditorMode,
    Flush,
    GridLine,
    GridLineCell,
    GuiOption,
    MessageHistoryShow,
    MessageKind,
    MessageShow,
    ModeChange,
    OptionSet,
    ParseError,
    Resize,
    Scroll,
    SetTitle,
    WindowAnchor,
    WindowFloatPosition,
    WindowViewport,
    unpack_color,
)
from neovide.bridge.redraw import (
    parse_grid_line_cell,
    parse_redraw_event,
    parse_style,
    parse_styled_content,
)
from neovide.editor.cursor import CursorShape
from neovide.editor.style import Colors, UnderlineStyle


def test_grid_resize_batch():
    events = parse_redraw_event(["grid_resize", [1, 80, 24], [2, 10, 5]])
    assert events == [Resize(1, 80, 24), Resize(2, 10, 5)]


def test_unknown_and_ignored_events_are_skipped():
    assert parse_redraw_event(["something_new", [1, 2]]) == []
    assert parse_redraw_event(["set_icon", ["icon"]]) == []


def test_flush_and_title():
    assert parse_redraw_event(["flush", []]) == [Flush()]
    assert parse_redraw_event(["set_title", ["hello"]]) == [SetTitle("hello")]


def test_empty_event_is_an_error():
    with pytest.raises(ParseError) as info:
        parse_redraw_event([])
    assert info.value.kind == "event"


def test_non_array_event_is_an_error():
    with pytest.raises(ParseError) as info:
        parse_redraw_event("flush")
    assert info.value.kind == "array"


def test_bad_parameter_is_wrapped_with_event_name():
    with pytest.raises(ParseError) as info:
        parse_redraw_event(["grid_resize", [1, "x", 24]])
    assert info.value.kind == "event"
    assert "grid_resize" in str(info.value)


def test_too_few_parameters():
    with pytest.raises(ParseError):
        parse_redraw_event(["grid_cursor_goto", [1, 2]])


def test_negative_u64_rejected():
    with pytest.raises(ParseError):
        parse_redraw_event(["grid_cursor_goto", [1, -2, 3]])


def test_cursor_goto_and_scroll():
    assert parse_redraw_event(["grid_cursor_goto", [1, 2, 3]]) == [CursorGoto(1, 2, 3)]
    assert parse_redraw_event(["grid_scroll", [1, 0, 10, 0, 20, -3, 0]]) == [
        Scroll(1, 0, 10, 0, 20, -3, 0)
    ]


def test_grid_line_cells():
    events = parse_redraw_event(["grid_line", [1, 2, 3, [["a", 5, 2], ["b"], [" ", 0]]]])
    assert events == [
        GridLine(1, 2, 3, [GridLineCell("a", 5, 2), GridLineCell("b"), GridLineCell(" ", 0)])
    ]


def test_grid_line_cell_requires_text():
    with pytest.raises(ParseError):
        parse_grid_line_cell([])


def test_parse_style_attributes():
    style = parse_style(
        {"foreground": 0xFF0000, "bold": True, "underline": True, "blend": 20, "mystery": 1}
    )
    assert style.colors.foreground == unpack_color(0xFF0000)
    assert style.colors.background is None
    assert style.bold is True
    assert style.italic is False
    assert style.underline is UnderlineStyle.UNDERLINE
    assert style.blend == 20


@pytest.mark.parametrize(
    "name, expected",
    [
        ("undercurl", UnderlineStyle.UNDER_CURL),
        ("underdot", UnderlineStyle.UNDER_DOT),
        ("underdotted", UnderlineStyle.UNDER_DOT),
        ("underdash", UnderlineStyle.UNDER_DASH),
        ("underdashed", UnderlineStyle.UNDER_DASH),
        ("underdouble", UnderlineStyle.UNDER_DOUBLE),
        ("underlineline", UnderlineStyle.UNDER_DOUBLE),
    ],
)
def test_parse_style_underlines(name, expected):
    assert parse_style({name: True}).underline is expected


def test_parse_style_false_underline_ignored():
    assert parse_style({"underline": False}).underline is None


def test_parse_style_requires_map():
    with pytest.raises(ParseError) as info:
        parse_style([1, 2])
    assert info.value.kind == "map"


def test_hl_attr_define():
    (event,) = parse_redraw_event(["hl_attr_define", [7, {"italic": True}, {}, []]])
    assert event.id == 7
    assert event.style.italic is True


def test_option_set_known_and_unknown():
    assert parse_redraw_event(["option_set", ["guifont", "Fira:h12"]]) == [
        OptionSet(GuiOption("guifont", "Fira:h12"))
    ]
    (event,) = parse_redraw_event(["option_set", ["newopt", [1, 2]]])
    assert event.gui_option == GuiOption("newopt", [1, 2])
    assert event.gui_option.known is False


def test_option_set_wrong_type():
    with pytest.raises(ParseError):
        parse_redraw_event(["option_set", ["linespace", "wide"]])


def test_mode_change():
    assert parse_redraw_event(["mode_change", ["cmdline_normal", 4]]) == [
        ModeChange(EditorMode.parse("cmdline_normal"), 4)
    ]


def test_mode_info_set():
    (event,) = parse_redraw_event(
        ["mode_info_set", [True, [{"cursor_shape": "vertical", "cell_percentage": 25, "attr_id": 3}]]]
    )
    (mode,) = event.cursor_modes
    assert mode.shape is CursorShape.VERTICAL
    assert mode.cell_percentage == pytest.approx(0.25)
    assert mode.style_id == 3
    assert mode.blinkon is None


def test_default_colors_set():
    assert parse_redraw_event(["default_colors_set", [0xFFFFFF, 0, 0xFF0000, 1, 2]]) == [
        DefaultColorsSet(Colors(unpack_color(0xFFFFFF), unpack_color(0), unpack_color(0xFF0000)))
    ]


def test_win_float_pos_optional_sort_order():
    (without,) = parse_redraw_event(["win_float_pos", [2, None, "NE", 1, 1.5, 4.0, True]])
    assert without == WindowFloatPosition(2, WindowAnchor.NORTH_EAST, 1, 1.5, 4.0, True, None)
    (with_order,) = parse_redraw_event(["win_float_pos", [2, None, "SW", 1, 1.5, 4.0, False, 9]])
    assert with_order.sort_order == 9
    assert with_order.anchor is WindowAnchor.SOUTH_WEST


def test_win_float_pos_bad_anchor():
    with pytest.raises(ParseError) as info:
        parse_redraw_event(["win_float_pos", [2, None, "XX", 1, 1.5, 4.0, True]])
    assert "window anchor" in str(info.value)


def test_win_viewport_optional_values():
    (short,) = parse_redraw_event(["win_viewport", [2, None, 0, 10, 3, 4]])
    assert short == WindowViewport(2, 0.0, 10.0, 3.0, 4.0, None, None)
    (full,) = parse_redraw_event(["win_viewport", [2, None, 0, 10, 3, 4, 100, -2]])
    assert full.line_count == 100.0
    assert full.scroll_delta == -2.0


def test_msg_show():
    assert parse_redraw_event(["msg_show", ["emsg", [[1, "E1"]], False]]) == [
        MessageShow(MessageKind.ERROR, [(1, "E1")], False)
    ]


def test_msg_history_show():
    assert parse_redraw_event(["msg_history_show", [[["echo", [[0, "hi"]]]]]]) == [
        MessageHistoryShow([(MessageKind.ECHO, [(0, "hi")])])
    ]


def test_cmdline_show():
    assert parse_redraw_event(["cmdline_show", [[[0, "wq"]], 2, ":", "", 0, 1]]) == [
        CommandLineShow([(0, "wq")], 2, ":", "", 0, 1)
    ]


def test_styled_content_invalid_chunk():
    assert parse_styled_content([[1, "a"], [2, "b"]]) == [(1, "a"), (2, "b")]
    with pytest.raises(ParseError):
        parse_styled_content([[1]])