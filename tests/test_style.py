import pytest

from neovide.editor.style import Color4f, Colors, Style, UnderlineStyle


def colors():
    return Colors(
        foreground=Color4f(0.1, 0.1, 0.1, 0.1),
        background=Color4f(0.2, 0.1, 0.1, 0.1),
        special=Color4f(0.3, 0.1, 0.1, 0.1),
    )


DEFAULT_COLORS = Colors(
    foreground=Color4f(0.1, 0.2, 0.1, 0.1),
    background=Color4f(0.2, 0.2, 0.1, 0.1),
    special=Color4f(0.3, 0.2, 0.1, 0.1),
)


def test_foreground():
    style = Style(colors())
    assert style.foreground(DEFAULT_COLORS) == colors().foreground
    style.colors.foreground = None
    assert style.foreground(DEFAULT_COLORS) == DEFAULT_COLORS.foreground


def test_foreground_reverse():
    style = Style(colors())
    style.reverse = True
    assert style.foreground(DEFAULT_COLORS) == colors().background
    style.colors.background = None
    assert style.foreground(DEFAULT_COLORS) == DEFAULT_COLORS.background


def test_background():
    style = Style(colors())
    assert style.background(DEFAULT_COLORS) == colors().background
    style.colors.background = None
    assert style.background(DEFAULT_COLORS) == DEFAULT_COLORS.background


def test_background_reverse():
    style = Style(colors())
    style.reverse = True
    assert style.background(DEFAULT_COLORS) == colors().foreground
    style.colors.foreground = None
    assert style.background(DEFAULT_COLORS) == DEFAULT_COLORS.foreground


def test_special():
    style = Style(colors())
    assert style.special(DEFAULT_COLORS) == colors().special
    style.colors.special = None
    assert style.special(DEFAULT_COLORS) == style.foreground(DEFAULT_COLORS)


def test_new_style_defaults():
    style = Style(colors())
    assert (style.reverse, style.italic, style.bold, style.strikethrough) == (
        False,
        False,
        False,
        False,
    )
    assert style.blend == 0
    assert style.underline is None


def test_styles_compare_by_value():
    assert Style(colors()) == Style(colors())
    assert Style(colors(), underline=UnderlineStyle.UNDER_CURL) != Style(colors())


def test_missing_default_colour_raises():
    style = Style(Colors())
    with pytest.raises(ValueError):
        style.foreground(Colors())