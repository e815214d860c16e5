import pytest

from neovide.bridge.clipboard import format_copy, format_paste


def test_line_paste_strips_carriage_returns():
    assert format_paste("a\r\nb\n") == [["a", "b", ""], "V"]


def test_character_paste():
    assert format_paste("a\nb") == [["a", "b"], "v"]


def test_dos_format_keeps_carriage_returns():
    assert format_paste("a\nb", "dos") == [["a\r", "b"], "v"]


def test_unix_format_same_as_none():
    assert format_paste("x\ny\n", "unix") == format_paste("x\ny\n")


def test_copy_joins_and_strips():
    assert format_copy(["a", "b\r"], "\n") == "a\nb"


def test_copy_skips_non_strings():
    assert format_copy(["a", 3, None, "b"], "\r\n") == "a\r\nb"


def test_copy_requires_array():
    with pytest.raises(ValueError):
        format_copy("not a list", "\n")


@pytest.mark.parametrize("text", ["one", "one\ntwo", "one\ntwo\n", ""])
def test_round_trip(text):
    lines, _mode = format_paste(text)
    assert format_copy(lines, "\n") == text