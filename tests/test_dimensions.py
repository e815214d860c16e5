import pytest

from neovide.dimensions import Dimensions


def test_parse_geometry():
    assert Dimensions.parse("42x24") == Dimensions(width=42, height=24)


def test_parse_size():
    assert Dimensions.parse("420x240") == Dimensions(420, 240)


@pytest.mark.parametrize("dims", [Dimensions(1, 1), Dimensions(42, 24), Dimensions(1920, 7)])
def test_str_round_trip(dims):
    assert Dimensions.parse(str(dims)) == dims


def test_str_format():
    assert str(Dimensions(42, 24)) == "42x24"


@pytest.mark.parametrize("text", ["", "42", "42x", "x24", "42x24x3", "ax24", "42 x24", "-1x5", "4.2x24"])
def test_invalid_format(text):
    with pytest.raises(ValueError, match="Invalid geometry"):
        Dimensions.parse(text)


@pytest.mark.parametrize("text", ["0x24", "42x0", "0x0"])
def test_zero_dimension(text):
    with pytest.raises(ValueError, match="should be greater than 0"):
        Dimensions.parse(text)


def test_overflow_is_invalid():
    with pytest.raises(ValueError, match="Invalid geometry"):
        Dimensions.parse(f"{2**64}x10")


def test_as_tuple():
    assert Dimensions(42, 24).as_tuple() == (42, 24)


def test_multiply_then_divide_round_trip():
    a = Dimensions(7, 11)
    b = Dimensions(3, 5)
    assert (a * b) // b == a
    assert (a * b) // a == b


def test_tuple_times_dimensions_matches_product():
    a = Dimensions(2, 3)
    b = Dimensions(4, 5)
    assert a.as_tuple() * b == (a * b).as_tuple()


def test_division_by_zero():
    with pytest.raises(ZeroDivisionError):
        Dimensions(4, 4) // Dimensions(0, 1)


def test_multiply_with_other_type():
    with pytest.raises(TypeError):
        Dimensions(1, 2) * 3