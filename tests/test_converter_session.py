import pytest

from converter_session import ConverterSession, parse_number
from unit_converter import ConversionCategory


@pytest.fixture
def session():
    return ConverterSession()


def test_starts_on_length_defaults(session):
    assert session.category is ConversionCategory.LENGTH
    assert (session.unit_from, session.unit_to) == ("m", "ft")
    assert session.input == ""
    assert session.result == "0"


def test_category_change_resets_input_and_units(session):
    session.set_input("12")
    session.set_category("temperature")
    assert session.input == ""
    assert (session.unit_from, session.unit_to) == ("C", "F")
    assert session.result == "32"


def test_swap_keeps_input(session):
    session.set_category(ConversionCategory.DATA)
    session.set_input("1")
    assert session.result == "0.001"
    session.swap_units()
    assert (session.unit_from, session.unit_to) == ("GB", "MB")
    assert session.input == "1"
    assert session.result == "1024"


def test_temperature_result(session):
    session.set_category("temperature")
    session.set_input("100")
    assert session.result == "212"


def test_length_result_is_rounded_to_four_decimals(session):
    session.set_input("1")
    assert session.result == "3.2808"


def test_keypad_digits_and_single_decimal_point(session):
    for token in ["1", ".", "5", ".", "0"]:
        session.handle_input(token)
    assert session.input == "1.50"


def test_operators_are_ignored(session):
    for token in ["2", "+", "×", "÷", "(", "√", "x²", "Mod", "²"]:
        session.handle_input(token)
    assert session.input == "2"


def test_delete_and_clear_tokens(session):
    for token in ["4", "2"]:
        session.handle_input(token)
    session.handle_input("DEL")
    assert session.input == "4"
    session.handle_input("C")
    assert session.input == ""


@pytest.mark.parametrize("text", ["", ".", "abc", "1.2.3", "nan", "inf"])
def test_unparsable_input_reads_as_zero(session, text):
    session.set_input(text)
    assert session.result == "0"


def test_parse_number():
    assert parse_number("2.5") == 2.5
    assert parse_number("-3") == -3
    assert parse_number("x") == 0


def test_set_units_within_category(session):
    session.set_units("km", "mi")
    session.set_input("1.609344")
    assert session.result == "1"


def test_set_units_rejects_other_categories(session):
    with pytest.raises(ValueError):
        session.set_units("kg", "m")
    assert (session.unit_from, session.unit_to) == ("m", "ft")
