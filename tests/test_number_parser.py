from datetime import date
from decimal import Decimal

import pytest

from agroquote.utils.date_converter import parse_iso_date, to_iso_str
from agroquote.utils.number_parser import parse_decimal


@pytest.mark.parametrize("raw, expected", [
    ("1.5", Decimal("1.5")),
    ("1,5", Decimal("1.5")),
    ("1.234,56", Decimal("1234.56")),
    ("R$ 90,00", Decimal("90.00")),
    ("  25 ", Decimal("25")),
    (3, Decimal("3")),
    (0.5, Decimal("0.5")),
    (Decimal("7.25"), Decimal("7.25")),
])
def test_parse_decimal_accepts(raw, expected):
    assert parse_decimal(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", None, "abc", "1,2,3", "1,234.56", True, "NaN", "Infinity"])
def test_parse_decimal_rejects(raw):
    with pytest.raises(ValueError):
        parse_decimal(raw, "preço")


def test_parse_decimal_message_names_the_field():
    with pytest.raises(ValueError, match="'preço'"):
        parse_decimal("", "preço")


def test_iso_dates():
    assert parse_iso_date("2024-03-15") == date(2024, 3, 15)
    assert parse_iso_date("15/03/2024") is None
    assert parse_iso_date("") is None
    assert to_iso_str(date(2024, 3, 5)) == "2024-03-05"
    assert to_iso_str(None) == "-"


def test_parse_decimal_rejects_dot_after_comma():
    with pytest.raises(ValueError, match="vírgula como separador decimal"):
        parse_decimal("1,234.56", "preço")
