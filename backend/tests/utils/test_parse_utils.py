"""
字符串解析工具测试
"""
from datetime import date
from decimal import Decimal

from backoffice.utils.parse_utils import parse_date, parse_decimal, parse_number


def test_parse_number():
    assert parse_number("12") == 12
    assert isinstance(parse_number("12.0"), int)
    assert parse_number(" 3.5 ") == 3.5
    assert parse_number("") == 0
    assert parse_number(None) == 0
    assert parse_number("abc") == 0
    assert parse_number("nan") == 0


def test_parse_decimal():
    assert parse_decimal("1.10") == Decimal("1.10")
    assert parse_decimal("") is None
    assert parse_decimal("x1") is None


def test_parse_date():
    assert parse_date("2024-03-01") == date(2024, 3, 1)
    assert parse_date("2024-03-01 12:30:00") == date(2024, 3, 1)
    assert parse_date("2024-03-01T12:30:00Z") == date(2024, 3, 1)
    assert parse_date("") is None
    assert parse_date("not-a-date") is None
