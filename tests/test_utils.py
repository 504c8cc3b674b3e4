import xml.etree.ElementTree as ET
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from ofx_statement.errors import MalformedAmount, MalformedDate
from ofx_statement.utils import find_text, parse_amount, parse_date, parse_optional_date


def test_parse_date_only_day() -> None:
    assert parse_date('20240131') == datetime(2024, 1, 31)


def test_parse_date_with_time_and_offset() -> None:
    parsed = parse_date('20240131153045[-3:BRT]')
    assert parsed == datetime(2024, 1, 31, 15, 30, 45, tzinfo=timezone(timedelta(hours=-3)))
    assert parsed.utcoffset() == timedelta(hours=-3)


def test_parse_date_with_fraction_and_offset_without_name() -> None:
    parsed = parse_date('20240301083015.123[+5.30]')
    assert parsed.microsecond == 123000
    assert parsed.utcoffset() == timedelta(hours=5, minutes=30)


def test_parse_date_offset_fraction_is_minutes() -> None:
    assert parse_date('20240131120000[+5.30:IST]').utcoffset() == timedelta(hours=5, minutes=30)
    assert parse_date('20240131120000[-3.30:NST]').utcoffset() == -timedelta(hours=3, minutes=30)
    assert parse_date('20240131120000[+5.45:NPT]').utcoffset() == timedelta(hours=5, minutes=45)


def test_parse_date_padded_offset() -> None:
    assert parse_date('20240131100000[-03:EST]').utcoffset() == timedelta(hours=-3)


@pytest.mark.parametrize(
    'value',
    [None, '', '2024', '2024-01-31', '20241301', '20240131[-99:XXX]', '20240131[+5.5:IST]'],
)
def test_parse_date_malformed(value: str | None) -> None:
    with pytest.raises(MalformedDate):
        parse_date(value)


def test_malformed_date_is_value_error() -> None:
    with pytest.raises(ValueError, match='Unsupported OFX date'):
        parse_date('yesterday')


def test_parse_optional_date() -> None:
    assert parse_optional_date(None) is None
    assert parse_optional_date('20240102') == datetime(2024, 1, 2)


@pytest.mark.parametrize(
    ('value', 'expected'),
    [
        ('-20.5', Decimal('-20.5')),
        ('100', Decimal('100')),
        (' 2364,10 ', Decimal('2364.10')),
        ('+0.87', Decimal('0.87')),
    ],
)
def test_parse_amount(value: str, expected: Decimal) -> None:
    assert parse_amount(value) == expected


@pytest.mark.parametrize('value', [None, '', 'abc', 'NaN', '1.000,50'])
def test_parse_amount_malformed(value: str | None) -> None:
    with pytest.raises(MalformedAmount):
        parse_amount(value)


def test_find_text() -> None:
    node = ET.fromstring('<A><B> value </B><C>   </C><D/></A>')
    assert find_text(node, 'B') == 'value'
    assert find_text(node, 'C') is None
    assert find_text(node, 'D') is None
    assert find_text(node, 'E') is None
