"""Value conversion helpers shared by the OFX statement modules."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING

from ofx_statement.errors import MalformedAmount, MalformedDate
from ofxtools.utils import gmt_offset

if TYPE_CHECKING:  # pragma: no cover
    from xml.etree.ElementTree import Element

DATE_PATTERN = re.compile(
    r'^(?P<year>\d{4})(?P<month>\d{2})(?P<day>\d{2})'
    r'(?:(?P<hour>\d{2})(?P<minute>\d{2})(?:(?P<second>\d{2})(?:\.(?P<fraction>\d{1,6}))?)?)?'
    r'\s*(?:\[(?P<offset_hours>[+-]?\d{1,2})(?:\.(?P<offset_minutes>\d{2}))?(?::(?P<zone>[^\]]*))?\])?$'
)
"""OFX date format: ``YYYYMMDD[HHMM[SS[.XXX]]][[hours[.minutes][:TZ]]]``."""


def find_text(node: Element, path: str) -> str | None:
    """Return the stripped text of ``path`` below ``node`` or ``None`` when empty/absent."""

    child = node.find(path)
    if child is None or child.text is None:
        return None
    text = child.text.strip()
    return text or None


def parse_date(value: str | None) -> datetime:
    """Convert an OFX date string into a ``datetime``.

    Args:
        value: Raw OFX date text, e.g. ``20240131120000[-3:BRT]``.

    Returns:
        A naive ``datetime`` when the value carries no offset, otherwise an
        aware one using the bracketed GMT offset.

    Raises:
        MalformedDate: ``value`` is missing, too short or not a valid calendar date.
    """
    if not value:
        raise MalformedDate('Missing OFX date value')
    match = DATE_PATTERN.match(value.strip())
    if match is None:
        raise MalformedDate(f'Unsupported OFX date value: {value!r}')

    parts = match.groupdict()
    fraction = parts['fraction'] or ''
    try:
        tzinfo: timezone | None = None
        if parts['offset_hours'] is not None:
            tzinfo = timezone(gmt_offset(int(parts['offset_hours']), int(parts['offset_minutes'] or 0)))
        return datetime(
            int(parts['year']),
            int(parts['month']),
            int(parts['day']),
            int(parts['hour'] or 0),
            int(parts['minute'] or 0),
            int(parts['second'] or 0),
            int(fraction.ljust(6, '0')) if fraction else 0,
            tzinfo=tzinfo,
        )
    except ValueError as exc:
        raise MalformedDate(f'Unsupported OFX date value: {value!r}') from exc


def parse_optional_date(value: str | None) -> datetime | None:
    """Like ``parse_date`` but returns ``None`` for missing values."""

    if value is None:
        return None
    return parse_date(value)


def parse_amount(value: str | None) -> Decimal:
    """Convert an OFX amount into a signed ``Decimal``.

    OFX allows a comma as the decimal separator, so ``-10,50`` is accepted.
    """
    if not value:
        raise MalformedAmount('Missing OFX amount value')
    cleaned = value.strip().replace(' ', '')
    if ',' in cleaned and '.' not in cleaned:
        cleaned = cleaned.replace(',', '.')
    try:
        amount = Decimal(cleaned)
    except InvalidOperation as exc:
        raise MalformedAmount(f'Unsupported OFX amount value: {value!r}') from exc
    if not amount.is_finite():
        raise MalformedAmount(f'Unsupported OFX amount value: {value!r}')
    return amount
