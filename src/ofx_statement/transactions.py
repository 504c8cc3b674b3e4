"""Transaction list extraction for OFX statements."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ofx_statement.models import AccountIdentity, AccountType, Section, Transaction, TransactionList, TransactionType
from ofx_statement.schema import resolve_path
from ofx_statement.sections import build_account
from ofx_statement.utils import find_text, parse_amount, parse_date, parse_optional_date

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Iterator
    from xml.etree.ElementTree import Element

LOGGER = logging.getLogger(__name__)

COUNTERPARTY_TAGS: dict[str, AccountType] = {
    'BANKACCTTO': AccountType.BANK,
    'CCACCTTO': AccountType.CREDIT_CARD,
}
"""Aggregates naming the other side of a transfer."""


def _transaction_type(value: str | None) -> TransactionType:
    if value is None:
        return TransactionType.OTHER
    try:
        return TransactionType(value.upper())
    except ValueError:
        LOGGER.warning('Unknown transaction type %r, using OTHER', value)
        return TransactionType.OTHER


def _counterparty(node: Element) -> AccountIdentity | None:
    for tag, account_type in COUNTERPARTY_TAGS.items():
        child = node.find(tag)
        if child is not None:
            return build_account(child, account_type)
    return None


def build_transaction(node: Element, currency: str) -> Transaction:
    """Create a ``Transaction`` from a ``STMTTRN`` element."""

    return Transaction(
        type=_transaction_type(find_text(node, 'TRNTYPE')),
        posted=parse_date(find_text(node, 'DTPOSTED')),
        amount=parse_amount(find_text(node, 'TRNAMT')),
        currency=currency,
        transaction_id=find_text(node, 'FITID'),
        name=find_text(node, 'NAME'),
        memo=find_text(node, 'MEMO'),
        check_number=find_text(node, 'CHECKNUM'),
        user_date=parse_optional_date(find_text(node, 'DTUSER')),
        available_date=parse_optional_date(find_text(node, 'DTAVAIL')),
        server_transaction_id=find_text(node, 'SRVRTID'),
        correct_fitid=find_text(node, 'CORRECTFITID'),
        correct_action=find_text(node, 'CORRECTACTION'),
        reference_number=find_text(node, 'REFNUM'),
        sic=find_text(node, 'SIC'),
        payee_id=find_text(node, 'PAYEEID'),
        counterparty=_counterparty(node),
    )


def iter_transactions(tranlist: Element, currency: str) -> Iterator[Transaction]:
    """Yield transactions below ``tranlist`` in document order."""

    for node in tranlist.iter('STMTTRN'):
        yield build_transaction(node, currency)


def extract_transactions(root: Element, account_type: AccountType, currency: str) -> TransactionList:
    """Return the statement period and transactions, or an empty list when the section is absent."""

    tranlist = root.find(resolve_path(account_type, Section.TRANSACTIONS))
    if tranlist is None:
        LOGGER.debug('No transaction list found for %s statement', account_type.value)
        return TransactionList()

    start = parse_date(find_text(tranlist, './/DTSTART'))
    end = parse_date(find_text(tranlist, './/DTEND'))
    transactions = tuple(iter_transactions(tranlist, currency))
    LOGGER.debug('Extracted %d transactions', len(transactions))
    return TransactionList(start=start, end=end, transactions=transactions)
