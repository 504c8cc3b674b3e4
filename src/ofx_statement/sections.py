"""Builders for the sign-on, account and balance sections."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ofx_statement.models import AccountIdentity, AccountType, Balance, BalanceSnapshot, BankAccountType, SignOn
from ofx_statement.utils import find_text, parse_amount, parse_date

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from xml.etree.ElementTree import Element

LOGGER = logging.getLogger(__name__)


def _status_code(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        LOGGER.warning('Ignoring non-numeric sign-on status code %r', value)
        return None


def _account_kind(value: str | None) -> BankAccountType | None:
    if value is None:
        return None
    try:
        return BankAccountType(value.upper())
    except ValueError:
        LOGGER.warning('Unknown bank account type %r', value)
        return None


def build_signon(node: Element) -> SignOn:
    """Create a ``SignOn`` from a ``SONRS`` element."""

    return SignOn(
        server_date=parse_date(find_text(node, 'DTSERVER')),
        status_code=_status_code(find_text(node, 'STATUS/CODE')),
        status_severity=find_text(node, 'STATUS/SEVERITY'),
        language=find_text(node, 'LANGUAGE'),
        institution=find_text(node, 'FI/ORG'),
        institution_id=find_text(node, 'FI/FID'),
        intu_bid=find_text(node, 'INTU.BID'),
    )


def build_account(node: Element, account_type: AccountType) -> AccountIdentity:
    """Create an ``AccountIdentity`` from a ``BANKACCTFROM``/``CCACCTFROM`` style element.

    Bank routing details are only read for bank accounts; credit card
    accounts keep them as ``None``.
    """
    if account_type is AccountType.BANK:
        return AccountIdentity(
            account_type=account_type,
            account_id=find_text(node, 'ACCTID'),
            bank_id=find_text(node, 'BANKID'),
            branch_id=find_text(node, 'BRANCHID'),
            account_kind=_account_kind(find_text(node, 'ACCTTYPE')),
        )
    return AccountIdentity(
        account_type=account_type,
        account_id=find_text(node, 'ACCTID'),
        account_key=find_text(node, 'ACCTKEY'),
    )


def build_balance(node: Element) -> Balance:
    """Create a ``Balance`` from a ``LEDGERBAL``/``AVAILBAL`` element."""

    return Balance(
        amount=parse_amount(find_text(node, 'BALAMT')),
        as_of=parse_date(find_text(node, 'DTASOF')),
    )


def build_balance_snapshot(ledger: Element, available: Element | None) -> BalanceSnapshot:
    """Combine the ledger and optional available balance elements."""

    return BalanceSnapshot(
        ledger=build_balance(ledger),
        available=build_balance(available) if available is not None else None,
    )
