"""Entry points that turn raw OFX content into a ``StatementDocument``."""

from __future__ import annotations

import locale
import logging
from typing import TYPE_CHECKING

from ofx_statement.detect import classify_account_type, is_legacy_dialect
from ofx_statement.errors import MissingSection
from ofx_statement.models import Section, StatementDocument
from ofx_statement.normalize import load_tree, sgml_to_xml
from ofx_statement.schema import resolve_path
from ofx_statement.sections import build_account, build_balance_snapshot, build_signon
from ofx_statement.transactions import extract_transactions
from ofx_statement.utils import find_text

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from pathlib import Path

LOGGER = logging.getLogger(__name__)


def build_document(text: str) -> StatementDocument:
    """Parse decoded OFX ``text`` (legacy or XML dialect) into a ``StatementDocument``.

    Sections are resolved in a fixed order and the first missing required
    section aborts the parse:

    1. account type, from the message-set marker;
    2. currency (``CURDEF``);
    3. sign-on response;
    4. account information;
    5. transaction list, which may be absent;
    6. ledger balance, with the available balance optional.

    Raises:
        UnsupportedAccountType: no bank or credit card message set is present.
        NormalizationFailure: the content cannot be turned into a tree.
        MissingSection: a required section is absent.
        MalformedDate: a required date cannot be parsed.
        MalformedAmount: a required amount cannot be parsed.
    """
    account_type = classify_account_type(text)
    LOGGER.debug('Detected %s statement', account_type.value)

    if is_legacy_dialect(text):
        text = sgml_to_xml(text)
    root = load_tree(text)

    currency = find_text(root, resolve_path(account_type, Section.CURRENCY))
    if currency is None:
        raise MissingSection(Section.CURRENCY.value)

    signon_node = root.find(resolve_path(account_type, Section.SIGNON))
    if signon_node is None:
        raise MissingSection(Section.SIGNON.value)
    signon = build_signon(signon_node)

    account_node = root.find(resolve_path(account_type, Section.ACCOUNT_INFO))
    if account_node is None:
        raise MissingSection(Section.ACCOUNT_INFO.value)
    account = build_account(account_node, account_type)

    tranlist = extract_transactions(root, account_type, currency)

    balance_path = resolve_path(account_type, Section.BALANCE)
    ledger_node = root.find(f'{balance_path}/LEDGERBAL')
    if ledger_node is None:
        raise MissingSection(Section.BALANCE.value)
    available_node = root.find(f'{balance_path}/AVAILBAL')
    balance = build_balance_snapshot(ledger_node, available_node)

    return StatementDocument(
        account_type=account_type,
        currency=currency,
        signon=signon,
        account=account,
        balance=balance,
        statement_start=tranlist.start,
        statement_end=tranlist.end,
        transactions=tranlist.transactions,
    )


def parse_text(text: str) -> StatementDocument:
    """Parse already decoded OFX content."""

    return build_document(text)


def parse_bytes(data: bytes, encoding: str | None = None) -> StatementDocument:
    """Decode ``data`` with ``encoding`` (platform default when omitted) and parse it."""

    codec = encoding or locale.getpreferredencoding(False)
    return build_document(data.decode(codec))


def parse_file(path: Path, encoding: str | None = None) -> StatementDocument:
    """Read the OFX file at ``path`` and parse it."""

    LOGGER.debug('Reading %s', path)
    with path.open('rb') as handle:
        data = handle.read()
    return parse_bytes(data, encoding)
