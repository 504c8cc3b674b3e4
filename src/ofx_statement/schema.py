"""Locations of the statement sections inside the OFX tree."""

from __future__ import annotations

from ofx_statement.errors import UnsupportedAccountType, UnsupportedSection
from ofx_statement.models import AccountType, Section

SIGNON_PATH = 'SIGNONMSGSRSV1/SONRS'
"""Sign-on response, shared by every account type."""

STATEMENT_PATHS: dict[AccountType, str] = {
    AccountType.BANK: 'BANKMSGSRSV1/STMTTRNRS/STMTRS',
    AccountType.CREDIT_CARD: 'CREDITCARDMSGSRSV1/CCSTMTTRNRS/CCSTMTRS',
}
"""Statement response aggregate for each account type, relative to ``<OFX>``."""

ACCOUNT_INFO_TAGS: dict[AccountType, str] = {
    AccountType.BANK: 'BANKACCTFROM',
    AccountType.CREDIT_CARD: 'CCACCTFROM',
}

SECTION_SUFFIXES: dict[Section, str] = {
    Section.BALANCE: '',
    Section.TRANSACTIONS: '/BANKTRANLIST',
    Section.CURRENCY: '/CURDEF',
}


def resolve_path(account_type: AccountType, section: Section) -> str:
    """Return the ElementPath of ``section`` for ``account_type`` statements."""

    if not isinstance(account_type, AccountType) or account_type not in STATEMENT_PATHS:
        raise UnsupportedAccountType(f'Account type not supported: {account_type!r}')
    if not isinstance(section, Section):
        raise UnsupportedSection(f'Unknown section: {section!r}')

    statement_path = STATEMENT_PATHS[account_type]
    if section is Section.SIGNON:
        return SIGNON_PATH
    if section is Section.ACCOUNT_INFO:
        return f'{statement_path}/{ACCOUNT_INFO_TAGS[account_type]}'
    if section in SECTION_SUFFIXES:
        return statement_path + SECTION_SUFFIXES[section]
    raise UnsupportedSection(f'Unknown section: {section!r}')
