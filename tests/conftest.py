from collections.abc import Callable
from pathlib import Path

import pytest

DATA_DIR = Path(__file__).parent / 'data'

_TRANSACTIONS = (
    ('DEBIT', '20240105', '-3.50', 'T1', 'Coffee'),
    ('DEBIT', '20240110', '-1200.00', 'T2', 'Rent'),
    ('CREDIT', '20240125', '2500.00', 'T3', 'Salary'),
)


def _statement_xml(
    *,
    credit_card: bool = False,
    currency: bool = True,
    signon: bool = True,
    account: bool = True,
    tranlist: bool = True,
    ledger: bool = True,
    available: bool = True,
) -> str:
    msgset, trnrs, stmtrs, acctfrom = (
        ('CREDITCARDMSGSRSV1', 'CCSTMTTRNRS', 'CCSTMTRS', 'CCACCTFROM')
        if credit_card
        else ('BANKMSGSRSV1', 'STMTTRNRS', 'STMTRS', 'BANKACCTFROM')
    )
    parts = ['<OFX>']
    if signon:
        parts.append(
            '<SIGNONMSGSRSV1><SONRS><STATUS><CODE>0</CODE><SEVERITY>INFO</SEVERITY></STATUS>'
            '<DTSERVER>20240131</DTSERVER><LANGUAGE>ENG</LANGUAGE></SONRS></SIGNONMSGSRSV1>'
        )
    parts.append(f'<{msgset}><{trnrs}><TRNUID>1</TRNUID><{stmtrs}>')
    if currency:
        parts.append('<CURDEF>USD</CURDEF>')
    if account:
        if credit_card:
            parts.append(f'<{acctfrom}><ACCTID>4000123412341234</ACCTID></{acctfrom}>')
        else:
            parts.append(
                f'<{acctfrom}><BANKID>121000248</BANKID><ACCTID>555000111</ACCTID>'
                f'<ACCTTYPE>CHECKING</ACCTTYPE></{acctfrom}>'
            )
    if tranlist:
        parts.append('<BANKTRANLIST><DTSTART>20240101</DTSTART><DTEND>20240131</DTEND>')
        for trntype, posted, amount, fitid, name in _TRANSACTIONS:
            parts.append(
                f'<STMTTRN><TRNTYPE>{trntype}</TRNTYPE><DTPOSTED>{posted}</DTPOSTED>'
                f'<TRNAMT>{amount}</TRNAMT><FITID>{fitid}</FITID><NAME>{name}</NAME></STMTTRN>'
            )
        parts.append('</BANKTRANLIST>')
    if ledger:
        parts.append('<LEDGERBAL><BALAMT>1296.50</BALAMT><DTASOF>20240131</DTASOF></LEDGERBAL>')
    if available:
        parts.append('<AVAILBAL><BALAMT>1200.00</BALAMT><DTASOF>20240131</DTASOF></AVAILBAL>')
    parts.append(f'</{stmtrs}></{trnrs}></{msgset}></OFX>')
    return ''.join(parts)


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture
def statement_xml() -> Callable[..., str]:
    """Build a small XML statement; keyword flags drop individual sections."""

    return _statement_xml
