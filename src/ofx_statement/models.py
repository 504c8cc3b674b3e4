"""Shared data models used across OFX statement modules."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - type-checking imports only
    from datetime import datetime
    from decimal import Decimal
    from pathlib import Path


class AccountType(str, Enum):
    """Account families a statement can belong to."""

    BANK = 'bank'
    CREDIT_CARD = 'creditcard'


class Section(str, Enum):
    """Logical statement regions whose location depends on the account type."""

    SIGNON = 'signon'
    ACCOUNT_INFO = 'account'
    TRANSACTIONS = 'transactions'
    BALANCE = 'balance'
    CURRENCY = 'currency'


class BankAccountType(str, Enum):
    """Values allowed in a bank ``ACCTTYPE`` element."""

    CHECKING = 'CHECKING'
    SAVINGS = 'SAVINGS'
    MONEYMRKT = 'MONEYMRKT'
    CREDITLINE = 'CREDITLINE'
    CD = 'CD'


class TransactionType(str, Enum):
    """Values allowed in a ``TRNTYPE`` element."""

    CREDIT = 'CREDIT'
    DEBIT = 'DEBIT'
    INT = 'INT'
    DIV = 'DIV'
    FEE = 'FEE'
    SRVCHG = 'SRVCHG'
    DEP = 'DEP'
    ATM = 'ATM'
    POS = 'POS'
    XFER = 'XFER'
    CHECK = 'CHECK'
    PAYMENT = 'PAYMENT'
    CASH = 'CASH'
    DIRECTDEP = 'DIRECTDEP'
    DIRECTDEBIT = 'DIRECTDEBIT'
    REPEATPMT = 'REPEATPMT'
    HOLD = 'HOLD'
    OTHER = 'OTHER'


@dataclass(frozen=True, slots=True)
class SignOn:
    """Sign-on response metadata (``SONRS``)."""

    server_date: datetime
    status_code: int | None = None
    status_severity: str | None = None
    language: str | None = None
    institution: str | None = None
    institution_id: str | None = None
    intu_bid: str | None = None


@dataclass(frozen=True, slots=True)
class AccountIdentity:
    """Account identity; fields that do not apply to the account type stay ``None``."""

    account_type: AccountType
    account_id: str | None
    bank_id: str | None = None
    branch_id: str | None = None
    account_kind: BankAccountType | None = None
    account_key: str | None = None


@dataclass(frozen=True, slots=True)
class Balance:
    """A balance amount together with the moment it was computed."""

    amount: Decimal
    as_of: datetime


@dataclass(frozen=True, slots=True)
class BalanceSnapshot:
    """Ledger balance plus the optional available balance."""

    ledger: Balance
    available: Balance | None = None


@dataclass(frozen=True, slots=True)
class Transaction:
    """Single statement transaction (``STMTTRN``)."""

    type: TransactionType
    posted: datetime
    amount: Decimal
    currency: str
    transaction_id: str | None = None
    name: str | None = None
    memo: str | None = None
    check_number: str | None = None
    user_date: datetime | None = None
    available_date: datetime | None = None
    server_transaction_id: str | None = None
    correct_fitid: str | None = None
    correct_action: str | None = None
    reference_number: str | None = None
    sic: str | None = None
    payee_id: str | None = None
    counterparty: AccountIdentity | None = None

    @property
    def description(self) -> str:
        """Return the payee name, falling back to the memo."""

        return self.name or self.memo or ''


@dataclass(frozen=True, slots=True)
class TransactionList:
    """Statement period and the transactions listed for it."""

    start: datetime | None = None
    end: datetime | None = None
    transactions: tuple[Transaction, ...] = ()


@dataclass(frozen=True, slots=True)
class StatementDocument:
    """Fully parsed OFX statement."""

    account_type: AccountType
    currency: str
    signon: SignOn
    account: AccountIdentity
    balance: BalanceSnapshot
    statement_start: datetime | None = None
    statement_end: datetime | None = None
    transactions: tuple[Transaction, ...] = ()

    def summary(self) -> str:
        """Return a human readable summary string for logging/UX."""

        count = len(self.transactions)
        account_text = f'account {self.account.account_id}' if self.account.account_id else 'no account id'
        return f'{self.account_type.value} statement, {account_text}: {count} transactions in {self.currency}'


@dataclass(slots=True)
class ProcessingJob:
    """An input file scheduled for parsing."""

    source_path: Path
    encoding: str | None = None
