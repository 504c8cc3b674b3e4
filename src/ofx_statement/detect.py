"""Dialect and account-type detection plus input discovery."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ofx_statement.errors import UnsupportedAccountType
from ofx_statement.models import AccountType, ProcessingJob

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Iterable, Iterator
    from pathlib import Path

LEGACY_HEADER_MARKER = 'OFXHEADER:100'
"""Header line that identifies the SGML-derived OFX 1.x dialect."""

ACCOUNT_MARKERS: tuple[tuple[str, AccountType], ...] = (
    ('<CREDITCARDMSGSRSV1>', AccountType.CREDIT_CARD),
    ('<BANKMSGSRSV1>', AccountType.BANK),
)
"""Message-set markers checked in order; the first match wins."""

SUPPORTED_SUFFIXES: frozenset[str] = frozenset({'.ofx', '.qfx'})
"""File suffixes picked up when scanning directories."""


def is_legacy_dialect(raw_text: str) -> bool:
    """Return ``True`` when ``raw_text`` uses the legacy SGML dialect."""

    return LEGACY_HEADER_MARKER in raw_text


def classify_account_type(raw_text: str) -> AccountType:
    """Return the ``AccountType`` of the statement contained in ``raw_text``."""

    for marker, account_type in ACCOUNT_MARKERS:
        if marker in raw_text:
            return account_type
    raise UnsupportedAccountType('Unsupported account type: no bank or credit card message set found')


def is_supported_file(path: Path) -> bool:
    """Return ``True`` if ``path`` has an OFX/QFX suffix."""

    return path.suffix.lower() in SUPPORTED_SUFFIXES


def iter_jobs(target: Path, *, encoding: str | None = None) -> Iterator[ProcessingJob]:
    """Yield ``ProcessingJob`` entries for ``target`` (file or directory)."""

    expanded = target.expanduser()
    if expanded.is_file():
        if not is_supported_file(expanded):
            raise ValueError(f'Unsupported input format: {expanded.suffix}')
        yield ProcessingJob(source_path=expanded, encoding=encoding)
        return

    if not expanded.is_dir():
        raise FileNotFoundError(f'Input path not found: {expanded}')

    for entry in sorted(expanded.iterdir()):
        if entry.is_file() and is_supported_file(entry):
            yield ProcessingJob(source_path=entry, encoding=encoding)


def gather_jobs(paths: Iterable[Path], *, encoding: str | None = None) -> list[ProcessingJob]:
    """Collect processing jobs for all provided ``paths``."""

    jobs: list[ProcessingJob] = []
    for path in paths:
        jobs.extend(iter_jobs(path, encoding=encoding))
    return jobs
