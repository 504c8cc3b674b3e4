"""Output utilities for exporting parsed statements as CSV or JSON."""

from __future__ import annotations

import csv
import io
import json
from dataclasses import fields, is_dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

from ofx_statement.config import CSV_COLUMNS, OUTPUT_FORMATS
from ofx_statement.models import StatementDocument, Transaction

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Sequence


def _csv_row(txn: Transaction) -> dict[str, str]:
    return {
        'transaction_id': txn.transaction_id or '',
        'date': txn.posted.date().isoformat(),
        'type': txn.type.value,
        'amount': format(txn.amount, 'f'),
        'currency': txn.currency,
        'name': txn.name or '',
        'memo': txn.memo or '',
        'check_number': txn.check_number or '',
    }


def build_csv_payload(document: StatementDocument, columns: Sequence[str] = CSV_COLUMNS) -> str:
    """Serialize the document transactions into a CSV string, one row per transaction."""

    if not isinstance(document, StatementDocument):
        raise TypeError('document must be a StatementDocument')

    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(columns), extrasaction='ignore')
    writer.writeheader()
    for txn in document.transactions:
        writer.writerow(_csv_row(txn))
    return buffer.getvalue()


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return format(value, 'f')
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, tuple):
        return [_to_jsonable(item) for item in value]
    if is_dataclass(value) and not isinstance(value, type):
        return {item.name: _to_jsonable(getattr(value, item.name)) for item in fields(value)}
    return value


def document_to_dict(document: StatementDocument) -> dict[str, Any]:
    """Return a JSON-ready mapping of ``document``.

    Decimals become strings to keep their exact value and datetimes use ISO 8601.
    """
    return cast('dict[str, Any]', _to_jsonable(document))


def build_json_payload(document: StatementDocument, *, indent: int | None = 2) -> str:
    """Serialize the whole document as JSON."""

    return json.dumps(document_to_dict(document), indent=indent, ensure_ascii=False)


def write_output(
    document: StatementDocument,
    *,
    output_path: Path | str | None,
    output_format: str = 'csv',
    columns: Sequence[str] = CSV_COLUMNS,
    indent: int | None = 2,
) -> str:
    """Write the payload to ``output_path`` if provided and return it."""

    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f'Unsupported output format: {output_format}')

    if output_format == 'json':
        payload = build_json_payload(document, indent=indent)
    else:
        payload = build_csv_payload(document, columns)
    if output_path:
        path = Path(output_path)
        with path.open('w', encoding='utf-8', newline='') as handle:
            handle.write(payload)
    return payload
