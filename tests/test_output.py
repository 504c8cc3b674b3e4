import csv
import io
import json
from collections.abc import Callable
from pathlib import Path

import pytest

from ofx_statement.models import StatementDocument
from ofx_statement.output import build_csv_payload, build_json_payload, document_to_dict, write_output
from ofx_statement.parser import parse_text


@pytest.fixture
def document(statement_xml: Callable[..., str]) -> StatementDocument:
    return parse_text(statement_xml())


def test_build_csv_payload(document: StatementDocument) -> None:
    payload = build_csv_payload(document)
    rows = list(csv.DictReader(io.StringIO(payload)))
    assert payload.splitlines()[0] == 'transaction_id,date,type,amount,currency,name,memo,check_number'
    assert len(rows) == 3
    assert rows[0]['transaction_id'] == 'T1'
    assert rows[0]['date'] == '2024-01-05'
    assert rows[0]['type'] == 'DEBIT'
    assert rows[0]['amount'] == '-3.50'
    assert rows[0]['currency'] == 'USD'
    assert rows[0]['memo'] == ''


def test_build_csv_payload_selected_columns(document: StatementDocument) -> None:
    payload = build_csv_payload(document, ['date', 'amount'])
    assert payload.splitlines()[:2] == ['date,amount', '2024-01-05,-3.50']


def test_build_csv_payload_rejects_other_types() -> None:
    with pytest.raises(TypeError):
        build_csv_payload([])  # type: ignore[arg-type]


def test_document_to_dict(document: StatementDocument) -> None:
    data = document_to_dict(document)
    assert data['account_type'] == 'bank'
    assert data['currency'] == 'USD'
    assert data['account']['account_kind'] == 'CHECKING'
    assert data['account']['branch_id'] is None
    assert data['balance']['ledger'] == {'amount': '1296.50', 'as_of': '2024-01-31T00:00:00'}
    assert data['statement_start'] == '2024-01-01T00:00:00'
    assert [txn['amount'] for txn in data['transactions']] == ['-3.50', '-1200.00', '2500.00']


def test_build_json_payload_round_trips_through_json(document: StatementDocument) -> None:
    payload = build_json_payload(document, indent=None)
    assert '\n' not in payload
    assert json.loads(payload) == document_to_dict(document)


def test_write_output_to_file(document: StatementDocument, tmp_path: Path) -> None:
    target = tmp_path / 'out.json'
    payload = write_output(document, output_path=target, output_format='json')
    assert target.read_text(encoding='utf-8') == payload
    assert json.loads(payload)['signon']['language'] == 'ENG'


def test_write_output_without_path(document: StatementDocument) -> None:
    payload = write_output(document, output_path=None)
    assert payload.startswith('transaction_id,')


def test_write_output_unknown_format(document: StatementDocument) -> None:
    with pytest.raises(ValueError, match='Unsupported output format'):
        write_output(document, output_path=None, output_format='ofx')
