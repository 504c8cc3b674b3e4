"""Configuration utilities and dataclasses for the OFX statement CLI."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

DEFAULT_CONFIG_PATH: Path = Path.home() / '.local/etc/ofx_statement.toml'
"""Default location for the user provided TOML configuration file."""

OUTPUT_FORMATS: tuple[str, ...] = ('csv', 'json')

CSV_COLUMNS: tuple[str, ...] = (
    'transaction_id',
    'date',
    'type',
    'amount',
    'currency',
    'name',
    'memo',
    'check_number',
)
"""Columns available in the CSV export, in their default order."""

BASE_SETTINGS: dict[str, Any] = {
    'encoding': None,
    'output_format': 'csv',
    'json_indent': 2,
    'csv_columns': list(CSV_COLUMNS),
}
"""Default settings merged with any local overrides."""


@dataclass(frozen=True, slots=True)
class StatementSettings:
    """Settings controlling how files are decoded and exported."""

    encoding: str | None
    output_format: str
    json_indent: int
    csv_columns: tuple[str, ...]


def _merge_dict(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, returning a new dictionary."""

    merged: dict[str, Any] = dict(base)
    for key, value in overrides.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = _merge_dict(merged[key], value)
        else:
            merged[key] = value
    return merged


def _prepare_settings(raw: Mapping[str, Any]) -> StatementSettings:
    """Convert a raw dictionary into ``StatementSettings`` with proper types."""

    encoding = raw.get('encoding')
    output_format = str(raw.get('output_format', 'csv')).lower()
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f'Unsupported output format: {output_format}')
    columns = tuple(str(column) for column in raw.get('csv_columns', CSV_COLUMNS))
    unknown = [column for column in columns if column not in CSV_COLUMNS]
    if unknown:
        raise ValueError(f'Unknown CSV columns: {", ".join(unknown)}')
    return StatementSettings(
        encoding=str(encoding) if encoding else None,
        output_format=output_format,
        json_indent=int(raw.get('json_indent', 2)),
        csv_columns=columns,
    )


def default_settings() -> StatementSettings:
    """Return settings built purely from ``BASE_SETTINGS``."""

    return _prepare_settings(BASE_SETTINGS)


def load_settings(path: Path | None = None) -> StatementSettings:
    """Load ``StatementSettings`` from the provided TOML file path.

    An explicit ``path`` must exist; the default location is optional.
    """
    config_path = (path or DEFAULT_CONFIG_PATH).expanduser()
    if not config_path.is_file():
        if path is None:
            return default_settings()
        raise FileNotFoundError(f'Configuration file not found: {config_path}')

    with config_path.open('rb') as handle:
        overrides = tomllib.load(handle)

    return _prepare_settings(_merge_dict(BASE_SETTINGS, overrides))
