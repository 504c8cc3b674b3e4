"""Command-line interface for OFX statement parsing."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from ofx_statement import __version__ as pkg_version
from ofx_statement.config import OUTPUT_FORMATS, StatementSettings, load_settings
from ofx_statement.detect import gather_jobs
from ofx_statement.errors import OfxError
from ofx_statement.models import ProcessingJob, StatementDocument
from ofx_statement.output import write_output
from ofx_statement.parser import parse_file

LOGGER = logging.getLogger('ofx_statement')


def _configure_logging(args: argparse.Namespace) -> None:
    """Attach a stdout handler to the package logger honoring ``--quiet``/``--verbose``."""

    if not LOGGER.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        LOGGER.addHandler(handler)
    if args.quiet:
        LOGGER.setLevel(logging.ERROR)
    elif args.verbose:
        LOGGER.setLevel(logging.DEBUG)
    else:
        LOGGER.setLevel(logging.INFO)
    LOGGER.propagate = False


def _resolve_settings(args: argparse.Namespace) -> StatementSettings:
    settings = load_settings(args.config)
    if args.encoding:
        settings = replace(settings, encoding=args.encoding)
    if args.format:
        settings = replace(settings, output_format=args.format)
    return settings


def _destination(job: ProcessingJob, args: argparse.Namespace, settings: StatementSettings) -> Path | None:
    if args.stdout:
        return None
    if args.output:
        return Path(args.output)
    filename = f'{job.source_path.stem}.statement.{settings.output_format}'
    if args.output_dir:
        return Path(args.output_dir) / filename
    return job.source_path.with_name(filename)


def _export(
    document: StatementDocument,
    job: ProcessingJob,
    args: argparse.Namespace,
    settings: StatementSettings,
) -> str:
    destination = _destination(job, args, settings)
    if destination is not None:
        destination.parent.mkdir(parents=True, exist_ok=True)
    payload = write_output(
        document,
        output_path=destination,
        output_format=settings.output_format,
        columns=settings.csv_columns,
        indent=settings.json_indent,
    )
    if destination is not None:
        LOGGER.debug('Wrote %s', destination)
    return payload


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Parse OFX statements and export them as CSV or JSON')
    parser.add_argument('targets', nargs='+', type=Path, help='Input files or directories')
    parser.add_argument('-c', '--config', type=Path, help='Path to configuration TOML')
    parser.add_argument('-e', '--encoding', help='Text encoding of the input files (platform default if omitted)')
    parser.add_argument('-f', '--format', choices=OUTPUT_FORMATS, help='Export format')
    parser.add_argument('-o', '--output', type=Path, help='Path to write the export')
    parser.add_argument('--output-dir', type=Path, help='Directory to write per-file exports')
    parser.add_argument('--stdout', action='store_true', help='Print the export to stdout')
    parser.add_argument('-V', '--version', action='version', version=f'%(prog)s {pkg_version}')
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('-q', '--quiet', action='store_true', help='Only report errors')
    verbosity.add_argument('-v', '--verbose', action='store_true', help='Print verbose progress details')
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    _configure_logging(args)
    settings = _resolve_settings(args)
    jobs = gather_jobs(args.targets, encoding=settings.encoding)
    if args.output and len(jobs) != 1:
        raise ValueError('--output can only be used when a single file is specified')
    if args.output and args.output_dir:
        raise ValueError('Use either --output or --output-dir, not both')
    if args.stdout and len(jobs) != 1:
        raise ValueError('--stdout can only be used when a single file is specified')
    if args.stdout and (args.output or args.output_dir):
        raise ValueError('--stdout is incompatible with --output or --output-dir')

    failures = 0
    for job in jobs:
        try:
            document = parse_file(job.source_path, job.encoding)
            LOGGER.info('%s: %s', job.source_path.name, document.summary())
            payload = _export(document, job, args, settings)
        except (OfxError, OSError, UnicodeDecodeError, LookupError) as exc:
            LOGGER.error('Error processing %s: %s', job.source_path, exc)
            failures += 1
            continue
        if args.stdout:
            sys.stdout.write(payload)
    return 1 if failures else 0


if __name__ == '__main__':  # pragma: no cover
    raise SystemExit(main())
