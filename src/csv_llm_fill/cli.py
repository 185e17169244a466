"""
CLI interface for csv-llm-fill.

Lists the columns of the configured input table, or fills one column using
Perplexity or GPT and writes the result to the configured output file.
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from csv_llm_fill.config.settings import Settings
from csv_llm_fill.connectors import PROVIDERS, create_connector
from csv_llm_fill.errors import CsvLlmFillError
from csv_llm_fill.fill import FillResult, fill_column
from csv_llm_fill.loaders.table_loader import Table, read_table, write_table
from csv_llm_fill.utils.logger import setup_logging

logger = logging.getLogger(__name__)

EPILOG = """
Examples:
  # List all columns with their indices
  csv-llm-fill columns

  # Use Perplexity on column 3, only filling empty cells
  csv-llm-fill perplexity 3 "What is the capital of column_0?"

  # Use GPT on column 4 (always overwrites)
  csv-llm-fill gpt 4 "Summarize: column_1"

  # Preview resolved prompts without calling the API
  csv-llm-fill perplexity 3 "Describe column_0" --dry-run

  # Debug logging (before or after the command)
  csv-llm-fill gpt 4 "Summarize: column_1" --verbose

Notes:
  - Column indices are zero-based (0, 1, 2, ...).
  - A column index past the end of a row creates the missing cells.
  - column_N in the prompt is replaced by that row's value in column N.
  - Failures are logged per row and do not stop the run.
  - Configuration comes from environment variables or a .env file
    (CSV_SEPARATOR, INPUT_CSV_FILE, OUTPUT_CSV_FILE, ...).
"""


class UsageErrorParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f'{self.prog}: error: {message}\n')


def non_negative_int(value: str) -> int:
    """argparse type for zero-based column indices."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f'invalid column index: {value!r}') from None
    if number < 0:
        raise argparse.ArgumentTypeError(f'column index must not be negative: {value}')
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = UsageErrorParser(
        prog='csv-llm-fill',
        description='Fill a column of a delimited text table using an LLM',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging',
    )

    # Also accepted after the command; only set when given there.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        '--verbose',
        action='store_true',
        default=argparse.SUPPRESS,
        help='Enable verbose logging',
    )

    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')
    subparsers.required = True

    subparsers.add_parser(
        'columns',
        parents=[common],
        help='List all columns with their indices',
    )

    for provider in PROVIDERS:
        fill_parser = subparsers.add_parser(
            provider,
            parents=[common],
            help=f'Fill a column using {provider}',
        )
        fill_parser.add_argument(
            'col_index',
            type=non_negative_int,
            metavar='COL_INDEX',
            help='Zero-based index of the column to fill',
        )
        fill_parser.add_argument(
            'prompt',
            metavar='PROMPT',
            help='Prompt template; column_N is replaced by the row value',
        )
        fill_parser.add_argument(
            '--force',
            action='store_true',
            help='Also overwrite cells that already hold a value',
        )
        fill_parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Print resolved prompts without calling the API or writing output',
        )

    return parser


def list_columns(table: Table) -> None:
    """Print '<index> - <label>' for each column of the table."""
    if table.is_empty:
        print('No columns found (table is empty).')
        return

    for idx, label in enumerate(table.column_labels()):
        print(f'{idx} - {label}')


def run_columns(settings: Settings) -> int:
    table = read_table(
        settings.input_csv_file,
        settings.csv_separator,
        has_headers=settings.csv_has_headers,
        skip_lines=settings.skip_initial_lines,
    )
    list_columns(table)
    return 0


def run_fill(
    settings: Settings,
    provider: str,
    col_index: int,
    prompt: str,
    force: bool = False,
    dry_run: bool = False,
) -> FillResult:
    """
    Fill a column of the input table and write the output file.

    Args:
        settings: Resolved settings
        provider: 'perplexity' or 'gpt'
        col_index: Zero-based column to fill
        prompt: Prompt template
        force: Overwrite filled cells
        dry_run: Preview prompts only, write nothing

    Returns:
        FillResult with statistics

    Raises:
        OutputExistsError: If the output file already exists
    """
    if not dry_run:
        settings.ensure_output_available()

    table = read_table(
        settings.input_csv_file,
        settings.csv_separator,
        has_headers=settings.csv_has_headers,
        skip_lines=settings.skip_initial_lines,
    )
    logger.info(f'Loaded {len(table)} rows from {settings.input_csv_file}')

    with create_connector(provider, settings) as connector:
        result = fill_column(
            table,
            col_index,
            prompt,
            connector,
            force=force,
            dry_run=dry_run,
        )

    if dry_run:
        print(f'\nDry run: {result.previewed_rows} prompts previewed, no output written.')
        return result

    write_table(table, settings.output_csv_file, settings.csv_separator)

    print(f"Finished processing. Updated CSV written to '{settings.output_csv_file}'.")
    print('\n=== Fill Summary ===')
    print(f'Total rows: {result.total_rows}')
    print(f'Filled:     {result.filled_rows}')
    print(f'Skipped:    {result.skipped_rows}')
    print(f'Errors:     {result.error_rows}')

    return result


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
    except CsvLlmFillError as e:
        setup_logging('DEBUG' if args.verbose else 'INFO')
        logger.error(f'Configuration error: {e}')
        return 1

    setup_logging('DEBUG' if args.verbose else settings.log_level, settings.log_file)

    try:
        if args.command == 'columns':
            return run_columns(settings)

        run_fill(
            settings,
            args.command,
            args.col_index,
            args.prompt,
            force=args.force,
            dry_run=args.dry_run,
        )
    except CsvLlmFillError as e:
        logger.error(f'Error: {e}')
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
