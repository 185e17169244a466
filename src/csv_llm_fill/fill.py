"""
Column filling: one LLM call per row, written back into a target column.

Rows are processed strictly in order. A failure on one row is logged and the
batch carries on with the next row.
"""
import logging
from dataclasses import dataclass, field

from csv_llm_fill.connectors.base_connector import BaseConnector
from csv_llm_fill.loaders.table_loader import Table
from csv_llm_fill.prompts import substitute_columns

logger = logging.getLogger(__name__)

SEPARATOR_LINE = '-' * 40


@dataclass
class FillResult:
    """Result of a fill pass."""
    total_rows: int
    filled_rows: int = 0
    skipped_rows: int = 0
    previewed_rows: int = 0  # dry run only
    error_rows: int = 0
    errors: list = field(default_factory=list)


def _is_blank(value) -> bool:
    return value is None or not value.strip()


def fill_column(
    table: Table,
    col_index: int,
    prompt_template: str,
    connector: BaseConnector,
    force: bool = False,
    dry_run: bool = False,
) -> FillResult:
    """
    Fill one column of a table with LLM completions.

    A row is filled when its target cell is blank, when force is set, or
    when the connector always overwrites. The table is modified in place.

    Args:
        table: Table to update
        col_index: Zero-based target column
        prompt_template: Prompt with column_N placeholders
        connector: Provider connector used for completions
        force: Fill cells that already hold a value
        dry_run: Print resolved prompts without calling the provider

    Returns:
        FillResult with per-run counts
    """
    result = FillResult(total_rows=len(table))
    overwrite = force or connector.always_overwrite

    for row_idx, row in enumerate(table.rows):
        cell_value = table.get_cell(row_idx, col_index)

        print(SEPARATOR_LINE)
        print(f'Row {row_idx}')
        print(f"Column {col_index} cell value: {cell_value if cell_value is not None else ''}")

        if not (_is_blank(cell_value) or overwrite):
            print(f"Skipping row {row_idx} (column '{col_index}') because it's not empty")
            result.skipped_rows += 1
            continue

        try:
            prompt = substitute_columns(prompt_template, row)

            if dry_run:
                print(f'Prompt: {prompt}')
                result.previewed_rows += 1
                continue

            new_value = connector.complete(prompt)
            print(f'{connector.name} response: {new_value}')

            table.set_cell(row_idx, col_index, new_value)
            result.filled_rows += 1
        except Exception as e:
            logger.error(f"Row {row_idx} (column '{col_index}') failed: {e}")
            result.error_rows += 1
            result.errors.append({'row': row_idx, 'column': col_index, 'error': str(e)})

    logger.info(
        f'Fill complete: {result.filled_rows} filled, {result.skipped_rows} skipped, '
        f'{result.previewed_rows} previewed, {result.error_rows} errors'
    )
    return result
