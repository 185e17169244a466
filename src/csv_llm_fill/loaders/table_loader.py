"""
Reading and writing delimited text tables.

A table keeps the raw leading lines of its source file (the preamble) so they
can be reproduced byte-for-byte at the top of the output file.
"""
import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from csv_llm_fill.errors import OutputExistsError

logger = logging.getLogger(__name__)

Row = List[str]


@dataclass
class Table:
    """In-memory table with an optional header row."""
    rows: List[Row] = field(default_factory=list)
    header: Optional[Row] = None
    preamble: List[str] = field(default_factory=list)

    @property
    def has_headers(self) -> bool:
        return self.header is not None

    @property
    def is_empty(self) -> bool:
        return not self.rows and not self.header

    def __len__(self) -> int:
        return len(self.rows)

    def get_cell(self, row_index: int, col_index: int) -> Optional[str]:
        """Return a cell value, or None if the row is shorter than col_index."""
        row = self.rows[row_index]
        if col_index < len(row):
            return row[col_index]
        return None

    def set_cell(self, row_index: int, col_index: int, value: str) -> None:
        """
        Set a cell value, growing the row (and header) as needed.

        Args:
            row_index: Zero-based row position
            col_index: Zero-based column position
            value: New cell value
        """
        row = self.rows[row_index]
        _grow(row, col_index + 1)
        row[col_index] = value
        if self.header is not None:
            _grow(self.header, col_index + 1)

    def column_labels(self) -> List[str]:
        """
        Labels for each column: header cells, or the first row's cells.

        Returns:
            List of labels (empty if the table has no header and no rows)
        """
        if self.header is not None:
            return list(self.header)
        if self.rows:
            return list(self.rows[0])
        return []


def _grow(row: Row, width: int) -> None:
    if len(row) < width:
        row.extend([''] * (width - len(row)))


def read_table(
    file_path: Union[str, Path],
    delimiter: str,
    has_headers: bool = False,
    skip_lines: int = 0,
) -> Table:
    """
    Parse a delimited text file into a Table.

    The first skip_lines lines are kept verbatim as the table preamble and are
    not parsed. Rows of differing widths are accepted as-is.

    Args:
        file_path: Path to the input file
        delimiter: Single-character field separator
        has_headers: Treat the first parsed record as the header row
        skip_lines: Number of leading raw lines to pass through unparsed

    Returns:
        Parsed Table (empty if the file does not exist)
    """
    path = Path(file_path)
    try:
        with open(path, 'r', encoding='utf-8', newline='') as f:
            lines = f.readlines()
    except FileNotFoundError:
        logger.warning(
            f"Input CSV file '{path}' not found. Creating an empty table with no headers."
        )
        return Table()

    preamble = lines[:skip_lines]
    records = [list(record) for record in csv.reader(lines[skip_lines:], delimiter=delimiter)]

    header = None
    if has_headers and records:
        header = records.pop(0)

    logger.debug(
        f'Read {len(records)} rows from {path} '
        f'(header={header is not None}, preamble={len(preamble)} lines)'
    )
    return Table(rows=records, header=header, preamble=preamble)


def write_table(
    table: Table,
    output_path: Union[str, Path],
    delimiter: str,
) -> Path:
    """
    Write a Table to disk.

    The preamble is written first, unchanged, followed by the header (if any)
    and every row. The file is opened once so the parts stay in order, and
    is created exclusively so an existing file is never overwritten.

    Args:
        table: Table to write
        output_path: Destination file
        delimiter: Single-character field separator

    Returns:
        Path of the written file

    Raises:
        OutputExistsError: If output_path already exists
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        f = open(path, 'x', encoding='utf-8', newline='')
    except FileExistsError:
        raise OutputExistsError(path) from None

    with f:
        if table.preamble:
            f.writelines(table.preamble)

        writer = csv.writer(f, delimiter=delimiter, lineterminator='\n')
        if table.header is not None:
            writer.writerow(table.header)
        writer.writerows(table.rows)

    logger.info(f'Wrote {len(table.rows)} rows to {path}')
    return path
