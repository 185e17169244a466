"""Prompt templating: resolve column_N placeholders against a row."""
import re
from typing import Optional, Sequence

COLUMN_PLACEHOLDER = re.compile(r'\bcolumn_(\d+)\b')


def substitute_columns(template: str, row: Sequence[Optional[str]]) -> str:
    """
    Replace each column_N token with the row's value at index N.

    Indices past the end of the row, and None cells, resolve to ''.

    Example:
        >>> substitute_columns("Who is column_0?", ["Bob"])
        'Who is Bob?'
    """
    def _cell(match: re.Match) -> str:
        col_idx = int(match.group(1))
        if col_idx < len(row):
            return row[col_idx] or ''
        return ''

    return COLUMN_PLACEHOLDER.sub(_cell, template)
