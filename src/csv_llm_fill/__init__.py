"""
csv-llm-fill - fill a column of a delimited text table with LLM answers.

Each row's values are substituted into a prompt template, the prompt is sent
to Perplexity or GPT, and the answer is written into the target column.
"""

from .config.settings import Settings
from .fill import FillResult, fill_column
from .loaders.table_loader import Table, read_table, write_table
from .prompts import substitute_columns

__all__ = [
    "Settings",
    "FillResult",
    "fill_column",
    "Table",
    "read_table",
    "write_table",
    "substitute_columns",
]
