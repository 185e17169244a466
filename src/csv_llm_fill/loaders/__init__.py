from .table_loader import Row, Table, read_table, write_table

__all__ = ["Row", "Table", "read_table", "write_table"]
