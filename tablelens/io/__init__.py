"""Spreadsheet input for TableLens."""

from tablelens.io.reader import TableReadError, read_table

__all__ = ["TableReadError", "read_table"]
