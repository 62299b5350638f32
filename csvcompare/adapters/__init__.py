"""File input and output adapters."""

from .file_reader import TableReader, FileReadError, table_from_dataframe
from .exporter import ResultExporter, ExportError, rows_to_dataframe

__all__ = [
    "TableReader",
    "FileReadError",
    "table_from_dataframe",
    "ResultExporter",
    "ExportError",
    "rows_to_dataframe",
]
