"""
Result export.
Single responsibility: write classified rows to CSV or Parquet files.
"""

from pathlib import Path
from typing import Iterable, List, Tuple, Union
import duckdb
import pandas as pd

from ..core.models import ColumnMapping, ComparisonRow
from ..utils.logger import get_logger


logger = get_logger()


EXPORT_FORMATS = {".csv": "csv", ".parquet": "parquet"}
RESULTS_TABLE = "comparison_results"


class ExportError(ValueError):
    """Exception raised when results cannot be exported."""
    pass


def qident(name: str) -> str:
    """
    Quote SQL identifiers for safe usage in DuckDB queries.

    Args:
        name: Column or table name

    Returns:
        Double-quoted identifier with embedded quotes escaped
    """
    return '"' + name.replace('"', '""') + '"'


def qpath(path: Union[str, Path]) -> str:
    """
    Quote and normalize file paths for DuckDB COPY operations.

    Args:
        path: File path

    Returns:
        Single-quoted path with forward slashes
    """
    path_str = str(path).replace('\\', '/').replace("'", "''")
    return f"'{path_str}'"


def _value_columns(mapping: ColumnMapping) -> List[Tuple[str, str]]:
    """
    (side, column) pairs in mapping order.

    A compare column shared by several source columns is written once, at
    its first use.
    """
    pairs: List[Tuple[str, str]] = []
    seen_compare = set()
    for entry in mapping:
        pairs.append(("source", entry.source_column))
        if entry.compare_column not in seen_compare:
            seen_compare.add(entry.compare_column)
            pairs.append(("compare", entry.compare_column))
    return pairs


def export_columns(mapping: ColumnMapping) -> List[str]:
    """Flat column layout: status, key, differences, then source/compare pairs."""
    return ["status", "key", "differences"] + [
        f"{side}:{column}" for side, column in _value_columns(mapping)
    ]


def rows_to_dataframe(rows: Iterable[ComparisonRow],
                      mapping: ColumnMapping) -> pd.DataFrame:
    """
    Flatten classified rows into one wide DataFrame of strings.

    Args:
        rows: Classified rows
        mapping: Mapping used for the run (defines the value columns)

    Returns:
        DataFrame with export_columns(mapping) as columns
    """
    value_columns = _value_columns(mapping)
    records = []
    for row in rows:
        source_data = row.source_data or {}
        compare_data = row.compare_data or {}
        values = [row.row_type.value, row.key, ", ".join(row.differences)]
        for side, column in value_columns:
            data = source_data if side == "source" else compare_data
            values.append(data.get(column, ""))
        records.append(values)

    return pd.DataFrame(records, columns=export_columns(mapping), dtype=object)


class ResultExporter:
    """
    Writes results through an in-memory DuckDB connection.
    """

    def export(self, rows: Iterable[ComparisonRow], mapping: ColumnMapping,
               output_path: Union[str, Path]) -> Path:
        """
        Export rows to CSV or Parquet, chosen by file suffix.

        Args:
            rows: Classified rows
            mapping: Mapping used for the run
            output_path: Target file (.csv or .parquet)

        Returns:
            Path written

        Raises:
            ExportError: If the suffix is not a supported format
        """
        output_path = Path(output_path)
        fmt = EXPORT_FORMATS.get(output_path.suffix.lower())
        if fmt is None:
            raise ExportError(f"Unsupported export format: {output_path.suffix}")

        df = rows_to_dataframe(rows, mapping)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        logger.info("exporter.starting",
                   output_path=str(output_path),
                   format=fmt,
                   rows=len(df))

        con = duckdb.connect(":memory:")
        try:
            column_defs = ", ".join(f"{qident(col)} VARCHAR" for col in df.columns)
            con.execute(f"CREATE TABLE {RESULTS_TABLE} ({column_defs})")

            if len(df):
                con.register("results_frame", df)
                con.execute(f"INSERT INTO {RESULTS_TABLE} SELECT * FROM results_frame")

            if fmt == "csv":
                options = "HEADER, DELIMITER ',', FORCE_QUOTE *"
            else:
                options = "FORMAT PARQUET"

            con.execute(f"COPY {RESULTS_TABLE} TO {qpath(output_path)} ({options})")
        except duckdb.Error as e:
            logger.error("exporter.failed",
                        output_path=str(output_path),
                        error=str(e))
            raise ExportError(f"Could not export results to {output_path}: {e}") from e
        finally:
            con.close()

        if not len(df):
            logger.warning("exporter.empty",
                          output_path=str(output_path),
                          note="No rows to export - wrote header only")

        logger.info("exporter.complete", output_path=str(output_path))
        return output_path
