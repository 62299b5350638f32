"""
Tabular file reader.
Single responsibility: load supported file types into string tables.
"""

from pathlib import Path
from typing import Any, Union
import pandas as pd

from ..core.models import Table
from ..utils.logger import get_logger


logger = get_logger()


CSV_SUFFIXES = {".csv": ",", ".tsv": "\t", ".txt": ","}
EXCEL_SUFFIXES = {".xlsx", ".xls"}
PARQUET_SUFFIXES = {".parquet"}

# Tried in order of likelihood
ENCODINGS = ['utf-8', 'utf-8-sig', 'latin-1', 'cp1252']


class FileReadError(ValueError):
    """Exception raised when a file cannot be turned into a table."""
    pass


def _cell_text(val: Any) -> str:
    if val is None:
        return ""
    try:
        if pd.isna(val):
            return ""
    except (TypeError, ValueError):
        pass
    return str(val)


def table_from_dataframe(df: pd.DataFrame, name: str = "") -> Table:
    """
    Convert a DataFrame to a Table of strings.

    Header names are stripped of surrounding whitespace and quotes; missing
    values become empty strings. Cell text is otherwise kept as-is so the
    comparison settings decide about whitespace.

    Args:
        df: Input DataFrame
        name: Table name used in logs and reports

    Returns:
        Table
    """
    headers = [str(col).strip().strip('"').strip() for col in df.columns]
    rows = [
        [_cell_text(val) for val in row]
        for row in df.itertuples(index=False, name=None)
    ]
    return Table(headers=headers, rows=rows, name=name)


class TableReader:
    """
    Reads CSV, Excel and Parquet files into tables.
    """

    def read_csv(self, file_path: Path, sep: str = ",") -> pd.DataFrame:
        """
        Read a delimited file as strings with automatic encoding detection.

        Args:
            file_path: Path to the file
            sep: Field delimiter

        Returns:
            DataFrame with every cell as text
        """
        logger.info("file_reader.csv.reading", file=str(file_path))

        for encoding in ENCODINGS:
            try:
                df = pd.read_csv(file_path, sep=sep, dtype=str,
                                 keep_default_na=False, encoding=encoding)
            except (UnicodeDecodeError, UnicodeError):
                continue
            except pd.errors.EmptyDataError as e:
                raise FileReadError(f"File is empty: {file_path}") from e
            except pd.errors.ParserError as e:
                raise FileReadError(f"Could not parse {file_path}: {e}") from e

            logger.info("file_reader.csv.loaded",
                       rows=len(df),
                       columns=len(df.columns),
                       encoding=encoding)
            return df

        raise FileReadError(f"Could not decode {file_path} with any of {ENCODINGS}")

    def read_excel(self, file_path: Path, sheet_name: Union[int, str] = 0) -> pd.DataFrame:
        """
        Read one sheet of an Excel workbook as strings.

        Args:
            file_path: Path to Excel file
            sheet_name: Sheet index or name

        Raises:
            FileReadError: If the workbook or sheet cannot be read
        """
        logger.info("file_reader.excel.reading",
                   file=str(file_path),
                   sheet=sheet_name)

        try:
            df = pd.read_excel(file_path, sheet_name=sheet_name, dtype=str,
                               keep_default_na=False)
        except Exception as e:
            # openpyxl/xlrd raise zip, XML and sheet errors of their own types
            logger.error("file_reader.excel.failed", file=str(file_path), error=str(e))
            raise FileReadError(f"Could not read {file_path}: {e}") from e

        logger.info("file_reader.excel.loaded",
                   rows=len(df),
                   columns=len(df.columns))

        return df

    def read_parquet(self, file_path: Path) -> pd.DataFrame:
        """
        Read Parquet file.

        Args:
            file_path: Path to Parquet file
        """
        logger.info("file_reader.parquet.reading", file=str(file_path))

        try:
            df = pd.read_parquet(file_path)
        except Exception as e:
            logger.error("file_reader.parquet.failed", file=str(file_path), error=str(e))
            raise FileReadError(f"Could not read {file_path}: {e}") from e

        logger.info("file_reader.parquet.loaded",
                   rows=len(df),
                   columns=len(df.columns))

        return df

    def read(self, file_path: Union[str, Path], sheet: Union[int, str] = 0,
             name: str = "") -> Table:
        """
        Read any supported file type into a Table.

        Args:
            file_path: Path to file
            sheet: Sheet for Excel files
            name: Table name (defaults to the file stem)

        Returns:
            Table

        Raises:
            FileNotFoundError: If the file does not exist
            FileReadError: If the file type is not supported or unreadable
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        suffix = file_path.suffix.lower()

        if suffix in CSV_SUFFIXES:
            df = self.read_csv(file_path, sep=CSV_SUFFIXES[suffix])
        elif suffix in EXCEL_SUFFIXES:
            df = self.read_excel(file_path, sheet_name=sheet)
        elif suffix in PARQUET_SUFFIXES:
            df = self.read_parquet(file_path)
        else:
            raise FileReadError(f"Unsupported file type: {suffix}")

        if len(df.columns) == 0:
            raise FileReadError(f"No header row found in {file_path}")

        return table_from_dataframe(df, name=name or file_path.stem)
