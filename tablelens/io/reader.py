"""
Spreadsheet Reader

Decodes .xlsx/.xls/.csv files into row records with pandas. The header row
is read raw and normalized, so duplicate or blank headers never collapse
two columns into one.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Union
import logging
import math

import pandas as pd

from tablelens.core.cells import CellValue
from tablelens.core.table import UNNAMED_COLUMN, rows_from_records

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".xlsx", ".xls", ".csv")
CSV_ENCODINGS = ("utf-8-sig", "gb18030", "latin-1")


class TableReadError(ValueError):
    """The file could not be decoded into a table."""


def read_table(
    path: Union[str, Path],
    sheet: Union[int, str] = 0,
    unnamed_column: str = UNNAMED_COLUMN,
) -> List[Dict[str, CellValue]]:
    """
    Read the first (or given) sheet of a spreadsheet into row dicts.

    Args:
        path: File path with a supported extension
        sheet: Sheet index or name for Excel files
        unnamed_column: Placeholder for blank header cells

    Returns:
        One dict per data row; an empty list for an empty sheet

    Raises:
        TableReadError: Unsupported extension or undecodable content
    """
    file_path = Path(path)
    ext = file_path.suffix.lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise TableReadError(
            f"Unsupported file type '{ext or file_path.name}'. "
            f"Expected one of: {', '.join(SUPPORTED_EXTENSIONS)}"
        )
    if not file_path.exists():
        raise TableReadError(f"File not found: {file_path}")

    if ext == ".csv":
        df = _read_csv(file_path)
    else:
        df = _read_excel(file_path, sheet)

    records = [[_clean_cell(v) for v in record] for record in df.itertuples(index=False, name=None)]
    if not records:
        logger.info(f"'{file_path.name}' is empty")
        return []

    rows = rows_from_records(records[0], records[1:], unnamed_column)
    logger.info(f"Read {len(rows)} rows x {len(records[0])} columns from '{file_path.name}'")
    return rows


def _read_csv(file_path: Path) -> pd.DataFrame:
    for encoding in CSV_ENCODINGS:
        options = dict(header=None, dtype=object, keep_default_na=False, encoding=encoding, engine="python")
        try:
            width = pd.read_csv(file_path, nrows=1, **options).shape[1]
            # Cells beyond the header width have no column; drop them
            return pd.read_csv(
                file_path,
                on_bad_lines=lambda cells: cells[:width],
                **options,
            )
        except UnicodeDecodeError:
            logger.debug(f"Could not decode '{file_path.name}' as {encoding}")
            continue
        except pd.errors.EmptyDataError:
            return pd.DataFrame()
        except pd.errors.ParserError as e:
            raise TableReadError(f"Could not parse CSV '{file_path.name}': {e}") from e
    raise TableReadError(f"Could not decode CSV '{file_path.name}' with any of {CSV_ENCODINGS}")


def _read_excel(file_path: Path, sheet: Union[int, str]) -> pd.DataFrame:
    engine = "openpyxl" if file_path.suffix.lower() == ".xlsx" else "xlrd"
    try:
        return pd.read_excel(file_path, sheet_name=sheet, header=None, engine=engine)
    except Exception as e:
        logger.error(f"Reading Excel file '{file_path.name}' failed: {e}")
        raise TableReadError(f"Could not read Excel file '{file_path.name}': {e}") from e


def _clean_cell(value: Any) -> Any:
    """Map pandas missing markers to "" and numpy scalars to Python ones."""
    if value is None or value is pd.NaT:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    if isinstance(value, (str, datetime)):
        return value
    if hasattr(value, "item"):
        return value.item()
    return value
