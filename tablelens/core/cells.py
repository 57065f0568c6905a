"""
Cell value coercion.

Spreadsheet cells arrive as strings, numbers or nothing at all. These
helpers pin down how each analyzer turns a cell into a grouping key or a
number, so no analyzer relies on implicit conversions.
"""

import math
import re
from typing import Any, Mapping, Optional, Sequence, Union

CellValue = Union[str, int, float, None]
Row = Mapping[str, CellValue]
Table = Sequence[Row]

_NUMBER_PATTERN = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$')


def cell_text(value: Any) -> str:
    """Stringify a cell the way it is shown to users, trimmed."""
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
    return str(value).strip()


def to_number(value: Any) -> Optional[float]:
    """
    Parse a cell as a finite number.

    Returns None when the cell is blank, a boolean, non-numeric text,
    or a non-finite number.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None
    text = str(value).strip()
    if not text or not _NUMBER_PATTERN.match(text):
        return None
    number = float(text)
    return number if math.isfinite(number) else None


def number_or_zero(value: Any) -> float:
    number = to_number(value)
    return 0.0 if number is None else number


def group_key(value: Any, placeholder: str) -> str:
    """Trimmed text of a cell, or the placeholder when it is blank."""
    text = cell_text(value)
    return text if text else placeholder


def column_names(table: Table) -> list:
    """Schema of a table: the keys of its first row."""
    if not table:
        return []
    return list(table[0].keys())


def round2(value: float) -> float:
    """Round to 2 decimals, halves away from zero."""
    scaled = abs(value) * 100
    rounded = math.floor(scaled + 0.5) / 100
    return math.copysign(rounded, value) if rounded else 0.0
