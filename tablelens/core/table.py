"""
Header normalization and row assembly.

Turns the raw header row of a sheet into unique string keys and zips the
data rows onto them.
"""

from typing import Any, Dict, List, Optional, Sequence

from tablelens.core.cells import CellValue

UNNAMED_COLUMN = "未命名列"


def normalize_headers(raw_headers: Sequence[Any], placeholder: str = UNNAMED_COLUMN) -> List[str]:
    """
    Make header cells unique.

    Blank headers become the placeholder. The n-th occurrence (n >= 2) of a
    name gets an ``_n`` suffix, so ``["A", "A", "B", "A"]`` becomes
    ``["A", "A_2", "B", "A_3"]``.
    """
    seen: Dict[str, int] = {}
    headers = []
    for raw in raw_headers:
        name = "" if raw is None else str(raw).strip()
        if not name:
            name = placeholder
        seen[name] = seen.get(name, 0) + 1
        n = seen[name]
        headers.append(name if n == 1 else f"{name}_{n}")
    return headers


def rows_from_records(
    header_row: Sequence[Any],
    data_rows: Sequence[Sequence[Any]],
    placeholder: str = UNNAMED_COLUMN,
) -> List[Dict[str, CellValue]]:
    """Build row dicts from a raw header row and raw data rows."""
    headers = normalize_headers(header_row, placeholder)
    rows = []
    for raw in data_rows:
        row: Dict[str, CellValue] = {}
        for i, key in enumerate(headers):
            row[key] = _cell_at(raw, i)
        rows.append(row)
    return rows


def _cell_at(raw: Sequence[Any], index: int) -> CellValue:
    value: Optional[Any] = raw[index] if index < len(raw) else None
    return "" if value is None else value
