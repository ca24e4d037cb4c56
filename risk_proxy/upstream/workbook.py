"""Spreadsheet reader for the scoring service's batch output.

Reads the first worksheet of an Office Open XML workbook into a list of
dicts keyed by the header row:

  - the header row is consumed, never returned as data
  - empty cells are left out of the row dict
  - rows with no populated cells are skipped
  - formula cells yield their cached value, or the formula text when the
    file was saved without one
"""

import io
from itertools import zip_longest
from typing import Any, Dict, List, Sequence

from openpyxl import load_workbook

EMPTY_HEADER = "__EMPTY"


def _first_sheet_rows(content: bytes, data_only: bool) -> List[tuple]:
    workbook = load_workbook(io.BytesIO(content), read_only=True, data_only=data_only)
    try:
        sheet = workbook.worksheets[0]
        return list(sheet.iter_rows(values_only=True))
    finally:
        workbook.close()


def _header_names(header_row: Sequence[Any], width: int) -> List[str]:
    """Turn the header cells into unique column names.

    Blank headers become __EMPTY, __EMPTY_1, ...; repeated names get a
    numeric suffix so no column silently overwrites another.
    """
    names: List[str] = []
    seen: Dict[str, int] = {}

    for i in range(width):
        value = header_row[i] if i < len(header_row) else None
        base = EMPTY_HEADER if value is None or str(value).strip() == "" else str(value)

        if base in seen:
            seen[base] += 1
            name = f"{base}_{seen[base]}"
        else:
            seen[base] = 0
            name = base
        names.append(name)

    return names


def _resolve(cached: Any, formula: Any) -> Any:
    """Prefer the cached value of a formula cell over its formula text."""
    if cached is not None:
        return cached
    return formula


def read_first_sheet(content: bytes) -> List[Dict[str, Any]]:
    """Parse the first worksheet of an xlsx payload into header-keyed rows."""
    cached_rows = _first_sheet_rows(content, data_only=True)
    if not cached_rows:
        return []

    formula_rows = _first_sheet_rows(content, data_only=False)

    merged_rows = [
        [_resolve(cached, formula) for cached, formula in zip_longest(c_row, f_row)]
        for c_row, f_row in zip_longest(cached_rows, formula_rows, fillvalue=())
    ]

    width = max(len(row) for row in merged_rows)
    headers = _header_names(merged_rows[0], width)

    rows: List[Dict[str, Any]] = []
    for values in merged_rows[1:]:
        row = {
            headers[i]: value
            for i, value in enumerate(values)
            if value is not None
        }
        # Blank rows are dropped, not returned as empty dicts
        if row:
            rows.append(row)

    return rows
