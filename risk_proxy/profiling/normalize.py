"""Row normalization for spreadsheet rows returned by the scoring service.

All defaulting happens here, driven by two tables: which spreadsheet
column feeds which field, and what a field falls back to when the cell is
missing or blank. Downstream rules only ever see a NormalizedRow.
"""

import math
from typing import Any, Dict, Optional

from pydantic import BaseModel

# Field -> spreadsheet column
COLUMNS = {
    "customer_no": "CustomerNo",
    "document_name": "DocumentName",
    "birth_country": "BirthCountry",
    "citizenship": "Citizenship",
    "risk_score": "RiskScore",
    "risk_flag": "RiskFlag",
    "risk_reason": "RiskReason",
    "local_blacklist": "LocalBlackListFlag",
}

# Field -> value used when the cell is absent, empty, zero or unparseable
FIELD_DEFAULTS = {
    "risk_score": 0,
    "risk_flag": "GREEN",
    "risk_reason": "",
    "display_name": "Unknown",
}

REASON_SEPARATOR = ";"


class NormalizedRow(BaseModel):
    """One spreadsheet row with defaults applied."""
    index: int  # Zero-based position in the sheet, header excluded
    customer_no: Any = None
    document_name: Any = None
    birth_country: Any = None
    citizenship: Any = None
    risk_score: float | int
    risk_flag: str
    declared_flag: Any = None  # Raw RiskFlag cell, compared case-sensitively
    risk_reason: Any = None  # Raw reason text, kept for traceability
    reasons: list[str]
    local_blacklist: Any = None

    @property
    def subject_id(self) -> str:
        if _is_blank(self.customer_no):
            return f"USR-{self.index + 1:03d}"
        return _to_text(self.customer_no)

    @property
    def display_name(self) -> str:
        if _is_blank(self.document_name):
            return FIELD_DEFAULTS["display_name"]
        return _to_text(self.document_name)

    @property
    def contact_key(self) -> str:
        """Stable key for the synthesized contact handle."""
        if _is_blank(self.customer_no):
            return str(self.index)
        return _to_text(self.customer_no)


def _is_blank(value: Any) -> bool:
    """True for the values the scoring export uses to mean 'nothing here'."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)):
        return value == 0 or math.isnan(value)
    return False


def _to_text(value: Any) -> str:
    # Whole floats read from a sheet (e.g. 1001.0) are shown without ".0"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def coerce_score(value: Any) -> float | int:
    """Best-effort numeric coercion of a RiskScore cell."""
    default = FIELD_DEFAULTS["risk_score"]

    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return default
        try:
            number = float(text)
        except ValueError:
            return default
    else:
        return default

    if not math.isfinite(number) or number == 0:
        return default
    if number.is_integer():
        return int(number)
    return number


def coerce_flag(value: Any) -> str:
    if _is_blank(value):
        return FIELD_DEFAULTS["risk_flag"]
    return _to_text(value).upper()


def split_reasons(value: Any) -> list[str]:
    """Split the semicolon-delimited reason text into trimmed phrases."""
    text = FIELD_DEFAULTS["risk_reason"] if _is_blank(value) else _to_text(value)
    return [part.strip() for part in text.split(REASON_SEPARATOR) if part.strip()]


def normalize_row(row: Dict[str, Any], index: int) -> NormalizedRow:
    """Apply the column mapping and default table to one parsed row."""

    def cell(field: str) -> Optional[Any]:
        return row.get(COLUMNS[field])

    return NormalizedRow(
        index=index,
        customer_no=cell("customer_no"),
        document_name=cell("document_name"),
        birth_country=cell("birth_country"),
        citizenship=cell("citizenship"),
        risk_score=coerce_score(cell("risk_score")),
        risk_flag=coerce_flag(cell("risk_flag")),
        declared_flag=cell("risk_flag"),
        risk_reason=cell("risk_reason"),
        reasons=split_reasons(cell("risk_reason")),
        local_blacklist=cell("local_blacklist"),
    )
