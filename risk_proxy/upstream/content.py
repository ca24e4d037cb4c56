"""Classification of the scoring service's response content type."""

from typing import Optional

JSON = "json"
SPREADSHEET = "spreadsheet"


def classify_content_type(content_type: Optional[str]) -> Optional[str]:
    """Map a Content-Type header to the body kind the proxy can handle.

    Returns JSON, SPREADSHEET, or None when the type is not recognized.
    """
    lowered = (content_type or "").lower()

    if "application/json" in lowered:
        return JSON
    # Covers both the OOXML type and the legacy application/vnd.ms-excel
    if "spreadsheet" in lowered or "excel" in lowered:
        return SPREADSHEET
    return None
