"""Reason code re-labeling.

Translates the scoring service's free-text RiskReason phrases into the
fixed reason codes the dashboard filters on. This is keyword matching over
text the scoring service has already labelled; it does not consult any
sanctions list or PEP database of its own.

Every phrase is checked against every keyword group, so one phrase can
yield several codes (e.g. "High risk country" -> COUNTRY_HIGH_RISK).
"""

from risk_proxy.profiling.normalize import NormalizedRow

# (keywords, code) in emission order; a phrase matches if it contains any keyword
KEYWORD_CODES: list[tuple[tuple[str, ...], str]] = [
    (("sanction",), "SANCTION_MATCH_POSSIBLE"),
    (("pep", "politically"), "PEP_MATCH"),
    (("fatf",), "FATF_HIGH_RISK"),
    (("blacklist",), "BLACKLIST_MATCH"),
    (("adverse", "media"), "ADVERSE_MEDIA"),
    (("country", "risk"), "COUNTRY_HIGH_RISK"),
    (("document", "passport"), "DOCUMENT_RISK"),
    (("age", "minor"), "AGE_RISK"),
]

PEP_FLAG = "PEP"
BLACKLIST_YES = "Y"

PEP_DECLARED = "PEP_DECLARED"
LOCAL_BLACKLIST = "LOCAL_BLACKLIST"
NO_FLAGS = "NO_FLAGS"


def derive_reason_codes(row: NormalizedRow) -> list[str]:
    """Return the de-duplicated reason codes for a row, never empty.

    Codes keep the order in which they were first produced. A row that
    matches nothing gets the single NO_FLAGS sentinel.
    """
    codes: list[str] = []

    for reason in row.reasons:
        lowered = reason.lower()
        for keywords, code in KEYWORD_CODES:
            if any(keyword in lowered for keyword in keywords):
                codes.append(code)

    # Codes driven by structured columns rather than the reason text
    if row.declared_flag == PEP_FLAG:
        codes.append(PEP_DECLARED)
    if row.local_blacklist == BLACKLIST_YES:
        codes.append(LOCAL_BLACKLIST)

    unique_codes = list(dict.fromkeys(codes))
    return unique_codes or [NO_FLAGS]
