"""AML signal re-labeling.

Derives the sanctions, PEP and adverse-media booleans shown on a subject's
profile. The sanction confidence is a fixed placeholder reported whenever
the reason text mentions a sanction; it is not a match probability.
"""

from risk_proxy.models import AmlSignals
from risk_proxy.profiling.normalize import NormalizedRow
from risk_proxy.profiling.rules.reason_codes import PEP_FLAG

SANCTION_CONFIDENCE = 75


def _mentions(row: NormalizedRow, *keywords: str) -> bool:
    """True if any reason phrase contains any keyword (case-insensitive)."""
    return any(
        keyword in reason.lower()
        for reason in row.reasons
        for keyword in keywords
    )


def check_aml(row: NormalizedRow) -> AmlSignals:
    sanction_match = _mentions(row, "sanction")

    return AmlSignals(
        sanction_match=sanction_match,
        sanction_confidence=SANCTION_CONFIDENCE if sanction_match else 0,
        pep_match=_mentions(row, "pep") or row.declared_flag == PEP_FLAG,
        adverse_media=_mentions(row, "adverse", "media"),
    )
