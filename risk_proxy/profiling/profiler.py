"""Risk profile builder.

Turns each parsed spreadsheet row into the denormalized record the
dashboard renders:

  1. Normalize the row (column mapping + defaults)
  2. Re-label the reason text into reason codes
  3. Derive the AML, fraud, network and device sections
  4. Keep a copy of the source fields for traceability

Records come out in the same order as the spreadsheet rows.
"""

from typing import Any, Dict, Iterable

from risk_proxy.models import OriginalData, RiskProfile
from risk_proxy.profiling.normalize import normalize_row
from risk_proxy.profiling.rules.aml import check_aml
from risk_proxy.profiling.rules.device import check_device
from risk_proxy.profiling.rules.fraud import check_fraud
from risk_proxy.profiling.rules.network import check_network
from risk_proxy.profiling.rules.reason_codes import derive_reason_codes

EMAIL_DOMAIN = "company.com"


def build_profile(row: Dict[str, Any], index: int) -> RiskProfile:
    """Build the derived risk profile for the row at ``index`` (zero-based)."""
    normalized = normalize_row(row, index)

    return RiskProfile(
        id=normalized.subject_id,
        name=normalized.display_name,
        email=f"customer_{normalized.contact_key}@{EMAIL_DOMAIN}",
        risk_score=normalized.risk_score,
        reason_codes=derive_reason_codes(normalized),
        aml=check_aml(normalized),
        fraud=check_fraud(normalized.risk_flag),
        network=check_network(normalized),
        device=check_device(),
        original_data=OriginalData(
            customer_no=normalized.customer_no,
            document_name=normalized.document_name,
            birth_country=normalized.birth_country,
            citizenship=normalized.citizenship,
            risk_flag=normalized.risk_flag,
            risk_reason=normalized.risk_reason,
        ),
    )


def build_profiles(rows: Iterable[Dict[str, Any]]) -> list[RiskProfile]:
    return [build_profile(row, index) for index, row in enumerate(rows)]
