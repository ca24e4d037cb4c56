"""Pydantic models for the risk upload proxy.

Attributes are snake_case in Python and camelCase on the wire, which is
the contract the dashboard consumes.
"""

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, model_serializer
from pydantic.alias_generators import to_camel

Number = Union[int, float]
RiskLevel = Literal["Low", "Medium", "High"]


class CamelModel(BaseModel):
    """Base model that serializes field names as camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AmlSignals(CamelModel):
    """Anti-money-laundering signals re-labeled from the reason text."""
    sanction_match: bool
    sanction_confidence: int  # Fixed placeholder, not a probability
    pep_match: bool
    adverse_media: bool


class FraudSignals(CamelModel):
    email_risk: RiskLevel
    phone_risk: RiskLevel


class NetworkSignals(CamelModel):
    ip_type: str
    ip_country: str
    mismatch: bool  # Birth country differs from citizenship


class DeviceSignals(CamelModel):
    used_before: bool
    bot_like: bool


class OriginalData(CamelModel):
    """Selected source row fields, kept for traceability."""
    customer_no: Any = None
    document_name: Any = None
    birth_country: Any = None
    citizenship: Any = None
    risk_flag: str
    risk_reason: Any = None

    @model_serializer(mode="wrap")
    def _drop_missing(self, handler) -> dict[str, Any]:
        # Cells absent from the sheet are left out, not sent as null
        return {key: value for key, value in handler(self).items() if value is not None}


class RiskProfile(CamelModel):
    """Derived per-subject risk record, one per spreadsheet row."""
    id: str
    name: str
    email: str
    risk_score: Number
    reason_codes: list[str]
    aml: AmlSignals
    fraud: FraudSignals
    network: NetworkSignals
    device: DeviceSignals
    original_data: OriginalData


class RiskDistribution(CamelModel):
    """Histogram of risk scores: low <= 30 < medium <= 70 < high."""
    low: int
    medium: int
    high: int


class BatchSummary(CamelModel):
    overall_score: int  # 100 - mean risk score, rounded
    total_users: int
    risk_distribution: RiskDistribution


class AnalysisResponse(CamelModel):
    """Successful response for a spreadsheet returned by the scoring service."""
    success: bool = True
    overall_score: int
    total_users: int
    risk_distribution: RiskDistribution
    users: list[RiskProfile]


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
