"""Fraud risk levels.

The scoring export carries no email or phone intelligence, so the email
risk level is taken straight from the categorical RiskFlag and the phone
risk is always reported as Low.
"""

from risk_proxy.models import FraudSignals

FLAG_LEVELS = {
    "RED": "High",
    "YELLOW": "Medium",
}


def check_fraud(risk_flag: str) -> FraudSignals:
    """Map a normalized RiskFlag to coarse fraud levels (default Low)."""
    return FraudSignals(
        email_risk=FLAG_LEVELS.get(risk_flag, "Low"),
        phone_risk="Low",
    )
