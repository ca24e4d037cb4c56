"""Batch summary statistics.

  - overall_score: 100 minus the mean risk score, rounded half-up
    (100 for an empty batch)
  - risk_distribution: low (<= 30), medium (31-70), high (> 70)

The bucket bounds are exclusive of each other, so every profile is counted
in exactly one bucket.
"""

import math

from risk_proxy.models import BatchSummary, RiskDistribution, RiskProfile

LOW_MAX = 30
MEDIUM_MAX = 70


def round_half_up(value: float) -> int:
    """Round .5 upwards, as the dashboard's score widget expects.

    Python's round() would send 52.5 to 52 (banker's rounding).
    """
    return math.floor(value + 0.5)


def bucket_for(score: float) -> str:
    if score <= LOW_MAX:
        return "low"
    if score <= MEDIUM_MAX:
        return "medium"
    return "high"


def summarize(profiles: list[RiskProfile]) -> BatchSummary:
    """Compute the compliance score and risk histogram for a batch."""
    counts = {"low": 0, "medium": 0, "high": 0}
    for profile in profiles:
        counts[bucket_for(profile.risk_score)] += 1

    if profiles:
        mean_risk = sum(p.risk_score for p in profiles) / len(profiles)
    else:
        mean_risk = 0

    return BatchSummary(
        overall_score=round_half_up(100 - mean_risk),
        total_users=len(profiles),
        risk_distribution=RiskDistribution(**counts),
    )
