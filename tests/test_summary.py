"""Tests for the batch summary statistics."""

import pytest

from risk_proxy.profiling.profiler import build_profile
from risk_proxy.profiling.summary import bucket_for, round_half_up, summarize


def profiles_with_scores(*scores):
    return [build_profile({"RiskScore": s}, i) for i, s in enumerate(scores)]


class TestBucketFor:
    @pytest.mark.parametrize(
        "score, bucket",
        [
            (0, "low"),
            (30, "low"),
            (30.5, "medium"),
            (31, "medium"),
            (70, "medium"),
            (70.1, "high"),
            (71, "high"),
            (100, "high"),
        ],
    )
    def test_boundaries(self, score, bucket):
        assert bucket_for(score) == bucket


class TestRoundHalfUp:
    def test_half_rounds_up(self):
        assert round_half_up(52.5) == 53
        assert round_half_up(53.5) == 54

    def test_below_half_rounds_down(self):
        assert round_half_up(52.49) == 52


class TestSummarize:
    def test_empty_batch(self):
        summary = summarize([])
        assert summary.total_users == 0
        assert summary.overall_score == 100
        assert summary.risk_distribution.low == 0
        assert summary.risk_distribution.medium == 0
        assert summary.risk_distribution.high == 0

    def test_overall_score_inverts_mean(self):
        summary = summarize(profiles_with_scores(20, 40, 60))
        assert summary.overall_score == 60

    def test_overall_score_rounded(self):
        # mean 47.5 -> 52.5 -> 53
        summary = summarize(profiles_with_scores(45, 50))
        assert summary.overall_score == 53

    def test_distribution(self):
        summary = summarize(profiles_with_scores(5, 30, 31, 70, 71, 99))
        dist = summary.risk_distribution
        assert (dist.low, dist.medium, dist.high) == (2, 2, 2)

    def test_buckets_partition_batch(self):
        scores = [1, 12.5, 29.9, 30, 30.1, 44, 69.99, 70, 70.01, 88, 100]
        summary = summarize(profiles_with_scores(*scores))
        dist = summary.risk_distribution
        assert dist.low + dist.medium + dist.high == summary.total_users == len(scores)

    def test_camel_case_serialization(self):
        data = summarize(profiles_with_scores(10)).model_dump(by_alias=True)
        assert data == {
            "overallScore": 90,
            "totalUsers": 1,
            "riskDistribution": {"low": 1, "medium": 0, "high": 0},
        }
