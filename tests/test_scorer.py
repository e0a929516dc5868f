"""Tests for risk aggregation."""

import pytest

from envinspect.models import Confidence, RiskLevel, SecretFinding, SeverityCounts
from envinspect.scorer import calculate_overall_risk, count_by_confidence


def _finding(confidence: Confidence) -> SecretFinding:
    return SecretFinding(
        type="Test",
        file="a.py",
        line=1,
        snippet="***REDACTED***",
        confidence=confidence,
        remediation="Rotate it.",
    )


class TestCountByConfidence:
    """Test per-tier counting."""

    def test_counts(self):
        """Each finding is counted once in its tier."""
        secrets = [_finding(Confidence.high)] + [_finding(Confidence.medium)] * 2 + [_finding(Confidence.low)] * 3

        counts = count_by_confidence(secrets)

        assert counts == SeverityCounts(high=1, medium=2, low=3)

    def test_empty(self):
        """No findings means all zeros."""
        assert count_by_confidence([]) == SeverityCounts()


class TestCalculateOverallRisk:
    """Test the overall risk rules."""

    @pytest.mark.parametrize(
        "high,medium,low,committed,expected",
        [
            (0, 0, 0, 0, RiskLevel.none),
            (0, 0, 1, 0, RiskLevel.low),
            (0, 0, 5, 0, RiskLevel.low),
            (0, 0, 6, 0, RiskLevel.medium),
            (0, 1, 0, 0, RiskLevel.medium),
            (0, 3, 0, 0, RiskLevel.medium),
            (0, 4, 0, 0, RiskLevel.high),
            (1, 0, 0, 0, RiskLevel.critical),
            (0, 0, 0, 1, RiskLevel.critical),
            (0, 2, 1, 0, RiskLevel.medium),
        ],
    )
    def test_rules(self, high, medium, low, committed, expected):
        """First matching rule decides the level."""
        counts = SeverityCounts(high=high, medium=medium, low=low)
        assert calculate_overall_risk(counts, committed) == expected

    def test_single_high_dominates_volume(self):
        """One high finding is critical regardless of other counts."""
        counts = SeverityCounts(high=1, medium=100, low=100)
        assert calculate_overall_risk(counts) == RiskLevel.critical

    def test_committed_env_file_dominates(self):
        """A committed .env file is critical even with no secrets."""
        assert calculate_overall_risk(SeverityCounts(), committed_env_files=2) == RiskLevel.critical

    def test_monotonic_in_counts(self):
        """Adding findings never lowers the level."""
        previous = RiskLevel.none
        for low in range(10):
            level = calculate_overall_risk(SeverityCounts(low=low))
            assert level >= previous
            previous = level
        for medium in range(10):
            level = calculate_overall_risk(SeverityCounts(medium=medium, low=9))
            assert level >= previous
            previous = level


class TestRiskLevel:
    """Test risk level ordering."""

    def test_ordering(self):
        """Levels are ordered none < low < medium < high < critical."""
        levels = [RiskLevel.critical, RiskLevel.none, RiskLevel.high, RiskLevel.low, RiskLevel.medium]
        assert sorted(levels) == [
            RiskLevel.none,
            RiskLevel.low,
            RiskLevel.medium,
            RiskLevel.high,
            RiskLevel.critical,
        ]

    def test_value(self):
        """Levels serialize as lowercase strings."""
        assert RiskLevel.critical.value == "critical"
