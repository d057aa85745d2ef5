"""Tests for insight summary computation."""

from datetime import datetime

import pytest

from phishscope.aggregation.charts import process_scans_for_charts
from phishscope.aggregation.insights import (
    calculate_dashboard_stats,
    calculate_insights,
    most_common_risk_level,
    round_half_up,
)


class TestCalculateInsights:
    """Test calculate_insights."""

    def test_empty_collection(self):
        """Empty history yields zeros and safe."""
        insights = calculate_insights([])

        assert insights.total_scans == 0
        assert insights.avg_confidence == 0
        assert insights.highest_confidence == 0
        assert insights.most_common_risk == "safe"

    def test_two_safe_scans(self, make_scan):
        """Scores 90 and 10 average to 50."""
        scans = [
            make_scan(risk_level="safe", confidence_score=90),
            make_scan(risk_level="safe", confidence_score=10),
        ]

        insights = calculate_insights(scans)

        assert insights.total_scans == 2
        assert insights.avg_confidence == 50
        assert insights.highest_confidence == 90
        assert insights.most_common_risk == "safe"

    def test_average_rounds_half_up(self, make_scan):
        """A mean of x.5 rounds up."""
        scans = [make_scan(confidence_score=s) for s in [50, 51]]
        assert calculate_insights(scans).avg_confidence == 51

    def test_average_rounds_down_below_half(self, make_scan):
        """A mean below x.5 rounds down."""
        scans = [make_scan(confidence_score=s) for s in [50, 50, 51]]
        assert calculate_insights(scans).avg_confidence == 50

    def test_idempotent(self, make_scan):
        """Repeated calls give identical summaries."""
        scans = [make_scan(risk_level="high", confidence_score=s) for s in [12, 77]]
        assert calculate_insights(scans) == calculate_insights(scans)

    def test_total_matches_distributions(self, make_scan):
        """total_scans equals the sum of both chart distributions."""
        scans = [
            make_scan(risk_level=level, confidence_score=score)
            for level, score in [("safe", 3), ("critical", 97), ("low", 45), ("low", 46)]
        ]

        insights = calculate_insights(scans)
        charts = process_scans_for_charts(scans)

        assert insights.total_scans == sum(e.value for e in charts.risk_distribution)
        assert insights.total_scans == sum(b.count for b in charts.confidence_distribution)


class TestMostCommonRisk:
    """Test mode selection and tie-breaking."""

    def test_clear_winner(self, make_scan):
        """Level with the highest count wins."""
        scans = [
            make_scan(risk_level="critical"),
            make_scan(risk_level="critical"),
            make_scan(risk_level="safe"),
        ]
        assert most_common_risk_level(scans) == "critical"

    def test_tie_goes_to_less_severe(self, make_scan):
        """low and medium tied at two resolves to low."""
        scans = [
            make_scan(risk_level="medium"),
            make_scan(risk_level="low"),
            make_scan(risk_level="medium"),
            make_scan(risk_level="low"),
        ]
        assert calculate_insights(scans).most_common_risk == "low"

    def test_tie_between_high_and_critical(self, make_scan):
        """Ties between non-safe levels still follow severity order."""
        scans = [make_scan(risk_level="critical"), make_scan(risk_level="high")]
        assert most_common_risk_level(scans) == "high"


class TestRoundHalfUp:
    """Test rounding helper."""

    @pytest.mark.parametrize(
        "value,expected",
        [(0.0, 0), (2.5, 3), (3.5, 4), (2.49, 2), (99.5, 100)],
    )
    def test_rounding(self, value, expected):
        """Halves round up, unlike banker's rounding."""
        assert round_half_up(value) == expected


class TestDashboardStats:
    """Test calculate_dashboard_stats."""

    def test_empty_collection(self):
        """Empty history yields zeros and no last scan."""
        stats = calculate_dashboard_stats([])

        assert stats.total_scans == 0
        assert stats.threats_detected == 0
        assert stats.last_scan is None
        assert stats.safety_score == 0

    def test_counts_threats_and_safety(self, make_scan):
        """medium/high/critical are threats; safety is percent safe."""
        scans = [
            make_scan(risk_level="safe"),
            make_scan(risk_level="safe"),
            make_scan(risk_level="low"),
            make_scan(risk_level="medium"),
            make_scan(risk_level="high"),
            make_scan(risk_level="critical"),
        ]

        stats = calculate_dashboard_stats(scans)

        assert stats.total_scans == 6
        assert stats.threats_detected == 3
        assert stats.safety_score == 33

    def test_last_scan_is_newest(self, make_scan):
        """last_scan is the latest created_at."""
        newest = datetime(2025, 9, 1, 8, 0)
        scans = [
            make_scan(created_at=datetime(2025, 1, 1)),
            make_scan(created_at=newest),
            make_scan(created_at=datetime(2025, 5, 1)),
        ]

        assert calculate_dashboard_stats(scans).last_scan == newest
