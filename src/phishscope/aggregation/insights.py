"""Insight summary computation.

Scalar statistics over scan history for the analytics and landing views.
Pure functions - no database access.
"""

from __future__ import annotations

import math
from typing import Sequence

from phishscope.aggregation.charts import count_risk_levels
from phishscope.models.domain import RISK_LEVELS, THREAT_LEVELS, RiskLevel, ScanRecord
from phishscope.models.types import DashboardStats, InsightSummary


def calculate_insights(scans: Sequence[ScanRecord]) -> InsightSummary:
    """Compute summary statistics for a scan history.

    Args:
        scans: Scan records in any order.

    Returns:
        InsightSummary. An empty history yields zeros and "safe".
    """
    if not scans:
        return InsightSummary(
            total_scans=0,
            avg_confidence=0,
            highest_confidence=0,
            most_common_risk="safe",
        )

    scores = [scan.confidence_score for scan in scans]

    return InsightSummary(
        total_scans=len(scans),
        avg_confidence=round_half_up(sum(scores) / len(scores)),
        highest_confidence=max(scores),
        most_common_risk=most_common_risk_level(scans),
    )


def most_common_risk_level(scans: Sequence[ScanRecord]) -> RiskLevel:
    """Return the most frequent risk level.

    Levels are visited in severity order and only a strictly greater
    count replaces the current pick, so ties go to the less severe level.
    """
    counts = count_risk_levels(scans)
    best: RiskLevel = "safe"
    for level in RISK_LEVELS:
        if counts[level] > counts[best]:
            best = level
    return best


def calculate_dashboard_stats(scans: Sequence[ScanRecord]) -> DashboardStats:
    """Compute headline numbers for the landing page.

    Threats are scans rated medium or above; the safety score is the
    rounded percentage of scans rated safe.
    """
    total = len(scans)
    threats = sum(1 for scan in scans if scan.risk_level in THREAT_LEVELS)
    safe = sum(1 for scan in scans if scan.risk_level == "safe")

    return DashboardStats(
        total_scans=total,
        threats_detected=threats,
        last_scan=max((scan.created_at for scan in scans), default=None),
        safety_score=round_half_up(safe / total * 100) if total else 0,
    )


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + 0.5)
