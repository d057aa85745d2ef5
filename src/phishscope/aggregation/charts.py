"""Chart data aggregation.

Derives the trend series, risk-level distribution and confidence
histogram shown on the analytics view from a list of scan records.
Domain logic is pure - the caller loads the history.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Sequence

from phishscope.aggregation.palette import (
    CONFIDENCE_BUCKETS,
    MAX_CONFIDENCE,
    MIN_CONFIDENCE,
    RISK_COLORS,
)
from phishscope.models.domain import RISK_LEVELS, RiskLevel, ScanRecord
from phishscope.models.types import (
    AggregatedChartData,
    ConfidenceBucket,
    RiskDistributionEntry,
    TrendPoint,
)

TREND_DATE_FORMAT = "%b %d"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def process_scans_for_charts(scans: Sequence[ScanRecord]) -> AggregatedChartData:
    """Build all chart series for a scan history.

    Total over any collection, including the empty one: the trend and
    risk distribution come back empty and the histogram has five
    zero-count buckets.

    Args:
        scans: Scan records in any order.

    Returns:
        AggregatedChartData with trend (newest first), risk distribution
        and confidence distribution.
    """
    return AggregatedChartData(
        risk_distribution=build_risk_distribution(scans),
        confidence_trend=build_confidence_trend(scans),
        confidence_distribution=build_confidence_distribution(scans),
    )


def build_confidence_trend(scans: Sequence[ScanRecord]) -> list[TrendPoint]:
    """Map scans to trend points, newest first.

    sorted() is stable with reverse=True, so scans sharing a timestamp
    keep their original relative order.
    """
    ordered = sorted(scans, key=lambda s: _to_millis(s.created_at), reverse=True)
    return [
        TrendPoint(
            date=scan.created_at.strftime(TREND_DATE_FORMAT),
            confidence=scan.confidence_score,
            risk_level=scan.risk_level,
            scan_type=scan.scan_type,
            scan_id=scan.id,
            timestamp=_to_millis(scan.created_at),
        )
        for scan in ordered
    ]


def chronological_trend(points: Sequence[TrendPoint]) -> list[TrendPoint]:
    """Return a newest-first trend series oldest-first for line charts."""
    return list(reversed(points))


def build_risk_distribution(scans: Sequence[ScanRecord]) -> list[RiskDistributionEntry]:
    """Count scans per risk level, omitting levels never seen."""
    counts = count_risk_levels(scans)
    return [
        RiskDistributionEntry(name=level, value=counts[level], fill=RISK_COLORS[level])
        for level in RISK_LEVELS
        if counts[level] > 0
    ]


def build_confidence_distribution(scans: Sequence[ScanRecord]) -> list[ConfidenceBucket]:
    """Histogram confidence scores into the five fixed buckets."""
    counts = [0] * len(CONFIDENCE_BUCKETS)
    for scan in scans:
        counts[classify_confidence(scan.confidence_score)] += 1

    return [
        ConfidenceBucket(range=spec.label, count=count, fill=spec.color)
        for spec, count in zip(CONFIDENCE_BUCKETS, counts)
    ]


def classify_confidence(score: int) -> int:
    """Return the index of the bucket a confidence score falls into.

    Scores are clamped to [0, 100] first, then matched against the
    inclusive upper bounds in range order.
    """
    clamped = min(max(score, MIN_CONFIDENCE), MAX_CONFIDENCE)
    for index, spec in enumerate(CONFIDENCE_BUCKETS):
        if clamped <= spec.upper:
            return index
    return len(CONFIDENCE_BUCKETS) - 1


def count_risk_levels(scans: Sequence[ScanRecord]) -> dict[RiskLevel, int]:
    """Count scans per risk level, with every level present."""
    counts: dict[RiskLevel, int] = {level: 0 for level in RISK_LEVELS}
    for scan in scans:
        counts[scan.risk_level] += 1
    return counts


def _to_millis(value: datetime) -> int:
    # SQLite hands back naive datetimes; they are stored as UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - _EPOCH) // timedelta(milliseconds=1)
