"""Pydantic models for the PhishScope API.

Request/response payloads and the plain-data aggregate structures
handed to the dashboard's charting layer.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from phishscope.models.domain import IndicatorSeverity, RiskLevel, ScanType


class ScanRequest(BaseModel):
    """Content submitted for classification.

    Fields are loose strings so submission can answer bad input with a
    400 error body rather than a schema error.
    """

    content: str = ""
    scan_type: str = ""


class IndicatorOut(BaseModel):
    """Phishing indicator in API responses."""

    type: str
    severity: IndicatorSeverity
    description: str


class ClassificationResult(BaseModel):
    """Verdict returned by the classification service."""

    risk_level: RiskLevel
    confidence_score: int = Field(ge=0, le=100)
    indicators: list[IndicatorOut]
    summary: str
    recommendations: str


class ScanResult(ClassificationResult):
    """Classification verdict plus the identity of the stored record."""

    scan_id: str
    created_at: datetime


class ScanDetail(BaseModel):
    """Stored scan record for history views."""

    id: str
    scan_type: ScanType
    input_content: str
    risk_level: RiskLevel
    confidence_score: int
    summary: str
    recommendations: str
    indicators: list[IndicatorOut]
    created_at: datetime
    updated_at: datetime | None


class TrendPoint(BaseModel):
    """One point of the confidence trend series."""

    date: str
    confidence: int
    risk_level: RiskLevel
    scan_type: ScanType
    scan_id: str
    timestamp: int  # epoch milliseconds


class RiskDistributionEntry(BaseModel):
    """Count of scans at one risk level."""

    name: RiskLevel
    value: int = Field(ge=1)
    fill: str


class ConfidenceBucket(BaseModel):
    """Histogram bin over confidence scores."""

    range: str
    count: int = Field(ge=0)
    fill: str


class AggregatedChartData(BaseModel):
    """Chart-ready series derived from scan history."""

    risk_distribution: list[RiskDistributionEntry]
    confidence_trend: list[TrendPoint]
    confidence_distribution: list[ConfidenceBucket]


class InsightSummary(BaseModel):
    """Scalar summary statistics over scan history."""

    total_scans: int = Field(ge=0)
    avg_confidence: int
    highest_confidence: int
    most_common_risk: RiskLevel


class DashboardStats(BaseModel):
    """Headline numbers for the dashboard landing page."""

    total_scans: int
    threats_detected: int
    last_scan: datetime | None
    safety_score: int


class AnalyticsOverview(BaseModel):
    """Analytics view payload: charts and insights from one history load."""

    charts: AggregatedChartData
    insights: InsightSummary
    notifications: list[str] = []


class ErrorResponse(BaseModel):
    """Error body returned for failed requests."""

    error: str
