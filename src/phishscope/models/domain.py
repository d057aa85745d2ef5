"""Domain models for PhishScope.

Pure Python dataclasses representing stored scan records.
These models are independent of SQLAlchemy and used throughout
the application for clean separation from the database layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal


# ============================================================================
# Enumerations
# ============================================================================

ScanType = Literal["email", "url", "message", "domain"]
RiskLevel = Literal["safe", "low", "medium", "high", "critical"]
IndicatorSeverity = Literal["info", "warning", "danger"]

SCAN_TYPES: tuple[ScanType, ...] = ("email", "url", "message", "domain")

# Ordered by severity, lowest first
RISK_LEVELS: tuple[RiskLevel, ...] = ("safe", "low", "medium", "high", "critical")

THREAT_LEVELS: frozenset[RiskLevel] = frozenset({"medium", "high", "critical"})


# ============================================================================
# Scan Domain
# ============================================================================


@dataclass(frozen=True)
class Indicator:
    """A single phishing indicator reported by the classifier."""

    type: str
    severity: IndicatorSeverity
    description: str


@dataclass(frozen=True)
class ScanRecord:
    """Domain model for one completed scan.

    risk_level and confidence_score are set once by the classifier
    when the record is created and never change afterwards.
    """

    id: str
    scan_type: ScanType
    input_content: str
    risk_level: RiskLevel
    confidence_score: int
    created_at: datetime
    user_id: str | None = None
    summary: str = ""
    recommendations: str = ""
    indicators: tuple[Indicator, ...] = field(default_factory=tuple)
    updated_at: datetime | None = None
