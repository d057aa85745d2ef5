"""Repository pattern for database operations.

Encapsulates all SQLAlchemy queries, keeping domain logic pure.
Returns domain models (not SQLAlchemy entities) to external callers.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from phishscope.db.schema import PhishingScan
from phishscope.models.domain import Indicator, ScanRecord

if TYPE_CHECKING:
    from sqlalchemy.orm import Session as DbSession
else:
    DbSession = Session

# Re-export for external use
__all__ = ["DbSession"]


# ============================================================================
# Converters: SQLAlchemy <-> Domain
# ============================================================================


def _scan_to_record(scan: PhishingScan) -> ScanRecord:
    """Convert SQLAlchemy PhishingScan to domain record."""
    analysis = json.loads(scan.analysis_json) if scan.analysis_json else {}
    raw_indicators = json.loads(scan.indicators_json) if scan.indicators_json else []

    return ScanRecord(
        id=scan.id,
        user_id=scan.user_id,
        scan_type=scan.scan_type,
        input_content=scan.input_content,
        risk_level=scan.risk_level,
        confidence_score=scan.confidence_score,
        created_at=scan.created_at,
        updated_at=scan.updated_at,
        summary=analysis.get("summary", ""),
        recommendations=analysis.get("recommendations", ""),
        indicators=tuple(
            Indicator(
                type=item["type"],
                severity=item["severity"],
                description=item["description"],
            )
            for item in raw_indicators
        ),
    )


def _record_to_scan(record: ScanRecord) -> PhishingScan:
    """Convert domain record to SQLAlchemy PhishingScan."""
    analysis = {"summary": record.summary, "recommendations": record.recommendations}
    indicators = [
        {"type": i.type, "severity": i.severity, "description": i.description}
        for i in record.indicators
    ]
    return PhishingScan(
        id=record.id,
        user_id=record.user_id,
        scan_type=record.scan_type,
        input_content=record.input_content,
        risk_level=record.risk_level,
        confidence_score=record.confidence_score,
        analysis_json=json.dumps(analysis),
        indicators_json=json.dumps(indicators),
        created_at=record.created_at,
        updated_at=record.updated_at or record.created_at,
    )


# ============================================================================
# Scan Repository
# ============================================================================


def create_scan(session: DbSession, record: ScanRecord) -> ScanRecord:
    """Create a new scan row."""
    session.add(_record_to_scan(record))
    return record


def get_scan(session: DbSession, user_id: str, scan_id: str) -> ScanRecord | None:
    """Get one of a user's scans by ID."""
    scan = (
        session.query(PhishingScan)
        .filter(PhishingScan.id == scan_id, PhishingScan.user_id == user_id)
        .first()
    )
    return _scan_to_record(scan) if scan else None


def get_scans_for_user(session: DbSession, user_id: str) -> list[ScanRecord]:
    """Get all scans for a user, newest first."""
    scans = (
        session.query(PhishingScan)
        .filter(PhishingScan.user_id == user_id)
        .order_by(PhishingScan.created_at.desc())
        .all()
    )
    return [_scan_to_record(s) for s in scans]


def delete_scan(session: DbSession, user_id: str, scan_id: str) -> bool:
    """Delete one of a user's scans. Returns False if nothing matched."""
    deleted = (
        session.query(PhishingScan)
        .filter(PhishingScan.id == scan_id, PhishingScan.user_id == user_id)
        .delete(synchronize_session=False)
    )
    return deleted > 0


# ============================================================================
# Batch Operations
# ============================================================================


def commit(session: DbSession) -> None:
    """Commit current transaction."""
    session.commit()


def rollback(session: DbSession) -> None:
    """Roll back current transaction."""
    session.rollback()
