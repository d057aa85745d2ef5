"""Scan submission.

Validates and sanitizes content, asks the classifier for a verdict and
stores the result. Database operations go through repo.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError

from phishscope.classifier.base import ClassificationError, ClassifierBase
from phishscope.db import repo
from phishscope.db.repo import DbSession
from phishscope.models.domain import SCAN_TYPES, Indicator, ScanRecord
from phishscope.models.types import ClassificationResult, ScanResult

logger = logging.getLogger(__name__)

MAX_CONTENT_LENGTH = 10_000
SAVE_ERROR = "Failed to save scan result"


@dataclass
class ScanInput:
    """Input for scan submission."""

    user_id: str
    content: str
    scan_type: str


def sanitize_content(content: str) -> str:
    """Trim whitespace and cap content at MAX_CONTENT_LENGTH characters."""
    return content.strip()[:MAX_CONTENT_LENGTH]


def submit_scan(
    session: DbSession,
    classifier: ClassifierBase,
    scan_input: ScanInput,
) -> ScanResult:
    """Classify content and store the verdict.

    Args:
        session: Database session.
        classifier: Classification service adapter.
        scan_input: Owner, content and scan type.

    Returns:
        ScanResult with the verdict and the stored record's identity.

    Raises:
        ClassificationError: 400 for invalid input, 500 if the verdict
            could not be stored, otherwise whatever the classifier raised.
    """
    if not scan_input.content or not scan_input.content.strip() or not scan_input.scan_type:
        raise ClassificationError(400, "Missing required fields: content and scanType")

    if scan_input.scan_type not in SCAN_TYPES:
        raise ClassificationError(
            400, "Invalid scan type. Must be: email, url, message, or domain"
        )

    content = sanitize_content(scan_input.content)
    verdict = classifier.classify(content, scan_input.scan_type)

    record = _create_scan_record(scan_input, content, verdict)
    try:
        repo.create_scan(session, record)
        repo.commit(session)
    except SQLAlchemyError as e:
        logger.warning(f"Storing scan {record.id} failed: {e}")
        repo.rollback(session)
        raise ClassificationError(500, SAVE_ERROR) from e

    logger.info(f"Scan {record.id} completed: {verdict.risk_level} ({verdict.confidence_score}%)")

    return ScanResult(
        **verdict.model_dump(),
        scan_id=record.id,
        created_at=record.created_at,
    )


def _create_scan_record(
    scan_input: ScanInput,
    content: str,
    verdict: ClassificationResult,
) -> ScanRecord:
    """Create scan record from input and verdict.

    Pure function - no database access.
    """
    now = datetime.now(timezone.utc)
    return ScanRecord(
        id=str(uuid.uuid4()),
        user_id=scan_input.user_id,
        scan_type=scan_input.scan_type,
        input_content=content,
        risk_level=verdict.risk_level,
        confidence_score=verdict.confidence_score,
        summary=verdict.summary,
        recommendations=verdict.recommendations,
        indicators=tuple(
            Indicator(type=i.type, severity=i.severity, description=i.description)
            for i in verdict.indicators
        ),
        created_at=now,
        updated_at=now,
    )
