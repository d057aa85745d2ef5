"""Scans API endpoint.

POST /api/scans - Classify content and store the verdict
GET /api/scans - List scan history
GET /api/scans/{scan_id} - Get scan detail
DELETE /api/scans/{scan_id} - Delete a scan
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from phishscope.api.app import get_current_user_id, get_db_session, get_scan_classifier
from phishscope.classifier import ClassifierBase
from phishscope.db import repo
from phishscope.db.repo import DbSession
from phishscope.models.domain import ScanRecord
from phishscope.models.types import (
    ErrorResponse,
    IndicatorOut,
    ScanDetail,
    ScanRequest,
    ScanResult,
)
from phishscope.scanning.history import delete_scan, fetch_scan_history
from phishscope.scanning.submit import ScanInput, submit_scan

router = APIRouter()


def _record_to_detail(record: ScanRecord) -> ScanDetail:
    """Convert ScanRecord to ScanDetail."""
    return ScanDetail(
        id=record.id,
        scan_type=record.scan_type,
        input_content=record.input_content,
        risk_level=record.risk_level,
        confidence_score=record.confidence_score,
        summary=record.summary,
        recommendations=record.recommendations,
        indicators=[
            IndicatorOut(type=i.type, severity=i.severity, description=i.description)
            for i in record.indicators
        ],
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


@router.post(
    "/scans",
    response_model=ScanResult,
    status_code=201,
    responses={code: {"model": ErrorResponse} for code in (400, 401, 402, 429, 500)},
)
def create_scan(
    request: ScanRequest,
    session: DbSession = Depends(get_db_session),
    classifier: ClassifierBase = Depends(get_scan_classifier),
    user_id: str = Depends(get_current_user_id),
) -> ScanResult:
    """Classify submitted content and store the result.

    Args:
        request: Content and scan type.
        session: Database session (injected).
        classifier: Classification service (injected).
        user_id: Authenticated user (injected).

    Returns:
        ScanResult with verdict, scan_id and created_at.

    Raises:
        ClassificationError: Rendered as {"error": message} with its status.
    """
    return submit_scan(
        session=session,
        classifier=classifier,
        scan_input=ScanInput(
            user_id=user_id,
            content=request.content,
            scan_type=request.scan_type,
        ),
    )


@router.get("/scans", response_model=list[ScanDetail])
def list_scans(
    session: DbSession = Depends(get_db_session),
    user_id: str = Depends(get_current_user_id),
) -> list[ScanDetail]:
    """List the user's scans, newest first.

    Raises:
        HTTPException: 500 if the history could not be loaded.
    """
    history = fetch_scan_history(session, user_id)
    if history.error:
        raise HTTPException(status_code=500, detail=history.error)
    return [_record_to_detail(r) for r in history.scans]


@router.get("/scans/{scan_id}", response_model=ScanDetail)
def get_scan(
    scan_id: str,
    session: DbSession = Depends(get_db_session),
    user_id: str = Depends(get_current_user_id),
) -> ScanDetail:
    """Get one scan.

    Raises:
        HTTPException: 404 if the user has no such scan.
    """
    record = repo.get_scan(session, user_id, scan_id)

    if record is None:
        raise HTTPException(status_code=404, detail="Scan not found")

    return _record_to_detail(record)


@router.delete("/scans/{scan_id}", status_code=204)
def remove_scan(
    scan_id: str,
    session: DbSession = Depends(get_db_session),
    user_id: str = Depends(get_current_user_id),
) -> Response:
    """Delete one scan from the user's history.

    Raises:
        HTTPException: 404 if the user has no such scan.
    """
    if not delete_scan(session, user_id, scan_id):
        raise HTTPException(status_code=404, detail="Scan not found")
    return Response(status_code=204)
