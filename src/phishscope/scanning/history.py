"""Scan history access for the dashboard.

Loading and deleting a user's scans. Database failures are caught here
and reported through HistoryLoad.error instead of propagating into the
aggregation path.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError

from phishscope.db import repo
from phishscope.db.repo import DbSession
from phishscope.models.domain import ScanRecord

logger = logging.getLogger(__name__)

HISTORY_ERROR = "Failed to load scan history"


@dataclass
class HistoryLoad:
    """Result of loading a user's scan history."""

    scans: list[ScanRecord] = field(default_factory=list)
    error: str | None = None


def fetch_scan_history(session: DbSession, user_id: str) -> HistoryLoad:
    """Load a user's scans, newest first.

    Args:
        session: Database session.
        user_id: Owner of the scans.

    Returns:
        HistoryLoad with the scans, or an empty list and an error message
        if the store could not be read.
    """
    try:
        return HistoryLoad(scans=repo.get_scans_for_user(session, user_id))
    except SQLAlchemyError as e:
        logger.warning(f"Loading scan history for {user_id} failed: {e}")
        repo.rollback(session)
        return HistoryLoad(scans=[], error=HISTORY_ERROR)


def delete_scan(session: DbSession, user_id: str, scan_id: str) -> bool:
    """Remove one scan from a user's history.

    Returns:
        True if the scan was deleted, False if it does not exist or the
        store rejected the delete.
    """
    try:
        deleted = repo.delete_scan(session, user_id, scan_id)
        repo.commit(session)
    except SQLAlchemyError as e:
        logger.warning(f"Deleting scan {scan_id} failed: {e}")
        repo.rollback(session)
        return False

    if deleted:
        logger.info(f"Scan {scan_id} removed from history")
    return deleted
