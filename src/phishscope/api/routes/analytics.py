"""Analytics API endpoint.

GET /api/analytics - Chart series and insights over scan history
GET /api/stats - Dashboard headline numbers
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from phishscope.aggregation.charts import process_scans_for_charts
from phishscope.aggregation.insights import calculate_dashboard_stats, calculate_insights
from phishscope.api.app import get_current_user_id, get_db_session
from phishscope.db.repo import DbSession
from phishscope.models.types import AnalyticsOverview, DashboardStats
from phishscope.scanning.history import fetch_scan_history

router = APIRouter()


@router.get("/analytics", response_model=AnalyticsOverview)
def get_analytics(
    session: DbSession = Depends(get_db_session),
    user_id: str = Depends(get_current_user_id),
) -> AnalyticsOverview:
    """Get analytics for the user's scan history.

    The history is loaded once and fed to both the chart aggregator and
    the insight summarizer. A failed load yields empty analytics with
    the error in notifications.

    Args:
        session: Database session (injected).
        user_id: Authenticated user (injected).

    Returns:
        AnalyticsOverview with charts, insights and notifications.
    """
    history = fetch_scan_history(session, user_id)

    return AnalyticsOverview(
        charts=process_scans_for_charts(history.scans),
        insights=calculate_insights(history.scans),
        notifications=[history.error] if history.error else [],
    )


@router.get("/stats", response_model=DashboardStats)
def get_stats(
    session: DbSession = Depends(get_db_session),
    user_id: str = Depends(get_current_user_id),
) -> DashboardStats:
    """Get headline numbers for the dashboard landing page."""
    history = fetch_scan_history(session, user_id)
    return calculate_dashboard_stats(history.scans)
