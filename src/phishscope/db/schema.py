"""Database schema for PhishScope.

One row per completed scan, keyed by the owning user.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PhishingScan(Base):
    """A classified piece of content and its verdict.

    risk_level and confidence_score are written once at insert time.
    """

    __tablename__ = "phishing_scans"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    scan_type: Mapped[str] = mapped_column(String(16), nullable=False)
    input_content: Mapped[str] = mapped_column(Text, nullable=False)
    risk_level: Mapped[str] = mapped_column(String(16), nullable=False)
    confidence_score: Mapped[int] = mapped_column(Integer, nullable=False)
    analysis_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    indicators_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow, onupdate=_utcnow
    )
