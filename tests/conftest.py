"""Shared pytest fixtures for phishscope tests."""

from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from phishscope.db.schema import Base
from phishscope.models.domain import ScanRecord

BASE_TIME = datetime(2025, 3, 5, 12, 0, 0)


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def session(engine):
    """Create a database session for testing."""
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def make_scan():
    """Factory for ScanRecord instances with sensible defaults.

    Each call without created_at gets a timestamp one hour after the
    previous one, so records come out in insertion order by time.
    """
    counter = {"n": 0}

    def _make(
        risk_level: str = "safe",
        confidence_score: int = 50,
        scan_type: str = "email",
        created_at: datetime | None = None,
        scan_id: str | None = None,
        user_id: str = "user-001",
    ) -> ScanRecord:
        counter["n"] += 1
        return ScanRecord(
            id=scan_id or f"scan-{counter['n']:03d}",
            user_id=user_id,
            scan_type=scan_type,
            input_content=f"content {counter['n']}",
            risk_level=risk_level,
            confidence_score=confidence_score,
            created_at=created_at or BASE_TIME + timedelta(hours=counter["n"]),
        )

    return _make
