#!/usr/bin/env python3
"""Seed a demo scan history.

Creates a demo database with scans classified by the mock classifier
so the analytics endpoints have data without a gateway API key.

Usage:
    python scripts/seed_demo.py

This script:
1. Initializes the demo database
2. Submits sample content for a demo user through the scan pipeline
3. Prints the resulting insights
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from phishscope.aggregation.insights import calculate_insights  # noqa: E402
from phishscope.classifier.mock import MockClassifier  # noqa: E402
from phishscope.db.session import get_db_session, init_db  # noqa: E402
from phishscope.scanning.history import fetch_scan_history  # noqa: E402
from phishscope.scanning.submit import ScanInput, submit_scan  # noqa: E402

DEMO_DB_PATH = PROJECT_ROOT / "demo.db"
DEMO_USER_ID = "demo-user"

DEMO_CONTENT = [
    ("email", "Your account has been suspended. Verify your password at http://bit.ly/x1"),
    ("email", "Hi team, the quarterly report is attached. See you at standup."),
    ("url", "http://paypa1-secure-login.example.ru/verify"),
    ("url", "https://github.com/"),
    ("message", "Congratulations! You won a $500 gift card. Reply with your SSN to claim."),
    ("message", "Running 10 minutes late, grab me a coffee?"),
    ("domain", "micros0ft-support.help"),
]


def seed_database() -> int:
    """Submit demo content for the demo user.

    Returns:
        Number of scans created.
    """
    classifier = MockClassifier()

    with get_db_session(DEMO_DB_PATH) as session:
        existing = fetch_scan_history(session, DEMO_USER_ID).scans
        if existing:
            print(f"Demo history already exists: {len(existing)} scans")
            return 0

        for scan_type, content in DEMO_CONTENT:
            result = submit_scan(
                session=session,
                classifier=classifier,
                scan_input=ScanInput(user_id=DEMO_USER_ID, content=content, scan_type=scan_type),
            )
            print(f"  {scan_type:<8} {result.risk_level:<9} {result.confidence_score:>3}%")
    return len(DEMO_CONTENT)


def main() -> int:
    """Main entry point."""
    print("=" * 60)
    print("PhishScope Demo Seeding Script")
    print("=" * 60)

    print("\n[1/2] Initializing database...")
    init_db(DEMO_DB_PATH)

    print("\n[2/2] Seeding scans...")
    created = seed_database()

    with get_db_session(DEMO_DB_PATH) as session:
        insights = calculate_insights(fetch_scan_history(session, DEMO_USER_ID).scans)

    print("\n" + "=" * 60)
    print(f"Demo seeding complete! ({created} new scans)")
    print(f"Database: {DEMO_DB_PATH}")
    print(f"Insights: {insights.model_dump()}")
    print("=" * 60)

    return 0


if __name__ == "__main__":
    sys.exit(main())
