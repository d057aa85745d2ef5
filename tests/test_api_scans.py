"""Tests for scans API endpoints."""

from datetime import datetime

import httpx
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from phishscope.classifier.base import ClassificationError
from phishscope.classifier.gateway import GatewayClassifier
from phishscope.classifier.mock import MockClassifier
from phishscope.db import repo
from phishscope.db.schema import Base, PhishingScan
from phishscope.models.types import ClassificationResult
from phishscope.scanning.submit import SAVE_ERROR

USER = {"X-User-Id": "user-001"}

VERDICT = ClassificationResult(
    risk_level="high",
    confidence_score=88,
    indicators=[{"type": "suspicious_link", "severity": "danger", "description": "bit.ly"}],
    summary="Likely phishing",
    recommendations="Do not click",
)


class RaisingClassifier(MockClassifier):
    """Classifier that always fails with a given status."""

    def __init__(self, status_code: int, message: str):
        super().__init__()
        self.status_code = status_code
        self.message = message

    def classify(self, content, scan_type):
        raise ClassificationError(self.status_code, self.message)


def create_test_app_and_client(classifier=None):
    """Create app with test database and return (client, engine)."""
    from phishscope.api.app import create_app, get_db_session, get_scan_classifier

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    app = create_app()

    def override_get_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db
    app.dependency_overrides[get_scan_classifier] = lambda: classifier or MockClassifier(
        result=VERDICT
    )
    client = TestClient(app)

    return client, engine


def seed_scans(engine, user_id: str = "user-001") -> None:
    """Insert three scans for a user."""
    with Session(engine) as db_session:
        for i, (level, score) in enumerate([("safe", 10), ("low", 35), ("critical", 95)]):
            db_session.add(
                PhishingScan(
                    id=f"scan-{i}",
                    user_id=user_id,
                    scan_type="email",
                    input_content=f"content {i}",
                    risk_level=level,
                    confidence_score=score,
                    analysis_json='{"summary": "s", "recommendations": "r"}',
                    indicators_json="[]",
                    created_at=datetime(2025, 1, 1 + i),
                )
            )
        db_session.commit()


class TestCreateScanEndpoint:
    """Test POST /api/scans."""

    def test_returns_201_with_verdict(self):
        client, _ = create_test_app_and_client()

        response = client.post(
            "/api/scans",
            json={"content": "Click http://bit.ly/abc", "scan_type": "url"},
            headers=USER,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["risk_level"] == "high"
        assert data["confidence_score"] == 88
        assert "scan_id" in data
        assert "created_at" in data

    def test_persists_scan(self):
        client, engine = create_test_app_and_client()

        response = client.post(
            "/api/scans",
            json={"content": "Hello", "scan_type": "message"},
            headers=USER,
        )

        with Session(engine) as session:
            stored = session.query(PhishingScan).all()
            assert len(stored) == 1
            assert stored[0].id == response.json()["scan_id"]
            assert stored[0].user_id == "user-001"

    def test_requires_user(self):
        """Missing X-User-Id is 401."""
        client, _ = create_test_app_and_client()

        response = client.post("/api/scans", json={"content": "x", "scan_type": "email"})

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_missing_content_is_400(self):
        client, _ = create_test_app_and_client()

        response = client.post("/api/scans", json={"scan_type": "email"}, headers=USER)

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields: content and scanType"}

    def test_invalid_scan_type_is_400(self):
        client, _ = create_test_app_and_client()

        response = client.post(
            "/api/scans", json={"content": "x", "scan_type": "fax"}, headers=USER
        )

        assert response.status_code == 400
        assert "Invalid scan type" in response.json()["error"]

    def test_classifier_errors_surface_verbatim(self):
        """Classifier status and message pass through unchanged."""
        for status, message in [(402, "AI credits exhausted."), (429, "Rate limit exceeded.")]:
            client, engine = create_test_app_and_client(RaisingClassifier(status, message))

            response = client.post(
                "/api/scans", json={"content": "x", "scan_type": "email"}, headers=USER
            )

            assert response.status_code == status
            assert response.json() == {"error": message}
            with Session(engine) as session:
                assert session.query(PhishingScan).count() == 0

    def test_malformed_gateway_body_is_json_error(self):
        """A non-JSON gateway reply answers 500 with an error body."""
        gateway = GatewayClassifier(
            api_key="test-key",
            url="https://gateway.test/v1",
            client=httpx.Client(
                transport=httpx.MockTransport(
                    lambda request: httpx.Response(200, text="<html>oops</html>")
                )
            ),
        )
        client, _ = create_test_app_and_client(gateway)

        response = client.post(
            "/api/scans", json={"content": "x", "scan_type": "email"}, headers=USER
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Invalid AI response format"}

    def test_storage_failure_is_json_error(self, monkeypatch):
        """A failed insert answers 500 with an error body."""
        client, engine = create_test_app_and_client()

        def broken(session):
            raise OperationalError("INSERT", {}, Exception("database is locked"))

        monkeypatch.setattr(repo, "commit", broken)

        response = client.post(
            "/api/scans", json={"content": "x", "scan_type": "email"}, headers=USER
        )

        assert response.status_code == 500
        assert response.json() == {"error": SAVE_ERROR}
        with Session(engine) as session:
            assert session.query(PhishingScan).count() == 0


class TestListScansEndpoint:
    """Test GET /api/scans."""

    def test_newest_first(self):
        client, engine = create_test_app_and_client()
        seed_scans(engine)

        response = client.get("/api/scans", headers=USER)

        assert response.status_code == 200
        assert [s["id"] for s in response.json()] == ["scan-2", "scan-1", "scan-0"]

    def test_scoped_to_user(self):
        client, engine = create_test_app_and_client()
        seed_scans(engine, user_id="someone-else")

        response = client.get("/api/scans", headers=USER)

        assert response.json() == []


class TestGetScanEndpoint:
    """Test GET /api/scans/{scan_id}."""

    def test_returns_detail(self):
        client, engine = create_test_app_and_client()
        seed_scans(engine)

        response = client.get("/api/scans/scan-2", headers=USER)

        assert response.status_code == 200
        data = response.json()
        assert data["risk_level"] == "critical"
        assert data["summary"] == "s"

    def test_returns_404_for_nonexistent_scan(self):
        client, _ = create_test_app_and_client()

        response = client.get("/api/scans/nonexistent", headers=USER)

        assert response.status_code == 404


class TestDeleteScanEndpoint:
    """Test DELETE /api/scans/{scan_id}."""

    def test_deletes_scan(self):
        client, engine = create_test_app_and_client()
        seed_scans(engine)

        response = client.delete("/api/scans/scan-1", headers=USER)

        assert response.status_code == 204
        with Session(engine) as session:
            assert session.query(PhishingScan).filter(PhishingScan.id == "scan-1").first() is None

    def test_returns_404_for_nonexistent_scan(self):
        client, _ = create_test_app_and_client()

        response = client.delete("/api/scans/nonexistent", headers=USER)

        assert response.status_code == 404

    def test_cannot_delete_other_users_scan(self):
        client, engine = create_test_app_and_client()
        seed_scans(engine, user_id="someone-else")

        response = client.delete("/api/scans/scan-0", headers=USER)

        assert response.status_code == 404
