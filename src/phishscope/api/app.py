"""FastAPI application factory.

API layer:
- Validates inputs, reads/writes DB through the scanning collaborators
- Returns plain payloads for the dashboard
- Forbidden: chart rendering, classifier internals
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Generator

from fastapi import FastAPI, Header, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from phishscope.classifier import ClassificationError, ClassifierBase, get_classifier
from phishscope.db.repo import DbSession
from phishscope.db.session import get_session, init_db

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",  # Vite dev server
    "http://127.0.0.1:5173",
    "http://localhost:8080",
]


def get_db_session(request: Request) -> Generator[DbSession, None, None]:
    """Dependency to get database session for the app's database.

    Yields:
        Database session that is automatically closed after request.
    """
    session = get_session(request.app.state.db_path)
    try:
        yield session
    finally:
        session.close()


def get_scan_classifier() -> ClassifierBase:
    """Dependency to get the configured classifier."""
    return get_classifier()


def get_current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """Dependency resolving the authenticated user from X-User-Id.

    Raises:
        ClassificationError: 401 if the header is missing or blank,
            rendered as {"error": "Unauthorized"} like other API errors.
    """
    if not x_user_id or not x_user_id.strip():
        raise ClassificationError(401, "Unauthorized")
    return x_user_id.strip()


def _cors_origins() -> list[str]:
    raw = os.environ.get("PHISHSCOPE_CORS_ORIGINS")
    if not raw:
        return DEFAULT_CORS_ORIGINS
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def create_app(db_path: Path | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        db_path: Optional path to database file, created on startup.

    Returns:
        Configured FastAPI application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        init_db(db_path)
        yield

    app = FastAPI(
        title="PhishScope API",
        description="Phishing risk scanning and scan-history analytics",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.db_path = db_path

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ClassificationError)
    async def classification_error_handler(
        request: Request, exc: ClassificationError
    ) -> JSONResponse:
        """Surface classifier failures verbatim to the dashboard."""
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    # Include routes
    from phishscope.api.routes import analytics, scans

    app.include_router(scans.router, prefix="/api")
    app.include_router(analytics.router, prefix="/api")

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


# Default app instance
app = create_app()
