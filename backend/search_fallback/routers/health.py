from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlmodel import Session, text

from search_fallback.db import get_session
from search_fallback.repositories import InterestRepository
from search_fallback.utils.clock import utcnow

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health(request: Request, session: Session = Depends(get_session)):
    db_status = "ok"
    try:
        session.exec(text("SELECT 1"))
    except Exception as exc:
        db_status = f"error: {exc}"

    # Notification channel in use ("smtp" or "log")
    dispatcher_status = "unavailable"
    matcher = getattr(request.app.state, "interest_matcher", None)
    if matcher is not None:
        dispatcher_status = matcher.dispatcher_kind

    # Pending, unexpired interest requests
    interest_status: dict | str = "unknown"
    if db_status == "ok":
        try:
            interest_status = {
                "pending": InterestRepository(session).count_active(utcnow()),
            }
        except Exception:
            interest_status = "error"

    is_healthy = db_status == "ok" and matcher is not None

    return {
        "status": "healthy" if is_healthy else "unhealthy",
        "service": "search-fallback",
        "version": "0.1.0",
        "checks": {
            "database": db_status,
            "notifications": dispatcher_status,
            "interest": interest_status,
        },
    }


@router.get("/health/ready")
async def readiness(session: Session = Depends(get_session)):
    try:
        session.exec(text("SELECT 1"))
    except Exception as exc:
        return JSONResponse(
            status_code=503,
            content={
                "status": "not ready",
                "service": "search-fallback",
                "error": str(exc),
            },
        )

    return {
        "status": "ready",
        "service": "search-fallback",
    }
