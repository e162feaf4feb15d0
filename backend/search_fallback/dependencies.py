"""FastAPI dependency injection for the admin guard and engine services."""

from __future__ import annotations

import hmac

from fastapi import Depends, Header, HTTPException, Request

from search_fallback.config import Settings, get_settings
from search_fallback.services.catalog import CatalogService
from search_fallback.services.interest import InterestService
from search_fallback.services.interest_matcher import InterestMatcher
from search_fallback.services.learning import LearningService
from search_fallback.services.search import SearchService


def require_admin(
    x_admin_key: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> str:
    """Guard for catalog management and collaborator-fired events.

    Compares the X-Admin-Key header against ADMIN_API_KEY in constant time.
    With ALLOW_OPEN_ADMIN and no key configured, every caller passes.
    """
    expected = settings.admin_api_key
    if not expected:
        if settings.allow_open_admin:
            return "open"
        raise HTTPException(status_code=503, detail="Admin key not configured")
    if not x_admin_key or not hmac.compare_digest(
        x_admin_key.encode(), expected.encode()
    ):
        raise HTTPException(status_code=401, detail="Invalid or missing admin key")
    return "admin"


def get_search_service(settings: Settings = Depends(get_settings)) -> SearchService:
    return SearchService(settings)


def get_learning_service() -> LearningService:
    return LearningService()


def get_interest_service(settings: Settings = Depends(get_settings)) -> InterestService:
    return InterestService(settings)


def get_catalog_service() -> CatalogService:
    return CatalogService()


def get_interest_matcher(request: Request) -> InterestMatcher:
    """Inject the InterestMatcher singleton built at startup."""
    matcher = getattr(request.app.state, "interest_matcher", None)
    if matcher is None:
        raise HTTPException(
            status_code=503,
            detail="Interest matcher unavailable",
        )
    return matcher
