from __future__ import annotations

import logging

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlmodel import Session

from search_fallback.catalog_data import COMMON_SEARCH_TERMS
from search_fallback.db import get_session
from search_fallback.dependencies import get_catalog_service, require_admin
from search_fallback.errors import StorageError, ValidationError
from search_fallback.models.search_term import (
    SearchTermRead,
    SeedCatalogRequest,
    SeedCatalogResponse,
    TermType,
)
from search_fallback.services.catalog import CatalogService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


@router.post("/seed", response_model=SeedCatalogResponse, response_model_by_alias=True)
async def seed_catalog(
    body: SeedCatalogRequest | None = Body(default=None),
    _admin: str = Depends(require_admin),
    session: Session = Depends(get_session),
    catalog_service: CatalogService = Depends(get_catalog_service),
) -> SeedCatalogResponse:
    """Insert terms that are not in the catalog yet.

    Without a body the bundled list of common marketplace terms is used.
    Re-seeding the same list inserts nothing.
    """
    entries = body.terms if body is not None else COMMON_SEARCH_TERMS
    try:
        inserted = catalog_service.seed(session, entries)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except StorageError as exc:
        logger.error("Catalog seed failed: %s", exc)
        raise HTTPException(status_code=503, detail="Catalog storage unavailable")
    return SeedCatalogResponse(inserted_count=inserted)


@router.get("/terms", response_model=list[SearchTermRead], response_model_by_alias=True)
async def list_terms(
    q: str | None = Query(None, max_length=200, description="Substring of the normalized term"),
    type: TermType | None = Query(None, description="Filter by term type"),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=500),
    _admin: str = Depends(require_admin),
    session: Session = Depends(get_session),
    catalog_service: CatalogService = Depends(get_catalog_service),
) -> list[SearchTermRead]:
    try:
        terms = catalog_service.list_terms(
            session,
            q=q,
            term_type=type.value if type else None,
            skip=skip,
            limit=limit,
        )
    except StorageError as exc:
        logger.error("Catalog listing failed: %s", exc)
        raise HTTPException(status_code=503, detail="Catalog storage unavailable")
    return [SearchTermRead.from_term(term) for term in terms]
