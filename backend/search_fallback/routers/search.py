"""Search router: fallback suggestions, selection feedback and "notify me"."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from search_fallback.db import get_session
from search_fallback.dependencies import (
    get_interest_service,
    get_learning_service,
    get_search_service,
)
from search_fallback.errors import NotFoundError, StorageError, ValidationError
from search_fallback.models.edge_weight import UpdateEdgeWeightRequest, UpdateEdgeWeightResponse
from search_fallback.models.interest import RegisterInterestRequest, RegisterInterestResponse
from search_fallback.models.search import SearchFallbackRequest, SearchFallbackResponse
from search_fallback.services.interest import InterestService
from search_fallback.services.learning import LearningService
from search_fallback.services.search import SearchService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/search", tags=["search"])


@router.post("/fallback", response_model=SearchFallbackResponse, response_model_by_alias=True)
async def search_fallback(
    body: SearchFallbackRequest,
    session: Session = Depends(get_session),
    search_service: SearchService = Depends(get_search_service),
) -> SearchFallbackResponse:
    """Ranked "did you mean" suggestions for a query that found nothing directly.

    No qualifying suggestion is a normal outcome: hasResults=false, results=[].
    """
    try:
        return search_service.search_fallback(
            session,
            body.query,
            limit=body.limit,
            min_probability=body.min_probability,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except StorageError as exc:
        logger.error("Fallback search failed: %s", exc)
        raise HTTPException(status_code=503, detail="Search temporarily unavailable")


@router.post(
    "/update-edge-weight",
    response_model=UpdateEdgeWeightResponse,
    response_model_by_alias=True,
)
async def update_edge_weight(
    body: UpdateEdgeWeightRequest,
    session: Session = Depends(get_session),
    learning_service: LearningService = Depends(get_learning_service),
) -> UpdateEdgeWeightResponse:
    """Record that the user picked a suggestion for this query."""
    try:
        learning_service.record_selection(
            session,
            body.search_query,
            body.selected_term_id,
            body.selected_type,
            body.selected_id,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except StorageError as exc:
        logger.error("Edge weight update failed: %s", exc)
        raise HTTPException(status_code=503, detail="Could not record selection")
    return UpdateEdgeWeightResponse(ok=True)


@router.post(
    "/notify-me",
    response_model=RegisterInterestResponse,
    response_model_by_alias=True,
    status_code=201,
)
async def notify_me(
    body: RegisterInterestRequest,
    session: Session = Depends(get_session),
    interest_service: InterestService = Depends(get_interest_service),
) -> RegisterInterestResponse:
    try:
        request = interest_service.register(
            session,
            body.search_query,
            user_id=body.user_id,
            email=body.email,
            phone=body.phone,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except StorageError as exc:
        logger.error("Interest registration failed: %s", exc)
        raise HTTPException(status_code=503, detail="Could not register interest")
    return RegisterInterestResponse(
        request_id=request.id,
        message=InterestService.CONFIRMATION_MESSAGE,
    )
