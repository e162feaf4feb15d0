from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from search_fallback.dependencies import get_interest_matcher, require_admin
from search_fallback.errors import ValidationError
from search_fallback.models.interest import NewItemAccepted, NewItemEvent
from search_fallback.services.interest_matcher import InterestMatcher
from search_fallback.validation import validate_new_item

router = APIRouter(prefix="/api/items", tags=["items"])


@router.post(
    "/created",
    response_model=NewItemAccepted,
    response_model_by_alias=True,
    status_code=202,
)
async def item_created(
    body: NewItemEvent,
    background_tasks: BackgroundTasks,
    _admin: str = Depends(require_admin),
    matcher: InterestMatcher = Depends(get_interest_matcher),
) -> NewItemAccepted:
    """Called by listing workflows after an item is created.

    Pending interest requests are matched in the background; the caller
    only learns that the event was accepted.
    """
    try:
        validate_new_item(body.title, body.item_type, body.item_id)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    background_tasks.add_task(
        matcher.notify_new_item,
        body.title,
        body.description,
        body.item_type,
        body.item_id,
    )
    return NewItemAccepted(accepted=True)
