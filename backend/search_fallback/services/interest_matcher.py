"""Interest matcher: resolve pending "notify me" requests when a new item appears.

Each matching row gets exactly one notification and is then marked
notified. A failed dispatch leaves the row pending so a later event can
retry it. The sweep never raises to the caller.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from sqlalchemy.engine import Engine
from sqlmodel import Session

from search_fallback.errors import SearchFallbackError, StorageError
from search_fallback.models.interest import InterestRequest
from search_fallback.repositories import InterestRepository, commit
from search_fallback.services.notifications import (
    NotificationDispatcher,
    compose_interest_notification,
)
from search_fallback.utils.clock import utcnow
from search_fallback.utils.text import normalize_text
from search_fallback.validation import validate_new_item

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SweepResult:
    scanned: int = 0
    matched: int = 0
    notified: int = 0
    failed: int = 0


def matches_item(search_query: str, haystack: str) -> bool:
    """Plain substring containment of the stored query in normalized item text."""
    needle = normalize_text(search_query)
    return bool(needle) and needle in haystack


class InterestMatcher:
    def __init__(
        self,
        engine: Engine,
        dispatcher: NotificationDispatcher,
        concurrency: int = 4,
        base_url: str = "",
    ) -> None:
        self._engine = engine
        self._dispatcher = dispatcher
        self._concurrency = max(1, concurrency)
        self._base_url = base_url

    @property
    def dispatcher_kind(self) -> str:
        return self._dispatcher.kind

    async def notify_new_item(
        self, title: str, description: str, item_type: str, item_id: str
    ) -> SweepResult:
        result = SweepResult()
        try:
            validate_new_item(title, item_type, item_id)
        except SearchFallbackError as exc:
            logger.warning("Ignoring item event %r: %s", item_id, exc)
            return result

        haystack = normalize_text(f"{title} {description or ''}")
        try:
            pending = await asyncio.to_thread(self._load_active)
        except StorageError:
            logger.exception("Interest sweep for %s %s aborted: registry unavailable", item_type, item_id)
            return result

        result.scanned = len(pending)
        matched = [row for row in pending if matches_item(row.search_query, haystack)]
        result.matched = len(matched)
        if not matched:
            logger.info(
                "Interest sweep for %s %s: %d pending, no match", item_type, item_id, len(pending)
            )
            return result

        semaphore = asyncio.Semaphore(self._concurrency)

        async def _guarded(row: InterestRequest) -> bool:
            async with semaphore:
                return await asyncio.to_thread(
                    self._resolve_one, row, title, item_type, item_id
                )

        outcomes = await asyncio.gather(
            *(_guarded(row) for row in matched), return_exceptions=True
        )
        for row, outcome in zip(matched, outcomes):
            if isinstance(outcome, BaseException):
                result.failed += 1
                logger.error(
                    "Interest request %s not resolved: %s", row.id, outcome, exc_info=outcome
                )
            elif outcome:
                result.notified += 1

        logger.info(
            "Interest sweep for %s %s: %d pending, %d matched, %d notified, %d failed",
            item_type,
            item_id,
            result.scanned,
            result.matched,
            result.notified,
            result.failed,
        )
        return result

    def _load_active(self) -> list[InterestRequest]:
        with Session(self._engine, expire_on_commit=False) as session:
            rows = InterestRepository(session).list_active(utcnow())
            session.expunge_all()
            return rows

    def _resolve_one(
        self, row: InterestRequest, title: str, item_type: str, item_id: str
    ) -> bool:
        """Dispatch, then mark notified. Returns False if another sweep got there first."""
        message = compose_interest_notification(
            row, title, item_type, item_id, base_url=self._base_url
        )
        self._dispatcher.send(message)

        with Session(self._engine) as session:
            resolved = InterestRepository(session).mark_notified(
                row.id, item_id=item_id, item_type=item_type, now=utcnow()
            )
            commit(session, "Resolving interest request")
        if not resolved:
            logger.info("Interest request %s was already resolved", row.id)
        return resolved
