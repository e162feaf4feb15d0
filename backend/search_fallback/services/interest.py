from __future__ import annotations

import logging
from datetime import timedelta

from sqlmodel import Session

from search_fallback.config import Settings
from search_fallback.models.interest import InterestRequest, InterestStatus
from search_fallback.repositories import InterestRepository, commit
from search_fallback.utils.clock import utcnow
from search_fallback.utils.text import normalize_text
from search_fallback.validation import validate_interest

logger = logging.getLogger(__name__)


class InterestService:
    """Registers "notify me" requests and retires the ones past their horizon."""

    CONFIRMATION_MESSAGE = "We will notify you when this item becomes available!"

    def __init__(self, settings: Settings) -> None:
        self._expiry = timedelta(days=settings.interest_expiry_days)

    def register(
        self,
        session: Session,
        search_query: str,
        user_id: str | None = None,
        email: str | None = None,
        phone: str | None = None,
    ) -> InterestRequest:
        validate_interest(search_query, email, phone)

        now = utcnow()
        request = InterestRequest(
            search_query=normalize_text(search_query),
            user_id=(user_id or "").strip() or None,
            email=(email or "").strip() or None,
            phone=(phone or "").strip() or None,
            status=InterestStatus.PENDING.value,
            expires_at=now + self._expiry,
            created_at=now,
        )
        try:
            InterestRepository(session).add(request)
        except Exception:
            session.rollback()
            raise
        commit(session, "Registering interest")
        session.refresh(request)

        logger.info(
            "Interest %s registered for %r (expires %s)",
            request.id,
            request.search_query,
            request.expires_at.date().isoformat(),
        )
        return request

    def expire_stale(self, session: Session) -> int:
        """Mark pending requests past expires_at as expired.

        Matching already ignores them; this only keeps the pending set small.
        """
        try:
            expired = InterestRepository(session).expire_stale(utcnow())
        except Exception:
            session.rollback()
            raise
        commit(session, "Expiring interest requests")
        if expired:
            logger.info("Expired %d stale interest request(s)", expired)
        return expired
