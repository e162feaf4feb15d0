"""Narrow persistence interfaces for the three stores.

Repositories flush but never commit; the calling service owns the
transaction. Any SQLAlchemy failure surfaces as ``StorageError``.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from datetime import datetime

from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, col, select

from search_fallback.errors import StorageError
from search_fallback.models.edge_weight import EdgeWeight
from search_fallback.models.interest import InterestRequest, InterestStatus
from search_fallback.models.search_term import SearchTerm
from search_fallback.utils.clock import utcnow

logger = logging.getLogger(__name__)


@contextmanager
def storage_errors(action: str) -> Iterator[None]:
    """Translate SQLAlchemy failures into StorageError."""
    try:
        yield
    except SQLAlchemyError as exc:
        raise StorageError(f"{action} failed: {exc.__class__.__name__}") from exc


def commit(session: Session, action: str) -> None:
    """Commit, rolling back and raising StorageError on failure."""
    try:
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        raise StorageError(f"{action} failed: {exc.__class__.__name__}") from exc


class TermRepository:
    __slots__ = ("_session",)

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, term_id: str) -> SearchTerm | None:
        with storage_errors("Loading search term"):
            return self._session.get(SearchTerm, term_id)

    def find(self, normalized_term: str, term_type: str) -> SearchTerm | None:
        with storage_errors("Looking up search term"):
            return self._session.exec(
                select(SearchTerm).where(
                    SearchTerm.normalized_term == normalized_term,
                    SearchTerm.type == term_type,
                )
            ).first()

    def list_for_matching(
        self, limit: int, include_ids: Iterable[str] = ()
    ) -> list[SearchTerm]:
        """Most popular terms first (all when limit is 0), plus any ids in *include_ids*."""
        statement = select(SearchTerm).order_by(
            col(SearchTerm.search_count).desc(),
            col(SearchTerm.normalized_term),
            col(SearchTerm.id),
        )
        if limit > 0:
            statement = statement.limit(limit)

        with storage_errors("Loading catalog"):
            terms = list(self._session.exec(statement).all())
            missing = set(include_ids) - {t.id for t in terms}
            if missing:
                terms.extend(
                    self._session.exec(
                        select(SearchTerm)
                        .where(col(SearchTerm.id).in_(missing))
                        .order_by(col(SearchTerm.id))
                    ).all()
                )
        return terms

    def list_terms(
        self,
        q: str | None = None,
        term_type: str | None = None,
        skip: int = 0,
        limit: int = 50,
    ) -> list[SearchTerm]:
        statement = select(SearchTerm).order_by(
            col(SearchTerm.search_count).desc(), col(SearchTerm.normalized_term)
        )
        if q:
            statement = statement.where(col(SearchTerm.normalized_term).contains(q))
        if term_type:
            statement = statement.where(SearchTerm.type == term_type)
        with storage_errors("Listing catalog"):
            return list(self._session.exec(statement.offset(skip).limit(limit)).all())

    def insert_if_absent(self, term: SearchTerm) -> bool:
        """Insert *term* unless (normalized_term, type) already exists.

        Returns True when a row was inserted.
        """
        if self.find(term.normalized_term, term.type) is not None:
            return False
        try:
            with self._session.begin_nested():
                self._session.add(term)
        except IntegrityError:
            # Concurrent seeder inserted the same key first
            return False
        except SQLAlchemyError as exc:
            raise StorageError(f"Inserting search term failed: {exc.__class__.__name__}") from exc
        return True

    def increment_search_count(self, term_id: str, now: datetime | None = None) -> None:
        with storage_errors("Incrementing search count"):
            self._session.execute(
                update(SearchTerm)
                .where(col(SearchTerm.id) == term_id)
                .values(
                    search_count=SearchTerm.search_count + 1,
                    updated_at=now or utcnow(),
                )
                .execution_options(synchronize_session=False)
            )


class EdgeWeightRepository:
    __slots__ = ("_session",)

    def __init__(self, session: Session) -> None:
        self._session = session

    def weights_for_query(self, normalized_query: str) -> dict[str, float]:
        """Return {term_id: weight} for every edge recorded under *normalized_query*."""
        with storage_errors("Loading edge weights"):
            rows = self._session.exec(
                select(EdgeWeight.selected_term_id, EdgeWeight.weight).where(
                    EdgeWeight.search_query == normalized_query
                )
            ).all()
        return {term_id: weight for term_id, weight in rows}

    def get(self, normalized_query: str, term_id: str) -> EdgeWeight | None:
        with storage_errors("Loading edge weight"):
            return self._session.exec(
                select(EdgeWeight)
                .where(
                    EdgeWeight.search_query == normalized_query,
                    EdgeWeight.selected_term_id == term_id,
                )
                .execution_options(populate_existing=True)
            ).first()

    def record_selection(
        self,
        normalized_query: str,
        term_id: str,
        selected_type: str,
        selected_id: str,
        step: float,
        initial_weight: float,
    ) -> EdgeWeight:
        """Increment-or-insert the (query, term) edge in one storage round.

        The increment is a single conditional UPDATE evaluated by the
        database, so concurrent selections of the same pair never lose
        an update. A first selection inserts inside a savepoint; losing
        that race to another inserter falls back to the increment.
        """
        now = utcnow()
        if not self._increment(normalized_query, term_id, selected_type, selected_id, step, now):
            edge = EdgeWeight(
                search_query=normalized_query,
                selected_term_id=term_id,
                selected_type=selected_type,
                selected_id=selected_id,
                weight=initial_weight,
                selection_count=1,
                last_selected_at=now,
                created_at=now,
            )
            try:
                with self._session.begin_nested():
                    self._session.add(edge)
            except IntegrityError:
                logger.debug(
                    "Edge (%r, %s) created concurrently, incrementing instead",
                    normalized_query,
                    term_id,
                )
                self._increment(normalized_query, term_id, selected_type, selected_id, step, now)
            except SQLAlchemyError as exc:
                raise StorageError(f"Inserting edge weight failed: {exc.__class__.__name__}") from exc

        edge = self.get(normalized_query, term_id)
        if edge is None:
            raise StorageError("Edge weight vanished after upsert")
        return edge

    def _increment(
        self,
        normalized_query: str,
        term_id: str,
        selected_type: str,
        selected_id: str,
        step: float,
        now: datetime,
    ) -> bool:
        with storage_errors("Updating edge weight"):
            result = self._session.execute(
                update(EdgeWeight)
                .where(
                    col(EdgeWeight.search_query) == normalized_query,
                    col(EdgeWeight.selected_term_id) == term_id,
                )
                .values(
                    weight=EdgeWeight.weight + step,
                    selection_count=EdgeWeight.selection_count + 1,
                    last_selected_at=now,
                    selected_type=selected_type,
                    selected_id=selected_id,
                )
                .execution_options(synchronize_session=False)
            )
        return result.rowcount > 0


class InterestRepository:
    __slots__ = ("_session",)

    def __init__(self, session: Session) -> None:
        self._session = session

    def add(self, request: InterestRequest) -> InterestRequest:
        with storage_errors("Saving interest request"):
            self._session.add(request)
            self._session.flush()
        return request

    def get(self, request_id: str) -> InterestRequest | None:
        with storage_errors("Loading interest request"):
            return self._session.get(InterestRequest, request_id)

    def list_active(self, now: datetime) -> list[InterestRequest]:
        """Pending requests that have not yet passed expires_at."""
        with storage_errors("Loading pending interest requests"):
            return list(
                self._session.exec(
                    select(InterestRequest)
                    .where(InterestRequest.status == InterestStatus.PENDING.value)
                    .where(InterestRequest.expires_at > now)
                    .order_by(col(InterestRequest.created_at), col(InterestRequest.id))
                ).all()
            )

    def count_active(self, now: datetime) -> int:
        with storage_errors("Counting pending interest requests"):
            return self._session.exec(
                select(func.count())
                .select_from(InterestRequest)
                .where(InterestRequest.status == InterestStatus.PENDING.value)
                .where(InterestRequest.expires_at > now)
            ).one()

    def mark_notified(
        self, request_id: str, item_id: str, item_type: str, now: datetime
    ) -> bool:
        """Resolve a still-pending request. False if it already left pending."""
        with storage_errors("Resolving interest request"):
            result = self._session.execute(
                update(InterestRequest)
                .where(
                    col(InterestRequest.id) == request_id,
                    col(InterestRequest.status) == InterestStatus.PENDING.value,
                )
                .values(
                    status=InterestStatus.NOTIFIED.value,
                    resolved_at=now,
                    found_item_id=item_id,
                    found_item_type=item_type,
                )
                .execution_options(synchronize_session=False)
            )
        return result.rowcount > 0

    def expire_stale(self, now: datetime) -> int:
        """Flag pending requests past expires_at as expired. Returns rows changed."""
        with storage_errors("Expiring interest requests"):
            result = self._session.execute(
                update(InterestRequest)
                .where(
                    col(InterestRequest.status) == InterestStatus.PENDING.value,
                    col(InterestRequest.expires_at) <= now,
                )
                .values(status=InterestStatus.EXPIRED.value)
                .execution_options(synchronize_session=False)
            )
        return result.rowcount
