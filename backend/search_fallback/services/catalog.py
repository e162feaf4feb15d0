"""Catalog service — idempotent seeding and listing of search terms."""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError as SchemaError
from sqlmodel import Session

from search_fallback.errors import ValidationError
from search_fallback.models.search_term import SearchTerm, SearchTermCreate
from search_fallback.repositories import TermRepository, commit
from search_fallback.utils.text import normalize_text
from search_fallback.validation import validate_seed_entry

logger = logging.getLogger(__name__)


def _coerce_entry(entry: SearchTermCreate | Mapping[str, Any]) -> SearchTermCreate:
    if isinstance(entry, SearchTermCreate):
        return entry
    try:
        return SearchTermCreate.model_validate(entry)
    except SchemaError as exc:
        raise ValidationError(f"Invalid catalog entry {dict(entry)!r}: {exc.errors()[0]['msg']}") from exc


class CatalogService:
    def seed(
        self, session: Session, entries: Iterable[SearchTermCreate | Mapping[str, Any]]
    ) -> int:
        """Insert each entry unless (normalized_term, type) already exists.

        The whole batch is validated before anything is written. Returns
        the number of newly inserted terms, so re-seeding the same list
        returns 0.
        """
        prepared: list[SearchTerm] = []
        for entry in entries:
            entry = _coerce_entry(entry)
            metadata = (
                entry.metadata.model_dump(by_alias=True, exclude_defaults=True)
                if entry.metadata is not None
                else None
            )
            validate_seed_entry(entry.term, entry.type, metadata)
            prepared.append(
                SearchTerm(
                    term=entry.term.strip(),
                    type=entry.type,
                    normalized_term=normalize_text(entry.term),
                    category_id=entry.category_id or None,
                    meta=metadata or {},
                    search_count=0,
                )
            )

        repo = TermRepository(session)
        inserted = 0
        try:
            for term in prepared:
                if repo.insert_if_absent(term):
                    inserted += 1
        except Exception:
            session.rollback()
            raise
        commit(session, "Seeding catalog")

        logger.info(
            "Catalog seed: %d of %d term(s) inserted, %d already present",
            inserted,
            len(prepared),
            len(prepared) - inserted,
        )
        return inserted

    def list_terms(
        self,
        session: Session,
        q: str | None = None,
        term_type: str | None = None,
        skip: int = 0,
        limit: int = 50,
    ) -> list[SearchTerm]:
        return TermRepository(session).list_terms(
            q=normalize_text(q) if q else None,
            term_type=term_type,
            skip=skip,
            limit=limit,
        )
