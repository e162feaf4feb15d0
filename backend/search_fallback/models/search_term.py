"""Canonical searchable strings with popularity counters."""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import uuid4

from sqlalchemy import JSON, CheckConstraint, Column, UniqueConstraint
from sqlmodel import Field, SQLModel

from search_fallback.models.base import CamelModel, UTCDateTime
from search_fallback.utils.clock import utcnow


class TermType(str, Enum):
    PRODUCT = "product"
    CATEGORY = "category"
    SERVICE = "service"
    BRAND = "brand"


class SearchTerm(SQLModel, table=True):
    __tablename__ = "search_terms"
    __table_args__ = (
        UniqueConstraint("normalized_term", "type", name="uq_search_terms_normalized_type"),
        CheckConstraint(
            "type IN ('product', 'category', 'service', 'brand')",
            name="ck_search_terms_type",
        ),
        CheckConstraint("search_count >= 0", name="ck_search_terms_search_count"),
    )

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    term: str  # Display form, e.g. "iPhone 15 Pro"
    type: str
    normalized_term: str = Field(index=True)  # lowercase, trimmed
    category_id: str | None = Field(default=None, index=True)  # weak back-reference, lookup only
    # Column is "metadata"; the attribute name is reserved on declarative models
    meta: dict[str, Any] = Field(
        default_factory=dict, sa_column=Column("metadata", JSON, nullable=False)
    )
    search_count: int = Field(default=0, index=True)
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)

    @property
    def aliases(self) -> list[str]:
        aliases = (self.meta or {}).get("aliases") or []
        return [a for a in aliases if isinstance(a, str) and a.strip()]


# --- Pydantic schemas ---


class TermMetadata(CamelModel):
    """Known metadata keys; unknown keys are kept as-is."""

    model_config = {**CamelModel.model_config, "extra": "allow"}

    brand: str | None = None
    category: str | None = None
    aliases: list[str] = []
    common_searches: list[str] = []


class SearchTermCreate(CamelModel):
    term: str
    type: str
    category_id: str | None = None
    metadata: TermMetadata | None = None


class SearchTermRead(CamelModel):
    id: str
    term: str
    type: str
    normalized_term: str
    category_id: str | None
    metadata: dict[str, Any]
    search_count: int

    @classmethod
    def from_term(cls, term: SearchTerm) -> SearchTermRead:
        return cls(
            id=term.id,
            term=term.term,
            type=term.type,
            normalized_term=term.normalized_term,
            category_id=term.category_id,
            metadata=term.meta or {},
            search_count=term.search_count,
        )


class SeedCatalogRequest(CamelModel):
    terms: list[SearchTermCreate]


class SeedCatalogResponse(CamelModel):
    inserted_count: int
