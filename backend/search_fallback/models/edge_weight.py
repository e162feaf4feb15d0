"""Learned (query -> chosen term) associations."""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from uuid import uuid4

from sqlalchemy import CheckConstraint, UniqueConstraint
from sqlmodel import Field, SQLModel

from search_fallback.models.base import CamelModel, UTCDateTime
from search_fallback.utils.clock import utcnow


class SelectedType(str, Enum):
    """Kind of destination the user navigated to after picking a suggestion."""

    CATEGORY = "category"
    AUCTION = "auction"
    TENDER = "tender"
    DIRECT_SALE = "directSale"


class EdgeWeight(SQLModel, table=True):
    __tablename__ = "edge_weights"
    __table_args__ = (
        UniqueConstraint("search_query", "selected_term_id", name="uq_edge_weights_query_term"),
        CheckConstraint(
            "selected_type IN ('category', 'auction', 'tender', 'directSale')",
            name="ck_edge_weights_selected_type",
        ),
        CheckConstraint("weight >= 0", name="ck_edge_weights_weight"),
        CheckConstraint("selection_count >= 1", name="ck_edge_weights_selection_count"),
    )

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    search_query: str = Field(index=True)  # normalized raw input, not a term id
    selected_term_id: str = Field(foreign_key="search_terms.id", index=True)
    selected_type: str
    selected_id: str  # opaque destination id (auction, tender, ...)
    weight: float = Field(default=1.0)
    selection_count: int = Field(default=1)
    last_selected_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)


# --- Pydantic schemas ---


class UpdateEdgeWeightRequest(CamelModel):
    search_query: str
    selected_term_id: str
    selected_type: str
    selected_id: str


class UpdateEdgeWeightResponse(CamelModel):
    ok: bool
