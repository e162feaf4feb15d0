"""Interest requests — "notify me when this exists" subscriptions."""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from uuid import uuid4

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

from search_fallback.models.base import CamelModel, UTCDateTime
from search_fallback.utils.clock import utcnow


class InterestStatus(str, Enum):
    PENDING = "pending"
    NOTIFIED = "notified"
    EXPIRED = "expired"


class InterestRequest(SQLModel, table=True):
    __tablename__ = "interest_requests"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'notified', 'expired')",
            name="ck_interest_requests_status",
        ),
    )

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    search_query: str = Field(index=True)  # normalized raw input
    user_id: str | None = Field(default=None, index=True)
    email: str | None = Field(default=None)
    phone: str | None = Field(default=None)
    status: str = Field(default=InterestStatus.PENDING.value, index=True)
    expires_at: datetime = Field(index=True, sa_type=UTCDateTime)
    resolved_at: datetime | None = Field(default=None, sa_type=UTCDateTime)
    found_item_id: str | None = Field(default=None)
    found_item_type: str | None = Field(default=None)
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)


# --- Pydantic schemas ---


class RegisterInterestRequest(CamelModel):
    search_query: str
    user_id: str | None = None
    email: str | None = None
    phone: str | None = None


class RegisterInterestResponse(CamelModel):
    request_id: str
    message: str


class NewItemEvent(CamelModel):
    """Fired by listing workflows after an auction/sale/tender/category is created."""

    title: str
    description: str = ""
    item_type: str
    item_id: str


class NewItemAccepted(CamelModel):
    accepted: bool
