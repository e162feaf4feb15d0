"""Input contracts enforced at the service boundary.

Each function raises ``ValidationError`` on the first violated constraint
and has no side effects, so a rejected call never leaves partial state.
"""
from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from search_fallback.errors import ValidationError
from search_fallback.models.edge_weight import SelectedType
from search_fallback.models.search_term import TermType

MAX_QUERY_LENGTH = 200
MAX_TERM_LENGTH = 200
MAX_ID_LENGTH = 128
MIN_LIMIT, MAX_LIMIT = 1, 10
MIN_PROBABILITY, MAX_PROBABILITY = 0, 100

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_PHONE_RE = re.compile(r"^\+?[0-9 ()\-]{6,20}$")


def _require_text(value: Any, field: str, max_length: int) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required")
    if len(value.strip()) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")
    return value.strip()


def _require_int_in_range(value: Any, field: str, low: int, high: int) -> int:
    # bool is an int subclass; True must not pass as limit=1
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer")
    if not low <= value <= high:
        raise ValidationError(f"{field} must be between {low} and {high}")
    return value


def validate_search_params(query: Any, limit: Any, min_probability: Any) -> None:
    _require_text(query, "query", MAX_QUERY_LENGTH)
    _require_int_in_range(limit, "limit", MIN_LIMIT, MAX_LIMIT)
    _require_int_in_range(min_probability, "minProbability", MIN_PROBABILITY, MAX_PROBABILITY)


def validate_edge_selection(
    search_query: Any, selected_term_id: Any, selected_type: Any, selected_id: Any
) -> None:
    _require_text(search_query, "searchQuery", MAX_QUERY_LENGTH)
    _require_text(selected_term_id, "selectedTermId", MAX_ID_LENGTH)
    _require_text(selected_id, "selectedId", MAX_ID_LENGTH)
    allowed = [t.value for t in SelectedType]
    if selected_type not in allowed:
        raise ValidationError(f"selectedType must be one of {', '.join(allowed)}")


def validate_interest(search_query: Any, email: Any, phone: Any) -> None:
    _require_text(search_query, "searchQuery", MAX_QUERY_LENGTH)
    email = email.strip() if isinstance(email, str) else None
    phone = phone.strip() if isinstance(phone, str) else None
    if not email and not phone:
        raise ValidationError("At least one contact channel (email or phone) is required")
    if email and not _EMAIL_RE.match(email):
        raise ValidationError("email is not a valid address")
    if phone and not _PHONE_RE.match(phone):
        raise ValidationError("phone is not a valid number")


def validate_new_item(title: Any, item_type: Any, item_id: Any) -> None:
    _require_text(title, "title", 500)
    _require_text(item_type, "itemType", 64)
    _require_text(item_id, "itemId", MAX_ID_LENGTH)


def validate_seed_entry(term: Any, term_type: Any, metadata: Mapping[str, Any] | None) -> None:
    _require_text(term, "term", MAX_TERM_LENGTH)
    allowed = [t.value for t in TermType]
    if term_type not in allowed:
        raise ValidationError(f"type must be one of {', '.join(allowed)} (got {term_type!r})")
    if metadata is None:
        return
    if not isinstance(metadata, Mapping):
        raise ValidationError("metadata must be an object")
    aliases = metadata.get("aliases")
    if aliases is not None and (
        not isinstance(aliases, list) or not all(isinstance(a, str) for a in aliases)
    ):
        raise ValidationError("metadata.aliases must be a list of strings")
